"""HTTP client adapter for the storefront REST API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx

from storefront.domain.models.api_error import ApiError, ErrorCategory

if TYPE_CHECKING:
    from storefront.domain.components.session_manager import SessionManager


class StorefrontHttpClient:
    """Wraps outbound calls to the storefront backend.

    Every request carries ``Authorization: Bearer <token>`` when a session
    is active. A 401 clears the session and forces the login route before the
    call fails. Calls are at-most-once: there is no retry and, unless
    configured, no timeout.

    Example:
        ```python
        client = StorefrontHttpClient("http://localhost:5000/api", session_manager)
        orders = await client.get("/admin/orders", params={"page": 1})
        await client.aclose()
        ```
    """

    DEFAULT_BASE_URL = "http://localhost:5000/api"
    """Backend base URL when none is configured."""

    def __init__(
        self,
        base_url: str | None,
        session_manager: SessionManager,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API base URL (paths are appended to it).
            session_manager: Source of the bearer token and 401 handler.
            timeout: Optional per-request timeout in seconds; None disables it.
            transport: Optional httpx transport override (for testing).
        """
        self.base_url = (base_url or self.DEFAULT_BASE_URL).rstrip("/")
        self._session_manager = session_manager
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> StorefrontHttpClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(
        self,
        path: str,
        json: Any = None,
        data: dict[str, Any] | None = None,
        files: Any = None,
    ) -> Any:
        return await self.request("POST", path, json=json, data=data, files=files)

    async def put(
        self,
        path: str,
        json: Any = None,
        data: dict[str, Any] | None = None,
        files: Any = None,
    ) -> Any:
        return await self.request("PUT", path, json=json, data=data, files=files)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    async def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
        data: dict[str, Any] | None = None,
        files: Any = None,
    ) -> Any:
        """Issue one request and return the decoded JSON body.

        Args:
            method: HTTP method.
            path: Path relative to the base URL (e.g. ``/admin/orders``).
            params: Query parameters; None values are dropped.
            json: JSON body.
            data: Form fields, sent as multipart/form-data together with ``files``.
            files: Optional files for multipart uploads.

        Returns:
            Decoded JSON body, or None for an empty response.

        Raises:
            ApiError: On any HTTP error status or transport failure.
        """
        try:
            response = await self._client.request(
                method,
                path,
                params=_clean_params(params),
                json=json,
                data=data,
                files=files,
                headers=self._auth_headers(),
            )
            if response.status_code == 401:
                await self._session_manager.handle_unauthorized()
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise self.map_error(e) from e
        except httpx.TimeoutException as e:
            raise ApiError(
                category=ErrorCategory.NetworkError,
                message=f"{method} {path} timed out",
            ) from e
        except httpx.TransportError as e:
            raise ApiError(
                category=ErrorCategory.NetworkError,
                message=f"Network error calling {method} {path}: {e}",
            ) from e
        except httpx.HTTPError as e:
            raise ApiError(
                category=ErrorCategory.NetworkError,
                message=f"Failed to read response of {method} {path}: {e}",
            ) from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(
                category=ErrorCategory.UnknownError,
                message=f"{method} {path} returned a non-JSON body",
                status_code=response.status_code,
            ) from e

    def _auth_headers(self) -> dict[str, str]:
        token = self._session_manager.token
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    def map_error(self, error: httpx.HTTPStatusError) -> ApiError:
        """Map an HTTP error status to an ApiError.

        Args:
            error: The httpx status error.

        Returns:
            ApiError with a category derived from the status code and the
            server's own message when the body carried one.
        """
        response = error.response
        status_code = response.status_code
        details = self._extract_error_details(response)
        server_message = details.get("message")
        request = error.request
        message = server_message or f"{request.method} {request.url.path} failed ({status_code})"

        if status_code == 401:
            category = ErrorCategory.AuthenticationError
        elif status_code == 403:
            category = ErrorCategory.AuthorizationError
        elif status_code in (400, 422):
            category = ErrorCategory.ValidationError
        elif status_code == 404:
            category = ErrorCategory.NotFoundError
        elif 400 <= status_code < 500:
            category = ErrorCategory.BusinessRuleError
        elif 500 <= status_code < 600:
            category = ErrorCategory.ServerError
        else:
            category = ErrorCategory.UnknownError

        return ApiError(
            category=category,
            message=message,
            status_code=status_code,
            server_message=server_message,
            details=details,
        )

    def _extract_error_details(self, response: httpx.Response) -> dict[str, Any]:
        """Extract error details from the response body.

        Accepts ``{"message": ...}`` and ``{"error": {"message": ...}}``;
        falls back to the raw text.
        """
        details: dict[str, Any] = {}

        try:
            error_data = response.json()
            if isinstance(error_data, dict):
                if isinstance(error_data.get("error"), dict):
                    error_obj = error_data["error"]
                    details["message"] = error_obj.get("message")
                    details["code"] = error_obj.get("code")
                else:
                    details["message"] = error_data.get("message")
                    if isinstance(error_data.get("error"), str):
                        details["error"] = error_data["error"]
                if "errors" in error_data:
                    details["errors"] = error_data["errors"]
        except (ValueError, TypeError):
            if response.text:
                details["message"] = response.text

        return details


def _clean_params(params: dict[str, Any] | None) -> dict[str, Any] | None:
    if params is None:
        return None
    return {k: v for k, v in params.items() if v is not None}
