"""TransitionGate component: confirmation state machine for status and role changes."""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from storefront.domain.interfaces.notifier import Notifier
from storefront.domain.interfaces.observability_manager import ObservabilityManager
from storefront.domain.models.api_error import ApiError
from storefront.domain.models.transition import (
    GateState,
    TransitionNotice,
    TransitionOutcome,
    TransitionRecord,
    TransitionRequest,
)
from storefront.infrastructure.utils.validation import ValidationError

RefreshCallback = Callable[[TransitionRequest], Awaitable[None]]


class GateBusyError(Exception):
    """Raised when the gate is asked to act while a commit is in flight."""

    pass


class NoOpenTransitionError(Exception):
    """Raised when confirm/cancel is called with no request awaiting confirmation."""

    pass


class InvalidTransitionValueError(ValueError):
    """Raised when a proposed or current value is not one the policy knows."""

    pass


class TransitionPolicy(ABC):
    """What varies between gate instantiations.

    A policy classifies transitions, describes their consequences, and
    performs the mutating call. The gate owns everything else.
    """

    entity_type: str = "entity"
    """Name used in audit records and log events."""

    allowed_values: frozenset[str] = frozenset()
    """Values a request may move between; empty accepts anything."""

    @abstractmethod
    def is_critical(self, current_value: str, proposed_value: str) -> bool:
        """True if the transition needs a second, explicit confirmation."""
        pass

    @abstractmethod
    def describe(self, request: TransitionRequest) -> TransitionNotice:
        """Texts for both confirmation steps of ``request``."""
        pass

    @abstractmethod
    async def commit(self, request: TransitionRequest) -> Any:
        """Issue the mutating API call.

        Raises:
            ApiError: If the server rejects the change or is unreachable.
        """
        pass

    @abstractmethod
    def success_message(self, request: TransitionRequest) -> str:
        pass

    @abstractmethod
    def failure_message(self, request: TransitionRequest) -> str:
        """Fallback shown when the server gave no message of its own."""
        pass


class TransitionGate:
    """Two-step confirmation gate in front of one mutating API call.

    One gate serves one view and holds at most one TransitionRequest.
    Standard transitions commit after one confirmation, critical ones after
    two. Nothing is mutated locally: after a successful commit the gate runs
    the view's refresh callbacks so the view re-reads server state.

    States::

        IDLE --open--> AWAITING_STEP_1 --confirm--> AWAITING_STEP_2 (critical)
                                       --confirm--> COMMITTING      (standard)
        AWAITING_STEP_2 --confirm--> COMMITTING
        COMMITTING --> RESOLVED_SUCCESS | RESOLVED_FAILURE
        AWAITING_STEP_1 | AWAITING_STEP_2 --cancel--> CANCELLED

    Example:
        ```python
        gate = TransitionGate(OrderStatusPolicy(admin_api), notifier, observability)
        gate.open("o1", "ORD-1", "confirmed", "cancelled")
        await gate.confirm()   # -> AWAITING_STEP_2
        await gate.confirm()   # commits
        ```
    """

    def __init__(
        self,
        policy: TransitionPolicy,
        notifier: Notifier,
        observability_manager: ObservabilityManager,
        on_committed: RefreshCallback | None = None,
        max_history: int = 100,
    ) -> None:
        """Initialize TransitionGate.

        Args:
            policy: Classification, notices, and commit call for this entity type.
            notifier: Receives the success/error notification of each commit.
            observability_manager: Receives one event per resolved request.
            on_committed: Optional refresh callback run after a successful commit.
            max_history: Number of TransitionRecords kept (oldest dropped first).
        """
        self._policy = policy
        self._notifier = notifier
        self._observability = observability_manager
        self._refresh_callbacks: list[RefreshCallback] = []
        if on_committed is not None:
            self._refresh_callbacks.append(on_committed)
        self._max_history = max_history if max_history > 0 else 0
        self._history: list[TransitionRecord] = []

        self._state = GateState.Idle
        self._request: TransitionRequest | None = None
        self._critical = False

    @property
    def policy(self) -> TransitionPolicy:
        return self._policy

    @property
    def state(self) -> GateState:
        return self._state

    @property
    def request(self) -> TransitionRequest | None:
        """The open request, or None when the gate is closed."""
        return self._request

    @property
    def is_open(self) -> bool:
        return self._state.is_open

    @property
    def is_busy(self) -> bool:
        """True while committing; the triggering controls must be disabled."""
        return self._state == GateState.Committing

    @property
    def is_critical(self) -> bool:
        return self._request is not None and self._critical

    @property
    def required_confirmations(self) -> int:
        if self._request is None:
            return 0
        return 2 if self._critical else 1

    @property
    def notice(self) -> TransitionNotice | None:
        if self._request is None:
            return None
        return self._policy.describe(self._request)

    @property
    def confirm_label(self) -> str:
        """Caption of the confirm button for the current step."""
        if self._critical and self._state == GateState.AwaitingStep1:
            return "Continue →"
        return "Confirm"

    @property
    def history(self) -> list[TransitionRecord]:
        return list(self._history)

    def add_refresh_callback(self, callback: RefreshCallback) -> None:
        self._refresh_callbacks.append(callback)

    def open(
        self,
        entity_id: str,
        entity_label: str,
        current_value: str,
        proposed_value: str,
    ) -> TransitionRequest | None:
        """Start a confirmation for changing ``entity_id`` to ``proposed_value``.

        A pending request (step 1 or 2) is discarded uncommitted and replaced.

        Args:
            entity_id: Server id of the order or user.
            entity_label: What the dialog calls the entity (order number, name).
            current_value: The value the server last reported.
            proposed_value: The value picked in the selector.

        Returns:
            The new request, or None when the values are equal (no request is
            created and the gate is left untouched).

        Raises:
            GateBusyError: If a commit is in flight.
            InvalidTransitionValueError: If either value is unknown to the policy.
        """
        current_value = _as_value(current_value)
        proposed_value = _as_value(proposed_value)
        if current_value == proposed_value:
            return None
        if self.is_busy:
            raise GateBusyError(
                f"A {self._policy.entity_type} change is being committed; try again once it resolves"
            )
        self._check_value(current_value)
        self._check_value(proposed_value)

        if self._request is not None:
            self._close(TransitionOutcome.Replaced, GateState.Idle, confirmations=0)

        try:
            request = TransitionRequest(
                entity_id=entity_id,
                entity_label=entity_label,
                current_value=current_value,
                proposed_value=proposed_value,
            )
        except PydanticValidationError as e:
            raise InvalidTransitionValueError(str(e)) from e

        self._request = request
        self._critical = self._policy.is_critical(current_value, proposed_value)
        self._state = GateState.AwaitingStep1
        return request

    async def confirm(self) -> GateState:
        """The dialog's Continue/Confirm action.

        At step 1 of a critical change this only advances to step 2. Otherwise
        it commits: the request is discarded whatever the outcome, and the
        outcome is reported through the notifier.

        Returns:
            The state after the action.

        Raises:
            GateBusyError: If a commit is already in flight.
            NoOpenTransitionError: If no request awaits confirmation.
        """
        if self.is_busy:
            raise GateBusyError("Commit already in progress")
        if self._request is None or self._state not in (
            GateState.AwaitingStep1,
            GateState.AwaitingStep2,
        ):
            raise NoOpenTransitionError("No transition awaiting confirmation")

        if self._critical and self._state == GateState.AwaitingStep1:
            self._request.confirm_step = 2
            self._state = GateState.AwaitingStep2
            return self._state

        return await self._commit()

    async def cancel(self) -> GateState:
        """The dialog's Cancel/Keep action. No API call is made.

        Raises:
            GateBusyError: If a commit is in flight.
        """
        if self.is_busy:
            raise GateBusyError("Cannot cancel while the change is being committed")
        if self._request is None:
            return self._state
        request = self._request
        confirmations = request.confirm_step - 1
        self._close(TransitionOutcome.Cancelled, GateState.Cancelled, confirmations)
        await self._log_resolution("transition_cancelled", request)
        return self._state

    async def _commit(self) -> GateState:
        request = self._request
        if request is None:
            raise NoOpenTransitionError("No transition awaiting confirmation")
        confirmations = request.confirm_step
        self._state = GateState.Committing

        try:
            await self._policy.commit(request)
        except ValidationError as e:
            return await self._fail(request, confirmations, self._policy.failure_message(request), e.message)
        except ApiError as e:
            message = e.user_message(self._policy.failure_message(request))
            return await self._fail(request, confirmations, message, e.message, api_error=e)
        except Exception as e:
            # any failure resolves the gate
            state = await self._fail(request, confirmations, self._policy.failure_message(request), str(e))
            await self._observability.log(
                level="ERROR",
                message=f"Unexpected error committing {self._policy.entity_type} change: {e!r}",
                context={"entity_id": request.entity_id},
            )
            return state

        self._notifier.success(self._policy.success_message(request))
        self._close(TransitionOutcome.Committed, GateState.ResolvedSuccess, confirmations)
        await self._log_resolution("transition_committed", request)

        for callback in self._refresh_callbacks:
            try:
                await callback(request)
            except Exception as e:
                await self._observability.log(
                    level="WARNING",
                    message=f"Refresh after {self._policy.entity_type} change failed: {e}",
                    context={"entity_id": request.entity_id},
                )
        return self._state

    async def _fail(
        self,
        request: TransitionRequest,
        confirmations: int,
        message: str,
        error: str,
        api_error: ApiError | None = None,
    ) -> GateState:
        self._notifier.error(message)
        self._close(TransitionOutcome.Failed, GateState.ResolvedFailure, confirmations, error=error)
        await self._log_resolution("transition_failed", request, error=api_error)
        return self._state

    def _close(
        self,
        outcome: TransitionOutcome,
        state: GateState,
        confirmations: int,
        error: str | None = None,
    ) -> None:
        request = self._request
        if request is not None:
            self._record(
                TransitionRecord(
                    entity_type=self._policy.entity_type,
                    entity_id=request.entity_id,
                    from_value=request.current_value,
                    to_value=request.proposed_value,
                    critical=self._critical,
                    outcome=outcome,
                    confirmations=confirmations,
                    error=error,
                )
            )
        self._request = None
        self._critical = False
        self._state = state

    def _record(self, record: TransitionRecord) -> None:
        self._history.append(record)
        if self._max_history and len(self._history) > self._max_history:
            del self._history[: len(self._history) - self._max_history]

    async def _log_resolution(
        self,
        event_type: str,
        request: TransitionRequest,
        error: ApiError | None = None,
    ) -> None:
        payload: dict[str, Any] = {
            "entity_type": self._policy.entity_type,
            "entity_id": request.entity_id,
            "from": request.current_value,
            "to": request.proposed_value,
        }
        if error is not None:
            payload["error_category"] = error.category.value
            payload["status_code"] = error.status_code
        try:
            await self._observability.emit_event(event_type=event_type, payload=payload)
        except Exception as e:
            await self._observability.log(
                level="WARNING",
                message=f"Failed to emit {event_type} event: {e}",
                context={"entity_id": request.entity_id},
            )

    def _check_value(self, value: str) -> None:
        allowed = self._policy.allowed_values
        if allowed and value not in allowed:
            raise InvalidTransitionValueError(
                f"Unknown {self._policy.entity_type} value: {value!r}"
            )


def _as_value(value: Any) -> str:
    """Accept enum members as well as their raw string values."""
    return getattr(value, "value", value)
