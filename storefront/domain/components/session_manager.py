"""SessionManager component for the signed-in session lifecycle."""

from storefront.domain.interfaces.navigator import Navigator, NullNavigator
from storefront.domain.interfaces.observability_manager import ObservabilityManager
from storefront.domain.interfaces.session_store import SessionStore, SessionStoreError
from storefront.domain.models.session import Session


class SessionManager:
    """Owns the current Session and its persisted copy.

    Lifecycle: ``hydrate()`` once at start-up restores a persisted session,
    ``start()`` records a login, ``teardown()`` forgets it. The HTTP adapter
    calls ``handle_unauthorized()`` on every 401, which tears the session down
    and sends the navigator to the login route.
    """

    def __init__(
        self,
        store: SessionStore,
        observability_manager: ObservabilityManager,
        navigator: Navigator | None = None,
        login_path: str = "/login",
        session: Session | None = None,
    ) -> None:
        """Initialize SessionManager.

        Args:
            store: Where the session is persisted.
            observability_manager: Receives session_started/session_ended events.
            navigator: Sent to ``login_path`` when the backend answers 401.
            login_path: Login route.
            session: Session already known to be current (e.g. restored by
                the host application); ``hydrate()`` is not needed then.
        """
        self._store = store
        self._observability = observability_manager
        self._navigator = navigator or NullNavigator()
        self._login_path = login_path
        self._session: Session | None = session

    @property
    def current(self) -> Session | None:
        return self._session

    @property
    def token(self) -> str | None:
        return self._session.token if self._session else None

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None and self._session.is_authenticated

    @property
    def is_admin(self) -> bool:
        return self._session is not None and self._session.is_admin

    @property
    def navigator(self) -> Navigator:
        return self._navigator

    async def hydrate(self) -> Session | None:
        """Restore the persisted session, if any.

        An unreadable store is treated as signed out: the broken copy is
        cleared so the next login starts clean.

        Returns:
            The restored session, or None.
        """
        try:
            self._session = await self._store.load()
        except SessionStoreError as e:
            await self._observability.log(
                level="WARNING",
                message=f"Discarding unreadable persisted session: {e}",
            )
            self._session = None
            await self._store.clear()
        return self._session

    async def start(self, session: Session) -> Session:
        """Make ``session`` current and persist it."""
        await self._store.save(session)
        self._session = session
        await self._emit("session_started", session)
        return session

    async def teardown(self, reason: str = "logout") -> None:
        """Forget the current session, in memory and in the store."""
        previous = self._session
        self._session = None
        await self._store.clear()
        await self._emit("session_ended", previous, reason=reason)

    async def handle_unauthorized(self) -> None:
        """React to a 401: clear the session and force the login route.

        The redirect happens even when the persisted copy cannot be cleared;
        that failure is logged so it never masks the 401 itself.
        """
        try:
            await self.teardown(reason="unauthorized")
        except SessionStoreError as e:
            await self._observability.log(
                level="ERROR",
                message=f"Failed to clear persisted session after 401: {e}",
            )
        finally:
            self._navigator.go_to(self._login_path)

    async def _emit(self, event_type: str, session: Session | None, **extra: str) -> None:
        try:
            await self._observability.emit_event(
                event_type=event_type,
                payload={
                    "user_id": session.user_id if session else None,
                    "role": session.role.value if session else None,
                    **extra,
                },
            )
        except Exception as e:
            await self._observability.log(
                level="WARNING",
                message=f"Failed to emit {event_type} event: {e}",
            )
