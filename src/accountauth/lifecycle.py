"""
Session lifecycle - the single owner of the authenticated session.

The session is installed in one assignment after a handshake fully succeeds
and cleared on logout. Nothing outside this module mutates it.
"""

import asyncio
import dataclasses
from collections.abc import Awaitable, Callable
from typing import Optional, TypeVar

import httpx

from .client import AccountClient
from .config import AuthConfig
from .crypto import decrypt_data
from .errors import (
    LoginFailed,
    NotAuthenticated,
    OperationCancelled,
    OperationInProgress,
    RegistrationFailed,
    RestoreFetchFailed,
)
from .logging import get_logger
from .models import LoginData, RegistrationData, RestoreResult, Session, UserProfile
from .protocol import SessionProtocol
from .store import InMemorySessionStore, SessionStore

logger = get_logger("lifecycle")

T = TypeVar("T")

SessionObserver = Callable[[Optional[Session]], None]


class SessionLifecycle:
    """Holds the authoritative Session-or-absence and runs its transitions.

    Operations of the same kind are single-flight: while one is running, a
    second call joins it (policy "join") or raises OperationInProgress
    (policy "reject"). Cancelling a joined caller leaves the operation running;
    cancelling the first caller cancels it for everyone. Operations of
    different kinds run one at a time.
    """

    def __init__(
        self,
        protocol: SessionProtocol,
        store: Optional[SessionStore] = None,
        config: Optional[AuthConfig] = None,
    ):
        self.protocol = protocol
        self.store: SessionStore = store if store is not None else InMemorySessionStore()
        self.config = config or protocol.client.config
        self._session: Optional[Session] = None
        self._in_flight: dict[str, asyncio.Task] = {}
        self._transition_lock = asyncio.Lock()
        self._observers: list[SessionObserver] = []

    @classmethod
    def from_config(
        cls,
        config: Optional[AuthConfig] = None,
        store: Optional[SessionStore] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "SessionLifecycle":
        """Build a lifecycle with its own AccountClient."""
        config = config or AuthConfig()
        client = AccountClient(config, transport=transport)
        return cls(SessionProtocol(client), store=store, config=config)

    async def close(self) -> None:
        await self.protocol.client.close()

    # --- Read-only accessors ---

    @property
    def current_session(self) -> Optional[Session]:
        return self._session

    def is_authenticated(self) -> bool:
        return self._session is not None

    def current_profile(self) -> Optional[UserProfile]:
        return self._session.profile if self._session else None

    def subscribe(self, observer: SessionObserver) -> Callable[[], None]:
        """Register a callback run with the new session after every change.

        Returns a function that removes the callback.
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def decrypt(self, payload: str) -> str:
        """Decrypt a server-returned field with the current session's seed."""
        if self._session is None:
            raise NotAuthenticated("no active session")
        return decrypt_data(payload, self._session.seed)

    # --- Transitions ---

    async def login(self, data: LoginData) -> Session:
        return await self._single_flight("login", lambda: self._login(data))

    async def register(self, data: RegistrationData) -> Session:
        return await self._single_flight("register", lambda: self._register(data))

    async def restore(self) -> Optional[RestoreResult]:
        """Refresh user data for the current session. No-op without one."""
        return await self._single_flight("restore", self._restore)

    async def logout(self) -> None:
        await self._single_flight("logout", self._logout)

    async def _login(self, data: LoginData) -> Session:
        result = await self.protocol.login(data)
        try:
            await self.store.on_login(result.session, result.user, result.encoded_seed)
        except Exception as e:
            raise LoginFailed(f"session store rejected login: {e}") from e
        self._install(result.session)
        return result.session

    async def _register(self, data: RegistrationData) -> Session:
        result = await self.protocol.register(data)
        try:
            await self.store.on_login(result.session, result.user, result.encoded_seed)
        except Exception as e:
            raise RegistrationFailed(f"session store rejected registration: {e}") from e
        self._install(result.session)
        return result.session

    async def _restore(self) -> Optional[RestoreResult]:
        session = self._session
        if session is None:
            return None

        try:
            result = await self.protocol.restore(session)
        except RestoreFetchFailed as e:
            await self._restore_failed(session, e)
            raise

        try:
            await self.store.on_restore(result.user, result.progress, result.bookmarks)
        except Exception as e:
            error = RestoreFetchFailed(f"session store rejected restore: {e}")
            await self._restore_failed(session, error)
            raise error from e

        if result.user.profile != session.profile:
            self._session = dataclasses.replace(session, profile=result.user.profile)
            logger.info(f"Profile refreshed for user {session.user_id}")
            self._notify()
        return result

    async def _restore_failed(self, session: Session, error: RestoreFetchFailed) -> None:
        logger.warning(f"Restore failed for user {session.user_id}: {error}")
        if self.config.invalidate_on_restore_failure:
            await self._clear()

    async def _logout(self) -> None:
        session = self._session
        if session is None:
            return
        try:
            revoked = await self.protocol.logout(session)
            if not revoked:
                logger.info(f"Session {session.session_id} not revoked remotely; clearing locally")
        finally:
            await self._clear()

    def _install(self, session: Session) -> None:
        self._session = session
        logger.info(f"Session established for user {session.user_id} ({session.session_id})")
        self._notify()

    async def _clear(self) -> None:
        self._session = None
        try:
            await self.store.on_logout()
        finally:
            logger.info("Session cleared")
            self._notify()

    def _notify(self) -> None:
        for observer in list(self._observers):
            try:
                observer(self._session)
            except Exception:
                logger.exception("Session observer raised")

    # --- Concurrency ---

    async def _single_flight(self, operation: str, factory: Callable[[], Awaitable[T]]) -> T:
        running = self._in_flight.get(operation)
        if running is not None and not running.done():
            if self.config.single_flight == "reject":
                raise OperationInProgress(operation)
            logger.debug(f"Joining in-flight {operation}")
            return await asyncio.shield(running)

        task = asyncio.ensure_future(self._run(operation, factory))
        self._in_flight[operation] = task

        def _on_done(done: asyncio.Task) -> None:
            if self._in_flight.get(operation) is done:
                del self._in_flight[operation]

        task.add_done_callback(_on_done)
        return await task

    async def _run(self, operation: str, factory: Callable[[], Awaitable[T]]) -> T:
        async with self._transition_lock:
            try:
                return await factory()
            except asyncio.CancelledError:
                logger.info(f"{operation} cancelled")
                raise OperationCancelled(operation) from None
