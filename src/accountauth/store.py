"""
Session-store collaborator.

The lifecycle hands every transition to a SessionStore so the surrounding
application can cache the account and sync its user data. Persisting that
cache is the application's concern; InMemorySessionStore keeps it in memory.
"""

from dataclasses import dataclass, field
from typing import Optional, Protocol, runtime_checkable

from .logging import get_logger
from .models import Bookmark, ProgressItem, Session, UserRecord

logger = get_logger("store")


@runtime_checkable
class SessionStore(Protocol):
    async def on_login(self, session: Session, user: UserRecord, encoded_seed: str) -> None: ...

    async def on_logout(self) -> None: ...

    async def on_restore(
        self,
        user: UserRecord,
        progress: list[ProgressItem],
        bookmarks: list[Bookmark],
    ) -> None: ...


@dataclass
class CachedAccount:
    """What an application would persist between runs."""
    user_id: str
    session_id: str
    token: str = field(repr=False)
    encoded_seed: str = field(repr=False)
    device_name: str = ""
    profile: Optional[dict] = None


@dataclass
class InMemorySessionStore:
    """Reference SessionStore holding the account and synced user data."""
    account: Optional[CachedAccount] = None
    user: Optional[UserRecord] = None
    bookmarks: dict[str, Bookmark] = field(default_factory=dict)
    progress: list[ProgressItem] = field(default_factory=list)

    async def on_login(self, session: Session, user: UserRecord, encoded_seed: str) -> None:
        self.account = CachedAccount(
            user_id=user.id,
            session_id=session.session_id,
            token=session.token,
            encoded_seed=encoded_seed,
            device_name=session.device_name,
            profile=user.profile.to_wire(),
        )
        self.user = user
        logger.debug(f"Cached account {user.id}")

    async def on_logout(self) -> None:
        self.account = None
        self.user = None
        self.bookmarks.clear()
        self.progress.clear()

    async def on_restore(
        self,
        user: UserRecord,
        progress: list[ProgressItem],
        bookmarks: list[Bookmark],
    ) -> None:
        self.user = user
        if self.account is not None:
            self.account.profile = user.profile.to_wire()
        self.bookmarks = {b.tmdb_id: b for b in bookmarks}
        self.progress = list(progress)
        logger.debug(f"Synced {len(bookmarks)} bookmarks and {len(progress)} progress items")
