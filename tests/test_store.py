from __future__ import annotations

import pytest

from accountauth.models import Bookmark, ProgressItem, Session, UserRecord
from accountauth.store import InMemorySessionStore, SessionStore

USER = UserRecord.model_validate(
    {
        "id": "user-1",
        "publicKey": "pk",
        "profile": {"colorA": "#fff", "colorB": "#000", "icon": "tv"},
    }
)
SESSION = Session(user_id="user-1", token="tok", session_id="sess-1", seed=b"\x01" * 32, device_name="tv")


def test_in_memory_store_satisfies_protocol():
    assert isinstance(InMemorySessionStore(), SessionStore)


@pytest.mark.asyncio
async def test_login_restore_logout_cycle():
    store = InMemorySessionStore()
    await store.on_login(SESSION, USER, "AQEB")
    assert store.account.session_id == "sess-1"
    assert store.account.device_name == "tv"
    assert "tok" not in repr(store.account)

    await store.on_restore(
        USER,
        [ProgressItem.model_validate({"tmdbId": "1", "watched": 3})],
        [Bookmark.model_validate({"tmdbId": "1"}), Bookmark.model_validate({"tmdbId": "2"})],
    )
    assert sorted(store.bookmarks) == ["1", "2"]
    assert store.progress[0].model_extra["watched"] == 3

    await store.on_logout()
    assert store.account is None
    assert store.user is None
    assert store.bookmarks == {} and store.progress == []


def test_session_to_dict_has_no_secrets():
    data = SESSION.to_dict()
    assert "token" not in data and "seed" not in data
    assert "tok" not in repr(SESSION)
