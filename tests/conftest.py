from __future__ import annotations

import pytest
import pytest_asyncio

from accountauth import AuthConfig, SessionLifecycle
from accountauth.client import AccountClient
from accountauth.crypto import bytes_to_base64url, derive_keys
from accountauth.store import InMemorySessionStore

from tests.helpers.fake_service import BACKEND_URL, FakeAccountService
from tests.helpers.mnemonics import MNEMONIC_24



@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "ACCOUNTAUTH_BACKEND_URL",
        "ACCOUNTAUTH_TIMEOUT",
        "ACCOUNTAUTH_SINGLE_FLIGHT",
        "ACCOUNTAUTH_INVALIDATE_ON_RESTORE_FAILURE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def service():
    return FakeAccountService()


@pytest.fixture
def registered_user(service):
    """A user already known to the service for MNEMONIC_24."""
    public_key = bytes_to_base64url(derive_keys(MNEMONIC_24).public_key)
    return service.add_user(public_key, {"colorA": "#ff0000", "colorB": "#00ff00", "icon": "ghost"})


@pytest.fixture
def store():
    return InMemorySessionStore()


@pytest_asyncio.fixture
async def make_lifecycle(service, store):
    created = []

    def _make(**config_kwargs) -> SessionLifecycle:
        config = AuthConfig(backend_url=BACKEND_URL, **config_kwargs)
        lifecycle = SessionLifecycle.from_config(config, store=store, transport=service.transport())
        created.append(lifecycle)
        return lifecycle

    yield _make
    for lifecycle in created:
        await lifecycle.close()


@pytest.fixture
def lifecycle(make_lifecycle):
    return make_lifecycle()


@pytest_asyncio.fixture
async def client(service):
    c = AccountClient(AuthConfig(backend_url=BACKEND_URL), transport=service.transport())
    yield c
    await c.close()
