"""HTTP client for the remote account service."""

from typing import Any, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from .config import AuthConfig
from .errors import AccountServiceError
from .logging import get_logger
from .models import (
    Bookmark,
    ChallengeResponse,
    CurrentUserResponse,
    LoginRequest,
    LoginResponse,
    ProgressItem,
    RegisterRequest,
    RegisterResponse,
    Session,
)

logger = get_logger("client")

M = TypeVar("M", bound=BaseModel)


def _parse(operation: str, model: Type[M], data: Any) -> M:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise AccountServiceError(operation, f"unexpected response shape ({e.error_count()} errors)") from e


def _parse_list(operation: str, model: Type[M], data: Any) -> list[M]:
    if not isinstance(data, list):
        raise AccountServiceError(operation, "expected a JSON array")
    return [_parse(operation, model, item) for item in data]


class AccountClient:
    """Async HTTP client for the account service API.

    Every method either returns a parsed model or raises AccountServiceError.
    asyncio.CancelledError is never caught here.
    """

    def __init__(
        self,
        config: AuthConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.base_url = config.backend_url
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=config.timeout,
            transport=transport,
            headers={"User-Agent": config.user_agent},
        )

    async def close(self):
        await self._client.aclose()

    async def __aenter__(self) -> "AccountClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        token: Optional[str] = None,
        json: Optional[dict] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        kwargs: dict[str, Any] = {"headers": headers, "json": json}
        if timeout is not None:
            kwargs["timeout"] = timeout

        try:
            resp = await self._client.request(method, path, **kwargs)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.debug(f"{operation} returned HTTP {status}")
            raise AccountServiceError(operation, f"HTTP {status}", status) from e
        except httpx.HTTPError as e:
            logger.debug(f"{operation} transport error: {type(e).__name__}")
            raise AccountServiceError(operation, f"{type(e).__name__}: {e}") from e

        if resp.status_code == 204 or not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise AccountServiceError(operation, "response is not JSON", resp.status_code) from e

    # --- Handshake endpoints ---

    async def get_login_challenge(self, public_key: str) -> str:
        """Request a login challenge bound to a base64url public key."""
        data = await self._request(
            "get_login_challenge", "POST", "/auth/login/start", json={"publicKey": public_key}
        )
        return _parse("get_login_challenge", ChallengeResponse, data).challenge

    async def login(self, request: LoginRequest) -> LoginResponse:
        data = await self._request("login", "POST", "/auth/login/complete", json=request.to_wire())
        return _parse("login", LoginResponse, data)

    async def get_register_challenge(self) -> str:
        """Request a registration challenge; no key exists server-side yet."""
        data = await self._request("get_register_challenge", "POST", "/auth/register/start", json={})
        return _parse("get_register_challenge", ChallengeResponse, data).challenge

    async def register(self, request: RegisterRequest) -> RegisterResponse:
        data = await self._request(
            "register", "POST", "/auth/register/complete", json=request.to_wire()
        )
        return _parse("register", RegisterResponse, data)

    # --- Authenticated endpoints ---

    async def get_user(self, token: str) -> CurrentUserResponse:
        data = await self._request("get_user", "GET", "/users/@me", token=token)
        return _parse("get_user", CurrentUserResponse, data)

    async def get_bookmarks(self, session: Session) -> list[Bookmark]:
        data = await self._request(
            "get_bookmarks", "GET", f"/users/{session.user_id}/bookmarks", token=session.token
        )
        return _parse_list("get_bookmarks", Bookmark, data)

    async def get_progress(self, session: Session) -> list[ProgressItem]:
        data = await self._request(
            "get_progress", "GET", f"/users/{session.user_id}/progress", token=session.token
        )
        return _parse_list("get_progress", ProgressItem, data)

    async def remove_session(self, token: str, session_id: str) -> None:
        """Revoke a session server-side."""
        await self._request("remove_session", "DELETE", f"/sessions/{session_id}", token=token)
