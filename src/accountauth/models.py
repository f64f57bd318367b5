"""Wire models for the account service and in-memory domain types."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class WireModel(BaseModel):
    """Base for service payloads: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


# --- Records returned by the service ---

class UserProfile(WireModel):
    """Public profile chosen at registration."""
    color_a: str = Field(..., alias="colorA")
    color_b: str = Field(..., alias="colorB")
    icon: str


class UserRecord(WireModel):
    """Authoritative user record."""
    id: str
    public_key: str = Field(..., alias="publicKey")
    namespace: str = ""
    profile: UserProfile
    permissions: list[str] = Field(default_factory=list)
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")


class SessionRecord(WireModel):
    """Server-side view of a session. `device` is an encrypted payload."""
    id: str
    user: str
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    accessed_at: Optional[datetime] = Field(default=None, alias="accessedAt")
    expires_at: Optional[datetime] = Field(default=None, alias="expiresAt")
    device: str = ""
    user_agent: str = Field(default="", alias="userAgent")


class Bookmark(WireModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")
    tmdb_id: str = Field(..., alias="tmdbId")


class ProgressItem(WireModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")
    tmdb_id: str = Field(..., alias="tmdbId")


# --- Request / response bodies ---

class ChallengeResponse(WireModel):
    challenge: str = Field(..., min_length=1)


class SignedChallenge(WireModel):
    code: str
    signature: str


class LoginRequest(WireModel):
    public_key: str = Field(..., alias="publicKey")
    challenge: SignedChallenge
    device: str


class RegisterRequest(WireModel):
    public_key: str = Field(..., alias="publicKey")
    challenge: SignedChallenge
    device: str
    profile: UserProfile


class LoginResponse(WireModel):
    session: SessionRecord
    token: str = Field(..., min_length=1)


class RegisterResponse(WireModel):
    user: UserRecord
    session: SessionRecord
    token: str = Field(..., min_length=1)


class CurrentUserResponse(WireModel):
    user: UserRecord
    session: Optional[SessionRecord] = None


# --- Domain types ---

@dataclass
class LoginData:
    """Input to a login: the phrase plus the device name to encrypt."""
    mnemonic: str = field(repr=False)
    device: str


@dataclass
class RegistrationData:
    """Input to a registration."""
    mnemonic: str = field(repr=False)
    device: str
    profile: UserProfile


@dataclass(frozen=True)
class Session:
    """The authenticated state. The seed never leaves this process."""
    user_id: str
    token: str = field(repr=False)
    session_id: str
    seed: bytes = field(repr=False)
    profile: Optional[UserProfile] = None
    device_name: str = ""

    def to_dict(self) -> dict:
        """Non-secret fields, for display and logging."""
        return {
            "user_id": self.user_id,
            "session_id": self.session_id,
            "device_name": self.device_name,
            "profile": self.profile.to_wire() if self.profile else None,
        }


@dataclass
class LoginResult:
    session: Session
    user: UserRecord
    encoded_seed: str = field(repr=False)


@dataclass
class RestoreResult:
    user: UserRecord
    bookmarks: list[Bookmark]
    progress: list[ProgressItem]
