"""Client configuration with explicit args > env var > defaults precedence."""

import os
from dataclasses import dataclass

SINGLE_FLIGHT_POLICIES = ("join", "reject")

DEFAULT_BACKEND_URL = "http://localhost:8080"
DEFAULT_TIMEOUT = 10.0


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


@dataclass
class AuthConfig:
    """Configuration for a SessionLifecycle and its AccountClient."""
    backend_url: str = ""
    timeout: float = 0.0
    single_flight: str = ""
    invalidate_on_restore_failure: bool | None = None
    user_agent: str = "accountauth/0.1"

    def __post_init__(self):
        if not self.backend_url:
            self.backend_url = os.getenv("ACCOUNTAUTH_BACKEND_URL", DEFAULT_BACKEND_URL)
        self.backend_url = self.backend_url.rstrip("/")
        if not self.backend_url.startswith(("http://", "https://")):
            raise ValueError(f"backend_url must be an http(s) URL, got {self.backend_url!r}")

        if not self.timeout:
            env_timeout = os.getenv("ACCOUNTAUTH_TIMEOUT")
            self.timeout = float(env_timeout) if env_timeout else DEFAULT_TIMEOUT
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")

        if not self.single_flight:
            self.single_flight = os.getenv("ACCOUNTAUTH_SINGLE_FLIGHT", "join")
        if self.single_flight not in SINGLE_FLIGHT_POLICIES:
            raise ValueError(
                f"single_flight must be one of {SINGLE_FLIGHT_POLICIES}, got {self.single_flight!r}"
            )

        if self.invalidate_on_restore_failure is None:
            self.invalidate_on_restore_failure = _env_flag(
                "ACCOUNTAUTH_INVALIDATE_ON_RESTORE_FAILURE"
            )
