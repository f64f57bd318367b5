"""
Login, register, restore and logout handshakes.

SessionProtocol assembles protocol messages from the crypto primitives and
calls the account service. It never holds session state: each handshake
returns a result for SessionLifecycle to install. Derived keys live only in
the local scope of the handshake that needed them.
"""

from .client import AccountClient
from .crypto import (
    bytes_to_base64,
    bytes_to_base64url,
    derive_keys,
    encrypt_data,
    sign_challenge,
)
from .errors import (
    AccountServiceError,
    ChallengeRequestFailed,
    LoginFailed,
    RegistrationFailed,
    RestoreFetchFailed,
)
from .logging import get_logger
from .models import (
    LoginData,
    LoginRequest,
    LoginResult,
    RegisterRequest,
    RegistrationData,
    RestoreResult,
    Session,
    SignedChallenge,
)

logger = get_logger("protocol")


class SessionProtocol:
    """Runs the handshakes against one AccountClient."""

    def __init__(self, client: AccountClient):
        self.client = client

    async def login(self, data: LoginData) -> LoginResult:
        """
        Prove possession of the mnemonic and open a session.

        Crypto errors (InvalidMnemonic, SigningError, EncryptionError) are
        raised as-is; InvalidMnemonic is raised before any network call.

        Raises:
            ChallengeRequestFailed: the service did not issue a challenge
            LoginFailed: login submission or the user fetch failed
        """
        keys = derive_keys(data.mnemonic)
        public_key = bytes_to_base64url(keys.public_key)
        device = encrypt_data(data.device, keys.seed)

        try:
            challenge = await self.client.get_login_challenge(public_key)
        except AccountServiceError as e:
            raise ChallengeRequestFailed(f"login challenge: {e}") from e
        logger.debug("login: challenge received", extra={"operation": "login"})

        signature = sign_challenge(keys, challenge)
        logger.debug("login: challenge signed", extra={"operation": "login"})

        request = LoginRequest(
            public_key=public_key,
            challenge=SignedChallenge(code=challenge, signature=signature),
            device=device,
        )
        try:
            response = await self.client.login(request)
            logger.debug("login: submitted", extra={"operation": "login"})
            current = await self.client.get_user(response.token)
        except AccountServiceError as e:
            raise LoginFailed(str(e)) from e

        user = current.user
        session = Session(
            user_id=user.id,
            token=response.token,
            session_id=response.session.id,
            seed=keys.seed,
            profile=user.profile,
            device_name=data.device,
        )
        return LoginResult(session=session, user=user, encoded_seed=bytes_to_base64(keys.seed))

    async def register(self, data: RegistrationData) -> LoginResult:
        """
        Create an account for the mnemonic's keypair and open a session.

        The register challenge is not bound to a public key; the service
        learns the key from the signed submission. The response embeds the
        new user record, so no extra fetch is made.

        Raises:
            ChallengeRequestFailed: the service did not issue a challenge
            RegistrationFailed: the submission failed
        """
        keys = derive_keys(data.mnemonic)
        device = encrypt_data(data.device, keys.seed)

        try:
            challenge = await self.client.get_register_challenge()
        except AccountServiceError as e:
            raise ChallengeRequestFailed(f"register challenge: {e}") from e

        signature = sign_challenge(keys, challenge)

        request = RegisterRequest(
            public_key=bytes_to_base64url(keys.public_key),
            challenge=SignedChallenge(code=challenge, signature=signature),
            device=device,
            profile=data.profile,
        )
        try:
            response = await self.client.register(request)
        except AccountServiceError as e:
            raise RegistrationFailed(str(e)) from e
        logger.debug("register: submitted", extra={"operation": "register"})

        user = response.user
        session = Session(
            user_id=user.id,
            token=response.token,
            session_id=response.session.id,
            seed=keys.seed,
            profile=user.profile,
            device_name=data.device,
        )
        return LoginResult(session=session, user=user, encoded_seed=bytes_to_base64(keys.seed))

    async def restore(self, session: Session) -> RestoreResult:
        """Re-fetch user, bookmarks and progress with the session's token."""
        try:
            current = await self.client.get_user(session.token)
            bookmarks = await self.client.get_bookmarks(session)
            progress = await self.client.get_progress(session)
        except AccountServiceError as e:
            raise RestoreFetchFailed(str(e)) from e
        return RestoreResult(user=current.user, bookmarks=bookmarks, progress=progress)

    async def logout(self, session: Session) -> bool:
        """Best-effort revoke. Returns False instead of raising on failure."""
        try:
            await self.client.remove_session(session.token, session.session_id)
        except Exception as e:
            logger.debug(f"Session revoke failed (best-effort): {e}")
            return False
        return True
