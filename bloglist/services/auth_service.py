"""
Authentication service: credential verification and bearer tokens.

``verify_credentials`` turns a username/password pair into an
``Identity``; ``TokenService`` issues a signed token for that identity
and later turns a presented token back into one.  Neither knows how
passwords are hashed or tokens signed; those are the ``PasswordHasher``
and ``TokenSigner`` capabilities from ``bloglist.security``.
"""
import logging
from datetime import datetime, timedelta, timezone

from bloglist.errors import InvalidCredentials, InvalidToken, MissingToken
from bloglist.models import User
from bloglist.repositories import UserStore
from bloglist.security import Identity, PasswordHasher, TokenSigner

logger = logging.getLogger(__name__)

_BEARER_SCHEME = "bearer"


def extract_bearer(authorization: str | None) -> str | None:
    """
    Return the token from an ``Authorization: bearer <token>`` header.

    The scheme is matched case-insensitively.  Any other header shape
    counts as no token at all.
    """
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != _BEARER_SCHEME:
        return None
    return token.strip() or None


class TokenService:
    """Sole issuer and verifier of bearer tokens."""

    def __init__(self, signer: TokenSigner, expires_minutes: int | None = None) -> None:
        self.signer = signer
        self.expires_minutes = expires_minutes

    def issue(self, identity: Identity) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "sub": identity.user_id,
            "id": identity.user_id,
            "username": identity.username,
            "iat": now,
        }
        if self.expires_minutes:
            claims["exp"] = now + timedelta(minutes=self.expires_minutes)
        return self.signer.sign(claims)

    def verify(self, token: str | None) -> Identity:
        if not token:
            raise MissingToken()
        claims = self.signer.verify(token)
        user_id = claims.get("id")
        username = claims.get("username")
        if not user_id or not username:
            raise InvalidToken()
        return Identity(user_id=user_id, username=username)


async def _authenticate(
    users: UserStore, hasher: PasswordHasher, username: str, password: str
) -> User:
    user = await users.get_by_username(username)
    if user is None or not hasher.verify(password, user.password_hash):
        logger.warning("Failed login for username=%r", username)
        raise InvalidCredentials()
    return user


async def verify_credentials(
    users: UserStore, hasher: PasswordHasher, username: str, password: str
) -> Identity:
    """
    Return the ``Identity`` for *username* if *password* matches.

    Unknown users and wrong passwords raise the same
    ``InvalidCredentials`` so callers cannot probe for usernames.
    """
    user = await _authenticate(users, hasher, username, password)
    return Identity(user_id=user.id, username=user.username)


async def login(
    users: UserStore,
    hasher: PasswordHasher,
    tokens: TokenService,
    username: str,
    password: str,
) -> dict:
    """Verify credentials and return ``{token, username, name}``."""
    user = await _authenticate(users, hasher, username, password)
    identity = Identity(user_id=user.id, username=user.username)
    logger.info("User %s logged in", user.username)
    return {
        "token": tokens.issue(identity),
        "username": user.username,
        "name": user.name,
    }
