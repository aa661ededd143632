"""
Password hashing and token signing capabilities.

The services only see two narrow protocols:

- ``PasswordHasher`` turns a plaintext password into an opaque digest
  and checks a plaintext against a digest.
- ``TokenSigner`` turns a claims dict into an opaque string and back,
  raising ``InvalidToken`` for anything it cannot verify.

``BcryptHasher`` and ``JWTSigner`` are the production implementations
(bcrypt and PyJWT respectively).  Swapping either only touches the
dependency providers in ``bloglist.dependencies``.
"""
from dataclasses import dataclass
from typing import Any, Protocol

import bcrypt
import jwt

from bloglist.errors import InvalidToken

# bcrypt only looks at the first 72 bytes of a password and current
# releases reject anything longer.
BCRYPT_MAX_PASSWORD_BYTES = 72


@dataclass(frozen=True)
class Identity:
    """The authenticated user behind a login or a verified token."""

    user_id: str
    username: str


class PasswordHasher(Protocol):
    def hash(self, plain: str) -> str: ...

    def verify(self, plain: str, digest: str) -> bool: ...


class TokenSigner(Protocol):
    def sign(self, claims: dict[str, Any]) -> str: ...

    def verify(self, token: str) -> dict[str, Any]: ...


class BcryptHasher:
    def __init__(self, rounds: int = 10) -> None:
        self.rounds = rounds

    def hash(self, plain: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(plain.encode("utf-8"), salt).decode("utf-8")

    def verify(self, plain: str, digest: str) -> bool:
        try:
            return bcrypt.checkpw(plain.encode("utf-8"), digest.encode("utf-8"))
        except ValueError:
            # Malformed digest or over-long password: never a match.
            return False


class JWTSigner:
    """HMAC-signed JSON Web Tokens via PyJWT."""

    def __init__(self, secret: str, algorithm: str = "HS256") -> None:
        self.secret = secret
        self.algorithm = algorithm

    def sign(self, claims: dict[str, Any]) -> str:
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> dict[str, Any]:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as exc:
            raise InvalidToken("token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidToken() from exc
