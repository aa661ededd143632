"""
Per-request providers for the router layer.

Repositories are bound to the request's session from ``get_db``.  The
password hasher and token service are built from settings; tests swap
them through ``app.dependency_overrides``.
"""
from functools import lru_cache

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from bloglist.config import settings
from bloglist.database import get_db
from bloglist.repositories import BlogRepository, UserRepository
from bloglist.security import BcryptHasher, JWTSigner, PasswordHasher
from bloglist.services.auth_service import TokenService, extract_bearer


def get_blog_repository(db: AsyncSession = Depends(get_db)) -> BlogRepository:
    return BlogRepository(db)


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return BcryptHasher(rounds=settings.BCRYPT_ROUNDS)


@lru_cache
def get_token_service() -> TokenService:
    signer = JWTSigner(settings.SECRET_KEY, settings.JWT_ALGORITHM)
    return TokenService(signer, expires_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)


def bearer_token(authorization: str | None = Header(None)) -> str | None:
    """The token from ``Authorization: bearer <token>``, or None."""
    return extract_bearer(authorization)
