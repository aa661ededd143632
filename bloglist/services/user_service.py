"""
User service: account registration and listing.

Password hashes never leave this module: every serialiser below builds
its dict field by field and ``password_hash`` is not one of them.
"""
import logging

from bloglist.errors import DuplicateUsername, ValidationError
from bloglist.models import User
from bloglist.repositories import UserStore
from bloglist.schemas import UserCreate
from bloglist.security import BCRYPT_MAX_PASSWORD_BYTES, PasswordHasher

logger = logging.getLogger(__name__)

MIN_CREDENTIAL_LENGTH = 3

SHORT_CREDENTIALS_MESSAGE = "both username and password must be at least 3 characters long"


# ---------------------------------------------------------------------------
# Serialisation helpers
# ---------------------------------------------------------------------------

def _blog_summary_to_dict(blog) -> dict:
    return {
        "id": blog.id,
        "title": blog.title,
        "author": blog.author,
        "url": blog.url,
        "likes": blog.likes,
    }


def user_to_dict(user: User, blogs: list | None = None) -> dict:
    return {
        "id": user.id,
        "username": user.username,
        "name": user.name,
        "blogs": [_blog_summary_to_dict(b) for b in blogs or []],
    }


# ---------------------------------------------------------------------------
# Public service functions
# ---------------------------------------------------------------------------

async def list_users(users: UserStore) -> list[dict]:
    """Return all users, each with a summary of the blogs they created."""
    return [user_to_dict(u, u.blogs) for u in await users.list()]


async def register_user(
    users: UserStore, hasher: PasswordHasher, data: UserCreate
) -> dict:
    """
    Create an account and return it without the password hash.

    Raises ``ValidationError`` when the username or password is shorter
    than three characters, or when the username is already taken.
    Uniqueness is checked up front; the store raises
    ``DuplicateUsername`` itself if a concurrent registration wins.
    """
    if len(data.username) < MIN_CREDENTIAL_LENGTH or len(data.password) < MIN_CREDENTIAL_LENGTH:
        raise ValidationError(SHORT_CREDENTIALS_MESSAGE)
    if len(data.password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValidationError(
            f"password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes long"
        )

    if await users.get_by_username(data.username) is not None:
        raise DuplicateUsername()

    user = User(
        username=data.username,
        name=data.name,
        password_hash=hasher.hash(data.password),
    )
    await users.insert(user)

    logger.info("Registered user %s", user.username)
    return user_to_dict(user)
