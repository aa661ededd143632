"""
Blog service: validation and authorization rules for blog mutations.

Design notes
------------
- Reads (``list_blogs``, ``get_blog``) need no token and go through the
  cache-aside layer.  Every mutation invalidates the list entry and the
  affected detail entry.
- ``create_blog`` and ``delete_blog`` always require a bearer token.
  The token is checked before the payload or the target record, so an
  anonymous caller learns nothing about either.
- ``update_blog`` needs no token unless ``require_token`` (or
  ``settings.UPDATE_REQUIRES_TOKEN``) says so.
- Ownership is an explicit ``OwnershipPolicy``.  Under ``STRICT`` only
  the creator may delete (or, when gated, update) a blog; blogs with no
  recorded creator are open to any authenticated user.
- Records leave this module as plain dicts with a public ``id`` and no
  internal key.
"""
import logging

from bloglist.cache import BLOG_LIST_KEY, blog_detail_key, cache
from bloglist.config import OwnershipPolicy, settings
from bloglist.errors import Forbidden, InvalidToken, NotFound, ValidationError
from bloglist.models import Blog
from bloglist.repositories import Repository, UserStore
from bloglist.schemas import BlogCreate, BlogUpdate
from bloglist.security import Identity
from bloglist.services.auth_service import TokenService

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("title", "url")


# ---------------------------------------------------------------------------
# Serialisation helpers
# ---------------------------------------------------------------------------

def _serialize_creator(user) -> dict | None:
    if user is None:
        return None
    return {"id": user.id, "username": user.username, "name": user.name}


def blog_to_dict(blog: Blog) -> dict:
    return {
        "id": blog.id,
        "title": blog.title,
        "author": blog.author,
        "url": blog.url,
        "likes": blog.likes,
        "user": _serialize_creator(blog.user),
    }


# ---------------------------------------------------------------------------
# Rule helpers
# ---------------------------------------------------------------------------

def _check_not_blank(fields: dict, names: tuple[str, ...]) -> None:
    blank = [name for name in names if name in fields and not (fields[name] or "").strip()]
    if blank:
        raise ValidationError(f"{' and '.join(blank)} must not be empty")


def _check_owner(blog: Blog, identity: Identity, policy: OwnershipPolicy) -> None:
    if policy is OwnershipPolicy.TOKEN_ONLY or blog.user_id is None:
        return
    if blog.user_id != identity.user_id:
        logger.warning(
            "User %s denied access to blog %s owned by %s",
            identity.username, blog.id, blog.user_id,
        )
        raise Forbidden("only the creator of a blog can modify it")


# ---------------------------------------------------------------------------
# Public service functions
# ---------------------------------------------------------------------------

async def list_blogs(blogs: Repository[Blog]) -> list[dict]:
    """Return every blog in insertion order."""
    cached = await cache.get(BLOG_LIST_KEY)
    if cached is not None:
        return cached

    data = [blog_to_dict(b) for b in await blogs.list()]
    await cache.set(BLOG_LIST_KEY, data, ttl=settings.CACHE_TTL_LIST)
    return data


async def get_blog(blogs: Repository[Blog], blog_id: str) -> dict:
    cache_key = blog_detail_key(blog_id)
    cached = await cache.get(cache_key)
    if cached is not None:
        return cached

    blog = await blogs.get(blog_id)
    if blog is None:
        raise NotFound("blog not found")
    data = blog_to_dict(blog)
    await cache.set(cache_key, data, ttl=settings.CACHE_TTL_DETAIL)
    return data


async def create_blog(
    blogs: Repository[Blog],
    users: UserStore,
    tokens: TokenService,
    data: BlogCreate,
    token: str | None,
) -> dict:
    """
    Create a blog owned by the token's user.

    Raises ``MissingToken`` / ``InvalidToken`` before looking at the
    payload, including for a well-signed token whose user no longer
    exists.  Then raises ``ValidationError`` when ``title`` or ``url`` is
    missing or blank.  ``likes`` defaults to 0.
    """
    identity = tokens.verify(token)
    if await users.get(identity.user_id) is None:
        logger.warning("Token for unknown user %s rejected", identity.user_id)
        raise InvalidToken()

    fields = data.model_dump()
    missing = [name for name in _REQUIRED_FIELDS if not (fields[name] or "").strip()]
    if missing:
        raise ValidationError(f"{' and '.join(missing)} required")

    blog = Blog(
        title=data.title,
        author=data.author,
        url=data.url,
        likes=data.likes if data.likes is not None else 0,
        user_id=identity.user_id,
    )
    blog_id = await blogs.insert(blog)
    logger.info("User %s created blog %s", identity.username, blog_id)

    await cache.invalidate_blogs()
    return blog_to_dict(await blogs.get(blog_id))


async def update_blog(
    blogs: Repository[Blog],
    tokens: TokenService,
    blog_id: str,
    data: BlogUpdate,
    token: str | None = None,
    *,
    require_token: bool | None = None,
    policy: OwnershipPolicy | None = None,
) -> dict:
    """
    Apply the fields present in *data* to an existing blog.

    Only fields explicitly set in the payload are written
    (``model_dump(exclude_unset=True)``).  Raises ``NotFound`` for an
    unknown id.
    """
    if require_token is None:
        require_token = settings.UPDATE_REQUIRES_TOKEN
    identity = tokens.verify(token) if require_token else None

    blog = await blogs.get(blog_id)
    if blog is None:
        raise NotFound("blog not found")
    if identity is not None:
        _check_owner(blog, identity, policy or settings.OWNERSHIP_POLICY)

    fields = data.model_dump(exclude_unset=True)
    _check_not_blank(fields, _REQUIRED_FIELDS)
    if fields.get("likes", 0) is None:
        raise ValidationError("likes must be a non-negative integer")

    blog = await blogs.update(blog_id, fields)
    logger.info("Updated blog %s (%s)", blog_id, ", ".join(sorted(fields)) or "no fields")

    await cache.invalidate_blogs(blog_id)
    return blog_to_dict(blog)


async def delete_blog(
    blogs: Repository[Blog],
    tokens: TokenService,
    blog_id: str,
    token: str | None,
    *,
    policy: OwnershipPolicy | None = None,
) -> None:
    """
    Remove a blog.

    Checks, in order: the token (``MissingToken`` / ``InvalidToken``),
    the record (``NotFound``), ownership (``Forbidden``).
    """
    identity = tokens.verify(token)

    blog = await blogs.get(blog_id)
    if blog is None:
        raise NotFound("blog not found")
    _check_owner(blog, identity, policy or settings.OWNERSHIP_POLICY)

    await blogs.delete(blog_id)
    logger.info("User %s deleted blog %s", identity.username, blog_id)
    await cache.invalidate_blogs(blog_id)
