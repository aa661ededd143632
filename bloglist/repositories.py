"""
Store abstraction for blogs and users.

Services depend on the ``Repository`` and ``UserStore`` protocols
only.  The SQLAlchemy implementations below wrap the request's
``AsyncSession``: they flush but never commit, so the transaction
boundary stays with the ``get_db`` dependency.  Lists come back in
insertion order (``pk``).
"""
from __future__ import annotations

from typing import Any, Generic, Protocol, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload, selectinload

from bloglist.errors import DuplicateUsername
from bloglist.models import Blog, User

T = TypeVar("T")


class Repository(Protocol[T]):
    async def get(self, id: str) -> T | None: ...

    async def list(self) -> list[T]: ...

    async def insert(self, entity: T) -> str: ...

    async def update(self, id: str, fields: dict[str, Any]) -> T | None: ...

    async def delete(self, id: str) -> bool: ...


class UserStore(Repository[User], Protocol):
    async def get_by_username(self, username: str) -> User | None: ...


class SqlAlchemyRepository(Generic[T]):
    model: type
    load_options: tuple = ()

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    def _select(self):
        # populate_existing: instances already in the identity map get
        # their eager-loaded relationships filled in as well.
        return (
            select(self.model)
            .options(*self.load_options)
            .execution_options(populate_existing=True)
        )

    async def get(self, id: str) -> T | None:
        result = await self.db.execute(self._select().where(self.model.id == id))
        return result.unique().scalar_one_or_none()

    async def list(self) -> list[T]:
        result = await self.db.execute(self._select().order_by(self.model.pk))
        return list(result.unique().scalars().all())

    async def insert(self, entity: T) -> str:
        self.db.add(entity)
        await self.db.flush()
        return entity.id

    async def update(self, id: str, fields: dict[str, Any]) -> T | None:
        entity = await self.get(id)
        if entity is None:
            return None
        for field, value in fields.items():
            setattr(entity, field, value)
        await self.db.flush()
        return entity

    async def delete(self, id: str) -> bool:
        result = await self.db.execute(select(self.model).where(self.model.id == id))
        entity = result.scalar_one_or_none()
        if entity is None:
            return False
        await self.db.delete(entity)
        await self.db.flush()
        return True


class BlogRepository(SqlAlchemyRepository[Blog]):
    model = Blog
    load_options = (joinedload(Blog.user),)


class UserRepository(SqlAlchemyRepository[User]):
    model = User
    load_options = (selectinload(User.blogs),)

    async def insert(self, entity: User) -> str:
        # The unique index on username also catches a concurrent registration.
        try:
            return await super().insert(entity)
        except IntegrityError as exc:
            raise DuplicateUsername() from exc

    async def get_by_username(self, username: str) -> User | None:
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()
