from __future__ import annotations

import uuid
from typing import List, Optional

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bloglist.database import Base


def _public_id() -> str:
    return uuid.uuid4().hex


# ---------------------------------------------------------------------------
# Both tables carry two keys:
#   pk -- internal autoincrement key, fixes insertion order, never serialised
#   id -- opaque public identifier exposed by the API
# ---------------------------------------------------------------------------


class User(Base):
    __tablename__ = "users"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(32), unique=True, nullable=False, default=_public_id)
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    name: Mapped[Optional[str]] = mapped_column(String(150), nullable=True)
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)

    # lazy="noload" keeps loading explicit; repositories use selectinload.
    blogs: Mapped[List["Blog"]] = relationship(
        "Blog", back_populates="user", lazy="noload", order_by="Blog.pk"
    )


class Blog(Base):
    __tablename__ = "blogs"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(32), unique=True, nullable=False, default=_public_id)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    author: Mapped[Optional[str]] = mapped_column(String(150), nullable=True)
    url: Mapped[str] = mapped_column(String(2048), nullable=False)
    likes: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Weak reference to the creating user.
    user_id: Mapped[Optional[str]] = mapped_column(
        String(32), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )

    user: Mapped[Optional["User"]] = relationship("User", back_populates="blogs", lazy="noload")
