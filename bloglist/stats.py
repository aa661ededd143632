"""
Statistics over an in-memory collection of blog records.

Every function takes a sequence of blog mappings (``title``, ``author``,
``likes``, ...) and returns a derived value without touching the store.
Callers pass an already-materialised list; nothing here copies or locks.

The grouping statistics share one shape: fold the records into an
insertion-ordered mapping ``key -> accumulated value`` (``group_reduce``)
and then select the extremal entry (``pick_extremal``).  Ties always go
to the entry that was inserted first, i.e. the author who appears
earliest in the input.
"""
from collections.abc import Callable, Hashable, Mapping, Sequence
from operator import itemgetter
from types import MappingProxyType
from typing import Any

Blog = Mapping[str, Any]


class EmptyInputError(ValueError):
    """Raised when a statistic has no meaningful value for an empty collection."""


def group_reduce(
    blogs: Sequence[Blog],
    key: Callable[[Blog], Hashable],
    value: Callable[[Blog], Any],
    combine: Callable[[Any, Any], Any],
    initial: Any,
) -> Mapping[Hashable, Any]:
    """
    Fold *blogs* into a read-only mapping of ``key(blog)`` to the
    combined ``value(blog)`` of every record in that group.

    Keys keep the order in which they were first seen.
    """
    groups: dict[Hashable, Any] = {}
    for blog in blogs:
        k = key(blog)
        groups[k] = combine(groups.get(k, initial), value(blog))
    return MappingProxyType(groups)


def pick_extremal(groups: Mapping[Hashable, Any]) -> tuple[Hashable, Any]:
    """
    Return the ``(key, value)`` pair with the largest value.

    ``max`` keeps the first maximal item it meets, so on a tie the key
    inserted earliest wins.
    """
    if not groups:
        raise EmptyInputError("no groups to select from")
    return max(groups.items(), key=itemgetter(1))


def _require(blogs: Sequence[Blog], what: str) -> None:
    if not blogs:
        raise EmptyInputError(f"{what} is undefined for an empty list of blogs")


# ---------------------------------------------------------------------------
# Public statistics
# ---------------------------------------------------------------------------

def dummy(blogs: Sequence[Blog]) -> int:
    return 1


def total_likes(blogs: Sequence[Blog]) -> int:
    """Sum of ``likes`` across all records (0 for an empty list)."""
    return sum(blog["likes"] for blog in blogs)


def favorite_blog(blogs: Sequence[Blog]) -> dict:
    """
    Return ``{title, author, likes}`` of the most liked blog.

    The first blog holding the maximum wins a tie.  Raises
    ``EmptyInputError`` when *blogs* is empty.
    """
    _require(blogs, "favorite blog")
    favorite = max(blogs, key=itemgetter("likes"))
    return {
        "title": favorite["title"],
        "author": favorite["author"],
        "likes": favorite["likes"],
    }


def most_blogs(blogs: Sequence[Blog]) -> dict:
    """Return ``{author, blogs}`` for the author with the most records."""
    _require(blogs, "most blogs")
    counts = group_reduce(
        blogs,
        key=itemgetter("author"),
        value=lambda _: 1,
        combine=lambda acc, n: acc + n,
        initial=0,
    )
    author, count = pick_extremal(counts)
    return {"author": author, "blogs": count}


def most_likes(blogs: Sequence[Blog]) -> dict:
    """Return ``{author, likes}`` for the author with the highest like total."""
    _require(blogs, "most likes")
    sums = group_reduce(
        blogs,
        key=itemgetter("author"),
        value=itemgetter("likes"),
        combine=lambda acc, n: acc + n,
        initial=0,
    )
    author, likes = pick_extremal(sums)
    return {"author": author, "likes": likes}
