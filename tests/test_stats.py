"""
Statistics engine tests: pure functions, no database or HTTP.
"""
import random

import pytest

from bloglist import stats

BLOGS = [
    {"title": "React patterns", "author": "Michael Chan", "url": "https://reactpatterns.com/", "likes": 7},
    {"title": "Go To Statement Considered Harmful", "author": "Edsger W. Dijkstra", "url": "http://example.com/goto", "likes": 5},
    {"title": "Canonical string reduction", "author": "Edsger W. Dijkstra", "url": "http://example.com/ewd808", "likes": 12},
    {"title": "First class tests", "author": "Robert C. Martin", "url": "http://example.com/fct", "likes": 10},
    {"title": "TDD harms architecture", "author": "Robert C. Martin", "url": "http://example.com/tdd", "likes": 0},
    {"title": "Type wars", "author": "Robert C. Martin", "url": "http://example.com/types", "likes": 2},
]


def _blog(author: str, likes: int = 0, title: str = "t") -> dict:
    return {"title": title, "author": author, "url": "u", "likes": likes}


# ---------------------------------------------------------------------------
# dummy / total_likes
# ---------------------------------------------------------------------------

def test_dummy_returns_one():
    assert stats.dummy([]) == 1
    assert stats.dummy(BLOGS) == 1


def test_total_likes_of_empty_list_is_zero():
    assert stats.total_likes([]) == 0


def test_total_likes_of_single_blog():
    assert stats.total_likes([BLOGS[0]]) == 7


def test_total_likes_of_many_blogs():
    assert stats.total_likes(BLOGS) == 36


def test_total_likes_ignores_order():
    shuffled = BLOGS[:]
    random.Random(1234).shuffle(shuffled)
    assert stats.total_likes(shuffled) == stats.total_likes(BLOGS)


# ---------------------------------------------------------------------------
# favorite_blog
# ---------------------------------------------------------------------------

def test_favorite_blog_unique_maximum():
    assert stats.favorite_blog(BLOGS) == {
        "title": "Canonical string reduction",
        "author": "Edsger W. Dijkstra",
        "likes": 12,
    }


def test_favorite_blog_tie_goes_to_first():
    blogs = [_blog("A", 3, "first"), _blog("B", 9, "second"), _blog("C", 9, "third")]
    assert stats.favorite_blog(blogs)["title"] == "second"


def test_favorite_blog_only_returns_summary_fields():
    assert set(stats.favorite_blog(BLOGS)) == {"title", "author", "likes"}


def test_favorite_blog_of_empty_list_raises():
    with pytest.raises(stats.EmptyInputError):
        stats.favorite_blog([])


# ---------------------------------------------------------------------------
# most_blogs / most_likes
# ---------------------------------------------------------------------------

def test_most_blogs():
    assert stats.most_blogs(BLOGS) == {"author": "Robert C. Martin", "blogs": 3}


def test_most_blogs_small():
    blogs = [_blog("A"), _blog("B"), _blog("A")]
    assert stats.most_blogs(blogs) == {"author": "A", "blogs": 2}


def test_most_blogs_tie_goes_to_first_seen_author():
    blogs = [_blog("B"), _blog("A"), _blog("A"), _blog("B")]
    assert stats.most_blogs(blogs) == {"author": "B", "blogs": 2}


def test_most_blogs_of_empty_list_raises():
    with pytest.raises(stats.EmptyInputError):
        stats.most_blogs([])


def test_most_likes():
    assert stats.most_likes(BLOGS) == {"author": "Edsger W. Dijkstra", "likes": 17}


def test_most_likes_sums_per_author():
    blogs = [_blog("A", 5), _blog("B", 7), _blog("A", 3)]
    assert stats.most_likes(blogs) == {"author": "A", "likes": 8}


def test_most_likes_tie_goes_to_first_seen_author():
    blogs = [_blog("A", 4), _blog("B", 10), _blog("A", 6)]
    assert stats.most_likes(blogs) == {"author": "A", "likes": 10}


def test_most_likes_of_empty_list_raises():
    with pytest.raises(stats.EmptyInputError):
        stats.most_likes([])


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------

def test_group_reduce_keeps_first_seen_order_and_is_read_only():
    groups = stats.group_reduce(
        [_blog("B", 1), _blog("A", 2), _blog("B", 3)],
        key=lambda b: b["author"],
        value=lambda b: b["likes"],
        combine=lambda acc, n: acc + n,
        initial=0,
    )
    assert list(groups.items()) == [("B", 4), ("A", 2)]
    with pytest.raises(TypeError):
        groups["C"] = 1


def test_pick_extremal_prefers_earliest_key():
    assert stats.pick_extremal({"x": 1, "y": 5, "z": 5}) == ("y", 5)


def test_pick_extremal_of_empty_mapping_raises():
    with pytest.raises(stats.EmptyInputError):
        stats.pick_extremal({})


def test_empty_input_error_is_a_value_error():
    assert issubclass(stats.EmptyInputError, ValueError)
