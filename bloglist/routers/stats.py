from fastapi import APIRouter, Depends

from bloglist import stats
from bloglist.cache import cache
from bloglist.dependencies import get_blog_repository
from bloglist.repositories import BlogRepository
from bloglist.schemas import StatsResponse
from bloglist.services import blog_service

router = APIRouter(prefix="/api/stats", tags=["stats"])


def _or_none(statistic, blogs: list[dict]) -> dict | None:
    try:
        return statistic(blogs)
    except stats.EmptyInputError:
        return None


@router.get("", response_model=StatsResponse)
async def get_stats(blogs: BlogRepository = Depends(get_blog_repository)):
    records = await blog_service.list_blogs(blogs)

    return StatsResponse(
        total_blogs=len(records),
        total_likes=stats.total_likes(records),
        favorite_blog=_or_none(stats.favorite_blog, records),
        most_blogs=_or_none(stats.most_blogs, records),
        most_likes=_or_none(stats.most_likes, records),
        cache_info=cache.stats,
    )
