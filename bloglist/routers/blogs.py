from fastapi import APIRouter, Depends

from bloglist.dependencies import (
    bearer_token,
    get_blog_repository,
    get_token_service,
    get_user_repository,
)
from bloglist.repositories import BlogRepository, UserRepository
from bloglist.schemas import BlogCreate, BlogResponse, BlogUpdate
from bloglist.services import blog_service
from bloglist.services.auth_service import TokenService

router = APIRouter(prefix="/api/blogs", tags=["blogs"])


@router.get("", response_model=list[BlogResponse])
async def list_blogs(blogs: BlogRepository = Depends(get_blog_repository)):
    return await blog_service.list_blogs(blogs)


@router.get("/{blog_id}", response_model=BlogResponse)
async def get_blog(blog_id: str, blogs: BlogRepository = Depends(get_blog_repository)):
    return await blog_service.get_blog(blogs, blog_id)


@router.post("", response_model=BlogResponse)
async def create_blog(
    data: BlogCreate,
    token: str | None = Depends(bearer_token),
    blogs: BlogRepository = Depends(get_blog_repository),
    users: UserRepository = Depends(get_user_repository),
    tokens: TokenService = Depends(get_token_service),
):
    return await blog_service.create_blog(blogs, users, tokens, data, token)


@router.put("/{blog_id}", response_model=BlogResponse)
async def update_blog(
    blog_id: str,
    data: BlogUpdate,
    token: str | None = Depends(bearer_token),
    blogs: BlogRepository = Depends(get_blog_repository),
    tokens: TokenService = Depends(get_token_service),
):
    return await blog_service.update_blog(blogs, tokens, blog_id, data, token)


@router.delete("/{blog_id}", status_code=204)
async def delete_blog(
    blog_id: str,
    token: str | None = Depends(bearer_token),
    blogs: BlogRepository = Depends(get_blog_repository),
    tokens: TokenService = Depends(get_token_service),
):
    await blog_service.delete_blog(blogs, tokens, blog_id, token)
