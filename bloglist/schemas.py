from pydantic import BaseModel, ConfigDict, Field


# --- Blog ---

class BlogCreate(BaseModel):
    # title/url are checked by the service so a missing field is reported
    # only after the bearer token has been accepted.
    title: str | None = None
    author: str | None = None
    url: str | None = None
    likes: int | None = Field(None, ge=0)


class BlogUpdate(BaseModel):
    title: str | None = None
    author: str | None = None
    url: str | None = None
    likes: int | None = Field(None, ge=0)


class CreatorResponse(BaseModel):
    id: str
    username: str
    name: str | None = None


class BlogResponse(BaseModel):
    id: str
    title: str
    author: str | None
    url: str
    likes: int
    user: CreatorResponse | None = None
    model_config = ConfigDict(from_attributes=True)


class BlogSummary(BaseModel):
    id: str
    title: str
    author: str | None
    url: str
    likes: int


# --- User ---

class UserCreate(BaseModel):
    username: str
    name: str | None = None
    password: str


class UserResponse(BaseModel):
    id: str
    username: str
    name: str | None
    blogs: list[BlogSummary] = []


# --- Login ---

class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    token: str
    username: str
    name: str | None


# --- Statistics ---

class FavoriteBlog(BaseModel):
    title: str
    author: str | None
    likes: int


class AuthorBlogCount(BaseModel):
    author: str | None
    blogs: int


class AuthorLikes(BaseModel):
    author: str | None
    likes: int


class StatsResponse(BaseModel):
    total_blogs: int
    total_likes: int
    favorite_blog: FavoriteBlog | None
    most_blogs: AuthorBlogCount | None
    most_likes: AuthorLikes | None
    cache_info: dict = {}
