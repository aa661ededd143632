from fastapi import APIRouter, Depends

from bloglist.dependencies import get_password_hasher, get_user_repository
from bloglist.repositories import UserRepository
from bloglist.schemas import UserCreate, UserResponse
from bloglist.security import PasswordHasher
from bloglist.services import user_service

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
async def list_users(users: UserRepository = Depends(get_user_repository)):
    return await user_service.list_users(users)


@router.post("", response_model=UserResponse)
async def create_user(
    data: UserCreate,
    users: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    return await user_service.register_user(users, hasher, data)
