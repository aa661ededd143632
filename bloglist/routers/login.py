from fastapi import APIRouter, Depends

from bloglist.dependencies import get_password_hasher, get_token_service, get_user_repository
from bloglist.repositories import UserRepository
from bloglist.schemas import LoginRequest, LoginResponse
from bloglist.security import PasswordHasher
from bloglist.services import auth_service

router = APIRouter(prefix="/api/login", tags=["auth"])


@router.post("", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    users: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: auth_service.TokenService = Depends(get_token_service),
):
    return await auth_service.login(users, hasher, tokens, data.username, data.password)
