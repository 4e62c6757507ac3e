"""
Router for Auth module with DI pattern
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.constants import LOGOUT_SUCCESSFUL
from src.auth.dependencies import get_auth_service, get_current_active_user
from src.auth.schemas import AuthErrorResponse, LoginRequest, Token, UserCreate, UserResponse
from src.auth.service import AuthService
from src.config import settings
from src.database import get_db
from src.users.models import User

router = APIRouter(prefix="/auth", tags=["Authentication"])

@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    service: AuthService = Depends(get_auth_service),
    db: AsyncSession = Depends(get_db)
):
    """Đăng ký tài khoản mới (0 kim cương, 0 XP, chưa có chuỗi điểm danh)"""
    return await service.register_user(user_data, db)

@router.post("/login", response_model=Token)
async def login(
    response: Response,
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service),
    db: AsyncSession = Depends(get_db)
):
    """Đăng nhập, trả về access token và set cookie"""
    token_data = await service.login(login_data.username, login_data.password, db)

    response.set_cookie(
        key=settings.ACCESS_TOKEN_COOKIE_NAME,
        value=token_data.access_token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=settings.COOKIE_HTTPONLY,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE
    )

    return token_data

@router.post("/logout")
async def logout(response: Response):
    """Xoá cookie đăng nhập"""
    response.delete_cookie(settings.ACCESS_TOKEN_COOKIE_NAME)
    return {"message": LOGOUT_SUCCESSFUL}

@router.get("/me", response_model=UserResponse, responses={401: {"model": AuthErrorResponse}})
async def get_me(current_user: User = Depends(get_current_active_user)):
    """Thông tin người dùng hiện tại, kèm số dư và cấp độ"""
    return current_user
