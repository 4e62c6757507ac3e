"""
Router for Users module
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.dependencies import get_current_active_user, get_current_admin_user
from src.database import get_db
from src.pagination import PaginationParams, PaginatedResponse
from src.users.dependencies import get_users_service, valid_user_id
from src.users.exceptions import (
    UserNotFoundException,
    UserValidationException,
    user_not_found_exception,
    user_validation_exception
)
from src.users.models import User
from src.users.schemas import UserResponse, UserUpdate
from src.users.service import UsersService

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me", response_model=UserResponse)
async def get_my_profile(current_user: User = Depends(get_current_active_user)):
    """
    Lấy thông tin của chính mình
    - Số kim cương, XP, cấp độ (tính từ XP) và chuỗi điểm danh
    """
    return current_user


@router.get("/", response_model=PaginatedResponse[UserResponse])
async def get_users(
    pagination: PaginationParams = Depends(),
    current_user: User = Depends(get_current_admin_user),
    service: UsersService = Depends(get_users_service),
    db: AsyncSession = Depends(get_db)
):
    """
    Lấy danh sách users với phân trang
    - Chỉ admin mới có thể xem danh sách users
    - **page**: Số trang (mặc định: 1)
    - **size**: Số bản ghi mỗi trang (mặc định: 10, tối đa: 100)
    """
    try:
        return await service.get_users(db, pagination)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Lỗi khi lấy danh sách users: {str(e)}")


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    current_user: User = Depends(get_current_active_user),
    service: UsersService = Depends(get_users_service),
    db: AsyncSession = Depends(get_db)
):
    """
    Lấy thông tin user theo ID
    - Chỉ admin hoặc chính user đó mới có thể xem
    """
    if current_user.role.value != "admin" and current_user.id != user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Bạn chỉ có thể xem thông tin của chính mình"
        )

    try:
        return await service.get_user_by_id(user_id, db)
    except UserNotFoundException as e:
        raise user_not_found_exception(str(e))


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_data: UserUpdate,
    current_user: User = Depends(get_current_admin_user),
    user: User = Depends(valid_user_id),
    service: UsersService = Depends(get_users_service),
    db: AsyncSession = Depends(get_db)
):
    """
    Cập nhật thông tin user (chỉ admin)
    - **full_name**: Họ tên (optional)
    - **is_active**: Trạng thái hoạt động (optional)
    - Số dư kim cương/XP không thể sửa ở đây, dùng API điều chỉnh số dư
    """
    try:
        return await service.update_user(user.id, user_data, db)
    except UserValidationException as e:
        raise user_validation_exception(str(e))


@router.delete("/{user_id}")
async def delete_user(
    current_user: User = Depends(get_current_admin_user),
    user: User = Depends(valid_user_id),
    service: UsersService = Depends(get_users_service),
    db: AsyncSession = Depends(get_db)
):
    """Xóa user (soft delete, chỉ admin)"""
    if user.id == current_user.id:
        raise HTTPException(status_code=400, detail="Không thể tự xóa tài khoản của mình")

    try:
        await service.delete_user(user.id, db)
        return {"message": f"Đã xóa user với ID {user.id}"}
    except UserValidationException as e:
        raise user_validation_exception(str(e))
