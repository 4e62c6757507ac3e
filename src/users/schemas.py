"""
Schemas for Users module
"""
from datetime import datetime
from typing import Optional
from pydantic import EmailStr, Field

from src.models import CustomModel
from src.users.models import UserRole


class UserCreate(CustomModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6)
    full_name: Optional[str] = None
    # Note: role is always USER and cannot be set via API


class UserUpdate(CustomModel):
    full_name: Optional[str] = Field(None, description="Họ tên đầy đủ")
    is_active: Optional[bool] = Field(None, description="Trạng thái hoạt động")
    # Note: balances and role cannot be changed here


class UserResponse(CustomModel):
    id: int
    email: str
    username: str
    full_name: Optional[str] = None
    role: UserRole
    is_active: bool
    avatar_url: Optional[str] = None
    diamonds: int = Field(..., description="Số kim cương hiện có")
    xp: int = Field(..., description="Tổng XP")
    level: int = Field(..., description="Cấp độ (tính từ XP)")
    consecutive_check_in_days: int = Field(..., description="Chuỗi điểm danh hiện tại")
    last_check_in_at: Optional[datetime] = None
    creation_count: int = 0
    equipped_frame_id: Optional[str] = None
    equipped_title_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
