"""
Service layer for Users management
"""
import logging
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from src.pagination import PaginationParams, PaginatedResponse, paginate
from src.users.exceptions import UserNotFoundException, UserValidationException
from src.users.models import User
from src.users.schemas import UserResponse, UserUpdate

logger = logging.getLogger(__name__)


class UsersService:

    async def get_user_model(self, user_id: int, db: AsyncSession, populate_existing: bool = False) -> User:
        """
        Load the User row or raise UserNotFoundException.

        populate_existing=True overwrites an instance already in the session,
        so balances changed by a guarded UPDATE are read fresh.
        """
        stmt = select(User).where(User.id == user_id)
        if populate_existing:
            stmt = stmt.execution_options(populate_existing=True)
        result = await db.execute(stmt)
        user: Optional[User] = result.scalar_one_or_none()
        if not user:
            raise UserNotFoundException(f"Không tìm thấy user với ID {user_id}")
        return user

    async def get_users(self, db: AsyncSession, pagination: PaginationParams) -> PaginatedResponse[UserResponse]:
        """Get all users with pagination"""
        count_result = await db.execute(select(func.count(User.id)))
        total = count_result.scalar() or 0

        offset = (pagination.page - 1) * pagination.size
        result = await db.execute(
            select(User).order_by(User.id).offset(offset).limit(pagination.size)
        )
        users = result.scalars().all()

        user_responses = [UserResponse.model_validate(user) for user in users]
        return paginate(user_responses, total, pagination.page, pagination.size)

    async def get_user_by_id(self, user_id: int, db: AsyncSession) -> UserResponse:
        """Get user by ID"""
        user = await self.get_user_model(user_id, db)
        return UserResponse.model_validate(user)

    async def update_user(self, user_id: int, user_data: UserUpdate, db: AsyncSession) -> UserResponse:
        """Update profile fields (never balances)"""
        user = await self.get_user_model(user_id, db)

        try:
            if user_data.full_name is not None:
                user.full_name = user_data.full_name
            if user_data.is_active is not None:
                user.is_active = user_data.is_active

            await db.commit()
            await db.refresh(user)

            return UserResponse.model_validate(user)
        except Exception as e:
            await db.rollback()
            logger.exception("Failed to update user %s", user_id)
            raise UserValidationException(f"Lỗi khi cập nhật user: {str(e)}")

    async def delete_user(self, user_id: int, db: AsyncSession) -> bool:
        """Soft delete user"""
        user = await self.get_user_model(user_id, db)

        try:
            user.soft_delete()
            await db.commit()
            return True
        except Exception as e:
            await db.rollback()
            raise UserValidationException(f"Lỗi khi xóa user: {str(e)}")
