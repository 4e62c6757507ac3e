"""
Dependencies for Users module
"""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.database import get_db
from src.users.exceptions import UserNotFoundException, user_not_found_exception
from src.users.models import User
from src.users.service import UsersService


def get_users_service() -> UsersService:
    """Dependency to get UsersService instance"""
    return UsersService()


async def valid_user_id(
    user_id: int,
    service: UsersService = Depends(get_users_service),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the `user_id` path parameter to a User, 404 otherwise"""
    try:
        return await service.get_user_model(user_id, db)
    except UserNotFoundException as e:
        raise user_not_found_exception(str(e))
