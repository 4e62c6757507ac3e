from typing import Optional

from fastapi import Depends, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.exceptions import (
    InactiveAccountException,
    InsufficientPermissionsException,
    TokenMissingException,
    TokenNotValidException,
)
from src.auth.service import AuthService
from src.auth.utils import decode_access_token
from src.config import settings
from src.database import get_db
from src.users.models import User, UserRole


def get_auth_service() -> AuthService:
    """Get AuthService instance"""
    return AuthService()

def get_token_from_cookie_or_header(request: Request) -> str:
    """
    Get token from cookie (preferred) or Authorization header (fallback)
    """
    token = request.cookies.get(settings.ACCESS_TOKEN_COOKIE_NAME)

    if not token:
        auth_header = request.headers.get("Authorization")
        if auth_header and auth_header.startswith("Bearer "):
            token = auth_header.split(" ", 1)[1].strip()

    if not token:
        raise TokenMissingException()

    return token

async def resolve_user_from_token(token: str, db: AsyncSession) -> Optional[User]:
    """Decode JWT and resolve to a User or return None if invalid."""
    payload = decode_access_token(token)
    if payload is None:
        return None

    subject = payload.get("sub")
    username_claim = payload.get("username")

    stmt = None
    if subject is not None:
        try:
            stmt = select(User).where(User.id == int(subject))
        except (TypeError, ValueError):
            stmt = select(User).where(User.username == str(subject))
    elif username_claim:
        stmt = select(User).where(User.username == username_claim)

    if stmt is None:
        return None

    result = await db.execute(stmt)
    return result.scalar_one_or_none()

async def get_current_user(
    token: str = Depends(get_token_from_cookie_or_header),
    db: AsyncSession = Depends(get_db)
) -> User:
    user = await resolve_user_from_token(token, db)
    if user is None:
        raise TokenNotValidException()
    return user

async def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_active:
        raise InactiveAccountException()
    return current_user

async def get_current_admin_user(current_user: User = Depends(get_current_active_user)) -> User:
    if current_user.role != UserRole.ADMIN:
        raise InsufficientPermissionsException()
    return current_user
