"""
Service layer for Auth module with instance methods
"""
import logging
from datetime import timedelta
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.constants import EMAIL_TAKEN, INVALID_CREDENTIALS, USERNAME_TAKEN
from src.auth.exceptions import InvalidCredentialsException, UserAlreadyExistsException
from src.auth.schemas import Token, UserCreate
from src.auth.utils import create_access_token, get_password_hash, verify_password
from src.config import settings
from src.users.models import User, UserRole

logger = logging.getLogger(__name__)


class AuthService:

    async def register_user(self, user_data: UserCreate, db: AsyncSession) -> User:
        """Register a new user with empty balances and no streak"""
        result = await db.execute(
            select(User).where(User.username == user_data.username)
        )
        if result.scalar_one_or_none():
            raise UserAlreadyExistsException(USERNAME_TAKEN)

        result = await db.execute(
            select(User).where(User.email == user_data.email)
        )
        if result.scalar_one_or_none():
            raise UserAlreadyExistsException(EMAIL_TAKEN)

        db_user = User(
            username=user_data.username,
            email=user_data.email,
            full_name=user_data.full_name,
            hashed_password=get_password_hash(user_data.password),
            role=UserRole.USER,  # Default role for new users
            avatar_url=settings.DEFAULT_AVATAR_URL or None,
            diamonds=0,
            xp=0,
            consecutive_check_in_days=0,
            streak_occurrence_id=0,
        )

        db.add(db_user)
        await db.commit()
        await db.refresh(db_user)

        logger.info("Registered user %s (%s)", db_user.id, db_user.username)
        return db_user

    async def authenticate_user(self, username: str, password: str, db: AsyncSession) -> Optional[User]:
        """Authenticate user with username and password"""
        result = await db.execute(
            select(User).where(User.username == username)
        )
        user = result.scalar_one_or_none()
        if not user:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

    async def login(self, username: str, password: str, db: AsyncSession) -> Token:
        """Login user and return an access token"""
        user = await self.authenticate_user(username, password, db)
        if not user:
            raise InvalidCredentialsException(INVALID_CREDENTIALS)

        access_token = create_access_token(
            data={"sub": str(user.id), "username": user.username},
            expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        )

        return Token(
            access_token=access_token,
            token_type="bearer",
            expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60  # Convert to seconds
        )
