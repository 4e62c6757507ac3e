"""
Service layer for XP and levels
"""
import logging
from datetime import timedelta
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from src.config import settings
from src.leveling.constants import (
    INVALID_XP_MINUTES,
    XP_COOLDOWN,
    XP_GAIN_DESCRIPTION,
    XP_GAIN_REASON_DESCRIPTION,
    XP_INCREMENT_FAILED,
    XP_INCREMENT_SUCCESS,
)
from src.leveling.exceptions import InvalidXpAmountException, XpCooldownException, XpIncrementFailedException
from src.leveling.schemas import LevelProgressResponse, XpIncrementResponse
from src.leveling.utils import level_for_xp, level_progress
from src.transactions.constants import XP_GAIN
from src.transactions.service import TransactionService
from src.users.exceptions import UserNotFoundException
from src.users.service import UsersService
from src.utils.local_time import utc_now

logger = logging.getLogger(__name__)


class LevelingService:
    def __init__(
        self,
        transaction_service: Optional[TransactionService] = None,
        users_service: Optional[UsersService] = None,
        clock=utc_now,
    ):
        self.transaction_service = transaction_service or TransactionService()
        self.users_service = users_service or UsersService()
        self.clock = clock

    @staticmethod
    def resolve_xp_delta(minutes: int = 1) -> int:
        """XP for reported activity minutes, clamped to MAX_XP_MINUTES_PER_REQUEST"""
        if minutes is None or minutes < 1:
            raise InvalidXpAmountException(INVALID_XP_MINUTES)
        return min(minutes, settings.MAX_XP_MINUTES_PER_REQUEST) * settings.XP_PER_MINUTE

    async def get_progress(self, user_id: int, db: AsyncSession) -> LevelProgressResponse:
        user = await self.users_service.get_user_model(user_id, db, populate_existing=True)
        progress = level_progress(user.xp or 0)
        return LevelProgressResponse(
            level=progress.level,
            xp=progress.xp,
            level_start_xp=progress.level_start_xp,
            next_level_xp=progress.next_level_xp,
            xp_into_level=progress.xp_into_level,
            xp_to_next_level=progress.xp_to_next_level,
        )

    async def increment_xp(
        self,
        user_id: int,
        db: AsyncSession,
        minutes: int = 1,
        reason: Optional[str] = None,
    ) -> XpIncrementResponse:
        """
        Credit XP for reported activity time.

        The amount is always derived on the server from `minutes`, and a user
        gets at most one XP_GAIN per XP_GAIN_COOLDOWN_SECONDS. The increment is
        a single `xp = xp + delta` UPDATE logged with a zero diamond amount.
        """
        delta = self.resolve_xp_delta(minutes)
        user = await self.users_service.get_user_model(user_id, db, populate_existing=True)

        cooldown = settings.XP_GAIN_COOLDOWN_SECONDS
        since = self.clock() - timedelta(seconds=cooldown)
        if await self.transaction_service.has_entry_since(db, user.id, XP_GAIN, since):
            raise XpCooldownException(XP_COOLDOWN.format(seconds=cooldown))

        old_level = level_for_xp(user.xp or 0)
        if reason:
            description = XP_GAIN_REASON_DESCRIPTION.format(reason=reason)
        else:
            description = XP_GAIN_DESCRIPTION.format(minutes=min(minutes, settings.MAX_XP_MINUTES_PER_REQUEST))

        try:
            entry = await self.transaction_service.post_entry(
                db,
                user_id=user.id,
                amount=0,
                xp_amount=delta,
                transaction_type=XP_GAIN,
                description=description,
            )
            if entry is None:
                raise UserNotFoundException("Dữ liệu không tồn tại.")
            await db.commit()
        except UserNotFoundException:
            await db.rollback()
            raise
        except Exception as e:
            await db.rollback()
            logger.exception("Failed to add %s XP for user %s", delta, user_id)
            raise XpIncrementFailedException(XP_INCREMENT_FAILED) from e

        await db.refresh(user)
        new_level = level_for_xp(user.xp)
        if new_level > old_level:
            logger.info("User %s leveled up: %s -> %s", user.id, old_level, new_level)
        else:
            logger.debug("User %s gained %s XP", user.id, delta)

        return XpIncrementResponse(
            message=XP_INCREMENT_SUCCESS.format(xp=delta),
            xp_added=delta,
            new_xp=user.xp,
            level=new_level,
            leveled_up=new_level > old_level,
        )
