"""
Service layer for the check-in reward catalog
"""
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.config import settings
from src.rewards.constants import (
    MILESTONE_DAYS,
    REWARD_ALREADY_EXISTS,
    REWARD_NOT_FOUND,
)
from src.rewards.exceptions import RewardAlreadyExistsException, RewardNotFoundException
from src.rewards.models import CheckInRewardConfig
from src.rewards.schemas import CheckInRewardCreate, CheckInRewardResponse, DailyReward

logger = logging.getLogger(__name__)


def to_response(reward: CheckInRewardConfig) -> CheckInRewardResponse:
    return CheckInRewardResponse(
        id=reward.id,
        consecutive_days=reward.consecutive_days,
        diamond_reward=reward.diamond_reward,
        xp_reward=reward.xp_reward,
        is_active=reward.is_active,
        is_milestone=reward.consecutive_days in MILESTONE_DAYS,
        created_at=reward.created_at,
    )


class RewardCatalogService:

    async def list_rewards(self, db: AsyncSession, include_inactive: bool = False) -> List[CheckInRewardResponse]:
        """All catalog rows, ascending by streak length"""
        stmt = select(CheckInRewardConfig)
        if not include_inactive:
            stmt = stmt.where(CheckInRewardConfig.is_active.is_(True))
        stmt = stmt.order_by(CheckInRewardConfig.consecutive_days, CheckInRewardConfig.id)

        result = await db.execute(stmt)
        return [to_response(reward) for reward in result.scalars().all()]

    async def create_reward(self, data: CheckInRewardCreate, db: AsyncSession) -> CheckInRewardResponse:
        existing = await self._get_active_by_days(data.consecutive_days, db)
        if existing:
            raise RewardAlreadyExistsException(REWARD_ALREADY_EXISTS.format(days=data.consecutive_days))

        reward = CheckInRewardConfig(
            consecutive_days=data.consecutive_days,
            diamond_reward=data.diamond_reward,
            xp_reward=data.xp_reward,
            is_active=True,
        )
        db.add(reward)
        try:
            await db.commit()
        except IntegrityError:
            # Lost a race against another admin creating the same row
            await db.rollback()
            raise RewardAlreadyExistsException(REWARD_ALREADY_EXISTS.format(days=data.consecutive_days))

        logger.info(
            "Created check-in reward for %s days: %s diamonds, %s xp",
            reward.consecutive_days, reward.diamond_reward, reward.xp_reward,
        )
        return to_response(reward)

    async def delete_reward(self, reward_id: int, db: AsyncSession) -> CheckInRewardConfig:
        """Deactivate and soft delete; a new row can then be created for the same streak length"""
        result = await db.execute(
            select(CheckInRewardConfig).where(CheckInRewardConfig.id == reward_id)
        )
        reward = result.scalar_one_or_none()
        if not reward:
            raise RewardNotFoundException(REWARD_NOT_FOUND)

        try:
            reward.is_active = False
            reward.soft_delete()
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info("Deleted check-in reward %s (%s days)", reward.id, reward.consecutive_days)
        return reward

    async def resolve_daily_reward(self, streak: int, db: AsyncSession) -> DailyReward:
        """
        Daily payout for a streak length: the active non-milestone row with the
        largest consecutive_days <= streak, else the configured default.
        """
        result = await db.execute(
            select(CheckInRewardConfig)
            .where(
                CheckInRewardConfig.is_active.is_(True),
                CheckInRewardConfig.consecutive_days <= max(streak, 1),
                CheckInRewardConfig.consecutive_days.notin_(MILESTONE_DAYS),
            )
            .order_by(CheckInRewardConfig.consecutive_days.desc())
            .limit(1)
        )
        reward = result.scalar_one_or_none()
        if reward is None:
            return DailyReward(
                diamonds=settings.DEFAULT_CHECK_IN_DIAMONDS,
                xp=settings.DEFAULT_CHECK_IN_XP,
            )
        return DailyReward(diamonds=reward.diamond_reward, xp=reward.xp_reward, reward_id=reward.id)

    async def get_milestone_reward(self, milestone_days: int, db: AsyncSession) -> Optional[CheckInRewardConfig]:
        return await self._get_active_by_days(milestone_days, db)

    async def _get_active_by_days(self, consecutive_days: int, db: AsyncSession) -> Optional[CheckInRewardConfig]:
        result = await db.execute(
            select(CheckInRewardConfig).where(
                CheckInRewardConfig.consecutive_days == consecutive_days,
                CheckInRewardConfig.is_active.is_(True),
            )
        )
        return result.scalar_one_or_none()
