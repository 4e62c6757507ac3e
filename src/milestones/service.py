"""
Service layer for streak milestone bonuses (7/14/30 days)
"""
import logging
from typing import Any, Optional, Set

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.milestones.constants import (
    ALREADY_CLAIMED,
    CLAIM_DESCRIPTION,
    CLAIM_FAILED,
    CLAIM_SUCCESS,
    INVALID_MILESTONE,
    REWARD_NOT_CONFIGURED,
    STREAK_NOT_REACHED,
)
from src.milestones.exceptions import (
    InvalidMilestoneException,
    MilestoneAlreadyClaimedException,
    MilestoneClaimFailedException,
    MilestoneException,
    MilestoneRewardNotConfiguredException,
    StreakNotReachedException,
)
from src.milestones.models import MilestoneClaim
from src.milestones.schemas import MilestoneClaimResponse, MilestoneStatus, MilestoneStatusResponse
from src.rewards.constants import MILESTONE_DAYS
from src.rewards.service import RewardCatalogService
from src.transactions.constants import milestone_transaction_type
from src.transactions.service import TransactionService
from src.users.models import User
from src.users.service import UsersService

logger = logging.getLogger(__name__)


def is_valid_milestone(value: Any) -> bool:
    """Only the exact integers in MILESTONE_DAYS; bools and numeric strings are rejected"""
    return isinstance(value, int) and not isinstance(value, bool) and value in MILESTONE_DAYS


class MilestoneService:
    def __init__(
        self,
        reward_service: Optional[RewardCatalogService] = None,
        transaction_service: Optional[TransactionService] = None,
        users_service: Optional[UsersService] = None,
    ):
        self.reward_service = reward_service or RewardCatalogService()
        self.transaction_service = transaction_service or TransactionService()
        self.users_service = users_service or UsersService()

    async def _claimed_milestones(self, user: User, db: AsyncSession) -> Set[int]:
        """Milestones already claimed in the user's current streak occurrence"""
        result = await db.execute(
            select(MilestoneClaim.milestone_days).where(
                MilestoneClaim.user_id == user.id,
                MilestoneClaim.streak_occurrence_id == user.streak_occurrence_id,
            )
        )
        return set(result.scalars().all())

    async def claim(self, user_id: int, milestone_days: Any, db: AsyncSession) -> MilestoneClaimResponse:
        """
        Grant the one-time bonus for reaching `milestone_days`.

        Checked in order: allowed threshold, streak reached, reward configured,
        not yet claimed for the current streak occurrence.
        """
        if not is_valid_milestone(milestone_days):
            raise InvalidMilestoneException(INVALID_MILESTONE)

        user = await self.users_service.get_user_model(user_id, db, populate_existing=True)

        if user.consecutive_check_in_days < milestone_days:
            raise StreakNotReachedException(STREAK_NOT_REACHED.format(days=milestone_days))

        reward = await self.reward_service.get_milestone_reward(milestone_days, db)
        if reward is None:
            raise MilestoneRewardNotConfiguredException(REWARD_NOT_CONFIGURED.format(days=milestone_days))

        occurrence_id = user.streak_occurrence_id
        if milestone_days in await self._claimed_milestones(user, db):
            raise MilestoneAlreadyClaimedException(ALREADY_CLAIMED)

        try:
            entry = await self.transaction_service.post_entry(
                db,
                user_id=user.id,
                amount=reward.diamond_reward,
                xp_amount=reward.xp_reward,
                transaction_type=milestone_transaction_type(milestone_days),
                description=CLAIM_DESCRIPTION.format(days=milestone_days),
                reference_key=f"milestone:{milestone_days}:{occurrence_id}",
                conditions=(
                    User.streak_occurrence_id == occurrence_id,
                    User.consecutive_check_in_days >= milestone_days,
                ),
            )
            if entry is None:
                # Streak was reset between the read and the write
                raise StreakNotReachedException(STREAK_NOT_REACHED.format(days=milestone_days))

            db.add(MilestoneClaim(
                user_id=user.id,
                milestone_days=milestone_days,
                streak_occurrence_id=occurrence_id,
                transaction_id=entry.id,
            ))
            await db.flush()
            await db.commit()
        except MilestoneException:
            await db.rollback()
            raise
        except IntegrityError:
            await db.rollback()
            logger.info(
                "Duplicate milestone %s claim for user %s (occurrence %s) rejected by constraint",
                milestone_days, user_id, occurrence_id,
            )
            raise MilestoneAlreadyClaimedException(ALREADY_CLAIMED)
        except Exception as e:
            await db.rollback()
            logger.exception("Milestone %s claim failed for user %s", milestone_days, user_id)
            raise MilestoneClaimFailedException(CLAIM_FAILED) from e

        await db.refresh(user)
        logger.info(
            "User %s claimed %s-day milestone (occurrence %s): +%s diamonds, +%s xp",
            user.id, milestone_days, occurrence_id, reward.diamond_reward, reward.xp_reward,
        )

        return MilestoneClaimResponse(
            success=True,
            message=CLAIM_SUCCESS.format(diamonds=reward.diamond_reward, xp=reward.xp_reward),
            new_diamonds=user.diamonds,
            new_xp=user.xp,
        )

    async def get_status(self, user_id: int, db: AsyncSession) -> MilestoneStatusResponse:
        user = await self.users_service.get_user_model(user_id, db, populate_existing=True)
        claimed = await self._claimed_milestones(user, db)

        milestones = []
        for days in MILESTONE_DAYS:
            reward = await self.reward_service.get_milestone_reward(days, db)
            milestones.append(MilestoneStatus(
                milestone_days=days,
                reached=user.consecutive_check_in_days >= days,
                claimed=days in claimed,
                configured=reward is not None,
                diamond_reward=reward.diamond_reward if reward else 0,
                xp_reward=reward.xp_reward if reward else 0,
            ))

        return MilestoneStatusResponse(
            consecutive_days=user.consecutive_check_in_days,
            milestones=milestones,
        )
