"""
Daily check-in: once per local calendar day, streak continue/reset, reward credit.
"""
import logging
from datetime import date, datetime, timedelta
from typing import Callable, Optional

from sqlalchemy import select, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.checkin.constants import (
    ALREADY_CHECKED_IN,
    CHECK_IN_DESCRIPTION,
    CHECK_IN_FAILED,
    CHECK_IN_SUCCESS,
    CheckInState,
)
from src.checkin.exceptions import AlreadyCheckedInException, CheckInFailedException
from src.checkin.models import DailyCheckIn
from src.checkin.schemas import (
    CheckInDay,
    CheckInHistoryResponse,
    CheckInResponse,
    CheckInStatusResponse,
)
from src.rewards.service import RewardCatalogService
from src.transactions.constants import DAILY_CHECK_IN
from src.transactions.service import TransactionService
from src.users.models import User
from src.users.service import UsersService
from src.utils.local_time import ensure_utc, local_day_start_utc, local_today, to_local_date, utc_now

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def get_check_in_state(last_check_in_at: Optional[datetime], today: date) -> CheckInState:
    if last_check_in_at is None:
        return CheckInState.NEVER_CHECKED_IN

    last_date = to_local_date(last_check_in_at)
    if last_date >= today:
        return CheckInState.CHECKED_IN_TODAY
    if last_date == today - timedelta(days=1):
        return CheckInState.CHECKED_IN_YESTERDAY
    return CheckInState.MISSED_AT_LEAST_ONE_DAY


def next_streak_length(state: CheckInState, current_streak: int) -> int:
    """Streak length the next successful check-in would produce"""
    if state in (CheckInState.CHECKED_IN_YESTERDAY, CheckInState.CHECKED_IN_TODAY):
        return current_streak + 1
    return 1


class CheckInService:
    def __init__(
        self,
        clock: Clock = utc_now,
        reward_service: Optional[RewardCatalogService] = None,
        transaction_service: Optional[TransactionService] = None,
        users_service: Optional[UsersService] = None,
    ):
        self.clock = clock
        self.reward_service = reward_service or RewardCatalogService()
        self.transaction_service = transaction_service or TransactionService()
        self.users_service = users_service or UsersService()

    def now(self) -> datetime:
        return ensure_utc(self.clock())

    async def get_status(self, user_id: int, db: AsyncSession) -> CheckInStatusResponse:
        user = await self.users_service.get_user_model(user_id, db, populate_existing=True)
        state = get_check_in_state(user.last_check_in_at, local_today(self.now()))
        reward = await self.reward_service.resolve_daily_reward(
            next_streak_length(state, user.consecutive_check_in_days), db
        )

        return CheckInStatusResponse(
            has_checked_in_today=state == CheckInState.CHECKED_IN_TODAY,
            consecutive_days=user.consecutive_check_in_days,
            last_check_in_at=user.last_check_in_at,
            next_diamonds=reward.diamonds,
            next_xp=reward.xp,
        )

    async def check_in(self, user_id: int, db: AsyncSession) -> CheckInResponse:
        """
        Perform today's check-in.

        The user row is updated with a compare-and-set on the streak state that
        was read, and only if last_check_in_at is before the start of the local
        day. The streak update, the daily_check_ins row and the ledger row are
        committed together; a concurrent duplicate loses the UPDATE (0 rows) or
        the (user_id, check_in_date) unique constraint.

        Raises:
            UserNotFoundException: user row missing
            AlreadyCheckedInException: already checked in on this local day
            CheckInFailedException: persistence failure, nothing written
        """
        now = self.now()
        today = local_today(now)
        user = await self.users_service.get_user_model(user_id, db, populate_existing=True)

        state = get_check_in_state(user.last_check_in_at, today)
        if state == CheckInState.CHECKED_IN_TODAY:
            raise AlreadyCheckedInException(ALREADY_CHECKED_IN)

        new_streak = next_streak_length(state, user.consecutive_check_in_days)
        occurrence_id = user.streak_occurrence_id
        if new_streak == 1:
            # A new run starts; milestones become claimable again
            occurrence_id += 1

        reward = await self.reward_service.resolve_daily_reward(new_streak, db)

        try:
            entry = await self.transaction_service.post_entry(
                db,
                user_id=user.id,
                amount=reward.diamonds,
                xp_amount=reward.xp,
                transaction_type=DAILY_CHECK_IN,
                description=CHECK_IN_DESCRIPTION.format(day=new_streak),
                reference_key=f"checkin:{today.isoformat()}",
                conditions=(
                    User.consecutive_check_in_days == user.consecutive_check_in_days,
                    User.streak_occurrence_id == user.streak_occurrence_id,
                    or_(
                        User.last_check_in_at.is_(None),
                        User.last_check_in_at < local_day_start_utc(today),
                    ),
                ),
                values={
                    "consecutive_check_in_days": new_streak,
                    "last_check_in_at": now,
                    "streak_occurrence_id": occurrence_id,
                },
            )
            if entry is None:
                raise AlreadyCheckedInException(ALREADY_CHECKED_IN)

            db.add(DailyCheckIn(
                user_id=user.id,
                check_in_date=today,
                streak_day=new_streak,
                diamonds_awarded=reward.diamonds,
                xp_awarded=reward.xp,
            ))
            await db.flush()
            await db.commit()
        except AlreadyCheckedInException:
            await db.rollback()
            logger.info("User %s already checked in on %s", user_id, today)
            raise
        except IntegrityError:
            await db.rollback()
            logger.info("Duplicate check-in for user %s on %s rejected by constraint", user_id, today)
            raise AlreadyCheckedInException(ALREADY_CHECKED_IN)
        except Exception as e:
            await db.rollback()
            logger.exception("Check-in failed for user %s", user_id)
            raise CheckInFailedException(CHECK_IN_FAILED) from e

        await db.refresh(user)
        logger.info(
            "User %s checked in on %s: streak %s, +%s diamonds, +%s xp",
            user.id, today, new_streak, reward.diamonds, reward.xp,
        )

        return CheckInResponse(
            message=CHECK_IN_SUCCESS.format(diamonds=reward.diamonds, xp=reward.xp),
            new_total_diamonds=user.diamonds,
            new_total_xp=user.xp,
            consecutive_days=user.consecutive_check_in_days,
            diamonds_awarded=reward.diamonds,
            xp_awarded=reward.xp,
        )

    async def get_history(self, user_id: int, db: AsyncSession, days: int = 30) -> CheckInHistoryResponse:
        """Check-in calendar for the last `days` local days, oldest first"""
        user = await self.users_service.get_user_model(user_id, db, populate_existing=True)
        end_date = local_today(self.now())
        start_date = end_date - timedelta(days=days - 1)

        result = await db.execute(
            select(DailyCheckIn).where(
                DailyCheckIn.user_id == user_id,
                DailyCheckIn.check_in_date >= start_date,
                DailyCheckIn.check_in_date <= end_date,
            ).order_by(DailyCheckIn.check_in_date)
        )
        by_date = {row.check_in_date: row for row in result.scalars().all()}

        history = []
        current_date = start_date
        while current_date <= end_date:
            row = by_date.get(current_date)
            history.append(CheckInDay(
                check_in_date=current_date,
                checked_in=row is not None,
                streak_day=row.streak_day if row else 0,
                diamonds_awarded=row.diamonds_awarded if row else 0,
                xp_awarded=row.xp_awarded if row else 0,
            ))
            current_date += timedelta(days=1)

        return CheckInHistoryResponse(
            user_id=user_id,
            days=days,
            total_check_in_days=len(by_date),
            current_streak=user.consecutive_check_in_days,
            history=history,
        )
