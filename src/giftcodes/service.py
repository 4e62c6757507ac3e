"""
Service layer for gift codes
"""
import logging
from typing import Optional

from sqlalchemy import select, update, func, desc, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.giftcodes.constants import (
    GIFT_CODE_ALREADY_EXISTS,
    GIFT_CODE_ALREADY_REDEEMED,
    GIFT_CODE_EXHAUSTED,
    GIFT_CODE_EXPIRED,
    GIFT_CODE_INACTIVE,
    GIFT_CODE_NOT_FOUND,
    GIFT_CODE_REDEEM_FAILED,
    GIFT_CODE_REDEEMED,
    REDEEM_DESCRIPTION,
)
from src.giftcodes.exceptions import (
    GiftCodeAlreadyExistsException,
    GiftCodeAlreadyRedeemedException,
    GiftCodeException,
    GiftCodeNotFoundException,
    GiftCodeRedeemFailedException,
    GiftCodeUnavailableException,
)
from src.giftcodes.models import GiftCode, GiftCodeRedemption
from src.giftcodes.schemas import GiftCodeCreate, GiftCodeResponse, RedeemResponse
from src.pagination import PaginationParams, PaginatedResponse, paginate
from src.transactions.constants import GIFTCODE
from src.transactions.service import TransactionService
from src.users.exceptions import UserNotFoundException
from src.users.service import UsersService
from src.utils.local_time import ensure_utc, utc_now

logger = logging.getLogger(__name__)


def normalize_code(code: str) -> str:
    return code.strip().upper()


class GiftCodeService:
    def __init__(
        self,
        transaction_service: Optional[TransactionService] = None,
        users_service: Optional[UsersService] = None,
        clock=utc_now,
    ):
        self.transaction_service = transaction_service or TransactionService()
        self.users_service = users_service or UsersService()
        self.clock = clock

    async def _get_by_code(self, code: str, db: AsyncSession) -> Optional[GiftCode]:
        result = await db.execute(
            select(GiftCode)
            .where(GiftCode.code == normalize_code(code))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def _count_user_redemptions(self, gift_code_id: int, user_id: int, db: AsyncSession) -> int:
        result = await db.execute(
            select(func.count(GiftCodeRedemption.id)).where(
                GiftCodeRedemption.gift_code_id == gift_code_id,
                GiftCodeRedemption.user_id == user_id,
            )
        )
        return result.scalar() or 0

    async def redeem(self, user_id: int, code: str, db: AsyncSession) -> RedeemResponse:
        """
        Redeem a code for the user.

        Credits the rewards, logs GIFTCODE, records the redemption and bumps
        usage_count in one transaction. The usage_count bump is conditional on
        the global limit, and the per-user redemption number is unique, so
        concurrent redemptions cannot exceed either limit.
        """
        gift_code = await self._get_by_code(code, db)
        if gift_code is None:
            raise GiftCodeNotFoundException(GIFT_CODE_NOT_FOUND)
        if not gift_code.is_active:
            raise GiftCodeUnavailableException(GIFT_CODE_INACTIVE)
        if gift_code.expires_at is not None and ensure_utc(gift_code.expires_at) <= self.clock():
            raise GiftCodeUnavailableException(GIFT_CODE_EXPIRED)
        if gift_code.usage_limit is not None and gift_code.usage_count >= gift_code.usage_limit:
            raise GiftCodeUnavailableException(GIFT_CODE_EXHAUSTED)

        code_value = gift_code.code
        used = await self._count_user_redemptions(gift_code.id, user_id, db)
        if used >= gift_code.max_per_user:
            raise GiftCodeAlreadyRedeemedException(GIFT_CODE_ALREADY_REDEEMED)

        try:
            result = await db.execute(
                update(GiftCode)
                .where(
                    GiftCode.id == gift_code.id,
                    GiftCode.is_active.is_(True),
                    or_(GiftCode.usage_limit.is_(None), GiftCode.usage_count < GiftCode.usage_limit),
                )
                .values(usage_count=GiftCode.usage_count + 1)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                raise GiftCodeUnavailableException(GIFT_CODE_EXHAUSTED)

            entry = await self.transaction_service.post_entry(
                db,
                user_id=user_id,
                amount=gift_code.diamond_reward,
                xp_amount=gift_code.xp_reward,
                transaction_type=GIFTCODE,
                description=REDEEM_DESCRIPTION.format(code=code_value),
                reference_key=f"giftcode:{gift_code.id}:{used + 1}",
            )
            if entry is None:
                raise UserNotFoundException("Dữ liệu không tồn tại.")

            db.add(GiftCodeRedemption(
                gift_code_id=gift_code.id,
                user_id=user_id,
                redemption_number=used + 1,
                transaction_id=entry.id,
            ))
            await db.flush()
            await db.commit()
        except (GiftCodeException, UserNotFoundException):
            await db.rollback()
            raise
        except IntegrityError:
            await db.rollback()
            raise GiftCodeAlreadyRedeemedException(GIFT_CODE_ALREADY_REDEEMED)
        except Exception as e:
            await db.rollback()
            logger.exception("Redeeming gift code %s failed for user %s", code_value, user_id)
            raise GiftCodeRedeemFailedException(GIFT_CODE_REDEEM_FAILED) from e

        user = await self.users_service.get_user_model(user_id, db, populate_existing=True)
        logger.info(
            "User %s redeemed gift code %s: +%s diamonds, +%s xp",
            user_id, code_value, gift_code.diamond_reward, gift_code.xp_reward,
        )

        return RedeemResponse(
            success=True,
            message=GIFT_CODE_REDEEMED.format(diamonds=gift_code.diamond_reward, xp=gift_code.xp_reward),
            diamonds_awarded=gift_code.diamond_reward,
            xp_awarded=gift_code.xp_reward,
            new_diamonds=user.diamonds,
            new_xp=user.xp,
        )

    async def create_gift_code(self, data: GiftCodeCreate, db: AsyncSession) -> GiftCodeResponse:
        if await self._get_by_code(data.code, db):
            raise GiftCodeAlreadyExistsException(GIFT_CODE_ALREADY_EXISTS.format(code=data.code))

        gift_code = GiftCode(
            code=data.code,
            diamond_reward=data.diamond_reward,
            xp_reward=data.xp_reward,
            usage_limit=data.usage_limit,
            max_per_user=data.max_per_user,
            expires_at=data.expires_at,
            is_active=True,
        )
        db.add(gift_code)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise GiftCodeAlreadyExistsException(GIFT_CODE_ALREADY_EXISTS.format(code=data.code))

        logger.info("Created gift code %s", gift_code.code)
        return GiftCodeResponse.model_validate(gift_code)

    async def list_gift_codes(self, db: AsyncSession, pagination: PaginationParams) -> PaginatedResponse[GiftCodeResponse]:
        total = (await db.execute(select(func.count(GiftCode.id)))).scalar() or 0
        result = await db.execute(
            select(GiftCode)
            .order_by(desc(GiftCode.created_at), desc(GiftCode.id))
            .offset(pagination.offset)
            .limit(pagination.size)
        )
        items = [GiftCodeResponse.model_validate(code) for code in result.scalars().all()]
        return paginate(items, total, pagination.page, pagination.size)

    async def deactivate_gift_code(self, gift_code_id: int, db: AsyncSession) -> GiftCode:
        result = await db.execute(select(GiftCode).where(GiftCode.id == gift_code_id))
        gift_code = result.scalar_one_or_none()
        if not gift_code:
            raise GiftCodeNotFoundException(GIFT_CODE_NOT_FOUND)

        try:
            gift_code.is_active = False
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info("Deactivated gift code %s", gift_code.code)
        return gift_code
