"""
Service layer for cosmetics: unlock rules, shop purchases, equipping
"""
import logging
from typing import List, Optional, Set, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.cosmetics.constants import (
    ALL_COSMETICS,
    ALREADY_OWNED,
    EQUIP_SUCCESS,
    ITEM_LOCKED,
    ITEM_NOT_FOR_SALE,
    ITEM_NOT_FOUND,
    LEVEL_REQUIRED,
    NOT_ENOUGH_DIAMONDS,
    PURCHASE_DESCRIPTION,
    PURCHASE_FAILED,
    PURCHASE_SUCCESS,
    CosmeticItem,
    CosmeticType,
    UnlockCondition,
    get_cosmetic,
)
from src.cosmetics.exceptions import (
    CosmeticAlreadyOwnedException,
    CosmeticException,
    CosmeticLockedException,
    CosmeticNotForSaleException,
    CosmeticNotFoundException,
    CosmeticNotOwnedException,
    NotEnoughDiamondsException,
    PurchaseFailedException,
)
from src.cosmetics.models import UserInventoryItem
from src.cosmetics.schemas import (
    CosmeticItemResponse,
    CosmeticListResponse,
    EquipResponse,
    PurchaseResponse,
    UnlockConditionResponse,
)
from src.transactions.constants import SHOP_PURCHASE
from src.transactions.service import TransactionService
from src.users.models import User
from src.users.service import UsersService

logger = logging.getLogger(__name__)


def evaluate_unlock(condition: Optional[UnlockCondition], user: User) -> Tuple[bool, List[str]]:
    """
    Check an unlock condition against a user.

    Returns (unlocked, missing) where `missing` names every requirement that
    is not met yet, e.g. ["level 5", "streak 7"]. No condition means unlocked.
    """
    if condition is None:
        return True, []

    current = {
        "level": user.level,
        "xp": user.xp or 0,
        "diamonds": user.diamonds or 0,
        "creation_count": user.creation_count or 0,
        "streak": user.consecutive_check_in_days or 0,
    }
    missing = []
    for field, value in current.items():
        required = getattr(condition, field)
        if required is not None and value < required:
            missing.append(f"{field} {required}")
    return not missing, missing


class CosmeticService:
    def __init__(
        self,
        transaction_service: Optional[TransactionService] = None,
        users_service: Optional[UsersService] = None,
    ):
        self.transaction_service = transaction_service or TransactionService()
        self.users_service = users_service or UsersService()

    async def _owned_item_ids(self, user_id: int, db: AsyncSession) -> Set[str]:
        result = await db.execute(
            select(UserInventoryItem.item_id).where(UserInventoryItem.user_id == user_id)
        )
        return set(result.scalars().all())

    def _get_item(self, item_id: str) -> CosmeticItem:
        item = get_cosmetic(item_id)
        if item is None:
            raise CosmeticNotFoundException(ITEM_NOT_FOUND)
        return item

    async def list_cosmetics(self, user_id: int, db: AsyncSession) -> CosmeticListResponse:
        user = await self.users_service.get_user_model(user_id, db, populate_existing=True)
        owned_ids = await self._owned_item_ids(user.id, db)
        equipped_ids = {user.equipped_frame_id, user.equipped_title_id}

        items = []
        for item in ALL_COSMETICS:
            unlocked, missing = evaluate_unlock(item.unlock_condition, user)
            condition = item.unlock_condition
            items.append(CosmeticItemResponse(
                id=item.id,
                type=item.type,
                name=item.name,
                rarity=item.rarity,
                price=item.price,
                unlock_condition=UnlockConditionResponse(
                    level=condition.level,
                    xp=condition.xp,
                    diamonds=condition.diamonds,
                    creation_count=condition.creation_count,
                    streak=condition.streak,
                ) if condition else None,
                unlocked=unlocked,
                owned=item.id in owned_ids,
                equipped=item.id in equipped_ids,
                missing_requirements=missing,
            ))

        return CosmeticListResponse(
            level=user.level,
            equipped_frame_id=user.equipped_frame_id,
            equipped_title_id=user.equipped_title_id,
            items=items,
        )

    async def purchase(self, user_id: int, item_id: str, db: AsyncSession) -> PurchaseResponse:
        """
        Buy a shop item: debit `price` diamonds, add it to the inventory and
        log SHOP_PURCHASE with a negative amount, all in one transaction.
        """
        item = self._get_item(item_id)
        if not item.is_shop_item:
            raise CosmeticNotForSaleException(ITEM_NOT_FOR_SALE)

        user = await self.users_service.get_user_model(user_id, db, populate_existing=True)

        unlocked, _ = evaluate_unlock(item.unlock_condition, user)
        if not unlocked:
            raise CosmeticLockedException(LEVEL_REQUIRED.format(level=item.unlock_condition.level or 1))

        if user.diamonds < item.price:
            raise NotEnoughDiamondsException(NOT_ENOUGH_DIAMONDS.format(price=item.price))

        if item.id in await self._owned_item_ids(user.id, db):
            raise CosmeticAlreadyOwnedException(ALREADY_OWNED)

        try:
            entry = None
            if item.price > 0:
                entry = await self.transaction_service.post_entry(
                    db,
                    user_id=user.id,
                    amount=-item.price,
                    transaction_type=SHOP_PURCHASE,
                    description=PURCHASE_DESCRIPTION.format(name=item.name),
                    reference_key=f"shop:{item.id}",
                )
                if entry is None:
                    raise NotEnoughDiamondsException(NOT_ENOUGH_DIAMONDS.format(price=item.price))

            db.add(UserInventoryItem(
                user_id=user.id,
                item_id=item.id,
                transaction_id=entry.id if entry else None,
            ))
            await db.flush()
            await db.commit()
        except CosmeticException:
            await db.rollback()
            raise
        except IntegrityError:
            await db.rollback()
            raise CosmeticAlreadyOwnedException(ALREADY_OWNED)
        except Exception as e:
            await db.rollback()
            logger.exception("Purchase of %s failed for user %s", item.id, user_id)
            raise PurchaseFailedException(PURCHASE_FAILED) from e

        await db.refresh(user)
        logger.info("User %s bought %s for %s diamonds", user.id, item.id, item.price)

        return PurchaseResponse(
            success=True,
            message=PURCHASE_SUCCESS.format(name=item.name),
            new_diamonds=user.diamonds,
        )

    async def equip(self, user_id: int, item_id: str, db: AsyncSession) -> EquipResponse:
        """Equip an earned (unlocked) or bought (owned) frame/title"""
        item = self._get_item(item_id)
        user = await self.users_service.get_user_model(user_id, db, populate_existing=True)

        if item.is_shop_item:
            if item.id not in await self._owned_item_ids(user.id, db):
                raise CosmeticNotOwnedException(ITEM_LOCKED)
        else:
            unlocked, _ = evaluate_unlock(item.unlock_condition, user)
            if not unlocked:
                raise CosmeticLockedException(ITEM_LOCKED)

        if item.type == CosmeticType.FRAME:
            user.equipped_frame_id = item.id
        else:
            user.equipped_title_id = item.id

        try:
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        await db.refresh(user)
        return EquipResponse(
            success=True,
            message=EQUIP_SUCCESS.format(name=item.name),
            equipped_frame_id=user.equipped_frame_id,
            equipped_title_id=user.equipped_title_id,
        )
