"""
Service layer for the diamond/XP transaction log
"""
import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import select, update, func, desc
from sqlalchemy.ext.asyncio import AsyncSession

from src.config import settings
from src.pagination import PaginationParams, PaginatedResponse, paginate
from src.transactions.constants import (
    ADMIN_ADJUSTMENT,
    ADJUSTMENT_SUCCESS,
    EMPTY_TRANSACTION,
    INSUFFICIENT_BALANCE,
)
from src.transactions.exceptions import EmptyTransactionException, InsufficientBalanceException
from src.transactions.models import DiamondTransactionLog
from src.transactions.schemas import (
    TransactionResponse,
    BalanceAdjustmentRequest,
    BalanceAdjustmentResponse,
)
from src.users.service import UsersService
from src.users.models import User

logger = logging.getLogger(__name__)


class TransactionService:
    """
    Append-only ledger.

    Entries are only ever inserted. Callers that change a balance go through
    `post_entry`, which applies the guarded UPDATE on the user row and adds the
    log row in the same session; the caller owns the commit so both writes land
    in one transaction.
    """

    async def append(
        self,
        db: AsyncSession,
        user_id: int,
        amount: int,
        transaction_type: str,
        description: Optional[str] = None,
        xp_amount: int = 0,
        reference_key: Optional[str] = None,
    ) -> DiamondTransactionLog:
        """Add a log row to the session (no commit)"""
        if amount == 0 and xp_amount == 0:
            raise EmptyTransactionException(EMPTY_TRANSACTION)

        entry = DiamondTransactionLog(
            user_id=user_id,
            amount=amount,
            xp_amount=xp_amount,
            transaction_type=transaction_type,
            description=description,
            reference_key=reference_key,
        )
        db.add(entry)
        await db.flush()
        return entry

    async def post_entry(
        self,
        db: AsyncSession,
        user_id: int,
        amount: int,
        transaction_type: str,
        description: Optional[str] = None,
        xp_amount: int = 0,
        reference_key: Optional[str] = None,
        conditions: Iterable[Any] = (),
        values: Optional[Dict[str, Any]] = None,
    ) -> Optional[DiamondTransactionLog]:
        """
        Apply a balance delta and log it, without committing.

        The UPDATE is guarded by `conditions` (compare-and-set on state the
        caller has read) and never lets diamonds go below zero. Returns None
        when no row matched, in which case nothing was written.
        """
        if amount == 0 and xp_amount == 0:
            raise EmptyTransactionException(EMPTY_TRANSACTION)

        new_values: Dict[str, Any] = {
            "diamonds": User.diamonds + amount,
            "xp": User.xp + xp_amount,
        }
        if values:
            new_values.update(values)

        stmt = (
            update(User)
            .where(User.id == user_id, User.deleted_at.is_(None), *conditions)
            .values(**new_values)
            .execution_options(synchronize_session=False)
        )
        if amount < 0:
            stmt = stmt.where(User.diamonds + amount >= 0)

        result = await db.execute(stmt)
        if result.rowcount != 1:
            return None

        return await self.append(
            db,
            user_id=user_id,
            amount=amount,
            transaction_type=transaction_type,
            description=description,
            xp_amount=xp_amount,
            reference_key=reference_key,
        )

    async def has_entry_since(
        self,
        db: AsyncSession,
        user_id: int,
        transaction_type: str,
        since: datetime,
    ) -> bool:
        """Whether the user has an entry of this type created at or after `since`"""
        result = await db.execute(
            select(DiamondTransactionLog.id).where(
                DiamondTransactionLog.user_id == user_id,
                DiamondTransactionLog.transaction_type == transaction_type,
                DiamondTransactionLog.created_at >= since,
            ).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def get_history(
        self,
        user_id: int,
        db: AsyncSession,
        pagination: PaginationParams,
        transaction_type: Optional[str] = None,
    ) -> PaginatedResponse[TransactionResponse]:
        """Get a user's transactions, newest first"""
        filters = [DiamondTransactionLog.user_id == user_id]
        if transaction_type:
            filters.append(DiamondTransactionLog.transaction_type == transaction_type)

        count_result = await db.execute(
            select(func.count(DiamondTransactionLog.id)).where(*filters)
        )
        total = count_result.scalar() or 0

        result = await db.execute(
            select(DiamondTransactionLog)
            .where(*filters)
            .order_by(desc(DiamondTransactionLog.created_at), desc(DiamondTransactionLog.id))
            .offset(pagination.offset)
            .limit(pagination.size)
        )
        entries = result.scalars().all()

        items = [TransactionResponse.model_validate(entry) for entry in entries]
        return paginate(items, total, pagination.page, pagination.size)

    async def get_recent(
        self,
        user_id: int,
        db: AsyncSession,
        limit: Optional[int] = None,
    ) -> List[TransactionResponse]:
        """Latest transactions for the history widget"""
        result = await db.execute(
            select(DiamondTransactionLog)
            .where(DiamondTransactionLog.user_id == user_id)
            .order_by(desc(DiamondTransactionLog.created_at), desc(DiamondTransactionLog.id))
            .limit(limit or settings.TRANSACTION_HISTORY_LIMIT)
        )
        return [TransactionResponse.model_validate(entry) for entry in result.scalars().all()]

    async def adjust_balance(
        self,
        request: BalanceAdjustmentRequest,
        admin: User,
        db: AsyncSession,
    ) -> BalanceAdjustmentResponse:
        """Manual credit/debit by an admin, logged as ADMIN_ADJUSTMENT"""
        user = await UsersService().get_user_model(request.user_id, db)

        try:
            entry = await self.post_entry(
                db,
                user_id=user.id,
                amount=request.amount,
                xp_amount=request.xp_amount,
                transaction_type=ADMIN_ADJUSTMENT,
                description=request.description,
                reference_key=f"admin:{admin.id}",
            )
            if entry is None:
                raise InsufficientBalanceException(INSUFFICIENT_BALANCE)

            await db.commit()
        except Exception:
            await db.rollback()
            raise

        await db.refresh(user)
        logger.info(
            "Admin %s adjusted user %s by %s diamonds / %s xp",
            admin.id, user.id, request.amount, request.xp_amount,
        )
        return BalanceAdjustmentResponse(
            message=ADJUSTMENT_SUCCESS,
            new_diamonds=user.diamonds,
            new_xp=user.xp,
            transaction=TransactionResponse.model_validate(entry),
        )
