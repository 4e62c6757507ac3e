from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.dependencies import get_current_active_user, get_current_admin_user
from src.database import get_db
from src.pagination import PaginationParams, PaginatedResponse
from src.transactions.dependencies import get_transaction_service
from src.transactions.exceptions import (
    EmptyTransactionException,
    InsufficientBalanceException,
    insufficient_balance_exception,
    transaction_validation_exception,
)
from src.transactions.schemas import (
    BalanceAdjustmentRequest,
    BalanceAdjustmentResponse,
    TransactionResponse,
)
from src.transactions.service import TransactionService
from src.users.dependencies import valid_user_id
from src.users.exceptions import UserNotFoundException, user_not_found_exception
from src.users.models import User

router = APIRouter(prefix="/transactions", tags=["Transactions"])
admin_router = APIRouter(prefix="/admin/transactions", tags=["Admin - Transactions"])


@router.get("/history", response_model=PaginatedResponse[TransactionResponse])
async def get_my_transactions(
    pagination: PaginationParams = Depends(),
    transaction_type: Optional[str] = Query(None, description="Lọc theo loại giao dịch"),
    current_user: User = Depends(get_current_active_user),
    service: TransactionService = Depends(get_transaction_service),
    db: AsyncSession = Depends(get_db)
):
    """
    Lịch sử giao dịch kim cương/XP của tôi (mới nhất trước)
    - **page**: Số trang (mặc định: 1)
    - **size**: Số bản ghi mỗi trang (mặc định: 10, tối đa: 100)
    """
    try:
        return await service.get_history(current_user.id, db, pagination, transaction_type)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Lỗi khi lấy lịch sử giao dịch: {str(e)}")


@router.get("/recent", response_model=List[TransactionResponse])
async def get_my_recent_transactions(
    current_user: User = Depends(get_current_active_user),
    service: TransactionService = Depends(get_transaction_service),
    db: AsyncSession = Depends(get_db)
):
    """50 giao dịch gần nhất"""
    return await service.get_recent(current_user.id, db)


@admin_router.get("/users/{user_id}", response_model=PaginatedResponse[TransactionResponse])
async def get_user_transactions(
    pagination: PaginationParams = Depends(),
    admin: User = Depends(get_current_admin_user),
    user: User = Depends(valid_user_id),
    service: TransactionService = Depends(get_transaction_service),
    db: AsyncSession = Depends(get_db)
):
    """Lịch sử giao dịch của một user (chỉ admin)"""
    return await service.get_history(user.id, db, pagination)


@admin_router.post("/adjust", response_model=BalanceAdjustmentResponse)
async def adjust_balance(
    request: BalanceAdjustmentRequest,
    admin: User = Depends(get_current_admin_user),
    service: TransactionService = Depends(get_transaction_service),
    db: AsyncSession = Depends(get_db)
):
    """
    Cộng/trừ kim cương hoặc cộng XP cho user (chỉ admin)
    - **amount**: số kim cương (âm để trừ, số dư không được âm)
    - **xp_amount**: số XP cộng thêm
    - Mọi thay đổi đều được ghi vào lịch sử giao dịch
    """
    try:
        return await service.adjust_balance(request, admin, db)
    except UserNotFoundException as e:
        raise user_not_found_exception(str(e))
    except EmptyTransactionException as e:
        raise transaction_validation_exception(str(e))
    except InsufficientBalanceException as e:
        raise insufficient_balance_exception(str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Lỗi khi điều chỉnh số dư: {str(e)}")
