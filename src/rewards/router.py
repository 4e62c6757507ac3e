from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.dependencies import get_current_admin_user
from src.database import get_db
from src.rewards.constants import REWARD_DELETED
from src.rewards.dependencies import get_reward_catalog_service
from src.rewards.exceptions import (
    RewardAlreadyExistsException,
    RewardNotFoundException,
    reward_already_exists_exception,
    reward_not_found_exception,
)
from src.rewards.schemas import CheckInRewardCreate, CheckInRewardResponse
from src.rewards.service import RewardCatalogService
from src.users.models import User

router = APIRouter(prefix="/rewards", tags=["Rewards"])
admin_router = APIRouter(prefix="/admin/check-in-rewards", tags=["Admin - Rewards"])


@router.get("/check-in", response_model=List[CheckInRewardResponse])
async def get_check_in_rewards(
    service: RewardCatalogService = Depends(get_reward_catalog_service),
    db: AsyncSession = Depends(get_db)
):
    """Bảng thưởng điểm danh đang áp dụng (tăng dần theo số ngày)"""
    return await service.list_rewards(db)


@admin_router.get("/", response_model=List[CheckInRewardResponse])
async def admin_list_rewards(
    include_inactive: bool = Query(False, description="Bao gồm cả cấu hình đã tắt"),
    admin: User = Depends(get_current_admin_user),
    service: RewardCatalogService = Depends(get_reward_catalog_service),
    db: AsyncSession = Depends(get_db)
):
    """Danh sách cấu hình thưởng (chỉ admin)"""
    return await service.list_rewards(db, include_inactive=include_inactive)


@admin_router.post("/", response_model=CheckInRewardResponse, status_code=status.HTTP_201_CREATED)
async def admin_create_reward(
    data: CheckInRewardCreate,
    admin: User = Depends(get_current_admin_user),
    service: RewardCatalogService = Depends(get_reward_catalog_service),
    db: AsyncSession = Depends(get_db)
):
    """
    Thêm cấu hình thưởng (chỉ admin)
    - **consecutive_days**: số ngày liên tiếp (> 0, không trùng với cấu hình đang bật)
    - **diamond_reward**: kim cương thưởng
    - **xp_reward**: XP thưởng
    """
    try:
        return await service.create_reward(data, db)
    except RewardAlreadyExistsException as e:
        raise reward_already_exists_exception(str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Lỗi khi tạo cấu hình thưởng: {str(e)}")


@admin_router.delete("/{reward_id}")
async def admin_delete_reward(
    reward_id: int,
    admin: User = Depends(get_current_admin_user),
    service: RewardCatalogService = Depends(get_reward_catalog_service),
    db: AsyncSession = Depends(get_db)
):
    """Xóa cấu hình thưởng (chỉ admin)"""
    try:
        reward = await service.delete_reward(reward_id, db)
        return {"message": REWARD_DELETED.format(days=reward.consecutive_days)}
    except RewardNotFoundException as e:
        raise reward_not_found_exception(str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Lỗi khi xóa cấu hình thưởng: {str(e)}")
