from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.dependencies import get_current_active_user
from src.database import get_db
from src.milestones.dependencies import get_milestone_service
from src.milestones.exceptions import (
    InvalidMilestoneException,
    MilestoneAlreadyClaimedException,
    MilestoneClaimFailedException,
    MilestoneRewardNotConfiguredException,
    StreakNotReachedException,
    invalid_milestone_exception,
    milestone_already_claimed_exception,
    milestone_claim_failed_exception,
    milestone_reward_not_configured_exception,
    streak_not_reached_exception,
)
from src.milestones.schemas import MilestoneClaimRequest, MilestoneClaimResponse, MilestoneStatusResponse
from src.milestones.service import MilestoneService
from src.users.exceptions import UserNotFoundException, user_not_found_exception
from src.users.models import User

router = APIRouter(prefix="/milestones", tags=["Milestones"])


@router.get("", response_model=MilestoneStatusResponse)
async def get_milestones(
    current_user: User = Depends(get_current_active_user),
    service: MilestoneService = Depends(get_milestone_service),
    db: AsyncSession = Depends(get_db)
):
    """Các mốc chuỗi 7/14/30 ngày: đã đạt, đã nhận, phần thưởng"""
    try:
        return await service.get_status(current_user.id, db)
    except UserNotFoundException as e:
        raise user_not_found_exception(str(e))


@router.post("/claim", response_model=MilestoneClaimResponse)
async def claim_milestone(
    request: MilestoneClaimRequest,
    current_user: User = Depends(get_current_active_user),
    service: MilestoneService = Depends(get_milestone_service),
    db: AsyncSession = Depends(get_db)
):
    """
    Nhận thưởng mốc chuỗi điểm danh
    - **milestoneDays**: 7, 14 hoặc 30
    - 400: mốc không hợp lệ, 403: chưa đạt chuỗi, 404: chưa cấu hình thưởng, 409: đã nhận
    - Mỗi mốc nhận được một lần cho mỗi chuỗi; chuỗi bị reset thì có thể nhận lại
    """
    try:
        return await service.claim(current_user.id, request.milestone_days, db)
    except InvalidMilestoneException as e:
        raise invalid_milestone_exception(str(e))
    except UserNotFoundException as e:
        raise user_not_found_exception(str(e))
    except StreakNotReachedException as e:
        raise streak_not_reached_exception(str(e))
    except MilestoneRewardNotConfiguredException as e:
        raise milestone_reward_not_configured_exception(str(e))
    except MilestoneAlreadyClaimedException as e:
        raise milestone_already_claimed_exception(str(e))
    except MilestoneClaimFailedException as e:
        raise milestone_claim_failed_exception(str(e))
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Lỗi khi nhận thưởng: {str(e)}")
