from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.dependencies import get_current_active_user
from src.checkin.constants import DEFAULT_HISTORY_DAYS, MAX_HISTORY_DAYS
from src.checkin.dependencies import get_check_in_service
from src.checkin.exceptions import (
    AlreadyCheckedInException,
    CheckInFailedException,
    already_checked_in_exception,
    check_in_failed_exception,
)
from src.checkin.schemas import CheckInHistoryResponse, CheckInResponse, CheckInStatusResponse
from src.checkin.service import CheckInService
from src.database import get_db
from src.users.exceptions import UserNotFoundException, user_not_found_exception
from src.users.models import User

router = APIRouter(prefix="/check-in", tags=["Check-in"])


@router.get("", response_model=CheckInStatusResponse)
async def get_check_in_status(
    current_user: User = Depends(get_current_active_user),
    service: CheckInService = Depends(get_check_in_service),
    db: AsyncSession = Depends(get_db)
):
    """
    Trạng thái điểm danh hôm nay
    - **hasCheckedInToday**: đã điểm danh trong ngày (giờ Việt Nam) hay chưa
    - **consecutiveDays**: chuỗi hiện tại
    - **nextDiamonds** / **nextXp**: phần thưởng của lần điểm danh tiếp theo
    """
    try:
        return await service.get_status(current_user.id, db)
    except UserNotFoundException as e:
        raise user_not_found_exception(str(e))


@router.post("", response_model=CheckInResponse)
async def check_in(
    current_user: User = Depends(get_current_active_user),
    service: CheckInService = Depends(get_check_in_service),
    db: AsyncSession = Depends(get_db)
):
    """
    Điểm danh hằng ngày
    - Mỗi ngày (giờ Việt Nam, UTC+7) chỉ được điểm danh một lần
    - Điểm danh liên tiếp sẽ tăng chuỗi, bỏ lỡ một ngày chuỗi quay về 1
    - Đã điểm danh rồi: trả về 409 với `checkedIn: true`
    """
    try:
        return await service.check_in(current_user.id, db)
    except AlreadyCheckedInException as e:
        raise already_checked_in_exception(str(e))
    except UserNotFoundException as e:
        raise user_not_found_exception(str(e))
    except CheckInFailedException as e:
        raise check_in_failed_exception(str(e))
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Lỗi khi điểm danh: {str(e)}")


@router.get("/history", response_model=CheckInHistoryResponse)
async def get_check_in_history(
    days: int = Query(DEFAULT_HISTORY_DAYS, ge=1, le=MAX_HISTORY_DAYS, description="Số ngày muốn xem"),
    current_user: User = Depends(get_current_active_user),
    service: CheckInService = Depends(get_check_in_service),
    db: AsyncSession = Depends(get_db)
):
    """Lịch sử điểm danh N ngày gần nhất"""
    try:
        return await service.get_history(current_user.id, db, days)
    except UserNotFoundException as e:
        raise user_not_found_exception(str(e))
