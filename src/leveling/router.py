from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.dependencies import get_current_active_user
from src.database import get_db
from src.leveling.dependencies import get_leveling_service
from src.leveling.exceptions import (
    InvalidXpAmountException,
    XpCooldownException,
    XpIncrementFailedException,
    invalid_xp_amount_exception,
    xp_cooldown_exception,
    xp_increment_failed_exception,
)
from src.leveling.schemas import LevelProgressResponse, XpIncrementRequest, XpIncrementResponse
from src.leveling.service import LevelingService
from src.users.exceptions import UserNotFoundException, user_not_found_exception
from src.users.models import User

router = APIRouter(prefix="/leveling", tags=["Leveling"])


@router.get("/me", response_model=LevelProgressResponse)
async def get_my_level(
    current_user: User = Depends(get_current_active_user),
    service: LevelingService = Depends(get_leveling_service),
    db: AsyncSession = Depends(get_db)
):
    """Cấp độ hiện tại và tiến độ lên cấp tiếp theo (100 XP mỗi cấp)"""
    try:
        return await service.get_progress(current_user.id, db)
    except UserNotFoundException as e:
        raise user_not_found_exception(str(e))


@router.post("/xp", response_model=XpIncrementResponse)
async def increment_xp(
    request: XpIncrementRequest,
    current_user: User = Depends(get_current_active_user),
    service: LevelingService = Depends(get_leveling_service),
    db: AsyncSession = Depends(get_db)
):
    """
    Cộng XP cho người dùng hiện tại
    - **minutes**: số phút hoạt động kể từ lần báo trước (1 XP mỗi phút, tối đa 5 phút mỗi lần)
    - Số XP do server tính, không nhận từ client
    - 429: vừa nhận XP trong khoảng thời gian chờ
    """
    try:
        return await service.increment_xp(
            current_user.id,
            db,
            minutes=request.minutes,
            reason=request.reason,
        )
    except InvalidXpAmountException as e:
        raise invalid_xp_amount_exception(str(e))
    except XpCooldownException as e:
        raise xp_cooldown_exception(str(e))
    except UserNotFoundException as e:
        raise user_not_found_exception(str(e))
    except XpIncrementFailedException as e:
        raise xp_increment_failed_exception(str(e))
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Lỗi khi cộng XP: {str(e)}")
