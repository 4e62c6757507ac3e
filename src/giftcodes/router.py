from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.dependencies import get_current_active_user, get_current_admin_user
from src.database import get_db
from src.giftcodes.constants import GIFT_CODE_DEACTIVATED
from src.giftcodes.dependencies import get_gift_code_service
from src.giftcodes.exceptions import (
    GiftCodeAlreadyExistsException,
    GiftCodeAlreadyRedeemedException,
    GiftCodeNotFoundException,
    GiftCodeRedeemFailedException,
    GiftCodeUnavailableException,
    gift_code_conflict_exception,
    gift_code_not_found_exception,
    gift_code_redeem_failed_exception,
    gift_code_unavailable_exception,
)
from src.giftcodes.schemas import GiftCodeCreate, GiftCodeResponse, RedeemRequest, RedeemResponse
from src.giftcodes.service import GiftCodeService
from src.pagination import PaginationParams, PaginatedResponse
from src.users.exceptions import UserNotFoundException, user_not_found_exception
from src.users.models import User

router = APIRouter(prefix="/gift-codes", tags=["Gift Codes"])
admin_router = APIRouter(prefix="/admin/gift-codes", tags=["Admin - Gift Codes"])


@router.post("/redeem", response_model=RedeemResponse)
async def redeem_gift_code(
    request: RedeemRequest,
    current_user: User = Depends(get_current_active_user),
    service: GiftCodeService = Depends(get_gift_code_service),
    db: AsyncSession = Depends(get_db)
):
    """
    Nhập giftcode để nhận kim cương/XP
    - Mã không phân biệt hoa thường
    - 404: mã không tồn tại, 400: mã đã tắt/hết hạn/hết lượt, 409: đã sử dụng
    """
    try:
        return await service.redeem(current_user.id, request.code, db)
    except GiftCodeNotFoundException as e:
        raise gift_code_not_found_exception(str(e))
    except GiftCodeUnavailableException as e:
        raise gift_code_unavailable_exception(str(e))
    except GiftCodeAlreadyRedeemedException as e:
        raise gift_code_conflict_exception(str(e))
    except UserNotFoundException as e:
        raise user_not_found_exception(str(e))
    except GiftCodeRedeemFailedException as e:
        raise gift_code_redeem_failed_exception(str(e))
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Lỗi khi sử dụng giftcode: {str(e)}")


@admin_router.get("/", response_model=PaginatedResponse[GiftCodeResponse])
async def admin_list_gift_codes(
    pagination: PaginationParams = Depends(),
    admin: User = Depends(get_current_admin_user),
    service: GiftCodeService = Depends(get_gift_code_service),
    db: AsyncSession = Depends(get_db)
):
    """Danh sách giftcode, mới nhất trước (chỉ admin)"""
    return await service.list_gift_codes(db, pagination)


@admin_router.post("/", response_model=GiftCodeResponse, status_code=status.HTTP_201_CREATED)
async def admin_create_gift_code(
    data: GiftCodeCreate,
    admin: User = Depends(get_current_admin_user),
    service: GiftCodeService = Depends(get_gift_code_service),
    db: AsyncSession = Depends(get_db)
):
    """
    Tạo giftcode (chỉ admin)
    - **code**: mã, tự chuyển sang chữ hoa
    - **usage_limit**: tổng số lượt, bỏ trống = không giới hạn
    - **max_per_user**: số lần mỗi người được dùng (mặc định 1)
    """
    try:
        return await service.create_gift_code(data, db)
    except GiftCodeAlreadyExistsException as e:
        raise gift_code_conflict_exception(str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Lỗi khi tạo giftcode: {str(e)}")


@admin_router.delete("/{gift_code_id}")
async def admin_deactivate_gift_code(
    gift_code_id: int,
    admin: User = Depends(get_current_admin_user),
    service: GiftCodeService = Depends(get_gift_code_service),
    db: AsyncSession = Depends(get_db)
):
    """Vô hiệu hóa giftcode (chỉ admin)"""
    try:
        gift_code = await service.deactivate_gift_code(gift_code_id, db)
        return {"message": GIFT_CODE_DEACTIVATED.format(code=gift_code.code)}
    except GiftCodeNotFoundException as e:
        raise gift_code_not_found_exception(str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Lỗi khi vô hiệu hóa giftcode: {str(e)}")
