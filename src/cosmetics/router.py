from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.dependencies import get_current_active_user
from src.cosmetics.dependencies import get_cosmetic_service
from src.cosmetics.exceptions import (
    CosmeticAlreadyOwnedException,
    CosmeticLockedException,
    CosmeticNotForSaleException,
    CosmeticNotFoundException,
    CosmeticNotOwnedException,
    NotEnoughDiamondsException,
    PurchaseFailedException,
    cosmetic_bad_request_exception,
    cosmetic_locked_exception,
    cosmetic_not_found_exception,
    not_enough_diamonds_exception,
    purchase_failed_exception,
)
from src.cosmetics.schemas import (
    CosmeticListResponse,
    EquipRequest,
    EquipResponse,
    PurchaseRequest,
    PurchaseResponse,
)
from src.cosmetics.service import CosmeticService
from src.database import get_db
from src.users.exceptions import UserNotFoundException, user_not_found_exception
from src.users.models import User

router = APIRouter(prefix="/cosmetics", tags=["Cosmetics"])


@router.get("", response_model=CosmeticListResponse)
async def list_cosmetics(
    current_user: User = Depends(get_current_active_user),
    service: CosmeticService = Depends(get_cosmetic_service),
    db: AsyncSession = Depends(get_db)
):
    """Khung avatar và danh hiệu: đã mở khóa, đã sở hữu, đang trang bị"""
    try:
        return await service.list_cosmetics(current_user.id, db)
    except UserNotFoundException as e:
        raise user_not_found_exception(str(e))


@router.post("/purchase", response_model=PurchaseResponse)
async def purchase_item(
    request: PurchaseRequest,
    current_user: User = Depends(get_current_active_user),
    service: CosmeticService = Depends(get_cosmetic_service),
    db: AsyncSession = Depends(get_db)
):
    """
    Mua vật phẩm trong cửa hàng bằng kim cương
    - 404: vật phẩm không tồn tại, 403: chưa đủ cấp, 402: không đủ kim cương, 400: đã sở hữu
    """
    try:
        return await service.purchase(current_user.id, request.item_id, db)
    except CosmeticNotFoundException as e:
        raise cosmetic_not_found_exception(str(e))
    except UserNotFoundException as e:
        raise user_not_found_exception(str(e))
    except (CosmeticNotForSaleException, CosmeticAlreadyOwnedException) as e:
        raise cosmetic_bad_request_exception(str(e))
    except CosmeticLockedException as e:
        raise cosmetic_locked_exception(str(e))
    except NotEnoughDiamondsException as e:
        raise not_enough_diamonds_exception(str(e))
    except PurchaseFailedException as e:
        raise purchase_failed_exception(str(e))
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Lỗi khi mua vật phẩm: {str(e)}")


@router.post("/equip", response_model=EquipResponse)
async def equip_item(
    request: EquipRequest,
    current_user: User = Depends(get_current_active_user),
    service: CosmeticService = Depends(get_cosmetic_service),
    db: AsyncSession = Depends(get_db)
):
    """Trang bị khung avatar hoặc danh hiệu đã mở khóa/đã mua"""
    try:
        return await service.equip(current_user.id, request.item_id, db)
    except CosmeticNotFoundException as e:
        raise cosmetic_not_found_exception(str(e))
    except UserNotFoundException as e:
        raise user_not_found_exception(str(e))
    except (CosmeticLockedException, CosmeticNotOwnedException) as e:
        raise cosmetic_locked_exception(str(e))
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Lỗi khi trang bị vật phẩm: {str(e)}")
