from typing import List, Optional
from pydantic import Field

from src.cosmetics.constants import CosmeticType, Rarity
from src.models import CustomModel


class UnlockConditionResponse(CustomModel):
    level: Optional[int] = None
    xp: Optional[int] = None
    diamonds: Optional[int] = None
    creation_count: Optional[int] = Field(None, alias="creationCount")
    streak: Optional[int] = None


class CosmeticItemResponse(CustomModel):
    id: str
    type: CosmeticType
    name: str
    rarity: Rarity
    price: Optional[int] = None
    unlock_condition: Optional[UnlockConditionResponse] = Field(None, alias="unlockCondition")
    unlocked: bool = Field(..., description="Đã đạt điều kiện mở khóa")
    owned: bool = Field(..., description="Đã mua (vật phẩm cửa hàng)")
    equipped: bool = False
    missing_requirements: List[str] = Field(default_factory=list, alias="missingRequirements")


class CosmeticListResponse(CustomModel):
    level: int
    equipped_frame_id: Optional[str] = Field(None, alias="equippedFrameId")
    equipped_title_id: Optional[str] = Field(None, alias="equippedTitleId")
    items: List[CosmeticItemResponse]


class PurchaseRequest(CustomModel):
    item_id: str = Field(..., alias="itemId", min_length=1, max_length=50)


class PurchaseResponse(CustomModel):
    success: bool = True
    message: str
    new_diamonds: int = Field(..., alias="newDiamonds")


class EquipRequest(CustomModel):
    item_id: str = Field(..., alias="itemId", min_length=1, max_length=50)


class EquipResponse(CustomModel):
    success: bool = True
    message: str
    equipped_frame_id: Optional[str] = Field(None, alias="equippedFrameId")
    equipped_title_id: Optional[str] = Field(None, alias="equippedTitleId")
