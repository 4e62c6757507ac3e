from datetime import datetime
from typing import Optional
from pydantic import Field, model_validator, validator

from src.models import CustomModel


class GiftCodeCreate(CustomModel):
    code: str = Field(..., min_length=3, max_length=50, description="Mã giftcode (tự chuyển sang chữ hoa)")
    diamond_reward: int = Field(0, ge=0, description="Số kim cương thưởng")
    xp_reward: int = Field(0, ge=0, description="Số XP thưởng")
    usage_limit: Optional[int] = Field(None, ge=1, description="Tổng số lượt dùng, bỏ trống = không giới hạn")
    max_per_user: int = Field(1, ge=1, description="Số lần mỗi người được dùng")
    expires_at: Optional[datetime] = Field(None, description="Thời điểm hết hạn")

    @validator("code")
    def normalize_code(cls, v: str) -> str:
        v = v.strip().upper()
        if not v or " " in v:
            raise ValueError("Mã giftcode không được chứa khoảng trắng")
        return v

    @model_validator(mode="after")
    def check_non_empty_reward(self):
        if self.diamond_reward == 0 and self.xp_reward == 0:
            raise ValueError("Giftcode phải thưởng kim cương hoặc XP")
        return self


class GiftCodeResponse(CustomModel):
    id: int
    code: str
    diamond_reward: int
    xp_reward: int
    usage_limit: Optional[int] = None
    usage_count: int
    max_per_user: int
    is_active: bool
    expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class RedeemRequest(CustomModel):
    code: str = Field(..., min_length=1, max_length=50)


class RedeemResponse(CustomModel):
    success: bool = True
    message: str
    diamonds_awarded: int = Field(..., alias="diamondsAwarded")
    xp_awarded: int = Field(..., alias="xpAwarded")
    new_diamonds: int = Field(..., alias="newDiamonds")
    new_xp: int = Field(..., alias="newXp")
