from datetime import datetime
from typing import Optional
from pydantic import Field, model_validator

from src.models import CustomModel


class CheckInRewardCreate(CustomModel):
    consecutive_days: int = Field(..., gt=0, description="Số ngày điểm danh liên tiếp")
    diamond_reward: int = Field(0, ge=0, description="Số kim cương thưởng")
    xp_reward: int = Field(0, ge=0, description="Số XP thưởng")

    @model_validator(mode="after")
    def check_non_empty_reward(self):
        if self.diamond_reward == 0 and self.xp_reward == 0:
            raise ValueError("Phần thưởng phải có kim cương hoặc XP")
        return self


class CheckInRewardResponse(CustomModel):
    id: int
    consecutive_days: int
    diamond_reward: int
    xp_reward: int
    is_active: bool
    is_milestone: bool = Field(False, description="Mốc thưởng chuỗi 7/14/30 ngày")
    created_at: Optional[datetime] = None


class DailyReward(CustomModel):
    """Payout resolved for a given streak length"""
    diamonds: int
    xp: int
    reward_id: Optional[int] = Field(None, description="None nếu dùng thưởng mặc định")
