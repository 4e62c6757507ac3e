from typing import Any, List, Optional
from pydantic import Field

from src.models import CustomModel


class MilestoneClaimRequest(CustomModel):
    # Any JSON value; MilestoneService.claim answers anything but 7/14/30 with 400
    milestone_days: Optional[Any] = Field(None, alias="milestoneDays", description="Mốc chuỗi: 7, 14 hoặc 30")


class MilestoneClaimResponse(CustomModel):
    success: bool = True
    message: str
    new_diamonds: int = Field(..., alias="newDiamonds")
    new_xp: int = Field(..., alias="newXp")


class MilestoneStatus(CustomModel):
    milestone_days: int = Field(..., alias="milestoneDays")
    reached: bool
    claimed: bool
    configured: bool
    diamond_reward: int = Field(0, alias="diamondReward")
    xp_reward: int = Field(0, alias="xpReward")


class MilestoneStatusResponse(CustomModel):
    consecutive_days: int = Field(..., alias="consecutiveDays")
    milestones: List[MilestoneStatus]
