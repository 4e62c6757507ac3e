from typing import Optional
from pydantic import Field

from src.models import CustomModel


class LevelProgressResponse(CustomModel):
    level: int = Field(..., description="Cấp độ hiện tại")
    xp: int = Field(..., description="Tổng XP")
    level_start_xp: int = Field(..., alias="levelStartXp")
    next_level_xp: int = Field(..., alias="nextLevelXp")
    xp_into_level: int = Field(..., alias="xpIntoLevel")
    xp_to_next_level: int = Field(..., alias="xpToNextLevel")


class XpIncrementRequest(CustomModel):
    minutes: int = Field(1, ge=1, description="Số phút hoạt động kể từ lần báo trước, tối đa MAX_XP_MINUTES_PER_REQUEST")
    reason: Optional[str] = Field(None, max_length=255, description="Lý do cộng XP")


class XpIncrementResponse(CustomModel):
    message: str
    xp_added: int = Field(..., alias="xpAdded")
    new_xp: int = Field(..., alias="newXp")
    level: int
    leveled_up: bool = Field(False, alias="leveledUp")
