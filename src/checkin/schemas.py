from datetime import date, datetime
from typing import List, Optional
from pydantic import Field

from src.models import CustomModel


class CheckInStatusResponse(CustomModel):
    has_checked_in_today: bool = Field(..., alias="hasCheckedInToday")
    consecutive_days: int = Field(..., alias="consecutiveDays", description="Chuỗi hiện tại")
    last_check_in_at: Optional[datetime] = Field(None, alias="lastCheckInAt")
    next_diamonds: int = Field(..., alias="nextDiamonds", description="Kim cương nhận được ở lần điểm danh tới")
    next_xp: int = Field(..., alias="nextXp", description="XP nhận được ở lần điểm danh tới")


class CheckInResponse(CustomModel):
    message: str
    new_total_diamonds: int = Field(..., alias="newTotalDiamonds")
    new_total_xp: int = Field(..., alias="newTotalXp")
    consecutive_days: int = Field(..., alias="consecutiveDays")
    diamonds_awarded: int = Field(..., alias="diamondsAwarded")
    xp_awarded: int = Field(..., alias="xpAwarded")


class CheckInDay(CustomModel):
    check_in_date: date
    checked_in: bool
    streak_day: int = 0
    diamonds_awarded: int = 0
    xp_awarded: int = 0


class CheckInHistoryResponse(CustomModel):
    user_id: int
    days: int
    total_check_in_days: int
    current_streak: int
    history: List[CheckInDay]
