from enum import Enum


class CheckInState(str, Enum):
    """Where a user stands relative to the current local day"""
    NEVER_CHECKED_IN = "never_checked_in"
    CHECKED_IN_TODAY = "checked_in_today"
    CHECKED_IN_YESTERDAY = "checked_in_yesterday"
    MISSED_AT_LEAST_ONE_DAY = "missed_at_least_one_day"


# Messages
ALREADY_CHECKED_IN = "Bạn đã điểm danh hôm nay rồi."
CHECK_IN_SUCCESS = "Điểm danh thành công! Bạn nhận được {diamonds} Kim cương và {xp} XP."
CHECK_IN_DESCRIPTION = "Điểm danh ngày thứ {day}"
CHECK_IN_FAILED = "Điểm danh thất bại, vui lòng thử lại sau."

# History
DEFAULT_HISTORY_DAYS = 30
MAX_HISTORY_DAYS = 90
