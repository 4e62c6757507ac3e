# Messages
INVALID_MILESTONE = "Mốc thưởng không hợp lệ."
STREAK_NOT_REACHED = "Bạn chưa đạt chuỗi {days} ngày."
REWARD_NOT_CONFIGURED = "Mốc thưởng {days} ngày chưa được cấu hình."
ALREADY_CLAIMED = "Bạn đã nhận thưởng mốc này rồi."
CLAIM_SUCCESS = "Nhận thành công {diamonds} Kim Cương & {xp} XP!"
CLAIM_DESCRIPTION = "Thưởng chuỗi {days} ngày"
CLAIM_FAILED = "Nhận thưởng thất bại, vui lòng thử lại sau."
