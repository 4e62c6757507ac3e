# Streak lengths eligible for the one-time milestone bonus.
# Payout amounts come from the reward catalog; eligibility does not.
MILESTONE_DAYS = (7, 14, 30)

# Error messages
REWARD_NOT_FOUND = "Không tìm thấy cấu hình thưởng"
REWARD_ALREADY_EXISTS = "Đã có cấu hình thưởng cho mốc {days} ngày"

# Success messages
REWARD_DELETED = "Đã xóa cấu hình thưởng mốc {days} ngày"
