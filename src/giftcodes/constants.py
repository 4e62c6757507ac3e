# Error messages
GIFT_CODE_NOT_FOUND = "Giftcode không tồn tại."
GIFT_CODE_INACTIVE = "Giftcode đã bị vô hiệu hóa."
GIFT_CODE_EXPIRED = "Giftcode đã hết hạn."
GIFT_CODE_EXHAUSTED = "Giftcode đã hết lượt sử dụng."
GIFT_CODE_ALREADY_REDEEMED = "Bạn đã sử dụng giftcode này rồi."
GIFT_CODE_ALREADY_EXISTS = "Mã {code} đã tồn tại."
GIFT_CODE_REDEEM_FAILED = "Không thể sử dụng giftcode, vui lòng thử lại"

# Success messages
GIFT_CODE_REDEEMED = "Nhận thành công {diamonds} Kim Cương & {xp} XP!"
GIFT_CODE_DEACTIVATED = "Đã vô hiệu hóa giftcode {code}"

REDEEM_DESCRIPTION = "Nhập giftcode {code}"
