# Messages
XP_GAIN_DESCRIPTION = "Hoạt động {minutes} phút"
XP_GAIN_REASON_DESCRIPTION = "Nhận XP: {reason}"
INVALID_XP_MINUTES = "Số phút hoạt động phải lớn hơn 0"
XP_COOLDOWN = "Bạn vừa nhận XP, vui lòng thử lại sau {seconds} giây"
XP_INCREMENT_SUCCESS = "Đã cộng {xp} XP"
XP_INCREMENT_FAILED = "Không thể cộng XP, vui lòng thử lại"
