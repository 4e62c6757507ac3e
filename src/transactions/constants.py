# Transaction types written to diamond_transactions_log
DAILY_CHECK_IN = "DAILY_CHECK_IN"
MILESTONE_REWARD_PREFIX = "MILESTONE_REWARD_"
XP_GAIN = "XP_GAIN"
SHOP_PURCHASE = "SHOP_PURCHASE"
GIFTCODE = "GIFTCODE"
ADMIN_ADJUSTMENT = "ADMIN_ADJUSTMENT"


def milestone_transaction_type(milestone_days: int) -> str:
    return f"{MILESTONE_REWARD_PREFIX}{milestone_days}"


# Messages
EMPTY_TRANSACTION = "Giao dịch phải thay đổi kim cương hoặc XP"
INSUFFICIENT_BALANCE = "Số dư kim cương không đủ để trừ"
ADJUSTMENT_SUCCESS = "Điều chỉnh số dư thành công"
