from datetime import datetime
from typing import Optional
from pydantic import Field

from src.models import CustomModel


class TransactionResponse(CustomModel):
    id: int = Field(..., description="ID giao dịch")
    user_id: int = Field(..., description="ID người dùng")
    amount: int = Field(..., description="Số kim cương thay đổi (âm nếu bị trừ)")
    xp_amount: int = Field(0, description="Số XP thay đổi")
    transaction_type: str = Field(..., description="Loại giao dịch")
    description: Optional[str] = Field(None, description="Mô tả")
    created_at: datetime = Field(..., description="Thời gian tạo")


class BalanceAdjustmentRequest(CustomModel):
    user_id: int = Field(..., description="ID người dùng")
    amount: int = Field(0, description="Số kim cương cộng/trừ")
    xp_amount: int = Field(0, ge=0, description="Số XP cộng thêm")
    description: str = Field(..., min_length=1, max_length=255, description="Lý do điều chỉnh")


class BalanceAdjustmentResponse(CustomModel):
    message: str
    new_diamonds: int = Field(..., alias="newDiamonds")
    new_xp: int = Field(..., alias="newXp")
    transaction: TransactionResponse
