from sqlalchemy import Column, Integer, String, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship
from src.database import Base
from src.orm_mixins import CreatedAtMixin


class DiamondTransactionLog(Base, CreatedAtMixin):
    """Append-only ledger of every diamond and XP delta"""
    __tablename__ = "diamond_transactions_log"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    amount = Column(Integer, default=0, server_default="0", nullable=False)  # signed diamonds
    xp_amount = Column(Integer, default=0, server_default="0", nullable=False)  # signed XP
    transaction_type = Column(String(50), nullable=False)
    description = Column(String(255), nullable=True)
    reference_key = Column(String(100), nullable=True)

    __table_args__ = (
        Index(
            "diamond_transactions_log_user_type_created_idx",
            "user_id", "transaction_type", "created_at",
        ),
        Index("diamond_transactions_log_user_created_idx", "user_id", "created_at"),
        CheckConstraint("amount <> 0 OR xp_amount <> 0", name="non_zero_delta"),
    )
    __mapper_args__ = {"eager_defaults": True}

    user = relationship("User", back_populates="transactions")
