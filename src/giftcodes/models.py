from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from src.database import Base
from src.orm_mixins import CreatedAtMixin, TimestampMixin


class GiftCode(Base, TimestampMixin):
    """Admin-issued code crediting diamonds/XP when redeemed"""
    __tablename__ = "gift_codes"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(50), unique=True, index=True, nullable=False)  # Stored upper-case
    diamond_reward = Column(Integer, default=0, nullable=False)
    xp_reward = Column(Integer, default=0, nullable=False)
    usage_limit = Column(Integer, nullable=True)  # None = unlimited
    usage_count = Column(Integer, default=0, server_default="0", nullable=False)
    max_per_user = Column(Integer, default=1, server_default="1", nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        CheckConstraint("diamond_reward >= 0", name="gift_diamond_reward_non_negative"),
        CheckConstraint("xp_reward >= 0", name="gift_xp_reward_non_negative"),
        CheckConstraint("usage_count >= 0", name="usage_count_non_negative"),
        CheckConstraint("max_per_user > 0", name="max_per_user_positive"),
    )
    __mapper_args__ = {"eager_defaults": True}

    redemptions = relationship("GiftCodeRedemption", back_populates="gift_code")


class GiftCodeRedemption(Base, CreatedAtMixin):
    __tablename__ = "gift_code_redemptions"

    id = Column(Integer, primary_key=True, index=True)
    gift_code_id = Column(Integer, ForeignKey("gift_codes.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    redemption_number = Column(Integer, default=1, nullable=False)  # 1..max_per_user for this user
    transaction_id = Column(Integer, ForeignKey("diamond_transactions_log.id"), nullable=True)

    __table_args__ = (
        UniqueConstraint('gift_code_id', 'user_id', 'redemption_number', name='uq_gift_code_redemption_user_number'),
    )

    gift_code = relationship("GiftCode", back_populates="redemptions")
