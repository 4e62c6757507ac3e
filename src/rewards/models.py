from sqlalchemy import Column, Integer, Boolean, Index, CheckConstraint, text
from src.database import Base
from src.orm_mixins import SoftDeleteMixin, TimestampMixin


class CheckInRewardConfig(Base, SoftDeleteMixin, TimestampMixin):
    """Admin-managed payout for a streak length"""
    __tablename__ = "check_in_rewards"

    id = Column(Integer, primary_key=True, index=True)
    consecutive_days = Column(Integer, nullable=False)
    diamond_reward = Column(Integer, default=0, nullable=False)
    xp_reward = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    __table_args__ = (
        # At most one active row per streak length
        Index(
            "check_in_rewards_active_consecutive_days_key",
            "consecutive_days",
            unique=True,
            postgresql_where=text("is_active AND deleted_at IS NULL"),
            sqlite_where=text("is_active = 1 AND deleted_at IS NULL"),
        ),
        CheckConstraint("consecutive_days > 0", name="consecutive_days_positive"),
        CheckConstraint("diamond_reward >= 0", name="diamond_reward_non_negative"),
        CheckConstraint("xp_reward >= 0", name="xp_reward_non_negative"),
    )
    __mapper_args__ = {"eager_defaults": True}
