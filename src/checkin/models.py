from sqlalchemy import Column, Integer, Date, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from src.database import Base
from src.orm_mixins import CreatedAtMixin


class DailyCheckIn(Base, CreatedAtMixin):
    """One row per user per local (UTC+7) calendar day"""
    __tablename__ = "daily_check_ins"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    check_in_date = Column(Date, nullable=False, index=True)
    streak_day = Column(Integer, nullable=False)  # Streak length after this check-in
    diamonds_awarded = Column(Integer, default=0, nullable=False)
    xp_awarded = Column(Integer, default=0, nullable=False)

    __table_args__ = (
        UniqueConstraint('user_id', 'check_in_date', name='uq_daily_check_in_user_date'),
    )

    user = relationship("User", back_populates="daily_check_ins")
