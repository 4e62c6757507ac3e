"""
Models for Users module
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum, CheckConstraint
from sqlalchemy.orm import relationship
from src.database import Base
from src.orm_mixins import SoftDeleteMixin, TimestampMixin
from src.leveling.utils import level_for_xp
import enum


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    USER = "user"


class User(Base, SoftDeleteMixin, TimestampMixin):
    """User account, also holding the diamond/XP balances and check-in streak"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    username = Column(String(100), unique=True, index=True, nullable=False)
    full_name = Column(String(255), nullable=True)
    hashed_password = Column(String(255), nullable=True)
    role = Column(Enum(UserRole), default=UserRole.USER, nullable=False)
    is_active = Column(Boolean, default=True)
    avatar_url = Column(String(500), nullable=True)

    # Balances - only changed together with a diamond_transactions_log row
    diamonds = Column(Integer, default=0, server_default="0", nullable=False)
    xp = Column(Integer, default=0, server_default="0", nullable=False)

    # Check-in streak
    consecutive_check_in_days = Column(Integer, default=0, server_default="0", nullable=False)
    last_check_in_at = Column(DateTime(timezone=True), nullable=True)
    streak_occurrence_id = Column(Integer, default=0, server_default="0", nullable=False)

    # Read by cosmetic unlock rules
    creation_count = Column(Integer, default=0, server_default="0", nullable=False)
    equipped_frame_id = Column(String(50), nullable=True)
    equipped_title_id = Column(String(50), nullable=True)

    __table_args__ = (
        CheckConstraint("diamonds >= 0", name="diamonds_non_negative"),
        CheckConstraint("xp >= 0", name="xp_non_negative"),
        CheckConstraint("consecutive_check_in_days >= 0", name="streak_non_negative"),
    )

    # Relationships
    transactions = relationship("DiamondTransactionLog", back_populates="user")
    daily_check_ins = relationship("DailyCheckIn", back_populates="user")
    milestone_claims = relationship("MilestoneClaim", back_populates="user")
    inventory_items = relationship("UserInventoryItem", back_populates="user")

    @property
    def level(self) -> int:
        return level_for_xp(self.xp or 0)
