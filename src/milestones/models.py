from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from src.database import Base
from src.orm_mixins import CreatedAtMixin


class MilestoneClaim(Base, CreatedAtMixin):
    """A streak milestone bonus granted for one streak occurrence"""
    __tablename__ = "milestone_claims"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    milestone_days = Column(Integer, nullable=False)
    streak_occurrence_id = Column(Integer, nullable=False)
    transaction_id = Column(Integer, ForeignKey("diamond_transactions_log.id"), nullable=False)

    __table_args__ = (
        UniqueConstraint(
            'user_id', 'milestone_days', 'streak_occurrence_id',
            name='uq_milestone_claim_user_days_occurrence',
        ),
    )

    user = relationship("User", back_populates="milestone_claims")
