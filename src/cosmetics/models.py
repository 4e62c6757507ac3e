from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from src.database import Base
from src.orm_mixins import CreatedAtMixin


class UserInventoryItem(Base, CreatedAtMixin):
    """Shop cosmetic owned by a user"""
    __tablename__ = "user_inventory"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    item_id = Column(String(50), nullable=False)
    transaction_id = Column(Integer, ForeignKey("diamond_transactions_log.id"), nullable=True)

    __table_args__ = (
        UniqueConstraint('user_id', 'item_id', name='uq_user_inventory_user_item'),
    )

    user = relationship("User", back_populates="inventory_items")
