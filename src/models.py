from datetime import datetime
from zoneinfo import ZoneInfo
from typing import Any, Dict

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, ConfigDict


def datetime_to_gmt_str(dt: datetime) -> str:
    """Convert datetime to GMT string format"""
    if not dt.tzinfo:
        dt = dt.replace(tzinfo=ZoneInfo("UTC"))
    return dt.strftime("%Y-%m-%dT%H:%M:%S%z")


class CustomModel(BaseModel):
    """Custom base model with global configurations"""
    model_config = ConfigDict(
        json_encoders={datetime: datetime_to_gmt_str},
        populate_by_name=True,
        from_attributes=True,
    )

    def serializable_dict(self, **kwargs) -> Dict[str, Any]:
        """Return a dict which contains only serializable fields."""
        default_dict = self.model_dump(by_alias=True, **kwargs)
        return jsonable_encoder(default_dict)


# Import all SQLAlchemy models so they are registered with Base.metadata
# (needed by Alembic autogenerate and by create_all in tests)
from src.users.models import UserRole, User
from src.transactions.models import DiamondTransactionLog
from src.rewards.models import CheckInRewardConfig
from src.checkin.models import DailyCheckIn
from src.milestones.models import MilestoneClaim
from src.cosmetics.models import UserInventoryItem
from src.giftcodes.models import GiftCode, GiftCodeRedemption
