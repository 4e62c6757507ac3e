from datetime import datetime, timezone

from sqlalchemy import Column, DateTime
from sqlalchemy.sql import func


class SoftDeleteMixin:
    """Mixin to add soft-delete support via `deleted_at` timestamp.

    Rows are considered active when deleted_at IS NULL.
    """
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    def soft_delete(self) -> None:
        self.deleted_at = datetime.now(timezone.utc)


class CreatedAtMixin:
    """Mixin for append-only rows: only a creation timestamp."""
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class TimestampMixin:
    """Mixin to add created_at and updated_at timestamps."""
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=True)
