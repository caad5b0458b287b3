"""
State snapshot model.

Stores the serialized platform state under a well-known key, replacing the
whole payload on each save.
"""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base


class StateSnapshot(Base):
    """
    Whole-state snapshot.

    Used to:
    - Restore the platform after restart
    - Reset to demo data by deleting the row
    """

    __tablename__ = "state_snapshots"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    key: Mapped[str] = mapped_column(
        String(64), nullable=False, unique=True, index=True
    )

    payload: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)

    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    def __repr__(self) -> str:
        return f"<StateSnapshot(key={self.key!r}, version={self.version})>"
