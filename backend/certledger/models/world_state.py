"""World State ORM: one row per ledger key.

Invariants:
    - key is the primary key; a put on an existing key replaces value and document
    - value holds the exact bytes written; document is its JSON object form, or NULL
      when the bytes are not a JSON object (such rows never match a selector)
"""

from datetime import datetime, timezone

from sqlalchemy import String, LargeBinary, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from certledger.db.base import Base


class WorldStateEntry(Base):
    """Current value of a single ledger key."""
    __tablename__ = "world_state"

    key: Mapped[str] = mapped_column(String(512), primary_key=True)
    value: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    document: Mapped[dict | None] = mapped_column(
        JSON(none_as_null=True), nullable=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
