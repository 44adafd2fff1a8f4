"""Key-value rows holding the serialized ledger collections."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from payroll_advances.models.base import Base, TimestampMixin


class LedgerStateEntry(Base, TimestampMixin):
    """One persisted collection, keyed like a browser storage slot."""

    __tablename__ = "ledger_state"

    key: Mapped[str] = mapped_column(String(128), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
