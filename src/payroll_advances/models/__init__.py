"""SQLAlchemy ORM models."""

from payroll_advances.models.base import Base, TimestampMixin
from payroll_advances.models.ledger_state import LedgerStateEntry

__all__ = ["Base", "LedgerStateEntry", "TimestampMixin"]
