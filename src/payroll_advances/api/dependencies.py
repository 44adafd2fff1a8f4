"""FastAPI dependencies for dependency injection."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from payroll_advances.config import get_settings
from payroll_advances.ledger import AdvanceLedger, LedgerStorage, create_key_value_store
from payroll_advances.services import PayrollService


@lru_cache(maxsize=1)
def _configured_ledger() -> AdvanceLedger:
    settings = get_settings()
    return AdvanceLedger(LedgerStorage(create_key_value_store(settings)))


def get_ledger() -> AdvanceLedger:
    """Get the process-wide ledger built from settings."""
    return _configured_ledger()


def get_payroll_service(ledger: Annotated[AdvanceLedger, Depends(get_ledger)]) -> PayrollService:
    """Get a payroll service over the ledger."""
    return PayrollService(ledger)


# Type aliases for cleaner dependency injection
Ledger = Annotated[AdvanceLedger, Depends(get_ledger)]
Payroll = Annotated[PayrollService, Depends(get_payroll_service)]
