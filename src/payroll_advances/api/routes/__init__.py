"""API routes."""

from payroll_advances.api.routes.advances import router as advances_router
from payroll_advances.api.routes.health import router as health_router
from payroll_advances.api.routes.payroll import router as payroll_router

__all__ = ["advances_router", "health_router", "payroll_router"]
