"""API test fixtures with an in-memory ledger."""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from payroll_advances.api.app import create_app
from payroll_advances.api.dependencies import get_ledger
from payroll_advances.ledger import AdvanceLedger


@pytest.fixture
def app(ledger: AdvanceLedger):
    """Application wired to the test ledger."""
    application = create_app()
    application.dependency_overrides[get_ledger] = lambda: ledger
    return application


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
