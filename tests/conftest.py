"""
Pytest configuration and shared fixtures for testing.

Provides reusable test fixtures:
- make_rules_workbook: Builds an ot_rules.xlsx in memory
- fake_loader: Document loader backed by a dict, recording every call
- fake_clock: Controllable clock for cache expiry tests
- rules_provider: ClientRulesProvider with a fresh cache
- test_client: FastAPI TestClient wired to the fixtures above
"""

import sys
from io import BytesIO
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from openpyxl import Workbook

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# ruff: noqa: E402
from app.core.rules_provider import ClientRulesProvider, RulesCache
from app.main import app
from app.routes.shared import get_config_loader, get_rules_provider

ACME_RULES_PATH = "Umbrella Report Config/Acme/ot_rules.xlsx"

# Cell layout of a typical client workbook
ACME_CELLS = {
    "A3": "RG",
    "B3": "OT",
    "C3": "DT",
    "A4": 8,
    "B4": "8 to 10",
    "C4": "After 10",
    "A10": "Stat Rules",
    "A11": "New Years Day",
    "A12": "Good Friday",
    "A13": "Canada Day",
    "A14": "Christmas Day",
    "A15": "Boxing Day",
    "A26": "Saturday/Sunday",
    "B26": "OT",
    "C26": "After 36",
}


class FakeLoader:
    """Async document loader serving bytes from a dict."""

    def __init__(self, documents: dict[str, bytes] | None = None, error: Exception | None = None):
        self.documents = documents or {}
        self.error = error
        self.calls: list[str] = []

    async def __call__(self, path: str) -> bytes | None:
        self.calls.append(path)
        if self.error is not None:
            raise self.error
        return self.documents.get(path)


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def build_rules_workbook(cells: dict) -> bytes:
    """Create an .xlsx with the given cell values on its first sheet."""
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = "OT Rules"
    for address, value in cells.items():
        worksheet[address] = value
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def make_rules_workbook():
    """Factory fixture: cells dict -> workbook bytes."""
    return build_rules_workbook


@pytest.fixture
def acme_workbook() -> bytes:
    return build_rules_workbook(ACME_CELLS)


@pytest.fixture
def fake_loader(acme_workbook) -> FakeLoader:
    """Loader that knows only Acme's rules workbook."""
    return FakeLoader({ACME_RULES_PATH: acme_workbook})


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rules_provider(fake_clock) -> ClientRulesProvider:
    """Provider with its own empty cache and a five minute TTL."""
    return ClientRulesProvider(RulesCache(ttl_seconds=300, clock=fake_clock))


@pytest.fixture(scope="function")
def test_client(rules_provider, fake_loader):
    """
    Create FastAPI TestClient with provider and loader overrides.

    Yields:
        TestClient: FastAPI test client for API testing
    """
    app.dependency_overrides[get_rules_provider] = lambda: rules_provider
    app.dependency_overrides[get_config_loader] = lambda: fake_loader

    with TestClient(app) as client:
        yield client

    # Clean up
    app.dependency_overrides.clear()
