"""
Pytest fixtures for backend API and service tests.
"""
from __future__ import annotations

from collections.abc import AsyncGenerator
from datetime import datetime
from uuid import UUID, uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.core.database import get_db
from app.core.rate_limit import lead_rate_limit
from app.main import app
from app.services.catalog_service import Catalog
from app.services.pricing_service import OptionGroupRecord, OptionRecord, PlanRecord

# Stable ids for the demo catalog used across tests.
STARTER_ID = UUID("00000000-0000-0000-0000-000000000001")
PROFESSIONAL_ID = UUID("00000000-0000-0000-0000-000000000002")
LIGHT_POINT_ID = UUID("00000000-0000-0000-0000-0000000000a1")
BLIND_MOTOR_ID = UUID("00000000-0000-0000-0000-0000000000a2")
BASIC_SWITCH_ID = UUID("00000000-0000-0000-0000-0000000000b1")
GLASS_SWITCH_ID = UUID("00000000-0000-0000-0000-0000000000b2")
CLIMATE_ID = UUID("00000000-0000-0000-0000-0000000000c1")

QUANTITY_GROUP_ID = UUID("00000000-0000-0000-0000-00000000000a")
SWITCH_GROUP_ID = UUID("00000000-0000-0000-0000-00000000000b")
ADDON_GROUP_ID = UUID("00000000-0000-0000-0000-00000000000c")


def make_demo_catalog() -> Catalog:
    """Subset of the seeded catalog with its real prices."""
    plans = [
        PlanRecord(id=STARTER_ID, slug="starter", name="Pradinis", base_price_cents=299900, sort_order=0),
        PlanRecord(
            id=PROFESSIONAL_ID,
            slug="professional",
            name="Profesionalus",
            base_price_cents=599900,
            is_highlighted=True,
            sort_order=1,
        ),
    ]
    groups = [
        OptionGroupRecord(id=QUANTITY_GROUP_ID, group_type="quantity", title="Apšvietimo taškai", sort_order=0),
        OptionGroupRecord(id=SWITCH_GROUP_ID, group_type="switch", title="Jungiklio tipas", sort_order=1),
        OptionGroupRecord(id=ADDON_GROUP_ID, group_type="addon", title="Papildomos funkcijos", sort_order=2),
    ]
    options = [
        OptionRecord(
            id=LIGHT_POINT_ID, group_id=QUANTITY_GROUP_ID, label="Apšvietimo taškas",
            unit_price_cents=4500, min_qty=1, max_qty=100, default_qty=10, is_default=True, sort_order=0,
        ),
        OptionRecord(
            id=BLIND_MOTOR_ID, group_id=QUANTITY_GROUP_ID, label="Žaliuzių variklis",
            unit_price_cents=15000, min_qty=1, max_qty=20, default_qty=2, sort_order=1,
        ),
        OptionRecord(
            id=BASIC_SWITCH_ID, group_id=SWITCH_GROUP_ID, label="Bazinis plastikinis",
            unit_price_cents=0, is_default=True, sort_order=0,
        ),
        OptionRecord(
            id=GLASS_SWITCH_ID, group_id=SWITCH_GROUP_ID, label="Stiklinis jutiklinis",
            unit_price_cents=8500, sort_order=1,
        ),
        OptionRecord(
            id=CLIMATE_ID, group_id=ADDON_GROUP_ID, label="Klimato valdymas",
            unit_price_cents=45000, sort_order=0,
        ),
    ]
    return Catalog(plans=plans, option_groups=groups, options=options)


class FakeResult:
    """
    Minimal SQLAlchemy-like result object.
    """

    def __init__(self, item: object | None = None, items: list[object] | None = None) -> None:
        self._item = item
        self._items = items or []

    def scalar_one_or_none(self) -> object | None:
        return self._item

    def scalar_one(self) -> object | None:
        return self._item

    def scalars(self) -> "FakeResult":
        return self

    def all(self) -> list[object]:
        return list(self._items)


class FakeDBSession:
    """
    Minimal async session: records added rows and fills server-side defaults.

    ``execute`` answers from the ``results`` queue, then with empty results.
    """

    def __init__(self) -> None:
        self.added: list[object] = []
        self.deleted: list[object] = []
        self.results: list[FakeResult] = []
        self.commits = 0

    async def execute(self, _statement: object) -> FakeResult:
        if self.results:
            return self.results.pop(0)
        return FakeResult()

    def add(self, row: object) -> None:
        if getattr(row, "id", None) is None:
            setattr(row, "id", uuid4())
        now = datetime.utcnow()
        for attr in ("created_at", "updated_at"):
            if hasattr(type(row), attr) and getattr(row, attr, None) is None:
                setattr(row, attr, now)
        self.added.append(row)

    async def delete(self, row: object) -> None:
        self.deleted.append(row)

    async def flush(self) -> None:
        return None

    async def refresh(self, _row: object) -> None:
        return None

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        return None

    async def close(self) -> None:
        return None


@pytest.fixture
def demo_catalog() -> Catalog:
    return make_demo_catalog()


@pytest.fixture
def fake_db() -> FakeDBSession:
    return FakeDBSession()


@pytest_asyncio.fixture
async def client(fake_db: FakeDBSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Async HTTP client with the database and rate limiter overridden.
    """

    async def override_get_db() -> AsyncGenerator[FakeDBSession, None]:
        yield fake_db

    async def no_rate_limit() -> None:
        return None

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[lead_rate_limit] = no_rate_limit

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://testserver",
    ) as async_client:
        yield async_client

    app.dependency_overrides.clear()
