"""
Admin API tests: dashboard, catalog management, lead export and error mapping.
"""
from __future__ import annotations

from datetime import date, datetime
from types import SimpleNamespace
from uuid import uuid4

import pytest
from fastapi import HTTPException, status
from httpx import AsyncClient

from app.api.v1.endpoints.admin import _raise_catalog_http_error, _raise_lead_http_error
from app.services.catalog_service import CatalogServiceError
from app.services.lead_service import LeadService, LeadServiceError
from tests.conftest import FakeResult


def _lead_row(**overrides) -> SimpleNamespace:
    data = {
        "id": uuid4(),
        "name": "Jonas Jonaitis",
        "email": "jonas@example.com",
        "phone": None,
        "city": "Vilnius",
        "comment": None,
        "plan_id": None,
        "plan_name": "Pradinis",
        "selected_options": [],
        "total_price_cents": 344900,
        "created_at": datetime(2026, 3, 5, 14, 7),
    }
    data.update(overrides)
    return SimpleNamespace(**data)


@pytest.mark.asyncio
async def test_dashboard(client: AsyncClient, monkeypatch) -> None:
    recent = [_lead_row(), _lead_row(name="Ona")]

    async def fake_stats(_db):
        return {
            "active_plans": 3,
            "total_leads": 2,
            "total_value_cents": 689800,
            "recent_leads": recent,
        }

    monkeypatch.setattr(LeadService, "dashboard_stats", staticmethod(fake_stats))

    response = await client.get("/api/v1/admin/dashboard")

    assert response.status_code == 200, response.text
    data = response.json()
    assert data["active_plans"] == 3
    assert data["total_value_cents"] == 689800
    assert [lead["name"] for lead in data["recent_leads"]] == ["Jonas Jonaitis", "Ona"]


@pytest.mark.asyncio
async def test_lead_csv_export(client: AsyncClient, monkeypatch) -> None:
    async def fake_export(_db, *, search=None):
        assert search == "vilnius"
        return [_lead_row()]

    monkeypatch.setattr(LeadService, "export_leads", staticmethod(fake_export))

    response = await client.get("/api/v1/admin/leads/export", params={"search": "vilnius"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    expected_name = f"uzklausos_{date.today().isoformat()}.csv"
    assert expected_name in response.headers["content-disposition"]
    lines = response.text.splitlines()
    assert lines[0] == '"Vardas","El. paštas","Telefonas","Miestas","Planas","Kaina","Data"'
    assert lines[1] == '"Jonas Jonaitis","jonas@example.com","","Vilnius","Pradinis","3\u00a0449","2026-03-05 14:07"'


@pytest.mark.asyncio
async def test_lead_list_pagination(client: AsyncClient, monkeypatch) -> None:
    async def fake_list(_db, *, page, limit, search):
        return [_lead_row()], 41

    monkeypatch.setattr(LeadService, "list_leads", staticmethod(fake_list))

    response = await client.get("/api/v1/admin/leads", params={"page": 2, "limit": 20})

    assert response.status_code == 200, response.text
    assert response.json()["pagination"] == {"total": 41, "page": 2, "pages": 3, "limit": 20}


@pytest.mark.asyncio
async def test_missing_lead_is_404(client: AsyncClient) -> None:
    response = await client.get(f"/api/v1/admin/leads/{uuid4()}")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_create_plan_slug_conflict(client: AsyncClient, fake_db) -> None:
    fake_db.results.append(FakeResult(SimpleNamespace(id=uuid4(), slug="starter")))

    response = await client.post(
        "/api/v1/admin/plans",
        json={"slug": "starter", "name": "Pradinis", "base_price_cents": 299900},
    )

    assert response.status_code == 409
    assert fake_db.added == []


@pytest.mark.asyncio
async def test_create_plan(client: AsyncClient, fake_db) -> None:
    response = await client.post(
        "/api/v1/admin/plans",
        json={"slug": "verslo", "name": "Verslo", "base_price_cents": 1499900, "is_highlighted": False},
    )

    assert response.status_code == 201, response.text
    data = response.json()
    assert data["slug"] == "verslo"
    assert data["is_active"] is True
    assert len(fake_db.added) == 1


@pytest.mark.asyncio
async def test_create_plan_rejects_negative_price(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/admin/plans",
        json={"slug": "pigus", "name": "Pigus", "base_price_cents": -1},
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_update_option_checks_merged_bounds(client: AsyncClient, fake_db) -> None:
    option = SimpleNamespace(
        id=uuid4(), group_id=uuid4(), label="Žaliuzių variklis", description=None,
        unit_price_cents=15000, min_qty=1, max_qty=20, default_qty=2, is_default=False, sort_order=1,
    )
    fake_db.results.append(FakeResult(option))

    response = await client.patch(f"/api/v1/admin/options/{option.id}", json={"max_qty": 1})

    assert response.status_code == 422
    assert option.max_qty == 20


@pytest.mark.asyncio
async def test_update_option_price(client: AsyncClient, fake_db) -> None:
    option = SimpleNamespace(
        id=uuid4(), group_id=uuid4(), label="Žaliuzių variklis", description=None,
        unit_price_cents=15000, min_qty=1, max_qty=20, default_qty=2, is_default=False, sort_order=1,
    )
    fake_db.results.append(FakeResult(option))

    response = await client.patch(f"/api/v1/admin/options/{option.id}", json={"unit_price_cents": 16000})

    assert response.status_code == 200, response.text
    assert response.json()["unit_price_cents"] == 16000


@pytest.mark.asyncio
async def test_delete_missing_plan_is_404(client: AsyncClient) -> None:
    response = await client.delete(f"/api/v1/admin/plans/{uuid4()}")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_plan_feature_batch_upsert(client: AsyncClient, fake_db) -> None:
    feature_id, plan_a, plan_b = uuid4(), uuid4(), uuid4()
    existing = SimpleNamespace(feature_id=feature_id, plan_id=plan_a, value_boolean=False, value_text=None)
    fake_db.results.extend(
        [
            FakeResult(items=[SimpleNamespace(id=feature_id, value_type="boolean")]),
            FakeResult(items=[plan_a, plan_b]),
            FakeResult(items=[existing]),
        ]
    )

    response = await client.put(
        "/api/v1/admin/plan-features",
        json={
            "updates": [
                {"feature_id": str(feature_id), "plan_id": str(plan_a), "value_boolean": True},
                {"feature_id": str(feature_id), "plan_id": str(plan_b), "value_boolean": False},
            ]
        },
    )

    assert response.status_code == 200, response.text
    assert response.json() == {"created": 1, "updated": 1}
    assert existing.value_boolean is True
    (created,) = fake_db.added
    assert created.plan_id == plan_b
    assert created.value_boolean is False


@pytest.mark.asyncio
async def test_plan_feature_unknown_feature_is_404(client: AsyncClient, fake_db) -> None:
    response = await client.put(
        "/api/v1/admin/plan-features",
        json={"updates": [{"feature_id": str(uuid4()), "plan_id": str(uuid4()), "value_boolean": True}]},
    )

    assert response.status_code == 404
    assert fake_db.added == []


@pytest.mark.asyncio
async def test_plan_feature_unknown_plan_is_404(client: AsyncClient, fake_db) -> None:
    feature_id = uuid4()
    fake_db.results.extend(
        [
            FakeResult(items=[SimpleNamespace(id=feature_id, value_type="boolean")]),
            FakeResult(items=[]),
        ]
    )

    response = await client.put(
        "/api/v1/admin/plan-features",
        json={"updates": [{"feature_id": str(feature_id), "plan_id": str(uuid4()), "value_boolean": True}]},
    )

    assert response.status_code == 404
    assert fake_db.added == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("value_type", "value"),
    [("boolean", {"value_text": "Iki 10"}), ("text", {"value_boolean": True})],
)
async def test_plan_feature_value_must_match_type(
    client: AsyncClient, fake_db, value_type: str, value: dict
) -> None:
    feature_id, plan_id = uuid4(), uuid4()
    fake_db.results.extend(
        [
            FakeResult(items=[SimpleNamespace(id=feature_id, value_type=value_type)]),
            FakeResult(items=[plan_id]),
        ]
    )

    response = await client.put(
        "/api/v1/admin/plan-features",
        json={"updates": [{"feature_id": str(feature_id), "plan_id": str(plan_id), **value}]},
    )

    assert response.status_code == 422
    assert fake_db.added == []


@pytest.mark.asyncio
async def test_unknown_site_content_key(client: AsyncClient) -> None:
    response = await client.put("/api/v1/admin/site-content/sidebar", json={"heading": "X"})

    assert response.status_code == 422


@pytest.mark.parametrize(
    ("code", "expected_status"),
    [
        ("lead_not_found", status.HTTP_404_NOT_FOUND),
        ("lead_error", status.HTTP_400_BAD_REQUEST),
    ],
)
def test_raise_lead_http_error_maps_service_codes(code: str, expected_status: int) -> None:
    with pytest.raises(HTTPException) as exc_info:
        _raise_lead_http_error(LeadServiceError("klaida", code=code))

    assert exc_info.value.status_code == expected_status


@pytest.mark.parametrize(
    ("code", "expected_status"),
    [
        ("feature_not_found", status.HTTP_404_NOT_FOUND),
        ("plan_not_found", status.HTTP_404_NOT_FOUND),
        ("value_type_mismatch", status.HTTP_422_UNPROCESSABLE_ENTITY),
        ("catalog_error", status.HTTP_400_BAD_REQUEST),
    ],
)
def test_raise_catalog_http_error_maps_service_codes(code: str, expected_status: int) -> None:
    with pytest.raises(HTTPException) as exc_info:
        _raise_catalog_http_error(CatalogServiceError("klaida", code=code))

    assert exc_info.value.status_code == expected_status
