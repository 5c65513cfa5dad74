"""
Lead submission payload validation tests.
"""
from __future__ import annotations

from uuid import uuid4

import pytest
from pydantic import ValidationError

from app.schemas.content import SeoSettingsUpdate
from app.schemas.admin import OptionCreate
from app.schemas.lead import LeadCreate


def _payload(**overrides) -> dict:
    data = {
        "name": "Jonas Jonaitis",
        "email": "jonas@example.com",
        "phone": "+37060000000",
        "city": "Vilnius",
        "comment": "Naujas namas",
        "plan_id": str(uuid4()),
        "selected_options": [],
    }
    data.update(overrides)
    return data


def test_valid_payload_is_normalized() -> None:
    lead = LeadCreate(**_payload(name="  Jonas  ", phone="   ", comment=""))

    assert lead.name == "Jonas"
    assert lead.phone is None
    assert lead.comment is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "J"},
        {"name": "   "},
        {"city": "V"},
        {"email": "not-an-email"},
        {"plan_id": "starter"},
        {"selected_options": [{"option_id": str(uuid4()), "quantity": -1}]},
    ],
)
def test_invalid_payload_is_rejected(overrides: dict) -> None:
    with pytest.raises(ValidationError):
        LeadCreate(**_payload(**overrides))


def test_missing_city_is_rejected() -> None:
    data = _payload()
    del data["city"]

    with pytest.raises(ValidationError):
        LeadCreate(**data)


def test_duplicate_option_is_rejected() -> None:
    option_id = str(uuid4())

    with pytest.raises(ValidationError) as exc_info:
        LeadCreate(
            **_payload(
                selected_options=[
                    {"option_id": option_id, "quantity": 1},
                    {"option_id": option_id, "quantity": 2},
                ]
            )
        )

    assert "selected more than once" in str(exc_info.value)


def test_option_quantity_bounds_must_be_ordered() -> None:
    with pytest.raises(ValidationError):
        OptionCreate(group_id=uuid4(), label="Variklis", min_qty=2, default_qty=1, max_qty=5)

    option = OptionCreate(group_id=uuid4(), label="Variklis", min_qty=1, default_qty=2, max_qty=20)
    assert option.default_qty == 2


def test_seo_blank_fields_become_null() -> None:
    seo = SeoSettingsUpdate(meta_title="  ", robots_txt="User-agent: *\nDisallow: /admin\n")

    assert seo.meta_title is None
    assert seo.robots_txt.startswith("User-agent")
