"""
Pricing calculator tests.
"""
from __future__ import annotations

from uuid import uuid4

import pytest

from app.services.pricing_service import (
    OptionRecord,
    PlanRecord,
    Selection,
    clamp_quantity,
    compute_total,
    default_selections,
    format_price,
    format_price_whole,
    sanitize_selections,
)
from tests.conftest import (
    BASIC_SWITCH_ID,
    BLIND_MOTOR_ID,
    CLIMATE_ID,
    GLASS_SWITCH_ID,
    LIGHT_POINT_ID,
    STARTER_ID,
)


def test_empty_selection_totals_to_base_price(demo_catalog) -> None:
    starter = demo_catalog.plan(STARTER_ID)

    quote = compute_total(starter, [], demo_catalog.options)

    assert quote.total_cents == 299900
    assert quote.base_price_cents == 299900
    assert quote.line_items == ()
    assert quote.options_total_cents == 0


def test_starter_with_ten_light_points(demo_catalog) -> None:
    starter = demo_catalog.plan(STARTER_ID)

    quote = compute_total(starter, [Selection(LIGHT_POINT_ID, 10)], demo_catalog.options)

    assert quote.total_cents == 344900
    assert len(quote.line_items) == 1
    item = quote.line_items[0]
    assert item.label == "Apšvietimo taškas"
    assert item.unit_price_cents == 4500
    assert item.total_cents == 45000


def test_unknown_option_is_dropped() -> None:
    plan = PlanRecord(id=uuid4(), slug="p", name="P", base_price_cents=0)
    known = OptionRecord(id=uuid4(), group_id=uuid4(), label="Stiklinis", unit_price_cents=8500, max_qty=5)

    quote = compute_total(plan, [Selection(known.id, 2), Selection(uuid4(), 1)], [known])

    assert len(quote.line_items) == 1
    assert quote.line_items[0].total_cents == 17000
    assert quote.total_cents == 17000


def test_line_items_keep_selection_order(demo_catalog) -> None:
    starter = demo_catalog.plan(STARTER_ID)
    selections = [
        Selection(CLIMATE_ID, 1),
        Selection(LIGHT_POINT_ID, 3),
        Selection(GLASS_SWITCH_ID, 1),
    ]

    quote = compute_total(starter, selections, demo_catalog.options_by_id)

    assert [i.option_id for i in quote.line_items] == [CLIMATE_ID, LIGHT_POINT_ID, GLASS_SWITCH_ID]
    assert quote.total_cents == 299900 + 45000 + 3 * 4500 + 8500


def test_total_is_base_plus_line_items(demo_catalog) -> None:
    starter = demo_catalog.plan(STARTER_ID)
    selections = [Selection(BLIND_MOTOR_ID, 4), Selection(BASIC_SWITCH_ID, 1)]

    quote = compute_total(starter, selections, demo_catalog.options)

    assert quote.total_cents == quote.base_price_cents + sum(i.total_cents for i in quote.line_items)
    assert quote.options_total_cents == 60000


def test_compute_total_uses_quantities_as_given(demo_catalog) -> None:
    starter = demo_catalog.plan(STARTER_ID)

    quote = compute_total(starter, [Selection(BLIND_MOTOR_ID, 0)], demo_catalog.options)

    assert quote.line_items[0].quantity == 0
    assert quote.total_cents == 299900


@pytest.mark.parametrize(
    ("requested", "expected"),
    [(0, 1), (1, 1), (7, 7), (20, 20), (500, 20)],
)
def test_clamp_quantity(demo_catalog, requested: int, expected: int) -> None:
    motor = demo_catalog.options_by_id[BLIND_MOTOR_ID]
    assert clamp_quantity(motor, requested) == expected


def test_sanitize_selections_drops_unknown_and_duplicates(demo_catalog) -> None:
    stale = uuid4()
    selections = [
        Selection(LIGHT_POINT_ID, 250),
        Selection(stale, 3),
        Selection(LIGHT_POINT_ID, 5),
        Selection(GLASS_SWITCH_ID, 1),
    ]

    cleaned = sanitize_selections(selections, demo_catalog.options)

    assert cleaned == [Selection(LIGHT_POINT_ID, 100), Selection(GLASS_SWITCH_ID, 1)]


def test_default_selections_follow_group_then_option_order(demo_catalog) -> None:
    defaults = default_selections(
        list(reversed(demo_catalog.option_groups)),
        list(reversed(demo_catalog.options)),
    )

    assert defaults == [Selection(LIGHT_POINT_ID, 10), Selection(BASIC_SWITCH_ID, 1)]


def test_default_configuration_price(demo_catalog) -> None:
    starter = demo_catalog.plan(STARTER_ID)
    defaults = default_selections(demo_catalog.option_groups, demo_catalog.options)

    assert compute_total(starter, defaults, demo_catalog.options).total_cents == 344900


@pytest.mark.parametrize(
    ("cents", "expected"),
    [(299900, "2999,00 €"), (4500, "45,00 €"), (0, "0,00 €"), (5, "0,05 €"), (-150, "-1,50 €")],
)
def test_format_price(cents: int, expected: str) -> None:
    assert format_price(cents) == expected


@pytest.mark.parametrize(
    ("cents", "expected"),
    [(299900, "2\u00a0999"), (1234567, "12\u00a0346"), (50, "1"), (49, "0"), (99999900, "999\u00a0999")],
)
def test_format_price_whole(cents: int, expected: str) -> None:
    assert format_price_whole(cents) == expected
