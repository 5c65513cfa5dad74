"""
Feature comparison matrix projection tests.
"""
from __future__ import annotations

from uuid import uuid4

from app.services.feature_matrix_service import (
    ABSENT,
    ABSENT_PLACEHOLDER,
    CHECK_GLYPH,
    CROSS_GLYPH,
    FeatureGroupRecord,
    FeatureRecord,
    PlanFeatureRecord,
    flatten_matrix,
    project_matrix,
)
from app.services.pricing_service import PlanRecord


def _plans() -> list[PlanRecord]:
    return [
        PlanRecord(id=uuid4(), slug="premium", name="Premium", base_price_cents=999900, sort_order=2),
        PlanRecord(id=uuid4(), slug="starter", name="Pradinis", base_price_cents=299900, sort_order=0),
        PlanRecord(id=uuid4(), slug="professional", name="Profesionalus", base_price_cents=599900, sort_order=1),
    ]


def _catalog():
    plans = _plans()
    hardware = FeatureGroupRecord(id=uuid4(), title="Aparatūra", sort_order=0)
    support = FeatureGroupRecord(id=uuid4(), title="Palaikymas", sort_order=1)
    controller = FeatureRecord(id=uuid4(), group_id=hardware.id, label="KNX valdiklis", value_type="boolean", sort_order=0)
    points = FeatureRecord(id=uuid4(), group_id=hardware.id, label="Apšvietimo taškai", value_type="text", sort_order=1)
    warranty = FeatureRecord(id=uuid4(), group_id=support.id, label="Garantija", value_type="text", sort_order=0)
    return plans, [support, hardware], [warranty, points, controller]


def test_group_count_matches_input() -> None:
    plans, groups, features = _catalog()
    empty_group = FeatureGroupRecord(id=uuid4(), title="Tuščia", sort_order=5)

    matrix = project_matrix(groups + [empty_group], features, [], plans)

    assert len(matrix.groups) == 3
    assert matrix.groups[-1].rows == ()


def test_groups_features_and_plans_are_sorted() -> None:
    plans, groups, features = _catalog()

    matrix = project_matrix(groups, features, [], plans)

    assert [g.group.title for g in matrix.groups] == ["Aparatūra", "Palaikymas"]
    assert [r.feature.label for r in matrix.groups[0].rows] == ["KNX valdiklis", "Apšvietimo taškai"]
    assert [p.slug for p in matrix.plans] == ["starter", "professional", "premium"]
    for group in matrix.groups:
        for row in group.rows:
            assert [c.plan_id for c in row.cells] == [p.id for p in matrix.plans]


def test_equal_sort_order_keeps_input_order() -> None:
    group = FeatureGroupRecord(id=uuid4(), title="G")
    first = FeatureRecord(id=uuid4(), group_id=group.id, label="first", value_type="boolean")
    second = FeatureRecord(id=uuid4(), group_id=group.id, label="second", value_type="boolean")
    third = FeatureRecord(id=uuid4(), group_id=group.id, label="third", value_type="boolean")

    matrix = project_matrix([group], [first, second, third], [], _plans())

    assert [r.feature.label for r in matrix.groups[0].rows] == ["first", "second", "third"]


def test_absent_is_distinct_from_false() -> None:
    plans, groups, features = _catalog()
    controller = next(f for f in features if f.label == "KNX valdiklis")
    starter = next(p for p in plans if p.slug == "starter")
    professional = next(p for p in plans if p.slug == "professional")
    values = [
        PlanFeatureRecord(controller.id, starter.id, value_boolean=False),
        PlanFeatureRecord(controller.id, professional.id, value_boolean=True),
    ]

    matrix = project_matrix(groups, features, values, plans)
    cells = {c.plan_id: c for c in matrix.groups[0].rows[0].cells}

    assert cells[starter.id].value is False
    assert not cells[starter.id].is_absent
    assert cells[professional.id].value is True
    premium_cell = next(c for pid, c in cells.items() if pid not in (starter.id, professional.id))
    assert premium_cell.value is ABSENT
    assert premium_cell.is_absent


def test_cell_display() -> None:
    plans, groups, features = _catalog()
    controller = next(f for f in features if f.label == "KNX valdiklis")
    points = next(f for f in features if f.label == "Apšvietimo taškai")
    starter = next(p for p in plans if p.slug == "starter")
    professional = next(p for p in plans if p.slug == "professional")
    values = [
        PlanFeatureRecord(controller.id, starter.id, value_boolean=True),
        PlanFeatureRecord(controller.id, professional.id, value_boolean=False),
        PlanFeatureRecord(points.id, starter.id, value_text="Iki 10"),
        PlanFeatureRecord(points.id, professional.id, value_text=""),
    ]

    matrix = project_matrix(groups, features, values, plans)
    controller_row, points_row = matrix.groups[0].rows

    assert [c.display for c in controller_row.cells] == [CHECK_GLYPH, CROSS_GLYPH, CROSS_GLYPH]
    assert [c.display for c in points_row.cells] == ["Iki 10", ABSENT_PLACEHOLDER, ABSENT_PLACEHOLDER]


def test_flatten_round_trip() -> None:
    plans, groups, features = _catalog()
    controller = next(f for f in features if f.label == "KNX valdiklis")
    warranty = next(f for f in features if f.label == "Garantija")
    values = [
        PlanFeatureRecord(controller.id, plans[0].id, value_boolean=True),
        PlanFeatureRecord(controller.id, plans[1].id, value_boolean=False),
        PlanFeatureRecord(warranty.id, plans[2].id, value_text="5 metai"),
    ]

    flat = flatten_matrix(project_matrix(groups, features, values, plans))

    assert set(flat) == set(values)


def test_inputs_are_not_mutated() -> None:
    plans, groups, features = _catalog()
    snapshot = (list(plans), list(groups), list(features))

    project_matrix(groups, features, [], plans)

    assert (plans, groups, features) == snapshot


def test_values_for_unlisted_plans_are_ignored() -> None:
    plans, groups, features = _catalog()
    controller = next(f for f in features if f.label == "KNX valdiklis")
    values = [PlanFeatureRecord(controller.id, uuid4(), value_boolean=True)]

    matrix = project_matrix(groups, features, values, plans)

    assert all(c.is_absent for c in matrix.groups[0].rows[0].cells)
    assert flatten_matrix(matrix) == []
