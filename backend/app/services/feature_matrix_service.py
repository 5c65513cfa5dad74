"""
FeatureMatrixService — projects flat feature rows into the comparison table.

Input is the flat catalog (groups, features, plan feature values, plans);
output is group -> feature -> per-plan cell, ready for rendering. Sorting is
by ``sort_order`` with Python's stable sort, so equal keys keep input order.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence
from uuid import UUID

from app.services.pricing_service import PlanRecord

CHECK_GLYPH = "✓"
CROSS_GLYPH = "✗"
ABSENT_PLACEHOLDER = "-"


class _Absent:
    """Marker for a (feature, plan) pair without a PlanFeature row."""

    _instance: "_Absent | None" = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()


@dataclass(frozen=True)
class Tooltip:
    text: str | None = None
    link: str | None = None
    image: str | None = None


@dataclass(frozen=True)
class FeatureGroupRecord:
    """Read-only view of a FeatureGroup row."""

    id: UUID
    title: str
    sort_order: int = 0
    tooltip: Tooltip | None = None


@dataclass(frozen=True)
class FeatureRecord:
    """Read-only view of a Feature row."""

    id: UUID
    group_id: UUID
    label: str
    value_type: str  # "boolean" | "text"
    sort_order: int = 0
    tooltip: Tooltip | None = None


@dataclass(frozen=True)
class PlanFeatureRecord:
    """Read-only view of a PlanFeature row."""

    feature_id: UUID
    plan_id: UUID
    value_boolean: bool | None = None
    value_text: str | None = None


@dataclass(frozen=True)
class MatrixCell:
    plan_id: UUID
    value_type: str
    value: object  # bool | str | ABSENT

    @property
    def is_absent(self) -> bool:
        return self.value is ABSENT

    @property
    def display(self) -> str:
        """Glyph for boolean cells, literal text or placeholder for text cells."""
        if self.value_type == "boolean":
            return CHECK_GLYPH if self.value is True else CROSS_GLYPH
        if self.is_absent or not self.value:
            return ABSENT_PLACEHOLDER
        return str(self.value)


@dataclass(frozen=True)
class MatrixRow:
    feature: FeatureRecord
    cells: tuple[MatrixCell, ...]


@dataclass(frozen=True)
class MatrixGroup:
    group: FeatureGroupRecord
    rows: tuple[MatrixRow, ...]


@dataclass(frozen=True)
class FeatureMatrix:
    plans: tuple[PlanRecord, ...]
    groups: tuple[MatrixGroup, ...]


def project_matrix(
    groups: Iterable[FeatureGroupRecord],
    features: Iterable[FeatureRecord],
    plan_features: Iterable[PlanFeatureRecord],
    plans: Iterable[PlanRecord],
) -> FeatureMatrix:
    """
    Build the display-ready comparison matrix.

    Args:
        groups: Feature groups, any order.
        features: Features of all groups, any order.
        plan_features: Stored (feature, plan) values.
        plans: Plans shown as columns.

    Returns:
        FeatureMatrix with one MatrixGroup per input group.
    """
    sorted_plans = tuple(_by_sort_order(plans))
    sorted_groups = _by_sort_order(groups)
    all_features = list(features)

    values: dict[tuple[UUID, UUID], PlanFeatureRecord] = {}
    for pf in plan_features:
        values.setdefault((pf.feature_id, pf.plan_id), pf)

    projected: list[MatrixGroup] = []
    for group in sorted_groups:
        group_features = _by_sort_order(f for f in all_features if f.group_id == group.id)
        rows = tuple(
            MatrixRow(
                feature=feature,
                cells=tuple(
                    MatrixCell(
                        plan_id=plan.id,
                        value_type=feature.value_type,
                        value=_cell_value(feature, values.get((feature.id, plan.id))),
                    )
                    for plan in sorted_plans
                ),
            )
            for feature in group_features
        )
        projected.append(MatrixGroup(group=group, rows=rows))

    return FeatureMatrix(plans=sorted_plans, groups=tuple(projected))


def flatten_matrix(matrix: FeatureMatrix) -> list[PlanFeatureRecord]:
    """Inverse of ``project_matrix``: one record per non-absent cell."""
    flat: list[PlanFeatureRecord] = []
    for group in matrix.groups:
        for row in group.rows:
            for cell in row.cells:
                if cell.is_absent:
                    continue
                if row.feature.value_type == "boolean":
                    flat.append(PlanFeatureRecord(row.feature.id, cell.plan_id, value_boolean=cell.value))
                else:
                    flat.append(PlanFeatureRecord(row.feature.id, cell.plan_id, value_text=cell.value))
    return flat


def _cell_value(feature: FeatureRecord, pf: PlanFeatureRecord | None) -> object:
    if pf is None:
        return ABSENT
    if feature.value_type == "boolean":
        return ABSENT if pf.value_boolean is None else pf.value_boolean
    return ABSENT if pf.value_text is None else pf.value_text


def _by_sort_order(items: Iterable) -> Sequence:
    return sorted(items, key=lambda item: item.sort_order)
