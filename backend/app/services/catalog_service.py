"""
CatalogService — reads plans, options and features as flat collections.

ORM rows are converted into the frozen records consumed by
``pricing_service`` and ``feature_matrix_service``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.feature import Feature, FeatureGroup, PlanFeature
from app.models.option import Option, OptionGroup
from app.models.plan import Plan
from app.services.feature_matrix_service import (
    FeatureGroupRecord,
    FeatureRecord,
    PlanFeatureRecord,
    Tooltip,
)
from app.services.pricing_service import OptionGroupRecord, OptionRecord, PlanRecord


@dataclass
class Catalog:
    """Flat snapshot of everything the configurator needs."""

    plans: list[PlanRecord] = field(default_factory=list)
    option_groups: list[OptionGroupRecord] = field(default_factory=list)
    options: list[OptionRecord] = field(default_factory=list)

    def plan(self, plan_id: UUID) -> Optional[PlanRecord]:
        return next((p for p in self.plans if p.id == plan_id), None)

    @property
    def options_by_id(self) -> dict[UUID, OptionRecord]:
        return {o.id: o for o in self.options}


@dataclass
class FeatureCatalog:
    """Flat snapshot of the comparison matrix tables."""

    plans: list[PlanRecord] = field(default_factory=list)
    groups: list[FeatureGroupRecord] = field(default_factory=list)
    features: list[FeatureRecord] = field(default_factory=list)
    plan_features: list[PlanFeatureRecord] = field(default_factory=list)


def plan_record(row: Plan) -> PlanRecord:
    return PlanRecord(
        id=row.id,
        slug=row.slug,
        name=row.name,
        base_price_cents=row.base_price_cents,
        tagline=row.tagline,
        description=row.description,
        is_highlighted=bool(row.is_highlighted),
        sort_order=row.sort_order or 0,
    )


def option_group_record(row: OptionGroup) -> OptionGroupRecord:
    return OptionGroupRecord(
        id=row.id,
        group_type=row.group_type,
        title=row.title,
        description=row.description,
        sort_order=row.sort_order or 0,
    )


def option_record(row: Option) -> OptionRecord:
    return OptionRecord(
        id=row.id,
        group_id=row.group_id,
        label=row.label,
        unit_price_cents=row.unit_price_cents,
        min_qty=row.min_qty,
        max_qty=row.max_qty,
        default_qty=row.default_qty,
        is_default=bool(row.is_default),
        description=row.description,
        sort_order=row.sort_order or 0,
    )


def _tooltip(row: FeatureGroup | Feature) -> Optional[Tooltip]:
    if not row.tooltip_enabled:
        return None
    return Tooltip(text=row.tooltip_text, link=row.tooltip_link, image=row.tooltip_image)


def feature_group_record(row: FeatureGroup) -> FeatureGroupRecord:
    return FeatureGroupRecord(
        id=row.id,
        title=row.title,
        sort_order=row.sort_order or 0,
        tooltip=_tooltip(row),
    )


def feature_record(row: Feature) -> FeatureRecord:
    return FeatureRecord(
        id=row.id,
        group_id=row.group_id,
        label=row.label,
        value_type=row.value_type,
        sort_order=row.sort_order or 0,
        tooltip=_tooltip(row),
    )


def plan_feature_record(row: PlanFeature) -> PlanFeatureRecord:
    return PlanFeatureRecord(
        feature_id=row.feature_id,
        plan_id=row.plan_id,
        value_boolean=row.value_boolean,
        value_text=row.value_text,
    )


class CatalogServiceError(Exception):
    """Domain error for catalog writes."""

    def __init__(self, detail: str, *, code: str = "catalog_error") -> None:
        super().__init__(detail)
        self.detail = detail
        self.code = code


class CatalogService:
    """Async loaders for the public catalog and matrix writes."""

    @staticmethod
    async def list_plans(db: AsyncSession, *, include_inactive: bool = False) -> list[Plan]:
        stmt = select(Plan).order_by(Plan.sort_order)
        if not include_inactive:
            stmt = stmt.where(Plan.is_active.is_(True))
        return list((await db.execute(stmt)).scalars().all())

    @staticmethod
    async def load_catalog(db: AsyncSession) -> Catalog:
        """Active plans with every option group and option."""
        plans = await CatalogService.list_plans(db)
        groups = (
            await db.execute(select(OptionGroup).order_by(OptionGroup.sort_order))
        ).scalars().all()
        options = (
            await db.execute(select(Option).order_by(Option.sort_order))
        ).scalars().all()
        return Catalog(
            plans=[plan_record(p) for p in plans],
            option_groups=[option_group_record(g) for g in groups],
            options=[option_record(o) for o in options],
        )

    @staticmethod
    async def load_feature_catalog(db: AsyncSession) -> FeatureCatalog:
        """Active plans and the full comparison matrix tables."""
        plans = await CatalogService.list_plans(db)
        groups = (
            await db.execute(select(FeatureGroup).order_by(FeatureGroup.sort_order))
        ).scalars().all()
        features = (
            await db.execute(select(Feature).order_by(Feature.sort_order))
        ).scalars().all()
        plan_features = (await db.execute(select(PlanFeature))).scalars().all()
        return FeatureCatalog(
            plans=[plan_record(p) for p in plans],
            groups=[feature_group_record(g) for g in groups],
            features=[feature_record(f) for f in features],
            plan_features=[plan_feature_record(pf) for pf in plan_features],
        )

    @staticmethod
    async def upsert_plan_features(db: AsyncSession, updates: list[dict]) -> tuple[int, int]:
        """
        Insert or update matrix values keyed by (feature_id, plan_id).

        Returns:
            Tuple of (created, updated) row counts.

        Raises:
            CatalogServiceError: unknown feature or plan id, or a value that
                does not match the feature's value_type.
        """
        if not updates:
            return 0, 0
        feature_ids = {u["feature_id"] for u in updates}
        plan_ids = {u["plan_id"] for u in updates}

        features = {
            f.id: f
            for f in (await db.execute(select(Feature).where(Feature.id.in_(feature_ids)))).scalars().all()
        }
        missing = feature_ids - set(features)
        if missing:
            raise CatalogServiceError(
                f"Funkcija nerasta: {sorted(str(i) for i in missing)[0]}", code="feature_not_found"
            )
        known_plans = set(
            (await db.execute(select(Plan.id).where(Plan.id.in_(plan_ids)))).scalars().all()
        )
        missing = plan_ids - known_plans
        if missing:
            raise CatalogServiceError(
                f"Planas nerastas: {sorted(str(i) for i in missing)[0]}", code="plan_not_found"
            )
        for u in updates:
            value_type = features[u["feature_id"]].value_type
            if value_type == "boolean" and u.get("value_text") is not None:
                raise CatalogServiceError(
                    "Taip/ne funkcijai negalima nurodyti teksto", code="value_type_mismatch"
                )
            if value_type == "text" and u.get("value_boolean") is not None:
                raise CatalogServiceError(
                    "Tekstinei funkcijai negalima nurodyti taip/ne reikšmės", code="value_type_mismatch"
                )

        existing = (
            await db.execute(select(PlanFeature).where(PlanFeature.feature_id.in_(feature_ids)))
        ).scalars().all()
        by_key = {(pf.feature_id, pf.plan_id): pf for pf in existing}

        created = updated = 0
        for u in updates:
            key = (u["feature_id"], u["plan_id"])
            row = by_key.get(key)
            if row is None:
                row = PlanFeature(
                    feature_id=u["feature_id"],
                    plan_id=u["plan_id"],
                    value_boolean=u.get("value_boolean"),
                    value_text=u.get("value_text"),
                )
                db.add(row)
                by_key[key] = row
                created += 1
            else:
                row.value_boolean = u.get("value_boolean")
                row.value_text = u.get("value_text")
                updated += 1
        await db.flush()
        return created, updated
