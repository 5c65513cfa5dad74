"""
PricingService — computes the price of a plan configuration.

Pure functions over immutable catalog records: no I/O, no session, no
mutation. The same ``compute_total`` runs for the public price preview and
for lead persistence, where the client total is never trusted.

All money is integer euro cents.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping, Sequence
from uuid import UUID


@dataclass(frozen=True)
class PlanRecord:
    """Read-only view of a Plan row."""

    id: UUID
    slug: str
    name: str
    base_price_cents: int
    tagline: str | None = None
    description: str | None = None
    is_highlighted: bool = False
    sort_order: int = 0


@dataclass(frozen=True)
class OptionGroupRecord:
    """Read-only view of an OptionGroup row."""

    id: UUID
    group_type: str  # "quantity" | "switch" | "addon"
    title: str
    description: str | None = None
    sort_order: int = 0


@dataclass(frozen=True)
class OptionRecord:
    """Read-only view of an Option row."""

    id: UUID
    group_id: UUID
    label: str
    unit_price_cents: int
    min_qty: int = 1
    max_qty: int = 1
    default_qty: int = 1
    is_default: bool = False
    description: str | None = None
    sort_order: int = 0


@dataclass(frozen=True)
class Selection:
    """One (option, quantity) entry of a client-held configuration."""

    option_id: UUID
    quantity: int


@dataclass(frozen=True)
class LineItem:
    """Resolved selection with its price."""

    option_id: UUID
    label: str
    quantity: int
    unit_price_cents: int
    total_cents: int


@dataclass(frozen=True)
class PriceQuote:
    """Itemized result of ``compute_total``."""

    plan_id: UUID
    base_price_cents: int
    line_items: tuple[LineItem, ...] = field(default_factory=tuple)
    total_cents: int = 0

    @property
    def options_total_cents(self) -> int:
        return self.total_cents - self.base_price_cents


def compute_total(
    plan: PlanRecord,
    selections: Iterable[Selection],
    catalog_options: Iterable[OptionRecord] | Mapping[UUID, OptionRecord],
) -> PriceQuote:
    """
    Price a plan plus selected options.

    Selections pointing at options missing from the catalog are dropped and
    contribute nothing. Quantities are used as given; bounds are enforced
    where the input is accepted (see ``clamp_quantity``).

    Args:
        plan: Selected base plan.
        selections: Ordered (option_id, quantity) entries.
        catalog_options: Full option catalog, as records or an id index.

    Returns:
        PriceQuote whose line items keep the input order.
    """
    index = _index_options(catalog_options)

    items: list[LineItem] = []
    for selection in selections:
        option = index.get(selection.option_id)
        if option is None:
            continue
        items.append(
            LineItem(
                option_id=option.id,
                label=option.label,
                quantity=selection.quantity,
                unit_price_cents=option.unit_price_cents,
                total_cents=option.unit_price_cents * selection.quantity,
            )
        )

    total = plan.base_price_cents + sum(item.total_cents for item in items)
    return PriceQuote(
        plan_id=plan.id,
        base_price_cents=plan.base_price_cents,
        line_items=tuple(items),
        total_cents=total,
    )


def clamp_quantity(option: OptionRecord, quantity: int) -> int:
    """Force a requested quantity into the option's [min_qty, max_qty] range."""
    return max(option.min_qty, min(option.max_qty, quantity))


def sanitize_selections(
    selections: Iterable[Selection],
    catalog_options: Iterable[OptionRecord] | Mapping[UUID, OptionRecord],
) -> list[Selection]:
    """
    Input-boundary cleanup before pricing.

    Drops unknown options and repeated option ids (first entry wins) and
    clamps every quantity to the option bounds. Order is preserved.
    """
    index = _index_options(catalog_options)
    seen: set[UUID] = set()
    cleaned: list[Selection] = []
    for selection in selections:
        option = index.get(selection.option_id)
        if option is None or selection.option_id in seen:
            continue
        seen.add(selection.option_id)
        cleaned.append(Selection(option.id, clamp_quantity(option, selection.quantity)))
    return cleaned


def default_selections(
    option_groups: Sequence[OptionGroupRecord],
    options: Sequence[OptionRecord],
) -> list[Selection]:
    """
    Initial configuration of the configurator: every ``is_default`` option at
    its ``default_qty``, ordered by group then option ``sort_order``.
    """
    group_rank = {
        group.id: rank
        for rank, group in enumerate(sorted(option_groups, key=lambda g: g.sort_order))
    }
    defaults = [
        option for option in options
        if option.is_default and option.group_id in group_rank
    ]
    defaults.sort(key=lambda o: (group_rank[o.group_id], o.sort_order))
    return [Selection(option.id, option.default_qty) for option in defaults]


def format_price(cents: int) -> str:
    """Email style: ``299900`` -> ``"2999,00 €"``."""
    sign = "-" if cents < 0 else ""
    euros, rest = divmod(abs(cents), 100)
    return f"{sign}{euros},{rest:02d} €"


def format_price_whole(cents: int) -> str:
    """
    Admin list / CSV style (lt-LT grouping, no decimals): ``299900`` -> ``"2\u00a0999"`` (non-breaking space).

    Rounds half up to whole euros.
    """
    sign = "-" if cents < 0 else ""
    euros = (abs(cents) + 50) // 100
    return sign + f"{euros:,}".replace(",", "\u00a0")


def _index_options(
    catalog_options: Iterable[OptionRecord] | Mapping[UUID, OptionRecord],
) -> Mapping[UUID, OptionRecord]:
    if isinstance(catalog_options, Mapping):
        return catalog_options
    return {option.id: option for option in catalog_options}
