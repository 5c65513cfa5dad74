"""
Seed Catalog — loads the demo plans, configurator options, feature matrix and site text.

Usage:
    cd backend
    python -m scripts.seed_catalog            # only into an empty catalog
    python -m scripts.seed_catalog --reset    # wipe catalog tables first
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from sqlalchemy import delete, func, select

from app.core.database import AsyncSessionLocal
from app.models.content import SiteContent
from app.models.feature import Feature, FeatureGroup, PlanFeature
from app.models.option import Option, OptionGroup
from app.models.plan import Plan

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger(__name__)

PLANS = [
    {
        "slug": "starter",
        "name": "Pradinis",
        "tagline": "Idealus pradžiai",
        "description": "KNX valdiklis\nIki 10 apšvietimo taškų\nBazinis jungiklis\nMobili aplikacija",
        "base_price_cents": 299900,
        "is_highlighted": False,
        "sort_order": 0,
    },
    {
        "slug": "professional",
        "name": "Profesionalus",
        "tagline": "Populiariausias pasirinkimas",
        "description": (
            "KNX valdiklis\nIki 30 apšvietimo taškų\nStiklinis jungiklis\nMobili aplikacija\n"
            "Žaliuzių valdymas\nKlimatizacijos integracija"
        ),
        "base_price_cents": 599900,
        "is_highlighted": True,
        "sort_order": 1,
    },
    {
        "slug": "premium",
        "name": "Premium",
        "tagline": "Viskas įskaičiuota",
        "description": (
            "KNX valdiklis\nNeriboti apšvietimo taškai\nPremium jungiklis\nMobili aplikacija\n"
            "Žaliuzių valdymas\nKlimatizacijos integracija\nApsaugos sistema\n"
            "Multimedia integracija\n24/7 palaikymas"
        ),
        "base_price_cents": 999900,
        "is_highlighted": False,
        "sort_order": 2,
    },
]

# (group, options); option tuples are (label, description, unit_price_cents, min, max, default, is_default)
OPTION_GROUPS = [
    (
        {"group_type": "quantity", "title": "Apšvietimo taškai",
         "description": "Pasirinkite apšvietimo taškų skaičių"},
        [
            ("Apšvietimo taškas", "Vienas LED apšvietimo taškas", 4500, 1, 100, 10, True),
            ("Žaliuzių variklis", "Automatinis žaliuzių valdymas", 15000, 1, 20, 2, False),
        ],
    ),
    (
        {"group_type": "switch", "title": "Jungiklio tipas",
         "description": "Pasirinkite jungiklio dizainą"},
        [
            ("Bazinis plastikinis", "Standartinis plastikinis jungiklis", 0, 1, 1, 1, True),
            ("Stiklinis jutiklinis", "Elegantiškas stiklinis jungiklis", 8500, 1, 1, 1, False),
            ("Premium metalinis", "Aukščiausios kokybės metalinis jungiklis", 15000, 1, 1, 1, False),
        ],
    ),
    (
        {"group_type": "addon", "title": "Papildomos funkcijos",
         "description": "Išplėskite savo sistemą"},
        [
            ("Klimato valdymas", "Šildymo ir vėdinimo integracija", 45000, 1, 1, 1, False),
            ("Apsaugos sistema", "Signalizacija ir jutikliai", 75000, 1, 1, 1, False),
            ("Multimedija", "Garso ir vaizdo sistema", 55000, 1, 1, 1, False),
        ],
    ),
]

# (group title, [(label, value_type, (starter, professional, premium))])
FEATURE_GROUPS = [
    (
        "Aparatūra",
        [
            ("KNX valdiklis", "boolean", (True, True, True)),
            ("Apšvietimo taškai", "text", ("Iki 10", "Iki 30", "Neribota")),
            ("Jungiklio tipas", "text", ("Bazinis", "Stiklinis", "Premium")),
            ("Žaliuzių valdymas", "boolean", (False, True, True)),
        ],
    ),
    (
        "Programinė įranga",
        [
            ("Mobili aplikacija", "boolean", (True, True, True)),
            ("Balso valdymas", "boolean", (False, True, True)),
            ("Scenarijai", "text", ("5", "20", "Neribota")),
        ],
    ),
    (
        "Palaikymas",
        [
            ("Garantija", "text", ("2 metai", "5 metai", "Visą laiką")),
            ("Techninė pagalba", "text", ("El. paštu", "Telefonu", "24/7")),
            ("Mokymai", "boolean", (False, True, True)),
        ],
    ),
]

SITE_CONTENT = [
    {"key": "header", "heading": "KNX Smart Home", "cta_label": "Pasirinkti planą"},
    {
        "key": "hero",
        "heading": "Išmanus namas su KNX technologija",
        "body": (
            "Automatizuokite savo namus su pasauliniu standartu. Valdykite apšvietimą, "
            "šildymą, žaliuzes ir kitus prietaisus iš vienos sistemos."
        ),
        "cta_label": "Pasirinkti planą",
    },
    {"key": "contact", "heading": "Susisiekite", "body": "Vilnius, Lietuva"},
    {
        "key": "footer",
        "heading": "KNX Smart Home",
        "body": (
            "Profesionalios namų automatizacijos sprendimai su KNX technologija. "
            "Sertifikuoti specialistai su ilgamete patirtimi."
        ),
    },
]


async def seed(reset: bool) -> None:
    async with AsyncSessionLocal() as db:
        existing = int((await db.execute(select(func.count()).select_from(Plan))).scalar_one())
        if existing and not reset:
            logger.error("Catalog already has %d plans; rerun with --reset to replace it", existing)
            sys.exit(1)

        if reset:
            for model in (PlanFeature, Feature, FeatureGroup, Option, OptionGroup, Plan, SiteContent):
                await db.execute(delete(model))
            logger.info("Catalog tables cleared")

        plans = [Plan(**data) for data in PLANS]
        db.add_all(plans)

        for sort_order, (group_data, options) in enumerate(OPTION_GROUPS):
            group = OptionGroup(sort_order=sort_order, **group_data)
            for opt_order, (label, desc, price, min_qty, max_qty, default_qty, is_default) in enumerate(options):
                group.options.append(
                    Option(
                        label=label,
                        description=desc,
                        unit_price_cents=price,
                        min_qty=min_qty,
                        max_qty=max_qty,
                        default_qty=default_qty,
                        is_default=is_default,
                        sort_order=opt_order,
                    )
                )
            db.add(group)

        value_count = 0
        for sort_order, (title, features) in enumerate(FEATURE_GROUPS):
            group = FeatureGroup(title=title, sort_order=sort_order)
            for feat_order, (label, value_type, values) in enumerate(features):
                feature = Feature(label=label, value_type=value_type, sort_order=feat_order)
                for plan, value in zip(plans, values):
                    if value_type == "boolean":
                        feature.plan_features.append(PlanFeature(plan=plan, value_boolean=value))
                    else:
                        feature.plan_features.append(PlanFeature(plan=plan, value_text=value))
                    value_count += 1
                group.features.append(feature)
            db.add(group)

        db.add_all(SiteContent(**data) for data in SITE_CONTENT)
        await db.commit()

    logger.info(
        "Seeded %d plans, %d option groups, %d feature groups, %d plan values, %d content blocks",
        len(PLANS), len(OPTION_GROUPS), len(FEATURE_GROUPS), value_count, len(SITE_CONTENT),
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the demo KNX catalog")
    parser.add_argument("--reset", action="store_true", help="Delete existing catalog rows first")
    args = parser.parse_args()
    asyncio.run(seed(args.reset))


if __name__ == "__main__":
    main()
