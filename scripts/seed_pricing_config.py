#!/usr/bin/env python3
"""
Seed the pricing configuration tables with the demo store network.

Features:
- Deterministic: the same three stores, card machines, phones and damages every run
- Idempotent: safe to run multiple times (clears before seeding)
- Store prices follow the demo pattern: Belém +R$ 200, Ananindeua +R$ 100

Usage:
    python scripts/seed_pricing_config.py
    # or via Docker:
    docker compose run --rm api uv run python scripts/seed_pricing_config.py
"""

from __future__ import annotations

import sys
from decimal import Decimal
from pathlib import Path

# Add src to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from phone_quote.domain.money import format_brl
from phone_quote.infra.db.models.pricing import (
    DamageDeductionRow,
    InstallmentRateRow,
    ProductPriceRow,
    RateTableRow,
    TradeInRangeRow,
)
from phone_quote.infra.db.session import get_session


# ==============================================================================
# Stores and Card Machines
# ==============================================================================

STORES = ["castanhal", "belem", "ananindeua"]

# Store price offsets relative to Castanhal, in cents
STORE_PRICE_OFFSETS = {"castanhal": 0, "belem": 20000, "ananindeua": 10000}


def _stepped_rates(max_installments: int, first_fee: str) -> dict[int, Decimal]:
    """1x is fee-free; from 2x the fee starts at first_fee and grows one point per installment."""
    start = Decimal(first_fee)
    rates = {1: Decimal("0")}
    for installments in range(2, max_installments + 1):
        rates[installments] = start + (installments - 2)
    return rates


RATE_TABLES = [
    {
        "id": "stone-castanhal",
        "name": "Stone",
        "store_ids": ["castanhal"],
        "max_installments": 12,
        "rates": _stepped_rates(12, "2.5"),
        "debit_rate": Decimal("1.2"),
        "accepts_debit": True,
    },
    {
        "id": "rede-castanhal",
        "name": "Rede",
        "store_ids": ["castanhal"],
        "max_installments": 18,
        "rates": _stepped_rates(18, "2.8"),
        "debit_rate": Decimal("1.8"),
        "accepts_debit": True,
    },
    {
        "id": "stone-belem",
        "name": "Stone",
        "store_ids": ["belem"],
        "max_installments": 12,
        "rates": _stepped_rates(12, "2.5"),
        "debit_rate": Decimal("1.2"),
        "accepts_debit": True,
    },
    {
        "id": "mercadopago-belem",
        "name": "Mercado Pago",
        "store_ids": ["belem"],
        "max_installments": 12,
        "rates": _stepped_rates(12, "3.0"),
        "debit_rate": None,
        "accepts_debit": False,
    },
    {
        "id": "stone-ananindeua",
        "name": "Stone",
        "store_ids": ["ananindeua"],
        "max_installments": 12,
        "rates": _stepped_rates(12, "2.5"),
        "debit_rate": Decimal("1.2"),
        "accepts_debit": True,
    },
    {
        "id": "pagseguro-ananindeua",
        "name": "PagSeguro",
        "store_ids": ["ananindeua"],
        "max_installments": 10,
        "rates": _stepped_rates(10, "2.9"),
        "debit_rate": Decimal("1.5"),
        "accepts_debit": True,
    },
]


# ==============================================================================
# Phones, Trade-in Ranges and Damages (values in cents)
# ==============================================================================

# (product id, name, Castanhal price, trade-in min, trade-in max) at Castanhal
PHONES = [
    ("1", "iPhone 15 Pro Max 512GB", 999900, 750000, 850000),
    ("2", "iPhone 15 Pro 256GB", 799900, 600000, 700000),
    ("3", "iPhone 15 128GB", 599900, 450000, 520000),
    ("4", "iPhone 15 Pro Max 1TB", 1249900, 950000, 1100000),
    ("5", "iPhone 14 Pro Max 256GB", 699900, 520000, 620000),
    ("7", "iPhone 13 Pro 256GB", 419900, 280000, 380000),
    ("8", "iPhone 12 64GB", 279900, 180000, 240000),
    ("9", "iPhone 11 128GB", 219900, 140000, 190000),
    ("10", "Samsung Galaxy S24 Ultra 256GB", 749900, 420000, 520000),
    ("12", "Samsung Galaxy A54 128GB", 189900, 100000, 140000),
    ("15", "Xiaomi 14 Ultra 512GB", 599900, 380000, 440000),
    ("19", "Motorola Moto G84 128GB", 129900, 90000, 115000),
]

# Trade-in bounds shift by the same amount at each store, in cents
TRADE_IN_OFFSETS = {"castanhal": 0, "belem": 10000, "ananindeua": 5000}

DAMAGES = [
    ("display-broken", "Display Quebrado", 45000),
    ("battery-drain", "Bateria Vicia Rápido", 20000),
    ("camera-main", "Câmera Principal", 25000),
    ("water-damage", "Danos por Água", 40000),
    ("charging-port", "Entrada de Carregamento", 9000),
]


# ==============================================================================
# Row Builders
# ==============================================================================


def build_rate_tables() -> list[RateTableRow]:
    rows = []
    for table in RATE_TABLES:
        row = RateTableRow(
            id=table["id"],
            name=table["name"],
            store_ids=table["store_ids"],
            max_installments=table["max_installments"],
            debit_rate=table["debit_rate"],
            accepts_debit=table["accepts_debit"],
            accepts_credit=True,
            active=True,
        )
        row.rates = [
            InstallmentRateRow(installments=installments, fee_percent=fee)
            for installments, fee in table["rates"].items()
        ]
        rows.append(row)
    return rows


def build_product_prices() -> list[ProductPriceRow]:
    return [
        ProductPriceRow(
            product_id=product_id,
            store_id=store_id,
            price_cents=price + STORE_PRICE_OFFSETS[store_id],
        )
        for product_id, _, price, _, _ in PHONES
        for store_id in STORES
    ]


def build_trade_in_ranges() -> list[TradeInRangeRow]:
    return [
        TradeInRangeRow(
            device_model_id=product_id,
            store_id=store_id,
            name=name,
            min_value_cents=min_value + TRADE_IN_OFFSETS[store_id],
            max_value_cents=max_value + TRADE_IN_OFFSETS[store_id],
            active=True,
        )
        for product_id, name, _, min_value, max_value in PHONES
        for store_id in STORES
    ]


def build_damage_deductions() -> list[DamageDeductionRow]:
    return [
        DamageDeductionRow(id=damage_id, name=name, discount_cents=discount, position=position)
        for position, (damage_id, name, discount) in enumerate(DAMAGES)
    ]


def seed_pricing_config() -> None:
    print("🌱 Seeding pricing configuration...")

    with get_session() as session:
        # Step 1: Clear existing data (idempotent); rates cascade from rate tables
        print("🗑️  Clearing existing configuration...")
        for model in (
            InstallmentRateRow,
            RateTableRow,
            ProductPriceRow,
            TradeInRangeRow,
            DamageDeductionRow,
        ):
            deleted = session.query(model).delete()
            print(f"   Deleted {deleted} rows from {model.__tablename__}")

        # Step 2: Insert the demo network
        rate_tables = build_rate_tables()
        prices = build_product_prices()
        trade_ins = build_trade_in_ranges()
        damages = build_damage_deductions()

        session.add_all([*rate_tables, *prices, *trade_ins, *damages])
        session.flush()

        print(
            f"✅ Seeded {len(rate_tables)} rate tables, {len(prices)} prices, "
            f"{len(trade_ins)} trade-in ranges and {len(damages)} damages!"
        )

        print("\n📊 Sample prices at Castanhal:")
        for product_id, name, price, _, _ in PHONES[:5]:
            print(f"   {product_id}. {name} - {format_brl(price)}")


# ==============================================================================
# Main
# ==============================================================================


if __name__ == "__main__":
    try:
        seed_pricing_config()
    except Exception as e:
        print(f"❌ Error seeding database: {e}", file=sys.stderr)
        sys.exit(1)
