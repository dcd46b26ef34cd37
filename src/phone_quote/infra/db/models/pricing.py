from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    BigInteger,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.dialects.postgresql import ARRAY, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from phone_quote.infra.db.models.base import Base


class RateTableRow(Base):
    """Card machine fee table."""

    __tablename__ = "rate_tables"
    __table_args__ = (Index("ix_rate_tables_store_ids", "store_ids", postgresql_using="gin"),)

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    store_ids: Mapped[list[str]] = mapped_column(ARRAY(String(50)), nullable=False)
    max_installments: Mapped[int] = mapped_column(Integer, nullable=False)
    debit_rate: Mapped[Decimal | None] = mapped_column(
        Numeric(precision=5, scale=2), nullable=True
    )  # percent, 0.00-99.99
    accepts_debit: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    accepts_credit: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    rates: Mapped[list[InstallmentRateRow]] = relationship(
        back_populates="rate_table",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="InstallmentRateRow.installments",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


class InstallmentRateRow(Base):
    __tablename__ = "installment_rates"

    rate_table_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("rate_tables.id", ondelete="CASCADE"), primary_key=True
    )
    installments: Mapped[int] = mapped_column(Integer, primary_key=True)
    fee_percent: Mapped[Decimal] = mapped_column(Numeric(precision=5, scale=2), nullable=False)

    rate_table: Mapped[RateTableRow] = relationship(back_populates="rates")


class ProductPriceRow(Base):
    __tablename__ = "product_prices"

    product_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    store_id: Mapped[str] = mapped_column(String(50), primary_key=True)
    price_cents: Mapped[int] = mapped_column(BigInteger, nullable=False)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


class TradeInRangeRow(Base):
    __tablename__ = "trade_in_ranges"
    __table_args__ = (UniqueConstraint("device_model_id", "store_id"),)

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    device_model_id: Mapped[str] = mapped_column(String(64), nullable=False)
    store_id: Mapped[str] = mapped_column(String(50), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    min_value_cents: Mapped[int] = mapped_column(BigInteger, nullable=False)
    max_value_cents: Mapped[int] = mapped_column(BigInteger, nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


class DamageDeductionRow(Base):
    __tablename__ = "damage_deductions"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    discount_cents: Mapped[int] = mapped_column(BigInteger, nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
