"""
Dependency injection for FastAPI routes.

Database sessions are per-request; use cases and repositories are built
fresh for each request around that session.
"""

from __future__ import annotations

from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from phone_quote.adapters.postgres_pricing_config_repository import (
    PostgresPricingConfigRepository,
)
from phone_quote.entrypoints.http.settings import quote_label
from phone_quote.infra.db.session import get_session
from phone_quote.use_cases.apply_bulk_adjustment import ApplyBulkAdjustment
from phone_quote.use_cases.assess_store_trade_in import AssessStoreTradeIn
from phone_quote.use_cases.build_store_quote import BuildStoreQuote
from phone_quote.use_cases.calculate_quote import CalculateQuote
from phone_quote.use_cases.list_store_rate_tables import ListStoreRateTables


def get_db() -> Generator[Session, None, None]:
    """
    Provides a database session for a single request.

    The underlying get_session() commits on success, rolls back on
    exception and always closes the session.

    Yields:
        Session: SQLAlchemy database session (per-request)
    """
    with get_session() as session:
        yield session


def get_pricing_config_repository(
    db: Session = Depends(get_db),
) -> PostgresPricingConfigRepository:
    return PostgresPricingConfigRepository(session=db)


def get_calculate_quote_use_case() -> CalculateQuote:
    """The calculator is stateless and needs no database."""
    return CalculateQuote()


def get_build_store_quote_use_case(
    repository: PostgresPricingConfigRepository = Depends(get_pricing_config_repository),
) -> BuildStoreQuote:
    return BuildStoreQuote(repository=repository)


def get_list_rate_tables_use_case(
    repository: PostgresPricingConfigRepository = Depends(get_pricing_config_repository),
) -> ListStoreRateTables:
    return ListStoreRateTables(repository=repository)


def get_assess_store_trade_in_use_case(
    repository: PostgresPricingConfigRepository = Depends(get_pricing_config_repository),
) -> AssessStoreTradeIn:
    return AssessStoreTradeIn(repository=repository)


def get_apply_bulk_adjustment_use_case(
    repository: PostgresPricingConfigRepository = Depends(get_pricing_config_repository),
) -> ApplyBulkAdjustment:
    """
    Bulk adjustments write through the request session: every successful
    item is committed when the request ends, failed items are left as they were.
    """
    return ApplyBulkAdjustment(repository=repository)


def get_quote_label() -> str:
    return quote_label()
