from fastapi import FastAPI

from phone_quote.entrypoints.http.exception_handlers import register_exception_handlers
from phone_quote.entrypoints.http.routes.bulk_adjustments import router as bulk_adjustments_router
from phone_quote.entrypoints.http.routes.health import router as health_router
from phone_quote.entrypoints.http.routes.quotes import router as quotes_router
from phone_quote.entrypoints.http.routes.trade_ins import router as trade_ins_router
from phone_quote.entrypoints.http.settings import configure_logging


def build_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="Phone Quote API",
        description="""
        Point-of-sale pricing for a phone retailer.

        ## Features
        - Installment quotes grossed up by card machine fees
        - Trade-in valuation with damage deductions
        - Bulk adjustment of prices, trade-in bounds and damage deductions
        - Copyable quote texts for customer messaging

        ## Money
        Amounts are integer cents; fee percentages are decimal strings.

        ## Error Handling
        All errors return structured JSON responses with error codes.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        license_info={
            "name": "Proprietary",
        },
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(quotes_router, prefix="/v1")
    app.include_router(trade_ins_router, prefix="/v1")
    app.include_router(bulk_adjustments_router, prefix="/v1")

    return app


app = build_app()
