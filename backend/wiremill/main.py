"""
Wiremill backend: stock ledger, BOM-validated conversions and tax invoices
for a wire drawing / annealing unit.

ARCHITECTURE:
- FastAPI routers: thin, one call into a service each
- Services: all business rules; take the SQLAlchemy Session explicitly
- SQLite (default) or any SQLAlchemy backend: source of truth for stock

The engine and session factory belong to the app instance built by
create_app(); there is no process-wide database handle.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wiremill.api.routes import bom, conversions, invoices, receipts, stock
from wiremill.core.config import settings
from wiremill.core.exceptions import WiremillError, unhandled_error_handler, wiremill_error_handler
from wiremill.db.init_db import init_db
from wiremill.db.session import create_db_engine, create_session_factory

logger = logging.getLogger(__name__)


def configure_logging(level: str = settings.LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(database_url: Optional[str] = None) -> FastAPI:
    configure_logging()
    engine = create_db_engine(database_url or settings.DATABASE_URL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Initializing database...")
        init_db(engine)
        yield
        engine.dispose()
        logger.info("Database engine disposed")

    app = FastAPI(
        title="Wiremill API",
        description="RM receipts, BOM-validated RM -> FG conversions, stock and tax invoices.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "Accept", "Origin"],
        max_age=600,
    )

    @app.middleware("http")
    async def add_security_headers(request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response

    app.add_exception_handler(WiremillError, wiremill_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(bom.router, prefix="/bom", tags=["bom"])
    app.include_router(stock.router, prefix="/stock", tags=["stock"])
    app.include_router(conversions.router, prefix="/outward-challans", tags=["outward-challans"])
    app.include_router(invoices.router, prefix="/tax-invoices", tags=["tax-invoices"])
    app.include_router(receipts.router, prefix="/grn", tags=["grn"])

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "wiremill.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
