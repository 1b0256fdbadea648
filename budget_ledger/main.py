import logging
from contextlib import asynccontextmanager
from typing import Annotated

import uvicorn
from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from budget_ledger import __version__
from budget_ledger.config import Settings, get_settings
from budget_ledger.database import create_db_engine, create_session_factory, get_db, init_db
from budget_ledger.logging_config import configure_logging
from budget_ledger.routers import (
    budget_distributions,
    codewise_budget,
    economic_codes,
    expenses,
    messages,
    upazila,
    uploads,
    users,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Error envelope: every failure is returned as {"error": "..."}
# ---------------------------------------------------------------------------


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path", "form")]
        field = ".".join(loc) or "request"
        parts.append(f"{field}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts) or "Invalid request"


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = {"error": str(exc.detail)}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _format_validation_errors(exc)
    logger.debug("%s %s rejected: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application.

    The database engine is created when the application starts (lifespan)
    and disposed when it stops; handlers reach it only through ``get_db``.

    Args:
        settings: Explicit settings (tests); defaults to ``get_settings()``.
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = create_db_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
        init_db(engine)
        app.state.engine = engine
        app.state.session_factory = create_session_factory(engine)
        logger.info("%s started", settings.APP_NAME)
        try:
            yield
        finally:
            engine.dispose()
            logger.info("%s stopped, database engine disposed", settings.APP_NAME)

    app = FastAPI(
        title=settings.APP_NAME,
        version=__version__,
        debug=settings.DEBUG,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    @app.get("/", include_in_schema=False)
    def root():
        return f"{settings.APP_NAME} Server is Running!"

    @app.get("/health")
    def health_check(db: Annotated[Session, Depends(get_db)]):
        try:
            db.execute(text("SELECT 1"))
            database = "ok"
        except SQLAlchemyError:
            logger.warning("Health check could not reach the database", exc_info=True)
            database = "error"
        return {"status": "ok", "app": settings.APP_NAME, "database": database}

    # -----------------------------------------------------------------------
    # Routers
    # -----------------------------------------------------------------------

    app.include_router(users.router)
    app.include_router(upazila.router)
    app.include_router(economic_codes.router)
    app.include_router(budget_distributions.router)
    app.include_router(codewise_budget.router)
    app.include_router(expenses.router)
    app.include_router(messages.router)
    app.include_router(uploads.router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve ``app`` with uvicorn on the configured port."""
    settings = get_settings()
    uvicorn.run(
        "budget_ledger.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
