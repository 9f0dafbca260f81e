#main.py
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.pool.events import LoggingEventSink
from app.pool.service import PoolService
from app.providers.factory import get_transfer_provider
from middleware import RequestContextMiddleware
from routes.debug import router as debug_router
from routes.health import router as health_router
from routes.metrics import router as metrics_router
from routes.operator import router as operator_router
from routes.pool import router as pool_router
from services.observability import configure_logging
from settings import settings, validate_env_settings

logger = logging.getLogger("poolpay")


def build_pool_service() -> PoolService:
    return PoolService(
        operator=settings.POOL_OPERATOR_ID,
        provider=get_transfer_provider(),
        min_contribution=settings.POOL_MIN_CONTRIBUTION,
        quota=settings.POOL_QUOTA,
        events=LoggingEventSink(),
    )


def create_app(pool: PoolService | None = None) -> FastAPI:
    configure_logging()
    validate_env_settings()

    app = FastAPI(title="PoolPay API", version="1.0.0")
    app.state.pool = pool or build_pool_service()

    # -----------------------------
    # MIDDLEWARE
    # -----------------------------
    app.add_middleware(RequestContextMiddleware)

    # -----------------------------
    # ROUTERS
    # -----------------------------
    app.include_router(health_router)
    app.include_router(metrics_router)
    app.include_router(pool_router)
    app.include_router(operator_router)
    if settings.DEBUG_TOKENS_ENABLED:
        app.include_router(debug_router)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("unhandled error path=%s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    logger.info(
        "app created env=%s operator=%s transfer_provider=%s",
        settings.ENV,
        settings.POOL_OPERATOR_ID,
        settings.TRANSFER_PROVIDER,
    )
    return app


app = create_app()
