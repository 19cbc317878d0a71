"""FastAPI application factory"""

import logging
import time
import sentry_sdk
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import SQLModel

import src.domain  # noqa: F401  (registers tables on SQLModel.metadata)
from src.api.error import register_error_handlers
from src.api.routes import accounts, bundles
from src.depends import create_session_factory

logger = logging.getLogger(__name__)


def _init_sentry(config):
    sentry_sdk.init(
        dsn=config.DSN_SENTRY,
        environment=config.SENTRY_ENVIRONMENT,
    )
    logger.info(f"Sentry enabled (environment={config.SENTRY_ENVIRONMENT})")


def create_app(config) -> FastAPI:
    logging.basicConfig(
        level=getattr(logging, str(config.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if config.ENABLE_SENTRY and config.DSN_SENTRY:
        _init_sentry(config)

    engine, session_factory = create_session_factory(config.DB_URI)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if config.CREATE_SCHEMA_ON_STARTUP:
            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
            logger.info("Database schema ready")
        yield
        await engine.dispose()

    app = FastAPI(
        title="Airtime Bundles API",
        description="Airtime wallet, bundle catalog and bundle purchase",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.engine = engine
    app.state.session_factory = session_factory

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=config.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if config.ENABLE_LOGGING_MIDDLEWARE:
        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            start_time = time.time()
            response = await call_next(request)
            duration_ms = int((time.time() - start_time) * 1000)
            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code} ({duration_ms}ms)"
            )
            return response

    register_error_handlers(app)

    app.include_router(accounts.router, prefix=config.API_PREFIX)
    app.include_router(bundles.router, prefix=config.API_PREFIX)

    return app
