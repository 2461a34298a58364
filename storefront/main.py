"""
Application factories for the product catalog and auth services.

Each factory receives its settings object, builds the engine, repository
and service once, and keeps them on ``app.state`` for the request
dependencies. Run with uvicorn's factory mode, e.g.::

    uvicorn storefront.main:create_catalog_app --factory
    uvicorn storefront.main:create_auth_app --factory
"""
import logging
from contextlib import asynccontextmanager
from typing import Iterable, Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import Table
from sqlalchemy.engine import Engine
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.api import auth, health, products
from storefront.config import AuthSettings, CatalogSettings, ServiceSettings
from storefront.database import create_db_engine, create_session_factory, init_db
from storefront.middleware import panic_recovery_middleware
from storefront.models.product import Product
from storefront.models.user import User
from storefront.repositories.product_repository import SQLProductRepository
from storefront.repositories.user_repository import SQLUserRepository
from storefront.services.auth_service import AuthService
from storefront.services.product_service import ProductService
from storefront.utils.responses import http_exception_handler, validation_exception_handler
from storefront.utils.security import build_password_context

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def _lifespan(engine: Engine, tables: Iterable[Table], service_name: str):
    """Lifespan creating the service's tables on startup and closing the pool on shutdown."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        logger.info(f"Starting up {service_name}...")

        logger.info("Creating database tables...")
        init_db(engine, tables)
        logger.info("Database tables created successfully")

        yield

        # Shutdown
        logger.info(f"Shutting down {service_name}...")
        engine.dispose()

    return lifespan


def _build_app(settings: ServiceSettings, title: str, lifespan) -> FastAPI:
    app = FastAPI(
        title=title,
        version=settings.VERSION,
        docs_url=f"{settings.BASE_PATH}/docs",
        redoc_url=f"{settings.BASE_PATH}/redoc",
        openapi_url=f"{settings.BASE_PATH}/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Recovery sits inside CORS so error responses still carry CORS headers
    app.middleware("http")(panic_recovery_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.include_router(health.router, prefix=settings.BASE_PATH)
    return app


def create_catalog_app(settings: Optional[CatalogSettings] = None) -> FastAPI:
    """
    Create the product catalog application.

    Args:
        settings: Catalog settings (read from the environment when omitted)

    Returns:
        Configured FastAPI application
    """
    settings = settings or CatalogSettings()
    setup_logging(settings.LOG_LEVEL)

    engine = create_db_engine(settings.DATABASE_URL)
    session_factory = create_session_factory(engine)

    app = _build_app(
        settings,
        title="Product Catalog API",
        lifespan=_lifespan(engine, [Product.__table__], settings.SERVICE_NAME),
    )
    app.state.product_service = ProductService(SQLProductRepository(session_factory))

    app.include_router(products.router, prefix=settings.BASE_PATH)
    return app


def create_auth_app(settings: Optional[AuthSettings] = None) -> FastAPI:
    """
    Create the auth application.

    Args:
        settings: Auth settings (read from the environment when omitted)

    Returns:
        Configured FastAPI application
    """
    settings = settings or AuthSettings()
    setup_logging(settings.LOG_LEVEL)

    engine = create_db_engine(settings.DATABASE_URL)
    session_factory = create_session_factory(engine)
    pwd_context = build_password_context(settings.PASSWORD_HASH_ROUNDS)

    app = _build_app(
        settings,
        title="Auth API",
        lifespan=_lifespan(engine, [User.__table__], settings.SERVICE_NAME),
    )
    app.state.auth_service = AuthService(
        SQLUserRepository(session_factory, pwd_context),
        settings,
    )

    app.include_router(auth.router, prefix=settings.BASE_PATH)
    return app
