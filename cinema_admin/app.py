import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from redis.asyncio import Redis
from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from cinema_admin.api.v1 import (routes_auth, routes_dashboard, routes_genre, routes_health, routes_language,
                                 routes_movie, routes_role, routes_screen, routes_screening, routes_theater,
                                 routes_user)
from cinema_admin.core.config import Settings, get_settings
from cinema_admin.core.exceptions import AppError
from cinema_admin.core.logging import LoggingMiddleware, setup_logging
from cinema_admin.db import session
from cinema_admin.redis import build_redis, close_redis
from cinema_admin.schemas.common import ErrorResponse
from cinema_admin.scripts import seed_data
from cinema_admin.services.session_manager import SessionManager


logger = logging.getLogger(__name__)

PUBLIC_PREFIX = "/api/v1"
ADMIN_PREFIX = "/api/admin/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    await app.state.redis.ping()
    if settings.AUTO_CREATE_TABLES:
        await session.init_db(app.state.engine)
    if settings.SEED_DATA:
        await seed_data.seed(app.state.session_factory, settings)
    logger.info(f"{settings.PROJECT_NAME} started ({settings.ENV})")
    yield
    await app.state.engine.dispose()
    if app.state.owns_redis:
        await close_redis(app.state.redis)
    logger.info("shut down")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(message=message).model_dump())


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else error.get("msg", "invalid"))
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, ex: AppError):
        if ex.status_code >= 500:
            logger.error(f"{request.method} {request.url.path}: {ex.message}\n{ex.stack_trace or ''}")
        return _error(ex.status_code, ex.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, ex: RequestValidationError):
        return _error(400, _validation_message(ex))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, ex: StarletteHTTPException):
        return _error(ex.status_code, str(ex.detail))

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, ex: SQLAlchemyError):
        logger.error(f"database error on {request.method} {request.url.path}: {ex}", exc_info=True)
        return _error(500, "Database error")

    @app.exception_handler(RedisError)
    async def redis_error_handler(request: Request, ex: RedisError):
        logger.error(f"redis error on {request.method} {request.url.path}: {ex}", exc_info=True)
        return _error(500, "Cache error")

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, ex: Exception):
        logger.error(f"unhandled error on {request.method} {request.url.path}: {ex}", exc_info=True)
        return _error(500, "Internal server error")


def create_app(settings: Optional[Settings] = None, redis: Optional[Redis] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.PROJECT_VERSION,
        description=settings.PROJECT_DESCRIPTION,
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.engine = session.build_engine(settings)
    app.state.session_factory = session.build_session_factory(app.state.engine)
    app.state.owns_redis = redis is None
    app.state.redis = redis if redis is not None else build_redis(settings.REDIS_URL)
    app.state.session_manager = SessionManager(app.state.redis)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    )
    app.add_middleware(LoggingMiddleware)
    register_exception_handlers(app)

    app.include_router(routes_health.router)

    public_routers = [
        routes_auth.public_router,
        routes_theater.public_router,
        routes_screen.public_router,
        routes_language.public_router,
        routes_genre.public_router,
        routes_movie.public_router,
        routes_screening.public_router,
    ]
    for router in public_routers:
        app.include_router(router, prefix=PUBLIC_PREFIX)

    admin_routers = [
        routes_auth.admin_router,
        routes_dashboard.router,
        routes_role.router,
        routes_user.router,
        routes_genre.admin_router,
        routes_language.admin_router,
        routes_movie.admin_router,
        routes_theater.admin_router,
        routes_screen.admin_router,
        routes_screening.admin_router,
    ]
    for router in admin_routers:
        app.include_router(router, prefix=ADMIN_PREFIX)

    @app.get("/")
    async def root():
        return {"message": f"{settings.PROJECT_NAME} is running"}

    return app


app = create_app()
