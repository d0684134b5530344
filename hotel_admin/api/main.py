"""
Name: FastAPI Application Factory

Responsibilities:
  - Build the FastAPI app (metadata, middleware, routers, exception handlers)
  - Open/close the PostgreSQL pool in the lifespan when the Postgres store is used
  - Expose /healthz for orchestration

Collaborators:
  - container.get_user_repository / uses_memory_store
  - infrastructure.db.pool: init_pool / close_pool
  - crosscutting.middleware: RequestContextMiddleware, BodyLimitMiddleware
  - auth_routes / user_routes (mounted under /api)

Notes:
  - Middleware order (last added runs first): RequestContext -> CORS -> BodyLimit -> routes
  - Settings are read once when the app is built; the pool opens in the lifespan
"""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..container import get_user_repository, uses_memory_store
from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.middleware import BodyLimitMiddleware, RequestContextMiddleware
from ..domain.repositories import UserRepository
from ..infrastructure.db.pool import close_pool, init_pool
from .auth_routes import router as auth_router
from .exception_handlers import register_exception_handlers
from .user_routes import router as user_router

API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Validates settings and initializes pool."""
    settings = get_settings()
    memory = uses_memory_store()

    if not memory:
        init_pool(
            database_url=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
        )

    logger.info(
        "Hotel Admin API starting up",
        extra={
            "app_env": settings.app_env,
            "user_store": "memory" if memory else "postgres",
            "db_pool_min": settings.db_pool_min_size,
            "db_pool_max": settings.db_pool_max_size,
        },
    )
    try:
        yield
    finally:
        if not memory:
            close_pool()
        logger.info("Hotel Admin API shutting down")


def healthz(repo: UserRepository = Depends(get_user_repository)):
    """db refleja si el store responde a ping()."""
    db_status = "disconnected"
    try:
        if repo.ping():
            db_status = "connected"
    except Exception as exc:
        logger.warning("Health check: DB unavailable", extra={"error": str(exc)})
    return {"ok": db_status == "connected", "db": db_status}


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="Hotel Admin API",
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "auth", "description": "Cadastro, login e disponibilidade"},
            {"name": "users", "description": "Administração de usuários"},
        ],
    )

    app.add_middleware(BodyLimitMiddleware, max_bytes=settings.max_body_bytes)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins_list(),
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-Id"],
    )
    app.add_middleware(RequestContextMiddleware)

    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(user_router, prefix=API_PREFIX)
    app.add_api_route("/healthz", healthz, methods=["GET"], tags=["health"])

    register_exception_handlers(app)
    return app


app = create_app()
