from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from neropage.api_routers.v1 import api_router
from neropage.features.health.routes.health import router as health_router
from neropage.features.rendering.routes.public_page import router as public_page_router
from neropage.platform.config import settings
from neropage.platform.db import session as db_session
from neropage.platform.exceptions import add_exception_handlers
from neropage.platform.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if db_session.engine is None:
        logger.warning("DATABASE_URL is not set; using in-memory storage (data is lost on restart)")
    elif settings.AUTO_CREATE_TABLES:
        await db_session.create_tables(db_session.engine)
        logger.info("Database tables ensured")

    yield

    if db_session.engine is not None:
        await db_session.engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title=f"{settings.APP_NAME} API",
        description="Link-in-bio profiles, links, content blocks and click analytics",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # Holds the CSRF token; signed cookie, nothing stored server-side
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SESSION_SECRET,
        session_cookie=settings.SESSION_COOKIE,
        max_age=settings.SESSION_MAX_AGE,
        same_site="lax",
        https_only=settings.ENVIRONMENT == "production",
    )

    add_exception_handlers(app)

    # Create upload directory if it doesn't exist
    upload_dir = Path(settings.UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/static/uploads", StaticFiles(directory=str(upload_dir)), name="uploads")

    app.include_router(health_router)
    app.include_router(api_router, prefix="/api")
    app.include_router(public_page_router)

    return app


app = create_app()
