import asyncio
import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

load_dotenv()

from app.db.init_db import init_db  # noqa: E402
from app.dependencies.settings import get_settings  # noqa: E402
from app.utils.exceptions import setup_exception_handlers  # noqa: E402

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(_app: FastAPI):
    if settings.create_tables_on_startup:
        init_db()
        logger.info("Database tables ensured")

    try:
        yield
    except asyncio.CancelledError:
        logger.info("Application shutdown requested (CancelledError). Exiting gracefully.")
    except Exception:
        logger.exception("Unhandled exception during application lifespan shutdown.")
        raise


tags_metadata = [
    {"name": "Auth", "description": "Registration, login and current account."},
    {"name": "Menus", "description": "Navigation menu tree and 🔒 menu management (Admin/Staff/Manager)."},
    {"name": "User_Menus", "description": "🔒 **Admin/Staff/Manager** - Per-user menu assignment."},
    {"name": "Users", "description": "🔒 **Admin** - Account management and roles."},
    {"name": "Categories", "description": "Location categories referenced by filter menus."},
    {"name": "Health", "description": "Service and database status."},
]

app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    openapi_tags=tags_metadata,
    docs_url="/swagger",
    swagger_ui_parameters={"displayRequestDuration": True, "persistAuthorization": True},
    lifespan=_lifespan,
)

setup_exception_handlers(app)


@app.get("/", include_in_schema=False)
async def root():
    return {"message": settings.app_name}


app.add_middleware(
    GZipMiddleware,
    minimum_size=1000,  # Only compress responses > 1KB
    compresslevel=6,
)

cors_origins = settings.cors_origin_list
logger.info(f"CORS enabled for origins: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# include routers
from .routers import (  # noqa: E402
    auth,
    categories,
    health,
    menus,
    user_menus,
    users,
)

app.include_router(auth.router)
app.include_router(categories.router)
app.include_router(health.router)
app.include_router(menus.router)
app.include_router(user_menus.router)
app.include_router(users.router)


__all__ = ["app"]
