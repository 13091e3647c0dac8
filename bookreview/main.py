from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from slowapi.middleware import SlowAPIMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

import logging

from bookreview.core.config import settings
from bookreview.core.exceptions import PoolTimeoutError
from bookreview.database.db import ConnectionPool
from bookreview.routers.api import api_reviews
from bookreview.services.asset_service import ensure_asset_dirs

# ✅ Настройка логирования
logging.basicConfig(
    level=logging.INFO if not settings.DEBUG else logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# ✅ Rate limiter
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=settings.RATE_LIMITS,
    enabled=settings.RATE_LIMIT_ENABLED,
)

tags_metadata = [
    {"name": "default", "description": "Проверка состояния сервиса"},
    {"name": "Reviews (API)", "description": "Отзывы в бинарном формате"},
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Управление жизненным циклом приложения"""
    # Startup
    logger.info(f"🚀 {settings.APP_NAME} starting up...")
    logger.info(f"📊 Debug mode: {settings.DEBUG}")
    pool = ConnectionPool(
        settings.DATABASE_URL,
        size=settings.POOL_SIZE,
        timeout=settings.POOL_TIMEOUT,
        echo=settings.DB_ECHO,
    )
    if settings.CREATE_TABLES:
        await pool.create_all()
    ensure_asset_dirs()
    app.state.pool = pool
    logger.info(f"🔌 Connection pool ready: size={pool.size}, timeout={pool.timeout}")

    yield  # Приложение работает

    # Shutdown
    await pool.dispose()
    logger.info(f"🛑 {settings.APP_NAME} shutting down...")


app = FastAPI(
    title=settings.APP_NAME,
    description="Книги и отзывы: сетевой API отзывов в компактном бинарном формате",
    version="1.0.0",
    openapi_tags=tags_metadata,
    debug=settings.DEBUG,
    lifespan=lifespan,
)


async def _pool_timeout_handler(request: Request, exc: PoolTimeoutError):
    logger.error(f"❌ {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"detail": str(exc)}
    )


# ✅ Привязываем limiter к app
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(PoolTimeoutError, _pool_timeout_handler)

# ✅ Добавляем SlowAPI middleware
app.add_middleware(SlowAPIMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,  # Из .env
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ✅ Health check endpoint
@app.get("/health", tags=["default"])
async def health_check(request: Request):
    """Проверка состояния API"""
    pool = request.app.state.pool
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "pool": {"size": pool.size, "in_use": pool.in_use},
    }


app.include_router(api_reviews.router)


# uvicorn bookreview.main:app --reload
