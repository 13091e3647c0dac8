import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from bookreview.core.exceptions import PoolTimeoutError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def _engine_pool_options(url: str, size: int, timeout: float | None) -> dict:
    """
    Движок держит ровно size соединений, столько же, сколько выдает семафор.

    Для SQLite в памяти SQLAlchemy выбирает StaticPool, у него этих настроек нет.
    """
    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite" and parsed.database in (None, "", ":memory:"):
        return {}
    options = {"pool_size": size, "max_overflow": 0}
    if timeout is not None:
        options["pool_timeout"] = timeout
    return options


class ConnectionPool:
    """
    Ограниченный набор соединений с базой, выдаваемых на время запроса.

    Соединения создаются лениво и переиспользуются движком SQLAlchemy,
    а семафор ограничивает число одновременно выданных сессий значением size.
    Сессия возвращается в пул при любом выходе из ``acquire()``,
    в том числе по исключению.
    """

    def __init__(
        self,
        url: str,
        size: int = 10,
        timeout: float | None = 30.0,
        echo: bool = False,
    ):
        if size <= 0:
            raise ValueError(f"Pool size must be positive, got {size}")
        self.url = url
        self.size = size
        self.timeout = timeout
        self.engine = create_async_engine(
            url, echo=echo, pool_pre_ping=True, **_engine_pool_options(url, size, timeout)
        )
        self.session_maker = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )
        self._slots = asyncio.Semaphore(size)
        self._in_use = 0

    @property
    def in_use(self) -> int:
        return self._in_use

    @property
    def available(self) -> int:
        return self.size - self._in_use

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[AsyncSession]:
        try:
            async with asyncio.timeout(self.timeout):
                await self._slots.acquire()
        except TimeoutError:
            logger.warning(
                f"⏳ No free connection after {self.timeout}s (pool size {self.size})"
            )
            raise PoolTimeoutError(
                f"No free connection within {self.timeout} seconds"
            ) from None

        self._in_use += 1
        logger.debug(f"🔌 Connection acquired ({self._in_use}/{self.size})")
        try:
            async with self.session_maker() as session:
                yield session
        finally:
            self._in_use -= 1
            self._slots.release()
            logger.debug(f"🔌 Connection released ({self._in_use}/{self.size})")

    async def create_all(self):
        """Создать таблицы books и reviews, если их еще нет"""
        import bookreview.models  # noqa: F401  регистрирует таблицы в Base.metadata

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("✅ Tables are ready")

    async def dispose(self):
        await self.engine.dispose()
        logger.info("🛑 Connection pool disposed")
