# bookreview/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import List


class Settings(BaseSettings):
    """Настройки приложения из переменных окружения"""

    # Database
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./bookreview.db",
        description="URL подключения к базе данных"
    )
    POOL_SIZE: int = Field(
        default=10,
        gt=0,
        description="Максимальное число одновременно выданных соединений"
    )
    POOL_TIMEOUT: float | None = Field(
        default=30.0,
        description="Сколько секунд ждать свободное соединение (None - без ограничения)"
    )
    DB_ECHO: bool = Field(
        default=False,
        description="Логировать SQL запросы"
    )
    CREATE_TABLES: bool = Field(
        default=True,
        description="Создавать таблицы books/reviews при старте"
    )

    # CORS
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        description="Разрешенные источники для CORS"
    )

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = Field(
        default=True,
        description="Включить ограничение частоты запросов"
    )
    RATE_LIMITS: List[str] = Field(
        default=["1000/minute"],
        description="Лимиты по умолчанию для всех маршрутов"
    )

    # Files (книги и обложки лежат на диске, ключ - ISBN)
    BOOKS_DIR: str = Field(default="books", description="Каталог файлов книг")
    COVERS_DIR: str = Field(default="covers", description="Каталог обложек")

    # App
    APP_NAME: str = Field(
        default="BookReview",
        description="Название приложения"
    )
    DEBUG: bool = Field(
        default=False,
        description="Режим отладки"
    )

    # Настройки Pydantic
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Игнорировать лишние переменные
    )


# Создаем singleton
settings = Settings()
