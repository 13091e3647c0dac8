"""
Базовые схемы и типы для всех Pydantic моделей
"""
from datetime import datetime, timezone
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

INT64_MIN, INT64_MAX = -(2**63), 2**63 - 1
INT32_MIN, INT32_MAX = -(2**31), 2**31 - 1

Int64 = Annotated[int, Field(ge=INT64_MIN, le=INT64_MAX)]
Int32 = Annotated[int, Field(ge=INT32_MIN, le=INT32_MAX)]


def as_utc(value: datetime) -> datetime:
    """Наивное время считаем UTC (SQLite не хранит зону)"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class BaseSchema(BaseModel):
    """
    Базовая схема: неизменяемое значение, сравнивается по полям,
    собирается как из словаря, так и из строки таблицы.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)
