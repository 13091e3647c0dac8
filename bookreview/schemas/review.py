from datetime import datetime

from pydantic import field_validator

from bookreview.models.enum import Rating
from bookreview.schemas.base import BaseSchema, Int64, as_utc


class NewReviewPart(BaseSchema):
    """Тело запроса на создание/изменение отзыва: время ставит сервер"""

    isbn: Int64
    username: str
    rating: Rating
    description: str


class ReviewCreate(NewReviewPart):
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def normalize_timezone(cls, value: datetime) -> datetime:
        return as_utc(value)

    @classmethod
    def stamped(cls, part: NewReviewPart, now: datetime) -> "ReviewCreate":
        """Новый отзыв: created_at и updated_at совпадают"""
        return cls(**part.model_dump(), created_at=now, updated_at=now)


class ReviewOut(ReviewCreate):
    """Схема для возврата отзыва"""
