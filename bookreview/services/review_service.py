from datetime import datetime

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from bookreview.models import Review
from bookreview.models.enum import Rating
from bookreview.schemas.base import as_utc
from bookreview.schemas.review import ReviewCreate
from bookreview.utils.helpers import store_errors

import logging

logger = logging.getLogger(__name__)


def _review_key(isbn: int, username: str):
    return (Review.isbn == isbn) & (Review.username == username)


async def create_review(db: AsyncSession, review: ReviewCreate) -> int:
    """
    Сохранение отзыва в БД. Существование книги не проверяется.
    :raises UniqueViolationError: у пользователя уже есть отзыв на эту книгу
    """
    async with store_errors(db, f"create review {review.isbn}/{review.username}"):
        result = await db.execute(insert(Review.__table__).values(**review.model_dump()))
        await db.commit()
    logger.info(f"✅ Review created: {review.isbn} by {review.username}")
    return result.rowcount


async def get_reviews_by_book(db: AsyncSession, isbn: int) -> list[Review]:
    """Получить все отзывы по книге"""
    async with store_errors(db, f"load reviews for book {isbn}"):
        result = await db.scalars(
            select(Review).where(Review.isbn == isbn).order_by(Review.username)
        )
        return list(result.all())


async def get_reviews_by_username(db: AsyncSession, username: str) -> list[Review]:
    """Получить все отзывы пользователя"""
    async with store_errors(db, f"load reviews of {username}"):
        result = await db.scalars(
            select(Review).where(Review.username == username).order_by(Review.isbn)
        )
        return list(result.all())


async def update_review(
    db: AsyncSession,
    isbn: int,
    username: str,
    description: str,
    rating: Rating,
    updated_at: datetime,
) -> int:
    """
    Изменить оценку и текст отзыва. created_at не трогаем.
    :return: 0 если отзыва нет, 1 если изменен
    """
    async with store_errors(db, f"update review {isbn}/{username}"):
        result = await db.execute(
            update(Review)
            .where(_review_key(isbn, username))
            .values(description=description, rating=rating, updated_at=as_utc(updated_at))
        )
        await db.commit()
    logger.info(f"✏️ Review update {isbn}/{username}: {result.rowcount} row(s)")
    return result.rowcount


async def delete_review(db: AsyncSession, isbn: int, username: str) -> int:
    """
    Удалить отзыв по составному ключу.
    :return: 0 если отзыва нет, 1 если удален
    """
    async with store_errors(db, f"delete review {isbn}/{username}"):
        result = await db.execute(delete(Review).where(_review_key(isbn, username)))
        await db.commit()
    logger.info(f"🗑 Review delete {isbn}/{username}: {result.rowcount} row(s)")
    return result.rowcount
