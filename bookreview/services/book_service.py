from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from bookreview.core.exceptions import NotFoundError
from bookreview.models import Book
from bookreview.schemas.book import BookCreate
from bookreview.utils.helpers import store_errors
import logging

logger = logging.getLogger(__name__)


async def create_book(db: AsyncSession, book: BookCreate) -> int:
    """
    Добавить книгу в каталог.
    :return: число затронутых строк (1)
    :raises UniqueViolationError: книга с таким isbn уже есть
    """
    async with store_errors(db, f"create book {book.isbn}"):
        result = await db.execute(insert(Book.__table__).values(**book.model_dump()))
        await db.commit()
    logger.info(f"✅ Book created: {book.isbn} - {book.title}")
    return result.rowcount


async def delete_book(db: AsyncSession, isbn: int) -> int:
    """
    Удалить книгу по isbn.
    :return: 0 если книги не было, 1 если удалена
    """
    async with store_errors(db, f"delete book {isbn}"):
        result = await db.execute(delete(Book).where(Book.isbn == isbn))
        await db.commit()
    if result.rowcount == 0:
        logger.info(f"⚠️ Book {isbn} not found, nothing deleted")
    else:
        logger.info(f"🗑 Book deleted: {isbn}")
    return result.rowcount


async def get_book(db: AsyncSession, isbn: int) -> Book:
    async with store_errors(db, f"load book {isbn}"):
        book = await db.get(Book, isbn)
    if book is None:
        raise NotFoundError(f"Book {isbn} not found")
    return book


async def load_books(db: AsyncSession) -> list[Book]:
    """Все книги каталога (пустой список - не ошибка)"""
    async with store_errors(db, "load books"):
        result = await db.scalars(select(Book).order_by(Book.isbn))
        books = list(result.all())
    logger.debug(f"📚 Loaded {len(books)} books")
    return books


async def replace_book(db: AsyncSession, book: BookCreate) -> int:
    """
    Заменить книгу с тем же isbn одной транзакцией (удалить и создать заново).

    Если создать новую запись не удалось, удаление откатывается.
    :return: 0 если заменять было нечего (ничего не создано), иначе 1
    """
    async with store_errors(db, f"replace book {book.isbn}"):
        deleted = await db.execute(delete(Book).where(Book.isbn == book.isbn))
        if deleted.rowcount == 0:
            await db.rollback()
            logger.info(f"⚠️ Book {book.isbn} not found, nothing replaced")
            return 0
        await db.execute(insert(Book.__table__).values(**book.model_dump()))
        await db.commit()
    logger.info(f"✅ Book replaced: {book.isbn} - {book.title}")
    return deleted.rowcount
