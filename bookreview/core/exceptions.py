from fastapi import HTTPException, status


class BookReviewError(Exception):
    """Базовое исключение приложения"""


class StoreError(BookReviewError):
    """Ошибка хранилища: нет соединения, нарушено ограничение, неверный тип"""


class UniqueViolationError(StoreError):
    """Запись с таким ключом уже существует"""


class NotFoundError(StoreError):
    """Запись не найдена (только для операций, возвращающих одну запись)"""


class PoolTimeoutError(StoreError):
    """Не дождались свободного соединения в пуле"""


def bad_request(detail: str = "Bad request"):
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def not_found(detail: str = "Not found"):
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


def conflict(detail: str = "Already exists"):
    raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=detail)


def server_error(detail: str = "Storage error"):
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
