"""
Компактный бинарный формат для сетевого API отзывов.

Все целые little-endian фиксированной ширины, имен полей на проводе нет,
поля идут в порядке объявления:

    int64      8 байт со знаком
    int32      4 байта со знаком
    string     u32 длина в байтах + UTF-8
    enum       u32 порядковый номер варианта
    timestamp  u64 секунды + u32 наносекунды от эпохи Unix (UTC)
    list       u32 число элементов + элементы

Декодер никогда не подставляет значения по умолчанию: обрезанный буфер,
лишние байты в конце, неверный номер варианта - это DecodeError.
"""
import struct
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable, TypeVar

from pydantic import ValidationError

from bookreview.core.exceptions import BookReviewError
from bookreview.models.enum import Language, OrdinalEnum, Rating
from bookreview.schemas.book import BookOut
from bookreview.schemas.review import NewReviewPart, ReviewOut

T = TypeVar("T")

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
NANOS_PER_SECOND = 1_000_000_000

_I64 = struct.Struct("<q")
_I32 = struct.Struct("<i")
_U32 = struct.Struct("<I")
_U64 = struct.Struct("<Q")


class WireError(BookReviewError):
    pass


class DecodeError(WireError):
    """Байты не соответствуют ожидаемой схеме"""


class EncodeError(WireError):
    """Значение не помещается в формат"""


class Writer:
    def __init__(self):
        self._buf = bytearray()

    def _pack(self, fmt: struct.Struct, value):
        try:
            self._buf += fmt.pack(value)
        except struct.error as e:
            raise EncodeError(f"Value {value!r} does not fit {fmt.format}") from e

    def i64(self, value: int):
        self._pack(_I64, value)

    def i32(self, value: int):
        self._pack(_I32, value)

    def u32(self, value: int):
        self._pack(_U32, value)

    def string(self, value: str):
        try:
            data = value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise EncodeError(f"String is not encodable as UTF-8: {e}") from e
        self.u32(len(data))
        self._buf += data

    def enum(self, value: OrdinalEnum):
        self.u32(value.ordinal)

    def timestamp(self, value: datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        delta = value - EPOCH
        if delta < timedelta(0):
            raise EncodeError(f"Timestamp before the Unix epoch: {value}")
        seconds = delta.days * 86400 + delta.seconds
        self._pack(_U64, seconds)
        self._pack(_U32, delta.microseconds * 1000)

    def sequence(self, items: Iterable[T], write_item: Callable[["Writer", T], None]):
        items = list(items)
        self.u32(len(items))
        for item in items:
            write_item(self, item)

    def getvalue(self) -> bytes:
        return bytes(self._buf)


class Reader:
    def __init__(self, data: bytes):
        self._data = memoryview(bytes(data))
        self._pos = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def _take(self, size: int) -> memoryview:
        if size > self.remaining:
            raise DecodeError(
                f"Need {size} bytes at offset {self._pos}, only {self.remaining} left"
            )
        chunk = self._data[self._pos:self._pos + size]
        self._pos += size
        return chunk

    def _unpack(self, fmt: struct.Struct):
        return fmt.unpack(self._take(fmt.size))[0]

    def i64(self) -> int:
        return self._unpack(_I64)

    def i32(self) -> int:
        return self._unpack(_I32)

    def u32(self) -> int:
        return self._unpack(_U32)

    def string(self) -> str:
        size = self.u32()
        try:
            return bytes(self._take(size)).decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Invalid UTF-8 in string field: {e}") from e

    def enum(self, enum_cls: type[OrdinalEnum]):
        ordinal = self.u32()
        try:
            return enum_cls.from_ordinal(ordinal)
        except ValueError as e:
            raise DecodeError(str(e)) from e

    def timestamp(self) -> datetime:
        seconds = self._unpack(_U64)
        nanos = self.u32()
        if nanos >= NANOS_PER_SECOND:
            raise DecodeError(f"Nanoseconds out of range: {nanos}")
        try:
            return EPOCH + timedelta(seconds=seconds, microseconds=nanos // 1000)
        except OverflowError as e:
            raise DecodeError(f"Timestamp out of range: {seconds}s") from e

    def sequence(self, read_item: Callable[["Reader"], T]) -> list[T]:
        count = self.u32()
        return [read_item(self) for _ in range(count)]

    def finish(self):
        if self.remaining:
            raise DecodeError(f"{self.remaining} unexpected trailing bytes")


# ---------- Схемы типов ---------- #


def _write_book(w: Writer, book: BookOut):
    w.i64(book.isbn)
    w.string(book.title)
    w.string(book.author)
    w.string(book.description)
    w.enum(book.language)
    w.i32(book.issue_year)


def _read_book(r: Reader) -> BookOut:
    return _build(
        BookOut,
        isbn=r.i64(),
        title=r.string(),
        author=r.string(),
        description=r.string(),
        language=r.enum(Language),
        issue_year=r.i32(),
    )


def _write_review(w: Writer, review: ReviewOut):
    w.i64(review.isbn)
    w.string(review.username)
    w.enum(review.rating)
    w.string(review.description)
    w.timestamp(review.created_at)
    w.timestamp(review.updated_at)


def _read_review(r: Reader) -> ReviewOut:
    return _build(
        ReviewOut,
        isbn=r.i64(),
        username=r.string(),
        rating=r.enum(Rating),
        description=r.string(),
        created_at=r.timestamp(),
        updated_at=r.timestamp(),
    )


def _write_review_part(w: Writer, part: NewReviewPart):
    w.i64(part.isbn)
    w.string(part.username)
    w.enum(part.rating)
    w.string(part.description)


def _read_review_part(r: Reader) -> NewReviewPart:
    return _build(
        NewReviewPart,
        isbn=r.i64(),
        username=r.string(),
        rating=r.enum(Rating),
        description=r.string(),
    )


def _build(schema: type[T], **fields) -> T:
    try:
        return schema(**fields)
    except ValidationError as e:
        raise DecodeError(f"Invalid {schema.__name__}: {e}") from e


def _encode(value, write: Callable[[Writer, T], None]) -> bytes:
    w = Writer()
    write(w, value)
    return w.getvalue()


def _decode(data: bytes, read: Callable[[Reader], T]) -> T:
    r = Reader(data)
    value = read(r)
    r.finish()
    return value


def encode_book(book: BookOut) -> bytes:
    return _encode(book, _write_book)


def decode_book(data: bytes) -> BookOut:
    return _decode(data, _read_book)


def encode_books(books: Iterable[BookOut]) -> bytes:
    return _encode(books, lambda w, items: w.sequence(items, _write_book))


def decode_books(data: bytes) -> list[BookOut]:
    return _decode(data, lambda r: r.sequence(_read_book))


def encode_review(review: ReviewOut) -> bytes:
    return _encode(review, _write_review)


def decode_review(data: bytes) -> ReviewOut:
    return _decode(data, _read_review)


def encode_reviews(reviews: Iterable[ReviewOut]) -> bytes:
    return _encode(reviews, lambda w, items: w.sequence(items, _write_review))


def decode_reviews(data: bytes) -> list[ReviewOut]:
    return _decode(data, lambda r: r.sequence(_read_review))


def encode_review_part(part: NewReviewPart) -> bytes:
    return _encode(part, _write_review_part)


def decode_review_part(data: bytes) -> NewReviewPart:
    return _decode(data, _read_review_part)
