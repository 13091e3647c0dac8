import struct
from datetime import datetime, timezone

import pytest

from bookreview.core.wire import (
    DecodeError,
    EncodeError,
    decode_book,
    decode_books,
    decode_review,
    decode_review_part,
    decode_reviews,
    encode_book,
    encode_books,
    encode_review,
    encode_review_part,
    encode_reviews,
)
from bookreview.models.enum import Language, Rating
from bookreview.schemas.book import BookOut
from bookreview.schemas.review import NewReviewPart, ReviewOut

BOOK = BookOut(
    isbn=9780747542155,
    title="Harry Potter and the Philosopher's Stone",
    author="J. K. Rowling",
    description="",
    language=Language.ENGLISH,
    issue_year=1997,
)

REVIEW = ReviewOut(
    isbn=9780747542155,
    username="anon",
    rating=Rating.THREE,
    description="Хорошая книга 📚",
    created_at=datetime(2023, 5, 1, 12, 30, 15, 123456, tzinfo=timezone.utc),
    updated_at=datetime(2024, 1, 2, 3, 4, 5, 999999, tzinfo=timezone.utc),
)

PART = NewReviewPart(
    isbn=9780747542155, username="anon", rating=Rating.ONE, description="really good book"
)


def _string(text: str) -> bytes:
    data = text.encode("utf-8")
    return struct.pack("<I", len(data)) + data


def test_review_part_layout():
    assert encode_review_part(PART) == (
        struct.pack("<q", 9780747542155)
        + _string("anon")
        + struct.pack("<I", 0)
        + _string("really good book")
    )


def test_book_layout():
    book = BOOK.model_copy(update={"language": Language.JAPANESE, "issue_year": -5})
    assert encode_book(book) == (
        struct.pack("<q", book.isbn)
        + _string(book.title)
        + _string(book.author)
        + _string("")
        + struct.pack("<I", 5)
        + struct.pack("<i", -5)
    )


def test_timestamp_is_seconds_and_nanoseconds_since_epoch():
    review = REVIEW.model_copy(
        update={
            "created_at": datetime(1970, 1, 1, 0, 0, 1, 500000, tzinfo=timezone.utc),
            "updated_at": datetime(1970, 1, 2, tzinfo=timezone.utc),
        }
    )
    tail = encode_review(review)[-24:]
    assert tail == struct.pack("<QI", 1, 500_000_000) + struct.pack("<QI", 86400, 0)


def test_list_is_count_prefixed():
    assert encode_reviews([]) == struct.pack("<I", 0)
    data = encode_books([BOOK, BOOK])
    assert data[:4] == struct.pack("<I", 2)
    assert data[4:] == encode_book(BOOK) * 2


def test_round_trip_single_values():
    assert decode_book(encode_book(BOOK)) == BOOK
    assert decode_review(encode_review(REVIEW)) == REVIEW
    assert decode_review_part(encode_review_part(PART)) == PART


def test_round_trip_lists():
    books = [
        BOOK,
        BOOK.model_copy(update={"isbn": 9780306406157, "language": Language.CHINESE}),
    ]
    reviews = [REVIEW, REVIEW.model_copy(update={"username": "", "rating": Rating.FIVE})]
    assert decode_books(encode_books(books)) == books
    assert decode_reviews(encode_reviews(reviews)) == reviews
    assert decode_reviews(encode_reviews([])) == []


def test_extreme_fixed_width_values_round_trip():
    book = BOOK.model_copy(update={"isbn": -(2**63), "issue_year": 2**31 - 1})
    assert decode_book(encode_book(book)) == book


def test_every_truncation_fails():
    data = encode_review(REVIEW)
    for size in range(len(data)):
        with pytest.raises(DecodeError):
            decode_review(data[:size])


def test_trailing_bytes_fail():
    with pytest.raises(DecodeError):
        decode_review_part(encode_review_part(PART) + b"\x00")


def test_length_prefix_past_end_fails():
    data = struct.pack("<q", 1) + struct.pack("<I", 1000) + b"anon"
    with pytest.raises(DecodeError):
        decode_review_part(data)


def test_list_count_past_end_fails():
    data = struct.pack("<I", 3) + encode_book(BOOK)
    with pytest.raises(DecodeError):
        decode_books(data)


def test_enum_ordinal_out_of_range_fails():
    data = (
        struct.pack("<q", 1)
        + _string("anon")
        + struct.pack("<I", 5)
        + _string("text")
    )
    with pytest.raises(DecodeError):
        decode_review_part(data)


def test_nanoseconds_out_of_range_fails():
    data = bytearray(encode_review(REVIEW))
    data[-4:] = struct.pack("<I", 1_000_000_000)
    with pytest.raises(DecodeError):
        decode_review(bytes(data))


def test_invalid_utf8_fails():
    data = struct.pack("<q", 1) + struct.pack("<I", 2) + b"\xff\xfe"
    data += struct.pack("<I", 0) + _string("")
    with pytest.raises(DecodeError):
        decode_review_part(data)


def test_empty_buffer_fails():
    with pytest.raises(DecodeError):
        decode_book(b"")


def test_timestamp_before_epoch_cannot_be_encoded():
    review = REVIEW.model_copy(
        update={"created_at": datetime(1969, 12, 31, tzinfo=timezone.utc)}
    )
    with pytest.raises(EncodeError):
        encode_review(review)


def test_out_of_range_integer_cannot_be_encoded():
    book = BookOut.model_construct(**{**BOOK.model_dump(), "issue_year": 2**31})
    with pytest.raises(EncodeError):
        encode_book(book)
