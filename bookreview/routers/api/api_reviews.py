from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from bookreview.core.exceptions import (
    StoreError,
    UniqueViolationError,
    bad_request,
    conflict,
    not_found,
    server_error,
)
from bookreview.core.wire import DecodeError, decode_review_part, encode_reviews
from bookreview.database.db_depends import get_db
from bookreview.schemas.base import INT64_MAX, INT64_MIN
from bookreview.schemas.review import NewReviewPart, ReviewCreate, ReviewOut
from bookreview.services.review_service import (
    create_review,
    delete_review,
    get_reviews_by_book,
    get_reviews_by_username,
    update_review,
)
from bookreview.utils.helpers import utc_now
import logging

logger = logging.getLogger(__name__)

OCTET_STREAM = "application/octet-stream"


async def read_review_part(request: Request) -> NewReviewPart:
    """Декодировать тело запроса; битые данные - 400, без подстановки значений"""
    body = await request.body()
    try:
        return decode_review_part(body)
    except DecodeError as e:
        logger.warning(f"❌ Malformed review payload ({len(body)} bytes): {e}")
        bad_request(f"Malformed review payload: {e}")


router = APIRouter(prefix="/reviews", tags=["Reviews (API)"])
DBType = Annotated[AsyncSession, Depends(get_db)]
ReviewPart = Annotated[NewReviewPart, Depends(read_review_part)]
IsbnPath = Annotated[int, Path(ge=INT64_MIN, le=INT64_MAX)]


def _binary(reviews) -> Response:
    body = encode_reviews(ReviewOut.model_validate(review) for review in reviews)
    return Response(content=body, media_type=OCTET_STREAM)


@router.post("", status_code=status.HTTP_201_CREATED)
async def post_review(part: ReviewPart, db: DBType):
    review = ReviewCreate.stamped(part, utc_now())
    try:
        await create_review(db, review)
    except UniqueViolationError:
        conflict(f"Review of {part.isbn} by {part.username} already exists")
    except StoreError:
        server_error("Review was not added")
    return Response(status_code=status.HTTP_201_CREATED)


@router.get("/book/{isbn}")
async def read_reviews_by_book(db: DBType, isbn: IsbnPath):
    try:
        reviews = await get_reviews_by_book(db, isbn)
    except StoreError:
        server_error("Failed to load reviews")
    return _binary(reviews)


@router.get("/user/{username}")
async def read_reviews_by_username(db: DBType, username: str):
    try:
        reviews = await get_reviews_by_username(db, username)
    except StoreError:
        server_error("Failed to load reviews")
    return _binary(reviews)


@router.put("")
async def put_review(part: ReviewPart, db: DBType):
    try:
        updated = await update_review(
            db, part.isbn, part.username, part.description, part.rating, utc_now()
        )
    except StoreError:
        server_error("Review was not updated")
    if not updated:
        not_found(f"Review of {part.isbn} by {part.username} was not found")
    return Response(status_code=status.HTTP_200_OK)


@router.delete("/{isbn}/{username}")
async def remove_review(db: DBType, isbn: IsbnPath, username: str):
    try:
        deleted = await delete_review(db, isbn, username)
    except StoreError:
        server_error("Review was not deleted")
    if not deleted:
        not_found(f"Review of {isbn} by {username} was not found")
    return Response(status_code=status.HTTP_200_OK)
