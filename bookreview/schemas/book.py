from pydantic import Field

from bookreview.models.enum import Language
from bookreview.schemas.base import BaseSchema, Int32, Int64


class BookBase(BaseSchema):
    isbn: Int64 = Field(..., description="ISBN-13 в виде числа")
    title: str
    author: str
    description: str
    language: Language
    issue_year: Int32


class BookCreate(BookBase):
    pass


class BookOut(BookBase):
    """Схема для возврата книги"""
