from sqlalchemy import BigInteger, Column, Integer, Text
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import relationship

from bookreview.database.db import Base
from bookreview.models.enum import Language


# ---------- Book ---------- #
class Book(Base):
    __tablename__ = "books"

    isbn = Column(BigInteger, primary_key=True, autoincrement=False)
    title = Column(Text, nullable=False)
    author = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    language = Column(
        SQLEnum(Language, name="lang", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    issue_year = Column(Integer, nullable=False)

    # 🔗 связи: отзывы могут ссылаться на книгу, которой еще нет в каталоге,
    # поэтому внешнего ключа нет, только соединение по isbn
    reviews = relationship(
        "Review",
        primaryjoin="Book.isbn == foreign(Review.isbn)",
        viewonly=True,
    )

    def __repr__(self):
        return f"<Book isbn={self.isbn} title={self.title!r}>"
