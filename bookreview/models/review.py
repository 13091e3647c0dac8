from sqlalchemy import BigInteger, Column, DateTime, Index, String, Text
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import relationship

from bookreview.database.db import Base
from bookreview.models.enum import Rating


# ---------- Review ---------- #
class Review(Base):
    __tablename__ = "reviews"
    __table_args__ = (Index("ix_reviews_username", "username"),)

    isbn = Column(BigInteger, primary_key=True, autoincrement=False)
    username = Column(String, primary_key=True)
    rating = Column(
        SQLEnum(Rating, name="rating", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    description = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    book = relationship(
        "Book",
        primaryjoin="foreign(Review.isbn) == Book.isbn",
        viewonly=True,
    )

    def __repr__(self):
        return f"<Review isbn={self.isbn} username={self.username!r} rating={self.rating}>"
