from bookreview.models.book import Book
from bookreview.models.review import Review
from bookreview.models.enum import Language, Rating
from bookreview.database.db import Base

from sqlalchemy.schema import CreateTable


if __name__ == "__main__":
    for table in Base.metadata.sorted_tables:
        print(CreateTable(table))
