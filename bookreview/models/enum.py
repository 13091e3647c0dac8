from enum import Enum


class OrdinalEnum(str, Enum):
    """
    Перечисление с устойчивым текстовым именем и порядковым номером.

    Порядковый номер - позиция варианта в объявлении класса (с нуля),
    он же передается по сети.
    """

    @property
    def ordinal(self) -> int:
        return list(type(self)).index(self)

    @classmethod
    def from_ordinal(cls, ordinal: int):
        members = list(cls)
        if not 0 <= ordinal < len(members):
            raise ValueError(f"{cls.__name__} ordinal out of range: {ordinal}")
        return members[ordinal]

    @classmethod
    def parse(cls, text: str):
        """Точное совпадение с именем варианта, иначе None"""
        try:
            return cls(text)
        except ValueError:
            return None

    def __str__(self) -> str:
        return self.value


class Language(OrdinalEnum):
    ENGLISH = "English"
    RUSSIAN = "Russian"
    UKRAINIAN = "Ukrainian"
    GERMAN = "German"
    CHINESE = "Chinese"
    JAPANESE = "Japanese"


class Rating(OrdinalEnum):
    ONE = "One"
    TWO = "Two"
    THREE = "Three"
    FOUR = "Four"
    FIVE = "Five"

    @property
    def score(self) -> int:
        return self.ordinal + 1

    def __lt__(self, other):
        if not isinstance(other, Rating):
            return NotImplemented
        return self.score < other.score

    def __le__(self, other):
        if not isinstance(other, Rating):
            return NotImplemented
        return self.score <= other.score

    def __gt__(self, other):
        if not isinstance(other, Rating):
            return NotImplemented
        return self.score > other.score

    def __ge__(self, other):
        if not isinstance(other, Rating):
            return NotImplemented
        return self.score >= other.score
