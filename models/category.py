"""
Category and difficulty labels
"""

from enum import Enum
from typing import Dict, Iterable, List, Set


class Category(str, Enum):
    """Built-in exam subjects. The value is the label used on the wire."""
    GENERAL_APTITUDE = "ความสามารถทั่วไป"
    THAI_LANGUAGE = "ภาษาไทย"
    COMPUTER = "คอมพิวเตอร์ (เทคโนโลยีสารสนเทศ)"
    ENGLISH = "ภาษาอังกฤษ"
    SOCIETY = "สังคม วัฒนธรรม จริยธรรม และอาเซียน"
    LAW = "กฎหมายที่ประชาชนควรรู้"


class Difficulty(str, Enum):
    EASY = "ง่าย"
    MEDIUM = "ปานกลาง"
    HARD = "ยาก"


# Full exam: 150 questions
DEFAULT_DISTRIBUTION: Dict[str, int] = {
    Category.GENERAL_APTITUDE.value: 30,
    Category.THAI_LANGUAGE.value: 25,
    Category.COMPUTER.value: 25,
    Category.ENGLISH.value: 30,
    Category.SOCIETY.value: 20,
    Category.LAW.value: 20,
}

ALL_FILTER = "all"


def builtin_categories() -> List[str]:
    return [c.value for c in Category]


def difficulty_labels() -> List[str]:
    return [d.value for d in Difficulty]


def known_categories(bank_categories: Iterable[str]) -> Set[str]:
    """
    Categories a distribution may reference: the built-in subjects plus
    whatever subjects are already present in the question bank (e.g. from a
    CSV import).
    """
    known = set(builtin_categories())
    known.update(c for c in bank_categories if c)
    return known
