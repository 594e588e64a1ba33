"""Difficulty classification and point scoring for questions."""
from enum import Enum
from typing import Dict, Mapping, Sequence
from app.services.operations import Operation
from app.constants import (
    ADDITION_THRESHOLDS,
    SUBTRACTION_THRESHOLDS,
    MULTIPLICATION_THRESHOLDS,
    DIVISION_THRESHOLDS,
    DEFAULT_POINTS,
    SCORING_MODE_FLAT,
)


class DifficultyCategory(str, Enum):
    """Difficulty of a question, from least to most difficult."""
    SUPER_EASY = "Super Easy"
    EASY = "Easy"
    SIMPLE = "Simple"
    NORMAL = "Normal"
    HARD = "Hard"
    EXTRA_HARD = "Extra Hard"
    EINSTEIN = "Einstein"

    @property
    def level(self) -> int:
        """Ordinal position, 0 for SUPER_EASY up to 6 for EINSTEIN."""
        return CATEGORY_ORDER.index(self)


CATEGORY_ORDER = tuple(DifficultyCategory)
"""Categories in ascending difficulty."""

DIFFICULTY_POINTS: Dict[DifficultyCategory, int] = {
    DifficultyCategory.SUPER_EASY: 1,
    DifficultyCategory.EASY: 1,
    DifficultyCategory.SIMPLE: 1,
    DifficultyCategory.NORMAL: 2,
    DifficultyCategory.HARD: 3,
    DifficultyCategory.EXTRA_HARD: 4,
    DifficultyCategory.EINSTEIN: 4,
}
"""Points per category when harder questions are worth more."""

FLAT_POINTS: Dict[DifficultyCategory, int] = {category: 1 for category in CATEGORY_ORDER}
"""One point for every correct answer regardless of difficulty."""

SKIPPABLE_CATEGORIES = frozenset({DifficultyCategory.EXTRA_HARD, DifficultyCategory.EINSTEIN})

_THRESHOLDS = {
    Operation.ADDITION: ADDITION_THRESHOLDS,
    Operation.SUBTRACTION: SUBTRACTION_THRESHOLDS,
    Operation.MULTIPLICATION: MULTIPLICATION_THRESHOLDS,
    Operation.DIVISION: DIVISION_THRESHOLDS,
}


def derived_quantity(a: int, b: int, operation: Operation) -> int:
    """
    Quantity a question's difficulty is judged by.

    - addition: the larger operand (the sum would make the range too wide)
    - subtraction: the difference
    - multiplication: the product
    - division: the divisor

    Args:
        a: First operand
        b: Second operand
        operation: Question operation

    Returns:
        The value compared against the operation's thresholds
    """
    if operation == Operation.ADDITION:
        return max(a, b)
    if operation == Operation.SUBTRACTION:
        return a - b
    if operation == Operation.MULTIPLICATION:
        return a * b
    return b


def bucket(value: int, thresholds: Sequence[int]) -> DifficultyCategory:
    """Map a value onto a category using inclusive upper bounds."""
    for category, upper in zip(CATEGORY_ORDER, thresholds):
        if value <= upper:
            return category
    return DifficultyCategory.EINSTEIN


def classify(a: int, b: int, operation) -> DifficultyCategory:
    """
    Classify a question into one of the seven difficulty categories.

    Deterministic and total: any value above the sixth threshold is EINSTEIN.
    Operations are matched like Operation.parse(); values it does not
    recognize classify as SUPER_EASY.

    Args:
        a: First operand
        b: Second operand
        operation: Operation, its symbol, name or alias

    Returns:
        DifficultyCategory for the question
    """
    operation = Operation.lookup(operation)
    if operation is None:
        return DifficultyCategory.SUPER_EASY

    value = derived_quantity(a, b, operation)
    return bucket(value, _THRESHOLDS[operation])


def points_for(
    category,
    table: Mapping[DifficultyCategory, int] = DIFFICULTY_POINTS
) -> int:
    """
    Points awarded for a correct answer in the given category.

    Args:
        category: DifficultyCategory (or its label)
        table: Scoring table to look the category up in

    Returns:
        Points from the table, DEFAULT_POINTS for an unrecognized category
    """
    try:
        category = DifficultyCategory(category)
    except ValueError:
        return DEFAULT_POINTS
    return table.get(category, DEFAULT_POINTS)


def is_skippable(category) -> bool:
    """Whether the skip button should be offered for this category."""
    try:
        return DifficultyCategory(category) in SKIPPABLE_CATEGORIES
    except ValueError:
        return False


def get_scoring_table(mode: str) -> Dict[DifficultyCategory, int]:
    """
    Resolve a scoring mode name to its table.

    Args:
        mode: 'difficulty' or 'flat'; anything else means 'difficulty'

    Returns:
        Scoring table mapping category to points
    """
    if (mode or "").lower() == SCORING_MODE_FLAT:
        return FLAT_POINTS
    return DIFFICULTY_POINTS
