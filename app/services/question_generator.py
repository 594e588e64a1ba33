"""Question generation with operation-specific operand rules."""
import random
from dataclasses import dataclass
from typing import Dict, Optional, Tuple
from app.services.operations import Operation, evaluate
from app.services.difficulty import DifficultyCategory, classify, is_skippable
from app.constants import (
    ADDITION_MAX_OPERAND,
    MULTIPLICATION_MAX_OPERAND,
    DIVISION_MAX_DIVISOR,
    DIVISION_MAX_QUOTIENT,
    EMOJI_LIST,
)


@dataclass(frozen=True)
class Question:
    """Two non-negative operands and the operation joining them."""
    a: int
    b: int
    operation: Operation

    @property
    def answer(self) -> float:
        return evaluate(self.a, self.b, self.operation)

    @property
    def category(self) -> DifficultyCategory:
        return classify(self.a, self.b, self.operation)

    @property
    def can_skip(self) -> bool:
        return is_skippable(self.category)

    @property
    def prompt(self) -> str:
        return f"{self.a} {self.operation.value} {self.b} = ?"


def generate_operands(operation, rng: Optional[random.Random] = None) -> Tuple[int, int]:
    """
    Draw an operand pair for the given operation.

    Rules (all bounds inclusive):
    - addition: a, b in [0, 30]
    - subtraction: a, b in [0, 30], swapped so that a >= b
    - multiplication: a, b in [0, 10]
    - division: divisor in [1, 10], quotient in [1, 10], a = divisor * quotient
    - anything else: the addition rule

    The subtraction swap skews differences toward small values; the
    difficulty distribution depends on it, so it stays.

    Args:
        operation: Operation (or value accepted by Operation.parse)
        rng: Random source; the module-level generator when omitted

    Returns:
        Tuple (a, b)
    """
    rng = rng or random
    operation = Operation.parse(operation)

    if operation == Operation.SUBTRACTION:
        a = rng.randint(0, ADDITION_MAX_OPERAND)
        b = rng.randint(0, ADDITION_MAX_OPERAND)
        if b > a:
            a, b = b, a
        return a, b

    if operation == Operation.MULTIPLICATION:
        return (
            rng.randint(0, MULTIPLICATION_MAX_OPERAND),
            rng.randint(0, MULTIPLICATION_MAX_OPERAND),
        )

    if operation == Operation.DIVISION:
        divisor = rng.randint(1, DIVISION_MAX_DIVISOR)
        quotient = rng.randint(1, DIVISION_MAX_QUOTIENT)
        return divisor * quotient, divisor

    return rng.randint(0, ADDITION_MAX_OPERAND), rng.randint(0, ADDITION_MAX_OPERAND)


def generate_question(operation, rng: Optional[random.Random] = None) -> Question:
    """Generate a Question for the operation."""
    operation = Operation.parse(operation)
    a, b = generate_operands(operation, rng)
    return Question(a=a, b=b, operation=operation)


def pick_emojis(rng: Optional[random.Random] = None) -> Tuple[str, str]:
    """
    Choose two different emoji to illustrate the operands.

    Args:
        rng: Random source

    Returns:
        Tuple of two distinct emoji
    """
    rng = rng or random
    first = rng.choice(EMOJI_LIST)
    second = rng.choice([emoji for emoji in EMOJI_LIST if emoji != first])
    return first, second


def format_question(question: Question, rng: Optional[random.Random] = None) -> Dict:
    """
    Format a question for the front-end.

    Args:
        question: Question to display
        rng: Random source for the emoji choice

    Returns:
        Dictionary with operands, operator, prompt, emoji and difficulty
    """
    emoji_a, emoji_b = pick_emojis(rng)
    category = question.category

    return {
        "a": question.a,
        "b": question.b,
        "operation": question.operation.label,
        "operator": question.operation.value,
        "prompt": question.prompt,
        "emoji_a": emoji_a,
        "emoji_b": emoji_b,
        "difficulty": category.value,
        "difficulty_level": category.level,
        "can_skip": question.can_skip,
    }
