"""Arithmetic operations offered to the player."""
from enum import Enum
from typing import Optional, Union


class Operation(str, Enum):
    """Operation selected by the player, stored by its symbol."""
    ADDITION = "+"
    SUBTRACTION = "-"
    MULTIPLICATION = "×"
    DIVISION = "÷"

    @classmethod
    def parse(cls, value: Optional[Union[str, "Operation"]]) -> "Operation":
        """
        Resolve a symbol, name or alias to an Operation.

        Accepts the stored symbol ("+", "-", "×", "÷"), the lower-case name
        ("addition", ...), or the ASCII aliases "x", "*" and "/".
        Anything else resolves to ADDITION.

        Args:
            value: Raw operation value from a request or storage

        Returns:
            Matching Operation, ADDITION if unrecognized
        """
        return cls.lookup(value) or cls.ADDITION

    @classmethod
    def lookup(cls, value) -> Optional["Operation"]:
        """Same matching as parse(), but None for unrecognized values."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        return _ALIASES.get(value.strip().lower())

    @property
    def label(self) -> str:
        """Lower-case name used by the API."""
        return self.name.lower()


_ALIASES = {
    "+": Operation.ADDITION,
    "addition": Operation.ADDITION,
    "add": Operation.ADDITION,
    "-": Operation.SUBTRACTION,
    "subtraction": Operation.SUBTRACTION,
    "subtract": Operation.SUBTRACTION,
    "×": Operation.MULTIPLICATION,
    "x": Operation.MULTIPLICATION,
    "*": Operation.MULTIPLICATION,
    "multiplication": Operation.MULTIPLICATION,
    "multiply": Operation.MULTIPLICATION,
    "÷": Operation.DIVISION,
    "/": Operation.DIVISION,
    "division": Operation.DIVISION,
    "divide": Operation.DIVISION,
}


def evaluate(a: int, b: int, operation: Operation) -> float:
    """
    Compute the correct answer for a question.

    Division uses true division; generated division questions always divide
    exactly. Unrecognized operations are treated as addition.

    Args:
        a: First operand
        b: Second operand
        operation: Operation to apply

    Returns:
        The numeric result
    """
    operation = Operation.parse(operation)

    if operation == Operation.SUBTRACTION:
        return a - b
    if operation == Operation.MULTIPLICATION:
        return a * b
    if operation == Operation.DIVISION:
        return a / b
    return a + b
