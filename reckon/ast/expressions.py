"""Expression AST for the reckon calculator language."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .base import Expression, RadixFormat

__all__ = [
    "BinaryOperator",
    "NumberLiteral",
    "UnaryPlus",
    "UnaryMinus",
    "BinaryOp",
    "ConvertFormat",
    "ConvertUnit",
    "EXPRESSION_TYPES",
]


class BinaryOperator(Enum):
    """Operators accepted by :class:`BinaryOp`."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    EXPONENT = "^"
    BIT_OR = "|"
    BIT_XOR = "xor"
    BIT_AND = "&"
    SHIFT_LEFT = "<<"
    SHIFT_RIGHT = ">>"

    @property
    def is_additive(self) -> bool:
        return self in (BinaryOperator.ADD, BinaryOperator.SUB)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class NumberLiteral(Expression):
    """Numeric literal: 42, 1.5, 0b101, 0x1f"""
    value: float
    format: RadixFormat = RadixFormat.UNSPECIFIED


@dataclass(frozen=True)
class UnaryPlus(Expression):
    """Unary plus: +expr"""
    operand: Expression


@dataclass(frozen=True)
class UnaryMinus(Expression):
    """Negation: -expr"""
    operand: Expression


@dataclass(frozen=True)
class BinaryOp(Expression):
    """Binary operation: left op right"""
    left: Expression
    operator: BinaryOperator
    right: Expression


@dataclass(frozen=True)
class ConvertFormat(Expression):
    """Radix conversion: expr in binary"""
    operand: Expression
    target: RadixFormat


@dataclass(frozen=True)
class ConvertUnit(Expression):
    """Unit annotation or conversion: expr celsius, expr in kelvin"""
    operand: Expression
    unit: str


# Closed set of node kinds; the evaluator must handle each of them.
EXPRESSION_TYPES = (
    NumberLiteral,
    UnaryPlus,
    UnaryMinus,
    BinaryOp,
    ConvertFormat,
    ConvertUnit,
)
