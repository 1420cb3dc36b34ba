"""Dataclasses representing the abstract syntax tree of a reckon expression."""

from .base import Expression, RadixFormat, merge_formats
from .expressions import (
    EXPRESSION_TYPES,
    BinaryOp,
    BinaryOperator,
    ConvertFormat,
    ConvertUnit,
    NumberLiteral,
    UnaryMinus,
    UnaryPlus,
)

__all__ = [
    "Expression",
    "RadixFormat",
    "merge_formats",
    "EXPRESSION_TYPES",
    "BinaryOp",
    "BinaryOperator",
    "ConvertFormat",
    "ConvertUnit",
    "NumberLiteral",
    "UnaryMinus",
    "UnaryPlus",
]
