"""Evaluation of reckon expression trees."""

from .display import render_decimal, render_number, render_radix
from .evaluator import ARITHMETIC, Evaluator, ExpressionResult, evaluate

__all__ = [
    "ARITHMETIC",
    "Evaluator",
    "ExpressionResult",
    "evaluate",
    "render_decimal",
    "render_number",
    "render_radix",
]
