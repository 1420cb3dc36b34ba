"""Tree-walking evaluator for reckon expressions."""

from __future__ import annotations

import math
import operator
import sys
from dataclasses import dataclass, replace
from typing import Callable, Dict, Optional, Tuple

from ..ast import (
    BinaryOp,
    BinaryOperator,
    ConvertFormat,
    ConvertUnit,
    Expression,
    NumberLiteral,
    RadixFormat,
    UnaryMinus,
    UnaryPlus,
    merge_formats,
)
from ..errors import EvalError, ExpressionTooDeepError, InvalidOperandError
from ..observability import get_logger
from ..units import UnitRegistry, get_default_registry
from .display import render_number

__all__ = [
    "ARITHMETIC",
    "ExpressionResult",
    "Evaluator",
    "evaluate",
]

logger = get_logger(__name__)


@dataclass(frozen=True)
class ExpressionResult:
    """Value computed for one AST node."""

    value: float
    format: RadixFormat = RadixFormat.UNSPECIFIED
    unit: Optional[str] = None


def _divide(left: float, right: float) -> float:
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def _modulo(left: float, right: float) -> float:
    if right == 0 or math.isinf(left):
        return math.nan
    return math.fmod(left, right)


def _power(left: float, right: float) -> float:
    if left == 0 and right < 0:
        return math.inf
    try:
        return math.pow(left, right)
    except OverflowError:
        # Only odd integral exponents keep the sign of a negative base
        if left < 0 and right == int(right) and int(right) % 2:
            return -math.inf
        return math.inf
    except ValueError:
        return math.nan


def _integer_operand(value: float, symbol: str) -> int:
    if not math.isfinite(value):
        raise InvalidOperandError(f"Operator {symbol!r} needs finite operands, got {value}")
    return int(value)


def _bitwise(function: Callable[[int, int], int], symbol: str) -> Callable[[float, float], float]:
    def apply(left: float, right: float) -> float:
        return float(function(_integer_operand(left, symbol), _integer_operand(right, symbol)))

    return apply


# Any nonzero integer shifted left this far no longer fits in a float
MAX_LEFT_SHIFT = 1100


def _shift_operands(left: float, right: float, symbol: str) -> Tuple[int, int]:
    count = _integer_operand(right, symbol)
    if count < 0:
        raise InvalidOperandError(f"Negative shift count: {count}")
    return _integer_operand(left, symbol), count


def _shift_left(left: float, right: float) -> float:
    value, count = _shift_operands(left, right, "<<")
    if value == 0:
        return 0.0
    if count > MAX_LEFT_SHIFT:
        return math.copysign(math.inf, value)
    try:
        return float(value << count)
    except OverflowError:
        return math.copysign(math.inf, value)


def _shift_right(left: float, right: float) -> float:
    value, count = _shift_operands(left, right, ">>")
    if count > value.bit_length():
        return -1.0 if value < 0 else 0.0
    return float(value >> count)


ARITHMETIC: Dict[BinaryOperator, Callable[[float, float], float]] = {
    BinaryOperator.ADD: operator.add,
    BinaryOperator.SUB: operator.sub,
    BinaryOperator.MUL: operator.mul,
    BinaryOperator.DIV: _divide,
    BinaryOperator.MOD: _modulo,
    BinaryOperator.EXPONENT: _power,
    BinaryOperator.BIT_OR: _bitwise(operator.or_, "|"),
    BinaryOperator.BIT_XOR: _bitwise(operator.xor, "xor"),
    BinaryOperator.BIT_AND: _bitwise(operator.and_, "&"),
    BinaryOperator.SHIFT_LEFT: _shift_left,
    BinaryOperator.SHIFT_RIGHT: _shift_right,
}


class Evaluator:
    """Evaluate an expression tree into a display string."""

    def __init__(self, registry: Optional[UnitRegistry] = None, *, decimal_places: int = 2):
        """
        Initialize evaluator.

        Args:
            registry: Unit registry used for conversions and unit formatting
            decimal_places: Rounding applied to decimal renderings
        """
        self.registry = registry if registry is not None else get_default_registry()
        self.decimal_places = decimal_places
        self._visitors: Dict[type, Callable[[Expression], ExpressionResult]] = {
            NumberLiteral: self._visit_number,
            UnaryPlus: self._visit_unary_plus,
            UnaryMinus: self._visit_unary_minus,
            BinaryOp: self._visit_binary,
            ConvertFormat: self._visit_convert_format,
            ConvertUnit: self._visit_convert_unit,
        }

    def evaluate(self, expr: Expression) -> str:
        """Evaluate ``expr`` and render the result."""
        try:
            result = self.visit(expr)
        except RecursionError as exc:
            raise ExpressionTooDeepError(sys.getrecursionlimit()) from exc
        logger.debug("Evaluated %r to %r", expr, result)
        return self.render(result)

    def visit(self, expr: Expression) -> ExpressionResult:
        visitor = self._visitors.get(type(expr))
        if visitor is None:
            raise EvalError(f"Unsupported expression type: {type(expr).__name__}")
        return visitor(expr)

    def render(self, result: ExpressionResult) -> str:
        rendered = render_number(result.value, result.format, self.decimal_places)
        if result.unit is None:
            return rendered
        return self.registry.format(result.unit, rendered)

    def _visit_number(self, expr: NumberLiteral) -> ExpressionResult:
        return ExpressionResult(value=expr.value, format=expr.format)

    def _visit_unary_plus(self, expr: UnaryPlus) -> ExpressionResult:
        operand = self.visit(expr.operand)
        return ExpressionResult(value=operand.value, format=operand.format)

    def _visit_unary_minus(self, expr: UnaryMinus) -> ExpressionResult:
        operand = self.visit(expr.operand)
        return ExpressionResult(value=-operand.value, format=operand.format)

    def _visit_binary(self, expr: BinaryOp) -> ExpressionResult:
        left = self.visit(expr.left)
        right = self.visit(expr.right)
        left_value = left.value
        unit = right.unit

        if expr.operator.is_additive:
            if left.unit is not None and right.unit is not None:
                left_value = self.registry.convert(left.unit, right.unit, left.value)
            elif right.unit is None:
                unit = left.unit

        value = ARITHMETIC[expr.operator](left_value, right.value)
        return ExpressionResult(value=value, format=merge_formats(left.format, right.format), unit=unit)

    def _visit_convert_format(self, expr: ConvertFormat) -> ExpressionResult:
        operand = self.visit(expr.operand)
        return replace(operand, format=expr.target)

    def _visit_convert_unit(self, expr: ConvertUnit) -> ExpressionResult:
        operand = self.visit(expr.operand)
        value = self.registry.convert(operand.unit, expr.unit, operand.value)
        return replace(operand, value=value, unit=self.registry.require(expr.unit).name)


def evaluate(expr: Expression, registry: Optional[UnitRegistry] = None, *, decimal_places: int = 2) -> str:
    """Evaluate ``expr`` with a one-off :class:`Evaluator`."""
    return Evaluator(registry, decimal_places=decimal_places).evaluate(expr)
