"""Unified error model for reckon."""

from __future__ import annotations

from typing import Optional


class ReckonError(Exception):
    """Base class for every error surfaced by the expression pipeline."""

    code: Optional[str] = None
    hint: Optional[str] = None

    def __init__(
        self,
        message: str,
        *,
        column: Optional[int] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.column = column
        if code is not None:
            self.code = code
        if hint is not None:
            self.hint = hint

    def format(self) -> str:
        components = [self.message]
        meta_parts = []
        if self.column is not None:
            meta_parts.append(f"column {self.column}")
        if self.code:
            meta_parts.append(self.code)
        if meta_parts:
            components[-1] = f"{components[-1]} ({'; '.join(meta_parts)})"
        if self.hint:
            components.append(f"Hint: {self.hint}")
        return " ".join(part for part in components if part)


class LexError(ReckonError):
    """Raised when the input text cannot be split into tokens."""


class InvalidCharacterError(LexError):
    code = "LEX_INVALID_CHARACTER"

    def __init__(self, char: str, *, column: Optional[int] = None) -> None:
        super().__init__(f"Unknown character: {char!r}", column=column)
        self.char = char


class InvalidKeywordError(LexError):
    code = "LEX_INVALID_KEYWORD"

    def __init__(self, word: str, *, column: Optional[int] = None) -> None:
        super().__init__(
            f"Invalid keyword: {word!r}",
            column=column,
            hint="Use an operator word (plus, minus, times, ...), a radix name or a known unit",
        )
        self.word = word


class ParseError(ReckonError):
    """Raised when the token stream does not match the grammar."""


class UnexpectedTokenError(ParseError):
    code = "PARSE_UNEXPECTED_TOKEN"

    def __init__(self, token, expected: Optional[str] = None) -> None:
        found = "end of input" if token.is_eof else repr(token.value)
        message = f"Unexpected token: {found}"
        if expected:
            message = f"{message}, expected {expected}"
        super().__init__(message, column=token.column)
        self.token = token
        self.expected = expected


class ResourceLimitError(ReckonError):
    """Raised when an evaluation would exceed a configured resource limit."""


class ExpressionTooDeepError(ResourceLimitError):
    code = "LIMIT_EXPRESSION_DEPTH"

    def __init__(self, max_depth: int, *, column: Optional[int] = None) -> None:
        super().__init__(
            f"Expression nesting exceeds the maximum depth of {max_depth}",
            column=column,
            hint="Reduce the number of nested parentheses or unary signs",
        )
        self.max_depth = max_depth


class EvalError(ReckonError):
    """Raised when a well-formed expression cannot be evaluated."""


class UnknownUnitError(EvalError):
    code = "EVAL_UNKNOWN_UNIT"

    def __init__(self, unit: str) -> None:
        super().__init__(f"Unknown unit: {unit!r}")
        self.unit = unit


class IncompatibleUnitsError(EvalError):
    code = "EVAL_INCOMPATIBLE_UNITS"

    def __init__(self, source: str, target: str) -> None:
        super().__init__(f"Cannot convert {source!r} to {target!r}")
        self.source = source
        self.target = target


class InvalidOperandError(EvalError):
    code = "EVAL_INVALID_OPERAND"


class UnitRegistryError(ReckonError):
    """Raised when unit families cannot be combined into a registry."""

    code = "UNIT_REGISTRY"


class RatesFileError(ReckonError):
    """Raised when a currency-rate artifact cannot be loaded."""

    code = "RATES_FILE"


class ConfigError(ReckonError):
    """Raised when configuration files or environment overrides are invalid."""

    code = "CONFIG"


__all__ = [
    "ReckonError",
    "LexError",
    "InvalidCharacterError",
    "InvalidKeywordError",
    "ParseError",
    "UnexpectedTokenError",
    "ResourceLimitError",
    "ExpressionTooDeepError",
    "EvalError",
    "UnknownUnitError",
    "IncompatibleUnitsError",
    "InvalidOperandError",
    "UnitRegistryError",
    "RatesFileError",
    "ConfigError",
]
