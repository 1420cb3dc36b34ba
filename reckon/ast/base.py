"""Core AST node definitions shared by the parser and the evaluator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RadixFormat(Enum):
    """Textual base used to render a result, independent of its value."""

    UNSPECIFIED = "unspecified"
    DECIMAL = "decimal"
    BINARY = "binary"
    OCTAL = "octal"
    HEXADECIMAL = "hexadecimal"

    @property
    def base(self) -> int:
        return _RADIX_BASES[self]

    def __str__(self) -> str:
        return self.value


_RADIX_BASES = {
    RadixFormat.UNSPECIFIED: 10,
    RadixFormat.DECIMAL: 10,
    RadixFormat.BINARY: 2,
    RadixFormat.OCTAL: 8,
    RadixFormat.HEXADECIMAL: 16,
}


def merge_formats(left: RadixFormat, right: RadixFormat) -> RadixFormat:
    """First explicit format of the two operands; the right one wins ties."""
    if left is RadixFormat.UNSPECIFIED:
        return right
    if right is RadixFormat.UNSPECIFIED:
        return left
    return right


@dataclass(frozen=True)
class Expression:
    """Base class for all expression types."""

    pass
