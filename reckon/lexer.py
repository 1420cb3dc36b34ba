"""Lexical analyzer (tokenizer) for reckon expressions.

Converts an input line into a flat list of tokens terminated by ``EOF``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, List, Optional

from .ast import RadixFormat
from .errors import InvalidCharacterError, InvalidKeywordError
from .observability import get_logger
from .units import UnitRegistry, get_default_registry

logger = get_logger(__name__)


class TokenType(Enum):
    """Token types for reckon expressions."""

    # Literals
    NUMBER = auto()
    UNIT = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    PERCENT = auto()
    CARET = auto()
    AMPERSAND = auto()
    PIPE = auto()
    XOR = auto()
    SHIFT_LEFT = auto()
    SHIFT_RIGHT = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()

    # Keywords
    IN = auto()
    BINARY = auto()
    OCTAL = auto()
    DECIMAL = auto()
    HEX = auto()

    # Special
    EOF = auto()


@dataclass(frozen=True)
class Token:
    """A single token with its source column (1-based)."""

    type: TokenType
    value: str
    column: int
    radix: RadixFormat = RadixFormat.UNSPECIFIED

    @property
    def is_eof(self) -> bool:
        return self.type is TokenType.EOF

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, col {self.column})"


SINGLE_CHAR_TOKENS: Dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "%": TokenType.PERCENT,
    "^": TokenType.CARET,
    "&": TokenType.AMPERSAND,
    "|": TokenType.PIPE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}

TWO_CHAR_TOKENS: Dict[str, TokenType] = {
    "<<": TokenType.SHIFT_LEFT,
    ">>": TokenType.SHIFT_RIGHT,
}

# Word operators, resolved before any other keyword
WORD_OPERATORS: Dict[str, TokenType] = {
    "plus": TokenType.PLUS,
    "and": TokenType.PLUS,
    "with": TokenType.PLUS,
    "minus": TokenType.MINUS,
    "substract": TokenType.MINUS,
    "without": TokenType.MINUS,
    "times": TokenType.STAR,
    "mul": TokenType.STAR,
    "divide": TokenType.SLASH,
    "mod": TokenType.PERCENT,
    "xor": TokenType.XOR,
}

RADIX_KEYWORDS: Dict[str, TokenType] = {
    "binary": TokenType.BINARY,
    "octal": TokenType.OCTAL,
    "decimal": TokenType.DECIMAL,
    "hex": TokenType.HEX,
}

RADIX_PREFIXES: Dict[str, RadixFormat] = {
    "b": RadixFormat.BINARY,
    "o": RadixFormat.OCTAL,
    "x": RadixFormat.HEXADECIMAL,
}

RADIX_DIGITS: Dict[RadixFormat, str] = {
    RadixFormat.BINARY: "01",
    RadixFormat.OCTAL: "01234567",
    RadixFormat.HEXADECIMAL: "0123456789abcdefABCDEF",
}

RESERVED_WORDS = frozenset({*WORD_OPERATORS, *RADIX_KEYWORDS, "in"})

_DEGREE_SIGN = "°"


def _is_word_char(char: Optional[str]) -> bool:
    return bool(char) and ((char.isascii() and char.isalpha()) or char == _DEGREE_SIGN)


class Lexer:
    """Tokenizer for a single reckon expression."""

    def __init__(self, source: str, registry: Optional[UnitRegistry] = None):
        self.source = source
        self.registry = registry if registry is not None else get_default_registry()
        self.pos = 0
        self.tokens: List[Token] = []

    @property
    def column(self) -> int:
        return self.pos + 1

    def peek(self, offset: int = 0) -> Optional[str]:
        """Peek at character without consuming."""
        pos = self.pos + offset
        if pos < len(self.source):
            return self.source[pos]
        return None

    def advance(self, count: int = 1) -> str:
        chunk = self.source[self.pos : self.pos + count]
        self.pos += count
        return chunk

    def skip_whitespace(self) -> None:
        while self.peek() in (" ", "\t"):
            self.advance()

    def add_token(
        self,
        token_type: TokenType,
        value: str,
        column: int,
        radix: RadixFormat = RadixFormat.UNSPECIFIED,
    ) -> None:
        self.tokens.append(Token(type=token_type, value=value, column=column, radix=radix))

    def _radix_prefix(self) -> Optional[RadixFormat]:
        """Radix of a ``0b``/``0o``/``0x`` prefix at the cursor, if one starts a literal."""
        if self.peek() != "0":
            return None
        marker = self.peek(1)
        if marker is None or marker.lower() not in RADIX_PREFIXES:
            return None
        radix = RADIX_PREFIXES[marker.lower()]
        first_digit = self.peek(2)
        if first_digit is None or first_digit not in RADIX_DIGITS[radix]:
            return None
        return radix

    def read_prefixed_number(self, radix: RadixFormat) -> str:
        self.advance(2)
        digits = RADIX_DIGITS[radix]
        chars = []
        while self.peek() is not None and self.peek() in digits:
            chars.append(self.advance())
        return "".join(chars).lower()

    def read_number(self) -> str:
        """Read decimal digits with at most one decimal point."""
        chars = []
        has_point = False
        while self.peek() is not None:
            char = self.peek()
            if char.isascii() and char.isdigit():
                chars.append(self.advance())
            elif char == "." and not has_point:
                has_point = True
                chars.append(self.advance())
            else:
                break
        return "".join(chars)

    def read_word(self) -> str:
        chars = []
        while _is_word_char(self.peek()):
            chars.append(self.advance())
        return "".join(chars)

    def classify_word(self, word: str, column: int) -> None:
        keyword = word.lower()
        if keyword in WORD_OPERATORS:
            self.add_token(WORD_OPERATORS[keyword], keyword, column)
        elif keyword in RADIX_KEYWORDS:
            self.add_token(RADIX_KEYWORDS[keyword], keyword, column)
        elif keyword == "in":
            self.add_token(TokenType.IN, keyword, column)
        elif keyword in self.registry:
            self.add_token(TokenType.UNIT, keyword, column)
        else:
            raise InvalidKeywordError(word, column=column)

    def tokenize(self) -> List[Token]:
        """Tokenize the entire source."""
        while self.pos < len(self.source):
            self.skip_whitespace()
            if self.pos >= len(self.source):
                break

            char = self.peek()
            column = self.column

            two_char = char + (self.peek(1) or "")
            if two_char in TWO_CHAR_TOKENS:
                self.add_token(TWO_CHAR_TOKENS[two_char], self.advance(2), column)
                continue

            if char in SINGLE_CHAR_TOKENS:
                self.add_token(SINGLE_CHAR_TOKENS[char], self.advance(), column)
                continue

            if char.isascii() and char.isdigit():
                radix = self._radix_prefix()
                if radix is not None:
                    self.add_token(TokenType.NUMBER, self.read_prefixed_number(radix), column, radix)
                else:
                    self.add_token(TokenType.NUMBER, self.read_number(), column)
                continue

            if _is_word_char(char):
                self.classify_word(self.read_word(), column)
                continue

            raise InvalidCharacterError(char, column=column)

        self.add_token(TokenType.EOF, "", self.column)
        logger.debug("Tokenized %r into %d tokens", self.source, len(self.tokens))
        return self.tokens


def tokenize(source: str, registry: Optional[UnitRegistry] = None) -> List[Token]:
    """Tokenize a reckon expression."""
    return Lexer(source, registry).tokenize()


__all__ = [
    "Token",
    "TokenType",
    "Lexer",
    "tokenize",
    "RESERVED_WORDS",
    "WORD_OPERATORS",
    "RADIX_KEYWORDS",
]
