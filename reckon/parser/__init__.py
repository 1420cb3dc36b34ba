"""Recursive-descent parser turning reckon tokens into an expression AST."""

from __future__ import annotations

from typing import Sequence

from ..ast import Expression
from ..errors import ExpressionTooDeepError, UnexpectedTokenError
from ..lexer import Token
from ..observability import get_logger
from .base import DEFAULT_MAX_DEPTH, ParserBase
from .expressions import ExpressionParserMixin

logger = get_logger(__name__)


class Parser(ExpressionParserMixin, ParserBase):
    """Parser for a complete token stream."""

    def parse(self) -> Expression:
        """
        Parse the whole token stream into a single expression.

        Trailing tokens before ``EOF`` are rejected rather than ignored.

        Raises:
            UnexpectedTokenError: If the tokens do not form one expression.
            ExpressionTooDeepError: If nesting exceeds ``max_depth``.
        """
        try:
            node = self._parse_bitwise_or()
        except RecursionError as exc:
            raise ExpressionTooDeepError(self.max_depth) from exc
        token = self.current_token()
        if not token.is_eof:
            raise UnexpectedTokenError(token, expected="end of input")
        logger.debug("Parsed %d tokens into %r", len(self.tokens), node)
        return node


def parse(tokens: Sequence[Token], *, max_depth: int = DEFAULT_MAX_DEPTH) -> Expression:
    """Parse a token list produced by :func:`reckon.lexer.tokenize`."""
    return Parser(tokens, max_depth=max_depth).parse()


__all__ = ["Parser", "parse", "DEFAULT_MAX_DEPTH"]
