"""Token operations shared by the reckon parser mixins."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence

from ..errors import ExpressionTooDeepError, UnexpectedTokenError
from ..lexer import Token, TokenType

DEFAULT_MAX_DEPTH = 64


class ParserBase:
    """Cursor over a token list with single-token lookahead and no backtracking."""

    def __init__(self, tokens: Sequence[Token], *, max_depth: int = DEFAULT_MAX_DEPTH):
        self.tokens: List[Token] = list(tokens)
        if not self.tokens or not self.tokens[-1].is_eof:
            column = self.tokens[-1].column + len(self.tokens[-1].value) if self.tokens else 1
            self.tokens.append(Token(type=TokenType.EOF, value="", column=column))
        self.token_pos = 0
        self.max_depth = max_depth
        self.depth = 0

    def current_token(self) -> Token:
        """Get current token without consuming it."""
        return self.tokens[min(self.token_pos, len(self.tokens) - 1)]

    def check(self, *types: TokenType) -> bool:
        return self.current_token().type in types

    def consume(self) -> Token:
        """Consume and return current token."""
        token = self.current_token()
        if not token.is_eof:
            self.token_pos += 1
        return token

    def try_consume(self, *types: TokenType) -> Optional[Token]:
        """Consume the current token if it has one of ``types``."""
        if self.check(*types):
            return self.consume()
        return None

    def expect(self, token_type: TokenType, description: str) -> Token:
        """Consume a token of ``token_type`` or fail with an UnexpectedTokenError."""
        token = self.current_token()
        if token.type is not token_type:
            raise UnexpectedTokenError(token, expected=description)
        return self.consume()

    @contextmanager
    def nested(self) -> Iterator[None]:
        """Track one level of nesting, failing past ``max_depth``."""
        self.depth += 1
        try:
            if self.depth > self.max_depth:
                raise ExpressionTooDeepError(self.max_depth, column=self.current_token().column)
            yield
        finally:
            self.depth -= 1
