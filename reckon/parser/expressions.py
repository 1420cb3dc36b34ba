from __future__ import annotations

from typing import Callable, Dict

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
)
from ..errors import UnexpectedTokenError
from ..lexer import Token, TokenType
from .base import ParserBase

BITWISE_OR_OPERATORS = {TokenType.PIPE: BinaryOperator.BIT_OR}
BITWISE_XOR_OPERATORS = {TokenType.XOR: BinaryOperator.BIT_XOR}
BITWISE_AND_OPERATORS = {TokenType.AMPERSAND: BinaryOperator.BIT_AND}
SHIFT_OPERATORS = {
    TokenType.SHIFT_LEFT: BinaryOperator.SHIFT_LEFT,
    TokenType.SHIFT_RIGHT: BinaryOperator.SHIFT_RIGHT,
}
ADDITIVE_OPERATORS = {
    TokenType.PLUS: BinaryOperator.ADD,
    TokenType.MINUS: BinaryOperator.SUB,
}
TERM_OPERATORS = {
    TokenType.STAR: BinaryOperator.MUL,
    TokenType.SLASH: BinaryOperator.DIV,
    TokenType.PERCENT: BinaryOperator.MOD,
}

RADIX_TARGETS = {
    TokenType.BINARY: RadixFormat.BINARY,
    TokenType.OCTAL: RadixFormat.OCTAL,
    TokenType.DECIMAL: RadixFormat.DECIMAL,
    TokenType.HEX: RadixFormat.HEXADECIMAL,
}


def number_value(token: Token) -> float:
    """Numeric value of a NUMBER token, read in the token's radix."""
    if token.radix is RadixFormat.UNSPECIFIED:
        return float(token.value)
    try:
        return float(int(token.value, token.radix.base))
    except OverflowError:
        return float("inf")


class ExpressionParserMixin(ParserBase):
    """
    Recursive descent with one method per precedence level.

    Operator Precedence (lowest to highest):
        1. Bitwise or: |
        2. Bitwise xor: xor
        3. Bitwise and: &
        4. Shift: <<, >>
        5. Additive: +, - (plus, minus, ...)
        6. Term: *, /, mod, implicit multiplication before '('
        7. Exponent: ^ (left-associative, 2^3^4 is (2^3)^4)
        8. Conversion: expr in binary, expr in kelvin
        9. Unit suffix: 5 USD
        10. Factor: unary +/-, numbers, parenthesised expressions
    """

    def _parse_left_assoc(
        self,
        operand: Callable[[], Expression],
        operators: Dict[TokenType, BinaryOperator],
    ) -> Expression:
        node = operand()
        while True:
            token = self.try_consume(*operators)
            if token is None:
                return node
            node = BinaryOp(left=node, operator=operators[token.type], right=operand())

    def _parse_bitwise_or(self) -> Expression:
        return self._parse_left_assoc(self._parse_bitwise_xor, BITWISE_OR_OPERATORS)

    def _parse_bitwise_xor(self) -> Expression:
        return self._parse_left_assoc(self._parse_bitwise_and, BITWISE_XOR_OPERATORS)

    def _parse_bitwise_and(self) -> Expression:
        return self._parse_left_assoc(self._parse_shift, BITWISE_AND_OPERATORS)

    def _parse_shift(self) -> Expression:
        return self._parse_left_assoc(self._parse_additive, SHIFT_OPERATORS)

    def _parse_additive(self) -> Expression:
        return self._parse_left_assoc(self._parse_term, ADDITIVE_OPERATORS)

    def _parse_term(self) -> Expression:
        node = self._parse_exponent()
        while True:
            token = self.try_consume(*TERM_OPERATORS)
            if token is not None:
                node = BinaryOp(left=node, operator=TERM_OPERATORS[token.type], right=self._parse_exponent())
            elif self.check(TokenType.LPAREN):
                # 2(3+1) reads as 2 * (3+1)
                node = BinaryOp(left=node, operator=BinaryOperator.MUL, right=self._parse_exponent())
            else:
                return node

    def _parse_exponent(self) -> Expression:
        node = self._parse_conversion()
        while self.try_consume(TokenType.CARET):
            node = BinaryOp(left=node, operator=BinaryOperator.EXPONENT, right=self._parse_conversion())
        return node

    def _parse_conversion(self) -> Expression:
        node = self._parse_unit()
        while self.try_consume(TokenType.IN):
            token = self.current_token()
            if token.type in RADIX_TARGETS:
                self.consume()
                node = ConvertFormat(operand=node, target=RADIX_TARGETS[token.type])
            elif token.type is TokenType.UNIT:
                self.consume()
                node = ConvertUnit(operand=node, unit=token.value)
            else:
                raise UnexpectedTokenError(token, expected="a radix name or unit after 'in'")
        return node

    def _parse_unit(self) -> Expression:
        node = self._parse_factor()
        token = self.try_consume(TokenType.UNIT)
        if token is not None:
            node = ConvertUnit(operand=node, unit=token.value)
        return node

    def _parse_factor(self) -> Expression:
        with self.nested():
            if self.try_consume(TokenType.PLUS):
                return UnaryPlus(operand=self._parse_factor())
            if self.try_consume(TokenType.MINUS):
                return UnaryMinus(operand=self._parse_factor())

            token = self.try_consume(TokenType.NUMBER)
            if token is not None:
                return NumberLiteral(value=number_value(token), format=token.radix)

            if self.try_consume(TokenType.LPAREN):
                node = self._parse_bitwise_or()
                self.expect(TokenType.RPAREN, "')'")
                return node

            raise UnexpectedTokenError(self.current_token(), expected="a number or '('")
