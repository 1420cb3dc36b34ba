from reckon.errors import (
    EvalError,
    ExpressionTooDeepError,
    IncompatibleUnitsError,
    InvalidOperandError,
    ParseError,
    ReckonError,
    ResourceLimitError,
    UnexpectedTokenError,
    UnknownUnitError,
)
from reckon.lexer import Token, TokenType


def test_error_format_includes_metadata() -> None:
    err = ReckonError(
        "Bad input",
        column=7,
        code="DEMO",
        hint="Try again.",
    )
    formatted = err.format()
    assert formatted == "Bad input (column 7; DEMO) Hint: Try again."


def test_error_format_handles_missing_location() -> None:
    err = InvalidOperandError("Negative shift count: -1")
    formatted = err.format()
    assert formatted.startswith("Negative shift count")
    assert "column" not in formatted
    assert "EVAL_INVALID_OPERAND" in formatted


def test_unexpected_token_describes_end_of_input() -> None:
    token = Token(type=TokenType.EOF, value="", column=4)
    err = UnexpectedTokenError(token, expected="a number or '('")
    assert str(err) == "Unexpected token: end of input, expected a number or '('"
    assert err.column == 4
    assert isinstance(err, ParseError)


def test_error_hierarchy() -> None:
    assert issubclass(UnknownUnitError, EvalError)
    assert issubclass(IncompatibleUnitsError, EvalError)
    assert issubclass(ExpressionTooDeepError, ResourceLimitError)
    assert ExpressionTooDeepError(64).hint
