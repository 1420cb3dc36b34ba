"""Public entry points chaining lexer, parser and evaluator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .ast import Expression
from .config import ReckonConfig, get_config
from .errors import ReckonError
from .eval import Evaluator
from .lexer import Lexer
from .observability import get_logger, log_evaluation_failure
from .parser import Parser
from .units import UnitRegistry, get_default_registry

logger = get_logger(__name__)


@dataclass(frozen=True)
class InterpretResult:
    """Outcome of :meth:`Interpreter.try_interpret`: a display string or an error."""

    text: str
    value: Optional[str] = None
    error: Optional[ReckonError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def display(self, placeholder: str = "Nope") -> str:
        """The value, or ``placeholder`` when evaluation failed."""
        return self.value if self.value is not None else placeholder


class Interpreter:
    """Evaluate reckon expressions against one configuration and unit registry.

    Instances hold no per-call state and may be shared between threads.
    """

    def __init__(
        self,
        config: Optional[ReckonConfig] = None,
        registry: Optional[UnitRegistry] = None,
    ):
        self.config = config if config is not None else get_config()
        self.registry = registry if registry is not None else get_default_registry()
        self.evaluator = Evaluator(self.registry, decimal_places=self.config.decimal_places)

    def parse(self, text: str) -> Expression:
        tokens = Lexer(text, self.registry).tokenize()
        return Parser(tokens, max_depth=self.config.max_depth).parse()

    def interpret(self, text: str) -> str:
        """
        Evaluate one input line into its display string.

        Raises:
            LexError: On unknown characters or keywords.
            ParseError: When the tokens do not form an expression.
            ResourceLimitError: When nesting is too deep.
            EvalError: On unknown or incompatible units and invalid operands.
        """
        return self.evaluator.evaluate(self.parse(text))

    def try_interpret(self, text: str) -> InterpretResult:
        """Like :meth:`interpret` but returns failures instead of raising them."""
        try:
            return InterpretResult(text=text, value=self.interpret(text))
        except ReckonError as exc:
            log_evaluation_failure(text=text, error=exc, logger=logger)
            return InterpretResult(text=text, error=exc)

    def display(self, text: str) -> str:
        """Result string, or the configured placeholder on failure."""
        return self.try_interpret(text).display(self.config.placeholder)


def interpret(text: str) -> str:
    """Evaluate ``text`` with the default configuration and unit registry."""
    return Interpreter().interpret(text)


def try_interpret(text: str) -> InterpretResult:
    return Interpreter().try_interpret(text)


__all__ = ["Interpreter", "InterpretResult", "interpret", "try_interpret"]
