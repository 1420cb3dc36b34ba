"""
Error handling for the reckon CLI.

Expression failures are not CLI errors: they are rendered as the configured
placeholder (or reported per expression in strict mode). CLI errors cover
setup problems such as unreadable config or rates files.
"""

import os
import sys
import traceback
from typing import Any, Dict, Optional

from ..errors import ReckonError

# Tracebacks longer than this are cut in verbose output
_TRACE_LIMIT = 4000


class CLIError(Exception):
    """
    A setup failure that stops the CLI before any expression is evaluated.

    Attributes:
        message: What went wrong, shown to the user
        code: Stable identifier such as ``CLI_CONFIG_ERROR``
        hint: Suggested fix, if any
        context: Extra details printed with ``--verbose``
    """

    def __init__(
        self,
        message: str,
        *,
        code: str,
        hint: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.hint = hint
        self.context = context or {}

    def __str__(self) -> str:
        return self.message


class CLIConfigError(CLIError):
    """Configuration or rates file could not be loaded."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("code", "CLI_CONFIG_ERROR")
        super().__init__(message, **kwargs)


def format_cli_error(exc: BaseException, *, verbose: bool = False) -> str:
    """
    Render an exception as the lines printed on stderr.

    Examples:
        >>> print(format_cli_error(CLIConfigError("Bad file", hint="Check the path")))
        Error [CLI_CONFIG_ERROR]: Bad file
        Hint: Check the path
    """
    lines = []
    if isinstance(exc, CLIError):
        lines.append(f"Error [{exc.code}]: {exc.message}")
        if exc.hint:
            lines.append(f"Hint: {exc.hint}")
        if verbose and exc.context:
            lines.append("Context:")
            for key, value in exc.context.items():
                lines.append(f"  {key}: {value}")
    elif isinstance(exc, ReckonError):
        lines.append(f"Error: {exc.format()}")
    else:
        lines.append(f"Error: {exc.__class__.__name__}: {exc}")

    if verbose:
        trace = traceback.format_exc().strip()
        if trace and trace != "NoneType: None":
            lines.append("Traceback:")
            lines.append(trace if len(trace) <= _TRACE_LIMIT else f"{trace[:_TRACE_LIMIT - 3]}...")
    return "\n".join(lines)


def wrap_exception(exc: ReckonError, *, message: str, **kwargs) -> CLIError:
    """Wrap a library error as a CLI configuration error, keeping its details."""
    context = kwargs.pop("context", {})
    context["original_exception"] = exc.format()
    context["original_type"] = exc.__class__.__name__
    kwargs.setdefault("hint", exc.hint)
    return CLIConfigError(message, context=context, **kwargs)


def _env_flag(name: str) -> bool:
    val = os.getenv(name)
    if val is None:
        return False
    return val.strip().lower() in {"1", "true", "yes", "on"}


def cli_verbose_enabled(verbose_flag: bool = False) -> bool:
    """Explicit flag or the RECKON_VERBOSE environment variable."""
    return verbose_flag or _env_flag("RECKON_VERBOSE")


def report_cli_error(exc: BaseException, *, verbose: bool = False) -> None:
    print(format_cli_error(exc, verbose=verbose), file=sys.stderr)
