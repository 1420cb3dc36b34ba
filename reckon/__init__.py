"""
reckon: a small calculator expression language.

``interpret`` reads a human-typed arithmetic line and returns the string to
display::

    >>> interpret("1 plus 2")
    '3'
    >>> interpret("5 in binary")
    '0b101'
    >>> interpret("0C in kelvin")
    '273.15 K'

The code is organised into several modules:

* ``lexer`` – turns the input line into tokens, resolving word operators,
  radix prefixes and unit names.
* ``parser`` – recursive descent over a fixed precedence ladder producing the
  dataclasses in ``ast``.
* ``eval`` – walks the tree, converting units on the fly, and renders the
  result in its radix and unit.
* ``units`` – temperature and currency families, plus loading of the
  currency-rate file written by the external rate-fetch job.
* ``config`` and ``cli`` – settings and a command line front end.
"""

import re
from importlib import metadata as _metadata
from pathlib import Path

from .errors import EvalError, LexError, ParseError, ReckonError, ResourceLimitError
from .interpreter import Interpreter, InterpretResult, interpret, try_interpret


def _local_version() -> str | None:
    root = Path(__file__).resolve().parents[1]
    pyproject = root / "pyproject.toml"
    if not pyproject.exists():
        return None
    try:
        text = pyproject.read_text(encoding="utf-8")
    except OSError:  # pragma: no cover - IO errors should not break imports
        return None
    match = re.search(r"^version\s*=\s*\"([^\"]+)\"", text, flags=re.MULTILINE)
    if match:
        return match.group(1)
    return None


try:  # pragma: no cover - metadata fallback for editable installs
    __version__ = _metadata.version("reckon")
except _metadata.PackageNotFoundError:  # pragma: no cover - source tree
    __version__ = _local_version() or "0.1.0"

__all__ = [
    "__version__",
    "Interpreter",
    "InterpretResult",
    "interpret",
    "try_interpret",
    "ReckonError",
    "LexError",
    "ParseError",
    "EvalError",
    "ResourceLimitError",
]
