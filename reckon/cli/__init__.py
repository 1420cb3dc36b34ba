"""
reckon CLI entry point.

Evaluates expressions from the command line or an interactive loop, showing
the configured placeholder for expressions that fail.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .. import __version__
from ..config import load_config
from ..errors import ReckonError
from ..interpreter import Interpreter
from ..observability import configure_logging
from ..units import build_registry
from .commands import cmd_eval, cmd_repl, cmd_units
from .errors import CLIError, cli_verbose_enabled, report_cli_error, wrap_exception


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="reckon – evaluate calculator expressions with radixes and units",
        prog="reckon",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a reckon.toml or reckon.json configuration file",
    )
    parser.add_argument(
        "--rates",
        default=None,
        help="Currency-rate JSON file written by the rate fetch job",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging and detailed errors (or set RECKON_VERBOSE=1)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    eval_parser = subparsers.add_parser("eval", help="Evaluate one or more expressions")
    eval_parser.add_argument("expressions", nargs="+", help="Expressions such as '1 plus 2'")
    eval_parser.add_argument(
        "--strict",
        action="store_true",
        help="Report errors on stderr and exit 1 instead of printing the placeholder",
    )
    eval_parser.set_defaults(func=cmd_eval)

    repl_parser = subparsers.add_parser("repl", help="Evaluate expressions read from stdin")
    repl_parser.add_argument("--prompt", default="> ", help="Prompt shown on a terminal")
    repl_parser.set_defaults(func=cmd_repl)

    units_parser = subparsers.add_parser("units", help="List known units and synonyms")
    units_parser.add_argument("--json", action="store_true", help="Print the unit table as JSON")
    units_parser.set_defaults(func=cmd_units)

    return parser


def _build_interpreter(args: argparse.Namespace) -> Interpreter:
    config_path = Path(args.config).resolve() if args.config else None
    try:
        config = load_config(config_path)
        if args.rates:
            config = config.with_overrides(rates_file=Path(args.rates).resolve())
        registry = build_registry(config.rates_file, strict_units=config.strict_units)
    except ReckonError as exc:
        raise wrap_exception(exc, message=f"Could not initialise the interpreter: {exc.message}") from exc
    return Interpreter(config=config, registry=registry)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entrypoint with subcommand support.

    Examples:
        >>> main(['eval', '1 plus 2'])  # doctest: +SKIP
        3
        >>> main(['eval', '100 F in C'])  # doctest: +SKIP
        37.78 °C
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)
    verbose = cli_verbose_enabled(args.verbose)
    configure_logging(verbose)

    if not getattr(args, "func", None):
        parser.print_help()
        return 2

    try:
        interpreter = _build_interpreter(args)
    except CLIError as exc:
        report_cli_error(exc, verbose=verbose)
        return 2
    return args.func(args, interpreter)


__all__ = ["main", "build_parser"]
