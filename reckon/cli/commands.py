"""
Subcommand implementations for the reckon CLI.

Each command receives the parsed arguments and a ready :class:`Interpreter`
and returns a process exit code.
"""

import argparse
import sys
from typing import Iterable, TextIO

from rich.console import Console
from rich.table import Table

from ..interpreter import Interpreter
from ..observability import get_logger

logger = get_logger(__name__)
console = Console()

EXIT_COMMANDS = {"exit", "quit"}


def cmd_eval(args: argparse.Namespace, interpreter: Interpreter) -> int:
    """
    Evaluate each expression argument and print one result per line.

    Failed expressions print the placeholder. With ``--strict`` the error is
    reported on stderr instead and the exit code is 1.

    Examples:
        >>> cmd_eval(argparse.Namespace(expressions=["1+2"], strict=False), Interpreter())  # doctest: +SKIP
        3
    """
    exit_code = 0
    for text in args.expressions:
        result = interpreter.try_interpret(text)
        if result.ok:
            print(result.value)
        elif args.strict:
            print(f"{text}: {result.error.format()}", file=sys.stderr)
            exit_code = 1
        else:
            print(result.display(interpreter.config.placeholder))
    return exit_code


def _read_lines(stream: TextIO, prompt: str) -> Iterable[str]:
    interactive = stream.isatty()
    while True:
        if interactive:
            print(prompt, end="", flush=True)
        line = stream.readline()
        if not line:
            return
        yield line.strip()


def cmd_repl(args: argparse.Namespace, interpreter: Interpreter, stream: TextIO = None) -> int:
    """Read expressions line by line until EOF or ``exit``, echoing each result."""
    source = stream if stream is not None else sys.stdin
    evaluated = 0
    for line in _read_lines(source, args.prompt):
        if not line:
            continue
        if line.lower() in EXIT_COMMANDS:
            break
        print(interpreter.display(line))
        evaluated += 1
    logger.debug("REPL evaluated %d expressions", evaluated)
    return 0


def cmd_units(args: argparse.Namespace, interpreter: Interpreter) -> int:
    """List unit families with the synonyms accepted for each unit."""
    families = interpreter.registry.families
    if args.json:
        console.print_json(
            data=[
                {
                    "family": family.name,
                    "base": family.base,
                    "units": {unit.name: sorted(unit.synonyms) for unit in family.units},
                }
                for family in families
            ]
        )
        return 0

    for family in families:
        table = Table(title=f"{family.name} (base: {family.base})")
        table.add_column("Unit", style="bold blue")
        table.add_column("Synonyms", style="cyan")
        for unit in family.units:
            table.add_row(unit.name, ", ".join(sorted(unit.synonyms)))
        console.print(table)
    return 0


__all__ = ["cmd_eval", "cmd_repl", "cmd_units"]
