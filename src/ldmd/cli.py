"""Shared output helpers for ldmd tools.

Every diagnostic goes to stderr through one rich console so that the
wrapper and ``ldmd-tool`` report errors and warnings the same way::

    from ldmd.cli import error, warning

    warning("-noboundscheck is deprecated, use -boundscheck=off")
"""

from __future__ import annotations

import json
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.markup import escape

# Soft wrap keeps long command lines on one physical line.
err_console = Console(stderr=True, soft_wrap=True, highlight=False)


def error(msg: str) -> None:
    """Print *msg* prefixed with ``Error:``."""
    err_console.print(f"[red bold]Error:[/red bold] {escape(msg)}")


def warning(msg: str) -> None:
    """Print *msg* prefixed with ``Warning:``."""
    err_console.print(f"[yellow bold]Warning:[/yellow bold] {escape(msg)}")


def json_print(data: dict[str, Any] | list[Any]) -> None:
    """Print *data* as pretty-printed JSON to stdout."""
    print(json.dumps(data, indent=2))


def error_exit(msg: str, *, json_mode: bool = False, code: int = 1) -> NoReturn:
    """Print *msg* as an error and ``raise typer.Exit(code)``."""
    if json_mode:
        json_print({"error": msg})
    else:
        error(msg)
    raise typer.Exit(code=code)
