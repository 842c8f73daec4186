"""ldmd-tool: inspect what the ldmd wrapper would do, without running LDC.

Subcommands share the wrapper's configuration lookup (``--config``, then
``$LDMD_CONFIG``, then ``ldmd.toml`` beside the wrapper).
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ldmd import __version__
from ldmd.cli import error_exit, json_print
from ldmd.config import WrapperConfig, load_config
from ldmd.driver import translate
from ldmd.envflags import read_env_flags
from ldmd.errors import EarlyExit, LdmdError
from ldmd.locate import locate_binary
from ldmd.rspfile import command_line_len, max_command_line_len
from ldmd.usage import usage_text

console = Console()

app = typer.Typer(
    help="Inspect DMD-to-LDC command-line translation.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]

ldmd-tool translate -- -O -release -Iimport app.d    Show the LDC command line

ldmd-tool translate --json -- -run app.d arg         Same, as JSON

ldmd-tool env                                        Show tokenized DFLAGS

ldmd-tool locate                                     Show which ldc2 would run

[dim]Put '--' before the DMD switches so they are not read as tool options.[/dim]""",
)

ConfigOption: Path | None = typer.Option(
    None,
    "--config",
    help="ldmd.toml to use instead of the default lookup.",
)


def _load(config_path: Path | None, json_mode: bool = False) -> WrapperConfig:
    try:
        return load_config(path=config_path, argv0=sys.argv[0])
    except LdmdError as exc:
        error_exit(str(exc), json_mode=json_mode)


class _EchoActions:
    """Informational switches rendered as text instead of run."""

    def __init__(self, config: WrapperConfig) -> None:
        self.config = config

    def usage(self) -> None:
        typer.echo(usage_text("ldmd"))

    def version(self) -> None:
        typer.echo(f"ldmd {__version__} (target: {self.config.compiler_name})")

    def manual(self) -> None:
        typer.echo(self.config.manual_url)


@app.command(
    "translate",
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def translate_cmd(
    args: list[str] = typer.Argument(None, help="DMD-style arguments."),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON."),
    config_path: Path | None = ConfigOption,
) -> None:
    """Print the LDC command line for DMD-style ARGS."""
    cfg = _load(config_path, json_output)
    compiler = locate_binary(cfg.compiler_name, sys.argv[0])
    program = str(compiler) if compiler is not None else cfg.compiler_name

    try:
        params, ldc_args = translate(args or [], config=cfg, actions=_EchoActions(cfg))
    except EarlyExit:
        return
    except LdmdError as exc:
        error_exit(str(exc), json_mode=json_output)

    full = [program, *ldc_args]
    length = command_line_len(full)
    limit = max_command_line_len()
    if json_output:
        json_print(
            {
                "program": program,
                "args": ldc_args,
                "files": params.files,
                "passthrough": params.unknown_switches,
                "run_args": params.run_args,
                "length": length,
                "limit": limit,
                "response_file": length > limit,
            }
        )
        return
    typer.echo(" ".join(full))
    if length > limit:
        typer.echo(f"(command line too long: {length} > {limit}, a response file would be used)", err=True)


@app.command()
def env(
    var: str | None = typer.Option(None, "--var", help="Variable to read (default: configured, DFLAGS)."),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON."),
    config_path: Path | None = ConfigOption,
) -> None:
    """Show how the default-flags environment variable is tokenized."""
    cfg = _load(config_path, json_output)
    name = var or cfg.env_var
    try:
        tokens = read_env_flags(name, os.environ)
    except LdmdError as exc:
        error_exit(str(exc), json_mode=json_output)

    if json_output:
        json_print({"variable": name, "tokens": tokens})
        return
    if not tokens:
        typer.echo(f"{name} is empty or unset.")
        return
    table = Table(title=name)
    table.add_column("#", justify="right")
    table.add_column("Token")
    for i, tok in enumerate(tokens):
        table.add_row(str(i), Text(repr(tok)))
    console.print(table)


@app.command()
def locate(
    config_path: Path | None = ConfigOption,
) -> None:
    """Show the compiler executable the wrapper would run."""
    cfg = _load(config_path)
    compiler = locate_binary(cfg.compiler_name, sys.argv[0])
    if compiler is None:
        error_exit(f"Could not locate {cfg.compiler_name} executable.")
    typer.echo(str(compiler))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
