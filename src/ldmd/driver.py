"""ldmd – DMD-compatible front end for LDC.

DMD lets every switch be given several times, with the last one winning,
and also reads switches from ``DFLAGS``.  LDC's argument library resolves
repeats differently, so rather than renaming switches one by one the wrapper
parses the whole command line into a :class:`~ldmd.params.Params` record and
emits a cleaned-up LDC command line from it.

Unknown switches are passed through verbatim, and ``-Cswitch`` forwards
``-switch`` without interpretation.

Pipeline::

    locate ldc2 -> expand @files -> append DFLAGS -> parse -> build -> run
"""

from __future__ import annotations

import subprocess
import sys
import webbrowser
from collections.abc import Mapping, Sequence
from pathlib import Path

import typer

from ldmd import cli
from ldmd.builder import build_command_line
from ldmd.config import WrapperConfig, load_config
from ldmd.envflags import read_env_flags
from ldmd.errors import ExecutionFailure, LdmdError, LocateExecutableFailure
from ldmd.locate import locate_binary
from ldmd.logger import Logger
from ldmd.params import Params
from ldmd.parser import Actions, parse_args
from ldmd.response import Expander, expand_response_files, has_response_file
from ldmd.rspfile import Execute, run_guarded
from ldmd.usage import usage_text


def execute(program: Path, args: list[str]) -> int:
    """Run *program* with *args*, inheriting stdio; return its exit status."""
    try:
        return subprocess.run([str(program), *args]).returncode
    except OSError as exc:
        raise ExecutionFailure(f"Failed to run {program}: {exc}") from exc


class DriverActions:
    """The informational switches, bound to one located compiler."""

    def __init__(
        self,
        argv0: str,
        compiler: Path,
        config: WrapperConfig,
        execute: Execute = execute,
    ) -> None:
        self.argv0 = argv0
        self.compiler = compiler
        self.config = config
        self.execute = execute

    def usage(self) -> None:
        # LDC's version banner heads the usage text.
        self.execute(self.compiler, ["-version"])
        typer.echo(usage_text(Path(self.argv0).name or "ldmd"))

    def version(self) -> None:
        self.execute(self.compiler, ["-version"])

    def manual(self) -> None:
        webbrowser.open(self.config.manual_url)


def locate_compiler(config: WrapperConfig, argv0: str) -> Path:
    compiler = locate_binary(config.compiler_name, argv0)
    if compiler is None:
        raise LocateExecutableFailure(f"Could not locate {config.compiler_name} executable.")
    return compiler


def translate(
    args: Sequence[str],
    *,
    config: WrapperConfig,
    actions: Actions,
    expand: Expander = expand_response_files,
    environ: Mapping[str, str] | None = None,
    logger: Logger | None = None,
) -> tuple[Params, list[str]]:
    """Turn DMD-style *args* (no program name) into LDC arguments.

    Returns:
        ``(params, ldc_args)``
    """
    logger = logger or Logger()
    args = list(args)
    if has_response_file(args):
        args = expand(args)
        logger.println(f"Expanded response files to {len(args)} arguments")

    env_tokens = read_env_flags(config.env_var, environ)
    if env_tokens:
        logger.println(f"{config.env_var}: {' '.join(env_tokens)}")

    params = parse_args(args, env_tokens, actions=actions)
    with logger.indented():
        logger.println(f"files: {' '.join(params.files)}")
        if params.unknown_switches:
            logger.println(f"passed through: {' '.join(params.unknown_switches)}")
    return params, build_command_line(params)


def main(
    argv: Sequence[str] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    config: WrapperConfig | None = None,
    expand: Expander = expand_response_files,
    execute: Execute = execute,
) -> int:
    """Run the wrapper on *argv* (``sys.argv`` by default); return exit status."""
    argv = list(sys.argv if argv is None else argv)
    argv0 = argv[0] if argv else "ldmd"

    try:
        if config is None:
            config = load_config(argv0=argv0, environ=environ)
        logger = Logger(enabled=config.log_enabled)

        compiler = locate_compiler(config, argv0)
        logger.println(f"Using {compiler}")

        actions = DriverActions(argv0, compiler, config, execute)
        params, ldc_args = translate(
            argv[1:],
            config=config,
            actions=actions,
            expand=expand,
            environ=environ,
            logger=logger,
        )

        if params.vdmd:
            typer.echo(" -- Invoking: " + " ".join([str(compiler), *ldc_args]))

        return run_guarded(compiler, ldc_args, execute, config, logger)
    except LdmdError as exc:
        if str(exc):
            cli.error(str(exc))
        return exc.exit_code
    except OSError as exc:
        cli.error(str(exc))
        return 1


def run() -> None:
    """Console-script entry point for ``ldmd``."""
    sys.exit(main())


if __name__ == "__main__":
    run()
