"""Command-length guard and temporary response files.

When the translated command line is longer than the platform allows, the
arguments are written one per line to a uniquely named temporary file and
the command is re-run with a single ``@file`` argument.  The file is removed
as soon as that run returns, whatever the outcome.
"""

from __future__ import annotations

import contextlib
import os
import random
import sys
import tempfile
from collections.abc import Callable, Iterator, Sequence
from pathlib import Path

from ldmd import cli
from ldmd.config import WrapperConfig
from ldmd.errors import LdmdError, TempFileExhaustion
from ldmd.logger import Logger

Execute = Callable[[Path, list[str]], int]

# ---------------------------------------------------------------------------
# Length limits
# ---------------------------------------------------------------------------

_WINDOWS_MAX_CMDLINE = 32767
# Room left for the environment block and pointer arrays.
_ARG_MAX_HEADROOM = 2048
_FALLBACK_ARG_MAX = 131072


def max_command_line_len() -> int:
    """Return the longest total argument length the platform accepts."""
    if sys.platform == "win32":
        return _WINDOWS_MAX_CMDLINE
    try:
        arg_max = os.sysconf("SC_ARG_MAX")
    except (ValueError, OSError, AttributeError):
        arg_max = -1
    if arg_max <= 0:
        arg_max = _FALLBACK_ARG_MAX
    return arg_max - _ARG_MAX_HEADROOM


def command_line_len(argv: Sequence[str]) -> int:
    return sum(len(arg) for arg in argv)


# ---------------------------------------------------------------------------
# Unique temp files
# ---------------------------------------------------------------------------


def _fill_template(template: str, rng: random.Random) -> str:
    return "".join(rng.choice("0123456789abcdef") if c == "%" else c for c in template)


def create_unique_file(
    template: str,
    directory: Path | None = None,
    attempts: int = 128,
    *,
    rng: random.Random | None = None,
) -> Path:
    """Create a new empty file named after *template* and return its path.

    Each ``%`` in *template* is replaced by a random hex digit.  Names that
    already exist are retried up to *attempts* times.

    Raises:
        TempFileExhaustion: Every attempted name was taken.
    """
    directory = Path(tempfile.gettempdir()) if directory is None else directory
    rng = rng or random.SystemRandom()
    for _ in range(attempts):
        candidate = directory / _fill_template(template, rng)
        try:
            with open(candidate, "x", encoding="utf-8"):
                pass
        except FileExistsError:
            continue
        except OSError as exc:
            raise LdmdError(f"Could not open temporary response file {candidate}: {exc}") from exc
        return candidate
    raise TempFileExhaustion(
        f"Could not create a unique response file from '{template}' in {directory} "
        f"after {attempts} attempts."
    )


def _quote_windows(arg: str) -> str:
    # MSVC rules: backslashes are literal unless they precede a quote.
    if arg and not any(c in " \t\n\r\"" for c in arg):
        return arg
    out = []
    backslashes = 0
    for c in arg:
        if c == "\\":
            backslashes += 1
            continue
        if c == '"':
            out.append("\\" * (2 * backslashes + 1) + '"')
        else:
            out.append("\\" * backslashes + c)
        backslashes = 0
    # Doubled so the closing quote is not escaped.
    out.append("\\" * (2 * backslashes))
    return '"' + "".join(out) + '"'


def _quote(arg: str) -> str:
    if sys.platform == "win32":
        return _quote_windows(arg)
    if arg and not any(c in " \t\n\r\"'\\" for c in arg):
        return arg
    escaped = arg.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def write_response_file(path: Path, args: Sequence[str]) -> None:
    """Write *args* to *path*, one per line."""
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        for arg in args:
            f.write(_quote(arg) + "\n")


@contextlib.contextmanager
def spilled_response_file(
    args: Sequence[str],
    config: WrapperConfig,
    *,
    rng: random.Random | None = None,
) -> Iterator[Path]:
    """Yield a temporary response file holding *args*; delete it on exit."""
    path = create_unique_file(config.rsp_template, config.rsp_dir, config.rsp_attempts, rng=rng)
    try:
        write_response_file(path, args)
        yield path
    finally:
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            cli.warning(f"Could not remove response file {path}: {exc}")


# ---------------------------------------------------------------------------
# Guarded execution
# ---------------------------------------------------------------------------


def run_guarded(
    program: Path,
    args: list[str],
    execute: Execute,
    config: WrapperConfig,
    logger: Logger | None = None,
    *,
    limit: int | None = None,
) -> int:
    """Run ``program args``, going through a response file if too long.

    Returns:
        Exit status of the (single) invocation that was made.
    """
    logger = logger or Logger()
    limit = max_command_line_len() if limit is None else limit
    total = command_line_len([str(program), *args])
    logger.println(f"Command line length {total} (limit {limit})")

    if total <= limit:
        return execute(program, args)

    with spilled_response_file(args, config) as rsp_path:
        logger.println(f"Spilling {len(args)} arguments to {rsp_path}")
        return execute(program, [f"@{rsp_path}"])
