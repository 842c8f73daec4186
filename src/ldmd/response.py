"""Default ``@file`` response-file expansion.

The driver treats expansion as an injected capability (any
``Callable[[list[str]], list[str]]``); this module provides the one used
when nothing else is supplied.  File contents are split with :mod:`shlex`
(POSIX rules), or by the MSVC rules on Windows, where backslashes are
path separators unless they precede a quote.
"""

from __future__ import annotations

import shlex
import sys
from collections.abc import Callable
from pathlib import Path

from ldmd.errors import ResponseExpansionFailure

Expander = Callable[[list[str]], list[str]]

# Deep enough for real build systems, shallow enough to stop @a -> @a cycles.
MAX_NESTING = 20


def has_response_file(args: list[str]) -> bool:
    return any(arg.startswith("@") for arg in args)


def _split_windows(content: str) -> list[str]:
    """Split *content* by the MSVC command-line rules.

    Backslashes are literal unless they run into a ``"``: then each pair
    becomes one backslash and an odd one out escapes the quote.
    """
    tokens: list[str] = []
    buf: list[str] = []
    in_token = False
    in_quotes = False
    i, n = 0, len(content)
    while i < n:
        c = content[i]
        if c == "\\":
            j = i
            while j < n and content[j] == "\\":
                j += 1
            count = j - i
            if j < n and content[j] == '"':
                buf.append("\\" * (count // 2))
                if count % 2:
                    buf.append('"')
                    j += 1
            else:
                buf.append("\\" * count)
            in_token = True
            i = j
            continue
        if c == '"':
            in_quotes = not in_quotes
            in_token = True
        elif c in " \t\r\n" and not in_quotes:
            if in_token:
                tokens.append("".join(buf))
                buf = []
                in_token = False
        else:
            buf.append(c)
            in_token = True
        i += 1
    if in_quotes:
        raise ValueError("No closing quotation")
    if in_token:
        tokens.append("".join(buf))
    return tokens


def split_response_text(content: str) -> list[str]:
    """Split response-file *content* into arguments."""
    if sys.platform == "win32":
        return _split_windows(content)
    return shlex.split(content, comments=False, posix=True)


def expand_response_files(args: list[str], _depth: int = 0) -> list[str]:
    """Return *args* with every ``@file`` replaced by the file's arguments.

    Raises:
        ResponseExpansionFailure: A file is unreadable or malformed, or
            response files nest deeper than :data:`MAX_NESTING`.
    """
    if _depth > MAX_NESTING:
        raise ResponseExpansionFailure(
            f"Response files nested more than {MAX_NESTING} levels deep."
        )

    expanded: list[str] = []
    for arg in args:
        if not arg.startswith("@"):
            expanded.append(arg)
            continue
        path = Path(arg[1:])
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ResponseExpansionFailure(f"Could not read response file {path}: {exc}") from exc
        try:
            tokens = split_response_text(content)
        except ValueError as exc:
            raise ResponseExpansionFailure(f"Malformed response file {path}: {exc}") from exc
        expanded.extend(expand_response_files(tokens, _depth + 1))
    return expanded
