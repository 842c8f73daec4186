"""Split a default-flags environment variable into arguments.

Rules (matching how DMD reads ``DFLAGS``):

- ``\\`` starts an escape; ``\\\\`` and ``\\"`` produce a literal character,
  any other escaped character is an error;
- an unescaped ``"`` toggles quoting and is dropped;
- unquoted spaces and tabs separate arguments, runs of them count once.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from ldmd.errors import UnrecognizedEscape


def tokenize_env_flags(value: str, var_name: str) -> list[str]:
    """Tokenize *value*, naming *var_name* in any error."""
    args: list[str] = []
    arg: list[str] = []
    escape = False
    quote = False

    for c in value:
        if c == "\\":
            if escape:
                arg.append(c)
            escape = not escape
        elif c == '"':
            if escape:
                arg.append(c)
                escape = False
            else:
                quote = not quote
        elif c in " \t":
            if escape:
                raise UnrecognizedEscape(var_name, c)
            if quote:
                arg.append(c)
            elif arg:
                args.append("".join(arg))
                arg = []
        else:
            if escape:
                raise UnrecognizedEscape(var_name, c)
            arg.append(c)

    if arg:
        args.append("".join(arg))
    return args


def read_env_flags(var_name: str, environ: Mapping[str, str] | None = None) -> list[str]:
    """Return the tokens of *var_name*, or ``[]`` when it is unset."""
    environ = os.environ if environ is None else environ
    return tokenize_env_flags(environ.get(var_name, ""), var_name)
