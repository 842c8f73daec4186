"""DMD-dialect switch parser.

A single left-to-right scan over the (response-file expanded) command line
followed by the default-flags environment tokens fills a fresh
:class:`~ldmd.params.Params`.  Scalar and enum fields are overwritten on every
match, so the last occurrence wins no matter where it came from; list fields
append.  Unknown switches are kept verbatim for pass-through.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import PurePath
from typing import Protocol

from ldmd.errors import (
    EarlyExit,
    InvalidSwitchValue,
    MissingSwitchArgument,
    RemovedSwitch,
    UsageError,
)
from ldmd.params import BoundsCheck, Color, Debug, Deprecated, Model, Params, Warnings


class Actions(Protocol):
    """Side effects of the informational switches."""

    def usage(self) -> None: ...

    def version(self) -> None: ...

    def manual(self) -> None: ...


# ---------------------------------------------------------------------------
# Switch tables (keys are the switch without its leading '-')
# ---------------------------------------------------------------------------

_FLAGS: dict[str, str] = {
    "allinst": "allinst",
    "c": "compile_only",
    "cov": "coverage",
    "shared": "emit_shared_lib",
    "fPIC": "pic",
    "map": "emit_map",
    "multiobj": "multi_obj",
    "gs": "always_stack_frame",
    "profile": "profile",
    "v": "verbose",
    "vcolumns": "vcolumns",
    "vdmd": "vdmd",
    "vgc": "vgc",
    "vtls": "log_tls_use",
    "O": "optimize",
    "o-": "no_obj",
    "op": "preserve_paths",
    "D": "generate_docs",
    "H": "generate_headers",
    "X": "generate_json",
    "ignore": "ignore_unsupported_pragmas",
    "property": "enforce_property_syntax",
    "inline": "enable_inline",
    "dip25": "use_dip25",
    "lib": "emit_static_lib",
    "quiet": "quiet",
    "release": "release",
    "unittest": "emit_unit_tests",
    "betterC": "better_c",
    "main": "add_main",
    "debug": "debug_flag",
    "-b": "hidden_debug_b",
    "-c": "hidden_debug_c",
    "-f": "hidden_debug_f",
    "-r": "hidden_debug_r",
    "-x": "hidden_debug_x",
    "-y": "hidden_debug_y",
}

# NOTE: -de shares -d's mapping; see DESIGN.md before changing it.
_ENUMS: dict[str, tuple[str, object]] = {
    "d": ("deprecated", Deprecated.ALLOW),
    "de": ("deprecated", Deprecated.ALLOW),
    "dw": ("deprecated", Deprecated.WARN),
    "g": ("debug_info", Debug.NORMAL),
    "gc": ("debug_info", Debug.PRETEND_C),
    "m32": ("model", Model.M32),
    "m64": ("model", Model.M64),
    "w": ("warnings", Warnings.AS_ERRORS),
    "wi": ("warnings", Warnings.INFORMATIONAL),
    "noboundscheck": ("bounds_check", BoundsCheck.OFF),
    "color": ("color", Color.ON),
}

_REMOVED: dict[str, str] = {
    "o": "-o no longer supported, use -of or -od",
    "gt": "use -profile instead of -gt",
    "v1": "use DMD 1.0 series compilers for -v1 switch",
}

_BOUNDS_CHECK = {
    "on": BoundsCheck.ON,
    "safeonly": BoundsCheck.SAFE_ONLY,
    "off": BoundsCheck.OFF,
}

_COLOR = {"on": Color.ON, "off": Color.OFF}

# name=value scalars: prefix -> (field, empty value allowed)
# An empty -defaultlib= or -debuglib= means "link no default library".
_VALUE_SCALARS: dict[str, tuple[str, bool]] = {
    "conf=": ("conf", False),
    "debuglib=": ("debug_lib_name", True),
    "defaultlib=": ("default_lib_name", True),
}

# -I<path> style lists: prefix -> field
_ATTACHED_LISTS: dict[str, str] = {
    "I": "module_paths",
    "J": "import_paths",
    "L": "linker_switches",
    "transition=": "transitions",
}

# -od<dir> style scalars: prefix -> (field, implied boolean or None)
_ATTACHED_SCALARS: dict[str, tuple[str, str | None]] = {
    "od": ("obj_dir", None),
    "of": ("obj_name", None),
    "Dd": ("doc_dir", "generate_docs"),
    "Df": ("doc_name", "generate_docs"),
    "Hd": ("header_dir", "generate_headers"),
    "Hf": ("header_name", "generate_headers"),
    "Xf": ("json_name", "generate_json"),
}

# -debug=N / -debug=ident style: prefix -> (numeric field, identifier list)
_LEVEL_OR_IDENT: dict[str, tuple[str, str]] = {
    "debug=": ("debug_level", "debug_identifiers"),
    "version=": ("version_level", "version_identifiers"),
    "verrors=": ("error_limit", "error_modes"),
}


def _native_executable_suffixes() -> tuple[str, ...]:
    return (".exe",) if sys.platform == "win32" else ()


def _parse_level(value: str) -> int | None:
    """Return *value* as a decimal integer, or None if it is not one."""
    if value.isascii() and value.isdigit():
        return int(value)
    return None


def _parse_switch(p: Params, arg: str, actions: Actions) -> bool:
    """Apply one switch to *p*.  Returns False when the switch is unknown."""
    name = arg[1:]

    if name in _FLAGS:
        setattr(p, _FLAGS[name], True)
        return True

    if name in _ENUMS:
        field_name, value = _ENUMS[name]
        setattr(p, field_name, value)
        if name == "noboundscheck":
            p.no_bounds_check_used = True
        return True

    if name in _REMOVED:
        raise RemovedSwitch(_REMOVED[name])

    if name in ("help", "-help"):
        actions.usage()
        raise EarlyExit()
    if name == "-version":
        actions.version()
        raise EarlyExit()
    if name == "man":
        actions.manual()
        raise EarlyExit()

    if name.startswith("cov="):
        # The threshold is accepted but not forwarded.
        p.coverage = True
        return True

    if name.startswith("color="):
        value = name[len("color="):]
        if value not in _COLOR:
            raise InvalidSwitchValue("Available options for '-color' are 'on' and 'off'")
        p.color = _COLOR[value]
        return True

    if name.startswith("boundscheck="):
        value = name[len("boundscheck="):]
        if value not in _BOUNDS_CHECK:
            return False
        p.bounds_check = _BOUNDS_CHECK[value]
        return True

    if name.startswith("deps="):
        value = name[len("deps="):]
        if not value:
            raise MissingSwitchArgument(arg)
        p.print_module_deps = True
        p.module_deps_file = value
        return True
    if name == "deps":
        p.print_module_deps = True
        p.module_deps_file = None
        return True

    for prefix, (field_name, allow_empty) in _VALUE_SCALARS.items():
        if name.startswith(prefix):
            value = name[len(prefix):]
            if not value and not allow_empty:
                raise MissingSwitchArgument(arg)
            setattr(p, field_name, value)
            return True

    for prefix, (level_field, ident_field) in _LEVEL_OR_IDENT.items():
        if name.startswith(prefix):
            value = name[len(prefix):]
            if not value:
                raise MissingSwitchArgument(arg)
            if value[0].isascii() and value[0].isdigit():
                level = _parse_level(value)
                if level is None:
                    return False
                setattr(p, level_field, level)
            else:
                getattr(p, ident_field).append(value)
            return True

    for prefix, field_name in _ATTACHED_LISTS.items():
        if name.startswith(prefix):
            value = name[len(prefix):]
            if not value:
                raise MissingSwitchArgument(arg)
            getattr(p, field_name).append(value)
            return True

    for prefix, (field_name, implied) in _ATTACHED_SCALARS.items():
        if name.startswith(prefix):
            value = name[len(prefix):]
            if not value:
                raise MissingSwitchArgument(arg)
            setattr(p, field_name, value)
            if implied is not None:
                setattr(p, implied, True)
            return True

    if name.startswith("C"):
        if len(name) == 1:
            raise MissingSwitchArgument(arg)
        p.unknown_switches.append("-" + name[1:])
        return True

    return False


def parse_args(
    args: Sequence[str],
    env_tokens: Sequence[str] = (),
    *,
    actions: Actions,
    executable_suffixes: Sequence[str] | None = None,
) -> Params:
    """Parse a DMD-style command line.

    Args:
        args: Command-line arguments without the program name, already
            response-file expanded.
        env_tokens: Tokens from the default-flags variable; scanned after
            *args* as part of the same pass.  A ``-run`` in *args* takes the
            rest of *args* as program arguments and leaves these as switches.
        actions: Performs ``-help``, ``--version`` and ``-man``.
        executable_suffixes: File suffixes that name the output executable
            instead of a source file (``.exe`` on Windows by default).

    Raises:
        EarlyExit: After an informational switch ran its action.
        UsageError: No source file was given (usage is printed first).
    """
    if executable_suffixes is None:
        executable_suffixes = _native_executable_suffixes()
    exe_suffixes = {s.lower() for s in executable_suffixes}

    tokens = [*args, *env_tokens]
    # Index of the first default-flags token; -run stops at this boundary.
    n_args = len(args)
    p = Params()

    i = 0
    while i < len(tokens):
        arg = tokens[i]
        i += 1

        if arg.startswith("-"):
            if arg == "-run":
                if i >= len(tokens):
                    raise MissingSwitchArgument(arg)
                p.run = True
                p.files.append(tokens[i])
                end = n_args if i < n_args else len(tokens)
                p.run_args = list(tokens[i + 1:end])
                i = max(end, i + 1)
                continue
            if not _parse_switch(p, arg, actions):
                p.unknown_switches.append(arg)
            continue

        if PurePath(arg).suffix.lower() in exe_suffixes:
            p.obj_name = arg
            continue
        p.files.append(arg)

    if not p.files:
        actions.usage()
        raise UsageError("No source file specified.")
    return p
