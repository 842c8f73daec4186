"""Re-serialize a :class:`~ldmd.params.Params` as an LDC command line.

Emission follows one fixed order regardless of how the switches were given;
LDC accepts arguments in any order and every same-concept conflict was
already settled by the parser.  Pass-through switches, source files and
``-run`` arguments come last, each in its original order.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from ldmd import cli
from ldmd.params import BoundsCheck, Color, Debug, Deprecated, Model, Params, Warnings

Warn = Callable[[str], None]

_BOUNDS_CHECK = {
    BoundsCheck.OFF: "-boundscheck=off",
    BoundsCheck.SAFE_ONLY: "-boundscheck=safeonly",
    BoundsCheck.ON: "-boundscheck=on",
}

_HIDDEN_DEBUG = ("b", "c", "f", "r", "x", "y")


def _push_switches(r: list[str], prefix: str, values: Iterable[str]) -> None:
    r.extend(prefix + v for v in values)


def build_command_line(p: Params, *, warn: Warn = cli.warning) -> list[str]:
    """Return the LDC arguments (without program name) equivalent to *p*.

    Requests LDC cannot honour (``-map``, ``-profile``) and the deprecated
    ``-noboundscheck`` are reported through *warn*.
    """
    r: list[str] = []

    if p.allinst:
        r.append("-allinst")
    if p.deprecated == Deprecated.ALLOW:
        r.append("-d")
    elif p.deprecated == Deprecated.ERROR:
        r.append("-de")
    if p.compile_only:
        r.append("-c")
    if p.coverage:
        r.append("-cov")
    if p.emit_shared_lib:
        r.append("-shared")
    if p.pic:
        r.append("-relocation-model=pic")
    if p.emit_map:
        warn("Map file generation not yet supported by LDC.")
    if not p.multi_obj and not (p.compile_only and p.obj_name is None):
        r.append("-singleobj")
    if p.debug_info == Debug.NORMAL:
        r.append("-g")
    elif p.debug_info == Debug.PRETEND_C:
        r.append("-gc")
    if p.always_stack_frame:
        r.append("-disable-fp-elim")
    if p.model == Model.M32:
        r.append("-m32")
    elif p.model == Model.M64:
        r.append("-m64")
    if p.profile:
        warn("CPU profile generation not yet supported by LDC.")
    if p.verbose:
        r.append("-v")
    if p.vcolumns:
        r.append("-vcolumns")
    if p.vgc:
        r.append("-vgc")
    if p.log_tls_use:
        r.append("-transition=tls")
    if p.error_limit is not None:
        r.append(f"-verrors={p.error_limit}")
    _push_switches(r, "-verrors=", p.error_modes)
    if p.warnings == Warnings.AS_ERRORS:
        r.append("-w")
    elif p.warnings == Warnings.INFORMATIONAL:
        r.append("-wi")
    if p.optimize:
        r.append("-O3")

    if p.no_obj:
        r.append("-o-")
    if p.obj_dir is not None:
        r.append(f"-od={p.obj_dir}")
    if p.obj_name is not None:
        r.append(f"-of={p.obj_name}")
    if p.preserve_paths:
        r.append("-op")
    if p.generate_docs:
        r.append("-D")
    if p.doc_dir is not None:
        r.append(f"-Dd={p.doc_dir}")
    if p.doc_name is not None:
        r.append(f"-Df={p.doc_name}")
    if p.generate_headers:
        r.append("-H")
    if p.header_dir is not None:
        r.append(f"-Hd={p.header_dir}")
    if p.header_name is not None:
        r.append(f"-Hf={p.header_name}")
    if p.generate_json:
        r.append("-X")
    if p.json_name is not None:
        r.append(f"-Xf={p.json_name}")

    if p.ignore_unsupported_pragmas:
        r.append("-ignore")
    if p.enforce_property_syntax:
        r.append("-property")
    if p.enable_inline:
        # -inline also influences .di generation with DMD.
        r.append("-enable-inlining")
        r.append("-Hkeep-all-bodies")
    if p.emit_static_lib:
        r.append("-lib")
    if p.quiet:
        r.append("-quiet")
    if p.release:
        # Also disables bounds checks in LDC.
        r.append("-release")
    if p.no_bounds_check_used:
        warn("-noboundscheck is deprecated, use -boundscheck=off")
    if p.bounds_check in _BOUNDS_CHECK:
        r.append(_BOUNDS_CHECK[p.bounds_check])
    if p.emit_unit_tests:
        r.append("-unittest")

    _push_switches(r, "-I=", p.module_paths)
    _push_switches(r, "-J=", p.import_paths)
    if p.debug_flag:
        r.append("-d-debug")
    if p.debug_level is not None:
        r.append(f"-d-debug={p.debug_level}")
    _push_switches(r, "-d-debug=", p.debug_identifiers)
    if p.version_level is not None:
        r.append(f"-d-version={p.version_level}")
    _push_switches(r, "-d-version=", p.version_identifiers)
    _push_switches(r, "-L=", p.linker_switches)
    _push_switches(r, "-transition=", p.transitions)

    if p.default_lib_name is not None:
        r.append(f"-defaultlib={p.default_lib_name}")
    if p.debug_lib_name is not None:
        r.append(f"-debuglib={p.debug_lib_name}")
    if p.module_deps_file is not None:
        r.append(f"-deps={p.module_deps_file}")
    elif p.print_module_deps:
        r.append("-deps")
    if p.color == Color.ON:
        r.append("-enable-color")
    elif p.color == Color.OFF:
        r.append("-disable-color")
    if p.use_dip25:
        r.append("-dip25")
    if p.better_c:
        r.append("-betterC")
    if p.add_main:
        r.append("-main")
    if p.conf is not None:
        r.append(f"-conf={p.conf}")
    for letter in _HIDDEN_DEBUG:
        if getattr(p, f"hidden_debug_{letter}"):
            r.append(f"-hidden-debug-{letter}")

    r.extend(p.unknown_switches)
    if p.run:
        r.append("-run")
    r.extend(p.files)
    r.extend(p.run_args)
    return r
