"""The parameter record produced by the switch parser.

``Params`` is deliberately a flat mutable record: the parser fills it in one
left-to-right pass, so a scalar field holds whatever the *last* matching
switch wrote and a list field holds every value in the order it was seen.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class Deprecated(Enum):
    DEFAULT = auto()
    ALLOW = auto()
    WARN = auto()
    ERROR = auto()


class Debug(Enum):
    NONE = auto()
    NORMAL = auto()
    PRETEND_C = auto()


class Model(Enum):
    DEFAULT = auto()
    M32 = auto()
    M64 = auto()


class Warnings(Enum):
    NONE = auto()
    AS_ERRORS = auto()
    INFORMATIONAL = auto()


class BoundsCheck(Enum):
    DEFAULT = auto()
    OFF = auto()
    SAFE_ONLY = auto()
    ON = auto()


class Color(Enum):
    AUTO = auto()
    ON = auto()
    OFF = auto()


@dataclass
class Params:
    """Every switch of the DMD dialect the wrapper understands."""

    allinst: bool = False
    deprecated: Deprecated = Deprecated.DEFAULT
    compile_only: bool = False
    coverage: bool = False
    emit_shared_lib: bool = False
    pic: bool = False
    emit_map: bool = False
    multi_obj: bool = False
    debug_info: Debug = Debug.NONE
    always_stack_frame: bool = False
    model: Model = Model.DEFAULT
    profile: bool = False
    verbose: bool = False
    vcolumns: bool = False
    vdmd: bool = False
    vgc: bool = False
    log_tls_use: bool = False
    error_limit: int | None = None
    error_modes: list[str] = field(default_factory=list)
    warnings: Warnings = Warnings.NONE
    optimize: bool = False

    # --- output files ---
    no_obj: bool = False
    obj_dir: str | None = None
    obj_name: str | None = None
    preserve_paths: bool = False
    generate_docs: bool = False
    doc_dir: str | None = None
    doc_name: str | None = None
    generate_headers: bool = False
    header_dir: str | None = None
    header_name: str | None = None
    generate_json: bool = False
    json_name: str | None = None

    ignore_unsupported_pragmas: bool = False
    enforce_property_syntax: bool = False
    enable_inline: bool = False
    use_dip25: bool = False
    emit_static_lib: bool = False
    quiet: bool = False
    release: bool = False
    no_bounds_check_used: bool = False
    bounds_check: BoundsCheck = BoundsCheck.DEFAULT
    emit_unit_tests: bool = False
    better_c: bool = False
    add_main: bool = False

    # --- accumulating ---
    module_paths: list[str] = field(default_factory=list)
    import_paths: list[str] = field(default_factory=list)
    linker_switches: list[str] = field(default_factory=list)
    transitions: list[str] = field(default_factory=list)

    # --- conditional compilation ---
    debug_flag: bool = False
    debug_level: int | None = None
    debug_identifiers: list[str] = field(default_factory=list)
    version_level: int | None = None
    version_identifiers: list[str] = field(default_factory=list)

    default_lib_name: str | None = None
    debug_lib_name: str | None = None
    print_module_deps: bool = False
    module_deps_file: str | None = None
    color: Color = Color.AUTO
    conf: str | None = None

    # --- hidden frontend debugging switches (--b, --c, ...) ---
    hidden_debug_b: bool = False
    hidden_debug_c: bool = False
    hidden_debug_f: bool = False
    hidden_debug_r: bool = False
    hidden_debug_x: bool = False
    hidden_debug_y: bool = False

    unknown_switches: list[str] = field(default_factory=list)
    run: bool = False
    files: list[str] = field(default_factory=list)
    run_args: list[str] = field(default_factory=list)
