"""Tests for ldmd.parser: DMD switch parsing with last-wins semantics."""

import pytest

from ldmd.errors import (
    EarlyExit,
    InvalidSwitchValue,
    MissingSwitchArgument,
    RemovedSwitch,
    UsageError,
)
from ldmd.params import BoundsCheck, Color, Debug, Deprecated, Model, Warnings
from ldmd.parser import parse_args


class _Actions:
    """Records which informational action was requested."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def usage(self) -> None:
        self.calls.append("usage")

    def version(self) -> None:
        self.calls.append("version")

    def manual(self) -> None:
        self.calls.append("manual")


def _parse(*args: str, env: tuple[str, ...] = (), suffixes: tuple[str, ...] = ()):
    return parse_args(list(args), env, actions=_Actions(), executable_suffixes=suffixes)


# ---------------------------------------------------------------------------
# Booleans and enums
# ---------------------------------------------------------------------------


class TestBooleanSwitches:
    @pytest.mark.parametrize(
        "switch,field",
        [
            ("-allinst", "allinst"),
            ("-c", "compile_only"),
            ("-shared", "emit_shared_lib"),
            ("-fPIC", "pic"),
            ("-map", "emit_map"),
            ("-multiobj", "multi_obj"),
            ("-gs", "always_stack_frame"),
            ("-profile", "profile"),
            ("-v", "verbose"),
            ("-vcolumns", "vcolumns"),
            ("-vdmd", "vdmd"),
            ("-vgc", "vgc"),
            ("-vtls", "log_tls_use"),
            ("-O", "optimize"),
            ("-o-", "no_obj"),
            ("-op", "preserve_paths"),
            ("-D", "generate_docs"),
            ("-H", "generate_headers"),
            ("-X", "generate_json"),
            ("-ignore", "ignore_unsupported_pragmas"),
            ("-property", "enforce_property_syntax"),
            ("-inline", "enable_inline"),
            ("-dip25", "use_dip25"),
            ("-lib", "emit_static_lib"),
            ("-quiet", "quiet"),
            ("-release", "release"),
            ("-unittest", "emit_unit_tests"),
            ("-betterC", "better_c"),
            ("-main", "add_main"),
            ("-debug", "debug_flag"),
            ("--b", "hidden_debug_b"),
            ("--y", "hidden_debug_y"),
        ],
    )
    def test_sets_field(self, switch: str, field: str) -> None:
        p = _parse(switch, "a.d")
        assert getattr(p, field) is True
        assert p.unknown_switches == []

    def test_defaults(self) -> None:
        p = _parse("a.d")
        assert p.compile_only is False
        assert p.deprecated == Deprecated.DEFAULT
        assert p.bounds_check == BoundsCheck.DEFAULT
        assert p.color == Color.AUTO


class TestEnumSwitches:
    def test_debug_info_last_wins(self) -> None:
        assert _parse("-g", "-gc", "a.d").debug_info == Debug.PRETEND_C
        assert _parse("-gc", "-g", "a.d").debug_info == Debug.NORMAL

    def test_model_last_wins(self) -> None:
        assert _parse("-m32", "-m64", "-m32", "a.d").model == Model.M32

    def test_warnings_last_wins(self) -> None:
        assert _parse("-w", "-wi", "a.d").warnings == Warnings.INFORMATIONAL
        assert _parse("-wi", "-w", "a.d").warnings == Warnings.AS_ERRORS

    def test_deprecated_dw(self) -> None:
        assert _parse("-d", "-dw", "a.d").deprecated == Deprecated.WARN

    def test_de_maps_like_d(self) -> None:
        assert _parse("-de", "a.d").deprecated == Deprecated.ALLOW
        assert _parse("-dw", "-de", "a.d").deprecated == Deprecated.ALLOW

    def test_boundscheck_values(self) -> None:
        assert _parse("-boundscheck=on", "a.d").bounds_check == BoundsCheck.ON
        assert _parse("-boundscheck=safeonly", "a.d").bounds_check == BoundsCheck.SAFE_ONLY
        assert _parse("-boundscheck=off", "a.d").bounds_check == BoundsCheck.OFF

    def test_boundscheck_unknown_value_passes_through(self) -> None:
        p = _parse("-boundscheck=maybe", "a.d")
        assert p.bounds_check == BoundsCheck.DEFAULT
        assert p.unknown_switches == ["-boundscheck=maybe"]

    def test_noboundscheck_then_boundscheck_on(self) -> None:
        p = _parse("-noboundscheck", "-boundscheck=on", "a.d")
        assert p.bounds_check == BoundsCheck.ON
        assert p.no_bounds_check_used is True

    def test_color(self) -> None:
        assert _parse("-color", "a.d").color == Color.ON
        assert _parse("-color=on", "-color=off", "a.d").color == Color.OFF

    def test_color_bad_value(self) -> None:
        with pytest.raises(InvalidSwitchValue, match="'on' and 'off'"):
            _parse("-color=auto", "a.d")

    def test_cov_threshold_sets_plain_coverage(self) -> None:
        p = _parse("-cov=75", "a.d")
        assert p.coverage is True
        assert p.unknown_switches == []


# ---------------------------------------------------------------------------
# Value-bearing switches
# ---------------------------------------------------------------------------


class TestScalarSwitches:
    def test_output_dir_and_name_last_wins(self) -> None:
        p = _parse("-odone", "-oftwo", "-odthree", "-offour", "a.d")
        assert p.obj_dir == "three"
        assert p.obj_name == "four"

    def test_doc_header_json(self) -> None:
        p = _parse("-Dddocs", "-Dfapi.html", "-Hdinc", "-Hfa.di", "-Xfa.json", "a.d")
        assert (p.doc_dir, p.doc_name) == ("docs", "api.html")
        assert (p.header_dir, p.header_name) == ("inc", "a.di")
        assert p.json_name == "a.json"
        assert p.generate_docs and p.generate_headers and p.generate_json

    def test_name_equals_value(self) -> None:
        p = _parse("-conf=/etc/ldc2.conf", "-defaultlib=phobos2", "-debuglib=phobos2-d", "a.d")
        assert p.conf == "/etc/ldc2.conf"
        assert p.default_lib_name == "phobos2"
        assert p.debug_lib_name == "phobos2-d"

    def test_empty_library_name_means_none(self) -> None:
        p = _parse("-defaultlib=phobos2", "-defaultlib=", "-debuglib=", "a.d")
        assert p.default_lib_name == ""
        assert p.debug_lib_name == ""

    def test_deps(self) -> None:
        assert _parse("-deps", "a.d").print_module_deps is True
        p = _parse("-deps", "-deps=deps.txt", "a.d")
        assert p.module_deps_file == "deps.txt"
        p = _parse("-deps=deps.txt", "-deps", "a.d")
        assert p.module_deps_file is None
        assert p.print_module_deps is True

    @pytest.mark.parametrize(
        "switch", ["-od", "-of", "-Dd", "-Hf", "-Xf", "-I", "-J", "-L", "-conf=", "-deps=", "-debug=", "-C"]
    )
    def test_missing_argument(self, switch: str) -> None:
        with pytest.raises(MissingSwitchArgument) as exc_info:
            _parse(switch, "a.d")
        assert exc_info.value.switch == switch
        assert "argument expected" in str(exc_info.value)


class TestListSwitches:
    def test_paths_accumulate_in_order(self) -> None:
        p = _parse("-Ib", "-Ia", "-Ib", "-Jviews", "-L-lz", "-L-lm", "a.d")
        assert p.module_paths == ["b", "a", "b"]
        assert p.import_paths == ["views"]
        assert p.linker_switches == ["-lz", "-lm"]

    def test_transitions(self) -> None:
        p = _parse("-transition=field", "-transition=tls", "a.d")
        assert p.transitions == ["field", "tls"]

    def test_debug_level_and_identifiers(self) -> None:
        p = _parse("-debug=2", "-debug=Foo", "-debug=5", "-debug=Bar", "a.d")
        assert p.debug_level == 5
        assert p.debug_identifiers == ["Foo", "Bar"]

    def test_version_level_and_identifiers(self) -> None:
        p = _parse("-version=Linux", "-version=3", "a.d")
        assert p.version_level == 3
        assert p.version_identifiers == ["Linux"]

    def test_verrors(self) -> None:
        p = _parse("-verrors=10", "-verrors=0", "-verrors=context", "a.d")
        assert p.error_limit == 0
        assert p.error_modes == ["context"]

    def test_malformed_level_passes_through(self) -> None:
        p = _parse("-debug=2x", "a.d")
        assert p.debug_level is None
        assert p.unknown_switches == ["-debug=2x"]

    def test_version_without_value_passes_through(self) -> None:
        assert _parse("-version", "a.d").unknown_switches == ["-version"]


# ---------------------------------------------------------------------------
# Pass-through, removed and informational switches
# ---------------------------------------------------------------------------


class TestPassthrough:
    def test_unknown_switches_keep_order(self) -> None:
        p = _parse("-mcpu=native", "-O", "-flto=full", "a.d", "-vv")
        assert p.unknown_switches == ["-mcpu=native", "-flto=full", "-vv"]

    def test_c_prefix_forwards_without_marker(self) -> None:
        p = _parse("-C-mattr=+avx", "-Cfoo", "a.d")
        assert p.unknown_switches == ["--mattr=+avx", "-foo"]

    def test_unknown_suffix_after_d_prefix(self) -> None:
        assert _parse("-Dx", "a.d").unknown_switches == ["-Dx"]

    def test_op_with_suffix_passes_through(self) -> None:
        assert _parse("-opx", "a.d").unknown_switches == ["-opx"]


class TestRemovedSwitches:
    @pytest.mark.parametrize("switch,hint", [("-o", "-of"), ("-gt", "-profile"), ("-v1", "DMD 1.0")])
    def test_fatal(self, switch: str, hint: str) -> None:
        with pytest.raises(RemovedSwitch, match=hint):
            _parse(switch, "a.d")


class TestInformationalSwitches:
    @pytest.mark.parametrize(
        "switch,action",
        [("-help", "usage"), ("--help", "usage"), ("--version", "version"), ("-man", "manual")],
    )
    def test_runs_action_and_exits_zero(self, switch: str, action: str) -> None:
        actions = _Actions()
        with pytest.raises(EarlyExit) as exc_info:
            parse_args([switch, "a.d"], actions=actions, executable_suffixes=())
        assert exc_info.value.exit_code == 0
        assert actions.calls == [action]

    def test_stops_before_later_errors(self) -> None:
        actions = _Actions()
        with pytest.raises(EarlyExit):
            parse_args(["--version", "-o"], actions=actions, executable_suffixes=())


# ---------------------------------------------------------------------------
# Files, -run and environment tokens
# ---------------------------------------------------------------------------


class TestFilesAndRun:
    def test_bare_tokens_are_files(self) -> None:
        assert _parse("a.d", "-O", "b.d", "lib.a").files == ["a.d", "b.d", "lib.a"]

    def test_run_takes_rest(self) -> None:
        p = _parse("-run", "a.d", "arg1", "arg2")
        assert p.run is True
        assert p.files == ["a.d"]
        assert p.run_args == ["arg1", "arg2"]

    def test_run_args_never_parsed_as_switches(self) -> None:
        p = _parse("-O", "-run", "a.d", "-release", "-of=x", "--help")
        assert p.release is False
        assert p.obj_name is None
        assert p.run_args == ["-release", "-of=x", "--help"]

    def test_run_without_file(self) -> None:
        with pytest.raises(MissingSwitchArgument, match="-run"):
            _parse("-O", "-run")

    def test_no_files_is_usage_error(self) -> None:
        actions = _Actions()
        with pytest.raises(UsageError, match="No source file"):
            parse_args(["-O", "-release", "-Iimport"], actions=actions, executable_suffixes=())
        assert actions.calls == ["usage"]

    def test_no_args_is_usage_error(self) -> None:
        with pytest.raises(UsageError):
            _parse()

    def test_executable_suffix_sets_output_name(self) -> None:
        p = _parse("a.d", "App.EXE", suffixes=(".exe",))
        assert p.obj_name == "App.EXE"
        assert p.files == ["a.d"]

    def test_executable_suffix_ignored_when_not_native(self) -> None:
        p = _parse("a.d", "app.exe", suffixes=())
        assert p.files == ["a.d", "app.exe"]
        assert p.obj_name is None


class TestEnvironmentTokens:
    def test_env_tokens_scanned_after_args(self) -> None:
        p = _parse("-m32", "a.d", env=("-m64", "-Ienv"))
        assert p.model == Model.M64
        assert p.module_paths == ["env"]

    def test_env_can_supply_files(self) -> None:
        assert _parse("-O", env=("a.d",)).files == ["a.d"]

    def test_run_leaves_env_tokens_as_switches(self) -> None:
        p = _parse("-run", "a.d", "x", env=("-O",))
        assert p.optimize is True
        assert p.files == ["a.d"]
        assert p.run_args == ["x"]

    def test_run_in_env_takes_rest_of_env(self) -> None:
        p = _parse("-O", env=("-run", "a.d", "-x", "y"))
        assert p.optimize is True
        assert p.files == ["a.d"]
        assert p.run_args == ["-x", "y"]
