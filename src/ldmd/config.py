"""Wrapper configuration loader for ldmd.

Settings come from an optional ``ldmd.toml``.  The file is looked up in this
order:

1. an explicit path passed to :func:`load_config`;
2. the ``LDMD_CONFIG`` environment variable;
3. ``ldmd.toml`` in the directory holding the wrapper executable.

When none exists the built-in defaults are used, so a bare install works
without any file.  Example::

    [compiler]
    name = "ldc2"          # target executable
    env_var = "DFLAGS"     # default-flags variable

    [response_file]
    template = "ldmd-%%-%%-%%-%%.rsp"
    attempts = 128
    dir = ""               # empty: system temp directory

    [log]
    enabled = false

    [docs]
    manual_url = "http://wiki.dlang.org/LDC"
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from ldmd.errors import ConfigError
from ldmd.locate import wrapper_dir

CONFIG_FILENAME = "ldmd.toml"
CONFIG_ENV_VAR = "LDMD_CONFIG"
LOG_ENV_VAR = "LDMD_LOG"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class WrapperConfig:
    """Effective wrapper settings."""

    compiler_name: str = "ldc2"
    env_var: str = "DFLAGS"
    manual_url: str = "http://wiki.dlang.org/LDC"

    # --- [response_file] ---
    rsp_template: str = "ldmd-%%-%%-%%-%%.rsp"
    rsp_attempts: int = 128
    rsp_dir: Path | None = None

    # --- [log] ---
    log_enabled: bool = False

    # Where the settings came from (None: defaults only)
    source: Path | None = None


def _find_config(
    path: Path | None,
    argv0: str | None,
    environ: Mapping[str, str],
) -> tuple[Path | None, bool]:
    """Return ``(path, explicit)`` for the config file to read, if any."""
    if path is not None:
        return path, True
    env_path = environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path), True
    bin_dir = wrapper_dir(argv0) if argv0 else None
    if bin_dir is not None:
        candidate = bin_dir / CONFIG_FILENAME
        if candidate.is_file():
            return candidate, False
    return None, False


def _section(raw: dict[str, Any], name: str, source: Path) -> dict[str, Any]:
    value = raw.get(name, {})
    if not isinstance(value, dict):
        raise ConfigError(f"{source}: [{name}] must be a table")
    return value


def load_config(
    path: Path | None = None,
    argv0: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> WrapperConfig:
    """Load the wrapper configuration.

    Args:
        path: Explicit config file.  Must exist.
        argv0: The wrapper's ``argv[0]``, used to find a config beside it.
        environ: Environment mapping (defaults to ``os.environ``).

    Raises:
        ConfigError: An explicitly requested file is missing, or any file
            found is not valid TOML or has values of the wrong type.
    """
    environ = os.environ if environ is None else environ
    cfg = WrapperConfig()

    toml_path, explicit = _find_config(path, argv0, environ)
    if toml_path is not None:
        if not toml_path.is_file():
            if explicit:
                raise ConfigError(f"Config not found: {toml_path}")
        else:
            try:
                with open(toml_path, "rb") as f:
                    raw = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as exc:
                raise ConfigError(f"Could not read {toml_path}: {exc}") from exc
            _apply(cfg, raw, toml_path)
            cfg.source = toml_path

    if environ.get(LOG_ENV_VAR, "").strip().lower() in _TRUTHY:
        cfg.log_enabled = True
    return cfg


def _apply(cfg: WrapperConfig, raw: dict[str, Any], source: Path) -> None:
    compiler = _section(raw, "compiler", source)
    rsp = _section(raw, "response_file", source)
    log = _section(raw, "log", source)
    docs = _section(raw, "docs", source)

    try:
        cfg.compiler_name = str(compiler.get("name", cfg.compiler_name))
        cfg.env_var = str(compiler.get("env_var", cfg.env_var))
        cfg.manual_url = str(docs.get("manual_url", cfg.manual_url))
        cfg.rsp_template = str(rsp.get("template", cfg.rsp_template))
        cfg.rsp_attempts = int(rsp.get("attempts", cfg.rsp_attempts))
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{source}: {exc}") from exc

    enabled = log.get("enabled", cfg.log_enabled)
    if not isinstance(enabled, bool):
        raise ConfigError(f"{source}: [log] enabled must be true or false")
    cfg.log_enabled = enabled

    rsp_dir = rsp.get("dir", "")
    if rsp_dir:
        p = Path(rsp_dir)
        cfg.rsp_dir = p if p.is_absolute() else source.parent / p

    if not cfg.compiler_name:
        raise ConfigError(f"{source}: [compiler] name must not be empty")
    if cfg.rsp_attempts < 1:
        raise ConfigError(f"{source}: [response_file] attempts must be positive")
    if "%" not in cfg.rsp_template:
        raise ConfigError(f"{source}: [response_file] template needs at least one '%'")
