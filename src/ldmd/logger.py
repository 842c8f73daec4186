"""Indentation-tracked diagnostic logger.

Each nesting level adds ``"* "`` to the line prefix.  Whether anything is
written is decided by the ``enabled`` flag the logger is constructed with
(normally ``WrapperConfig.log_enabled``); there is no process-wide switch.
"""

from __future__ import annotations

import contextlib
from collections.abc import Iterator

from rich.console import Console

_INDENT_UNIT = "* "


class Logger:
    """Diagnostic trace writer for the translation pipeline."""

    def __init__(self, enabled: bool = False, console: Console | None = None) -> None:
        self.enabled = enabled
        self.console = console or Console(soft_wrap=True, highlight=False)
        self._indent = ""

    def indent(self) -> None:
        if self.enabled:
            self._indent += _INDENT_UNIT

    def undent(self) -> None:
        if self.enabled:
            assert self._indent, "undent() without matching indent()"
            self._indent = self._indent[: -len(_INDENT_UNIT)]

    @contextlib.contextmanager
    def indented(self) -> Iterator[None]:
        """Indent for the duration of a ``with`` block."""
        self.indent()
        try:
            yield
        finally:
            self.undent()

    def println(self, msg: str) -> None:
        if self.enabled:
            self.console.out(self._indent + msg, highlight=False)
