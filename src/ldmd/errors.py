"""Exception taxonomy for the ldmd wrapper.

Library modules raise these; only the entry points (``ldmd.driver`` and
``ldmd.tool``) turn them into a printed message and an exit status.
"""

from __future__ import annotations


class LdmdError(Exception):
    """Base class for every fatal wrapper condition."""

    exit_code: int = 1


class UsageError(LdmdError):
    """No source file was given."""


class UnrecognizedEscape(LdmdError):
    """A default-flags environment variable contains an unknown ``\\x`` escape."""

    def __init__(self, var_name: str, char: str) -> None:
        super().__init__(f"unknown escape sequence in {var_name}: \\{char}")
        self.var_name = var_name
        self.char = char


class ResponseExpansionFailure(LdmdError):
    """An ``@file`` argument could not be expanded."""


class MissingSwitchArgument(LdmdError):
    """A value-bearing switch was given without a value."""

    def __init__(self, switch: str) -> None:
        super().__init__(f"argument expected for switch '{switch}'")
        self.switch = switch


class InvalidSwitchValue(LdmdError):
    """A switch with a closed value set was given something outside it."""


class RemovedSwitch(LdmdError):
    """A switch the legacy dialect no longer accepts."""


class LocateExecutableFailure(LdmdError):
    """The target compiler could not be found."""


class TempFileExhaustion(LdmdError):
    """No unused temporary file name was found within the attempt budget."""


class ConfigError(LdmdError):
    """The wrapper configuration file is missing or malformed."""


class ExecutionFailure(LdmdError):
    """The target process could not be started."""


class EarlyExit(LdmdError):
    """An informational switch finished its work; stop with status 0."""

    exit_code = 0

    def __init__(self) -> None:
        super().__init__("")
