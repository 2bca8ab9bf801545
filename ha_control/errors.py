"""Error classes and process exit codes shared by both commands."""

from enum import IntEnum


class ExitCode(IntEnum):
    OK = 0
    UNEXPECTED = 1
    USAGE = 2
    CONFIG = 3
    HUB = 4


class HAControlError(Exception):
    """Base class for errors reported to the user without a traceback"""

    exit_code = ExitCode.UNEXPECTED


class ConfigError(HAControlError):
    """Credential file missing or incomplete"""

    exit_code = ExitCode.CONFIG

    def __init__(self, message: str, hint: str = "") -> None:
        super().__init__(message)
        self.hint = hint


class HubError(HAControlError):
    """Home Assistant unreachable, credentials rejected or response malformed"""

    exit_code = ExitCode.HUB
