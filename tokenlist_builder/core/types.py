"""Type definitions and enums for the token list builder."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit statuses, following sysexits(3)."""

    OK = 0
    USAGE = 64
    DATA_ERROR = 65
    NO_INPUT = 66
