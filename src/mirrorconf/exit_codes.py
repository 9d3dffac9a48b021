"""Process exit codes for fatal configuration errors.

Values follow sysexits.h so a supervisor can tell a bad configuration file
apart from a bad configuration value.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes raised as ``SystemExit`` by :class:`mirrorconf.Configurator`."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    IO_ERROR = 74
    CONFIG_ERROR = 78
