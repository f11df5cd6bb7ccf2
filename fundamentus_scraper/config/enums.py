"""
Enum definitions for wait outcomes and process exit codes
"""
from enum import Enum, IntEnum

class WaitResult(Enum):
    READY = "READY"
    TIMED_OUT = "TIMED_OUT"

class ExitCode(IntEnum):
    SUCCESS = 0
    CONFIG_ERROR = 1
    TABLE_NOT_FOUND = 2
    EMPTY_TABLE = 3
    UNHANDLED_ERROR = 4
