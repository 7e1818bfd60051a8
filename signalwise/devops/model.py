from enum import StrEnum

from msgspec import Struct


class LogLevel(StrEnum):
    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    OFF = "off"


class LoggerConfig(Struct, frozen=True, kw_only=True, omit_defaults=True):
    """
    logger: None targets the root logger
    """

    level: LogLevel
    logger: str | None = None
