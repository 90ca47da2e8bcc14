"""Module log_invocation.

=============
LogInvocation
=============

The log_invocation module holds the data model for one call to
``TestingLogger.log``: the level it was logged at, the event id, the
formatted message, and the exception (if any).

:Example: create an invocation record

>>> from logmock.log_invocation import EventId, LogInvocation, LogLevel
>>> invocation = LogInvocation(level=LogLevel.WARNING,
...                            event_id=EventId(123, 'MyEvent'),
...                            message='disk almost full')
>>> invocation.level > LogLevel.INFORMATION
True
>>> str(invocation.event_id)
'MyEvent'
>>> invocation.event_id == 123
True


The log_invocation module contains:

    1) LogLevel enum
    2) EventId class
    3) LogInvocation class

"""

########################################################################
# Standard Library
########################################################################
from dataclasses import dataclass
from enum import IntEnum
import logging
from typing import Any, Optional, Union

########################################################################
# Third Party
########################################################################

########################################################################
# Local
########################################################################

logger = logging.getLogger(__name__)


########################################################################
# LogInvocation Exceptions classes
########################################################################
class LogInvocationError(Exception):
    """Base class for exception in this module."""

    pass


class InvalidEventId(LogInvocationError):
    """An event id was specified with a value that is not an int."""

    pass


########################################################################
# LogLevel
########################################################################
class LogLevel(IntEnum):
    """Severity of a log call, ordered from least to most severe."""

    TRACE = 0
    DEBUG = 1
    INFORMATION = 2
    WARNING = 3
    ERROR = 4
    CRITICAL = 5

    @classmethod
    def from_logging_level(cls, levelno: int) -> "LogLevel":
        """Map a standard library logging level to a LogLevel.

        Args:
            levelno: the numeric level of a logging.LogRecord

        Returns:
            the LogLevel for the highest standard level that levelno
              reaches, or TRACE for anything below logging.DEBUG

        """
        if levelno >= logging.CRITICAL:
            return cls.CRITICAL
        if levelno >= logging.ERROR:
            return cls.ERROR
        if levelno >= logging.WARNING:
            return cls.WARNING
        if levelno >= logging.INFO:
            return cls.INFORMATION
        if levelno >= logging.DEBUG:
            return cls.DEBUG
        return cls.TRACE


########################################################################
# EventId
########################################################################
@dataclass(frozen=True, eq=False)
class EventId:
    """Identifies a logging event.

    Two event ids are equal when their ids are equal; the name is only
    descriptive. An EventId also compares equal to an int with the same
    id.
    """

    id: int = 0
    name: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.id, bool) or not isinstance(self.id, int):
            err_msg = f"EventId id must be an int, got {self.id!r}"
            logger.debug(err_msg)
            raise InvalidEventId(err_msg)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, EventId):
            return self.id == other.id
        if isinstance(other, int) and not isinstance(other, bool):
            return self.id == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        if self.name:
            return self.name
        return str(self.id)

    @classmethod
    def coerce(cls, value: Union["EventId", int, None]) -> "EventId":
        """Return value as an EventId.

        Args:
            value: an EventId, an int id, or None for the default id 0

        Returns:
            the EventId for value

        Raises:
            InvalidEventId: value is neither an EventId, an int, nor
                None

        """
        if value is None:
            return cls()
        if isinstance(value, EventId):
            return value
        return cls(value)


########################################################################
# LogInvocation
########################################################################
@dataclass(frozen=True)
class LogInvocation:
    """One recorded call to TestingLogger.log."""

    level: LogLevel
    event_id: EventId
    message: str
    exception: Optional[BaseException] = None
