"""Module testing_logger.

=============
TestingLogger
=============

The TestingLogger class is the logger handed to the code under test. All
of its logging methods funnel into a single method,
``log(level, event_id, message, exception)``, which is the call that a
MockLogger records and a LogInvocationQuery verifies.

The MockLogHandler class is a logging.Handler that forwards standard
library log records to a TestingLogger, so that code which logs through
the logging module can be verified the same way.

:Example: log through a TestingLogger

>>> from logmock.log_invocation import LogLevel
>>> from logmock.testing_logger import TestingLogger
>>> class PrintingLogger(TestingLogger):
...     def log(self, level, event_id, message, exception=None):
...         print(level.name, event_id.id, message, exception)
>>> printing_logger = PrintingLogger(log_level=LogLevel.WARNING)
>>> printing_logger.is_enabled(LogLevel.INFORMATION)
False
>>> printing_logger.log_warning('%d files left', 3, event_id=42)
WARNING 42 3 files left None


The testing_logger module contains:

    1) TestingLogger class with methods:

       a. log
       b. log_state
       c. log_trace, log_debug, log_information, log_warning,
          log_error, log_critical
       d. is_enabled
       e. begin_scope

    2) ScopeCompletion class
    3) MockLogHandler class

"""

########################################################################
# Standard Library
########################################################################
from collections.abc import Mapping
import logging
from typing import Any, Callable, Optional, TypeVar, Union
from unittest import mock

########################################################################
# Third Party
########################################################################

########################################################################
# Local
########################################################################
from logmock.log_invocation import EventId, LogLevel

logger = logging.getLogger(__name__)

########################################################################
# type aliases
########################################################################
OptEventId = Optional[Union[EventId, int]]
OptException = Optional[BaseException]
Category = Optional[Union[str, type]]
TState = TypeVar("TState")

# records from our own loggers are never forwarded by MockLogHandler
OWN_LOGGER_PREFIX = __name__.split(".")[0]


########################################################################
# category_name_of
########################################################################
def category_name_of(category: Category) -> Optional[str]:
    """Return the category name for a string or a class.

    Args:
        category: None, a category name, or a class whose module
            qualified name is to be used

    Returns:
        the category name, or None when category is None

    """
    if category is None or isinstance(category, str):
        return category
    return f"{category.__module__}.{category.__qualname__}"


########################################################################
# ScopeCompletion class
########################################################################
class ScopeCompletion:
    """Tracks one scope started with TestingLogger.begin_scope.

    The object attribute is the MagicMock handed back to the caller of
    begin_scope. It can be used as a context manager or closed
    explicitly, and its calls can be asserted like any other mock.
    """

    def __init__(self, state: Any) -> None:
        """Initialize the scope completion.

        Args:
            state: the identifier passed to begin_scope

        """
        self.state = state
        self.object = mock.MagicMock(name=f"scope({state!r})")

    @property
    def is_completed(self) -> bool:
        """Return True if the scope has been exited or closed."""
        return bool(self.object.__exit__.called or self.object.close.called)

    def __repr__(self) -> str:
        return f"ScopeCompletion(state={self.state!r})"


########################################################################
# TestingLogger class
########################################################################
class TestingLogger:
    """Logger whose every log call ends up in the log method."""

    # keep pytest from collecting this class as a test class
    __test__ = False

    ####################################################################
    # __init__
    ####################################################################
    def __init__(
        self, log_level: LogLevel = LogLevel.TRACE, category: Category = None
    ) -> None:
        """Initialize a TestingLogger.

        Args:
            log_level: lowest level for which is_enabled returns True
            category: category name of the logger, either as a string
                or as the class whose name is to be used

        """
        self.log_level = LogLevel(log_level)
        self.category_name = category_name_of(category)
        self.scope_completions: list[ScopeCompletion] = []

    ####################################################################
    # __repr__
    ####################################################################
    def __repr__(self) -> str:
        """Return a representation of the class.

        Returns:
            The representation as how the class is instantiated

        """
        classname = self.__class__.__name__
        parms = f"log_level=LogLevel.{self.log_level.name}"
        if self.category_name:
            parms += f", category='{self.category_name}'"
        return f"{classname}({parms})"

    ####################################################################
    # log
    ####################################################################
    def log(
        self,
        level: LogLevel,
        event_id: EventId,
        message: str,
        exception: OptException = None,
    ) -> None:
        """Write a log entry.

        This is the method that a MockLogger records. The base
        implementation does nothing.

        Args:
            level: level the entry is written at
            event_id: id of the event
            message: the formatted message
            exception: the exception related to the entry

        """
        pass

    ####################################################################
    # log_state
    ####################################################################
    def log_state(
        self,
        level: LogLevel,
        event_id: OptEventId,
        state: TState,
        exception: OptException,
        formatter: Callable[[TState, OptException], str],
    ) -> None:
        """Format state into a message and write it with log.

        Args:
            level: level the entry is written at
            event_id: id of the event
            state: the entry to be written
            exception: the exception related to the entry
            formatter: called with state and exception to create the
                message

        """
        self.log(
            LogLevel(level), EventId.coerce(event_id), formatter(state, exception), exception
        )

    ####################################################################
    # level methods
    ####################################################################
    def _log_at(
        self,
        level: LogLevel,
        message: str,
        args: tuple[Any, ...],
        event_id: OptEventId,
        exception: OptException,
    ) -> None:
        """Format message with args the way logging does, then log it."""
        if args:
            fmt_args: Any = args
            # a single non-empty mapping supplies named values
            if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
                fmt_args = args[0]
            message = message % fmt_args
        self.log(level, EventId.coerce(event_id), message, exception)

    def log_trace(
        self,
        message: str,
        *args: Any,
        event_id: OptEventId = None,
        exception: OptException = None,
    ) -> None:
        """Write a log entry at TRACE level."""
        self._log_at(LogLevel.TRACE, message, args, event_id, exception)

    def log_debug(
        self,
        message: str,
        *args: Any,
        event_id: OptEventId = None,
        exception: OptException = None,
    ) -> None:
        """Write a log entry at DEBUG level."""
        self._log_at(LogLevel.DEBUG, message, args, event_id, exception)

    def log_information(
        self,
        message: str,
        *args: Any,
        event_id: OptEventId = None,
        exception: OptException = None,
    ) -> None:
        """Write a log entry at INFORMATION level."""
        self._log_at(LogLevel.INFORMATION, message, args, event_id, exception)

    def log_warning(
        self,
        message: str,
        *args: Any,
        event_id: OptEventId = None,
        exception: OptException = None,
    ) -> None:
        """Write a log entry at WARNING level."""
        self._log_at(LogLevel.WARNING, message, args, event_id, exception)

    def log_error(
        self,
        message: str,
        *args: Any,
        event_id: OptEventId = None,
        exception: OptException = None,
    ) -> None:
        """Write a log entry at ERROR level."""
        self._log_at(LogLevel.ERROR, message, args, event_id, exception)

    def log_critical(
        self,
        message: str,
        *args: Any,
        event_id: OptEventId = None,
        exception: OptException = None,
    ) -> None:
        """Write a log entry at CRITICAL level."""
        self._log_at(LogLevel.CRITICAL, message, args, event_id, exception)

    ####################################################################
    # is_enabled
    ####################################################################
    def is_enabled(self, level: LogLevel) -> bool:
        """Return True if level is at or above the logger's log_level.

        Args:
            level: the level to check

        Returns:
            True if enabled, False if not

        """
        return level >= self.log_level

    ####################################################################
    # begin_scope
    ####################################################################
    def begin_scope(self, state: Any) -> mock.MagicMock:
        """Begin a logical operation scope.

        Args:
            state: the identifier for the scope

        Returns:
            the object of a new ScopeCompletion, which is also appended
              to scope_completions

        """
        scope_completion = ScopeCompletion(state)
        self.scope_completions.append(scope_completion)
        return scope_completion.object


########################################################################
# MockLogHandler class
########################################################################
class MockLogHandler(logging.Handler):
    """Forward standard library log records to a TestingLogger.

    The event id is taken from an ``event_id`` attribute on the record,
    which is set with ``extra={'event_id': ...}`` on the logging call.
    Records from this package's own loggers are not forwarded.
    """

    def __init__(self, testing_logger: TestingLogger, level: int = logging.NOTSET) -> None:
        """Initialize the handler.

        Args:
            testing_logger: the logger that receives the records
            level: the handler level

        """
        super().__init__(level=level)
        self.testing_logger = testing_logger

    def emit(self, record: logging.LogRecord) -> None:
        """Forward the record to the testing logger.

        Args:
            record: the record to forward

        """
        if record.name == OWN_LOGGER_PREFIX or record.name.startswith(
            OWN_LOGGER_PREFIX + "."
        ):
            return

        try:
            exception = None
            if record.exc_info and record.exc_info[1] is not None:
                exception = record.exc_info[1]

            self.testing_logger.log(
                LogLevel.from_logging_level(record.levelno),
                EventId.coerce(getattr(record, "event_id", None)),
                record.getMessage(),
                exception,
            )
        except Exception:
            self.handleError(record)
