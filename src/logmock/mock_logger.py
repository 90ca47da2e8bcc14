"""Module mock_logger.

==========
MockLogger
==========

The MockLogger class records the log calls made on a TestingLogger and
verifies them with a LogInvocationQuery. The TestingLogger is available
as the object attribute and is what gets handed to the code under test.
Its log method is replaced with a MagicMock (the log attribute of the
MockLogger) that records each call and then calls through to the
original method.

:Example1: verify an information message was logged

.. code-block:: python

    from logmock.mock_logger import MockLogger

    def test_example1() -> None:
        mock_logger = MockLogger()
        mock_logger.object.log_information('Hello, world!')
        mock_logger.verify_log(lambda q: q.at_information()
                                          .with_message('Hello, world!'))

:Example2: verify a message logged through the logging module

.. code-block:: python

    import logging
    from logmock.mock_logger import MockLogger
    from logmock.times import Times

    def test_example2() -> None:
        mock_logger = MockLogger()
        with mock_logger.capture('example_2'):
            logging.getLogger('example_2').warning(
                'retry %d of %d', 1, 3, extra={'event_id': 17})
        mock_logger.verify_log_fields(event_id=17,
                                      message='retry 1 of 3',
                                      times=Times.once())


The mock_logger module contains:

    1) MockLogger class with methods:

       a. setup_log
       b. verify_log
       c. verify_log_fields
       d. handler
       e. capture
       f. print_invocations
       g. reset

    2) verify_log function
    3) invocation_from_call function

"""

########################################################################
# Standard Library
########################################################################
from contextlib import contextmanager
import inspect
import logging
from typing import Any, Callable, Iterator, Optional
from unittest import mock

########################################################################
# Third Party
########################################################################

########################################################################
# Local
########################################################################
from logmock.exception_matchers import OptExcType
from logmock.invocation_report import print_invocations
from logmock.log_invocation import EventId, LogInvocation, LogLevel
from logmock.log_invocation_query import LogInvocationQuery, PatternArg
from logmock.testing_logger import (
    Category,
    MockLogHandler,
    OptEventId,
    ScopeCompletion,
    TestingLogger,
)
from logmock.times import Times

logger = logging.getLogger(__name__)

########################################################################
# type aliases
########################################################################
ConfigureQuery = Optional[Callable[[LogInvocationQuery], Any]]

_LOG_SIGNATURE = inspect.signature(TestingLogger.log)


########################################################################
# invocation_from_call
########################################################################
def invocation_from_call(log_call: Any) -> LogInvocation:
    """Convert a recorded call of TestingLogger.log to a LogInvocation.

    Args:
        log_call: an entry of the log mock's call_args_list

    Returns:
        the LogInvocation with the arguments of the call

    """
    bound = _LOG_SIGNATURE.bind(None, *log_call.args, **log_call.kwargs)
    bound.apply_defaults()
    return LogInvocation(
        level=LogLevel(bound.arguments["level"]),
        event_id=EventId.coerce(bound.arguments["event_id"]),
        message=bound.arguments["message"],
        exception=bound.arguments["exception"],
    )


########################################################################
# MockLogger class
########################################################################
class MockLogger:
    """Mock logger that records and verifies log invocations."""

    ####################################################################
    # __init__
    ####################################################################
    def __init__(
        self, log_level: LogLevel = LogLevel.TRACE, category: Category = None
    ) -> None:
        """Initialize a MockLogger.

        Args:
            log_level: log level of the TestingLogger object
            category: category name of the TestingLogger object, either
                as a string or as the class whose name is to be used

        Example: create a mock logger and hand its object to the code
            under test

        >>> from logmock.mock_logger import MockLogger
        >>> mock_logger = MockLogger()
        >>> mock_logger.object.log_debug('starting')
        >>> mock_logger.invocations[0].message
        'starting'

        """
        self.object = TestingLogger(log_level=log_level, category=category)
        self.log = mock.MagicMock(name="TestingLogger.log", wraps=self.object.log)
        self.object.log = self.log  # type: ignore[method-assign]

    ####################################################################
    # __repr__
    ####################################################################
    def __repr__(self) -> str:
        return f"MockLogger(object={self.object!r})"

    ####################################################################
    # scope_completions
    ####################################################################
    @property
    def scope_completions(self) -> list[ScopeCompletion]:
        """Return the scopes begun on the object, in call order."""
        return self.object.scope_completions

    ####################################################################
    # invocations
    ####################################################################
    @property
    def invocations(self) -> list[LogInvocation]:
        """Return a snapshot of the recorded log invocations."""
        return [invocation_from_call(log_call) for log_call in list(self.log.call_args_list)]

    ####################################################################
    # setup_log
    ####################################################################
    def setup_log(
        self, callback: Optional[Callable[..., Any]] = None
    ) -> mock.MagicMock:
        """Set up a callback for every call of the log method.

        Args:
            callback: called with the level, event_id, message and
                exception of each log call; None removes the callback

        Returns:
            the log mock

        """
        self.log.side_effect = callback
        return self.log

    ####################################################################
    # verify_log
    ####################################################################
    def verify_log(
        self,
        configure_query: ConfigureQuery = None,
        times: Optional[Times] = None,
        fail_message: Optional[str] = None,
    ) -> None:
        """Verify that a log invocation was performed.

        Args:
            configure_query: called with a new LogInvocationQuery to
                configure it; when None, any log invocation matches
            times: number of matching invocations expected, at least
                once when not specified
            fail_message: text placed at the start of the failure
                message

        Raises:
            LogVerificationFailed: the number of matching invocations
                does not satisfy times

        """
        query = LogInvocationQuery()
        if configure_query is not None:
            configure_query(query)
        query.verify(self, times=times, fail_message=fail_message)

    ####################################################################
    # verify_log_fields
    ####################################################################
    def verify_log_fields(
        self,
        level: Optional[LogLevel] = None,
        event_id: OptEventId = None,
        message: Optional[str] = None,
        message_regex: PatternArg = None,
        exception_type: OptExcType = None,
        exception_message: Optional[str] = None,
        exception_message_regex: PatternArg = None,
        times: Optional[Times] = None,
        fail_message: Optional[str] = None,
    ) -> None:
        """Verify a log invocation described by keyword arguments.

        Only the arguments that are specified constrain the match. The
        exception is checked when any of exception_type,
        exception_message or exception_message_regex is specified.

        Args:
            level: expected level
            event_id: expected event id
            message: expected message
            message_regex: pattern that must match the whole message;
                ignored when message is specified
            exception_type: class the exception must be an instance of
            exception_message: exact str() of the exception
            exception_message_regex: pattern that must be found in the
                str() of the exception
            times: number of matching invocations expected, at least
                once when not specified
            fail_message: text placed at the start of the failure
                message

        Raises:
            LogVerificationFailed: the number of matching invocations
                does not satisfy times

        """
        query = LogInvocationQuery()
        if level is not None:
            query.at_log_level(level)
        if event_id is not None:
            query.with_event_id(event_id)
        if message is not None:
            query.with_message(message)
        elif message_regex is not None:
            query.with_message_regex(message_regex)
        if (
            exception_type is not None
            or exception_message is not None
            or exception_message_regex is not None
        ):
            query.with_exception(
                exception_type=exception_type,
                message=exception_message,
                message_regex=exception_message_regex,
            )
        query.verify(self, times=times, fail_message=fail_message)

    ####################################################################
    # handler
    ####################################################################
    def handler(self, level: int = logging.NOTSET) -> MockLogHandler:
        """Return a logging handler that records into this mock.

        Args:
            level: the handler level

        Returns:
            the handler

        """
        return MockLogHandler(self.object, level=level)

    ####################################################################
    # capture
    ####################################################################
    @contextmanager
    def capture(
        self, logger_name: Optional[str] = None, level: int = logging.DEBUG
    ) -> Iterator["MockLogger"]:
        """Record the records of a standard library logger.

        Args:
            logger_name: name of the logger to capture, the root logger
                when None
            level: level the logger is set to while capturing

        Yields:
            this mock logger

        """
        target = logging.getLogger(logger_name)
        handler = self.handler()
        saved_level = target.level
        target.addHandler(handler)
        target.setLevel(level)
        try:
            yield self
        finally:
            target.removeHandler(handler)
            target.setLevel(saved_level)

    ####################################################################
    # print_invocations
    ####################################################################
    def print_invocations(self, **kwargs: Any) -> None:
        """Print the recorded log invocations.

        Args:
            kwargs: print arguments such as file or flush

        """
        print_invocations(self.invocations, **kwargs)

    ####################################################################
    # reset
    ####################################################################
    def reset(self) -> None:
        """Forget the recorded log invocations and scopes."""
        self.log.reset_mock()
        self.object.scope_completions.clear()


########################################################################
# verify_log
########################################################################
def verify_log(
    mock_logger: MockLogger,
    configure_query: ConfigureQuery = None,
    times: Optional[Times] = None,
    fail_message: Optional[str] = None,
) -> None:
    """Verify that a log invocation was performed on a mock logger.

    Args:
        mock_logger: the mock logger to verify
        configure_query: called with a new LogInvocationQuery to
            configure it; when None, any log invocation matches
        times: number of matching invocations expected, at least once
            when not specified
        fail_message: text placed at the start of the failure message

    Raises:
        LogVerificationFailed: the number of matching invocations does
            not satisfy times

    """
    mock_logger.verify_log(configure_query, times=times, fail_message=fail_message)
