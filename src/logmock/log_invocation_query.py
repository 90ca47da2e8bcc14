"""Module log_invocation_query.

==================
LogInvocationQuery
==================

The LogInvocationQuery class lets a test case describe a log call that
is expected to have been made on a MockLogger, one field at a time, and
then verify it. Each of the four fields of a log call (level, event id,
message and exception) holds exactly one matcher. Calling any setter for
a field replaces whatever was set for that field before, whatever kind
it was. A field that was never set matches any value.

:Example1: verify a warning was logged without an exception

.. code-block:: python

    from logmock.log_invocation_query import LogInvocationQuery
    from logmock.mock_logger import MockLogger

    def test_example1() -> None:
        mock_logger = MockLogger()
        mock_logger.object.log_warning('Hello, world!')
        query = (LogInvocationQuery()
                 .at_warning()
                 .with_message('Hello, world!')
                 .without_exception())
        query.verify(mock_logger)

:Example2: a failed verification shows what was searched for

.. code-block:: python

    import pytest
    from logmock.log_invocation_query import LogVerificationFailed
    from logmock.times import Times

    def test_example2() -> None:
        mock_logger = MockLogger()
        mock_logger.object.log_error('disk full', exception=OSError('ENOSPC'))
        query = LogInvocationQuery().at_error().with_exception(ValueError)
        with pytest.raises(LogVerificationFailed):
            query.verify(mock_logger, times=Times.once())

The text of the LogVerificationFailed raised in Example2::

    Expected invocation on the mock once, but was never performed: logger => logger.log(LogLevel.ERROR, any(EventId), any(str), not_none(ValueError))

    Performed invocations:

    level event_id   message             exception
    ERROR        0 disk full OSError('ENOSPC')


The log_invocation_query module contains:

    1) LogInvocationQuery class with methods:

       a. at_trace, at_debug, at_information, at_warning, at_error,
          at_critical
       b. at_log_level
       c. with_event_id
       d. with_message
       e. with_message_regex
       f. without_exception
       g. with_exception
       h. with_exception_message
       i. with_exception_matching
       j. describe
       k. verify

    2) CompiledQuery class
    3) compile_query function

"""

########################################################################
# Standard Library
########################################################################
from dataclasses import dataclass
import logging
import re
from typing import Any, Callable, Optional, TYPE_CHECKING, Union

########################################################################
# Third Party
########################################################################

########################################################################
# Local
########################################################################
from logmock.exception_matchers import (
    AnyException,
    ExceptionMatcher,
    ExceptionMessageRegex,
    ExceptionOfType,
    ExceptionPredicate,
    ExceptionWithMessage,
    NoException,
    OptExcType,
    validate_exception_type,
)
from logmock.field_matchers import (
    AnyValue,
    ExactValue,
    FieldMatcher,
    PredicateValue,
    RegexValue,
)
from logmock.invocation_report import format_invocations
from logmock.log_invocation import EventId, LogInvocation, LogLevel
from logmock.times import Times

if TYPE_CHECKING:
    from logmock.mock_logger import MockLogger

logger = logging.getLogger(__name__)

########################################################################
# type aliases
########################################################################
LevelArg = Optional[Union[LogLevel, int, Callable[[LogLevel], Any]]]
EventIdArg = Optional[Union[EventId, int, Callable[[EventId], Any]]]
MessageArg = Optional[Union[str, Callable[[str], Any]]]
PatternArg = Optional[Union[str, "re.Pattern[str]"]]


########################################################################
# LogInvocationQuery Exceptions classes
########################################################################
class LogInvocationQueryError(Exception):
    """Base class for exception in this module."""

    pass


class InvalidMatchValue(LogInvocationQueryError):
    """A setter was given a value it can not match with."""

    pass


class QueryStateError(LogInvocationQueryError):
    """A query field holds something that is not a matcher."""

    pass


class LogVerificationFailed(LogInvocationQueryError):
    """The number of matching log invocations was not as expected."""

    def __init__(
        self, message: str, expression: str, expected: Times, actual_count: int
    ) -> None:
        super().__init__(message)
        self.expression = expression
        self.expected = expected
        self.actual_count = actual_count


########################################################################
# CompiledQuery class
########################################################################
@dataclass(frozen=True)
class CompiledQuery:
    """The combined matcher for a LogInvocationQuery."""

    level: FieldMatcher
    event_id: FieldMatcher
    message: FieldMatcher
    exception: ExceptionMatcher
    expression: str

    def matches(self, invocation: LogInvocation) -> bool:
        """Return True if every field of invocation matches.

        Args:
            invocation: the log invocation to check

        Returns:
            True if the invocation is a match, False if not

        """
        return (
            self.level.matches(invocation.level)
            and self.event_id.matches(invocation.event_id)
            and self.message.matches(invocation.message)
            and self.exception.matches(invocation.exception)
        )

    __call__ = matches


########################################################################
# compile_query
########################################################################
def compile_query(query: "LogInvocationQuery") -> CompiledQuery:
    """Combine the field matchers of a query into one matcher.

    Args:
        query: the query to compile

    Returns:
        the compiled query, holding the matchers and the rendered
          expression

    Raises:
        QueryStateError: a field of the query does not hold a matcher

    """
    fields = (
        ("level", query._level_matcher, FieldMatcher),
        ("event_id", query._event_id_matcher, FieldMatcher),
        ("message", query._message_matcher, FieldMatcher),
        ("exception", query._exception_matcher, ExceptionMatcher),
    )
    for field_name, matcher, matcher_class in fields:
        if not isinstance(matcher, matcher_class):
            err_msg = (
                f"query field {field_name} holds {matcher!r}, which is not "
                f"a {matcher_class.__name__}"
            )
            logger.debug(err_msg)
            raise QueryStateError(err_msg)

    expression = (
        "logger => logger.log("
        f"{query._level_matcher.render('LogLevel')}, "
        f"{query._event_id_matcher.render('EventId')}, "
        f"{query._message_matcher.render('str')}, "
        f"{query._exception_matcher.render()})"
    )

    return CompiledQuery(
        level=query._level_matcher,
        event_id=query._event_id_matcher,
        message=query._message_matcher,
        exception=query._exception_matcher,
        expression=expression,
    )


########################################################################
# LogInvocationQuery class
########################################################################
class LogInvocationQuery:
    """Query for verifying the arguments of TestingLogger.log calls."""

    ####################################################################
    # __init__
    ####################################################################
    def __init__(self) -> None:
        """Initialize the query to match any log call."""
        self._level_matcher: FieldMatcher = AnyValue()
        self._event_id_matcher: FieldMatcher = AnyValue()
        self._message_matcher: FieldMatcher = AnyValue()
        self._exception_matcher: ExceptionMatcher = AnyException()

    ####################################################################
    # __repr__
    ####################################################################
    def __repr__(self) -> str:
        return f"LogInvocationQuery({self.describe()!r})"

    ####################################################################
    # level
    ####################################################################
    def at_trace(self) -> "LogInvocationQuery":
        """Verify the log was made at TRACE level."""
        return self.at_log_level(LogLevel.TRACE)

    def at_debug(self) -> "LogInvocationQuery":
        """Verify the log was made at DEBUG level."""
        return self.at_log_level(LogLevel.DEBUG)

    def at_information(self) -> "LogInvocationQuery":
        """Verify the log was made at INFORMATION level."""
        return self.at_log_level(LogLevel.INFORMATION)

    def at_warning(self) -> "LogInvocationQuery":
        """Verify the log was made at WARNING level."""
        return self.at_log_level(LogLevel.WARNING)

    def at_error(self) -> "LogInvocationQuery":
        """Verify the log was made at ERROR level."""
        return self.at_log_level(LogLevel.ERROR)

    def at_critical(self) -> "LogInvocationQuery":
        """Verify the log was made at CRITICAL level."""
        return self.at_log_level(LogLevel.CRITICAL)

    def at_log_level(self, level: LevelArg) -> "LogInvocationQuery":
        """Verify the level of the log.

        Args:
            level: the expected LogLevel, a predicate that is called
                with the logged level, or None to match any level

        Returns:
            this query

        Raises:
            InvalidMatchValue: level is not a LogLevel, an int value of
                one, a callable, or None

        """
        if level is None:
            self._level_matcher = AnyValue()
        elif isinstance(level, int) and not isinstance(level, bool):
            try:
                self._level_matcher = ExactValue(LogLevel(level))
            except ValueError as exc:
                err_msg = f"level {level!r} is not a LogLevel value"
                logger.debug(err_msg)
                raise InvalidMatchValue(err_msg) from exc
        elif callable(level):
            self._level_matcher = PredicateValue(level)
        else:
            self._raise_invalid("level", level)
        return self

    ####################################################################
    # event id
    ####################################################################
    def with_event_id(self, event_id: EventIdArg) -> "LogInvocationQuery":
        """Verify the event id of the log.

        Event ids are compared by id; the name is not compared. Use a
        predicate to match on the name.

        Args:
            event_id: the expected EventId or int id, a predicate that
                is called with the logged EventId, or None to match any
                event id

        Returns:
            this query

        Raises:
            InvalidMatchValue: event_id is not an EventId, an int, a
                callable, or None

        """
        if event_id is None:
            self._event_id_matcher = AnyValue()
        elif isinstance(event_id, EventId) or (
            isinstance(event_id, int) and not isinstance(event_id, bool)
        ):
            self._event_id_matcher = ExactValue(EventId.coerce(event_id))
        elif callable(event_id):
            self._event_id_matcher = PredicateValue(event_id)
        else:
            self._raise_invalid("event_id", event_id)
        return self

    ####################################################################
    # message
    ####################################################################
    def with_message(self, message: MessageArg) -> "LogInvocationQuery":
        """Verify the message of the log.

        Args:
            message: the expected message, a predicate that is called
                with the logged message, or None to match any message

        Returns:
            this query

        Raises:
            InvalidMatchValue: message is not a str, a callable, or None

        """
        if message is None:
            self._message_matcher = AnyValue()
        elif isinstance(message, str):
            self._message_matcher = ExactValue(message)
        elif callable(message):
            self._message_matcher = PredicateValue(message)
        else:
            self._raise_invalid("message", message)
        return self

    def with_message_regex(self, message_regex: PatternArg) -> "LogInvocationQuery":
        """Verify the message of the log with a regular expression.

        Args:
            message_regex: pattern that must match the whole message, or
                None to match any message

        Returns:
            this query

        Raises:
            InvalidMatchValue: message_regex is not a str, a compiled
                pattern, or None, or it is not a valid regular
                expression

        """
        if message_regex is None:
            self._message_matcher = AnyValue()
        elif isinstance(message_regex, (str, re.Pattern)):
            try:
                self._message_matcher = RegexValue(message_regex)
            except re.error as exc:
                err_msg = f"message_regex {message_regex!r} is not valid: {exc}"
                logger.debug(err_msg)
                raise InvalidMatchValue(err_msg) from exc
        else:
            self._raise_invalid("message_regex", message_regex)
        return self

    ####################################################################
    # exception
    ####################################################################
    def without_exception(self) -> "LogInvocationQuery":
        """Verify the log was made without an exception."""
        self._exception_matcher = NoException()
        return self

    def with_exception(
        self,
        exception_type: OptExcType = None,
        message: Optional[str] = None,
        message_regex: PatternArg = None,
    ) -> "LogInvocationQuery":
        """Verify the log was made with an exception.

        Args:
            exception_type: class the exception must be an instance of,
                Exception when not specified
            message: the exact str() of the exception
            message_regex: pattern that must be found in the str() of
                the exception; ignored when message is specified

        Returns:
            this query

        Raises:
            InvalidExceptionType: exception_type is not a subclass of
                Exception
            InvalidMatchValue: message_regex is not a str or a compiled
                pattern, or it is not a valid regular expression

        """
        if message is not None:
            self._exception_matcher = ExceptionWithMessage(exception_type, message)
        elif message_regex is not None:
            if not isinstance(message_regex, (str, re.Pattern)):
                self._raise_invalid("message_regex", message_regex)
            try:
                self._exception_matcher = ExceptionMessageRegex(
                    exception_type, message_regex
                )
            except re.error as exc:
                err_msg = f"message_regex {message_regex!r} is not valid: {exc}"
                logger.debug(err_msg)
                raise InvalidMatchValue(err_msg) from exc
        else:
            self._exception_matcher = ExceptionOfType(exception_type)
        return self

    def with_exception_message(
        self, message: str, exception_type: OptExcType = None
    ) -> "LogInvocationQuery":
        """Verify the log was made with an exception with a message.

        Args:
            message: the exact str() of the exception
            exception_type: class the exception must be an instance of,
                Exception when not specified

        Returns:
            this query

        Raises:
            ExceptionMessageIsNone: message is None
            InvalidExceptionType: exception_type is not a subclass of
                Exception

        """
        self._exception_matcher = ExceptionWithMessage(exception_type, message)
        return self

    def with_exception_matching(
        self,
        predicate: Optional[Callable[[Any], Any]],
        exception_type: OptExcType = None,
    ) -> "LogInvocationQuery":
        """Verify the log was made with an exception a predicate accepts.

        Args:
            predicate: called with the logged exception when it is not
                None and is an instance of exception_type; None matches
                any exception or no exception
            exception_type: class the exception must be an instance of,
                Exception when not specified

        Returns:
            this query

        Raises:
            InvalidExceptionType: exception_type is not a subclass of
                Exception
            InvalidMatchValue: predicate is not callable

        """
        if predicate is None:
            validate_exception_type(exception_type)
            self._exception_matcher = AnyException()
        elif callable(predicate):
            self._exception_matcher = ExceptionPredicate(exception_type, predicate)
        else:
            self._raise_invalid("predicate", predicate)
        return self

    ####################################################################
    # describe
    ####################################################################
    def describe(self) -> str:
        """Return the expression that verify searches for."""
        return compile_query(self).expression

    ####################################################################
    # verify
    ####################################################################
    def verify(
        self,
        mock_logger: "MockLogger",
        times: Optional[Times] = None,
        fail_message: Optional[str] = None,
    ) -> None:
        """Verify the log invocations recorded by a mock logger.

        Args:
            mock_logger: the mock logger whose invocations are checked
            times: number of matching invocations expected, at least
                once when not specified
            fail_message: text placed at the start of the failure
                message

        Raises:
            LogVerificationFailed: the number of matching invocations
                does not satisfy times

        """
        if times is None:
            times = Times.at_least_once()

        compiled = compile_query(self)
        invocations = mock_logger.invocations  # one snapshot per verify
        match_count = sum(1 for invocation in invocations if compiled.matches(invocation))

        logger.debug(
            f"verify: {compiled.expression} matched {match_count} of "
            f"{len(invocations)} invocations, expected {times}"
        )

        if times.verify(match_count):
            return

        if match_count == 0:
            performed = "never performed"
        elif match_count == 1:
            performed = "1 time"
        else:
            performed = f"{match_count} times"

        err_msg = (
            f"Expected invocation on the mock {times}, but was {performed}: "
            f"{compiled.expression}\n\n"
            "Performed invocations:\n\n"
            f"{format_invocations(invocations)}"
        )
        if fail_message:
            err_msg = f"{fail_message}\n{err_msg}"

        raise LogVerificationFailed(
            err_msg,
            expression=compiled.expression,
            expected=times,
            actual_count=match_count,
        )

    ####################################################################
    # _raise_invalid
    ####################################################################
    @staticmethod
    def _raise_invalid(arg_name: str, value: Any) -> None:
        """Raise InvalidMatchValue for an argument of the wrong kind."""
        err_msg = f"{arg_name} {value!r} of type {type(value).__name__} can not be matched"
        logger.debug(err_msg)
        raise InvalidMatchValue(err_msg)
