"""Module exception_matchers.

==================
exception_matchers
==================

The exception matchers decide whether the exception passed to a log
call is a match. Each one carries an exception type, which defaults to
Exception. Only an exception that is not None and is an instance of
that type can be matched by the matchers that expect an exception.

=====================  ===============================================
matcher                matches
=====================  ===============================================
AnyException           anything, including no exception
NoException            only a log call made without an exception
ExceptionOfType        any exception of the type
ExceptionWithMessage   exceptions of the type whose str() equals a
                       message
ExceptionMessageRegex  exceptions of the type whose str() contains a
                       match for a regular expression
ExceptionPredicate     exceptions of the type for which a predicate
                       returns a true value
=====================  ===============================================

:Example: match a ValueError with a specific message

>>> from logmock.exception_matchers import ExceptionWithMessage
>>> matcher = ExceptionWithMessage(ValueError, 'bad value')
>>> matcher.matches(ValueError('bad value'))
True
>>> matcher.matches(KeyError('bad value'))
False
>>> matcher.matches(None)
False
>>> print(matcher.render())
is_(ValueError, lambda ex: ex is not None and str(ex) == 'bad value')

"""

########################################################################
# Standard Library
########################################################################
from abc import ABC, abstractmethod
import logging
import re
from typing import Any, Callable, Optional, Type, Union

########################################################################
# Third Party
########################################################################

########################################################################
# Local
########################################################################
from logmock.field_matchers import describe_callable

logger = logging.getLogger(__name__)

########################################################################
# type aliases
########################################################################
ExcType = Type[Exception]
OptExcType = Optional[ExcType]


########################################################################
# ExceptionMatcher Exceptions classes
########################################################################
class ExceptionMatcherError(Exception):
    """Base class for exception in this module."""

    pass


class InvalidExceptionType(ExceptionMatcherError):
    """The exception type is not Exception or a subclass of it."""

    pass


class ExceptionMessageIsNone(ExceptionMatcherError):
    """An exception message of None was specified."""

    pass


########################################################################
# validate_exception_type
########################################################################
def validate_exception_type(exception_type: Any) -> ExcType:
    """Return the exception type to match, defaulting to Exception.

    Args:
        exception_type: None, Exception, or a subclass of Exception

    Returns:
        Exception when exception_type is None, otherwise exception_type

    Raises:
        InvalidExceptionType: exception_type is not a subclass of
            Exception

    """
    if exception_type is None:
        return Exception

    if not (isinstance(exception_type, type) and issubclass(exception_type, Exception)):
        err_msg = (
            f"exception_type {exception_type!r} must be Exception or a "
            "subclass of Exception"
        )
        logger.debug(err_msg)
        raise InvalidExceptionType(err_msg)

    return exception_type


########################################################################
# ExceptionMatcher
########################################################################
class ExceptionMatcher(ABC):
    """Matching strategy for the exception of a log invocation."""

    def __init__(self, exception_type: OptExcType = None) -> None:
        self.exception_type = validate_exception_type(exception_type)

    def is_candidate(self, exception: Optional[BaseException]) -> bool:
        """Return True if exception is not None and of the type."""
        return exception is not None and isinstance(exception, self.exception_type)

    @abstractmethod
    def matches(self, exception: Optional[BaseException]) -> bool:
        """Return True if exception is a match."""

    @abstractmethod
    def render(self) -> str:
        """Return the text for this matcher in a verify expression."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.render()})"


class AnyException(ExceptionMatcher):
    """Matches whether or not there is an exception."""

    def matches(self, exception: Optional[BaseException]) -> bool:
        return True

    def render(self) -> str:
        return f"any({self.exception_type.__name__})"


class NoException(ExceptionMatcher):
    """Matches only a log call made without an exception."""

    def matches(self, exception: Optional[BaseException]) -> bool:
        return exception is None

    def render(self) -> str:
        return "None"


class ExceptionOfType(ExceptionMatcher):
    """Matches any exception that is an instance of the type."""

    def matches(self, exception: Optional[BaseException]) -> bool:
        return self.is_candidate(exception)

    def render(self) -> str:
        return f"not_none({self.exception_type.__name__})"


class ExceptionWithMessage(ExceptionMatcher):
    """Matches exceptions of the type with an exact message."""

    def __init__(self, exception_type: OptExcType, message: str) -> None:
        super().__init__(exception_type)
        if message is None:
            err_msg = "message must not be None"
            logger.debug(err_msg)
            raise ExceptionMessageIsNone(err_msg)
        self.message = message

    def matches(self, exception: Optional[BaseException]) -> bool:
        return self.is_candidate(exception) and str(exception) == self.message

    def render(self) -> str:
        return (
            f"is_({self.exception_type.__name__}, lambda ex: ex is not None "
            f"and str(ex) == {self.message!r})"
        )


class ExceptionMessageRegex(ExceptionMatcher):
    """Matches exceptions of the type whose message contains a match."""

    def __init__(
        self, exception_type: OptExcType, message_regex: Union[str, "re.Pattern[str]"]
    ) -> None:
        super().__init__(exception_type)
        self.message_regex = re.compile(message_regex)

    def matches(self, exception: Optional[BaseException]) -> bool:
        return (
            self.is_candidate(exception)
            and self.message_regex.search(str(exception)) is not None
        )

    def render(self) -> str:
        return (
            f"is_({self.exception_type.__name__}, lambda ex: ex is not None "
            f"and re.search({self.message_regex.pattern!r}, str(ex)))"
        )


class ExceptionPredicate(ExceptionMatcher):
    """Matches exceptions of the type accepted by a predicate.

    The predicate is only called with an exception that is not None and
    is an instance of the type.
    """

    def __init__(
        self, exception_type: OptExcType, predicate: Callable[[Any], Any]
    ) -> None:
        super().__init__(exception_type)
        self.predicate = predicate

    def matches(self, exception: Optional[BaseException]) -> bool:
        if not self.is_candidate(exception):
            return False
        return bool(self.predicate(exception))

    def render(self) -> str:
        return (
            f"is_({self.exception_type.__name__}, "
            f"{describe_callable(self.predicate)})"
        )
