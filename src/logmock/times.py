"""Module times.

=====
Times
=====

The Times class states how many times a log invocation is expected to
have been performed. It is passed to the verify methods of
LogInvocationQuery and MockLogger.

:Example: check counts against a few constraints

>>> from logmock.times import Times
>>> Times.at_least_once().verify(3)
True
>>> Times.never().verify(1)
False
>>> Times.between(1, 3, inclusive=False).verify(3)
False
>>> print(Times.exactly(2))
exactly 2 times


The times module contains:

    1) Times class with factory methods:

       a. at_least_once
       b. at_least
       c. at_most
       d. at_most_once
       e. between
       f. exactly
       g. once
       h. never

"""

########################################################################
# Standard Library
########################################################################
from dataclasses import dataclass
from enum import Enum, auto
import logging
import sys

########################################################################
# Third Party
########################################################################

########################################################################
# Local
########################################################################

logger = logging.getLogger(__name__)


########################################################################
# Times Exceptions classes
########################################################################
class TimesError(Exception):
    """Base class for exception in this module."""

    pass


class InvalidTimesArg(TimesError):
    """A call count was negative or the range was inverted."""

    pass


class TimesKind(Enum):
    AtLeast = auto()
    AtLeastOnce = auto()
    AtMost = auto()
    AtMostOnce = auto()
    BetweenExclusive = auto()
    BetweenInclusive = auto()
    Exactly = auto()
    Once = auto()
    Never = auto()


########################################################################
# Times class
########################################################################
@dataclass(frozen=True)
class Times:
    """Expected number of matching log invocations."""

    kind: TimesKind
    from_count: int
    to_count: int

    ####################################################################
    # _check_count
    ####################################################################
    @staticmethod
    def _check_count(name: str, count: int, minimum: int) -> None:
        """Raise InvalidTimesArg when count is below minimum.

        Args:
            name: name of the argument being checked
            count: the value specified for the argument
            minimum: lowest value allowed

        Raises:
            InvalidTimesArg: count is less than minimum

        """
        if count < minimum:
            err_msg = f"{name} must be {minimum} or greater, got {count}"
            logger.debug(err_msg)
            raise InvalidTimesArg(err_msg)

    ####################################################################
    # factory methods
    ####################################################################
    @classmethod
    def at_least(cls, call_count: int) -> "Times":
        """Expect call_count or more invocations."""
        cls._check_count("call_count", call_count, 1)
        return cls(TimesKind.AtLeast, call_count, sys.maxsize)

    @classmethod
    def at_least_once(cls) -> "Times":
        """Expect one or more invocations."""
        return cls(TimesKind.AtLeastOnce, 1, sys.maxsize)

    @classmethod
    def at_most(cls, call_count: int) -> "Times":
        """Expect call_count or fewer invocations."""
        cls._check_count("call_count", call_count, 0)
        return cls(TimesKind.AtMost, 0, call_count)

    @classmethod
    def at_most_once(cls) -> "Times":
        """Expect zero or one invocation."""
        return cls(TimesKind.AtMostOnce, 0, 1)

    @classmethod
    def between(
        cls, call_count_from: int, call_count_to: int, inclusive: bool = True
    ) -> "Times":
        """Expect a number of invocations within a range.

        Args:
            call_count_from: low end of the range
            call_count_to: high end of the range
            inclusive: if True, the range includes both ends,
                otherwise only the counts strictly between them

        Returns:
            the Times for the range

        Raises:
            InvalidTimesArg: the low end is negative (zero or negative
                for an exclusive range) or the high end is below the
                low end (less than 2 above it for an exclusive range,
                which would leave no count strictly between them)

        """
        if inclusive:
            cls._check_count("call_count_from", call_count_from, 0)
            cls._check_count("call_count_to", call_count_to, call_count_from)
            return cls(TimesKind.BetweenInclusive, call_count_from, call_count_to)

        cls._check_count("call_count_from", call_count_from, 1)
        cls._check_count("call_count_to", call_count_to, call_count_from + 2)
        return cls(TimesKind.BetweenExclusive, call_count_from + 1, call_count_to - 1)

    @classmethod
    def exactly(cls, call_count: int) -> "Times":
        """Expect exactly call_count invocations."""
        cls._check_count("call_count", call_count, 0)
        return cls(TimesKind.Exactly, call_count, call_count)

    @classmethod
    def once(cls) -> "Times":
        """Expect exactly one invocation."""
        return cls(TimesKind.Once, 1, 1)

    @classmethod
    def never(cls) -> "Times":
        """Expect no invocations."""
        return cls(TimesKind.Never, 0, 0)

    ####################################################################
    # verify
    ####################################################################
    def verify(self, call_count: int) -> bool:
        """Return True if call_count satisfies this constraint.

        Args:
            call_count: number of matching invocations found

        Returns:
            True if call_count is within range, False if not

        """
        return self.from_count <= call_count <= self.to_count

    ####################################################################
    # __str__
    ####################################################################
    def __str__(self) -> str:
        """Return the phrase used in verification failure messages."""
        if self.kind == TimesKind.AtLeast:
            return f"at least {self.from_count} times"
        if self.kind == TimesKind.AtLeastOnce:
            return "at least once"
        if self.kind == TimesKind.AtMost:
            return f"at most {self.to_count} times"
        if self.kind == TimesKind.AtMostOnce:
            return "at most once"
        if self.kind == TimesKind.BetweenExclusive:
            return (
                f"between {self.from_count - 1} and {self.to_count + 1} "
                "times (Exclusive)"
            )
        if self.kind == TimesKind.BetweenInclusive:
            return f"between {self.from_count} and {self.to_count} times (Inclusive)"
        if self.kind == TimesKind.Once:
            return "once"
        if self.kind == TimesKind.Never:
            return "should never have been performed"
        return f"exactly {self.to_count} times"
