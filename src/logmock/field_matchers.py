"""Module field_matchers.

==============
field_matchers
==============

A field matcher decides whether one field of a LogInvocation (the level,
the event id, or the message) is a match, and renders itself for the
diagnostic expression shown when verification fails. Four kinds exist:

    1) AnyValue: any value matches, rendered as ``any(<type>)``
    2) ExactValue: the value must equal a given value, rendered as the
       value itself
    3) RegexValue: the value must be a string fully matched by a regular
       expression, rendered as ``regex('<pattern>')``
    4) PredicateValue: a callable decides, rendered as
       ``is_(<type>, <callable>)``

:Example: match messages against a pattern

>>> from logmock.field_matchers import RegexValue
>>> matcher = RegexValue('Hello, [a-z]+!')
>>> matcher.matches('Hello, world!')
True
>>> matcher.matches('Oh, Hello, world!')
False
>>> print(matcher.render('str'))
regex('Hello, [a-z]+!')


The field_matchers module contains:

    1) FieldMatcher abstract class
    2) AnyValue, ExactValue, RegexValue and PredicateValue classes
    3) render_value function
    4) describe_callable function

"""

########################################################################
# Standard Library
########################################################################
from abc import ABC, abstractmethod
from enum import Enum
import inspect
import logging
import re
import tokenize
from typing import Any, Callable, Union

########################################################################
# Third Party
########################################################################

########################################################################
# Local
########################################################################

logger = logging.getLogger(__name__)


########################################################################
# render_value
########################################################################
def render_value(value: Any) -> str:
    """Return the text used for a literal value in an expression.

    Args:
        value: the value to render

    Returns:
        ``EnumName.MEMBER`` for enum members, otherwise repr(value)

    """
    if isinstance(value, Enum):
        return f"{type(value).__name__}.{value.name}"
    return repr(value)


########################################################################
# describe_callable
########################################################################
def describe_callable(func: Callable[..., Any]) -> str:
    """Return a readable description of a predicate.

    Named functions are described by their qualified name. For a lambda,
    the lambda text is taken from its source line when it is the only
    lambda on that line; otherwise ``<lambda>`` is returned.

    Args:
        func: the callable to describe

    Returns:
        the description

    """
    name = getattr(func, "__name__", None)
    if name != "<lambda>":
        return getattr(func, "__qualname__", None) or repr(func)

    try:
        source = inspect.getsource(func)
    except (OSError, TypeError, SyntaxError, tokenize.TokenError):
        return "<lambda>"

    if source.count("lambda") != 1:
        return "<lambda>"

    text = source[source.index("lambda") :]
    colon_idx = text.find(":")
    if colon_idx == -1:
        return "<lambda>"

    # the lambda body ends at the first unbalanced closing bracket or at
    # the first comma outside of any brackets
    depth = 0
    end_idx = len(text)
    for idx in range(colon_idx, len(text)):
        char = text[idx]
        if char in "([{":
            depth += 1
        elif char in ")]}":
            if depth == 0:
                end_idx = idx
                break
            depth -= 1
        elif char == "," and depth == 0:
            end_idx = idx
            break

    return " ".join(text[:end_idx].split())


########################################################################
# FieldMatcher
########################################################################
class FieldMatcher(ABC):
    """Matching strategy for one field of a log invocation."""

    @abstractmethod
    def matches(self, value: Any) -> bool:
        """Return True if value is a match."""

    @abstractmethod
    def render(self, type_name: str) -> str:
        """Return the text for this matcher in a verify expression."""


class AnyValue(FieldMatcher):
    """Matches any value."""

    def matches(self, value: Any) -> bool:
        return True

    def render(self, type_name: str) -> str:
        return f"any({type_name})"

    def __repr__(self) -> str:
        return "AnyValue()"


class ExactValue(FieldMatcher):
    """Matches values equal to a given value."""

    def __init__(self, value: Any) -> None:
        self.value = value

    def matches(self, value: Any) -> bool:
        return bool(value == self.value)

    def render(self, type_name: str) -> str:
        return render_value(self.value)

    def __repr__(self) -> str:
        return f"ExactValue({self.value!r})"


class RegexValue(FieldMatcher):
    """Matches strings that a regular expression fully matches."""

    def __init__(self, pattern: Union[str, "re.Pattern[str]"]) -> None:
        self.pattern = re.compile(pattern)

    def matches(self, value: Any) -> bool:
        if not isinstance(value, str):
            return False
        return self.pattern.fullmatch(value) is not None

    def render(self, type_name: str) -> str:
        return f"regex({self.pattern.pattern!r})"

    def __repr__(self) -> str:
        return f"RegexValue({self.pattern.pattern!r})"


class PredicateValue(FieldMatcher):
    """Matches values for which a predicate returns a true value."""

    def __init__(self, predicate: Callable[[Any], Any]) -> None:
        self.predicate = predicate

    def matches(self, value: Any) -> bool:
        return bool(self.predicate(value))

    def render(self, type_name: str) -> str:
        return f"is_({type_name}, {describe_callable(self.predicate)})"

    def __repr__(self) -> str:
        return f"PredicateValue({describe_callable(self.predicate)})"
