"""test_exception_matchers.py module."""

########################################################################
# Standard Library
########################################################################
import logging
from typing import Any, Optional

########################################################################
# Third Party
########################################################################
import pytest

########################################################################
# Local
########################################################################
from logmock.exception_matchers import (
    AnyException,
    ExceptionMessageIsNone,
    ExceptionMessageRegex,
    ExceptionOfType,
    ExceptionPredicate,
    ExceptionWithMessage,
    InvalidExceptionType,
    NoException,
    validate_exception_type,
)

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Exception used by the tests."""

    pass


exception_list = [
    None,
    Exception("base"),
    ValueError("bad value"),
    KeyError("user"),
    AppError("app failed"),
]


########################################################################
# TestValidateExceptionType class
########################################################################
class TestValidateExceptionType:
    """Test validate_exception_type."""

    def test_validate_exception_type(self) -> None:
        """Test valid exception types."""
        assert validate_exception_type(None) is Exception
        assert validate_exception_type(Exception) is Exception
        assert validate_exception_type(AppError) is AppError

    @pytest.mark.parametrize(  # type: ignore
        "bad_type", [int, BaseException, KeyboardInterrupt, ValueError("x"), "ValueError"]
    )
    def test_validate_exception_type_invalid(self, bad_type: Any) -> None:
        """Test types that are not Exception subclasses are rejected.

        Args:
            bad_type: the invalid type

        """
        with pytest.raises(InvalidExceptionType, match="must be Exception or a subclass"):
            validate_exception_type(bad_type)
        with pytest.raises(InvalidExceptionType):
            ExceptionOfType(bad_type)


########################################################################
# TestExceptionMatchers class
########################################################################
class TestExceptionMatchers:
    """Test the exception matcher classes."""

    @pytest.mark.parametrize("exception", exception_list)  # type: ignore
    def test_any_exception(self, exception: Optional[Exception]) -> None:
        """Test AnyException matches with or without an exception.

        Args:
            exception: the logged exception

        """
        assert AnyException().matches(exception)
        assert AnyException().render() == "any(Exception)"
        assert AnyException(ValueError).render() == "any(ValueError)"

    @pytest.mark.parametrize("exception", exception_list)  # type: ignore
    def test_no_exception(self, exception: Optional[Exception]) -> None:
        """Test NoException only matches None.

        Args:
            exception: the logged exception

        """
        assert NoException().matches(exception) == (exception is None)
        assert NoException().render() == "None"

    @pytest.mark.parametrize("exception", exception_list)  # type: ignore
    def test_exception_of_type(self, exception: Optional[Exception]) -> None:
        """Test ExceptionOfType checks the type.

        Args:
            exception: the logged exception

        """
        assert ExceptionOfType().matches(exception) == (exception is not None)
        assert ExceptionOfType(LookupError).matches(exception) == isinstance(
            exception, KeyError
        )
        assert ExceptionOfType(LookupError).render() == "not_none(LookupError)"
        assert repr(ExceptionOfType()) == "ExceptionOfType(not_none(Exception))"

    def test_exception_with_message(self) -> None:
        """Test ExceptionWithMessage compares str of the exception."""
        matcher = ExceptionWithMessage(None, "bad value")
        assert matcher.matches(ValueError("bad value"))
        assert matcher.matches(AppError("bad value"))
        assert not matcher.matches(ValueError("bad values"))
        assert not matcher.matches(None)
        assert matcher.render() == (
            "is_(Exception, lambda ex: ex is not None and str(ex) == 'bad value')"
        )

        # str of a KeyError quotes its argument
        matcher = ExceptionWithMessage(KeyError, "'user'")
        assert matcher.matches(KeyError("user"))
        assert not matcher.matches(KeyError("other"))
        assert not matcher.matches(ValueError("'user'"))

    def test_exception_with_message_none(self) -> None:
        """Test a message of None is rejected."""
        with pytest.raises(ExceptionMessageIsNone, match="message must not be None"):
            ExceptionWithMessage(ValueError, None)  # type: ignore[arg-type]

    def test_exception_message_regex(self) -> None:
        """Test ExceptionMessageRegex searches str of the exception."""
        matcher = ExceptionMessageRegex(AppError, "fail(ed)?")
        assert matcher.matches(AppError("app failed"))
        assert matcher.matches(AppError("fail"))
        assert not matcher.matches(AppError("success"))
        assert not matcher.matches(ValueError("app failed"))
        assert not matcher.matches(None)
        assert matcher.render() == (
            "is_(AppError, lambda ex: ex is not None and "
            "re.search('fail(ed)?', str(ex)))"
        )

    def test_exception_predicate(self) -> None:
        """Test ExceptionPredicate only calls the predicate for candidates."""
        seen = []

        def has_args(exception: Exception) -> bool:
            seen.append(exception)
            return bool(exception.args)

        matcher = ExceptionPredicate(ValueError, has_args)
        error = ValueError("bad")
        assert matcher.matches(error)
        assert not matcher.matches(ValueError())
        assert not matcher.matches(None)
        assert not matcher.matches(KeyError("bad"))
        assert len(seen) == 2
        assert seen[0] is error
        assert matcher.render() == (
            "is_(ValueError, "
            "TestExceptionMatchers.test_exception_predicate.<locals>.has_args)"
        )

        matcher = ExceptionPredicate(None, lambda ex: "bad" in str(ex))
        assert matcher.matches(KeyError("bad key"))
        assert matcher.render() == "is_(Exception, lambda ex: \"bad\" in str(ex))"
