"""test_testing_logger.py module."""

########################################################################
# Standard Library
########################################################################
import logging
from typing import Any, Optional, cast
from unittest import mock

########################################################################
# Third Party
########################################################################
import pytest

########################################################################
# Local
########################################################################
from logmock.log_invocation import EventId, LogLevel
from logmock.testing_logger import (
    MockLogHandler,
    ScopeCompletion,
    TestingLogger,
    category_name_of,
)

logger = logging.getLogger(__name__)

########################################################################
# log_level fixture
########################################################################
log_level_list = list(LogLevel)


@pytest.fixture(params=log_level_list)  # type: ignore
def log_level(request: Any) -> LogLevel:
    """Using different log levels.

    Args:
        request: special fixture that returns the fixture params

    Returns:
        The params values are returned one at a time
    """
    return cast(LogLevel, request.param)


class MyState:
    """State object passed to log_state."""

    pass


########################################################################
# testing_logger fixture
########################################################################
@pytest.fixture
def testing_logger() -> TestingLogger:
    """Return a TestingLogger whose log method is a mock.

    Returns:
        the testing logger
    """
    new_logger = TestingLogger()
    new_logger.log = mock.MagicMock(name="log")  # type: ignore[method-assign]
    return new_logger


########################################################################
# TestTestingLogger class
########################################################################
class TestTestingLogger:
    """Test TestingLogger."""

    def test_testing_logger_defaults(self) -> None:
        """Test the default log level and category."""
        new_logger = TestingLogger()
        assert new_logger.log_level is LogLevel.TRACE
        assert new_logger.category_name is None
        assert new_logger.scope_completions == []
        assert repr(new_logger) == "TestingLogger(log_level=LogLevel.TRACE)"
        assert new_logger.log(LogLevel.ERROR, EventId(), "nothing happens") is None

    def test_testing_logger_category(self) -> None:
        """Test the category given as a string or a class."""
        new_logger = TestingLogger(LogLevel.WARNING, category="app.db")
        assert new_logger.category_name == "app.db"
        assert repr(new_logger) == (
            "TestingLogger(log_level=LogLevel.WARNING, category='app.db')"
        )

        new_logger = TestingLogger(category=MyState)
        assert new_logger.category_name == f"{__name__}.MyState"
        assert category_name_of(None) is None

    def test_testing_logger_is_enabled(self, log_level: LogLevel) -> None:
        """Test is_enabled compares with the log level.

        Args:
            log_level: the log level of the logger

        """
        new_logger = TestingLogger(log_level)
        assert new_logger.log_level is log_level
        for level in LogLevel:
            assert new_logger.is_enabled(level) == (level >= log_level)

    def test_testing_logger_level_methods(self, testing_logger: TestingLogger) -> None:
        """Test each level method calls log.

        Args:
            testing_logger: logger with a mock log method

        """
        error = ValueError("bad")
        testing_logger.log_trace("trace %s", "message")
        testing_logger.log_debug("debug", event_id=1)
        testing_logger.log_information("information", event_id=EventId(2, "Two"))
        testing_logger.log_warning("%d%%", 50)
        testing_logger.log_error("error", exception=error)
        testing_logger.log_critical("critical %(name)s", {"name": "x"})

        assert cast(mock.MagicMock, testing_logger.log).call_args_list == [
            mock.call(LogLevel.TRACE, EventId(0), "trace message", None),
            mock.call(LogLevel.DEBUG, EventId(1), "debug", None),
            mock.call(LogLevel.INFORMATION, EventId(2), "information", None),
            mock.call(LogLevel.WARNING, EventId(0), "50%", None),
            mock.call(LogLevel.ERROR, EventId(0), "error", error),
            mock.call(LogLevel.CRITICAL, EventId(0), "critical x", None),
        ]

    def test_testing_logger_message_without_args(
        self, testing_logger: TestingLogger
    ) -> None:
        """Test a message without args is not formatted.

        Args:
            testing_logger: logger with a mock log method

        """
        testing_logger.log_information("100% done")
        cast(mock.MagicMock, testing_logger.log).assert_called_once_with(
            LogLevel.INFORMATION, EventId(0), "100% done", None
        )

    def test_testing_logger_log_state(self, testing_logger: TestingLogger) -> None:
        """Test log_state formats the state with the formatter.

        Args:
            testing_logger: logger with a mock log method

        """
        state = MyState()
        exception = RuntimeError("My exception message")
        captured: list[tuple[MyState, Optional[BaseException]]] = []

        def formatter(fmt_state: MyState, fmt_exc: Optional[BaseException]) -> str:
            captured.append((fmt_state, fmt_exc))
            return "My formatted message"

        testing_logger.log_state(LogLevel.INFORMATION, 123, state, exception, formatter)

        cast(mock.MagicMock, testing_logger.log).assert_called_once_with(
            LogLevel.INFORMATION, EventId(123), "My formatted message", exception
        )
        assert captured == [(state, exception)]

    def test_testing_logger_begin_scope(self) -> None:
        """Test begin_scope returns the object of a new scope completion."""
        new_logger = TestingLogger()
        scope = new_logger.begin_scope("request 42")

        assert len(new_logger.scope_completions) == 1
        scope_completion = new_logger.scope_completions[0]
        assert isinstance(scope_completion, ScopeCompletion)
        assert scope is scope_completion.object
        assert scope_completion.state == "request 42"
        assert repr(scope_completion) == "ScopeCompletion(state='request 42')"
        assert not scope_completion.is_completed

        with scope:
            pass
        assert scope_completion.is_completed

        second = new_logger.begin_scope({"user": "x"})
        assert not new_logger.scope_completions[1].is_completed
        second.close()
        assert new_logger.scope_completions[1].is_completed


########################################################################
# TestMockLogHandler class
########################################################################
class TestMockLogHandler:
    """Test MockLogHandler."""

    @pytest.fixture
    def handled_logger(self, testing_logger: TestingLogger) -> Any:
        """Return a standard library logger with a MockLogHandler.

        Args:
            testing_logger: logger with a mock log method

        Yields:
            the standard library logger
        """
        std_logger = logging.getLogger("test_mock_log_handler")
        handler = MockLogHandler(testing_logger)
        saved_level = std_logger.level
        std_logger.addHandler(handler)
        std_logger.setLevel(1)
        yield std_logger
        std_logger.removeHandler(handler)
        std_logger.setLevel(saved_level)

    def test_mock_log_handler_levels(
        self, testing_logger: TestingLogger, handled_logger: logging.Logger
    ) -> None:
        """Test records are forwarded with their mapped level.

        Args:
            testing_logger: logger with a mock log method
            handled_logger: standard library logger with the handler

        """
        handled_logger.log(5, "trace")
        handled_logger.debug("debug")
        handled_logger.info("info %s", "formatted")
        handled_logger.warning("warning", extra={"event_id": 7})
        handled_logger.error("error", extra={"event_id": EventId(8, "Eight")})
        handled_logger.critical("critical")

        calls = cast(mock.MagicMock, testing_logger.log).call_args_list
        assert calls == [
            mock.call(LogLevel.TRACE, EventId(0), "trace", None),
            mock.call(LogLevel.DEBUG, EventId(0), "debug", None),
            mock.call(LogLevel.INFORMATION, EventId(0), "info formatted", None),
            mock.call(LogLevel.WARNING, EventId(7), "warning", None),
            mock.call(LogLevel.ERROR, EventId(8), "error", None),
            mock.call(LogLevel.CRITICAL, EventId(0), "critical", None),
        ]
        assert str(calls[4].args[1]) == "Eight"

    def test_mock_log_handler_exception(
        self, testing_logger: TestingLogger, handled_logger: logging.Logger
    ) -> None:
        """Test the exception of exc_info is forwarded.

        Args:
            testing_logger: logger with a mock log method
            handled_logger: standard library logger with the handler

        """
        error = KeyError("user")
        try:
            raise error
        except KeyError:
            handled_logger.exception("lookup failed")

        cast(mock.MagicMock, testing_logger.log).assert_called_once_with(
            LogLevel.ERROR, EventId(0), "lookup failed", error
        )

    def test_mock_log_handler_bad_event_id(
        self, testing_logger: TestingLogger, handled_logger: logging.Logger
    ) -> None:
        """Test a bad event_id extra is handled by the handler.

        Args:
            testing_logger: logger with a mock log method
            handled_logger: standard library logger with the handler

        """
        with mock.patch.object(MockLogHandler, "handleError") as handle_error:
            handled_logger.warning("warning", extra={"event_id": "abc"})
            handled_logger.info("after")

        handle_error.assert_called_once()
        assert handle_error.call_args.args[0].msg == "warning"
        cast(mock.MagicMock, testing_logger.log).assert_called_once_with(
            LogLevel.INFORMATION, EventId(0), "after", None
        )

    def test_mock_log_handler_bad_format_args(
        self, testing_logger: TestingLogger, handled_logger: logging.Logger
    ) -> None:
        """Test a record whose message can not be formatted is handled.

        Args:
            testing_logger: logger with a mock log method
            handled_logger: standard library logger with the handler

        """
        with mock.patch.object(MockLogHandler, "handleError") as handle_error:
            handled_logger.info("count %d", "x")

        handle_error.assert_called_once()
        assert handle_error.call_args.args[0].args == ("x",)
        cast(mock.MagicMock, testing_logger.log).assert_not_called()

    def test_mock_log_handler_skips_own_loggers(self, testing_logger: TestingLogger) -> None:
        """Test records from the package loggers are not forwarded.

        Args:
            testing_logger: logger with a mock log method

        """
        handler = MockLogHandler(testing_logger)
        for name in ("logmock", "logmock.log_invocation_query", "logmockery"):
            handler.handle(
                logging.makeLogRecord(
                    {"name": name, "msg": name, "levelno": logging.DEBUG}
                )
            )

        cast(mock.MagicMock, testing_logger.log).assert_called_once_with(
            LogLevel.DEBUG, EventId(0), "logmockery", None
        )

    def test_mock_log_handler_level(self, testing_logger: TestingLogger) -> None:
        """Test the handler level filters records.

        Args:
            testing_logger: logger with a mock log method

        """
        std_logger = logging.getLogger("test_mock_log_handler_level")
        handler = MockLogHandler(testing_logger, level=logging.WARNING)
        std_logger.addHandler(handler)
        std_logger.setLevel(logging.DEBUG)
        try:
            std_logger.info("info")
            std_logger.warning("warn")
        finally:
            std_logger.removeHandler(handler)
            std_logger.setLevel(logging.NOTSET)

        cast(mock.MagicMock, testing_logger.log).assert_called_once_with(
            LogLevel.WARNING, EventId(0), "warn", None
        )
