"""Module pytest_plugin.

=============
pytest_plugin
=============

pytest fixtures that provide MockLogger instances. Enable them in a
conftest.py with::

    pytest_plugins = ["logmock.pytest_plugin"]

:Example: use the mock_logger fixture

.. code-block:: python

    def test_example(mock_logger: MockLogger) -> None:
        mock_logger.object.log_error('failed', exception=ValueError('x'))
        mock_logger.verify_log(lambda q: q.at_error().with_exception(ValueError))

"""

########################################################################
# Standard Library
########################################################################
from typing import Callable

########################################################################
# Third Party
########################################################################
import pytest

########################################################################
# Local
########################################################################
from logmock.log_invocation import LogLevel
from logmock.mock_logger import MockLogger
from logmock.testing_logger import Category

MockLoggerFactory = Callable[..., MockLogger]


########################################################################
# mock_logger fixture
########################################################################
@pytest.fixture
def mock_logger() -> MockLogger:
    """Return a new MockLogger at TRACE level.

    Returns:
        the mock logger
    """
    return MockLogger()


########################################################################
# mock_logger_factory fixture
########################################################################
@pytest.fixture
def mock_logger_factory() -> MockLoggerFactory:
    """Return a function that creates MockLogger instances.

    Returns:
        function taking log_level and category arguments
    """

    def factory(
        log_level: LogLevel = LogLevel.TRACE, category: Category = None
    ) -> MockLogger:
        return MockLogger(log_level=log_level, category=category)

    return factory
