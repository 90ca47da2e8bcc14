"""Module invocation_report.

=================
invocation_report
=================

The invocation_report module renders the log invocations recorded by a
MockLogger as a table. The table is appended to the text of a failed
verification and can be printed during test development.

:Example: print the invocations of a mock logger

.. code-block:: python

    from logmock.mock_logger import MockLogger
    mock_logger = MockLogger()
    mock_logger.object.log_information('Hello, world!', event_id=7)
    mock_logger.print_invocations()

The output::

    ****************************
    * performed invocations: 1 *
    ****************************
          level  event_id       message  exception
    INFORMATION         7 Hello, world!       None


The invocation_report module contains:

    1) build_invocation_df function
    2) format_invocations function
    3) print_invocations function

"""

########################################################################
# Standard Library
########################################################################
import logging
from typing import Any, Iterable, Union

########################################################################
# Third Party
########################################################################
import pandas as pd  # type: ignore

########################################################################
# Local
########################################################################
from logmock.log_invocation import LogInvocation

logger = logging.getLogger(__name__)

NO_INVOCATIONS = "No invocations performed."

REPORT_COLUMNS = ("level", "event_id", "message", "exception")


########################################################################
# build_invocation_df
########################################################################
def build_invocation_df(invocations: Iterable[LogInvocation]) -> pd.DataFrame:
    """Build a data frame with one row per log invocation.

    Args:
        invocations: the log invocations to tabulate

    Returns:
        data frame with columns level, event_id, message and exception

    """
    rows = [
        (
            invocation.level.name,
            str(invocation.event_id),
            invocation.message,
            repr(invocation.exception) if invocation.exception is not None else "None",
        )
        for invocation in invocations
    ]
    return pd.DataFrame(rows, columns=REPORT_COLUMNS)


########################################################################
# format_invocations
########################################################################
def format_invocations(invocations: Iterable[LogInvocation]) -> str:
    """Return the log invocations as a text table.

    Args:
        invocations: the log invocations to format

    Returns:
        the table, or a note saying there were no invocations

    """
    invocation_df = build_invocation_df(invocations)
    if invocation_df.empty:
        return NO_INVOCATIONS

    with pd.option_context("display.max_colwidth", 120, "display.width", 300):
        return str(invocation_df.to_string(columns=list(REPORT_COLUMNS), index=False))


########################################################################
# flower_box_lines
########################################################################
def flower_box_lines(msgs: Union[str, list[str]]) -> list[str]:
    """Return msgs boxed in asterisks, one list item per line.

    Args:
        msgs: single message or list of messages

    Returns:
        the lines of the box, starting with the top border

    """
    if isinstance(msgs, str):
        msgs = [msgs]

    box_len = len(max(msgs, key=len)) + 4  # 2 for each side
    lines = ["*" * box_len]
    lines.extend("* " + msg.ljust(box_len - 4) + " *" for msg in msgs)
    lines.append("*" * box_len)
    return lines


########################################################################
# print_invocations
########################################################################
def print_invocations(invocations: Iterable[LogInvocation], **kwargs: Any) -> None:
    """Print the log invocations under a flower box header.

    Args:
        invocations: the log invocations to print
        kwargs: print arguments such as file or flush

    """
    # file defaults to sys.stdout at print time so capsys can capture
    invocation_list = list(invocations)
    header = f"performed invocations: {len(invocation_list)}"
    print("\n" + "\n".join(flower_box_lines(header)), **kwargs)
    print(format_invocations(invocation_list), **kwargs)
