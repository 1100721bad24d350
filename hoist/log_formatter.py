"""
Log Formatter

Renders log entries to the console in chronological order,
optionally grouped by app.
"""

from typing import Dict, Iterable, List, Optional, Tuple, Union

from rich.console import Console
from rich.text import Text

from hoist.constants import (
    APP_HEADER_LABEL_STYLE,
    APP_HEADER_NAME_STYLE,
    LOG_TIMESTAMP_FORMAT,
    LOG_TIMESTAMP_STYLE,
)
from hoist.models.logs import LogEntry, parse_timestamp


def format_timestamp(value) -> str:
    """Render a log timestamp as ``MM/DD HH:MM:SS +HHMM`` in local time."""
    return parse_timestamp(value).astimezone().strftime(LOG_TIMESTAMP_FORMAT)


def group_entries_by_app(entries: Iterable[LogEntry]) -> List[Tuple[str, List[LogEntry]]]:
    """
    Partition entries by app, smallest group first.

    Groups with the same size keep the order their app was first seen.
    """
    groups: Dict[str, List[LogEntry]] = {}
    for entry in entries:
        groups.setdefault(entry.app, []).append(entry)

    counts = {app: len(group) for app, group in groups.items()}
    return [(app, groups[app]) for app in sorted(groups, key=counts.__getitem__)]


def sort_chronologically(entries: Iterable[LogEntry]) -> List[LogEntry]:
    return sorted(entries, key=lambda entry: entry.parsed_time)


class LogFormatter:
    """
    Prints log entries one line per message line:

        [01/01 00:00:00 +0000] message line

    Log text is printed as plain Text so brackets in messages are never
    read as console markup.
    """

    def __init__(self, console: Optional[Console] = None, log_length: Optional[int] = None):
        self.console = console or Console()
        self.log_length = log_length if log_length and log_length > 0 else None

    def render(
        self,
        entries: Union[LogEntry, Iterable[LogEntry]],
        target_label: str,
        group_by_app: bool = False,
        amount: Optional[int] = None,
    ) -> int:
        """
        Render a batch of entries.

        Args:
            entries: One entry or a sequence of entries
            target_label: Name used in the "no logs" warning
            group_by_app: Print entries under an "App: <name>" header per app
            amount: Requested line count (not used to truncate output)

        Returns:
            Number of log lines printed
        """
        if isinstance(entries, LogEntry):
            entries = [entries]

        entries = [entry for entry in entries if entry.message is not None]

        if not entries:
            self.console.print(
                Text.assemble(
                    ("⚠ No logs for ", "yellow"),
                    (str(target_label), "magenta"),
                    (" in specified timespan", "yellow"),
                )
            )
            return 0

        if not group_by_app:
            return self._print_entries(entries)

        printed = 0
        for app, group in group_entries_by_app(entries):
            self.console.print(
                Text.assemble(
                    ("App: ", APP_HEADER_LABEL_STYLE),
                    (app, APP_HEADER_NAME_STYLE),
                )
            )
            printed += self._print_entries(group)
        return printed

    def _print_entries(self, entries: List[LogEntry]) -> int:
        printed = 0
        for entry in sort_chronologically(entries):
            stamp = format_timestamp(entry.timestamp)
            for line in entry.message.split("\n"):
                line = line.rstrip("\r")
                if not line:
                    continue
                self.console.print(self._format_line(stamp, line), soft_wrap=True)
                printed += 1
        return printed

    def _format_line(self, stamp: str, line: str) -> Text:
        if self.log_length and len(line) > self.log_length:
            line = line[: self.log_length]
        return Text.assemble("[", (stamp, LOG_TIMESTAMP_STYLE), "] ", line)

