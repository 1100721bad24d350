"""
Logging system for Hoist CLI
Writes one log file per command invocation with clean console output
"""

import re
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO

from rich.console import Console
from rich.markup import escape

from hoist.constants import DEFAULT_LOG_DIR, LOG_DATE_FORMAT, LOG_TIME_FORMAT

console = Console()

ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


class CommandLogger:
    """
    Manages logging for a single command run
    - Writes every message to a log file in real-time
    - Shows step/success/warning lines in console
    - Echoes all messages to console in verbose mode
    """

    def __init__(
        self,
        scope: str,
        operation: str,
        log_dir: Optional[str] = None,
        verbose: bool = False,
        output: Optional[Console] = None,
    ):
        """
        Initialize logger

        Args:
            scope: Who the command runs for (username or "global")
            operation: Operation name (e.g., 'logs-all', 'logs-app')
            log_dir: Base directory for log files
            verbose: If True, show all messages in console
            output: Console to print to (module console by default)
        """
        self.scope = scope
        self.operation = operation
        self.verbose = verbose
        self.console = output or console
        self.log_file: Optional[TextIO] = None
        self.log_path: Optional[Path] = None
        self.has_errors = False

        # Structure: {log_dir}/{scope}/{date}/{time}_{operation}.log
        now = datetime.now()
        base_dir = Path(log_dir or DEFAULT_LOG_DIR).expanduser()
        scope_logs_dir = base_dir / scope / now.strftime(LOG_DATE_FORMAT)
        scope_logs_dir.mkdir(parents=True, exist_ok=True)

        self.log_path = scope_logs_dir / f"{now.strftime(LOG_TIME_FORMAT)}_{operation}.log"

        # Line buffered for real-time writes
        self.log_file = open(self.log_path, "w", buffering=1)

        self._write_log_header()

    def _write_log_header(self):
        """Write log file header"""
        header = f"""
{"=" * 80}
Hoist Command Log
{"=" * 80}
Scope: {self.scope}
Operation: {self.operation}
Started: {datetime.now().isoformat()}
{"=" * 80}

"""
        self.log_file.write(header)
        self.log_file.flush()

    def log(self, message: str, level: str = "INFO"):
        """
        Log a message to file and optionally console

        Args:
            message: Message to log
            level: Log level (INFO, WARNING, ERROR, DEBUG)
        """
        timestamp = datetime.now().strftime("%H:%M:%S")
        clean_message = ANSI_ESCAPE.sub("", message)

        if self.log_file:
            self.log_file.write(f"[{timestamp}] [{level}] {clean_message}\n")
            self.log_file.flush()

        if self.verbose:
            text = escape(message)
            if level == "ERROR":
                self.console.print(f"[red]{text}[/red]")
            elif level == "WARNING":
                self.console.print(f"[yellow]{text}[/yellow]")
            elif level == "DEBUG":
                self.console.print(f"[dim]{text}[/dim]")
            else:
                self.console.print(text)

    def log_error(self, error: str, context: Optional[str] = None):
        """
        Log an error with context

        Args:
            error: Error message
            context: Additional context (e.g., how to fix it)
        """
        self.has_errors = True

        # Clear markers for grepping
        error_block = f"""
{"!" * 80}
ERROR OCCURRED
{"!" * 80}
{error}
"""
        if context:
            error_block += f"\nContext: {context}\n"

        error_block += f"{'!' * 80}\n\n"

        if self.log_file:
            self.log_file.write(error_block)
            self.log_file.flush()

        self.console.print(f"[bold red]✗ {escape(error)}[/bold red]")
        if context:
            self.console.print(f"  [color(208)]{escape(context)}[/color(208)]")

    def step(self, step_name: str):
        """
        Start a new step

        Args:
            step_name: Name of the step
        """
        self.log(f"Step: {step_name}", "INFO")

        if not self.verbose:
            self.console.print(
                f"[color(214)]▶[/color(214)] [white]{escape(step_name)}[/white]"
            )

    def success(self, message: str):
        """Log a success message"""
        self.log(message, "INFO")

        if not self.verbose:
            self.console.print(f"  [dim]✓ {escape(message)}[/dim]")

    def warning(self, message: str):
        """Log a warning message"""
        self.log(message, "WARNING")

        if not self.verbose:
            self.console.print(f"  [yellow]⚠[/yellow] [dim]{escape(message)}[/dim]")

    def close(self):
        """Close log file"""
        if self.log_file:
            footer = f"""
{"=" * 80}
Completed: {datetime.now().isoformat()}
Status: {"FAILED" if self.has_errors else "SUCCESS"}
{"=" * 80}
"""
            self.log_file.write(footer)
            self.log_file.close()
            self.log_file = None
