"""
Base Command Class

Abstract base for all Hoist CLI commands.
Provides common functionality and structure.
"""

from abc import ABC, abstractmethod
from typing import Optional

from rich.console import Console
from rich.markup import escape

from hoist.exceptions import HoistError
from hoist.logger import CommandLogger
from hoist.services.config_service import ConfigService
from hoist.ui_components import show_header


class BaseCommand(ABC):
    """
    Abstract base command class.

    Provides:
    - Configuration access
    - Logger initialization
    - Header display
    - Error handling and exit codes
    """

    def __init__(
        self,
        verbose: bool = False,
        config: Optional[ConfigService] = None,
        console: Optional[Console] = None,
    ):
        self.verbose = verbose
        self.config = config or ConfigService()
        self.console = console or Console()
        self.logger: Optional[CommandLogger] = None

    def init_logger(self, scope: str, command_name: str) -> CommandLogger:
        """
        Initialize command logger.

        Args:
            scope: Username (use "global" when there is none)
            command_name: Command name

        Returns:
            CommandLogger instance
        """
        self.logger = CommandLogger(
            scope,
            command_name,
            log_dir=self.config.get("log_dir"),
            verbose=self.verbose,
            output=self.console,
        )
        return self.logger

    def show_header(
        self,
        title: str,
        user: Optional[str] = None,
        app: Optional[str] = None,
        details: Optional[dict] = None,
    ) -> None:
        """Show command header (skip in verbose mode)."""
        if not self.verbose:
            show_header(
                title=title,
                user=user,
                app=app,
                details=details,
                console=self.console,
            )

    def print_error(self, message: str) -> None:
        self.console.print(f"[red]✗ {escape(message)}[/red]")

    def print_dim(self, message: str) -> None:
        self.console.print(f"[dim]{escape(message)}[/dim]")

    @abstractmethod
    def execute(self, **kwargs) -> None:
        """
        Execute command logic.

        Must be implemented by subclasses.
        """
        pass

    def run(self, **kwargs) -> None:
        """
        Run command with error handling.

        Exit codes: 0 success, 1 error, 130 interrupted.

        Args:
            **kwargs: Command arguments
        """
        try:
            self.execute(**kwargs)
        except KeyboardInterrupt:
            self.console.print("\n[yellow]⏸ Stopped[/yellow]")
            raise SystemExit(130)
        except SystemExit:
            raise
        except HoistError as e:
            if self.logger:
                self.logger.log_error(e.message, context=e.context)
            else:
                self.print_error(e.message)
                if e.context:
                    self.print_dim(e.context)
            self._show_log_path()
            raise SystemExit(1)
        except ValueError as e:
            self.console.print(f"\n[bold red]✗ Invalid value:[/bold red] {escape(str(e))}\n")
            if self.logger:
                self.logger.log_error(f"Value error: {e}")
            self._show_log_path()
            raise SystemExit(1)
        except Exception as e:
            # Generic error handling
            error_type = type(e).__name__
            self.console.print(f"\n[bold red]✗ {error_type}:[/bold red] {escape(str(e))}\n")
            if self.logger:
                self.logger.log_error(f"{error_type}: {e}")
            self._show_log_path()
            raise SystemExit(1)
        finally:
            if self.logger:
                self.logger.close()

    def _show_log_path(self) -> None:
        if self.logger and not self.verbose:
            self.console.print(f"[dim]Logs saved to:[/dim] {self.logger.log_path}\n")
