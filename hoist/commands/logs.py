"""Hoist CLI - Logs command"""

from typing import List, Optional

import click

from hoist.base import BaseCommand
from hoist.constants import DEFAULT_ALL_APPS_LINES, DEFAULT_APP_LINES
from hoist.exceptions import RetrievalError
from hoist.models.logs import LogRequest
from hoist.services.log_stream import LogSubscription
from hoist.services.logs_service import LogsService


class LogsCommand(BaseCommand):
    """Shared plumbing for the logs subcommands."""

    def __init__(self, amount: Optional[str] = None, verbose: bool = False, **kwargs):
        super().__init__(verbose=verbose, **kwargs)
        self.amount = amount

    def build_service(self, username: str, command_name: str) -> LogsService:
        logger = self.init_logger(username, command_name)
        return LogsService.from_config(self.config, console=self.console, logger=logger)

    def mode_label(self, default_lines: int) -> str:
        request = LogRequest(amount=self.amount)
        if request.is_stream:
            return "Follow"
        return f"Last {self.amount or default_lines} lines"

    def finish(self, subscription: Optional[LogSubscription], errors: List) -> None:
        """Follow a stream, or re-raise the error the handler completed with."""
        if subscription is not None:
            self.follow(subscription)
            return

        if errors and errors[0] is not None:
            raise errors[0]

    def follow(self, subscription: LogSubscription) -> None:
        """Print streamed logs until the server ends the stream or Ctrl+C."""
        failures: List[RetrievalError] = []

        def on_error(error: RetrievalError) -> None:
            failures.append(error)
            if self.logger:
                self.logger.log_error(error.message, context=error.context)
            else:
                self.print_error(error.message)

        def on_end() -> None:
            if self.logger:
                self.logger.success("Stream ended by server")

        subscription.stream.on("error", on_error)
        subscription.stream.on("end", on_end)

        self.print_dim("Following logs (Ctrl+C to stop)")
        subscription.run()

        if failures:
            raise SystemExit(1)


class LogsAllCommand(LogsCommand):
    """Show logs for all of the user's apps."""

    def execute(self) -> None:
        username = self.config.require("username")

        self.show_header(
            title="Logs",
            user=username,
            details={"Mode": self.mode_label(DEFAULT_ALL_APPS_LINES)},
        )

        service = self.build_service(username, "logs-all")
        errors: List = []
        subscription = service.all(self.amount, errors.append)
        self.finish(subscription, errors)


class LogsAppCommand(LogsCommand):
    """Show logs for a single app."""

    def __init__(
        self,
        app_name: Optional[str] = None,
        amount: Optional[str] = None,
        verbose: bool = False,
        **kwargs,
    ):
        super().__init__(amount=amount, verbose=verbose, **kwargs)
        self.app_name = app_name

    def execute(self) -> None:
        username = self.config.require("username")

        self.show_header(
            title="Logs",
            user=username,
            app=self.app_name,
            details={"Mode": self.mode_label(DEFAULT_APP_LINES)},
        )

        service = self.build_service(username, "logs-app")
        errors: List = []
        subscription = service.app(self.app_name, self.amount, errors.append)
        self.finish(subscription, errors)


@click.group(name="logs")
def logs():
    """
    📜 View application logs

    \b
    Examples:
      hoist logs all                 # Last 10 lines from every app
      hoist logs all 50              # Last 50 lines from every app
      hoist logs all follow          # Follow every app live
      hoist logs app api             # Last 100 lines from api
      hoist logs app api 40          # Last 40 lines from api
      hoist logs app api stream      # Follow api live
      hoist logs app                 # App name from hoist.yml / package.json
    """


@logs.command(name="all")
@click.argument("amount", required=False)
@click.option("--verbose", "-v", is_flag=True, help="Show all command output")
def logs_all(amount, verbose):
    """
    Print the logs from all applications

    \b
    AMOUNT is the number of lines to show (default 10),
    or 'stream' / 'follow' to watch logs live.
    """
    cmd = LogsAllCommand(amount=amount, verbose=verbose)
    cmd.run()


@logs.command(name="app")
@click.argument("app_name", required=False)
@click.argument("amount", required=False)
@click.option("--verbose", "-v", is_flag=True, help="Show all command output")
def logs_app(app_name, amount, verbose):
    """
    Print the logs from one application

    \b
    APP_NAME defaults to the name in hoist.yml or package.json in the
    current directory; otherwise you are asked for it.
    AMOUNT is the number of lines to show (default 100),
    or 'stream' / 'follow' to watch logs live.
    """
    cmd = LogsAppCommand(app_name=app_name, amount=amount, verbose=verbose)
    cmd.run()
