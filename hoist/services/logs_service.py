"""
Logs Service

Handlers behind `hoist logs all` and `hoist logs app`.

Both handlers take their positional arguments followed by a completion
callback, e.g. ``service.app("api", "50", on_complete)``. The historical
path calls ``on_complete(None)`` after printing, or ``on_complete(error)``
on failure, exactly once. The streaming path returns a LogSubscription
and never calls ``on_complete``: a followed stream does not complete.
"""

from pathlib import Path
from typing import Any, Callable, Optional

from rich.console import Console
from rich.markup import escape

from hoist.constants import APP_NAME_FIELD, DEFAULT_ALL_APPS_LINES, DEFAULT_APP_LINES
from hoist.exceptions import MetadataError, RetrievalError
from hoist.log_formatter import LogFormatter
from hoist.logger import CommandLogger
from hoist.models.logs import LogRequest
from hoist.services.api_client import ApiClient
from hoist.services.apps_service import AppsService
from hoist.services.config_service import ConfigService
from hoist.services.log_gateway import LogGateway
from hoist.services.log_stream import LogSubscription, consume_stream
from hoist.services.metadata_service import ProjectMetadataReader
from hoist.services.prompt_service import PromptService
from hoist.utils import get_working_dir, normalize_args

Completion = Callable[[Optional[Exception]], Any]


class LogsService:
    """
    Fetches, streams and prints logs for a user or one app.

    All collaborators are passed in; nothing is read from global state.
    """

    def __init__(
        self,
        gateway: LogGateway,
        formatter: LogFormatter,
        username: str,
        metadata_reader: Optional[ProjectMetadataReader] = None,
        prompt: Optional[PromptService] = None,
        apps_service: Optional[AppsService] = None,
        console: Optional[Console] = None,
        working_dir: Optional[Path] = None,
        logger: Optional[CommandLogger] = None,
    ):
        self.gateway = gateway
        self.formatter = formatter
        self.username = username
        self.metadata_reader = metadata_reader or ProjectMetadataReader()
        self.prompt = prompt or PromptService()
        self.apps_service = apps_service
        self.console = console or formatter.console
        self.working_dir = working_dir
        self.logger = logger

    @classmethod
    def from_config(
        cls,
        config: ConfigService,
        console: Optional[Console] = None,
        logger: Optional[CommandLogger] = None,
    ) -> "LogsService":
        """
        Wire the service from the configuration store.

        Raises:
            ConfigurationError: If username or api_url is missing
        """
        console = console or Console()
        username = config.require("username")
        client = ApiClient.from_config(config)

        return cls(
            gateway=LogGateway(client, username),
            formatter=LogFormatter(console, log_length=config.get("loglength")),
            username=username,
            apps_service=AppsService(client, console),
            console=console,
            logger=logger,
        )

    def all(self, *args) -> Optional[LogSubscription]:
        """
        Logs for all of the user's apps, grouped by app.

        Args:
            *args: ``[amount], on_complete`` where amount is a line count
                (default 10), ``"stream"`` or ``"follow"``

        Returns:
            LogSubscription when streaming, else None
        """
        amount, _, on_complete = normalize_args(args)
        request = LogRequest.from_args([self.username, amount])

        try:
            if request.is_stream:
                self._log(f"Streaming logs for {self.username}")
                return consume_stream(
                    self.gateway.open_user_stream(self.username), self.formatter
                )

            count = request.line_count(DEFAULT_ALL_APPS_LINES)
            self._log(f"Fetching {count} lines for {self.username}")
            entries = self.gateway.fetch_for_user(self.username, count)
            self.formatter.render(entries, self.username, group_by_app=True, amount=count)
        except Exception as e:
            return self._complete(on_complete, e)

        return self._complete(on_complete)

    def app(self, *args) -> Optional[LogSubscription]:
        """
        Logs for one app.

        When no app name is given it is read from project metadata in the
        working directory, or else the user's apps are listed and the user
        is prompted for one.

        Args:
            *args: ``[app_name], [amount], on_complete`` where amount is a
                line count (default 100), ``"stream"`` or ``"follow"``

        Returns:
            LogSubscription when streaming, else None
        """
        app_name, amount, on_complete = normalize_args(args)
        request = LogRequest.from_args([app_name, amount])

        try:
            count = None if request.is_stream else request.line_count(DEFAULT_APP_LINES)

            if not request.target:
                request = request.with_target(self.resolve_app_name())

            if request.is_stream:
                self._log(f"Streaming logs for {request.target}")
                return consume_stream(
                    self.gateway.open_app_stream(request.target), self.formatter
                )

            self._log(f"Fetching {count} lines for {request.target}")
            entries = self.gateway.fetch_for_app(request.target, count)
            self.console.print(
                f"[cyan]Listing logs for[/cyan] [magenta]{escape(request.target)}[/magenta]"
            )
            self.formatter.render(entries, request.target, amount=count)
        except Exception as e:
            return self._complete(on_complete, e)

        return self._complete(on_complete)

    def resolve_app_name(self) -> str:
        """
        App name from local project metadata, else from a prompt.

        Raises:
            PromptError: If the prompt fails
        """
        working_dir = self.working_dir or get_working_dir()

        try:
            metadata = self.metadata_reader.read(working_dir)
        except MetadataError as e:
            self._log(f"No project metadata: {e.message}")
            return self.prompt_app_name()

        source = self.metadata_reader.last_path or working_dir
        self.console.print(f"[dim]Attempting to load logs for {escape(str(source))}[/dim]")
        return metadata["name"]

    def prompt_app_name(self) -> str:
        """List the user's apps, then ask which one to show logs for."""
        if self.apps_service:
            try:
                apps = self.apps_service.list_apps(self.username)
                self.apps_service.print_apps(apps, self.username)
            except RetrievalError as e:
                self._warn(f"Could not list apps: {e.message}")

        self.console.print("Which application to view [magenta]logs[/magenta] for?")
        answers = self.prompt.get([APP_NAME_FIELD])
        return answers[APP_NAME_FIELD]

    def _complete(
        self, on_complete: Optional[Completion], error: Optional[Exception] = None
    ) -> None:
        if error is not None:
            self._log(f"Failed: {error}", "ERROR")

        if on_complete is not None:
            on_complete(error)
        elif error is not None:
            raise error
        return None

    def _log(self, message: str, level: str = "INFO") -> None:
        if self.logger:
            self.logger.log(message, level)

    def _warn(self, message: str) -> None:
        if self.logger:
            self.logger.warning(message)
        else:
            self.console.print(f"[yellow]⚠ {escape(message)}[/yellow]")
