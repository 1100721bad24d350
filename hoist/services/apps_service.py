"""
Application Listing Service

Lists the applications a user owns.
"""

from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from hoist.exceptions import RetrievalError
from hoist.models.apps import AppSummary
from hoist.services.api_client import ApiClient

STATE_STYLES = {
    "started": "green",
    "stopped": "red",
    "unknown": "dim",
}


class AppsService:
    """Fetches and prints a user's applications."""

    def __init__(self, client: ApiClient, console: Optional[Console] = None):
        self.client = client
        self.console = console or Console()

    def list_apps(self, username: str) -> List[AppSummary]:
        """
        Fetch all apps owned by ``username``.

        Raises:
            RetrievalError: If the API call fails
        """
        data = self.client.get_json("GET", "apps", username)
        if isinstance(data, dict):
            data = data.get("apps", [])
        if not isinstance(data, list):
            raise RetrievalError(
                "Unexpected response from apps API",
                context=f"Expected a list of apps, got {type(data).__name__}",
            )

        apps = [AppSummary.from_dict(item) for item in data if isinstance(item, dict)]
        return sorted(apps, key=lambda app: app.name)

    def print_apps(self, apps: List[AppSummary], username: Optional[str] = None) -> None:
        """Print apps as a table."""
        if not apps:
            owner = f" for {username}" if username else ""
            self.console.print(f"[yellow]⚠ No applications{owner}[/yellow]")
            return

        table = Table(
            title=f"Applications ({len(apps)})",
            show_header=True,
            header_style="bold cyan",
            padding=(0, 1),
        )
        table.add_column("Name", style="cyan", no_wrap=True)
        table.add_column("State")
        table.add_column("Subdomain", style="white")
        table.add_column("Snapshot", style="dim")

        for app in apps:
            style = STATE_STYLES.get(app.state, "white")
            table.add_row(
                escape(app.name),
                f"[{style}]{escape(app.state)}[/{style}]",
                escape(app.subdomain or "-"),
                app.snapshot or "-",
            )

        self.console.print(table)
