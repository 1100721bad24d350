"""
Hoist CLI - UI Components & Branding
Standardized headers and UI elements
"""

from rich.console import Console
from rich.markup import escape

LOGO = "hoist"

# Color scheme
BRAND_COLOR = "cyan"


def show_header(
    title: str,
    user: str = None,
    app: str = None,
    details: dict = None,
    console: Console = None,
):
    """
    Display a standardized Hoist command header.

    Args:
        title: Main title (e.g., "Logs", "Applications")
        user: Username (if applicable)
        app: App name (if applicable)
        details: Additional key-value pairs to display
        console: Rich Console instance (creates new if None)

    Example:
        show_header(
            title="Logs",
            app="api",
            details={"Mode": "Follow"}
        )
    """
    if console is None:
        console = Console()

    prefix = f" [bold color(214)]{LOGO}[/bold color(214)] [dim]›[/dim]"

    console.print(f"{prefix} [bold white]{escape(title)}[/bold white]")

    if user:
        console.print(f"{prefix} User: [{BRAND_COLOR}]{escape(user)}[/{BRAND_COLOR}]")
    if app:
        console.print(f"{prefix} App: [{BRAND_COLOR}]{escape(app)}[/{BRAND_COLOR}]")

    if details:
        for key, value in details.items():
            console.print(
                f"{prefix} {escape(str(key))}: [{BRAND_COLOR}]{escape(str(value))}[/{BRAND_COLOR}]"
            )

    # Single blank line after header
    console.print()
