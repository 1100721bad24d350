"""Hoist CLI - Apps command"""

import click

from hoist.base import BaseCommand
from hoist.services.api_client import ApiClient
from hoist.services.apps_service import AppsService


class AppsListCommand(BaseCommand):
    """List the applications owned by the configured user."""

    def execute(self) -> None:
        username = self.config.require("username")

        self.show_header(title="Applications", user=username)

        logger = self.init_logger(username, "apps-list")
        logger.step(f"Listing apps for {username}")

        service = AppsService(ApiClient.from_config(self.config), self.console)
        apps = service.list_apps(username)
        service.print_apps(apps, username)

        logger.success(f"Found {len(apps)} apps")


@click.command(name="apps:list")
@click.option("--verbose", "-v", is_flag=True, help="Show all command output")
def apps_list(verbose):
    """
    List your applications

    \b
    Example:
      hoist apps:list
    """
    cmd = AppsListCommand(verbose=verbose)
    cmd.run()
