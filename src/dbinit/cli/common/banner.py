"""Optional startup banner."""

import os

from rich.panel import Panel

from dbinit.cli.common.output import console

BANNER_ENV = "DBINIT_BANNER"


def opt_print_banner() -> None:
    """Print the banner when DBINIT_BANNER is set to a truthy value."""
    flag = os.getenv(BANNER_ENV, "").strip().lower()
    if flag not in {"1", "true", "yes"}:
        return
    console.print(
        Panel.fit(
            "[title]dbinit[/] [meta]schema and seed data bootstrap[/]",
            border_style="cyan",
        )
    )
