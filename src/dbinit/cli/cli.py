"""CLI application for database schema and seed data bootstrap."""

import typer

from dbinit.cli.commands.bootstrap import plan, run
from dbinit.cli.common.banner import opt_print_banner

opt_print_banner()

app = typer.Typer(
    help="dbinit - apply database definitions and initial data",
    no_args_is_help=True,
)

app.command("run", help="Apply definitions and initial data.")(run)
app.command("plan", help="Preview target resolution without connecting.")(plan)


if __name__ == "__main__":
    app()
