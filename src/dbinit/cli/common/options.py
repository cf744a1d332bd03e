"""Common CLI options for the CLI."""

import typer

ConfigArg = typer.Argument(
    ...,
    help="Path to the JSON run configuration",
)

HostOpt = typer.Option(
    None,
    "--host",
    envvar="DBINIT_HOST",
    help="Database host (overrides connection.host)",
)

PortOpt = typer.Option(
    None,
    "--port",
    envvar="DBINIT_PORT",
    help="Database port (overrides connection.port)",
)

UserOpt = typer.Option(
    None,
    "--user",
    "-u",
    envvar="DBINIT_USER",
    help="Database user (overrides connection.user)",
)

PasswordOpt = typer.Option(
    None,
    "--password",
    envvar="DBINIT_PASSWORD",
    help="Database password (overrides connection.password)",
    show_default=False,
)

DefinitionsPathOpt = typer.Option(
    None,
    "--definitions-path",
    help="Directory holding definition .sql files (overrides meta.definition_path)",
)

DataPathOpt = typer.Option(
    None,
    "--data-path",
    help="Directory holding initial data .sql files (overrides meta.data_path)",
)

MinVersionOpt = typer.Option(
    None,
    "--min-version",
    help="Required server major version (overrides meta.required_major_version)",
)

ConfirmOpt = typer.Option(
    False,
    "--confirm/--no-confirm",
    help="Ask for confirmation before touching the database",
)

DryRunOpt = typer.Option(
    False,
    "--dry-run",
    help="Show which targets would be applied, but don't connect",
)
