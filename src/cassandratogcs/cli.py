"""cassandratogcs CLI."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from cassandratogcs import __version__
from cassandratogcs._constants import DEFAULT_CATALOG, DEFAULT_CONFIG, ENV_PREFIX, INPUT_CATALOG
from cassandratogcs.config import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigResolver,
    ConfigValidationError,
    JobConfig,
    OutputFormat,
    SaveMode,
    env_var_name,
    generate_example_properties,
    load_config,
)

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="cassandratogcs",
    help="Validate configuration for Cassandra to GCS export jobs",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    epilog="[dim]Workflow: init -> edit -> validate -> submit[/dim]",
)

console = Console()


# =============================================================================
# Helper Functions
# =============================================================================


def resolve_config_path(config_file: Path | None) -> Path | None:
    """Resolve config file path, using ./cassandratogcs.properties as default.

    Returns None when no file was given and the default does not exist;
    properties may then come entirely from the environment and --set.
    """
    if config_file is not None:
        return config_file

    default = Path(DEFAULT_CONFIG)
    if default.exists():
        return default
    return None


def configure_logging(verbose: bool) -> None:
    """Send DEBUG logs to stderr when verbose, warnings otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]OK[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]ERROR[/red] {message}")


def _config_table(cfg: JobConfig) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Property")
    table.add_column("Value")
    for key, value in cfg.to_properties().items():
        table.add_row(key, escape(value))
    return table


# =============================================================================
# Commands
# =============================================================================


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"cassandratogcs version {__version__}")


@app.command()
def keys() -> None:
    """List the recognized configuration properties."""
    allowed = {
        "output.format": ", ".join(f.value for f in OutputFormat),
        "output.savemode": ", ".join(m.value for m in SaveMode),
        "output.path": "gs://...",
    }

    console.print("[bold]Recognized properties[/bold]")
    table = Table(show_header=True, header_style="bold")
    table.add_column("Key")
    table.add_column("Required")
    table.add_column("Allowed")
    table.add_column("Default")
    for key in ConfigResolver.keys:
        required = key != INPUT_CATALOG
        suffix = key.split(".", 1)[1]
        table.add_row(
            key,
            "yes" if required else "no",
            allowed.get(suffix, "any non-empty"),
            "" if required else DEFAULT_CATALOG,
        )
    console.print(table)
    console.print(
        f"[dim]Any key can be set through {ENV_PREFIX}* variables, "
        f"e.g. {env_var_name(INPUT_CATALOG)}[/dim]"
    )


@app.command()
def init(
    output: Annotated[
        Path,
        typer.Option(
            "--output",
            "-o",
            help="Output file path for configuration",
        ),
    ] = Path(DEFAULT_CONFIG),
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            help="Overwrite an existing file",
        ),
    ] = False,
) -> None:
    """Write an example properties file to start from."""
    if output.exists() and not force:
        print_error(f"{output} already exists (use --force to overwrite)")
        raise typer.Exit(1)

    output.write_text(generate_example_properties())
    print_success(f"Wrote {output}")
    console.print(f"[dim]Next: edit it, then run cassandratogcs validate {output}[/dim]")


@app.command()
def validate(
    config_file: Annotated[
        Path | None,
        typer.Argument(
            help=f"Properties or YAML file (default: ./{DEFAULT_CONFIG})",
        ),
    ] = None,
    overrides: Annotated[
        list[str] | None,
        typer.Option(
            "--set",
            "-s",
            help="Override a property as KEY=VALUE (repeatable)",
        ),
    ] = None,
    use_env: Annotated[
        bool,
        typer.Option(
            "--env/--no-env",
            help=f"Read {ENV_PREFIX}* environment variables",
        ),
    ] = True,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show detailed validation output",
        ),
    ] = False,
) -> None:
    """Resolve and validate the job configuration.

    Properties are merged from the file, then the environment, then --set
    overrides. Every problem is reported, not just the first.
    """
    configure_logging(verbose)
    path = resolve_config_path(config_file)
    source = str(path) if path is not None else "environment and overrides"
    console.print(Panel(f"Validating: [bold]{escape(source)}[/bold]", expand=False))

    try:
        cfg = load_config(path, overrides or [], os.environ if use_env else None)
    except ConfigFileNotFoundError as e:
        print_error(f"File not found: {escape(str(e))}")
        raise typer.Exit(1)  # noqa: B904
    except ConfigValidationError as e:
        print_error("Config validation failed:")
        for issue in e.issues:
            console.print(
                f"  [red]•[/red] {issue.key}: {escape(issue.message)} "
                f"[dim]({issue.kind.value})[/dim]",
                soft_wrap=True,
            )
        raise typer.Exit(1)  # noqa: B904
    except ConfigError as e:
        print_error(f"Config error: {escape(str(e))}")
        raise typer.Exit(1)  # noqa: B904

    print_success("Configuration valid")
    console.print(f"  Save mode: {cfg.save_mode.value} (spark: {cfg.save_mode.spark_mode})")
    if verbose:
        console.print(_config_table(cfg))
        console.print(escape(cfg.summary()), soft_wrap=True)
    logger.debug("Validated %s", cfg)


# =============================================================================
# Entry Point
# =============================================================================


def main() -> None:
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
