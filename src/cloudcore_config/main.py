"""
CLI entry point for cloudcore-config.

Subcommands: validate (default), defaults.
validate loads a cloudcore.yaml, runs every check and prints the field errors;
defaults prints the default configuration as YAML.

Exit codes: 0 valid, 1 invalid configuration, 2 configuration could not be loaded.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Optional, Sequence

import structlog
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from cloudcore_config.config.models import load_cloudcore_config, new_default_cloudcore_config
from cloudcore_config.config.settings import get_settings
from cloudcore_config.utils.logging import configure_logging
from cloudcore_config.validation.cloudcore import validate_cloudcore_configuration
from cloudcore_config.validation.field import ErrorList

logger = structlog.get_logger(__name__)

_FORMAT_CHOICES = ("table", "json")

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_LOAD_ERROR = 2


def display_errors(config_path: str, errors: ErrorList, console: Optional[Console] = None) -> None:
    """Render the field errors as a Rich table plus a one-line verdict panel."""
    console = console or Console()
    if not errors:
        console.print(Panel(f"[green]{config_path}: configuration is valid[/green]", border_style="green"))
        return

    table = Table(
        title=f"Invalid CloudCore configuration ({config_path})",
        show_header=True,
        header_style="bold",
    )
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="dim")
    table.add_column("Problem", style="red")
    for e in errors:
        table.add_row(e.field, repr(e.bad_value), e.detail or e.type.describe())

    console.print(table)
    console.print(
        Panel(
            f"[bold]{len(errors)}[/bold] problem(s) found; CloudCore must not start with this configuration.",
            border_style="red",
        )
    )


def errors_to_json(config_path: str, errors: ErrorList) -> str:
    return json.dumps(
        {
            "config": config_path,
            "valid": not errors,
            "errors": [e.model_dump(mode="json") for e in errors],
        },
        indent=2,
        default=str,
    )


def _cmd_validate(config_path: str, output_format: str) -> int:
    """Load and validate ``config_path``; print the report in ``output_format``."""
    try:
        config = load_cloudcore_config(config_path)
    except (OSError, ValueError, ValidationError) as e:
        logger.error("cloudcore_config_load_failed", path=config_path, error=str(e))
        print(f"Error: cannot load {config_path}: {e}", file=sys.stderr)
        return EXIT_LOAD_ERROR

    errors = validate_cloudcore_configuration(config)
    if output_format == "json":
        print(errors_to_json(config_path, errors))
    else:
        display_errors(config_path, errors)
    return EXIT_OK if not errors else EXIT_INVALID


def _cmd_defaults() -> int:
    """Print the default CloudCore configuration as YAML."""
    print(new_default_cloudcore_config().to_yaml(), end="")
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse CLI args and dispatch to subcommands. Returns the process exit code."""
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="cloudcore-config: validate a CloudCore configuration before startup.",
    )
    subparsers = parser.add_subparsers(dest="command", required=False)

    # validate
    val_p = subparsers.add_parser("validate", help="Validate a cloudcore.yaml and report every invalid field.")
    val_p.add_argument(
        "--config",
        default=None,
        help=f"Path to cloudcore.yaml. Default: CLOUDCORE_CONFIG_PATH or {settings.validator.config_path}.",
    )
    val_p.add_argument(
        "--format",
        choices=_FORMAT_CHOICES,
        default=None,
        help="Report format (table | json). Default: CLOUDCORE_OUTPUT_FORMAT or table.",
    )

    # defaults
    subparsers.add_parser("defaults", help="Print the default CloudCore configuration as YAML.")

    args = parser.parse_args(argv)
    configure_logging(settings.logging)

    if args.command == "defaults":
        return _cmd_defaults()
    if args.command is None:
        return _cmd_validate(settings.validator.config_path, settings.validator.output_format)
    if args.command == "validate":
        return _cmd_validate(
            args.config or settings.validator.config_path,
            args.format or settings.validator.output_format,
        )
    return 1


if __name__ == "__main__":
    sys.exit(main())
