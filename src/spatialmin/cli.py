# src/spatialmin/cli.py
"""spatialmin Command Line Interface.

Entry point for the spatialmin CLI tool.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click
import typer
from dynaconf.vendor.ruamel.yaml.parser import ParserError as YamlParserError
from dynaconf.vendor.ruamel.yaml.scanner import ScannerError as YamlScannerError
from pydantic import ValidationError
from typer.core import TyperCommand

from spatialmin import __version__
from spatialmin.contracts import DocumentParseError, DocumentReadError, DocumentWriteError, MinifierError, MinifyResult
from spatialmin.core.config import DEFAULT_INPUT_PATH, MinifierSettings, load_settings
from spatialmin.core.precision import MAX_PRECISION, MIN_PRECISION

__all__ = [
    "app",
]


class _MinifyCommand(TyperCommand):
    """Command that reports usage errors with exit status 1.

    Click exits with 2 on usage errors; every failure of this tool,
    argument errors included, exits with 1.
    """

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = 1
            raise


app = typer.Typer(
    name="spatialmin",
    help="Shrink spatial editor JSON exports: short aliases for names and IDs, rounded decimals.",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"spatialmin version {__version__}")
        raise typer.Exit()


def _load_dotenv(env_file: Path | None = None) -> bool:
    """Load environment variables from .env file.

    Args:
        env_file: Explicit path to .env file. If None, searches for .env
                 in current directory and parent directories.

    Returns:
        True if .env was found and loaded, False otherwise.

    Raises:
        typer.Exit: If explicit env_file path doesn't exist.
    """
    from dotenv import load_dotenv

    if env_file is not None:
        if not env_file.exists():
            _format_error(
                title="File Not Found",
                message=f".env file not found: {env_file}",
            )
            raise typer.Exit(1)
        return load_dotenv(env_file, override=False)

    return load_dotenv(override=False)


def _format_error(
    title: str,
    message: str,
    hint: str | None = None,
    details: list[str] | None = None,
) -> None:
    """Display a formatted error with optional hint and details."""
    from rich.console import Console
    from rich.panel import Panel
    from rich.text import Text

    console = Console(stderr=True)

    content = Text()
    content.append(message, style="white")

    if details:
        content.append("\n\n")
        for detail in details:
            content.append(f"  • {detail}\n", style="dim")

    if hint:
        content.append("\n")
        content.append("Hint: ", style="yellow bold")
        content.append(hint, style="yellow")

    panel = Panel(
        content,
        title=f"[red bold]❌ {title}[/]",
        border_style="red",
        padding=(0, 1),
    )
    console.print(panel)


def _parse_precision(raw: str) -> int | None:
    """Return the digit count, or None if ``raw`` is not an integer in range."""
    try:
        digits = int(raw)
    except ValueError:
        return None
    if not MIN_PRECISION <= digits <= MAX_PRECISION:
        return None
    return digits


def _load_run_settings(settings_path: Path | None, overrides: dict[str, Any]) -> MinifierSettings:
    """Load settings, reporting configuration problems and exiting with 1."""
    try:
        return load_settings(settings_path, overrides)
    except (YamlParserError, YamlScannerError) as e:
        _format_error(
            title="YAML Syntax Error",
            message=f"Failed to parse {settings_path.name if settings_path else 'settings'}",
            details=[str(e.problem)] if hasattr(e, "problem") else None,
            hint="Check for unclosed brackets, incorrect indentation, or invalid characters.",
        )
        raise typer.Exit(1) from None
    except FileNotFoundError as e:
        _format_error(
            title="File Not Found",
            message=str(e),
            hint="Check the path and ensure the file exists.",
        )
        raise typer.Exit(1) from None
    except ValidationError as e:
        details = []
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            details.append(f"{loc}: {error['msg']}")
        _format_error(
            title="Configuration Validation Failed",
            message="Invalid minifier settings",
            details=details,
            hint="Check the settings file and SPATIALMIN_* environment variables.",
        )
        raise typer.Exit(1) from None


def _report(result: MinifyResult, show_mappings: bool) -> None:
    typer.echo(f"Minified JSON saved to: {result.output_path}")
    if result.renamed:
        typer.echo(f"Replaced {result.alias_count} unique names and IDs")
    typer.echo(f"Original size: {result.input_bytes:,} bytes")
    typer.echo(f"Minified size: {result.output_bytes:,} bytes")
    typer.echo(f"Size reduction: {result.reduction_percent:.1f}%")

    if show_mappings and result.renamed and result.mappings:
        typer.echo("\nName/ID mappings:")
        for original, alias in result.mappings:
            typer.echo(f"  {original} -> {alias}")


@app.command(
    cls=_MinifyCommand,
    context_settings={"help_option_names": ["-h", "--help"]},
)
def minify(
    input_file: Path | None = typer.Argument(
        None,
        help=f"Input JSON file (default: {DEFAULT_INPUT_PATH}).",
        show_default=False,
    ),
    input_option: Path | None = typer.Option(
        None,
        "--input",
        "-i",
        metavar="FILE",
        help="Input JSON file; takes precedence over the positional argument.",
    ),
    out: Path | None = typer.Option(
        None,
        "--out",
        metavar="FILE",
        help="Output JSON file (default: input name with '.minified' before the extension).",
    ),
    no_rename: bool = typer.Option(
        False,
        "--no-rename",
        help="Disable name and ID replacement with short identifiers.",
    ),
    no_names: bool = typer.Option(
        False,
        "--no-names",
        help="Keep 'name' fields; still alias IDs and references.",
    ),
    no_ids: bool = typer.Option(
        False,
        "--no-ids",
        help="Keep 'id' fields and references; still alias names.",
    ),
    no_precision: bool = typer.Option(
        False,
        "--no-precision",
        help="Disable numeric precision reduction.",
    ),
    precision: str | None = typer.Option(
        None,
        "--precision",
        metavar="DIGITS",
        help=f"Decimal places to keep ({MIN_PRECISION}-{MAX_PRECISION}, default: 6).",
    ),
    formatted: bool = typer.Option(
        False,
        "--formatted",
        "--pretty",
        help="Output with whitespace and indentation (default: minified).",
    ),
    show_mappings: bool = typer.Option(
        False,
        "--show-mappings",
        help="Print the name/ID mappings after the run.",
    ),
    settings: Path | None = typer.Option(
        None,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose/debug logging.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs (for machine processing).",
    ),
    no_dotenv: bool = typer.Option(
        False,
        "--no-dotenv",
        help="Skip loading .env file.",
    ),
    env_file: Path | None = typer.Option(
        None,
        "--env-file",
        help="Path to .env file (skips automatic search).",
    ),
) -> None:
    """Minify a spatial editor JSON export.

    Replaces names and IDs with short identifiers, rewrites every reference
    to them, and reduces numeric precision.
    """
    from spatialmin.core.logging import configure_logging
    from spatialmin.core.minifier import run_minifier

    configure_logging(json_output=json_logs, level="DEBUG" if verbose else "INFO")

    if not no_dotenv:
        _load_dotenv(env_file=env_file)
    elif env_file is not None:
        typer.secho(
            "Warning: --env-file ignored because --no-dotenv is set.",
            fg=typer.colors.YELLOW,
            err=True,
        )

    # Only flags the user actually passed override the settings file
    overrides: dict[str, Any] = {}
    chosen_input = input_option if input_option is not None else input_file
    if chosen_input is not None:
        overrides["input_path"] = chosen_input
    if out is not None:
        overrides["output_path"] = out
    if no_rename:
        overrides["rename_names"] = False
        overrides["rename_ids"] = False
        typer.echo("Name and ID replacement disabled")
    if no_names:
        overrides["rename_names"] = False
        typer.echo("Name replacement disabled")
    if no_ids:
        overrides["rename_ids"] = False
        typer.echo("ID replacement disabled")
    if no_precision:
        overrides["reduce_precision"] = False
        typer.echo("Precision reduction disabled")
    if formatted:
        overrides["formatted"] = True
        typer.echo("Formatted output enabled (with whitespace and indentation)")
    if show_mappings:
        overrides["show_mappings"] = True

    config = _load_run_settings(settings, overrides)

    if precision is not None:
        digits = _parse_precision(precision)
        if digits is None:
            typer.secho(
                f"Invalid precision value '{precision}'. Using default ({config.precision}).",
                fg=typer.colors.YELLOW,
                err=True,
            )
        else:
            config = config.model_copy(update={"precision": digits})
            typer.echo(f"Precision set to {digits} digits")

    typer.echo(f"Loading JSON from: {config.input_path}")
    if config.renaming_enabled:
        typer.echo("Replacing names and IDs with short identifiers...")
    if config.reduce_precision:
        typer.echo(f"Reducing numeric precision to {config.precision} digits...")

    try:
        result = run_minifier(config)
    except DocumentReadError as e:
        _format_error(
            title="Cannot Read Input",
            message=str(e),
            hint="Check the input path, or pass the file with -i/--input.",
        )
        raise typer.Exit(1) from None
    except DocumentParseError as e:
        _format_error(
            title="Invalid JSON",
            message=str(e),
            hint="The input must be a JSON document exported by the spatial editor.",
        )
        raise typer.Exit(1) from None
    except DocumentWriteError as e:
        _format_error(
            title="Cannot Write Output",
            message=str(e),
            hint="Check that the output directory exists and is writable.",
        )
        raise typer.Exit(1) from None
    except MinifierError as e:
        _format_error(title="Minify Failed", message=str(e))
        raise typer.Exit(1) from None

    _report(result, config.show_mappings)


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
