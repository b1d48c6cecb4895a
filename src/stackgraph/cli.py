# src/stackgraph/cli.py
"""stackgraph Command Line Interface.

Entry point for the stackgraph CLI tool.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
from dynaconf.vendor.ruamel.yaml.parser import ParserError as YamlParserError
from dynaconf.vendor.ruamel.yaml.scanner import ScannerError as YamlScannerError
from pydantic import ValidationError

from stackgraph import __version__
from stackgraph.core.config import StackgraphSettings, build_validators, load_settings
from stackgraph.core.graph import (
    DependencyGraph,
    FileGraphSource,
    GraphDeserializationError,
    GraphValidationError,
    KnownProvidersValidator,
    Validator,
    closure,
)
from stackgraph.core.logging import get_logger

__all__ = [
    "app",
]

logger = get_logger(__name__)

app = typer.Typer(
    name="stackgraph",
    help="stackgraph: resolve the components a deployment needs.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"stackgraph version {__version__}")
        raise typer.Exit()


def _load_dotenv(env_file: Path | None = None) -> bool:
    """Load environment variables from a .env file.

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
            typer.secho(
                f"Error: .env file not found: {env_file}",
                fg=typer.colors.RED,
                err=True,
            )
            raise typer.Exit(1)
        return load_dotenv(env_file, override=False)

    return load_dotenv(override=False)


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
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
        exists=False,  # Existence checked in _load_dotenv for a better message
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
) -> None:
    """stackgraph: resolve the components a deployment needs."""
    from stackgraph.core.logging import configure_logging

    log_level = "DEBUG" if verbose else "INFO"
    configure_logging(json_output=json_logs, level=log_level)

    # Commands reconfigure from settings once loaded; these flags still win
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["json_logs"] = json_logs

    if not no_dotenv:
        _load_dotenv(env_file=env_file)
    elif env_file is not None:
        typer.secho(
            "Warning: --env-file ignored because --no-dotenv is set.",
            fg=typer.colors.YELLOW,
            err=True,
        )


def _format_error(
    title: str,
    message: str,
    hint: str | None = None,
    details: list[str] | None = None,
) -> None:
    """Display a formatted error panel with optional hint and details."""
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
        title=f"[red bold]{title}[/]",
        border_style="red",
        padding=(0, 1),
    )
    console.print(panel)


def _load_settings_or_exit(settings: Path | None) -> StackgraphSettings:
    """Load settings from a file, or return defaults when no file is given."""
    if settings is None:
        return StackgraphSettings()

    settings_path = settings.expanduser()
    try:
        return load_settings(settings_path)
    except (YamlParserError, YamlScannerError) as e:
        _format_error(
            title="YAML Syntax Error",
            message=f"Failed to parse {settings_path.name}",
            details=[str(e.problem)] if hasattr(e, "problem") else None,
            hint="Check for unclosed brackets, incorrect indentation, or invalid characters.",
        )
        raise typer.Exit(1) from None
    except FileNotFoundError:
        _format_error(
            title="File Not Found",
            message=f"Settings file does not exist: {settings}",
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
            message=f"Invalid settings in {settings_path.name}",
            details=details,
            hint="Check field names, types, and required values.",
        )
        raise typer.Exit(1) from None


def _apply_logging_settings(ctx: typer.Context, config: StackgraphSettings) -> None:
    """Reconfigure logging from the settings file. --verbose and --json-logs override it."""
    from stackgraph.core.logging import configure_logging

    flags = ctx.obj or {}
    level = "DEBUG" if flags.get("verbose", False) else config.logging.level
    json_output = flags.get("json_logs", False) or config.logging.json_output
    configure_logging(json_output=json_output, level=level)


def _build_chain(config: StackgraphSettings, providers: list[str], include_declared: bool) -> list[Validator]:
    """Validator chain from settings, extended by --provider and --include-declared.

    Either option joins the configured providers and turns the
    known-providers check on if the settings left it off.
    """
    chain = build_validators(config)
    if not providers and not include_declared:
        return chain

    known = [*config.providers, *providers]
    extended = KnownProvidersValidator(known, include_declared=include_declared or config.include_declared_names)
    replaced = False
    for index, check in enumerate(chain):
        if isinstance(check, KnownProvidersValidator):
            chain[index] = extended
            replaced = True
    if not replaced:
        chain.append(extended)
    return chain


def _resolve_graph_path(graph: Path | None, config: StackgraphSettings) -> Path:
    """--graph wins over graph_path from settings."""
    path = graph if graph is not None else config.graph_path
    if path is None:
        _format_error(
            title="No Graph File",
            message="No dependency graph file given.",
            hint="Pass --graph PATH or set graph_path in the settings file.",
        )
        raise typer.Exit(1)
    return path.expanduser()


def _load_graph_or_exit(path: Path, validators: list[Validator]) -> DependencyGraph:
    """Load a graph file, turning every load failure into an error panel and exit code 1."""
    try:
        return FileGraphSource(path).get_graph(validators)
    except FileNotFoundError:
        _format_error(
            title="File Not Found",
            message=f"Dependency graph file does not exist: {path}",
            hint="Check the path and ensure the file exists.",
        )
        raise typer.Exit(1) from None
    except GraphDeserializationError as e:
        logger.debug("graph deserialization failed", path=str(path), details=e.details)
        _format_error(
            title="Invalid Dependency Graph",
            message=f"{path.name} does not match the graph schema",
            details=e.details,
            hint='Expected {"graph": [{"name": "...", "dependencies": ["..."]}]} and no other fields.',
        )
        raise typer.Exit(1) from None
    except GraphValidationError as e:
        logger.debug("graph validation failed", path=str(path), validator=e.validator, stage=e.stage, names=list(e.names))
        _format_error(
            title="Dependency Graph Validation Failed",
            message=str(e),
            details=[f"{e.failure.code}: {', '.join(e.names)}"] if e.names else None,
        )
        raise typer.Exit(1) from None


@app.command()
def validate(
    ctx: typer.Context,
    graph: Path | None = typer.Option(
        None,
        "--graph",
        "-g",
        help="Path to the dependency graph JSON file.",
    ),
    settings: Path | None = typer.Option(
        None,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
    provider: list[str] = typer.Option(
        [],
        "--provider",
        "-p",
        help="Known provider name (repeatable). Enables the known-providers check.",
    ),
    include_declared: bool = typer.Option(
        False,
        "--include-declared",
        help="Count declared entry names as known providers. Enables the known-providers check.",
    ),
) -> None:
    """Validate a dependency graph without resolving anything."""
    config = _load_settings_or_exit(settings)
    _apply_logging_settings(ctx, config)
    path = _resolve_graph_path(graph, config)
    chain = _build_chain(config, provider, include_declared)
    loaded = _load_graph_or_exit(path, chain)

    typer.echo("✅ Dependency graph valid!")
    typer.echo(f"  Entries: {len(loaded)}")
    typer.echo(f"  Providers: {', '.join(loaded.providers) or '(none)'}")
    typer.echo(f"  Graph: {loaded.node_count} nodes, {loaded.edge_count} edges")
    typer.echo(f"  Checks: {', '.join(check.name for check in chain) or '(none)'}")


@app.command()
def resolve(
    ctx: typer.Context,
    seeds: list[str] = typer.Argument(
        ...,
        help="Components to resolve the dependency closure for.",
    ),
    graph: Path | None = typer.Option(
        None,
        "--graph",
        "-g",
        help="Path to the dependency graph JSON file.",
    ),
    settings: Path | None = typer.Option(
        None,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
    provider: list[str] = typer.Option(
        [],
        "--provider",
        "-p",
        help="Known provider name (repeatable). Enables the known-providers check.",
    ),
    include_declared: bool = typer.Option(
        False,
        "--include-declared",
        help="Count declared entry names as known providers. Enables the known-providers check.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print the closure as a JSON array.",
    ),
) -> None:
    """Print every component the seeds need, seeds first, breadth-first."""
    config = _load_settings_or_exit(settings)
    _apply_logging_settings(ctx, config)
    path = _resolve_graph_path(graph, config)
    loaded = _load_graph_or_exit(path, _build_chain(config, provider, include_declared))

    names = closure(loaded, seeds)
    logger.debug("resolved closure", seeds=seeds, size=len(names))

    if json_output:
        typer.echo(json.dumps(names))
    else:
        for name in names:
            typer.echo(name)


@app.command()
def show(
    graph: Path = typer.Option(
        ...,
        "--graph",
        "-g",
        help="Path to the dependency graph JSON file.",
    ),
) -> None:
    """List declared entries and their dependencies, without validation."""
    loaded = _load_graph_or_exit(graph.expanduser(), [])

    if not loaded.entries:
        typer.echo("(no entries)")
        return

    for entry in loaded.entries:
        dependencies = ", ".join(entry.dependencies) or "-"
        typer.echo(f"{entry.name}: {dependencies}")
