#!/usr/bin/env python3
"""
usergroup-manager - ElastiCache user discovery for composition pipelines

Runs the discovery function once against a request document and prints the
response, the way a pipeline host would see it.
"""
import json
from pathlib import Path
from typing import Any, Dict, Optional

import typer
import yaml
from rich.console import Console

from . import __version__
from .function import UserGroupManagerFunction
from .sdk.models import Credentials, RunFunctionRequest, RunFunctionResponse
from .utils.config import Config
from .utils.logging_config import LogLevel, setup_logging

app = typer.Typer(
    help="usergroup-manager - discover ElastiCache users and publish their IDs to a composition pipeline.",
    add_completion=False,
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


def _load_document(path: Path, what: str) -> Dict[str, Any]:
    """Load a YAML or JSON mapping from a file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        err_console.print(f"[red]Error: Could not read {what} file {path}: {e}[/red]")
        raise typer.Exit(1)

    if not isinstance(data, dict):
        err_console.print(f"[red]Error: {what.capitalize()} file {path} must contain a mapping.[/red]")
        raise typer.Exit(1)
    return data


def _print_response(rsp: RunFunctionResponse, output: str) -> None:
    data = rsp.to_dict()
    if output == "json":
        text = json.dumps(data, indent=2)
    else:
        text = yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
    console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)


@app.command()
def run(
    request_file: Path = typer.Option(
        ..., "--request", "-r", help="RunFunctionRequest document (YAML or JSON)"
    ),
    credentials_file: Optional[Path] = typer.Option(
        None,
        "--credentials",
        "-c",
        help="Credentials document mapping a credentials name to key/value secrets",
    ),
    output: str = typer.Option("yaml", "--output", "-o", help="Output format: yaml or json"),
    config_file: Optional[Path] = typer.Option(
        None, "--config", help="Configuration file (default: ~/.usergroup-manager/config.yaml)"
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", "-l", help="Log level: DEBUG, INFO, WARNING, ERROR"
    ),
):
    """Run the function once and print the response.

    Exits with status 1 when the response carries a fatal result.
    """
    if output not in ("yaml", "json"):
        err_console.print(f"[red]Error: Unsupported output format '{output}'.[/red]")
        err_console.print("Supported formats: yaml, json")
        raise typer.Exit(1)

    config = Config(config_file)
    logging_config = config.get_logging_config()
    if log_level:
        try:
            logging_config.level = LogLevel(log_level.upper())
        except ValueError:
            err_console.print(f"[red]Error: Invalid log level '{log_level}'.[/red]")
            raise typer.Exit(1)
    setup_logging(logging_config)

    req = RunFunctionRequest.from_dict(_load_document(request_file, "request"))

    if credentials_file:
        for name, values in _load_document(credentials_file, "credentials").items():
            if not isinstance(values, dict):
                err_console.print(f"[red]Error: Credentials '{name}' must be a mapping.[/red]")
                raise typer.Exit(1)
            req.credentials[name] = Credentials.from_dict({"credentialData": {"data": values}})

    function = UserGroupManagerFunction(config=config.get_function_config())
    rsp = function.run_function(req)

    _print_response(rsp, output)

    if rsp.has_fatal_result():
        for result in rsp.results:
            err_console.print(f"[red]Fatal: {result.message}[/red]")
        raise typer.Exit(1)


@app.command()
def version():
    """Show the application version and exit."""
    console.print(f"usergroup-manager version: {__version__}")
    raise typer.Exit()


def main() -> None:
    app()


if __name__ == "__main__":
    main()
