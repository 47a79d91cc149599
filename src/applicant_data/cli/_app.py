"""Root Typer application with global options."""

from pathlib import Path as FilePath
from typing import Optional

import typer

from applicant_data.cli._console import print_err
from applicant_data.config.store_config import load_store_config, set_store_config

app = typer.Typer(
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug-level logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Warnings and errors only"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON to stdout"),
    config: Optional[FilePath] = typer.Option(
        None, "--config", "-c", help="Store config YAML (overrides APPLICANT_DATA_CONFIG)"
    ),
):
    """Inspect and edit persisted applicant answer documents."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["json"] = json_output

    if config is not None:
        if not config.exists():
            print_err(f"Config file not found: {config}")
            raise SystemExit(1)
        try:
            set_store_config(load_store_config(config))
        except ValueError as e:
            print_err(str(e))
            raise SystemExit(1)
