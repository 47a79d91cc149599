"""Merge command: copy answers forward from another version."""

from pathlib import Path as FilePath

import typer

from applicant_data.cli._app import app
from applicant_data.cli._common import (
    ensure_initialized,
    load_document,
    save_document,
    setup_logging,
)
from applicant_data.cli._console import output_result, print_err, print_ok, print_warn
from applicant_data.exceptions import ApplicantDataError
from applicant_data.store.merge import merge_versions


@app.command("merge", help="Merge SOURCE into TARGET; TARGET wins conflicts.")
def merge_cmd(
    ctx: typer.Context,
    target: FilePath = typer.Argument(..., help="Document that keeps its values"),
    source: FilePath = typer.Argument(..., help="Document to copy missing answers from"),
    write: bool = typer.Option(False, "--write", "-w", help="Write the merged result to TARGET"),
):
    ensure_initialized()
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    snapshots = [load_document(target), load_document(source)]
    try:
        merged, report = merge_versions(snapshots)
    except ApplicantDataError as e:
        print_err(f"Cannot merge {source} into {target}: {e}")
        raise SystemExit(1)

    if write:
        save_document(target, merged)
        if not ctx.obj["quiet"]:
            print_ok(f"Merged {source} into {target}")

    if report.has_conflicts and not ctx.obj["quiet"]:
        print_warn(f"{report.total_conflicts} conflicting path(s) kept from {target}")

    output_result(report.model_dump(), ctx=ctx, title="Merge report")
