"""Document commands: read and write one applicant's answers, evaluate predicates."""

import json
from datetime import date
from pathlib import Path as FilePath
from typing import List

import typer

from applicant_data.cli._app import app
from applicant_data.cli._common import (
    ensure_initialized,
    load_document,
    parse_path,
    save_document,
    setup_logging,
)
from applicant_data.cli._console import output_result, output_table, print_err, print_ok
from applicant_data.exceptions import ApplicantDataError
from applicant_data.predicates.json_path_predicate import JsonPathPredicate
from applicant_data.scalars import ScalarType
from applicant_data.utils.currency import Currency


def _init(ctx: typer.Context) -> None:
    ensure_initialized()
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])


def _to_output(value):
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Currency):
        return value.dollars_string()
    return value


@app.command("show", help="Print the whole document.")
def show_cmd(
    ctx: typer.Context,
    file: FilePath = typer.Argument(..., help="Persisted applicant data JSON file"),
):
    _init(ctx)
    applicant_data = load_document(file)
    output_result(json.loads(applicant_data.as_json_string()), ctx=ctx, title=str(file))


@app.command("read", help="Read a typed value at a path.")
def read_cmd(
    ctx: typer.Context,
    file: FilePath = typer.Argument(..., help="Persisted applicant data JSON file"),
    path: str = typer.Argument(..., help="Path, e.g. applicant.name.first_name"),
    scalar_type: ScalarType = typer.Option(ScalarType.STRING, "--type", "-t", help="Stored type"),
):
    _init(ctx)
    applicant_data = load_document(file)
    data_path = parse_path(path)

    value = applicant_data.read_scalar(data_path, scalar_type)
    if value is None:
        print_err(f"No {scalar_type.value} value at {data_path}")
        raise SystemExit(1)

    output_result({"path": str(data_path), "value": _to_output(value)}, ctx=ctx)


@app.command("put", help="Parse and write a typed value at a path.")
def put_cmd(
    ctx: typer.Context,
    file: FilePath = typer.Argument(..., help="Persisted applicant data JSON file"),
    path: str = typer.Argument(..., help="Path, e.g. applicant.dob"),
    value: str = typer.Argument(..., help="Raw value; empty string clears"),
    scalar_type: ScalarType = typer.Option(ScalarType.STRING, "--type", "-t", help="Value type"),
):
    _init(ctx)
    applicant_data = load_document(file)
    data_path = parse_path(path)

    try:
        applicant_data.put_scalar(data_path, scalar_type, value)
    except ApplicantDataError as e:
        print_err(f"Cannot write {data_path}: {e}")
        raise SystemExit(1)

    save_document(file, applicant_data)
    if not ctx.obj["quiet"]:
        print_ok(f"Wrote {data_path}")


@app.command("delete", help="Delete whatever is stored at a path.")
def delete_cmd(
    ctx: typer.Context,
    file: FilePath = typer.Argument(..., help="Persisted applicant data JSON file"),
    path: str = typer.Argument(..., help="Path to delete"),
):
    _init(ctx)
    applicant_data = load_document(file)
    data_path = parse_path(path)

    existed = applicant_data.has_path(data_path)
    try:
        applicant_data.maybe_delete(data_path)
    except ApplicantDataError as e:
        print_err(f"Cannot delete {data_path}: {e}")
        raise SystemExit(1)
    save_document(file, applicant_data)

    if not ctx.obj["quiet"]:
        print_ok(f"Deleted {data_path}" if existed else f"Nothing stored at {data_path}")


@app.command("entities", help="List repeated entity names at a path.")
def entities_cmd(
    ctx: typer.Context,
    file: FilePath = typer.Argument(..., help="Persisted applicant data JSON file"),
    path: str = typer.Argument(..., help="Path to the entity array"),
):
    _init(ctx)
    applicant_data = load_document(file)
    names = applicant_data.read_repeated_entities(parse_path(path))
    rows = [{"index": i, "entity_name": name} for i, name in enumerate(names)]
    output_table(rows, ctx=ctx, title=path)


@app.command("set-entities", help="Write repeated entity names at a path.")
def set_entities_cmd(
    ctx: typer.Context,
    file: FilePath = typer.Argument(..., help="Persisted applicant data JSON file"),
    path: str = typer.Argument(..., help="Path to the entity array"),
    names: List[str] = typer.Argument(None, help="Entity names in order"),
):
    _init(ctx)
    applicant_data = load_document(file)
    data_path = parse_path(path)

    try:
        applicant_data.put_repeated_entities(data_path, names or [])
    except ApplicantDataError as e:
        print_err(f"Cannot write entities at {data_path}: {e}")
        raise SystemExit(1)
    save_document(file, applicant_data)
    if not ctx.obj["quiet"]:
        print_ok(f"Wrote {len(names or [])} entities at {data_path}")


@app.command("delete-entities", help="Delete repeated entities by index.")
def delete_entities_cmd(
    ctx: typer.Context,
    file: FilePath = typer.Argument(..., help="Persisted applicant data JSON file"),
    path: str = typer.Argument(..., help="Path to the entity array"),
    indices: List[int] = typer.Argument(..., help="Indices to delete"),
):
    _init(ctx)
    applicant_data = load_document(file)
    data_path = parse_path(path)

    try:
        deleted = applicant_data.delete_repeated_entities(data_path, indices)
    except ApplicantDataError as e:
        print_err(f"Cannot delete entities at {data_path}: {e}")
        raise SystemExit(1)

    if not deleted:
        print_err(f"No entity at index {max(indices)} of {data_path}")
        raise SystemExit(1)

    save_document(file, applicant_data)
    if not ctx.obj["quiet"]:
        print_ok(f"Deleted {len(set(indices))} entities at {data_path}")


@app.command("eval", help="Evaluate a JSON path predicate; exits 2 when it is false.")
def eval_cmd(
    ctx: typer.Context,
    file: FilePath = typer.Argument(..., help="Persisted applicant data JSON file"),
    query: str = typer.Argument(..., help='Query, e.g. "$.applicant.children[?age > 5]"'),
):
    _init(ctx)
    applicant_data = load_document(file)

    try:
        result = applicant_data.eval_predicate(JsonPathPredicate.create(query))
    except ApplicantDataError as e:
        print_err(str(e))
        raise SystemExit(1)

    output_result({"query": query, "result": result}, ctx=ctx)
    if not result:
        raise typer.Exit(code=2)
