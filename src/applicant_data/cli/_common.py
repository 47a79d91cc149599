"""Shared CLI utilities: logging, environment and document file I/O."""

import logging
from pathlib import Path as FilePath

from dotenv import load_dotenv
from rich.logging import RichHandler

from applicant_data.cli._console import print_err
from applicant_data.exceptions import ApplicantDataError, InvalidPathError
from applicant_data.path import Path
from applicant_data.store.applicant_data import ApplicantData

logger = logging.getLogger(__name__)


def ensure_initialized() -> None:
    """Load .env so APPLICANT_DATA_CONFIG can be set per project."""
    load_dotenv()


def setup_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """Configure logging with Rich handler."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    handler = RichHandler(
        console=None,  # Use default stderr
        show_time=True,
        show_path=False,
        markup=True,
        rich_tracebacks=True,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def load_document(file_path: FilePath) -> ApplicantData:
    """Read a persisted document, exiting with status 1 on failure."""
    if not file_path.exists():
        print_err(f"File not found: {file_path}")
        raise SystemExit(1)

    try:
        return ApplicantData(file_path.read_text(encoding="utf-8"))
    except ApplicantDataError as e:
        print_err(str(e))
        raise SystemExit(1)


def save_document(file_path: FilePath, applicant_data: ApplicantData) -> None:
    """Write a document back to disk in its persisted form."""
    file_path.write_text(applicant_data.as_json_string(), encoding="utf-8")
    logger.debug(f"Wrote {file_path}")


def parse_path(text: str) -> Path:
    """Parse a document path argument, exiting with status 1 if malformed."""
    try:
        return Path.create(text)
    except InvalidPathError as e:
        print_err(str(e))
        raise SystemExit(1)
