"""Loading advocate and opportunity records from YAML or JSON files.

The engine itself never reads files; this module backs the CLI. A record
file holds either a list of records or a mapping with the list under an
``advocates`` / ``opportunities`` key. JSON is read by the YAML parser.
"""

from pathlib import Path
from typing import Any, List, Type, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from advocate_matching.config.exceptions import ConfigurationError, format_validation_errors
from advocate_matching.domain.models import Advocate, Opportunity

RecordT = TypeVar("RecordT", bound=BaseModel)


def load_advocates(path: Path) -> List[Advocate]:
    """Load the candidate pool from a record file."""
    return load_records(path, Advocate, "advocates")


def load_opportunities(path: Path) -> List[Opportunity]:
    """Load one or more opportunities from a record file.

    A mapping without an ``opportunities`` key is treated as a single record.
    """
    return load_records(path, Opportunity, "opportunities", allow_single=True)


def load_records(
    path: Path, model: Type[RecordT], key: str, allow_single: bool = False
) -> List[RecordT]:
    """
    Parse and validate a record file.

    Args:
        path: File to read
        model: Record model to validate each entry with
        key: Top-level key holding the list when the document is a mapping
        allow_single: Treat a mapping without ``key`` as one record

    Returns:
        Validated records in file order

    Raises:
        ConfigurationError: If the file is missing, unparsable, or any record is invalid
    """
    document = _read_document(path)
    entries = _extract_entries(document, key, allow_single, path)

    records = []
    errors = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            errors.append(f"{key}[{index}]: expected a mapping, got {type(entry).__name__}")
            continue
        try:
            records.append(model.model_validate(entry))
        except ValidationError as e:
            for message in format_validation_errors(e):
                errors.append(f"{key}[{index}]: {message}")

    if errors:
        raise ConfigurationError(
            f"Invalid records in {path}",
            errors=errors,
            suggestions=[
                "Every record needs a non-empty id",
                "company_size must be one of: 1-10, 11-50, 51-200, 201-500, 501-1000, 1000+",
            ],
        )

    return records


def _read_document(path: Path) -> Any:
    try:
        with open(path, "r") as f:
            return yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(
            f"Record file not found: {path}",
            suggestions=[f"Ensure {path} exists and is readable"],
        ) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse record file {path}: {e}",
            suggestions=["Check the YAML/JSON syntax of the file"],
        ) from e


def _extract_entries(document: Any, key: str, allow_single: bool, path: Path) -> List[Any]:
    if document is None:
        return []
    if isinstance(document, list):
        return document
    if isinstance(document, dict):
        if key in document:
            entries = document[key]
            if entries is None:
                return []
            if not isinstance(entries, list):
                raise ConfigurationError(
                    f"'{key}' in {path} must be a list",
                    errors=[f"Got {type(entries).__name__}"],
                )
            return entries
        if allow_single:
            return [document]
    raise ConfigurationError(
        f"Unrecognized record file layout in {path}",
        errors=[f"Expected a list or a mapping with a '{key}' key"],
    )
