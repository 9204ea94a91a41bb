"""Whole-file JSON storage helpers."""

from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, TypeAdapter
from pydantic import ValidationError as SchemaError

from diet_manager.domain.errors import PersistenceError

T = TypeVar("T")


def read_document(path: Path, schema: TypeAdapter[T]) -> T | None:
    """Parse ``path`` with ``schema``; None when the file does not exist."""
    try:
        raw = path.read_bytes()
    except FileNotFoundError:
        return None
    except OSError as exc:
        raise PersistenceError(f"Failed to read {path}: {exc}") from exc
    try:
        return schema.validate_json(raw)
    except SchemaError as exc:
        raise PersistenceError(f"Malformed data in {path}: {exc}") from exc


def write_document(path: Path, schema: TypeAdapter[T], document: T) -> None:
    """Replace ``path`` with the JSON form of ``document``."""
    payload = schema.dump_json(document, indent=4, by_alias=True, exclude_none=True)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(payload)
    except OSError as exc:
        raise PersistenceError(f"Failed to write {path}: {exc}") from exc


class Document(BaseModel):
    """Base model for stored documents."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")
