"""
Base class and helpers for resource APIs.
"""

import mimetypes
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterable, Optional, Union

from haulbase.core.errors import ValidationError

if TYPE_CHECKING:
    from haulbase.api.client import HaulbaseClient

FileInput = Union[str, Path, tuple[str, bytes, str]]


class ResourceApi:
    """A group of endpoints sharing one HaulbaseClient."""

    def __init__(self, client: "HaulbaseClient") -> None:
        self.client = client


def pick(filters: Optional[dict[str, Any]], keys: Iterable[str]) -> dict[str, Any]:
    """Keep only the filter keys an endpoint understands."""
    if not filters:
        return {}
    return {key: filters[key] for key in keys if key in filters}


def file_part(file: FileInput) -> tuple[str, bytes, str]:
    """
    Normalize a file argument into a (name, content, content_type) triple.

    Accepts a filesystem path or an explicit triple.
    """
    if isinstance(file, tuple):
        name, content, content_type = file
    else:
        path = Path(file)
        name = path.name
        content = path.read_bytes()
        content_type = guess_content_type(name)

    if not content:
        raise ValidationError(f"File is empty: {name}")
    return name, content, content_type


def guess_content_type(name: str, default: str = "application/octet-stream") -> str:
    return mimetypes.guess_type(name)[0] or default
