"""
Shared plumbing for domain views.

Records are plain dicts from the API. Helpers here read them leniently:
missing fields become "" or 0 and numbers arrive as strings more often than
not.
"""

import math
from typing import Any, Callable, Iterable, Optional

import structlog

from haulbase.api.client import HaulbaseClient
from haulbase.state import ApiState, Mutation


def get_path(record: Optional[dict[str, Any]], path: str) -> Any:
    """Read a dotted path ("broker.name") from nested dicts; None when absent."""
    value: Any = record
    for part in path.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


def text(record: Optional[dict[str, Any]], path: str) -> str:
    value = get_path(record, path)
    return "" if value is None else str(value)


def to_float(value: Any) -> float:
    """Parse a number leniently: "12.5" -> 12.5, None, garbage, NaN or infinity -> 0.0."""
    if isinstance(value, bool) or value is None:
        return 0.0
    try:
        result = float(value) if isinstance(value, (int, float)) else float(str(value).strip())
    except (ValueError, OverflowError):
        return 0.0
    return result if math.isfinite(result) else 0.0


def to_int(value: Any) -> int:
    """Parse a whole number leniently, truncating decimals."""
    return int(to_float(value))


def matches_search(record: dict[str, Any], query: str, fields: Iterable[str]) -> bool:
    """Case-insensitive substring match of `query` against any of `fields`."""
    needle = query.strip().lower()
    if not needle:
        return True
    return any(needle in text(record, field).lower() for field in fields)


def count_by(records: Iterable[dict[str, Any]], key: Callable[[dict[str, Any]], Any]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for record in records:
        value = key(record)
        counts[value] = counts.get(value, 0) + 1
    return counts


def as_records(value: Any, key: Optional[str] = None) -> list[dict[str, Any]]:
    """
    Coerce fetched data into a list of records.

    With `key`, an envelope such as `{"expenses": [...], "total": 12}` is
    unwrapped first; a bare list is accepted either way.
    """
    if key is not None and isinstance(value, dict):
        value = value.get(key)
    if isinstance(value, list):
        return [item for item in value if isinstance(item, dict)]
    return []


def merge_record(
    records: list[dict[str, Any]], record_id: Any, updates: dict[str, Any]
) -> list[dict[str, Any]]:
    """Copy of `records` with `updates` merged into the record whose id matches."""
    return [{**r, **updates} if r.get("id") == record_id else r for r in records]


def remove_record(records: list[dict[str, Any]], record_id: Any) -> list[dict[str, Any]]:
    return [r for r in records if r.get("id") != record_id]


class ListView:
    """
    Base for list views: a fetched list plus a mutation tracker.

    Subclasses add search, filters, sorting and statistics on top of
    `all_records`.

    Endpoints that answer `{<records_key>: [...], "total": N}` set
    `records_key`; local edits keep that shape.
    """

    def __init__(
        self,
        client: HaulbaseClient,
        fetcher: Callable[..., Any],
        name: str,
        logger: Optional[structlog.BoundLogger] = None,
        records_key: Optional[str] = None,
    ) -> None:
        self.client = client
        self.logger = logger or structlog.get_logger(view=name)
        self.records_key = records_key
        initial: Any = {records_key: [], "total": 0} if records_key else []
        self.list_state = ApiState(fetcher, initial_data=initial)
        self.mutations = Mutation()

    @property
    def all_records(self) -> list[dict[str, Any]]:
        return as_records(self.list_state.data, self.records_key)

    @property
    def total(self) -> int:
        """Server-side total when the envelope carries one, else the fetched count."""
        data = self.list_state.data
        if isinstance(data, dict) and "total" in data:
            return to_int(data["total"])
        return len(self.all_records)

    @property
    def loading(self) -> bool:
        return self.list_state.loading

    @property
    def error(self) -> Optional[str]:
        return self.list_state.error

    @property
    def mutating(self) -> bool:
        return self.mutations.loading

    @property
    def mutation_error(self) -> Optional[str]:
        return self.mutations.error

    def fetch(self, *args: Any, **kwargs: Any) -> Any:
        return self.list_state.fetch(*args, **kwargs)

    def refetch(self) -> Any:
        return self.list_state.refetch()

    def clear_error(self) -> None:
        self.list_state.clear_error()

    def detach(self) -> None:
        self.list_state.detach()
        self.mutations.detach()

    def _replace_records(
        self, change: Callable[[list[dict[str, Any]]], list[dict[str, Any]]]
    ) -> None:
        def update(data: Any) -> Any:
            records = change(as_records(data, self.records_key))
            if self.records_key is None:
                return records
            envelope = data if isinstance(data, dict) else {}
            return {**envelope, self.records_key: records}

        self.list_state.set_data(update)

    def _merge_local(self, record_id: Any, updates: dict[str, Any]) -> None:
        self._replace_records(lambda records: merge_record(records, record_id, updates))

    def _remove_local(self, record_id: Any) -> None:
        before = len(self.all_records)
        self._replace_records(lambda records: remove_record(records, record_id))
        data = self.list_state.data
        if isinstance(data, dict) and "total" in data:
            removed = before - len(self.all_records)
            self.list_state.set_data({**data, "total": max(to_int(data["total"]) - removed, 0)})


class DetailView:
    """Base for single-record views."""

    def __init__(
        self,
        client: HaulbaseClient,
        record_id: str,
        fetcher: Callable[[], Any],
        name: str,
        logger: Optional[structlog.BoundLogger] = None,
    ) -> None:
        self.client = client
        self.record_id = record_id
        self.logger = logger or structlog.get_logger(view=name, record_id=record_id)
        self.detail_state = ApiState(fetcher)
        self.mutations = Mutation()

    @property
    def record(self) -> Optional[dict[str, Any]]:
        data = self.detail_state.data
        return data if isinstance(data, dict) else None

    @property
    def loading(self) -> bool:
        return self.detail_state.loading

    @property
    def error(self) -> Optional[str]:
        return self.detail_state.error

    @property
    def mutating(self) -> bool:
        return self.mutations.loading

    def fetch(self) -> Any:
        return self.detail_state.fetch()

    def refetch(self) -> Any:
        return self.detail_state.refetch()

    def clear_error(self) -> None:
        self.detail_state.clear_error()

    def detach(self) -> None:
        self.detail_state.detach()
        self.mutations.detach()

    def update_field(self, field: str, value: Any) -> Any:
        return self.update_fields({field: value})

    def update_fields(self, updates: dict[str, Any]) -> Any:
        """Send `updates` to the server, then merge them into the local record."""
        result = self.mutations.mutate(lambda: self._update(updates))
        self._merge_local(updates)
        return result

    def _update(self, updates: dict[str, Any]) -> Any:
        raise NotImplementedError

    def _merge_local(self, updates: dict[str, Any]) -> None:
        self.detail_state.set_data(lambda current: {**current, **updates} if current else current)
