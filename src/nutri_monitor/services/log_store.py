"""Log store for the daily nutrition log."""

import json
import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Literal, Protocol
from uuid import uuid4

from pydantic import TypeAdapter, ValidationError

from nutri_monitor.adapters.calorieninjas_models import CalorieNinjasItem
from nutri_monitor.domain.nutrition import (
    NutritionFact,
    NutritionItem,
    Totals,
    sum_totals,
)
from nutri_monitor.services.lookup import GatewayError, LookupGateway

_logger = logging.getLogger(__name__)


class SnapshotRecord(CalorieNinjasItem):
    """One stored log entry, with the same bounds as lookup items."""

    id: str


_SNAPSHOT_ADAPTER = TypeAdapter(list[SnapshotRecord])

CLEAR_PROMPT = "Clear all logs?"
MAX_SUGGESTIONS = 5

Status = Literal["idle", "searching"]


class LogStorage(Protocol):
    """Persistence interface for the log snapshot slot."""

    def load(self) -> str | bytes | None:
        """Return the stored snapshot text, or None when the slot is empty."""

    def save(self, payload: str) -> None:
        """Replace the stored snapshot text."""


class SnapshotError(ValueError):
    """Raised when a stored snapshot cannot be decoded into log items."""


@dataclass
class LogStore:
    """Owns the ordered (newest first) log and its derived totals."""

    gateway: LookupGateway
    storage: LogStorage
    query: str = ""
    _items: list[NutritionItem] = field(default_factory=list)
    _in_flight: int = 0
    _initialized: bool = False

    @property
    def items(self) -> tuple[NutritionItem, ...]:
        """Return the current log, newest first."""
        return tuple(self._items)

    @property
    def totals(self) -> Totals:
        """Return summed macros over the current log."""
        return sum_totals(self._items)

    @property
    def status(self) -> Status:
        """Return whether a lookup is outstanding."""
        return "searching" if self._in_flight else "idle"

    @property
    def is_searching(self) -> bool:
        """Return True while any lookup is outstanding."""
        return self._in_flight > 0

    def initialize(self) -> None:
        """Load the persisted snapshot, falling back to an empty log."""
        if self._initialized:
            _logger.debug("Log store already initialized")
            return
        self._initialized = True
        raw = self.storage.load()
        if raw is None:
            self._items = []
            return
        try:
            self._items = decode_snapshot(raw)
        except SnapshotError as exc:
            _logger.warning("Discarding unreadable log snapshot: %s", exc)
            self._items = []
            return
        _logger.info("Loaded log snapshot: items=%s", len(self._items))

    async def search(
        self, query: str | None = None, override: str | None = None
    ) -> list[NutritionItem]:
        """Look up a query and prepend the resulting items to the log."""
        if query is not None:
            self.query = query
        effective = override or self.query
        if not effective:
            return []

        self._in_flight += 1
        try:
            result = await self.gateway.lookup(effective)
            if isinstance(result, GatewayError):
                _logger.warning(
                    "Search failed: query=%s status=%s error=%s details=%s",
                    effective,
                    result.status_code,
                    result.error,
                    result.details,
                )
                return []
            if not result:
                _logger.info("Search returned no items: query=%s", effective)
                return []
            added = self._add_batch(result)
            self.query = ""
            return added
        finally:
            self._in_flight -= 1

    def remove(self, item_id: str) -> bool:
        """Remove the item with a matching id; unknown ids are ignored."""
        remaining = [item for item in self._items if item.id != item_id]
        if len(remaining) == len(self._items):
            return False
        self._items = remaining
        self._persist()
        return True

    def clear_all(self, confirm: Callable[[str], bool]) -> bool:
        """Erase the whole log once the user confirms."""
        if not confirm(CLEAR_PROMPT):
            return False
        self._items = []
        self._persist()
        return True

    def suggest(self, partial: str) -> list[str]:
        """Return up to five distinct logged names containing partial."""
        if not partial:
            return []
        needle = partial.lower()
        names: list[str] = []
        for item in self._items:
            if item.name in names or needle not in item.name.lower():
                continue
            names.append(item.name)
            if len(names) == MAX_SUGGESTIONS:
                break
        return names

    def _add_batch(self, facts: list[NutritionFact]) -> list[NutritionItem]:
        taken = {item.id for item in self._items}
        batch: list[NutritionItem] = []
        for fact in facts:
            item_id = _new_item_id(fact.name)
            while item_id in taken:
                item_id = _new_item_id(fact.name)
            taken.add(item_id)
            batch.append(NutritionItem.from_fact(item_id, fact))
        self._items = batch + self._items
        self._persist()
        return batch

    def _persist(self) -> None:
        self.storage.save(encode_snapshot(self._items))


def _new_item_id(name: str) -> str:
    return f"{name}-{time.time_ns()}-{uuid4().hex}"


def encode_snapshot(items: Iterable[NutritionItem]) -> str:
    """Serialize log items into the snapshot JSON array."""
    return json.dumps([item.to_record() for item in items])


def decode_snapshot(raw: str | bytes) -> list[NutritionItem]:
    """Parse a snapshot JSON array back into log items."""
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            msg = f"snapshot is not UTF-8: {exc}"
            raise SnapshotError(msg) from exc
    try:
        records = _SNAPSHOT_ADAPTER.validate_json(raw)
    except ValidationError as exc:
        first = exc.errors()[0]["msg"]
        msg = f"invalid snapshot ({exc.error_count()} errors): {first}"
        raise SnapshotError(msg) from exc

    items = [NutritionItem(**record.model_dump()) for record in records]
    seen: set[str] = set()
    for item in items:
        if item.id in seen:
            msg = f"duplicate item id {item.id!r}"
            raise SnapshotError(msg)
        seen.add(item.id)
    return items
