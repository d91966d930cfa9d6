"""Tests for snapshot storage adapters."""

from dataclasses import dataclass, field

from nutri_monitor.adapters.file_log_storage import FileLogStorage
from nutri_monitor.adapters.supabase_log_storage import SupabaseLogStorage
from nutri_monitor.services.log_store import LogStore


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    rows: dict[str, dict[str, object]] = field(default_factory=dict)
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    last_on_conflict: str | None = None

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def upsert(  # type: ignore[no-untyped-def]
        self, payload, on_conflict: str = ""
    ) -> "FakeTable":
        self._action = "upsert"
        self.last_payload = payload
        self.last_on_conflict = on_conflict
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        if self._action == "upsert":
            row = dict(self.last_payload)
            self.rows[row["slot"]] = row
            return FakeResponse(data=[row])
        slot = self.last_filters[-1][1]
        row = self.rows.get(slot)
        return FakeResponse(data=[row] if row else [])


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_file_storage_missing_file_loads_none(tmp_path) -> None:
    storage = FileLogStorage.for_slot(tmp_path / "data", "nutrition_history")

    assert storage.path == tmp_path / "data" / "nutrition_history.json"
    assert storage.load() is None


def test_file_storage_roundtrip_creates_directories(tmp_path) -> None:
    storage = FileLogStorage.for_slot(tmp_path / "nested" / "data", "slot")

    storage.save('[{"id": "a"}]')
    storage.save("[]")

    assert storage.load() == b"[]"
    assert [path.name for path in storage.path.parent.iterdir()] == ["slot.json"]


def test_file_storage_save_ignores_stale_temp_files(tmp_path) -> None:
    storage = FileLogStorage.for_slot(tmp_path, "slot")
    stale = tmp_path / "slot.json.tmp"
    stale.write_text("left by another writer", encoding="utf-8")

    storage.save("[]")

    assert storage.load() == b"[]"
    assert stale.read_text(encoding="utf-8") == "left by another writer"
    assert sorted(path.name for path in tmp_path.iterdir()) == [
        "slot.json",
        "slot.json.tmp",
    ]


def test_corrupted_file_snapshot_loads_as_empty_log(tmp_path, gateway) -> None:
    storage = FileLogStorage.for_slot(tmp_path, "slot")
    storage.path.write_bytes(b"\xff\xfe[garbage")
    store = LogStore(gateway=gateway, storage=storage)

    store.initialize()

    assert store.items == ()


def test_supabase_storage_roundtrip() -> None:
    client = FakeSupabaseClient()
    storage = SupabaseLogStorage(client=client, slot="nutrition_history")

    assert storage.load() is None

    storage.save("[]")
    storage.save('[{"id": "a"}]')

    table = client.table("log_snapshots")
    assert table.last_on_conflict == "slot"
    assert table.last_payload["slot"] == "nutrition_history"
    assert "updated_at" in table.last_payload
    assert storage.load() == '[{"id": "a"}]'
    assert ("slot", "nutrition_history") in table.last_filters
