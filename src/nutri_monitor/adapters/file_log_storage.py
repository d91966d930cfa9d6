"""Local file storage for the log snapshot."""

import tempfile
from dataclasses import dataclass
from pathlib import Path

from nutri_monitor.services.log_store import LogStorage


@dataclass
class FileLogStorage(LogStorage):
    """Stores the log snapshot in a single JSON file."""

    path: Path

    @classmethod
    def for_slot(cls, data_dir: str | Path, slot: str) -> "FileLogStorage":
        """Create storage for a named slot inside a data directory."""
        return cls(path=Path(data_dir) / f"{slot}.json")

    def load(self) -> bytes | None:
        """Return the raw stored snapshot, or None when no file exists yet."""
        if not self.path.exists():
            return None
        return self.path.read_bytes()

    def save(self, payload: str) -> None:
        """Write the snapshot through a unique temporary file then swap it in."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=self.path.parent,
            prefix=f".{self.path.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            handle.write(payload)
        Path(handle.name).replace(self.path)
