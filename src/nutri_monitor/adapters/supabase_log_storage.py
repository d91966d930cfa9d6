"""Supabase storage for the log snapshot."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from nutri_monitor.services.log_store import LogStorage


@dataclass
class SupabaseLogStorage(LogStorage):
    """Supabase-backed snapshot slot in the log_snapshots table."""

    client: Client
    slot: str

    def load(self) -> str | None:
        """Return the stored snapshot for the slot, if any."""
        response = (
            self.client.table("log_snapshots")
            .select("payload")
            .eq("slot", self.slot)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("payload")

    def save(self, payload: str) -> None:
        """Upsert the snapshot row for the slot."""
        self.client.table("log_snapshots").upsert(
            {
                "slot": self.slot,
                "payload": payload,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="slot",
        ).execute()
