"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from nutri_monitor.adapters.calorieninjas_client import HttpxCalorieNinjasClient
from nutri_monitor.adapters.file_log_storage import FileLogStorage
from nutri_monitor.adapters.supabase_log_storage import SupabaseLogStorage
from nutri_monitor.config import Settings, parse_storage_backend
from nutri_monitor.services.log_store import LogStorage, LogStore
from nutri_monitor.services.lookup import LookupGateway


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    lookup_gateway: LookupGateway
    log_store: LogStore
    close_resources: Callable[[], Awaitable[None]]


def build_log_storage(settings: Settings) -> LogStorage:
    """Create the configured snapshot storage backend."""
    backend = parse_storage_backend(settings.log_storage_backend)
    if backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            msg = "Supabase log storage requires SUPABASE_URL and SUPABASE_SERVICE_KEY"
            raise ValueError(msg)
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseLogStorage(client=client, slot=settings.log_slot)
    return FileLogStorage.for_slot(settings.log_data_dir, settings.log_slot)


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    calorieninjas_client = HttpxCalorieNinjasClient.create(
        api_key=resolved_settings.calorieninjas_api_key,
        base_url=resolved_settings.calorieninjas_base_url,
    )
    lookup_gateway = LookupGateway(client=calorieninjas_client)
    log_store = LogStore(
        gateway=lookup_gateway,
        storage=build_log_storage(resolved_settings),
    )
    log_store.initialize()

    async def close_resources() -> None:
        await calorieninjas_client.close()

    return AppContainer(
        settings=resolved_settings,
        lookup_gateway=lookup_gateway,
        log_store=log_store,
        close_resources=close_resources,
    )
