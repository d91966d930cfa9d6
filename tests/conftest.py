"""Shared test fixtures."""

import json
from dataclasses import dataclass, field

import httpx
import pytest

from nutri_monitor.adapters.calorieninjas_client import (
    CalorieNinjasClient,
    UpstreamResponse,
)
from nutri_monitor.config import Settings
from nutri_monitor.containers import AppContainer
from nutri_monitor.services.log_store import LogStorage, LogStore
from nutri_monitor.services.lookup import LookupGateway

EGG = {
    "name": "egg",
    "calories": 140,
    "protein_g": 12,
    "carbohydrates_total_g": 1,
    "fat_total_g": 10,
    "serving_size_g": 100,
}
RICE = {
    "name": "rice",
    "calories": 130,
    "protein_g": 2.5,
    "carbohydrates_total_g": 28,
    "fat_total_g": 0.5,
    "serving_size_g": 100,
    "fiber_g": 0.4,
    "sugar_g": 0.1,
}
EGGPLANT = {
    "name": "eggplant",
    "calories": 35,
    "protein_g": 1,
    "carbohydrates_total_g": 9,
    "fat_total_g": 0,
    "serving_size_g": 100,
}


def items_body(*items: dict[str, object]) -> str:
    """Return a CalorieNinjas-style JSON body."""
    return json.dumps({"items": list(items)})


@dataclass
class FakeCalorieNinjasClient(CalorieNinjasClient):
    """Fake nutrition client returning canned responses per query."""

    responses: dict[str, UpstreamResponse] = field(default_factory=dict)
    failures: dict[str, Exception] = field(default_factory=dict)
    queries: list[str] = field(default_factory=list)

    def respond(self, query: str, *items: dict[str, object]) -> None:
        self.responses[query] = UpstreamResponse(200, items_body(*items))

    async def get_nutrition(self, query: str) -> UpstreamResponse:
        self.queries.append(query)
        if query in self.failures:
            raise self.failures[query]
        return self.responses.get(query, UpstreamResponse(200, items_body()))


@dataclass
class InMemoryLogStorage(LogStorage):
    """In-memory snapshot slot that records writes."""

    payload: str | bytes | None = None
    writes: list[str] = field(default_factory=list)

    def load(self) -> str | bytes | None:
        return self.payload

    def save(self, payload: str) -> None:
        self.payload = payload
        self.writes.append(payload)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        calorieninjas_api_key="test-key",
        log_data_dir=str(tmp_path / "data"),
    )


@pytest.fixture
def nutrition_client() -> FakeCalorieNinjasClient:
    client = FakeCalorieNinjasClient()
    client.respond("2 eggs", EGG)
    client.respond("rice and eggplant", RICE, EGGPLANT)
    client.responses["zzz123"] = UpstreamResponse(404, '{"message": "Not found"}')
    client.responses["boom"] = UpstreamResponse(500, "upstream exploded")
    client.failures["offline"] = httpx.ConnectError("connection refused")
    return client


@pytest.fixture
def log_storage() -> InMemoryLogStorage:
    return InMemoryLogStorage()


@pytest.fixture
def gateway(nutrition_client: FakeCalorieNinjasClient) -> LookupGateway:
    return LookupGateway(client=nutrition_client)


@pytest.fixture
def store(gateway: LookupGateway, log_storage: InMemoryLogStorage) -> LogStore:
    log_store = LogStore(gateway=gateway, storage=log_storage)
    log_store.initialize()
    return log_store


@pytest.fixture
def container(
    settings: Settings, gateway: LookupGateway, store: LogStore
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        lookup_gateway=gateway,
        log_store=store,
        close_resources=close_resources,
    )
