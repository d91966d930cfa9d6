"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from nutri_monitor.api.models import (
    ClearResponse,
    LogPayload,
    RemoveResponse,
    SearchRequest,
    SearchResponse,
    SuggestionsResponse,
    TotalsPayload,
    item_records,
)
from nutri_monitor.app_logging import configure_logging
from nutri_monitor.containers import AppContainer
from nutri_monitor.services.log_store import LogStore
from nutri_monitor.services.lookup import INTERNAL_ERROR, QUERY_REQUIRED, GatewayError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/nutrition")
    async def nutrition(request: Request, query: str | None = None) -> JSONResponse:
        """Forward a food query to the nutrition lookup."""
        if not query:
            return JSONResponse(
                {"error": QUERY_REQUIRED}, status_code=status.HTTP_400_BAD_REQUEST
            )
        state_container: AppContainer = request.app.state.container
        try:
            result = await state_container.lookup_gateway.lookup(query)
        except Exception:
            logger.exception("Nutrition route failed", extra={"query": query})
            return JSONResponse(
                {"error": INTERNAL_ERROR},
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        if isinstance(result, GatewayError):
            return JSONResponse(result.to_payload(), status_code=result.status_code)
        return JSONResponse({"items": [fact.to_record() for fact in result]})

    @app.get("/log")
    async def get_log(request: Request) -> LogPayload:
        """Return the current log, totals and search status."""
        return LogPayload(**_log_state(request.app.state.container.log_store))

    @app.post("/log/search")
    async def search_log(body: SearchRequest, request: Request) -> SearchResponse:
        """Look up a query and prepend the results to the log."""
        store: LogStore = request.app.state.container.log_store
        added = await store.search(body.query.strip(), override=body.override)
        return SearchResponse(added=item_records(added), **_log_state(store))

    @app.delete("/log/items/{item_id}")
    async def remove_item(item_id: str, request: Request) -> RemoveResponse:
        """Remove one logged item by id."""
        store: LogStore = request.app.state.container.log_store
        removed = store.remove(item_id)
        return RemoveResponse(removed=removed, **_log_state(store))

    @app.delete("/log")
    async def clear_log(request: Request, confirm: bool = False) -> ClearResponse:
        """Clear the whole log when the request confirms it."""
        store: LogStore = request.app.state.container.log_store
        cleared = store.clear_all(lambda _prompt: confirm)
        if cleared:
            logger.info("Log cleared")
        return ClearResponse(cleared=cleared, **_log_state(store))

    @app.get("/log/suggestions")
    async def suggestions(request: Request, q: str = "") -> SuggestionsResponse:
        """Suggest previously logged names matching a partial query."""
        store: LogStore = request.app.state.container.log_store
        return SuggestionsResponse(suggestions=store.suggest(q))

    return app


def _log_state(store: LogStore) -> dict[str, object]:
    """Return the shared log fields for API responses."""
    return {
        "items": item_records(store.items),
        "totals": TotalsPayload.from_totals(store.totals),
        "status": store.status,
        "query": store.query,
    }
