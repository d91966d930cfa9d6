"""Lookup gateway integrating the CalorieNinjas nutrition API."""

import logging
from dataclasses import dataclass

import httpx
from pydantic import ValidationError

from nutri_monitor.adapters.calorieninjas_client import CalorieNinjasClient
from nutri_monitor.adapters.calorieninjas_models import (
    CalorieNinjasItem,
    CalorieNinjasResponse,
)
from nutri_monitor.domain.nutrition import NutritionFact

_logger = logging.getLogger(__name__)

QUERY_REQUIRED = "Query is required"
INTERNAL_ERROR = "Internal server error"


@dataclass(frozen=True)
class GatewayError:
    """Failed lookup with the upstream status (or 400/500) and diagnostics."""

    status_code: int
    error: str
    details: str | None = None
    internal: bool = False

    def to_payload(self) -> dict[str, object]:
        """Return the JSON error envelope for this failure."""
        payload: dict[str, object] = {"error": self.error}
        if self.details is not None and not self.internal:
            payload["details"] = self.details
        return payload


@dataclass
class LookupGateway:
    """Forwards free-text food queries to the nutrition API."""

    client: CalorieNinjasClient
    source_name: str = "CalorieNinjas"

    async def lookup(self, query: str) -> list[NutritionFact] | GatewayError:
        """Resolve a query into nutrition facts, or a GatewayError on failure."""
        if not query:
            return GatewayError(status_code=400, error=QUERY_REQUIRED)

        try:
            response = await self.client.get_nutrition(query)
        except httpx.HTTPError as exc:
            _logger.exception("Nutrition lookup request failed: query=%s", query)
            return GatewayError(
                status_code=500,
                error=INTERNAL_ERROR,
                details=str(exc),
                internal=True,
            )

        if not response.ok:
            _logger.warning(
                "Nutrition lookup upstream error: query=%s status=%s",
                query,
                response.status_code,
            )
            return GatewayError(
                status_code=response.status_code,
                error=f"{self.source_name} API error",
                details=response.text,
            )

        try:
            payload = CalorieNinjasResponse.model_validate_json(response.text)
        except ValidationError as exc:
            _logger.warning(
                "Nutrition lookup returned an invalid payload: query=%s error=%s",
                query,
                exc,
            )
            return GatewayError(
                status_code=500,
                error=INTERNAL_ERROR,
                details=str(exc),
                internal=True,
            )

        facts = [_to_fact(item) for item in payload.items]
        _logger.info("Nutrition lookup: query=%s results=%s", query, len(facts))
        return facts


def _to_fact(item: CalorieNinjasItem) -> NutritionFact:
    return NutritionFact(**item.model_dump())
