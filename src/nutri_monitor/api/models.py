"""Pydantic models for the log API."""

from collections.abc import Iterable

from pydantic import BaseModel, Field

from nutri_monitor.domain.nutrition import NutritionItem, Totals


class SearchRequest(BaseModel):
    """Body for a log search."""

    query: str = ""
    override: str | None = None


class TotalsPayload(BaseModel):
    """Summed macros across the log."""

    calories: float
    protein_g: float
    carbohydrates_total_g: float
    fat_total_g: float

    @classmethod
    def from_totals(cls, totals: Totals) -> "TotalsPayload":
        return cls(
            calories=totals.calories,
            protein_g=totals.protein_g,
            carbohydrates_total_g=totals.carbohydrates_total_g,
            fat_total_g=totals.fat_total_g,
        )


class LogPayload(BaseModel):
    """Current log contents and status."""

    items: list[dict[str, object]] = Field(default_factory=list)
    totals: TotalsPayload
    status: str
    query: str = ""


class SearchResponse(LogPayload):
    """Log state after a search, with the newly added items."""

    added: list[dict[str, object]] = Field(default_factory=list)


class RemoveResponse(LogPayload):
    """Log state after a remove."""

    removed: bool


class ClearResponse(LogPayload):
    """Log state after a clear request."""

    cleared: bool


class SuggestionsResponse(BaseModel):
    """Names from the log matching a partial query."""

    suggestions: list[str]


def item_records(items: Iterable[NutritionItem]) -> list[dict[str, object]]:
    """Return JSON-ready records for log items."""
    return [item.to_record() for item in items]
