"""Pydantic models for CalorieNinjas nutrition payloads."""

from pydantic import BaseModel, ConfigDict, Field


class CalorieNinjasItem(BaseModel):
    """One food entry in a CalorieNinjas response."""

    model_config = ConfigDict(extra="ignore")

    name: str
    calories: float = Field(ge=0)
    protein_g: float = Field(ge=0)
    carbohydrates_total_g: float = Field(ge=0)
    fat_total_g: float = Field(ge=0)
    serving_size_g: float = Field(ge=0)
    fat_saturated_g: float | None = Field(default=None, ge=0)
    sodium_mg: float | None = Field(default=None, ge=0)
    potassium_mg: float | None = Field(default=None, ge=0)
    cholesterol_mg: float | None = Field(default=None, ge=0)
    fiber_g: float | None = Field(default=None, ge=0)
    sugar_g: float | None = Field(default=None, ge=0)


class CalorieNinjasResponse(BaseModel):
    """CalorieNinjas /nutrition response body."""

    model_config = ConfigDict(extra="ignore")

    items: list[CalorieNinjasItem] = Field(default_factory=list)
