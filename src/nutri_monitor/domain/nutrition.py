"""Nutrition domain models."""

from collections.abc import Iterable
from dataclasses import asdict, dataclass

# Optional CalorieNinjas fields carried through to logged items when reported.
EXTRA_NUTRIENT_FIELDS = (
    "fat_saturated_g",
    "sodium_mg",
    "potassium_mg",
    "cholesterol_mg",
    "fiber_g",
    "sugar_g",
)


@dataclass(frozen=True)
class NutritionFact:
    """A food as reported by the nutrition lookup."""

    name: str
    calories: float
    protein_g: float
    carbohydrates_total_g: float
    fat_total_g: float
    serving_size_g: float
    fat_saturated_g: float | None = None
    sodium_mg: float | None = None
    potassium_mg: float | None = None
    cholesterol_mg: float | None = None
    fiber_g: float | None = None
    sugar_g: float | None = None

    def to_record(self) -> dict[str, object]:
        """Return the fact as a JSON-ready mapping, skipping absent extras."""
        return _drop_absent_extras(asdict(self))


@dataclass(frozen=True)
class NutritionItem:
    """A logged food entry."""

    id: str
    name: str
    calories: float
    protein_g: float
    carbohydrates_total_g: float
    fat_total_g: float
    serving_size_g: float
    fat_saturated_g: float | None = None
    sodium_mg: float | None = None
    potassium_mg: float | None = None
    cholesterol_mg: float | None = None
    fiber_g: float | None = None
    sugar_g: float | None = None

    @classmethod
    def from_fact(cls, item_id: str, fact: NutritionFact) -> "NutritionItem":
        """Create a logged item from a lookup fact."""
        return cls(id=item_id, **asdict(fact))

    def to_record(self) -> dict[str, object]:
        """Return the item as a JSON-ready mapping, skipping absent extras."""
        return _drop_absent_extras(asdict(self))


@dataclass(frozen=True)
class Totals:
    """Summed macros across logged items."""

    calories: float = 0.0
    protein_g: float = 0.0
    carbohydrates_total_g: float = 0.0
    fat_total_g: float = 0.0


def sum_totals(items: Iterable[NutritionItem]) -> Totals:
    """Return the element-wise macro sum over items."""
    total = Totals()
    for item in items:
        total = Totals(
            calories=total.calories + item.calories,
            protein_g=total.protein_g + item.protein_g,
            carbohydrates_total_g=(
                total.carbohydrates_total_g + item.carbohydrates_total_g
            ),
            fat_total_g=total.fat_total_g + item.fat_total_g,
        )
    return total


def _drop_absent_extras(record: dict[str, object]) -> dict[str, object]:
    for field_name in EXTRA_NUTRIENT_FIELDS:
        if record.get(field_name) is None:
            record.pop(field_name, None)
    return record
