"""Domain models for fridges and stored ingredients."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum
from uuid import UUID


class Category(StrEnum):
    """Closed set of ingredient categories."""

    MEAT = "육류"
    SEAFOOD = "해산물"
    VEGETABLE = "채소"
    FRUIT = "과일"
    DAIRY = "유제품"
    FROZEN = "냉동식품"
    BEVERAGE = "음료"
    SEASONING = "양념"
    GRAIN = "곡류"
    OTHER = "기타"


class Unit(StrEnum):
    """Closed set of quantity units."""

    GRAM = "g"
    KILOGRAM = "kg"
    MILLILITER = "ml"
    LITER = "L"
    PIECE = "개"
    PACK = "팩"
    BOTTLE = "병"
    BAG = "봉"


class FridgeKind(StrEnum):
    """Compartment kind of a fridge."""

    REFRIGERATOR = "refrigerator"
    FREEZER = "freezer"


def coerce_category(value: object) -> Category:
    """Return the matching category or OTHER for unknown labels."""
    try:
        return Category(str(value).strip())
    except ValueError:
        return Category.OTHER


def coerce_unit(value: object) -> Unit:
    """Return the matching unit or PIECE for unknown labels."""
    try:
        return Unit(str(value).strip())
    except ValueError:
        return Unit.PIECE


@dataclass(frozen=True)
class Fridge:
    """A user-owned fridge or freezer."""

    id: UUID
    user_id: UUID
    name: str
    kind: FridgeKind
    created_at: datetime | None = None


@dataclass(frozen=True)
class Ingredient:
    """An ingredient stored in exactly one fridge."""

    id: UUID
    fridge_id: UUID
    name: str
    category: Category
    quantity: float
    unit: Unit
    purchase_date: date | None
    expiry_date: date
    barcode: str | None = None
    memo: str | None = None
    created_at: datetime | None = None
