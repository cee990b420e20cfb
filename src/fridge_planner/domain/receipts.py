"""Models for receipt and barcode derived ingredient candidates."""

from dataclasses import dataclass

from pydantic import BaseModel, Field, field_validator

from fridge_planner.domain.inventory import (
    Category,
    Unit,
    coerce_category,
    coerce_unit,
)


class ReceiptItem(BaseModel):
    """Ingredient candidate read from a receipt."""

    name: str
    category: Category = Category.OTHER
    quantity: float = Field(default=1, ge=0)
    unit: Unit = Unit.PIECE
    price: float = Field(default=0, ge=0)

    @field_validator("category", mode="before")
    @classmethod
    def known_category(cls, value: object) -> Category:
        return coerce_category(value)

    @field_validator("unit", mode="before")
    @classmethod
    def known_unit(cls, value: object) -> Unit:
        return coerce_unit(value)

    @field_validator("quantity", "price", mode="before")
    @classmethod
    def blank_as_zero(cls, value: object) -> object:
        if value is None or value == "":
            return 0
        return value


@dataclass(frozen=True)
class ProductInfo:
    """Product details resolved from a barcode."""

    barcode: str
    name: str
    category: Category
    brand: str | None = None
    image: str | None = None
    quantity: str | None = None
