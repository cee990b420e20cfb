"""Barcode lookup and category mapping."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from fridge_planner.adapters.openfoodfacts_client import ProductLookupClient
from fridge_planner.domain.inventory import Category
from fridge_planner.domain.receipts import ProductInfo

UNKNOWN_PRODUCT_NAME = "알 수 없는 제품"

# First matching rule wins.
CATEGORY_KEYWORDS: tuple[tuple[Category, tuple[str, ...]], ...] = (
    (Category.MEAT, ("meat", "pork", "beef", "chicken")),
    (Category.SEAFOOD, ("seafood", "fish", "shrimp")),
    (Category.VEGETABLE, ("vegetable",)),
    (Category.FRUIT, ("fruit",)),
    (Category.DAIRY, ("dairy", "milk", "cheese", "yogurt")),
    (Category.FROZEN, ("frozen",)),
    (Category.BEVERAGE, ("beverage", "drink", "juice", "water")),
    (Category.SEASONING, ("sauce", "condiment", "spice")),
    (Category.GRAIN, ("cereal", "rice", "grain", "noodle")),
)

_logger = logging.getLogger(__name__)


def map_category(tags: Sequence[str]) -> Category:
    """Map Open Food Facts category tags onto an ingredient category."""
    joined = ",".join(tags).lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in joined for keyword in keywords):
            return category
    return Category.OTHER


@dataclass
class BarcodeService:
    """Resolves scanned barcodes into ingredient candidates."""

    client: ProductLookupClient

    async def lookup(self, barcode: str) -> ProductInfo | None:
        """Return product info, or None when the lookup fails or is unknown."""
        try:
            product = await self.client.get_product(barcode)
        except Exception:
            _logger.warning("Barcode lookup failed: barcode=%s", barcode, exc_info=True)
            return None
        if product is None:
            return None
        name = (
            product.get("product_name_ko")
            or product.get("product_name")
            or product.get("generic_name")
            or UNKNOWN_PRODUCT_NAME
        )
        tags = product.get("categories_tags") or []
        return ProductInfo(
            barcode=barcode,
            name=str(name),
            category=map_category([str(tag) for tag in tags]),
            brand=product.get("brands") or None,
            image=product.get("image_front_small_url") or product.get("image_url") or None,
            quantity=product.get("quantity") or None,
        )
