"""Cached public recipe corpus and ingredient matching."""

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from fridge_planner.adapters.foodsafety_client import RecipeCorpusClient
from fridge_planner.domain.recipes import PublicRecipe, RecipeStep
from fridge_planner.services.cache import InMemoryCache, SingleFlightCache

CORPUS_CACHE_KEY = "recipes:public:corpus"
MAX_PAGE_SIZE = 1000
MAX_STEPS = 20

_STEP_NUMBER = re.compile(r"^\d+\.\s*")

_logger = logging.getLogger(__name__)


@dataclass
class RecipeCorpusService:
    """Serves the public recipe corpus from a shared, lazily refilled cache.

    Fetch failures are fail-open: callers get an empty corpus and the next
    request tries again.
    """

    client: RecipeCorpusClient
    cache: SingleFlightCache = field(
        default_factory=lambda: SingleFlightCache(InMemoryCache())
    )
    corpus_size: int = 1000
    ttl_seconds: int = 86400
    page_size: int = MAX_PAGE_SIZE

    async def get_corpus(self) -> list[PublicRecipe]:
        """Return the cached corpus, fetching it once per TTL window."""
        corpus = await self.cache.get_or_load(
            CORPUS_CACHE_KEY, self._load, ttl_seconds=self.ttl_seconds
        )
        return corpus if isinstance(corpus, list) else []

    def invalidate(self) -> None:
        """Forget the cached corpus."""
        self.cache.invalidate(CORPUS_CACHE_KEY)

    async def _load(self) -> tuple[list[PublicRecipe], bool]:
        try:
            rows = await self._fetch_all_rows()
        except Exception:
            _logger.exception("Public recipe corpus fetch failed")
            return [], False
        corpus = [parse_recipe_row(row) for row in rows]
        _logger.info("Public recipe corpus loaded: recipes=%s", len(corpus))
        return corpus, bool(corpus)

    async def _fetch_all_rows(self) -> list[dict[str, str]]:
        rows: list[dict[str, str]] = []
        start = 1
        while start <= self.corpus_size:
            end = min(start + self.page_size - 1, self.corpus_size)
            page = await self.client.fetch_rows(start, end)
            rows.extend(page)
            if len(page) < end - start + 1:
                break
            start = end + 1
        return rows


def parse_recipe_row(row: dict[str, str]) -> PublicRecipe:
    """Parse a raw COOKRCP01 row into a public recipe."""
    steps: list[RecipeStep] = []
    for index in range(1, MAX_STEPS + 1):
        number = f"{index:02d}"
        text = (row.get(f"MANUAL{number}") or "").strip()
        if not text:
            continue
        steps.append(
            RecipeStep(
                text=_STEP_NUMBER.sub("", text).strip(),
                image=row.get(f"MANUAL_IMG{number}") or None,
            )
        )
    return PublicRecipe(
        id=str(row.get("RCP_SEQ", "")),
        name=row.get("RCP_NM", ""),
        category=row.get("RCP_PAT2", ""),
        method=row.get("RCP_WAY2", ""),
        ingredients=row.get("RCP_PARTS_DTLS", ""),
        steps=steps,
        image=row.get("ATT_FILE_NO_MAIN") or None,
        tip=row.get("RCP_NA_TIP") or None,
        calories=row.get("INFO_ENG") or None,
    )


def match_count(recipe: PublicRecipe, ingredient_names: Sequence[str]) -> int:
    """Count owned ingredient names contained in the recipe's ingredient text.

    Plain substring containment, so short names also match inside longer
    ones ("파" inside "대파").
    """
    return sum(1 for name in ingredient_names if name and name in recipe.ingredients)


def match_recipes(
    corpus: Sequence[PublicRecipe], ingredient_names: Sequence[str]
) -> list[PublicRecipe]:
    """Return recipes with at least one match, best first.

    Equal scores keep their corpus order.
    """
    scored = [(recipe, match_count(recipe, ingredient_names)) for recipe in corpus]
    ranked = sorted(
        (pair for pair in scored if pair[1] > 0), key=lambda pair: pair[1], reverse=True
    )
    return [recipe for recipe, _ in ranked]
