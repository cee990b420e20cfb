"""Recipe recommendation orchestration."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

from fridge_planner.domain.expiry import is_near_expiry
from fridge_planner.domain.recipes import (
    AIRecipe,
    Provenance,
    PublicRecipe,
    RecommendationResult,
)
from fridge_planner.errors import InvalidRequestError
from fridge_planner.services.generation import GenerationService
from fridge_planner.services.recipe_corpus import RecipeCorpusService, match_recipes

REFERENCE_RECIPE_LIMIT = 5
RECIPE_COUNT = 3

_logger = logging.getLogger(__name__)


class RecommendMode(StrEnum):
    """Emphasis of a recommendation request."""

    GENERAL = "general"
    URGENT = "urgent"


class RecipeTheme(StrEnum):
    """Optional cuisine or lifestyle theme."""

    KOREAN = "korean"
    QUICK = "quick"
    DIET = "diet"
    BUDGET = "budget"
    WESTERN = "western"


_THEME_INSTRUCTIONS = {
    RecipeTheme.KOREAN: "한식 위주로 추천해주세요.",
    RecipeTheme.QUICK: "20분 이내에 완성할 수 있는 간단한 요리로 추천해주세요.",
    RecipeTheme.DIET: "칼로리가 낮고 건강한 다이어트 요리로 추천해주세요.",
    RecipeTheme.BUDGET: "추가 구매 재료가 최소한인 알뜰한 요리로 추천해주세요.",
    RecipeTheme.WESTERN: "양식 위주로 추천해주세요.",
}

RECIPE_ITEM_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "title": {"type": "string"},
        "time": {"type": "string"},
        "difficulty": {"type": "string"},
        "ingredients": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "quantity": {"type": "string"},
                    "have": {"type": "boolean"},
                },
                "required": ["name", "quantity", "have"],
                "additionalProperties": False,
            },
        },
        "steps": {"type": "array", "items": {"type": "string"}},
        "tip": {"type": "string"},
        "source": {"type": "string", "enum": [p.value for p in Provenance]},
        "sourceId": {"anyOf": [{"type": "string"}, {"type": "null"}]},
    },
    "required": [
        "title",
        "time",
        "difficulty",
        "ingredients",
        "steps",
        "tip",
        "source",
        "sourceId",
    ],
    "additionalProperties": False,
}

_OUTPUT_FORMAT = """
각 레시피는 다음 JSON 형식으로 응답해주세요. JSON 배열만 출력하고 다른 텍스트는 포함하지 마세요:
[
  {
    "title": "요리 이름",
    "time": "조리 시간 (예: 20분)",
    "difficulty": "쉬움/보통/어려움",
    "ingredients": [{"name": "재료명", "quantity": "양", "have": true/false}],
    "steps": ["조리 단계 1", "조리 단계 2", ...],
    "tip": "요리 팁 (한 줄)",
    "source": "public_db 또는 ai_generated",
    "sourceId": "참고한 레시피 번호 또는 null"
  }
]

have는 위 재료 목록에 있으면 true, 추가로 필요하면 false로 표시해주세요.
참고 레시피를 바탕으로 만든 경우 source를 "public_db"로, sourceId에 참고 레시피 번호를 넣어주세요.
새로 만든 레시피는 source를 "ai_generated", sourceId를 null로 표시해주세요.
한국 가정에서 흔히 있는 기본 양념(소금, 설탕, 식용유, 참기름, 간장 등)은 있다고 가정해도 됩니다."""


@dataclass(frozen=True)
class OwnedIngredient:
    """Ingredient the user currently holds."""

    name: str
    quantity: float | None = None
    unit: str | None = None
    dday: int | None = None


@dataclass
class RecommendationService:
    """Builds recommendation prompts and returns attributed recipes."""

    generation_service: GenerationService
    corpus_service: RecipeCorpusService

    async def recommend(
        self,
        ingredients: Sequence[OwnedIngredient],
        mode: RecommendMode = RecommendMode.GENERAL,
        must_use: Sequence[str] | None = None,
        theme: RecipeTheme | None = None,
    ) -> RecommendationResult:
        """Recommend recipes for the owned ingredients."""
        owned = [item for item in ingredients if item.name.strip()]
        if not owned:
            raise InvalidRequestError("재료를 입력해주세요.")

        corpus = await self.corpus_service.get_corpus()
        matched = match_recipes(corpus, [item.name for item in owned])
        references = matched[:REFERENCE_RECIPE_LIMIT]
        prompt = build_prompt(owned, mode, references, must_use or [], theme)

        recipes = await self.generation_service.generate_models(
            prompt,
            AIRecipe,
            action="recipe_recommend",
            item_schema=RECIPE_ITEM_SCHEMA,
        )
        _logger.info(
            "Recommended recipes: count=%s matched=%s corpus=%s",
            len(recipes),
            len(matched),
            len(corpus),
        )
        return RecommendationResult(
            recipes=_normalize_provenance(recipes, references),
            public_recipes={
                recipe.id: {
                    "name": recipe.name,
                    "image": recipe.image,
                    "ingredients": recipe.ingredients,
                }
                for recipe in references
            },
            matched_public_recipes=len(matched),
            total_public_recipes=len(corpus),
        )


def summarize_ingredients(ingredients: Sequence[OwnedIngredient]) -> str:
    """Render owned ingredients, flagging the ones close to expiry."""
    parts: list[str] = []
    for item in ingredients:
        text = item.name
        if item.quantity and item.unit:
            text += f" ({item.quantity:g}{item.unit})"
        if is_near_expiry(item.dday):
            status = "만료" if item.dday <= 0 else f"D-{item.dday}"
            text += f" ⚠️ 유통기한 {status}"
        parts.append(text)
    return ", ".join(parts)


def build_prompt(
    ingredients: Sequence[OwnedIngredient],
    mode: RecommendMode,
    references: Sequence[PublicRecipe],
    must_use: Sequence[str],
    theme: RecipeTheme | None = None,
) -> str:
    """Build the recommendation instruction block."""
    summary = summarize_ingredients(ingredients)
    if mode == RecommendMode.URGENT:
        lines = [
            "다음은 냉장고에 있는 재료 목록입니다. ⚠️ 표시된 재료는 유통기한이 임박합니다.",
            "",
            f"재료: {summary}",
            "",
            f"유통기한이 임박한 재료를 우선적으로 활용하는 레시피 {RECIPE_COUNT}개를 "
            "추천해주세요.",
        ]
    else:
        lines = [
            "다음은 냉장고에 있는 재료 목록입니다.",
            "",
            f"재료: {summary}",
            "",
            f"이 재료들을 활용해서 만들 수 있는 레시피 {RECIPE_COUNT}개를 추천해주세요.",
        ]
    if theme is not None:
        lines.append(_THEME_INSTRUCTIONS[theme])
    names = [name for name in must_use if name.strip()]
    if names:
        lines.append(f"모든 레시피에 반드시 다음 재료를 사용해주세요: {', '.join(names)}")
    if references:
        lines.extend(["", "참고 레시피 (식품안전나라 공공 데이터):"])
        lines.extend(_format_reference(recipe) for recipe in references)
    return "\n".join(lines) + "\n" + _OUTPUT_FORMAT


def _format_reference(recipe: PublicRecipe) -> str:
    steps = " ".join(step.text for step in recipe.steps)
    return (
        f"- [{recipe.id}] {recipe.name} ({recipe.category}, {recipe.method})\n"
        f"  재료: {recipe.ingredients}\n"
        f"  조리법: {steps}"
    )


def _normalize_provenance(
    recipes: list[AIRecipe], references: Sequence[PublicRecipe]
) -> list[AIRecipe]:
    """Mark recipes citing an unknown reference as freshly generated."""
    known = {recipe.id for recipe in references}
    normalized: list[AIRecipe] = []
    for recipe in recipes:
        if recipe.source == Provenance.PUBLIC_DB and recipe.source_id in known:
            normalized.append(recipe)
        elif recipe.source == Provenance.PUBLIC_DB or recipe.source_id is not None:
            normalized.append(
                recipe.model_copy(
                    update={"source": Provenance.AI_GENERATED, "source_id": None}
                )
            )
        else:
            normalized.append(recipe)
    return normalized
