"""Receipt scanning via the vision-capable generation model."""

from dataclasses import dataclass

from fridge_planner.domain.inventory import Category, Unit
from fridge_planner.domain.receipts import ReceiptItem
from fridge_planner.errors import InvalidRequestError
from fridge_planner.services.generation import GenerationService

RECEIPT_ITEM_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "category": {"type": "string", "enum": [c.value for c in Category]},
        "quantity": {"type": "number", "minimum": 0},
        "unit": {"type": "string", "enum": [u.value for u in Unit]},
        "price": {"type": "number", "minimum": 0},
    },
    "required": ["name", "category", "quantity", "unit", "price"],
    "additionalProperties": False,
}

RECEIPT_PROMPT = f"""이 마트/편의점 영수증 이미지에서 식재료 항목만 추출해주세요.
가공식품, 생활용품 등은 제외하고 냉장고에 넣을 수 있는 식재료만 골라주세요.

JSON 배열로만 응답해주세요:
[
  {{
    "name": "재료명 (간결하게, 예: 삼겹살, 우유, 양파)",
    "category": "카테고리 ({'/'.join(c.value for c in Category)} 중 하나)",
    "quantity": 수량(숫자),
    "unit": "단위 ({'/'.join(u.value for u in Unit)} 중 하나)",
    "price": 가격(숫자, 없으면 0)
  }}
]

영수증에서 식재료를 찾을 수 없으면 빈 배열 []을 반환하세요.
제품명이 길면 핵심 재료명만 간결하게 정리해주세요. (예: "풀무원 국산콩두부 300g" → "두부")"""


@dataclass
class ReceiptScanService:
    """Extracts ingredient candidates from a receipt photo."""

    generation_service: GenerationService

    async def scan(self, image_bytes: bytes) -> list[ReceiptItem]:
        """Return the food items listed on the receipt."""
        if not image_bytes:
            raise InvalidRequestError("이미지를 업로드해주세요.")
        return await self.generation_service.generate_models(
            RECEIPT_PROMPT,
            ReceiptItem,
            action="receipt_scan",
            item_schema=RECEIPT_ITEM_SCHEMA,
            image_bytes=image_bytes,
        )
