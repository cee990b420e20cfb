"""Generation service: one retrying entry point for every AI call site."""

import base64
import logging
from dataclasses import dataclass
from typing import Protocol, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from fridge_planner.errors import ConfigurationError, MalformedOutputError
from fridge_planner.services.retry import call_with_retry
from fridge_planner.services.structured_output import extract_json_array

_logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

STRICTER_REMINDER = (
    "\n\n반드시 JSON 배열만 출력하세요. 설명, 인사말, 코드 블록 표시는 포함하지 마세요."
)


class TextGenerationClient(Protocol):
    """Interface for a generative text model."""

    async def generate(
        self,
        *,
        prompt: str,
        schema: dict[str, object] | None = None,
        image_data_url: str | None = None,
    ) -> str:
        """Return the raw text reply for a prompt."""


def array_schema(item_schema: dict[str, object]) -> dict[str, object]:
    """Wrap an item schema into the object root strict mode requires."""
    return {
        "type": "object",
        "properties": {"items": {"type": "array", "items": item_schema}},
        "required": ["items"],
        "additionalProperties": False,
    }


@dataclass
class GenerationService:
    """Runs prompts through the client with retries and array extraction."""

    client: TextGenerationClient | None
    retry_attempts: int = 3
    retry_backoff_seconds: float = 5.0
    timeout_seconds: float | None = 45.0
    malformed_output_retries: int = 1

    async def generate_models(  # noqa: PLR0913
        self,
        prompt: str,
        model: type[ModelT],
        *,
        action: str,
        item_schema: dict[str, object] | None = None,
        image_bytes: bytes | None = None,
    ) -> list[ModelT]:
        """Generate a reply and validate the JSON array it contains.

        A reply without a usable array, or whose items do not fit ``model``,
        is re-requested with a stricter instruction up to
        ``malformed_output_retries`` times.
        """
        adapter = TypeAdapter(list[model])
        client = self._require_client()
        schema = array_schema(item_schema) if item_schema else None
        image_data_url = to_data_url(image_bytes) if image_bytes else None
        current_prompt = prompt
        for attempt in range(self.malformed_output_retries + 1):
            text = await call_with_retry(
                lambda p=current_prompt: client.generate(
                    prompt=p, schema=schema, image_data_url=image_data_url
                ),
                action=action,
                attempts=self.retry_attempts,
                backoff_seconds=self.retry_backoff_seconds,
                timeout_seconds=self.timeout_seconds,
            )
            try:
                return _validate(adapter, extract_json_array(text))
            except MalformedOutputError as exc:
                _logger.warning(
                    "%s returned malformed output (attempt %s, stage=%s)",
                    action,
                    attempt + 1,
                    exc.stage,
                )
                if attempt >= self.malformed_output_retries:
                    raise
                current_prompt = prompt + STRICTER_REMINDER
        raise MalformedOutputError()

    def _require_client(self) -> TextGenerationClient:
        if self.client is None:
            raise ConfigurationError()
        return self.client


def to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"


def _validate(adapter: TypeAdapter, items: list[object]) -> list:
    try:
        return adapter.validate_python(items)
    except ValidationError as exc:
        _logger.warning("Model reply failed validation: %s", exc.errors()[:3])
        raise MalformedOutputError(stage="schema") from exc
