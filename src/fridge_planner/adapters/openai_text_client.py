"""OpenAI Responses API client for text and vision generation."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from fridge_planner.services.generation import TextGenerationClient


@dataclass
class OpenAITextClient(TextGenerationClient):
    """Generation client backed by OpenAI Responses API."""

    client: AsyncOpenAI
    model: str
    reasoning_effort: str | None = None
    store: bool = False

    @classmethod
    def create(
        cls,
        api_key: str,
        model: str,
        reasoning_effort: str | None = None,
        store: bool = False,
    ) -> "OpenAITextClient":
        """Create an OpenAI client without SDK-level retries."""
        return cls(
            client=AsyncOpenAI(api_key=api_key, max_retries=0),
            model=model,
            reasoning_effort=reasoning_effort,
            store=store,
        )

    async def generate(
        self,
        *,
        prompt: str,
        schema: dict[str, object] | None = None,
        image_data_url: str | None = None,
    ) -> str:
        """Call OpenAI Responses API, using structured outputs when a schema is set."""
        content: list[dict[str, object]] = [{"type": "input_text", "text": prompt}]
        if image_data_url:
            content.append({"type": "input_image", "image_url": image_data_url})
        request_payload: dict[str, object] = {
            "model": self.model,
            "input": [{"role": "user", "content": content}],
            "store": self.store,
        }
        if schema is not None:
            request_payload["text"] = {
                "format": {
                    "type": "json_schema",
                    "name": "fridge_planner_items",
                    "strict": True,
                    "schema": schema,
                }
            }
        if self.reasoning_effort:
            request_payload["reasoning"] = {"effort": self.reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        return response.output_text or ""

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
