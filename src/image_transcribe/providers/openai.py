"""OpenAI chat-completions vision provider."""

from openai import OpenAI, OpenAIError
from rich.markup import escape

from image_transcribe.console import console
from image_transcribe.errors import ProviderError
from image_transcribe.providers.base import VisionProvider

MAX_OUTPUT_TOKENS = 20000


def uses_completion_token_limit(model: str) -> bool:
    """Reasoning models (o1, o3, o4-mini, ...) reject ``max_tokens``."""
    return model.startswith("o")


class OpenAIProvider(VisionProvider):
    name = "openai"

    def __init__(self, api_key: str, model: str) -> None:
        self.client = OpenAI(api_key=api_key)
        self.model = model

    def _token_limit(self) -> dict[str, int]:
        if uses_completion_token_limit(self.model):
            return {"max_completion_tokens": MAX_OUTPUT_TOKENS}
        return {"max_tokens": MAX_OUTPUT_TOKENS}

    def transcribe_image(self, base64_image: str, prompt: str) -> str:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": prompt},
                    {
                        "role": "user",
                        "content": [
                            {
                                "type": "image_url",
                                "image_url": {
                                    "url": f"data:image/jpeg;base64,{base64_image}",
                                    "detail": "high",
                                },
                            },
                        ],
                    },
                ],
                **self._token_limit(),
            )
        except OpenAIError as e:
            console.print(
                f"[red]OpenAI request failed[/red] (model {self.model}): "
                f"{escape(repr(e))}"
            )
            raise ProviderError(f"OpenAI request failed: {e}") from e

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
