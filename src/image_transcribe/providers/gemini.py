"""Google Gemini vision provider (google-genai SDK)."""

import base64

from google import genai
from google.genai import types
from rich.markup import escape

from image_transcribe.console import console
from image_transcribe.errors import ProviderError
from image_transcribe.providers.base import VisionProvider


class GeminiProvider(VisionProvider):
    name = "gemini"

    def __init__(self, api_key: str, model: str) -> None:
        self.client = genai.Client(api_key=api_key)
        self.model = model

    def transcribe_image(self, base64_image: str, prompt: str) -> str:
        image_part = types.Part.from_bytes(
            data=base64.b64decode(base64_image),
            mime_type="image/jpeg",
        )
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=[prompt, image_part],
            )
        except Exception as e:
            # SDK, transport and auth failures all surface here
            console.print(
                f"[red]Gemini request failed[/red] (model {self.model}): "
                f"{escape(repr(e))}"
            )
            raise ProviderError(f"Gemini request failed: {e}") from e

        return response.text or ""
