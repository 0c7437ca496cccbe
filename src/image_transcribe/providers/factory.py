"""Provider selection by name."""

from typing import Mapping, Optional

from image_transcribe.config import DEFAULTS, ENV_KEYS, Provider, parse_provider
from image_transcribe.errors import MissingCredentialError
from image_transcribe.providers.base import VisionProvider
from image_transcribe.providers.gemini import GeminiProvider
from image_transcribe.providers.openai import OpenAIProvider

PROVIDER_CLASSES: dict[Provider, type[VisionProvider]] = {
    Provider.OPENAI: OpenAIProvider,
    Provider.GEMINI: GeminiProvider,
}


def create_vision_provider(
    name: str,
    api_keys: Mapping[str, str],
    model: Optional[str] = None,
) -> VisionProvider:
    """Build the provider called *name* (case-insensitive).

    *api_keys* maps provider values to credentials. The credential check
    happens before the SDK client is created, so nothing touches the network
    on a misconfigured run.
    """
    provider = parse_provider(name)
    api_key = api_keys.get(provider.value, "")
    if not api_key:
        raise MissingCredentialError(
            f"{ENV_KEYS[provider]} environment variable is required for "
            f"{provider.value} provider. Set it in your environment or .env file."
        )
    return PROVIDER_CLASSES[provider](api_key=api_key, model=model or DEFAULTS[provider])
