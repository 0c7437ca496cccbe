"""Configuration loading from environment variables and CLI flags."""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional

from image_transcribe.errors import (
    FilesystemError,
    MissingPromptError,
    UnsupportedProviderError,
)


class Provider(str, Enum):
    OPENAI = "openai"
    GEMINI = "gemini"


DEFAULTS = {
    Provider.OPENAI: "gpt-4o",
    Provider.GEMINI: "gemini-2.5-flash",
}

ENV_KEYS = {
    Provider.OPENAI: "OPENAI_API_KEY",
    Provider.GEMINI: "GEMINI_API_KEY",
}

SEPARATOR_NONE = "none"
SEPARATOR_DETAILED = "detailed"


def parse_provider(name: str) -> Provider:
    """Resolve a provider name case-insensitively."""
    try:
        return Provider(name.lower())
    except ValueError:
        raise UnsupportedProviderError(f"Unsupported provider: {name}") from None


def api_keys_from_env(environ: Optional[Mapping[str, str]] = None) -> dict[str, str]:
    """Collect the credential of every provider that has one set.

    The result is keyed by provider value (``"openai"``, ``"gemini"``) so it can
    be handed straight to the provider factory.
    """
    environ = os.environ if environ is None else environ
    keys = {}
    for provider, var in ENV_KEYS.items():
        value = environ.get(var, "")
        if value:
            keys[provider.value] = value
    return keys


def load_prompt(prompt: Optional[str], prompt_file: Optional[Path]) -> str:
    """Return the prompt text; the file wins when both sources are given."""
    if not prompt and not prompt_file:
        raise MissingPromptError("Either --prompt or --prompt-file must be provided")
    if prompt_file:
        try:
            return Path(prompt_file).read_text(encoding="utf-8")
        except OSError as e:
            raise FilesystemError(f"Error reading prompt file: {e}") from e
    return prompt


@dataclass(frozen=True)
class RunConfig:
    input_folder: Path
    output_file: Path
    provider: str
    prompt: str
    separator: str = SEPARATOR_NONE
    limit: Optional[int] = None
    debug_dir: Optional[Path] = None
    model: Optional[str] = None

    @property
    def effective_limit(self) -> Optional[int]:
        """The limit when it is a positive integer, otherwise None (process all)."""
        if isinstance(self.limit, int) and self.limit > 0:
            return self.limit
        return None
