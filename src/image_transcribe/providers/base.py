"""Abstract base for vision transcription providers."""

from abc import ABC, abstractmethod


class VisionProvider(ABC):
    name: str
    model: str

    @abstractmethod
    def transcribe_image(self, base64_image: str, prompt: str) -> str:
        """Accept a base64-encoded JPEG and the run's prompt; return the transcription.

        Never returns None; an empty response becomes ``""``.
        """
        ...
