"""Exception hierarchy for image-transcribe.

Every failure that should end a run derives from TranscribeError so the CLI
can report it in one place and exit non-zero.
"""


class TranscribeError(Exception):
    """Base class for all errors raised by image-transcribe."""


# ── Configuration ──────────────────────────────────────────────────────────


class ConfigurationError(TranscribeError):
    """Missing or contradictory run parameters, detected before any image is read."""


class UnsupportedProviderError(ConfigurationError):
    pass


class MissingCredentialError(ConfigurationError):
    pass


class MissingPromptError(ConfigurationError):
    pass


class InvalidInputError(ConfigurationError):
    pass


# ── Processing ─────────────────────────────────────────────────────────────


class DecodeError(TranscribeError):
    """An input file could not be decoded as a raster image."""


class ProviderError(TranscribeError):
    """The vision backend call failed."""


class FilesystemError(TranscribeError):
    """Reading or writing a file failed."""
