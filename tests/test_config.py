"""Tests for image_transcribe.config."""

import pytest

from image_transcribe.config import (
    ENV_KEYS,
    Provider,
    RunConfig,
    api_keys_from_env,
    load_prompt,
    parse_provider,
)
from image_transcribe.errors import (
    ConfigurationError,
    FilesystemError,
    MissingPromptError,
    UnsupportedProviderError,
)


class TestProviderEnum:
    def test_values(self):
        assert Provider.OPENAI.value == "openai"
        assert Provider.GEMINI.value == "gemini"

    def test_string_equality(self):
        assert Provider.OPENAI == "openai"
        assert Provider.GEMINI == "gemini"

    def test_env_keys_are_distinct_per_provider(self):
        assert ENV_KEYS[Provider.OPENAI] == "OPENAI_API_KEY"
        assert ENV_KEYS[Provider.GEMINI] == "GEMINI_API_KEY"


class TestParseProvider:
    @pytest.mark.parametrize("name", ["gemini", "Gemini", "GEMINI"])
    def test_case_insensitive(self, name):
        assert parse_provider(name) is Provider.GEMINI

    def test_unknown_name(self):
        with pytest.raises(UnsupportedProviderError, match="Unsupported provider: foo"):
            parse_provider("foo")


class TestApiKeysFromEnv:
    def test_reads_both_keys(self):
        env = {"OPENAI_API_KEY": "sk-1", "GEMINI_API_KEY": "gm-1", "OTHER": "x"}
        assert api_keys_from_env(env) == {"openai": "sk-1", "gemini": "gm-1"}

    def test_skips_unset_and_empty(self):
        assert api_keys_from_env({"OPENAI_API_KEY": ""}) == {}

    def test_defaults_to_process_environment(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "gm-from-env")
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        assert api_keys_from_env() == {"gemini": "gm-from-env"}


class TestLoadPrompt:
    def test_direct_prompt(self):
        assert load_prompt("Transcribe this.", None) == "Transcribe this."

    def test_prompt_file(self, tmp_path):
        path = tmp_path / "prompt.txt"
        path.write_text("From file", encoding="utf-8")
        assert load_prompt(None, path) == "From file"

    def test_file_wins_over_direct_prompt(self, tmp_path):
        path = tmp_path / "prompt.txt"
        path.write_text("From file", encoding="utf-8")
        assert load_prompt("Direct", path) == "From file"

    def test_neither_given(self):
        with pytest.raises(MissingPromptError):
            load_prompt(None, None)

    def test_empty_prompt_counts_as_missing(self):
        with pytest.raises(ConfigurationError):
            load_prompt("", None)

    def test_unreadable_prompt_file(self, tmp_path):
        with pytest.raises(FilesystemError, match="prompt file"):
            load_prompt(None, tmp_path / "missing.txt")


class TestRunConfig:
    def _config(self, **overrides) -> RunConfig:
        fields = dict(
            input_folder="scans",
            output_file="out.md",
            provider="openai",
            prompt="p",
        )
        fields.update(overrides)
        return RunConfig(**fields)

    def test_defaults(self):
        config = self._config()
        assert config.separator == "none"
        assert config.limit is None
        assert config.debug_dir is None
        assert config.model is None

    def test_is_immutable(self):
        config = self._config()
        with pytest.raises(AttributeError):
            config.prompt = "changed"

    @pytest.mark.parametrize("limit,expected", [(None, None), (0, None), (-3, None), (2, 2)])
    def test_effective_limit(self, limit, expected):
        assert self._config(limit=limit).effective_limit == expected
