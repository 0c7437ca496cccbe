"""Shared fixtures for the test suite.

All fixtures here produce real files / real bytes so tests exercise actual
code paths rather than hand-crafted stubs.
"""

import io
from pathlib import Path

import pytest
from click.testing import CliRunner
from PIL import Image


# ── CLI runner ─────────────────────────────────────────────────────────────


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


# ── Image fixtures ─────────────────────────────────────────────────────────


def _png(width: int, height: int, color=(255, 0, 0), mode: str = "RGB") -> bytes:
    buf = io.BytesIO()
    if mode == "RGBA":
        color = (*color, 128)
    Image.new(mode, (width, height), color=color).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def make_png():
    """Factory for solid-colour PNG bytes: make_png(width, height, color=..., mode=...)."""
    return _png


@pytest.fixture
def png_bytes() -> bytes:
    """A real, valid 20×10 red PNG image as raw bytes."""
    return _png(20, 10)


@pytest.fixture
def png_file(tmp_path: Path, png_bytes: bytes) -> Path:
    """The PNG written to a temporary file on disk."""
    path = tmp_path / "test.png"
    path.write_bytes(png_bytes)
    return path


@pytest.fixture
def image_folder(tmp_path: Path) -> Path:
    """A folder with c.png, a.png, b.png plus entries that must be ignored."""
    folder = tmp_path / "scans"
    folder.mkdir()
    for name in ["c.png", "a.png", "b.png"]:
        (folder / name).write_bytes(_png(30, 20))
    (folder / "notes.txt").write_text("not an image")
    (folder / "photo.jpg").write_bytes(b"jpeg-ish")
    (folder / "nested.png").mkdir()
    return folder


@pytest.fixture
def api_keys() -> dict[str, str]:
    return {"openai": "sk-test", "gemini": "gm-test"}
