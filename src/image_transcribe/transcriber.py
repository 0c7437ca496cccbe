"""Batch transcription of a folder of images.

Images are processed one at a time in filename order.  After every image the
whole accumulated document is rewritten to the output file, so a run that
fails part-way leaves the transcriptions of all earlier images on disk.  Any
error aborts the run; nothing is retried or skipped.
"""

import base64
from pathlib import Path
from typing import Mapping, Optional, Union

from rich.markup import escape

from image_transcribe.config import SEPARATOR_DETAILED, SEPARATOR_NONE, RunConfig
from image_transcribe.console import console
from image_transcribe.errors import FilesystemError, InvalidInputError
from image_transcribe.preprocessing import preprocess_image
from image_transcribe.providers.base import VisionProvider
from image_transcribe.providers.factory import create_vision_provider

IMAGE_SUFFIX = ".png"


def find_images(folder: Path) -> list[str]:
    """Names of the PNG files directly inside *folder*, sorted ascending."""
    return sorted(
        entry.name
        for entry in folder.iterdir()
        if entry.is_file() and entry.name.lower().endswith(IMAGE_SUFFIX)
    )


def separator_block(mode: str, filename: str) -> str:
    """Text placed before the transcription of *filename*."""
    if mode == SEPARATOR_NONE:
        return "\n"
    if mode == SEPARATOR_DETAILED:
        return f"\n\n## {filename}\n\n"
    return f"\n\n{mode}\n\n"


def transcribe_image(
    image_path: Path,
    provider: VisionProvider,
    prompt: str,
    debug_dir: Optional[Path] = None,
) -> str:
    payload = base64.b64encode(preprocess_image(image_path, debug_dir)).decode("ascii")
    console.print(f"Base64 image size: {len(payload) / 1024 / 1024:.2f}MB")
    return provider.transcribe_image(payload, prompt)


def _write_document(output_file: Path, text: str) -> None:
    try:
        output_file.write_text(text, encoding="utf-8")
    except OSError as e:
        raise FilesystemError(f"Cannot write output file {output_file}: {e}") from e


def _check_folder(folder: Union[str, Path]) -> Path:
    folder = Path(folder)
    if not folder.exists():
        raise InvalidInputError(f"{folder} does not exist")
    if not folder.is_dir():
        raise InvalidInputError(f"{folder} is not a directory")
    return folder


def process_image_folder(config: RunConfig, api_keys: Mapping[str, str]) -> str:
    """Transcribe every selected image in ``config.input_folder``.

    Returns the final document (stripped of surrounding whitespace), which is
    also what the output file contains once the run completes.
    """
    provider = create_vision_provider(config.provider, api_keys, config.model)
    folder = _check_folder(config.input_folder)

    debug_dir = Path(config.debug_dir) if config.debug_dir else None
    if debug_dir is not None:
        try:
            debug_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(f"Cannot create debug directory {debug_dir}: {e}") from e
        console.print(
            f"Debug mode enabled. Processed images will be saved to: {escape(str(debug_dir))}"
        )

    try:
        image_files = find_images(folder)
    except OSError as e:
        raise FilesystemError(f"Cannot list {folder}: {e}") from e
    limit = config.effective_limit
    to_process = image_files[:limit] if limit else image_files
    console.print(
        f"Found {len(image_files)} images"
        + (f", processing first {limit}" if limit else "")
    )

    output_file = Path(config.output_file)
    document = ""

    for count, image_file in enumerate(to_process, start=1):
        console.print(f"\n[cyan]Processing image:[/cyan] {escape(image_file)}")
        with console.status(
            f"[cyan]Transcribing via {provider.name} ({provider.model})..."
        ):
            transcription = transcribe_image(
                folder / image_file, provider, config.prompt, debug_dir
            )

        document += separator_block(config.separator, image_file)
        document += transcription

        console.print(f"Processed {count}/{len(to_process)} images")
        _write_document(output_file, document.strip())

    console.print(
        f"\n[green]Transcription complete. Output saved to: {escape(str(output_file))}[/green]"
    )
    return document.strip()
