"""Main CLI entry point."""

import sys
from pathlib import Path

import click
from dotenv import load_dotenv
from rich.markup import escape

from image_transcribe.config import (
    SEPARATOR_NONE,
    RunConfig,
    api_keys_from_env,
    load_prompt,
    parse_provider,
)
from image_transcribe.console import console
from image_transcribe.errors import TranscribeError
from image_transcribe.transcriber import process_image_folder

load_dotenv()


@click.command()
@click.argument("input_folder", type=click.Path(path_type=Path))
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path),
    default="transcription.md",
    show_default=True,
    help="Output markdown file path.",
)
@click.option(
    "--provider", "-p",
    default="openai",
    show_default=True,
    help="Vision provider to use (openai or gemini).",
)
@click.option(
    "--model", "-m",
    default=None,
    help="Model name override (e.g. gpt-4o for OpenAI or gemini-2.5-flash for Gemini).",
)
@click.option(
    "--prompt",
    default=None,
    help="Prompt text for transcription (required if --prompt-file is not given).",
)
@click.option(
    "--prompt-file",
    type=click.Path(path_type=Path),
    default=None,
    help="File containing the prompt text (required if --prompt is not given).",
)
@click.option(
    "--separator-header",
    default=SEPARATOR_NONE,
    show_default=True,
    help='"detailed" for filename headers, "none" for no separators, or custom text.',
)
@click.option(
    "--first",
    "limit",
    type=int,
    default=0,
    show_default=True,
    help="Process only the first N images (0 = all).",
)
@click.option(
    "--debug-dir",
    type=click.Path(path_type=Path),
    default=None,
    help="Directory to save processed images for debugging.",
)
@click.option(
    "--api-key",
    default=None,
    help="API key for the selected provider (overrides environment variable).",
)
@click.version_option(package_name="image-transcribe")
def main(
    input_folder, output, provider, model, prompt, prompt_file,
    separator_header, limit, debug_dir, api_key,
):
    """Transcribe handwritten text from a folder of PNG images using vision LLMs.

    Images in INPUT_FOLDER are processed in filename order and the combined
    transcription is written to --output after every image.
    """
    try:
        prompt_text = load_prompt(prompt, prompt_file)

        api_keys = api_keys_from_env()
        if api_key:
            api_keys[parse_provider(provider).value] = api_key

        config = RunConfig(
            input_folder=input_folder,
            output_file=output,
            provider=provider,
            prompt=prompt_text,
            separator=separator_header,
            limit=limit if limit > 0 else None,
            debug_dir=debug_dir,
            model=model or None,
        )
        process_image_folder(config, api_keys)
    except TranscribeError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)
