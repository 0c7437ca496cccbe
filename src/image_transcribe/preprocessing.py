"""Image preprocessing for vision-model input.

Every input image is normalised into a JPEG payload sized for the providers'
"high resolution" image mode.

Pipeline
--------
1. Decode      — any raster format Pillow understands.

2. Resize      — the short side is fixed at 768 px and the long side follows
                 the aspect ratio, capped at 2000 px.  Small images are
                 scaled up as well, so every payload has the same short side.

3. Encode      — JPEG at quality 90.  Payloads above 20 MB are re-encoded
                 once at quality 70.  The second encoding is not checked
                 against the limit again; an oversized result is sent as is.

4. Debug copy  — optionally, the final bytes are written to a debug directory
                 as ``<original stem>.jpg``.
"""

import io
import math
from pathlib import Path
from typing import Optional, Union

from PIL import Image, UnidentifiedImageError
from rich.markup import escape

from image_transcribe.console import console
from image_transcribe.errors import DecodeError, FilesystemError

SHORT_SIDE = 768
MAX_LONG_SIDE = 2000

JPEG_QUALITY = 90
FALLBACK_JPEG_QUALITY = 70
MAX_PAYLOAD_BYTES = 20 * 1024 * 1024

PathLike = Union[str, Path]


def _mb(size: int) -> str:
    return f"{size / 1024 / 1024:.2f}MB"


def target_dimensions(width: int, height: int) -> tuple[int, int]:
    """Return ``(width, height)`` for high-resolution mode.

    Landscape and square images get a height of 768; portrait images get a
    width of 768.  The other side keeps the aspect ratio (rounded half up) and
    never exceeds 2000.
    """
    aspect_ratio = width / height
    if aspect_ratio >= 1:
        return min(math.floor(SHORT_SIDE * aspect_ratio + 0.5), MAX_LONG_SIDE), SHORT_SIDE
    return SHORT_SIDE, min(math.floor(SHORT_SIDE / aspect_ratio + 0.5), MAX_LONG_SIDE)


def encode_jpeg(img: Image.Image, quality: int) -> bytes:
    buf = io.BytesIO()
    img.save(buf, format="JPEG", quality=quality)
    return buf.getvalue()


def debug_filename(image_path: PathLike) -> str:
    """``scan_01.png`` → ``scan_01.jpg``."""
    return Path(image_path).with_suffix(".jpg").name


def _decode(image_path: Path) -> Image.Image:
    try:
        raw = image_path.read_bytes()
    except OSError as e:
        raise FilesystemError(f"Cannot read image {image_path}: {e}") from e

    try:
        img = Image.open(io.BytesIO(raw))
        img.load()
    except (
        Image.DecompressionBombError,
        UnidentifiedImageError,
        OSError,
        SyntaxError,
        ValueError,
    ) as e:
        raise DecodeError(f"Cannot decode image {image_path}: {e}") from e

    console.print(f"\n[bold]Image preprocessing details for {escape(str(image_path))}:[/bold]")
    console.print(f"Original size: {_mb(len(raw))}")
    return img


def _save_debug_copy(data: bytes, image_path: Path, debug_dir: Path) -> None:
    debug_path = debug_dir / debug_filename(image_path)
    try:
        debug_dir.mkdir(parents=True, exist_ok=True)
        debug_path.write_bytes(data)
    except OSError as e:
        console.print(
            f"[yellow]Warning:[/yellow] could not write debug output "
            f"{escape(str(debug_path))}: {escape(str(e))}"
        )
        return
    console.print(f"[dim]Debug output saved to: {escape(str(debug_path))}[/dim]")


def preprocess_image(image_path: PathLike, debug_dir: Optional[PathLike] = None) -> bytes:
    """Decode, resize and JPEG-encode an image; return the payload bytes."""
    image_path = Path(image_path)
    img = _decode(image_path)

    width, height = img.size
    target_w, target_h = target_dimensions(width, height)
    console.print(
        f"Original dimensions: {width}x{height} (aspect ratio: {width / height:.2f})"
    )
    console.print(f"Target dimensions: {target_w}x{target_h}")

    # JPEG has no alpha channel or palette
    if img.mode != "RGB":
        img = img.convert("RGB")
    img = img.resize((target_w, target_h), Image.Resampling.LANCZOS)

    data = encode_jpeg(img, JPEG_QUALITY)
    console.print(f"Processed size: {_mb(len(data))}")

    if len(data) > MAX_PAYLOAD_BYTES:
        console.print(
            "[yellow]Warning:[/yellow] Image size exceeds 20MB, attempting to compress further"
        )
        data = encode_jpeg(img, FALLBACK_JPEG_QUALITY)
        console.print(f"Recompressed size: {_mb(len(data))}")

    if debug_dir is not None:
        _save_debug_copy(data, image_path, Path(debug_dir))

    return data
