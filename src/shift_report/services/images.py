"""Photo decoding and normalization before upload."""

import base64
import binascii
import io
from dataclasses import dataclass

from PIL import Image, ImageOps, UnidentifiedImageError

from shift_report.domain.errors import ImageDecodeError

MAX_WIDTH = 1200
JPEG_QUALITY = 80
CONTENT_TYPE = "image/jpeg"


@dataclass(frozen=True)
class NormalizedImage:
    """Re-encoded photo bounded to the maximum width."""

    data: bytes
    width: int
    height: int
    content_type: str = CONTENT_TYPE


def decode_data_url(value: str) -> bytes:
    """Return the raw bytes of a base64 data URL."""
    header, sep, payload = value.partition(",")
    if not sep or not header.startswith("data:") or not header.endswith(";base64"):
        raise ImageDecodeError("Photo is not a base64 data URL")
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ImageDecodeError("Photo data URL is not valid base64") from exc


def normalize_image(data: bytes) -> NormalizedImage:
    """Downscale to MAX_WIDTH and re-encode as JPEG.

    Aspect ratio is preserved. Images that are already narrow enough are
    re-encoded at their original size. Transparent pixels are flattened onto
    white since JPEG has no alpha channel.
    """
    try:
        with Image.open(io.BytesIO(data)) as source:
            source.load()
            image = ImageOps.exif_transpose(source)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
        raise ImageDecodeError(f"Failed to load image: {exc}") from exc

    image = _to_rgb(image)
    width, height = image.size
    if width > MAX_WIDTH:
        height = max(1, round(height * MAX_WIDTH / width))
        width = MAX_WIDTH
        image = image.resize((width, height), Image.Resampling.LANCZOS)

    buffer = io.BytesIO()
    image.save(buffer, format="JPEG", quality=JPEG_QUALITY, optimize=True)
    return NormalizedImage(data=buffer.getvalue(), width=width, height=height)


def _to_rgb(image: Image.Image) -> Image.Image:
    if image.mode in {"RGBA", "LA"} or (
        image.mode == "P" and "transparency" in image.info
    ):
        rgba = image.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    if image.mode != "RGB":
        return image.convert("RGB")
    return image
