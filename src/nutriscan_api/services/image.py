"""Label image preparation before it is sent to the model."""

import base64
import io
import logging
import time

from PIL import Image, ImageOps, UnidentifiedImageError

from nutriscan_api.core.exceptions import ErrorKind, NutriScanError

logger = logging.getLogger(__name__)


def prepare_for_model(data: bytes, max_edge: int = 1024, quality: int = 80) -> bytes:
    """
    Decode an uploaded image and re-encode it as a bounded JPEG.

    The longer edge is scaled down to `max_edge` keeping the aspect ratio;
    smaller images keep their size.

    Raises:
        NutriScanError: INVALID_IMAGE if the bytes are not a readable image
            or decode to more pixels than Pillow allows
    """
    if not data:
        raise NutriScanError("Gambar kosong.", kind=ErrorKind.INVALID_IMAGE)

    try:
        with Image.open(io.BytesIO(data)) as image:
            image = ImageOps.exif_transpose(image)
            if image.mode != "RGB":
                image = image.convert("RGB")
            if max(image.size) > max_edge:
                image.thumbnail((max_edge, max_edge), Image.Resampling.LANCZOS)

            buffer = io.BytesIO()
            image.save(buffer, format="JPEG", quality=quality)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise NutriScanError(
            "Gambar tidak dapat dibaca.",
            kind=ErrorKind.INVALID_IMAGE,
            details={"reason": str(e)},
        ) from e

    encoded = buffer.getvalue()
    logger.debug(f"Image prepared: {len(data)} -> {len(encoded)} bytes")
    return encoded


def to_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("utf-8")


def generate_unique_filename() -> str:
    return f"scan_{int(time.time() * 1000)}.jpg"
