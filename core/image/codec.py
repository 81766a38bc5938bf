"""
Image codec - decodes files into pixel buffers and persists them again.

Decoding goes through Pillow; the output format is inferred from the file
extension (.jpg/.jpeg, .png, .bmp).
"""

import logging
import os
from typing import Tuple

from PIL import Image, UnidentifiedImageError

from core.constants import ImageConstants
from core.exceptions import ImageReadError, ImageWriteError
from core.image.buffer import PixelBuffer
from core.image.converters import ImageConverters

logger = logging.getLogger(__name__)

_PIL_FORMATS = {".jpg": "JPEG", ".jpeg": "JPEG", ".png": "PNG", ".bmp": "BMP"}


class ImageCodec:
    """Reads and writes PixelBuffers on disk."""

    def __init__(self, jpeg_quality: int = ImageConstants.JPEG_QUALITY):
        self.jpeg_quality = jpeg_quality

    def read(self, path: str) -> PixelBuffer:
        """
        Decode an image file.

        Args:
            path: Source path

        Returns:
            Decoded PixelBuffer

        Raises:
            ImageReadError: If the file cannot be decoded or has no pixel data
        """
        try:
            with Image.open(path) as image:
                image.load()
                buffer = ImageConverters.pil_to_buffer(image)
        except (
            FileNotFoundError,
            UnidentifiedImageError,
            Image.DecompressionBombError,
            OSError,
            ValueError,
        ) as e:
            logger.debug(f"Decode failed for {path}: {e}")
            raise ImageReadError() from e

        if buffer.size_bytes == 0:
            raise ImageReadError()

        logger.debug(f"Decoded {path}: {buffer}")
        return buffer

    def write(self, path: str, buffer: PixelBuffer) -> None:
        """
        Encode a buffer, inferring the format from the extension.

        Raises:
            ImageWriteError: If the extension is unsupported or encoding fails
        """
        ext = os.path.splitext(path)[1].lower()
        pil_format = _PIL_FORMATS.get(ext)
        if pil_format is None:
            raise ImageWriteError(f"Unsupported output format: '{ext or path}'")

        is_jpeg = ext in ImageConstants.JPEG_EXTENSIONS
        image = ImageConverters.buffer_to_pil(buffer, drop_alpha=is_jpeg)

        save_kwargs = {"format": pil_format}
        if is_jpeg:
            save_kwargs["quality"] = self.jpeg_quality

        try:
            image.save(path, **save_kwargs)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to write {path}: {e}")
            raise ImageWriteError() from e

        logger.debug(f"Wrote {path}: {buffer}")

    def read_shape(self, path: str) -> Tuple[int, int, int]:
        """Decode and return (width, height, channels)."""
        buffer = self.read(path)
        return buffer.width, buffer.height, buffer.channels
