"""
Codecs - Decode, resample and encode capabilities

The builder never touches an imaging library directly. It goes through an
ImageCodec, which keeps selection and assembly testable with a fake codec.
PillowCodec is the implementation used in production.

Pixel buffers are raw RGBA8 bytes, row-major, 4 bytes per pixel.
"""

import io
import logging
from enum import Enum
from typing import Tuple, Union

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

RGBA8 = "RGBA8"
BYTES_PER_PIXEL = 4


class FilterType(Enum):
    """Resampling filters, mirroring Pillow's Image.Resampling."""
    NEAREST = "nearest"
    BOX = "box"
    BILINEAR = "bilinear"
    HAMMING = "hamming"
    BICUBIC = "bicubic"
    LANCZOS = "lanczos"

    @classmethod
    def parse(cls, value: Union["FilterType", str]) -> "FilterType":
        """
        Accept a FilterType, its value or its name (case-insensitive).

        Raises:
            ValueError: If the name is unknown
        """
        if isinstance(value, cls):
            return value
        name = str(value).strip().lower()
        for member in cls:
            if member.value == name:
                return member
        choices = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown filter type: {value} (choose from {choices})")


DEFAULT_FILTER = FilterType.LANCZOS

_PILLOW_FILTERS = {
    FilterType.NEAREST: Image.Resampling.NEAREST,
    FilterType.BOX: Image.Resampling.BOX,
    FilterType.BILINEAR: Image.Resampling.BILINEAR,
    FilterType.HAMMING: Image.Resampling.HAMMING,
    FilterType.BICUBIC: Image.Resampling.BICUBIC,
    FilterType.LANCZOS: Image.Resampling.LANCZOS,
}


class CodecError(Exception):
    """Raised by a codec when it cannot decode or encode a buffer."""


class ImageCodec:
    """
    Capabilities the builder needs from an imaging library.

    Subclasses implement all three methods. Failures are reported by
    raising CodecError; the builder tags them with the source or size.
    """

    def decode(self, data: bytes) -> Tuple[int, int, bytes]:
        """
        Decode an encoded raster into RGBA8.

        Returns:
            (width, height, pixels)
        """
        raise NotImplementedError

    def resample(
        self,
        pixels: bytes,
        src_width: int,
        src_height: int,
        dst_width: int,
        dst_height: int,
        filter_type: FilterType
    ) -> bytes:
        """Resample an RGBA8 buffer to a new size."""
        raise NotImplementedError

    def encode_png(self, pixels: bytes, width: int, height: int) -> bytes:
        """Losslessly compress an RGBA8 buffer into a PNG stream."""
        raise NotImplementedError


class PillowCodec(ImageCodec):
    """ImageCodec backed by Pillow."""

    def __init__(self, png_compress_level: int = 9):
        """
        Initialize codec.

        Args:
            png_compress_level: zlib level passed to the PNG encoder (0-9)
        """
        self.png_compress_level = png_compress_level

    def decode(self, data: bytes) -> Tuple[int, int, bytes]:
        try:
            with Image.open(io.BytesIO(data)) as image:
                image.load()
                rgba = image.convert("RGBA")
        except UnidentifiedImageError:
            raise CodecError("unsupported or unrecognized image format") from None
        except (OSError, SyntaxError, ValueError) as e:
            raise CodecError(str(e)) from e

        width, height = rgba.size
        logger.debug(f"Decoded {width}x{height} image ({len(data)} bytes)")
        return width, height, rgba.tobytes()

    def resample(
        self,
        pixels: bytes,
        src_width: int,
        src_height: int,
        dst_width: int,
        dst_height: int,
        filter_type: FilterType
    ) -> bytes:
        image = Image.frombytes("RGBA", (src_width, src_height), pixels)
        # Pillow returns an exact copy when the size is unchanged.
        resized = image.resize((dst_width, dst_height), _PILLOW_FILTERS[filter_type])
        return resized.tobytes()

    def encode_png(self, pixels: bytes, width: int, height: int) -> bytes:
        expected = width * height * BYTES_PER_PIXEL
        if len(pixels) != expected:
            raise CodecError(
                f"buffer holds {len(pixels)} bytes, expected {expected} for {width}x{height} RGBA8"
            )
        try:
            image = Image.frombytes("RGBA", (width, height), pixels)
            buffer = io.BytesIO()
            image.save(buffer, format="PNG", compress_level=self.png_compress_level)
        except (OSError, ValueError) as e:
            raise CodecError(str(e)) from e
        return buffer.getvalue()
