"""
Frame Synthesizer - Resize a source and compress it into a frame payload
"""

import logging
from dataclasses import dataclass

from .catalog import SourceImage
from .codecs import DEFAULT_FILTER, RGBA8, CodecError, FilterType, ImageCodec
from .errors import ImageEncodeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SynthesizedFrame:
    """A size x size PNG payload ready to be packed into a container."""
    size: int
    payload: bytes
    color_format: str = RGBA8

    def __repr__(self) -> str:
        return f"SynthesizedFrame({self.size}px, {len(self.payload)} bytes)"


def synthesize(
    source: SourceImage,
    size: int,
    codec: ImageCodec,
    filter_type: FilterType = DEFAULT_FILTER
) -> SynthesizedFrame:
    """
    Produce one frame from a source.

    Args:
        source: Source chosen by select_source
        size: Target edge length
        codec: Codec used for resampling and encoding
        filter_type: Resampling filter

    Returns:
        The encoded frame

    Raises:
        ImageEncodeError: If the codec cannot produce a PNG
    """
    pixels = codec.resample(
        source.pixels, source.width, source.height, size, size, filter_type
    )
    try:
        payload = codec.encode_png(pixels, size, size)
    except CodecError as e:
        raise ImageEncodeError(size, str(e)) from e

    logger.debug(
        f"Synthesized {size}px frame from {source.origin} "
        f"({filter_type.value}, {len(payload)} bytes)"
    )
    return SynthesizedFrame(size=size, payload=payload)
