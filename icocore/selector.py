"""
Frame Selector - Pick the source that feeds each icon size

Each frame is downscaled from the smallest source that is at least as large
as the frame. Sources are never upscaled.
"""

import logging
from typing import Iterable

from .catalog import SourceImage
from .errors import MissingIconSizeError

logger = logging.getLogger(__name__)


def select_source(sources: Iterable[SourceImage], size: int) -> SourceImage:
    """
    Find the next bigger (or equal) source for a size.

    Among sources of equal width the first one added wins.

    Args:
        sources: A SourceCatalog or any iterable of SourceImage
        size: Requested edge length in pixels

    Returns:
        The chosen source

    Raises:
        MissingIconSizeError: If every source is smaller than size
    """
    candidates = [image for image in sources if image.width >= size]
    if not candidates:
        raise MissingIconSizeError(size)

    chosen = min(candidates, key=lambda image: image.width)
    logger.debug(f"{size}px frame <- {chosen.origin} ({chosen.width}px)")
    return chosen
