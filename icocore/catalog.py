"""
Source Catalog - Decoded, validated source images for one build

Sources are decoded once at native resolution. Any unreadable, undecodable
or non-square source aborts catalog construction; a partial catalog is never
returned.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from .codecs import CodecError, ImageCodec
from .errors import IcoIOError, ImageDecodeError, NonSquareImageError
from .worker_pool import WorkerPool

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceInput:
    """A source waiting to be decoded: a file path, or bytes with a label."""
    path: Optional[Path] = None
    data: Optional[bytes] = None
    name: Optional[str] = None

    @classmethod
    def from_file(cls, path) -> "SourceInput":
        return cls(path=Path(path))

    @classmethod
    def from_bytes(cls, data: bytes, name: Optional[str] = None) -> "SourceInput":
        return cls(data=bytes(data), name=name)

    @property
    def origin(self) -> str:
        """Human-readable identity used in error messages."""
        if self.path is not None:
            return str(self.path)
        return self.name or "<bytes>"

    def read(self) -> bytes:
        """
        Return the encoded bytes, reading the file if needed.

        Raises:
            IcoIOError: If the file cannot be read
        """
        if self.data is not None:
            return self.data
        if self.path is None:
            raise IcoIOError(None, "source has neither a path nor data")
        try:
            return self.path.read_bytes()
        except OSError as e:
            raise IcoIOError(self.path, e.strerror or str(e)) from e


@dataclass(frozen=True)
class SourceImage:
    """A decoded RGBA8 source image."""
    width: int
    height: int
    pixels: bytes
    origin: str

    @property
    def is_square(self) -> bool:
        return self.width == self.height

    def __repr__(self) -> str:
        return f"SourceImage({self.origin!r}, {self.width}x{self.height})"


def decode_source(source: SourceInput, codec: ImageCodec) -> SourceImage:
    """
    Read, decode and validate a single source.

    Raises:
        IcoIOError: If the source file cannot be read
        ImageDecodeError: If the codec rejects the bytes
        NonSquareImageError: If width and height differ
    """
    data = source.read()
    try:
        width, height, pixels = codec.decode(data)
    except CodecError as e:
        raise ImageDecodeError(source.origin, str(e)) from e

    image = SourceImage(width=width, height=height, pixels=pixels, origin=source.origin)
    if not image.is_square:
        raise NonSquareImageError(source.path or source.origin, width, height)

    logger.debug(f"Loaded source {image.origin} ({width}x{height})")
    return image


class SourceCatalog:
    """The decoded sources available to one build."""

    def __init__(self, images: Iterable[SourceImage] = ()):
        self._images: List[SourceImage] = list(images)

    @classmethod
    def build(
        cls,
        sources: Iterable[SourceInput],
        codec: ImageCodec,
        max_workers: int = 1
    ) -> "SourceCatalog":
        """
        Decode every source, in order.

        Args:
            sources: Pending sources
            codec: Codec used for decoding
            max_workers: Number of threads used to decode sources

        Returns:
            A catalog holding one SourceImage per source

        Raises:
            IcoBuilderError: The first failing source's error
        """
        sources = list(sources)
        pool = WorkerPool(max_workers=max_workers, name="decode")
        images = pool.map_ordered(lambda source: decode_source(source, codec), sources)
        logger.debug(f"Catalog built from {len(images)} sources")
        return cls(images)

    @property
    def images(self) -> List[SourceImage]:
        return list(self._images)

    @property
    def widths(self) -> List[int]:
        return [image.width for image in self._images]

    def __iter__(self) -> Iterator[SourceImage]:
        return iter(self._images)

    def __len__(self) -> int:
        return len(self._images)

    def __repr__(self) -> str:
        return f"SourceCatalog({self._images!r})"
