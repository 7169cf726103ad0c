"""
Container - ICO file layout

Writes and reads the multi-image ICO container:

    ICONDIR       reserved (0), type (1 = icon), count        <HHH
    ICONDIRENTRY  one per frame, 16 bytes                     <BBBBHHII
                  width, height (0 means 256), palette size,
                  reserved, color planes, bits per pixel,
                  payload length, payload offset
    payloads      PNG streams, concatenated in directory order

Payloads are self-describing PNGs, so planes and bit depth are stored as 0.
"""

import logging
import struct
from dataclasses import dataclass
from typing import BinaryIO, List, Sequence

from .errors import ContainerFormatError, InvalidIconSizeError
from .sizes import MAX_ICON_SIZE
from .synthesizer import SynthesizedFrame

logger = logging.getLogger(__name__)

HEADER_FORMAT = "<HHH"
ENTRY_FORMAT = "<BBBBHHII"
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)
ENTRY_SIZE = struct.calcsize(ENTRY_FORMAT)

ICON_TYPE = 1
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


@dataclass(frozen=True)
class IconDirEntry:
    """A parsed directory entry."""
    width: int
    height: int
    color_count: int
    planes: int
    bit_count: int
    size: int
    offset: int
    is_png: bool = True


def _encode_dimension(size: int) -> int:
    if size < 1 or size > MAX_ICON_SIZE:
        raise InvalidIconSizeError(size)
    return 0 if size == MAX_ICON_SIZE else size


def _decode_dimension(value: int) -> int:
    return MAX_ICON_SIZE if value == 0 else value


def assemble(frames: Sequence[SynthesizedFrame]) -> bytes:
    """
    Serialize frames into a complete ICO file.

    Args:
        frames: Frames in directory order

    Returns:
        The container bytes
    """
    header = struct.pack(HEADER_FORMAT, 0, ICON_TYPE, len(frames))
    offset = HEADER_SIZE + ENTRY_SIZE * len(frames)

    entries = []
    for frame in frames:
        dimension = _encode_dimension(frame.size)
        entries.append(struct.pack(
            ENTRY_FORMAT,
            dimension,
            dimension,
            0,  # palette size
            0,  # reserved
            0,  # color planes
            0,  # bits per pixel
            len(frame.payload),
            offset,
        ))
        offset += len(frame.payload)

    data = header + b"".join(entries) + b"".join(frame.payload for frame in frames)
    logger.debug(f"Assembled container with {len(frames)} frames ({len(data)} bytes)")
    return data


def write_container(frames: Sequence[SynthesizedFrame], sink: BinaryIO) -> int:
    """
    Assemble frames and write them to a binary stream in one call.

    Returns:
        Number of bytes written
    """
    data = assemble(frames)
    sink.write(data)
    return len(data)


def read_container(data: bytes) -> List[IconDirEntry]:
    """
    Parse the directory of an ICO file.

    Every entry's payload range is checked against the data length.

    Args:
        data: Complete ICO file contents

    Returns:
        Directory entries in file order

    Raises:
        ContainerFormatError: If the header, directory or offsets are invalid
    """
    if len(data) < HEADER_SIZE:
        raise ContainerFormatError("File too short for an ICO header")

    reserved, kind, count = struct.unpack_from(HEADER_FORMAT, data, 0)
    if reserved != 0 or kind != ICON_TYPE:
        raise ContainerFormatError(f"Not an icon file (reserved={reserved}, type={kind})")

    directory_end = HEADER_SIZE + ENTRY_SIZE * count
    if len(data) < directory_end:
        raise ContainerFormatError(f"Directory of {count} entries is truncated")

    entries = []
    for i in range(count):
        (width, height, color_count, _reserved, planes, bit_count,
         size, offset) = struct.unpack_from(ENTRY_FORMAT, data, HEADER_SIZE + ENTRY_SIZE * i)
        if offset < directory_end or offset + size > len(data):
            raise ContainerFormatError(
                f"Entry {i} payload ({offset}+{size}) is outside the file ({len(data)} bytes)"
            )
        entries.append(IconDirEntry(
            width=_decode_dimension(width),
            height=_decode_dimension(height),
            color_count=color_count,
            planes=planes,
            bit_count=bit_count,
            size=size,
            offset=offset,
            is_png=data[offset:offset + len(PNG_SIGNATURE)] == PNG_SIGNATURE,
        ))

    return entries


def extract_payload(data: bytes, entry: IconDirEntry) -> bytes:
    """Return the payload bytes an entry points at."""
    return data[entry.offset:entry.offset + entry.size]
