"""Core modules for icobuilder."""

from .build_system import BuildSystem, EnvBuildSystem
from .builder import IcoBuilder, create_frames
from .catalog import SourceCatalog, SourceImage, SourceInput
from .codecs import CodecError, FilterType, ImageCodec, PillowCodec
from .config import BuilderConfig
from .container import IconDirEntry, assemble, read_container, write_container
from .errors import (
    BuildSystemError,
    ContainerFormatError,
    IcoBuilderError,
    IcoIOError,
    ImageDecodeError,
    ImageEncodeError,
    InvalidIconSizeError,
    MissingIconSizeError,
    NonSquareImageError,
)
from .selector import select_source
from .sizes import IconSizes
from .synthesizer import SynthesizedFrame, synthesize
from .worker_pool import WorkerPool

__all__ = [
    "IcoBuilder",
    "IconSizes",
    "FilterType",
    "BuilderConfig",
    "ImageCodec",
    "PillowCodec",
    "CodecError",
    "SourceCatalog",
    "SourceImage",
    "SourceInput",
    "select_source",
    "SynthesizedFrame",
    "synthesize",
    "create_frames",
    "IconDirEntry",
    "assemble",
    "write_container",
    "read_container",
    "BuildSystem",
    "EnvBuildSystem",
    "WorkerPool",
    "IcoBuilderError",
    "ImageDecodeError",
    "NonSquareImageError",
    "MissingIconSizeError",
    "ImageEncodeError",
    "IcoIOError",
    "InvalidIconSizeError",
    "ContainerFormatError",
    "BuildSystemError",
]
