"""
Icon Builder - Build multi-size ICO files from separate images

Each size is downscaled from the closest source that is at least that big.
With the default sizes, the 16, 24 and 32px frames below come from the 32px
source and the 48 and 256px frames from the 256px source:

    IcoBuilder() \\
        .add_source_file("app-icon-32x32.png") \\
        .add_source_file("app-icon-256x256.png") \\
        .build_file("app-icon.ico")

A build is all or nothing. The container is assembled in memory and only
written once every frame exists, so a failure never leaves a truncated file.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import BinaryIO, Iterable, List, Optional, Sequence, Union

from .build_system import DEFAULT_OUT_DIR_VAR, BuildSystem, EnvBuildSystem
from .catalog import SourceCatalog, SourceInput
from .codecs import DEFAULT_FILTER, FilterType, ImageCodec, PillowCodec
from .config import BuilderConfig
from .container import assemble, write_container
from .errors import IcoIOError
from .selector import select_source
from .sizes import IconSizes
from .synthesizer import SynthesizedFrame, synthesize
from .worker_pool import WorkerPool

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]
Sink = Union[PathLike, BinaryIO]


def create_frames(
    sizes: Sequence[int],
    catalog: SourceCatalog,
    codec: ImageCodec,
    filter_type: FilterType = DEFAULT_FILTER,
    max_workers: int = 1
) -> List[SynthesizedFrame]:
    """
    Select and synthesize one frame per size, in the order of sizes.

    Duplicate sizes are synthesized independently. The first failure
    aborts the whole list.
    """
    def make_frame(size: int) -> SynthesizedFrame:
        source = select_source(catalog, size)
        return synthesize(source, size, codec, filter_type)

    pool = WorkerPool(max_workers=max_workers, name="frame")
    return pool.map_ordered(make_frame, sizes)


class IcoBuilder:
    """
    Builds an ICO file from individual images.

    Configure with the chained setters, then call one of the build methods.
    The builder can be built repeatedly; sources are decoded on every build.
    """

    def __init__(
        self,
        sizes: Optional[Iterable[int]] = None,
        filter_type: Union[FilterType, str] = DEFAULT_FILTER,
        codec: Optional[ImageCodec] = None,
        max_workers: int = 1,
        out_dir_var: str = DEFAULT_OUT_DIR_VAR
    ):
        """
        Initialize builder.

        Args:
            sizes: Icon sizes (default: 16, 24, 32, 48, 256)
            filter_type: Resampling filter used when downscaling
            codec: Image codec (default: PillowCodec)
            max_workers: Threads used for decoding and synthesis
            out_dir_var: Environment variable read by build_to_generated_path
        """
        self._sizes = IconSizes.default() if sizes is None else IconSizes(sizes)
        self._sources: List[SourceInput] = []
        self._filter_type = FilterType.parse(filter_type)
        self._codec = codec or PillowCodec()
        self._max_workers = max_workers
        self._out_dir_var = out_dir_var

    @classmethod
    def from_config(cls, config: BuilderConfig, codec: Optional[ImageCodec] = None) -> "IcoBuilder":
        """Create a builder from a BuilderConfig."""
        return cls(
            sizes=config.sizes,
            filter_type=config.filter_type,
            codec=codec,
            max_workers=config.max_workers,
            out_dir_var=config.out_dir_var,
        )

    # Configuration

    def sizes(self, sizes: Iterable[int]) -> "IcoBuilder":
        """Replace the icon sizes. Sizes are validated when building."""
        self._sizes = IconSizes(sizes)
        return self

    def add_source_file(self, path: PathLike) -> "IcoBuilder":
        """
        Add a source file. Any format the codec can decode is accepted
        (with Pillow: PNG, BMP, JPEG, ...). Sources must be square.
        """
        return self.add_source_files([path])

    def add_source_files(self, paths: Iterable[PathLike]) -> "IcoBuilder":
        """Add several source files. See add_source_file."""
        self._sources.extend(SourceInput.from_file(path) for path in paths)
        return self

    def add_source_bytes(self, data: bytes, name: Optional[str] = None) -> "IcoBuilder":
        """Add an already-read source. name is only used in error messages."""
        self._sources.append(SourceInput.from_bytes(data, name))
        return self

    def filter_type(self, filter_type: Union[FilterType, str]) -> "IcoBuilder":
        """Set the downscaling filter. Defaults to FilterType.LANCZOS."""
        self._filter_type = FilterType.parse(filter_type)
        return self

    def max_workers(self, max_workers: int) -> "IcoBuilder":
        """Decode sources and synthesize frames on this many threads."""
        self._max_workers = max_workers
        return self

    def codec(self, codec: ImageCodec) -> "IcoBuilder":
        self._codec = codec
        return self

    def out_dir_var(self, env_var: str) -> "IcoBuilder":
        """Set the variable build_to_generated_path reads its directory from."""
        self._out_dir_var = env_var
        return self

    @property
    def source_files(self) -> List[Path]:
        """Paths of the file sources added so far."""
        return [source.path for source in self._sources if source.path is not None]

    @property
    def configured_sizes(self) -> IconSizes:
        return self._sizes

    @property
    def configured_filter(self) -> FilterType:
        return self._filter_type

    # Building

    def _build_frames(self) -> List[SynthesizedFrame]:
        self._sizes.validate()
        catalog = SourceCatalog.build(self._sources, self._codec, self._max_workers)
        frames = create_frames(
            self._sizes, catalog, self._codec, self._filter_type, self._max_workers
        )
        logger.info(f"Built {len(frames)} frames from {len(catalog)} sources")
        return frames

    def build_bytes(self) -> bytes:
        """
        Build the ICO file in memory.

        Returns:
            The container bytes

        Raises:
            IcoBuilderError: On any decode, size, selection or encode failure
        """
        return assemble(self._build_frames())

    def build_to(self, sink: Sink) -> None:
        """
        Build the ICO file and write it to a path or a binary stream.

        Paths are replaced atomically: the file is written next to the
        destination and renamed over it, so a failed build leaves any
        existing file untouched.

        Raises:
            IcoBuilderError: On any build failure
            IcoIOError: If the sink cannot be written
        """
        frames = self._build_frames()

        if hasattr(sink, "write"):
            try:
                write_container(frames, sink)
            except OSError as e:
                raise IcoIOError(getattr(sink, "name", None), str(e)) from e
            return

        _write_atomic(Path(sink), assemble(frames))
        logger.info(f"Wrote {sink}")

    def build_file(self, output_path: PathLike) -> None:
        """Build the ICO file and write it to output_path."""
        self.build_to(output_path)

    def build_to_generated_path(
        self,
        file_name: str,
        build_system: Optional[BuildSystem] = None
    ) -> Path:
        """
        Build the ICO file into the build system's output directory.

        Each source file is declared as a rebuild dependency first.

        Args:
            file_name: Name of the file inside the output directory
            build_system: Defaults to EnvBuildSystem reading the configured
                out_dir_var (OUT_DIR unless changed)

        Returns:
            Path of the written file

        Raises:
            BuildSystemError: If the output directory is not configured
        """
        build_system = build_system or EnvBuildSystem(env_var=self._out_dir_var)
        output_path = build_system.output_dir() / file_name

        for path in self.source_files:
            build_system.declare_dependency(path)

        self.build_to(output_path)
        return output_path

    def __repr__(self) -> str:
        return (
            f"IcoBuilder(sizes={list(self._sizes)}, sources={len(self._sources)}, "
            f"filter={self._filter_type.value})"
        )


def _write_atomic(path: Path, data: bytes) -> None:
    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(data)
        os.chmod(tmp_name, _file_mode(path))
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise IcoIOError(path, e.strerror or str(e)) from e


def _file_mode(path: Path) -> int:
    """Keep an existing file's mode, otherwise what a plain open() would give."""
    try:
        return path.stat().st_mode & 0o7777
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask
