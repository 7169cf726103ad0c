#!/usr/bin/env python3
"""
icobuilder - Build multi-size ICO files from square source images

Commands:
  build     Build an ICO file from one or more source images
  generate  Build into $OUT_DIR and print rebuild dependencies
  inspect   Show the directory of an existing ICO file
  sizes     Show the default icon sizes
"""

import argparse
import logging
import sys
from pathlib import Path

from icocore.build_system import DEFAULT_OUT_DIR_VAR
from icocore.builder import IcoBuilder
from icocore.codecs import FilterType
from icocore.config import BuilderConfig
from icocore.container import read_container
from icocore.sizes import IconSizes

logger = logging.getLogger("icobuilder")


def configure_logging(verbose: bool) -> None:
    """Set up console logging for the CLI."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stderr
    )


def make_builder(args: argparse.Namespace) -> IcoBuilder:
    """Create a builder from environment config overridden by CLI flags."""
    config = BuilderConfig.from_env()
    if args.sizes:
        config.sizes = IconSizes(args.sizes)
    if args.filter:
        config.filter_type = FilterType.parse(args.filter)
    if args.workers:
        config.max_workers = args.workers
    if getattr(args, "out_dir_var", None):
        config.out_dir_var = args.out_dir_var

    builder = IcoBuilder.from_config(config)
    builder.add_source_files(args.sources)
    return builder


def cmd_build(args: argparse.Namespace) -> int:
    """Build an ICO file."""
    try:
        builder = make_builder(args)
        builder.build_file(args.output)

        print(f"Wrote {args.output}")
        print(f"Sizes: {', '.join(str(s) for s in builder.configured_sizes)}")
        return 0

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_generate(args: argparse.Namespace) -> int:
    """Build into the build system's output directory."""
    try:
        builder = make_builder(args)
        output_path = builder.build_to_generated_path(args.name)

        logger.info(f"Generated {output_path}")
        return 0

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_inspect(args: argparse.Namespace) -> int:
    """Show the directory of an ICO file."""
    try:
        data = Path(args.file).read_bytes()
        entries = read_container(data)

        print(f"{args.file}: {len(entries)} frames, {len(data)} bytes")
        for i, entry in enumerate(entries):
            kind = "png" if entry.is_png else "bmp"
            print(
                f"  {i:2}  {entry.width:>3}x{entry.height:<3}  {kind}  "
                f"{entry.size:>8} bytes @ {entry.offset}"
            )
        return 0

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_sizes(args: argparse.Namespace) -> int:
    """Show the default sizes."""
    try:
        config = BuilderConfig.from_env()
        print(" ".join(str(size) for size in config.sizes))
        return 0

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def add_build_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("sources", nargs="+", help="Square source images")
    parser.add_argument(
        "--sizes",
        type=int,
        nargs="+",
        help="Icon sizes (default: 16 24 32 48 256)"
    )
    parser.add_argument(
        "--filter",
        choices=[f.value for f in FilterType],
        help="Resampling filter (default: lanczos)"
    )
    parser.add_argument("--workers", type=int, help="Worker threads (default: 1)")


def main() -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="icobuilder - Build multi-size ICO files",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Build command
    build_parser = subparsers.add_parser("build", help="Build an ICO file")
    add_build_arguments(build_parser)
    build_parser.add_argument("--output", "-o", required=True, help="Output ICO path")

    # Generate command
    generate_parser = subparsers.add_parser("generate", help="Build into $OUT_DIR")
    add_build_arguments(generate_parser)
    generate_parser.add_argument("--name", required=True, help="Output file name")
    generate_parser.add_argument(
        "--out-dir-var",
        default=DEFAULT_OUT_DIR_VAR,
        help=f"Environment variable holding the output directory (default: {DEFAULT_OUT_DIR_VAR})"
    )

    # Inspect command
    inspect_parser = subparsers.add_parser("inspect", help="Show an ICO directory")
    inspect_parser.add_argument("file", help="ICO file")

    # Sizes command
    subparsers.add_parser("sizes", help="Show default sizes")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    configure_logging(args.verbose)

    handlers = {
        "build": cmd_build,
        "generate": cmd_generate,
        "inspect": cmd_inspect,
        "sizes": cmd_sizes,
    }

    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
