"""
Command-line entry point for PictureDSK.

Usage:
    picturedsk [-v] [--log-file FILE] [--config SETTINGS.json]
               [--creator NAME] IMAGE OUTPUT.woz [MESSAGE]

Exit codes:
    0: Image written
    1: Usage or input error (bad arguments, unreadable picture, bad settings)
    2: Output error (image could not be written)
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError
from rich.console import Console

from picturedsk import __version__
from picturedsk.core.settings import DiskInfo, load_disk_info
from picturedsk.imaging.image_formats import WOZ_EXTENSION, ImageError
from picturedsk.imaging.woz_image import write_woz
from picturedsk.codec.errors import EncodingError
from picturedsk.picture.disk_builder import build_picture_disk
from picturedsk.picture.pixel_source import load_pixels
from picturedsk.utils.error_handler import describe_error, is_fatal_error
from picturedsk.utils.logging import log_operation, setup_logging

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_USAGE_ERROR = 1
EXIT_OUTPUT_ERROR = 2


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with EXIT_USAGE_ERROR."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE_ERROR, f"{self.prog}: error: {message}\n")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="picturedsk",
        description=(
            "Turn a picture into a bootable Apple II WOZ disk image whose "
            "flux pattern shows the picture."
        ),
    )
    parser.add_argument("image", type=Path, help="Input picture (any Qt image format, or .npy)")
    parser.add_argument("output", type=Path, help="Output WOZ image")
    parser.add_argument(
        "message", nargs="?", default=None,
        help="Text shown under the picture when the disk boots (max 40 characters)",
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="Increase console logging (-v info, -vv debug)",
    )
    parser.add_argument("--log-file", type=Path, help="Also write a debug log to this file")
    parser.add_argument("--config", type=Path, help="JSON file with INFO chunk settings")
    parser.add_argument("--creator", help="Creator name stored in the image (max 32 bytes)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _console_level(verbosity: int) -> int:
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def _load_settings(args: argparse.Namespace) -> DiskInfo:
    info = load_disk_info(args.config) if args.config else DiskInfo()
    if args.creator is not None:
        info = DiskInfo(**{**info.model_dump(), "creator": args.creator})
    return info


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Run the picturedsk command.

    Args:
        argv: Arguments (default: sys.argv[1:])

    Returns:
        Process exit code
    """
    parser = build_arg_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    console = Console(stderr=True)
    setup_logging(args.log_file, _console_level(args.verbose), console=console)

    try:
        info = _load_settings(args)
    except (OSError, ValidationError) as e:
        console.print(f"[bold red]Error:[/bold red] {describe_error(e)}")
        return EXIT_USAGE_ERROR

    if args.output.suffix.lower() != WOZ_EXTENSION:
        logger.warning("Output file %s does not end in %s", args.output, WOZ_EXTENSION)

    try:
        pixels = load_pixels(args.image)
        log_operation(
            "load_pixels", f"{args.image}: {pixels.shape[1]}x{pixels.shape[0]}"
        )
        tracks = build_picture_disk(pixels, args.message)
        write_woz(tracks, args.output, info)
    except (ImageError, EncodingError, MemoryError) as e:
        logger.debug("Failed to build %s", args.output, exc_info=True)
        console.print(f"[bold red]Error:[/bold red] {describe_error(e)}")
        return EXIT_OUTPUT_ERROR if is_fatal_error(e) else EXIT_USAGE_ERROR

    console.print(
        f"[bold green]Wrote[/bold green] {args.output} "
        f"[dim]({len(tracks)} tracks, creator {info.creator!r})[/dim]"
    )
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
