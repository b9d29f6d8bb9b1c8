"""
Catalog scene-named media containers.

Writes a MediaInfo sidecar (.mnfo) and an MD5 manifest for each container in a
directory and renames it to its bare name; with --reverse, restores the encoded
names from the sidecars and removes them.
"""

import argparse
import sys
from pathlib import Path

import catalog as catalog_module
from catalog.config import CatalogConfig
from catalog.errors import ExternalToolUnavailable, RenameFailure
from catalog.sidecar import catalog_directory
from catalog.utils import MEDIAINFO_BIN, PROBE_TIMEOUT, LogLevel, logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cataloguer",
        description="Catalog the media containers of a directory: save their MediaInfo report with the "
                    "release provenance encoded in their names, then strip that provenance off the names.",
        epilog="Example: cataloguer -i ~/Movies/incoming",
    )
    parser.add_argument("directory", help="Directory containing the media containers")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "-i", "--info", action="store_true", help="Generate only the media info file, without MD5 hash (faster)"
    )
    mode.add_argument(
        "-r",
        "--reverse",
        action="store_true",
        help="Rebuild the original media file name from the media info file. "
             "Also deletes the media info file and the MD5 hash file, if any.",
    )
    parser.add_argument(
        "--keep-going", action="store_true", help="Skip a file that can't be renamed instead of stopping"
    )
    parser.add_argument(
        "--strict-escaping",
        action="store_true",
        help="Escape every reserved character of original titles, not only ':'",
    )
    parser.add_argument("--mediainfo", default=MEDIAINFO_BIN, help=f"MediaInfo CLI binary (default: {MEDIAINFO_BIN})")
    parser.add_argument(
        "--timeout", type=float, default=PROBE_TIMEOUT, help=f"Seconds allowed per MediaInfo run (default: {PROBE_TIMEOUT:g})"
    )
    parser.add_argument("--log-file", help="Also append log lines to this file")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {catalog_module.__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logger.set_log_level(LogLevel.DEBUG if args.debug else LogLevel.INFO)
    if args.log_file:
        logger.attach_log_file(Path(args.log_file).expanduser())

    try:
        config = CatalogConfig(
            directory=Path(args.directory).expanduser().resolve(),
            info_only=args.info,
            reverse=args.reverse,
            strict_escaping=args.strict_escaping,
            stop_on_rename_failure=not args.keep_going,
            mediainfo_binary=args.mediainfo,
            probe_timeout=args.timeout,
        )
    except ValueError as e:
        logger.log("startup.error", LogLevel.ERROR, msg=str(e), directory=args.directory)
        parser.print_usage(sys.stderr)
        return 2

    try:
        summary = catalog_directory(config)
    except ExternalToolUnavailable as e:
        logger.log("startup.error", LogLevel.ERROR, msg=str(e))
        return 2
    except RenameFailure as e:
        logger.log("catalog.halted", LogLevel.ERROR, msg=str(e))
        return 1
    finally:
        logger.detach_log_file()

    return 1 if summary.failed else 0


if __name__ == "__main__":
    sys.exit(main())
