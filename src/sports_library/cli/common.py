"""Argument handling shared by the command line tools."""

import argparse
from pathlib import Path

from dotenv import load_dotenv

from sports_library.library import SportsLibrary

FILE_TYPES = {
    ".gpx": "gpx",
    ".ics": "ical",
    ".ical": "ical",
    ".json": "json",
}


def add_library_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the options selecting and configuring the library."""
    parser.add_argument(
        "--library-dir",
        help="Library directory (default: $SPORTS_LIBRARY_DATA_DIR or ~/sports_library)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Write debug messages into the library log",
    )
    parser.add_argument(
        "--env-file",
        help="Path to .env file with the library configuration",
    )


def open_library(args: argparse.Namespace) -> SportsLibrary:
    """Load environment variables and open the library selected by the arguments."""
    if args.env_file:
        load_dotenv(dotenv_path=args.env_file, override=True)
    else:
        load_dotenv()
    return SportsLibrary(debug_mode=args.debug, library_dir=args.library_dir)


def detect_file_type(file_path: str | Path, file_type: str | None) -> str | None:
    """Use the given file type or derive it from the file extension."""
    if file_type:
        return file_type
    return FILE_TYPES.get(Path(file_path).suffix.lower())
