#!/usr/bin/env python3
"""
Export a running plan (JSON, iCAL) or a track (GPX) from the sports library.

Running plans and tracks are selected by name.
"""

import argparse

from sports_library.cli.common import add_library_arguments, detect_file_type, open_library
from sports_library.exceptions import SportsLibraryError
from sports_library.models import RunningPlan, Track
from sports_library.utils.gpx import export_gpx
from sports_library.utils.ical import export_ical


def main(argv: list[str] | None = None) -> int:
    """Main function to export a running plan or a track."""
    parser = argparse.ArgumentParser(
        description="Export a running plan (JSON, iCAL) or a track (GPX) from the sports library"
    )
    parser.add_argument("name", help="Name of the running plan or track")
    parser.add_argument("file", help="Target file")
    parser.add_argument(
        "--type",
        choices=["gpx", "ical", "json"],
        help="Type of the file (default: derived from the file extension)",
    )
    add_library_arguments(parser)

    args = parser.parse_args(argv)

    file_type = detect_file_type(args.file, args.type)
    if file_type is None:
        print(f"Error: Unknown file type of {args.file}, use --type")
        return 1

    library = open_library(args)
    try:
        if file_type == "gpx":
            tracks = library.find_by_attribute("name", args.name, Track)
            if not tracks:
                print(f"Error: Track not found: {args.name}")
                return 1
            export_gpx(tracks[0], args.file)
            print(f"Exported track {args.name} to {args.file}")
        else:
            plans = library.find_by_attribute("name", args.name, RunningPlan)
            if not plans:
                print(f"Error: Running plan not found: {args.name}")
                return 1
            if file_type == "ical":
                export_ical(plans[0], args.file)
            else:
                library.export_to_json(plans[0], args.file)
            print(f"Exported running plan {args.name} to {args.file}")
    except SportsLibraryError as e:
        print(f"Error: {e.message}")
        return 1
    finally:
        library.close()

    return 0


if __name__ == "__main__":
    exit(main())
