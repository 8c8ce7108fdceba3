#!/usr/bin/env python3
"""
Import tracks and running plans into the sports library.

Supported files:
- GPX: every track of the file is added
- iCAL: the calendar is added as running plan
- JSON: a running plan template is added after the existing plans
"""

import argparse

from sports_library.cli.common import add_library_arguments, detect_file_type, open_library
from sports_library.exceptions import SportsLibraryError
from sports_library.utils.formatting import format_distance, format_duration, format_speed
from sports_library.utils.gpx import import_gpx
from sports_library.utils.ical import import_ical
from sports_library.utils.templates import TemplateLoader


def main(argv: list[str] | None = None) -> int:
    """Main function to import a file into the library."""
    parser = argparse.ArgumentParser(
        description="Import tracks (GPX) and running plans (iCAL, JSON) into the sports library"
    )
    parser.add_argument("file", help="File to import")
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
    print(f"Library directory: {library.library_dir.absolute()}")

    try:
        if file_type == "gpx":
            tracks = import_gpx(library, args.file)
            print(f"\nImported {len(tracks)} tracks")
            for track in tracks:
                print(
                    f"  {track.name}: {format_distance(track.distance)}, "
                    f"{format_duration(track.duration)}, {format_speed(track.average_speed)}, "
                    f"{len(track.locations)} points"
                )
        else:
            if file_type == "ical":
                plan = import_ical(library, args.file)
            else:
                plan = TemplateLoader(library).import_running_plan_from_json(args.file)
            print(f"\nImported running plan: {plan.name}")
            print(f"  Entries:    {len(plan.entries)}")
            print(f"  Duration:   {format_duration(plan.duration)}")
            print(f"  Start date: {plan.start_date.isoformat()}")
    except SportsLibraryError as e:
        print(f"Error: {e.message}")
        return 1
    finally:
        library.close()

    return 0


if __name__ == "__main__":
    exit(main())
