"""Import and export of tracks as GPX files."""

import logging
import os
from pathlib import Path
from typing import Any, Optional

import gpxpy
import gpxpy.gpx

from sports_library.exceptions import GPXError, SportsLibraryError
from sports_library.models import LocationData, Track
from sports_library.utils.dates import datetime_to_timestamp, timestamp_to_datetime, today

logger = logging.getLogger(__name__)

DEFAULT_TRACK_DESCRIPTION = "Imported track"
EXPORT_AUTHOR = "Sports Library"
EXPORT_DESCRIPTION = "Track exported from the sports library"

# GPX fix types and their numeric representation in LocationData.gps_fix
GPS_FIX_VALUES = {"none": 0, "2d": 2, "3d": 3, "dgps": 4, "pps": 5}
GPS_FIX_NAMES = {value: name for name, value in GPS_FIX_VALUES.items()}


def load_tracks_from_gpx(gpx_file: str | Path) -> list[Track]:
    """
    Read all tracks of a GPX file.

    Args:
        gpx_file: Path to the GPX file

    Returns:
        One track per GPX track, not yet added to a library
    """
    path = Path(gpx_file)
    if not path.is_file():
        raise GPXError(f"The file {path} does not exist or is not a file", {"path": str(path)})
    try:
        with open(path, "r", encoding="utf-8") as f:
            gpx = gpxpy.parse(f)
    except (OSError, gpxpy.gpx.GPXException) as err:
        raise GPXError(f"Could not read {path}: {err}", {"path": str(path)}) from err

    remarks = _build_remarks(gpx)
    tracks = [_convert_track(gpx_track, remarks) for gpx_track in gpx.tracks]
    logger.debug("Loaded %d tracks from %s", len(tracks), path)
    return tracks


def import_gpx(library: Any, gpx_file: str | Path) -> list[Track]:
    """Read all tracks of a GPX file and add them to the library."""
    tracks = load_tracks_from_gpx(gpx_file)
    for track in tracks:
        try:
            library.add(track)
        except SportsLibraryError as err:
            raise GPXError(
                f"Could not add track {track.name} to the library: {err.message}",
                {"path": str(gpx_file), "track": track.uuid},
            ) from err
    return tracks


def export_gpx(track: Track, gpx_file: str | Path) -> None:
    """
    Write a track as GPX 1.1 file.

    Args:
        track: The track to export
        gpx_file: Target file, its directory must exist and be writable
    """
    path = Path(gpx_file)
    parent = path.parent
    if not parent.is_dir() or not os.access(parent, os.W_OK):
        raise GPXError(f"The directory {parent} does not exist or is not writable", {"path": str(path)})

    gpx = gpxpy.gpx.GPX()
    gpx.author_name = EXPORT_AUTHOR
    gpx.description = EXPORT_DESCRIPTION

    gpx_track = gpxpy.gpx.GPXTrack(
        name=track.name,
        description=track.description or DEFAULT_TRACK_DESCRIPTION,
    )
    gpx.tracks.append(gpx_track)
    segment = gpxpy.gpx.GPXTrackSegment()
    gpx_track.segments.append(segment)

    for location in track.locations:
        point = gpxpy.gpx.GPXTrackPoint(
            latitude=location.latitude,
            longitude=location.longitude,
            elevation=location.elevation,
            time=timestamp_to_datetime(location.timestamp),
        )
        if location.gps_fix in GPS_FIX_NAMES:
            point.type_of_gpx_fix = GPS_FIX_NAMES[location.gps_fix]
        segment.points.append(point)

    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(gpx.to_xml(version="1.1"))
    except OSError as err:
        raise GPXError(f"Could not write {path}: {err}", {"path": str(path)}) from err


def _build_remarks(gpx: gpxpy.gpx.GPX) -> str:
    parts = [gpx.name, gpx.author_name, gpx.author_email, gpx.description, gpx.link]
    return " ".join(part.strip() for part in parts if part and part.strip())


def _convert_track(gpx_track: gpxpy.gpx.GPXTrack, remarks: str) -> Track:
    locations = []
    distance = 0.0
    for segment in gpx_track.segments:
        distance += segment.length_2d() or 0.0
        locations.extend(_convert_point(point) for point in segment.points)

    times = [point.time for segment in gpx_track.segments for point in segment.points if point.time]
    start_time = datetime_to_timestamp(times[0]) if times else -1
    stop_time = datetime_to_timestamp(times[-1]) if times else -1

    min_elevation, max_elevation = gpx_track.get_elevation_extremes()
    elevation_difference = 0.0
    if min_elevation is not None and max_elevation is not None:
        elevation_difference = max_elevation - min_elevation

    return Track(
        name=gpx_track.name or f"Track {today().isoformat()}",
        description=gpx_track.description or DEFAULT_TRACK_DESCRIPTION,
        remarks=remarks,
        start_time=start_time,
        stop_time=stop_time,
        distance=distance,
        elevation_difference=elevation_difference,
        locations=locations,
    )


def _convert_point(point: gpxpy.gpx.GPXTrackPoint) -> LocationData:
    values: dict[str, Optional[float | int]] = {
        "latitude": point.latitude,
        "longitude": point.longitude,
    }
    if point.elevation is not None:
        values["elevation"] = point.elevation
    if point.time is not None:
        values["timestamp"] = datetime_to_timestamp(point.time)
    if point.speed is not None:
        values["speed"] = point.speed
    if point.type_of_gpx_fix:
        values["gps_fix"] = GPS_FIX_VALUES.get(point.type_of_gpx_fix, 0)
    return LocationData(**values)
