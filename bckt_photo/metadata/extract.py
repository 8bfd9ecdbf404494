import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

import exifread

from .. import config
from ..exceptions import MetadataExtractionError
from .normalize import normalize_value


class ExifMetadata:
    """
    Read-only view over decoded EXIF tags, grouped by IFD.

    exifread returns a flat dict keyed "<IFD> <TagName>" ("Image Model",
    "EXIF FNumber", "GPS GPSLatitude"...). We split those into
    {group: {tag: value}} so a tag can be found by its bare name in any
    group. Groups may nest further mappings.
    """

    def __init__(self, groups: Mapping[str, Mapping[str, Any]]):
        self._groups = groups

    @classmethod
    def from_exifread(cls, tags: Mapping[str, Any]) -> "ExifMetadata":
        groups: Dict[str, Dict[str, Any]] = {}
        for key, value in tags.items():
            group, _, name = key.partition(' ')
            if not name:
                # Keys without an IFD prefix (e.g. JPEGThumbnail)
                group, name = "", key
            groups.setdefault(group, {})[name] = value
        return cls(groups)

    @property
    def groups(self) -> Mapping[str, Mapping[str, Any]]:
        return self._groups

    def __bool__(self) -> bool:
        return any(self._groups.values())

    def find(self, tag_name: str) -> Optional[str]:
        """
        Canonical value of the first occurrence of `tag_name` that normalizes
        to a non-empty string, or None.

        A qualified name like "EXIF FNumber" is checked in its own group
        first; otherwise every group is searched depth-first in decoder order.
        """
        group, _, bare = tag_name.partition(' ')
        if bare and isinstance(self._groups.get(group), Mapping):
            value = normalize_value(self._groups[group].get(bare))
            if value:
                return value

        for raw in self._iter_tag(tag_name):
            value = normalize_value(raw)
            if value:
                return value
        return None

    def _iter_tag(self, tag_name: str) -> Iterator[Any]:
        """Yields every raw value stored under `tag_name`, depth-first."""
        stack = [self._groups]
        while stack:
            current = stack.pop()
            nested = []
            for name, value in current.items():
                if isinstance(value, Mapping):
                    nested.append(value)
                elif name == tag_name:
                    yield value
            # Reversed so the first nested group is visited first
            stack.extend(reversed(nested))


class MetadataExtractor:
    """
    Reads EXIF metadata from image files with 'exifread'.
    Decode problems are never fatal: they yield None.
    """

    def read(self, path: Path) -> Optional[ExifMetadata]:
        try:
            return self.decode(path)
        except MetadataExtractionError as e:
            logging.warning(f"Could not read EXIF data from {Path(path).name}: {e}")
            return None

    def decode(self, path: Path) -> Optional[ExifMetadata]:
        """
        Returns the decoded container, None when the file carries no EXIF,
        or raises MetadataExtractionError when the file cannot be read.
        """
        try:
            with Path(path).open('rb') as f:
                # details=False skips MakerNotes, which we never need
                tags = exifread.process_file(f, details=False)
        except Exception as e:
            raise MetadataExtractionError(str(e)) from e

        if not tags:
            logging.debug(f"No EXIF tags found for {path}")
            return None

        return ExifMetadata.from_exifread(tags)

    def extract_date(self, metadata: Optional[ExifMetadata], now: Optional[datetime] = None) -> datetime:
        """
        Post date from DateTime, else DateTimeOriginal, else the current
        time. EXIF timestamps carry no zone and are read as UTC.
        """
        fallback = now or datetime.now(timezone.utc)
        if metadata is None:
            return fallback

        tag, value = self._first_date_tag(metadata)
        if value is None:
            logging.debug(f"No date tag found (tried: {', '.join(config.DATE_TAGS)})")
            return fallback

        dt = parse_exif_datetime(value)
        if dt is None:
            logging.warning(f"Unparseable {tag} value {value!r}; using current time.")
            return fallback
        return dt

    def _first_date_tag(self, metadata: ExifMetadata) -> Tuple[Optional[str], Optional[str]]:
        for tag in config.DATE_TAGS:
            value = metadata.find(tag)
            if value:
                return tag, value
        return None, None


def parse_exif_datetime(dt_str: str) -> Optional[datetime]:
    """Parses "YYYY:MM:DD HH:MM:SS" as a UTC datetime; None if malformed."""
    try:
        dt = datetime.strptime(dt_str.strip(), config.EXIF_DATE_FORMAT)
    except ValueError:
        return None
    return dt.replace(tzinfo=timezone.utc)
