from exifread.utils import Ratio

from bckt_photo.metadata.extract import ExifMetadata
from bckt_photo.metadata.fields import FieldResolver


class RecordingMetadata(ExifMetadata):
    """Remembers which tag names were looked up."""

    def __init__(self, groups):
        super().__init__(groups)
        self.lookups = []

    def find(self, tag_name):
        self.lookups.append(tag_name)
        return super().find(tag_name)


def test_first_present_candidate_wins():
    resolver = FieldResolver({"iso": ["A", "B"]})

    only_b = ExifMetadata({"EXIF": {"B": [400]}})
    assert resolver.resolve_fields(only_b) == {"iso": "400"}

    both = ExifMetadata({"EXIF": {"A": [100], "B": [400]}})
    assert resolver.resolve_fields(both) == {"iso": "100"}


def test_later_candidates_not_consulted_once_found():
    metadata = RecordingMetadata({"EXIF": {"A": [100], "B": [400]}})
    FieldResolver({"iso": ["A", "B"]}).resolve(metadata)
    assert metadata.lookups == ["A"]


def test_empty_values_fall_through_to_next_candidate():
    metadata = ExifMetadata({"EXIF": {"A": [], "B": "  ", "C": [Ratio(1, 250)]}})
    fields = FieldResolver({"exposure": ["A", "B", "C"]}).resolve_fields(metadata)
    assert fields == {"exposure": "1/250", "exposure_friendly": "1/250s"}


def test_resolve_fields_adds_friendly_only_when_different():
    metadata = ExifMetadata({
        "Image": {"Model": "X100V"},
        "EXIF": {"FNumber": [Ratio(28, 5)], "ISOSpeedRatings": [400], "FocalLength": [Ratio(23, 1)]},
    })
    resolver = FieldResolver({
        "camera": ["Model"],
        "aperture": ["FNumber"],
        "iso": ["ISOSpeedRatings"],
        "focal_length": ["FocalLength"],
    })

    assert resolver.resolve_fields(metadata) == {
        "camera": "X100V",
        "aperture": "28/5",
        "aperture_friendly": "f/5.6",
        "iso": "400",
        "focal_length": "23/1",
        "focal_length_friendly": "23.0mm",
    }


def test_resolve_tags_uses_friendly_values_and_dedups():
    metadata = ExifMetadata({
        "Image": {"Make": "FUJIFILM"},
        "EXIF": {"FNumber": [Ratio(2, 1)]},
    })
    resolver = FieldResolver({
        "make": ["Make"],
        "brand": ["Make"],
        "aperture": ["FNumber"],
        "missing": ["NoSuchTag"],
    })
    assert resolver.resolve_tags(metadata) == {"FUJIFILM", "f/2.0"}


def test_absent_metadata_or_empty_mapping_resolve_to_nothing():
    resolver = FieldResolver({"iso": ["ISOSpeedRatings"]})
    assert resolver.resolve_tags(None) == set()
    assert resolver.resolve_fields(None) == {}

    metadata = ExifMetadata({"EXIF": {"ISOSpeedRatings": [400]}})
    empty = FieldResolver({})
    assert empty.resolve_tags(metadata) == set()
    assert empty.resolve_fields(metadata) == {}


def test_find_searches_nested_groups():
    metadata = ExifMetadata({
        "Image": {"Model": "X100V"},
        "MakerNote": {"Fujifilm": {"LensModel": "XF23mm"}},
    })
    assert metadata.find("LensModel") == "XF23mm"
    assert metadata.find("Nope") is None


def test_find_returns_first_occurrence_in_decoder_order():
    metadata = ExifMetadata({
        "Image": {"DateTime": "2021:01:01 00:00:00"},
        "EXIF": {"DateTime": "1999:12:31 23:59:59"},
    })
    assert metadata.find("DateTime") == "2021:01:01 00:00:00"


def test_find_accepts_qualified_names():
    metadata = ExifMetadata({
        "Image": {"DateTime": "2021:01:01 00:00:00"},
        "EXIF": {"DateTime": "1999:12:31 23:59:59"},
    })
    assert metadata.find("EXIF DateTime") == "1999:12:31 23:59:59"


def test_from_exifread_groups_by_ifd_prefix():
    metadata = ExifMetadata.from_exifread({
        "Image Model": "X100V",
        "EXIF FNumber": [Ratio(28, 5)],
        "JPEGThumbnail": b"\xff\xd8",
    })
    assert set(metadata.groups) == {"Image", "EXIF", ""}
    assert metadata.groups["EXIF"]["FNumber"] == [Ratio(28, 5)]
    assert metadata.find("FNumber") == "28/5"
