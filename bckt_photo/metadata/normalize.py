"""
Turns raw EXIF values into canonical strings, and canonical strings into
display strings for a few photographic quantities.
"""
import re
from typing import Any, Optional, Tuple

FRACTION_RE = re.compile(r'([+-]?[0-9]+)/([+-]?[0-9]+)')


def normalize_value(raw: Any) -> str:
    """
    Canonical string for a decoded tag value. Returns "" when there is no
    usable value (empty array, zero denominator, None); never raises.

    exifread hands back IfdTag objects whose `.values` is a str, a list of
    ints, or a list of Ratio objects. Arrays contribute their first element.
    """
    if raw is None:
        return ""

    # exifread IfdTag
    values = getattr(raw, 'values', None)
    if values is not None and not callable(values):
        raw = values

    if isinstance(raw, (list, tuple)):
        if not raw:
            return ""
        raw = raw[0]

    if isinstance(raw, str):
        return raw.strip()

    parts = _rational_parts(raw)
    if parts is not None:
        num, den = parts
        if den == 0:
            return ""
        return f"{num}/{den}"

    if isinstance(raw, (bool, int)):
        return str(int(raw))

    try:
        return str(raw).strip()
    except Exception:
        return ""


def _rational_parts(value: Any) -> Optional[Tuple[int, int]]:
    """(numerator, denominator) for exifread Ratio / Fraction-like values."""
    if isinstance(value, (bool, int, float, str, bytes)):
        return None
    for num_attr, den_attr in (('num', 'den'), ('numerator', 'denominator')):
        num = getattr(value, num_attr, None)
        den = getattr(value, den_attr, None)
        if isinstance(num, int) and isinstance(den, int):
            return num, den
    return None


def friendly_value(field_name: str, value: str) -> str:
    """
    Display form of a canonical value for aperture, focal_length and
    exposure. Anything else, or a value that is not an integer fraction with
    a nonzero denominator, comes back unchanged.
    """
    m = FRACTION_RE.fullmatch(value)
    if not m:
        return value

    numerator, denominator = int(m.group(1)), int(m.group(2))
    if denominator == 0:
        return value

    ratio = numerator / denominator

    if field_name == 'aperture':
        return f"f/{ratio:.1f}"
    if field_name == 'focal_length':
        return f"{ratio:.1f}mm"
    if field_name == 'exposure':
        # Exposure keeps the fraction as written: 1/500 -> 1/500s.
        # Non-unit numerators (e.g. 3/2) render the same way for now.
        if numerator == 1:
            return f"{value}s"
        return f"{value}s"

    return value
