import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Set

from .extract import ExifMetadata
from .normalize import friendly_value


@dataclass(frozen=True)
class ResolvedField:
    name: str        # logical field, e.g. "aperture"
    tag: str         # EXIF tag that supplied the value
    value: str       # canonical value, e.g. "28/5"
    friendly: str    # display value, e.g. "f/5.6" (== value when no transform applies)


class FieldResolver:
    """
    Maps logical fields to EXIF values using an ordered list of candidate
    tag names per field. The first candidate with a usable value wins and
    later candidates are not consulted.
    """

    def __init__(self, field_mapping: Mapping[str, Sequence[str]]):
        self.field_mapping = field_mapping

    def resolve(self, metadata: Optional[ExifMetadata]) -> List[ResolvedField]:
        if metadata is None or not self.field_mapping:
            return []
        return list(self._iter_resolved(metadata))

    def _iter_resolved(self, metadata: ExifMetadata) -> Iterator[ResolvedField]:
        for name, candidates in self.field_mapping.items():
            for tag in candidates:
                value = metadata.find(tag)
                if value:
                    yield ResolvedField(name, tag, value, friendly_value(name, value))
                    break
            else:
                logging.debug(f"No EXIF value for '{name}' (tried: {', '.join(candidates)})")

    def resolve_tags(self, metadata: Optional[ExifMetadata]) -> Set[str]:
        """Deduplicated display strings for every resolved field."""
        return {f.friendly or f.value for f in self.resolve(metadata)}

    def resolve_fields(self, metadata: Optional[ExifMetadata]) -> Dict[str, str]:
        """
        {logical_name: canonical} for every resolved field, plus
        {logical_name + "_friendly": friendly} where the two differ.
        """
        fields: Dict[str, str] = {}
        for f in self.resolve(metadata):
            fields[f.name] = f.value
            if f.friendly and f.friendly != f.value:
                fields[f"{f.name}_friendly"] = f.friendly
        return fields
