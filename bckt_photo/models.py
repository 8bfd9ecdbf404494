import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

from . import config


@dataclass(frozen=True)
class PostRecord:
    """
    Front matter for one photo post. Built once per photo, written once.
    """
    date: datetime
    slug: str
    image: str
    thumb: str
    title: str = ""
    tags: List[str] = field(default_factory=list)
    type: str = config.POST_TYPE
    language: str = config.DEFAULT_LANGUAGE

    # Resolved EXIF fields, flattened next to the fixed keys on output
    extra: Dict[str, str] = field(default_factory=dict)

    @property
    def attached(self) -> List[str]:
        return [self.image, self.thumb]

    def to_front_matter(self) -> Dict[str, Any]:
        """
        Ordered mapping for serialization. Empty title, tags and language are
        omitted. Extra fields never replace a fixed key.
        """
        doc: Dict[str, Any] = {}
        if self.title:
            doc['title'] = self.title
        doc['date'] = self.date
        doc['slug'] = self.slug
        if self.tags:
            doc['tags'] = list(self.tags)
        doc['type'] = self.type
        doc['attached'] = self.attached
        doc['image'] = self.image
        doc['thumb'] = self.thumb
        if self.language:
            doc['language'] = self.language

        for key, value in self.extra.items():
            if key in doc or key in ('title', 'tags', 'language'):
                logging.warning(f"EXIF field '{key}' collides with a front matter key; skipped.")
                continue
            doc[key] = value
        return doc


@dataclass
class BatchResult:
    """Outcome of a directory run."""
    created: List[Path] = field(default_factory=list)
    failed: List[Path] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.created) + len(self.failed)
