"""
@-placeholder templates built from a photo's path.

Given base /photos and file /photos/2025/vacation/beach.jpg the components
are dir1=vacation, dir2=2025, filename=beach.jpg, basename=beach, ext=jpg,
so "@dir2 - @basename" expands to "2025 - beach".
"""
import os
import re
from datetime import datetime
from pathlib import Path
from typing import Dict, Mapping

TEMPLATE_MARKER = "@"

_SLUG_DISALLOWED = re.compile(r'[^a-z0-9-]')


def extract_components(file_path: Path, base_dir: Path) -> Dict[str, str]:
    file_path = Path(file_path)
    filename = file_path.name
    ext = file_path.suffix

    components = {
        'filename': filename,
        'basename': filename[:-len(ext)] if ext else filename,
        'ext': ext.lstrip('.'),
    }

    try:
        rel_dir = Path(os.path.relpath(file_path.parent, base_dir))
    except ValueError:
        # Different drives on Windows
        return components

    parts = rel_dir.parts
    if not parts or parts == ('.',) or parts[0] == '..':
        return components

    # dir1 is the directory holding the file, dir2 its parent, and so on
    for i, part in enumerate(reversed(parts), start=1):
        components[f"dir{i}"] = part
    return components


def is_template(value: str) -> bool:
    return TEMPLATE_MARKER in value


def expand(template: str, components: Mapping[str, str]) -> str:
    """
    Replaces every "@key" with its value. Substituted text is never expanded
    again, even if it contains something that looks like a placeholder.
    Longer keys win so "@dir1" cannot eat the front of "@dir10". Unknown
    placeholders are left as written.
    """
    if not components:
        return template

    keys = sorted(components, key=lambda k: (-len(k), k))
    pattern = re.compile(re.escape(TEMPLATE_MARKER) + '(' + '|'.join(re.escape(k) for k in keys) + ')')
    return pattern.sub(lambda m: components[m.group(1)], template)


def expand_if_template(value: str, components: Mapping[str, str]) -> str:
    """Literal strings pass through; strings containing '@' are expanded."""
    if is_template(value):
        return expand(value, components)
    return value


def generate_slug(title: str, date: datetime) -> str:
    """
    URL slug from the title: lowercase, spaces to hyphens, and anything
    outside [a-z0-9-] dropped. No usable title -> photo-<unix seconds>.
    """
    if title:
        slug = _SLUG_DISALLOWED.sub('', title.lower().replace(' ', '-'))
        if slug:
            return slug
    return f"photo-{int(date.timestamp())}"
