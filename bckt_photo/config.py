"""
Configuration constants and config-file loading for bckt-photo.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from .exceptions import ConfigError

VERSION = "0.3.0"

# --- File Type Definitions ---
IMAGE_EXTS = {'.jpg', '.jpeg', '.png', '.gif', '.bmp', '.tiff', '.tif', '.webp'}

# --- Metadata Parsing ---
# Tried in order; the first present tag decides the post date
DATE_TAGS = [
    'DateTime',
    'DateTimeOriginal',
]
EXIF_DATE_FORMAT = "%Y:%m:%d %H:%M:%S"

# --- Post Output ---
THUMBNAIL_MAX_SIZE = (800, 800)
THUMBNAIL_SUFFIX = "-thumb"
POST_TYPE = "photo"

# --- Defaults ---
DEFAULT_CONFIG_FILE = "bckt-photo.yaml"
DEFAULT_POSTS_DIR = "posts"
DEFAULT_LANGUAGE = "en"


@dataclass(frozen=True)
class Config:
    """
    Run configuration: EXIF field mapping, posts root and metadata templates.
    Built once and handed to the app; never mutated during a run.
    """
    exif_to_tags: Dict[str, List[str]] = field(default_factory=dict)
    posts_dir: Path = Path(DEFAULT_POSTS_DIR)
    title_template: str = ""
    tag_templates: List[str] = field(default_factory=list)
    language: str = DEFAULT_LANGUAGE


def load_config(path: Path, posts_override: Optional[Path] = None, language: str = DEFAULT_LANGUAGE) -> Config:
    """
    Loads the YAML config file.

    A missing or malformed file is not fatal: a warning is logged and the
    run continues with an empty field mapping and the default posts dir.
    `posts_override` (the --posts flag) wins over the file's posts_dir.
    """
    data = {}
    try:
        data = _read_yaml(path)
    except FileNotFoundError:
        logging.warning(f"Config file {path} not found; using defaults.")
    except (OSError, ConfigError) as e:
        logging.warning(f"Could not load config file {path}: {e}")

    exif_to_tags = _parse_field_mapping(data.get('exif_to_tags'))

    metadata = data.get('metadata') or {}
    if not isinstance(metadata, dict):
        logging.warning(f"Ignoring 'metadata' in {path}: expected a mapping.")
        metadata = {}

    title_template = metadata.get('title') or ""
    if not isinstance(title_template, str):
        logging.warning(f"Ignoring metadata.title in {path}: expected a string.")
        title_template = ""

    tag_templates = metadata.get('tags') or []
    if isinstance(tag_templates, str):
        tag_templates = [tag_templates]
    if not isinstance(tag_templates, list):
        logging.warning(f"Ignoring metadata.tags in {path}: expected a list.")
        tag_templates = []
    tag_templates = [str(t) for t in tag_templates if t is not None]

    if posts_override is not None:
        posts_dir = Path(posts_override)
    elif data.get('posts_dir'):
        posts_dir = Path(str(data['posts_dir']))
    else:
        posts_dir = Path(DEFAULT_POSTS_DIR)

    return Config(
        exif_to_tags=exif_to_tags,
        posts_dir=posts_dir,
        title_template=title_template,
        tag_templates=tag_templates,
        language=language,
    )


def _read_yaml(path: Path) -> dict:
    # PyYAML detects the encoding of a byte stream; bad bytes raise ReaderError
    with Path(path).open('rb') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"expected a mapping at top level, got {type(data).__name__}")
    return data


def _parse_field_mapping(raw) -> Dict[str, List[str]]:
    """
    Normalizes `exif_to_tags` into {logical_field: [candidate tag names]}.
    A bare string value (older single-tag format) becomes a one-item list.
    """
    if not raw:
        return {}
    if not isinstance(raw, dict):
        logging.warning("Ignoring 'exif_to_tags': expected a mapping.")
        return {}

    mapping: Dict[str, List[str]] = {}
    for name, candidates in raw.items():
        if isinstance(candidates, str):
            candidates = [candidates]
        if not isinstance(candidates, list):
            logging.warning(f"Ignoring exif_to_tags.{name}: expected a list of tag names.")
            continue

        names = []
        for c in candidates:
            if isinstance(c, str) and c:
                names.append(c)
            else:
                logging.warning(f"Dropping non-string tag name {c!r} from exif_to_tags.{name}")
        if names:
            mapping[str(name)] = names
    return mapping
