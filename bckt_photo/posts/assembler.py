import logging
from datetime import datetime
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from .. import config
from ..config import Config
from ..metadata.extract import ExifMetadata, MetadataExtractor
from ..metadata.fields import FieldResolver
from ..models import PostRecord
from ..organization.templates import expand, expand_if_template, extract_components, generate_slug
from .thumbnail import ThumbnailGenerator
from .writer import PostWriter


class PostAssembler:
    """
    Turns one photo into one post directory.

    Metadata, date, title, slug and tags are resolved first; none of those
    steps can fail. Directory creation, image copy, thumbnail and front
    matter write each raise a PostCreationError subclass on failure.
    """

    def __init__(self,
                 cfg: Config,
                 title: str = "",
                 extra_tags: Sequence[str] = (),
                 extractor: Optional[MetadataExtractor] = None,
                 thumbnailer: Optional[ThumbnailGenerator] = None,
                 dry_run: bool = False):
        self.config = cfg
        self.title = title
        self.extra_tags = list(extra_tags)
        self.extractor = extractor or MetadataExtractor()
        self.thumbnailer = thumbnailer or ThumbnailGenerator()
        self.resolver = FieldResolver(cfg.exif_to_tags)
        self.writer = PostWriter(cfg.posts_dir)
        self.dry_run = dry_run

    def create_post(self,
                    image_path: Path,
                    relative_dir: str = "",
                    base_dir: Optional[Path] = None) -> Path:
        """
        Builds the post for `image_path` under posts_root/relative_dir/<slug>.
        `base_dir` anchors the @dirN placeholders; it defaults to the
        filesystem root so every parent directory is available.

        Returns the post directory.
        """
        image_path = Path(image_path)
        if base_dir is None:
            base_dir = Path(image_path.absolute().anchor)
        components = extract_components(image_path, base_dir)

        metadata = self.extractor.read(image_path)
        record = self.build_record(image_path, metadata, components)

        post_dir = self.writer.post_dir_for(relative_dir, record.slug)
        if self.dry_run:
            logging.info(f"[DRY RUN] Would create post {post_dir} from {image_path}")
            return post_dir

        post_dir = self.writer.create_post_dir(relative_dir, record.slug)
        self.writer.copy_image(image_path, post_dir / record.image)
        self.thumbnailer.create(image_path, post_dir / record.thumb)
        self.writer.write_post(post_dir / f"{record.slug}.md", record)

        logging.info(f"Post created at: {post_dir}")
        return post_dir

    def build_record(self,
                     image_path: Path,
                     metadata: Optional[ExifMetadata],
                     components: Mapping[str, str],
                     now: Optional[datetime] = None) -> PostRecord:
        date = self.extractor.extract_date(metadata, now=now)
        title = self.resolve_title(components)
        slug = generate_slug(title, date)

        return PostRecord(
            title=title,
            date=date,
            slug=slug,
            tags=self.resolve_tags(metadata, components),
            image=image_path.name,
            thumb=thumbnail_name(image_path.name),
            language=self.config.language,
            extra=self.resolver.resolve_fields(metadata),
        )

    def resolve_title(self, components: Mapping[str, str]) -> str:
        # Per-run title beats the config template
        if self.title:
            return expand_if_template(self.title, components)
        if self.config.title_template:
            return expand(self.config.title_template, components)
        return ""

    def resolve_tags(self, metadata: Optional[ExifMetadata], components: Mapping[str, str]) -> List[str]:
        """
        EXIF tags, then per-run tags, then config tag templates. Only the
        EXIF tags are deduplicated (among themselves).
        """
        tags = sorted(self.resolver.resolve_tags(metadata))

        for tag in self.extra_tags:
            expanded = expand_if_template(tag, components)
            if expanded:
                tags.append(expanded)

        for template in self.config.tag_templates:
            expanded = expand(template, components)
            if expanded:
                tags.append(expanded)

        return tags


def thumbnail_name(image_name: str) -> str:
    """beach.JPG -> beach-thumb.JPG"""
    p = Path(image_name)
    return f"{p.stem}{config.THUMBNAIL_SUFFIX}{p.suffix}"
