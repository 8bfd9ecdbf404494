import os
import shutil
import logging
from pathlib import Path

import yaml

from ..exceptions import FileOperationError, PostDirectoryError, PostWriteError
from ..models import PostRecord

FRONT_MATTER_MARKER = "---"


def render_front_matter(record: PostRecord) -> str:
    """Post file body: the YAML document between --- markers, then a blank line."""
    body = yaml.safe_dump(
        record.to_front_matter(),
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )
    return f"{FRONT_MATTER_MARKER}\n{body}{FRONT_MATTER_MARKER}\n\n"


class PostWriter:
    """
    Filesystem side of post creation: directories, image copy, front matter.
    Nothing is rolled back on failure; a half-written post directory is left
    for the operator.
    """

    def __init__(self, posts_root: Path):
        self.posts_root = Path(posts_root)

    def post_dir_for(self, relative_dir: str, slug: str) -> Path:
        if relative_dir:
            return self.posts_root / relative_dir / slug
        return self.posts_root / slug

    def create_post_dir(self, relative_dir: str, slug: str) -> Path:
        post_dir = self.post_dir_for(relative_dir, slug)
        try:
            post_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PostDirectoryError(f"error creating post directory {post_dir}: {e}") from e
        return post_dir

    def copy_image(self, src: Path, dest: Path):
        """Byte copy, flushed and fsync'd before returning."""
        try:
            with open(src, 'rb') as fsrc, open(dest, 'wb') as fdst:
                shutil.copyfileobj(fsrc, fdst)
                fdst.flush()
                os.fsync(fdst.fileno())
        except OSError as e:
            raise FileOperationError(f"error copying image {src} -> {dest}: {e}") from e

    def write_post(self, path: Path, record: PostRecord):
        try:
            content = render_front_matter(record)
            path.write_text(content, encoding='utf-8')
        except (OSError, yaml.YAMLError) as e:
            raise PostWriteError(f"error creating markdown file {path}: {e}") from e
        logging.debug(f"Wrote front matter to {path}")
