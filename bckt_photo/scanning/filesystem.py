import os
import logging
from pathlib import Path
from typing import Iterator, Tuple

from .. import config
from ..exceptions import WalkError


def is_image_file(path: Path) -> bool:
    return Path(path).suffix.lower() in config.IMAGE_EXTS


class DiskScanner:
    """Finds image files under a root directory."""

    def iter_images(self, root: Path) -> Iterator[Tuple[Path, str]]:
        """
        Yields (image_path, relative_dir) for every image below root, where
        relative_dir is the file's directory relative to root ("" at the top).
        """
        root = Path(root)
        for path in self._iter_files(root):
            if not is_image_file(path):
                logging.debug(f"Skipping non-image file {path}")
                continue

            rel_dir = path.parent.relative_to(root)
            yield path, "" if rel_dir == Path('.') else rel_dir.as_posix()

    def _iter_files(self, root: Path) -> Iterator[Path]:
        """
        Depth-first walker using os.scandir. Entries are sorted by name so
        runs over the same tree process files in the same order.
        """
        stack = [root]
        while stack:
            current = stack.pop()

            try:
                with os.scandir(current) as it:
                    entries = list(it)
            except OSError as e:
                raise WalkError(f"error walking directory {current}: {e}") from e

            entries.sort(key=lambda e: e.name.lower())

            dirs = []
            files = []
            for e in entries:
                if e.is_dir(follow_symlinks=False):
                    dirs.append(Path(e.path))
                elif e.is_file(follow_symlinks=False):
                    files.append(Path(e.path))

            stack.extend(reversed(dirs))

            for f in files:
                yield f
