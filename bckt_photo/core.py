import logging
from pathlib import Path
from typing import Optional, Sequence

from tqdm import tqdm

from .config import Config
from .exceptions import InputPathError, PostCreationError
from .models import BatchResult
from .posts.assembler import PostAssembler
from .scanning.filesystem import DiskScanner


class BcktPhotoApp:
    def __init__(self,
                 cfg: Config,
                 title: str = "",
                 extra_tags: Sequence[str] = (),
                 dry_run: bool = False,
                 assembler: Optional[PostAssembler] = None):
        self.config = cfg
        self.assembler = assembler or PostAssembler(cfg, title=title, extra_tags=extra_tags, dry_run=dry_run)
        self.scanner = DiskScanner()

    def run(self, input_path: Path):
        """
        Creates a post for a single image, or one post per image below a
        directory. Returns the post dir (single image) or a BatchResult.
        """
        input_path = Path(input_path)
        try:
            input_path.stat()
            is_dir = input_path.is_dir()
        except OSError as e:
            raise InputPathError(f"error accessing {input_path}: {e}") from e

        if is_dir:
            return self.process_directory(input_path)
        return self.process_single(input_path)

    def process_single(self, image_path: Path) -> Path:
        logging.info(f"Processing: {image_path}")
        return self.assembler.create_post(image_path)

    def process_directory(self, root: Path) -> BatchResult:
        """
        Walks root and creates a post per image, mirroring the input tree
        under the posts dir. A failing photo is logged and skipped.
        """
        logging.info(f"Processing directory: {root}")
        result = BatchResult()

        images = list(self.scanner.iter_images(root))
        for image_path, rel_dir in tqdm(images, desc="Creating posts"):
            logging.info(f"Processing: {image_path}")
            try:
                result.created.append(self.assembler.create_post(image_path, rel_dir, base_dir=root))
            except PostCreationError as e:
                logging.error(f"Error processing {image_path}: {e}")
                result.failed.append(image_path)
            except Exception as e:
                logging.error(f"Unexpected error processing {image_path}: {e}")
                result.failed.append(image_path)

        logging.info(f"Directory processing complete: {len(result.created)} created, {len(result.failed)} failed.")
        return result
