import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from . import config
from .core import BcktPhotoApp
from .exceptions import BcktPhotoError
from .models import BatchResult


def setup_logging(verbose: bool, log_file: Optional[Path] = None):
    """Sets up logging to the console and, optionally, a file."""
    log_level = logging.DEBUG if verbose else logging.INFO

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=handlers,
        force=True,
    )

    # Silence chatty libraries
    logging.getLogger("exifread").setLevel(logging.ERROR)
    logging.getLogger("PIL").setLevel(logging.WARNING)


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        prog="bckt-photo",
        description="Create bckt blog posts from images with EXIF data",
    )

    p.add_argument("-i", "--image", type=Path, required=True, help="Path to an image file or a directory of images")
    p.add_argument("-t", "--title", default="", help="Post title; may use @dir1, @basename, ... placeholders")
    p.add_argument("--tag", dest="tags", action="append", default=[],
                   help="Extra tag (repeatable); may use @ placeholders")
    p.add_argument("-c", "--config", type=Path, default=Path(config.DEFAULT_CONFIG_FILE), help="Path to config file")
    p.add_argument("-p", "--posts", type=Path, default=None,
                   help=f"Posts directory (default: posts_dir from config, else '{config.DEFAULT_POSTS_DIR}')")
    p.add_argument("-l", "--lang", default=config.DEFAULT_LANGUAGE, help="Post language")

    p.add_argument("--dry-run", action="store_true", help="Resolve posts and log their destinations without writing")
    p.add_argument("--log-file", type=Path, default=None, help="Also write the log to this file")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    p.add_argument("--version", action="version", version=f"%(prog)s {config.VERSION}")

    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose, args.log_file)

    cfg = config.load_config(args.config, posts_override=args.posts, language=args.lang)
    logging.debug(f"Posts dir: {cfg.posts_dir}; {len(cfg.exif_to_tags)} EXIF field mapping(s)")

    app = BcktPhotoApp(cfg, title=args.title, extra_tags=args.tags, dry_run=args.dry_run)

    try:
        result = app.run(args.image)
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        return 1
    except BcktPhotoError as e:
        logging.error(str(e))
        return 1

    if isinstance(result, BatchResult) and result.failed:
        logging.warning(f"{len(result.failed)} of {result.total} photo(s) failed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
