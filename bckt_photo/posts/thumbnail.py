import logging
from pathlib import Path
from typing import Tuple

from PIL import Image

from .. import config
from ..exceptions import ThumbnailError

# JPEG cannot store alpha or palette images
_JPEG_MODES = {'RGB', 'L', 'CMYK'}


class ThumbnailGenerator:
    """
    Writes a bounded-size copy of an image. Images already inside the bounds
    are saved at their original size; nothing is ever enlarged.
    """

    def __init__(self, max_size: Tuple[int, int] = config.THUMBNAIL_MAX_SIZE):
        self.max_width, self.max_height = max_size

    def create(self, src: Path, dest: Path) -> Tuple[int, int]:
        """Returns the thumbnail's (width, height)."""
        try:
            with Image.open(src) as im:
                im.load()
                width, height = im.size

                thumb = im
                if width > self.max_width or height > self.max_height:
                    thumb = im.copy()
                    thumb.thumbnail((self.max_width, self.max_height), Image.Resampling.LANCZOS)
                    logging.debug(f"Resized {Path(src).name} {width}x{height} -> {thumb.size[0]}x{thumb.size[1]}")

                if Path(dest).suffix.lower() in ('.jpg', '.jpeg') and thumb.mode not in _JPEG_MODES:
                    thumb = thumb.convert('RGB')

                # Output format follows the destination extension
                thumb.save(dest)
                return thumb.size
        except Exception as e:
            # Pillow also raises DecompressionBombError and SyntaxError for bad files
            raise ThumbnailError(f"error creating thumbnail for {src}: {e}") from e
