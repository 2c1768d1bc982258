import io
import logging
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


def probe_dimensions(data: bytes) -> Optional[Tuple[int, int]]:
    """Return (width, height) of an encoded image, or None if it cannot be read"""
    try:
        with Image.open(io.BytesIO(data)) as img:
            return img.size
    except (UnidentifiedImageError, OSError) as e:
        logger.warning(f"Failed to get image dimensions: {str(e)}")
        return None
