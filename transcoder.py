import logging

from PIL import Image

from errors import TranscodeError

DEFAULT_QUALITY = 50


def transcode(source, destination, quality=DEFAULT_QUALITY):
    """Re-encode the image at ``source`` as a JPEG at ``quality``.

    The source file is left in place.
    """
    if not 0 <= quality <= 100:
        raise ValueError(f"quality must be between 0 and 100, got {quality}")

    try:
        with Image.open(source) as img:
            if img.mode != 'RGB':
                img = img.convert('RGB')
            img.save(destination, 'JPEG', quality=quality)
    except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as e:
        # UnidentifiedImageError is an OSError; oversized and malformed headers are not.
        raise TranscodeError(source, e) from e

    logging.info(f"Image processed: {destination}")
