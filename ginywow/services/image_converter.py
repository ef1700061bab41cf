# ginywow/services/image_converter.py

import io
import logging
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

ICO_SIZE = 256

# target -> (Pillow format, mime type, extension)
SUPPORTED_FORMATS = {
    'png': ('PNG', 'image/png', 'png'),
    'jpeg': ('JPEG', 'image/jpeg', 'jpg'),
    'jpg': ('JPEG', 'image/jpeg', 'jpg'),
    'webp': ('WEBP', 'image/webp', 'webp'),
    'bmp': ('BMP', 'image/bmp', 'bmp'),
    'tiff': ('TIFF', 'image/tiff', 'tiff'),
    'tif': ('TIFF', 'image/tiff', 'tiff'),
    'gif': ('GIF', 'image/gif', 'gif'),
    'ico': ('ICO', 'image/x-icon', 'ico'),
}

# Modes with more than 8 bits per channel; reduced to 8-bit grayscale
HIGH_BIT_DEPTH_MODES = ('I;16', 'I;16B', 'I;16L', 'I;16N', 'I', 'F')
# Colour spaces other than RGB; only TIFF writes them as they are
NON_RGB_MODES = ('CMYK', 'YCbCr', 'LAB', 'HSV')


class ImageConversionError(Exception):
    pass


def _normalize_mode(image, pil_format):
    """Brings exotic source modes into one the target encoder can write."""
    if image.mode in HIGH_BIT_DEPTH_MODES:
        if image.mode.startswith('I;16'):
            # 16-bit samples scaled down to the 0-255 range
            image = image.convert('I').point(lambda value: value * (1 / 256))
        return image.convert('L')
    if image.mode in NON_RGB_MODES and pil_format != 'TIFF':
        return image.convert('RGB')
    return image


def _flatten(image, background=(255, 255, 255)):
    """Composites transparent images onto a solid background for formats without alpha."""
    if image.mode in ('RGBA', 'LA') or (image.mode == 'P' and 'transparency' in image.info):
        rgba = image.convert('RGBA')
        canvas = Image.new('RGB', rgba.size, background)
        canvas.paste(rgba, mask=rgba.split()[-1])
        return canvas
    return image.convert('RGB')


def _save(image, output, pil_format, quality):
    if pil_format == 'PNG':
        # Map quality onto zlib compression: higher quality -> less compression effort
        compress_level = min(9, max(0, (100 - quality) // 10))
        image.save(output, format='PNG', optimize=True, compress_level=compress_level)
    elif pil_format == 'JPEG':
        _flatten(image).save(output, format='JPEG', quality=quality, progressive=True, optimize=True)
    elif pil_format == 'WEBP':
        if image.mode not in ('RGB', 'RGBA'):
            image = image.convert('RGBA' if 'A' in image.getbands() or 'transparency' in image.info else 'RGB')
        image.save(output, format='WEBP', quality=quality, method=6)
    elif pil_format == 'BMP':
        _flatten(image).save(output, format='BMP')
    elif pil_format == 'TIFF':
        image.save(output, format='TIFF', compression='tiff_lzw')
    elif pil_format == 'GIF':
        _flatten(image).save(output, format='GIF')
    elif pil_format == 'ICO':
        icon = image.convert('RGBA')
        icon.thumbnail((ICO_SIZE, ICO_SIZE))
        canvas = Image.new('RGBA', (ICO_SIZE, ICO_SIZE), (0, 0, 0, 0))
        canvas.paste(icon, ((ICO_SIZE - icon.width) // 2, (ICO_SIZE - icon.height) // 2))
        canvas.save(output, format='ICO', sizes=[(ICO_SIZE, ICO_SIZE)])


def convert_image(data, target_format, quality=85):
    """
    Converts raw image bytes to target_format.
    Returns a dict with the converted bytes, mime type, extension and size change.
    """
    target = (target_format or '').lower().strip()
    if target not in SUPPORTED_FORMATS:
        raise ImageConversionError(f"Unsupported format: {target_format}")

    try:
        quality = int(quality)
    except (TypeError, ValueError):
        raise ImageConversionError("Quality must be a number between 1 and 100")
    quality = max(1, min(quality, 100))

    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as e:
        raise ImageConversionError("The uploaded file is not a readable image") from e

    original_format = (image.format or 'unknown').lower()
    pil_format, mime_type, extension = SUPPORTED_FORMATS[target]
    output = io.BytesIO()

    try:
        _save(_normalize_mode(image, pil_format), output, pil_format, quality)
    except (OSError, ValueError) as e:
        logger.warning(f"Could not write {original_format} image ({image.mode}) as {extension}: {e}")
        raise ImageConversionError(f"This image cannot be converted to {extension.upper()}") from e

    converted = output.getvalue()
    original_size = len(data)
    new_size = len(converted)
    size_change = ((new_size - original_size) / original_size * 100) if original_size else 0.0

    logger.info(f"Converted {original_format} image to {extension} ({original_size} -> {new_size} bytes)")
    return {
        'data': converted,
        'mime_type': mime_type,
        'extension': extension,
        'original_format': original_format,
        'original_size': original_size,
        'new_size': new_size,
        'size_change': f"{size_change:.1f}%",
    }
