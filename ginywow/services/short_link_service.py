# ginywow/services/short_link_service.py

import logging
from ginywow.schemas import validate_short_url, is_valid_url, SchemaValidationError
from .youtube_links import parse_youtube_url, build_deep_links
from .storage import create_short_url, generate_unique_short_code

logger = logging.getLogger(__name__)

# Redirect routes live under /yt/<short_code>
SHORT_LINK_PREFIX = 'yt'


def build_short_link(base_url, short_code):
    return f"{base_url.rstrip('/')}/{SHORT_LINK_PREFIX}/{short_code}"


def create_youtube_short_link(url, base_url):
    """
    Creates a ShortUrl row for a YouTube video, shorts, playlist or channel URL.
    Returns (short_url, link). Raises SchemaValidationError for anything else.
    """
    if not is_valid_url(url):
        raise SchemaValidationError('Please provide a valid URL', field='url')

    url = url.strip()
    parsed = parse_youtube_url(url)
    if parsed is None:
        raise SchemaValidationError(
            'Please provide a YouTube video, shorts, playlist or channel URL', field='url'
        )

    ios_link, android_link = build_deep_links(parsed, url)
    record = validate_short_url({
        'shortCode': generate_unique_short_code(),
        'originalUrl': url,
        'iosDeepLink': ios_link,
        'androidDeepLink': android_link,
        'urlType': parsed['type'],
    })
    short_url = create_short_url(record)
    logger.info(f"Short link {short_url.short_code} created for {parsed['type']} {parsed['id']}")
    return short_url, build_short_link(base_url, short_url.short_code)
