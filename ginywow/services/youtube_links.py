# ginywow/services/youtube_links.py

import re
from urllib.parse import urlparse, parse_qs, quote

THUMBNAIL_BASE_URL = "https://img.youtube.com/vi/"
YOUTUBE_ANDROID_PACKAGE = "com.google.android.youtube"

# (file name, label, width, height), best quality first
THUMBNAIL_QUALITIES = [
    ('maxresdefault.jpg', 'Max Quality (1280x720)', 1280, 720),
    ('sddefault.jpg', 'Standard Quality (640x480)', 640, 480),
    ('hqdefault.jpg', 'High Quality (480x360)', 480, 360),
    ('mqdefault.jpg', 'Medium Quality (320x180)', 320, 180),
    ('default.jpg', 'Default (120x90)', 120, 90),
]

VIDEO_ID_PATTERNS = [
    r'(?:https?:\/\/)?(?:www\.|m\.)?youtube\.com\/watch\?(?:.*&)?v=([a-zA-Z0-9_-]{11})',
    r'(?:https?:\/\/)?(?:www\.)?youtu\.be\/([a-zA-Z0-9_-]{11})',
    r'(?:https?:\/\/)?(?:www\.)?youtube\.com\/embed\/([a-zA-Z0-9_-]{11})',
    r'(?:https?:\/\/)?(?:www\.|m\.)?youtube\.com\/shorts\/([a-zA-Z0-9_-]{11})',
    r'(?:https?:\/\/)?(?:www\.)?youtube\.com\/live\/([a-zA-Z0-9_-]{11})',
    r'^([a-zA-Z0-9_-]{11})$'
]


def extract_video_id(url):
    if not url:
        return None
    for pattern in VIDEO_ID_PATTERNS:
        match = re.search(pattern, url.strip())
        if match:
            return match.group(1)
    return None


def get_thumbnail_urls(video_id):
    return [
        {
            'url': f"{THUMBNAIL_BASE_URL}{video_id}/{file_name}",
            'size': label,
            'width': width,
            'height': height,
        }
        for file_name, label, width, height in THUMBNAIL_QUALITIES
    ]


# IDs are interpolated into app deep links, so only URL-safe characters pass
SAFE_ID_PATTERN = re.compile(r'[A-Za-z0-9_-]+')
CHANNEL_NAME_PATTERN = re.compile(r'[A-Za-z0-9_.-]+')


def _safe_id(value, pattern=SAFE_ID_PATTERN):
    return value if value and pattern.fullmatch(value) else None


def _is_youtube_host(hostname):
    return hostname == 'youtube.com' or hostname.endswith('.youtube.com')


def parse_youtube_url(url):
    """
    Classifies a YouTube URL as video, shorts, playlist or channel.
    Returns a dict with 'type', 'id' and 'path', or None for anything else,
    including IDs with characters that never occur in real YouTube IDs.
    """
    try:
        parsed = urlparse(url.strip())
    except (AttributeError, ValueError):
        return None
    if parsed.scheme not in ('http', 'https') or not parsed.hostname:
        return None

    hostname = parsed.hostname.lower()
    path = parsed.path or '/'
    query = parse_qs(parsed.query)

    if hostname == 'youtu.be':
        video_id = _safe_id(path.lstrip('/').split('/')[0])
        if not video_id:
            return None
        return {'type': 'video', 'id': video_id, 'path': f"/watch?v={video_id}"}

    if not _is_youtube_host(hostname):
        return None

    if path == '/watch':
        video_id = _safe_id(query.get('v', [None])[0])
        if not video_id:
            return None
        return {'type': 'video', 'id': video_id, 'path': f"/watch?v={video_id}"}

    for prefix in ('/embed/', '/live/'):
        if path.startswith(prefix):
            video_id = _safe_id(path[len(prefix):].split('/')[0])
            if not video_id:
                return None
            return {'type': 'video', 'id': video_id, 'path': f"/watch?v={video_id}"}

    if path.startswith('/shorts/'):
        short_id = _safe_id(path[len('/shorts/'):].split('/')[0])
        if not short_id:
            return None
        return {'type': 'shorts', 'id': short_id, 'path': f"/shorts/{short_id}"}

    if path.startswith('/playlist'):
        list_id = _safe_id(query.get('list', [None])[0])
        if not list_id:
            return None
        return {'type': 'playlist', 'id': list_id, 'path': f"/playlist?list={list_id}"}

    for prefix in ('/channel/', '/c/', '/user/', '/@'):
        if path.startswith(prefix):
            name = _safe_id(path[len(prefix):].split('/')[0], CHANNEL_NAME_PATTERN)
            if not name:
                return None
            return {'type': 'channel', 'id': name, 'path': f"{prefix}{name}"}

    return None


def _android_intent(path, original_url):
    fallback = quote(original_url, safe='')
    return (
        f"intent://www.youtube.com{path}#Intent;scheme=https;"
        f"package={YOUTUBE_ANDROID_PACKAGE};S.browser_fallback_url={fallback};end"
    )


def build_deep_links(parsed, original_url):
    """Returns (ios_link, android_link) that open the YouTube app on the parsed target."""
    url_type = parsed['type']
    target_id = parsed['id']

    if url_type == 'video':
        return f"youtube://watch?v={target_id}", _android_intent(f"/watch?v={target_id}", original_url)
    if url_type == 'shorts':
        return f"youtube://shorts/{target_id}", _android_intent(f"/shorts/{target_id}", original_url)
    if url_type == 'playlist':
        return f"youtube://playlist?list={target_id}", _android_intent(f"/playlist?list={target_id}", original_url)
    if url_type == 'channel':
        return f"youtube://www.youtube.com{parsed['path']}", _android_intent(parsed['path'], original_url)
    raise ValueError(f"Unsupported URL type: {url_type}")
