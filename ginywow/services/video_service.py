# ginywow/services/video_service.py

import re
import logging
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from ginywow.models import get_config_value
from .cache_manager import get_from_cache, set_to_cache
from .youtube_links import extract_video_id, THUMBNAIL_BASE_URL

logger = logging.getLogger(__name__)

ISO_DURATION_PATTERN = re.compile(r'PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?')

# Qualities offered by the downloader page. Media is not fetched server side,
# so none of them carries a download URL.
FORMAT_OPTIONS = [
    {'quality': '1080p', 'format': 'MP4', 'codec': 'avc1', 'downloadUrl': None, 'fileSize': None},
    {'quality': '720p', 'format': 'MP4', 'codec': 'avc1', 'downloadUrl': None, 'fileSize': None},
    {'quality': '480p', 'format': 'MP4', 'codec': 'avc1', 'downloadUrl': None, 'fileSize': None},
    {'quality': 'Audio', 'format': 'MP3', 'codec': 'mp3', 'bitrate': '128kbps', 'downloadUrl': None, 'fileSize': None},
]


def get_youtube_service():
    """Returns (service, error). The service is None when no API key is configured."""
    api_key = get_config_value('YOUTUBE_API_KEY')
    if not api_key:
        return None, "Server API Key not configured."
    return build('youtube', 'v3', developerKey=api_key, cache_discovery=False), None


def parse_duration(duration_str):
    """Converts an ISO-8601 duration (PT1H2M3S) to (total_seconds, 'H:MM:SS' or 'M:SS')."""
    match = ISO_DURATION_PATTERN.match(duration_str or '')
    if match is None:
        return 0, "0:00"

    hours, minutes, seconds = (int(part or 0) for part in match.groups())
    total_seconds = hours * 3600 + minutes * 60 + seconds
    if hours:
        return total_seconds, f"{hours}:{minutes:02}:{seconds:02}"
    return total_seconds, f"{minutes}:{seconds:02}"


def _format_options():
    return [dict(option) for option in FORMAT_OPTIONS]


def _demo_metadata(video_id):
    return {
        'title': 'Video Not Available - Demo Mode',
        'duration': '0:00',
        'thumbnail': f"{THUMBNAIL_BASE_URL}{video_id}/maxresdefault.jpg",
        'platform': 'youtube',
        'videoId': video_id,
        'availableFormats': _format_options(),
        'downloadable': False,
        'demo': True,
    }


def get_video_metadata(video_url):
    """
    Looks up title, duration and thumbnail for a YouTube video.
    Returns {'error': ...} for URLs that are not YouTube videos.
    'demo' is True when the details could not come from the YouTube API.
    """
    video_id = extract_video_id(video_url or '')
    if not video_id:
        return {'error': 'Please provide a valid YouTube URL'}

    cache_key = f"video_metadata_v2:{video_id}"
    cached_data = get_from_cache(cache_key)
    if cached_data:
        return cached_data

    youtube, error = get_youtube_service()
    if error:
        logger.info(f"{error} Returning demo metadata for {video_id}.")
        return _demo_metadata(video_id)

    try:
        response = youtube.videos().list(part="snippet,contentDetails", id=video_id).execute()
    except HttpError as e:
        logger.error(f"YouTube API error for video {video_id}: {e}")
        return _demo_metadata(video_id)
    except Exception as e:
        logger.error(f"YouTube API request failed for video {video_id}: {e}")
        return _demo_metadata(video_id)

    if not response.get('items'):
        return {'error': 'Video not found.'}

    item = response['items'][0]
    snippet, content = item.get('snippet', {}), item.get('contentDetails', {})
    thumbnails = snippet.get('thumbnails', {})
    best_thumbnail = thumbnails.get('maxres', thumbnails.get('high', {})).get('url') \
        or f"{THUMBNAIL_BASE_URL}{video_id}/maxresdefault.jpg"
    _, duration = parse_duration(content.get('duration'))

    metadata = {
        'title': snippet.get('title') or 'Untitled Video',
        'duration': duration,
        'thumbnail': best_thumbnail,
        'platform': 'youtube',
        'videoId': video_id,
        'availableFormats': _format_options(),
        'downloadable': False,
        'demo': False,
    }
    set_to_cache(cache_key, metadata, expire_hours=6)
    return metadata
