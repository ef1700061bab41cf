# ginywow/schemas.py
"""
Acceptance contracts for everything the site persists.

Each entity has a small insert record and a pure ``validate_*`` function that
turns a raw mapping (a JSON body or form data) into that record, or raises
``SchemaValidationError`` with a message that can be shown to the visitor.
These functions do not touch the database.
"""

import math
import re
from dataclasses import dataclass, field
from typing import List, Optional
from urllib.parse import urlparse

import email_validator
from email_validator import validate_email, EmailNotValidError

# Any user@domain.tld address is accepted, including reserved names such as
# .test or .local; the dotted-domain rule still applies
email_validator.SPECIAL_USE_DOMAIN_NAMES.clear()

URL_TYPES = ('video', 'channel', 'playlist', 'shorts')
SHORT_CODE_MAX_LENGTH = 10
TITLE_MAX_LENGTH = 200
SOURCE_MAX_LENGTH = 50
DEFAULT_SOURCE = 'website'

INVALID_EMAIL_MESSAGE = "Please enter a valid email address"
INVALID_YOUTUBE_URL_MESSAGE = "Please enter a valid YouTube URL"

YOUTUBE_URL_PATTERN = re.compile(r'(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)')
SHORT_CODE_PATTERN = re.compile(r'^[A-Za-z0-9]+$')


class SchemaValidationError(ValueError):
    """Raised when a submitted record does not satisfy its contract."""

    def __init__(self, message, field=None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self):
        return {'success': False, 'error': self.message, 'field': self.field}


@dataclass
class InsertThumbnail:
    original_image_data: str
    file_name: str
    file_size: float


@dataclass
class InsertTitleOptimization:
    original_title: str
    thumbnail_id: Optional[str] = None


@dataclass
class InsertNewsletterSubscription:
    email: str
    source: str = DEFAULT_SOURCE


@dataclass
class InsertShortUrl:
    short_code: str
    original_url: str
    ios_deep_link: str
    android_deep_link: str
    url_type: str


@dataclass
class ThumbnailDownloaderInput:
    youtube_url: str


@dataclass
class TitleSuggestion:
    title: str
    score: float
    estimated_ctr: float
    seo_score: float
    tags: List[str] = field(default_factory=list)
    reasoning: str = ''

    def to_dict(self):
        return {
            'title': self.title,
            'score': self.score,
            'estimatedCtr': self.estimated_ctr,
            'seoScore': self.seo_score,
            'tags': list(self.tags),
            'reasoning': self.reasoning,
        }


# --- Field helpers ---

def _required_string(data, key, message=None):
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise SchemaValidationError(message or f"{key} is required", field=key)
    return value


def _optional_string(data, key):
    value = data.get(key)
    if value is None or value == '':
        return None
    if not isinstance(value, str):
        raise SchemaValidationError(f"{key} must be a string", field=key)
    return value


def _is_number(value):
    # bool is an int subclass but never a valid size or score
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


# --- Entity validators ---

def validate_thumbnail(data):
    """Accepts originalImageData, fileName and a positive fileSize."""
    original_image_data = _required_string(data, 'originalImageData', "Image data is required")
    file_name = _required_string(data, 'fileName', "File name is required")

    file_size = data.get('fileSize')
    if file_size is None:
        raise SchemaValidationError("File size is required", field='fileSize')
    if not _is_number(file_size) or file_size <= 0:
        raise SchemaValidationError("File size must be a positive number", field='fileSize')

    return InsertThumbnail(
        original_image_data=original_image_data,
        file_name=file_name,
        file_size=float(file_size),
    )


def validate_title_optimization(data):
    title = data.get('originalTitle')
    if not isinstance(title, str) or not title.strip():
        raise SchemaValidationError("Please enter a title to optimize", field='originalTitle')
    title = title.strip()
    if len(title) > TITLE_MAX_LENGTH:
        raise SchemaValidationError(
            f"Title must be at most {TITLE_MAX_LENGTH} characters", field='originalTitle'
        )
    return InsertTitleOptimization(
        original_title=title,
        thumbnail_id=_optional_string(data, 'thumbnailId'),
    )


def validate_email_address(value):
    """Returns the normalized (lowercased) address or raises SchemaValidationError."""
    if not isinstance(value, str) or not value.strip():
        raise SchemaValidationError(INVALID_EMAIL_MESSAGE, field='email')
    try:
        result = validate_email(value.strip(), check_deliverability=False)
    except EmailNotValidError:
        raise SchemaValidationError(INVALID_EMAIL_MESSAGE, field='email')
    return result.normalized.lower()


def validate_newsletter_subscription(data):
    email = validate_email_address(data.get('email'))

    source = _optional_string(data, 'source') or DEFAULT_SOURCE
    source = source.strip()
    if len(source) > SOURCE_MAX_LENGTH:
        raise SchemaValidationError(
            f"Source must be at most {SOURCE_MAX_LENGTH} characters", field='source'
        )
    return InsertNewsletterSubscription(email=email, source=source)


def validate_short_url(data):
    short_code = _required_string(data, 'shortCode', "Short code is required")
    if len(short_code) > SHORT_CODE_MAX_LENGTH:
        raise SchemaValidationError(
            f"Short code must be at most {SHORT_CODE_MAX_LENGTH} characters", field='shortCode'
        )
    if not SHORT_CODE_PATTERN.match(short_code):
        raise SchemaValidationError("Short code may only contain letters and digits", field='shortCode')

    url_type = data.get('urlType')
    if url_type not in URL_TYPES:
        raise SchemaValidationError(
            f"URL type must be one of: {', '.join(URL_TYPES)}", field='urlType'
        )

    return InsertShortUrl(
        short_code=short_code,
        original_url=_required_string(data, 'originalUrl', "Original URL is required"),
        ios_deep_link=_required_string(data, 'iosDeepLink', "iOS deep link is required"),
        android_deep_link=_required_string(data, 'androidDeepLink', "Android deep link is required"),
        url_type=url_type,
    )


def is_valid_url(value):
    if not isinstance(value, str):
        return False
    try:
        parsed = urlparse(value.strip())
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc)


def is_youtube_url(value):
    """True for syntactically valid URLs of the watch?v=, youtu.be/ or embed/ shapes."""
    return is_valid_url(value) and bool(YOUTUBE_URL_PATTERN.search(value))


def validate_thumbnail_downloader(data):
    youtube_url = data.get('youtubeUrl')
    if not is_youtube_url(youtube_url):
        raise SchemaValidationError(INVALID_YOUTUBE_URL_MESSAGE, field='youtubeUrl')
    return ThumbnailDownloaderInput(youtube_url=youtube_url.strip())


def validate_optimized_titles(items):
    """Checks a list of title suggestion dicts and returns TitleSuggestion records."""
    if not isinstance(items, list) or not items:
        raise SchemaValidationError("At least one optimized title is required", field='optimizedTitles')

    suggestions = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise SchemaValidationError(f"Title suggestion {index} must be an object", field='optimizedTitles')
        title = item.get('title')
        if not isinstance(title, str) or not title.strip():
            raise SchemaValidationError(f"Title suggestion {index} has no title", field='optimizedTitles')
        for key in ('score', 'estimatedCtr', 'seoScore'):
            if not _is_number(item.get(key)):
                raise SchemaValidationError(
                    f"Title suggestion {index} has a non-numeric {key}", field='optimizedTitles'
                )
        tags = item.get('tags', [])
        if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
            raise SchemaValidationError(f"Title suggestion {index} has invalid tags", field='optimizedTitles')
        reasoning = item.get('reasoning', '')
        if not isinstance(reasoning, str):
            raise SchemaValidationError(f"Title suggestion {index} has invalid reasoning", field='optimizedTitles')

        suggestions.append(TitleSuggestion(
            title=title.strip(),
            score=item['score'],
            estimated_ctr=item['estimatedCtr'],
            seo_score=item['seoScore'],
            tags=tags,
            reasoning=reasoning,
        ))
    return suggestions
