# ginywow/forms/__init__.py

from .tool_forms import ThumbnailDownloaderForm, ShortUrlForm, ImageConvertForm, VideoDownloaderForm
from .newsletter_forms import NewsletterForm, UnsubscribeForm

__all__ = [
    "ThumbnailDownloaderForm", "ShortUrlForm", "ImageConvertForm", "VideoDownloaderForm",
    "NewsletterForm", "UnsubscribeForm"
]
