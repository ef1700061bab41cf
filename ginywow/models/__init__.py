# ginywow/models/__init__.py

# First, import the db instance that all models will use
from .. import db

from .system_models import (
    SystemLog, ApiCache, SiteSetting,
    log_system_event, get_setting, get_config_value
)
from .content_models import Thumbnail, TitleOptimization
from .marketing_models import NewsletterSubscription, ShortUrl, URL_TYPES

__all__ = [
    "db",
    # System Models & Functions
    "SystemLog", "ApiCache", "SiteSetting",
    "log_system_event", "get_setting", "get_config_value",
    # Thumbnail optimizer
    "Thumbnail", "TitleOptimization",
    # Newsletter & short links
    "NewsletterSubscription", "ShortUrl", "URL_TYPES"
]
