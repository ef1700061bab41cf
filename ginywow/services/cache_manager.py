# ginywow/services/cache_manager.py

import logging
from datetime import datetime, timedelta
from ginywow import db
from ginywow.models import ApiCache

logger = logging.getLogger(__name__)


def get_from_cache(key):
    """Returns the cached value for key, or None when it is missing or expired."""
    entry = ApiCache.query.filter(
        ApiCache.cache_key == key,
        ApiCache.expires_at > datetime.utcnow()
    ).first()
    logger.debug(f"Cache {'hit' if entry else 'miss'}: {key}")
    return entry.cache_value if entry else None


def set_to_cache(key, value, expire_hours=4):
    """Stores value under key for expire_hours, replacing any previous entry."""
    entry = ApiCache.query.filter_by(cache_key=key).first() or ApiCache(cache_key=key)
    entry.cache_value = value
    entry.expires_at = datetime.utcnow() + timedelta(hours=expire_hours)
    db.session.add(entry)
    db.session.commit()
    logger.debug(f"Cached {key} for {expire_hours}h")
