# ginywow/services/storage.py

import logging
import secrets
import string
from datetime import datetime
from sqlalchemy.exc import IntegrityError
from ginywow import db
from ginywow.models import Thumbnail, TitleOptimization, NewsletterSubscription, ShortUrl
from ginywow.schemas import validate_optimized_titles

logger = logging.getLogger(__name__)

SHORT_CODE_ALPHABET = string.ascii_lowercase + string.digits


class StorageError(Exception):
    pass

class NotFoundError(StorageError):
    pass

class AlreadySubscribedError(StorageError):
    pass


# --- Thumbnails ---

def create_thumbnail(record):
    thumbnail = Thumbnail(
        original_image_data=record.original_image_data,
        file_name=record.file_name,
        file_size=record.file_size,
    )
    db.session.add(thumbnail)
    db.session.commit()
    logger.info(f"Thumbnail {thumbnail.id} stored ({record.file_name}, {record.file_size:.0f} bytes)")
    return thumbnail


def get_thumbnail(thumbnail_id):
    return db.session.get(Thumbnail, thumbnail_id)


def apply_enhancement(thumbnail_id, enhanced_image_data, metrics):
    """Stores the enhancement result. A thumbnail can only be enhanced once."""
    updated = Thumbnail.query.filter(
        Thumbnail.id == thumbnail_id,
        Thumbnail.enhanced_image_data.is_(None)
    ).update({
        Thumbnail.enhanced_image_data: enhanced_image_data,
        Thumbnail.enhancement_metrics: metrics,
    }, synchronize_session=False)
    db.session.commit()

    if not updated:
        if get_thumbnail(thumbnail_id) is None:
            raise NotFoundError(f"Thumbnail {thumbnail_id} not found")
        raise StorageError(f"Thumbnail {thumbnail_id} has already been enhanced")
    return get_thumbnail(thumbnail_id)


# --- Title optimizations ---

def create_title_optimization(record):
    if record.thumbnail_id and get_thumbnail(record.thumbnail_id) is None:
        raise NotFoundError(f"Thumbnail {record.thumbnail_id} not found")

    optimization = TitleOptimization(
        original_title=record.original_title,
        thumbnail_id=record.thumbnail_id,
    )
    db.session.add(optimization)
    db.session.commit()
    return optimization


def get_title_optimization(optimization_id):
    return db.session.get(TitleOptimization, optimization_id)


def set_optimized_titles(optimization_id, titles):
    suggestions = validate_optimized_titles(titles)

    optimization = get_title_optimization(optimization_id)
    if optimization is None:
        raise NotFoundError(f"Title optimization {optimization_id} not found")
    if optimization.optimized_titles:
        raise StorageError(f"Title optimization {optimization_id} has already been scored")

    optimization.optimized_titles = [s.to_dict() for s in suggestions]
    db.session.commit()
    return optimization


def get_title_optimizations_by_thumbnail(thumbnail_id):
    return TitleOptimization.query.filter_by(thumbnail_id=thumbnail_id) \
        .order_by(TitleOptimization.created_at.asc()).all()


# --- Newsletter ---

def get_newsletter_subscription(email):
    return NewsletterSubscription.query.filter_by(email=email.lower()).first()


def create_newsletter_subscription(record):
    """
    Subscribes an address. An inactive row for the same address is reactivated,
    an active one raises AlreadySubscribedError.
    """
    existing = get_newsletter_subscription(record.email)
    now = datetime.utcnow()

    if existing:
        if existing.active:
            raise AlreadySubscribedError('Email already subscribed')
        existing.is_active = 'true'
        existing.last_updated = now
        existing.source = record.source
        db.session.commit()
        logger.info(f"Newsletter subscription reactivated for {record.email}")
        return existing

    subscription = NewsletterSubscription(
        email=record.email,
        is_active='true',
        subscription_date=now,
        last_updated=now,
        source=record.source,
    )
    db.session.add(subscription)
    try:
        db.session.commit()
    except IntegrityError:
        # Another request inserted the same address first
        db.session.rollback()
        raise AlreadySubscribedError('Email already subscribed')
    logger.info(f"New newsletter subscription for {record.email} (source: {record.source})")
    return subscription


def unsubscribe(email):
    subscription = get_newsletter_subscription(email)
    if subscription is None:
        raise NotFoundError(f"No subscription found for {email}")
    if subscription.active:
        subscription.is_active = 'false'
        subscription.last_updated = datetime.utcnow()
        db.session.commit()
    return subscription


# --- Short URLs ---

def get_short_url(short_code):
    return ShortUrl.query.filter_by(short_code=short_code).first()


def create_short_url(record):
    short_url = ShortUrl(
        short_code=record.short_code,
        original_url=record.original_url,
        ios_deep_link=record.ios_deep_link,
        android_deep_link=record.android_deep_link,
        url_type=record.url_type,
        click_count=0,
    )
    db.session.add(short_url)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise StorageError(f"Short code '{record.short_code}' is already in use")
    return short_url


def increment_click_count(short_code):
    """Atomically adds one click. Returns False when the code does not exist."""
    updated = ShortUrl.query.filter_by(short_code=short_code).update(
        {ShortUrl.click_count: ShortUrl.click_count + 1},
        synchronize_session=False
    )
    db.session.commit()
    return updated > 0


def generate_unique_short_code(length=6, max_attempts=10):
    for _ in range(max_attempts):
        code = ''.join(secrets.choice(SHORT_CODE_ALPHABET) for _ in range(length))
        if get_short_url(code) is None:
            return code
    raise StorageError('Unable to generate unique short code. Please try again.')
