# ginywow/models/marketing_models.py

from datetime import datetime
from .. import db
from .content_models import generate_uuid
from ..schemas import URL_TYPES


class NewsletterSubscription(db.Model):
    __tablename__ = 'newsletter_subscriptions'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    # Stored as text ("true"/"false")
    is_active = db.Column(db.String(5), nullable=False, default='true')
    subscription_date = db.Column(db.DateTime, default=datetime.utcnow)
    last_updated = db.Column(db.DateTime, default=datetime.utcnow)
    source = db.Column(db.String(50), nullable=True, default='website')

    @property
    def active(self):
        return self.is_active == 'true'

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'isActive': self.is_active,
            'subscriptionDate': self.subscription_date.isoformat() if self.subscription_date else None,
            'lastUpdated': self.last_updated.isoformat() if self.last_updated else None,
            'source': self.source,
        }


class ShortUrl(db.Model):
    __tablename__ = 'short_urls'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    short_code = db.Column(db.String(10), unique=True, nullable=False, index=True)
    original_url = db.Column(db.Text, nullable=False)
    ios_deep_link = db.Column(db.Text, nullable=False)
    android_deep_link = db.Column(db.Text, nullable=False)
    url_type = db.Column(db.String(20), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    click_count = db.Column(db.Integer, nullable=False, default=0)

    __table_args__ = (
        db.CheckConstraint(
            "url_type IN ('video', 'channel', 'playlist', 'shorts')",
            name='ck_short_urls_url_type'
        ),
        db.CheckConstraint('click_count >= 0', name='ck_short_urls_click_count'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'shortCode': self.short_code,
            'originalUrl': self.original_url,
            'iosDeepLink': self.ios_deep_link,
            'androidDeepLink': self.android_deep_link,
            'urlType': self.url_type,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'clickCount': self.click_count,
        }
