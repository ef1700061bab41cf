# ginywow/services/newsletter_service.py

import traceback
from ginywow.models import log_system_event
from ginywow.schemas import validate_newsletter_subscription
from .storage import create_newsletter_subscription
from .notification_service import send_welcome_email, send_subscription_notification


def _notify(send, email):
    try:
        send(email)
    except Exception as e:
        log_system_event(
            f"Newsletter notification {send.__name__} failed",
            'ERROR',
            {'email': email, 'error': str(e)},
            traceback_info=traceback.format_exc()
        )


def subscribe(data):
    """
    Validates and stores a newsletter subscription, then sends the welcome and
    admin emails. Email delivery problems never fail the subscription.
    """
    record = validate_newsletter_subscription(data)
    subscription = create_newsletter_subscription(record)
    _notify(send_welcome_email, subscription.email)
    _notify(send_subscription_notification, subscription.email)
    return subscription
