# Filepath: ginywow/services/notification_service.py
import logging
from datetime import datetime
import requests

logger = logging.getLogger(__name__)

SENDGRID_API_URL = "https://api.sendgrid.com/v3/mail/send"

WELCOME_TEXT = (
    "Welcome to GinyWow! Thank you for subscribing to our newsletter. "
    "You will receive the latest updates on YouTube optimization tools and features."
)

WELCOME_HTML = """
<div style="max-width: 600px; margin: 0 auto; font-family: Arial, sans-serif;">
  <h1>Welcome to GinyWow!</h1>
  <p>Thank you for subscribing to our newsletter! You're now part of our community that gets the
  latest updates on YouTube optimization tools and features.</p>
  <h2>What you'll get:</h2>
  <ul>
    <li>Latest tool updates and new features</li>
    <li>YouTube optimization tips and tricks</li>
    <li>Industry insights and best practices</li>
    <li>Exclusive offers and early access to new tools</li>
  </ul>
  <p>You can unsubscribe at any time by clicking the unsubscribe link in our emails.</p>
</div>
"""


def send_email(to, subject, text=None, html=None):
    """Sends one email through SendGrid. Returns True on success, False otherwise."""
    from ginywow.models import get_config_value, log_system_event

    api_key = get_config_value('SENDGRID_API_KEY')
    if not api_key:
        logger.info(f"SendGrid not configured - would have sent '{subject}' to {to}")
        return False

    content = []
    if text:
        content.append({'type': 'text/plain', 'value': text})
    if html:
        content.append({'type': 'text/html', 'value': html})

    payload = {
        'personalizations': [{'to': [{'email': to}]}],
        'from': {'email': get_config_value('MAIL_FROM', 'no-reply@ginywow.com')},
        'subject': subject,
        'content': content,
    }
    headers = {'Authorization': f"Bearer {api_key}", 'Content-Type': 'application/json'}

    try:
        response = requests.post(SENDGRID_API_URL, json=payload, headers=headers, timeout=10)
        response.raise_for_status()
    except requests.RequestException as e:
        log_system_event("SendGrid email failed", 'ERROR', {'to': to, 'subject': subject, 'error': str(e)})
        return False

    logger.info(f"Email sent successfully to: {to}")
    return True


def send_welcome_email(email):
    return send_email(
        to=email,
        subject='Welcome to GinyWow Newsletter!',
        text=WELCOME_TEXT,
        html=WELCOME_HTML,
    )


def send_subscription_notification(email):
    from ginywow.models import get_config_value

    admin_email = get_config_value('ADMIN_EMAIL')
    if not admin_email:
        logger.info(f"New subscriber: {email}")
        return False

    subscribed_at = datetime.utcnow().strftime('%d %b %Y, %I:%M %p UTC')
    return send_email(
        to=admin_email,
        subject='New Newsletter Subscription',
        text=f"New subscriber: {email}",
        html=(
            '<div style="font-family: Arial, sans-serif; max-width: 500px; margin: 0 auto; padding: 20px;">'
            '<h2>New Newsletter Subscription</h2>'
            f'<p>Someone new just subscribed to your newsletter: <strong>{email}</strong></p>'
            f'<p style="font-size: 14px; color: #999;">Subscribed at: {subscribed_at}</p>'
            '</div>'
        ),
    )
