# tests/test_notification_service.py

from unittest.mock import MagicMock
import requests
from ginywow.models import SystemLog
from ginywow.services import notification_service


def test_send_is_skipped_without_api_key(app, monkeypatch):
    post = MagicMock()
    monkeypatch.setattr(notification_service.requests, 'post', post)
    assert notification_service.send_welcome_email('a@b.com') is False
    post.assert_not_called()


def test_welcome_email_payload(app, monkeypatch):
    app.config['SENDGRID_API_KEY'] = 'SG.test'
    post = MagicMock()
    monkeypatch.setattr(notification_service.requests, 'post', post)

    assert notification_service.send_welcome_email('a@b.com') is True
    args, kwargs = post.call_args
    assert args[0] == notification_service.SENDGRID_API_URL
    assert kwargs['headers']['Authorization'] == 'Bearer SG.test'
    payload = kwargs['json']
    assert payload['personalizations'] == [{'to': [{'email': 'a@b.com'}]}]
    assert payload['from'] == {'email': 'no-reply@ginywow.com'}
    assert payload['subject'] == 'Welcome to GinyWow Newsletter!'
    assert [c['type'] for c in payload['content']] == ['text/plain', 'text/html']


def test_admin_notification_goes_to_admin(app, monkeypatch):
    app.config['SENDGRID_API_KEY'] = 'SG.test'
    app.config['ADMIN_EMAIL'] = 'owner@example.com'
    post = MagicMock()
    monkeypatch.setattr(notification_service.requests, 'post', post)

    assert notification_service.send_subscription_notification('a@b.com') is True
    payload = post.call_args.kwargs['json']
    assert payload['personalizations'][0]['to'] == [{'email': 'owner@example.com'}]
    assert 'a@b.com' in payload['content'][0]['value']


def test_delivery_failure_is_logged(app, monkeypatch):
    app.config['SENDGRID_API_KEY'] = 'SG.test'
    post = MagicMock(side_effect=requests.ConnectionError('connection refused'))
    monkeypatch.setattr(notification_service.requests, 'post', post)

    assert notification_service.send_welcome_email('a@b.com') is False
    log = SystemLog.query.filter_by(message='SendGrid email failed').first()
    assert log is not None
    assert 'connection refused' in log.details
