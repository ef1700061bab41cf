# tests/test_system_models.py

from datetime import datetime, timedelta
from ginywow import db
from ginywow.models import ApiCache, SiteSetting, SystemLog, log_system_event, get_config_value
from ginywow.services.cache_manager import get_from_cache, set_to_cache


def test_log_system_event_keeps_details_and_traceback(app):
    log_system_event('Upload failed', 'ERROR', {'file': 'a.png'}, traceback_info='Traceback (most recent call last)')
    entry = SystemLog.query.one()
    assert entry.log_type == 'ERROR'
    assert '"file": "a.png"' in entry.details
    assert 'Traceback (most recent call last)' in entry.details


def test_log_system_event_with_plain_text(app):
    log_system_event('Started', details='worker 1')
    log_system_event('Crashed', traceback_info='boom')
    started, crashed = SystemLog.query.order_by(SystemLog.id).all()
    assert started.details == 'worker 1'
    assert crashed.details == 'Traceback:\nboom'


def test_config_value_prefers_site_setting(app):
    app.config['ADMIN_EMAIL'] = 'config@example.com'
    assert get_config_value('ADMIN_EMAIL') == 'config@example.com'

    db.session.add(SiteSetting(key='ADMIN_EMAIL', value='db@example.com'))
    db.session.commit()
    assert get_config_value('ADMIN_EMAIL') == 'db@example.com'
    assert get_config_value('NOT_A_SETTING', 'fallback') == 'fallback'


def test_cache_round_trip_and_overwrite(app):
    assert get_from_cache('video:abc') is None
    set_to_cache('video:abc', {'title': 'First'})
    set_to_cache('video:abc', {'title': 'Second'})
    assert get_from_cache('video:abc') == {'title': 'Second'}
    assert ApiCache.query.count() == 1


def test_expired_cache_entries_are_ignored(app):
    db.session.add(ApiCache(cache_key='old', cache_value={'x': 1},
                            expires_at=datetime.utcnow() - timedelta(minutes=1)))
    db.session.commit()
    assert get_from_cache('old') is None
