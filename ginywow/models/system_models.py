# ginywow/models/system_models.py

import os
import json
import logging
import traceback
from datetime import datetime
from flask import current_app
from .. import db
from sqlalchemy.exc import OperationalError, ProgrammingError

logger = logging.getLogger(__name__)


# --- SystemLog, log_system_event ---
class SystemLog(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    timestamp = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    log_type = db.Column(db.String(50), nullable=False, index=True)
    message = db.Column(db.Text, nullable=False)
    details = db.Column(db.Text, nullable=True)


def _format_details(details, traceback_info):
    if isinstance(details, dict) and details:
        if traceback_info:
            details = {**details, 'traceback': traceback_info}
        return json.dumps(details, indent=2, default=str)

    text = str(details) if details else ''
    if traceback_info:
        text = f"{text}\n\nTraceback:\n{traceback_info}" if text else f"Traceback:\n{traceback_info}"
    return text


def log_system_event(message, log_type='INFO', details=None, traceback_info=None):
    """Writes message to the log and keeps a SystemLog row for it. Never raises."""
    level = logging.ERROR if log_type == 'ERROR' else logging.INFO
    logger.log(level, f"[{log_type}] {message}")
    try:
        db.session.add(SystemLog(
            log_type=log_type,
            message=message,
            details=_format_details(details, traceback_info)
        ))
        db.session.commit()
    except Exception as e:
        logger.error(f"Could not store system log entry ({message}): {e}\n{traceback.format_exc()}")
        db.session.rollback()


# --- SiteSetting Model ---
class SiteSetting(db.Model):
    key = db.Column(db.String(100), primary_key=True, unique=True, nullable=False)
    value = db.Column(db.Text, nullable=True)


def get_setting(key, default=None):
    """
    Safely gets a setting from the database.
    Returns default if the table doesn't exist or another DB error occurs.
    """
    try:
        setting = db.session.get(SiteSetting, key)
        if setting and setting.value is not None:
            val_lower = setting.value.lower()
            if val_lower == 'true': return True
            if val_lower == 'false': return False
            return setting.value
        return default
    except (OperationalError, ProgrammingError):
        db.session.rollback()
        return default


def get_config_value(key, default=None):
    """
    Gets a configuration value: database first, then the app config, then the environment.
    """
    db_value = get_setting(key)
    if db_value is not None:
        return db_value

    if key in current_app.config:
        value = current_app.config[key]
        return value if value is not None else default

    return os.environ.get(key, default)


# --- ApiCache ---
class ApiCache(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    cache_key = db.Column(db.String(255), unique=True, nullable=False, index=True)
    cache_value = db.Column(db.JSON, nullable=False)
    expires_at = db.Column(db.DateTime, nullable=False, index=True)
