# ginywow/decorators.py

import traceback
from functools import wraps
from flask import jsonify, request
from werkzeug.exceptions import HTTPException
from ginywow import db
from ginywow.models import log_system_event
from ginywow.schemas import SchemaValidationError
from ginywow.services.storage import StorageError, NotFoundError, AlreadySubscribedError


def json_body():
    """Returns the request payload as a dict, from JSON or form data."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def handle_api_errors(failure_message):
    """
    Turns domain exceptions raised by an API view into JSON error responses.
    Anything unexpected is rolled back, logged, and reported with failure_message.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except SchemaValidationError as e:
                return jsonify(e.to_dict()), 400
            except NotFoundError as e:
                return jsonify({'success': False, 'error': str(e)}), 404
            except AlreadySubscribedError as e:
                return jsonify({'success': False, 'error': str(e)}), 409
            except StorageError as e:
                db.session.rollback()
                return jsonify({'success': False, 'error': str(e)}), 500
            except HTTPException:
                raise
            except Exception as e:
                db.session.rollback()
                log_system_event(
                    message=f"Unhandled error in {request.method} {request.path}",
                    log_type='ERROR',
                    details={'error': str(e)},
                    traceback_info=traceback.format_exc()
                )
                return jsonify({'success': False, 'error': failure_message}), 500
        return decorated_function
    return decorator
