# ginywow/__init__.py

import os
import logging
from flask import Flask, render_template, request, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_wtf.csrf import CSRFProtect, generate_csrf
from datetime import datetime
from dotenv import load_dotenv
from sqlalchemy import text
import config

load_dotenv()

db = SQLAlchemy()
csrf = CSRFProtect()

# All visitors are anonymous, so rate limits are keyed on the client address
limiter = Limiter(key_func=get_remote_address, default_limits=["200 per day", "50 per hour"])

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')


def create_app(config_class=config.Config):
    """Flask application factory."""
    # Define paths relative to the application's root
    project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
    static_folder_path = os.path.join(project_root, 'static')
    template_folder_path = os.path.join(project_root, 'ginywow', 'templates')
    instance_folder_path = os.path.join(project_root, 'instance')

    app = Flask(
        __name__.split('.')[0],
        instance_path=instance_folder_path,
        instance_relative_config=True,
        static_folder=static_folder_path,
        template_folder=template_folder_path
    )

    app.config.from_object(config_class)

    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        pass

    # Initialize extensions
    db.init_app(app)
    csrf.init_app(app)
    limiter.init_app(app)

    @app.after_request
    def add_security_headers(response):
        """Add common security headers to responses."""
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['Content-Security-Policy'] = "frame-ancestors 'self'"
        response.headers.pop('X-Frame-Options', None)
        response.headers.pop('X-XSS-Protection', None)
        if response.mimetype == 'text/html':
            response.headers['Cache-Control'] = 'no-cache, no-store, must-revalidate'
            response.headers['Pragma'] = 'no-cache'
            response.headers['Expires'] = '0'
        return response

    @app.context_processor
    def inject_now_and_csrf():
        """Inject current UTC time and CSRF token generation into templates."""
        return {'now': datetime.utcnow, 'csrf_token': generate_csrf}

    # --- Register Error Handlers ---
    def wants_json():
        return request.path.startswith('/api/')

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        app.logger.error(f"Internal Server Error: {error}", exc_info=True)
        if wants_json():
            return jsonify({'success': False, 'error': 'Internal server error.'}), 500
        return render_template('errors/500.html'), 500

    @app.errorhandler(404)
    def not_found_error(error):
        if wants_json():
            return jsonify({'success': False, 'error': 'Not found.'}), 404
        return render_template('errors/404.html'), 404

    @app.errorhandler(413)
    def request_too_large(error):
        max_mb = app.config.get('MAX_CONTENT_LENGTH', 0) // (1024 * 1024)
        return jsonify({'success': False, 'error': f'File too large. Maximum size is {max_mb}MB.'}), 413

    @app.errorhandler(429)
    def ratelimit_handler(error):
        return jsonify({'success': False, 'error': 'Too many requests. Please slow down.'}), 429

    # --- Import and register Blueprints ---
    from .routes.core_routes import core_bp
    app.register_blueprint(core_bp, url_prefix='/')

    from .routes.api_routes import api_bp
    app.register_blueprint(api_bp)

    from .routes.short_url_routes import short_url_bp
    app.register_blueprint(short_url_bp)

    # The JSON API is called from the single-page frontend without a CSRF token
    csrf.exempt(api_bp)

    from . import models

    with app.app_context():
        try:
            db.create_all()
            db.session.execute(text('SELECT 1'))
            from .services.ai_service import initialize_ai_clients
            initialize_ai_clients()
        except Exception as e:
            app.logger.warning(f"Could not verify DB connection or initialize services on startup: {e}")
            db.session.rollback()

    return app
