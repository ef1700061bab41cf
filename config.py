# config.py

import os
from dotenv import load_dotenv

# Load environment variables from the .env file
load_dotenv()

class Config:
    """Base configuration class."""

    # General Config
    SECRET_KEY = os.environ.get('SECRET_KEY', 'a-default-secret-key-for-local-dev')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Database
    DATABASE_URL = os.environ.get("DATABASE_URL")

    if DATABASE_URL and DATABASE_URL.startswith("postgres://"):
        DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

    SQLALCHEMY_DATABASE_URI = DATABASE_URL or 'sqlite:///local_dev.db'

    # Uploads: the image converter accepts up to 20MB, thumbnails up to 10MB
    MAX_CONTENT_LENGTH = 20 * 1024 * 1024
    MAX_THUMBNAIL_SIZE = 10 * 1024 * 1024

    # AI
    OPENAI_API_KEY = os.environ.get('OPENAI_API_KEY')
    OPENAI_MODEL = os.environ.get('OPENAI_MODEL', 'gpt-4o-mini')

    # YouTube Data API (video downloader metadata)
    YOUTUBE_API_KEY = os.environ.get('YOUTUBE_API_KEY')

    # SendGrid
    SENDGRID_API_KEY = os.environ.get('SENDGRID_API_KEY')
    MAIL_FROM = os.environ.get('MAIL_FROM', 'no-reply@ginywow.com')
    ADMIN_EMAIL = os.environ.get('ADMIN_EMAIL', 'admin@ginywow.com')

    # Used to build short links, e.g. https://ginywow.com/yt/abc123
    PUBLIC_BASE_URL = os.environ.get('PUBLIC_BASE_URL', 'https://ginywow.com')

    # Flask-Limiter
    RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI', 'memory://')
    RATELIMIT_ENABLED = os.environ.get('RATELIMIT_ENABLED', 'True').lower() == 'true'


class TestConfig(Config):
    """Configuration used by the test suite."""
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    WTF_CSRF_ENABLED = False
    RATELIMIT_ENABLED = False
    OPENAI_API_KEY = None
    YOUTUBE_API_KEY = None
    SENDGRID_API_KEY = None
    PUBLIC_BASE_URL = 'http://localhost:5000'
