# tests/conftest.py

import io
import base64
import pytest
from PIL import Image
from config import TestConfig
from ginywow import create_app, db


@pytest.fixture
def app():
    """Create a test Flask app backed by an in-memory database"""
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def _image_bytes(fmt='PNG', size=(64, 36), color=(200, 30, 30), mode='RGB'):
    img = Image.new(mode, size, color=color)
    img_io = io.BytesIO()
    img.save(img_io, fmt)
    return img_io.getvalue()


@pytest.fixture
def make_image():
    """Returns a factory building encoded test images with Pillow"""
    return _image_bytes


@pytest.fixture
def png_bytes():
    return _image_bytes('PNG')


@pytest.fixture
def png_base64(png_bytes):
    return base64.b64encode(png_bytes).decode('ascii')
