# ginywow/forms/tool_forms.py

from flask_wtf import FlaskForm
from flask_wtf.file import FileField, FileAllowed, FileRequired
from wtforms import StringField, SubmitField, SelectField, IntegerField
from wtforms.validators import DataRequired, Optional, NumberRange
from ginywow.schemas import (
    validate_thumbnail_downloader, INVALID_YOUTUBE_URL_MESSAGE
)
from ginywow.services.image_converter import SUPPORTED_FORMATS
from .validators import SchemaCheck

IMAGE_EXTENSIONS = ['jpg', 'jpeg', 'png', 'webp', 'gif', 'bmp', 'tif', 'tiff', 'ico']


class ThumbnailDownloaderForm(FlaskForm):
    youtube_url = StringField('YouTube URL', validators=[
        DataRequired(message=INVALID_YOUTUBE_URL_MESSAGE),
        SchemaCheck(validate_thumbnail_downloader, 'youtubeUrl')
    ])
    submit = SubmitField('Get Thumbnails')


class ShortUrlForm(FlaskForm):
    url = StringField('YouTube URL', validators=[DataRequired(message='Please provide a valid URL')])
    submit = SubmitField('Generate Link')


class VideoDownloaderForm(FlaskForm):
    video_url = StringField('Video URL', validators=[DataRequired(message='Please provide a valid YouTube URL')])
    submit = SubmitField('Get Video')


class ImageConvertForm(FlaskForm):
    image = FileField('Image', validators=[
        FileRequired(message='No image file provided'),
        FileAllowed(IMAGE_EXTENSIONS, 'Images only!')
    ])
    format = SelectField(
        'Convert To',
        choices=[(key, key.upper()) for key in SUPPORTED_FORMATS if key not in ('jpg', 'tif')],
        validators=[DataRequired()]
    )
    quality = IntegerField('Quality', default=85, validators=[Optional(), NumberRange(min=1, max=100)])
    submit = SubmitField('Convert')
