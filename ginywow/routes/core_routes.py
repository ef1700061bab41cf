# ginywow/routes/core_routes.py

import io
from flask import Blueprint, render_template, request, flash, redirect, url_for, send_file, current_app
from sqlalchemy import text
from ginywow import db
from ginywow.forms import (
    ThumbnailDownloaderForm, ShortUrlForm, ImageConvertForm, VideoDownloaderForm,
    NewsletterForm, UnsubscribeForm
)
from ginywow.schemas import SchemaValidationError
from ginywow.services.storage import AlreadySubscribedError, NotFoundError, StorageError, unsubscribe as unsubscribe_email
from ginywow.services.newsletter_service import subscribe
from ginywow.services.short_link_service import create_youtube_short_link
from ginywow.services.youtube_links import extract_video_id, get_thumbnail_urls
from ginywow.services.video_service import get_video_metadata
from ginywow.services.image_converter import convert_image, ImageConversionError

core_bp = Blueprint('core', __name__)


@core_bp.app_context_processor
def inject_newsletter_form():
    """Every page footer carries the newsletter form."""
    return {'newsletter_form': NewsletterForm()}


@core_bp.route('/')
def home():
    return render_template('index.html')

@core_bp.route('/about')
def about():
    return render_template('about.html')

@core_bp.route('/contact')
def contact():
    return render_template('contact.html')

@core_bp.route('/blog')
def blog():
    return render_template('blog.html')

@core_bp.route('/privacy')
def privacy():
    return render_template('privacy.html')

@core_bp.route('/thumbnail-optimizer')
def thumbnail_optimizer():
    return render_template('thumbnail_optimizer.html')


@core_bp.route('/thumbnail-downloader', methods=['GET', 'POST'])
def thumbnail_downloader():
    form = ThumbnailDownloaderForm()
    thumbnails = None
    video_id = None

    if form.validate_on_submit():
        video_id = extract_video_id(form.youtube_url.data)
        if video_id:
            thumbnails = get_thumbnail_urls(video_id)
        else:
            form.youtube_url.errors.append('Please enter a valid YouTube URL')

    return render_template('thumbnail_downloader.html', form=form, thumbnails=thumbnails, video_id=video_id)


@core_bp.route('/app-opener', methods=['GET', 'POST'])
def app_opener():
    form = ShortUrlForm()
    short_link = None

    if form.validate_on_submit():
        base_url = current_app.config.get('PUBLIC_BASE_URL') or request.host_url
        try:
            _, short_link = create_youtube_short_link(form.url.data, base_url)
        except SchemaValidationError as e:
            form.url.errors.append(e.message)
        except StorageError as e:
            db.session.rollback()
            flash(str(e), 'error')

    return render_template('app_opener.html', form=form, short_link=short_link)


@core_bp.route('/video-downloader', methods=['GET', 'POST'])
def video_downloader():
    form = VideoDownloaderForm()
    metadata = None

    if form.validate_on_submit():
        metadata = get_video_metadata(form.video_url.data)
        if 'error' in metadata:
            form.video_url.errors.append(metadata['error'])
            metadata = None

    return render_template('video_downloader.html', form=form, metadata=metadata)


@core_bp.route('/image-converter', methods=['GET', 'POST'])
def image_converter():
    form = ImageConvertForm()

    if form.validate_on_submit():
        upload = form.image.data
        try:
            result = convert_image(upload.read(), form.format.data, form.quality.data or 85)
        except ImageConversionError as e:
            flash(str(e), 'error')
            return render_template('image_converter.html', form=form), 400

        stem = upload.filename.rsplit('.', 1)[0] if '.' in upload.filename else upload.filename
        return send_file(
            io.BytesIO(result['data']),
            mimetype=result['mime_type'],
            as_attachment=True,
            download_name=f"{stem}.{result['extension']}"
        )

    return render_template('image_converter.html', form=form)


# --- Newsletter ---

@core_bp.route('/newsletter', methods=['POST'])
def newsletter():
    form = NewsletterForm()
    next_url = request.referrer if (request.referrer or '').startswith(request.host_url) else url_for('core.home')

    if not form.validate_on_submit():
        for error in form.email.errors:
            flash(error, 'error')
        return redirect(next_url)

    try:
        subscribe({'email': form.email.data, 'source': form.source.data or 'website'})
        flash('Successfully subscribed to newsletter! Thank you for joining us.', 'success')
    except SchemaValidationError as e:
        flash(e.message, 'error')
    except AlreadySubscribedError:
        flash('This email is already subscribed to our newsletter.', 'info')

    return redirect(next_url)


@core_bp.route('/unsubscribe', methods=['GET', 'POST'])
def unsubscribe():
    form = UnsubscribeForm()

    if form.validate_on_submit():
        try:
            unsubscribe_email(form.email.data.strip())
            flash('You have been unsubscribed.', 'success')
            return redirect(url_for('core.home'))
        except NotFoundError:
            form.email.errors.append('This email is not subscribed to our newsletter.')

    return render_template('unsubscribe.html', form=form)


@core_bp.route('/health')
def health_check():
    """Health check endpoint for the load balancer"""
    try:
        db.session.execute(text('SELECT 1'))
        return {'status': 'healthy', 'database': 'connected'}, 200
    except Exception as e:
        db.session.rollback()
        return {'status': 'unhealthy', 'database': str(e)}, 503
