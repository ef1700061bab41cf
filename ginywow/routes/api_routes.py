# ginywow/routes/api_routes.py

import base64
import logging
from flask import Blueprint, jsonify, request, current_app
from ginywow import limiter
from ginywow.decorators import handle_api_errors, json_body
from ginywow.schemas import (
    validate_thumbnail, validate_title_optimization, validate_thumbnail_downloader,
    validate_email_address, SchemaValidationError
)
from ginywow.services import storage
from ginywow.services.storage import AlreadySubscribedError, NotFoundError
from ginywow.services.ai_service import analyze_thumbnail, optimize_titles, enhance_thumbnail_image
from ginywow.services.newsletter_service import subscribe
from ginywow.services.short_link_service import create_youtube_short_link
from ginywow.services.youtube_links import extract_video_id, get_thumbnail_urls
from ginywow.services.video_service import get_video_metadata
from ginywow.services.image_converter import convert_image, ImageConversionError

api_bp = Blueprint('api', __name__, url_prefix='/api')

logger = logging.getLogger(__name__)


def _read_image_upload(field_name, max_size):
    """Returns (file_storage, bytes) for an uploaded image, or raises SchemaValidationError."""
    upload = request.files.get(field_name)
    if upload is None or not upload.filename:
        raise SchemaValidationError('No image file provided', field=field_name)
    if not (upload.mimetype or '').startswith('image/'):
        raise SchemaValidationError('Only image files are allowed', field=field_name)
    data = upload.read()
    if len(data) > max_size:
        raise SchemaValidationError(
            f"File too large. Maximum size is {max_size // (1024 * 1024)}MB.", field=field_name
        )
    return upload, data


# --- Thumbnail optimizer ---

@api_bp.route('/thumbnails/upload', methods=['POST'])
@limiter.limit("20 per hour")
@handle_api_errors('Failed to process thumbnail')
def upload_thumbnail():
    upload, data = _read_image_upload('thumbnail', current_app.config['MAX_THUMBNAIL_SIZE'])
    base64_image = base64.b64encode(data).decode('ascii')

    record = validate_thumbnail({
        'originalImageData': base64_image,
        'fileName': upload.filename,
        'fileSize': len(data),
    })
    thumbnail = storage.create_thumbnail(record)

    analysis = analyze_thumbnail(base64_image)
    suggestions = analysis['enhancementSuggestions']
    enhanced_image = enhance_thumbnail_image(base64_image, suggestions)

    thumbnail = storage.apply_enhancement(thumbnail.id, enhanced_image, {
        'contrast': suggestions['contrast'],
        'saturation': suggestions['saturation'],
        'clarity': suggestions['clarity'],
        'ctrImprovement': analysis['ctrImprovement'],
    })

    return jsonify({
        'thumbnail': thumbnail.to_dict(),
        'analysis': {
            'description': analysis.get('description', ''),
            'recommendations': analysis.get('recommendations', []),
            'ctrImprovement': analysis['ctrImprovement'],
        },
    })


@api_bp.route('/thumbnails/<string:thumbnail_id>')
@handle_api_errors('Failed to fetch thumbnail')
def get_thumbnail(thumbnail_id):
    thumbnail = storage.get_thumbnail(thumbnail_id)
    if thumbnail is None:
        return jsonify({'error': 'Thumbnail not found'}), 404
    return jsonify(thumbnail.to_dict())


@api_bp.route('/thumbnails/<string:thumbnail_id>/titles')
@handle_api_errors('Failed to fetch title optimizations')
def get_thumbnail_titles(thumbnail_id):
    optimizations = storage.get_title_optimizations_by_thumbnail(thumbnail_id)
    return jsonify([o.to_dict() for o in optimizations])


@api_bp.route('/titles/optimize', methods=['POST'])
@limiter.limit("30 per hour")
@handle_api_errors('Failed to optimize titles')
def optimize_title():
    record = validate_title_optimization(json_body())

    thumbnail_context = None
    if record.thumbnail_id:
        thumbnail = storage.get_thumbnail(record.thumbnail_id)
        if thumbnail is None:
            raise NotFoundError('Thumbnail not found')
        thumbnail_context = analyze_thumbnail(thumbnail.original_image_data).get('description')

    suggestions = optimize_titles(record.original_title, thumbnail_context)
    optimization = storage.create_title_optimization(record)
    optimization = storage.set_optimized_titles(optimization.id, suggestions)

    return jsonify({
        'optimization': optimization.to_dict(),
        'suggestions': optimization.optimized_titles,
    })


# --- Newsletter ---

@api_bp.route('/newsletter/subscribe', methods=['POST'])
@limiter.limit("10 per hour")
@handle_api_errors('Failed to subscribe to newsletter. Please try again.')
def newsletter_subscribe():
    try:
        subscription = subscribe(json_body())
    except SchemaValidationError:
        return jsonify({
            'success': False,
            'error': 'Please enter a valid email address.',
            'code': 'INVALID_EMAIL'
        }), 400
    except AlreadySubscribedError:
        return jsonify({
            'success': False,
            'error': 'This email is already subscribed to our newsletter.',
            'code': 'ALREADY_SUBSCRIBED'
        }), 409

    return jsonify({
        'success': True,
        'message': 'Successfully subscribed to newsletter! Thank you for joining us.',
        'subscription': {
            'id': subscription.id,
            'email': subscription.email,
            'isActive': subscription.is_active,
            'subscriptionDate': subscription.subscription_date.isoformat(),
        }
    })


@api_bp.route('/newsletter/unsubscribe', methods=['POST'])
@limiter.limit("10 per hour")
@handle_api_errors('Failed to unsubscribe. Please try again.')
def newsletter_unsubscribe():
    email = validate_email_address(json_body().get('email'))
    try:
        storage.unsubscribe(email)
    except NotFoundError:
        return jsonify({
            'success': False,
            'error': 'This email is not subscribed to our newsletter.',
            'code': 'NOT_SUBSCRIBED'
        }), 404
    return jsonify({'success': True, 'message': 'You have been unsubscribed.'})


# --- YouTube tools ---

@api_bp.route('/short-url', methods=['POST'])
@limiter.limit("30 per hour")
@handle_api_errors('Failed to generate short URL. Please try again.')
def generate_short_url():
    url = json_body().get('url')
    base_url = current_app.config.get('PUBLIC_BASE_URL') or request.host_url
    short_url, link = create_youtube_short_link(url, base_url)
    return jsonify({
        'success': True,
        'shortUrl': link,
        'shortCode': short_url.short_code,
        'originalUrl': short_url.original_url,
        'type': short_url.url_type,
    })


@api_bp.route('/thumbnail-downloader', methods=['POST'])
@handle_api_errors('Failed to extract thumbnails.')
def thumbnail_downloader():
    form_input = validate_thumbnail_downloader(json_body())
    video_id = extract_video_id(form_input.youtube_url)
    if not video_id:
        raise SchemaValidationError('Please enter a valid YouTube URL', field='youtubeUrl')
    return jsonify({
        'success': True,
        'videoId': video_id,
        'thumbnails': get_thumbnail_urls(video_id),
    })


@api_bp.route('/video-metadata', methods=['POST'])
@limiter.limit("60 per hour")
@handle_api_errors('Failed to extract video metadata. Please try again.')
def video_metadata():
    metadata = get_video_metadata(json_body().get('videoUrl'))
    if 'error' in metadata:
        return jsonify({'success': False, 'error': metadata['error']}), 400
    return jsonify({'success': True, 'metadata': metadata})


# --- Image converter ---

@api_bp.route('/convert-image', methods=['POST'])
@limiter.limit("60 per hour")
@handle_api_errors('Failed to convert image format')
def convert_image_format():
    upload, data = _read_image_upload('image', current_app.config['MAX_CONTENT_LENGTH'])
    target_format = request.form.get('format')
    if not target_format:
        return jsonify({'success': False, 'error': 'Target format is required'}), 400

    try:
        result = convert_image(data, target_format, request.form.get('quality', 85))
    except ImageConversionError as e:
        return jsonify({'success': False, 'error': str(e)}), 400

    stem = upload.filename.rsplit('.', 1)[0] if '.' in upload.filename else upload.filename
    encoded = base64.b64encode(result['data']).decode('ascii')
    return jsonify({
        'success': True,
        'originalFormat': upload.mimetype,
        'newFormat': result['mime_type'],
        'originalSize': result['original_size'],
        'newSize': result['new_size'],
        'sizeChange': result['size_change'],
        'processedImage': f"data:{result['mime_type']};base64,{encoded}",
        'downloadName': f"{stem}.{result['extension']}",
    })
