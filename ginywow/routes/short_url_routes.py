# ginywow/routes/short_url_routes.py

import re
from flask import Blueprint, render_template, request
from ginywow.services.storage import get_short_url, increment_click_count
from ginywow.services.short_link_service import SHORT_LINK_PREFIX

short_url_bp = Blueprint('short_url', __name__)

IOS_PATTERN = re.compile(r'iPad|iPhone|iPod')
ANDROID_PATTERN = re.compile(r'Android')


def detect_platform(user_agent):
    if IOS_PATTERN.search(user_agent or ''):
        return 'ios'
    if ANDROID_PATTERN.search(user_agent or ''):
        return 'android'
    return 'web'


@short_url_bp.route(f'/{SHORT_LINK_PREFIX}/<string:short_code>')
def open_short_link(short_code):
    short_url = get_short_url(short_code)
    if short_url is None:
        return render_template('short_link_not_found.html'), 404

    increment_click_count(short_code)

    platform = detect_platform(request.headers.get('User-Agent'))
    redirect_url = {
        'ios': short_url.ios_deep_link,
        'android': short_url.android_deep_link,
    }.get(platform, short_url.original_url)

    return render_template(
        'short_link_redirect.html',
        short_url=short_url,
        platform=platform,
        redirect_url=redirect_url
    )
