# tests/test_youtube_links.py

import pytest
from ginywow.services.youtube_links import (
    extract_video_id, get_thumbnail_urls, parse_youtube_url, build_deep_links
)


@pytest.mark.parametrize('url', [
    'https://www.youtube.com/watch?v=dQw4w9WgXcQ',
    'https://www.youtube.com/watch?feature=share&v=dQw4w9WgXcQ',
    'https://youtu.be/dQw4w9WgXcQ',
    'https://www.youtube.com/embed/dQw4w9WgXcQ',
    'https://www.youtube.com/shorts/dQw4w9WgXcQ',
    'dQw4w9WgXcQ',
])
def test_extract_video_id(url):
    assert extract_video_id(url) == 'dQw4w9WgXcQ'


@pytest.mark.parametrize('url', ['', None, 'https://vimeo.com/12345', 'https://www.youtube.com/watch?v=short'])
def test_extract_video_id_rejects(url):
    assert extract_video_id(url) is None


def test_thumbnail_urls_cover_every_quality():
    thumbnails = get_thumbnail_urls('dQw4w9WgXcQ')
    assert [t['url'].rsplit('/', 1)[-1] for t in thumbnails] == [
        'maxresdefault.jpg', 'sddefault.jpg', 'hqdefault.jpg', 'mqdefault.jpg', 'default.jpg'
    ]
    assert thumbnails[0]['url'] == 'https://img.youtube.com/vi/dQw4w9WgXcQ/maxresdefault.jpg'
    assert (thumbnails[0]['width'], thumbnails[0]['height']) == (1280, 720)


@pytest.mark.parametrize('url, url_type, target_id', [
    ('https://www.youtube.com/watch?v=dQw4w9WgXcQ', 'video', 'dQw4w9WgXcQ'),
    ('https://youtu.be/dQw4w9WgXcQ', 'video', 'dQw4w9WgXcQ'),
    ('https://m.youtube.com/embed/dQw4w9WgXcQ', 'video', 'dQw4w9WgXcQ'),
    ('https://www.youtube.com/shorts/abcDEF12345', 'shorts', 'abcDEF12345'),
    ('https://www.youtube.com/playlist?list=PL1234', 'playlist', 'PL1234'),
    ('https://www.youtube.com/@ginywow', 'channel', 'ginywow'),
    ('https://www.youtube.com/channel/UC123', 'channel', 'UC123'),
])
def test_parse_youtube_url(url, url_type, target_id):
    parsed = parse_youtube_url(url)
    assert parsed['type'] == url_type
    assert parsed['id'] == target_id


@pytest.mark.parametrize('url', [
    'https://vimeo.com/12345',
    'https://notyoutube.com/watch?v=dQw4w9WgXcQ',
    'https://www.youtube.com/watch',
    'https://www.youtube.com/feed/trending',
    'ftp://youtube.com/watch?v=dQw4w9WgXcQ',
    'youtube.com/watch?v=dQw4w9WgXcQ',
])
def test_parse_youtube_url_rejects(url):
    assert parse_youtube_url(url) is None


def test_video_deep_links():
    url = 'https://www.youtube.com/watch?v=dQw4w9WgXcQ'
    ios, android = build_deep_links(parse_youtube_url(url), url)
    assert ios == 'youtube://watch?v=dQw4w9WgXcQ'
    assert android.startswith('intent://www.youtube.com/watch?v=dQw4w9WgXcQ#Intent;scheme=https;')
    assert 'package=com.google.android.youtube' in android
    assert 'S.browser_fallback_url=https%3A%2F%2Fwww.youtube.com%2Fwatch%3Fv%3DdQw4w9WgXcQ' in android
    assert android.endswith(';end')


def test_playlist_and_channel_deep_links():
    playlist_url = 'https://www.youtube.com/playlist?list=PL1234'
    ios, _ = build_deep_links(parse_youtube_url(playlist_url), playlist_url)
    assert ios == 'youtube://playlist?list=PL1234'

    channel_url = 'https://www.youtube.com/@ginywow'
    ios, android = build_deep_links(parse_youtube_url(channel_url), channel_url)
    assert ios == 'youtube://www.youtube.com/@ginywow'
    assert android.startswith('intent://www.youtube.com/@ginywow#Intent')


@pytest.mark.parametrize('url', [
    'https://www.youtube.com/watch?v=x%23Intent%3Bpackage%3Dcom.evil.app%3Bend',
    'https://www.youtube.com/watch?v=dQw4w9WgXcQ%0A',
    'https://youtu.be/abc%23Intent',
    'https://www.youtube.com/shorts/abc%3Bpackage%3Dcom.evil.app',
    'https://www.youtube.com/playlist?list=PL1%3Bend',
    'https://www.youtube.com/@name%23Intent',
    'https://www.youtube.com/channel/UC1%3Bend',
])
def test_ids_with_link_syntax_are_rejected(url):
    assert parse_youtube_url(url) is None


def test_extra_path_segments_do_not_reach_deep_links():
    url = 'https://www.youtube.com/@ginywow/videos?view=0'
    parsed = parse_youtube_url(url)
    assert parsed == {'type': 'channel', 'id': 'ginywow', 'path': '/@ginywow'}
    ios, android = build_deep_links(parsed, url)
    assert ios == 'youtube://www.youtube.com/@ginywow'
    assert android.count('#Intent') == 1
    assert android.count('package=') == 1
