# tests/test_ai_service.py

import io
import json
import base64
from types import SimpleNamespace
from unittest.mock import MagicMock
import openai
from PIL import Image
from ginywow import db
from ginywow.models import SiteSetting, SystemLog
from ginywow.services import ai_service


def fake_client(content=None, error=None):
    client = MagicMock()
    if error is not None:
        client.chat.completions.create.side_effect = error
    else:
        client.chat.completions.create.return_value = SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=content))]
        )
    return client


def test_no_client_configured(app):
    assert ai_service.openai_client is None
    assert 'error' in ai_service.generate_ai_response('system', 'user')


def test_analysis_falls_back_without_client(app, png_base64):
    analysis = ai_service.analyze_thumbnail(png_base64)
    assert analysis == ai_service.MOCK_THUMBNAIL_ANALYSIS
    # The fallback is a copy, callers may mutate it freely
    analysis['enhancementSuggestions']['contrast'] = 99
    assert ai_service.MOCK_THUMBNAIL_ANALYSIS['enhancementSuggestions']['contrast'] == 15


def test_analysis_uses_model_response(app, monkeypatch, png_base64):
    payload = {
        'enhancementSuggestions': {'contrast': 30, 'saturation': 5, 'clarity': 12},
        'ctrImprovement': 18,
        'description': 'Busy background',
        'recommendations': ['Simplify the background'],
    }
    client = fake_client(json.dumps(payload))
    monkeypatch.setattr(ai_service, 'openai_client', client)

    assert ai_service.analyze_thumbnail(png_base64) == payload
    kwargs = client.chat.completions.create.call_args.kwargs
    assert kwargs['model'] == 'gpt-4o-mini'
    assert kwargs['response_format'] == {'type': 'json_object'}


def test_analysis_prompt_can_be_overridden(app, monkeypatch, png_base64):
    db.session.add(SiteSetting(key='prompt_thumbnail_analysis', value='Custom analysis prompt'))
    db.session.commit()
    client = fake_client('{}')
    monkeypatch.setattr(ai_service, 'openai_client', client)

    ai_service.analyze_thumbnail(png_base64)
    messages = client.chat.completions.create.call_args.kwargs['messages']
    assert messages[0] == {'role': 'system', 'content': 'Custom analysis prompt'}


def test_analysis_with_malformed_response_falls_back(app, monkeypatch, png_base64):
    monkeypatch.setattr(ai_service, 'openai_client', fake_client('{"enhancementSuggestions": "lots"}'))
    assert ai_service.analyze_thumbnail(png_base64) == ai_service.MOCK_THUMBNAIL_ANALYSIS


def test_provider_error_is_logged_and_falls_back(app, monkeypatch):
    monkeypatch.setattr(ai_service, 'openai_client', fake_client(error=openai.OpenAIError('quota exceeded')))

    suggestions = ai_service.optimize_titles('Baking Bread')
    assert suggestions == ai_service.get_mock_title_suggestions('Baking Bread')
    log = SystemLog.query.filter_by(log_type='ERROR').first()
    assert log is not None
    assert 'quota exceeded' in log.details


def test_invalid_json_falls_back(app, monkeypatch):
    monkeypatch.setattr(ai_service, 'openai_client', fake_client('not json'))
    assert len(ai_service.optimize_titles('Baking Bread')) == 5


def test_mock_titles_embed_original_title(app):
    suggestions = ai_service.get_mock_title_suggestions('Baking Bread')
    assert len(suggestions) == 5
    assert all('Baking Bread' in s['title'] for s in suggestions)
    assert {'title', 'score', 'estimatedCtr', 'seoScore', 'tags', 'reasoning'} <= set(suggestions[0])


def test_optimize_titles_uses_model_response(app, monkeypatch):
    titles = [{'title': 'Bread in 10 Minutes', 'score': 9, 'estimatedCtr': 40, 'seoScore': 8,
               'tags': ['bread'], 'reasoning': 'Specific and fast'}]
    client = fake_client(json.dumps({'titles': titles}))
    monkeypatch.setattr(ai_service, 'openai_client', client)

    assert ai_service.optimize_titles('Baking Bread', 'A loaf on a table') == titles
    system_prompt = client.chat.completions.create.call_args.kwargs['messages'][0]['content']
    assert 'A loaf on a table' in system_prompt


def test_enhance_returns_jpeg(png_base64):
    enhanced = ai_service.enhance_thumbnail_image(png_base64, {'contrast': 15, 'saturation': 10, 'clarity': 20})
    image = Image.open(io.BytesIO(base64.b64decode(enhanced)))
    assert image.format == 'JPEG'
    assert image.size == (64, 36)


def test_enhance_keeps_undecodable_input():
    assert ai_service.enhance_thumbnail_image('not-base64!!', {'contrast': 10}) == 'not-base64!!'
    garbage = base64.b64encode(b'not an image').decode('ascii')
    assert ai_service.enhance_thumbnail_image(garbage, {'contrast': 10}) == garbage


def test_enhancement_factor_is_clamped():
    assert ai_service._enhancement_factor(50) == 1.5
    assert ai_service._enhancement_factor(500) == 2.0
    assert ai_service._enhancement_factor(-20) == 1.0
    assert ai_service._enhancement_factor(None) == 1.0
