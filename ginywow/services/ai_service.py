# ginywow/services/ai_service.py

import io
import json
import base64
import binascii
import logging
from datetime import datetime
import openai
from PIL import Image, ImageEnhance, UnidentifiedImageError
from ginywow.models import get_config_value, get_setting, log_system_event
from ginywow.schemas import validate_optimized_titles, SchemaValidationError

# Global OpenAI client, created once at startup
openai_client = None

logger = logging.getLogger(__name__)

MOCK_THUMBNAIL_ANALYSIS = {
    'enhancementSuggestions': {
        'contrast': 15,
        'saturation': 10,
        'clarity': 20
    },
    'ctrImprovement': 25,
    'description': "Your thumbnail has good composition but could benefit from enhanced visual impact to stand out in YouTube feeds.",
    'recommendations': [
        "Increase contrast to make elements pop",
        "Boost saturation for more vibrant colors",
        "Add clarity enhancement for sharper details",
        "Consider adding text overlay for better context"
    ]
}


def initialize_ai_clients():
    """Initializes the OpenAI client once when the application starts."""
    global openai_client

    openai_key = get_config_value('OPENAI_API_KEY')
    if openai_key:
        logger.info("Initializing OpenAI Client.")
        openai_client = openai.OpenAI(api_key=openai_key)
    else:
        openai_client = None
        logger.info("OPENAI_API_KEY not set; AI features will use built-in suggestions.")


def generate_ai_response(system_prompt, user_content, is_json=False, max_tokens=1000):
    """
    Sends a chat completion request. Returns the parsed JSON (or text),
    or a dict with an 'error' key when no client is configured or the call fails.
    """
    if not openai_client:
        return {'error': 'No AI provider is configured.'}

    try:
        messages = [{"role": "system", "content": system_prompt}, {"role": "user", "content": user_content}]
        response_format = {"type": "json_object"} if is_json else {"type": "text"}
        response = openai_client.chat.completions.create(
            model=get_config_value('OPENAI_MODEL', 'gpt-4o-mini'),
            messages=messages,
            response_format=response_format,
            max_tokens=max_tokens,
        )
        content = response.choices[0].message.content or ""
        return json.loads(content or "{}") if is_json else content
    except (openai.OpenAIError, json.JSONDecodeError) as e:
        log_system_event("OpenAI request failed", 'ERROR', {'error': str(e)})
        return {'error': str(e)}


def analyze_thumbnail(base64_image):
    default_system_prompt = (
        "You are a YouTube thumbnail optimization expert. Analyze the provided thumbnail image and suggest "
        "enhancements to improve click-through rates.\n\n"
        "Respond with JSON in this exact format:\n"
        "{\n"
        '  "enhancementSuggestions": {\n'
        '    "contrast": number (0-100, percentage increase needed),\n'
        '    "saturation": number (0-100, percentage increase needed),\n'
        '    "clarity": number (0-100, percentage increase needed)\n'
        "  },\n"
        '  "ctrImprovement": number (estimated percentage CTR improvement),\n'
        '  "description": "string (detailed analysis of current thumbnail)",\n'
        '  "recommendations": ["array", "of", "specific", "improvement", "suggestions"]\n'
        "}"
    )
    system_prompt = get_setting('prompt_thumbnail_analysis', default_system_prompt)
    user_content = [
        {"type": "text", "text": "Analyze this YouTube thumbnail and provide enhancement recommendations to maximize click-through rates."},
        {"type": "image_url", "image_url": {"url": f"data:image/jpeg;base64,{base64_image}"}},
    ]

    result = generate_ai_response(system_prompt, user_content, is_json=True)
    if not isinstance(result, dict) or 'error' in result or not _is_valid_analysis(result):
        logger.info("Falling back to built-in thumbnail analysis.")
        return json.loads(json.dumps(MOCK_THUMBNAIL_ANALYSIS))
    return result


def _is_valid_analysis(result):
    suggestions = result.get('enhancementSuggestions')
    if not isinstance(suggestions, dict):
        return False
    numbers = [suggestions.get('contrast'), suggestions.get('saturation'),
               suggestions.get('clarity'), result.get('ctrImprovement')]
    return all(isinstance(n, (int, float)) and not isinstance(n, bool) for n in numbers)


def get_mock_title_suggestions(original_title):
    year = datetime.utcnow().year
    return [
        {
            'title': f"🚀 AMAZING: {original_title} (You Won't Believe This!)",
            'score': 9,
            'estimatedCtr': 35,
            'seoScore': 8,
            'tags': ["viral", "amazing", "trending", "youtube"],
            'reasoning': "Uses emotional trigger words and promises surprise value to increase click-through rates"
        },
        {
            'title': f"{original_title} - The ULTIMATE Guide ({year})",
            'score': 8,
            'estimatedCtr': 28,
            'seoScore': 9,
            'tags': ["guide", "tutorial", str(year), "ultimate"],
            'reasoning': "Appeals to viewers seeking comprehensive information with current year relevance"
        },
        {
            'title': f"Why {original_title} is Going VIRAL Right Now!",
            'score': 8,
            'estimatedCtr': 32,
            'seoScore': 7,
            'tags': ["viral", "trending", "popular", "now"],
            'reasoning': "Creates urgency and taps into FOMO (fear of missing out) psychology"
        },
        {
            'title': f"The SECRET Behind {original_title} (Finally Revealed)",
            'score': 7,
            'estimatedCtr': 29,
            'seoScore': 6,
            'tags': ["secret", "revealed", "behind", "exclusive"],
            'reasoning': "Promises exclusive knowledge and insider information"
        },
        {
            'title': f"{original_title}: From Zero to Hero in 30 Days",
            'score': 7,
            'estimatedCtr': 26,
            'seoScore': 8,
            'tags': ["transformation", "success", "30days", "hero"],
            'reasoning': "Offers specific timeframe and transformation promise"
        }
    ]


def optimize_titles(original_title, thumbnail_context=None):
    """Returns a list of five title suggestion dicts, best first."""
    context_prompt = f"Consider this thumbnail context: {thumbnail_context}\n\n" if thumbnail_context else ""
    default_system_prompt = (
        "You are a YouTube SEO and title optimization expert. Generate 5 highly optimized, click-worthy "
        "YouTube titles based on the original title provided."
    )
    system_prompt = get_setting('prompt_title_optimizer', default_system_prompt)
    system_prompt += (
        f"\n\n{context_prompt}Focus on:\n"
        "- High CTR potential with emotional triggers\n"
        "- SEO optimization with trending keywords\n"
        "- Optimal character length (50-70 characters)\n"
        "- Clear value proposition\n\n"
        "Respond with JSON in this exact format:\n"
        '{"titles": [{"title": "optimized title text", "score": number (1-10 overall quality score), '
        '"estimatedCtr": number (percentage improvement over original), "seoScore": number (1-10 SEO score), '
        '"tags": ["relevant", "keywords"], "reasoning": "explanation of why this title works"}]}'
    )
    user_prompt = f'Original title: "{original_title}"\n\nGenerate 5 optimized alternatives ranked by potential performance.'

    result = generate_ai_response(system_prompt, user_prompt, is_json=True, max_tokens=2000)
    if isinstance(result, dict) and 'error' not in result:
        try:
            suggestions = validate_optimized_titles(result.get('titles'))
            return [s.to_dict() for s in suggestions]
        except SchemaValidationError as e:
            logger.warning(f"AI returned unusable title suggestions: {e.message}")

    logger.info("Falling back to built-in title suggestions.")
    return get_mock_title_suggestions(original_title)


def _enhancement_factor(percent):
    try:
        percent = float(percent)
    except (TypeError, ValueError):
        return 1.0
    return 1.0 + max(0.0, min(percent, 100.0)) / 100.0


def enhance_thumbnail_image(base64_image, suggestions):
    """
    Applies the suggested contrast, saturation and clarity boosts with Pillow.
    Returns base64 JPEG data, or the original data if it cannot be decoded.
    """
    try:
        image = Image.open(io.BytesIO(base64.b64decode(base64_image, validate=True)))
        image = image.convert('RGB')
    except (binascii.Error, UnidentifiedImageError, OSError, ValueError) as e:
        logger.warning(f"Could not decode thumbnail for enhancement, returning original: {e}")
        return base64_image

    image = ImageEnhance.Contrast(image).enhance(_enhancement_factor(suggestions.get('contrast')))
    image = ImageEnhance.Color(image).enhance(_enhancement_factor(suggestions.get('saturation')))
    image = ImageEnhance.Sharpness(image).enhance(_enhancement_factor(suggestions.get('clarity')))

    output = io.BytesIO()
    image.save(output, format='JPEG', quality=92)
    return base64.b64encode(output.getvalue()).decode('ascii')
