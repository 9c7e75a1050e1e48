import logging
from flask import Blueprint, jsonify, request
from flask_login import current_user
from services.translation_service import translate as run_translation
from services.bridge_translation_service import (
    bridge_to_standard_english,
    generate_explanation,
    TranslationError,
)
from services.user_translation_service import save_to_history, get_recent_translations
from services.language_utils import is_supported_language

logger = logging.getLogger(__name__)

bp = Blueprint('translation', __name__, url_prefix='/api')

# Fields that would turn a translation request into a chat
FORBIDDEN_FIELDS = ('chat', 'message', 'continue', 'reply', 'answer', 'conversation')

CONTEXTS = ('general', 'casual', 'formal', 'technical', 'creative')


@bp.route('/translate', methods=['POST'])
def translate():
    """
    Translate text between two styles or languages.

    Query params:
        - cache: 'skip' (no lookup, no store) or 'refresh' (no lookup, overwrite)

    Request body:
    {
        "input_text": "ngl that fit is fire",
        "source_language": "gen_z_english",
        "target_language": "standard_english",
        "context": "casual",          // optional
        "use_latest_slang": true      // optional, defaults to true
    }

    Response headers:
        x-cache-hit: "1" on cache hit, "0" otherwise
        x-cache-key: cache key of the entry

    Response:
    {
        "success": true,
        "translation": "Not going to lie, that outfit is really good",
        "explanation": "Basically they're saying ...",
        "original_text": "ngl that fit is fire",
        "source_language": "gen_z_english",
        "target_language": "standard_english",
        "metadata": {"cached": false, "cache_key": "...", "hit_count": 1, ...}
    }
    """
    try:
        data = request.get_json(silent=True)

        if not data:
            return jsonify({
                'success': False,
                'error': 'No JSON data provided'
            }), 400

        if any(field in data for field in FORBIDDEN_FIELDS):
            return jsonify({
                'success': False,
                'error': 'Only translation requests are supported'
            }), 400

        input_text = data.get('input_text')
        source_language = data.get('source_language')
        target_language = data.get('target_language')
        context = data.get('context')
        use_latest_slang = data.get('use_latest_slang', True)

        if not isinstance(input_text, str) or not input_text.strip():
            return jsonify({
                'success': False,
                'error': 'Missing required field: input_text'
            }), 400

        if not source_language or not target_language:
            return jsonify({
                'success': False,
                'error': 'Missing required fields: source_language and target_language'
            }), 400

        for field, code in (('source_language', source_language), ('target_language', target_language)):
            if not is_supported_language(code):
                return jsonify({
                    'success': False,
                    'error': f'Unsupported {field}: {code}'
                }), 400

        if not isinstance(use_latest_slang, bool):
            return jsonify({
                'success': False,
                'error': 'use_latest_slang must be a boolean'
            }), 400

        if context is not None and context not in CONTEXTS:
            return jsonify({
                'success': False,
                'error': f'Invalid context. Must be one of: {", ".join(CONTEXTS)}'
            }), 400

        if context == 'general':
            context = None

        result = run_translation(
            input_text,
            source_language,
            target_language,
            context=context,
            use_latest_slang=use_latest_slang,
            cache_mode=request.args.get('cache')
        )

        if not result['success']:
            return jsonify({
                'success': False,
                'error': 'Translation failed'
            }), 500

        if current_user.is_authenticated:
            try:
                save_to_history(
                    current_user.id,
                    input_text,
                    result['translation'],
                    source_language,
                    target_language
                )
            except Exception as e:
                logger.warning(f"Failed to record history for user {current_user.id}: {str(e)}")

        metadata = result['metadata']
        response = jsonify(result)
        response.headers['x-cache-hit'] = '1' if metadata.get('cached') else '0'
        response.headers['x-cache-key'] = metadata.get('cache_key') or ''
        return response, 200

    except Exception as e:
        logger.error(f"Translation endpoint error: {str(e)}", exc_info=True)
        return jsonify({
            'success': False,
            'error': 'Translation failed'
        }), 500


@bp.route('/bridge-translate', methods=['POST'])
def bridge_translate():
    """
    Normalize slang or abbreviations to Standard English.

    Request body:
    {
        "input_text": "tbh idk",
        "source_language": "gen_z_english"   // optional
    }
    """
    data = request.get_json(silent=True) or {}
    input_text = data.get('input_text')
    source_language = data.get('source_language', 'gen_z_english')

    if not isinstance(input_text, str) or not input_text.strip():
        return jsonify({
            'success': False,
            'error': 'Missing required field: input_text'
        }), 400

    try:
        translation = bridge_to_standard_english(input_text)
    except TranslationError as e:
        logger.error(f"Bridge translation failed: {str(e)}", exc_info=True)
        return jsonify({
            'success': False,
            'error': 'Translation failed'
        }), 500

    explanation = generate_explanation(input_text, translation, source_language, 'standard_english')

    return jsonify({
        'success': True,
        'translation': translation,
        'explanation': explanation,
        'original_text': input_text,
        'source_language': source_language
    }), 200


@bp.route('/translations/recent', methods=['GET'])
def recent_translations():
    """
    Most recent translations from the anonymous log.

    Query params:
        - limit: number of entries (default 5, max 50)
    """
    limit = request.args.get('limit', 5, type=int)
    limit = max(1, min(limit, 50))

    try:
        translations = get_recent_translations(limit)
        return jsonify({
            'success': True,
            'data': [t.to_dict() for t in translations],
            'count': len(translations)
        }), 200
    except Exception as e:
        logger.error(f"Error fetching recent translations: {str(e)}", exc_info=True)
        return jsonify({
            'success': False,
            'error': 'Failed to fetch recent translations'
        }), 500
