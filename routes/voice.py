import logging
from flask import Blueprint, jsonify, request, Response, current_app
from services.voice_service import (
    generate_voice,
    get_voice_config,
    determine_voice_type,
    get_available_voices,
    VoiceGenerationError,
    VOICE_CONFIG,
    DEFAULT_VOICE_TYPE,
)

logger = logging.getLogger(__name__)

bp = Blueprint('voice', __name__, url_prefix='/api/voice')


@bp.route('/generate', methods=['POST'])
def generate():
    """
    Synthesize speech for a translation.

    Request body:
    {
        "text": "imma gts rn",
        "target_language": "gen_z_english",   // optional, picks the voice
        "voice_type": "gen_z_english"         // optional, overrides target_language
    }

    Returns audio/mpeg bytes.
    """
    data = request.get_json(silent=True) or {}
    text = data.get('text')
    max_chars = current_app.config.get('VOICE_MAX_CHARACTERS', 1000)

    if not isinstance(text, str) or not text.strip():
        return jsonify({
            'success': False,
            'error': 'Text is required for voice generation'
        }), 400

    if len(text) > max_chars:
        return jsonify({
            'success': False,
            'error': f'Text too long for voice generation (max {max_chars} characters)'
        }), 400

    voice_type = data.get('voice_type')
    target_language = data.get('target_language')

    if voice_type is not None and (not isinstance(voice_type, str) or voice_type not in VOICE_CONFIG):
        return jsonify({
            'success': False,
            'error': f'Invalid voice_type. Must be one of: {", ".join(VOICE_CONFIG)}'
        }), 400

    if target_language is not None and not isinstance(target_language, str):
        return jsonify({
            'success': False,
            'error': 'target_language must be a string'
        }), 400

    voice_type = voice_type or determine_voice_type(target_language)

    try:
        audio = generate_voice(text, voice_type)
    except VoiceGenerationError as e:
        logger.error(f"Voice generation error: {str(e)}")
        if e.status_code == 429 or 'quota' in str(e).lower():
            return jsonify({
                'success': False,
                'error': 'Voice generation quota exceeded. Please try again later.'
            }), 429
        if e.status_code == 401:
            return jsonify({
                'success': False,
                'error': 'Voice service configuration error. Please contact support.'
            }), 500
        return jsonify({
            'success': False,
            'error': 'Voice generation failed. Please try again.'
        }), 500

    return Response(
        audio,
        mimetype='audio/mpeg',
        headers={
            'Content-Length': str(len(audio)),
            'Cache-Control': 'public, max-age=3600',
        }
    )


@bp.route('/config', methods=['GET'])
@bp.route('/config/<voice_type>', methods=['GET'])
def config(voice_type=DEFAULT_VOICE_TYPE):
    try:
        voice = get_voice_config(voice_type)
    except KeyError:
        return jsonify({
            'success': False,
            'error': 'Voice configuration not found for specified voice type'
        }), 404

    return jsonify({
        'success': True,
        'voice_type': voice_type,
        'voice': voice
    }), 200


@bp.route('/voices', methods=['GET'])
def voices():
    available = get_available_voices()
    return jsonify({
        'success': True,
        'data': available,
        'count': len(available)
    }), 200
