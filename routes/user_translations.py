import logging
from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required
from services.user_translation_service import (
    save_translation,
    get_saved_translations,
    delete_saved_translation,
    save_to_history,
    get_history_translations,
    delete_history_translation,
    clear_history,
)

logger = logging.getLogger(__name__)

bp = Blueprint('user_translations', __name__, url_prefix='/api/translations')


def _translation_fields(data):
    return (
        data.get('input_text'),
        data.get('output_text'),
        data.get('source_language'),
        data.get('target_language'),
    )


@bp.route('/save', methods=['POST'])
@login_required
def save():
    """
    Bookmark a translation.

    Request body:
    {
        "input_text": "I'm tired",
        "output_text": "I'm dead",
        "source_language": "standard_english",   // optional
        "target_language": "gen_z_english"       // optional
    }
    """
    data = request.get_json(silent=True) or {}
    input_text, output_text, source_language, target_language = _translation_fields(data)

    if not input_text or not output_text:
        return jsonify({
            'success': False,
            'error': 'Both input_text and output_text are required'
        }), 400

    try:
        saved = save_translation(current_user.id, input_text, output_text, source_language, target_language)
        return jsonify({
            'success': True,
            'data': saved.to_dict()
        }), 201
    except Exception as e:
        logger.error(f"Error saving translation: {str(e)}", exc_info=True)
        return jsonify({
            'success': False,
            'error': 'Failed to save translation'
        }), 500


@bp.route('/saved', methods=['GET'])
@login_required
def list_saved():
    try:
        saved = get_saved_translations(current_user.id)
        return jsonify({
            'success': True,
            'data': [s.to_dict() for s in saved],
            'count': len(saved)
        }), 200
    except Exception as e:
        logger.error(f"Error fetching saved translations: {str(e)}", exc_info=True)
        return jsonify({
            'success': False,
            'error': 'Failed to fetch saved translations'
        }), 500


@bp.route('/saved/<int:translation_id>', methods=['DELETE'])
@login_required
def delete_saved(translation_id):
    try:
        if not delete_saved_translation(current_user.id, translation_id):
            return jsonify({
                'success': False,
                'error': 'Saved translation not found'
            }), 404
        return jsonify({'success': True}), 200
    except Exception as e:
        logger.error(f"Error deleting saved translation {translation_id}: {str(e)}", exc_info=True)
        return jsonify({
            'success': False,
            'error': 'Failed to delete saved translation'
        }), 500


@bp.route('/history', methods=['POST'])
@login_required
def add_history():
    data = request.get_json(silent=True) or {}
    input_text, output_text, source_language, target_language = _translation_fields(data)

    if not input_text or not output_text:
        return jsonify({
            'success': False,
            'error': 'Both input_text and output_text are required'
        }), 400

    try:
        entry = save_to_history(current_user.id, input_text, output_text, source_language, target_language)
        return jsonify({
            'success': True,
            'data': entry.to_dict()
        }), 201
    except Exception as e:
        logger.error(f"Error saving to history: {str(e)}", exc_info=True)
        return jsonify({
            'success': False,
            'error': 'Failed to save to history'
        }), 500


@bp.route('/history', methods=['GET'])
@login_required
def list_history():
    """
    Query params:
        - limit: number of entries (default 50, max 200)
    """
    limit = request.args.get('limit', 50, type=int)
    limit = max(1, min(limit, 200))

    try:
        history = get_history_translations(current_user.id, limit)
        return jsonify({
            'success': True,
            'data': [h.to_dict() for h in history],
            'count': len(history)
        }), 200
    except Exception as e:
        logger.error(f"Error fetching history: {str(e)}", exc_info=True)
        return jsonify({
            'success': False,
            'error': 'Failed to fetch history translations'
        }), 500


@bp.route('/history/<int:translation_id>', methods=['DELETE'])
@login_required
def delete_history(translation_id):
    try:
        if not delete_history_translation(current_user.id, translation_id):
            return jsonify({
                'success': False,
                'error': 'History entry not found'
            }), 404
        return jsonify({'success': True}), 200
    except Exception as e:
        logger.error(f"Error deleting history entry {translation_id}: {str(e)}", exc_info=True)
        return jsonify({
            'success': False,
            'error': 'Failed to delete history translation'
        }), 500


@bp.route('/history', methods=['DELETE'])
@login_required
def clear_all_history():
    try:
        deleted = clear_history(current_user.id)
        return jsonify({
            'success': True,
            'deleted': deleted
        }), 200
    except Exception as e:
        logger.error(f"Error clearing history: {str(e)}", exc_info=True)
        return jsonify({
            'success': False,
            'error': 'Failed to clear history'
        }), 500
