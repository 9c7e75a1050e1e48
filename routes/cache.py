import logging
from flask import Blueprint, jsonify, request
from services.translation_cache_service import (
    invalidate_cache_by_key,
    invalidate_cache_entry,
    get_cache_stats,
)

logger = logging.getLogger(__name__)

bp = Blueprint('cache', __name__, url_prefix='/api/cache')


@bp.route('/invalidate', methods=['POST'])
def invalidate():
    """
    Remove one cache entry.

    Request body (either form):
    {"key": "<sha256 hex>"}
    {"source_language": "gen_z_english", "target_language": "standard_english", "input_text": "no cap"}
    """
    data = request.get_json(silent=True) or {}
    key = data.get('key')
    source_language = data.get('source_language')
    target_language = data.get('target_language')
    input_text = data.get('input_text')

    try:
        if key:
            removed = invalidate_cache_by_key(key)
        elif source_language and target_language and input_text:
            removed = invalidate_cache_entry(input_text, source_language, target_language)
        else:
            return jsonify({
                'success': False,
                'error': "Provide either 'key' or 'source_language', 'target_language' and 'input_text'"
            }), 400
    except Exception as e:
        logger.error(f"Cache invalidation error: {str(e)}", exc_info=True)
        return jsonify({
            'success': False,
            'error': 'Failed to invalidate cache'
        }), 500

    return jsonify({
        'success': removed,
        'message': 'Cache entry invalidated' if removed else 'Cache entry not found'
    }), 200


@bp.route('/stats', methods=['GET'])
def stats():
    try:
        return jsonify({
            'success': True,
            'data': get_cache_stats()
        }), 200
    except Exception as e:
        logger.error(f"Cache stats error: {str(e)}", exc_info=True)
        return jsonify({
            'success': False,
            'error': 'Failed to get cache stats'
        }), 500
