from flask import Blueprint, jsonify, request
from models.language import LANGUAGE_KINDS
from services.language_utils import get_languages

bp = Blueprint('api', __name__, url_prefix='/api')


@bp.route('/languages', methods=['GET'])
def list_languages():
    """
    Get all supported styles and languages ordered by display_order.

    Query params:
        - kind: 'english_variant' or 'foreign' (optional)

    Returns:
        JSON array of language objects with code, name, kind, display_order
    """
    kind = request.args.get('kind')
    if kind and kind not in LANGUAGE_KINDS:
        return jsonify({
            'success': False,
            'error': f'Invalid kind. Must be one of: {", ".join(LANGUAGE_KINDS)}'
        }), 400

    try:
        languages_data = [lang.to_dict() for lang in get_languages(kind)]

        return jsonify({
            'success': True,
            'data': languages_data,
            'count': len(languages_data)
        }), 200

    except Exception as e:
        return jsonify({
            'success': False,
            'error': str(e)
        }), 500
