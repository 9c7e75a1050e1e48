from flask import Blueprint, jsonify, request
from models.slang_term import SLANG_STATUSES
from services.slang_freshness_service import (
    load_slang_terms,
    calculate_freshness_score,
    get_suggested_replacements,
)

bp = Blueprint('slang', __name__, url_prefix='/api/slang')


@bp.route('/terms', methods=['GET'])
def list_terms():
    """
    Slang reference table with freshness scores.

    Query params:
        - status: 'current', 'fading' or 'deprecated' (optional)
    """
    status = request.args.get('status')
    if status and status not in SLANG_STATUSES:
        return jsonify({
            'success': False,
            'error': f'Invalid status. Must be one of: {", ".join(SLANG_STATUSES)}'
        }), 400

    terms = load_slang_terms(status)
    data = [
        {
            'term': term['term'],
            'aliases': term.get('aliases') or [],
            'status': term['status'],
            'notes': term.get('notes'),
            'freshness_score': round(calculate_freshness_score(term), 3),
        }
        for term in terms
    ]

    return jsonify({
        'success': True,
        'data': data,
        'count': len(data)
    }), 200


@bp.route('/terms/<path:term>/replacements', methods=['GET'])
def replacements(term):
    """Current alternatives for a deprecated term."""
    return jsonify({
        'success': True,
        'term': term,
        'replacements': get_suggested_replacements(term)
    }), 200
