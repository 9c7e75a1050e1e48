import logging
from flask import Blueprint, jsonify, request
from services.email_service import email_service

logger = logging.getLogger(__name__)

bp = Blueprint('contact', __name__, url_prefix='/api')

FEEDBACK_TYPES = ('feedback', 'idea')


@bp.route('/send-message', methods=['POST'])
def send_message():
    """
    Contact form.

    Request body: {"name": ..., "email": ..., "subject": ..., "message": ...}
    """
    data = request.get_json(silent=True) or {}
    fields = {field: (data.get(field) or '').strip() for field in ('name', 'email', 'subject', 'message')}

    if not all(fields.values()):
        return jsonify({
            'success': False,
            'error': 'All fields are required'
        }), 400

    if not email_service.send_contact_email(**fields):
        return jsonify({
            'success': False,
            'error': 'Failed to send message'
        }), 500

    return jsonify({
        'success': True,
        'message': 'Message sent successfully'
    }), 200


@bp.route('/feedback', methods=['POST'])
def feedback():
    """
    Feedback or idea submission, emailed to the team.

    Request body: {"message": ..., "type": "feedback" | "idea"}
    """
    data = request.get_json(silent=True) or {}
    message = (data.get('message') or '').strip()
    feedback_type = data.get('type', 'feedback')

    if not message:
        return jsonify({
            'success': False,
            'error': 'Message is required'
        }), 400

    if feedback_type not in FEEDBACK_TYPES:
        feedback_type = 'feedback'

    if not email_service.send_feedback_email(message, feedback_type, request.headers.get('User-Agent')):
        return jsonify({
            'success': False,
            'error': 'Failed to submit feedback'
        }), 500

    return jsonify({
        'success': True,
        'message': 'Feedback submitted successfully! Thanks for helping us improve Slango.'
    }), 200
