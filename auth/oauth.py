from flask import Blueprint, request, jsonify
from flask_login import login_user, logout_user, current_user, login_required
import logging
from models import db
from auth.utils import verify_identity_token, upsert_user, get_bearer_token
from services.email_service import email_service

# Set up logging
logger = logging.getLogger(__name__)

bp = Blueprint('auth', __name__, url_prefix='/api/auth')

EDITABLE_USER_FIELDS = ('first_name', 'last_name', 'profile_image_url')


def _send_signup_emails(user):
    """Welcome + team notification. Failures never fail the sign-up."""
    try:
        email_service.send_welcome_email(user.email, user.first_name)
        email_service.send_team_notification(user.email, user.first_name, user.last_name)
    except Exception as e:
        logger.warning(f'Failed to send signup emails to {user.email}: {str(e)}')


@bp.route('/sync', methods=['POST'])
def sync_user():
    """
    Sync the signed-in user from the identity provider.

    Accepts the ID token as JSON {"token": ...} or as a bearer Authorization
    header, verifies it, creates or updates the user and starts a session.
    """
    try:
        data = request.get_json(silent=True) or {}
        token = data.get('token') or get_bearer_token(request)

        if not token:
            return jsonify({
                'success': False,
                'error': 'No token provided'
            }), 400

        try:
            claims = verify_identity_token(token)
        except ValueError as e:
            logger.error(f'Invalid identity token: {str(e)}')
            return jsonify({
                'success': False,
                'error': 'Invalid credential token'
            }), 401

        user_id = claims.get('sub')
        email = claims.get('email')

        if not user_id or not email:
            logger.error('Incomplete user info from identity token')
            return jsonify({
                'success': False,
                'error': 'Incomplete user information'
            }), 400

        user, created = upsert_user(
            user_id,
            email,
            claims.get('given_name'),
            claims.get('family_name'),
            claims.get('picture')
        )

        if not user:
            return jsonify({
                'success': False,
                'error': 'Failed to create user account'
            }), 500

        login_user(user, remember=True)
        logger.info(f'User {email} synced ({"created" if created else "updated"})')

        if created:
            _send_signup_emails(user)

        return jsonify({
            'success': True,
            'created': created,
            'user': user.to_dict()
        }), 200

    except Exception as e:
        logger.exception(f'Exception during user sync: {str(e)}')
        return jsonify({
            'success': False,
            'error': 'An unexpected error occurred'
        }), 500


@bp.route('/me', methods=['GET'])
@login_required
def get_me():
    """Current authenticated user. 401 when anonymous."""
    return jsonify({
        'success': True,
        'authenticated': True,
        'user': current_user.to_dict()
    }), 200


@bp.route('/user', methods=['GET'])
@login_required
def get_user():
    return jsonify({
        'success': True,
        'user': current_user.to_dict()
    }), 200


@bp.route('/user', methods=['PATCH'])
@login_required
def update_user():
    """Update profile fields (first_name, last_name, profile_image_url)."""
    data = request.get_json(silent=True) or {}
    updates = {field: data[field] for field in EDITABLE_USER_FIELDS if field in data}

    if not updates:
        return jsonify({
            'success': False,
            'error': f'Provide at least one of: {", ".join(EDITABLE_USER_FIELDS)}'
        }), 400

    try:
        for field, value in updates.items():
            setattr(current_user, field, value)
        db.session.commit()

        logger.info(f'Updated profile for user {current_user.email}: {list(updates)}')
        return jsonify({
            'success': True,
            'user': current_user.to_dict()
        }), 200

    except Exception as e:
        db.session.rollback()
        logger.exception(f'Exception updating user {current_user.email}: {str(e)}')
        return jsonify({
            'success': False,
            'error': 'An unexpected error occurred'
        }), 500


@bp.route('/logout', methods=['POST'])
def logout():
    """Log out the current user (API endpoint for frontend)"""
    user_email = current_user.email if current_user.is_authenticated else 'anonymous'
    logout_user()
    logger.info(f'User {user_email} logged out successfully')

    return jsonify({
        'success': True,
        'message': 'Successfully logged out'
    }), 200
