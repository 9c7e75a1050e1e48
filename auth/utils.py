from models import db
from models.user import User
from flask import current_app
from google.oauth2 import id_token
from google.auth.transport import requests as google_requests
import logging

logger = logging.getLogger(__name__)


def verify_identity_token(token):
    """
    Verify an identity provider ID token.

    Args:
        token: The raw ID token (JWT) sent by the frontend

    Returns:
        dict of verified claims (sub, email, given_name, family_name, picture)

    Raises:
        ValueError: If the token is invalid, expired or issued for another audience
    """
    if not token:
        raise ValueError('No token provided')

    client_id = current_app.config.get('GOOGLE_CLIENT_ID')
    if not client_id:
        raise ValueError('GOOGLE_CLIENT_ID is not configured')

    return id_token.verify_oauth2_token(token, google_requests.Request(), client_id)


def upsert_user(user_id, email, first_name=None, last_name=None, profile_image_url=None):
    """
    Create or update a user from identity provider claims.

    Args:
        user_id: Provider subject identifier
        email: User's email address
        first_name: Given name (optional)
        last_name: Family name (optional)
        profile_image_url: Avatar URL (optional)

    Returns:
        (User, created) tuple, or (None, False) if the database operation fails
    """
    try:
        user = db.session.get(User, user_id)
        created = user is None

        if created:
            user = User(id=user_id, email=email)
            db.session.add(user)
        elif user.email != email:
            user.email = email

        if first_name is not None:
            user.first_name = first_name
        if last_name is not None:
            user.last_name = last_name
        if profile_image_url is not None:
            user.profile_image_url = profile_image_url

        db.session.commit()

        if created:
            logger.info(f'Created new user: {email}')
        return user, created

    except Exception as e:
        db.session.rollback()
        logger.error(f'Failed to create/update user {email}: {str(e)}')
        return None, False


def get_bearer_token(request):
    """Extract the token from an 'Authorization: Bearer <token>' header."""
    header = request.headers.get('Authorization', '')
    scheme, _, token = header.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return token.strip()


def load_user_from_request(request):
    """
    Resolve the user for a request carrying a bearer token.

    Authentication is optional: a missing or invalid token leaves the request
    anonymous instead of failing it.
    """
    token = get_bearer_token(request)
    if not token:
        return None

    try:
        claims = verify_identity_token(token)
    except ValueError as e:
        logger.warning(f'Ignoring invalid bearer token: {str(e)}')
        return None

    user_id = claims.get('sub')
    if not user_id:
        return None

    user = db.session.get(User, user_id)
    if user is None and claims.get('email'):
        user, _ = upsert_user(
            user_id,
            claims['email'],
            claims.get('given_name'),
            claims.get('family_name'),
            claims.get('picture')
        )
    return user
