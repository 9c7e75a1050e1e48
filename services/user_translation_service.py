"""
User Translation Service - saved (bookmarked) and history translations

Every read and delete is scoped to the owning user: a user can never see or
remove another user's rows, even with a valid row id.
"""

import logging
from typing import List, Optional

from models import db
from models.saved_translation import SavedTranslation
from models.history_translation import HistoryTranslation
from models.translation import Translation

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_LANGUAGE = 'standard_english'
DEFAULT_TARGET_LANGUAGE = 'gen_z_english'


def save_translation(
    user_id: str,
    input_text: str,
    output_text: str,
    source_language: Optional[str] = None,
    target_language: Optional[str] = None
) -> SavedTranslation:
    """
    Bookmark a translation for a user.

    Raises:
        ValueError: If input_text or output_text is empty
    """
    if not input_text or not output_text:
        raise ValueError("Both input and output text are required")

    saved = SavedTranslation(
        user_id=user_id,
        input_text=input_text,
        output_text=output_text,
        source_language=source_language or DEFAULT_SOURCE_LANGUAGE,
        target_language=target_language or DEFAULT_TARGET_LANGUAGE
    )
    try:
        db.session.add(saved)
        db.session.commit()
        logger.info(f"Saved translation {saved.id} for user {user_id}")
        return saved
    except Exception as e:
        db.session.rollback()
        logger.error(f"Failed to save translation for user {user_id}: {str(e)}", exc_info=True)
        raise


def get_saved_translations(user_id: str) -> List[SavedTranslation]:
    return SavedTranslation.query.filter_by(user_id=user_id).order_by(
        SavedTranslation.created_at.desc(), SavedTranslation.id.desc()
    ).all()


def delete_saved_translation(user_id: str, translation_id: int) -> bool:
    """Delete a saved translation owned by user_id. Returns False if no such row."""
    try:
        deleted = SavedTranslation.query.filter_by(id=translation_id, user_id=user_id).delete()
        db.session.commit()
        return deleted > 0
    except Exception as e:
        db.session.rollback()
        logger.error(f"Failed to delete saved translation {translation_id}: {str(e)}", exc_info=True)
        raise


def save_to_history(
    user_id: str,
    input_text: str,
    output_text: str,
    source_language: Optional[str] = None,
    target_language: Optional[str] = None
) -> HistoryTranslation:
    """
    Raises:
        ValueError: If input_text or output_text is empty
    """
    if not input_text or not output_text:
        raise ValueError("Both input and output text are required")

    entry = HistoryTranslation(
        user_id=user_id,
        input_text=input_text,
        output_text=output_text,
        source_language=source_language or DEFAULT_SOURCE_LANGUAGE,
        target_language=target_language or DEFAULT_TARGET_LANGUAGE
    )
    try:
        db.session.add(entry)
        db.session.commit()
        return entry
    except Exception as e:
        db.session.rollback()
        logger.error(f"Failed to save history for user {user_id}: {str(e)}", exc_info=True)
        raise


def get_history_translations(user_id: str, limit: int = 50) -> List[HistoryTranslation]:
    return HistoryTranslation.query.filter_by(user_id=user_id).order_by(
        HistoryTranslation.created_at.desc(), HistoryTranslation.id.desc()
    ).limit(limit).all()


def delete_history_translation(user_id: str, translation_id: int) -> bool:
    try:
        deleted = HistoryTranslation.query.filter_by(id=translation_id, user_id=user_id).delete()
        db.session.commit()
        return deleted > 0
    except Exception as e:
        db.session.rollback()
        logger.error(f"Failed to delete history entry {translation_id}: {str(e)}", exc_info=True)
        raise


def clear_history(user_id: str) -> int:
    """Delete all history for a user. Returns the number of rows removed."""
    try:
        deleted = HistoryTranslation.query.filter_by(user_id=user_id).delete()
        db.session.commit()
        logger.info(f"Cleared {deleted} history entries for user {user_id}")
        return deleted
    except Exception as e:
        db.session.rollback()
        logger.error(f"Failed to clear history for user {user_id}: {str(e)}", exc_info=True)
        raise


def get_recent_translations(limit: int = 5) -> List[Translation]:
    """Most recent entries from the anonymous translations log, newest first."""
    return Translation.query.order_by(
        Translation.created_at.desc(), Translation.id.desc()
    ).limit(limit).all()
