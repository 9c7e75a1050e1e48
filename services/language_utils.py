"""Language utility functions for the translation style registry"""
import logging
from typing import Optional, Dict, List

from models import db
from models.language import Language

logger = logging.getLogger(__name__)

# Registry seed: (code, name, kind, display_order)
DEFAULT_LANGUAGES = [
    ('standard_english', 'Standard English', 'english_variant', 1),
    ('gen_z_english', 'Gen Z English', 'english_variant', 2),
    ('millennial_english', 'Millennial English', 'english_variant', 3),
    ('british_english', 'British English', 'english_variant', 4),
    ('formal_english', 'Formal English', 'english_variant', 5),
    ('spanish', 'Spanish', 'foreign', 10),
    ('french', 'French', 'foreign', 11),
]


BUILTIN_LANGUAGE_NAMES = {code: name for code, name, _, _ in DEFAULT_LANGUAGES}


def get_language_name(language_code: str) -> Optional[str]:
    """
    Convert a style code to its display name.

    The registry table wins; built-in names cover codes that are not seeded
    and calls made outside an application context.

    Args:
        language_code: Style code (e.g., "gen_z_english", "spanish")

    Returns:
        Display name (e.g., "Gen Z English"), or None if not found
    """
    try:
        language = db.session.get(Language, language_code)
    except RuntimeError:
        language = None
    if language:
        return language.name
    return BUILTIN_LANGUAGE_NAMES.get(language_code)


def get_all_code_mappings() -> Dict[str, str]:
    """
    Get a dictionary mapping all style codes to their names.

    Returns:
        e.g., {"gen_z_english": "Gen Z English", "spanish": "Spanish"}
    """
    return {lang.code: lang.name for lang in Language.query.all()}


def get_languages(kind: Optional[str] = None) -> List[Language]:
    """All registered languages ordered by display_order, optionally filtered by kind."""
    query = Language.query
    if kind:
        query = query.filter_by(kind=kind)
    return query.order_by(Language.display_order, Language.name).all()


def is_supported_language(language_code: str) -> bool:
    """Check if a style code exists in the registry (built-in codes when the table is empty)."""
    if not language_code:
        return False
    if Language.query.count() == 0:
        return language_code in {code for code, _, _, _ in DEFAULT_LANGUAGES}
    return db.session.get(Language, language_code) is not None


def seed_languages() -> int:
    """Insert missing registry rows. Returns the number inserted."""
    inserted = 0
    try:
        for code, name, kind, display_order in DEFAULT_LANGUAGES:
            if db.session.get(Language, code) is None:
                db.session.add(Language(code=code, name=name, kind=kind, display_order=display_order))
                inserted += 1
        db.session.commit()
        logger.info(f"Seeded {inserted} languages")
        return inserted
    except Exception as e:
        db.session.rollback()
        logger.error(f"Failed to seed languages: {str(e)}", exc_info=True)
        raise
