"""
Tests for model validation, serialization and relationships
"""

import pytest
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import create_app
from models import db
from models.user import User
from models.language import Language
from models.slang_term import SlangTerm
from models.saved_translation import SavedTranslation
from models.translation_cache import TranslationCache
from services.language_utils import (
    DEFAULT_LANGUAGES,
    seed_languages,
    get_language_name,
    get_all_code_mappings,
    get_languages,
    is_supported_language,
)


@pytest.fixture
def app():
    """Create and configure a test app"""
    app = create_app('testing')

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


class TestUser:
    def test_invalid_email_rejected(self, app):
        with pytest.raises(ValueError, match='Invalid email format'):
            User(id='sub-1', email='not-an-email')

    def test_missing_email_rejected(self, app):
        with pytest.raises(ValueError, match='Email is required'):
            User(id='sub-1', email='')

    def test_to_dict(self, app):
        user = User(id='sub-1', email='test@example.com', first_name='Test')
        db.session.add(user)
        db.session.commit()

        data = user.to_dict()
        assert data['id'] == 'sub-1'
        assert data['first_name'] == 'Test'
        assert data['created_at'] is not None

    def test_saved_translations_relationship(self, app):
        user = User(id='sub-1', email='test@example.com')
        db.session.add(user)
        db.session.add(SavedTranslation(user_id='sub-1', input_text='hello', output_text='yo'))
        db.session.commit()

        assert user.saved_translations.count() == 1
        assert user.saved_translations.first().user.email == 'test@example.com'


def test_language_kind_validated(app):
    with pytest.raises(ValueError):
        Language(code='klingon', name='Klingon', kind='fictional')


def test_slang_term_validation(app):
    with pytest.raises(ValueError):
        SlangTerm(term='yeet', status='ancient')
    with pytest.raises(ValueError):
        SlangTerm(term='yeet', aliases='yeeted')

    term = SlangTerm(term='yeet', aliases=None, status='fading')
    assert term.aliases == []


def test_translation_cache_defaults(app):
    entry = TranslationCache(
        id='a' * 64,
        input_text='no cap',
        source_language='gen_z_english',
        target_language='standard_english',
        output_text='No lie'
    )
    db.session.add(entry)
    db.session.commit()

    assert entry.hit_count == 1
    assert entry.explanation == ''
    assert entry.processing_layers == []
    assert entry.to_dict()['last_accessed_at'] is not None


class TestLanguageRegistry:
    def test_seed_is_idempotent(self, app):
        assert seed_languages() == len(DEFAULT_LANGUAGES)
        assert seed_languages() == 0
        assert Language.query.count() == len(DEFAULT_LANGUAGES)

    def test_lookups(self, app):
        seed_languages()

        assert get_language_name('gen_z_english') == 'Gen Z English'
        assert get_language_name('klingon') is None
        assert get_all_code_mappings()['spanish'] == 'Spanish'

    def test_name_falls_back_to_builtin_registry(self, app):
        assert get_language_name('british_english') == 'British English'

        db.session.add(Language(code='british_english', name='UK English'))
        db.session.commit()

        assert get_language_name('british_english') == 'UK English'

    def test_name_outside_app_context(self):
        assert get_language_name('french') == 'French'

    def test_ordered_and_filtered_by_kind(self, app):
        seed_languages()

        codes = [lang.code for lang in get_languages()]
        assert codes[0] == 'standard_english'
        assert [lang.code for lang in get_languages('foreign')] == ['spanish', 'french']

    def test_supported_language_uses_builtin_codes_when_empty(self, app):
        assert is_supported_language('gen_z_english') is True
        assert is_supported_language('klingon') is False
        assert is_supported_language('') is False

    def test_supported_language_uses_table_when_seeded(self, app):
        db.session.add(Language(code='pirate_english', name='Pirate English'))
        db.session.commit()

        assert is_supported_language('pirate_english') is True
        assert is_supported_language('gen_z_english') is False
