"""
Database Health Check Script
Verifies that the database is working correctly
"""

from app import create_app
from models import db
from models.user import User
from models.language import Language
from models.translation import Translation
from models.translation_cache import TranslationCache
from models.saved_translation import SavedTranslation
from models.history_translation import HistoryTranslation
from models.slang_term import SlangTerm
from sqlalchemy import inspect

EXPECTED_TABLES = [
    'users', 'languages', 'translations', 'saved_translations',
    'history_translations', 'translation_cache', 'slang_terms'
]


def check_database(config_name='development'):
    """Check if database is working correctly"""
    app = create_app(config_name)

    with app.app_context():
        try:
            print("=" * 60)
            print("DATABASE HEALTH CHECK")
            print("=" * 60)

            # Check if tables exist
            tables = inspect(db.engine).get_table_names()

            missing_tables = set(EXPECTED_TABLES) - set(tables)
            if missing_tables:
                print(f"\n❌ MISSING TABLES: {missing_tables}")
                return False

            print(f"\n✅ All {len(EXPECTED_TABLES)} expected tables exist")

            # Check record counts
            print("\n📊 Record Counts:")
            counts = {
                'Users': User.query.count(),
                'Languages': Language.query.count(),
                'Translations': Translation.query.count(),
                'Saved Translations': SavedTranslation.query.count(),
                'History Translations': HistoryTranslation.query.count(),
                'Cache Entries': TranslationCache.query.count(),
                'Slang Terms': SlangTerm.query.count(),
            }

            for name, count in counts.items():
                print(f"  - {name}: {count}")

            if counts['Languages'] == 0 or counts['Slang Terms'] == 0:
                print("\n⚠️  WARNING: Reference data missing!")
                print("   Run: python -m scripts.seed_reference_data")

            print("\n" + "=" * 60)
            print("✅ DATABASE IS HEALTHY!")
            print("=" * 60)
            return True

        except Exception as e:
            print("\n" + "=" * 60)
            print(f"❌ DATABASE ERROR: {e}")
            print("=" * 60)
            return False


if __name__ == '__main__':
    check_database()
