#!/usr/bin/env python3
"""
Seed the reference tables: translation styles/languages and slang terms.
Existing rows are kept; only missing ones are inserted.

Usage: python -m scripts.seed_reference_data
"""

from app import create_app
from models import db
from models.language import Language
from models.slang_term import SlangTerm
from services.language_utils import seed_languages
from services.slang_freshness_service import seed_slang_terms


def seed_reference_data(config_name='development'):
    """Create missing tables and seed languages and slang terms"""
    app = create_app(config_name)

    with app.app_context():
        db.create_all()

        print("Seeding languages...")
        languages_inserted = seed_languages()
        for language in Language.query.order_by(Language.display_order).all():
            print(f"  [{language.display_order:2d}] {language.code:20s} - {language.name} ({language.kind})")

        print("\nSeeding slang terms...")
        terms_inserted = seed_slang_terms()
        for status in ('current', 'fading', 'deprecated'):
            print(f"  - {status}: {SlangTerm.query.filter_by(status=status).count()}")

        print(f"\n✓ Inserted {languages_inserted} languages and {terms_inserted} slang terms")
        return languages_inserted, terms_inserted


if __name__ == '__main__':
    seed_reference_data()
