"""
Translation Cache Service - content-addressed memoization of LLM translations

Each row is keyed by SHA-256("{source}|{target}|{normalized input}"), so the
same text translated between the same pair of styles always lands on the same
row. Hits bump hit_count and last_accessed_at with a single SQL-side UPDATE.
Writes are upserts, so two requests racing on the same key leave one row.

There is no eviction and no TTL: entries live until explicitly invalidated.
"""

import hashlib
import logging
import re
from datetime import datetime, timezone
from typing import Dict, Any, List, Optional

from flask import current_app
from sqlalchemy import func
from sqlalchemy.dialects import postgresql, sqlite

from models import db
from models.translation_cache import TranslationCache

logger = logging.getLogger(__name__)

DEFAULT_MAX_INPUT = 5000

# Columns replaced when an existing key is written again (hit_count is kept)
PAYLOAD_COLUMNS = (
    'input_text',
    'output_text',
    'explanation',
    'bridge_text',
    'quality_score',
    'processing_layers',
    'voice_id',
    'last_accessed_at',
)

_WHITESPACE = re.compile(r'\s+')


def normalize_cache_text(text: str) -> str:
    """Trim and collapse whitespace runs to a single space. Case is preserved."""
    return _WHITESPACE.sub(' ', text or '').strip()


def generate_cache_key(text: str, source_language: str, target_language: str) -> str:
    raw = f"{source_language}|{target_language}|{normalize_cache_text(text)}"
    return hashlib.sha256(raw.encode('utf-8')).hexdigest()


def _max_input() -> int:
    try:
        return current_app.config.get('TRANSLATION_CACHE_MAX_INPUT', DEFAULT_MAX_INPUT)
    except RuntimeError:
        return DEFAULT_MAX_INPUT


def should_cache(text: str) -> bool:
    length = len(normalize_cache_text(text))
    return 0 < length <= _max_input()


def get_cached_translation(
    text: str,
    source_language: str,
    target_language: str
) -> Optional[TranslationCache]:
    """
    Look up a cached translation and record the hit.

    Returns:
        The TranslationCache row (with the incremented hit_count) or None on miss
    """
    if not should_cache(text):
        return None

    key = generate_cache_key(text, source_language, target_language)
    try:
        updated = TranslationCache.query.filter_by(id=key).update(
            {
                TranslationCache.hit_count: TranslationCache.hit_count + 1,
                TranslationCache.last_accessed_at: datetime.now(timezone.utc),
            },
            synchronize_session=False
        )
        db.session.commit()

        if not updated:
            logger.info(f"Cache MISS: {key[:12]} ({source_language} -> {target_language})")
            return None

        entry = db.session.get(TranslationCache, key)
        logger.info(f"Cache HIT: {key[:12]} ({source_language} -> {target_language}), hits={entry.hit_count}")
        return entry

    except Exception as e:
        db.session.rollback()
        logger.error(f"Cache lookup failed for {key[:12]}: {str(e)}", exc_info=True)
        return None


def cache_translation(
    text: str,
    source_language: str,
    target_language: str,
    output_text: str,
    explanation: str = '',
    bridge_text: Optional[str] = None,
    quality_score: Optional[int] = None,
    processing_layers: Optional[List[str]] = None,
    voice_id: Optional[str] = None
) -> Optional[TranslationCache]:
    """
    Insert or refresh a cache entry.

    A new entry starts with hit_count = 1. Writing an existing key replaces the
    payload and last_accessed_at but keeps the accumulated hit_count.

    Returns:
        The stored row, or None if the input is uncacheable, the output is
        empty, or the write failed
    """
    if not output_text or not output_text.strip():
        logger.warning("Refusing to cache empty translation output")
        return None
    if not should_cache(text):
        logger.info(f"Input not cacheable (length {len(text)})")
        return None

    key = generate_cache_key(text, source_language, target_language)
    now = datetime.now(timezone.utc)
    values = {
        'id': key,
        'input_text': normalize_cache_text(text),
        'source_language': source_language,
        'target_language': target_language,
        'output_text': output_text,
        'explanation': explanation or '',
        'bridge_text': bridge_text,
        'quality_score': quality_score,
        'processing_layers': list(processing_layers or []),
        'voice_id': voice_id,
        'hit_count': 1,
        'last_accessed_at': now,
        'created_at': now,
    }

    try:
        dialect = db.session.get_bind().dialect.name
        if dialect in ('postgresql', 'sqlite'):
            insert = postgresql.insert if dialect == 'postgresql' else sqlite.insert
            stmt = insert(TranslationCache.__table__).values(**values)
            stmt = stmt.on_conflict_do_update(
                index_elements=[TranslationCache.__table__.c.id],
                set_={column: stmt.excluded[column] for column in PAYLOAD_COLUMNS}
            )
            db.session.execute(stmt)
        else:
            entry = db.session.get(TranslationCache, key)
            if entry is None:
                db.session.add(TranslationCache(**values))
            else:
                for column in PAYLOAD_COLUMNS:
                    setattr(entry, column, values[column])

        db.session.commit()
        logger.info(f"Cached translation {key[:12]} ({source_language} -> {target_language})")

        # The upsert bypasses the identity map, so reload the row
        db.session.expire_all()
        return db.session.get(TranslationCache, key)

    except Exception as e:
        db.session.rollback()
        logger.error(f"Failed to cache translation {key[:12]}: {str(e)}", exc_info=True)
        return None


def invalidate_cache_by_key(key: str) -> bool:
    try:
        deleted = TranslationCache.query.filter_by(id=key).delete(synchronize_session=False)
        db.session.commit()
        logger.info(f"Cache invalidate {key[:12]}: {'removed' if deleted else 'not found'}")
        return deleted > 0
    except Exception as e:
        db.session.rollback()
        logger.error(f"Cache invalidation failed for {key[:12]}: {str(e)}", exc_info=True)
        raise


def invalidate_cache_entry(text: str, source_language: str, target_language: str) -> bool:
    return invalidate_cache_by_key(generate_cache_key(text, source_language, target_language))


def get_cache_stats() -> Dict[str, Any]:
    """
    Aggregate cache statistics.

    Returns:
        Dict with total_entries, total_hits, entries_by_target (language -> count)
        and top_entries (five most-hit rows)
    """
    total_entries = db.session.query(func.count(TranslationCache.id)).scalar() or 0
    total_hits = db.session.query(func.coalesce(func.sum(TranslationCache.hit_count), 0)).scalar() or 0

    by_target = db.session.query(
        TranslationCache.target_language,
        func.count(TranslationCache.id)
    ).group_by(TranslationCache.target_language).all()

    top_entries = TranslationCache.query.order_by(
        TranslationCache.hit_count.desc(),
        TranslationCache.last_accessed_at.desc()
    ).limit(5).all()

    return {
        'total_entries': total_entries,
        'total_hits': int(total_hits),
        'entries_by_target': {language: count for language, count in by_target},
        'top_entries': [
            {
                'id': entry.id,
                'input_text': entry.input_text,
                'source_language': entry.source_language,
                'target_language': entry.target_language,
                'hit_count': entry.hit_count,
            }
            for entry in top_entries
        ],
    }
