"""
Translation Service - orchestrates a single translation request

Flow:
1. Direct mappings answer known inputs immediately (never cached)
2. Cache lookup (skipped for cache_mode 'skip' and 'refresh' and for requests with a context)
3. On miss: bridge translation for English styles, direct LLM translation otherwise
4. Conversational replies are rejected (one strict retry, then failure)
5. Explanation + voice id, cache upsert, anonymous log row
"""

import logging
from typing import Dict, Any, Optional

from models import db
from models.translation import Translation
from services import style_rules
from services.bridge_translation_service import (
    bridge_translate,
    standard_translation,
    generate_explanation,
    TranslationError,
)
from services.translation_cache_service import (
    generate_cache_key,
    get_cached_translation,
    cache_translation,
    should_cache,
)
from services.voice_service import get_voice_id

logger = logging.getLogger(__name__)

CACHE_MODES = ('skip', 'refresh')

# Targets handled by pivoting through Standard English
BRIDGE_TARGETS = ('standard_english', 'gen_z_english', 'formal_english', 'british_english')


def _result(
    input_text: str,
    source_language: str,
    target_language: str,
    translation: str,
    explanation: str,
    metadata: Dict[str, Any]
) -> Dict[str, Any]:
    return {
        'success': True,
        'translation': translation,
        'explanation': explanation,
        'original_text': input_text,
        'source_language': source_language,
        'target_language': target_language,
        'metadata': metadata,
    }


def _failure(input_text: str, source_language: str, target_language: str, error: str) -> Dict[str, Any]:
    return {
        'success': False,
        'error': error,
        'original_text': input_text,
        'source_language': source_language,
        'target_language': target_language,
    }


def log_translation(input_text: str, output_text: str, source_language: str, target_language: str) -> Optional[Translation]:
    """Record a produced translation in the anonymous translations log."""
    try:
        entry = Translation(
            input_text=input_text,
            output_text=output_text,
            source_language=source_language,
            target_language=target_language
        )
        db.session.add(entry)
        db.session.commit()
        return entry
    except Exception as e:
        db.session.rollback()
        logger.error(f"Failed to log translation: {str(e)}", exc_info=True)
        return None


def _run_translation(
    input_text: str,
    source_language: str,
    target_language: str,
    context: Optional[str],
    use_latest_slang: bool
) -> Dict[str, Any]:
    if target_language in BRIDGE_TARGETS and not context:
        return bridge_translate(input_text, source_language, target_language, use_latest_slang)

    return {
        'translation': standard_translation(input_text, source_language, target_language, context),
        'bridge_text': None,
        'processing_layers': ['standard_translation'],
        'metadata': None,
        'quality_score': None,
    }


def translate(
    input_text: str,
    source_language: str,
    target_language: str,
    context: Optional[str] = None,
    use_latest_slang: bool = True,
    cache_mode: Optional[str] = None
) -> Dict[str, Any]:
    """
    Translate text between two styles/languages with caching.

    Args:
        input_text: Text to translate
        source_language: Source style code (e.g., 'gen_z_english')
        target_language: Target style code (e.g., 'standard_english')
        context: Optional tone for direct translation ('casual', 'formal', 'technical', 'creative');
            context requests bypass the cache
        use_latest_slang: Apply slang freshness reranking for Gen Z output
        cache_mode: None (normal), 'skip' (no lookup, no store) or 'refresh' (no lookup, overwrite)

    Returns:
        Dict with success, translation, explanation, original_text, source_language,
        target_language and metadata (cached, cache_key, hit_count, processing_layers,
        bridge_text, quality_score, voice_id and freshness fields). On failure:
        success False and error.
    """
    if cache_mode not in CACHE_MODES:
        cache_mode = None

    direct = style_rules.lookup_direct_mapping(input_text, source_language, target_language)
    if direct:
        logger.info(f"Direct mapping: '{input_text}' -> '{direct['translation']}'")
        return _result(input_text, source_language, target_language, direct['translation'], direct['explanation'], {
            'cached': False,
            'cache_key': None,
            'direct_mapping': True,
            'processing_layers': ['direct_mapping'],
            'voice_id': get_voice_id(target_language),
        })

    # Context requests take the tone-aware path, so they never share the
    # (text, source, target) row with the bridge output
    cacheable = should_cache(input_text) and not context
    cache_key = generate_cache_key(input_text, source_language, target_language) if cacheable else None

    if cache_mode is None and cacheable:
        cached = get_cached_translation(input_text, source_language, target_language)
        if cached:
            return _result(input_text, source_language, target_language, cached.output_text, cached.explanation, {
                'cached': True,
                'cache_key': cached.id,
                'hit_count': cached.hit_count,
                'processing_layers': list(cached.processing_layers or []),
                'bridge_text': cached.bridge_text,
                'quality_score': cached.quality_score,
                'voice_id': cached.voice_id,
            })

    logger.info(
        f"Translating '{input_text[:50]}' {source_language} -> {target_language}"
        f"{f' (cache={cache_mode})' if cache_mode else ''}"
    )

    try:
        result = _run_translation(input_text, source_language, target_language, context, use_latest_slang)
        translation = result['translation']

        # Shortcut map output is fixed text, not a model reply
        if 'shortcut_map' not in result['processing_layers'] and style_rules.is_conversational_response(translation):
            logger.warning(f"Conversational output for '{input_text}': '{translation}', retrying strictly")
            translation = standard_translation(input_text, source_language, target_language, context, strict=True)
            result['processing_layers'] = list(result['processing_layers']) + ['strict_retry']
            result['metadata'] = None
            result['quality_score'] = None
            if style_rules.is_conversational_response(translation):
                logger.error(f"Strict retry still conversational for '{input_text}': '{translation}'")
                return _failure(input_text, source_language, target_language,
                                "Translation produced a conversational reply instead of a translation")

    except TranslationError as e:
        logger.error(f"Translation failed for {source_language} -> {target_language}: {str(e)}", exc_info=True)
        return _failure(input_text, source_language, target_language, str(e))

    explanation = generate_explanation(input_text, translation, source_language, target_language)
    voice_id = get_voice_id(target_language)
    layers = list(result['processing_layers'])

    hit_count = None
    if cache_mode != 'skip' and cacheable:
        entry = cache_translation(
            input_text,
            source_language,
            target_language,
            translation,
            explanation=explanation,
            bridge_text=result['bridge_text'],
            quality_score=result['quality_score'],
            processing_layers=layers,
            voice_id=voice_id
        )
        if entry:
            hit_count = entry.hit_count

    log_translation(input_text, translation, source_language, target_language)

    metadata = {
        'cached': False,
        'cache_key': cache_key,
        'hit_count': hit_count,
        'processing_layers': layers,
        'bridge_text': result['bridge_text'],
        'quality_score': result['quality_score'],
        'voice_id': voice_id,
    }
    if result['metadata']:
        metadata.update(result['metadata'])

    return _result(input_text, source_language, target_language, translation, explanation, metadata)
