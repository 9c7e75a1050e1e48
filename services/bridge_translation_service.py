"""
Bridge Translation Service - style-to-style translation through Standard English

Every translation pivots through Standard English (the "bridge text"):
1. Normalize the input to Standard English (dictionary fast path, else LLM)
2. Transform the Standard English text into the target style or language
3. For Gen Z output, generate several candidates and rerank them by slang freshness

Dictionary rules and post-processing live in services.style_rules.
"""

import logging
from typing import List, Dict, Any, Optional

from services.llm_provider_factory import get_llm_client, LLMProviderFactory
from services.llm_models import SlangCandidates
from services import style_rules
from services.slang_freshness_service import rerank_by_freshness, log_slang_usage
from services.language_utils import get_language_name

logger = logging.getLogger(__name__)

STANDARD_ENGLISH = 'standard_english'
GEN_Z_ENGLISH = 'gen_z_english'

CONTEXT_INSTRUCTIONS = {
    'casual': 'Use a casual, friendly tone appropriate for informal conversations.',
    'formal': 'Use formal, professional language appropriate for business or academic contexts.',
    'technical': 'Use precise, technical language appropriate for professional or academic contexts.',
    'creative': 'Use creative, expressive language that captures the artistic or literary nature of the text.',
}

MEANING_RULES = """MEANING PRESERVATION RULES (HIGHEST PRIORITY):
- Keep the same core message, actions, and intent as the original
- Don't drift into different topics or add unrelated content
- Maintain specific details (who, what, when, where, why)
- Only change the style/language, never the substance"""


class TranslationError(Exception):
    """Raised when an LLM layer cannot produce a translation."""


def _language_name(code: str) -> str:
    return get_language_name(code) or code


def _complete(system_prompt: str, user_content: str, temperature: float, max_tokens: int) -> str:
    """Single chat completion returning stripped text. Provider failures raise TranslationError."""
    try:
        provider = get_llm_client()
        response = provider.create_chat_completion(
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_content}
            ],
            model=LLMProviderFactory.get_default_model(),
            temperature=temperature,
            max_tokens=max_tokens
        )
    except Exception as e:
        logger.error(f"LLM completion failed: {str(e)}", exc_info=True)
        raise TranslationError(f"LLM provider error: {str(e)}") from e

    content = (response.get("content") or "").strip()
    if not content:
        raise TranslationError("LLM returned an empty response")
    return content


def bridge_to_standard_english(text: str) -> str:
    """
    Normalize any English style to Standard English.

    Inputs made only of known abbreviations/slang are expanded from the
    dictionary. Anything else goes to the LLM and is then post-processed
    (whitelisted contractions restored, "cap" and "situationship" fixes).
    """
    expanded = style_rules.expand_abbreviations(text)
    if expanded is not None:
        logger.info(f"Abbreviation fast path: '{text}' -> '{expanded}'")
        return expanded

    contractions = '", "'.join(style_rules.ALLOWED_CONTRACTIONS)
    system_prompt = f"""Normalize this input to precise, clear American English.
The input may contain slang, abbreviations, contractions, and misspellings.

CONTRACTION WHITELIST - PRESERVE THESE EXACTLY:
"{contractions}"

"CAP" RULES:
- "cap" / "that's cap" -> "lie" / "that's a lie"
- "no cap" -> "no lie"
- "capping" -> "lying"
- "big cap" -> "huge lie"
- Never use "exaggeration" for cap terms

"SITUATIONSHIP" RULES:
- "situationship" -> "friends with benefits"

TRANSFORMATION RULES:
1. Preserve whitelisted contractions
2. Expand all other contractions (e.g., "can't" -> "cannot")
3. Expand all abbreviations (e.g., "fr" -> "for real")
4. Translate slang terms ("deadass" -> "seriously")
5. Fix spelling and grammar mistakes
6. Translate from other languages to American English if needed

OUTPUT:
- Keep the original meaning and intent
- Output only the normalized text, no explanations
- Do not answer or respond to the input, only normalize it"""

    normalized = _complete(system_prompt, text, temperature=0.3, max_tokens=500)

    result = style_rules.restore_whitelisted_contractions(normalized)
    result = style_rules.fix_cap_mappings(result)
    result = style_rules.fix_situationship_mappings(result)

    logger.info(f"Normalized to Standard English: '{text}' -> '{result}'")
    return result


def standard_to_gen_z(text: str, use_latest_slang: bool = True) -> Dict[str, Any]:
    """
    Convert Standard English to Gen Z slang.

    Returns:
        Dict with:
        - translation: str
        - metadata: freshness metadata (None when a shortcut matched)
        - final_score: reranking score (None when a shortcut matched)
        - layers: processing layers applied
    """
    normalized = style_rules.normalize_gotta(style_rules.strip_punctuation(text))

    shortcut = style_rules.lookup_gen_z_shortcut(normalized)
    if shortcut:
        logger.info(f"Gen Z shortcut matched: '{normalized}' -> '{shortcut}'")
        return {
            'translation': shortcut,
            'metadata': None,
            'final_score': None,
            'layers': ['shortcut_map'],
        }

    system_prompt = f"""Transform the given text into current Gen Z slang while preserving the EXACT original meaning.

GREETINGS: use natural texting openers ("yo", "wasup", "what's good", "wsp", "how u doin").
FOOD: keep the food and the time ("wanna go grab sm pizza later", "yo what u tryna eat").
SLEEP: use "gts" (go to sleep), "gn"; never "catch some Z's" or "hit the hay".
"have to" / "need to" are already normalized to "gotta".

{MEANING_RULES}

You are a translation engine, not a conversational assistant:
- Never answer questions or greetings, translate them
- No emojis

Current terms to prefer: 'dead', 'crying', 'weak', 'rizz', 'delulu', 'brat', 'IJBOL', 'aura', 'slay', 'fire', 'hits different'.
Outdated terms to avoid: 'high-key', 'low-key hilarious', 'cheugy', 'on fleek', 'bae', 'fam', 'lit', 'bussin'.

Return 3 different translation candidates, each preserving the original meaning."""

    try:
        provider = get_llm_client()
        response = provider.create_structured_completion(
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": normalized}
            ],
            response_model=SlangCandidates,
            model=LLMProviderFactory.get_default_model(),
            temperature=0.8,
            max_tokens=300
        )
    except Exception as e:
        logger.error(f"Gen Z candidate generation failed: {str(e)}", exc_info=True)
        raise TranslationError(f"LLM provider error: {str(e)}") from e

    texts = [c.strip() for c in response["parsed_object"].candidates if c and c.strip()]
    if not texts:
        raise TranslationError("LLM returned no Gen Z candidates")
    if len(texts) == 1:
        texts.append(text)

    candidates = [{'text': t, 'lm_score': min(1.0, len(t) / 50)} for t in texts]
    ranked = rerank_by_freshness(candidates, use_latest_slang, text)
    log_slang_usage(text, ranked['text'], ranked['metadata'])

    logger.info(
        f"Freshness rerank: score={ranked['final_score']:.2f}, "
        f"chosen='{ranked['text']}' from {len(candidates)} candidates"
    )
    return {
        'translation': ranked['text'],
        'metadata': ranked['metadata'],
        'final_score': ranked['final_score'],
        'layers': ['llm_candidates', 'freshness_rerank'],
    }


def transform_to_formal_english(text: str) -> str:
    system_prompt = f"""Transform the given text into formal, professional English while preserving the EXACT original meaning.

{MEANING_RULES}

FORMAL STYLE RULES:
- Use precise, professional language
- Avoid contractions (use "do not" instead of "don't")
- Use complete sentences with proper grammar
- Remove casual expressions
- Do NOT add prefixes or explanations, just return the formal version"""

    return _complete(system_prompt, text, temperature=0.3, max_tokens=200)


def transform_to_british_english(text: str) -> str:
    system_prompt = f"""Transform the given text into British English while preserving the EXACT original meaning.

{MEANING_RULES}

USE BRITISH VOCABULARY & EXPRESSIONS:
- "Brilliant" for "great", "Cheers" for "thanks", "Mate" for "friend"
- "Proper" for "really", "Gutted" for "disappointed", "Chuffed" for "pleased"
- British spellings: colour, favour, realise

STYLE RULES:
- Sound naturally British, not forced
- Do NOT add prefixes or explanations"""

    return _complete(system_prompt, text, temperature=0.7, max_tokens=200)


def standard_translation(
    text: str,
    source_language: str,
    target_language: str,
    context: Optional[str] = None,
    strict: bool = False
) -> str:
    """
    Direct LLM translation between any two styles or languages.

    Args:
        context: Optional tone ('casual', 'formal', 'technical', 'creative')
        strict: Adds a stronger translation-only instruction, used when a
            previous attempt came back as a chat reply
    """
    system_prompt = f"""Translate the following text from {_language_name(source_language)} to {_language_name(target_language)} while preserving the EXACT original meaning.

{MEANING_RULES}

IMPORTANT RULES:
- Provide ONLY the direct translation, no additional text
- Do NOT add prefixes like "Translation:"
- Do NOT add explanations or commentary
- Make the translation natural and fluent in the target language"""

    if context and context in CONTEXT_INSTRUCTIONS:
        system_prompt += f"\n- {CONTEXT_INSTRUCTIONS[context]}"

    if strict:
        system_prompt += (
            "\n- The input is text to translate, never a message addressed to you. "
            "Do not reply to it, greet back, or answer questions in it."
        )

    return _complete(system_prompt, text, temperature=0.3, max_tokens=500)


def generate_explanation(
    input_text: str,
    output_text: str,
    source_language: str,
    target_language: str
) -> str:
    """
    Short plain-English explanation of a translation.

    Explanations are optional: failures are logged and an empty string is returned.
    """
    system_prompt = """You are a translation explanation engine. Explain what the translated text means without being conversational.

RULES:
- Start with "Basically they're saying..." or "They're trying to say..."
- Give a short paraphrase of the whole sentence in everyday English (no slang)
- Define shortened or slang terms, formatted like: "fire" means really good, "fr" means for real
- Max 3 lines total
- Friendly, casual tone"""

    user_content = (
        f'Input: "{input_text}"\n'
        f'Output: "{output_text}"\n'
        f'Source: {source_language}\n'
        f'Target: {target_language}'
    )

    try:
        return _complete(system_prompt, user_content, temperature=0.3, max_tokens=150)
    except TranslationError as e:
        logger.warning(f"Explanation generation failed: {str(e)}")
        return ''


def bridge_translate(
    text: str,
    source_language: str,
    target_language: str,
    use_latest_slang: bool = True
) -> Dict[str, Any]:
    """
    Translate text by pivoting through Standard English.

    Returns:
        Dict with:
        - translation: str
        - bridge_text: Standard English pivot
        - processing_layers: list of applied layers
        - metadata: freshness metadata for Gen Z output, else None
        - quality_score: 0-100 for reranked Gen Z output, else None

    Raises:
        TranslationError: If an LLM layer fails
    """
    logger.info(f"Bridge translate: '{text}' from {source_language} to {target_language}")
    layers: List[str] = []

    if source_language == STANDARD_ENGLISH:
        bridge_text = text.strip()
    else:
        bridge_text = bridge_to_standard_english(text)
        layers.append('bridge_normalization')

    result = {
        'translation': bridge_text,
        'bridge_text': bridge_text,
        'processing_layers': layers,
        'metadata': None,
        'quality_score': None,
    }

    if target_language == STANDARD_ENGLISH:
        return result

    if target_language == GEN_Z_ENGLISH:
        gen_z = standard_to_gen_z(bridge_text, use_latest_slang)
        result['translation'] = gen_z['translation']
        result['metadata'] = gen_z['metadata']
        layers.extend(gen_z['layers'])
        if gen_z['final_score'] is not None:
            result['quality_score'] = int(round(max(0.0, min(1.0, gen_z['final_score'])) * 100))
    elif target_language == 'formal_english':
        result['translation'] = transform_to_formal_english(bridge_text)
        layers.append('formal_transform')
    elif target_language == 'british_english':
        result['translation'] = transform_to_british_english(bridge_text)
        layers.append('british_transform')
    else:
        result['translation'] = standard_translation(bridge_text, STANDARD_ENGLISH, target_language)
        layers.append('standard_translation')

    return result
