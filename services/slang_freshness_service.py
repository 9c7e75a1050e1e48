"""
Slang Freshness Service - keeps Gen Z output on current slang

Each slang term carries popularity signals (last seen, 30-day source count,
30-day trend hits, age). Candidates produced by the LLM are reranked so that
current terms win and deprecated terms are filtered out whenever an
alternative exists.

Terms live in the slang_terms table. When the table is empty the curated
seed list below is used instead.
"""

import logging
import re
from datetime import datetime, timezone
from typing import List, Dict, Any, Optional

from models import db
from models.slang_term import SlangTerm

logger = logging.getLogger(__name__)

# Curated launch data
SEED_SLANG_TERMS = [
    # Current
    {'term': 'rizz', 'aliases': ['rizzed up', 'rizzing'], 'status': 'current', 'last_seen': '2025-08-13', 'source_count_30d': 1820, 'trend_hits_30d': 950, 'age_months': 8, 'notes': 'flirting/charisma'},
    {'term': 'delulu', 'aliases': ['delusion'], 'status': 'current', 'last_seen': '2025-08-13', 'source_count_30d': 1200, 'trend_hits_30d': 780, 'age_months': 6, 'notes': 'delusional'},
    {'term': 'brat', 'aliases': ['brat summer'], 'status': 'current', 'last_seen': '2025-08-13', 'source_count_30d': 980, 'trend_hits_30d': 650, 'age_months': 4, 'notes': 'confident rebellious energy'},
    {'term': 'gyatt', 'aliases': ['gyat'], 'status': 'current', 'last_seen': '2025-08-13', 'source_count_30d': 890, 'trend_hits_30d': 520, 'age_months': 7, 'notes': 'expression of surprise/admiration'},
    {'term': 'IJBOL', 'aliases': ['ijbol'], 'status': 'current', 'last_seen': '2025-08-13', 'source_count_30d': 750, 'trend_hits_30d': 480, 'age_months': 5, 'notes': 'I just burst out laughing'},
    {'term': 'mog', 'aliases': ['mogging'], 'status': 'current', 'last_seen': '2025-08-13', 'source_count_30d': 680, 'trend_hits_30d': 390, 'age_months': 9, 'notes': 'dominate/outshine'},
    {'term': 'mid', 'aliases': [], 'status': 'current', 'last_seen': '2025-08-13', 'source_count_30d': 1100, 'trend_hits_30d': 620, 'age_months': 12, 'notes': 'mediocre/average'},
    {'term': 'let him cook', 'aliases': ['let them cook'], 'status': 'current', 'last_seen': '2025-08-13', 'source_count_30d': 850, 'trend_hits_30d': 450, 'age_months': 8, 'notes': 'let them do their thing'},
    {'term': 'dead', 'aliases': ['ded'], 'status': 'current', 'last_seen': '2025-08-13', 'source_count_30d': 1300, 'trend_hits_30d': 780, 'age_months': 15, 'notes': 'extremely funny'},
    {'term': "it's giving", 'aliases': ['giving'], 'status': 'current', 'last_seen': '2025-08-13', 'source_count_30d': 920, 'trend_hits_30d': 580, 'age_months': 10, 'notes': "it's giving off vibes of"},
    {'term': 'aura', 'aliases': [], 'status': 'current', 'last_seen': '2025-08-13', 'source_count_30d': 1400, 'trend_hits_30d': 820, 'age_months': 6, 'notes': 'presence/energy'},
    {'term': 'npc', 'aliases': [], 'status': 'current', 'last_seen': '2025-08-13', 'source_count_30d': 760, 'trend_hits_30d': 420, 'age_months': 11, 'notes': 'someone acting without personality'},
    {'term': 'slay', 'aliases': ['slayed'], 'status': 'current', 'last_seen': '2025-08-13', 'source_count_30d': 950, 'trend_hits_30d': 510, 'age_months': 18, 'notes': 'did something amazing'},
    {'term': 'no cap', 'aliases': [], 'status': 'current', 'last_seen': '2025-08-13', 'source_count_30d': 1150, 'trend_hits_30d': 670, 'age_months': 20, 'notes': 'no lie/for real'},
    {'term': 'periodt', 'aliases': [], 'status': 'current', 'last_seen': '2025-08-13', 'source_count_30d': 590, 'trend_hits_30d': 320, 'age_months': 24, 'notes': 'end of discussion'},
    {'term': 'bet', 'aliases': [], 'status': 'current', 'last_seen': '2025-08-13', 'source_count_30d': 1200, 'trend_hits_30d': 690, 'age_months': 30, 'notes': 'agreed/okay'},

    # Fading
    {'term': 'sus', 'aliases': [], 'status': 'fading', 'last_seen': '2025-08-10', 'source_count_30d': 420, 'trend_hits_30d': 180, 'age_months': 36, 'notes': 'suspicious/questionable'},
    {'term': 'simp', 'aliases': ['simping'], 'status': 'fading', 'last_seen': '2025-08-08', 'source_count_30d': 350, 'trend_hits_30d': 150, 'age_months': 42, 'notes': 'overly devoted'},

    # Deprecated
    {'term': 'high-key', 'aliases': ['highkey'], 'status': 'deprecated', 'last_seen': '2025-07-20', 'source_count_30d': 85, 'trend_hits_30d': 15, 'age_months': 48, 'notes': 'obviously/really (outdated)'},
    {'term': 'low-key hilarious', 'aliases': ['lowkey hilarious'], 'status': 'deprecated', 'last_seen': '2025-07-15', 'source_count_30d': 42, 'trend_hits_30d': 8, 'age_months': 48, 'notes': 'somewhat funny (outdated phrasing)'},
    {'term': 'cheugy', 'aliases': [], 'status': 'deprecated', 'last_seen': '2025-06-30', 'source_count_30d': 28, 'trend_hits_30d': 5, 'age_months': 48, 'notes': 'outdated/trying too hard (unless ironic)'},
    {'term': 'on fleek', 'aliases': [], 'status': 'deprecated', 'last_seen': '2025-06-15', 'source_count_30d': 15, 'trend_hits_30d': 2, 'age_months': 96, 'notes': 'perfect/on point (very outdated)'},
    {'term': 'bae', 'aliases': [], 'status': 'deprecated', 'last_seen': '2025-05-20', 'source_count_30d': 32, 'trend_hits_30d': 6, 'age_months': 84, 'notes': 'romantic partner (outdated when non-ironic)'},
    {'term': 'fam', 'aliases': [], 'status': 'deprecated', 'last_seen': '2025-05-10', 'source_count_30d': 45, 'trend_hits_30d': 12, 'age_months': 72, 'notes': 'friends/family (overused, outdated)'},
    {'term': 'lit', 'aliases': [], 'status': 'deprecated', 'last_seen': '2025-04-25', 'source_count_30d': 38, 'trend_hits_30d': 8, 'age_months': 60, 'notes': 'exciting/awesome (outdated)'},
    {'term': 'woke', 'aliases': [], 'status': 'deprecated', 'last_seen': '2025-04-10', 'source_count_30d': 22, 'trend_hits_30d': 4, 'age_months': 72, 'notes': 'socially aware (now political/outdated in slang)'},
    {'term': "it's giving comedy", 'aliases': ['its giving comedy'], 'status': 'deprecated', 'last_seen': '2025-04-01', 'source_count_30d': 5, 'trend_hits_30d': 1, 'age_months': 6, 'notes': 'unnatural phrase - use humor terms instead'},
    {'term': 'bussin', 'aliases': [], 'status': 'deprecated', 'last_seen': '2025-03-15', 'source_count_30d': 28, 'trend_hits_30d': 8, 'age_months': 24, 'notes': 'overused, becoming outdated'},
]

FRESHNESS_WEIGHTS = {
    'last_seen': 0.3,
    'source_count': 0.25,
    'trend_hits': 0.25,
    'age_penalty': 0.2,
}

# alpha: boost per current term, beta: penalty per deprecated term
RERANK_ALPHA = 0.4
RERANK_BETA = 0.8

ITS_GIVING_WRONG_CONTEXT_PENALTY = 2.0
ITS_GIVING_VIBE_BOOST = 0.3
ITS_GIVING_COMEDY_PENALTY = 3.0
HUMOR_TERM_BOOST = 0.2

CONTEXT_KEYWORDS = {
    'humor': ('funny', 'hilarious', 'joke', 'laugh', 'comedy'),
    'vibe': ('outfit', 'look', 'style', 'setup', 'energy', 'vibe', 'aesthetic', 'main character', 'luxury'),
    'emotion': ('tired', 'excited', 'happy', 'sad', 'angry', 'feeling'),
}

HUMOR_SLANG = ('dead', 'crying', 'weak', 'killed me', '💀')

REPLACEMENTS = {
    'high-key': ['honestly', 'fr', 'no cap', 'dead'],
    'low-key hilarious': ['dead', 'IJBOL', "it's sending me"],
    'cheugy': ['mid', 'npc behavior'],
    'on fleek': ['slay', "it's giving", 'periodt'],
    'bae': ['my person', 'bestie'],
    'lit': ['fire', "it's giving", 'slay'],
    'fam': ['bestie', 'gang'],
    'woke': ['aware', 'conscious'],
}


def _as_utc(value) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def calculate_freshness_score(term: Dict[str, Any], now: Optional[datetime] = None) -> float:
    """
    Score how fresh a slang term is, from 0 to 1.

    Last-seen decays linearly over 30 days, source count is normalized against
    1000, trend hits against 500, and age is a penalty that saturates at 5 years.
    """
    now = now or datetime.now(timezone.utc)

    last_seen = _as_utc(term.get('last_seen'))
    if last_seen is None:
        last_seen_score = 0.0
    else:
        days_since = max(0.0, (now - last_seen).total_seconds() / 86400)
        last_seen_score = max(0.0, 1 - days_since / 30)

    source_score = min(1.0, (term.get('source_count_30d') or 0) / 1000)
    trend_score = min(1.0, (term.get('trend_hits_30d') or 0) / 500)
    age_penalty = min(1.0, (term.get('age_months') or 0) / 60)

    score = (
        FRESHNESS_WEIGHTS['last_seen'] * last_seen_score
        + FRESHNESS_WEIGHTS['source_count'] * source_score
        + FRESHNESS_WEIGHTS['trend_hits'] * trend_score
        - FRESHNESS_WEIGHTS['age_penalty'] * age_penalty
    )
    return max(0.0, min(1.0, score))


def _contains_phrase(text: str, phrase: str) -> bool:
    return re.search(rf'(?<!\w){re.escape(phrase.lower())}(?!\w)', text) is not None


def find_slang_terms_in_text(text: str, terms: Optional[List[Dict[str, Any]]] = None) -> List[Dict[str, Any]]:
    """Return the terms whose name or one of its aliases appears as a whole phrase in text."""
    if terms is None:
        terms = load_slang_terms()

    lower_text = text.lower()
    matches = []
    for term in terms:
        names = [term['term']] + list(term.get('aliases') or [])
        if any(_contains_phrase(lower_text, name) for name in names):
            matches.append(term)
    return matches


def detect_context_type(input_text: str) -> str:
    """Classify input as 'humor', 'vibe' or 'emotion', falling back to 'status'."""
    lower_input = input_text.lower().strip()
    for context_type in ('humor', 'vibe', 'emotion'):
        if any(keyword in lower_input for keyword in CONTEXT_KEYWORDS[context_type]):
            return context_type
    return 'status'


def rerank_by_freshness(
    candidates: List[Dict[str, Any]],
    use_latest_slang: bool = True,
    input_text: str = '',
    terms: Optional[List[Dict[str, Any]]] = None
) -> Dict[str, Any]:
    """
    Pick the best candidate translation by LLM score adjusted for slang freshness.

    Args:
        candidates: List of {'text': str, 'lm_score': float}
        use_latest_slang: When False the first candidate wins unchanged
        input_text: Original input, used to detect the context type
        terms: Slang terms to score against (loaded from the database if omitted)

    Returns:
        Dict with 'text', 'final_score' and 'metadata'
    """
    if not use_latest_slang or not candidates:
        first = candidates[0] if candidates else {}
        return {
            'text': first.get('text', ''),
            'final_score': first.get('lm_score', 0),
            'metadata': {'slang_mode': 'disabled', 'blocked_terms': []}
        }

    if terms is None:
        terms = load_slang_terms()

    context_type = detect_context_type(input_text)
    logger.debug(f"Context detected: {context_type} for input: '{input_text}'")

    scored = []
    for candidate in candidates:
        candidate_text = candidate['text'].lower()
        found_terms = find_slang_terms_in_text(candidate['text'], terms)

        freshness_boost = 0.0
        deprecated_penalty = 0.0
        context_penalty = 0.0
        blocked_terms = []

        if "it's giving" in candidate_text or 'its giving' in candidate_text:
            if context_type == 'vibe':
                freshness_boost += ITS_GIVING_VIBE_BOOST
            else:
                context_penalty += ITS_GIVING_WRONG_CONTEXT_PENALTY
                blocked_terms.append("it's giving (wrong context)")

            if any(word in candidate_text for word in ('comedy', 'funny', 'hilarious')):
                context_penalty += ITS_GIVING_COMEDY_PENALTY
                blocked_terms.append("it's giving comedy (unnatural)")

        if context_type == 'humor' and any(term in candidate_text for term in HUMOR_SLANG):
            freshness_boost += HUMOR_TERM_BOOST

        for term in found_terms:
            if term['status'] == 'deprecated':
                deprecated_penalty += RERANK_BETA
                blocked_terms.append(term['term'])
            elif term['status'] == 'current':
                freshness_boost += RERANK_ALPHA * calculate_freshness_score(term)

        scored.append({
            'text': candidate['text'],
            'final_score': candidate.get('lm_score', 0) + freshness_boost - deprecated_penalty - context_penalty,
            'freshness_boost': freshness_boost,
            'blocked_terms': blocked_terms,
            'found_terms': found_terms,
        })

    # Candidates with blocked terms only win when nothing else is left
    viable = [c for c in scored if not c['blocked_terms']] or scored
    winner = max(viable, key=lambda c: c['final_score'])

    all_blocked = []
    for candidate in scored:
        for term in candidate['blocked_terms']:
            if term not in all_blocked:
                all_blocked.append(term)

    chosen_term = next((t['term'] for t in winner['found_terms'] if t['status'] == 'current'), None)

    return {
        'text': winner['text'],
        'final_score': winner['final_score'],
        'metadata': {
            'slang_mode': 'latest',
            'blocked_terms': all_blocked,
            'chosen_term': chosen_term,
            'freshness_score': winner['freshness_boost'],
            'context_type': context_type,
        }
    }


def get_suggested_replacements(term_name: str, terms: Optional[List[Dict[str, Any]]] = None) -> List[str]:
    """Current alternatives for a deprecated term (matched by name or alias). Empty otherwise."""
    if terms is None:
        terms = load_slang_terms()

    lookup = term_name.lower()
    match = next(
        (t for t in terms
         if t['term'].lower() == lookup or any(a.lower() == lookup for a in t.get('aliases') or [])),
        None
    )
    if not match or match['status'] != 'deprecated':
        return []
    return list(REPLACEMENTS.get(match['term'], []))


def log_slang_usage(input_text: str, output_text: str, metadata: Dict[str, Any]) -> None:
    logger.info(
        f"Slang usage: mode={metadata.get('slang_mode')}, chosen={metadata.get('chosen_term')}, "
        f"blocked={metadata.get('blocked_terms')}, freshness={metadata.get('freshness_score')}, "
        f"input_len={len(input_text)}, output_len={len(output_text)}"
    )


def load_slang_terms(status: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Load slang terms as dicts from the database, or from the seed list when the table is empty.

    Args:
        status: Optional filter ('current', 'fading', 'deprecated')
    """
    try:
        query = SlangTerm.query
        if SlangTerm.query.count() > 0:
            if status:
                query = query.filter_by(status=status)
            return [term.to_dict() for term in query.order_by(SlangTerm.term).all()]
    except Exception as e:
        logger.warning(f"Could not read slang_terms table, using seed data: {str(e)}")

    terms = [dict(term, region='US') for term in SEED_SLANG_TERMS]
    if status:
        terms = [term for term in terms if term['status'] == status]
    return terms


def seed_slang_terms() -> int:
    """
    Insert seed terms that are not already in the slang_terms table.

    Returns:
        Number of terms inserted
    """
    inserted = 0
    try:
        existing = {term for (term,) in db.session.query(SlangTerm.term).all()}
        for data in SEED_SLANG_TERMS:
            if data['term'] in existing:
                continue
            db.session.add(SlangTerm(
                term=data['term'],
                aliases=list(data['aliases']),
                status=data['status'],
                last_seen=_as_utc(data['last_seen']),
                source_count_30d=data['source_count_30d'],
                trend_hits_30d=data['trend_hits_30d'],
                age_months=data['age_months'],
                notes=data['notes'],
            ))
            inserted += 1
        db.session.commit()
        logger.info(f"Seeded {inserted} slang terms")
        return inserted
    except Exception as e:
        db.session.rollback()
        logger.error(f"Failed to seed slang terms: {str(e)}", exc_info=True)
        raise
