"""
Tests for the deterministic text rules used around the LLM layers.
"""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from services import style_rules


class TestExpandAbbreviations:
    def test_expands_single_abbreviation(self):
        assert style_rules.expand_abbreviations("tbh") == "To be honest"

    def test_expands_multiple_words(self):
        assert style_rules.expand_abbreviations("tbh idc") == "To be honest I don't care"

    def test_multi_word_entry_wins_over_single_words(self):
        # "no cap" is one entry, not "no" + "cap"
        assert style_rules.expand_abbreviations("no cap fr") == "No lie for real"

    def test_ignores_case_and_punctuation(self):
        assert style_rules.expand_abbreviations("NGL!!") == "Not gonna lie"

    def test_returns_none_for_free_text(self):
        assert style_rules.expand_abbreviations("that outfit is fire") is None

    def test_returns_none_for_empty_input(self):
        assert style_rules.expand_abbreviations("   ") is None


def test_restore_whitelisted_contractions():
    result = style_rules.restore_whitelisted_contractions("I am sure it is fine and we do not mind")
    assert result == "I'm sure it's fine and we don't mind"


def test_restore_contractions_keeps_sentence_case():
    assert style_rules.restore_whitelisted_contractions("You are late") == "You're late"


def test_fix_cap_mappings_prefers_longest_phrase():
    assert style_rules.fix_cap_mappings("no exaggeration, stop exaggerating") == "no lie, stop lying"
    assert style_rules.fix_cap_mappings("You are not exaggerating.") == "You are not lying."


def test_fix_situationship_mappings():
    result = style_rules.fix_situationship_mappings("They are in a complicated relationship")
    assert result == "They are in a friends with benefits"


class TestNormalizeGotta:
    def test_have_to_and_need_to(self):
        assert style_rules.normalize_gotta("i have to go") == "i gotta go"
        assert style_rules.normalize_gotta("we need to leave") == "we gotta leave"

    def test_past_tense_unchanged(self):
        assert style_rules.normalize_gotta("i had to go") == "i had to go"
        assert style_rules.normalize_gotta("i needed to go") == "i needed to go"


def test_strip_punctuation_keeps_apostrophes():
    assert style_rules.strip_punctuation("  I'm Hungry!  ") == "i'm hungry"


@pytest.mark.parametrize('text, expected', [
    ('hello', 'yo'),
    ('good night', 'gn'),
    ("i'm going to sleep now", 'imma gts rn'),
    ('do you want to grab pizza later', 'wanna go grab sm pizza later'),
])
def test_gen_z_shortcuts(text, expected):
    assert style_rules.lookup_gen_z_shortcut(text) == expected


def test_gen_z_shortcut_miss():
    assert style_rules.lookup_gen_z_shortcut('the quarterly report is due') is None


def test_direct_mapping_only_for_exact_pair():
    mapping = style_rules.lookup_direct_mapping(' Situationship ', 'gen_z_english', 'millennial_english')
    assert mapping['translation'] == 'friends with benefits'
    assert mapping['explanation'].startswith("Basically they're saying")

    assert style_rules.lookup_direct_mapping('situationship', 'gen_z_english', 'standard_english') is None


@pytest.mark.parametrize('output', [
    "Hey bestie, I'm doing great thanks for asking!",
    "I'm crying, why you gotta ask like that",
    "Good, thanks! How about you?",
])
def test_conversational_responses_detected(output):
    assert style_rules.is_conversational_response(output) is True


@pytest.mark.parametrize('output', [
    "Yo, how you doin' today?",
    "i'm dead",
    "bout to sleep, i'm dead",
    "that joke had me crying fr",
    "Gotta grind for my exam tmrw",
    "Not going to lie, that outfit is really good.",
])
def test_translations_not_flagged_as_conversational(output):
    assert style_rules.is_conversational_response(output) is False
