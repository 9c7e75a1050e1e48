"""
Tests for the bridge translation layers (LLM provider mocked)
"""

import pytest
import sys
from pathlib import Path
from unittest.mock import patch, MagicMock

sys.path.insert(0, str(Path(__file__).parent.parent))

from app import create_app
from models import db
from models.language import Language
from services.llm_models import SlangCandidates
from services.bridge_translation_service import (
    bridge_to_standard_english,
    standard_to_gen_z,
    standard_translation,
    generate_explanation,
    bridge_translate,
    TranslationError,
)


def chat_response(content):
    return {
        'content': content,
        'model': 'gpt-4o',
        'usage': {'prompt_tokens': 50, 'completion_tokens': 10, 'total_tokens': 60},
    }


def structured_response(candidates):
    return {
        'parsed_object': SlangCandidates(candidates=candidates),
        'raw_content': '',
        'model': 'gpt-4o',
        'usage': {'prompt_tokens': 50, 'completion_tokens': 10, 'total_tokens': 60},
    }


@pytest.fixture
def app():
    """Create and configure a test app"""
    app = create_app('testing')

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def provider():
    mock_provider = MagicMock()
    with patch('services.bridge_translation_service.get_llm_client', return_value=mock_provider):
        yield mock_provider


class TestBridgeToStandardEnglish:
    def test_abbreviation_fast_path_skips_llm(self, provider):
        assert bridge_to_standard_english("ngl fr") == "Not gonna lie for real"
        provider.create_chat_completion.assert_not_called()

    def test_llm_output_is_post_processed(self, provider):
        provider.create_chat_completion.return_value = chat_response("You are not exaggerating.")

        result = bridge_to_standard_english("you're not capping")

        assert result == "You're not lying."
        provider.create_chat_completion.assert_called_once()
        messages = provider.create_chat_completion.call_args.kwargs['messages']
        assert messages[1] == {'role': 'user', 'content': "you're not capping"}

    def test_provider_error_raises_translation_error(self, provider):
        provider.create_chat_completion.side_effect = Exception("rate limited")

        with pytest.raises(TranslationError):
            bridge_to_standard_english("that fit is bussin")

    def test_empty_llm_output_raises(self, provider):
        provider.create_chat_completion.return_value = chat_response("   ")

        with pytest.raises(TranslationError):
            bridge_to_standard_english("that fit is bussin")

    def test_missing_api_key_raises_translation_error(self):
        with patch('services.bridge_translation_service.get_llm_client',
                   side_effect=ValueError("OPENAI_API_KEY not found")):
            with pytest.raises(TranslationError):
                bridge_to_standard_english("that fit is bussin")


class TestStandardToGenZ:
    def test_shortcut_map_skips_llm(self, provider):
        result = standard_to_gen_z("Good night!")

        assert result['translation'] == 'gn'
        assert result['layers'] == ['shortcut_map']
        assert result['metadata'] is None
        provider.create_structured_completion.assert_not_called()

    def test_gotta_normalization_before_shortcut(self, provider):
        assert standard_to_gen_z("I have to work")['translation'] == 'gotta grind'

    def test_candidates_reranked_by_freshness(self, app, provider):
        provider.create_structured_completion.return_value = structured_response(
            ["that party was lit", "that party was a whole vibe fr", "the party slayed"]
        )

        result = standard_to_gen_z("The party last night was amazing")

        assert result['translation'] != "that party was lit"
        assert result['layers'] == ['llm_candidates', 'freshness_rerank']
        assert 'lit' in result['metadata']['blocked_terms']
        assert result['final_score'] is not None

        kwargs = provider.create_structured_completion.call_args.kwargs
        assert kwargs['response_model'] is SlangCandidates
        assert kwargs['temperature'] == 0.8

    def test_single_candidate_gets_original_as_alternative(self, app, provider):
        provider.create_structured_completion.return_value = structured_response(["this food is so bussin"])

        result = standard_to_gen_z("This food tastes really good")

        # "bussin" is deprecated, so the original text wins
        assert result['translation'] == "This food tastes really good"

    def test_latest_slang_disabled_keeps_first_candidate(self, app, provider):
        provider.create_structured_completion.return_value = structured_response(
            ["that party was lit", "the party slayed"]
        )

        result = standard_to_gen_z("The party last night was amazing", use_latest_slang=False)

        assert result['translation'] == "that party was lit"
        assert result['metadata']['slang_mode'] == 'disabled'


def test_standard_translation_adds_context_tone(provider):
    provider.create_chat_completion.return_value = chat_response("Hola, ¿cómo estás?")

    result = standard_translation("Hello, how are you?", 'standard_english', 'spanish', context='formal')

    assert result == "Hola, ¿cómo estás?"
    system_prompt = provider.create_chat_completion.call_args.kwargs['messages'][0]['content']
    assert 'from Standard English to Spanish' in system_prompt
    assert 'formal, professional language' in system_prompt


def test_strict_standard_translation_forbids_replies(provider):
    provider.create_chat_completion.return_value = chat_response("Yo, how u doin?")

    standard_translation("How are you?", 'standard_english', 'gen_z_english', strict=True)

    system_prompt = provider.create_chat_completion.call_args.kwargs['messages'][0]['content']
    assert 'never a message addressed to you' in system_prompt


def test_generate_explanation_returns_empty_on_failure(provider):
    provider.create_chat_completion.side_effect = Exception("timeout")

    assert generate_explanation("no cap", "no lie", 'gen_z_english', 'standard_english') == ''


def test_generate_explanation(provider):
    provider.create_chat_completion.return_value = chat_response("Basically they're saying no lie.")

    explanation = generate_explanation("no cap", "no lie", 'gen_z_english', 'standard_english')

    assert explanation == "Basically they're saying no lie."
    assert provider.create_chat_completion.call_args.kwargs['max_tokens'] == 150


class TestBridgeTranslate:
    def test_standard_source_to_gen_z_shortcut(self, provider):
        result = bridge_translate("I have to work", 'standard_english', 'gen_z_english')

        assert result['translation'] == 'gotta grind'
        assert result['bridge_text'] == 'I have to work'
        assert result['processing_layers'] == ['shortcut_map']
        assert result['quality_score'] is None

    def test_gen_z_to_standard_stops_at_bridge(self, provider):
        result = bridge_translate("tbh", 'gen_z_english', 'standard_english')

        assert result['translation'] == 'To be honest'
        assert result['bridge_text'] == 'To be honest'
        assert result['processing_layers'] == ['bridge_normalization']

    def test_gen_z_to_formal_pivots_through_standard(self, provider):
        provider.create_chat_completion.side_effect = [
            chat_response("I'm extremely tired."),
            chat_response("I am extremely fatigued."),
        ]

        result = bridge_translate("im so dead rn lowkey", 'gen_z_english', 'formal_english')

        assert result['translation'] == "I am extremely fatigued."
        assert result['bridge_text'] == "I'm extremely tired."
        assert result['processing_layers'] == ['bridge_normalization', 'formal_transform']

        formal_call = provider.create_chat_completion.call_args_list[1]
        assert formal_call.kwargs['messages'][1]['content'] == "I'm extremely tired."

    def test_british_transform(self, provider):
        provider.create_chat_completion.return_value = chat_response("Cheers, mate!")

        result = bridge_translate("Thanks, friend!", 'standard_english', 'british_english')

        assert result['translation'] == "Cheers, mate!"
        assert result['processing_layers'] == ['british_transform']
        assert provider.create_chat_completion.call_args.kwargs['temperature'] == 0.7

    def test_gen_z_quality_score_from_rerank(self, app, provider):
        provider.create_structured_completion.return_value = structured_response(
            ["that exam was mid fr", "the exam was kinda mid ngl"]
        )

        result = bridge_translate("The exam was average", 'standard_english', 'gen_z_english')

        assert 0 <= result['quality_score'] <= 100
        assert result['metadata']['slang_mode'] == 'latest'


def test_standard_translation_uses_registry_names(app, provider):
    db.session.add(Language(code='spanish', name='Spanish (Spain)', kind='foreign'))
    db.session.commit()
    provider.create_chat_completion.return_value = chat_response("Hola")

    standard_translation("Hello", 'standard_english', 'spanish')

    system_prompt = provider.create_chat_completion.call_args.kwargs['messages'][0]['content']
    assert 'from Standard English to Spanish (Spain)' in system_prompt
