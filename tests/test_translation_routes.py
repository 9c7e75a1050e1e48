"""
Tests for the translation endpoints
"""

import pytest
import sys
from pathlib import Path
from unittest.mock import patch

sys.path.insert(0, str(Path(__file__).parent.parent))

from app import create_app
from models import db
from models.user import User
from models.history_translation import HistoryTranslation
from models.translation import Translation
from services.bridge_translation_service import TranslationError


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
def client(app):
    """Create a test client"""
    return app.test_client()


@pytest.fixture
def test_user(app):
    user = User(id='google-sub-123', email='test@example.com', first_name='Test')
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def mock_bridge():
    with patch('services.translation_service.bridge_translate') as mock_bridge, \
            patch('services.translation_service.generate_explanation', return_value="Basically no lie."):
        mock_bridge.return_value = {
            'translation': "No lie",
            'bridge_text': "No lie",
            'processing_layers': ['bridge_normalization'],
            'metadata': None,
            'quality_score': None,
        }
        yield mock_bridge


def translate_payload(**overrides):
    payload = {
        'input_text': 'no cap',
        'source_language': 'gen_z_english',
        'target_language': 'standard_english',
    }
    payload.update(overrides)
    return payload


class TestTranslateValidation:
    def test_no_json(self, client):
        response = client.post('/api/translate', data='not json', content_type='text/plain')
        assert response.status_code == 400
        assert response.get_json()['success'] is False

    def test_missing_input_text(self, client):
        response = client.post('/api/translate', json=translate_payload(input_text='   '))
        assert response.status_code == 400
        assert 'input_text' in response.get_json()['error']

    def test_missing_languages(self, client):
        response = client.post('/api/translate', json={'input_text': 'no cap'})
        assert response.status_code == 400

    def test_unsupported_language(self, client):
        response = client.post('/api/translate', json=translate_payload(target_language='klingon'))
        assert response.status_code == 400
        assert 'klingon' in response.get_json()['error']

    def test_invalid_context(self, client):
        response = client.post('/api/translate', json=translate_payload(context='poetic'))
        assert response.status_code == 400

    @pytest.mark.parametrize('value', ['false', 0, None])
    def test_use_latest_slang_must_be_boolean(self, client, value):
        response = client.post('/api/translate', json=translate_payload(use_latest_slang=value))

        assert response.status_code == 400
        assert 'use_latest_slang' in response.get_json()['error']

    @pytest.mark.parametrize('field', ['chat', 'message', 'reply'])
    def test_chat_fields_rejected(self, client, field):
        payload = translate_payload()
        payload[field] = 'hey whats up'
        response = client.post('/api/translate', json=payload)
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Only translation requests are supported'


def test_translate_sets_cache_headers(client, mock_bridge):
    first = client.post('/api/translate', json=translate_payload())

    assert first.status_code == 200
    assert first.headers['x-cache-hit'] == '0'
    assert len(first.headers['x-cache-key']) == 64
    data = first.get_json()
    assert data['translation'] == "No lie"
    assert data['explanation'] == "Basically no lie."

    second = client.post('/api/translate', json=translate_payload())

    assert second.headers['x-cache-hit'] == '1'
    assert second.headers['x-cache-key'] == first.headers['x-cache-key']
    assert second.get_json()['metadata']['hit_count'] == 2
    assert mock_bridge.call_count == 1


def test_cache_skip_query_param(client, mock_bridge):
    client.post('/api/translate', json=translate_payload())

    response = client.post('/api/translate?cache=skip', json=translate_payload())

    assert response.headers['x-cache-hit'] == '0'
    assert mock_bridge.call_count == 2


def test_general_context_uses_bridge(client, mock_bridge):
    response = client.post('/api/translate', json=translate_payload(context='general'))

    assert response.status_code == 200
    mock_bridge.assert_called_once()


def test_translation_failure_returns_500(client):
    with patch('services.translation_service.bridge_translate', side_effect=TranslationError("down")):
        response = client.post('/api/translate', json=translate_payload())

    assert response.status_code == 500
    assert response.get_json() == {'success': False, 'error': 'Translation failed'}


def test_logged_in_translation_recorded_in_history(client, test_user, mock_bridge):
    with client.session_transaction() as sess:
        sess['_user_id'] = test_user.id

    response = client.post('/api/translate', json=translate_payload())

    assert response.status_code == 200
    history = HistoryTranslation.query.filter_by(user_id='google-sub-123').all()
    assert len(history) == 1
    assert history[0].output_text == "No lie"


def test_anonymous_translation_not_in_history(client, mock_bridge):
    client.post('/api/translate', json=translate_payload())
    assert HistoryTranslation.query.count() == 0


def test_recent_translations(client):
    for i in range(3):
        db.session.add(Translation(input_text=f'input {i}', output_text=f'output {i}'))
    db.session.commit()

    response = client.get('/api/translations/recent?limit=2')

    assert response.status_code == 200
    data = response.get_json()
    assert data['count'] == 2
    assert data['data'][0]['input_text'] == 'input 2'


class TestBridgeTranslateEndpoint:
    def test_abbreviations_expanded(self, client):
        with patch('routes.translation.generate_explanation', return_value="They're being honest."):
            response = client.post('/api/bridge-translate', json={'input_text': 'tbh'})

        assert response.status_code == 200
        data = response.get_json()
        assert data['translation'] == 'To be honest'
        assert data['explanation'] == "They're being honest."
        assert data['source_language'] == 'gen_z_english'

    def test_missing_input(self, client):
        response = client.post('/api/bridge-translate', json={})
        assert response.status_code == 400

    def test_provider_failure(self, client):
        with patch('routes.translation.bridge_to_standard_english', side_effect=TranslationError("down")):
            response = client.post('/api/bridge-translate', json={'input_text': 'that fit is bussin'})

        assert response.status_code == 500


def test_use_latest_slang_false_is_passed_through(client):
    with patch('routes.translation.run_translation') as mock_translate:
        mock_translate.return_value = {
            'success': True, 'translation': 'that party was lit', 'explanation': '',
            'metadata': {'cached': False, 'cache_key': None},
        }
        response = client.post('/api/translate', json=translate_payload(
            target_language='gen_z_english', use_latest_slang=False
        ))

    assert response.status_code == 200
    assert mock_translate.call_args.kwargs['use_latest_slang'] is False
