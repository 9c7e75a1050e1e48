"""
Tests for voice synthesis (ElevenLabs HTTP calls mocked)
"""

import pytest
import sys
from pathlib import Path
from unittest.mock import patch, MagicMock

import requests

sys.path.insert(0, str(Path(__file__).parent.parent))

from app import create_app
from services.voice_service import (
    VOICE_CONFIG,
    VoiceGenerationError,
    determine_voice_type,
    get_voice_id,
    preprocess_text_for_speech,
    generate_voice,
    get_available_voices,
)


def audio_response(status_code=200, content=b'ID3fakeaudio', text=''):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.content = content
    response.text = text
    return response


@pytest.fixture
def app():
    """Create and configure a test app"""
    app = create_app('testing')
    app.config['ELEVENLABS_API_KEY'] = 'test-elevenlabs-key'

    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    """Create a test client"""
    return app.test_client()


@pytest.fixture
def mock_post():
    with patch('services.voice_service.requests.post') as mock_post:
        mock_post.return_value = audio_response()
        yield mock_post


def test_determine_voice_type_falls_back_to_gen_z():
    assert determine_voice_type('british_english') == 'british_english'
    assert determine_voice_type('klingon') == 'gen_z_english'
    assert determine_voice_type(None) == 'gen_z_english'


def test_formal_and_standard_share_a_voice():
    assert get_voice_id('formal_english') == get_voice_id('standard_english')


def test_preprocess_text_for_speech():
    assert preprocess_text_for_speech("ngl   that slaps fr 🔥") == "not gonna lie that slaps for real"


class TestGenerateVoice:
    def test_posts_to_voice_endpoint(self, app, mock_post):
        audio = generate_voice("tbh im dead", 'british_english')

        assert audio == b'ID3fakeaudio'
        url = mock_post.call_args.args[0]
        assert url.endswith(f"/text-to-speech/{VOICE_CONFIG['british_english']['id']}")
        kwargs = mock_post.call_args.kwargs
        assert kwargs['headers']['xi-api-key'] == 'test-elevenlabs-key'
        assert kwargs['json']['text'] == "to be honest im dead"
        assert kwargs['json']['voice_settings']['stability'] == 0.65
        assert kwargs['timeout'] == 20

    def test_missing_api_key(self, app, mock_post, monkeypatch):
        app.config['ELEVENLABS_API_KEY'] = ''
        monkeypatch.delenv('ELEVENLABS_API_KEY', raising=False)

        with pytest.raises(VoiceGenerationError) as exc_info:
            generate_voice("yo")

        assert exc_info.value.status_code == 401
        mock_post.assert_not_called()

    def test_unknown_voice_type(self, app, mock_post):
        with pytest.raises(VoiceGenerationError):
            generate_voice("yo", 'klingon')

    def test_upstream_error_status(self, app, mock_post):
        mock_post.return_value = audio_response(status_code=429, text='quota_exceeded')

        with pytest.raises(VoiceGenerationError) as exc_info:
            generate_voice("yo")

        assert exc_info.value.status_code == 429

    def test_timeout(self, app, mock_post):
        mock_post.side_effect = requests.Timeout()

        with pytest.raises(VoiceGenerationError, match='timed out'):
            generate_voice("yo")


def test_available_voices(app):
    response = MagicMock()
    response.json.return_value = {'voices': [{'voice_id': 'abc', 'name': 'Rachel', 'category': 'premade'}]}

    with patch('services.voice_service.requests.get', return_value=response):
        voices = get_available_voices()

    assert voices == [{'id': 'abc', 'name': 'Rachel', 'category': 'premade', 'description': None}]


def test_available_voices_empty_on_failure(app):
    with patch('services.voice_service.requests.get', side_effect=requests.ConnectionError()):
        assert get_available_voices() == []


class TestVoiceRoutes:
    def test_generate_returns_audio(self, client, mock_post):
        response = client.post('/api/voice/generate', json={'text': 'imma gts rn', 'target_language': 'gen_z_english'})

        assert response.status_code == 200
        assert response.mimetype == 'audio/mpeg'
        assert response.data == b'ID3fakeaudio'
        assert response.headers['Content-Length'] == str(len(b'ID3fakeaudio'))
        assert response.headers['Cache-Control'] == 'public, max-age=3600'

    def test_voice_type_overrides_target_language(self, client, mock_post):
        client.post('/api/voice/generate', json={
            'text': 'cheers', 'target_language': 'gen_z_english', 'voice_type': 'british_english'
        })

        assert VOICE_CONFIG['british_english']['id'] in mock_post.call_args.args[0]

    @pytest.mark.parametrize('voice_type', ['klingon', ['gen_z_english'], 42])
    def test_invalid_voice_type_returns_400(self, client, mock_post, voice_type):
        response = client.post('/api/voice/generate', json={'text': 'yo', 'voice_type': voice_type})

        assert response.status_code == 400
        assert 'voice_type' in response.get_json()['error']
        mock_post.assert_not_called()

    def test_non_string_target_language_returns_400(self, client, mock_post):
        response = client.post('/api/voice/generate', json={'text': 'yo', 'target_language': ['spanish']})

        assert response.status_code == 400
        mock_post.assert_not_called()

    def test_unknown_target_language_uses_default_voice(self, client, mock_post):
        response = client.post('/api/voice/generate', json={'text': 'yo', 'target_language': 'klingon'})

        assert response.status_code == 200
        assert VOICE_CONFIG['gen_z_english']['id'] in mock_post.call_args.args[0]

    def test_generate_requires_text(self, client, mock_post):
        response = client.post('/api/voice/generate', json={'text': '  '})
        assert response.status_code == 400

    def test_generate_rejects_long_text(self, client, mock_post):
        response = client.post('/api/voice/generate', json={'text': 'a' * 1001})

        assert response.status_code == 400
        mock_post.assert_not_called()

    def test_quota_exceeded_returns_429(self, client, mock_post):
        mock_post.return_value = audio_response(status_code=429)

        response = client.post('/api/voice/generate', json={'text': 'yo'})

        assert response.status_code == 429

    def test_upstream_failure_returns_500(self, client, mock_post):
        mock_post.return_value = audio_response(status_code=503)

        response = client.post('/api/voice/generate', json={'text': 'yo'})

        assert response.status_code == 500
        assert response.get_json()['success'] is False

    def test_default_config(self, client):
        data = client.get('/api/voice/config').get_json()

        assert data['voice_type'] == 'gen_z_english'
        assert data['voice']['id'] == VOICE_CONFIG['gen_z_english']['id']

    def test_config_for_voice_type(self, client):
        data = client.get('/api/voice/config/spanish').get_json()
        assert data['voice']['name'] == 'Spanish Voice'

    def test_unknown_config_returns_404(self, client):
        response = client.get('/api/voice/config/klingon')
        assert response.status_code == 404
