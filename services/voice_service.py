"""
Voice Service - text-to-speech playback through ElevenLabs

Each translation style has one dedicated voice so the same style always
sounds the same. Audio is returned as raw audio/mpeg bytes.
"""

import logging
import os
import re
from typing import Dict, List, Any, Optional

import requests
from flask import current_app

logger = logging.getLogger(__name__)

ELEVENLABS_BASE_URL = 'https://api.elevenlabs.io/v1'
DEFAULT_VOICE_TYPE = 'gen_z_english'

VOICE_CONFIG = {
    'gen_z_english': {
        'id': '3XOBzXhnDY98yeWQ3GdM',
        'name': 'Gen Z English Voice',
        'description': 'Youthful, energetic voice for Gen Z slang translations',
    },
    'standard_english': {
        'id': '1t1EeRixsJrKbiF1zwM6',
        'name': 'Standard English Voice',
        'description': 'Clear, professional voice for Standard English translations',
    },
    'millennial_english': {
        'id': 'pNInz6obpgDQGcFmaJgB',
        'name': 'Millennial English Voice',
        'description': 'Casual, relatable voice for Millennial slang translations',
    },
    'british_english': {
        'id': 'N2lVS1w4EtoT3dr4eOWO',
        'name': 'British English Voice',
        'description': 'Authentic British accent for British slang translations',
    },
    'spanish': {
        'id': 'EXAVITQu4vr4xnSDxMaL',
        'name': 'Spanish Voice',
        'description': 'Native Spanish voice for Spanish translations',
    },
    'french': {
        'id': 'CYw3kZ02Hs0563khs1Fj',
        'name': 'French Voice',
        'description': 'Native French voice for French translations',
    },
    'formal_english': {
        'id': '1t1EeRixsJrKbiF1zwM6',
        'name': 'Formal English Voice',
        'description': 'Professional, authoritative voice for formal English translations',
    },
}

VOICE_SETTINGS = {
    'stability': 0.65,
    'similarity_boost': 0.8,
    'style': 0.4,
    'use_speaker_boost': True,
}

# Spoken forms for abbreviations TTS would otherwise spell out
SPEECH_EXPANSIONS = [
    (r'\bfr\b', 'for real'),
    (r'\bngl\b', 'not gonna lie'),
    (r'\btbh\b', 'to be honest'),
    (r'\bidk\b', "I don't know"),
    (r'\bomg\b', 'oh my god'),
    (r'\blowkey\b', 'low key'),
    (r'\bhighkey\b', 'high key'),
    (r'\bbussin\b', "bussin'"),
    (r'\bvibin\b', 'vibing'),
    (r'\bdeadass\b', 'dead ass'),
]

SPEECH_PAUSES = [
    (r'\bbut\s', 'but, '),
    (r'\bso\s', 'so, '),
    (r'\byou know\b', 'you know,'),
    (r'\blike\s', 'like, '),
]

_EMOJI = re.compile('[\U0001F000-\U0001FAFF☀-➿️]')


class VoiceGenerationError(Exception):
    """Voice synthesis failed. status_code carries the upstream HTTP status when there is one."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def _setting(name: str, default=None):
    try:
        value = current_app.config.get(name)
    except RuntimeError:
        value = None
    if value is None or value == '':
        value = os.getenv(name, default)
    return value


def get_voice_config(voice_type: str = DEFAULT_VOICE_TYPE) -> Dict[str, str]:
    """
    Raises:
        KeyError: If no voice is configured for voice_type
    """
    if voice_type not in VOICE_CONFIG:
        raise KeyError(f"Voice configuration not found for voice type: {voice_type}")
    return VOICE_CONFIG[voice_type]


def determine_voice_type(target_language: Optional[str]) -> str:
    """Voice matching the target style, falling back to the Gen Z voice."""
    if target_language and target_language in VOICE_CONFIG:
        return target_language
    return DEFAULT_VOICE_TYPE


def get_voice_id(target_language: Optional[str]) -> str:
    return VOICE_CONFIG[determine_voice_type(target_language)]['id']


def preprocess_text_for_speech(text: str) -> str:
    processed = text
    for pattern, replacement in SPEECH_EXPANSIONS:
        processed = re.sub(pattern, replacement, processed, flags=re.IGNORECASE)

    processed = _EMOJI.sub('', processed)

    for pattern, replacement in SPEECH_PAUSES:
        processed = re.sub(pattern, replacement, processed, flags=re.IGNORECASE)

    return re.sub(r'\s+', ' ', processed).strip()


def generate_voice(text: str, voice_type: str = DEFAULT_VOICE_TYPE) -> bytes:
    """
    Synthesize speech for text with the voice assigned to voice_type.

    Returns:
        audio/mpeg bytes

    Raises:
        VoiceGenerationError: On unknown voice type, missing API key, network
            failure or a non-2xx response (status_code set to the upstream status)
    """
    try:
        voice = get_voice_config(voice_type)
    except KeyError as e:
        raise VoiceGenerationError(str(e)) from e

    api_key = _setting('ELEVENLABS_API_KEY', '')
    if not api_key:
        logger.error("ELEVENLABS_API_KEY is not configured")
        raise VoiceGenerationError("Voice service API key not configured", status_code=401)

    url = f"{ELEVENLABS_BASE_URL}/text-to-speech/{voice['id']}"
    headers = {
        'Accept': 'audio/mpeg',
        'Content-Type': 'application/json',
        'xi-api-key': api_key,
    }
    payload = {
        'text': preprocess_text_for_speech(text),
        'model_id': _setting('ELEVENLABS_MODEL_ID', 'eleven_turbo_v2'),
        'voice_settings': VOICE_SETTINGS,
    }
    timeout = float(_setting('VOICE_TIMEOUT_SECONDS', 20))

    try:
        response = requests.post(url, headers=headers, json=payload, timeout=timeout)
    except requests.Timeout as e:
        logger.warning(f"ElevenLabs timeout for voice {voice_type}")
        raise VoiceGenerationError("Voice generation timed out") from e
    except requests.RequestException as e:
        logger.error(f"ElevenLabs request failed: {str(e)}", exc_info=True)
        raise VoiceGenerationError(f"Voice generation request failed: {str(e)}") from e

    if not response.ok:
        logger.error(f"ElevenLabs API error: {response.status_code} {response.text[:200]}")
        raise VoiceGenerationError(
            f"ElevenLabs API error: {response.status_code}",
            status_code=response.status_code
        )

    logger.info(f"Generated {len(response.content)} bytes of audio with {voice_type} voice")
    return response.content


def get_available_voices() -> List[Dict[str, Any]]:
    """Voices available on the ElevenLabs account. Empty list on failure."""
    try:
        response = requests.get(
            f"{ELEVENLABS_BASE_URL}/voices",
            headers={'xi-api-key': _setting('ELEVENLABS_API_KEY', '')},
            timeout=float(_setting('VOICE_TIMEOUT_SECONDS', 20))
        )
        response.raise_for_status()
        return [
            {
                'id': voice.get('voice_id'),
                'name': voice.get('name'),
                'category': voice.get('category'),
                'description': voice.get('description'),
            }
            for voice in response.json().get('voices', [])
        ]
    except requests.RequestException as e:
        logger.error(f"Failed to fetch ElevenLabs voices: {str(e)}")
        return []
