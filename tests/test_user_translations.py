"""
Tests for saved and history translation endpoints

All endpoints require a logged-in user and only ever touch that user's rows.
"""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from app import create_app
from models import db
from models.user import User
from models.saved_translation import SavedTranslation
from models.history_translation import HistoryTranslation
from services.user_translation_service import (
    save_translation,
    save_to_history,
    get_history_translations,
)


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
    user = User(id='user-1', email='one@example.com')
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def other_user(app):
    user = User(id='user-2', email='two@example.com')
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def authenticated_client(client, test_user):
    with client.session_transaction() as sess:
        sess['_user_id'] = test_user.id
    return client


@pytest.mark.parametrize('method, url', [
    ('post', '/api/translations/save'),
    ('get', '/api/translations/saved'),
    ('delete', '/api/translations/saved/1'),
    ('post', '/api/translations/history'),
    ('get', '/api/translations/history'),
    ('delete', '/api/translations/history/1'),
    ('delete', '/api/translations/history'),
])
def test_endpoints_require_login(client, method, url):
    response = getattr(client, method)(url, json={})
    assert response.status_code == 401
    assert response.get_json()['success'] is False


def test_save_and_list(authenticated_client):
    response = authenticated_client.post('/api/translations/save', json={
        'input_text': "I'm tired",
        'output_text': "I'm dead",
    })

    assert response.status_code == 201
    saved = response.get_json()['data']
    assert saved['user_id'] == 'user-1'
    assert saved['source_language'] == 'standard_english'
    assert saved['target_language'] == 'gen_z_english'

    response = authenticated_client.get('/api/translations/saved')
    data = response.get_json()
    assert data['count'] == 1
    assert data['data'][0]['output_text'] == "I'm dead"


def test_save_requires_both_texts(authenticated_client):
    response = authenticated_client.post('/api/translations/save', json={'input_text': "I'm tired"})
    assert response.status_code == 400


def test_saved_list_excludes_other_users(authenticated_client, other_user):
    save_translation(other_user.id, 'hello', 'yo')

    data = authenticated_client.get('/api/translations/saved').get_json()

    assert data['count'] == 0


def test_delete_saved(authenticated_client, test_user):
    saved = save_translation(test_user.id, 'hello', 'yo')

    response = authenticated_client.delete(f'/api/translations/saved/{saved.id}')

    assert response.status_code == 200
    assert SavedTranslation.query.count() == 0


def test_cannot_delete_other_users_saved(authenticated_client, other_user):
    saved = save_translation(other_user.id, 'hello', 'yo')

    response = authenticated_client.delete(f'/api/translations/saved/{saved.id}')

    assert response.status_code == 404
    assert SavedTranslation.query.count() == 1


def test_delete_missing_saved(authenticated_client):
    response = authenticated_client.delete('/api/translations/saved/999')
    assert response.status_code == 404


def test_history_add_list_and_limit(authenticated_client):
    for i in range(3):
        response = authenticated_client.post('/api/translations/history', json={
            'input_text': f'input {i}',
            'output_text': f'output {i}',
            'source_language': 'gen_z_english',
            'target_language': 'standard_english',
        })
        assert response.status_code == 201

    data = authenticated_client.get('/api/translations/history?limit=2').get_json()

    assert data['count'] == 2
    assert data['data'][0]['input_text'] == 'input 2'
    assert data['data'][0]['source_language'] == 'gen_z_english'


def test_delete_history_entry_is_owner_scoped(authenticated_client, test_user, other_user):
    mine = save_to_history(test_user.id, 'hello', 'yo')
    theirs = save_to_history(other_user.id, 'bye', 'cya')

    assert authenticated_client.delete(f'/api/translations/history/{theirs.id}').status_code == 404
    assert authenticated_client.delete(f'/api/translations/history/{mine.id}').status_code == 200
    assert HistoryTranslation.query.count() == 1


def test_clear_history_only_clears_own_rows(authenticated_client, test_user, other_user):
    save_to_history(test_user.id, 'hello', 'yo')
    save_to_history(test_user.id, 'good night', 'gn')
    save_to_history(other_user.id, 'bye', 'cya')

    response = authenticated_client.delete('/api/translations/history')

    assert response.get_json() == {'success': True, 'deleted': 2}
    assert len(get_history_translations(other_user.id)) == 1


def test_save_translation_rejects_empty_text(app, test_user):
    with pytest.raises(ValueError):
        save_translation(test_user.id, '', 'yo')


def test_deleting_user_cascades(app, test_user):
    save_translation(test_user.id, 'hello', 'yo')
    save_to_history(test_user.id, 'hello', 'yo')

    db.session.delete(test_user)
    db.session.commit()

    assert SavedTranslation.query.count() == 0
    assert HistoryTranslation.query.count() == 0
