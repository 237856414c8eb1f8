"""
End-to-end playlist flow through the HTTP API.

Covers:
  - Register → login → create playlist → add song → list songs
  - songCount derived at read time
  - Duplicate adds are no-ops, removals are idempotent
  - Song paths containing slashes in the DELETE route
  - Playlist deletion cascades
  - Validation errors → 400
"""

import os
import sys
from urllib.parse import quote

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))


@pytest.fixture(scope='module')
def app():
    """Create a fresh app with an in-memory database."""
    from melodia import create_app
    application = create_app(testing=True, overrides={
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'JWT_SECRET': 'test-jwt-secret-with-enough-length-0004',
    })
    yield application
    with application.app_context():
        from melodia.services import get_store
        get_store().close()


@pytest.fixture(scope='module')
def client(app):
    """Ana's logged-in client."""
    client = app.test_client()
    resp = client.post('/api/register', json={
        'nombre': 'Ana',
        'email': 'ana@x.com',
        'password': 'pw1',
    })
    assert resp.status_code == 201
    resp = client.post('/api/login', json={'email': 'ana@x.com', 'password': 'pw1'})
    assert resp.status_code == 200
    assert resp.get_json()['user'] == {'id': resp.get_json()['user']['id'], 'nombre': 'Ana', 'email': 'ana@x.com'}
    return client


def _create(client, name):
    resp = client.post('/api/playlists', json={'nombre': name})
    assert resp.status_code == 201
    return resp.get_json()['playlist']


def _song_url(playlist_id, path):
    return f'/api/playlists/{playlist_id}/songs/{quote(path, safe="")}'


class TestEndToEnd:
    """The full happy path."""

    def test_road_trip(self, client):
        playlist = _create(client, 'Road Trip')
        assert playlist['nombre'] == 'Road Trip'
        assert playlist['songCount'] == 0
        assert set(playlist) == {'id', 'nombre', 'songCount'}

        resp = client.post(
            f"/api/playlists/{playlist['id']}/songs",
            json={'songPath': '/musica/a.mp3'},
        )
        assert resp.status_code == 201

        resp = client.get(f"/api/playlists/{playlist['id']}/songs")
        assert resp.status_code == 200
        assert resp.get_json() == {'songs': ['/musica/a.mp3']}

    def test_listing_reports_song_count(self, client):
        playlist = _create(client, 'Counted')
        for path in ['/musica/a.mp3', '/musica/b.mp3', '/musica/a.mp3']:
            client.post(f"/api/playlists/{playlist['id']}/songs", json={'songPath': path})

        resp = client.get('/api/playlists')
        assert resp.status_code == 200
        listed = {p['id']: p for p in resp.get_json()['playlists']}
        assert listed[playlist['id']] == {'id': playlist['id'], 'nombre': 'Counted', 'songCount': 2}

    def test_listing_keeps_insertion_order(self, client):
        first = _create(client, 'Zeta')
        second = _create(client, 'Alfa')
        ids = [p['id'] for p in client.get('/api/playlists').get_json()['playlists']]
        assert ids.index(first['id']) < ids.index(second['id'])


class TestSongMembership:
    """Insert-or-ignore adds and idempotent removals."""

    def test_duplicate_add(self, client):
        playlist = _create(client, 'Dupes')
        url = f"/api/playlists/{playlist['id']}/songs"
        first = client.post(url, json={'songPath': 'a.mp3'})
        second = client.post(url, json={'songPath': 'a.mp3'})
        assert first.status_code == second.status_code == 201
        assert first.get_json()['added'] is True
        assert second.get_json()['added'] is False
        assert client.get(url).get_json()['songs'] == ['a.mp3']

    def test_remove_path_with_slashes(self, client):
        playlist = _create(client, 'Slashes')
        path = '/musica/ACDC - Back In Black (Official Video).mp3'
        client.post(f"/api/playlists/{playlist['id']}/songs", json={'songPath': path})

        resp = client.delete(_song_url(playlist['id'], path))
        assert resp.status_code == 200
        assert client.get(f"/api/playlists/{playlist['id']}/songs").get_json()['songs'] == []

    def test_remove_nested_path_keeps_siblings(self, client):
        playlist = _create(client, 'Nested')
        url = f"/api/playlists/{playlist['id']}/songs"
        client.post(url, json={'songPath': '/musica/rock/70s/a.mp3'})
        client.post(url, json={'songPath': '/musica/rock/b.mp3'})

        resp = client.delete(_song_url(playlist['id'], '/musica/rock/70s/a.mp3'))
        assert resp.status_code == 200
        assert resp.get_json() == {'success': True}
        assert client.get(url).get_json()['songs'] == ['/musica/rock/b.mp3']

    def test_remove_never_added(self, client):
        playlist = _create(client, 'Empty')
        resp = client.delete(_song_url(playlist['id'], '/musica/ghost.mp3'))
        assert resp.status_code == 200
        assert resp.get_json() == {'success': True}

    def test_remove_missing_playlist(self, client):
        resp = client.delete(_song_url(999999, '/musica/a.mp3'))
        assert resp.status_code == 404
        assert resp.get_json() == {'error': 'Playlist not found'}

    @pytest.mark.parametrize('method', ['get', 'post', 'delete'])
    def test_oversized_id_is_not_found(self, client, method):
        kwargs = {'json': {'songPath': 'a.mp3'}} if method == 'post' else {}
        resp = getattr(client, method)('/api/playlists/99999999999999999999/songs', **kwargs)
        assert resp.status_code == 404
        assert resp.get_json() == {'error': 'Playlist not found'}

    def test_delete_oversized_playlist_id(self, client):
        resp = client.delete('/api/playlists/99999999999999999999')
        assert resp.status_code == 404
        assert resp.get_json() == {'error': 'Playlist not found'}

    @pytest.mark.parametrize('body', [{}, {'songPath': ''}, {'songPath': 42}])
    def test_add_requires_song_path(self, client, body):
        playlist = _create(client, 'Strict')
        resp = client.post(f"/api/playlists/{playlist['id']}/songs", json=body)
        assert resp.status_code == 400


class TestPlaylistLifecycle:
    """Creation validation and deletion."""

    @pytest.mark.parametrize('body', [{}, {'nombre': ''}, {'nombre': '   '}, {'nombre': 'x' * 121}])
    def test_create_validation(self, client, body):
        resp = client.post('/api/playlists', json=body)
        assert resp.status_code == 400
        assert 'error' in resp.get_json()

    def test_create_rejects_non_object_body(self, client):
        resp = client.post('/api/playlists', json=['Road Trip'])
        assert resp.status_code == 400

    def test_delete_playlist(self, client):
        playlist = _create(client, 'Short lived')
        client.post(f"/api/playlists/{playlist['id']}/songs", json={'songPath': 'a.mp3'})

        resp = client.delete(f"/api/playlists/{playlist['id']}")
        assert resp.status_code == 200

        assert client.get(f"/api/playlists/{playlist['id']}/songs").status_code == 404
        ids = [p['id'] for p in client.get('/api/playlists').get_json()['playlists']]
        assert playlist['id'] not in ids

    def test_delete_missing_playlist(self, client):
        assert client.delete('/api/playlists/999999').status_code == 404
