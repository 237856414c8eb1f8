"""
Playlist Routes - CRUD over the caller's playlists and their songs.

Every handler scopes its lookup to ``current_user.id``; a playlist owned by
someone else answers exactly like one that does not exist.
"""

from flask import Blueprint, jsonify
from flask_login import current_user, login_required
from werkzeug.routing import PathConverter

from melodia.services import get_store
from melodia.utils import get_json_payload

bp = Blueprint('playlists', __name__)


class SongPathConverter(PathConverter):
    """Like ``path`` but also accepts a leading slash (``/musica/a.mp3``)."""

    regex = '.+'
    part_isolating = False


# ==================== Playlist CRUD ====================

@bp.route('/playlists', methods=['GET'])
@login_required
def list_playlists():
    """Return playlists owned by the current user with their song counts."""
    rows = get_store().playlists.list_playlists(current_user.id)
    return jsonify({
        'playlists': [playlist.to_dict(song_count=count) for playlist, count in rows],
    })


@bp.route('/playlists', methods=['POST'])
@login_required
def create_playlist():
    """Create a new playlist."""
    data = get_json_payload()
    playlist = get_store().playlists.create_playlist(current_user.id, data.get('nombre'))
    return jsonify({'playlist': playlist.to_dict(song_count=0)}), 201


@bp.route('/playlists/<int:playlist_id>', methods=['DELETE'])
@login_required
def delete_playlist(playlist_id):
    """Delete playlist and all its song memberships."""
    get_store().playlists.delete_playlist(playlist_id, current_user.id)
    return jsonify({'success': True})


# ==================== Song Management ====================

@bp.route('/playlists/<int:playlist_id>/songs', methods=['GET'])
@login_required
def get_playlist_songs(playlist_id):
    """Return the song paths of an owned playlist."""
    songs = get_store().playlists.list_songs(playlist_id, current_user.id)
    return jsonify({'songs': songs})


@bp.route('/playlists/<int:playlist_id>/songs', methods=['POST'])
@login_required
def add_song_to_playlist(playlist_id):
    """Add a song path to a playlist. Adding it twice is a no-op."""
    data = get_json_payload()
    added = get_store().playlists.add_song(playlist_id, current_user.id, data.get('songPath'))
    return jsonify({'success': True, 'added': added}), 201


@bp.route(
    '/playlists/<int:playlist_id>/songs/<songpath:song_path>',
    methods=['DELETE'],
    merge_slashes=False,
)
@login_required
def remove_song_from_playlist(playlist_id, song_path):
    """Remove a song path from a playlist. Idempotent."""
    get_store().playlists.remove_song(playlist_id, current_user.id, song_path)
    return jsonify({'success': True})
