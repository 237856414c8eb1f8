"""
Playlist repository.

Every read or write on a playlist resolves it with a single query keyed
on both the playlist id and the acting owner. A playlist that exists but
belongs to someone else is indistinguishable from one that does not exist.
"""

import logging
from typing import List, Tuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from melodia.exceptions import NotFoundOrForbidden, ValidationError
from melodia.models import Playlist, PlaylistSong

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 120

# Largest id the database can store (signed 64-bit)
MAX_ID = 2 ** 63 - 1


class PlaylistRepository:
    """Ownership-scoped CRUD over playlists and their songs."""

    def __init__(self, db):
        self.db = db

    # ==================== Playlists ====================

    def list_playlists(self, owner_id) -> List[Tuple[Playlist, int]]:
        """Return (playlist, song_count) pairs in insertion order."""
        rows = (
            self.db.session.query(Playlist, func.count(PlaylistSong.id))
            .outerjoin(PlaylistSong, PlaylistSong.playlist_id == Playlist.id)
            .filter(Playlist.owner_user_id == owner_id)
            .group_by(Playlist.id)
            .order_by(Playlist.id)
            .all()
        )
        return [(playlist, count) for playlist, count in rows]

    def create_playlist(self, owner_id, name: str) -> Playlist:
        name = str(name or '').strip()
        if not name:
            raise ValidationError('Playlist name is required', field='nombre')
        if len(name) > MAX_NAME_LENGTH:
            raise ValidationError('Playlist name is too long', field='nombre')

        playlist = Playlist(name=name, owner_user_id=owner_id)
        self.db.session.add(playlist)
        self.db.session.commit()
        logger.info('Playlist created: %s for user %s', playlist.id, owner_id)
        return playlist

    def resolve_owned(self, playlist_id, owner_id) -> Playlist:
        """Fetch a playlist by id and owner in one lookup, or raise NotFoundOrForbidden."""
        if not 0 < playlist_id <= MAX_ID:
            raise NotFoundOrForbidden()
        playlist = Playlist.query.filter_by(
            id=playlist_id,
            owner_user_id=owner_id,
        ).first()
        if playlist is None:
            raise NotFoundOrForbidden()
        return playlist

    def delete_playlist(self, playlist_id, owner_id):
        """Delete an owned playlist together with all its memberships."""
        playlist = self.resolve_owned(playlist_id, owner_id)
        self.db.session.delete(playlist)
        self.db.session.commit()
        logger.info('Playlist deleted: %s', playlist_id)

    # ==================== Songs ====================

    def add_song(self, playlist_id, owner_id, song_path: str) -> bool:
        """
        Insert-or-ignore a song path into an owned playlist.

        Returns True when a membership row was created and False when the
        pair already existed. The (playlist_id, song_path) unique constraint
        is what rejects concurrent duplicates.
        """
        playlist = self.resolve_owned(playlist_id, owner_id)
        song_path = _require_song_path(song_path)

        exists = PlaylistSong.query.filter_by(
            playlist_id=playlist.id,
            song_path=song_path,
        ).first()
        if exists is not None:
            return False

        self.db.session.add(PlaylistSong(playlist_id=playlist.id, song_path=song_path))
        try:
            self.db.session.commit()
        except IntegrityError:
            self.db.session.rollback()
            return False

        logger.info('Song added to playlist %s: %s', playlist.id, song_path)
        return True

    def list_songs(self, playlist_id, owner_id) -> List[str]:
        playlist = self.resolve_owned(playlist_id, owner_id)
        rows = (
            self.db.session.query(PlaylistSong.song_path)
            .filter(PlaylistSong.playlist_id == playlist.id)
            .order_by(PlaylistSong.id)
            .all()
        )
        return [row.song_path for row in rows]

    def remove_song(self, playlist_id, owner_id, song_path: str):
        """Remove a membership. Removing an absent path is not an error."""
        playlist = self.resolve_owned(playlist_id, owner_id)
        removed = PlaylistSong.query.filter_by(
            playlist_id=playlist.id,
            song_path=song_path,
        ).delete(synchronize_session=False)
        self.db.session.commit()
        if removed:
            logger.info('Song removed from playlist %s: %s', playlist.id, song_path)


def _require_song_path(song_path) -> str:
    if not isinstance(song_path, str) or not song_path:
        raise ValidationError('songPath is required', field='songPath')
    return song_path
