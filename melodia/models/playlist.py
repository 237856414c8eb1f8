"""
Playlist models: user-owned playlists and their song memberships.
"""

from datetime import datetime

from .database import db


class Playlist(db.Model):
    """Playlist owned exclusively by one user."""

    __tablename__ = 'playlists'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    owner_user_id = db.Column(
        db.Integer,
        db.ForeignKey('users.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    songs = db.relationship(
        'PlaylistSong',
        back_populates='playlist',
        cascade='all, delete-orphan',
        lazy='dynamic',
    )
    owner = db.relationship('User', backref='owned_playlists')

    def to_dict(self, song_count=0):
        """Serialize playlist for API responses."""
        return {
            'id': self.id,
            'nombre': self.name,
            'songCount': song_count,
        }


class PlaylistSong(db.Model):
    """Membership of an opaque song path in a playlist."""

    __tablename__ = 'playlist_songs'
    __table_args__ = (
        db.UniqueConstraint('playlist_id', 'song_path', name='uq_playlist_song'),
    )

    id = db.Column(db.Integer, primary_key=True)
    playlist_id = db.Column(
        db.Integer,
        db.ForeignKey('playlists.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )
    song_path = db.Column(db.String(1024), nullable=False)
    added_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    playlist = db.relationship('Playlist', back_populates='songs')
