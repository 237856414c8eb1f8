"""
Models package for Melodia.
"""

from .database import db, init_db
from .playlist import Playlist, PlaylistSong
from .user import User

__all__ = ['db', 'init_db', 'Playlist', 'PlaylistSong', 'User']
