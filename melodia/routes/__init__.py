"""
Routes package for Melodia.
"""

from .playlists import bp as playlists_bp

__all__ = ['playlists_bp']
