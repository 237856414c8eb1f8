"""
Services package for Melodia.

The Store bundles the repositories the API layer talks to. One instance is
built per app in the factory and looked up through ``get_store()``.
"""

import logging

from flask import current_app

from .playlists import PlaylistRepository
from .users import CredentialStore

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'melodia.store'


class Store:
    """Storage facade exposing the ``users`` and ``playlists`` repositories."""

    def __init__(self, db):
        self.db = db
        self.users = CredentialStore(db)
        self.playlists = PlaylistRepository(db)

    def close(self):
        """Release pooled connections. Call once at shutdown."""
        self.db.session.remove()
        self.db.engine.dispose()
        logger.info('Store closed')


def init_store(app, db):
    """Build the app's Store and register it as an extension."""
    store = Store(db)
    app.extensions[EXTENSION_KEY] = store
    return store


def get_store() -> Store:
    return current_app.extensions[EXTENSION_KEY]


__all__ = ['Store', 'CredentialStore', 'PlaylistRepository', 'init_store', 'get_store']
