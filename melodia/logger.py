"""Logging setup for the Melodia service."""

import logging

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


def configure_logging(app):
    """
    Configure the ``melodia`` logger hierarchy and the Flask app logger.

    Safe to call once per app; handlers are only attached the first time.
    """
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)

    root = logging.getLogger('melodia')
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    app.logger.setLevel(level)
