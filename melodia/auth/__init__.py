"""
Authentication package for Melodia.
Flask-Login setup with a stateless, cookie-borne session token.
"""

import time

from flask import current_app
from flask_login import LoginManager

from melodia.exceptions import AuthenticationError

from .tokens import COOKIE_NAME, verify_token

login_manager = LoginManager()


def init_auth(app):
    """Initialize authentication with Flask app."""
    login_manager.init_app(app)
    # Identity comes only from the token cookie; nothing is kept in the Flask session
    login_manager.session_protection = None

    app.config.setdefault('MELODIA_CLOCK', time.time)

    @login_manager.request_loader
    def load_identity(request):
        token = request.cookies.get(COOKIE_NAME)
        clock = current_app.config['MELODIA_CLOCK']
        return verify_token(token, current_app.config['JWT_SECRET'], now=clock())

    @login_manager.unauthorized_handler
    def unauthorized():
        raise AuthenticationError()
