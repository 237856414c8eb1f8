"""
Melodia - personal music player backend

Flask application factory and initialization.
"""

import json

from flask import Flask, jsonify, request
from flask_cors import CORS
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from config import config

from .exceptions import AuthenticationError, MelodiaError

# Endpoints reachable without a session cookie
PUBLIC_ENDPOINTS = {
    'auth.register',
    'auth.login',
    'auth.logout',
    'health',
    'static',
}

_CONFIG_KEYS = (
    'SECRET_KEY',
    'JWT_SECRET',
    'SESSION_TTL_DAYS',
    'MELODIA_ENV',
    'TRUSTED_ORIGIN',
    'LOG_LEVEL',
    'SQLALCHEMY_DATABASE_URI',
    'SQLALCHEMY_TRACK_MODIFICATIONS',
    'REGISTER_RATE_LIMIT',
    'LOGIN_RATE_LIMIT',
)


def create_app(testing=False, overrides=None):
    """Create and configure the Flask application."""

    app = Flask(__name__)

    app.config['TESTING'] = testing

    # Configuration
    for key in _CONFIG_KEYS:
        app.config[key] = getattr(config, key)
    app.config.update(overrides or {})

    from .logger import configure_logging
    configure_logging(app)

    # Cross-origin calls from the trusted frontend, cookies included
    CORS(
        app,
        resources={r'/api/*': {'origins': app.config['TRUSTED_ORIGIN']}},
        supports_credentials=True,
    )

    # Initialize database and the storage facade
    from .models import db, init_db
    from .services import init_store
    init_db(app)
    init_store(app, db)

    # Initialize authentication
    from .auth import init_auth
    init_auth(app)

    # Initialize rate limiter
    from .limiter import limiter
    if app.config.get('TESTING'):
        app.config.setdefault('RATELIMIT_ENABLED', False)
    limiter.init_app(app)

    # Register blueprints
    from .routes.playlists import SongPathConverter
    app.url_map.converters['songpath'] = SongPathConverter

    from .auth.routes import bp as auth_bp
    from .routes.playlists import bp as playlists_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(playlists_bp, url_prefix='/api')

    _register_error_handlers(app, db)

    # Default-deny: require auth on all routes except explicit allowlist
    @app.before_request
    def require_auth():
        from flask_login import current_user as cu

        if request.method == 'OPTIONS':
            return
        endpoint = request.endpoint
        if endpoint is None:
            return
        if endpoint in PUBLIC_ENDPOINTS:
            return
        if cu.is_authenticated:
            return
        raise AuthenticationError()

    @app.after_request
    def add_security_headers(response):
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        return response

    @app.route('/health')
    def health():
        return jsonify({'status': 'healthy'})

    app.logger.info('Melodia app created (env=%s)', app.config['MELODIA_ENV'])
    return app


def _register_error_handlers(app, db):
    @app.errorhandler(MelodiaError)
    def handle_melodia_error(error):
        return jsonify({'error': error.message}), error.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_storage_error(error):
        db.session.rollback()
        app.logger.exception('Storage error on %s %s', request.method, request.path)
        return jsonify({'error': 'Internal server error'}), 500

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        # Keep werkzeug's status and headers (Allow, Retry-After), swap in a JSON body
        response = error.get_response()
        response.data = json.dumps({'error': error.description})
        response.content_type = 'application/json'
        return response

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        app.logger.exception('Unhandled error on %s %s', request.method, request.path)
        return jsonify({'error': 'Internal server error'}), 500


__all__ = ['create_app']
