"""
Configuration Module for Melodia.
Centralizes all app settings with environment variable support.
"""

import hashlib
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Application configuration with sensible defaults."""

    # Paths
    BASE_DIR = Path(__file__).parent.parent
    DATABASE_PATH = BASE_DIR / 'melodia.db'

    # Flask: stable fallback key derived from the DB path so it survives restarts
    _fallback_key = hashlib.sha256(
        f'melodia-secret-{Path(__file__).parent.parent / "melodia.db"}'.encode()
    ).hexdigest()
    SECRET_KEY = os.getenv('SECRET_KEY', _fallback_key)
    DEBUG = os.getenv('FLASK_DEBUG', 'false').lower() == 'true'

    # Session tokens; rotating JWT_SECRET invalidates every outstanding token
    JWT_SECRET = os.getenv('JWT_SECRET', _fallback_key)
    SESSION_TTL_DAYS = int(os.getenv('SESSION_TTL_DAYS', '7'))

    # Deployment
    MELODIA_ENV = os.getenv('MELODIA_ENV', 'development').lower()
    TRUSTED_ORIGIN = os.getenv('TRUSTED_ORIGIN', 'http://localhost:5173')
    HOST = os.getenv('MELODIA_HOST', '0.0.0.0')
    PORT = int(os.getenv('MELODIA_PORT', '4000'))
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

    # Database
    SQLALCHEMY_DATABASE_URI = os.getenv(
        'MELODIA_DATABASE_URL', f'sqlite:///{DATABASE_PATH}'
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Rate limits for the public auth endpoints
    REGISTER_RATE_LIMIT = os.getenv('REGISTER_RATE_LIMIT', '10 per minute')
    LOGIN_RATE_LIMIT = os.getenv('LOGIN_RATE_LIMIT', '5 per minute')



# Create default instance
config = Config()
