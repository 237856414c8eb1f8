"""
Auth Routes - Register, login, logout and session check.
"""

from flask import Blueprint, current_app, jsonify, make_response
from flask_login import current_user, login_required

from melodia.exceptions import ValidationError
from melodia.limiter import limiter
from melodia.services import get_store
from melodia.utils import get_json_payload, is_valid_email, require_str

from .tokens import DAY, clear_session_cookie, issue_token, set_session_cookie

bp = Blueprint('auth', __name__)

INVALID_CREDENTIALS = 'Invalid credentials'


def _register_limit():
    return current_app.config['REGISTER_RATE_LIMIT']


def _login_limit():
    return current_app.config['LOGIN_RATE_LIMIT']


def _secure_cookies():
    return current_app.config.get('MELODIA_ENV') != 'development'


@bp.route('/api/register', methods=['POST'])
@limiter.limit(_register_limit)
def register():
    """Create a new user account."""
    data = get_json_payload()

    name = require_str(data, 'nombre')
    email = require_str(data, 'email')
    password = require_str(data, 'password', strip=False)

    if not is_valid_email(email):
        raise ValidationError('Valid email is required', field='email')

    user = get_store().users.register(name, email, password)
    return jsonify({'user': user.to_dict()}), 201


@bp.route('/api/login', methods=['POST'])
@limiter.limit(_login_limit)
def login():
    """Login with email and password; sets the session cookie."""
    data = get_json_payload()

    email = data.get('email')
    password = data.get('password')
    if not isinstance(email, str) or not isinstance(password, str) or not email or not password:
        return jsonify({'error': INVALID_CREDENTIALS}), 400

    user = get_store().users.authenticate(email, password)
    if user is None:
        return jsonify({'error': INVALID_CREDENTIALS}), 400

    ttl = current_app.config['SESSION_TTL_DAYS'] * DAY
    token = issue_token(
        user,
        current_app.config['JWT_SECRET'],
        now=current_app.config['MELODIA_CLOCK'](),
        ttl=ttl,
    )

    response = make_response(jsonify({'user': user.to_dict()}))
    set_session_cookie(response, token, secure=_secure_cookies(), ttl=ttl)
    return response


@bp.route('/api/logout', methods=['POST'])
def logout():
    """Clear the session cookie. The token itself is not revoked."""
    response = make_response(jsonify({'success': True}))
    clear_session_cookie(response, secure=_secure_cookies())
    return response


@bp.route('/api/verify', methods=['GET'])
@login_required
def verify():
    """Return the identity carried by the session cookie."""
    return jsonify({'user': current_user.to_dict()})
