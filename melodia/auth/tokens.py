"""JWT session tokens carried in the ``token`` cookie.

Tokens are self-contained: the payload holds the user id, email and display
name, and verification needs nothing but the signing secret and a clock.
There is no server-side session table. Logging out only clears the cookie;
the token stays valid until it expires.

Verification takes ``now`` explicitly so expiry can be tested without
touching the wall clock::

    token = issue_token(user, secret, now=t0)
    verify_token(token, secret, now=t0 + 6 * DAY)   # -> SessionIdentity
    verify_token(token, secret, now=t0 + 8 * DAY)   # -> None
"""

import time
from typing import Optional

import jwt  # PyJWT
from flask_login import UserMixin

_ALGORITHM = 'HS256'
DAY = 60 * 60 * 24
DEFAULT_TTL = 7 * DAY

COOKIE_NAME = 'token'


class SessionIdentity(UserMixin):
    """Caller identity rebuilt from a verified token."""

    def __init__(self, user_id: int, email: str, name: str, expires_at: int):
        self.id = user_id
        self.email = email
        self.name = name
        self.expires_at = expires_at

    def to_dict(self) -> dict:
        return {'id': self.id, 'nombre': self.name, 'email': self.email}


def issue_token(user, secret: str, now: Optional[float] = None, ttl: int = DEFAULT_TTL) -> str:
    """Create a signed JWT for the given user."""
    issued_at = int(time.time() if now is None else now)
    payload = {
        'sub': str(user.id),
        'email': user.email,
        'nombre': user.name,
        'iat': issued_at,
        'exp': issued_at + ttl,
    }
    return jwt.encode(payload, secret, algorithm=_ALGORITHM)


def verify_token(token: Optional[str], secret: str, now: Optional[float] = None) -> Optional[SessionIdentity]:
    """Verify and decode a JWT.

    Returns a SessionIdentity on success, or None if the token is missing,
    malformed, mis-signed or expired. Callers must not tell these apart.
    """
    if not token:
        return None

    try:
        # Expiry is checked below against the injected clock
        payload = jwt.decode(
            token,
            secret,
            algorithms=[_ALGORITHM],
            options={
                'require': ['sub', 'exp', 'iat'],
                'verify_exp': False,
                'verify_iat': False,
                'verify_nbf': False,
            },
        )
    except jwt.InvalidTokenError:
        return None

    current = time.time() if now is None else now
    try:
        expires_at = int(payload['exp'])
        user_id = int(payload['sub'])
    except (TypeError, ValueError):
        return None
    if current >= expires_at:
        return None

    return SessionIdentity(
        user_id=user_id,
        email=payload.get('email', ''),
        name=payload.get('nombre', ''),
        expires_at=expires_at,
    )


def set_session_cookie(response, token: str, secure: bool = False, ttl: int = DEFAULT_TTL):
    """Attach the session cookie to a response."""
    response.set_cookie(
        COOKIE_NAME,
        token,
        max_age=ttl,
        httponly=True,
        secure=secure,
        samesite='Lax',
    )
    return response


def clear_session_cookie(response, secure: bool = False):
    """Expire the session cookie on the client."""
    response.delete_cookie(
        COOKIE_NAME,
        httponly=True,
        secure=secure,
        samesite='Lax',
    )
    return response
