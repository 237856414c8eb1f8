"""Request payload helpers."""

import re

from flask import request

from melodia.exceptions import ValidationError

_EMAIL_RE = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')


def is_valid_email(email):
    """Basic email format validation."""
    if not email or not isinstance(email, str):
        return False
    return bool(_EMAIL_RE.match(email))


def get_json_payload():
    """Return the request body as a dict, or raise ValidationError."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


def require_str(data, field, strip=True):
    """Fetch a non-empty string field from a payload."""
    value = data.get(field)
    if not isinstance(value, str):
        raise ValidationError(f'{field} is required', field=field)
    if strip:
        value = value.strip()
    if not value:
        raise ValidationError(f'{field} is required', field=field)
    return value
