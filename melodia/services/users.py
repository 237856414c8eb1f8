"""
Credential store: registration, lookup and password verification.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from werkzeug.security import check_password_hash, generate_password_hash

from melodia.exceptions import DuplicateEmail, ValidationError
from melodia.models import User

logger = logging.getLogger(__name__)


class CredentialStore:
    """Persists users and checks their passwords."""

    def __init__(self, db):
        self.db = db
        self._dummy_hash = None

    def register(self, name: str, email: str, password: str) -> User:
        """Create a new user, failing with DuplicateEmail if the email is taken."""
        name = (name or '').strip()
        email = (email or '').strip()

        if not name:
            raise ValidationError('Name is required', field='nombre')
        if not email:
            raise ValidationError('Email is required', field='email')
        if not password:
            raise ValidationError('Password is required', field='password')

        if self.find_by_email(email) is not None:
            raise DuplicateEmail(email)

        user = User(name=name, email=email)
        user.set_password(password)
        self.db.session.add(user)
        try:
            self.db.session.commit()
        except IntegrityError:
            # Lost a race against a concurrent registration
            self.db.session.rollback()
            raise DuplicateEmail(email)

        logger.info('User registered: %s (id=%s)', user.email, user.id)
        return user

    def get(self, user_id) -> Optional[User]:
        return self.db.session.get(User, user_id)

    def find_by_email(self, email: str) -> Optional[User]:
        """Exact, case-sensitive match on the stored email."""
        return User.query.filter_by(email=email).first()

    def verify_password(self, user: User, password: str) -> bool:
        return user.check_password(password or '')

    def authenticate(self, email: str, password: str) -> Optional[User]:
        """
        Return the user for valid credentials, None otherwise.

        An unknown email still pays for one hash verification so the two
        failure cases cannot be told apart by timing.
        """
        user = self.find_by_email((email or '').strip())
        if user is None:
            self._burn_verify(password or '')
            logger.info('Login failed for %s', email)
            return None
        if not self.verify_password(user, password):
            logger.info('Login failed for %s', email)
            return None
        return user

    def _burn_verify(self, password: str):
        if self._dummy_hash is None:
            self._dummy_hash = generate_password_hash('melodia-dummy-password')
        check_password_hash(self._dummy_hash, password)
