"""
User model for authentication.
"""

from datetime import datetime

from werkzeug.security import generate_password_hash, check_password_hash

from .database import db


class User(db.Model):
    """Registered account. Immutable after creation."""

    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), nullable=False, unique=True, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    def set_password(self, password):
        """Hash and store password."""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        """Verify password against stored hash."""
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    def to_dict(self):
        """Serialize user for API responses. Never expose password_hash."""
        return {
            'id': self.id,
            'nombre': self.name,
            'email': self.email,
        }

    def __repr__(self):
        return f'<User {self.id} {self.email}>'
