#!/usr/bin/env python3
"""
Melodia CLI: database and account management commands.

Usage:
    python manage.py init-db
    python manage.py create-user <email> <name>

create-user reads the password from MELODIA_USER_PASSWORD (env or .env file)
so it never appears in shell history.
"""

import os
import sys

from dotenv import load_dotenv


def init_db(app=None):
    """Create all tables."""
    from melodia import create_app
    app = app or create_app()

    with app.app_context():
        from melodia.models import db
        db.create_all()
    print(f"✅ Database ready at {app.config['SQLALCHEMY_DATABASE_URI']}")
    return 0


def create_user(email, name, app=None):
    """Register an account from the command line."""
    password = os.getenv('MELODIA_USER_PASSWORD')
    if not password:
        print("❌ MELODIA_USER_PASSWORD must be set.")
        return 1

    from melodia import create_app
    from melodia.exceptions import MelodiaError
    from melodia.services import get_store

    app = app or create_app()

    with app.app_context():
        try:
            user = get_store().users.register(name, email, password)
        except MelodiaError as e:
            print(f"❌ {e.message}")
            return 1
        print(f"✅ User created: {user.email} (id={user.id})")
    return 0


def main(argv=None, app=None):
    load_dotenv()
    argv = sys.argv[1:] if argv is None else argv

    if not argv:
        print("Usage: python manage.py <command>")
        print("Commands:")
        print("  init-db                     Create database tables")
        print("  create-user <email> <name>  Register a user (password from MELODIA_USER_PASSWORD)")
        return 1

    command = argv[0]

    if command == 'init-db':
        return init_db(app)
    if command == 'create-user':
        if len(argv) < 3:
            print("Usage: python manage.py create-user <email> <name>")
            return 1
        return create_user(argv[1], ' '.join(argv[2:]), app)

    print(f"❌ Unknown command: {command}")
    return 1


if __name__ == '__main__':
    sys.exit(main())
