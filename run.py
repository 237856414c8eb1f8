#!/usr/bin/env python3
"""
Melodia - personal music player backend

Single entry point for the application.
Run with: python run.py
"""

from dotenv import load_dotenv
load_dotenv()

from config import config
from melodia import create_app
from melodia.services import get_store

app = create_app()

if __name__ == '__main__':
    print(f"""
    ╔═══════════════════════════════════════╗
    ║                                       ║
    ║     🎵  M E L O D I A  🎵             ║
    ║     Playlists & sessions API          ║
    ║                                       ║
    ╚═══════════════════════════════════════╝

    🌐 Listening on http://{config.HOST}:{config.PORT}
    🔓 Trusted origin: {config.TRUSTED_ORIGIN}

    Press Ctrl+C to stop
    """)

    try:
        app.run(debug=config.DEBUG, host=config.HOST, port=config.PORT, threaded=True)
    finally:
        with app.app_context():
            get_store().close()
