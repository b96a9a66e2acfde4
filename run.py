#!/usr/bin/env python3
"""
Entry point for the Tournament Sign-up service.

Usage:
    python run.py

Environment Variables (a local .env file is read first):
    FLASK_ENV: development, production or testing (default: development)
    PORT: Port to run on (default: 3000)
    DATABASE_URL: SQLAlchemy database URL (unset disables storage)
    STAFF_PASSWORD: Shared password for the teacher dashboard
    SECRET_KEY: Session signing key
    LOG_LEVEL: Logging level (default: INFO)
"""
import logging
import os

from dotenv import load_dotenv


def configure_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def run_server():
    """Run the sign-up web service."""
    load_dotenv()
    configure_logging(os.getenv('LOG_LEVEL', 'INFO'))

    from signup.app import create_app

    app = create_app()
    port = app.config['PORT']
    debug = app.config.get('DEBUG', False)

    logging.getLogger(__name__).info(f"Listening on port {port}")
    app.run(host='0.0.0.0', port=port, debug=debug)


if __name__ == '__main__':
    run_server()
