import logging
import os

from flask import Flask, jsonify, request
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from .auth import login_manager
from .config import config
from .models import db
from .roster import RosterService

logger = logging.getLogger(__name__)

SERVER_ERROR = 'Server error'


def create_app(config_name: str = None) -> Flask:
    """Application factory for the sign-up service."""
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__,
                template_folder='templates')
    app.config.from_object(config[config_name])

    database_url = app.config['DATABASE_URL']
    persistence_enabled = bool(database_url)
    if not persistence_enabled:
        # Flask-SQLAlchemy needs some engine; the roster refuses to use it
        logger.warning("DATABASE_URL not set. Entries cannot be stored until it is configured.")
        database_url = 'sqlite://'
    app.config['SQLALCHEMY_DATABASE_URI'] = database_url

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)

    if persistence_enabled:
        with app.app_context():
            try:
                db.create_all()
                logger.info("Database connected")
            except SQLAlchemyError as e:
                logger.warning(f"Database connection error: {e}")

    # Store services on app for access in routes
    app.roster = RosterService(enabled=persistence_enabled)

    from .routes import entries, staff
    app.register_blueprint(entries.bp)
    app.register_blueprint(staff.bp)

    register_error_handlers(app)
    register_health_route(app)

    return app


def register_error_handlers(app: Flask):
    """Collapse unexpected failures into a generic 500."""

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        if isinstance(e, HTTPException):
            return e

        logger.exception(f"Unhandled error on {request.method} {request.path}")
        db.session.rollback()

        if request.endpoint == 'entries.submit':
            return jsonify({'ok': False, 'message': SERVER_ERROR}), 500
        return SERVER_ERROR, 500


def register_health_route(app: Flask):

    @app.route('/health')
    def health_check():
        """Health check endpoint."""
        db_ok = False
        if app.roster.enabled:
            try:
                db.session.execute(db.text('SELECT 1'))
                db_ok = True
            except SQLAlchemyError as e:
                logger.warning(f"Health check database error: {e}")
                db.session.rollback()

        code = 200 if db_ok else 503
        return jsonify({
            'status': 'healthy' if db_ok else 'unhealthy',
            'database': 'connected' if db_ok else 'disconnected'
        }), code
