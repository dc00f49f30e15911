"""
Climatrix - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance.
"""

import logging
import os

from flask import Flask, jsonify
from sqlalchemy import text

from climatrix.config import Config
from climatrix.extensions import cache, db

logger = logging.getLogger(__name__)


def create_app(config_class=Config):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    _configure_logging(app)

    # Fail at startup rather than at the first login
    from climatrix.services.auth import expiration_seconds
    expiration_seconds(app.config['JWT_EXPIRES_IN'])

    # Initialize extensions
    db.init_app(app)
    cache.init_app(app)

    from climatrix.errors import register_error_handlers
    register_error_handlers(app)

    # Register blueprints
    from climatrix.alerts import alerts_bp
    from climatrix.auth import auth_bp
    from climatrix.climate import climate_bp
    from climatrix.community import community_bp
    from climatrix.pledges import pledges_bp
    from climatrix.profile import profile_bp
    from climatrix.supply_chain import supply_chain_bp
    from climatrix.weather import weather_bp

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(climate_bp, url_prefix='/api/climate')
    app.register_blueprint(alerts_bp, url_prefix='/api/alerts')
    app.register_blueprint(community_bp, url_prefix='/api')
    app.register_blueprint(pledges_bp, url_prefix='/api/pledges')
    app.register_blueprint(supply_chain_bp, url_prefix='/api/supply-chain')
    app.register_blueprint(profile_bp, url_prefix='/api/profile')
    app.register_blueprint(weather_bp, url_prefix='/api/weather')

    from climatrix.cli import register_commands
    register_commands(app)

    @app.after_request
    def add_cors_headers(response):
        response.headers['Access-Control-Allow-Origin'] = app.config['APP_URL']
        response.headers['Access-Control-Allow-Methods'] = 'GET, POST, PATCH, DELETE, OPTIONS'
        response.headers['Access-Control-Allow-Headers'] = 'Content-Type, Authorization'
        response.headers['Access-Control-Allow-Credentials'] = 'true'
        return response

    @app.route('/health')
    def health():
        """Liveness plus reachability of the database and the cache"""
        try:
            db.session.execute(text('SELECT 1'))
            database_ok = True
        except Exception as e:
            db.session.rollback()
            logger.warning('Database health check failed: %s', e)
            database_ok = False
        return jsonify({'status': 'ok', 'database': database_ok, 'cache': cache.ping()})

    # Create database tables
    with app.app_context():
        os.makedirs(app.instance_path, exist_ok=True)
        db.create_all()

    return app


def _configure_logging(app):
    """Send the package's log records to one stream handler at LOG_LEVEL."""
    package_logger = logging.getLogger('climatrix')
    package_logger.setLevel(app.config['LOG_LEVEL'])
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s [%(name)s] %(message)s'))
        package_logger.addHandler(handler)
