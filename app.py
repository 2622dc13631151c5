"""
HotelBooking - Hotel Room Reservation Service
Flask application factory and initialization
"""

import os
import click
import logging
from flask import Flask, g, jsonify
from dotenv import load_dotenv
from flask_wtf.csrf import CSRFError

# Load environment variables
load_dotenv()

# Import configuration
from config import config

# Import extensions
from extensions import login_manager, csrf

# Import database functions
from database import close_db, init_db


def create_app(config_name=None):
    """
    Application factory for Flask app.

    Args:
        config_name: Configuration name ('development', 'production', 'test')

    Returns:
        Flask application instance
    """
    # Determine config
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    config_class = config[config_name]
    if config_name == 'production':
        config_class.validate()

    # Create Flask app
    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config_class)

    # Initialize extensions
    initialize_extensions(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register CLI commands
    register_cli_commands(app)

    # Register teardown handlers
    register_teardown_handlers(app)

    # Configure logging
    configure_logging(app)

    return app


def initialize_extensions(app):
    """Initialize Flask extensions."""
    login_manager.init_app(app)
    csrf.init_app(app)


def register_blueprints(app):
    """Register Flask blueprints."""
    from blueprints.auth.routes import auth_bp
    from blueprints.admin.routes import admin_bp
    from blueprints.api import api_bp

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(api_bp, url_prefix='/api')
    app.register_blueprint(admin_bp, url_prefix='/admin')

    @app.route('/')
    def index():
        """Service banner."""
        return jsonify({
            'name': app.config.get('APP_NAME', 'HotelBooking'),
            'version': app.config.get('APP_VERSION', '1.0.0'),
            'api': '/api'
        })


def error_status(error) -> int:
    """Map a BookingError subclass to its HTTP status."""
    from utils.exceptions import (
        ValidationError, RoomNotFound, HotelNotFound, ReservationNotFound,
        UserNotFound, NoAvailability, Unauthorized
    )

    if isinstance(error, ValidationError):
        return 400
    if isinstance(error, (RoomNotFound, HotelNotFound, ReservationNotFound, UserNotFound)):
        return 404
    if isinstance(error, NoAvailability):
        return 409
    if isinstance(error, Unauthorized):
        return 403
    return 400


def register_error_handlers(app):
    """Register error handlers."""
    from utils.api_response import api_error
    from utils.exceptions import BookingError
    from utils.messages import MESSAGES

    @app.errorhandler(BookingError)
    def booking_error(error):
        """Translate domain errors into JSON responses."""
        status = error_status(error)
        app.logger.warning(f"{type(error).__name__}: {error.message}")

        extra = {'error_type': type(error).__name__}
        field = getattr(error, 'field', None)
        if field:
            extra['field'] = field
        return api_error(error.message, status=status, **extra)

    @app.errorhandler(CSRFError)
    def csrf_error(error):
        """Handle missing or expired CSRF tokens."""
        return api_error(error.description, status=400)

    @app.errorhandler(404)
    def not_found_error(error):
        """Handle 404 errors."""
        return api_error('Not found', status=404)

    @app.errorhandler(405)
    def method_not_allowed_error(error):
        """Handle 405 errors."""
        return api_error('Method not allowed', status=405)

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        # Rollback database on error
        db = g.get('db')
        if db:
            db.rollback()
        app.logger.error(f"Unhandled error: {error}")
        return api_error(MESSAGES['internal_error'], status=500)


def register_cli_commands(app):
    """Register Flask CLI commands."""

    @app.cli.command('init-db')
    def init_db_command():
        """Initialize database with schema and seed data."""
        click.echo('Initializing database...')
        with app.app_context():
            init_db()
        click.echo('Database initialized successfully!')

    @app.cli.command('create-user')
    @click.argument('username')
    @click.argument('email')
    @click.option('--role', default='admin',
                  type=click.Choice(['user', 'admin', 'hotel_manager']),
                  help='Role to assign')
    @click.password_option()
    def create_user_command(username, email, role, password):
        """Create a new user."""
        from models.user import create_user
        from models.role import get_role_by_name

        with app.app_context():
            role_row = get_role_by_name(role)

            try:
                user_id = create_user(
                    username=username,
                    email=email,
                    password=password,
                    role_id=role_row['id']
                )
                click.echo(f'User created successfully! ID: {user_id}')
            except Exception as e:
                click.echo(f'Error creating user: {str(e)}', err=True)


def register_teardown_handlers(app):
    """Register teardown handlers."""

    @app.teardown_appcontext
    def teardown_db(error):
        """Close database connection at end of request."""
        close_db(error)


def configure_logging(app):
    """Configure application logging."""
    if not app.debug and not app.testing:
        # Production logging
        if not os.path.exists('logs'):
            os.mkdir('logs')

        file_handler = logging.FileHandler('logs/hotel_booking.log')
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)
        logging.getLogger('models').addHandler(file_handler)
        logging.getLogger('models').setLevel(logging.INFO)

        app.logger.setLevel(logging.INFO)
        app.logger.info('HotelBooking startup')
    else:
        # Development logging
        app.logger.setLevel(logging.DEBUG)


# Create application instance for development server
if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', debug=True)
