"""customlists Application Factory.

This module provides the application factory pattern for creating Flask
application instances that serve the custom filter list.
"""

from pathlib import Path

from flask import Flask

from customlists.config import config

__version__ = '0.1.0'


def create_app(config_name='default', config_overrides=None):
    """Create and configure the Flask application.

    Args:
        config_name: Configuration name ('development', 'testing', 'production', 'default')
        config_overrides: Optional mapping applied on top of the configuration class

    Returns:
        Flask: Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config[config_name])
    if config_overrides:
        app.config.update(config_overrides)

    # Configure logging
    _configure_logging(app)

    # Initialize custom filter lists
    _configure_customlists(app)

    # Register blueprints
    _register_blueprints(app)

    # Register error handlers
    _register_error_handlers(app)

    app.logger.info(f'Application created (config={config_name})')

    return app


def _configure_logging(app):
    """Configure application logging with the short-name formatter.

    Args:
        app: Flask application instance
    """
    from customlists.logging_config import configure_logging
    configure_logging(app)


def _configure_customlists(app):
    """Create the custom filter list component and start its update checks.

    The component is stored in app.extensions['customlists']. The first
    check runs CUSTOMLISTS_INITIAL_CHECK_DELAY seconds after startup, then
    every CUSTOMLISTS_CHECK_INTERVAL seconds while a list file is configured.

    Args:
        app: Flask application instance
    """
    from customlists.core.filtering import CustomFilterLists
    from customlists.services import FilterListSettings

    try:
        # Relative paths are resolved against the project directory
        base_path = Path(app.root_path).parent

        config_path = app.config.get('CUSTOMLISTS_CONFIG_PATH')
        if config_path:
            config_path = Path(config_path)
            if not config_path.is_absolute():
                config_path = base_path / config_path

        settings = FilterListSettings(config_path, base_path=base_path)
        settings.load()

        customlists = CustomFilterLists(
            settings,
            initial_check_delay=app.config['CUSTOMLISTS_INITIAL_CHECK_DELAY'],
            check_interval=app.config['CUSTOMLISTS_CHECK_INTERVAL'],
        )
        app.extensions['customlists'] = customlists

        if app.config.get('CUSTOMLISTS_AUTOSTART', True):
            customlists.start()

        app.logger.info(
            f'Custom filter lists configured '
            f'(path={settings.get_file_path() or "<disabled>"}, '
            f'autostart={app.config.get("CUSTOMLISTS_AUTOSTART", True)})'
        )

    except Exception as e:
        app.logger.error(f'Failed to configure custom filter lists (error={str(e)})')
        # Graceful degradation: endpoints report CUSTOMLIST_NOT_INITIALIZED
        app.extensions.pop('customlists', None)


def _register_blueprints(app):
    """Register all application blueprints.

    Args:
        app: Flask application instance
    """
    from customlists.blueprints.api import api_bp

    app.register_blueprint(api_bp, url_prefix='/api')


def _register_error_handlers(app):
    """Register custom error handlers.

    Args:
        app: Flask application instance
    """
    from flask import jsonify

    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify({
            'success': False,
            'error': {
                'code': 'SYSTEM_NOT_FOUND',
                'message': 'The requested resource was not found',
                'details': {}
            }
        }), 404

    @app.errorhandler(405)
    def method_not_allowed_error(error):
        return jsonify({
            'success': False,
            'error': {
                'code': 'SYSTEM_METHOD_NOT_ALLOWED',
                'message': 'The method is not allowed for the requested URL',
                'details': {}
            }
        }), 405

    @app.errorhandler(500)
    def internal_error(error):
        return jsonify({
            'success': False,
            'error': {
                'code': 'SYSTEM_INTERNAL_ERROR',
                'message': 'An internal server error occurred',
                'details': {}
            }
        }), 500
