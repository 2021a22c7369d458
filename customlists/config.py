"""Configuration classes for the customlists application."""

import os


class Config:
    """Base configuration."""

    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key'
    CUSTOMLISTS_CONFIG_PATH = os.environ.get('CUSTOMLISTS_CONFIG_PATH') or 'data/config/customlists.yaml'
    CUSTOMLISTS_INITIAL_CHECK_DELAY = 20.0
    CUSTOMLISTS_CHECK_INTERVAL = 60.0
    CUSTOMLISTS_AUTOSTART = True
    CUSTOMLISTS_LOG_LEVEL = os.environ.get('CUSTOMLISTS_LOG_LEVEL')


class DevelopmentConfig(Config):
    """Development configuration."""

    DEBUG = True
    TESTING = False


class TestingConfig(Config):
    """Testing configuration."""

    DEBUG = False
    TESTING = True
    # No timers or watchers in tests, and no config file unless a test provides one
    CUSTOMLISTS_CONFIG_PATH = None
    CUSTOMLISTS_AUTOSTART = False


class ProductionConfig(Config):
    """Production configuration."""

    DEBUG = False
    TESTING = False


config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
