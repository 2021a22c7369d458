"""Unit tests for logging_config module."""

import logging

from flask import Flask

from customlists.logging_config import FilterListFormatter, configure_logging


class TestFilterListFormatterShortName:
    """Tests for _get_short_name transformation."""

    def setup_method(self):
        """Create formatter instance for each test."""
        self.formatter = FilterListFormatter()

    def test_removes_package_and_core_prefix(self):
        assert self.formatter._get_short_name('customlists.core.filtering.parser') == 'filtering.parser'

    def test_removes_blueprints_prefix(self):
        assert self.formatter._get_short_name('customlists.blueprints.api.customlists') == 'api.customlists'

    def test_removes_controller_suffix(self):
        name = 'customlists.core.filtering.reload_controller'
        assert self.formatter._get_short_name(name) == 'filtering.reload'

    def test_removes_store_suffix(self):
        name = 'customlists.core.filtering.filter_store'
        assert self.formatter._get_short_name(name) == 'filtering.filter'

    def test_removes_scheduler_suffix(self):
        name = 'customlists.services.update_scheduler'
        assert self.formatter._get_short_name(name) == 'services.update'

    def test_preserves_external_names(self):
        assert self.formatter._get_short_name('werkzeug.serving') == 'werkzeug.serving'
        assert self.formatter._get_short_name('customlists') == 'customlists'
        assert self.formatter._get_short_name('root') == 'root'


class TestFilterListFormatterFormat:
    """Tests for log record formatting."""

    def test_format_includes_short_name(self):
        formatter = FilterListFormatter()
        record = logging.LogRecord(
            name='customlists.core.filtering.reload_controller',
            level=logging.INFO,
            pathname='',
            lineno=0,
            msg='Custom filter list reloaded (ips=1)',
            args=(),
            exc_info=None,
        )

        output = formatter.format(record)

        assert '[INFO][filtering.reload] Custom filter list reloaded (ips=1)' in output
        assert output.startswith('[')


class TestConfigureLogging:
    """Tests for configure_logging."""

    def teardown_method(self):
        logging.getLogger().setLevel(logging.WARNING)

    def _app(self, **config):
        app = Flask(__name__)
        app.config.update(config)
        return app

    def test_debug_level_in_debug_mode(self):
        configure_logging(self._app(DEBUG=True))
        assert logging.getLogger().level == logging.DEBUG

    def test_info_level_otherwise(self):
        configure_logging(self._app(DEBUG=False))
        assert logging.getLogger().level == logging.INFO

    def test_explicit_level(self):
        configure_logging(self._app(DEBUG=True, CUSTOMLISTS_LOG_LEVEL='warning'))
        assert logging.getLogger().level == logging.WARNING

    def test_unknown_level_ignored(self):
        configure_logging(self._app(DEBUG=False, CUSTOMLISTS_LOG_LEVEL='verbose'))
        assert logging.getLogger().level == logging.INFO

    def test_single_handler_with_formatter(self):
        app = self._app(DEBUG=False)
        configure_logging(app)
        configure_logging(app)

        handlers = [
            h for h in logging.getLogger().handlers
            if isinstance(h.formatter, FilterListFormatter)
        ]
        assert len(handlers) == 1

    def test_quiets_library_loggers(self):
        configure_logging(self._app(DEBUG=True))
        assert logging.getLogger('werkzeug').level == logging.WARNING
        assert logging.getLogger('watchdog').level == logging.WARNING
