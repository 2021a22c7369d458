"""Logging configuration with a short-module-name formatter.

Log lines follow the format:
[YYYY-MM-DD HH:MM:SS][LEVEL][module.submodule] Message (key=value)

Examples:
    customlists.core.filtering.reload_controller -> filtering.reload
    customlists.blueprints.api.customlists -> api.customlists
    customlists.services.update_scheduler -> services.update
"""

import logging


class FilterListFormatter(logging.Formatter):
    """Formatter that replaces the logger name by a short module name."""

    PACKAGE_PREFIX = 'customlists.'

    # Suffixes to remove for cleaner module names
    SUFFIXES_TO_STRIP = ('_controller', '_store', '_scheduler')

    def __init__(
        self,
        fmt: str = '[%(asctime)s][%(levelname)s][%(shortname)s] %(message)s',
        datefmt: str = '%Y-%m-%d %H:%M:%S',
    ):
        super().__init__(fmt=fmt, datefmt=datefmt)

    def format(self, record: logging.LogRecord) -> str:
        record.shortname = self._get_short_name(record.name)
        return super().format(record)

    def _get_short_name(self, name: str) -> str:
        """Transform a full module path to its short name.

        Args:
            name: Full Python module path (e.g. 'customlists.core.filtering.parser')

        Returns:
            Short module name (e.g. 'filtering.parser')
        """
        if not name.startswith(self.PACKAGE_PREFIX):
            return name
        name = name[len(self.PACKAGE_PREFIX):]

        # customlists.blueprints.api.customlists -> api.customlists
        if name.startswith('blueprints.'):
            name = name[len('blueprints.'):]

        # customlists.core.filtering.filter_store -> filtering.filter
        if name.startswith('core.'):
            name = name[len('core.'):]

        for suffix in self.SUFFIXES_TO_STRIP:
            if name.endswith(suffix):
                name = name[:-len(suffix)]
                break

        return name


def configure_logging(app) -> None:
    """Install the console handler on the root logger.

    Level is DEBUG in debug mode and INFO otherwise, unless
    CUSTOMLISTS_LOG_LEVEL names a level explicitly.

    Args:
        app: Flask application instance.
    """
    log_level = logging.DEBUG if app.config.get('DEBUG') else logging.INFO

    level_name = app.config.get('CUSTOMLISTS_LOG_LEVEL')
    if level_name:
        configured = logging.getLevelName(str(level_name).upper())
        if isinstance(configured, int):
            log_level = configured

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(FilterListFormatter())
    root_logger.addHandler(console_handler)

    # Reduce noise from external libraries
    for noisy in ('werkzeug', 'urllib3', 'watchdog', 'filelock'):
        logging.getLogger(noisy).setLevel(logging.WARNING)
