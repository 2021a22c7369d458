"""Pytest fixtures for customlists tests."""

import pytest

from customlists import create_app


SAMPLE_LIST = (
    "# Custom filter list\n"
    "US\n"
    "AS1234\n"
    "203.0.113.5\n"
    "evil.example\n"
    "example.co.uk  # blocks all subdomains\n"
    "\n"
)


@pytest.fixture
def list_file(tmp_path):
    """Create a filter list file with one entry of each type (plus one domain).

    Returns:
        Path: Path to the list file
    """
    path = tmp_path / "filterlist.txt"
    path.write_text(SAMPLE_LIST, encoding="utf-8")
    return path


@pytest.fixture
def config_file(tmp_path, list_file):
    """Create a YAML config pointing at the list file.

    Returns:
        Path: Path to the config file
    """
    path = tmp_path / "config" / "customlists.yaml"
    path.parent.mkdir()
    path.write_text(
        "customlists:\n"
        f"  file_path: {list_file}\n"
        "  watch_config: false\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def app():
    """Create application for testing.

    Returns:
        Flask: Application configured for testing (no list file configured)
    """
    app = create_app('testing')
    yield app
    app.extensions['customlists'].stop()


@pytest.fixture
def configured_app(config_file):
    """Create application for testing with a configured list file.

    Returns:
        Flask: Application whose settings point at the sample list
    """
    app = create_app('testing', {'CUSTOMLISTS_CONFIG_PATH': str(config_file)})
    yield app
    app.extensions['customlists'].stop()


@pytest.fixture
def client(app):
    """Create test client.

    Returns:
        FlaskClient: Test client for making requests
    """
    return app.test_client()


@pytest.fixture
def configured_client(configured_app):
    """Create test client for the application with a configured list file."""
    return configured_app.test_client()
