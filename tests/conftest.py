"""Root pytest configuration.

``tests/cdcp/unit`` runs on every invocation. ``tests/cdcp/integration``
needs Docker (Testcontainers PostgreSQL); its tests carry
``@pytest.mark.integration`` and are skipped unless enabled with
``--run-integration``/``--run-all`` or ``RUN_INTEGRATION=1``/``RUN_ALL_TESTS=1``.
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

CONFIG_DIR = Path(__file__).resolve().parents[1] / "config"

for _name in (".env.dev", ".env"):
    if (CONFIG_DIR / _name).exists():
        load_dotenv(CONFIG_DIR / _name)
        break

# Settings require these; test-only values
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-for-testing-only")
os.environ.setdefault("POSTGRES_PASSWORD", "test-password")
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite+aiosqlite:///:memory:")

from cdcp_config import clear_settings_cache  # noqa: E402

_TRUTHY = {"1", "true", "yes"}


def _env_enabled(name: str) -> bool:
    return os.environ.get(name, "").lower() in _TRUTHY


def pytest_addoption(parser):
    group = parser.getgroup("cdcp")
    group.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Also run @pytest.mark.integration tests (needs Docker)",
    )
    group.addoption(
        "--run-all",
        action="store_true",
        default=False,
        help="Run every collected test",
    )


def pytest_configure(config):
    config.addinivalue_line(
        "markers",
        "integration: needs a Testcontainers PostgreSQL database",
    )


def _integration_enabled(config) -> bool:
    return any(
        (
            config.getoption("--run-all"),
            config.getoption("--run-integration"),
            _env_enabled("RUN_ALL_TESTS"),
            _env_enabled("RUN_INTEGRATION"),
        ),
    )


def pytest_collection_modifyitems(config, items):
    if _integration_enabled(config):
        return

    skip = pytest.mark.skip(reason="integration test; enable with --run-integration")
    for item in items:
        if item.get_closest_marker("integration") is not None:
            item.add_marker(skip)


@pytest.fixture(scope="session", autouse=True)
def fresh_settings():
    """Drop cached settings so they are read from the test environment."""
    clear_settings_cache()
    yield
    clear_settings_cache()
