"""
Pytest configuration and fixtures for the numan test suite.

Every test runs against a throwaway configuration directory so that no test
reads or writes the real per-user config.json.

Environment Variables:
    NUMAN_CONFIG_DIR: Redirected to a temporary directory for each test
    NUMAN_REGISTRY_URL: Removed so the default endpoint is used
"""

import logging

import pytest

import numan.config
import numan.utils.tb_logger


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "network: mark test as requiring nuget.org")


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path, monkeypatch):
    """Point numan at a per-test configuration directory."""
    config_dir = tmp_path / "numan-config"
    monkeypatch.setenv("NUMAN_CONFIG_DIR", str(config_dir))
    monkeypatch.delenv("NUMAN_REGISTRY_URL", raising=False)
    monkeypatch.delenv("NUMAN_ARCHIVE_EXTENSION", raising=False)
    monkeypatch.setattr(numan.config, "_settings", None)
    yield config_dir


@pytest.fixture(autouse=True)
def reset_numan_logger():
    """Undo handlers and propagation changes made by setup_logging."""
    yield
    logger = logging.getLogger("numan")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    numan.utils.tb_logger.loggerNameOfNuman = "numan"
