"""
Global test fixtures for the hurlkit project.
"""

import logging

import pytest

from hurlkit.config.settings import clear_settings_cache
from hurlkit.logging import set_debug_mode


@pytest.fixture(autouse=True)
def reset_hurlkit_state():
    """Reset cached settings and logging handlers between tests.

    The CLI commands install a console handler bound to the stderr of the
    invocation; it must not outlive the test that created it.
    """
    clear_settings_cache()
    yield
    clear_settings_cache()
    set_debug_mode(False)
    hurlkit_logger = logging.getLogger("hurlkit")
    for handler in hurlkit_logger.handlers[:]:
        hurlkit_logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def in_tmp_path(tmp_path, monkeypatch):
    """Run the test with the temporary directory as working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
