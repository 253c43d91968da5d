" generic fixtures "
import logging
from pathlib import Path

import pytest

SAMPLE_CONFIG = Path(__file__).parent / "sample_config.kdl"


def pytest_configure():
    "Runs once before all"
    from niri_app_hotkey.logging_setup import init_logger

    init_logger("/dev/null", force_debug=True)


@pytest.fixture
def test_logger():
    "A silent logger"
    logger = logging.getLogger("niri_app_hotkey.tests")
    logger.handlers.clear()
    logger.addHandler(logging.NullHandler())
    logger.propagate = False
    logger.setLevel(logging.DEBUG)
    return logger


@pytest.fixture
def sample_config_path():
    return str(SAMPLE_CONFIG)


@pytest.fixture
def write_config(tmp_path):
    "Write a KDL config file and return its path"

    def _write(text, name="niri-app-hotkey.kdl"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _write
