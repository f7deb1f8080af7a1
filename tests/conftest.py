" generic fixtures "
from pathlib import Path

import pytest

from taskcomp.constants import CONFIG_ENV_VAR

FIXTURE_PROJECTS = Path(__file__).parent / "fixture_projects"


def pytest_configure():
    "Runs once before all"
    from taskcomp.logging_setup import init_logger

    init_logger("/dev/null", force_debug=True, screen=False)


@pytest.fixture
def test_logger():
    from taskcomp.logging_setup import get_logger

    return get_logger("tests")


@pytest.fixture
def use_fixture_project(monkeypatch):
    "Returns a function moving into one of the fixture projects"
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)

    def _use(name: str) -> Path:
        path = FIXTURE_PROJECTS / name
        monkeypatch.chdir(path)
        return path

    return _use


@pytest.fixture
def no_project(monkeypatch, tmp_path):
    "Runs from a folder without project"
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("taskcomp.config_loader.CONFIG_FILENAME", "taskcomp-missing-for-tests.toml")
    yield tmp_path
