"""Pytest configuration and fixtures."""

import os
from collections.abc import Callable
from typing import Any

import pytest

import scriptboard.config.settings as settings_module
from scriptboard.board.models import Scene
from scriptboard.config import ScriptBoardSettings, set_settings
from scriptboard.store import MemorySceneStore, SQLiteSceneStore
from tests.helpers import COFFEE_SHOP_SCRIPT


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "integration: mark test as integration test")


@pytest.fixture(autouse=True)
def isolated_test_environment(tmp_path, monkeypatch):
    """Run every test against its own database and settings.

    LLM variables from the developer's shell are removed so no test can
    reach a real endpoint.
    """
    for var in [k for k in os.environ if k.startswith("SCRIPTBOARD_")]:
        monkeypatch.delenv(var, raising=False)

    db_path = tmp_path / "test_scriptboard.db"
    monkeypatch.setenv("SCRIPTBOARD_DATABASE_PATH", str(db_path))
    set_settings(ScriptBoardSettings(database_path=db_path))

    yield

    settings_module._settings = None


@pytest.fixture
def settings(tmp_path) -> ScriptBoardSettings:
    """Settings pointing at a temporary database."""
    return ScriptBoardSettings(database_path=tmp_path / "board.db")


@pytest.fixture
def memory_store() -> MemorySceneStore:
    """Empty in-process scene store."""
    return MemorySceneStore()


@pytest.fixture
def sqlite_store(settings):
    """SQLite scene store on a temporary file, closed after the test."""
    store = SQLiteSceneStore(settings=settings)
    yield store
    store.close()


@pytest.fixture
def make_scene() -> Callable[..., Scene]:
    """Factory for scenes with sequential ids."""
    counter = {"n": 0}

    def _make(**fields: Any) -> Scene:
        counter["n"] += 1
        fields.setdefault("id", f"scene-{counter['n']}")
        fields.setdefault("scene_number", str(counter["n"]))
        return Scene.model_validate(fields)

    return _make


@pytest.fixture
def coffee_shop_script() -> str:
    """Two-scene script with a day and a night scene."""
    return COFFEE_SHOP_SCRIPT
