# tests/core/test_settings_manager.py
import json

import pytest

from distaudit.core.managers.config_manager import ConfigManager
from distaudit.core.utils.path_utils import PathUtils

# Een kleine, voorspelbare settings.json voor de tests
MOCK_SETTINGS_CONTENT = {
    "debug": {
        "level": "WARNING",
        "silenced_loggers": {"bs4": "ERROR"}
    },
    "indexer": {
        "min_file_size": 500,
        "workers": 0
    },
    "report": {
        "tool_name": "SEO Static Checker"
    }
}


@pytest.fixture
def settings_manager(tmp_path, monkeypatch):
    """
    Zet een nep 'settings.json' neer en laat PathUtils ernaar wijzen.
    Na de test wordt de singleton opnieuw geladen vanuit de echte package.
    """
    package_root = tmp_path / "distaudit"
    package_root.mkdir()
    (package_root / "settings.json").write_text(json.dumps(MOCK_SETTINGS_CONTENT))

    monkeypatch.setattr(PathUtils, "get_app_package_root", lambda: package_root)

    manager = ConfigManager()
    manager.reset()  # Forceer herladen vanuit ons nep-bestand
    yield manager

    monkeypatch.undo()
    manager.reset()


def test_singleton():
    assert ConfigManager() is ConfigManager()


def test_get_nested(settings_manager):
    assert settings_manager.get_nested("report.tool_name") == "SEO Static Checker"
    assert settings_manager.get_nested("indexer.min_file_size") == 500
    assert settings_manager.get_nested("indexer.workers", 4) == 0
    assert settings_manager.get_nested("indexer.missing", "default") == "default"
    assert settings_manager.get_nested("debug.level.deeper", 1) == 1


def test_section_is_a_copy(settings_manager):
    """De CLI leest de hele 'debug'-sectie; wijzigen aan de kopie lekken niet terug."""
    debug = settings_manager.section("debug")
    assert debug == MOCK_SETTINGS_CONTENT["debug"]

    debug["level"] = "DEBUG"
    assert settings_manager.get_nested("debug.level") == "WARNING"
    assert settings_manager.section("nonexistent") == {}
    assert settings_manager.section("indexer") == {"min_file_size": 500, "workers": 0}


def test_missing_or_broken_settings_file(tmp_path, monkeypatch):
    monkeypatch.setattr(PathUtils, "get_app_package_root", lambda: tmp_path / "nowhere")
    manager = ConfigManager()
    manager.reset()
    assert manager.section("debug") == {}
    assert manager.get_nested("indexer.min_file_size", 123) == 123

    broken_root = tmp_path / "broken"
    broken_root.mkdir()
    (broken_root / "settings.json").write_text("{not json")
    monkeypatch.setattr(PathUtils, "get_app_package_root", lambda: broken_root)
    manager.reset()
    assert manager.get_nested("report.tool_name", "fallback") == "fallback"

    monkeypatch.undo()
    manager.reset()
    assert manager.get_nested("indexer.min_file_size") == 500
