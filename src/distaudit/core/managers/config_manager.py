# src/distaudit/core/managers/config_manager.py
import json
import logging
from typing import Any, Dict

from distaudit.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

SETTINGS_FILE = "settings.json"


class ConfigManager:
    """
    Process-wide, read-only view of the settings.json that ships with distaudit:
    indexer thresholds, report metadata and the default log levels.

    Callers that need a different value (e.g. --workers) pass it as an argument
    instead of changing the settings.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._settings = {}
            cls._instance.reset()
        return cls._instance

    def reset(self) -> None:
        """(Re)reads settings.json. Without a readable file every lookup falls back to its default."""
        path = PathUtils.get_app_package_root() / SETTINGS_FILE
        try:
            with open(path, "r", encoding="utf-8") as f:
                loaded = json.load(f)
        except FileNotFoundError:
            logger.warning("%s not found at %s, using built-in defaults.", SETTINGS_FILE, path)
            loaded = {}
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Cannot read %s: %s", path, e)
            loaded = {}
        self._settings: Dict[str, Any] = loaded if isinstance(loaded, dict) else {}

    def section(self, name: str) -> Dict[str, Any]:
        """A copy of one top-level section, e.g. 'debug'."""
        value = self._settings.get(name)
        return dict(value) if isinstance(value, dict) else {}

    def get_nested(self, key_path: str, default: Any = None) -> Any:
        """'indexer.min_file_size' -> settings['indexer']['min_file_size'], or `default`."""
        node: Any = self._settings
        for key in key_path.split("."):
            if not isinstance(node, dict) or key not in node:
                return default
            node = node[key]
        return default if node is None else node


config_manager = ConfigManager()
