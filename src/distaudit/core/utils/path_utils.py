# src/distaudit/core/utils/path_utils.py
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class PathUtils:
    """
    A central utility for reliably retrieving important package and user paths.
    """

    # --- Package specific paths

    @staticmethod
    def get_content_root() -> Path:
        """Returns the directory holding the top-level packages (the 'src' folder)."""
        return Path(__file__).resolve().parents[3]

    @staticmethod
    def get_app_package_root() -> Path:
        return PathUtils.get_content_root() / "distaudit"

    @staticmethod
    def get_auditor_package_root() -> Path:
        return PathUtils.get_content_root() / "seo_auditor"

    @staticmethod
    def get_schemas_dir() -> Path:
        return PathUtils.get_auditor_package_root() / "schemas"

    # --- Working directory paths ---

    @staticmethod
    def get_default_config_file() -> Path:
        """
        Returns the path where a project-level audit config is expected.
        (e.g., ./seo-check.json)
        """
        return Path.cwd() / "seo-check.json"

    @staticmethod
    def get_default_exclusions_file() -> Path:
        """Returns the default location of the exclusions file in the working directory."""
        return Path.cwd() / "seo-exclusions.json"
