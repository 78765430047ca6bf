import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from distaudit.model import AuditConfig, ConfigError

logger = logging.getLogger(__name__)


def load_audit_config(path: Optional[Union[str, Path]]) -> Dict[str, Any]:
    """
    Loads a project audit configuration (e.g. seo-check.json).

    A missing or unreadable file is logged and results in an empty dict,
    so that CLI flags alone can still describe a run.
    """
    if not path:
        return {}
    config_path = Path(path)
    try:
        if not config_path.exists():
            logger.warning("Configuration file not found at %s. Using CLI values only.", config_path)
            return {}

        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, dict):
            logger.error("Configuration file %s does not contain a JSON object.", config_path)
            return {}
        return data

    except (OSError, json.JSONDecodeError) as e:
        logger.error("Failed to load configuration %s: %s", config_path, e)
        return {}


def build_audit_config(file_values: Optional[Dict[str, Any]] = None,
                       overrides: Optional[Dict[str, Any]] = None) -> AuditConfig:
    """
    Merges file values with CLI overrides (None overrides are ignored)
    and validates the result into an AuditConfig.

    Raises:
        ConfigError: if required fields are missing or have the wrong type.
    """
    merged: Dict[str, Any] = dict(file_values or {})
    for key, value in (overrides or {}).items():
        if value is None:
            continue
        # An override replaces both spellings of the key.
        camel = key.split("_")[0] + "".join(part.title() for part in key.split("_")[1:])
        merged.pop(camel, None)
        merged[key] = value

    try:
        return AuditConfig.model_validate(merged)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigError(f"Invalid audit configuration: {problems}") from e
