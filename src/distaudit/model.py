from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from seo_auditor.model import ExclusionRule


class DistAuditError(Exception):
    """Base class for errors that stop a run before a report can be produced."""


class ConfigError(DistAuditError):
    """Raised for an invalid audit configuration or a missing dist folder."""


class RulesConfig(BaseModel):
    disabled: List[str] = Field(default_factory=list)


class AuditConfig(BaseModel):
    """
    Configuration for one audit run.
    Loaded from a JSON file (camelCase or snake_case keys) and/or CLI flags.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    dist_path: str
    base_url: str
    main_domain: Optional[str] = None
    languages: List[str] = Field(default_factory=lambda: ["en"])
    default_language: str = "en"
    rules: RulesConfig = Field(default_factory=RulesConfig)
    exclusions: List[ExclusionRule] = Field(default_factory=list)
    exclusions_file: Optional[str] = None
    fail_on: Literal["error", "warning", "notice"] = "error"
    strict_fingerprints: bool = True

    @field_validator('base_url')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Page URLs are built as base_url + '/' + path, so the base never ends in a slash."""
        v = (v or "").strip()
        if not v:
            raise ValueError("base_url must not be empty")
        return v.rstrip("/")

    @field_validator('main_domain')
    @classmethod
    def blank_main_domain_is_none(cls, v: Optional[str]) -> Optional[str]:
        if isinstance(v, str):
            return v.strip() or None
        return v
