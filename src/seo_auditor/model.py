from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Severity = Literal["error", "warning", "notice"]
RuleScope = Literal["page", "site"]

SEVERITY_ORDER: Dict[str, int] = {"error": 0, "warning": 1, "notice": 2}


class _CamelModel(BaseModel):
    """Serializes to camelCase (the report/exclusion file format) but accepts both spellings."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SEORule(BaseModel):
    """Static catalog entry: rule id mapped to its metadata."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: str
    severity: Severity
    fix_hint: str
    scope: RuleScope = "page"


class Issue(_CamelModel):
    """
    One triggered rule instance.

    Two issues with the same fingerprint are the same issue across runs;
    the fingerprint drives both suppression and diffing.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    rule_id: str
    rule_name: str
    category: str
    severity: Severity
    file: str
    relative_path: str
    line: Optional[int] = None
    element: Optional[str] = None
    actual: Optional[str] = None
    expected: Optional[str] = None
    fix_hint: str
    fingerprint: str


class ExclusionRule(_CamelModel):
    """
    User-declared suppression. Every field is optional; the fields that are
    present are combined as a conjunction.
    """
    fingerprint: Optional[str] = None
    rule_id: Optional[str] = None
    file_path: Optional[str] = None
    element_pattern: Optional[str] = None
    reason: Optional[str] = None

    def is_empty(self) -> bool:
        return not (self.fingerprint or self.rule_id or self.file_path or self.element_pattern)


class CheckStats(_CamelModel):
    total_pages: int = 0
    total_issues: int = 0
    total_images: int = 0
    total_links: int = 0
    issues_by_severity: Dict[str, int] = Field(
        default_factory=lambda: {"error": 0, "warning": 0, "notice": 0}
    )
    issues_by_category: Dict[str, int] = Field(default_factory=dict)


class CheckResult(_CamelModel):
    """Final outcome of one audit run: kept issues plus aggregate statistics."""
    issues: List[Issue] = Field(default_factory=list)
    stats: CheckStats = Field(default_factory=CheckStats)
    excluded_count: int = 0
    disabled_count: int = 0
    duration: int = 0

    def count_at_or_above(self, severity: str) -> int:
        threshold = SEVERITY_ORDER.get(severity, 0)
        return sum(1 for i in self.issues if SEVERITY_ORDER[i.severity] <= threshold)
