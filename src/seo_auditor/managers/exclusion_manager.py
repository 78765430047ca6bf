# src/seo_auditor/managers/exclusion_manager.py
import json
import logging
import re
from pathlib import Path
from typing import Iterable, List, Literal, Optional, Tuple, Union

from pydantic import ValidationError

from seo_auditor.model import ExclusionRule, Issue

logger = logging.getLogger(__name__)

ExclusionKind = Literal["fingerprint", "file", "rule"]


def glob_to_regex(pattern: str) -> "re.Pattern[str]":
    """
    Translates a path glob: '**' matches across segments, '*' within one.
    Everything else is literal and the whole path must match.
    """
    parts = []
    i = 0
    while i < len(pattern):
        if pattern.startswith("**", i):
            parts.append(".*")
            i += 2
        elif pattern[i] == "*":
            parts.append("[^/]*")
            i += 1
        else:
            parts.append(re.escape(pattern[i]))
            i += 1
    return re.compile("^" + "".join(parts) + "$")


def _element_matches(pattern: str, element: Optional[str]) -> bool:
    try:
        return re.search(pattern, element or "") is not None
    except re.error as e:
        logger.warning("Invalid elementPattern %r in exclusions: %s", pattern, e)
        return False


def matches_rule(issue: Issue, rule: ExclusionRule, strict: bool = True) -> bool:
    """Conjunction over the fields the rule sets. A rule without fields matches nothing."""
    if rule.is_empty():
        return False
    if rule.fingerprint and strict and rule.fingerprint != issue.fingerprint:
        return False
    if rule.rule_id and rule.rule_id != issue.rule_id:
        return False
    if rule.file_path and not glob_to_regex(rule.file_path).match(issue.relative_path):
        return False
    if rule.element_pattern and not _element_matches(rule.element_pattern, issue.element):
        return False
    return True


def should_exclude_issue(issue: Issue, rules: Iterable[ExclusionRule], strict: bool = True) -> bool:
    return any(matches_rule(issue, rule, strict) for rule in rules)


def filter_excluded_issues(issues: List[Issue], config, extra_rules: Optional[List[ExclusionRule]] = None
                           ) -> Tuple[List[Issue], int]:
    """Drops issues matched by the config exclusions (plus `extra_rules`). Returns (kept, excluded count)."""
    rules = list(config.exclusions or []) + list(extra_rules or [])
    if not rules:
        return list(issues), 0
    strict = getattr(config, "strict_fingerprints", True)
    kept = [issue for issue in issues if not should_exclude_issue(issue, rules, strict)]
    return kept, len(issues) - len(kept)


def filter_disabled_rules(issues: List[Issue], config) -> List[Issue]:
    disabled = set(config.rules.disabled or []) if config.rules else set()
    if not disabled:
        return list(issues)
    return [issue for issue in issues if issue.rule_id not in disabled]


def generate_exclusion_for_issue(issue: Issue, kind: ExclusionKind = "fingerprint") -> ExclusionRule:
    if kind == "rule":
        return ExclusionRule(rule_id=issue.rule_id, reason=f"Excluded rule: {issue.rule_name} ({issue.rule_id})")
    if kind == "file":
        return ExclusionRule(
            rule_id=issue.rule_id,
            file_path=issue.relative_path,
            reason=f"Excluded {issue.rule_id} in {issue.relative_path}",
        )
    return ExclusionRule(
        fingerprint=issue.fingerprint,
        reason=f"Excluded: {issue.rule_name} in {issue.relative_path}",
    )


def load_exclusions_from_file(path: Union[str, Path]) -> List[ExclusionRule]:
    """Reads `{"exclusions": [...]}` or a bare list. Problems are logged and give an empty list."""
    path = Path(path)
    if not path.exists():
        logger.warning("Exclusions file not found: %s", path)
        return []
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Could not read exclusions file %s: %s", path, e)
        return []

    if isinstance(data, dict):
        data = data.get("exclusions")
    if not isinstance(data, list):
        logger.warning("Exclusions file %s has no 'exclusions' list.", path)
        return []

    rules = []
    for entry in data:
        try:
            rules.append(ExclusionRule.model_validate(entry))
        except ValidationError as e:
            logger.warning("Skipping invalid exclusion %r: %s", entry, e)
    return rules


def export_exclusions_to_file(rules: List[ExclusionRule], path: Union[str, Path]) -> None:
    payload = {"exclusions": [rule.model_dump(by_alias=True, exclude_none=True) for rule in rules]}
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)
        f.write("\n")


class ExclusionManager:
    """
    File-backed exclusion list, used by the 'exclude' command to merge newly
    generated exclusions into an existing file without duplicating entries.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.rules: List[ExclusionRule] = load_exclusions_from_file(self.path) if self.path.exists() else []

    def _key(self, rule: ExclusionRule) -> tuple:
        return rule.fingerprint, rule.rule_id, rule.file_path, rule.element_pattern

    def add(self, new_rules: Iterable[ExclusionRule]) -> int:
        """Appends rules that are not yet present. Returns the number added."""
        known = {self._key(r) for r in self.rules}
        added = 0
        for rule in new_rules:
            key = self._key(rule)
            if key in known:
                continue
            known.add(key)
            self.rules.append(rule)
            added += 1
        return added

    def save(self) -> None:
        export_exclusions_to_file(self.rules, self.path)
        logger.info("Saved %d exclusions to %s", len(self.rules), self.path)
