from typing import Callable, List, Optional, Set, Tuple

from page_parser.model import PageRecord, SiteIndex
from page_parser.utils.domain_classifier import DomainClassifier
from page_parser.utils.file_resolver import FileResolver
from seo_auditor.model import Issue
from seo_auditor.rules.catalog import get_rule
from seo_auditor.services.schema_validation_service import SchemaValidationService

PageCheck = Callable[[PageRecord, "AuditContext"], List[Issue]]
SiteCheck = Callable[["AuditContext"], List[Issue]]


def audit_spec(codes: List[str]):
    """
    Decorator to declare which rule ids a specific check function emits.
    Facilitates auto-discovery by the CheckRegistry.
    """
    def decorator(func):
        func.defined_codes = codes
        return func
    return decorator


class CheckDefinition:
    """
    Groups the page-level and site-level checks of one check module.
    Every module in 'seo_auditor.checks.rules' exposes one as DEFINITION.
    """

    def __init__(
            self,
            name: str,
            page_checks: Optional[List[PageCheck]] = None,
            site_checks: Optional[List[SiteCheck]] = None,
            order: int = 100,
    ):
        self.name = name
        self.page_checks = page_checks or []
        self.site_checks = site_checks or []
        self.order = order

        # --- Auto-Discovery of Rule Ids ---
        codes: Set[str] = set()
        for check in self.page_checks + self.site_checks:
            codes.update(getattr(check, "defined_codes", []))
        self.codes = sorted(codes)


class AuditContext:
    """
    Read-only state shared by all checks of one run: config, domain classifier,
    file resolver, the site index and the structured-data validator.
    """

    def __init__(self, config, site: SiteIndex, schema_validator: Optional[SchemaValidationService] = None,
                 classifier: Optional[DomainClassifier] = None,
                 resolver: Optional[FileResolver] = None):
        self.config = config
        self.site = site
        self.classifier = classifier or DomainClassifier.from_config(config)
        self.resolver = resolver or FileResolver(config.dist_path)
        self.schema_validator = schema_validator or SchemaValidationService()

    @property
    def base_url(self) -> str:
        return self.config.base_url

    @property
    def is_https(self) -> bool:
        return self.config.base_url.startswith("https://")


def make_fingerprint(rule_id: str, relative_path: str, element: Optional[str] = None,
                     line: Optional[int] = None) -> str:
    """ruleId::relativePath[::element(<=100 chars)][::L<line>]"""
    parts = [rule_id, relative_path]
    if element:
        parts.append(element[:100])
    if line:
        parts.append(f"L{line}")
    return "::".join(parts)


def create_issue(
        rule_id: str,
        page: Optional[PageRecord] = None,
        *,
        file: Optional[str] = None,
        relative_path: Optional[str] = None,
        element: Optional[str] = None,
        actual: Optional[str] = None,
        expected: Optional[str] = None,
        line: Optional[int] = None,
        rule_name: Optional[str] = None,
        fingerprint: Optional[str] = None,
) -> Optional[Issue]:
    """
    Builds an Issue from the catalog entry of `rule_id`.

    Page issues take their location from `page`; site issues pass `file` and
    `relative_path` (and usually an explicit `fingerprint`). Returns None when
    the rule id is not in the catalog.
    """
    rule = get_rule(rule_id)
    if rule is None:
        return None

    if page is not None:
        file = page.file_path if file is None else file
        relative_path = page.relative_path if relative_path is None else relative_path
    file = file or ""
    relative_path = relative_path or ""

    return Issue(
        rule_id=rule_id,
        rule_name=rule_name or rule.name,
        category=rule.category,
        severity=rule.severity,
        file=file,
        relative_path=relative_path,
        line=line,
        element=element,
        actual=actual,
        expected=expected,
        fix_hint=rule.fix_hint,
        fingerprint=fingerprint or make_fingerprint(rule_id, relative_path, element, line),
    )


def match_tier(value: float, tiers: List[Tuple[float, str]], below: bool) -> Optional[Tuple[float, str]]:
    """
    Returns the first (threshold, rule_id) the value falls past.
    Tiers are ordered most severe first, e.g. [(10, A), (20, B)] for `below`.
    """
    for threshold, rule_id in tiers:
        if (value < threshold) if below else (value > threshold):
            return threshold, rule_id
    return None


class IssueCollector(list):
    """A list of issues with a shortcut that skips rule ids missing from the catalog."""

    def add(self, rule_id: str, page: Optional[PageRecord] = None, **kwargs) -> Optional[Issue]:
        issue = create_issue(rule_id, page, **kwargs)
        if issue is not None:
            self.append(issue)
        return issue
