import re
from typing import List

from page_parser.model import PageRecord
from page_parser.utils.url_utils import is_http_url
from seo_auditor.model import Issue
from ..core import AuditContext, CheckDefinition, IssueCollector, audit_spec

TRACKING_PARAMS = re.compile(r"(utm_|gclid=|fbclid=|mc_cid=|mc_eid=|__hs|_ga=|_gl=|dclid=|msclkid=)", re.IGNORECASE)
PAGINATION_MARKERS = ('rel="prev"', "rel='prev'", 'rel="next"', "rel='next'")


def has_robots_conflict(robots: str) -> bool:
    """True when the robots value both allows and forbids indexing (or following)."""
    directives = set(re.split(r"[\s,]+", robots.lower().strip()))
    return {"index", "noindex"} <= directives or {"follow", "nofollow"} <= directives


@audit_spec(codes=["SEO00100", "SEO00101", "SEO00102", "SEO00103", "SEO00104", "SEO00420", "SEO00421",
                   "SEO00105", "SEO00368"])
def check_indexability(page: PageRecord, ctx: AuditContext) -> List[Issue]:
    """
    Canonical URL shape and authority, robots directive conflicts and
    rel=prev/next pagination hints.
    """
    issues = IssueCollector()
    canonical = page.canonical

    if canonical:
        if not is_http_url(canonical):
            issues.add("SEO00100", page, element=canonical)
        if "#" in canonical:
            issues.add("SEO00101", page, element=canonical)
        if TRACKING_PARAMS.search(canonical):
            issues.add("SEO00102", page, element=canonical)
        if ctx.is_https and canonical.startswith("http://"):
            issues.add("SEO00103", page, element=canonical)

        result = ctx.classifier.validate(canonical)
        if not result.is_valid:
            if result.issue == "www_mismatch":
                rule_id = "SEO00104" if (result.hostname or "").startswith("www.") else "SEO00420"
            else:
                rule_id = "SEO00421"
            issues.add(rule_id, page, element=canonical,
                       actual=result.hostname or canonical, expected=result.expected_hostname)

    if page.meta_robots and has_robots_conflict(page.meta_robots):
        issues.add("SEO00105", page, element=page.meta_robots)

    if any(marker in page.html for marker in PAGINATION_MARKERS):
        issues.add("SEO00368", page)

    return issues


DEFINITION = CheckDefinition(
    name="indexability",
    page_checks=[check_indexability],
    order=60,
)
