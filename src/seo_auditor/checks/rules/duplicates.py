import re
from typing import Dict, List

from seo_auditor.model import Issue
from ..core import AuditContext, CheckDefinition, IssueCollector, audit_spec

LANGUAGE_PREFIX = re.compile(r"^[a-z]{2}(-[A-Z]{2})?/", re.IGNORECASE)


def summarize_paths(paths: List[str]) -> str:
    """'a.html, b.html, c.html (+2 more)'"""
    head = ", ".join(paths[:3])
    return head + (f" (+{len(paths) - 3} more)" if len(paths) > 3 else "")


def _report(issues: IssueCollector, rule_id: str, multimap: Dict[str, List[str]], skip=None) -> None:
    for value, pages in multimap.items():
        if len(pages) < 2:
            continue
        if skip is not None and skip(pages):
            continue
        issues.add(
            rule_id,
            file="",
            relative_path=summarize_paths(pages),
            element=value[:50],
            actual=f"{len(pages)} pages",
            fingerprint=f"{rule_id}::{value[:50]}",
        )


def is_language_variant_set(pages: List[str], language_count: int) -> bool:
    """Pages that share a canonical legitimately when each sits under a language prefix."""
    return all(LANGUAGE_PREFIX.match(p) for p in pages) and len(pages) <= language_count


@audit_spec(codes=["SEO00088", "SEO00090", "SEO00092", "SEO00094"])
def check_duplicates(ctx: AuditContext) -> List[Issue]:
    issues = IssueCollector()
    site = ctx.site
    _report(issues, "SEO00088", site.titles)
    _report(issues, "SEO00090", site.descriptions)
    _report(issues, "SEO00092", site.h1s)
    language_count = len(ctx.config.languages)
    _report(issues, "SEO00094", site.canonicals,
            skip=lambda pages: is_language_variant_set(pages, language_count))
    return issues


DEFINITION = CheckDefinition(
    name="duplicates",
    site_checks=[check_duplicates],
    order=300,
)
