import re
from collections import Counter
from typing import List

from page_parser.model import PageRecord
from seo_auditor.model import Issue
from ..core import AuditContext, CheckDefinition, IssueCollector, audit_spec

VIEWPORT_TAG = re.compile(r"<meta[^>]*name=[\"']viewport[\"'][^>]*>", re.IGNORECASE)
TITLE_TAG = re.compile(r"<title[^>]*>", re.IGNORECASE)
DESCRIPTION_TAG = re.compile(r"<meta[^>]*name=[\"']description[\"'][^>]*>", re.IGNORECASE)
CANONICAL_TAG = re.compile(r"<link[^>]*rel=[\"']canonical[\"'][^>]*>", re.IGNORECASE)
REFRESH_MARKERS = ('http-equiv="refresh"', "http-equiv='refresh'")


def _blank(value) -> bool:
    return not value or not value.strip()


@audit_spec(codes=["SEO00001", "SEO00002", "SEO00003", "SEO00004", "SEO00005", "SEO00006",
                   "SEO00010", "SEO00011", "SEO00012", "SEO00413", "SEO00414"])
def check_metadata(page: PageRecord, ctx: AuditContext) -> List[Issue]:
    """Presence of the head metadata every page needs."""
    issues = IssueCollector()

    if _blank(page.title):
        issues.add("SEO00001", page)
    if _blank(page.meta_description):
        issues.add("SEO00002", page)
    if _blank(page.meta_robots):
        issues.add("SEO00003", page)
    if not page.canonical:
        issues.add("SEO00004", page)
    if not page.charset:
        issues.add("SEO00005", page)
    if not page.lang:
        issues.add("SEO00006", page)

    # Present but empty attributes.
    if page.canonical is not None and not page.canonical.strip():
        issues.add("SEO00010", page)
    if page.lang is not None and not page.lang.strip():
        issues.add("SEO00011", page)
    if page.charset is not None and not page.charset.strip():
        issues.add("SEO00012", page)

    if not page.viewport:
        issues.add("SEO00413", page)
    viewport_count = len(VIEWPORT_TAG.findall(page.html))
    if viewport_count > 1:
        issues.add("SEO00414", page, actual=f"{viewport_count} viewport tags")

    return issues


@audit_spec(codes=["SEO00007", "SEO00008", "SEO00009", "SEO00226", "SEO00227", "SEO00380", "SEO00381"])
def check_html_validity(page: PageRecord, ctx: AuditContext) -> List[Issue]:
    """Tag multiplicity, doctype placement, duplicate ids and meta refresh, counted on the raw markup."""
    issues = IssueCollector()

    title_count = len(TITLE_TAG.findall(page.html))
    if title_count > 1:
        issues.add("SEO00007", page, actual=f"{title_count} title tags")
    description_count = len(DESCRIPTION_TAG.findall(page.html))
    if description_count > 1:
        issues.add("SEO00008", page, actual=f"{description_count} meta descriptions")
    canonical_count = len(CANONICAL_TAG.findall(page.html))
    if canonical_count > 1:
        issues.add("SEO00009", page, actual=f"{canonical_count} canonicals")

    if not page.has_doctype:
        issues.add("SEO00226", page)
    elif not page.html.strip().lower().startswith("<!doctype"):
        issues.add("SEO00227", page)

    for element_id, count in Counter(page.element_ids).items():
        if count > 1:
            issues.add("SEO00380", page, element=f'id="{element_id}"', actual=f"{count} occurrences")

    if any(marker in page.html for marker in REFRESH_MARKERS):
        issues.add("SEO00381", page)

    return issues


@audit_spec(codes=["SEO01217"])
def check_favicon(page: PageRecord, ctx: AuditContext) -> List[Issue]:
    issues = IssueCollector()
    if not page.has_favicon:
        issues.add("SEO01217", page)
    return issues


DEFINITION = CheckDefinition(
    name="metadata",
    page_checks=[check_metadata, check_html_validity, check_favicon],
    order=10,
)
