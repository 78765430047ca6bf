import re
from typing import List

from page_parser.model import PageRecord
from seo_auditor.model import Issue
from ..core import AuditContext, CheckDefinition, IssueCollector, audit_spec, match_tier

THIN_TIERS = [(50, "SEO00186"), (100, "SEO00187"), (150, "SEO00188"), (200, "SEO00189"), (300, "SEO00190")]
LONG_TIERS = [(10000, "SEO00200"), (7500, "SEO00199"), (5000, "SEO00198")]

# (pattern, display name, rule id for the title). Description and H1 use the
# next two rule ids of the same family.
PLACEHOLDER_PATTERNS = [
    (re.compile(r"lorem ipsum", re.IGNORECASE), "Lorem ipsum text", 382),
    (re.compile(r"\bTODO\b"), "TODO marker", 386),
    (re.compile(r"\bFIXME\b"), "FIXME marker", 390),
    (re.compile(r"^(untitled|new page)$", re.IGNORECASE), "Untitled page name", 394),
    (re.compile(r"\[placeholder\]", re.IGNORECASE), "Placeholder text", 382),
    (re.compile(r"\{\{.*\}\}"), "Template variable", 382),
]
FIELD_OFFSETS = {"title": 0, "description": 1, "h1": 2}
FIELD_LABELS = {"title": "title", "description": "meta description", "h1": "H1"}

BODY_PATTERNS = [
    (re.compile(r"lorem ipsum", re.IGNORECASE), "SEO00385"),
    (re.compile(r"\bTODO\b"), "SEO00389"),
    (re.compile(r"\bFIXME\b"), "SEO00393"),
]
TAG = re.compile(r"<[^>]+>")
BODY_SCAN_LIMIT = 10000


def _rule_id(base: int, field: str) -> str:
    return f"SEO{base + FIELD_OFFSETS[field]:05d}"


@audit_spec(codes=[rule_id for _, rule_id in THIN_TIERS + LONG_TIERS])
def check_content_quality(page: PageRecord, ctx: AuditContext) -> List[Issue]:
    issues = IssueCollector()
    words = page.word_count

    thin = match_tier(words, THIN_TIERS, below=True)
    if thin:
        threshold, rule_id = thin
        issues.add(rule_id, page, actual=f"{words} words", expected=f">= {threshold} words")
    long = match_tier(words, LONG_TIERS, below=False)
    if long:
        threshold, rule_id = long
        issues.add(rule_id, page, actual=f"{words} words", expected=f"<= {threshold} words")

    return issues


def _scan_field(issues: IssueCollector, page: PageRecord, field: str, value: str, element: str) -> None:
    seen = set()
    for pattern, name, base in PLACEHOLDER_PATTERNS:
        if not pattern.search(value):
            continue
        rule_id = _rule_id(base, field)
        if rule_id in seen:
            continue
        seen.add(rule_id)
        issues.add(rule_id, page, element=element, rule_name=f"{name} in {FIELD_LABELS[field]}")


@audit_spec(codes=[_rule_id(base, field) for _, _, base in PLACEHOLDER_PATTERNS for field in FIELD_OFFSETS]
            + [rule_id for _, rule_id in BODY_PATTERNS])
def check_template_hygiene(page: PageRecord, ctx: AuditContext) -> List[Issue]:
    """
    Leftover template text: lorem ipsum, TODO/FIXME markers, 'Untitled' titles and
    unrendered {{ variables }} in the title, description, H1s and body text.
    """
    issues = IssueCollector()

    if page.title:
        _scan_field(issues, page, "title", page.title, f"title: {page.title}")
    if page.meta_description:
        _scan_field(issues, page, "description", page.meta_description,
                    f"description: {page.meta_description[:50]}")
    for h1 in page.h1:
        _scan_field(issues, page, "h1", h1, f"h1: {h1[:50]}")

    body_text = TAG.sub(" ", page.html)[:BODY_SCAN_LIMIT]
    for pattern, rule_id in BODY_PATTERNS:
        if pattern.search(body_text):
            issues.add(rule_id, page)

    return issues


@audit_spec(codes=["SEO01216"])
def check_eeat(page: PageRecord, ctx: AuditContext) -> List[Issue]:
    issues = IssueCollector()
    if page.is_article and not page.has_author_info:
        issues.add("SEO01216", page)
    return issues


DEFINITION = CheckDefinition(
    name="quality",
    page_checks=[check_content_quality, check_template_hygiene, check_eeat],
    order=160,
)
