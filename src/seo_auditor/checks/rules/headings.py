from collections import Counter
from typing import List

from page_parser.model import PageRecord
from seo_auditor.model import Issue
from ..core import AuditContext, CheckDefinition, IssueCollector, audit_spec

# (level used, level required above it, rule)
ORPHAN_LEVELS = [(2, 1, "SEO00113"), (3, 2, "SEO00114"), (4, 3, "SEO00115")]


@audit_spec(codes=["SEO00109", "SEO00110", "SEO00111", "SEO00112", "SEO00113", "SEO00114", "SEO00115",
                   "SEO00125", "SEO00126", "SEO00127", "SEO00128", "SEO00129"])
def check_headings(page: PageRecord, ctx: AuditContext) -> List[Issue]:
    """
    Heading outline checks. The level-skip rule walks the headings in
    document order, so <h1>A</h1><h3>B</h3> yields exactly one skip (H1 -> H3).
    """
    issues = IssueCollector()
    h1s = page.h1
    order = page.heading_order

    if not h1s:
        issues.add("SEO00109", page)
    elif len(h1s) > 1:
        issues.add("SEO00110", page, actual=f"{len(h1s)} H1 tags")

    previous = 0
    for heading in order:
        if previous > 0 and heading.level > previous + 1:
            issues.add(
                "SEO00111", page,
                element=heading.text[:50],
                actual=f"H{previous} -> H{heading.level}",
                expected=f"H{previous} -> H{previous + 1}",
            )
        previous = heading.level

    if order and order[0].level != 1:
        issues.add("SEO00112", page, actual=f"First heading is H{order[0].level}")

    used_levels = {h.level for h in order}
    for level, required, rule_id in ORPHAN_LEVELS:
        if level in used_levels and required not in used_levels:
            issues.add(rule_id, page)

    for text, count in Counter(h1s).items():
        if count > 1:
            issues.add("SEO00125", page, element=text[:50], actual=f"{count} occurrences")

    if len(order) > 50:
        issues.add("SEO00127", page, actual=f"{len(order)} headings")
    elif len(order) > 30:
        issues.add("SEO00126", page, actual=f"{len(order)} headings")

    for heading in order:
        if not heading.text.strip():
            issues.add("SEO00128", page, element=f"H{heading.level}")

    if page.title and h1s:
        normalized_title = page.title.lower().strip()
        for h1 in h1s:
            if h1.lower().strip() == normalized_title:
                issues.add("SEO00129", page, element=h1[:50])

    return issues


DEFINITION = CheckDefinition(
    name="headings",
    page_checks=[check_headings],
    order=50,
)
