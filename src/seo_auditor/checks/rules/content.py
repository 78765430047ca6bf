import re
from typing import List, Optional

from page_parser.model import PageRecord
from seo_auditor.model import Issue
from ..core import AuditContext, CheckDefinition, IssueCollector, audit_spec, match_tier

# Typical UTF-8-read-as-Latin-1 sequences.
MOJIBAKE_PATTERN = re.compile(
    "Ã.|â€™|â€œ|â€|Â |Ã©|Ã¨|Ã |ï¿½|Ã¢|Ã£|Ã¤|Ã¥|Ã¦|Ã§|Ãª|Ã«|Ã¬|Ã­|Ã®|Ã¯|Ã±|Ã²|Ã³|Ã´|Ãµ|Ã¶|Ã¹|Ãº|Ã»|Ã¼|Ã½|Ã¿"
)
REPEATED_SPACES = re.compile(r"\s{2,}")
REPEATED_PUNCTUATION = re.compile(r"[.!?]{2,}|[-_]{3,}")
SPECIAL_FIRST_CHAR = re.compile(r"^[^a-z0-9]", re.IGNORECASE)

TITLE_SHORT = [(10, "SEO00013"), (20, "SEO00014"), (30, "SEO00015")]
TITLE_LONG = [(70, "SEO00022"), (65, "SEO00021"), (60, "SEO00020")]
DESCRIPTION_SHORT = [(50, "SEO00023"), (70, "SEO00024"), (100, "SEO00025"), (120, "SEO00026")]
DESCRIPTION_LONG = [(320, "SEO00029"), (200, "SEO00028"), (160, "SEO00027")]
H1_SHORT = [(5, "SEO00030"), (10, "SEO00031"), (20, "SEO00032")]
H1_LONG = [(100, "SEO00036"), (90, "SEO00035"), (80, "SEO00034")]
H2_SHORT = [(5, "SEO00037")]
H2_LONG = [(80, "SEO00043")]


def _length_issues(issues: IssueCollector, page: PageRecord, text: str, short_tiers, long_tiers,
                   element: Optional[str] = None) -> None:
    length = len(text)
    short = match_tier(length, short_tiers, below=True)
    if short:
        threshold, rule_id = short
        issues.add(rule_id, page, element=element, actual=f"{length} chars", expected=f">= {threshold} chars")
    long = match_tier(length, long_tiers, below=False)
    if long:
        threshold, rule_id = long
        issues.add(rule_id, page, element=element, actual=f"{length} chars", expected=f"<= {threshold} chars")


def is_all_caps(text: str, min_length: int) -> bool:
    return len(text) > min_length and text == text.upper() and re.search(r"[A-Z]", text) is not None


@audit_spec(codes=[rule for _, rule in
                   TITLE_SHORT + TITLE_LONG + DESCRIPTION_SHORT + DESCRIPTION_LONG + H1_SHORT + H1_LONG
                   + H2_SHORT + H2_LONG])
def check_content_length(page: PageRecord, ctx: AuditContext) -> List[Issue]:
    """
    Character-length bands for title, meta description, H1 and H2.
    At most one 'short' and one 'long' issue fire per text; the most severe band wins.
    """
    issues = IssueCollector()
    if page.title:
        _length_issues(issues, page, page.title, TITLE_SHORT, TITLE_LONG)
    if page.meta_description:
        _length_issues(issues, page, page.meta_description, DESCRIPTION_SHORT, DESCRIPTION_LONG)
    for h1 in page.h1:
        _length_issues(issues, page, h1, H1_SHORT, H1_LONG, element=h1[:50])
    for h2 in page.headings_at(2):
        _length_issues(issues, page, h2, H2_SHORT, H2_LONG, element=h2[:50])
    return issues


@audit_spec(codes=["SEO00056", "SEO00057", "SEO00058", "SEO00059", "SEO00064", "SEO00068", "SEO00073",
                   "SEO00074", "SEO00060", "SEO00061", "SEO00063", "SEO00065", "SEO00066", "SEO00067",
                   "SEO00069"])
def check_content_format(page: PageRecord, ctx: AuditContext) -> List[Issue]:
    issues = IssueCollector()

    title = page.title
    if title:
        if title != title.strip():
            issues.add("SEO00056", page, element=title)
        if REPEATED_SPACES.search(title):
            issues.add("SEO00057", page, element=title)
        if REPEATED_PUNCTUATION.search(title):
            issues.add("SEO00058", page, element=title)
        if MOJIBAKE_PATTERN.search(title):
            issues.add("SEO00059", page, element=title)
        if is_all_caps(title, 10):
            issues.add("SEO00064", page, element=title)
        if SPECIAL_FIRST_CHAR.search(title.strip()):
            issues.add("SEO00068", page, element=title)

        pipes = title.count("|")
        if pipes > 2:
            issues.add("SEO00074", page, element=title, actual=f"{pipes} pipes")
        elif pipes > 1:
            issues.add("SEO00073", page, element=title, actual=f"{pipes} pipes")

    description = page.meta_description
    if description:
        element = description[:50]
        if description != description.strip():
            issues.add("SEO00060", page, element=element)
        if REPEATED_SPACES.search(description):
            issues.add("SEO00061", page, element=element)
        if MOJIBAKE_PATTERN.search(description):
            issues.add("SEO00063", page, element=element)
        if is_all_caps(description, 20):
            issues.add("SEO00065", page, element=element)

    for h1 in page.h1:
        element = h1[:50]
        if is_all_caps(h1, 5):
            issues.add("SEO00066", page, element=element)
        if MOJIBAKE_PATTERN.search(h1):
            issues.add("SEO00067", page, element=element)
        if SPECIAL_FIRST_CHAR.search(h1.strip()):
            issues.add("SEO00069", page, element=element)

    return issues


DEFINITION = CheckDefinition(
    name="content",
    page_checks=[check_content_length, check_content_format],
    order=30,
)
