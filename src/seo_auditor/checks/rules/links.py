import re
from typing import List

from page_parser.model import PageRecord
from page_parser.utils.url_utils import is_relative_file_href
from seo_auditor.model import Issue
from ..core import AuditContext, CheckDefinition, IssueCollector, audit_spec

# First match wins; compared against the lower-cased, stripped anchor text.
GENERIC_ANCHORS = [
    (re.compile(r"^click here$"), "SEO00136"),
    (re.compile(r"^read more$"), "SEO00137"),
    (re.compile(r"^learn more$"), "SEO00138"),
    (re.compile(r"^here$"), "SEO00139"),
    (re.compile(r"^more$"), "SEO00140"),
    (re.compile(r"^link$"), "SEO00141"),
    (re.compile(r"^this$"), "SEO00142"),
]
DOUBLE_SLASH = re.compile(r"https?://[^/]+//")
SCHEME_AND_HOST = re.compile(r"^https?://[^/]+")
SPACES = re.compile(r"%20| ")
TRAILING_PUNCTUATION = re.compile(r"[.,;:!?]$")

URL_HYGIENE = [
    (re.compile(r"[?&](sid|sessionid|phpsessid|jsessionid)=", re.IGNORECASE), "SEO00374"),
    (re.compile(r"\.php\?"), "SEO00375"),
    (re.compile(r"\?page="), "SEO00376"),
    (re.compile(r"\?p="), "SEO00377"),
    (re.compile(r"\?id="), "SEO00378"),
]


def _empty_after_prefix(href: str, prefix: str) -> bool:
    return not href[len(prefix):].split("?", 1)[0].strip()


@audit_spec(codes=["SEO00134", "SEO00135", "SEO00136", "SEO00137", "SEO00138", "SEO00139", "SEO00140",
                   "SEO00141", "SEO00142", "SEO00143", "SEO00145", "SEO00146", "SEO00147", "SEO00148",
                   "SEO00149", "SEO00150", "SEO00151", "SEO00152"])
def check_links(page: PageRecord, ctx: AuditContext) -> List[Issue]:
    """
    Per-link checks: empty hrefs and anchor text, generic anchors, nofollow on
    internal links, broken mailto/tel, missing local targets and URL formatting.
    """
    issues = IssueCollector()

    for link in page.links:
        href = link.href
        text = link.text.strip()
        empty_href = not href.strip()

        if empty_href:
            issues.add("SEO00134", page, element=text or "(empty link)")

        if not text and not (link.aria_label or "").strip() and not (link.title or "").strip():
            issues.add("SEO00135", page, element="(empty link)" if empty_href else href)

        if empty_href:
            continue

        lowered = text.lower()
        for pattern, rule_id in GENERIC_ANCHORS:
            if pattern.match(lowered):
                issues.add(rule_id, page, element=link.text)
                break

        if link.is_internal and link.rel and "nofollow" in link.rel.lower():
            issues.add("SEO00143", page, element=href)

        if href.startswith("mailto:") and _empty_after_prefix(href, "mailto:"):
            issues.add("SEO00145", page, element=href)
        if href.startswith("tel:") and _empty_after_prefix(href, "tel:"):
            issues.add("SEO00146", page, element=href)

        if is_relative_file_href(href):
            resolved = ctx.resolver.resolve_to_file_path(href, page.file_path)
            if resolved is not None and not ctx.resolver.exists(resolved):
                issues.add("SEO00147", page, element=href, actual=ctx.resolver.relative_to_dist(resolved))

        if DOUBLE_SLASH.search(href):
            issues.add("SEO00148", page, element=href)
        if link.is_internal and re.search(r"[A-Z]", SCHEME_AND_HOST.sub("", href)):
            issues.add("SEO00149", page, element=href)
        if SPACES.search(href):
            issues.add("SEO00150", page, element=href)
        if TRAILING_PUNCTUATION.search(href.rstrip("/")):
            issues.add("SEO00151", page, element=href)
        if ctx.is_https and href.startswith("http://"):
            issues.add("SEO00152", page, element=href)

    return issues


@audit_spec(codes=["SEO01214"])
def check_broken_anchors(page: PageRecord, ctx: AuditContext) -> List[Issue]:
    """Same-page fragment links must point at an id present on the page."""
    issues = IssueCollector()
    ids = set(page.element_ids)
    for link in page.links:
        href = link.href
        if not href.startswith("#") or len(href) < 2:
            continue
        target = href[1:]
        if target not in ids:
            issues.add("SEO01214", page, element=href,
                       actual=f'Target id="{target}" not found', expected=f'Element with id="{target}"')
    return issues


@audit_spec(codes=[rule_id for _, rule_id in URL_HYGIENE])
def check_url_hygiene(page: PageRecord, ctx: AuditContext) -> List[Issue]:
    issues = IssueCollector()
    for link in page.links:
        if not link.is_internal or not link.href:
            continue
        for pattern, rule_id in URL_HYGIENE:
            if pattern.search(link.href):
                issues.add(rule_id, page, element=link.href)
    return issues


DEFINITION = CheckDefinition(
    name="links",
    page_checks=[check_links, check_broken_anchors, check_url_hygiene],
    order=70,
)
