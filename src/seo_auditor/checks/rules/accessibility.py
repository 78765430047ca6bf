import re
from typing import List

from page_parser.model import PageRecord
from seo_auditor.model import Issue
from ..core import AuditContext, CheckDefinition, IssueCollector, audit_spec

SKIP_LINK_MARKERS = ("skip-to-", "skip-nav", "skipnav")
EMPTY_ARIA_LABEL = re.compile(r"aria-label=[\"']\s*[\"']", re.IGNORECASE)
ROLE_IMG = re.compile(r"role=[\"']img[\"'][^>]*>", re.IGNORECASE)
CONTROL_RULES = {"input": "SEO01211", "select": "SEO01212", "textarea": "SEO01213"}

# Exact tag names only: '<b' alone would also match <body> and <br>.
B_TAG = re.compile(r"<b(\s[^>]*)?>", re.IGNORECASE)
STRONG_TAG = re.compile(r"<strong(\s[^>]*)?>", re.IGNORECASE)
I_TAG = re.compile(r"<i(\s[^>]*)?>", re.IGNORECASE)
EM_TAG = re.compile(r"<em(\s[^>]*)?>", re.IGNORECASE)
TABLE = re.compile(r"<table[^>]*>.*?</table>", re.IGNORECASE | re.DOTALL)
TH_TAG = re.compile(r"<th(\s[^>]*)?>", re.IGNORECASE)
INLINE_STYLE = re.compile(r"style=[\"'][^\"']+[\"']", re.IGNORECASE)
DEPRECATED_TAGS = ["<font", "<center", "<marquee", "<blink", "<strike", "<big", "<tt"]
MAX_INLINE_STYLES = 50


def describe_control(control) -> str:
    if control.id:
        return f'<{control.kind} id="{control.id}">'
    if control.name:
        return f'<{control.kind} name="{control.name}">'
    if control.input_type:
        return f'<{control.kind} type="{control.input_type}">'
    return f"<{control.kind}>"


@audit_spec(codes=["SEO00222", "SEO00223", "SEO00410", "SEO00412", "SEO01211", "SEO01212", "SEO01213"])
def check_accessibility(page: PageRecord, ctx: AuditContext) -> List[Issue]:
    """Landmarks, skip links, ARIA labels and unlabeled form controls."""
    issues = IssueCollector()
    html = page.html

    if not page.has_main_landmark:
        issues.add("SEO00222", page)
    if not any(marker in html for marker in SKIP_LINK_MARKERS):
        issues.add("SEO00223", page)

    empty_labels = len(EMPTY_ARIA_LABEL.findall(html))
    if empty_labels:
        issues.add("SEO00410", page, actual=f"{empty_labels} empty aria-labels")

    # Reported once per page.
    for match in ROLE_IMG.finditer(html):
        if "aria-label" not in match.group(0):
            issues.add("SEO00412", page)
            break

    for control in page.unlabeled_controls:
        rule_id = CONTROL_RULES.get(control.kind)
        if rule_id:
            issues.add(rule_id, page, element=describe_control(control))

    return issues


@audit_spec(codes=["SEO00416", "SEO00417", "SEO00418", "SEO00419", "SEO00424"])
def check_html_semantics(page: PageRecord, ctx: AuditContext) -> List[Issue]:
    issues = IssueCollector()
    html = page.html

    if B_TAG.search(html) and not STRONG_TAG.search(html):
        issues.add("SEO00416", page)
    if I_TAG.search(html) and not EM_TAG.search(html):
        issues.add("SEO00417", page)

    lowered = html.lower()
    for tag in DEPRECATED_TAGS:
        if re.search(re.escape(tag) + r"[\s>/]", lowered):
            issues.add("SEO00418", page, element=tag)

    for table in TABLE.findall(html):
        if not TH_TAG.search(table):
            issues.add("SEO00419", page)
            break

    inline_styles = len(INLINE_STYLE.findall(html))
    if inline_styles > MAX_INLINE_STYLES:
        issues.add("SEO00424", page, actual=f"{inline_styles} inline styles")

    return issues


DEFINITION = CheckDefinition(
    name="accessibility",
    page_checks=[check_accessibility, check_html_semantics],
    order=180,
)
