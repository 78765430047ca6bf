import re
from typing import List

from page_parser.model import PageRecord
from page_parser.utils.url_utils import is_http_url
from seo_auditor.model import Issue
from ..core import AuditContext, CheckDefinition, IssueCollector, audit_spec

VALID_LANG_CODES = {
    "en", "es", "fr", "de", "it", "pt", "nl", "pl", "ru", "ja", "zh", "ko", "ar", "hi", "tr", "vi", "th",
    "id", "ms", "uk", "cs", "el", "he", "sv", "da", "fi", "no", "hu", "ro", "sk", "bg", "hr", "sr", "sl",
    "et", "lv", "lt", "x-default",
    "en-US", "en-GB", "en-AU", "en-CA", "es-ES", "es-MX", "es-AR", "pt-BR", "pt-PT",
    "zh-CN", "zh-TW", "zh-HK", "fr-FR", "fr-CA", "de-DE", "de-AT", "de-CH", "it-IT",
    "nl-NL", "nl-BE", "ja-JP", "ko-KR",
}
LANG_PATTERN = re.compile(r"^[a-z]{2,3}(-[A-Z]{2})?$", re.IGNORECASE)


def is_valid_lang(code: str) -> bool:
    return code in VALID_LANG_CODES or LANG_PATTERN.match(code) is not None


@audit_spec(codes=["SEO00177", "SEO00178", "SEO00179", "SEO00180", "SEO00181", "SEO00182", "SEO00184",
                   "SEO00185"])
def check_international(page: PageRecord, ctx: AuditContext) -> List[Issue]:
    """
    Document language and hreflang alternates. An hreflang set must reference
    the page itself (its URL or its canonical) and, with more than one entry,
    declare an x-default.
    """
    issues = IssueCollector()

    if page.lang and page.lang.strip() and not is_valid_lang(page.lang.strip()):
        issues.add("SEO00182", page, element=page.lang)

    if not page.hreflangs:
        return issues

    seen = set()
    has_self_reference = False
    has_x_default = False

    for entry in page.hreflangs:
        lang, url = entry.lang, entry.url
        if not is_valid_lang(lang):
            issues.add("SEO00177", page, element=lang)
        if lang in seen:
            issues.add("SEO00178", page, element=lang)
        seen.add(lang)
        if lang == "x-default":
            has_x_default = True

        if not is_http_url(url):
            issues.add("SEO00180", page, element=f"{lang}: {url}")
        else:
            result = ctx.classifier.validate(url)
            if not result.is_valid and result.issue == "www_mismatch":
                rule_id = "SEO00184" if (result.hostname or "").startswith("www.") else "SEO00185"
                issues.add(rule_id, page, element=f"{lang}: {url}",
                           actual=result.hostname or url, expected=result.expected_hostname)

        if url == page.url or (page.canonical and url == page.canonical):
            has_self_reference = True

    if not has_self_reference:
        issues.add("SEO00179", page, expected=page.canonical or page.url)
    if not has_x_default and len(page.hreflangs) > 1:
        issues.add("SEO00181", page)

    return issues


DEFINITION = CheckDefinition(
    name="international",
    page_checks=[check_international],
    order=140,
)
