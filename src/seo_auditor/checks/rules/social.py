import re
from typing import List, Optional

from page_parser.model import PageRecord
from page_parser.utils.url_utils import is_http_url
from seo_auditor.model import Issue
from ..core import AuditContext, CheckDefinition, IssueCollector, audit_spec

VALID_OG_TYPES = {
    "website", "article", "book", "profile",
    "music.song", "music.album", "music.playlist", "music.radio_station",
    "video.movie", "video.episode", "video.tv_show", "video.other",
}
VALID_OG_IMAGE_TYPES = {"image/jpeg", "image/png", "image/gif", "image/webp", "image/svg+xml", "image/avif"}
VALID_TWITTER_CARDS = {"summary", "summary_large_image", "app", "player"}
LOCALE_PATTERN = re.compile(r"^[a-z]{2}_[A-Z]{2}$")
TWITTER_HANDLE = re.compile(r"^@\w{1,15}$")

OG_IMAGE_MIN_WIDTH = 1200
OG_IMAGE_MIN_HEIGHT = 630


def _to_int(value: Optional[str]) -> Optional[int]:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def _missing_local_file(ctx: AuditContext, page: PageRecord, url: str) -> bool:
    resolved = ctx.resolver.resolve_to_file_path(url, page.file_path)
    return resolved is not None and not ctx.resolver.exists(resolved)


def _open_graph(page: PageRecord, ctx: AuditContext, issues: IssueCollector) -> None:
    og = page.og

    if og.title is None:
        issues.add("SEO00168", page)
    elif not og.title.strip():
        issues.add("SEO01206", page)
    else:
        if len(og.title) > 60:
            issues.add("SEO01177", page, element=og.title[:50], actual=f"{len(og.title)} chars", expected="<= 60 chars")
        if page.title and og.title.strip() == page.title.strip():
            issues.add("SEO01195", page, element=og.title[:50])

    if og.description is None:
        issues.add("SEO00169", page)
    elif not og.description.strip():
        issues.add("SEO01207", page)
    else:
        length = len(og.description)
        if length > 200:
            issues.add("SEO01178", page, element=og.description[:50], actual=f"{length} chars", expected="<= 200 chars")
        elif length < 50:
            issues.add("SEO01179", page, element=og.description[:50], actual=f"{length} chars", expected=">= 50 chars")
        if page.meta_description and og.description.strip() == page.meta_description.strip():
            issues.add("SEO01196", page, element=og.description[:50])

    if not og.image:
        issues.add("SEO00170", page)
    else:
        if not is_http_url(og.image):
            issues.add("SEO00371", page, element=og.image)
            if _missing_local_file(ctx, page, og.image):
                issues.add("SEO00372", page, element=og.image)
        elif og.image.startswith("http://"):
            issues.add("SEO01197", page, element=og.image)

    if not og.url:
        issues.add("SEO00171", page)
    elif not is_http_url(og.url):
        issues.add("SEO01202", page, element=og.url)
    else:
        result = ctx.classifier.validate(og.url)
        if not result.is_valid and result.issue == "www_mismatch":
            rule_id = "SEO00422" if (result.hostname or "").startswith("www.") else "SEO00423"
            issues.add(rule_id, page, element=og.url,
                       actual=result.hostname or og.url, expected=result.expected_hostname)
        if page.canonical and og.url != page.canonical:
            issues.add("SEO01190", page, element=f"og:url: {og.url}", actual=og.url, expected=page.canonical)

    if not og.type:
        issues.add("SEO01175", page)
    elif og.type not in VALID_OG_TYPES:
        issues.add("SEO01176", page, element=og.type)
    elif og.type == "article":
        if not og.article_published_time:
            issues.add("SEO01203", page)
        if not og.article_author:
            issues.add("SEO01204", page)

    if not og.site_name:
        issues.add("SEO01185", page)
    if not og.locale:
        issues.add("SEO01186", page)
    elif not LOCALE_PATTERN.match(og.locale):
        issues.add("SEO01187", page, element=og.locale, expected="ll_CC (e.g. en_US)")

    if og.image:
        width, height = _to_int(og.image_width), _to_int(og.image_height)
        if width is None or height is None:
            issues.add("SEO01188", page, element=og.image)
        elif width < OG_IMAGE_MIN_WIDTH or height < OG_IMAGE_MIN_HEIGHT:
            issues.add("SEO01189", page, element=og.image, actual=f"{width}x{height}",
                       expected=f">= {OG_IMAGE_MIN_WIDTH}x{OG_IMAGE_MIN_HEIGHT}")
        if og.image_alt is None:
            issues.add("SEO01199", page, element=og.image)
        elif not og.image_alt.strip():
            issues.add("SEO01210", page, element=og.image)
        if og.image_type and og.image_type not in VALID_OG_IMAGE_TYPES:
            issues.add("SEO01205", page, element=og.image_type)

    if og.image_count > 1:
        issues.add("SEO01201", page, actual=f"{og.image_count} og:image tags")


def _twitter(page: PageRecord, ctx: AuditContext, issues: IssueCollector) -> None:
    tw = page.twitter

    if not tw.card:
        issues.add("SEO00172", page)
    elif tw.card not in VALID_TWITTER_CARDS:
        issues.add("SEO01180", page, element=tw.card)

    if tw.title is None:
        issues.add("SEO00173", page)
    elif not tw.title.strip():
        issues.add("SEO01208", page)
    elif len(tw.title) > 70:
        issues.add("SEO01181", page, element=tw.title[:50], actual=f"{len(tw.title)} chars", expected="<= 70 chars")

    if tw.description is None:
        issues.add("SEO00174", page)
    elif not tw.description.strip():
        issues.add("SEO01209", page)
    elif len(tw.description) > 200:
        issues.add("SEO01182", page, element=tw.description[:50],
                   actual=f"{len(tw.description)} chars", expected="<= 200 chars")

    if not tw.image:
        issues.add("SEO00175", page)
    else:
        if not is_http_url(tw.image):
            issues.add("SEO01183", page, element=tw.image)
            if _missing_local_file(ctx, page, tw.image):
                issues.add("SEO01184", page, element=tw.image)
        elif tw.image.startswith("http://"):
            issues.add("SEO01198", page, element=tw.image)
        if not tw.image_alt:
            issues.add("SEO01200", page, element=tw.image)

    if not tw.site:
        issues.add("SEO01191", page)
    elif not TWITTER_HANDLE.match(tw.site):
        issues.add("SEO01192", page, element=tw.site)

    if not tw.creator:
        issues.add("SEO01193", page)
    elif not TWITTER_HANDLE.match(tw.creator):
        issues.add("SEO01194", page, element=tw.creator)


@audit_spec(codes=["SEO00168", "SEO00169", "SEO00170", "SEO00171", "SEO00371", "SEO00372", "SEO00422",
                   "SEO00423", "SEO01175", "SEO01176", "SEO01177", "SEO01178", "SEO01179", "SEO01185",
                   "SEO01186", "SEO01187", "SEO01188", "SEO01189", "SEO01190", "SEO01195", "SEO01196",
                   "SEO01197", "SEO01199", "SEO01201", "SEO01202", "SEO01203", "SEO01204", "SEO01205",
                   "SEO01206", "SEO01207", "SEO01210",
                   "SEO00172", "SEO00173", "SEO00174", "SEO00175", "SEO01180", "SEO01181", "SEO01182",
                   "SEO01183", "SEO01184", "SEO01191", "SEO01192", "SEO01193", "SEO01194", "SEO01198",
                   "SEO01200", "SEO01208", "SEO01209"])
def check_social(page: PageRecord, ctx: AuditContext) -> List[Issue]:
    """Open Graph and Twitter Card tags."""
    issues = IssueCollector()
    _open_graph(page, ctx, issues)
    _twitter(page, ctx, issues)
    return issues


DEFINITION = CheckDefinition(
    name="social",
    page_checks=[check_social],
    order=130,
)
