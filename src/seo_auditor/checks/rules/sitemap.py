import logging
import os
import re
import xml.etree.ElementTree as ET
from typing import List, Optional, Tuple

from page_parser.utils.domain_classifier import extract_hostname
from page_parser.utils.url_utils import url_path
from seo_auditor.model import Issue
from ..core import AuditContext, CheckDefinition, IssueCollector, audit_spec

logger = logging.getLogger(__name__)

SITEMAP_CANDIDATES = ["sitemap.xml", "sitemap-index.xml", "sitemap-0.xml"]
LASTMOD_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}(T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})?)?$")
TRAILING_SLASH_TOLERANCE = 0.1


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _child_text(element: ET.Element, name: str) -> Optional[str]:
    for child in element:
        if _local_name(child.tag) == name:
            return (child.text or "").strip()
    return None


def parse_sitemap(content: bytes) -> Tuple[str, List[Tuple[str, Optional[str]]]]:
    """
    Parses sitemap XML into (root kind, entries). For a 'sitemapindex' the
    entries are child sitemap locations; for a 'urlset' they are (loc, lastmod).
    Raises ET.ParseError on malformed XML.
    """
    root = ET.fromstring(content)
    kind = _local_name(root.tag)
    entries = []
    item_name = "sitemap" if kind == "sitemapindex" else "url"
    for item in root:
        if _local_name(item.tag) != item_name:
            continue
        loc = _child_text(item, "loc")
        if loc:
            entries.append((loc, _child_text(item, "lastmod")))
    return kind, entries


def _path_from_url(ctx: AuditContext, url: str) -> str:
    if extract_hostname(url):
        return url_path(url).lstrip("/")
    return url.replace(ctx.base_url, "").lstrip("/")


def _check_url(ctx: AuditContext, issues: IssueCollector, url: str, lastmod: Optional[str],
               seen: set, location: dict) -> None:
    if ctx.is_https and url.startswith("http://"):
        issues.add("SEO01161", **location, element=url[:80], fingerprint=f"SEO01161::{url[:50]}")

    result = ctx.classifier.validate(url)
    if not result.is_valid and result.issue:
        if result.issue == "www_mismatch":
            rule_id = "SEO01169" if (result.hostname or "").startswith("www.") else "SEO01170"
        else:
            rule_id = "SEO01171"
        issues.add(rule_id, **location, element=url[:80], actual=result.hostname or url,
                   expected=result.expected_hostname, fingerprint=f"{rule_id}::{url[:50]}")

    if url in seen:
        issues.add("SEO01162", **location, element=url[:80], fingerprint=f"SEO01162::{url[:50]}")
    seen.add(url)

    if lastmod and not LASTMOD_PATTERN.match(lastmod):
        issues.add("SEO01163", **location, element=f"{url[:40]} - lastmod: {lastmod}",
                   fingerprint=f"SEO01163::{url[:30]}::{lastmod}")

    page_path = _path_from_url(ctx, url).rstrip("/")
    if page_path:
        dist = ctx.resolver.dist_path
        candidates = [os.path.join(dist, page_path, "index.html"), os.path.join(dist, f"{page_path}.html")]
        if not any(ctx.resolver.exists(c) for c in candidates):
            issues.add("SEO01160", **location, element=url[:80], fingerprint=f"SEO01160::{url[:50]}")


@audit_spec(codes=["SEO01158", "SEO01159", "SEO01160", "SEO01161", "SEO01162", "SEO01163", "SEO01164",
                   "SEO01169", "SEO01170", "SEO01171"])
def check_sitemap(ctx: AuditContext) -> List[Issue]:
    """
    Sitemap files in the dist root plus any children a sitemap index points to.
    URLs are checked for protocol, authority, duplicates, lastmod format and a
    matching page in the dist folder.
    """
    issues = IssueCollector()
    dist = ctx.resolver.dist_path
    files = [os.path.join(dist, name) for name in SITEMAP_CANDIDATES if os.path.isfile(os.path.join(dist, name))]

    if not files:
        issues.add("SEO01158", file="sitemap.xml", relative_path="sitemap.xml", fingerprint="SEO01158::sitemap.xml")
        return issues

    seen: set = set()
    with_slash, without_slash = set(), set()

    # Children of a sitemap index are appended while iterating.
    index = 0
    while index < len(files):
        sitemap_path = files[index]
        index += 1
        relative = ctx.resolver.relative_to_dist(sitemap_path)
        location = dict(file=sitemap_path, relative_path=relative)

        try:
            with open(sitemap_path, "rb") as f:
                content = f.read()
        except OSError as e:
            logger.warning("Cannot read sitemap %s: %s", sitemap_path, e)
            continue

        try:
            kind, entries = parse_sitemap(content)
        except ET.ParseError as e:
            logger.info("Sitemap %s is not valid XML: %s", relative, e)
            issues.add("SEO01159", **location, fingerprint=f"SEO01159::{relative}")
            continue

        if kind == "sitemapindex":
            for loc, _ in entries:
                child = os.path.join(dist, _path_from_url(ctx, loc))
                if os.path.isfile(child) and child not in files:
                    files.append(child)
            continue

        for url, lastmod in entries:
            _check_url(ctx, issues, url, lastmod, seen, location)
            (with_slash if url.endswith("/") else without_slash).add(url)

    if with_slash and without_slash:
        total = len(with_slash) + len(without_slash)
        if min(len(with_slash), len(without_slash)) > total * TRAILING_SLASH_TOLERANCE:
            issues.add("SEO01164", file="sitemap", relative_path="sitemap",
                       actual=f"{len(with_slash)} with trailing slash, {len(without_slash)} without",
                       fingerprint="SEO01164::sitemap")

    return issues


DEFINITION = CheckDefinition(
    name="sitemap",
    site_checks=[check_sitemap],
    order=330,
)
