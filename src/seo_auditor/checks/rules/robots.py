import logging
import os
from typing import List, Tuple

from page_parser.utils.domain_classifier import extract_hostname
from page_parser.utils.url_utils import url_path
from seo_auditor.model import Issue
from ..core import AuditContext, CheckDefinition, IssueCollector, audit_spec

logger = logging.getLogger(__name__)

ROBOTS_FILE = "robots.txt"


def parse_robots_lines(content: str) -> List[Tuple[str, str, str]]:
    """
    Splits robots.txt into (directive, value, raw line) tuples. Comment and
    blank lines are skipped; lines without a colon get an empty directive.
    """
    entries = []
    for line in content.split("\n"):
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("#"):
            continue
        directive, sep, value = trimmed.partition(":")
        if not sep:
            entries.append(("", "", trimmed))
            continue
        entries.append((directive.strip().lower(), value.strip(), trimmed))
    return entries


def sitemap_file_path(ctx: AuditContext, sitemap_url: str) -> str:
    """Maps a sitemap URL to its file in the dist folder, ignoring the host."""
    if extract_hostname(sitemap_url):
        relative = url_path(sitemap_url).lstrip("/")
    else:
        relative = sitemap_url.replace(ctx.base_url, "").lstrip("/")
    return os.path.join(ctx.resolver.dist_path, relative)


@audit_spec(codes=["SEO01153", "SEO01154", "SEO01155", "SEO01156", "SEO01157", "SEO01165", "SEO01166",
                   "SEO01167", "SEO01168"])
def check_robots_txt(ctx: AuditContext) -> List[Issue]:
    issues = IssueCollector()
    location = dict(file=ROBOTS_FILE, relative_path=ROBOTS_FILE)
    robots_path = os.path.join(ctx.resolver.dist_path, ROBOTS_FILE)

    if not os.path.isfile(robots_path):
        issues.add("SEO01153", **location, fingerprint="SEO01153::robots.txt")
        return issues

    try:
        with open(robots_path, "r", encoding="utf-8", errors="replace") as f:
            content = f.read()
    except OSError as e:
        logger.warning("Cannot read %s: %s", robots_path, e)
        return issues

    sitemap_urls = []
    disallow_all = False

    for directive, value, raw in parse_robots_lines(content):
        if not directive:
            issues.add("SEO01154", **location, element=raw[:50], fingerprint=f"SEO01154::{raw[:30]}")
            continue

        if directive == "sitemap":
            sitemap_urls.append(value)
            result = ctx.classifier.validate(value)
            if not result.is_valid and result.issue:
                if result.issue == "www_mismatch":
                    rule_id = "SEO01166" if (result.hostname or "").startswith("www.") else "SEO01167"
                elif result.issue == "subdomain":
                    rule_id = "SEO01168"
                else:
                    rule_id = "SEO01157"
                issues.add(rule_id, **location, element=value, actual=result.hostname or value,
                           expected=result.expected_hostname, fingerprint=f"{rule_id}::{value}")
            elif not value.startswith(ctx.base_url):
                issues.add("SEO01157", **location, element=value, actual=value, expected=ctx.base_url,
                           fingerprint=f"SEO01157::{value}")
        elif directive == "disallow" and value == "/":
            disallow_all = True

    if not sitemap_urls:
        issues.add("SEO01155", **location, fingerprint="SEO01155::robots.txt")
    if disallow_all:
        issues.add("SEO01156", **location, element="Disallow: /", fingerprint="SEO01156::robots.txt")

    for sitemap_url in sitemap_urls:
        if not os.path.exists(sitemap_file_path(ctx, sitemap_url)):
            issues.add("SEO01165", **location, element=sitemap_url, fingerprint=f"SEO01165::{sitemap_url}")

    logger.debug("robots.txt: %d sitemap directive(s), %d issue(s)", len(sitemap_urls), len(issues))
    return issues


DEFINITION = CheckDefinition(
    name="robots",
    site_checks=[check_robots_txt],
    order=320,
)
