# tests/conftest.py
import pytest

from distaudit.model import AuditConfig
from page_parser.model import SiteIndex
from page_parser.services.page_parse_service import parse_html_file
from seo_auditor.checks.core import AuditContext

BASE_URL = "https://example.com"

# Houdt pagina's boven de minimale bestandsgrootte van de indexer (500 bytes).
PADDING = "<!-- " + "x" * 600 + " -->"


def html_page(body: str = "", head: str = "", lang: str = "en") -> str:
    """Bouwt een compleet HTML-document rond een body- en head-fragment."""
    return (
        f'<!DOCTYPE html>\n<html lang="{lang}">\n<head>\n<meta charset="utf-8">\n{head}\n</head>\n'
        f"<body>\n{body}\n{PADDING}\n</body>\n</html>\n"
    )


def write_file(root, relative_path: str, content: str):
    path = root / relative_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def dist(tmp_path):
    """Een lege dist-map per test."""
    root = tmp_path / "dist"
    root.mkdir()
    return root


@pytest.fixture
def audit_config(dist):
    return AuditConfig(dist_path=str(dist), base_url=BASE_URL, languages=["en", "nl"])


@pytest.fixture
def make_page(dist, audit_config):
    """
    Factory die HTML op schijf zet en er een PageRecord van maakt,
    zodat ook bestandsresolutie in de checks echt getest wordt.
    """
    def _make(html: str, relative_path: str = "index.html", config=None):
        path = write_file(dist, relative_path, html)
        return parse_html_file(str(path), html, str(dist), config or audit_config)
    return _make


@pytest.fixture
def make_context(audit_config):
    """Factory voor een AuditContext over een set pagina's."""
    def _make(*pages, config=None):
        site = SiteIndex()
        for page in sorted(pages, key=lambda p: p.relative_path):
            site.add_page(page)
        return AuditContext(config or audit_config, site)
    return _make


def rule_ids(issues):
    return [issue.rule_id for issue in issues]
