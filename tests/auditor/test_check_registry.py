# tests/auditor/test_check_registry.py
from seo_auditor.checks.core import create_issue, make_fingerprint, match_tier
from seo_auditor.checks.engine import CheckEngine
from seo_auditor.checks.registry import CheckRegistry
from seo_auditor.rules.catalog import SEO_RULES, get_rule, get_rules_by_category, get_rules_by_severity


def test_discovery_registers_page_and_site_checks():
    """Alle modules met een DEFINITION worden gevonden, gesorteerd op volgorde."""
    names = [d.name for d in CheckRegistry.get_definitions()]
    assert names[0] == "metadata"
    assert {"duplicates", "orphans", "robots", "sitemap"} <= set(names)

    site_checks = [c.__name__ for c in CheckRegistry.get_site_checks()]
    assert site_checks == ["check_duplicates", "check_orphan_pages", "check_robots_txt", "check_sitemap"]
    assert len(CheckRegistry.get_page_checks()) > 10


def test_every_declared_code_is_in_the_catalog():
    """Een check mag alleen regels declareren die in de catalogus staan."""
    missing = [code for code in CheckRegistry.get_all_possible_codes() if get_rule(code) is None]
    assert missing == []


def test_catalog_ids_are_unique():
    ids = [rule.id for rule in SEO_RULES]
    assert len(ids) == len(set(ids))
    assert get_rule("SEO01221").name == "Orphan page"
    assert get_rule("SEO00424").category == "html_semantics"
    assert all(r.category == "sitemap" for r in get_rules_by_category("sitemap"))
    assert all(r.severity == "notice" for r in get_rules_by_severity("notice"))


def test_fingerprint_format():
    assert make_fingerprint("SEO00001", "index.html") == "SEO00001::index.html"
    assert make_fingerprint("SEO00111", "a.html", "Title", 12) == "SEO00111::a.html::Title::L12"
    # Het element wordt op 100 tekens afgekapt.
    assert make_fingerprint("SEO00111", "a.html", "x" * 150) == "SEO00111::a.html::" + "x" * 100


def test_create_issue_uses_catalog_metadata():
    issue = create_issue("SEO00001", file="/dist/index.html", relative_path="index.html", element="<title>")
    assert issue.rule_name == "Missing title tag"
    assert issue.severity == "error"
    assert issue.category == "metadata"
    assert issue.fingerprint == "SEO00001::index.html::<title>"


def test_create_issue_with_custom_name_and_fingerprint():
    issue = create_issue("SEO00232", file="", relative_path="a.html",
                         rule_name="Schema Article: missing 'author'", fingerprint="custom")
    assert issue.rule_name == "Schema Article: missing 'author'"
    assert issue.fingerprint == "custom"


def test_unknown_rule_gives_none():
    assert create_issue("SEO99999", file="", relative_path="index.html") is None


def test_match_tier_picks_most_severe_band():
    tiers = [(10, "A"), (20, "B"), (30, "C")]
    assert match_tier(5, tiers, below=True) == (10, "A")
    assert match_tier(15, tiers, below=True) == (20, "B")
    assert match_tier(30, tiers, below=True) is None
    assert match_tier(75, [(70, "X"), (60, "Y")], below=False) == (70, "X")


def test_engine_runs_page_checks_in_path_order(make_page, make_context):
    b = make_page("<html></html>", "b.html")
    a = make_page("<html></html>", "a.html")
    ctx = make_context(a, b)

    issues = CheckEngine().run_all(ctx)
    page_paths = [i.relative_path for i in issues if get_rule(i.rule_id).scope == "page"]

    assert page_paths == sorted(page_paths)
    assert {"a.html", "b.html"} <= set(page_paths)
