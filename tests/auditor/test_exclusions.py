# tests/auditor/test_exclusions.py
import json

import pytest

from distaudit.model import RulesConfig
from seo_auditor.checks.core import create_issue
from seo_auditor.managers.exclusion_manager import (
    ExclusionManager,
    export_exclusions_to_file,
    filter_disabled_rules,
    filter_excluded_issues,
    generate_exclusion_for_issue,
    glob_to_regex,
    load_exclusions_from_file,
    matches_rule,
)
from seo_auditor.model import ExclusionRule


@pytest.fixture
def issue():
    return create_issue("SEO00111", file="/dist/blog/post/index.html", relative_path="blog/post/index.html",
                        element="Getting started")


def test_glob_translation():
    """'**' gaat over mappen heen, '*' blijft binnen één segment, en het hele pad moet matchen."""
    assert glob_to_regex("blog/**").match("blog/post/index.html")
    assert glob_to_regex("blog/*/index.html").match("blog/post/index.html")
    assert not glob_to_regex("blog/*").match("blog/post/index.html")
    assert not glob_to_regex("blog").match("blog/post/index.html")
    assert glob_to_regex("*.html").match("about.html")
    assert not glob_to_regex("about.html").match("aboutXhtml")


def test_conjunction_of_fields(issue):
    """Alle aanwezige velden moeten matchen."""
    assert matches_rule(issue, ExclusionRule(rule_id="SEO00111", file_path="blog/**"))
    assert not matches_rule(issue, ExclusionRule(rule_id="SEO00111", file_path="docs/**"))
    assert not matches_rule(issue, ExclusionRule(rule_id="SEO00001", file_path="blog/**"))
    assert matches_rule(issue, ExclusionRule(file_path="blog/**", element_pattern="^Getting"))
    assert not matches_rule(issue, ExclusionRule(element_pattern="^Advanced"))


def test_empty_rule_matches_nothing(issue):
    assert not matches_rule(issue, ExclusionRule(reason="only a reason"))


def test_invalid_element_pattern_is_a_non_match(issue, caplog):
    assert not matches_rule(issue, ExclusionRule(element_pattern="("))
    assert "Invalid elementPattern" in caplog.text


def test_fingerprint_strict_and_legacy(issue):
    """Standaard moet de fingerprint exact gelijk zijn; legacy-modus negeert hem."""
    other = ExclusionRule(fingerprint="SEO00111::somewhere-else.html")
    same = ExclusionRule(fingerprint=issue.fingerprint)

    assert matches_rule(issue, same)
    assert not matches_rule(issue, other)
    assert matches_rule(issue, other, strict=False)
    assert not matches_rule(issue, ExclusionRule(fingerprint="x", rule_id="SEO00001"), strict=False)


def test_filters(issue, audit_config):
    title = create_issue("SEO00001", file="", relative_path="index.html")
    config = audit_config.model_copy(update={
        "exclusions": [ExclusionRule(rule_id="SEO00111")],
        "rules": RulesConfig(disabled=["SEO00001"]),
    })

    assert filter_disabled_rules([issue, title], config) == [issue]
    kept, excluded = filter_excluded_issues([issue, title], config)
    assert kept == [title]
    assert excluded == 1

    kept, excluded = filter_excluded_issues([issue, title], config,
                                            extra_rules=[ExclusionRule(file_path="index.html")])
    assert kept == []
    assert excluded == 2


def test_generate_exclusions(issue):
    by_fingerprint = generate_exclusion_for_issue(issue)
    assert by_fingerprint.fingerprint == issue.fingerprint
    assert by_fingerprint.reason == "Excluded: Heading level skipped in blog/post/index.html"

    by_file = generate_exclusion_for_issue(issue, "file")
    assert (by_file.rule_id, by_file.file_path) == ("SEO00111", "blog/post/index.html")

    by_rule = generate_exclusion_for_issue(issue, "rule")
    assert by_rule.rule_id == "SEO00111"
    assert by_rule.file_path is None
    assert matches_rule(issue, by_rule)


def test_export_and_load_roundtrip(tmp_path, issue):
    path = tmp_path / "seo-exclusions.json"
    export_exclusions_to_file([generate_exclusion_for_issue(issue, "file")], path)

    data = json.loads(path.read_text())
    assert data == {"exclusions": [{
        "ruleId": "SEO00111",
        "filePath": "blog/post/index.html",
        "reason": "Excluded SEO00111 in blog/post/index.html",
    }]}
    assert load_exclusions_from_file(path)[0].file_path == "blog/post/index.html"


def test_load_bare_list_and_bad_files(tmp_path):
    bare = tmp_path / "bare.json"
    bare.write_text(json.dumps([{"ruleId": "SEO00001"}, {"rule_id": "SEO00002"}]))
    assert [r.rule_id for r in load_exclusions_from_file(bare)] == ["SEO00001", "SEO00002"]

    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    assert load_exclusions_from_file(broken) == []
    assert load_exclusions_from_file(tmp_path / "missing.json") == []

    wrong = tmp_path / "wrong.json"
    wrong.write_text(json.dumps({"rules": []}))
    assert load_exclusions_from_file(wrong) == []


def test_manager_merges_without_duplicates(tmp_path, issue):
    path = tmp_path / "seo-exclusions.json"
    manager = ExclusionManager(path)
    assert manager.rules == []

    assert manager.add([generate_exclusion_for_issue(issue), generate_exclusion_for_issue(issue)]) == 1
    manager.save()

    reloaded = ExclusionManager(path)
    assert reloaded.add([generate_exclusion_for_issue(issue), generate_exclusion_for_issue(issue, "rule")]) == 1
    assert len(reloaded.rules) == 2
