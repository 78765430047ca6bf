# tests/auditor/test_reporters.py
import json

import pandas as pd
import pytest

from seo_auditor.checks.core import create_issue
from seo_auditor.controllers.report_controller import ANSI_ESCAPE, ReportController, export_issues, write_report
from seo_auditor.model import CheckResult, CheckStats


@pytest.fixture
def result():
    issues = [
        create_issue("SEO00003", file="/d/index.html", relative_path="index.html"),
        create_issue("SEO00001", file="/d/index.html", relative_path="index.html"),
        create_issue("SEO00111", file="/d/a.html", relative_path="a.html", element="Intro",
                     actual="H1 -> H3", expected="H1 -> H2", line=12),
        create_issue("SEO00001", file="/d/b.html", relative_path="b.html"),
    ]
    stats = CheckStats(total_pages=3, total_issues=4, total_images=5, total_links=7,
                       issues_by_severity={"error": 2, "warning": 1, "notice": 1},
                       issues_by_category={"metadata": 3, "headings": 1})
    return CheckResult(issues=issues, stats=stats, excluded_count=2, disabled_count=1, duration=42)


def test_console_report(result):
    text = ANSI_ESCAPE.sub("", ReportController(result).format_console())

    assert "SEO Static Analysis Report" in text
    # Categorieën op aantal, binnen een categorie fouten eerst.
    assert text.index("metadata (3 issues)") < text.index("headings (1 issues)")
    assert text.index("[x] SEO00001") < text.index("[i] SEO00003")
    assert "    Found: H1 -> H3, Expected: H1 -> H2" in text
    assert "Excluded issues: 2" in text
    assert "Disabled rule issues: 1" in text
    assert "Duration: 42ms" in text
    assert "Found 4 issues" in text


def test_console_report_without_issues():
    text = ReportController(CheckResult()).format_console()
    assert "All SEO checks passed!" in text


def test_json_report_is_camel_case(result):
    data = json.loads(ReportController(result).format_json())
    assert data["excludedCount"] == 2
    assert data["stats"]["totalPages"] == 3
    assert data["issues"][2]["ruleId"] == "SEO00111"
    assert data["issues"][2]["fixHint"]


def test_github_annotations(result):
    lines = ReportController(result).format_github().splitlines()

    assert lines[0].startswith("::notice file=index.html,line=1,title=SEO00003: Missing meta robots::")
    assert lines[2].startswith("::warning file=a.html,line=12,title=SEO00111: Heading level skipped::"
                               "Found: H1 -> H3. Element: Intro. ")
    assert "::group::SEO Check Summary" in lines
    assert lines[-1] == "::endgroup::"
    assert "Excluded: 2" in lines


def test_sarif_document(result):
    sarif = ReportController(result).build_sarif()

    assert sarif["version"] == "2.1.0"
    assert sarif["$schema"].endswith("sarif-2.1.0.json")
    run = sarif["runs"][0]
    driver = run["tool"]["driver"]
    assert driver["name"] == "SEO Static Checker"

    # Regels worden ontdubbeld in volgorde van eerste voorkomen.
    assert [r["id"] for r in driver["rules"]] == ["SEO00003", "SEO00001", "SEO00111"]
    assert driver["rules"][0]["defaultConfiguration"]["level"] == "note"
    assert driver["rules"][0]["helpUri"].endswith("#SEO00003")

    results = run["results"]
    assert len(results) == 4
    assert "region" not in results[0]["locations"][0]["physicalLocation"]
    assert results[2]["locations"][0]["physicalLocation"]["region"] == {"startLine": 12}
    assert results[2]["message"]["text"].startswith("Heading level skipped: Intro. ")
    assert results[2]["fingerprints"]["primary"] == result.issues[2].fingerprint


def test_unknown_format(result):
    with pytest.raises(ValueError):
        ReportController(result).render("xml")


def test_write_report_strips_ansi(result, tmp_path):
    path = write_report(result, "console", tmp_path / "report.txt")
    content = path.read_text(encoding="utf-8")
    assert "\x1b[" not in content
    assert "Found 4 issues" in content


def test_export_csv_sorted_by_severity(result, tmp_path):
    path = export_issues(result, tmp_path / "issues.csv")
    df = pd.read_csv(path)
    assert list(df["severity"]) == ["error", "error", "warning", "notice"]
    assert "fingerprint" in df.columns


def test_export_xlsx_has_summary_sheet(result, tmp_path):
    path = export_issues(result, tmp_path / "issues.xlsx")
    sheets = pd.read_excel(path, sheet_name=None)
    assert set(sheets) == {"Summary", "Issues"}
    summary = sheets["Summary"]
    assert summary.iloc[0]["ruleId"] == "SEO00001"
    assert summary.iloc[0]["count"] == 2
    assert len(sheets["Issues"]) == 4
