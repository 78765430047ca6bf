import json
import logging
import re
from collections import defaultdict
from pathlib import Path
from typing import Any, Dict, List, Union

import pandas as pd
from colorama import Fore, Style

from distaudit.core.managers.config_manager import config_manager
from seo_auditor.model import SEVERITY_ORDER, CheckResult, Issue

logger = logging.getLogger(__name__)

SEVERITY_COLORS = {"error": Fore.RED, "warning": Fore.YELLOW, "notice": Fore.BLUE}
SEVERITY_ICONS = {"error": "x", "warning": "!", "notice": "i"}
SARIF_LEVELS = {"error": "error", "warning": "warning", "notice": "note"}
SARIF_SCHEMA = "https://json.schemastore.org/sarif-2.1.0.json"
ANSI_ESCAPE = re.compile(r"\x1B\[[0-9;]*m")

EXPORT_COLUMNS = ["severity", "ruleId", "ruleName", "category", "relativePath", "line",
                  "element", "actual", "expected", "fixHint", "fingerprint"]

REPORT_FORMATS = ("console", "json", "sarif", "github")


class ReportController:
    """
    Renders a finished CheckResult. Renderers only format the issue list they
    are given; filtering has already happened in the AuditController.
    """

    def __init__(self, result: CheckResult):
        self.result = result

    # --- CONSOLE ---

    @staticmethod
    def _format_issue(issue: Issue) -> str:
        color = SEVERITY_COLORS[issue.severity]
        dim, reset = Style.DIM, Style.RESET_ALL
        lines = [
            f"{color}{Style.BRIGHT}[{SEVERITY_ICONS[issue.severity]}]{reset} {color}{issue.rule_id}{reset}: {issue.rule_name}",
            f"    {dim}File:{reset} {issue.relative_path}",
        ]
        if issue.element:
            lines.append(f"    {dim}Element:{reset} {issue.element}")
        if issue.actual and issue.expected:
            lines.append(f"    {dim}Found:{reset} {issue.actual}, {dim}Expected:{reset} {issue.expected}")
        elif issue.actual:
            lines.append(f"    {dim}Found:{reset} {issue.actual}")
        lines.append(f"    {dim}Fix:{reset} {issue.fix_hint}")
        return "\n".join(lines)

    def format_console(self) -> str:
        result = self.result
        bold, reset = Style.BRIGHT, Style.RESET_ALL
        lines = ["", f"{bold}{Fore.CYAN}SEO Static Analysis Report{reset}", "=" * 50, ""]

        by_category: Dict[str, List[Issue]] = defaultdict(list)
        for issue in result.issues:
            by_category[issue.category].append(issue)

        for category, issues in sorted(by_category.items(), key=lambda item: -len(item[1])):
            lines.append(f"{bold}{category}{reset} ({len(issues)} issues)")
            lines.append("-" * 40)
            for issue in sorted(issues, key=lambda i: SEVERITY_ORDER[i.severity]):
                lines.append(self._format_issue(issue))
                lines.append("")

        by_severity = result.stats.issues_by_severity
        lines += [
            "",
            f"{bold}Summary{reset}",
            "=" * 50,
            f"  Total pages scanned: {result.stats.total_pages}",
            f"  Total images checked: {result.stats.total_images}",
            f"  Total links checked: {result.stats.total_links}",
            "",
            "  Issues by severity:",
            f"    {Fore.RED}Errors:{reset}   {by_severity.get('error', 0)}",
            f"    {Fore.YELLOW}Warnings:{reset} {by_severity.get('warning', 0)}",
            f"    {Fore.BLUE}Notices:{reset}  {by_severity.get('notice', 0)}",
            "",
        ]
        if result.excluded_count:
            lines.append(f"  {Style.DIM}Excluded issues: {result.excluded_count}{reset}")
        if result.disabled_count:
            lines.append(f"  {Style.DIM}Disabled rule issues: {result.disabled_count}{reset}")
        lines += [f"  Duration: {result.duration}ms", ""]

        total = sum(by_severity.get(s, 0) for s in ("error", "warning", "notice"))
        if total == 0:
            lines.append(f"{bold}{Fore.CYAN}All SEO checks passed!{reset}")
        else:
            lines.append(f"{bold}Found {total} issues{reset}")
        lines.append("")
        return "\n".join(lines)

    # --- MACHINE READABLE ---

    def format_json(self) -> str:
        return json.dumps(self.result.model_dump(mode="json", by_alias=True), indent=2)

    def format_github(self) -> str:
        result = self.result
        lines = []
        for issue in result.issues:
            message = issue.fix_hint
            if issue.element:
                message = f"Element: {issue.element}. {message}"
            if issue.actual:
                message = f"Found: {issue.actual}. {message}"
            title = f"{issue.rule_id}: {issue.rule_name}"
            lines.append(f"::{issue.severity} file={issue.relative_path},line={issue.line or 1},title={title}::{message}")

        by_severity = result.stats.issues_by_severity
        lines += [
            "",
            "::group::SEO Check Summary",
            f"Total pages scanned: {result.stats.total_pages}",
            f"Total images checked: {result.stats.total_images}",
            f"Total links checked: {result.stats.total_links}",
            "",
            f"Errors: {by_severity.get('error', 0)}",
            f"Warnings: {by_severity.get('warning', 0)}",
            f"Notices: {by_severity.get('notice', 0)}",
        ]
        if result.excluded_count:
            lines.append(f"Excluded: {result.excluded_count}")
        lines += [f"Duration: {result.duration}ms", "::endgroup::"]
        return "\n".join(lines)

    def build_sarif(self) -> Dict[str, Any]:
        """SARIF 2.1.0 document: one run, rules deduplicated by id in first-seen order."""
        issues = self.result.issues
        help_template = config_manager.get_nested("report.help_uri_template", "{rule_id}")

        rules = []
        seen = set()
        for issue in issues:
            if issue.rule_id in seen:
                continue
            seen.add(issue.rule_id)
            rules.append({
                "id": issue.rule_id,
                "name": issue.rule_name,
                "shortDescription": {"text": issue.rule_name},
                "defaultConfiguration": {"level": SARIF_LEVELS[issue.severity]},
                "helpUri": help_template.format(rule_id=issue.rule_id),
            })

        results = []
        for issue in issues:
            physical: Dict[str, Any] = {"artifactLocation": {"uri": issue.relative_path}}
            if issue.line:
                physical["region"] = {"startLine": issue.line}
            element = f": {issue.element}" if issue.element else ""
            results.append({
                "ruleId": issue.rule_id,
                "level": SARIF_LEVELS[issue.severity],
                "message": {"text": f"{issue.rule_name}{element}. {issue.fix_hint}"},
                "locations": [{"physicalLocation": physical}],
                "fingerprints": {"primary": issue.fingerprint},
            })

        return {
            "$schema": SARIF_SCHEMA,
            "version": "2.1.0",
            "runs": [{
                "tool": {
                    "driver": {
                        "name": config_manager.get_nested("report.tool_name", "SEO Static Checker"),
                        "version": config_manager.get_nested("report.tool_version", "0.0.0"),
                        "informationUri": config_manager.get_nested("report.information_uri", ""),
                        "rules": rules,
                    }
                },
                "results": results,
            }],
        }

    def format_sarif(self) -> str:
        return json.dumps(self.build_sarif(), indent=2)

    def render(self, fmt: str) -> str:
        renderers = {
            "console": self.format_console,
            "json": self.format_json,
            "sarif": self.format_sarif,
            "github": self.format_github,
        }
        if fmt not in renderers:
            raise ValueError(f"Unknown report format '{fmt}'. Choose from: {', '.join(REPORT_FORMATS)}")
        return renderers[fmt]()

    # --- FILES ---

    def write_report(self, fmt: str, file_path: Union[str, Path]) -> Path:
        """Writes the rendered report. Console output is written without ANSI colour codes."""
        content = self.render(fmt)
        if fmt == "console":
            content = ANSI_ESCAPE.sub("", content)
        path = Path(file_path)
        path.write_text(content, encoding="utf-8")
        logger.info("Report written to %s (%s)", path, fmt)
        return path

    def issues_dataframe(self) -> pd.DataFrame:
        rows = [issue.model_dump(by_alias=True) for issue in self.result.issues]
        df = pd.DataFrame(rows, columns=EXPORT_COLUMNS)
        if df.empty:
            return df
        df["sevRank"] = df["severity"].map(SEVERITY_ORDER)
        return df.sort_values(by=["sevRank", "category", "ruleId"], kind="stable").drop(columns=["sevRank"])

    def export_issues(self, file_path: Union[str, Path]) -> Path:
        """Flat issue table; '.xlsx' writes a workbook (with a per-rule summary sheet), anything else CSV."""
        path = Path(file_path)
        df = self.issues_dataframe()

        if path.suffix.lower() != ".xlsx":
            df.to_csv(path, index=False)
            logger.info("Exported %d issues to %s", len(df), path)
            return path

        if df.empty:
            summary = pd.DataFrame(columns=["severity", "category", "ruleId", "ruleName", "count"])
        else:
            summary = (
                df.groupby(["severity", "category", "ruleId", "ruleName"]).size().reset_index(name="count")
                .sort_values(by="count", ascending=False)
            )

        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            summary.to_excel(writer, sheet_name="Summary", index=False)
            df.to_excel(writer, sheet_name="Issues", index=False)

            # Column widths follow the longest cell, capped for readability.
            for sheet in writer.sheets.values():
                for col in sheet.columns:
                    max_len = max((len(str(cell.value)) for cell in col if cell.value is not None), default=0)
                    sheet.column_dimensions[col[0].column_letter].width = min(max_len + 2, 60)

        logger.info("Exported %d issues to %s", len(df), path)
        return path


def write_report(result: CheckResult, fmt: str, file_path: Union[str, Path]) -> Path:
    return ReportController(result).write_report(fmt, file_path)


def export_issues(result: CheckResult, file_path: Union[str, Path]) -> Path:
    return ReportController(result).export_issues(file_path)
