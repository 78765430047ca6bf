# src/distaudit/core/handlers/check_handler.py
import argparse
import logging
import sys
from typing import Dict, Any, Optional, Tuple

from distaudit.core.utils.config_loader import build_audit_config, load_audit_config
from distaudit.core.utils.path_utils import PathUtils
from distaudit.model import AuditConfig, DistAuditError
from seo_auditor.controllers.audit_controller import AuditController
from seo_auditor.controllers.report_controller import REPORT_FORMATS, ReportController
from seo_auditor.model import CheckResult

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ISSUES = 1
EXIT_USAGE = 2


def add_audit_arguments(parser: argparse.ArgumentParser) -> None:
    """Arguments shared by every command that runs an audit."""
    parser.add_argument("dist", nargs="?", default=None, help="Path to the built site (default: from config).")
    parser.add_argument("--base-url", type=str, default=None, help="Canonical base URL, e.g. https://example.com")
    parser.add_argument("--main-domain", type=str, default=None, help="Registrable domain when it differs from the base URL host.")
    parser.add_argument("--config", type=str, default=None, help="Audit config file (default: ./seo-check.json).")
    parser.add_argument("--exclusions", type=str, default=None, help="Exclusions file merged into the config exclusions.")
    parser.add_argument("--workers", type=int, default=None, help="Extraction processes (1 = in-process).")
    parser.add_argument("--legacy-fingerprints", action="store_true",
                        help="Let any fingerprint exclusion suppress when its other fields match.")
    parser.add_argument("--no-progress", action="store_true", help="Hide progress bars.")


def config_from_args(parsed: argparse.Namespace) -> AuditConfig:
    config_path = parsed.config or PathUtils.get_default_config_file()
    if parsed.config is None and not config_path.exists():
        file_values: Dict[str, Any] = {}
    else:
        file_values = load_audit_config(config_path)

    overrides: Dict[str, Any] = {
        "dist_path": parsed.dist,
        "base_url": parsed.base_url,
        "main_domain": parsed.main_domain,
        "exclusions_file": parsed.exclusions,
        "fail_on": getattr(parsed, "fail_on", None),
    }
    if parsed.legacy_fingerprints:
        overrides["strict_fingerprints"] = False
    return build_audit_config(file_values, overrides)


def run_audit(parsed: argparse.Namespace) -> Optional[Tuple[AuditConfig, CheckResult]]:
    """Builds the config and runs one audit. Errors are printed and give None."""
    try:
        config = config_from_args(parsed)
        controller = AuditController(config, workers=parsed.workers, show_progress=not parsed.no_progress)
        return config, controller.run()
    except DistAuditError as e:
        print(f"❌ {e}", file=sys.stderr)
        return None


def handle_check(args: list[str]) -> int:
    """
    Handler for 'check': audit a dist folder and emit a report.
    Exit code 1 when an issue at or above --fail-on remains, 2 on usage errors.
    """
    parser = argparse.ArgumentParser(prog="distaudit check", description="Audit a built static site.")
    add_audit_arguments(parser)
    parser.add_argument("--format", choices=REPORT_FORMATS, default="console", help="Report format.")
    parser.add_argument("--output", type=str, default=None, help="Write the report to a file instead of stdout.")
    parser.add_argument("--export", type=str, default=None, help="Export the issue table (.csv or .xlsx).")
    parser.add_argument("--fail-on", choices=["error", "warning", "notice"], default=None,
                        help="Lowest severity that fails the run (default: error).")

    try:
        parsed = parser.parse_args(args)
    except SystemExit as e:
        return EXIT_OK if e.code == 0 else EXIT_USAGE

    outcome = run_audit(parsed)
    if outcome is None:
        return EXIT_USAGE
    config, result = outcome

    report = ReportController(result)
    if parsed.output:
        report.write_report(parsed.format, parsed.output)
        print(f"✅ Report written to {parsed.output}", file=sys.stderr)
    else:
        print(report.render(parsed.format))

    if parsed.export:
        try:
            report.export_issues(parsed.export)
            print(f"✅ Exported {len(result.issues)} issues to {parsed.export}", file=sys.stderr)
        except (OSError, ValueError) as e:
            print(f"❌ Export failed: {e}", file=sys.stderr)
            return EXIT_USAGE

    return EXIT_ISSUES if result.count_at_or_above(config.fail_on) else EXIT_OK
