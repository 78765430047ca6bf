# src/distaudit/core/handlers/exclusion_handler.py
import argparse
import logging

from distaudit.core.handlers.check_handler import EXIT_USAGE, add_audit_arguments, run_audit
from distaudit.core.utils.path_utils import PathUtils
from seo_auditor.managers.exclusion_manager import ExclusionManager, generate_exclusion_for_issue

logger = logging.getLogger(__name__)


def handle_exclude(args: list[str]) -> int:
    """
    Handler for 'exclude': audits the site and records an exclusion for every
    issue it reports, merged into the existing exclusions file.
    """
    parser = argparse.ArgumentParser(prog="distaudit exclude",
                                     description="Baseline the current issues into an exclusions file.")
    add_audit_arguments(parser)
    parser.add_argument("--mode", choices=["fingerprint", "file", "rule"], default="fingerprint",
                        help="Granularity of the generated exclusions.")
    parser.add_argument("--out", type=str, default=None,
                        help="Exclusions file to update (default: ./seo-exclusions.json).")

    try:
        parsed = parser.parse_args(args)
    except SystemExit as e:
        return 0 if e.code == 0 else EXIT_USAGE

    outcome = run_audit(parsed)
    if outcome is None:
        return EXIT_USAGE
    _, result = outcome

    out_path = parsed.out or PathUtils.get_default_exclusions_file()
    manager = ExclusionManager(out_path)
    added = manager.add(generate_exclusion_for_issue(issue, parsed.mode) for issue in result.issues)

    try:
        manager.save()
    except OSError as e:
        print(f"❌ Could not write {out_path}: {e}")
        return EXIT_USAGE

    print(f"✅ Added {added} exclusion(s) to {out_path} ({len(manager.rules)} total).")
    return 0
