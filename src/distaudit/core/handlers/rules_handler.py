# src/distaudit/core/handlers/rules_handler.py
import argparse
import logging

from seo_auditor.rules.catalog import SEO_RULES, get_categories

logger = logging.getLogger(__name__)


def handle_rules(args: list[str]) -> int:
    """Handler for 'rules': prints the rule catalog, optionally filtered."""
    parser = argparse.ArgumentParser(prog="distaudit rules", description="List the SEO rule catalog.")
    parser.add_argument("--category", choices=get_categories(), default=None, help="Only this category.")
    parser.add_argument("--severity", choices=["error", "warning", "notice"], default=None, help="Only this severity.")

    try:
        parsed = parser.parse_args(args)
    except SystemExit as e:
        return 0 if e.code == 0 else 2

    rules = [
        r for r in SEO_RULES
        if (parsed.category is None or r.category == parsed.category)
        and (parsed.severity is None or r.severity == parsed.severity)
    ]

    print("\n" + "=" * 60)
    print(f"{'RULE':<10} | {'SEVERITY':<8} | {'CATEGORY':<16} | NAME")
    print("=" * 60)
    for rule in sorted(rules, key=lambda r: r.id):
        print(f"{rule.id:<10} | {rule.severity:<8} | {rule.category:<16} | {rule.name}")
    print("-" * 60)
    print(f"📋 {len(rules)} rule(s)")
    return 0
