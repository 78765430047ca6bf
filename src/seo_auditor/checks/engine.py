import logging
from typing import List

from page_parser.model import PageRecord
from seo_auditor.model import Issue
from .core import AuditContext
from .registry import CheckRegistry

logger = logging.getLogger(__name__)


class CheckEngine:
    """
    Runs the registered checks.

    Page checks are applied to every PageRecord, site checks once per run.
    Checks never mutate the records or the index, so the engine keeps no state
    beyond the list of checks.
    """

    def __init__(self):
        CheckRegistry.discover()
        self.page_checks = CheckRegistry.get_page_checks()
        self.site_checks = CheckRegistry.get_site_checks()

    def run_page_checks(self, page: PageRecord, ctx: AuditContext) -> List[Issue]:
        issues: List[Issue] = []
        for check in self.page_checks:
            issues.extend(check(page, ctx))
        return issues

    def run_site_checks(self, ctx: AuditContext) -> List[Issue]:
        issues: List[Issue] = []
        for check in self.site_checks:
            found = check(ctx)
            logger.debug("Site check %s: %d issue(s)", check.__name__, len(found))
            issues.extend(found)
        return issues

    def run_all(self, ctx: AuditContext) -> List[Issue]:
        """Page checks for every page in path order, followed by the site checks."""
        issues: List[Issue] = []
        for rel in sorted(ctx.site.pages):
            issues.extend(self.run_page_checks(ctx.site.pages[rel], ctx))
        issues.extend(self.run_site_checks(ctx))
        return issues
