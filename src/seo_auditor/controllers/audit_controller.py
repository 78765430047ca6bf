import logging
import os
import time
from collections import Counter
from typing import List, Optional

from distaudit.model import AuditConfig, ConfigError
from page_parser.controllers.index_controller import IndexController
from page_parser.model import SiteIndex
from seo_auditor.checks.core import AuditContext
from seo_auditor.checks.engine import CheckEngine
from seo_auditor.managers.exclusion_manager import (
    filter_disabled_rules,
    filter_excluded_issues,
    load_exclusions_from_file,
)
from seo_auditor.model import CheckResult, CheckStats, Issue
from seo_auditor.services.schema_validation_service import SchemaValidationService

logger = logging.getLogger(__name__)


class AuditController:
    """
    Orchestrates one audit run: index the dist folder, run the page and site
    checks, apply disabled rules and exclusions and compute the statistics.
    """

    def __init__(
            self,
            config: AuditConfig,
            *,
            workers: Optional[int] = None,
            show_progress: bool = False,
            schema_validator: Optional[SchemaValidationService] = None,
    ):
        self.config = config
        self.workers = workers
        self.show_progress = show_progress
        self.schema_validator = schema_validator or SchemaValidationService()
        self.engine = CheckEngine()

    def _validate_dist(self) -> None:
        if not os.path.isdir(self.config.dist_path):
            raise ConfigError(f"Dist folder not found: {self.config.dist_path}")

    def build_index(self) -> SiteIndex:
        controller = IndexController(self.config, workers=self.workers, show_progress=self.show_progress)
        return controller.build_index()

    def check_site(self, site: SiteIndex) -> List[Issue]:
        """Runs all registered checks against an already built index."""
        ctx = AuditContext(self.config, site, schema_validator=self.schema_validator)
        try:
            return self.engine.run_all(ctx)
        finally:
            ctx.resolver.clear()

    @staticmethod
    def compute_stats(issues: List[Issue], site: SiteIndex) -> CheckStats:
        stats = CheckStats(
            total_pages=len(site.pages),
            total_issues=len(issues),
            total_images=site.total_images,
            total_links=site.total_links,
        )
        stats.issues_by_severity.update(Counter(i.severity for i in issues))
        stats.issues_by_category = dict(Counter(i.category for i in issues))
        return stats

    def run(self) -> CheckResult:
        start = time.perf_counter()
        self._validate_dist()

        logger.info("Auditing %s (base URL %s)", self.config.dist_path, self.config.base_url)
        site = self.build_index()
        raw_issues = self.check_site(site)

        issues = filter_disabled_rules(raw_issues, self.config)
        disabled_count = len(raw_issues) - len(issues)

        file_rules = []
        if self.config.exclusions_file:
            file_rules = load_exclusions_from_file(self.config.exclusions_file)
        issues, excluded_count = filter_excluded_issues(issues, self.config, extra_rules=file_rules)

        result = CheckResult(
            issues=issues,
            stats=self.compute_stats(issues, site),
            excluded_count=excluded_count,
            disabled_count=disabled_count,
            duration=int((time.perf_counter() - start) * 1000),
        )
        logger.info(
            "Audit finished: %d issue(s), %d excluded, %d disabled, %dms",
            len(issues), excluded_count, disabled_count, result.duration
        )
        return result
