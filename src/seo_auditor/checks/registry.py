# src/seo_auditor/checks/registry.py
import importlib
import logging
import pkgutil
from typing import List, Set

from .core import CheckDefinition, PageCheck, SiteCheck

logger = logging.getLogger(__name__)


class CheckRegistry:
    """
    Central registry for page and site checks.

    Dynamically discovers CheckDefinition modules in the
    'seo_auditor.checks.rules' package and collects their checks and rule ids.
    """

    _definitions: List[CheckDefinition] = []
    _page_checks: List[PageCheck] = []
    _site_checks: List[SiteCheck] = []
    _all_codes: Set[str] = set()
    _loaded: bool = False

    @classmethod
    def discover(cls) -> None:
        """
        Scans `seo_auditor.checks.rules` for modules with a `DEFINITION`
        attribute (a CheckDefinition) and registers their checks.
        Definitions are registered by (order, name) so runs are deterministic.
        """
        if cls._loaded:
            return

        import seo_auditor.checks.rules as rules_pkg

        definitions: List[CheckDefinition] = []
        for _, name, _ in pkgutil.iter_modules(rules_pkg.__path__):
            full_name = f"seo_auditor.checks.rules.{name}"
            try:
                module = importlib.import_module(full_name)
            except ImportError as e:
                logger.error("Error loading check module %s: %s", name, e)
                continue
            defn = getattr(module, "DEFINITION", None)
            if isinstance(defn, CheckDefinition):
                definitions.append(defn)
                logger.debug("Check module loaded: %s (%d codes)", defn.name, len(defn.codes))

        for defn in sorted(definitions, key=lambda d: (d.order, d.name)):
            cls._definitions.append(defn)
            cls._page_checks.extend(defn.page_checks)
            cls._site_checks.extend(defn.site_checks)
            cls._all_codes.update(defn.codes)

        cls._loaded = True

    @classmethod
    def get_definitions(cls) -> List[CheckDefinition]:
        cls.discover()
        return list(cls._definitions)

    @classmethod
    def get_page_checks(cls) -> List[PageCheck]:
        cls.discover()
        return list(cls._page_checks)

    @classmethod
    def get_site_checks(cls) -> List[SiteCheck]:
        cls.discover()
        return list(cls._site_checks)

    @classmethod
    def get_all_possible_codes(cls) -> List[str]:
        """All rule ids that registered checks declare they can emit."""
        cls.discover()
        return sorted(cls._all_codes)
