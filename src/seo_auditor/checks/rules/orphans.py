import logging
import os
import re
from typing import List

import networkx as nx

from page_parser.utils.url_utils import is_http_url, url_path
from seo_auditor.model import Issue
from ..core import AuditContext, CheckDefinition, IssueCollector, audit_spec

logger = logging.getLogger(__name__)

HOMEPAGE = re.compile(r"^[a-z]{2}(-[A-Z]{2})?/index\.html$", re.IGNORECASE)


def is_homepage(relative_path: str) -> bool:
    return relative_path == "index.html" or HOMEPAGE.match(relative_path) is not None


def build_link_graph(ctx: AuditContext) -> nx.DiGraph:
    """
    Directed graph of internal links between dist files, keyed on relative paths.
    Targets that resolve to a directory also link that directory's index.html.
    """
    graph = nx.DiGraph()
    resolver = ctx.resolver
    for rel, page in ctx.site.pages.items():
        graph.add_node(rel)
        for link in page.links:
            if not link.is_internal or not link.href:
                continue
            href = url_path(link.href) if is_http_url(link.href) else link.href
            resolved = resolver.resolve_to_file_path(href, page.file_path)
            if resolved is None:
                continue
            graph.add_edge(rel, resolver.relative_to_dist(resolved))
            if resolver.is_dir(resolved):
                graph.add_edge(rel, resolver.relative_to_dist(os.path.join(resolved, "index.html")))
    logger.debug("Link graph: %d nodes, %d edges", graph.number_of_nodes(), graph.number_of_edges())
    return graph


@audit_spec(codes=["SEO01221"])
def check_orphan_pages(ctx: AuditContext) -> List[Issue]:
    """Pages no internal link points to. The homepage and noindex pages are exempt."""
    issues = IssueCollector()
    graph = build_link_graph(ctx)

    for rel in sorted(ctx.site.pages):
        page = ctx.site.pages[rel]
        if is_homepage(rel) or page.is_noindex:
            continue
        if graph.in_degree(rel) == 0:
            issues.add("SEO01221", page, element=page.title or page.url, fingerprint=f"SEO01221::{rel}")

    return issues


DEFINITION = CheckDefinition(
    name="orphans",
    site_checks=[check_orphan_pages],
    order=310,
)
