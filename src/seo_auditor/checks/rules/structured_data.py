from typing import Any, Dict, List

from page_parser.model import PageRecord
from seo_auditor.model import Issue
from ..core import AuditContext, CheckDefinition, IssueCollector, audit_spec

REQUIRED_FIELDS: Dict[str, List[str]] = {
    "Article": ["headline", "author", "datePublished"],
    "NewsArticle": ["headline", "author", "datePublished"],
    "BlogPosting": ["headline", "author", "datePublished"],
    "Product": ["name", "offers"],
    "Organization": ["name", "url"],
    "Person": ["name"],
    "LocalBusiness": ["name", "address"],
    "WebSite": ["name", "url"],
    "WebPage": ["name"],
    "FAQPage": ["mainEntity"],
    "HowTo": ["name", "step"],
    "Recipe": ["name", "recipeIngredient", "recipeInstructions"],
    "Event": ["name", "startDate", "location"],
    "VideoObject": ["name", "thumbnailUrl", "uploadDate"],
    "ImageObject": ["contentUrl"],
    "BreadcrumbList": ["itemListElement"],
    "ItemList": ["itemListElement"],
    "Review": ["itemReviewed", "reviewRating"],
    "AggregateRating": ["ratingValue", "reviewCount"],
    "Offer": ["price", "priceCurrency"],
    "SoftwareApplication": ["name", "operatingSystem", "applicationCategory"],
    "JobPosting": ["title", "datePosted", "hiringOrganization"],
    "Course": ["name", "provider"],
    "Book": ["name", "author"],
}


def _check_required(obj: Dict[str, Any], schema_type: str, page: PageRecord, issues: IssueCollector) -> None:
    for field in REQUIRED_FIELDS.get(schema_type, []):
        value = obj.get(field)
        if value is None:
            issues.add("SEO00232", page, element=f"{schema_type}: missing '{field}'",
                       rule_name=f"Schema {schema_type}: missing '{field}'")
        elif isinstance(value, str) and not value.strip():
            issues.add("SEO00233", page, element=f"{schema_type}: empty '{field}'",
                       rule_name=f"Schema {schema_type}: empty '{field}'")


def _check_breadcrumbs(obj: Dict[str, Any], page: PageRecord, issues: IssueCollector) -> None:
    if "itemListElement" not in obj:
        return
    items = obj["itemListElement"]
    if not isinstance(items, list):
        issues.add("SEO00359", page)
        return
    for i, item in enumerate(items, start=1):
        if not isinstance(item, dict) or not item.get("position"):
            issues.add("SEO00360", page, element=f"ListItem {i} missing position")


def check_schema_item(item: Any, page: PageRecord, ctx: AuditContext, issues: IssueCollector) -> None:
    """
    Checks one typed schema.org node, then recurses into every nested object
    (including items of nested arrays) so embedded nodes are validated too.
    """
    if not isinstance(item, dict):
        return
    declared = item.get("@type")
    if not declared:
        return

    validator = ctx.schema_validator
    for schema_type in declared if isinstance(declared, list) else [declared]:
        if not isinstance(schema_type, str):
            continue
        if not validator.has_schema_for(schema_type):
            label = f"Unknown schema type: {schema_type}"
            issues.add("SEO01174", page, element=label, rule_name=label)
        _check_required(item, schema_type, page, issues)
        if schema_type == "BreadcrumbList":
            _check_breadcrumbs(item, page, issues)

    result = validator.validate(item)
    seen = set()
    for error in result.errors:
        key = f"{error.schema_type}:{error.path}:{error.keyword}"
        if key in seen:
            continue
        seen.add(key)
        rule_id = "SEO01173" if error.keyword == "type" else "SEO01172"
        issues.add(rule_id, page, element=f"{error.schema_type}{error.path}: {error.message}",
                   rule_name=f"Schema {error.schema_type}: {error.message}")

    for key, value in item.items():
        if key.startswith("@"):
            continue
        if isinstance(value, list):
            for nested in value:
                check_schema_item(nested, page, ctx, issues)
        elif isinstance(value, dict):
            check_schema_item(value, page, ctx, issues)


def _top_level_objects(page: PageRecord):
    for block in page.json_ld:
        if block.parse_error:
            yield block, None
        elif isinstance(block.data, dict):
            yield block, block.data
        elif isinstance(block.data, list):
            for item in block.data:
                if isinstance(item, dict):
                    yield block, item


@audit_spec(codes=["SEO00229", "SEO00230", "SEO00231", "SEO00232", "SEO00233", "SEO00359", "SEO00360",
                   "SEO01172", "SEO01173", "SEO01174"])
def check_structured_data(page: PageRecord, ctx: AuditContext) -> List[Issue]:
    """JSON-LD blocks: parse errors, @context/@type presence, required fields and schema validation."""
    issues = IssueCollector()

    for block, obj in _top_level_objects(page):
        if obj is None:
            issues.add("SEO00229", page, actual=(block.raw or "")[:50] or None)
            continue

        if "@context" not in obj:
            issues.add("SEO00230", page)
        if "@type" not in obj and "@graph" not in obj:
            issues.add("SEO00231", page)

        graph = obj.get("@graph")
        if isinstance(graph, list):
            for item in graph:
                check_schema_item(item, page, ctx, issues)
        elif "@type" in obj:
            check_schema_item(obj, page, ctx, issues)

    return issues


DEFINITION = CheckDefinition(
    name="structured_data",
    page_checks=[check_structured_data],
    order=150,
)
