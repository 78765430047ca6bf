# tests/auditor/test_structured_data.py
import json

import pytest

from conftest import html_page, rule_ids
from seo_auditor.checks.rules.structured_data import check_structured_data
from seo_auditor.services.schema_validation_service import SchemaValidationService


@pytest.fixture(scope="module")
def validator():
    return SchemaValidationService()


def _json_ld(*objects) -> str:
    return "".join(
        f'<script type="application/ld+json">{o if isinstance(o, str) else json.dumps(o)}</script>'
        for o in objects
    )


# --- SchemaValidationService ---

def test_bundled_types(validator):
    types = validator.available_types()
    assert "Article" in types
    assert "BreadcrumbList" in types
    assert not any(t.startswith("_") for t in types)
    assert validator.has_schema_for("Product")
    assert not validator.has_schema_for("Spaceship")
    assert not validator.has_schema_for("_defs")


def test_full_type_vocabulary_is_known(validator):
    """Types zonder eigen JSON Schema zijn toch bekende schema.org-types (en dus geldig)."""
    for schema_type in ("SearchAction", "ContactPoint", "EntryPoint", "Brand", "Restaurant", "ScholarlyArticle"):
        assert validator.has_schema_for(schema_type), schema_type
        assert schema_type in validator.available_types()
    assert validator.validate({"@type": "SearchAction", "target": 42}).valid


def test_valid_object(validator):
    result = validator.validate({"@type": "Article", "headline": "Hi", "author": {"@type": "Person", "name": "Jan"}})
    assert result.valid
    assert result.errors == []


def test_type_error_has_json_pointer(validator):
    """Een fout type via een $ref naar de gedeelde definities levert een pad en keyword op."""
    result = validator.validate({"@type": "Article", "wordCount": [1, 2]})
    assert not result.valid
    error = result.errors[0]
    assert error.schema_type == "Article"
    assert error.path == "/wordCount"
    assert error.keyword == "type"


def test_objects_without_known_type_are_valid(validator):
    assert validator.validate({"name": 1}).valid
    assert validator.validate({"@type": "Spaceship", "name": 1}).valid
    assert validator.validate(["not", "an", "object"]).valid


# --- check_structured_data ---

def test_parse_error_sentinel(make_page, make_context):
    page = make_page(html_page(head=_json_ld("{broken")))
    issues = check_structured_data(page, make_context(page))
    assert rule_ids(issues) == ["SEO00229"]
    assert issues[0].actual == "{broken"


def test_context_and_type_presence(make_page, make_context):
    page = make_page(html_page(head=_json_ld({"name": "x"})))
    assert rule_ids(check_structured_data(page, make_context(page))) == ["SEO00230", "SEO00231"]


def test_required_fields(make_page, make_context):
    article = {"@context": "https://schema.org", "@type": "Article", "headline": " ", "author": "Jan"}
    page = make_page(html_page(head=_json_ld(article)))
    issues = check_structured_data(page, make_context(page))

    assert rule_ids(issues) == ["SEO00233", "SEO00232"]
    assert issues[0].rule_name == "Schema Article: empty 'headline'"
    assert issues[1].rule_name == "Schema Article: missing 'datePublished'"


def test_unknown_type_and_graph(make_page, make_context):
    graph = {
        "@context": "https://schema.org",
        "@graph": [
            {"@type": "Spaceship", "name": "Apollo"},
            {"@type": "WebSite", "name": "Example", "url": "https://example.com"},
        ],
    }
    page = make_page(html_page(head=_json_ld(graph)))
    issues = check_structured_data(page, make_context(page))
    assert rule_ids(issues) == ["SEO01174"]
    assert issues[0].element == "Unknown schema type: Spaceship"


def test_breadcrumbs(make_page, make_context):
    crumbs = {
        "@context": "https://schema.org",
        "@type": "BreadcrumbList",
        "itemListElement": [
            {"@type": "ListItem", "position": 1, "name": "Home", "item": "https://example.com"},
            {"@type": "ListItem", "name": "Blog"},
            "not an object",
        ],
    }
    page = make_page(html_page(head=_json_ld(crumbs)))
    issues = [i for i in check_structured_data(page, make_context(page)) if i.rule_id == "SEO00360"]
    assert [i.element for i in issues] == ["ListItem 2 missing position", "ListItem 3 missing position"]

    broken = dict(crumbs, itemListElement="Home > Blog")
    page = make_page(html_page(head=_json_ld(broken)), "broken.html")
    assert "SEO00359" in rule_ids(check_structured_data(page, make_context(page)))


def test_nested_objects_are_checked(make_page, make_context):
    """Geneste schema-objecten (zoals een Offer in een Product) worden recursief gecontroleerd."""
    product = {
        "@context": "https://schema.org",
        "@type": "Product",
        "name": "Widget",
        "offers": {"@type": "Offer", "price": "9.99"},
    }
    page = make_page(html_page(head=_json_ld(product)))
    issues = check_structured_data(page, make_context(page))
    assert [i.rule_name for i in issues] == ["Schema Offer: missing 'priceCurrency'"]


def test_schema_violations_are_deduplicated(make_page, make_context):
    article = {
        "@context": "https://schema.org",
        "@type": "Article",
        "headline": "Hi",
        "author": "Jan",
        "datePublished": "2024-01-01",
        "wordCount": [1],
    }
    page = make_page(html_page(head=_json_ld(article)))
    issues = [i for i in check_structured_data(page, make_context(page)) if i.rule_id in ("SEO01172", "SEO01173")]
    assert len(issues) == 1
    assert issues[0].rule_id == "SEO01173"
    assert issues[0].element.startswith("Article/wordCount: ")


def test_top_level_array(make_page, make_context):
    page = make_page(html_page(head=_json_ld([{"@type": "Person", "name": "Jan"}, {"@type": "Person"}])))
    issues = check_structured_data(page, make_context(page))
    assert rule_ids(issues) == ["SEO00230", "SEO00230", "SEO00232"]


def test_common_nested_types_are_not_unknown(make_page, make_context):
    """Een zoekactie op de WebSite en een ContactPoint op de Organization zijn gewone schema.org."""
    website = {
        "@context": "https://schema.org",
        "@type": "WebSite",
        "name": "Example",
        "url": "https://example.com",
        "potentialAction": {
            "@type": "SearchAction",
            "target": {"@type": "EntryPoint", "urlTemplate": "https://example.com/search?q={q}"},
            "query-input": "required name=q",
        },
    }
    organization = {
        "@context": "https://schema.org",
        "@type": "Organization",
        "name": "Example BV",
        "url": "https://example.com",
        "contactPoint": {"@type": "ContactPoint", "telephone": "+31-20-0000000", "contactType": "customer service"},
    }
    page = make_page(html_page(head=_json_ld(website, organization)))
    issues = check_structured_data(page, make_context(page))
    assert rule_ids(issues) == []
