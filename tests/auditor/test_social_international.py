# tests/auditor/test_social_international.py
from conftest import html_page, rule_ids
from seo_auditor.checks.rules.international import check_international, is_valid_lang
from seo_auditor.checks.rules.social import check_social

COMPLETE_SOCIAL = """
<title>Product launch</title>
<meta name="description" content="Meta description">
<link rel="canonical" href="https://example.com/launch">
<meta property="og:title" content="Our new product is here">
<meta property="og:description" content="Everything you need to know about the product we launched this week.">
<meta property="og:image" content="https://example.com/og.jpg">
<meta property="og:image:width" content="1200">
<meta property="og:image:height" content="630">
<meta property="og:image:alt" content="Product photo">
<meta property="og:url" content="https://example.com/launch">
<meta property="og:type" content="website">
<meta property="og:site_name" content="Example">
<meta property="og:locale" content="en_US">
<meta name="twitter:card" content="summary_large_image">
<meta name="twitter:title" content="Our new product">
<meta name="twitter:description" content="All about the launch.">
<meta name="twitter:image" content="https://example.com/og.jpg">
<meta name="twitter:image:alt" content="Product photo">
<meta name="twitter:site" content="@example">
<meta name="twitter:creator" content="@author">
"""


def test_complete_social_tags_pass(make_page, make_context):
    page = make_page(html_page(head=COMPLETE_SOCIAL))
    assert check_social(page, make_context(page)) == []


def test_missing_social_tags(make_page, make_context):
    page = make_page(html_page())
    ids = set(rule_ids(check_social(page, make_context(page))))
    assert {"SEO00168", "SEO00169", "SEO00170", "SEO00171", "SEO01175", "SEO01185", "SEO01186",
            "SEO00172", "SEO00173", "SEO00174", "SEO00175", "SEO01191", "SEO01193"} == ids


def test_open_graph_values(make_page, make_context):
    head = """
    <title>Same</title>
    <link rel="canonical" href="https://example.com/page">
    <meta property="og:title" content="Same">
    <meta property="og:description" content="">
    <meta property="og:image" content="/img/missing.jpg">
    <meta property="og:url" content="https://www.example.com/page">
    <meta property="og:type" content="article">
    <meta property="og:locale" content="en-us">
    <meta property="og:image:type" content="image/bmp">
    """
    page = make_page(html_page(head=head))
    ids = set(rule_ids(check_social(page, make_context(page))))
    assert {"SEO01195", "SEO01207", "SEO00371", "SEO00372", "SEO00422", "SEO01190",
            "SEO01203", "SEO01204", "SEO01187", "SEO01188", "SEO01199", "SEO01205"} <= ids
    assert "SEO01175" not in ids


def test_og_url_without_www(make_page, make_context, audit_config):
    config = audit_config.model_copy(update={"base_url": "https://www.example.com"})
    head = '<meta property="og:url" content="https://example.com/">'
    page = make_page(html_page(head=head), config=config)
    assert "SEO00423" in rule_ids(check_social(page, make_context(page, config=config)))


def test_twitter_values(make_page, make_context):
    head = f"""
    <meta name="twitter:card" content="large">
    <meta name="twitter:title" content="{'t' * 71}">
    <meta name="twitter:description" content=" ">
    <meta name="twitter:image" content="http://example.com/t.jpg">
    <meta name="twitter:site" content="example">
    <meta name="twitter:creator" content="@this_handle_is_far_too_long">
    """
    page = make_page(html_page(head=head))
    ids = set(rule_ids(check_social(page, make_context(page))))
    assert {"SEO01180", "SEO01181", "SEO01209", "SEO01198", "SEO01200", "SEO01192", "SEO01194"} <= ids


def test_small_og_image(make_page, make_context):
    head = """
    <meta property="og:image" content="https://example.com/a.jpg">
    <meta property="og:image:width" content="600">
    <meta property="og:image:height" content="315">
    """
    page = make_page(html_page(head=head))
    issues = check_social(page, make_context(page))
    small = [i for i in issues if i.rule_id == "SEO01189"]
    assert small[0].actual == "600x315"


# --- Internationaal ---

def test_lang_codes():
    assert is_valid_lang("en")
    assert is_valid_lang("x-default")
    assert is_valid_lang("pt-BR")
    assert is_valid_lang("fil")
    assert not is_valid_lang("english")
    assert not is_valid_lang("en_US")


def test_invalid_html_lang(make_page, make_context):
    page = make_page(html_page(lang="english"))
    assert rule_ids(check_international(page, make_context(page))) == ["SEO00182"]


def test_hreflang_set(make_page, make_context):
    head = """
    <link rel="alternate" hreflang="en" href="https://example.com">
    <link rel="alternate" hreflang="nl" href="https://example.com/nl">
    <link rel="alternate" hreflang="x-default" href="https://example.com">
    """
    page = make_page(html_page(head=head))
    assert check_international(page, make_context(page)) == []


def test_hreflang_problems(make_page, make_context):
    """Zonder zelfverwijzing verwacht SEO00179 de canonical (of anders de pagina-URL)."""
    head = """
    <link rel="canonical" href="https://example.com/about">
    <link rel="alternate" hreflang="en_GB" href="/en">
    <link rel="alternate" hreflang="nl" href="https://www.example.com/nl">
    <link rel="alternate" hreflang="nl" href="https://example.com/nl/over">
    """
    page = make_page(html_page(head=head), "about.html")
    issues = check_international(page, make_context(page))

    assert rule_ids(issues) == ["SEO00177", "SEO00180", "SEO00184", "SEO00178", "SEO00179", "SEO00181"]
    assert issues[4].expected == "https://example.com/about"


def test_single_hreflang_needs_no_x_default(make_page, make_context):
    head = '<link rel="alternate" hreflang="en" href="https://example.com/solo">'
    page = make_page(html_page(head=head), "solo.html")
    assert check_international(page, make_context(page)) == []
