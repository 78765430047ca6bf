# tests/auditor/test_site_checks.py
import logging

from conftest import html_page, rule_ids, write_file
from seo_auditor.checks.rules.duplicates import check_duplicates, is_language_variant_set, summarize_paths
from seo_auditor.checks.rules.orphans import check_orphan_pages, is_homepage
from seo_auditor.checks.rules.robots import check_robots_txt, parse_robots_lines
from seo_auditor.checks.rules.sitemap import check_sitemap, parse_sitemap


def _titled(title: str, body: str = "", canonical: str = "") -> str:
    head = f"<title>{title}</title>"
    if canonical:
        head += f'<link rel="canonical" href="{canonical}">'
    return html_page(body, head=head)


# --- Duplicaten ---

def test_summarize_paths():
    assert summarize_paths(["a", "b"]) == "a, b"
    assert summarize_paths(["a", "b", "c", "d", "e"]) == "a, b, c (+2 more)"


def test_duplicate_titles(make_page, make_context):
    pages = [make_page(_titled("Same title"), f"p{i}.html") for i in range(5)]
    pages.append(make_page(_titled("Unique"), "u.html"))
    issues = check_duplicates(make_context(*pages))

    assert rule_ids(issues) == ["SEO00088"]
    issue = issues[0]
    assert issue.relative_path == "p0.html, p1.html, p2.html (+2 more)"
    assert issue.element == "Same title"
    assert issue.fingerprint == "SEO00088::Same title"
    assert issue.actual == "5 pages"


def test_canonical_language_variants_are_exempt(make_page, make_context):
    """Taalvarianten mogen dezelfde canonical delen, maar niet meer dan er talen zijn."""
    canonical = "https://example.com/about"
    en = make_page(_titled("About", canonical=canonical), "en/about.html")
    nl = make_page(_titled("Over ons", canonical=canonical), "nl/about.html")
    assert check_duplicates(make_context(en, nl)) == []

    root = make_page(_titled("Root about", canonical=canonical), "about.html")
    assert rule_ids(check_duplicates(make_context(en, nl, root))) == ["SEO00094"]

    assert is_language_variant_set(["en/a.html", "pt-BR/a.html"], 2)
    assert not is_language_variant_set(["en/a.html", "de/a.html", "fr/a.html"], 2)


# --- Weespagina's ---

def test_is_homepage():
    assert is_homepage("index.html")
    assert is_homepage("nl/index.html")
    assert is_homepage("en-GB/index.html")
    assert not is_homepage("blog/index.html")


def test_orphan_pages(make_page, make_context):
    """Niet-gelinkte pagina's zijn wees, behalve de homepage en noindex-pagina's."""
    home = make_page(_titled("Home", '<a href="/about">About</a><a href="blog/">Blog</a>'), "index.html")
    about = make_page(_titled("About", '<a href="https://example.com/contact">Contact</a>'), "about.html")
    contact = make_page(_titled("Contact"), "contact.html")
    blog = make_page(_titled("Blog"), "blog/index.html")
    lonely = make_page(_titled("Lonely"), "lonely.html")
    hidden = make_page(html_page(head='<meta name="robots" content="noindex">'), "hidden.html")

    issues = check_orphan_pages(make_context(home, about, contact, blog, lonely, hidden))

    assert [i.relative_path for i in issues] == ["lonely.html"]
    assert issues[0].element == "Lonely"
    assert issues[0].fingerprint == "SEO01221::lonely.html"


def test_self_link_counts_as_inbound(make_page, make_context):
    page = make_page(_titled("Self", '<a href="self.html">Me</a>'), "self.html")
    assert check_orphan_pages(make_context(page)) == []


# --- robots.txt ---

def test_parse_robots_lines():
    content = "# comment\nUser-agent: *\n\nDisallow: /\nnonsense line\nSitemap: https://example.com/sitemap.xml"
    assert parse_robots_lines(content) == [
        ("user-agent", "*", "User-agent: *"),
        ("disallow", "/", "Disallow: /"),
        ("", "", "nonsense line"),
        ("sitemap", "https://example.com/sitemap.xml", "Sitemap: https://example.com/sitemap.xml"),
    ]


def test_missing_robots_stops_early(make_context):
    issues = check_robots_txt(make_context())
    assert rule_ids(issues) == ["SEO01153"]
    assert issues[0].relative_path == "robots.txt"


def test_unreadable_robots_is_logged_not_raised(dist, make_context, monkeypatch, caplog):
    """Een leesfout (bv. geen rechten) stopt de audit niet; er volgt alleen een waarschuwing."""
    write_file(dist, "robots.txt", "User-agent: *")

    def denied(*args, **kwargs):
        raise PermissionError("Permission denied")

    caplog.set_level(logging.WARNING)
    monkeypatch.setattr("seo_auditor.checks.rules.robots.open", denied, raising=False)
    issues = check_robots_txt(make_context())

    assert issues == []
    assert "Cannot read" in caplog.text


def test_robots_problems(dist, make_context):
    write_file(dist, "robots.txt", "\n".join([
        "User-agent: *",
        "Disallow: /",
        "garbage",
        "Sitemap: https://www.example.com/sitemap.xml",
        "Sitemap: https://cdn.example.com/sitemap.xml",
        "Sitemap: https://other.org/sitemap.xml",
        "Sitemap: /sitemap-0.xml",
    ]))
    issues = check_robots_txt(make_context())

    assert rule_ids(issues) == ["SEO01154", "SEO01166", "SEO01168", "SEO01157", "SEO01157", "SEO01156",
                                "SEO01165", "SEO01165", "SEO01165", "SEO01165"]


def test_valid_robots(dist, make_context):
    write_file(dist, "robots.txt", "User-agent: *\nAllow: /\nSitemap: https://example.com/sitemap.xml\n")
    write_file(dist, "sitemap.xml", "<urlset/>")
    assert check_robots_txt(make_context()) == []


def test_robots_without_sitemap(dist, make_context):
    write_file(dist, "robots.txt", "User-agent: *\nAllow: /\n")
    assert rule_ids(check_robots_txt(make_context())) == ["SEO01155"]


# --- Sitemaps ---

URLSET = """<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
{urls}
</urlset>"""


def _urlset(*entries) -> str:
    urls = []
    for entry in entries:
        loc, lastmod = entry if isinstance(entry, tuple) else (entry, None)
        extra = f"<lastmod>{lastmod}</lastmod>" if lastmod else ""
        urls.append(f"<url><loc>{loc}</loc>{extra}</url>")
    return URLSET.format(urls="\n".join(urls))


def test_parse_sitemap_strips_namespaces():
    kind, entries = parse_sitemap(_urlset(("https://example.com/a", "2024-01-01")).encode())
    assert kind == "urlset"
    assert entries == [("https://example.com/a", "2024-01-01")]


def test_missing_sitemap(make_context):
    assert rule_ids(check_sitemap(make_context())) == ["SEO01158"]


def test_invalid_sitemap_xml(dist, make_context):
    write_file(dist, "sitemap.xml", "<urlset><url>")
    issues = check_sitemap(make_context())
    assert rule_ids(issues) == ["SEO01159"]
    assert issues[0].relative_path == "sitemap.xml"


def test_sitemap_url_checks(dist, make_context):
    write_file(dist, "about/index.html", "x")
    write_file(dist, "contact.html", "x")
    write_file(dist, "sitemap.xml", _urlset(
        ("https://example.com/about", "2024-05-01T10:00:00+02:00"),
        "https://example.com/contact",
        "https://example.com/contact",
        ("http://example.com/about", "yesterday"),
        "https://www.example.com/about",
        "https://blog.example.com/about",
        "https://example.com/gone",
    ))
    issues = check_sitemap(make_context())

    assert rule_ids(issues) == ["SEO01162", "SEO01161", "SEO01163", "SEO01169", "SEO01171", "SEO01160"]
    assert issues[-1].element == "https://example.com/gone"


def test_sitemap_index_is_followed(dist, make_context):
    write_file(dist, "sitemap-index.xml", """<?xml version="1.0"?>
<sitemapindex xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
  <sitemap><loc>https://example.com/sitemap-0.xml</loc></sitemap>
  <sitemap><loc>https://example.com/sitemap-0.xml</loc></sitemap>
</sitemapindex>""")
    write_file(dist, "sitemap-0.xml", _urlset("https://example.com/missing"))

    issues = check_sitemap(make_context())

    # sitemap-0.xml staat zowel in de kandidaten als in de index, maar wordt één keer gelezen.
    assert rule_ids(issues) == ["SEO01160"]
    assert issues[0].relative_path == "sitemap-0.xml"


def test_trailing_slash_inconsistency(dist, make_context):
    for name in "abcd":
        write_file(dist, f"{name}/index.html", "x")
    write_file(dist, "sitemap.xml", _urlset(
        "https://example.com/a/", "https://example.com/b/", "https://example.com/c", "https://example.com/d",
    ))
    assert rule_ids(check_sitemap(make_context())) == ["SEO01164"]
