# src/seo_auditor/rules/catalog.py
"""
Static rule catalog: rule id -> name, category, severity and fix hint.

Page rules are evaluated per PageRecord, site rules once per run against the
SiteIndex and the dist folder (robots.txt, sitemaps).
"""
from typing import Dict, List, Optional

from seo_auditor.model import SEORule


def _r(rule_id: str, name: str, category: str, severity: str, fix_hint: str, scope: str = "page") -> SEORule:
    return SEORule(id=rule_id, name=name, category=category, severity=severity, fix_hint=fix_hint, scope=scope)


SEO_RULES: List[SEORule] = [
    # --- metadata ---
    _r("SEO00001", "Missing title tag", "metadata", "error",
       "Add a unique, descriptive <title> element to the page head."),
    _r("SEO00002", "Missing meta description", "metadata", "warning",
       "Add a <meta name=\"description\"> that summarises the page in 120-160 characters."),
    _r("SEO00003", "Missing meta robots", "metadata", "notice",
       "Add <meta name=\"robots\" content=\"index, follow\"> (or the directives you intend)."),
    _r("SEO00004", "Missing canonical link", "metadata", "warning",
       "Add <link rel=\"canonical\" href=\"...\"> pointing to the preferred URL of this page."),
    _r("SEO00005", "Missing charset declaration", "metadata", "warning",
       "Declare the encoding early in the head: <meta charset=\"utf-8\">."),
    _r("SEO00006", "Missing html lang attribute", "metadata", "warning",
       "Set the document language on the root element, e.g. <html lang=\"en\">."),
    _r("SEO00010", "Canonical link is empty", "metadata", "error",
       "Fill the canonical href with the absolute URL of the preferred page."),
    _r("SEO00011", "html lang attribute is empty", "metadata", "warning",
       "Give the lang attribute a valid language code."),
    _r("SEO00012", "Charset declaration is empty", "metadata", "warning",
       "Set the charset value, normally utf-8."),
    _r("SEO00413", "Missing viewport meta tag", "metadata", "error",
       "Add <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\">."),
    _r("SEO00414", "Multiple viewport meta tags", "metadata", "warning",
       "Keep a single viewport meta tag in the head."),
    _r("SEO01217", "Missing favicon", "metadata", "notice",
       "Add <link rel=\"icon\" href=\"/favicon.ico\"> (and an apple-touch-icon)."),

    # --- html validity ---
    _r("SEO00007", "Multiple title tags", "html_validity", "error",
       "Keep exactly one <title> element per page."),
    _r("SEO00008", "Multiple meta descriptions", "html_validity", "warning",
       "Keep exactly one meta description per page."),
    _r("SEO00009", "Multiple canonical links", "html_validity", "error",
       "Keep exactly one canonical link per page; conflicting canonicals are ignored by search engines."),
    _r("SEO00226", "Missing doctype", "html_validity", "warning",
       "Start the document with <!DOCTYPE html> to avoid quirks mode."),
    _r("SEO00227", "Doctype is not the first element", "html_validity", "warning",
       "Move <!DOCTYPE html> to the very start of the document."),
    _r("SEO00380", "Duplicate id attribute", "html_validity", "warning",
       "Make every id attribute unique within the page."),
    _r("SEO00381", "Meta refresh used", "html_validity", "warning",
       "Replace meta refresh redirects with server-side 301 redirects."),

    # --- content length ---
    _r("SEO00013", "Title too short", "content", "warning",
       "Write a title of at least 30 characters that describes the page."),
    _r("SEO00014", "Title short", "content", "notice",
       "Expand the title towards 30-60 characters."),
    _r("SEO00015", "Title could be longer", "content", "notice",
       "Consider a title of 30-60 characters to use the available space."),
    _r("SEO00020", "Title may be truncated", "content", "notice",
       "Keep titles under 60 characters so they are not cut off in search results."),
    _r("SEO00021", "Title too long", "content", "warning",
       "Shorten the title to under 60 characters."),
    _r("SEO00022", "Title far too long", "content", "warning",
       "Shorten the title drastically; anything over 70 characters will be truncated."),
    _r("SEO00023", "Meta description too short", "content", "warning",
       "Write a meta description of 120-160 characters."),
    _r("SEO00024", "Meta description short", "content", "notice",
       "Expand the meta description towards 120-160 characters."),
    _r("SEO00025", "Meta description could be longer", "content", "notice",
       "Expand the meta description towards 120-160 characters."),
    _r("SEO00026", "Meta description slightly short", "content", "notice",
       "Add a few words to reach 120-160 characters."),
    _r("SEO00027", "Meta description may be truncated", "content", "notice",
       "Keep the meta description under 160 characters."),
    _r("SEO00028", "Meta description too long", "content", "warning",
       "Shorten the meta description to under 160 characters."),
    _r("SEO00029", "Meta description far too long", "content", "warning",
       "Rewrite the meta description; search engines will ignore most of it."),
    _r("SEO00030", "H1 too short", "content", "warning",
       "Write an H1 of at least 20 characters that states the page topic."),
    _r("SEO00031", "H1 short", "content", "notice",
       "Make the H1 more descriptive."),
    _r("SEO00032", "H1 could be longer", "content", "notice",
       "Consider a more descriptive H1 of 20-70 characters."),
    _r("SEO00034", "H1 long", "content", "notice",
       "Keep the H1 concise, ideally under 70 characters."),
    _r("SEO00035", "H1 very long", "content", "notice",
       "Shorten the H1; move details to the body text."),
    _r("SEO00036", "H1 too long", "content", "warning",
       "Shorten the H1 to under 70 characters."),
    _r("SEO00037", "H2 too short", "content", "notice",
       "Make H2 headings descriptive enough to outline the section."),
    _r("SEO00043", "H2 too long", "content", "notice",
       "Keep H2 headings under 80 characters."),

    # --- content format ---
    _r("SEO00056", "Title has leading or trailing whitespace", "content_format", "notice",
       "Trim whitespace around the title text."),
    _r("SEO00057", "Title has repeated spaces", "content_format", "notice",
       "Collapse repeated spaces in the title."),
    _r("SEO00058", "Title has repeated punctuation", "content_format", "notice",
       "Remove repeated punctuation or separators from the title."),
    _r("SEO00059", "Title has encoding problems", "content_format", "error",
       "Fix the character encoding (mojibake such as 'Ã©' indicates UTF-8 read as Latin-1)."),
    _r("SEO00060", "Meta description has leading or trailing whitespace", "content_format", "notice",
       "Trim whitespace around the meta description."),
    _r("SEO00061", "Meta description has repeated spaces", "content_format", "notice",
       "Collapse repeated spaces in the meta description."),
    _r("SEO00063", "Meta description has encoding problems", "content_format", "error",
       "Fix the character encoding of the meta description."),
    _r("SEO00064", "Title in all caps", "content_format", "warning",
       "Use sentence or title case instead of all capitals."),
    _r("SEO00065", "Meta description in all caps", "content_format", "warning",
       "Use normal sentence case in the meta description."),
    _r("SEO00066", "H1 in all caps", "content_format", "notice",
       "Write the H1 in normal case and use CSS text-transform for styling."),
    _r("SEO00067", "H1 has encoding problems", "content_format", "error",
       "Fix the character encoding of the H1."),
    _r("SEO00068", "Title starts with a special character", "content_format", "notice",
       "Start the title with a letter or digit."),
    _r("SEO00069", "H1 starts with a special character", "content_format", "notice",
       "Start the H1 with a letter or digit."),
    _r("SEO00073", "Title has multiple separators", "content_format", "notice",
       "Use at most one separator (|) in the title."),
    _r("SEO00074", "Title has too many separators", "content_format", "warning",
       "Simplify the title; more than two separators reads as keyword stuffing."),

    # --- headings ---
    _r("SEO00109", "Missing H1", "headings", "error",
       "Add one H1 heading that states the page topic."),
    _r("SEO00110", "Multiple H1 headings", "headings", "warning",
       "Use a single H1 and demote the others to H2."),
    _r("SEO00111", "Heading level skipped", "headings", "warning",
       "Do not skip heading levels; follow H1 > H2 > H3."),
    _r("SEO00112", "First heading is not H1", "headings", "notice",
       "Make the H1 the first heading in the document."),
    _r("SEO00113", "H2 used without H1", "headings", "warning",
       "Add an H1 above the H2 headings."),
    _r("SEO00114", "H3 used without H2", "headings", "notice",
       "Add an H2 above the H3 headings."),
    _r("SEO00115", "H4 used without H3", "headings", "notice",
       "Add an H3 above the H4 headings."),
    _r("SEO00125", "Duplicate H1 text on page", "headings", "warning",
       "Each H1 on a page should have unique text; prefer a single H1."),
    _r("SEO00126", "Many headings", "headings", "notice",
       "Consider fewer headings; over 30 dilutes the page outline."),
    _r("SEO00127", "Excessive headings", "headings", "warning",
       "Reduce the number of headings; over 50 suggests headings used for styling."),
    _r("SEO00128", "Empty heading", "headings", "warning",
       "Remove empty headings or give them text."),
    _r("SEO00129", "H1 identical to title", "headings", "notice",
       "Vary the H1 and the title to target more phrasing."),

    # --- indexability ---
    _r("SEO00100", "Canonical is not an absolute URL", "indexability", "error",
       "Use an absolute https:// URL in the canonical link."),
    _r("SEO00101", "Canonical contains a fragment", "indexability", "warning",
       "Remove the #fragment from the canonical URL."),
    _r("SEO00102", "Canonical contains tracking parameters", "indexability", "warning",
       "Remove utm_/gclid/fbclid and similar parameters from the canonical URL."),
    _r("SEO00103", "Canonical uses HTTP on an HTTPS site", "indexability", "error",
       "Point the canonical to the https:// URL."),
    _r("SEO00104", "Canonical has unexpected www", "indexability", "error",
       "Use the configured hostname without www in the canonical URL."),
    _r("SEO00105", "Conflicting robots directives", "indexability", "error",
       "Remove contradictory directives such as 'index, noindex' from meta robots."),
    _r("SEO00368", "rel=prev/next pagination markup", "indexability", "notice",
       "rel=prev/next is no longer used by Google; make sure paginated pages are linked normally."),
    _r("SEO00420", "Canonical is missing www", "indexability", "error",
       "Use the configured www hostname in the canonical URL."),
    _r("SEO00421", "Canonical points to another domain", "indexability", "error",
       "Point the canonical at a URL on the configured domain, unless cross-domain canonicalisation is intended."),

    # --- links ---
    _r("SEO00134", "Link with empty href", "links", "error",
       "Give the link a destination or use a <button> for actions."),
    _r("SEO00135", "Link without accessible text", "links", "warning",
       "Add link text, an aria-label or a title attribute."),
    _r("SEO00136", "Generic anchor text: 'click here'", "links", "notice",
       "Describe the destination in the anchor text."),
    _r("SEO00137", "Generic anchor text: 'read more'", "links", "notice",
       "Describe the destination in the anchor text."),
    _r("SEO00138", "Generic anchor text: 'learn more'", "links", "notice",
       "Describe the destination in the anchor text."),
    _r("SEO00139", "Generic anchor text: 'here'", "links", "notice",
       "Describe the destination in the anchor text."),
    _r("SEO00140", "Generic anchor text: 'more'", "links", "notice",
       "Describe the destination in the anchor text."),
    _r("SEO00141", "Generic anchor text: 'link'", "links", "notice",
       "Describe the destination in the anchor text."),
    _r("SEO00142", "Generic anchor text: 'this'", "links", "notice",
       "Describe the destination in the anchor text."),
    _r("SEO00143", "Internal link with nofollow", "links", "warning",
       "Remove rel=\"nofollow\" from internal links."),
    _r("SEO00145", "Empty mailto link", "links", "error",
       "Add an e-mail address to the mailto: link."),
    _r("SEO00146", "Empty tel link", "links", "error",
       "Add a phone number to the tel: link."),
    _r("SEO00147", "Broken internal link", "links", "error",
       "Fix the link target or create the missing page."),
    _r("SEO00148", "Double slash in link path", "links", "warning",
       "Remove the duplicate slash from the URL path."),
    _r("SEO00149", "Uppercase characters in internal link", "links", "notice",
       "Use lowercase URLs for internal links."),
    _r("SEO00150", "Space in link URL", "links", "warning",
       "Replace spaces in URLs with hyphens."),
    _r("SEO00151", "Link URL ends with punctuation", "links", "warning",
       "Remove the trailing punctuation from the URL."),
    _r("SEO00152", "Insecure HTTP link on HTTPS site", "links", "notice",
       "Link to the https:// version of the page."),
    _r("SEO01214", "Broken same-page anchor", "links", "warning",
       "Add the referenced id to the page or fix the #fragment."),

    # --- url hygiene ---
    _r("SEO00374", "Session id in URL", "url_hygiene", "warning",
       "Remove session identifiers from link URLs."),
    _r("SEO00375", "Dynamic .php URL", "url_hygiene", "notice",
       "Prefer clean, static-looking URLs."),
    _r("SEO00376", "Pagination query parameter in URL", "url_hygiene", "notice",
       "Prefer path-based pagination such as /page/2/."),
    _r("SEO00377", "?p= query parameter in URL", "url_hygiene", "notice",
       "Use descriptive slugs instead of ?p= ids."),
    _r("SEO00378", "?id= query parameter in URL", "url_hygiene", "notice",
       "Use descriptive slugs instead of ?id= parameters."),

    # --- images ---
    _r("SEO00153", "Image missing alt attribute", "images", "error",
       "Add alt text describing the image, or alt=\"\" for decorative images."),
    _r("SEO00154", "Image has empty alt", "images", "notice",
       "Make sure the image is purely decorative; otherwise describe it."),
    _r("SEO00155", "Broken image", "images", "error",
       "Fix the image path or add the missing file."),
    _r("SEO00156", "Image with empty src", "images", "error",
       "Give the image a source or remove it."),
    _r("SEO00157", "Image alt text too long", "images", "notice",
       "Keep alt text under 125 characters."),
    _r("SEO00158", "Image alt text equals filename", "images", "notice",
       "Describe the image content instead of repeating the filename."),
    _r("SEO00159", "Redundant alt text prefix", "images", "notice",
       "Drop 'image of' / 'photo of'; screen readers already announce images."),
    _r("SEO00160", "Image larger than 100KB", "images", "notice",
       "Compress the image or serve a modern format (WebP/AVIF)."),
    _r("SEO00162", "Image larger than 150KB", "images", "notice",
       "Compress the image or serve a modern format (WebP/AVIF)."),
    _r("SEO00163", "Image larger than 200KB", "images", "warning",
       "Compress or resize the image."),
    _r("SEO00164", "Image larger than 300KB", "images", "warning",
       "Compress or resize the image."),
    _r("SEO00165", "Image larger than 500KB", "images", "warning",
       "Resize the image to its display size and compress it."),
    _r("SEO00166", "Image larger than 1MB", "images", "error",
       "Resize the image to its display size and compress it."),
    _r("SEO00167", "Image larger than 2MB", "images", "error",
       "This image seriously slows the page down; resize and compress it."),
    _r("SEO01215", "Video without poster image", "images", "notice",
       "Add a poster attribute so the video has a preview frame."),
    _r("SEO01218", "Image missing width attribute", "images", "warning",
       "Set width and height to prevent layout shift (CLS)."),
    _r("SEO01219", "Image missing height attribute", "images", "warning",
       "Set width and height to prevent layout shift (CLS)."),
    _r("SEO01220", "Image missing width and height", "images", "warning",
       "Set width and height to prevent layout shift (CLS)."),

    # --- social: open graph ---
    _r("SEO00168", "Missing og:title", "social", "warning",
       "Add <meta property=\"og:title\">."),
    _r("SEO00169", "Missing og:description", "social", "warning",
       "Add <meta property=\"og:description\">."),
    _r("SEO00170", "Missing og:image", "social", "warning",
       "Add <meta property=\"og:image\"> with an absolute image URL."),
    _r("SEO00171", "Missing og:url", "social", "warning",
       "Add <meta property=\"og:url\"> with the canonical URL."),
    _r("SEO00371", "og:image is not an absolute URL", "social", "error",
       "Use an absolute https:// URL for og:image."),
    _r("SEO00372", "og:image file not found", "social", "error",
       "Fix the og:image path or add the image to the build."),
    _r("SEO00422", "og:url has unexpected www", "social", "warning",
       "Use the configured hostname without www in og:url."),
    _r("SEO00423", "og:url is missing www", "social", "warning",
       "Use the configured www hostname in og:url."),
    _r("SEO01175", "Missing og:type", "social", "notice",
       "Add <meta property=\"og:type\" content=\"website\"> (or article)."),
    _r("SEO01176", "Invalid og:type", "social", "warning",
       "Use a standard og:type such as website or article."),
    _r("SEO01177", "og:title too long", "social", "notice",
       "Keep og:title under 60 characters."),
    _r("SEO01178", "og:description too long", "social", "notice",
       "Keep og:description under 200 characters."),
    _r("SEO01179", "og:description too short", "social", "notice",
       "Write an og:description of at least 50 characters."),
    _r("SEO01185", "Missing og:site_name", "social", "notice",
       "Add <meta property=\"og:site_name\">."),
    _r("SEO01186", "Missing og:locale", "social", "notice",
       "Add <meta property=\"og:locale\" content=\"en_US\">."),
    _r("SEO01187", "Invalid og:locale format", "social", "warning",
       "Use the language_TERRITORY format, e.g. en_US."),
    _r("SEO01188", "og:image dimensions missing", "social", "notice",
       "Add og:image:width and og:image:height."),
    _r("SEO01189", "og:image too small", "social", "warning",
       "Use an og:image of at least 1200x630 pixels."),
    _r("SEO01190", "og:url differs from canonical", "social", "warning",
       "Make og:url match the canonical URL."),
    _r("SEO01195", "og:title identical to title", "social", "notice",
       "Consider a social-specific og:title."),
    _r("SEO01196", "og:description identical to meta description", "social", "notice",
       "Consider a social-specific og:description."),
    _r("SEO01197", "og:image uses HTTP", "social", "warning",
       "Serve og:image over https://."),
    _r("SEO01199", "Missing og:image:alt", "social", "notice",
       "Add og:image:alt describing the share image."),
    _r("SEO01201", "Multiple og:image tags", "social", "notice",
       "Make sure the first og:image is the preferred share image."),
    _r("SEO01202", "og:url is not an absolute URL", "social", "error",
       "Use an absolute https:// URL for og:url."),
    _r("SEO01203", "Article missing article:published_time", "social", "notice",
       "Add <meta property=\"article:published_time\">."),
    _r("SEO01204", "Article missing article:author", "social", "notice",
       "Add <meta property=\"article:author\">."),
    _r("SEO01205", "Invalid og:image:type", "social", "warning",
       "Use a valid image MIME type such as image/jpeg or image/png."),
    _r("SEO01206", "og:title is empty", "social", "warning",
       "Give og:title a value."),
    _r("SEO01207", "og:description is empty", "social", "warning",
       "Give og:description a value."),
    _r("SEO01210", "og:image:alt is empty", "social", "warning",
       "Give og:image:alt a value."),

    # --- social: twitter ---
    _r("SEO00172", "Missing twitter:card", "social", "notice",
       "Add <meta name=\"twitter:card\" content=\"summary_large_image\">."),
    _r("SEO00173", "Missing twitter:title", "social", "notice",
       "Add <meta name=\"twitter:title\">."),
    _r("SEO00174", "Missing twitter:description", "social", "notice",
       "Add <meta name=\"twitter:description\">."),
    _r("SEO00175", "Missing twitter:image", "social", "notice",
       "Add <meta name=\"twitter:image\">."),
    _r("SEO01180", "Invalid twitter:card type", "social", "warning",
       "Use summary, summary_large_image, app or player."),
    _r("SEO01181", "twitter:title too long", "social", "notice",
       "Keep twitter:title under 70 characters."),
    _r("SEO01182", "twitter:description too long", "social", "notice",
       "Keep twitter:description under 200 characters."),
    _r("SEO01183", "twitter:image is not an absolute URL", "social", "error",
       "Use an absolute https:// URL for twitter:image."),
    _r("SEO01184", "twitter:image file not found", "social", "error",
       "Fix the twitter:image path or add the image to the build."),
    _r("SEO01191", "Missing twitter:site", "social", "notice",
       "Add <meta name=\"twitter:site\" content=\"@handle\">."),
    _r("SEO01192", "Invalid twitter:site handle", "social", "warning",
       "Use an @handle of at most 15 word characters."),
    _r("SEO01193", "Missing twitter:creator", "social", "notice",
       "Add <meta name=\"twitter:creator\" content=\"@handle\">."),
    _r("SEO01194", "Invalid twitter:creator handle", "social", "warning",
       "Use an @handle of at most 15 word characters."),
    _r("SEO01198", "twitter:image uses HTTP", "social", "warning",
       "Serve twitter:image over https://."),
    _r("SEO01200", "Missing twitter:image:alt", "social", "notice",
       "Add twitter:image:alt describing the image."),
    _r("SEO01208", "twitter:title is empty", "social", "warning",
       "Give twitter:title a value."),
    _r("SEO01209", "twitter:description is empty", "social", "warning",
       "Give twitter:description a value."),

    # --- international ---
    _r("SEO00177", "Invalid hreflang code", "international", "error",
       "Use ISO 639-1 language codes, optionally with an ISO 3166-1 region (en-GB)."),
    _r("SEO00178", "Duplicate hreflang", "international", "warning",
       "Declare each hreflang value only once per page."),
    _r("SEO00179", "Missing self-referencing hreflang", "international", "warning",
       "Include an hreflang entry pointing to the page itself."),
    _r("SEO00180", "Hreflang URL is not absolute", "international", "error",
       "Use absolute URLs in hreflang links."),
    _r("SEO00181", "Missing x-default hreflang", "international", "notice",
       "Add an hreflang=\"x-default\" fallback."),
    _r("SEO00182", "Invalid html lang code", "international", "warning",
       "Use a valid language code in the lang attribute (en, en-US, ...)."),
    _r("SEO00184", "Hreflang URL has unexpected www", "international", "warning",
       "Use the configured hostname without www in hreflang URLs."),
    _r("SEO00185", "Hreflang URL is missing www", "international", "warning",
       "Use the configured www hostname in hreflang URLs."),

    # --- structured data ---
    _r("SEO00229", "Invalid JSON-LD", "structured_data", "error",
       "Fix the JSON syntax of the structured-data block."),
    _r("SEO00230", "JSON-LD missing @context", "structured_data", "error",
       "Add \"@context\": \"https://schema.org\"."),
    _r("SEO00231", "JSON-LD missing @type", "structured_data", "error",
       "Add an @type (or an @graph of typed items)."),
    _r("SEO00232", "Schema missing required property", "structured_data", "error",
       "Add the required property for this schema.org type."),
    _r("SEO00233", "Schema required property is empty", "structured_data", "warning",
       "Give the required property a value."),
    _r("SEO00359", "BreadcrumbList itemListElement is not a list", "structured_data", "error",
       "Make itemListElement an array of ListItem objects."),
    _r("SEO00360", "Breadcrumb ListItem missing position", "structured_data", "warning",
       "Give every ListItem a numeric position."),
    _r("SEO01172", "Schema validation error", "structured_data", "warning",
       "Fix the structured-data property so it matches the schema.org definition."),
    _r("SEO01173", "Schema property has wrong type", "structured_data", "warning",
       "Use the value type schema.org expects for this property."),
    _r("SEO01174", "Unknown schema type", "structured_data", "notice",
       "Check the @type spelling; this type is not validated."),

    # --- content quality ---
    _r("SEO00186", "Very thin content", "content_quality", "error",
       "Add substantial content; pages under 50 words rarely rank."),
    _r("SEO00187", "Thin content", "content_quality", "warning",
       "Expand the page content beyond 100 words."),
    _r("SEO00188", "Low word count", "content_quality", "warning",
       "Expand the page content beyond 150 words."),
    _r("SEO00189", "Below-average word count", "content_quality", "notice",
       "Consider expanding the content beyond 200 words."),
    _r("SEO00190", "Short content", "content_quality", "notice",
       "Consider expanding the content to 300+ words."),
    _r("SEO00198", "Long content", "content_quality", "notice",
       "Consider splitting content over 5000 words into several pages."),
    _r("SEO00199", "Very long content", "content_quality", "notice",
       "Split content over 7500 words into several pages."),
    _r("SEO00200", "Excessively long content", "content_quality", "warning",
       "Split content over 10000 words into several pages."),

    # --- template hygiene ---
    _r("SEO00382", "Placeholder text in title", "template_hygiene", "error",
       "Replace placeholder text before publishing."),
    _r("SEO00383", "Placeholder text in meta description", "template_hygiene", "error",
       "Replace placeholder text before publishing."),
    _r("SEO00384", "Placeholder text in H1", "template_hygiene", "error",
       "Replace placeholder text before publishing."),
    _r("SEO00385", "Lorem ipsum in body", "template_hygiene", "error",
       "Replace lorem ipsum filler with real content."),
    _r("SEO00386", "TODO in title", "template_hygiene", "warning",
       "Resolve the TODO before publishing."),
    _r("SEO00387", "TODO in meta description", "template_hygiene", "warning",
       "Resolve the TODO before publishing."),
    _r("SEO00388", "TODO in H1", "template_hygiene", "warning",
       "Resolve the TODO before publishing."),
    _r("SEO00389", "TODO in body", "template_hygiene", "warning",
       "Resolve the TODO before publishing."),
    _r("SEO00390", "FIXME in title", "template_hygiene", "warning",
       "Resolve the FIXME before publishing."),
    _r("SEO00391", "FIXME in meta description", "template_hygiene", "warning",
       "Resolve the FIXME before publishing."),
    _r("SEO00392", "FIXME in H1", "template_hygiene", "warning",
       "Resolve the FIXME before publishing."),
    _r("SEO00393", "FIXME in body", "template_hygiene", "warning",
       "Resolve the FIXME before publishing."),
    _r("SEO00394", "Untitled title", "template_hygiene", "error",
       "Give the page a real title."),
    _r("SEO00395", "Untitled meta description", "template_hygiene", "error",
       "Write a real meta description."),
    _r("SEO00396", "Untitled H1", "template_hygiene", "error",
       "Write a real H1."),

    # --- accessibility ---
    _r("SEO00222", "Missing main landmark", "accessibility", "warning",
       "Wrap the primary content in <main>."),
    _r("SEO00223", "Missing skip link", "accessibility", "notice",
       "Add a 'skip to content' link as the first focusable element."),
    _r("SEO00410", "Empty aria-label", "accessibility", "warning",
       "Give aria-label a value or remove it."),
    _r("SEO00412", "role=img without accessible name", "accessibility", "warning",
       "Add aria-label or aria-labelledby to elements with role=\"img\"."),
    _r("SEO01211", "Input without label", "accessibility", "error",
       "Associate a <label for> with the input, or add aria-label."),
    _r("SEO01212", "Select without label", "accessibility", "error",
       "Associate a <label for> with the select, or add aria-label."),
    _r("SEO01213", "Textarea without label", "accessibility", "error",
       "Associate a <label for> with the textarea, or add aria-label."),

    # --- html semantics ---
    _r("SEO00416", "<b> used instead of <strong>", "html_semantics", "notice",
       "Use <strong> for important text."),
    _r("SEO00417", "<i> used instead of <em>", "html_semantics", "notice",
       "Use <em> for emphasised text."),
    _r("SEO00418", "Deprecated HTML element", "html_semantics", "warning",
       "Replace deprecated elements with CSS."),
    _r("SEO00419", "Table without header cells", "html_semantics", "notice",
       "Use <th> cells to label table columns or rows."),
    _r("SEO00424", "Excessive inline styles", "html_semantics", "notice",
       "Move inline styles into stylesheets."),

    # --- e-e-a-t ---
    _r("SEO01216", "Article without author information", "eeat", "warning",
       "Add article:author or an author in the Article structured data."),

    # --- duplicates (site) ---
    _r("SEO00088", "Duplicate title", "duplicates", "error",
       "Give every page a unique title.", "site"),
    _r("SEO00090", "Duplicate meta description", "duplicates", "warning",
       "Give every page a unique meta description.", "site"),
    _r("SEO00092", "Duplicate H1", "duplicates", "warning",
       "Give every page a unique H1.", "site"),
    _r("SEO00094", "Duplicate canonical", "duplicates", "error",
       "Make each page canonicalise to its own URL, unless they are intentional duplicates.", "site"),

    # --- crawlability (site) ---
    _r("SEO01153", "robots.txt missing", "crawlability", "warning",
       "Add a robots.txt to the root of the site.", "site"),
    _r("SEO01154", "Malformed robots.txt line", "crawlability", "warning",
       "Use 'Directive: value' lines in robots.txt.", "site"),
    _r("SEO01155", "robots.txt has no Sitemap directive", "crawlability", "warning",
       "Add 'Sitemap: https://.../sitemap.xml' to robots.txt.", "site"),
    _r("SEO01156", "robots.txt blocks the whole site", "crawlability", "error",
       "Remove 'Disallow: /' unless the site must not be indexed.", "site"),
    _r("SEO01157", "robots.txt Sitemap on wrong domain", "crawlability", "error",
       "Reference a sitemap on the configured domain.", "site"),
    _r("SEO01165", "Sitemap referenced in robots.txt not found", "crawlability", "error",
       "Generate the sitemap file or fix the Sitemap directive.", "site"),
    _r("SEO01166", "robots.txt Sitemap has unexpected www", "crawlability", "warning",
       "Use the configured hostname without www in the Sitemap directive.", "site"),
    _r("SEO01167", "robots.txt Sitemap is missing www", "crawlability", "warning",
       "Use the configured www hostname in the Sitemap directive.", "site"),
    _r("SEO01168", "robots.txt Sitemap on a subdomain", "crawlability", "warning",
       "Reference the sitemap on the main hostname.", "site"),
    _r("SEO01221", "Orphan page", "crawlability", "warning",
       "Link to this page from at least one other page, or mark it noindex.", "site"),

    # --- sitemap (site) ---
    _r("SEO01158", "Sitemap missing", "sitemap", "error",
       "Generate a sitemap.xml (or sitemap-index.xml).", "site"),
    _r("SEO01159", "Sitemap is not valid XML", "sitemap", "error",
       "Fix the XML syntax of the sitemap.", "site"),
    _r("SEO01160", "Sitemap URL has no page", "sitemap", "error",
       "Remove the URL from the sitemap or build the page.", "site"),
    _r("SEO01161", "HTTP URL in sitemap", "sitemap", "warning",
       "List https:// URLs in the sitemap.", "site"),
    _r("SEO01162", "Duplicate URL in sitemap", "sitemap", "warning",
       "List every URL only once.", "site"),
    _r("SEO01163", "Invalid lastmod in sitemap", "sitemap", "warning",
       "Use W3C datetime (YYYY-MM-DD or full ISO 8601) for lastmod.", "site"),
    _r("SEO01164", "Inconsistent trailing slashes in sitemap", "sitemap", "notice",
       "Use one trailing-slash convention for all URLs.", "site"),
    _r("SEO01169", "Sitemap URL has unexpected www", "sitemap", "warning",
       "Use the configured hostname without www in sitemap URLs.", "site"),
    _r("SEO01170", "Sitemap URL is missing www", "sitemap", "warning",
       "Use the configured www hostname in sitemap URLs.", "site"),
    _r("SEO01171", "Sitemap URL on wrong domain", "sitemap", "error",
       "List only URLs of the configured domain in the sitemap.", "site"),
]

_RULES_BY_ID: Dict[str, SEORule] = {rule.id: rule for rule in SEO_RULES}


def get_rule(rule_id: str) -> Optional[SEORule]:
    return _RULES_BY_ID.get(rule_id)


def get_rules_by_category(category: str) -> List[SEORule]:
    return [rule for rule in SEO_RULES if rule.category == category]


def get_rules_by_severity(severity: str) -> List[SEORule]:
    return [rule for rule in SEO_RULES if rule.severity == severity]


def get_categories() -> List[str]:
    return sorted({rule.category for rule in SEO_RULES})
