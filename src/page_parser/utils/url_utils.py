import re
from typing import Optional
from urllib.parse import urlparse

_INDEX_SUFFIX = re.compile(r"index\.html$")
_HTML_SUFFIX = re.compile(r"\.html$")
_NON_FILE_PREFIXES = ("#", "mailto:", "tel:", "javascript:", "data:")


def page_url(base_url: str, relative_path: str) -> str:
    """
    Public URL of a dist file: 'blog/index.html' -> '<base>/blog',
    'about.html' -> '<base>/about', 'index.html' -> '<base>'.
    """
    url_path = _HTML_SUFFIX.sub("", _INDEX_SUFFIX.sub("", relative_path))
    return f"{base_url}/{url_path}".rstrip("/") or base_url


def is_http_url(url: Optional[str]) -> bool:
    return bool(url) and (url.startswith("http://") or url.startswith("https://"))


def is_relative_file_href(href: Optional[str]) -> bool:
    """True for hrefs that point into the dist folder (no scheme, not an anchor/mailto/...)."""
    if not href or is_http_url(href) or href.startswith("//"):
        return False
    return not href.startswith(_NON_FILE_PREFIXES)


def url_path(url: str) -> str:
    """Path component of an absolute URL, '/' when it has none."""
    try:
        return urlparse(url).path or "/"
    except ValueError:
        return "/"
