from __future__ import annotations

import json
import os
import re
from functools import partial
from typing import Any, Dict, Iterator, List, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from page_parser.model import (
    FormControl,
    HeadingEntry,
    HreflangEntry,
    ImageRecord,
    JsonLdBlock,
    LinkRecord,
    OpenGraph,
    PageRecord,
    TwitterCard,
    VideoRecord,
)
from page_parser.utils.domain_classifier import DomainClassifier
from page_parser.utils.url_utils import is_http_url, page_url

ARTICLE_TYPES = {"Article", "NewsArticle", "BlogPosting", "TechArticle", "ScholarlyArticle"}
LABEL_EXEMPT_INPUT_TYPES = {"hidden", "submit", "button", "reset", "image"}
FAVICON_RELS = {"icon", "shortcut icon", "apple-touch-icon"}

_CHARSET_IN_CONTENT = re.compile(r"charset=([^\s;]+)", re.IGNORECASE)
_NON_NAVIGATION_PREFIXES = ("#", "mailto:", "tel:", "javascript:", "data:")


def iter_json_ld_objects(blocks: List[JsonLdBlock]) -> Iterator[Dict[str, Any]]:
    """
    Yields every top-level JSON-LD object. A block holding a JSON array
    contributes each of its object items.
    """
    for block in blocks:
        if block.parse_error:
            continue
        data = block.data
        if isinstance(data, dict):
            yield data
        elif isinstance(data, list):
            for item in data:
                if isinstance(item, dict):
                    yield item


class PageParseService:
    """
    A specialized extraction service for retrieving SEO facts from one HTML document.
    Note: This is a stateless service; walking the dist folder and folding
    pages into the site index is handled by the IndexController.
    """

    def __init__(self, page_content: str, classifier: DomainClassifier):
        self.soup = BeautifulSoup(page_content or "", "html.parser")
        self.classifier = classifier

    # -------- Helpers --------

    @staticmethod
    def _attr(el: Optional[Tag], name: str) -> Optional[str]:
        """Returns an attribute as a string (multi-valued attributes joined by spaces)."""
        if el is None:
            return None
        value = el.get(name)
        if value is None:
            return None
        if isinstance(value, list):
            return " ".join(value)
        return value

    @classmethod
    def _stripped(cls, el: Optional[Tag], name: str) -> Optional[str]:
        value = cls._attr(el, name)
        return value.strip() if value is not None else None

    def _meta(self, key: str, value: str) -> Optional[Tag]:
        return self.soup.find("meta", attrs={key: value})

    def _meta_content(self, key: str, value: str) -> Optional[str]:
        return self._stripped(self._meta(key, value), "content")

    def _links_with_rel(self, rel: str) -> List[Tag]:
        return [el for el in self.soup.find_all("link") if (self._attr(el, "rel") or "") == rel]

    # -------- SEO & Meta Extraction --------

    def extract_page_title(self) -> Optional[str]:
        """Retrieves the trimmed content of the first <title> tag."""
        el = self.soup.find("title")
        text = el.get_text().strip() if el else ""
        return text or None

    def extract_meta_description(self) -> Optional[str]:
        return self._meta_content("name", "description")

    def extract_meta_robots(self) -> Optional[str]:
        return self._meta_content("name", "robots")

    def extract_viewport(self) -> Optional[str]:
        return self._meta_content("name", "viewport")

    def extract_canonical_tag(self) -> Optional[str]:
        """Retrieves the href of the first <link rel='canonical'> tag."""
        links = self._links_with_rel("canonical")
        return self._stripped(links[0], "href") if links else None

    def extract_html_lang(self) -> Optional[str]:
        return self._stripped(self.soup.find("html"), "lang")

    def extract_charset(self) -> Optional[str]:
        """<meta charset>, falling back to the charset in a Content-Type http-equiv."""
        el = self.soup.find("meta", attrs={"charset": True})
        charset = self._attr(el, "charset")
        if charset:
            return charset
        content = self._attr(self._meta("http-equiv", "Content-Type"), "content")
        if content:
            match = _CHARSET_IN_CONTENT.search(content)
            if match:
                return match.group(1)
        # A bare <meta charset=""> is kept as an empty value.
        return charset

    def extract_headings(self) -> Tuple[Dict[str, List[str]], List[HeadingEntry]]:
        """
        Walks h1-h6 once in document order, filling both the per-level lists
        and the ordered (level, text) sequence.
        """
        per_level: Dict[str, List[str]] = {f"h{lvl}": [] for lvl in range(1, 7)}
        order: List[HeadingEntry] = []
        for el in self.soup.find_all(["h1", "h2", "h3", "h4", "h5", "h6"]):
            level = int(el.name[1])
            text = el.get_text().strip()
            per_level[el.name].append(text)
            order.append(HeadingEntry(level=level, text=text))
        return per_level, order

    # -------- Social Metadata --------

    def extract_open_graph(self) -> OpenGraph:
        prop = partial(self._meta_content, "property")
        return OpenGraph(
            title=prop("og:title"),
            description=prop("og:description"),
            image=prop("og:image"),
            url=prop("og:url"),
            type=prop("og:type"),
            site_name=prop("og:site_name"),
            locale=prop("og:locale"),
            image_width=prop("og:image:width"),
            image_height=prop("og:image:height"),
            image_alt=prop("og:image:alt"),
            image_type=prop("og:image:type"),
            article_published_time=prop("article:published_time"),
            article_author=prop("article:author"),
            image_count=len(self.soup.find_all("meta", attrs={"property": "og:image"})),
        )

    def extract_twitter_card(self) -> TwitterCard:
        name = partial(self._meta_content, "name")
        return TwitterCard(
            card=name("twitter:card"),
            title=name("twitter:title"),
            description=name("twitter:description"),
            image=name("twitter:image"),
            site=name("twitter:site"),
            creator=name("twitter:creator"),
            image_alt=name("twitter:image:alt"),
        )

    def extract_hreflangs(self) -> List[HreflangEntry]:
        return [
            HreflangEntry(lang=self._attr(el, "hreflang") or "", url=self._attr(el, "href") or "")
            for el in self._links_with_rel("alternate")
            if el.has_attr("hreflang")
        ]

    # -------- Links & Media --------

    def _classify_link(self, href: str) -> Tuple[bool, bool]:
        """Returns (is_internal, is_external) for a navigation href."""
        if not href or href.startswith(_NON_NAVIGATION_PREFIXES):
            return False, False
        if href.startswith("//"):
            internal = self.classifier.is_internal_absolute("https:" + href)
            return internal, not internal
        if href.startswith(("/", "./", "../")):
            return True, False
        if is_http_url(href):
            internal = self.classifier.is_internal_absolute(href)
            return internal, not internal
        if ":" in href.split("/", 1)[0]:
            # Some other scheme (ftp:, sms:, ...).
            return False, True
        return True, False

    def extract_links(self) -> List[LinkRecord]:
        out: List[LinkRecord] = []
        for el in self.soup.find_all("a", href=True):
            href = self._attr(el, "href") or ""
            is_internal, is_external = self._classify_link(href)
            out.append(LinkRecord(
                href=href,
                text=el.get_text().strip(),
                aria_label=self._attr(el, "aria-label"),
                title=self._attr(el, "title"),
                rel=self._attr(el, "rel"),
                target=self._attr(el, "target"),
                is_internal=is_internal,
                is_external=is_external,
            ))
        return out

    def extract_images(self) -> List[ImageRecord]:
        return [
            ImageRecord(
                src=self._attr(img, "src") or "",
                alt=self._attr(img, "alt"),
                width=self._attr(img, "width"),
                height=self._attr(img, "height"),
            )
            for img in self.soup.find_all("img")
        ]

    def extract_videos(self) -> List[VideoRecord]:
        out: List[VideoRecord] = []
        for video in self.soup.find_all("video"):
            src = self._attr(video, "src")
            if not src:
                source = video.find("source")
                src = self._attr(source, "src")
            out.append(VideoRecord(src=src, poster=self._attr(video, "poster")))
        return out

    def has_favicon(self) -> bool:
        return any((self._attr(el, "rel") or "") in FAVICON_RELS for el in self.soup.find_all("link"))

    # -------- Accessibility --------

    def extract_unlabeled_controls(self) -> List[FormControl]:
        """Form controls without a label[for], a wrapping label, aria-label(ledby) or title."""
        label_for_ids = {self._attr(el, "for") for el in self.soup.find_all("label") if self._attr(el, "for")}

        def non_empty(el: Tag, name: str) -> bool:
            return bool((self._attr(el, name) or "").strip())

        out: List[FormControl] = []
        for el in self.soup.find_all(["input", "select", "textarea"]):
            input_type = None
            if el.name == "input":
                input_type = self._attr(el, "type") or "text"
                if input_type in LABEL_EXEMPT_INPUT_TYPES:
                    continue

            el_id = self._attr(el, "id")
            labeled = (
                (el_id and el_id in label_for_ids)
                or el.find_parent("label") is not None
                or non_empty(el, "aria-label")
                or non_empty(el, "aria-labelledby")
                or non_empty(el, "title")
            )
            if not labeled:
                out.append(FormControl(kind=el.name, input_type=input_type, id=el_id, name=self._attr(el, "name")))
        return out

    def has_main_landmark(self) -> bool:
        return self.soup.find("main") is not None or self.soup.find(attrs={"role": "main"}) is not None

    # -------- Structured data & content --------

    def extract_json_ld(self) -> List[JsonLdBlock]:
        """Decodes JSON-LD blocks; undecodable blocks become parse-error sentinels."""
        blocks: List[JsonLdBlock] = []
        for script in self.soup.find_all("script", attrs={"type": "application/ld+json"}):
            content = script.string if script.string is not None else script.get_text()
            if not content:
                continue
            try:
                blocks.append(JsonLdBlock(data=json.loads(content)))
            except ValueError:
                blocks.append(JsonLdBlock(parse_error=True, raw=content))
        return blocks

    def extract_element_ids(self) -> List[str]:
        return [self._attr(el, "id") for el in self.soup.find_all(id=True) if self._attr(el, "id")]

    def extract_word_count(self) -> int:
        """Whitespace-separated words in <main>, or in <body> when main is absent or empty."""
        text = ""
        main = self.soup.find("main")
        if main is not None:
            text = main.get_text(" ")
        if not text.strip():
            body = self.soup.find("body")
            text = body.get_text(" ") if body is not None else ""
        return len(text.split())


def parse_html_file(file_path: str, html: str, dist_path: str, config,
                    classifier: Optional[DomainClassifier] = None) -> PageRecord:
    """
    Extracts a PageRecord from one HTML document.

    Args:
        file_path: Absolute path of the file.
        html: The raw markup.
        dist_path: Root of the dist folder (for the relative path and URL).
        config: The audit configuration (base_url, main_domain).
        classifier: Optional pre-built DomainClassifier for the same config.
    """
    classifier = classifier or DomainClassifier.from_config(config)
    service = PageParseService(html, classifier)

    relative_path = os.path.relpath(file_path, dist_path).replace(os.sep, "/")
    headings, heading_order = service.extract_headings()
    og = service.extract_open_graph()
    json_ld = service.extract_json_ld()

    objects = list(iter_json_ld_objects(json_ld))
    is_article = og.type == "article" or any(_has_article_type(obj) for obj in objects)
    has_author_info = bool(og.article_author) or any(obj.get("author") is not None for obj in objects)

    return PageRecord(
        file_path=file_path,
        relative_path=relative_path,
        url=page_url(config.base_url, relative_path),
        html=html,
        title=service.extract_page_title(),
        meta_description=service.extract_meta_description(),
        meta_robots=service.extract_meta_robots(),
        canonical=service.extract_canonical_tag(),
        charset=service.extract_charset(),
        lang=service.extract_html_lang(),
        viewport=service.extract_viewport(),
        headings=headings,
        heading_order=heading_order,
        og=og,
        twitter=service.extract_twitter_card(),
        hreflangs=service.extract_hreflangs(),
        links=service.extract_links(),
        images=service.extract_images(),
        videos=service.extract_videos(),
        unlabeled_controls=service.extract_unlabeled_controls(),
        json_ld=json_ld,
        has_favicon=service.has_favicon(),
        has_doctype="<!doctype html" in html[:100].lower(),
        has_main_landmark=service.has_main_landmark(),
        is_article=is_article,
        has_author_info=has_author_info,
        word_count=service.extract_word_count(),
        element_ids=service.extract_element_ids(),
    )


def _has_article_type(obj: Dict[str, Any]) -> bool:
    schema_type = obj.get("@type")
    if isinstance(schema_type, list):
        return any(t in ARTICLE_TYPES for t in schema_type if isinstance(t, str))
    return isinstance(schema_type, str) and schema_type in ARTICLE_TYPES
