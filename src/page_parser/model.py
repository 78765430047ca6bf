from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class LinkRecord(BaseModel):
    """A single <a> element as found in the markup."""
    href: str = ""
    text: str = ""
    aria_label: Optional[str] = None
    title: Optional[str] = None
    rel: Optional[str] = None
    target: Optional[str] = None
    is_internal: bool = False
    is_external: bool = False


class ImageRecord(BaseModel):
    """An <img> element. Width/height are kept as the raw attribute strings."""
    src: str = ""
    alt: Optional[str] = None
    width: Optional[str] = None
    height: Optional[str] = None


class VideoRecord(BaseModel):
    src: Optional[str] = None
    poster: Optional[str] = None


class HeadingEntry(BaseModel):
    level: int
    text: str


class HreflangEntry(BaseModel):
    lang: str
    url: str


class FormControl(BaseModel):
    """A form control (input/select/textarea) without an accessible label."""
    kind: str
    input_type: Optional[str] = None
    id: Optional[str] = None
    name: Optional[str] = None


class JsonLdBlock(BaseModel):
    """
    One <script type="application/ld+json"> block.
    When the payload cannot be decoded, `parse_error` is set and `raw` keeps the text.
    """
    data: Any = None
    parse_error: bool = False
    raw: Optional[str] = None


class OpenGraph(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    url: Optional[str] = None
    type: Optional[str] = None
    site_name: Optional[str] = None
    locale: Optional[str] = None
    image_width: Optional[str] = None
    image_height: Optional[str] = None
    image_alt: Optional[str] = None
    image_type: Optional[str] = None
    article_published_time: Optional[str] = None
    article_author: Optional[str] = None
    image_count: int = 0


class TwitterCard(BaseModel):
    card: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    site: Optional[str] = None
    creator: Optional[str] = None
    image_alt: Optional[str] = None


class PageRecord(BaseModel):
    """
    Structured facts about one rendered HTML file.
    Created once per file during indexing and never modified afterwards.
    """
    model_config = ConfigDict(frozen=True)

    file_path: str
    relative_path: str
    url: str
    html: str

    title: Optional[str] = None
    meta_description: Optional[str] = None
    meta_robots: Optional[str] = None
    canonical: Optional[str] = None
    charset: Optional[str] = None
    lang: Optional[str] = None
    viewport: Optional[str] = None

    headings: Dict[str, List[str]] = Field(default_factory=dict)
    heading_order: List[HeadingEntry] = Field(default_factory=list)

    og: OpenGraph = Field(default_factory=OpenGraph)
    twitter: TwitterCard = Field(default_factory=TwitterCard)
    hreflangs: List[HreflangEntry] = Field(default_factory=list)

    links: List[LinkRecord] = Field(default_factory=list)
    images: List[ImageRecord] = Field(default_factory=list)
    videos: List[VideoRecord] = Field(default_factory=list)
    unlabeled_controls: List[FormControl] = Field(default_factory=list)
    json_ld: List[JsonLdBlock] = Field(default_factory=list)

    has_favicon: bool = False
    has_doctype: bool = False
    has_main_landmark: bool = False
    is_article: bool = False
    has_author_info: bool = False
    word_count: int = 0
    element_ids: List[str] = Field(default_factory=list)

    def headings_at(self, level: int) -> List[str]:
        """Returns the heading texts for one level (1-6) in document order."""
        return self.headings.get(f"h{level}", [])

    @property
    def h1(self) -> List[str]:
        return self.headings_at(1)

    @property
    def is_noindex(self) -> bool:
        return "noindex" in (self.meta_robots or "").lower()


class SiteIndex(BaseModel):
    """
    Site-wide index built once per run from all extracted pages.

    The multimaps are keyed on exact values (case-sensitive, whitespace-preserving)
    and list the relative paths of the pages using that value.
    """
    pages: Dict[str, PageRecord] = Field(default_factory=dict)
    titles: Dict[str, List[str]] = Field(default_factory=dict)
    descriptions: Dict[str, List[str]] = Field(default_factory=dict)
    h1s: Dict[str, List[str]] = Field(default_factory=dict)
    canonicals: Dict[str, List[str]] = Field(default_factory=dict)
    image_files: Dict[str, Tuple[str, int]] = Field(default_factory=dict)

    def add_page(self, page: PageRecord) -> None:
        """Folds one page into the index. Only non-empty fields reach the multimaps."""
        rel = page.relative_path
        self.pages[rel] = page
        if page.title:
            self.titles.setdefault(page.title, []).append(rel)
        if page.meta_description:
            self.descriptions.setdefault(page.meta_description, []).append(rel)
        for h1 in dict.fromkeys(page.h1):
            if h1:
                self.h1s.setdefault(h1, []).append(rel)
        if page.canonical:
            self.canonicals.setdefault(page.canonical, []).append(rel)

    def add_image_file(self, relative_path: str, absolute_path: str, size: int) -> None:
        self.image_files[relative_path] = (absolute_path, size)

    @property
    def total_images(self) -> int:
        return sum(len(p.images) for p in self.pages.values())

    @property
    def total_links(self) -> int:
        return sum(len(p.links) for p in self.pages.values())
