import os
import re
from typing import List

from page_parser.model import PageRecord
from seo_auditor.model import Issue
from ..core import AuditContext, CheckDefinition, IssueCollector, audit_spec, match_tier

GENERIC_ALT = re.compile(r"^(image|photo|picture|graphic) of", re.IGNORECASE)
# Size in KB, most severe first.
SIZE_TIERS = [(2048, "SEO00167"), (1024, "SEO00166"), (500, "SEO00165"), (300, "SEO00164"),
              (200, "SEO00163"), (150, "SEO00162"), (100, "SEO00160")]
MAX_ALT_LENGTH = 125


def _is_remote(src: str) -> bool:
    return src.startswith(("http://", "https://", "//", "data:"))


def filename_as_text(src: str) -> str:
    """'/img/hero-banner_v2.jpg' -> 'hero banner v2'"""
    name = src.split("?", 1)[0].split("#", 1)[0].rstrip("/").split("/")[-1]
    name = os.path.splitext(name)[0]
    return re.sub(r"[-_]", " ", name).lower().strip()


@audit_spec(codes=["SEO00153", "SEO00154", "SEO00155", "SEO00156", "SEO00157", "SEO00158", "SEO00159"]
            + [rule_id for _, rule_id in SIZE_TIERS])
def check_images(page: PageRecord, ctx: AuditContext) -> List[Issue]:
    """
    Alt text presence and quality, missing local files and file-size bands.
    Sizes come from the image files indexed alongside the pages.
    """
    issues = IssueCollector()

    for image in page.images:
        src = image.src.strip()
        element = src or "(empty src)"

        if image.alt is None:
            issues.add("SEO00153", page, element=element)
        elif not image.alt.strip():
            issues.add("SEO00154", page, element=element)
        else:
            alt = image.alt
            if len(alt) > MAX_ALT_LENGTH:
                issues.add("SEO00157", page, element=element,
                           actual=f"{len(alt)} chars", expected=f"<= {MAX_ALT_LENGTH} chars")
            if src and alt.lower().strip() == filename_as_text(src):
                issues.add("SEO00158", page, element=element)
            if GENERIC_ALT.search(alt.strip()):
                issues.add("SEO00159", page, element=alt[:50])

        if not src:
            issues.add("SEO00156", page, element="(empty src)")
            continue
        if _is_remote(src):
            continue

        resolved = ctx.resolver.resolve_to_file_path(src, page.file_path)
        if resolved is None:
            continue
        if not ctx.resolver.exists(resolved):
            issues.add("SEO00155", page, element=src)
            continue

        entry = ctx.site.image_files.get(ctx.resolver.relative_to_dist(resolved))
        if entry is None:
            continue
        kb = entry[1] / 1024
        tier = match_tier(kb, SIZE_TIERS, below=False)
        if tier:
            threshold, rule_id = tier
            issues.add(rule_id, page, element=src, actual=f"{round(kb)}KB", expected=f"<= {threshold}KB")

    return issues


@audit_spec(codes=["SEO01218", "SEO01219", "SEO01220"])
def check_image_dimensions(page: PageRecord, ctx: AuditContext) -> List[Issue]:
    """Explicit width/height avoid layout shift. Inline data and SVG are exempt."""
    issues = IssueCollector()
    for image in page.images:
        src = image.src.strip()
        if src.startswith("data:") or src.lower().split("?", 1)[0].endswith(".svg"):
            continue
        has_width = bool(image.width and image.width.strip())
        has_height = bool(image.height and image.height.strip())
        if not has_width and not has_height:
            issues.add("SEO01220", page, element=src or "(empty src)")
        elif not has_width:
            issues.add("SEO01218", page, element=src)
        elif not has_height:
            issues.add("SEO01219", page, element=src)
    return issues


@audit_spec(codes=["SEO01215"])
def check_videos(page: PageRecord, ctx: AuditContext) -> List[Issue]:
    issues = IssueCollector()
    for video in page.videos:
        if not video.poster:
            issues.add("SEO01215", page, element=video.src or "<video>")
    return issues


DEFINITION = CheckDefinition(
    name="images",
    page_checks=[check_images, check_image_dimensions, check_videos],
    order=100,
)
