from __future__ import annotations

import logging
import os
import re
import time
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from typing import Iterable, List, Optional, Tuple

from tqdm.auto import tqdm

from distaudit.core.managers.config_manager import config_manager
from page_parser.model import PageRecord, SiteIndex
from page_parser.utils.parallel_workers import parse_file_worker

logger = logging.getLogger(__name__)

_REFRESH_MARKERS = ('http-equiv="refresh"', "http-equiv='refresh'")


class IndexController:
    """
    Walks a dist folder, extracts every HTML page and folds the results
    into a SiteIndex.

    Extraction runs in a process pool in bounded batches; the fold into the
    index happens in this process only.
    """

    def __init__(
            self,
            config,
            *,
            workers: Optional[int] = None,
            show_progress: bool = False,
    ) -> None:
        self.config = config
        self.dist_path = os.path.abspath(config.dist_path)
        self.show_progress = show_progress

        cfg_workers = int(config_manager.get_nested("indexer.workers", 0) or 0)
        self.workers = int(workers or cfg_workers or (os.cpu_count() or 4))
        self.min_file_size = int(config_manager.get_nested("indexer.min_file_size", 500))
        self.max_redirect_size = int(config_manager.get_nested("indexer.max_redirect_size", 1000))
        self.stat_batch_size = int(config_manager.get_nested("indexer.stat_batch_size", 500))
        self.parse_batch_size = int(config_manager.get_nested("indexer.parse_batch_size", 200))

        extensions = config_manager.get_nested(
            "indexer.image_extensions", ["jpg", "jpeg", "png", "gif", "webp", "svg", "avif"]
        )
        self.image_pattern = re.compile(r"\.(" + "|".join(map(re.escape, extensions)) + r")$", re.IGNORECASE)

    # -------- Discovery --------

    @staticmethod
    def _walk(directory: str) -> List[str]:
        found: List[str] = []
        for root, _dirs, files in os.walk(directory):
            found.extend(os.path.join(root, name) for name in files)
        return found

    def discover_files(self) -> List[str]:
        """Lists every file under the dist folder, walking each top-level subdirectory in its own thread."""
        try:
            entries = list(os.scandir(self.dist_path))
        except OSError as e:
            logger.error("Cannot read dist folder %s: %s", self.dist_path, e)
            return []

        files = [e.path for e in entries if e.is_file()]
        subdirs = [e.path for e in entries if e.is_dir()]
        if subdirs:
            with ThreadPoolExecutor(max_workers=min(32, len(subdirs))) as pool:
                for found in pool.map(self._walk, subdirs):
                    files.extend(found)
        return sorted(files)

    # -------- Filtering --------

    def _stat_html(self, file_path: str) -> Optional[Tuple[str, Optional[str]]]:
        """
        Returns (path, html-if-already-read) for files worth extracting,
        None for tiny files and meta-refresh redirect stubs.
        """
        try:
            size = os.path.getsize(file_path)
            if size < self.min_file_size:
                return None
            if size < self.max_redirect_size:
                with open(file_path, "r", encoding="utf-8", errors="replace") as f:
                    content = f.read()
                if any(marker in content for marker in _REFRESH_MARKERS):
                    logger.debug("Skipping redirect stub %s", file_path)
                    return None
                return file_path, content
            return file_path, None
        except OSError as e:
            logger.warning("Cannot stat %s: %s", file_path, e)
            return None

    def filter_html_files(self, html_files: List[str]) -> List[Tuple[str, Optional[str]]]:
        kept: List[Tuple[str, Optional[str]]] = []
        with ThreadPoolExecutor(max_workers=min(32, max(1, self.stat_batch_size))) as pool:
            for i in range(0, len(html_files), self.stat_batch_size):
                batch = html_files[i:i + self.stat_batch_size]
                kept.extend(r for r in pool.map(self._stat_html, batch) if r is not None)
        return kept

    def _index_images(self, site: SiteIndex, image_files: Iterable[str]) -> None:
        for path in image_files:
            try:
                size = os.path.getsize(path)
            except OSError as e:
                logger.warning("Cannot stat image %s: %s", path, e)
                continue
            rel = os.path.relpath(path, self.dist_path).replace(os.sep, "/")
            site.add_image_file(rel, path, size)

    # -------- Extraction --------

    def _parse_serial(self, batch: List[Tuple[str, Optional[str]]]) -> List[str]:
        results = []
        for path, html in batch:
            result = parse_file_worker(path, self.dist_path, self.config, html)
            if result:
                results.append(result)
        return results

    def _parse_parallel(self, pool: ProcessPoolExecutor, batch: List[Tuple[str, Optional[str]]]) -> List[str]:
        futures = {
            pool.submit(parse_file_worker, path, self.dist_path, self.config, html): path
            for path, html in batch
        }
        results = []
        for fut in as_completed(futures):
            path = futures[fut]
            try:
                result = fut.result()
            except Exception as e:
                logger.warning("Extraction failed for %s: %s", path, e)
                continue
            if result:
                results.append(result)
        return results

    def extract_pages(self, candidates: List[Tuple[str, Optional[str]]]) -> List[PageRecord]:
        pages: List[PageRecord] = []
        bar = tqdm(total=len(candidates), desc="Indexing", unit=" page", leave=False) if self.show_progress else None

        def collect(results: List[str], batch_len: int) -> None:
            for raw in results:
                pages.append(PageRecord.model_validate_json(raw))
            if bar is not None:
                bar.update(batch_len)

        try:
            if self.workers <= 1:
                for i in range(0, len(candidates), self.parse_batch_size):
                    batch = candidates[i:i + self.parse_batch_size]
                    collect(self._parse_serial(batch), len(batch))
            else:
                with ProcessPoolExecutor(max_workers=self.workers) as pool:
                    for i in range(0, len(candidates), self.parse_batch_size):
                        batch = candidates[i:i + self.parse_batch_size]
                        collect(self._parse_parallel(pool, batch), len(batch))
        finally:
            if bar is not None:
                bar.close()
        return pages

    # -------- Orchestration --------

    def build_index(self) -> SiteIndex:
        """Runs discovery, filtering and extraction and returns the folded SiteIndex."""
        start = time.perf_counter()
        all_files = self.discover_files()
        html_files = [f for f in all_files if f.endswith(".html")]
        image_files = [f for f in all_files if self.image_pattern.search(f)]

        candidates = self.filter_html_files(html_files)
        logger.info(
            "Found %d HTML files (%d after size/redirect filtering) and %d images.",
            len(html_files), len(candidates), len(image_files)
        )

        site = SiteIndex()
        self._index_images(site, image_files)

        # Fold in path order so multimap order does not depend on worker timing.
        pages = self.extract_pages(candidates)
        for page in sorted(pages, key=lambda p: p.relative_path):
            site.add_page(page)

        dropped = len(candidates) - len(pages)
        if dropped:
            logger.warning("%d page(s) could not be extracted and were left out of the index.", dropped)
        logger.info("Indexed %d pages in %.2fs.", len(site.pages), time.perf_counter() - start)
        return site
