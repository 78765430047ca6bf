# file: src/page_parser/utils/parallel_workers.py
import logging
from typing import Optional

from page_parser.services.page_parse_service import parse_html_file

logger = logging.getLogger(__name__)


def parse_file_worker(file_path: str, dist_path: str, config, html: Optional[str] = None) -> Optional[str]:
    """
    Worker function extracting one HTML file.
    Returns the PageRecord as a JSON string (or None on error), which keeps
    the payload cheap to ship back from a spawned process.
    """
    try:
        if html is None:
            with open(file_path, "r", encoding="utf-8", errors="replace") as f:
                html = f.read()
        record = parse_html_file(file_path, html, dist_path, config)
        return record.model_dump_json()
    except Exception as e:
        logger.warning("WORKER ERROR parsing %s: %s", file_path, e, exc_info=True)
        return None
