import os
import re
from typing import Dict, Optional

_SKIP_PREFIXES = ("#", "mailto:", "tel:")


class FileResolver:
    """
    Maps hrefs found in a page to files in the dist folder.

    File-existence lookups are cached for the lifetime of the instance;
    call `clear()` between runs that share one resolver.
    """

    def __init__(self, dist_path: str):
        self.dist_path = os.path.abspath(dist_path)
        self._exists: Dict[str, bool] = {}

    def clear(self) -> None:
        self._exists.clear()

    def exists(self, path: str) -> bool:
        cached = self._exists.get(path)
        if cached is None:
            cached = os.path.exists(path)
            self._exists[path] = cached
        return cached

    def is_dir(self, path: str) -> bool:
        return self.exists(path) and os.path.isdir(path)

    def target_path(self, href: str, current_page: str) -> Optional[str]:
        """
        Returns the raw filesystem target of an href (query and fragment stripped),
        before any index.html/.html fallbacks. None for hrefs that never map to a file.
        """
        if not href or href.startswith(_SKIP_PREFIXES):
            return None
        clean = re.split(r"[?#]", href, maxsplit=1)[0]
        if not clean:
            return None
        if clean.startswith("/"):
            return os.path.normpath(os.path.join(self.dist_path, clean.lstrip("/")))
        # current_page may be relative to the dist folder or absolute.
        current_dir = os.path.dirname(os.path.join(self.dist_path, current_page))
        return os.path.normpath(os.path.join(current_dir, clean))

    def resolve_to_file_path(self, href: str, current_page: str) -> Optional[str]:
        """
        Resolves an href to the file that would be served for it.

        The target itself wins when it exists (a directory included), then
        '<target>/index.html', then '<target>.html'. When none exists the
        bare target is returned so callers can report it as missing.
        """
        target = self.target_path(href, current_page)
        if target is None:
            return None
        if self.exists(target):
            return target
        index_file = os.path.join(target, "index.html")
        if self.exists(index_file):
            return index_file
        html_file = target + ".html"
        if self.exists(html_file):
            return html_file
        return target

    def relative_to_dist(self, path: str) -> str:
        return os.path.relpath(path, self.dist_path).replace(os.sep, "/")
