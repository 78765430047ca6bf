import logging
import sys
from typing import Mapping, Optional, Union

from tqdm.auto import tqdm

Level = Union[str, int]

LOG_FORMAT = "%(levelname)s [%(name)s] %(message)s"


class LogWithTqdm(logging.Handler):
    """Writes records to stderr through tqdm, so a running progress bar is redrawn below them."""

    def emit(self, record):
        try:
            tqdm.write(self.format(record), file=sys.stderr)
        except Exception:
            self.handleError(record)


def resolve_level(level: Optional[Level], fallback: int) -> int:
    """'debug' -> logging.DEBUG; unknown names and None give `fallback`."""
    if isinstance(level, int):
        return level
    if not level:
        return fallback
    value = logging.getLevelName(str(level).upper())
    return value if isinstance(value, int) else fallback


def configure_logger(general_level: Level = "WARNING",
                     module_specific_levels: Optional[Mapping[str, Level]] = None,
                     silenced_loggers: Optional[Mapping[str, Level]] = None) -> logging.Handler:
    """
    Sends all distaudit logging through one LogWithTqdm handler on the root logger.

    The CLI calls this once, with the 'debug' section of settings.json. Calling
    it again replaces the previous handler instead of adding a second one.
    """
    root = logging.getLogger()
    for handler in [h for h in root.handlers if isinstance(h, LogWithTqdm)]:
        root.removeHandler(handler)

    handler = LogWithTqdm()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(resolve_level(general_level, logging.WARNING))

    for name, level in (module_specific_levels or {}).items():
        logging.getLogger(name).setLevel(resolve_level(level, logging.INFO))
    for name, level in (silenced_loggers or {}).items():
        logging.getLogger(name).setLevel(resolve_level(level, logging.CRITICAL))
    return handler
