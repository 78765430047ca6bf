from __future__ import annotations

import logging
import sys
from typing import Callable, Dict

from colorama import init

from distaudit.core.handlers.check_handler import handle_check
from distaudit.core.handlers.exclusion_handler import handle_exclude
from distaudit.core.handlers.rules_handler import handle_rules
from distaudit.core.managers.config_manager import config_manager
from distaudit.core.utils.configure_logging import configure_logger

logger = logging.getLogger(__name__)

COMMANDS: Dict[str, Callable[[list[str]], int]] = {
    "check": handle_check,
    "rules": handle_rules,
    "exclude": handle_exclude,
}

USAGE = """usage: distaudit [-v|-q] [check|rules|exclude] [options]

  check    Audit a built site and print a report (default command)
  rules    List the rule catalog
  exclude  Write exclusions for the current issues

  -v, --verbose  Debug logging
  -q, --quiet    Only log errors

Run 'distaudit <command> --help' for the options of a command."""


def _log_level(args: list[str], level: str) -> str:
    """Consumes the leading verbosity flags and returns the general log level."""
    while args and args[0] in ("-v", "--verbose", "-q", "--quiet"):
        flag = args.pop(0)
        level = "DEBUG" if flag in ("-v", "--verbose") else "ERROR"
    return level


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for the 'distaudit' console script."""
    args = list(sys.argv[1:] if argv is None else argv)

    debug = config_manager.section("debug")
    configure_logger(
        _log_level(args, debug.get("level", "WARNING")),
        debug.get("module_levels"),
        debug.get("silenced_loggers"),
    )
    init(autoreset=True)

    if args and args[0] in ("-h", "--help"):
        print(USAGE)
        return 0

    # 'check' is implied when the first argument is not a command.
    if not args or args[0] not in COMMANDS:
        args.insert(0, "check")

    command = args.pop(0)
    logger.debug("Running command '%s' with %s", command, args)
    return COMMANDS[command](args)


if __name__ == "__main__":
    sys.exit(main())
