# arena/cli.py
"""
Command-line entry point: start the server and attach the admin console.
"""

import argparse
import logging
import sys

from arena.commands import create_default_dispatcher
from arena.console import Console
from arena.handle import ServerHandle
from arena.settings import default_config_path, load_settings
from arena.utils.logger import setup_logging

logger = logging.getLogger(__name__)


def build_parser():
    ap = argparse.ArgumentParser(
        prog="cell-arena",
        description="Cell arena server with an interactive admin console",
    )
    ap.add_argument("--config", default=default_config_path(),
                    help="settings YAML file (default: $ARENA_CONFIG or settings.yaml)")
    ap.add_argument("--log-file", default=None,
                    help="log file or directory (default: logs/)")
    ap.add_argument("--debug", action="store_true", help="enable debug logging")
    ap.add_argument("--no-start", action="store_true",
                    help="open the console without starting the server")
    return ap


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.log_file, logging.DEBUG if args.debug else logging.INFO)

    try:
        settings = load_settings(args.config)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load settings from {args.config}: {e}")
        return 1

    handle = ServerHandle(settings, settings_path=args.config)
    dispatcher = create_default_dispatcher(handle.commands)

    if not args.no_start:
        handle.start()

    Console(handle, dispatcher).run()

    handle.stop()
    handle.ticker.join()
    return 0


if __name__ == "__main__":
    sys.exit(main())
