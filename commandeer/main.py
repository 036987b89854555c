#!/usr/bin/env python3
"""
Commandeer - a simulated filesystem terminal

Main entry point.

Usage:
    commandeer [--config PATH] [--empty] [-c COMMANDS]

    --config PATH   Load settings from a JSON file
    --empty         Start from an empty root instead of the sample tree
    -c COMMANDS     Run the given command line(s) and exit

Author: Commandeer Developers
Version: 1.0.0
"""

import argparse
import sys
from typing import Optional, List

from commandeer.core.config_loader import ConfigLoader
from commandeer.exceptions import ConfigError
from commandeer.filesystem.vfs import VirtualFileSystem
from commandeer.logger import Logger, LogLevel, get_logger
from commandeer.shell.shell import Shell


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="commandeer",
        description="Terminal over an in-memory simulated filesystem."
    )
    parser.add_argument("--config", metavar="PATH", help="Load settings from a JSON file.")
    parser.add_argument(
        "--empty",
        action="store_true",
        help="Start from an empty root instead of the sample tree."
    )
    parser.add_argument(
        "-c",
        dest="command",
        metavar="COMMANDS",
        help="Run the given command line(s) and exit."
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Start-up sequence:
    1. Load configuration
    2. Initialize logging
    3. Build the filesystem
    4. Run the shell (interactive, or the -c commands)
    """
    args = _build_parser().parse_args(argv)

    loader = ConfigLoader()
    if args.config:
        try:
            loader.load(args.config)
        except ConfigError as e:
            print(f"commandeer: {e}", file=sys.stderr)
            return 1

    config = loader.config
    if args.empty:
        config.filesystem.seed_sample = False

    try:
        level = LogLevel.from_name(config.logging.level)
    except ValueError as e:
        print(f"commandeer: {e}", file=sys.stderr)
        return 1

    Logger.initialize(
        level=level,
        log_file=config.logging.log_file,
        use_colors=config.logging.use_colors,
        console_output=config.logging.console_output,
    )
    get_logger('config').info("Configuration loaded", context={'source': args.config or 'defaults'})

    vfs = VirtualFileSystem.from_config(config)
    shell = Shell(vfs=vfs, config=config)

    if args.command is not None:
        return shell.run_script(args.command)

    try:
        shell.run()
    except KeyboardInterrupt:
        print("\n\nInterrupted")

    return 0


if __name__ == '__main__':
    sys.exit(main())
