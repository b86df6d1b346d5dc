"""
Command-line entry point for MiniFileExplorer.

Loads the configuration, sets up logging, settles the initial directory
and hands control to the interactive shell.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from .config.parser import ConfigurationError, create_config_template, load_config
from .models.config import LoggingConfig, LogLevel
from .shell import Shell
from .commands.terminal import Terminal
from .tools.fs_probe import FSProbe


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(logging_config: LoggingConfig, level_override: Optional[str] = None) -> None:
    """Send diagnostics to stderr, or to the configured log file."""
    level = logging_config.get_numeric_level()
    if level_override:
        level = getattr(logging, LogLevel(level_override.upper()).value)

    if logging_config.file:
        logging.basicConfig(level=level, format=LOG_FORMAT, filename=logging_config.file)
    else:
        logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mini-explorer",
        description="Interactive command-line file explorer.",
    )
    parser.add_argument(
        "directory",
        nargs="?",
        default=None,
        help="Directory to start in (default: current directory)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a YAML configuration file",
    )
    parser.add_argument(
        "--write-config",
        metavar="PATH",
        default=None,
        help="Write a configuration template to PATH and exit",
    )
    parser.add_argument(
        "--log-level",
        choices=[level.value for level in LogLevel],
        type=str.upper,
        default=None,
        help="Override the configured logging level",
    )
    return parser


def use_surrogate_escapes() -> None:
    """Let the console pass through file names that are not valid in its encoding."""
    for stream in (sys.stdin, sys.stdout):
        if hasattr(stream, "reconfigure"):
            stream.reconfigure(errors="surrogateescape")


def resolve_initial_directory(directory: Optional[str]) -> Optional[str]:
    """
    Absolute form of the starting directory.

    Args:
        directory: Requested directory, or None for the process working directory

    Returns:
        The absolute directory, or None if it is not an accessible directory
    """
    if directory is None:
        try:
            return os.getcwd()
        except OSError as e:
            logger.error(f"Cannot determine working directory: {e}")
            return None
    if not os.path.isdir(directory) or not os.access(directory, os.X_OK):
        return None
    return os.path.realpath(directory)


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)
    use_surrogate_escapes()

    if args.write_config:
        try:
            path = create_config_template(args.write_config)
        except ConfigurationError as e:
            print(f"Configuration error: {e}", file=sys.stderr)
            return 2
        print(f"Configuration template written to {path}")
        return 0

    try:
        result = load_config(args.config)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    config = result.config
    setup_logging(config.logging, args.log_level)
    for warning in result.warnings:
        logger.info(warning)

    requested = args.directory if args.directory is not None else config.start_directory
    cwd = resolve_initial_directory(requested)
    if cwd is None:
        if requested is None:
            print("Failed to get current working directory", file=sys.stderr)
        else:
            print(f"Directory not found: {requested}")
        return 1

    print(f"Current Directory: {cwd}")
    shell = Shell(FSProbe(cwd), Terminal(), config.time_format)
    return shell.run()


if __name__ == "__main__":
    sys.exit(main())
