"""
CLI helper utilities.

This module provides shared utilities for the rdfrio command line:
- Logging setup
- Settings file loading
- Output formatting
"""

import json
import logging
import os
import sys
import tempfile
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Tuple

from ..errors import RioConfigurationError
from ..settings import ParserConfig, RioConfig, WriterConfig, lookup_setting

# Type alias for log levels
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_CONFIG_SECTIONS = ("parser", "writer", "non_fatal_errors")


def setup_logging(
    level: LogLevel = "INFO",
    log_file: Optional[str] = None
) -> Optional[str]:
    """
    Setup logging configuration with fallback locations.

    If the requested log file cannot be created, the same file name is tried
    in the system temp directory and then in the user's home directory.
    When none works, logging goes to the console only.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path. If None, logs to console only.

    Returns:
        The actual log file path used, or None if logging to console only.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers = [logging.StreamHandler(sys.stdout)]
    actual_log_file = None

    if log_file:
        log_filename = os.path.basename(log_file) or "rdfrio.log"
        fallback_locations = [
            log_file,
            os.path.join(tempfile.gettempdir(), log_filename),
            os.path.join(Path.home(), log_filename),
        ]

        for fallback_path in fallback_locations:
            try:
                log_dir = os.path.dirname(fallback_path)
                if log_dir and not os.path.exists(log_dir):
                    os.makedirs(log_dir, exist_ok=True)
                handlers.append(logging.FileHandler(fallback_path, encoding='utf-8'))
                actual_log_file = fallback_path
                if fallback_path != log_file:
                    print(f"Note: Using fallback log file: {fallback_path}")
                break
            except OSError as e:
                print(f"  Could not create log at {fallback_path}: {e}")

        if actual_log_file is None:
            print(f"Warning: Could not write log file to any location")
            print(f"  Requested: {log_file}")
            print(f"  Logging to console only")

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
    )

    logger = logging.getLogger(__name__)
    if actual_log_file:
        logger.info(f"Logging to: {actual_log_file}")

    return actual_log_file


def _apply_values(config: RioConfig, values: Any, section: str) -> None:
    if not isinstance(values, dict):
        raise RioConfigurationError(f"'{section}' must be a JSON object of setting keys to values")
    for key, value in values.items():
        setting = lookup_setting(key)
        if setting is None:
            raise RioConfigurationError(f"Unknown setting '{key}' in '{section}'")
        setting.validate(value)
        config.set(setting, value)


def load_config(config_path: str) -> Tuple[ParserConfig, WriterConfig]:
    """
    Load parser and writer settings from a JSON file.

    The file holds up to three members:

        {
            "parser": {"rdfrio.parser.preserve-bnode-ids": true},
            "writer": {"rdfrio.writer.pretty-print": false},
            "non_fatal_errors": ["rdfrio.ntriples.fail-on-invalid-lines"]
        }

    Args:
        config_path: Path to the configuration file.

    Returns:
        Tuple of (ParserConfig, WriterConfig).

    Raises:
        RioConfigurationError: If the file is not valid JSON, has an unknown
            member or setting key, or holds a value of the wrong type.
        OSError: If the file cannot be read.
    """
    if not config_path:
        raise ValueError("config_path cannot be empty")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data: Dict[str, Any] = json.load(f)
    except json.JSONDecodeError as e:
        raise RioConfigurationError(
            f"Invalid JSON in configuration file {config_path} at line {e.lineno}, column {e.colno}: {e.msg}"
        ) from e

    if not isinstance(data, dict):
        raise RioConfigurationError(
            f"Configuration file must contain a JSON object, got {type(data).__name__}"
        )
    unknown = sorted(set(data) - set(_CONFIG_SECTIONS))
    if unknown:
        raise RioConfigurationError(f"Unknown configuration members: {', '.join(unknown)}")

    parser_config = ParserConfig()
    writer_config = WriterConfig()
    _apply_values(parser_config, data.get("parser", {}), "parser")
    _apply_values(writer_config, data.get("writer", {}), "writer")

    non_fatal = data.get("non_fatal_errors", [])
    if not isinstance(non_fatal, list):
        raise RioConfigurationError("'non_fatal_errors' must be a JSON array of setting keys")
    for key in non_fatal:
        setting = lookup_setting(key)
        if setting is None:
            raise RioConfigurationError(f"Unknown setting '{key}' in 'non_fatal_errors'")
        parser_config.add_non_fatal(setting)

    return parser_config, writer_config


def print_header(title: str, width: int = 60) -> None:
    """Print a formatted header with the given title."""
    print("\n" + "=" * width)
    print(title)
    print("=" * width)


def print_footer(width: int = 60) -> None:
    print("=" * width + "\n")
