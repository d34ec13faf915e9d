"""
CLI module for rdfrio.

- main.py: Argument parsing and the convert / list-formats entry point
- helpers.py: Shared CLI utilities (logging, settings files, output)
"""

from .helpers import load_config, setup_logging
from .main import create_argument_parser, main

__all__ = [
    'create_argument_parser',
    'main',
    'load_config',
    'setup_logging',
]
