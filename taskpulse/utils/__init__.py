"""Utility functions."""

from .config import load_config, get_default_config
from .datetime_utils import format_timestamp, parse_timestamp, utc_now
from .logging_setup import setup_logging

__all__ = [
    'load_config',
    'get_default_config',
    'format_timestamp',
    'parse_timestamp',
    'utc_now',
    'setup_logging',
]
