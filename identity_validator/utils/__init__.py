"""
Utility Module for the Identity Validator.

This module provides common utilities used across all other modules:
    - Logging configuration
    - Custom exceptions
    - File and notation helpers
"""

from .logger import setup_logger, get_logger
from .helpers import ensure_directory, generate_timestamp, split_notation

__all__ = [
    'setup_logger',
    'get_logger',
    'ensure_directory',
    'generate_timestamp',
    'split_notation'
]
