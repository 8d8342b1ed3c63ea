"""
Post-Processing Module for the Identity Validator.

This module provides functionality for:
    - Check digit computation and checksum verification
    - Normalization of raw documents into public documents
"""

from .checksum import (
    ChecksumEngine,
    ChecksumReport,
    FieldCheck,
    character_value,
    compute_check_digit,
)
from .document_normalizer import DocumentNormalizer

__all__ = [
    'ChecksumEngine',
    'ChecksumReport',
    'FieldCheck',
    'character_value',
    'compute_check_digit',
    'DocumentNormalizer'
]
