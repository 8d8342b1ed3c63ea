"""
Extraction Module for the Identity Validator.

This module provides:
    - Line-break normalization of raw machine readable zones
    - Template-driven positional field extraction
    - Raw and public document structures
"""

from .line_normalizer import LineNormalizer, normalize_lines
from .field_extractor import FieldExtractor
from .document import RawField, RawDocument, PublicField, PublicDocument

__all__ = [
    'LineNormalizer',
    'normalize_lines',
    'FieldExtractor',
    'RawField',
    'RawDocument',
    'PublicField',
    'PublicDocument'
]
