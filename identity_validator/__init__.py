"""
Identity Validator - Source Package.

This package extracts structured fields from machine readable identity
document lines (passport / ID card MRZ) using declarative per-document
templates, and verifies their embedded check digits.

Modules:
    - template_model: Template representation and YAML template store
    - extraction: Line normalization and positional field extraction
    - postprocessor: Check digit verification and document normalization
    - output_handler: JSON and Excel validation reports
    - utils: Logging, exceptions and helpers

Architecture:
    Template → Line Normalizer → Field Extractor → Document Normalizer
                                        ↓
                                 Checksum Engine
"""

__version__ = "1.0.0"
__author__ = "Identity Validator Team"

from .validator import IdentityValidator, DocumentState

__all__ = [
    'IdentityValidator',
    'DocumentState',
    'template_model',
    'extraction',
    'postprocessor',
    'output_handler',
    'utils'
]
