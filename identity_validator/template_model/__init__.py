"""
Template Model Module for the Identity Validator.

This module provides:
    - The in-memory template representation (tagged field variants)
    - The YAML template store and supported-type enumeration
"""

from .template import (
    WILDCARD,
    FieldKind,
    FieldSpec,
    PlainField,
    NameField,
    SeparatorField,
    ChecksumField,
    LineBreak,
    Template,
)
from .loader import TemplateStore, SupportedType

__all__ = [
    'WILDCARD',
    'FieldKind',
    'FieldSpec',
    'PlainField',
    'NameField',
    'SeparatorField',
    'ChecksumField',
    'LineBreak',
    'Template',
    'TemplateStore',
    'SupportedType'
]
