"""
Document Data Classes.

This module defines the structures produced by field extraction.

Classes:
    RawField: Extracted value with its template bookkeeping
    RawDocument: Ordered raw extraction result, consumed by checksum checks
    PublicField: Extracted value as returned to callers
    PublicDocument: Ordered public result without internal attributes

Author: Identity Validator Team
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional
import json

from identity_validator.template_model.template import FieldKind, LengthValue


@dataclass
class RawField:
    """
    One extracted field, still carrying its template attributes.

    Attributes:
        kind: Role of the field in the template
        name: Field name, unique within the template
        value: Extracted substring
        length: Declared length (may be the wildcard)
        count: Declared count (may be the wildcard)
        has_checksum: Whether a checksum field protects this value
        checksum_for: Name of the field protected by this one
        position: Cursor offset the value was read from
    """
    kind: FieldKind
    name: str
    value: str
    length: LengthValue = None
    count: LengthValue = None
    has_checksum: bool = False
    checksum_for: Optional[str] = None
    position: int = 0


@dataclass
class RawDocument:
    """
    Ordered extraction result including internal attributes.

    Example:
        >>> raw = extractor.extract(template, line)
        >>> raw.get("document_number").value
        'L898902C3'
    """
    notation: str = ""
    fields: List[RawField] = field(default_factory=list)

    def add(self, raw_field: RawField) -> None:
        self.fields.append(raw_field)

    def get(self, name: str) -> Optional[RawField]:
        """Return the first field with the given name."""
        for raw_field in self.fields:
            if raw_field.name == name:
                return raw_field
        return None

    def find_checksum_for(self, name: str) -> Optional[RawField]:
        """Return the first field declaring itself the checksum of ``name``."""
        for raw_field in self.fields:
            if raw_field.checksum_for is not None and raw_field.checksum_for == name:
                return raw_field
        return None

    @property
    def protected_fields(self) -> List[RawField]:
        """Fields guarded by a check digit."""
        return [f for f in self.fields if f.has_checksum]

    def __iter__(self) -> Iterator[RawField]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)


@dataclass
class PublicField:
    """Extracted field as exposed to callers."""
    kind: FieldKind
    name: str
    value: str
    checksum_for: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {'kind': self.kind.value, 'name': self.name, 'value': self.value}
        if self.checksum_for is not None:
            data['checksum_for'] = self.checksum_for
        return data


@dataclass
class PublicDocument:
    """
    Normalized document returned to callers.

    Separator fields are absent and extraction bookkeeping is stripped.

    Example:
        >>> document = validator.get_document()
        >>> document.to_dict()["surname"]
        'ERIKSSON'
    """
    notation: str = ""
    fields: List[PublicField] = field(default_factory=list)

    def get(self, name: str) -> Optional[str]:
        """Value of the first field with the given name."""
        for public_field in self.fields:
            if public_field.name == name:
                return public_field.value
        return None

    @property
    def names(self) -> List[str]:
        return [f.name for f in self.fields]

    def to_dict(self) -> Dict[str, str]:
        """
        Get field values keyed by name.

        Returns:
            Dictionary of field names to values in template order.
        """
        return {f.name: f.value for f in self.fields}

    def to_json(self, indent: int = 2) -> str:
        """Serialize the notation and all fields with their attributes."""
        return json.dumps(
            {
                'notation': self.notation,
                'fields': [f.to_dict() for f in self.fields],
            },
            indent=indent
        )

    def __iter__(self) -> Iterator[PublicField]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __repr__(self) -> str:
        return f"PublicDocument(notation={self.notation}, fields={len(self.fields)})"
