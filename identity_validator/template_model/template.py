"""
Template Data Classes.

This module defines the in-memory representation of a document-type
layout. A template describes how one machine readable zone decomposes
into named, positioned fields.

Classes:
    FieldKind: Role tag of a structure entry
    FieldSpec: Base class of all structure entries
    PlainField / NameField / SeparatorField / ChecksumField: Data fields
    LineBreak: Break marker between physical lines
    Template: Complete layout of one document type
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from identity_validator.utils.exceptions import MalformedTemplateError

# Length sentinel resolved at extraction time
WILDCARD = "*"

LengthValue = Optional[Union[int, str]]


class FieldKind(Enum):
    """Role of a structure entry inside a template."""
    FIELD = "field"
    NAME = "name"
    SEPARATOR = "separator"
    CHECKSUM = "checksum"
    LINE_BREAK = "line_break"


@dataclass
class FieldSpec:
    """
    Base class for all structure entries.

    Length and count are kept exactly as declared; they are only
    interpreted by the field extractor.
    """
    name: str = ""
    length: LengthValue = None
    count: LengthValue = None
    has_checksum: bool = False
    checksum_for: Optional[str] = None

    kind = None

    @property
    def declared_length(self) -> LengthValue:
        """Length if declared, otherwise count, otherwise None."""
        return self.length if self.length is not None else self.count

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the dictionary layout used by template files."""
        data = {'kind': self.kind.value, 'name': self.name}
        if self.length is not None:
            data['length'] = self.length
        if self.count is not None:
            data['count'] = self.count
        if self.has_checksum:
            data['has_checksum'] = True
        if self.checksum_for is not None:
            data['checksum_for'] = self.checksum_for
        return data


@dataclass
class PlainField(FieldSpec):
    """Generic positioned value, e.g. a document number or a date."""
    kind = FieldKind.FIELD


@dataclass
class NameField(FieldSpec):
    """Holder name; a wildcard length stops at the template separator."""
    kind = FieldKind.NAME


@dataclass
class SeparatorField(FieldSpec):
    """Structural filler that never surfaces in the public document."""
    kind = FieldKind.SEPARATOR


@dataclass
class ChecksumField(FieldSpec):
    """Check digit protecting the field named by ``checksum_for``."""
    kind = FieldKind.CHECKSUM


@dataclass
class LineBreak:
    """Marks the start of the next physical line."""
    kind = FieldKind.LINE_BREAK

    def to_dict(self) -> Dict[str, Any]:
        return {'kind': self.kind.value}


StructureEntry = Union[PlainField, NameField, SeparatorField, ChecksumField, LineBreak]

_FIELD_CLASSES = {
    FieldKind.FIELD: PlainField,
    FieldKind.NAME: NameField,
    FieldKind.SEPARATOR: SeparatorField,
    FieldKind.CHECKSUM: ChecksumField,
}


@dataclass
class Template:
    """
    Complete layout of one document type.

    Attributes:
        notation: Identifier the template was loaded under (e.g. "UTO.p")
        type_code: Document type code (e.g. "P")
        type_description: Human-readable document type
        country_code: Issuing country code
        country_name: Country name in the issuing country's language
        country_international_name: English country name
        separator: Character delimiting variable-width name fields
        line_length: Expected length of one physical line
        structure: Ordered structure entries

    Example:
        >>> template = Template.from_dict(data, notation="UTO.p")
        >>> template.line_length
        44
    """
    notation: str
    type_code: str
    type_description: str
    country_code: str
    country_name: str
    country_international_name: str
    separator: str
    line_length: int
    structure: List[StructureEntry] = field(default_factory=list)

    @property
    def fields(self) -> List[FieldSpec]:
        """Structure entries that carry data."""
        return [entry for entry in self.structure if not isinstance(entry, LineBreak)]

    @property
    def line_count(self) -> int:
        """Number of physical lines described by the structure."""
        return 1 + sum(1 for entry in self.structure if isinstance(entry, LineBreak))

    def get_field(self, name: str) -> Optional[FieldSpec]:
        """Return the first data field with the given name."""
        for spec in self.fields:
            if spec.name == name:
                return spec
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the dictionary layout used by template files."""
        return {
            'meta': {
                'type': {'code': self.type_code, 'description': self.type_description},
                'country': {
                    'code': self.country_code,
                    'name': self.country_name,
                    'international': self.country_international_name,
                },
                'separator': self.separator,
                'line_length': self.line_length,
            },
            'structure': [entry.to_dict() for entry in self.structure],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], notation: str = "") -> 'Template':
        """
        Build a template from a parsed definition.

        Only the overall shape and the line metadata are checked here.
        Field lengths are validated lazily by the extractor.

        Args:
            data: Parsed template definition.
            notation: Identifier the definition was found under.

        Returns:
            Template instance.

        Raises:
            MalformedTemplateError: If the definition is not structurally usable.
        """
        if not isinstance(data, dict):
            raise MalformedTemplateError("definition is not a mapping", notation)

        meta = data.get('meta')
        structure = data.get('structure')
        if not isinstance(meta, dict):
            raise MalformedTemplateError("missing 'meta' section", notation)
        if not isinstance(structure, list):
            raise MalformedTemplateError("missing 'structure' list", notation)

        doc_type = meta.get('type') or {}
        country = meta.get('country') or {}

        try:
            line_length = int(meta['line_length'])
        except KeyError:
            raise MalformedTemplateError("missing 'line_length' in meta", notation)
        except (TypeError, ValueError):
            raise MalformedTemplateError(
                f"line_length is not a number: {meta.get('line_length')!r}", notation
            )
        if line_length <= 0:
            raise MalformedTemplateError(f"line_length must be positive: {line_length}", notation)

        separator = meta.get('separator', '<')
        if not separator:
            raise MalformedTemplateError("separator must not be empty", notation)

        return cls(
            notation=notation,
            type_code=str(doc_type.get('code', '')),
            type_description=str(doc_type.get('description', '')),
            country_code=str(country.get('code', '')),
            country_name=str(country.get('name', '')),
            country_international_name=str(country.get('international', '')),
            separator=str(separator),
            line_length=line_length,
            structure=[_parse_entry(entry, notation) for entry in structure],
        )


def _parse_entry(entry: Any, notation: str) -> StructureEntry:
    """Convert one raw structure entry into its tagged variant."""
    if not isinstance(entry, dict):
        raise MalformedTemplateError(f"structure entry is not a mapping: {entry!r}", notation)

    try:
        kind = FieldKind(str(entry.get('kind', FieldKind.FIELD.value)).lower())
    except ValueError:
        raise MalformedTemplateError(
            f"unknown structure kind: {entry.get('kind')!r}", notation, entry.get('name')
        )

    if kind is FieldKind.LINE_BREAK:
        return LineBreak()

    return _FIELD_CLASSES[kind](
        name=str(entry.get('name', kind.value)),
        length=entry.get('length'),
        count=entry.get('count'),
        has_checksum=bool(entry.get('has_checksum', False)),
        checksum_for=entry.get('checksum_for'),
    )
