"""
Template Store Module.

This module resolves template identifiers against a hierarchical store of
YAML definitions laid out as ``<COUNTRY>/<type>.yaml`` and enumerates the
document types it supports.

Author: Identity Validator Team
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from config import get_config
from identity_validator.utils.logger import get_logger
from identity_validator.utils.helpers import split_notation, validate_file_exists, get_package_root
from identity_validator.utils.exceptions import TemplateNotFoundError, MalformedTemplateError
from .template import Template

# Initialize module logger
logger = get_logger(__name__)

TEMPLATE_SUFFIX = ".yaml"


@dataclass
class SupportedType:
    """
    One document type available in a template store.

    Attributes:
        type_code: Document type code
        type_description: Human-readable document type
        country_code: Issuing country code
        country_name: Country name
        country_international_name: English country name
        notation: Identifier accepted by TemplateStore.load_template
    """
    type_code: str
    type_description: str
    country_code: str
    country_name: str
    country_international_name: str
    notation: str

    @classmethod
    def from_template(cls, template: Template) -> 'SupportedType':
        return cls(
            type_code=template.type_code,
            type_description=template.type_description,
            country_code=template.country_code,
            country_name=template.country_name,
            country_international_name=template.country_international_name,
            notation=template.notation,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Nested type / country / notation layout."""
        return {
            'type': {
                'code': self.type_code,
                'description': self.type_description,
            },
            'country': {
                'code': self.country_code,
                'name': self.country_name,
                'international_name': self.country_international_name,
            },
            'notation': self.notation,
        }


class TemplateStore:
    """
    File-backed store of document templates.

    Attributes:
        template_path: Root directory of the store

    Example:
        >>> store = TemplateStore()
        >>> template = store.load_template("UTO.p")
        >>> [t.notation for t in store.list_supported()]
        ['CH.id', 'D.id', 'UTO.p']
    """

    def __init__(self, template_path: Optional[Union[str, Path]] = None) -> None:
        """
        Initialize the template store.

        Args:
            template_path: Root directory of the store. If None, uses
                          config, then the templates bundled with the package.
        """
        if template_path is None:
            template_path = get_config("paths.templates", get_package_root() / "templates")

        self.template_path = Path(template_path)
        logger.debug(f"TemplateStore initialized (path: {self.template_path})")

    def get_template_file(self, identifier: str) -> Optional[Path]:
        """
        Convert a dot notation to the template file path.

        Returns:
            Path of the definition, or None if the identifier is unusable.
        """
        segments = split_notation(identifier)
        if segments is None:
            return None

        country, doc_type = segments
        return self.template_path / country / f"{doc_type}{TEMPLATE_SUFFIX}"

    def load_template(self, identifier: str) -> Template:
        """
        Load a template by its dot notation (e.g. "CH.id").

        Args:
            identifier: "<countryCode>.<typeCode>", case-insensitive.

        Returns:
            Parsed Template.

        Raises:
            TemplateNotFoundError: If no definition exists for the identifier.
            MalformedTemplateError: If the definition cannot be parsed.
        """
        path = self.get_template_file(identifier)
        if path is None or not validate_file_exists(path):
            raise TemplateNotFoundError(identifier, str(path) if path else None)

        notation = f"{path.parent.name}.{path.stem}"

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise MalformedTemplateError(f"invalid YAML: {e}", notation)

        template = Template.from_dict(data, notation=notation)
        logger.info(
            f"Loaded template {notation} "
            f"({template.type_description}, {template.country_international_name})"
        )
        return template

    def list_supported(self) -> List[SupportedType]:
        """
        Get a full list of all supported identity documents.

        Returns:
            One SupportedType per definition found, sorted by notation.
        """
        if not self.template_path.is_dir():
            logger.warning(f"Template directory not found: {self.template_path}")
            return []

        supported = []
        for country_dir in sorted(p for p in self.template_path.iterdir() if p.is_dir()):
            for template_file in sorted(country_dir.glob(f"*{TEMPLATE_SUFFIX}")):
                template = self.load_template(f"{country_dir.name}.{template_file.stem}")
                supported.append(SupportedType.from_template(template))

        logger.debug(f"Found {len(supported)} supported document types")
        return supported
