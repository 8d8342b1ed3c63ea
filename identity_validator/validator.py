"""
Identity Validator Module.

This module provides the IdentityValidator class, the public entry point
that ties template loading, line normalization, field extraction,
document normalization and checksum verification together.

Pipeline:
    set_template → add_machine_readable_lines → validate_machine_readable_lines

States:
    EMPTY ──add──> EXTRACTED ──validate──> VALIDATED
      ^                                        │
      └──────── set_template / failed add ─────┘

Author: Identity Validator Team
"""

from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from identity_validator.utils.logger import get_logger
from identity_validator.utils.exceptions import TemplateNotLoadedError
from identity_validator.template_model import Template, TemplateStore
from identity_validator.extraction import (
    FieldExtractor,
    LineNormalizer,
    PublicDocument,
    RawDocument,
)
from identity_validator.postprocessor import (
    ChecksumEngine,
    ChecksumReport,
    DocumentNormalizer,
)

# Initialize module logger
logger = get_logger(__name__)


class DocumentState(Enum):
    """Lifecycle of the document held by a validator."""
    EMPTY = "empty"
    EXTRACTED = "extracted"
    VALIDATED = "validated"


class IdentityValidator:
    """
    Extracts and validates machine readable identity lines.

    Instances hold one template and the document of the last call to
    add_machine_readable_lines. They are not meant to be shared between
    threads without external locking.

    Attributes:
        store: TemplateStore templates are loaded from
        template: Currently loaded template
        state: Current DocumentState

    Example:
        >>> validator = IdentityValidator("UTO.p")
        >>> validator.add_machine_readable_lines(mrz)
        >>> validator.get_document().to_dict()["surname"]
        'ERIKSSON'
        >>> validator.validate_machine_readable_lines()
        True
    """

    def __init__(
        self,
        template: Optional[str] = None,
        template_path: Optional[Union[str, Path]] = None
    ) -> None:
        """
        Initialize the validator.

        Args:
            template: Optional template identifier to load right away.
            template_path: Root of the template store. If None, uses
                          config or the bundled templates.
        """
        self.store = TemplateStore(template_path)
        self.line_normalizer = LineNormalizer()
        self.extractor = FieldExtractor()
        self.document_normalizer = DocumentNormalizer()
        self.checksum_engine = ChecksumEngine()

        self._template: Optional[Template] = None
        self._reset_document()

        if template is not None:
            self._template = self.store.load_template(template)

        logger.debug(f"IdentityValidator initialized (template: {template})")

    @property
    def template(self) -> Optional[Template]:
        return self._template

    @property
    def state(self) -> DocumentState:
        return self._state

    @property
    def raw_document(self) -> Optional[RawDocument]:
        """Raw document of the last successful extraction."""
        return self._raw_document

    def set_template(self, template: str) -> 'IdentityValidator':
        """
        Sets the currently used template.

        Args:
            template: Identifier such as "CH.id".

        Returns:
            The validator itself.
        """
        self._template = self.store.load_template(template)
        self._reset_document()
        return self

    def add_machine_readable_lines(self, lines: str) -> None:
        """
        Extract the fields of the given lines with the loaded template.

        Any previous document is discarded. On failure no document is
        kept and the validator returns to the EMPTY state.

        Args:
            lines: Raw machine readable lines, breaks in any recognized notation.

        Raises:
            TemplateNotLoadedError: If no template is loaded.
            MalformedTemplateError: If a template field has no usable length.
            MalformedInputError: If the input cannot be decomposed.
        """
        self._precondition_check("add_machine_readable_lines")
        self._reset_document()

        normalized = self.line_normalizer.normalize(lines)
        raw_document = self.extractor.extract(self._template, normalized)

        self._raw_document = raw_document
        self._document = self.document_normalizer.normalize(raw_document)
        self._state = DocumentState.EXTRACTED

        logger.info(
            f"Extracted {len(self._document)} fields with template {self._template.notation}"
        )

    def validate_machine_readable_lines(self) -> bool:
        """
        Checks whether the extracted lines carry correct check digits.

        Returns:
            True if every checksum-protected field is valid.

        Raises:
            TemplateNotLoadedError: If no template or no document exists.
        """
        self._precondition_check("validate_machine_readable_lines", require_document=True)

        is_valid = self.checksum_engine.validate(self._raw_document)
        self._state = DocumentState.VALIDATED

        logger.info(f"Validation of {self._template.notation} document: {is_valid}")
        return is_valid

    def get_validation_report(self) -> ChecksumReport:
        """
        Check every protected field and report per-field results.

        Raises:
            TemplateNotLoadedError: If no template or no document exists.
        """
        self._precondition_check("get_validation_report", require_document=True)

        report = self.checksum_engine.inspect(self._raw_document)
        self._state = DocumentState.VALIDATED
        return report

    def get_document(self) -> PublicDocument:
        """
        Get the public document of the last extraction.

        Raises:
            TemplateNotLoadedError: If no template or no document exists.
        """
        self._precondition_check("get_document", require_document=True)
        return self._document

    def get_supported_types(self) -> List[Dict[str, Any]]:
        """
        Get a full list of all supported identity documents
        and their associated country.
        """
        return [supported.to_dict() for supported in self.store.list_supported()]

    def _precondition_check(self, operation: str, require_document: bool = False) -> None:
        """
        Checks if everything is ready to process identities.

        Raises:
            TemplateNotLoadedError: If a precondition is not met.
        """
        if self._template is None:
            raise TemplateNotLoadedError(operation)

        if require_document and self._state is DocumentState.EMPTY:
            raise TemplateNotLoadedError(operation, "no machine readable lines extracted")

    def _reset_document(self) -> None:
        self._raw_document: Optional[RawDocument] = None
        self._document: Optional[PublicDocument] = None
        self._state = DocumentState.EMPTY
