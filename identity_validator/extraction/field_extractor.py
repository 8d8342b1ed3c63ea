"""
Field Extractor Module.

This module walks a template against a normalized machine readable zone
and cuts it into named fields.

Approach:
    A cursor starts at the first character. Every data field consumes
    its declared length, wildcard lengths are resolved against the
    current position, and every line break consumes the single break
    character left behind by the line normalizer.

Author: Identity Validator Team
"""

from typing import Optional

from config import get_config
from identity_validator.utils.logger import get_logger
from identity_validator.utils.exceptions import (
    ConfigurationError,
    MalformedInputError,
    MalformedTemplateError,
    TemplateNotLoadedError,
)
from identity_validator.template_model.template import (
    WILDCARD,
    FieldSpec,
    LineBreak,
    NameField,
    Template,
)
from .document import RawDocument, RawField

# Initialize module logger
logger = get_logger(__name__)


class FieldExtractor:
    """
    Positional extractor driven by a template.

    Attributes:
        missing_separator_policy: Behavior of a wildcard name field when
            no separator follows it ("error" or "clamp")

    Example:
        >>> extractor = FieldExtractor()
        >>> raw = extractor.extract(template, normalize_lines(mrz))
        >>> raw.get("document_number").value
        'L898902C3'
    """

    POLICY_ERROR = "error"
    POLICY_CLAMP = "clamp"
    POLICIES = (POLICY_ERROR, POLICY_CLAMP)

    def __init__(self, missing_separator_policy: Optional[str] = None) -> None:
        """
        Initialize the field extractor.

        Args:
            missing_separator_policy: "error" or "clamp". If None, uses config.

        Raises:
            ConfigurationError: If the policy is not recognized.
        """
        policy = missing_separator_policy or get_config(
            "extraction.missing_separator_policy",
            self.POLICY_ERROR
        )
        policy = str(policy).lower()
        if policy not in self.POLICIES:
            raise ConfigurationError(
                "extraction.missing_separator_policy",
                f"expected one of {list(self.POLICIES)}, got '{policy}'"
            )

        self.missing_separator_policy = policy
        logger.debug(f"FieldExtractor initialized (missing separator: {policy})")

    def extract(self, template: Optional[Template], normalized_line: str) -> RawDocument:
        """
        Decompose a normalized line according to the template.

        Args:
            template: Loaded template.
            normalized_line: Output of the line normalizer.

        Returns:
            RawDocument with every data field in template order.

        Raises:
            TemplateNotLoadedError: If no template is given.
            MalformedTemplateError: If a field has no usable length or count.
            MalformedInputError: If a name field has no separator after it
                and the policy is "error".
        """
        if template is None:
            raise TemplateNotLoadedError("extract")

        document = RawDocument(notation=template.notation)
        cursor = 0
        line_start = 0

        for entry in template.structure:
            if isinstance(entry, LineBreak):
                cursor += 1
                line_start = cursor
                continue

            length = self._resolve_length(entry, template, normalized_line, cursor, line_start)

            document.add(RawField(
                kind=entry.kind,
                name=entry.name,
                value=normalized_line[cursor:cursor + length],
                length=entry.length,
                count=entry.count,
                has_checksum=entry.has_checksum,
                checksum_for=entry.checksum_for,
                position=cursor,
            ))

            cursor += length

        if cursor > len(normalized_line):
            logger.warning(
                f"Input shorter than template {template.notation}: "
                f"expected {cursor} characters, got {len(normalized_line)}"
            )

        logger.debug(f"Extracted {len(document)} fields using {template.notation}")
        return document

    def _resolve_length(
        self,
        spec: FieldSpec,
        template: Template,
        line: str,
        cursor: int,
        line_start: int
    ) -> int:
        """
        Turn the declared length or count of a field into a character count.

        Raises:
            MalformedTemplateError: If nothing usable is declared.
        """
        declared = spec.declared_length
        if declared is None:
            raise MalformedTemplateError(
                "field declares neither length nor count",
                template.notation,
                spec.name
            )

        if str(declared).strip() == WILDCARD:
            return self._resolve_wildcard(spec, template, line, cursor, line_start)

        try:
            length = int(declared)
        except (TypeError, ValueError):
            raise MalformedTemplateError(
                f"invalid length {declared!r}",
                template.notation,
                spec.name
            )

        if length <= 0:
            raise MalformedTemplateError(
                f"length must be positive, got {length}",
                template.notation,
                spec.name
            )

        return length

    def _resolve_wildcard(
        self,
        spec: FieldSpec,
        template: Template,
        line: str,
        cursor: int,
        line_start: int
    ) -> int:
        """
        Resolve a "*" length at the current cursor.

        Name fields run up to the next separator. Every other field
        takes the remainder of the current physical line.
        """
        line_remainder = max(line_start + template.line_length - cursor, 0)

        if not isinstance(spec, NameField):
            return line_remainder

        position = line.lower().find(template.separator.lower(), cursor)
        if position != -1:
            return position - cursor

        if self.missing_separator_policy == self.POLICY_CLAMP:
            logger.debug(f"No separator after '{spec.name}', clamping to end of line")
            return line_remainder

        raise MalformedInputError(
            spec.name,
            f"no separator '{template.separator}' after position {cursor}",
            cursor
        )
