"""
Checksum Engine Module.

This module computes weighted check digits and verifies them against
the checksum fields of an extracted document.

Algorithm:
    Each character of the protected value is mapped to a number (digits
    to themselves, anything else to its character code minus 55, so
    A=10 ... Z=35), multiplied by a repeating weight of 7, 3, 1 and
    summed. The check digit is the last decimal digit of the sum.

Author: Identity Validator Team
"""

from itertools import cycle
from typing import Any, Dict, List, Optional

from identity_validator.utils.logger import get_logger
from identity_validator.extraction.document import RawDocument, RawField

# Initialize module logger
logger = get_logger(__name__)

WEIGHTS = (7, 3, 1)


def character_value(char: str) -> int:
    """
    Numeric value of one character in the check digit sum.

    Example:
        >>> character_value("7")
        7
        >>> character_value("A")
        10
    """
    if '0' <= char <= '9':
        return int(char)
    return ord(char) - 55


def compute_check_digit(value: str) -> int:
    """
    Compute the check digit of a value.

    Args:
        value: Protected field value.

    Returns:
        Check digit (0-9).

    Example:
        >>> compute_check_digit("520727")
        3
    """
    total = sum(
        character_value(char) * weight
        for char, weight in zip(value, cycle(WEIGHTS))
    )
    return total % 10


class FieldCheck:
    """Outcome of checking one protected field."""

    def __init__(
        self,
        field: str,
        is_valid: bool,
        message: str,
        expected: Optional[str] = None,
        actual: Optional[str] = None
    ):
        self.field = field
        self.is_valid = is_valid
        self.message = message
        self.expected = expected
        self.actual = actual

    def to_dict(self) -> Dict[str, Any]:
        return {
            'field': self.field,
            'is_valid': self.is_valid,
            'message': self.message,
            'expected': self.expected,
            'actual': self.actual,
        }


class ChecksumReport:
    """
    Contains the result of all checksum checks of one document.

    Attributes:
        is_valid: Overall validation result
        errors: List of error messages
        field_results: Per-field check results
    """

    def __init__(self):
        self.is_valid = True
        self.errors: List[str] = []
        self.field_results: Dict[str, FieldCheck] = {}

    def add_field_result(self, check: FieldCheck) -> None:
        """Add a field-level result."""
        self.field_results[check.field] = check
        if not check.is_valid:
            self.errors.append(f"{check.field}: {check.message}")
            self.is_valid = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'is_valid': self.is_valid,
            'errors': self.errors,
            'field_results': {
                name: check.to_dict() for name, check in self.field_results.items()
            },
        }


class ChecksumEngine:
    """
    Verifies the check digits of an extracted document.

    Every field flagged with ``has_checksum`` is matched with the first
    field whose ``checksum_for`` names it.

    Example:
        >>> engine = ChecksumEngine()
        >>> engine.validate(raw_document)
        True
        >>> engine.inspect(raw_document).errors
        []
    """

    def check_field(self, document: RawDocument, protected: RawField) -> FieldCheck:
        """
        Check one protected field against its checksum sibling.

        Args:
            document: Raw document containing both fields.
            protected: Field flagged with has_checksum.

        Returns:
            FieldCheck with expected and declared digits.
        """
        checksum = document.find_checksum_for(protected.name)
        if checksum is None:
            return FieldCheck(protected.name, False, "No checksum field found")

        expected = str(compute_check_digit(protected.value))
        if expected != checksum.value:
            return FieldCheck(
                protected.name,
                False,
                f"Check digit mismatch (computed {expected}, declared {checksum.value})",
                expected,
                checksum.value
            )

        return FieldCheck(protected.name, True, "Valid check digit", expected, checksum.value)

    def validate(self, document: RawDocument) -> bool:
        """
        Check whether all check digits of the document are correct.

        Stops at the first failing field.

        Args:
            document: Raw document produced by the field extractor.

        Returns:
            True if every protected field passes.
        """
        for protected in document.protected_fields:
            check = self.check_field(document, protected)
            if not check.is_valid:
                logger.debug(f"Checksum failed for {check.field}: {check.message}")
                return False

        return True

    def inspect(self, document: RawDocument) -> ChecksumReport:
        """
        Check every protected field and collect the results.

        Args:
            document: Raw document produced by the field extractor.

        Returns:
            ChecksumReport covering every protected field.
        """
        report = ChecksumReport()

        for protected in document.protected_fields:
            report.add_field_result(self.check_field(document, protected))

        if not report.is_valid:
            logger.warning(
                f"{len(report.errors)} checksum error(s) in {document.notation}: "
                f"{', '.join(report.errors)}"
            )

        return report
