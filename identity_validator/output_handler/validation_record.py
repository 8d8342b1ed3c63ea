"""
Validation Record Data Class.

One row of a batch validation report: the input line, the template used
and what extraction and checksum verification made of it.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from identity_validator.extraction.document import PublicDocument


@dataclass
class ValidationRecord:
    """
    Result of validating one machine readable input.

    Attributes:
        lines: Raw input as given
        notation: Template identifier used
        document: Public document, None if extraction failed
        is_valid: Checksum verdict, None if extraction failed
        errors: Error messages collected for this input
        timestamp: When the input was processed
    """
    lines: str
    notation: str
    document: Optional[PublicDocument] = None
    is_valid: Optional[bool] = None
    errors: List[str] = field(default_factory=list)
    timestamp: Optional[str] = None

    def __post_init__(self):
        """Initialize timestamp if not provided."""
        if self.timestamp is None:
            self.timestamp = datetime.now().isoformat()

    @property
    def extracted(self) -> bool:
        return self.document is not None

    def add_error(self, error: str) -> None:
        self.errors.append(error)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        return {
            'lines': self.lines,
            'notation': self.notation,
            'fields': self.document.to_dict() if self.document else {},
            'is_valid': self.is_valid,
            'errors': self.errors,
            'timestamp': self.timestamp,
        }

    def __repr__(self) -> str:
        return (
            f"ValidationRecord("
            f"notation={self.notation}, "
            f"extracted={self.extracted}, "
            f"valid={self.is_valid})"
        )
