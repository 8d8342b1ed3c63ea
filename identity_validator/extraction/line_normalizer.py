"""
Line Normalizer Module.

Collapses the line-break notations found in scanned or pasted machine
readable zones into a single break character, so a multi-line zone can
be walked as one flat character stream.
"""

import re
from typing import List, Optional

from config import get_config
from identity_validator.utils.exceptions import ConfigurationError
from identity_validator.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)


class LineNormalizer:
    """
    Replaces line-break notations with a designated break character.

    Notations are matched case-insensitively and longest first, so an
    escaped "\\r\\n" turns into exactly one break character.

    Attributes:
        break_character: Character every notation is replaced with
        notations: Recognized line-break notations

    Example:
        >>> normalizer = LineNormalizer()
        >>> normalizer.normalize("IDCHE<BR />7408122F")
        'IDCHE|7408122F'
    """

    DEFAULT_BREAK_CHARACTER = "|"

    DEFAULT_NOTATIONS = [
        "\\r\\n",
        "\\n",
        "<br />",
        "<br/>",
        "<br>",
        "\r\n",
        "\n",
    ]

    def __init__(
        self,
        break_character: Optional[str] = None,
        notations: Optional[List[str]] = None
    ) -> None:
        """
        Initialize the line normalizer.

        Args:
            break_character: Replacement character. If None, uses config.
            notations: Recognized notations. If None, uses config.
        """
        self.break_character = break_character or get_config(
            "line_normalizer.break_character",
            self.DEFAULT_BREAK_CHARACTER
        )
        self.notations = notations or get_config(
            "line_normalizer.break_notations",
            self.DEFAULT_NOTATIONS
        )

        ordered = sorted({n for n in self.notations if n}, key=len, reverse=True)
        if not ordered:
            raise ConfigurationError(
                "line_normalizer.break_notations",
                "at least one non-empty notation is required"
            )
        self._pattern = re.compile(
            '|'.join(re.escape(notation) for notation in ordered),
            flags=re.IGNORECASE
        )

        logger.debug(f"LineNormalizer initialized (break: '{self.break_character}')")

    def normalize(self, raw: Optional[str]) -> str:
        """
        Replace every recognized line-break notation.

        Args:
            raw: Raw machine readable lines.

        Returns:
            Flat string with one break character per line break.
        """
        if not raw:
            return ""

        return self._pattern.sub(lambda _: self.break_character, raw)


def normalize_lines(raw: Optional[str]) -> str:
    """
    Convenience function using the configured normalizer.

    Example:
        >>> normalize_lines("P<UTO\\\\nL898902C3")
        'P<UTO|L898902C3'
    """
    return LineNormalizer().normalize(raw)
