"""
Helper Utilities Module.

Small generic functions shared by the template store, the CLI and the
output handler.

Functions:
    - ensure_directory: Create directory if it doesn't exist
    - generate_timestamp: Generate formatted timestamps
    - validate_file_exists: Check for a regular file
    - split_notation: Split a "<COUNTRY>.<type>" template identifier
    - get_package_root: Locate the installed identity_validator package
"""

from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple, Union


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists.

    Returns:
        Path object pointing to the directory.

    Example:
        >>> ensure_directory("outputs/reports")
        PosixPath('outputs/reports')
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def generate_timestamp(format_str: str = "%Y%m%d_%H%M%S") -> str:
    """
    Generate a formatted timestamp string.

    Example:
        >>> generate_timestamp("%Y-%m-%d")
        "2026-10-18"
    """
    return datetime.now().strftime(format_str)


def validate_file_exists(filepath: Union[str, Path]) -> bool:
    """
    Check if a file exists and is a regular file.

    Args:
        filepath: Path to check.

    Returns:
        True if file exists and is a regular file.
    """
    path = Path(filepath)
    return path.exists() and path.is_file()


def split_notation(identifier: str) -> Optional[Tuple[str, str]]:
    """
    Split a template identifier into its storage segments.

    The country segment is uppercased and the type segment lowercased,
    which is how templates are laid out on disk.

    Args:
        identifier: Dot notation such as "ch.ID" or "UTO.p".

    Returns:
        (country, type) tuple, or None if the identifier has no
        usable country and type segment.

    Example:
        >>> split_notation("ch.ID")
        ('CH', 'id')
        >>> split_notation("passport") is None
        True
    """
    if not identifier or '.' not in identifier:
        return None

    country, _, doc_type = identifier.strip().partition('.')
    if not country or not doc_type or '.' in doc_type:
        return None

    return country.upper(), doc_type.lower()


def get_package_root() -> Path:
    """Return the directory of the identity_validator package."""
    return Path(__file__).resolve().parent.parent
