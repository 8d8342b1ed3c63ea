"""
Main Output Handler Module.

This module provides the OutputHandler class that writes batch
validation results to JSON and Excel.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from config import get_config
from identity_validator.utils.logger import get_logger
from identity_validator.utils.helpers import ensure_directory
from identity_validator.utils.exceptions import JsonExportError
from .excel_exporter import ExcelExporter
from .validation_record import ValidationRecord

# Initialize module logger
logger = get_logger(__name__)


class OutputHandler:
    """
    Unified output handler for validation records.

    Attributes:
        json_enabled: Whether JSON export is enabled
        excel_enabled: Whether Excel export is enabled

    Example:
        >>> handler = OutputHandler(excel_enabled=True)
        >>> handler.save(records, json_path="report.json", excel_path="report.xlsx")
    """

    def __init__(
        self,
        json_enabled: Optional[bool] = None,
        excel_enabled: Optional[bool] = None
    ) -> None:
        """
        Initialize the output handler.

        Args:
            json_enabled: Override config for JSON output.
            excel_enabled: Override config for Excel output.
        """
        self.json_enabled = json_enabled if json_enabled is not None else \
            get_config("output.json.enabled", True)
        self.excel_enabled = excel_enabled if excel_enabled is not None else \
            get_config("output.excel.enabled", False)
        self.json_indent = get_config("output.json.indent", 2)

        self._excel_exporter = None

        logger.info(
            f"OutputHandler initialized "
            f"(json={self.json_enabled}, excel={self.excel_enabled})"
        )

    @property
    def excel_exporter(self) -> ExcelExporter:
        """Get or create the Excel exporter."""
        if self._excel_exporter is None:
            self._excel_exporter = ExcelExporter()
        return self._excel_exporter

    def save(
        self,
        records: Union[ValidationRecord, List[ValidationRecord]],
        json_path: Optional[str] = None,
        excel_path: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Save records to all enabled outputs that have a destination.

        Returns:
            Dictionary with 'json_path' and 'excel_path' (None when skipped).
        """
        if isinstance(records, ValidationRecord):
            records = [records]

        output_info = {'json_path': None, 'excel_path': None}

        if self.json_enabled and json_path:
            output_info['json_path'] = self.to_json(records, json_path)

        if self.excel_enabled and excel_path:
            output_info['excel_path'] = self.to_excel(records, excel_path)

        return output_info

    def to_json(self, records: List[ValidationRecord], filepath: str) -> str:
        """
        Write records to a JSON file.

        Raises:
            JsonExportError: If the file cannot be written.
        """
        path = Path(filepath)
        ensure_directory(path.parent)

        payload = {
            'total': len(records),
            'valid': sum(1 for r in records if r.is_valid),
            'records': [r.to_dict() for r in records],
        }

        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(payload, f, indent=self.json_indent, ensure_ascii=False)
        except OSError as e:
            logger.error(f"JSON export failed: {e}")
            raise JsonExportError(str(path), str(e))

        logger.info(f"JSON report saved: {path} ({len(records)} records)")
        return str(path)

    def to_excel(self, records: List[ValidationRecord], filepath: str) -> str:
        """Export records to an Excel file."""
        path = Path(filepath)
        return self.excel_exporter.export(records, path.name, str(path.parent))
