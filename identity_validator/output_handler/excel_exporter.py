"""
Excel Exporter Module.

This module writes validation records to an Excel workbook using
openpyxl.

Features:
    - Formatted headers
    - Auto-column width
    - Optional per-field sheet

Author: Identity Validator Team
"""

from pathlib import Path
from typing import List, Optional

import openpyxl
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import IllegalCharacterError

from config import get_config
from identity_validator.utils.logger import get_logger
from identity_validator.utils.helpers import ensure_directory, generate_timestamp
from identity_validator.utils.exceptions import ExcelExportError
from .validation_record import ValidationRecord

# Initialize module logger
logger = get_logger(__name__)


class ExcelExporter:
    """
    Exports validation records to Excel format.

    Attributes:
        output_dir: Directory for output files
        sheet_name: Name of the summary sheet
        include_fields: Whether to add a sheet listing every extracted field

    Example:
        >>> exporter = ExcelExporter()
        >>> filepath = exporter.export(records, "validation.xlsx")
    """

    COLUMNS = [
        ('Template', 'notation'),
        ('Input', 'lines'),
        ('Extracted', 'extracted'),
        ('Valid', 'is_valid'),
        ('Errors', 'errors'),
        ('Timestamp', 'timestamp'),
    ]

    FIELD_COLUMNS = ['Row', 'Template', 'Field', 'Kind', 'Value']

    def __init__(self, output_dir: Optional[str] = None) -> None:
        """Initialize the Excel exporter with configuration."""
        self.output_dir = Path(output_dir or get_config("paths.output_dir", "outputs"))
        self.sheet_name = get_config("output.excel.sheet_name", "Validation Results")
        self.include_fields = get_config("output.excel.include_fields", True)

        logger.debug(f"ExcelExporter initialized (output_dir: {self.output_dir})")

    def export(
        self,
        records: List[ValidationRecord],
        filename: Optional[str] = None,
        output_dir: Optional[str] = None
    ) -> str:
        """
        Export validation records to an Excel file.

        Args:
            records: Records to export.
            filename: Output filename. If None, auto-generated.
            output_dir: Output directory. If None, uses configured dir.

        Returns:
            Path to the created Excel file.

        Raises:
            ExcelExportError: If export fails.
        """
        if not records:
            raise ExcelExportError("No records", "No records to export")

        out_dir = ensure_directory(Path(output_dir) if output_dir else self.output_dir)
        filepath = out_dir / (filename or self.get_default_filename())

        try:
            workbook = openpyxl.Workbook()
            self._create_summary_sheet(workbook, records)

            if self.include_fields:
                self._create_fields_sheet(workbook, records)

            workbook.save(filepath)
        except (OSError, ValueError, IllegalCharacterError) as e:
            logger.error(f"Excel export failed: {e}")
            raise ExcelExportError(str(filepath), str(e))

        logger.info(f"Excel file saved: {filepath} ({len(records)} records)")
        return str(filepath)

    def _create_summary_sheet(self, workbook, records: List[ValidationRecord]) -> None:
        """Create the main sheet with one row per record."""
        sheet = workbook.active
        sheet.title = self.sheet_name

        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
        thin_border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )

        for col, (header_name, _) in enumerate(self.COLUMNS, 1):
            cell = sheet.cell(row=1, column=col, value=header_name)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = Alignment(horizontal="center", vertical="center")
            cell.border = thin_border

        for row_num, record in enumerate(records, 2):
            for col, (_, attribute) in enumerate(self.COLUMNS, 1):
                value = getattr(record, attribute)
                if isinstance(value, list):
                    value = "; ".join(value)
                elif value is None:
                    value = ''
                cell = sheet.cell(row=row_num, column=col, value=value)
                cell.border = thin_border

        for col, (header_name, _) in enumerate(self.COLUMNS, 1):
            max_length = len(header_name)
            for row in range(2, len(records) + 2):
                cell_value = sheet.cell(row=row, column=col).value
                if cell_value not in (None, ''):
                    max_length = max(max_length, len(str(cell_value)))
            sheet.column_dimensions[get_column_letter(col)].width = min(max_length + 2, 60)

        sheet.freeze_panes = 'A2'

    def _create_fields_sheet(self, workbook, records: List[ValidationRecord]) -> None:
        """Create a sheet listing every extracted field of every record."""
        sheet = workbook.create_sheet(title="Fields")

        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(start_color="548235", end_color="548235", fill_type="solid")

        for col, header in enumerate(self.FIELD_COLUMNS, 1):
            cell = sheet.cell(row=1, column=col, value=header)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = Alignment(horizontal="center")

        row_num = 2
        for record_index, record in enumerate(records, 1):
            if record.document is None:
                continue
            for public_field in record.document:
                values = [
                    record_index,
                    record.notation,
                    public_field.name,
                    public_field.kind.value,
                    public_field.value,
                ]
                for col, value in enumerate(values, 1):
                    sheet.cell(row=row_num, column=col, value=value)
                row_num += 1

        for col in range(1, len(self.FIELD_COLUMNS) + 1):
            sheet.column_dimensions[get_column_letter(col)].width = 24

    def get_default_filename(self) -> str:
        """Generate a default filename with timestamp."""
        pattern = get_config(
            "output.excel.filename_pattern",
            "identity_validation_{timestamp}.xlsx"
        )
        return pattern.format(timestamp=generate_timestamp())
