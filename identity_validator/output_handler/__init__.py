"""
Output Handler Module for the Identity Validator.

This module writes batch validation results:
    - JSON reports
    - Excel workbooks (openpyxl)
"""

from .handler import OutputHandler
from .excel_exporter import ExcelExporter
from .validation_record import ValidationRecord

__all__ = ['OutputHandler', 'ExcelExporter', 'ValidationRecord']
