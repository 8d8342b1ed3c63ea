import json

import openpyxl
import pytest

from identity_validator import IdentityValidator
from identity_validator.output_handler import ExcelExporter, OutputHandler, ValidationRecord
from identity_validator.utils.exceptions import ExcelExportError


@pytest.fixture
def records(passport_mrz):
    validator = IdentityValidator("UTO.p")
    validator.add_machine_readable_lines(passport_mrz)

    valid = ValidationRecord(
        lines=passport_mrz,
        notation="UTO.p",
        document=validator.get_document(),
        is_valid=validator.validate_machine_readable_lines(),
    )
    failed = ValidationRecord(lines="garbage", notation="UTO.p")
    failed.add_error("Malformed input at field 'surname'")
    return [valid, failed]


def test_json_report(tmp_path, records):
    handler = OutputHandler(json_enabled=True, excel_enabled=False)
    target = tmp_path / "reports" / "report.json"

    info = handler.save(records, json_path=str(target))

    assert info == {"json_path": str(target), "excel_path": None}
    payload = json.loads(target.read_text(encoding="utf-8"))
    assert payload["total"] == 2
    assert payload["valid"] == 1
    assert payload["records"][0]["fields"]["surname"] == "ERIKSSON"
    assert payload["records"][1]["fields"] == {}
    assert payload["records"][1]["is_valid"] is None


def test_excel_report(tmp_path, records):
    handler = OutputHandler(json_enabled=False, excel_enabled=True)
    target = tmp_path / "report.xlsx"

    info = handler.save(records, excel_path=str(target))

    assert info["excel_path"] == str(target)
    workbook = openpyxl.load_workbook(target)
    assert workbook.sheetnames == ["Validation Results", "Fields"]

    summary = workbook["Validation Results"]
    assert summary.cell(row=1, column=1).value == "Template"
    assert summary.cell(row=2, column=4).value is True
    assert summary.cell(row=3, column=5).value == "Malformed input at field 'surname'"

    fields = workbook["Fields"]
    names = [fields.cell(row=row, column=3).value for row in range(2, fields.max_row + 1)]
    assert "document_number" in names
    assert "name_separator" not in names


def test_excel_export_requires_records(tmp_path):
    with pytest.raises(ExcelExportError):
        ExcelExporter(output_dir=str(tmp_path)).export([])


def test_disabled_outputs_write_nothing(tmp_path, records):
    handler = OutputHandler(json_enabled=False, excel_enabled=False)

    info = handler.save(records, json_path=str(tmp_path / "r.json"), excel_path=str(tmp_path / "r.xlsx"))

    assert info == {"json_path": None, "excel_path": None}
    assert list(tmp_path.iterdir()) == []


def test_excel_rejects_control_characters(tmp_path):
    record = ValidationRecord(lines="P<UTO\x0cERIKSSON", notation="UTO.p")
    handler = OutputHandler(json_enabled=False, excel_enabled=True)

    with pytest.raises(ExcelExportError):
        handler.save([record], excel_path=str(tmp_path / "report.xlsx"))
