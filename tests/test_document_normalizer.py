import json

from identity_validator.extraction import FieldExtractor, RawDocument, RawField, normalize_lines
from identity_validator.postprocessor import DocumentNormalizer
from identity_validator.template_model import FieldKind, TemplateStore


def test_separators_are_dropped_and_order_kept():
    raw = RawDocument(notation="XX.t", fields=[
        RawField(kind=FieldKind.NAME, name="surname", value="DOE", length="*"),
        RawField(kind=FieldKind.SEPARATOR, name="gap", value="<<", count=2),
        RawField(kind=FieldKind.FIELD, name="number", value="123", length=3, has_checksum=True),
        RawField(kind=FieldKind.CHECKSUM, name="number_check", value="5", length=1, checksum_for="number"),
    ])

    public = DocumentNormalizer().normalize(raw)

    assert public.notation == "XX.t"
    assert public.names == ["surname", "number", "number_check"]
    assert public.to_dict() == {"surname": "DOE", "number": "123", "number_check": "5"}


def test_internal_attributes_are_stripped():
    raw = RawDocument(fields=[
        RawField(kind=FieldKind.FIELD, name="number", value="123", length=3, has_checksum=True),
        RawField(kind=FieldKind.CHECKSUM, name="number_check", value="5", length=1, checksum_for="number"),
    ])

    public = DocumentNormalizer().normalize(raw)
    serialized = json.loads(public.to_json())

    assert serialized["fields"][0] == {"kind": "field", "name": "number", "value": "123"}
    assert serialized["fields"][1]["checksum_for"] == "number"
    for entry in serialized["fields"]:
        assert "length" not in entry
        assert "count" not in entry
        assert "has_checksum" not in entry


def test_passport_public_document(passport_mrz):
    template = TemplateStore().load_template("UTO.p")
    raw = FieldExtractor().extract(template, normalize_lines(passport_mrz))

    public = DocumentNormalizer().normalize(raw)

    assert "type_filler" not in public.names
    assert "name_separator" not in public.names
    assert public.get("surname") == "ERIKSSON"
    assert public.get("missing") is None
    assert len(public) == len(raw) - 2
