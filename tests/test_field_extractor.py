import pytest

from identity_validator.extraction import FieldExtractor, normalize_lines
from identity_validator.template_model import FieldKind, Template, TemplateStore
from identity_validator.utils.exceptions import (
    ConfigurationError,
    MalformedInputError,
    MalformedTemplateError,
    TemplateNotLoadedError,
)

from conftest import TD1_LINE1, TD1_LINE2, TD1_LINE3, TD3_LINE1, TD3_LINE2


def make_template(structure, line_length=10, separator="<"):
    return Template.from_dict(
        {
            "meta": {"separator": separator, "line_length": line_length},
            "structure": structure,
        },
        notation="XX.t",
    )


def test_passport_fields(passport_mrz):
    template = TemplateStore().load_template("UTO.p")
    raw = FieldExtractor().extract(template, normalize_lines(passport_mrz))
    values = {f.name: f.value for f in raw}

    assert values["document_type"] == "P"
    assert values["issuing_country"] == "UTO"
    assert values["surname"] == "ERIKSSON"
    assert values["name_separator"] == "<<"
    assert values["given_names"] == "ANNA<MARIA" + "<" * 19
    assert values["document_number"] == "L898902C3"
    assert values["document_number_check"] == "6"
    assert values["birth_date"] == "740812"
    assert values["sex"] == "F"
    assert values["expiry_date"] == "120415"
    assert values["personal_number"] == "ZE184226B<<<<<"
    assert values["composite_check"] == "0"


def test_raw_fields_keep_template_attributes(passport_mrz):
    template = TemplateStore().load_template("UTO.p")
    raw = FieldExtractor().extract(template, normalize_lines(passport_mrz))

    number = raw.get("document_number")
    assert number.length == 9
    assert number.has_checksum is True
    assert number.position == 45

    check = raw.get("document_number_check")
    assert check.kind is FieldKind.CHECKSUM
    assert check.checksum_for == "document_number"
    assert raw.find_checksum_for("document_number") is check


def test_three_line_card_uses_current_line_for_wildcards(id_card_mrz):
    template = TemplateStore().load_template("CH.id")
    raw = FieldExtractor().extract(template, normalize_lines(id_card_mrz))

    assert raw.get("line_filler").value == "<" * 15
    assert raw.get("optional_data").value == "<" * 12
    assert raw.get("nationality").value == "CHE"
    assert raw.get("surname").value == "MUSTER"
    assert raw.get("given_names").value == "HANS<PETER" + "<" * 12


def test_fixed_lengths_round_trip():
    structure = [
        {"kind": "field", "name": "code", "length": 2},
        {"kind": "separator", "name": "gap", "count": 1},
        {"kind": "field", "name": "number", "length": 4},
        {"kind": "line_break"},
        {"kind": "field", "name": "date", "length": 6},
    ]
    values = {"code": "ID", "gap": "<", "number": "1234", "date": "991231"}
    line = "ID<1234|991231"

    raw = FieldExtractor().extract(make_template(structure), line)

    assert [(f.name, f.value) for f in raw] == list(values.items())


def test_line_break_consumes_one_character():
    structure = [
        {"kind": "field", "name": "a", "length": 2},
        {"kind": "line_break"},
        {"kind": "field", "name": "b", "length": 2},
    ]
    raw = FieldExtractor().extract(make_template(structure), "AB|CD")

    assert raw.get("b").value == "CD"
    assert raw.get("b").position == 3


def test_wildcard_consumes_rest_of_line():
    structure = [
        {"kind": "field", "name": "head", "length": 3},
        {"kind": "field", "name": "rest", "length": "*"},
    ]
    raw = FieldExtractor().extract(make_template(structure, line_length=8), "ABCDEFGHXYZ")

    assert raw.get("rest").value == "DEFGH"


def test_name_wildcard_stops_at_separator():
    structure = [
        {"kind": "name", "name": "surname", "length": "*"},
        {"kind": "separator", "name": "gap", "count": 2},
        {"kind": "field", "name": "given", "length": "*"},
    ]
    raw = FieldExtractor().extract(make_template(structure), "DOE<<JOHN<")

    assert raw.get("surname").value == "DOE"
    assert raw.get("given").value == "JOHN<"


def test_name_wildcard_separator_is_case_insensitive():
    structure = [{"kind": "name", "name": "surname", "length": "*"}]
    raw = FieldExtractor().extract(make_template(structure, separator="X"), "ABCxDEF")

    assert raw.get("surname").value == "ABC"


def test_missing_separator_raises_by_default():
    structure = [
        {"kind": "name", "name": "surname", "length": "*"},
        {"kind": "field", "name": "rest", "length": "*"},
    ]

    with pytest.raises(MalformedInputError) as excinfo:
        FieldExtractor().extract(make_template(structure), "ABCDEFGHIJ")

    assert excinfo.value.details["field"] == "surname"
    assert excinfo.value.details["position"] == 0


def test_missing_separator_clamps_to_end_of_line():
    structure = [
        {"kind": "name", "name": "surname", "length": "*"},
        {"kind": "field", "name": "rest", "length": "*"},
    ]
    extractor = FieldExtractor(missing_separator_policy="clamp")

    raw = extractor.extract(make_template(structure), "ABCDEFGHIJ")

    assert raw.get("surname").value == "ABCDEFGHIJ"
    assert raw.get("rest").value == ""


def test_unknown_policy_is_rejected():
    with pytest.raises(ConfigurationError):
        FieldExtractor(missing_separator_policy="guess")


def test_field_without_length_or_count_is_malformed():
    structure = [
        {"kind": "field", "name": "a", "length": 2},
        {"kind": "field", "name": "b"},
    ]

    with pytest.raises(MalformedTemplateError) as excinfo:
        FieldExtractor().extract(make_template(structure), "ABCD")

    assert excinfo.value.details["field"] == "b"


@pytest.mark.parametrize("length", ["abc", 0, -3])
def test_unusable_length_is_malformed(length):
    structure = [{"kind": "field", "name": "a", "length": length}]

    with pytest.raises(MalformedTemplateError):
        FieldExtractor().extract(make_template(structure), "ABCD")


def test_numeric_string_length_is_accepted():
    structure = [{"kind": "field", "name": "a", "length": "3"}]
    raw = FieldExtractor().extract(make_template(structure), "ABCD")

    assert raw.get("a").value == "ABC"


def test_short_input_truncates_values():
    structure = [
        {"kind": "field", "name": "a", "length": 3},
        {"kind": "field", "name": "b", "length": 3},
    ]
    raw = FieldExtractor().extract(make_template(structure), "ABCD")

    assert raw.get("a").value == "ABC"
    assert raw.get("b").value == "D"


def test_requires_template():
    with pytest.raises(TemplateNotLoadedError):
        FieldExtractor().extract(None, "ABC")


def test_td1_lines_have_expected_lengths():
    assert len(TD1_LINE1) == len(TD1_LINE2) == len(TD1_LINE3) == 30
    assert len(TD3_LINE1) == len(TD3_LINE2) == 44
