import pytest

from identity_validator.template_model import (
    ChecksumField,
    FieldKind,
    LineBreak,
    NameField,
    PlainField,
    SeparatorField,
    Template,
    TemplateStore,
)
from identity_validator.utils.exceptions import MalformedTemplateError, TemplateNotFoundError


def test_load_bundled_passport_template():
    template = TemplateStore().load_template("UTO.p")

    assert template.notation == "UTO.p"
    assert template.type_code == "P"
    assert template.country_code == "UTO"
    assert template.separator == "<"
    assert template.line_length == 44
    assert template.line_count == 2


def test_structure_entries_are_tagged_variants():
    template = TemplateStore().load_template("UTO.p")
    kinds = [type(entry) for entry in template.structure]

    assert kinds[:7] == [
        PlainField, SeparatorField, PlainField, NameField,
        SeparatorField, PlainField, LineBreak,
    ]
    check = template.get_field("birth_date_check")
    assert isinstance(check, ChecksumField)
    assert check.kind is FieldKind.CHECKSUM
    assert check.checksum_for == "birth_date"
    assert template.get_field("birth_date").has_checksum is True


def test_identifier_is_case_insensitive():
    template = TemplateStore().load_template("uto.P")
    assert template.notation == "UTO.p"


@pytest.mark.parametrize("identifier", ["XX.id", "UTO.visa", "passport", ".p", "UTO.", ""])
def test_unknown_identifier_raises(identifier):
    with pytest.raises(TemplateNotFoundError):
        TemplateStore().load_template(identifier)


def test_list_supported_contains_bundled_templates():
    supported = TemplateStore().list_supported()
    notations = [s.notation for s in supported]

    assert notations == ["CH.id", "D.id", "UTO.p"]

    swiss = supported[0].to_dict()
    assert swiss["type"] == {"code": "ID", "description": "Identitätskarte"}
    assert swiss["country"]["code"] == "CHE"
    assert swiss["country"]["international_name"] == "Switzerland"


def test_list_supported_includes_loaded_notation(template_store):
    template_store("XX.t", [{"kind": "field", "name": "a", "length": 3}])
    store = TemplateStore(template_store.root)

    template = store.load_template("XX.t")

    assert template.notation in [s.notation for s in store.list_supported()]


def test_missing_template_directory_lists_nothing(tmp_path):
    assert TemplateStore(tmp_path / "missing").list_supported() == []


def test_template_path_from_configuration(tmp_path, template_store):
    from config import ConfigurationManager

    template_store("XX.t", [{"kind": "field", "name": "a", "length": 3}])
    settings = tmp_path / "settings.yaml"
    settings.write_text(f"paths:\n  templates: {template_store.root}\n", encoding="utf-8")
    ConfigurationManager(str(settings))

    store = TemplateStore()

    assert store.template_path == template_store.root
    assert store.load_template("XX.t").notation == "XX.t"


def test_field_without_length_loads_lazily(template_store):
    template_store("XX.t", [{"kind": "field", "name": "a"}])

    template = TemplateStore(template_store.root).load_template("XX.t")

    assert template.get_field("a").declared_length is None


def test_invalid_yaml_is_malformed(template_store):
    template_store("XX.t", None, raw="meta: [unclosed\n")

    with pytest.raises(MalformedTemplateError):
        TemplateStore(template_store.root).load_template("XX.t")


def test_unknown_kind_is_malformed(template_store):
    template_store("XX.t", [{"kind": "barcode", "name": "a", "length": 3}])

    with pytest.raises(MalformedTemplateError) as excinfo:
        TemplateStore(template_store.root).load_template("XX.t")

    assert excinfo.value.details["field"] == "a"


def test_missing_structure_is_malformed():
    with pytest.raises(MalformedTemplateError):
        Template.from_dict({"meta": {"line_length": 10}}, notation="XX.t")


@pytest.mark.parametrize("meta", [
    {"separator": "<"},
    {"separator": "<", "line_length": 0},
    {"separator": "<", "line_length": -4},
    {"separator": "", "line_length": 10},
])
def test_unusable_line_metadata_is_malformed(meta):
    with pytest.raises(MalformedTemplateError):
        Template.from_dict({"meta": meta, "structure": []}, notation="XX.t")


def test_count_is_used_when_length_is_absent():
    template = Template.from_dict({
        "meta": {"separator": "<", "line_length": 5},
        "structure": [{"kind": "separator", "name": "filler", "count": 2}],
    })

    assert template.fields[0].declared_length == 2


def test_to_dict_round_trips_through_from_dict():
    template = TemplateStore().load_template("CH.id")
    rebuilt = Template.from_dict(template.to_dict(), notation=template.notation)

    assert rebuilt == template
