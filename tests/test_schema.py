from signalwise.schema import (
    ALL_SCHEMA_VERSIONS,
    FieldDefinition,
    FieldMarker,
    SchemaVersion,
    accept_all,
    all_of,
    is_visible,
    marked_as,
    not_hidden,
    regular_or_special,
)

REGULAR = FieldDefinition.of("regular")
SPECIAL = FieldDefinition.of("special", FieldMarker.SPECIAL)
HIDDEN = FieldDefinition.of("hidden", FieldMarker.HIDDEN)
V2_ONLY = FieldDefinition.of("policyId", SchemaVersion.V_2)
V1_ONLY = FieldDefinition.of("acl", SchemaVersion.V_1)


def test_field_definition_defaults():
    assert REGULAR.versions == ALL_SCHEMA_VERSIONS
    assert REGULAR.markers == {FieldMarker.REGULAR}


def test_field_definition_mixes_markers_and_versions():
    definition = FieldDefinition.of("a", FieldMarker.HIDDEN, SchemaVersion.V_2)
    assert definition.versions == {SchemaVersion.V_2}
    assert definition.markers == {FieldMarker.HIDDEN}


def test_version_gating():
    assert not is_visible(V2_ONLY, SchemaVersion.V_1, accept_all)
    assert is_visible(V2_ONLY, SchemaVersion.V_2, accept_all)
    assert is_visible(V1_ONLY, SchemaVersion.V_1, accept_all)
    assert not is_visible(V1_ONLY, SchemaVersion.V_2, accept_all)


def test_stock_predicates():
    assert accept_all(HIDDEN)
    assert not not_hidden(HIDDEN)
    assert not_hidden(SPECIAL)
    assert regular_or_special(REGULAR)
    assert regular_or_special(SPECIAL)
    assert not regular_or_special(HIDDEN)
    assert marked_as(FieldMarker.SPECIAL)(SPECIAL)


def test_predicate_rejects_even_when_version_matches():
    assert not is_visible(HIDDEN, SchemaVersion.V_2, not_hidden)


def test_all_of_is_order_insensitive():
    left = all_of(not_hidden, marked_as(FieldMarker.SPECIAL))
    right = all_of(marked_as(FieldMarker.SPECIAL), not_hidden)

    for definition in (REGULAR, SPECIAL, HIDDEN):
        assert left(definition) == right(definition)
    assert left(SPECIAL)
    assert not left(REGULAR)


def test_empty_all_of_accepts():
    assert all_of()(HIDDEN)


def test_schema_version():
    assert SchemaVersion.latest() is SchemaVersion.V_2
    assert SchemaVersion.for_int(1) is SchemaVersion.V_1
    assert SchemaVersion.for_int(3) is None
    assert SchemaVersion.V_1 < SchemaVersion.V_2
    assert str(SchemaVersion.V_2) == "v2"
