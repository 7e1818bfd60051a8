import pytest

from signalwise import (
    Command,
    CommandResponse,
    Headers,
    RegistryBuilder,
    SchemaVersion,
    TypeRegistry,
    accept_all,
)
from signalwise.errors import (
    DuplicateTypeError,
    InvalidFieldValueError,
    MalformedTypeTagError,
    MissingRequiredFieldError,
    RegistryFrozenError,
    TypeMismatchError,
    UnknownTypeError,
)
from tests.messages import (
    DeleteThing,
    ModifyAttribute,
    ModifyAttributeResponse,
    Ping,
    RetrieveAcl,
    RetrievePolicyId,
)


def test_parse_registered(
    thing_commands: TypeRegistry[Command], modify_attribute: ModifyAttribute
):
    parsed = thing_commands.parse(modify_attribute.to_json(), modify_attribute.headers)
    assert isinstance(parsed, ModifyAttribute)
    assert parsed == modify_attribute


def test_round_trip_at_every_supported_version(thing_commands: TypeRegistry[Command]):
    commands = [
        ModifyAttribute(thing_id="t:1", attribute="/a", value={"floor": 3}, revision=5),
        DeleteThing(thing_id="t:1"),
        RetrieveAcl(thing_id="t:1"),
        RetrievePolicyId(thing_id="t:1"),
    ]
    for command in commands:
        for version in command.supported_schema_versions:
            raw = command.to_json(version, accept_all)
            assert thing_commands.parse(raw, command.headers) == command


def test_unknown_type(thing_commands: TypeRegistry[Command]):
    with pytest.raises(UnknownTypeError):
        thing_commands.parse({"type": "things.commands:unknown"})


def test_missing_type(thing_commands: TypeRegistry[Command]):
    with pytest.raises(MissingRequiredFieldError):
        thing_commands.parse({"thingId": "t:1"})


def test_type_not_a_string(thing_commands: TypeRegistry[Command]):
    with pytest.raises(InvalidFieldValueError):
        thing_commands.parse({"type": 42})


def test_get_with_default(thing_commands: TypeRegistry[Command]):
    assert thing_commands.get("things.commands:unknown", None) is None
    assert callable(thing_commands.get(DeleteThing.__type__))
    assert DeleteThing.__type__ in thing_commands
    assert len(thing_commands) == 4


def test_parse_as_checks_type(thing_commands: TypeRegistry[Command]):
    raw = DeleteThing(thing_id="t:1").to_json()
    with pytest.raises(TypeMismatchError):
        thing_commands.parse_as(ModifyAttribute.__type__, raw)


def test_registry_is_read_only(thing_commands: TypeRegistry[Command]):
    with pytest.raises(TypeError):
        thing_commands.entries["things.commands:new"] = None  # type: ignore


def test_register_malformed_type():
    builder = RegistryBuilder[Command]()
    with pytest.raises(MalformedTypeTagError):
        builder(Ping)
    with pytest.raises(MalformedTypeTagError):
        builder.register("", DeleteThing.from_json)


def test_register_duplicate():
    builder = RegistryBuilder[Command]()
    builder(DeleteThing)
    with pytest.raises(DuplicateTypeError):
        builder(DeleteThing)


def test_builder_is_frozen_after_build():
    builder = RegistryBuilder[Command](name="frozen")
    builder(DeleteThing)
    registry = builder.build()

    assert builder.is_built
    assert builder.build() is registry
    with pytest.raises(RegistryFrozenError):
        builder(ModifyAttribute)
    assert ModifyAttribute.__type__ not in registry


def test_builder_as_decorator():
    builder = RegistryBuilder[Command]()
    assert builder(RetrieveAcl) is RetrieveAcl


def test_custom_resolver():
    builder = RegistryBuilder[tuple[str, Headers]](
        name="legacy", resolver=lambda raw: raw["command"]
    )
    builder.register("legacy:ping", lambda raw, headers: ("pong", headers))
    registry = builder.build()

    headers = Headers(version=SchemaVersion.V_1)
    assert registry.parse({"command": "legacy:ping"}, headers) == ("pong", headers)
    assert registry.parse({"command": "legacy:ping"}) == ("pong", Headers())


def test_merge(
    thing_commands: TypeRegistry[Command],
    thing_responses: TypeRegistry[CommandResponse],
):
    merged = thing_commands.merge(thing_responses)
    assert len(merged) == len(thing_commands) + len(thing_responses)
    assert merged.name == "thing-commands+thing-responses"

    response = ModifyAttributeResponse(thing_id="t:1", attribute="/a")
    assert merged.parse(response.to_json()) == response
    assert merged.parse(DeleteThing(thing_id="t:1").to_json()) == DeleteThing(
        thing_id="t:1"
    )


def test_merge_duplicate(thing_commands: TypeRegistry[Command]):
    with pytest.raises(DuplicateTypeError):
        thing_commands.merge(thing_commands)


def test_required_none_value_round_trips(thing_commands: TypeRegistry[Command]):
    command = ModifyAttribute(thing_id="t:1", attribute="/a", value=None)
    raw = command.to_json(SchemaVersion.V_2, accept_all)

    assert raw["value"] is None
    assert "policyId" not in raw
    assert thing_commands.parse(raw) == command
