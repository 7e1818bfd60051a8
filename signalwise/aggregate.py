"""
Combine responses of many service instances into one response.

```py
aggregated = AggregatedResponse.of(
    [resp_a0, resp_a1, resp_unnamed],
    responses_type=RetrieveLoggerConfigResponse.__type__,
)
aggregated.to_json()["responses"]
# {"things": {"0": {...}, "1": {...}}, "empty": {"-1": {...}}}
```

NOTE: two responses with the same (service name, instance) key end up on the same
path of the nested json object, the later one overwrites the earlier one.

NOTE: the nested json carries no headers of its own, parsed responses get the
headers of the aggregated response and lose whatever headers they were built with.
"""

from typing import TYPE_CHECKING, Any, ClassVar, Final, Iterable, Self

from loguru import logger

from ._itypes import JsonObject, RawObject
from .deserializer import TypeValidatingDeserializer
from .envelope import STATUS_FIELD, CommandResponse, require_field
from .errors import InvalidFieldValueError, UnknownTypeError, UnsupportedMutationError
from .headers import Headers
from .schema import FieldDefinition, FieldPredicate, SchemaVersion, is_visible, not_hidden
from .typetag import validate_type_tag

if TYPE_CHECKING:
    from .registry import TypeRegistry

EMPTY_SERVICE_KEY: Final[str] = "empty"
MISSING_INSTANCE_KEY: Final[str] = "-1"

RESPONSES_TYPE_FIELD: Final[FieldDefinition] = FieldDefinition.of("responsesType")
RESPONSES_FIELD: Final[FieldDefinition] = FieldDefinition.of("responses")


def service_name_of(response: Any) -> str | None:
    return getattr(response, "service_name", None)


def instance_of(response: Any) -> int | None:
    return getattr(response, "instance", None)


def response_key(response: Any) -> tuple[str, str]:
    service_name = service_name_of(response)
    instance = instance_of(response)
    return (
        service_name if service_name is not None else EMPTY_SERVICE_KEY,
        str(instance) if instance is not None else MISSING_INSTANCE_KEY,
    )


class AggregatedResponse(CommandResponse, frozen=True, kw_only=True):
    __type__ = "common.responses:aggregatedResponse"
    __recursive__: ClassVar[bool] = True

    responses_type: str
    responses: tuple[CommandResponse, ...] = ()

    def __post_init__(self) -> None:
        super().__post_init__()
        validate_type_tag(self.responses_type)

    @classmethod
    def of(
        cls,
        responses: Iterable[CommandResponse],
        responses_type: str,
        headers: Headers | None = None,
        status: int = 200,
    ) -> Self:
        return cls(
            responses=tuple(responses),
            responses_type=responses_type,
            headers=headers if headers is not None else Headers(),
            status=status,
        )

    @property
    def entries(self) -> tuple[tuple[str | None, int | None, CommandResponse], ...]:
        return tuple(
            (service_name_of(r), instance_of(r), r) for r in self.responses
        )

    def entity(
        self,
        version: SchemaVersion | None = None,
        predicate: FieldPredicate | None = None,
    ) -> JsonObject:
        "the nested `{service name: {instance: response json}}` object"
        nested: dict[str, JsonObject] = {}
        for response in self.responses:
            service_key, instance_key = response_key(response)
            instances = nested.setdefault(service_key, {})
            if instance_key in instances:
                logger.debug(
                    f"{self.responses_type} response at {service_key}/{instance_key} is overwritten"
                )
            instances[instance_key] = response.to_json(version, predicate)
        return nested

    def set_entity(self, entity: RawObject) -> Self:
        raise UnsupportedMutationError("set_entity", self.__class__.__name__)

    def to_json(
        self,
        version: SchemaVersion | None = None,
        predicate: FieldPredicate | None = None,
    ) -> JsonObject:
        """
        without an explicit version every response is serialized at its own
        implemented schema version, not at the one of the aggregated response.
        """
        json_obj = super().to_json(version, predicate)
        own_version = version if version is not None else self.implemented_schema_version
        if is_visible(RESPONSES_FIELD, own_version, predicate or not_hidden):
            json_obj[RESPONSES_FIELD.key] = self.entity(version, predicate)
        return json_obj

    def _append_payload(
        self, json_obj: JsonObject, version: SchemaVersion, predicate: FieldPredicate
    ) -> None:
        if is_visible(RESPONSES_TYPE_FIELD, version, predicate):
            json_obj[RESPONSES_TYPE_FIELD.key] = self.responses_type

    @classmethod
    def from_json(
        cls,
        raw: RawObject,
        headers: Headers | None = None,
        registry: "TypeRegistry[Any] | None" = None,
    ) -> Self:
        if headers is None:
            headers = Headers()
        if (version := headers.schema_version) is not None:
            cls.check_schema_version(version)

        deserializer = TypeValidatingDeserializer(cls.__type__, raw)
        return deserializer.deserialize(
            lambda: cls._from_nested(raw, headers, registry)
        )

    @classmethod
    def _from_nested(
        cls,
        raw: RawObject,
        headers: Headers,
        registry: "TypeRegistry[Any] | None",
    ) -> Self:
        responses_type = require_field(raw, RESPONSES_TYPE_FIELD, str, cls.__type__)
        status = require_field(raw, STATUS_FIELD, int, cls.__type__)
        nested = raw.get(RESPONSES_FIELD.key, {})
        if not isinstance(nested, dict):
            raise InvalidFieldValueError(RESPONSES_FIELD.key, nested, "expected an object")

        if registry is None:
            raise UnknownTypeError(responses_type, "an unset registry")
        parse = registry.get(responses_type)

        responses: list[CommandResponse] = []
        for service_key, instances in nested.items():
            if not isinstance(instances, dict):
                raise InvalidFieldValueError(service_key, instances, "expected an object")
            for instance_key, leaf in instances.items():
                if not isinstance(leaf, dict):
                    raise InvalidFieldValueError(instance_key, leaf, "expected an object")
                responses.append(parse(leaf, headers))

        return cls(
            responses=tuple(responses),
            responses_type=responses_type,
            headers=headers,
            status=status,
        )
