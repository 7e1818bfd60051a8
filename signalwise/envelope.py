"""
The envelope contract shared by every command and command response.

A concrete envelope is a frozen msgspec `Struct` that declares

- `__type__`: its namespaced type tag, e.g. "devops.commands:changeLogLevel"
- `__json_fields__`: struct attribute -> `FieldDefinition`, in emission order
- optionally `__schema_versions__`, the schema versions it supports

```py
class ChangeLogLevel(Command, frozen=True, kw_only=True):
    __type__ = "devops.commands:changeLogLevel"
    __category__ = Category.MODIFY
    __json_fields__ = {"logger_config": FieldDefinition.of("loggerConfig")}

    logger_config: LoggerConfig
```
"""

from enum import StrEnum
from functools import cache
from types import MappingProxyType
from typing import Any, ClassVar, Final, Mapping, Self

import msgspec
from msgspec import Struct, field
from msgspec.structs import FieldInfo, fields, replace

from ._itypes import JsonObject, RawObject
from .deserializer import TypeValidatingDeserializer
from .errors import (
    HttpStatusOutOfRangeError,
    InvalidFieldValueError,
    InvalidHttpStatusError,
    MissingRequiredFieldError,
    UnsupportedSchemaVersionError,
)
from .headers import Headers
from .schema import (
    ALL_SCHEMA_VERSIONS,
    FieldDefinition,
    FieldMarker,
    FieldPredicate,
    SchemaVersion,
    is_visible,
    not_hidden,
)
from .typetag import STATUS_KEY, TYPE_KEY, name_of

MIN_HTTP_STATUS: Final[int] = 100
MAX_HTTP_STATUS: Final[int] = 599

STATUS_FIELD: Final[FieldDefinition] = FieldDefinition.of(
    STATUS_KEY, FieldMarker.REGULAR
)


class Category(StrEnum):
    QUERY = "query"
    MODIFY = "modify"
    DELETE = "delete"


@cache
def _struct_fields(cls: type[Struct]) -> tuple[FieldInfo, ...]:
    return fields(cls)


@cache
def _required_fields(cls: type[Struct]) -> frozenset[str]:
    return frozenset(info.name for info in _struct_fields(cls) if info.required)


def read_field(raw: RawObject, definition: FieldDefinition, annotation: Any) -> Any:
    value = raw[definition.key]
    try:
        return msgspec.convert(value, type=annotation)
    except msgspec.ValidationError as exc:
        raise InvalidFieldValueError(definition.key, value, str(exc)) from exc


def require_field(
    raw: RawObject, definition: FieldDefinition, annotation: Any, type_tag: str
) -> Any:
    if definition.key not in raw:
        raise MissingRequiredFieldError(definition.key, type_tag)
    return read_field(raw, definition, annotation)


def validate_http_status(
    status: Any, allowed: frozenset[int] | None, type_tag: str
) -> int:
    if isinstance(status, bool) or not isinstance(status, int):
        raise HttpStatusOutOfRangeError(status)
    if not MIN_HTTP_STATUS <= status <= MAX_HTTP_STATUS:
        raise HttpStatusOutOfRangeError(status)
    if allowed is not None and status not in allowed:
        raise InvalidHttpStatusError(status, allowed, type_tag)
    return status


class Envelope(Struct, frozen=True, kw_only=True):
    __type__: ClassVar[str]
    __schema_versions__: ClassVar[frozenset[SchemaVersion]] = ALL_SCHEMA_VERSIONS
    __json_fields__: ClassVar[Mapping[str, FieldDefinition]] = MappingProxyType({})

    headers: Headers = field(default_factory=Headers)

    @property
    def type_tag(self) -> str:
        return self.__type__

    @property
    def name(self) -> str:
        return name_of(self.__type__)

    @property
    def manifest(self) -> str:
        return self.__type__

    @property
    def supported_schema_versions(self) -> frozenset[SchemaVersion]:
        return self.__schema_versions__

    @property
    def latest_schema_version(self) -> SchemaVersion:
        return max(self.__schema_versions__)

    @property
    def implemented_schema_version(self) -> SchemaVersion:
        "schema version requested by headers, falls back to the latest supported one"
        if (version := self.headers.schema_version) is None:
            return self.latest_schema_version
        return version

    def implements_schema_version(self, version: SchemaVersion) -> bool:
        return version in self.__schema_versions__

    def set_headers(self, headers: Headers) -> Self:
        return replace(self, headers=headers)

    @classmethod
    def check_schema_version(cls, version: SchemaVersion) -> None:
        if version not in cls.__schema_versions__:
            raise UnsupportedSchemaVersionError(
                version, cls.__schema_versions__, cls.__type__
            )

    def to_json(
        self,
        version: SchemaVersion | None = None,
        predicate: FieldPredicate | None = None,
    ) -> JsonObject:
        """
        serialize this envelope into a json object.

        version: defaults to the schema version of headers, or the latest supported one.
        predicate: defaults to `not_hidden`.
        """
        if version is None:
            version = self.implemented_schema_version
        self.check_schema_version(version)

        json_obj = self._json_head()
        self._append_payload(json_obj, version, predicate or not_hidden)
        return json_obj

    def to_json_string(
        self,
        version: SchemaVersion | None = None,
        predicate: FieldPredicate | None = None,
    ) -> str:
        return msgspec.json.encode(self.to_json(version, predicate)).decode()

    def _json_head(self) -> JsonObject:
        return {TYPE_KEY: self.__type__}

    def _append_payload(
        self, json_obj: JsonObject, version: SchemaVersion, predicate: FieldPredicate
    ) -> None:
        required = _required_fields(type(self))
        for attr, definition in self.__json_fields__.items():
            if not is_visible(definition, version, predicate):
                continue
            value = getattr(self, attr)
            # optional fields left at None are omitted, required ones are emitted as null
            if value is None and attr not in required:
                continue
            json_obj[definition.key] = msgspec.to_builtins(value)

    @classmethod
    def from_json(cls, raw: RawObject, headers: Headers | None = None) -> Self:
        if headers is None:
            headers = Headers()
        if (version := headers.schema_version) is not None:
            cls.check_schema_version(version)

        deserializer = TypeValidatingDeserializer(cls.__type__, raw)
        return deserializer.deserialize(
            lambda: cls(headers=headers, **cls._payload_kwargs(raw))
        )

    @classmethod
    def _payload_kwargs(cls, raw: RawObject) -> dict[str, Any]:
        kwargs: dict[str, Any] = {}
        for info in _struct_fields(cls):
            definition = cls.__json_fields__.get(info.name)
            if definition is None:
                continue
            if definition.key in raw:
                kwargs[info.name] = read_field(raw, definition, info.type)
            elif info.required:
                raise MissingRequiredFieldError(definition.key, cls.__type__)
        return kwargs


class Command(Envelope, frozen=True, kw_only=True):
    __category__: ClassVar[Category]

    @property
    def category(self) -> Category:
        return self.__category__


class CommandResponse(Envelope, frozen=True, kw_only=True):
    __allowed_statuses__: ClassVar[frozenset[int] | None] = None

    status: int = 200

    def __post_init__(self) -> None:
        validate_http_status(self.status, self.__allowed_statuses__, self.__type__)

    def _json_head(self) -> JsonObject:
        return {TYPE_KEY: self.__type__, STATUS_KEY: self.status}

    @classmethod
    def _payload_kwargs(cls, raw: RawObject) -> dict[str, Any]:
        kwargs = super()._payload_kwargs(raw)
        kwargs["status"] = require_field(raw, STATUS_FIELD, int, cls.__type__)
        return kwargs

    def entity(
        self,
        version: SchemaVersion | None = None,
        predicate: FieldPredicate | None = None,
    ) -> JsonObject:
        "the payload of this response, without type and status"
        json_obj = self.to_json(version, predicate)
        del json_obj[TYPE_KEY], json_obj[STATUS_KEY]
        return json_obj

    def set_entity(self, entity: RawObject) -> Self:
        raw = {**entity, TYPE_KEY: self.__type__, STATUS_KEY: self.status}
        return type(self).from_json(raw, self.headers)
