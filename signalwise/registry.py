from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Iterator, Mapping, overload

from loguru import logger

from ._itypes import (
    MISSING,
    Maybe,
    ParseFn,
    RawObject,
    RecursiveParseFn,
    TypeResolver,
    is_provided,
)
from .errors import (
    DuplicateTypeError,
    InvalidFieldValueError,
    MissingRequiredFieldError,
    RegistryFrozenError,
    UnknownTypeError,
)
from .headers import Headers
from .typetag import TYPE_KEY, validate_type_tag


def type_field_resolver(raw: RawObject) -> str:
    "resolve the type tag of a raw envelope from its own `type` field"
    try:
        type_tag = raw[TYPE_KEY]
    except KeyError:
        raise MissingRequiredFieldError(TYPE_KEY)
    if not isinstance(type_tag, str):
        raise InvalidFieldValueError(TYPE_KEY, type_tag, "expected a string")
    return type_tag


@dataclass(frozen=True, slots=True, kw_only=True)
class RegistryEntry[E]:
    """
    recursive:
    whether the parse function receives the parsing registry as a third argument
    """

    type_tag: str
    parse: Callable[..., E]
    recursive: bool = False


class TypeRegistry[E]:
    """
    A read-only mapping from type tag to the function that rebuilds the envelope.

    built once by `RegistryBuilder.build`, lookups never mutate anything.
    """

    def __init__(
        self,
        entries: Mapping[str, RegistryEntry[E]],
        *,
        name: str = "registry",
        resolver: TypeResolver = type_field_resolver,
    ):
        self._entries: Mapping[str, RegistryEntry[E]] = MappingProxyType(dict(entries))
        self._name = name
        self._resolver = resolver

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self._name!r}, types={len(self)})"

    def __contains__(self, type_tag: object) -> bool:
        return type_tag in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def name(self) -> str:
        return self._name

    @property
    def entries(self) -> Mapping[str, RegistryEntry[E]]:
        return self._entries

    def resolve_type_tag(self, raw: RawObject) -> str:
        return self._resolver(raw)

    @overload
    def get(self, type_tag: str) -> ParseFn[E]: ...

    @overload
    def get[D](self, type_tag: str, default: D) -> ParseFn[E] | D: ...

    def get(self, type_tag: str, default: Maybe[Any] = MISSING) -> Any:
        try:
            entry = self._entries[type_tag]
        except KeyError:
            if is_provided(default):
                return default
            raise UnknownTypeError(type_tag, self._name)

        if not entry.recursive:
            return entry.parse

        def parse(raw: RawObject, headers: Headers) -> E:
            return entry.parse(raw, headers, self)

        return parse

    def parse(self, raw: RawObject, headers: Headers | None = None) -> E:
        return self.parse_as(self.resolve_type_tag(raw), raw, headers)

    def parse_as(
        self, type_tag: str, raw: RawObject, headers: Headers | None = None
    ) -> E:
        parse_fn = self.get(type_tag)
        return parse_fn(raw, headers if headers is not None else Headers())

    def merge(self, *others: "TypeRegistry[Any]", name: str | None = None) -> "TypeRegistry[Any]":
        """
        combine this registry with others into a new one,
        resolver of this registry is kept.
        """
        merged: dict[str, RegistryEntry[Any]] = dict(self._entries)
        for other in others:
            for type_tag, entry in other.entries.items():
                if type_tag in merged:
                    raise DuplicateTypeError(type_tag)
                merged[type_tag] = entry

        merged_name = name or "+".join([self._name, *(o.name for o in others)])
        logger.debug(f"merged {merged_name} with {len(merged)} types")
        return TypeRegistry(merged, name=merged_name, resolver=self._resolver)


class RegistryBuilder[E]:
    """
    Collects parse functions at start-up and builds one immutable `TypeRegistry`.

    Example
    ---

    ```py
    builder = RegistryBuilder[Command](name="devops-commands")

    @builder
    class ChangeLogLevel(Command, frozen=True, kw_only=True):
        __type__ = "devops.commands:changeLogLevel"
        ...

    builder.register("devops.commands:ping", parse_ping)
    registry = builder.build()
    ```
    """

    def __init__(
        self,
        *,
        name: str = "registry",
        resolver: TypeResolver = type_field_resolver,
    ):
        self._name = name
        self._resolver = resolver
        self._entries: dict[str, RegistryEntry[E]] = {}
        self._built: TypeRegistry[E] | None = None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self._name!r}, types={len(self._entries)})"

    def __call__[T](self, envelope_type: type[T]) -> type[T]:
        "register an envelope class by its `__type__` and `from_json`"
        type_tag = getattr(envelope_type, "__type__", None)
        parse = getattr(envelope_type, "from_json")
        if getattr(envelope_type, "__recursive__", False):
            self.register_recursive(type_tag, parse)  # type: ignore
        else:
            self.register(type_tag, parse)  # type: ignore
        return envelope_type

    @property
    def is_built(self) -> bool:
        return self._built is not None

    def _add(self, entry: RegistryEntry[E]) -> None:
        if self._built is not None:
            raise RegistryFrozenError(self._name)
        validate_type_tag(entry.type_tag)
        if entry.type_tag in self._entries:
            raise DuplicateTypeError(entry.type_tag)
        self._entries[entry.type_tag] = entry

    def register(self, type_tag: str, parse: ParseFn[E]) -> None:
        self._add(RegistryEntry(type_tag=type_tag, parse=parse))

    def register_recursive(self, type_tag: str, parse: RecursiveParseFn[E]) -> None:
        self._add(RegistryEntry(type_tag=type_tag, parse=parse, recursive=True))

    def build(self) -> TypeRegistry[E]:
        if self._built is None:
            self._built = TypeRegistry(
                self._entries, name=self._name, resolver=self._resolver
            )
            logger.debug(f"built {self._name} with {len(self._entries)} types")
        return self._built
