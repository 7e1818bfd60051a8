from types import MappingProxyType
from typing import Any, Final, Iterable, Iterator, Mapping

from .errors import InvalidHeaderValueError
from .schema import SchemaVersion

SCHEMA_VERSION_KEY: Final[str] = "version"
CORRELATION_ID_KEY: Final[str] = "correlation-id"


def _header_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, SchemaVersion):
        return str(value.value)
    return str(value)


class Headers(Mapping[str, str]):
    """
    An immutable, ordered carrier of message headers.

    keys are case-insensitive and stored lower-cased, values are stored as strings.
    every "mutator" returns a new `Headers`.

    ```py
    headers = Headers({"correlation-id": "abc"}).with_schema_version(SchemaVersion.V_1)
    headers.schema_version  # SchemaVersion.V_1
    ```
    """

    __slots__ = ("_data",)

    def __init__(
        self,
        items: Mapping[str, Any] | Iterable[tuple[str, Any]] = (),
        /,
        **kwargs: Any,
    ):
        merged = dict(items, **kwargs)
        self._data: Mapping[str, str] = MappingProxyType(
            {str(k).lower(): _header_value(v) for k, v in merged.items()}
        )

    def __getitem__(self, key: str) -> str:
        return self._data[key.lower()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __hash__(self) -> int:
        return hash(tuple(self._data.items()))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({dict(self._data)!r})"

    @property
    def schema_version(self) -> SchemaVersion | None:
        raw = self._data.get(SCHEMA_VERSION_KEY)
        if raw is None:
            return None
        try:
            value = int(raw)
        except ValueError:
            raise InvalidHeaderValueError(SCHEMA_VERSION_KEY, raw, "int")
        return SchemaVersion.for_int(value)

    @property
    def correlation_id(self) -> str | None:
        return self._data.get(CORRELATION_ID_KEY)

    def set(self, key: str, value: Any) -> "Headers":
        return self.update({key: value})

    def update(self, other: Mapping[str, Any]) -> "Headers":
        merged = dict(self._data)
        merged.update({k.lower(): v for k, v in other.items()})
        return Headers(merged)

    def remove(self, key: str) -> "Headers":
        return Headers((k, v) for k, v in self._data.items() if k != key.lower())

    def with_schema_version(self, version: SchemaVersion) -> "Headers":
        return self.set(SCHEMA_VERSION_KEY, version)

    def with_correlation_id(self, correlation_id: str) -> "Headers":
        return self.set(CORRELATION_ID_KEY, correlation_id)

    def to_json(self) -> dict[str, str]:
        return dict(self._data)

    @classmethod
    def from_json(cls, raw: Mapping[str, Any]) -> "Headers":
        return cls(raw)
