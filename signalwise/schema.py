"""
Schema versions and the field-visibility engine.

A payload field is declared once as a `FieldDefinition`; whether it shows up in
a serialized envelope depends on the requested `SchemaVersion` and on a
caller supplied `FieldPredicate`:

```py
LOGGER = FieldDefinition.of("logger", SchemaVersion.V_2)
REVISION = FieldDefinition.of("revision", FieldMarker.HIDDEN)

is_visible(LOGGER, SchemaVersion.V_1, accept_all)  # False
is_visible(REVISION, SchemaVersion.V_2, not_hidden)  # False
```
"""

from dataclasses import dataclass
from enum import IntEnum, StrEnum
from typing import Callable, Final


class SchemaVersion(IntEnum):
    V_1 = 1
    V_2 = 2

    def __str__(self) -> str:
        return f"v{self.value}"

    @classmethod
    def latest(cls) -> "SchemaVersion":
        return max(cls)

    @classmethod
    def for_int(cls, value: int) -> "SchemaVersion | None":
        try:
            return cls(value)
        except ValueError:
            return None


ALL_SCHEMA_VERSIONS: Final[frozenset[SchemaVersion]] = frozenset(SchemaVersion)


class FieldMarker(StrEnum):
    REGULAR = "regular"
    "plain payload fields"
    SPECIAL = "special"
    "fields with meaning for the protocol itself, e.g. revision or namespace"
    HIDDEN = "hidden"
    "fields only meant for internal consumers"


@dataclass(frozen=True, slots=True)
class FieldDefinition:
    key: str
    versions: frozenset[SchemaVersion] = ALL_SCHEMA_VERSIONS
    markers: frozenset[FieldMarker] = frozenset({FieldMarker.REGULAR})

    @classmethod
    def of(cls, key: str, *markers: FieldMarker | SchemaVersion) -> "FieldDefinition":
        """
        declare a field, schema versions and field markers can be mixed freely,
        versions default to all versions, markers default to REGULAR.
        """
        versions = frozenset(m for m in markers if isinstance(m, SchemaVersion))
        field_markers = frozenset(m for m in markers if isinstance(m, FieldMarker))
        return cls(
            key=key,
            versions=versions or ALL_SCHEMA_VERSIONS,
            markers=field_markers or frozenset({FieldMarker.REGULAR}),
        )

    def supports(self, version: SchemaVersion) -> bool:
        return version in self.versions

    def is_marked_as(self, marker: FieldMarker) -> bool:
        return marker in self.markers


type FieldPredicate = Callable[[FieldDefinition], bool]


def accept_all(_: FieldDefinition) -> bool:
    return True


def not_hidden(field: FieldDefinition) -> bool:
    return not field.is_marked_as(FieldMarker.HIDDEN)


def regular_or_special(field: FieldDefinition) -> bool:
    return field.is_marked_as(FieldMarker.REGULAR) or field.is_marked_as(
        FieldMarker.SPECIAL
    )


def marked_as(marker: FieldMarker) -> FieldPredicate:
    def predicate(field: FieldDefinition) -> bool:
        return field.is_marked_as(marker)

    return predicate


def all_of(*predicates: FieldPredicate) -> FieldPredicate:
    "combine predicates with logical AND, an empty combination accepts every field"

    def predicate(field: FieldDefinition) -> bool:
        return all(p(field) for p in predicates)

    return predicate


def is_visible(
    field: FieldDefinition,
    version: SchemaVersion,
    predicate: FieldPredicate = accept_all,
) -> bool:
    return field.supports(version) and predicate(field)
