"Interface, type alias, and related stuff"

from typing import TYPE_CHECKING, Any, Callable, Literal, Mapping, TypeGuard

if TYPE_CHECKING:
    from .headers import Headers
    from .registry import TypeRegistry

type RawObject = Mapping[str, Any]
type JsonObject = dict[str, Any]

type ParseFn[E] = Callable[[RawObject, "Headers"], E]
type RecursiveParseFn[E] = Callable[[RawObject, "Headers", "TypeRegistry[Any]"], E]
type TypeResolver = Callable[[RawObject], str]


class _Missed:

    def __str__(self) -> str:
        return "MISSING"

    def __bool__(self) -> Literal[False]:
        return False


MISSING = _Missed()


type Maybe[T] = T | _Missed


def is_provided[T](obj: Maybe[T]) -> TypeGuard[T]:
    return obj is not MISSING
