from typing import Callable

from ._itypes import RawObject
from .errors import MissingRequiredFieldError, TypeMismatchError
from .typetag import TYPE_KEY, validate_type_tag


class TypeValidatingDeserializer:
    """
    Verifies the `type` of a raw json object before building an envelope from it.

    field extraction differs per message and stays in the caller supplied constructor,
    the type check is shared by every envelope type.

    ```py
    deserializer = TypeValidatingDeserializer(ChangeLogLevel.__type__, raw)
    command = deserializer.deserialize(lambda: ChangeLogLevel(...))
    ```
    """

    __slots__ = ("_expected_type", "_raw")

    def __init__(self, expected_type: str, raw: RawObject):
        self._expected_type = validate_type_tag(expected_type)
        self._raw = raw

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(expected_type={self._expected_type!r})"

    @property
    def expected_type(self) -> str:
        return self._expected_type

    def deserialize[E](self, constructor: Callable[[], E]) -> E:
        try:
            actual = self._raw[TYPE_KEY]
        except KeyError:
            raise MissingRequiredFieldError(TYPE_KEY, self._expected_type)

        if actual != self._expected_type:
            raise TypeMismatchError(self._expected_type, actual)

        return constructor()
