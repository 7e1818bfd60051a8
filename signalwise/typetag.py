from typing import Any, Final

from .errors import MalformedTypeTagError

TYPE_SEPARATOR: Final[str] = ":"
TYPE_KEY: Final[str] = "type"
STATUS_KEY: Final[str] = "status"


def validate_type_tag(type_tag: Any) -> str:
    """
    make sure a type tag looks like `<namespace>:<name>`

    e.g.
    "devops.commands:changeLogLevel"
    """
    if not isinstance(type_tag, str) or not type_tag.strip():
        raise MalformedTypeTagError(type_tag)
    if TYPE_SEPARATOR not in type_tag:
        raise MalformedTypeTagError(type_tag)
    return type_tag


def name_of(type_tag: str) -> str:
    # tags without separator are returned as is
    _, sep, name = type_tag.partition(TYPE_SEPARATOR)
    return name if sep else type_tag
