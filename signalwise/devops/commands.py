from typing import Any, Final, Mapping

from ..envelope import Category, Command
from ..schema import FieldDefinition, FieldMarker
from .model import LoggerConfig

TYPE_PREFIX: Final[str] = "devops.commands:"

SERVICE_NAME_FIELD = FieldDefinition.of("serviceName", FieldMarker.REGULAR)
INSTANCE_FIELD = FieldDefinition.of("instance", FieldMarker.REGULAR)

ADDRESS_FIELDS: Final[Mapping[str, FieldDefinition]] = {
    "service_name": SERVICE_NAME_FIELD,
    "instance": INSTANCE_FIELD,
}


class DevOpsCommand(Command, frozen=True, kw_only=True):
    """
    service_name / instance:
    address one service, or one instance of it, None means every one of them
    """

    service_name: str | None = None
    instance: int | None = None


class ChangeLogLevel(DevOpsCommand, frozen=True, kw_only=True):
    __type__ = TYPE_PREFIX + "changeLogLevel"
    __category__ = Category.MODIFY
    __json_fields__ = {
        **ADDRESS_FIELDS,
        "logger_config": FieldDefinition.of("loggerConfig", FieldMarker.REGULAR),
    }

    logger_config: LoggerConfig


class RetrieveLoggerConfig(DevOpsCommand, frozen=True, kw_only=True):
    __type__ = TYPE_PREFIX + "retrieveLoggerConfig"
    __category__ = Category.QUERY
    __json_fields__ = {
        **ADDRESS_FIELDS,
        "all_known_loggers": FieldDefinition.of("allKnownLoggers", FieldMarker.REGULAR),
        "specific_loggers": FieldDefinition.of("specificLoggers", FieldMarker.REGULAR),
    }

    all_known_loggers: bool = False
    specific_loggers: tuple[str, ...] = ()


class ExecutePiggybackCommand(DevOpsCommand, frozen=True, kw_only=True):
    "deliver the json of another command to an actor selection of the target service"

    __type__ = TYPE_PREFIX + "executePiggybackCommand"
    __category__ = Category.MODIFY
    __json_fields__ = {
        **ADDRESS_FIELDS,
        "target_actor_selection": FieldDefinition.of(
            "targetActorSelection", FieldMarker.REGULAR
        ),
        "piggyback_command": FieldDefinition.of("piggybackCommand", FieldMarker.REGULAR),
    }

    target_actor_selection: str
    piggyback_command: dict[str, Any]
