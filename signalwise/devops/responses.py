from typing import Any, Final, Self

from ..envelope import CommandResponse
from ..headers import Headers
from ..schema import FieldDefinition, FieldMarker
from .commands import ADDRESS_FIELDS
from .model import LoggerConfig

TYPE_PREFIX: Final[str] = "devops.responses:"


class DevOpsCommandResponse(CommandResponse, frozen=True, kw_only=True):
    "a response tagged with the service instance that produced it"

    service_name: str | None = None
    instance: int | None = None


class ChangeLogLevelResponse(DevOpsCommandResponse, frozen=True, kw_only=True):
    __type__ = TYPE_PREFIX + "changeLogLevel"
    __allowed_statuses__ = frozenset({200, 500})
    __json_fields__ = {
        **ADDRESS_FIELDS,
        "successful": FieldDefinition.of("successful", FieldMarker.REGULAR),
    }

    successful: bool

    @classmethod
    def of(
        cls,
        service_name: str | None,
        instance: int | None,
        successful: bool,
        headers: Headers | None = None,
    ) -> Self:
        return cls(
            service_name=service_name,
            instance=instance,
            successful=successful,
            status=200 if successful else 500,
            headers=headers if headers is not None else Headers(),
        )


class RetrieveLoggerConfigResponse(DevOpsCommandResponse, frozen=True, kw_only=True):
    __type__ = TYPE_PREFIX + "retrieveLoggerConfig"
    __allowed_statuses__ = frozenset({200})
    __json_fields__ = {
        **ADDRESS_FIELDS,
        "logger_configs": FieldDefinition.of("loggerConfigs", FieldMarker.REGULAR),
    }

    logger_configs: tuple[LoggerConfig, ...] = ()


class ExecutePiggybackCommandResponse(DevOpsCommandResponse, frozen=True, kw_only=True):
    "status mirrors the status of the piggybacked command"

    __type__ = TYPE_PREFIX + "executePiggybackCommand"
    __json_fields__ = {
        **ADDRESS_FIELDS,
        "response": FieldDefinition.of("response", FieldMarker.REGULAR),
    }

    response: Any = None
