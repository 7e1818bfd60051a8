from functools import cache

from ..aggregate import AggregatedResponse
from ..envelope import Command, CommandResponse
from ..registry import RegistryBuilder, TypeRegistry
from .commands import ChangeLogLevel, ExecutePiggybackCommand, RetrieveLoggerConfig
from .responses import (
    ChangeLogLevelResponse,
    ExecutePiggybackCommandResponse,
    RetrieveLoggerConfigResponse,
)


@cache
def command_registry() -> TypeRegistry[Command]:
    builder = RegistryBuilder[Command](name="devops-commands")
    builder(ChangeLogLevel)
    builder(RetrieveLoggerConfig)
    builder(ExecutePiggybackCommand)
    return builder.build()


@cache
def response_registry() -> TypeRegistry[CommandResponse]:
    builder = RegistryBuilder[CommandResponse](name="devops-responses")
    builder(ChangeLogLevelResponse)
    builder(RetrieveLoggerConfigResponse)
    builder(ExecutePiggybackCommandResponse)
    builder(AggregatedResponse)
    return builder.build()
