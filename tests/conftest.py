import pytest

from signalwise import Command, CommandResponse, Headers, RegistryBuilder, TypeRegistry
from signalwise.devops import (
    ChangeLogLevelResponse,
    LoggerConfig,
    LogLevel,
    RetrieveLoggerConfigResponse,
)
from tests.messages import (
    DeleteThing,
    ModifyAttribute,
    ModifyAttributeResponse,
    RetrieveAcl,
    RetrieveAclResponse,
    RetrievePolicyId,
)


@pytest.fixture
def headers() -> Headers:
    return Headers({"correlation-id": "corr-1"})


@pytest.fixture
def thing_commands() -> TypeRegistry[Command]:
    builder = RegistryBuilder[Command](name="thing-commands")
    builder(ModifyAttribute)
    builder(DeleteThing)
    builder(RetrieveAcl)
    builder(RetrievePolicyId)
    return builder.build()


@pytest.fixture
def thing_responses() -> TypeRegistry[CommandResponse]:
    builder = RegistryBuilder[CommandResponse](name="thing-responses")
    builder(ModifyAttributeResponse)
    builder(RetrieveAclResponse)
    return builder.build()


@pytest.fixture
def modify_attribute(headers: Headers) -> ModifyAttribute:
    return ModifyAttribute(
        thing_id="org.eclipse:thing-1",
        attribute="/location/floor",
        value=3,
        headers=headers,
    )


@pytest.fixture
def logger_config_responses(headers: Headers) -> list[RetrieveLoggerConfigResponse]:
    configs = (LoggerConfig(level=LogLevel.INFO, logger="signalwise"),)
    return [
        RetrieveLoggerConfigResponse(
            service_name="things", instance=0, logger_configs=configs, headers=headers
        ),
        RetrieveLoggerConfigResponse(
            service_name="things", instance=1, logger_configs=configs, headers=headers
        ),
        RetrieveLoggerConfigResponse(logger_configs=(), headers=headers),
    ]


@pytest.fixture
def change_log_level_response(headers: Headers) -> ChangeLogLevelResponse:
    return ChangeLogLevelResponse.of("policies", 2, True, headers)
