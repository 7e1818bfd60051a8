"""
commands a service instance understands about itself, and its responses
"""

from .commands import ChangeLogLevel as ChangeLogLevel
from .commands import DevOpsCommand as DevOpsCommand
from .commands import ExecutePiggybackCommand as ExecutePiggybackCommand
from .commands import RetrieveLoggerConfig as RetrieveLoggerConfig
from .model import LoggerConfig as LoggerConfig
from .model import LogLevel as LogLevel
from .registry import command_registry as command_registry
from .registry import response_registry as response_registry
from .responses import ChangeLogLevelResponse as ChangeLogLevelResponse
from .responses import DevOpsCommandResponse as DevOpsCommandResponse
from .responses import ExecutePiggybackCommandResponse as ExecutePiggybackCommandResponse
from .responses import RetrieveLoggerConfigResponse as RetrieveLoggerConfigResponse
