"""
Droid Tools SDK: tool registry and invocation engine for LLM agents.

Derives function-calling schemas from plain handler classes, exports them
to the model, and dispatches the model's calls back to the handlers.

Quick Start:
    from droid_tools_sdk import Toolbox, ToolboxConfig

    toolbox = Toolbox(ToolboxConfig.from_env(), configure_logging=True)

    body = {"model": "gpt-4o", "messages": messages, "tools": toolbox.tools()}
    ...
    for call in message.tool_calls:
        output = toolbox.call(call.function.name, json.loads(call.function.arguments))
"""

__version__ = "0.1.0"

from droid_tools_sdk.core.config import ToolboxConfig
from droid_tools_sdk.core.toolbox import Toolbox
from droid_tools_sdk.tools.annotations import Description, description
from droid_tools_sdk.tools.dispatcher import (
    InvocationRequest,
    InvocationResult,
    ToolDispatcher,
)
from droid_tools_sdk.tools.errors import (
    DuplicateToolError,
    RegistryFrozenError,
    ToolDefinitionError,
    ToolError,
)
from droid_tools_sdk.tools.openai_adapter import OpenAIToolAdapter, ToolCallResult
from droid_tools_sdk.tools.params import ParameterDescriptor, ParamType, ToolContext
from droid_tools_sdk.tools.registry import ToolRegistration, ToolRegistry
from droid_tools_sdk.tools.schema import ToolSchema
from droid_tools_sdk.utils.logger import setup_logging

__all__ = [
    "Toolbox",
    "ToolboxConfig",
    "Description",
    "description",
    "InvocationRequest",
    "InvocationResult",
    "ToolDispatcher",
    "DuplicateToolError",
    "RegistryFrozenError",
    "ToolDefinitionError",
    "ToolError",
    "OpenAIToolAdapter",
    "ToolCallResult",
    "ParameterDescriptor",
    "ParamType",
    "ToolContext",
    "ToolRegistration",
    "ToolRegistry",
    "ToolSchema",
    "setup_logging",
    "__version__",
]
