"""
Tool Calling: schema derivation, registration and call dispatch.

A tool is a class with a ``handle`` method. Its typed, described
parameters become the JSON schema the model sees; the model's calls are
validated against that schema and dispatched to a fresh instance.

Quick Start::

    from typing import Annotated
    from droid_tools_sdk.tools import (
        Description, InvocationRequest, ToolDispatcher, ToolRegistry, description,
    )

    @description("Get the current weather for a city.")
    class GetWeather:
        def handle(self, city: Annotated[str, Description("City name")]) -> str:
            return f"{city}: 25°C"

    registry = ToolRegistry([GetWeather])
    registry.freeze()

    # Export for the model
    schema = registry.to_openai_schema()

    # Run a call
    result = ToolDispatcher(registry).invoke(
        InvocationRequest("get_weather", {"city": "Lisbon"})
    )
    print(result.text)
"""

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
from droid_tools_sdk.tools.params import ParameterDescriptor, ParamType, ToolContext
from droid_tools_sdk.tools.registry import ToolRegistration, ToolRegistry
from droid_tools_sdk.tools.schema import ToolSchema, build_schema

__all__ = [
    "Description",
    "description",
    "InvocationRequest",
    "InvocationResult",
    "ToolDispatcher",
    "DuplicateToolError",
    "RegistryFrozenError",
    "ToolDefinitionError",
    "ToolError",
    "ParameterDescriptor",
    "ParamType",
    "ToolContext",
    "ToolRegistration",
    "ToolRegistry",
    "ToolSchema",
    "build_schema",
]
