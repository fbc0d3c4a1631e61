"""
Toolbox: SDK entry point.

Wires configuration into a ready-to-use tool engine:
  - logging setup
  - storage root for the built-in file tools
  - a frozen ToolRegistry built from the configured tool identifiers
  - a ToolDispatcher and an OpenAI adapter on top of it
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from droid_tools_sdk.builtin.storage import configure_storage
from droid_tools_sdk.core.config import ToolboxConfig
from droid_tools_sdk.tools.dispatcher import (
    InvocationRequest,
    InvocationResult,
    ToolDispatcher,
)
from droid_tools_sdk.tools.openai_adapter import OpenAIToolAdapter, ToolCallResult
from droid_tools_sdk.tools.registry import ToolRegistry
from droid_tools_sdk.utils.logger import setup_logging

logger = logging.getLogger("droid_tools_sdk")


class Toolbox:
    """
    The tool engine a conversation layer talks to.

    Usage::

        from droid_tools_sdk import Toolbox, ToolboxConfig

        toolbox = Toolbox(ToolboxConfig.from_env())

        request_body["tools"] = toolbox.tools()
        ...
        text = toolbox.call("read_file", {"file_path": "notes.txt"})
    """

    def __init__(self, config: Optional[ToolboxConfig] = None, configure_logging: bool = False) -> None:
        self._config = config or ToolboxConfig()
        if configure_logging:
            setup_logging(
                log_file=self._config.log_file,
                debug=self._config.debug,
                sdk_level=self._config.log_level or None,
            )

        configure_storage(self._config.storage_root)

        self._registry = ToolRegistry.from_config(self._config)
        self._dispatcher = ToolDispatcher(self._registry)
        self._adapter = OpenAIToolAdapter(self._registry, self._dispatcher)

        logger.info("Toolbox ready with %d tools: %s", len(self._registry), ", ".join(self._registry.names()))

    @property
    def config(self) -> ToolboxConfig:
        return self._config

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    @property
    def dispatcher(self) -> ToolDispatcher:
        return self._dispatcher

    @property
    def adapter(self) -> OpenAIToolAdapter:
        return self._adapter

    def tools(self) -> List[Dict[str, Any]]:
        """Function declarations for the chat request."""
        return self._registry.to_openai_schema()

    def invoke(self, request: InvocationRequest) -> InvocationResult:
        return self._dispatcher.invoke(request)

    async def ainvoke(self, request: InvocationRequest) -> InvocationResult:
        return await self._dispatcher.ainvoke(request)

    def call(self, tool_name: str, arguments: Optional[Dict[str, Any]] = None, call_id: str = "") -> str:
        """Invoke a tool and return the text for the model."""
        return self.invoke(InvocationRequest(tool_name, dict(arguments or {}), call_id)).text

    async def handle_tool_calls(self, tool_calls: Any) -> List[ToolCallResult]:
        return await self._adapter.handle_tool_calls(tool_calls)
