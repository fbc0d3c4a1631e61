"""
OpenAIToolAdapter: connects a ToolRegistry to OpenAI-style function calling.

Converts registered tools to the ``tools`` request field, and dispatches
the ``tool_calls`` of a response to the matching handlers.

Usage::

    from droid_tools_sdk.tools import ToolRegistry
    from droid_tools_sdk.tools.openai_adapter import OpenAIToolAdapter

    registry = ToolRegistry([ReadFile, UpdateFile])
    adapter = OpenAIToolAdapter(registry)

    # 1. tools field of the chat request
    tools_param = adapter.to_openai_tools()

    # 2. call the model
    response = await client.chat.completions.create(
        model="gpt-4o",
        messages=messages,
        tools=tools_param,
    )

    # 3. run the requested tools
    if response.choices[0].message.tool_calls:
        results = await adapter.handle_tool_calls(
            response.choices[0].message.tool_calls
        )
        messages.extend(adapter.results_to_messages(results))
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from droid_tools_sdk.tools.dispatcher import InvocationRequest, ToolDispatcher
from droid_tools_sdk.tools.registry import ToolRegistry

logger = logging.getLogger("droid_tools_sdk.tools")


@dataclass
class ToolCallResult:
    """Result of a single tool call execution.

    Attributes:
        tool_call_id: The ID from the OpenAI tool_call.
        name: Tool name.
        content: Handler output as text.
        error: Failure text if the call could not be completed.
        code: Failure code from the dispatcher.
    """

    tool_call_id: str
    name: str
    content: str = ""
    error: Optional[str] = None
    code: Optional[str] = None

    def to_message(self) -> Dict[str, str]:
        """Convert to an OpenAI-compatible tool result message.

        Returns::

            {"role": "tool", "tool_call_id": "...", "content": "..."}
        """
        return {
            "role": "tool",
            "tool_call_id": self.tool_call_id,
            "content": self.error if self.error is not None else self.content,
        }


class OpenAIToolAdapter:
    """Adapter between ToolRegistry and OpenAI function calling.

    Parameters:
        registry: The tool registry to use.
        dispatcher: Optional dispatcher (created from *registry* if omitted).
    """

    def __init__(self, registry: ToolRegistry, dispatcher: Optional[ToolDispatcher] = None) -> None:
        self._registry = registry
        self._dispatcher = dispatcher or ToolDispatcher(registry)

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    def to_openai_tools(self) -> List[Dict[str, Any]]:
        """Export tools in OpenAI ``tools`` parameter format::

            [{"type": "function", "function": {"name": ..., ...}}, ...]
        """
        return self._registry.to_openai_schema()

    async def handle_tool_calls(
        self,
        tool_calls: Any,
        extra: Optional[Dict[str, Any]] = None,
    ) -> List[ToolCallResult]:
        """Execute tool calls returned by the model and collect results.

        Parameters:
            tool_calls: The ``message.tool_calls`` list. Each item should
                have ``.id``, ``.function.name`` and ``.function.arguments``
                attributes (or dict equivalents).
            extra: Optional extra data to pass into ToolContext.

        Returns:
            List of ToolCallResult, one per tool call, in order.
        """
        results: List[ToolCallResult] = []

        for tc in tool_calls:
            # Support both object attributes and dict access
            call_id = _get(tc, "id", "") or ""
            func = _get(tc, "function", tc)
            func_name = _get(func, "name", "") or ""
            func_args = parse_arguments(_get(func, "arguments", "{}"), func_name)

            result = await self._dispatcher.ainvoke(
                InvocationRequest(
                    tool_name=func_name,
                    arguments=func_args,
                    call_id=call_id,
                    extra=dict(extra or {}),
                )
            )
            results.append(
                ToolCallResult(
                    tool_call_id=call_id,
                    name=func_name,
                    content=result.content,
                    error=result.error,
                    code=result.code,
                )
            )

        return results

    def results_to_messages(self, results: List[ToolCallResult]) -> List[Dict[str, str]]:
        """Convert a list of ToolCallResult to OpenAI tool messages.

        Useful for appending to the messages list before the next API call.
        """
        return [r.to_message() for r in results]


def parse_arguments(raw: Any, tool_name: str = "") -> Dict[str, Any]:
    """Decode the model's argument payload into an argument bag.

    Undecodable payloads become an empty bag; the dispatcher then reports
    whatever required argument is missing.
    """
    if raw is None or raw == "":
        return {}
    try:
        args = json.loads(raw) if isinstance(raw, str) else dict(raw)
    except (json.JSONDecodeError, TypeError, ValueError):
        logger.warning("Invalid arguments for tool %s: %r", tool_name, raw)
        return {}
    if not isinstance(args, dict):
        logger.warning("Arguments for tool %s are not an object: %r", tool_name, raw)
        return {}
    return args


def _get(obj: Any, key: str, default: Any = None) -> Any:
    """Get attribute or dict key, with fallback."""
    if isinstance(obj, dict):
        return obj.get(key, default)
    return getattr(obj, key, default)
