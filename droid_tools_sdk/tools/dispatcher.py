"""
ToolDispatcher: turns a model-issued call into a handler invocation.

Every outcome is text. An unknown tool, a missing argument or a handler
that blows up all come back as an :class:`InvocationResult` whose ``text``
is fed to the model so it can retry.
"""

from __future__ import annotations

import inspect
import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from droid_tools_sdk.tools.params import ParameterDescriptor, ToolContext
from droid_tools_sdk.tools.registry import ToolRegistration, ToolRegistry

logger = logging.getLogger("droid_tools_sdk.tools")

UNKNOWN_TOOL = "UNKNOWN_TOOL"
MISSING_ARGUMENT = "MISSING_ARGUMENT"
INVALID_ARGUMENT = "INVALID_ARGUMENT"
HANDLER_FAILURE = "HANDLER_FAILURE"


# ──────────────────────────────────────────────
# Request / Result
# ──────────────────────────────────────────────


@dataclass
class InvocationRequest:
    """A call request as emitted by the model.

    Attributes:
        tool_name: Tool name as the model wrote it.
        arguments: Decoded argument object (raw, untyped values).
        call_id: The model's tool-call id, if any.
        extra: Shared state handed to handlers through ToolContext.
    """

    tool_name: str
    arguments: Dict[str, Any] = field(default_factory=dict)
    call_id: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class InvocationResult:
    """Outcome of one invocation.

    Attributes:
        tool_name: Requested tool name.
        content: Handler output rendered as text.
        error: Failure description for the model, or None.
        code: Failure code (UNKNOWN_TOOL, MISSING_ARGUMENT,
            INVALID_ARGUMENT, HANDLER_FAILURE), or None.
        duration_ms: Wall time spent in the handler.
    """

    tool_name: str
    content: str = ""
    error: Optional[str] = None
    code: Optional[str] = None
    duration_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def text(self) -> str:
        """The string to feed back to the model."""
        return self.error if self.error is not None else self.content

    def __str__(self) -> str:
        return self.text


def render_output(value: Any) -> str:
    """Render a handler return value as tool output text."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, default=str)


# ──────────────────────────────────────────────
# ToolDispatcher
# ──────────────────────────────────────────────


class ToolDispatcher:
    """Resolve, coerce and run tool calls against a :class:`ToolRegistry`.

    The dispatcher keeps no state between calls. A fresh handler instance
    is created for each invocation.

    Usage::

        dispatcher = ToolDispatcher(registry)
        result = dispatcher.invoke(InvocationRequest("read_file", {"file_path": "notes.txt"}))
        messages.append({"role": "tool", "content": result.text})
    """

    def __init__(self, registry: ToolRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    def invoke(self, request: InvocationRequest) -> InvocationResult:
        """Run a call synchronously.

        Handlers whose ``handle`` is ``async def`` need :meth:`ainvoke`.
        """
        prepared = self._prepare(request)
        if isinstance(prepared, InvocationResult):
            return prepared
        registration, kwargs = prepared

        start = time.monotonic()
        try:
            output = registration.handler().handle(**kwargs)
            if inspect.isawaitable(output):
                if inspect.iscoroutine(output):
                    output.close()
                return self._failure(
                    request,
                    HANDLER_FAILURE,
                    f"Tool {request.tool_name} is asynchronous and must be invoked with ainvoke()",
                )
        except Exception as e:
            return self._handler_failed(request, e)
        return self._success(request, output, start)

    async def ainvoke(self, request: InvocationRequest) -> InvocationResult:
        """Run a call, awaiting the handler if it is asynchronous."""
        prepared = self._prepare(request)
        if isinstance(prepared, InvocationResult):
            return prepared
        registration, kwargs = prepared

        start = time.monotonic()
        try:
            output = registration.handler().handle(**kwargs)
            if inspect.isawaitable(output):
                output = await output
        except Exception as e:
            return self._handler_failed(request, e)
        return self._success(request, output, start)

    # ─── Argument binding ───

    def _prepare(
        self, request: InvocationRequest
    ) -> Union[InvocationResult, Tuple[ToolRegistration, Dict[str, Any]]]:
        registration = self._registry.resolve(request.tool_name)
        if registration is None:
            available = ", ".join(self._registry.names()) or "none"
            logger.warning("Unknown tool: %s", request.tool_name)
            return self._failure(
                request,
                UNKNOWN_TOOL,
                f"Tool {request.tool_name} does not exist. Available tools: {available}",
            )

        schema = registration.schema
        arguments = request.arguments or {}
        if not isinstance(arguments, Mapping):
            logger.warning("Arguments for tool %s are not an object: %r", schema.name, arguments)
            return self._failure(
                request,
                INVALID_ARGUMENT,
                f"Arguments for the tool {schema.name} must be an object",
            )
        kwargs: Dict[str, Any] = {}

        for p in schema.parameters:
            if p.name not in arguments and p.required:
                return self._failure(
                    request,
                    MISSING_ARGUMENT,
                    f"Parameter {p.name}({p.description}) is required for the tool {schema.name}",
                )

            if p.is_enum:
                value, error = self._coerce_enum(p, arguments)
                if error is not None:
                    return self._failure(request, INVALID_ARGUMENT, error)
                kwargs[p.name] = value
                continue

            value = arguments.get(p.name)
            # explicit null counts as absent for optional parameters
            if value is None and not p.required:
                value = p.default
            kwargs[p.name] = value

        if schema.context_param:
            kwargs[schema.context_param] = ToolContext(
                tool_name=schema.name,
                call_id=request.call_id,
                extra=dict(request.extra),
            )

        logger.debug("Invoking tool %s(%s)", schema.name, _format_args(kwargs, schema.context_param))
        return registration, kwargs

    def _coerce_enum(
        self, p: ParameterDescriptor, arguments: Dict[str, Any]
    ) -> Tuple[Any, Optional[str]]:
        if p.name not in arguments:
            return p.default, None

        member = p.lookup_enum(arguments[p.name])
        if member is not None:
            return member, None
        if not p.required:
            logger.debug(
                "Invalid value %r for %s, using default %r",
                arguments[p.name], p.name, p.default,
            )
            return p.default, None
        return None, (
            f"Parameter {p.name} must be one of: {', '.join(p.enum_values)} "
            f"(got {arguments[p.name]!r})"
        )

    # ─── Results ───

    def _success(self, request: InvocationRequest, output: Any, start: float) -> InvocationResult:
        elapsed = (time.monotonic() - start) * 1000
        logger.debug("Tool %s finished in %.1fms", request.tool_name, elapsed)
        return InvocationResult(
            tool_name=request.tool_name,
            content=render_output(output),
            duration_ms=elapsed,
        )

    def _handler_failed(self, request: InvocationRequest, exc: Exception) -> InvocationResult:
        logger.error("Tool %s failed: %s", request.tool_name, exc, exc_info=True)
        return self._failure(
            request,
            HANDLER_FAILURE,
            f"Error executing tool {request.tool_name}: {exc}",
        )

    def _failure(self, request: InvocationRequest, code: str, message: str) -> InvocationResult:
        return InvocationResult(tool_name=request.tool_name, error=message, code=code)


def _format_args(kwargs: Dict[str, Any], skip: Optional[str]) -> str:
    return ", ".join(f"{k}={v!r}" for k, v in kwargs.items() if k != skip)
