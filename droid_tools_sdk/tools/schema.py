"""
ToolSchema: call contract derived from a handler class.

A handler is any class with a ``handle`` method. Its parameters, their
``Annotated`` descriptions and the class-level ``@description`` texts are
read once, at registration time.
"""

from __future__ import annotations

import inspect
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, get_type_hints

from droid_tools_sdk.tools.annotations import class_descriptions, join_descriptions
from droid_tools_sdk.tools.errors import ToolDefinitionError
from droid_tools_sdk.tools.params import (
    ParameterDescriptor,
    extract_parameter,
    is_context_hint,
)

HANDLE_METHOD = "handle"

_WORD_BOUNDARY = re.compile(r"(.)([A-Z][a-z]+)")
_LOWER_UPPER = re.compile(r"([a-z0-9])([A-Z])")
_SEPARATORS = re.compile(r"[\s\-_]+")


def snake_case(value: str) -> str:
    """``ReadFile`` → ``read_file``, ``HTTPFetch`` → ``http_fetch``."""
    value = _WORD_BOUNDARY.sub(r"\1_\2", value)
    value = _LOWER_UPPER.sub(r"\1_\2", value)
    return _SEPARATORS.sub("_", value).strip("_").lower()


def tool_name_for(identifier: Any) -> str:
    """Derive the tool name from a handler class or dotted import path."""
    if isinstance(identifier, str):
        basename = identifier.replace(":", ".").rsplit(".", 1)[-1]
    else:
        basename = identifier.__name__
    return snake_case(basename)


# ──────────────────────────────────────────────
# ToolSchema
# ──────────────────────────────────────────────


@dataclass(frozen=True)
class ToolSchema:
    """A tool's call contract.

    Attributes:
        name: Snake-cased handler class name, unique within a registry.
        description: Joined ``@description`` texts, or None.
        parameters: Descriptors in the order ``handle`` declares them.
        context_param: Name of a ``ToolContext`` parameter, if any. It is
            filled by the dispatcher and never shown to the model.
    """

    name: str
    description: Optional[str] = None
    parameters: Tuple[ParameterDescriptor, ...] = ()
    context_param: Optional[str] = None

    @property
    def required(self) -> List[str]:
        return [p.name for p in self.parameters if p.required]

    def parameter(self, name: str) -> Optional[ParameterDescriptor]:
        for p in self.parameters:
            if p.name == name:
                return p
        return None

    def to_json_schema(self) -> Dict[str, Any]:
        """Export as a JSON Schema function object.

        ``parameters`` is omitted for handlers without parameters, and
        ``required`` is omitted when every parameter is optional.
        """
        schema: Dict[str, Any] = {"name": self.name}
        if self.description is not None:
            schema["description"] = self.description
        if self.parameters:
            parameters: Dict[str, Any] = {
                "type": "object",
                "properties": {p.name: p.to_property() for p in self.parameters},
            }
            required = self.required
            if required:
                parameters["required"] = required
            schema["parameters"] = parameters
        return schema

    def to_openai_schema(self) -> Dict[str, Any]:
        """Export in OpenAI function calling format.

        Returns::

            {
                "type": "function",
                "function": { "name": ..., "description": ..., "parameters": ... }
            }
        """
        return {"type": "function", "function": self.to_json_schema()}

    def describe(self) -> str:
        """One human-readable line, e.g. for a system prompt or a log."""
        params = []
        for p in self.parameters:
            req = "required" if p.required else "optional"
            params.append(f"{p.name}({req}): {p.description}")
        params_text = ", ".join(params) if params else "none"
        return f"- {self.name}: {self.description or ''} | params: {params_text}"


# ──────────────────────────────────────────────
# Builder
# ──────────────────────────────────────────────


def _resolve_hints(handle: Any) -> Dict[str, Any]:
    """Resolved annotations of *handle*, keyed by parameter name.

    Forward references are resolved one parameter at a time when the whole
    set cannot be, e.g. a name imported only under ``TYPE_CHECKING``.
    Parameters whose annotation still cannot be resolved are left out and
    fall back to their raw annotation.
    """
    try:
        return get_type_hints(handle, include_extras=True)
    except Exception:
        pass

    func = getattr(handle, "__func__", handle)
    globalns = getattr(func, "__globals__", {})
    hints: Dict[str, Any] = {}
    for name, annotation in getattr(func, "__annotations__", {}).items():
        if isinstance(annotation, str):
            try:
                annotation = eval(annotation, globalns)
            except Exception:
                continue
        hints[name] = annotation
    return hints


def build_schema(handler: type) -> ToolSchema:
    """Build a :class:`ToolSchema` from a handler class.

    Raises:
        ToolDefinitionError: If *handler* is not a class or has no
            callable ``handle`` method.
    """
    if not inspect.isclass(handler):
        raise ToolDefinitionError(handler, "not a class")
    handle = getattr(handler, HANDLE_METHOD, None)
    if not callable(handle):
        raise ToolDefinitionError(handler, f'has no "{HANDLE_METHOD}" method')

    try:
        sig = inspect.signature(handle)
    except (TypeError, ValueError) as e:
        raise ToolDefinitionError(handler, f"cannot read signature: {e}") from e

    hints = _resolve_hints(handle)

    params: List[ParameterDescriptor] = []
    context_param: Optional[str] = None
    for param_name, param in sig.parameters.items():
        if param_name in ("self", "cls"):
            continue
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue
        hint = hints.get(param_name, param.annotation)
        if is_context_hint(hint):
            context_param = param_name
            continue
        params.append(extract_parameter(param, hint))

    descriptions = class_descriptions(handler)
    return ToolSchema(
        name=tool_name_for(handler),
        description=join_descriptions(descriptions) if descriptions else None,
        parameters=tuple(params),
        context_param=context_param,
    )
