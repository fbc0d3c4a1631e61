"""
ToolRegistry: handler registration, schema export, name lookup.

LLM-agnostic: export with to_json_schema() / to_openai_schema() and hand the
result to any provider that speaks function calling.
"""

from __future__ import annotations

import importlib
import inspect
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Iterable, Iterator, List, Optional

from droid_tools_sdk.tools.errors import (
    DuplicateToolError,
    RegistryFrozenError,
    ToolDefinitionError,
)
from droid_tools_sdk.tools.schema import HANDLE_METHOD, ToolSchema, build_schema

if TYPE_CHECKING:
    from droid_tools_sdk.core.config import ToolboxConfig

logger = logging.getLogger("droid_tools_sdk.tools")


def handler_identifier(handler: type) -> str:
    """Dotted import path of a handler class."""
    return f"{handler.__module__}.{handler.__qualname__}"


def resolve_handler(identifier: Any) -> Optional[type]:
    """Turn a handler class or dotted path into a handler class.

    Returns None (and logs why) when the identifier cannot be used.
    """
    if isinstance(identifier, str):
        module_name, _, attr = identifier.replace(":", ".").rpartition(".")
        if not module_name:
            logger.warning("Tool identifier %r is not a dotted path, skipping", identifier)
            return None
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            logger.warning("Tool module %s cannot be imported (%s), skipping", module_name, e)
            return None
        handler = getattr(module, attr, None)
    else:
        handler = identifier

    if not inspect.isclass(handler):
        logger.warning("Tool %r does not resolve to a class, skipping", identifier)
        return None
    if not callable(getattr(handler, HANDLE_METHOD, None)):
        logger.warning('Tool class %s has no "%s" method, skipping', handler.__name__, HANDLE_METHOD)
        return None
    return handler


# ──────────────────────────────────────────────
# ToolRegistration
# ──────────────────────────────────────────────


@dataclass(frozen=True)
class ToolRegistration:
    """A tool schema paired with the handler class that implements it.

    The handler is instantiated by the dispatcher once per call.
    """

    schema: ToolSchema
    handler: type
    identifier: str

    @property
    def name(self) -> str:
        return self.schema.name


# ──────────────────────────────────────────────
# ToolRegistry
# ──────────────────────────────────────────────


class ToolRegistry:
    """Central registry for tools.

    Usage::

        registry = ToolRegistry()
        registry.register([ReadFile, "myapp.tools.UpdateFile"])
        registry.freeze()

        schema = registry.to_openai_schema()
        registration = registry.resolve("read_file")

    Registration normally happens once at startup. After :meth:`freeze`
    the registry is read-only and safe to share between sessions.
    """

    def __init__(self, handler_identifiers: Optional[Iterable[Any]] = None) -> None:
        self._tools: Dict[str, ToolRegistration] = {}
        self._frozen = False
        if handler_identifiers:
            self.register(handler_identifiers)

    @classmethod
    def from_config(cls, config: ToolboxConfig) -> ToolRegistry:
        """Build a frozen registry from the configured tool identifiers."""
        registry = cls(config.tools)
        registry.freeze()
        return registry

    def register(self, handler_identifiers: Iterable[Any]) -> List[ToolRegistration]:
        """Register handlers by class or dotted import path.

        Identifiers that cannot be resolved are logged and skipped.
        Registering the same handler again replaces its entry in place.
        The whole batch is applied atomically.

        Returns:
            The registrations created by this call.

        Raises:
            DuplicateToolError: If two distinct handlers derive the same name.
            RegistryFrozenError: If :meth:`freeze` was called.
        """
        if self._frozen:
            raise RegistryFrozenError("Tool registry is frozen")
        if isinstance(handler_identifiers, (str, type)):
            handler_identifiers = [handler_identifiers]

        staged = dict(self._tools)
        added: List[ToolRegistration] = []
        for identifier in handler_identifiers:
            handler = resolve_handler(identifier)
            if handler is None:
                continue
            try:
                schema = build_schema(handler)
            except ToolDefinitionError as e:
                logger.warning("%s, skipping", e)
                continue

            existing = staged.get(schema.name)
            if existing is not None and existing.handler is not handler:
                raise DuplicateToolError(schema.name, existing.identifier, handler_identifier(handler))

            registration = ToolRegistration(
                schema=schema,
                handler=handler,
                identifier=handler_identifier(handler),
            )
            staged[schema.name] = registration
            added.append(registration)
            logger.debug("Tool registered: %s -> %s", schema.name, registration.identifier)

        self._tools = staged
        return added

    def freeze(self) -> None:
        """Make the registry read-only."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def resolve(self, name: str) -> Optional[ToolRegistration]:
        """Exact-match lookup by tool name."""
        return self._tools.get(name)

    def list_schemas(self) -> List[ToolSchema]:
        """Return all schemas in registration order."""
        return [r.schema for r in self._tools.values()]

    def registrations(self) -> List[ToolRegistration]:
        return list(self._tools.values())

    def names(self) -> List[str]:
        """Return all tool names."""
        return list(self._tools.keys())

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[ToolRegistration]:
        return iter(list(self._tools.values()))

    # ─── Schema export ───

    def to_json_schema(self) -> List[Dict[str, Any]]:
        """Export all tools as a list of JSON Schema objects."""
        return [s.to_json_schema() for s in self.list_schemas()]

    def to_openai_schema(self) -> List[Dict[str, Any]]:
        """Export all tools in OpenAI function calling format.

        Returns a list suitable for the ``tools`` field of a chat request.
        """
        return [s.to_openai_schema() for s in self.list_schemas()]

    def describe(self) -> str:
        """Human-readable tool list, one line per tool."""
        return "\n".join(s.describe() for s in self.list_schemas())
