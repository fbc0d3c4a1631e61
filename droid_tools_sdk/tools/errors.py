"""
Registration-time exceptions.

Call-time problems (unknown tool, missing argument, handler failure) are
never raised; the dispatcher turns them into text for the model.
"""

from __future__ import annotations


class ToolError(Exception):
    """Base class for tool registration errors."""


class ToolDefinitionError(ToolError):
    """Raised when a handler cannot be turned into a tool schema."""

    def __init__(self, handler: object, reason: str = "") -> None:
        self.handler = handler
        self.reason = reason
        super().__init__(f"Invalid tool handler {handler!r}: {reason}")


class DuplicateToolError(ToolError):
    """Raised when two distinct handlers derive the same tool name."""

    def __init__(self, name: str, existing: str, incoming: str) -> None:
        self.name = name
        self.existing = existing
        self.incoming = incoming
        super().__init__(
            f"Tool name {name!r} is already used by {existing}; "
            f"cannot register {incoming}"
        )


class RegistryFrozenError(ToolError):
    """Raised when registering into a registry after freeze()."""
