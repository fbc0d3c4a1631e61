"""
Description markers for tool handlers.

Parameters are described with ``Annotated``, classes with a decorator::

    @description("Read content from an existing file.")
    class ReadFile:
        def handle(
            self,
            file_path: Annotated[str, Description("Absolute File path to read content from")],
        ) -> str: ...

Both forms may be repeated; texts are joined with newlines in source order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Tuple, TypeVar

T = TypeVar("T", bound=type)

_CLASS_DESCRIPTIONS_ATTR = "__tool_descriptions__"


@dataclass(frozen=True)
class Description:
    """Free-text description attached to a handler parameter."""

    value: str


def description(text: str) -> Callable[[T], T]:
    """Class decorator: attach a description to a tool handler.

    Stacked decorators keep their visual order (top first).
    """

    def decorator(cls: T) -> T:
        # own __dict__ only, so subclasses do not inherit a parent's texts
        existing: Tuple[str, ...] = cls.__dict__.get(_CLASS_DESCRIPTIONS_ATTR, ())
        # decorators apply bottom-up; prepend to keep source order
        setattr(cls, _CLASS_DESCRIPTIONS_ATTR, (text,) + tuple(existing))
        return cls

    return decorator


def class_descriptions(cls: type) -> List[str]:
    """Return the description texts attached to *cls*, in source order."""
    return list(cls.__dict__.get(_CLASS_DESCRIPTIONS_ATTR, ()))


def join_descriptions(texts: List[str]) -> str:
    return "\n".join(texts)
