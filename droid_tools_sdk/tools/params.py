"""
Parameter descriptors: one per ``handle`` parameter of a tool handler.

Maps Python annotations onto the small type vocabulary a model's
function-calling interface understands.
"""

from __future__ import annotations

import enum
import inspect
import types
from dataclasses import dataclass, field
from typing import (
    Annotated,
    Any,
    Dict,
    List,
    Optional,
    Tuple,
    Union,
    get_args,
    get_origin,
)

from droid_tools_sdk.tools.annotations import Description, join_descriptions

_UNION_TYPES = tuple(t for t in (Union, getattr(types, "UnionType", None)) if t is not None)


# ──────────────────────────────────────────────
# ParamType
# ──────────────────────────────────────────────


class ParamType(str, enum.Enum):
    """Semantic type of a tool parameter."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ENUM = "enum"
    OBJECT = "object"


_BUILTIN_TO_PARAM_TYPE: Dict[type, ParamType] = {
    bool: ParamType.BOOLEAN,
    int: ParamType.INTEGER,
    float: ParamType.NUMBER,
}


# ──────────────────────────────────────────────
# ToolContext
# ──────────────────────────────────────────────


@dataclass
class ToolContext:
    """Context passed to tool handlers during execution.

    A ``handle`` parameter annotated with this type is not part of the
    model-facing schema; the dispatcher fills it in.

    Attributes:
        tool_name: Name of the tool being invoked.
        call_id: Optional caller-provided call ID (e.g. from OpenAI tool_call).
        extra: Arbitrary shared state.
    """

    tool_name: str = ""
    call_id: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)


# ──────────────────────────────────────────────
# ParameterDescriptor
# ──────────────────────────────────────────────


@dataclass(frozen=True)
class ParameterDescriptor:
    """Description of a single tool parameter.

    Attributes:
        name: Parameter name, unique within its handler.
        type: Semantic type.
        type_name: Type string written into the schema. Same as
            ``type.value`` except for OBJECT, where it is the class name.
        description: Joined description annotations, or ``type_name``.
        required: False when the handler declares a default or Optional.
        default: Declared default (meaningful only when not required).
        enum_values: Valid string values, non-empty iff type is ENUM.
        enum_class: The Enum subclass backing an ENUM parameter.
    """

    name: str
    type: ParamType
    type_name: str
    description: str
    required: bool = True
    default: Any = None
    enum_values: Tuple[str, ...] = ()
    enum_class: Optional[type] = None

    @property
    def is_enum(self) -> bool:
        return self.type is ParamType.ENUM

    def to_property(self) -> Dict[str, Any]:
        """Export as a JSON Schema property."""
        if self.is_enum:
            return {
                "type": "string",
                "description": self.description,
                "enum": list(self.enum_values),
            }
        return {"type": self.type_name, "description": self.description}

    def lookup_enum(self, raw: Any) -> Optional[enum.Enum]:
        """Resolve *raw* to a member of ``enum_class``, or None if invalid."""
        if self.enum_class is None:
            return None
        if isinstance(raw, self.enum_class):
            member = raw
        else:
            try:
                member = self.enum_class(raw)
            except (ValueError, TypeError):
                return None
        if member.value not in self.enum_values:
            return None
        return member


# ──────────────────────────────────────────────
# Extraction
# ──────────────────────────────────────────────


def _unwrap(hint: Any) -> Tuple[Any, List[str], bool]:
    """Strip Annotated/Optional wrappers.

    Returns the bare type, collected description texts and whether
    ``None`` was part of a Union.
    """
    descriptions: List[str] = []
    nullable = False
    while True:
        origin = get_origin(hint)
        if origin is Annotated:
            base, *extras = get_args(hint)
            descriptions.extend(e.value for e in extras if isinstance(e, Description))
            hint = base
        elif origin in _UNION_TYPES:
            args = [a for a in get_args(hint) if a is not type(None)]
            if len(args) != len(get_args(hint)):
                nullable = True
            # Union[X, Y] keeps the first member, like any other wide type
            hint = args[0] if args else inspect.Parameter.empty
        else:
            return hint, descriptions, nullable


def _classify(hint: Any) -> Tuple[ParamType, str, Tuple[str, ...], Optional[type]]:
    if get_origin(hint) is not None:
        # List[str], dict[str, int], Literal[...] ...
        hint = get_origin(hint)
    # untyped, Any (a class on 3.11+) and string forward refs
    if hint is inspect.Parameter.empty or hint is Any or not isinstance(hint, type):
        return ParamType.STRING, ParamType.STRING.value, (), None

    if hint.__module__ == "builtins":
        ptype = _BUILTIN_TO_PARAM_TYPE.get(hint, ParamType.STRING)
        return ptype, ptype.value, (), None

    if issubclass(hint, enum.Enum):
        values = tuple(m.value for m in hint if isinstance(m.value, str))
        if values:
            return ParamType.ENUM, ParamType.ENUM.value, values, hint

    return ParamType.OBJECT, hint.__name__, (), None


def extract_parameter(param: inspect.Parameter, hint: Any = inspect.Parameter.empty) -> ParameterDescriptor:
    """Build a :class:`ParameterDescriptor` for one ``handle`` parameter.

    Parameters:
        param: The parameter from ``inspect.signature``.
        hint: Its resolved annotation (falls back to ``param.annotation``).
    """
    if hint is inspect.Parameter.empty:
        hint = param.annotation

    bare, descriptions, nullable = _unwrap(hint)
    ptype, type_name, enum_values, enum_class = _classify(bare)

    has_default = param.default is not inspect.Parameter.empty
    if has_default:
        required, default = False, param.default
    elif nullable:
        required, default = False, None
    else:
        required, default = True, None

    return ParameterDescriptor(
        name=param.name,
        type=ptype,
        type_name=type_name,
        description=join_descriptions(descriptions) if descriptions else type_name,
        required=required,
        default=default,
        enum_values=enum_values,
        enum_class=enum_class,
    )


def is_context_hint(hint: Any) -> bool:
    """True if *hint* (possibly Optional/Annotated) is :class:`ToolContext`."""
    bare, _, _ = _unwrap(hint)
    return bare is ToolContext or bare == "ToolContext"
