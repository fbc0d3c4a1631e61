"""
Tests for ToolDispatcher: argument binding, enum fallback, error texts.
"""

import enum
from typing import TYPE_CHECKING, Annotated, List, Optional

import pytest

from droid_tools_sdk.tools.annotations import Description, description
from droid_tools_sdk.tools.dispatcher import (
    HANDLER_FAILURE,
    INVALID_ARGUMENT,
    MISSING_ARGUMENT,
    UNKNOWN_TOOL,
    InvocationRequest,
    InvocationResult,
    ToolDispatcher,
    render_output,
)
from droid_tools_sdk.tools.params import ToolContext
from droid_tools_sdk.tools.registry import ToolRegistry

if TYPE_CHECKING:
    from decimal import Decimal


class Status(str, enum.Enum):
    DRAFT = "draft"
    FINAL = "final"


@description("Read content from an existing file at the specified path.")
class ReadFile:
    calls: List[str] = []

    def handle(
        self,
        file_path: Annotated[str, Description("Absolute File path to read content from")],
    ) -> str:
        ReadFile.calls.append(file_path)
        return f"content of {file_path}"


class SaveDocument:
    calls: List[tuple] = []

    def handle(
        self,
        title: str,
        status: Status = Status.DRAFT,
        publish: bool = True,
        limit: Optional[int] = None,
    ) -> str:
        SaveDocument.calls.append((title, status, publish, limit))
        return "saved"


class SetStatus:
    def handle(self, status: Annotated[Status, Description("New status")]) -> str:
        return status.value


class Counter:
    instances: List["Counter"] = []

    def __init__(self) -> None:
        self.count = 0
        Counter.instances.append(self)

    def handle(self) -> int:
        self.count += 1
        return self.count


class Explode:
    def handle(self, reason: str = "boom") -> str:
        raise RuntimeError(reason)


class AsyncEcho:
    async def handle(self, text: str) -> str:
        return text.upper()


class WhoAmI:
    def handle(self, ctx: ToolContext, suffix: str = "") -> str:
        return f"{ctx.tool_name}:{ctx.call_id}:{ctx.extra.get('user', '')}{suffix}"


class Report:
    def handle(self, rows: int) -> dict:
        return {"rows": rows, "title": "Résumé"}


class Nothing:
    def handle(self) -> None:
        return None


class PlaceOrder:
    calls: List[tuple] = []

    def handle(
        self,
        count: Annotated[int, Description("How many")],
        status: Status = Status.DRAFT,
        price: "Decimal" = None,
    ) -> str:
        PlaceOrder.calls.append((count, status, price))
        return "placed"


@pytest.fixture(autouse=True)
def _reset_calls():
    ReadFile.calls.clear()
    SaveDocument.calls.clear()
    Counter.instances.clear()
    PlaceOrder.calls.clear()


@pytest.fixture
def dispatcher():
    registry = ToolRegistry([
        ReadFile, SaveDocument, SetStatus, Counter, Explode,
        AsyncEcho, WhoAmI, Report, Nothing, PlaceOrder,
    ])
    registry.freeze()
    return ToolDispatcher(registry)


def call(dispatcher, name, args=None, **kwargs):
    return dispatcher.invoke(InvocationRequest(name, args if args is not None else {}, **kwargs))


# ══════════════════════════════════════════════
# Resolution & required arguments
# ══════════════════════════════════════════════


class TestResolution:

    def test_unknown_tool(self, dispatcher):
        result = call(dispatcher, "delete_everything")
        assert not result.ok
        assert result.code == UNKNOWN_TOOL
        assert "delete_everything" in result.text
        assert "read_file" in result.text

    def test_missing_required_argument(self, dispatcher):
        result = call(dispatcher, "read_file", {})
        assert result.code == MISSING_ARGUMENT
        assert result.text == (
            "Parameter file_path(Absolute File path to read content from) "
            "is required for the tool read_file"
        )
        assert ReadFile.calls == []

    def test_missing_argument_without_description_uses_type(self, dispatcher):
        result = call(dispatcher, "save_document", {"status": "final"})
        assert result.text == "Parameter title(string) is required for the tool save_document"

    def test_argument_passed_unchanged(self, dispatcher):
        result = call(dispatcher, "read_file", {"file_path": "notes.txt"})
        assert result.ok
        assert result.text == "content of notes.txt"
        assert ReadFile.calls == ["notes.txt"]

    def test_unknown_arguments_ignored(self, dispatcher):
        result = call(dispatcher, "read_file", {"file_path": "a.txt", "mode": "rb"})
        assert result.ok
        assert ReadFile.calls == ["a.txt"]

    def test_none_arguments_treated_as_empty(self, dispatcher):
        result = dispatcher.invoke(InvocationRequest("counter", None))
        assert result.text == "1"

    @pytest.mark.parametrize("args", [["title"], "title=Plan", 42])
    def test_non_mapping_arguments_rejected(self, dispatcher, args):
        result = dispatcher.invoke(InvocationRequest("save_document", args))
        assert result.code == INVALID_ARGUMENT
        assert result.text == "Arguments for the tool save_document must be an object"
        assert SaveDocument.calls == []

    @pytest.mark.asyncio
    async def test_non_mapping_arguments_rejected_async(self, dispatcher):
        result = await dispatcher.ainvoke(InvocationRequest("counter", ["x"]))
        assert result.code == INVALID_ARGUMENT


# ══════════════════════════════════════════════
# Defaults & enum coercion
# ══════════════════════════════════════════════


class TestCoercion:

    def test_defaults_applied(self, dispatcher):
        call(dispatcher, "save_document", {"title": "Plan"})
        assert SaveDocument.calls == [("Plan", Status.DRAFT, True, None)]

    def test_boolean_default_true(self, dispatcher):
        call(dispatcher, "save_document", {"title": "Plan"})
        _, _, publish, _ = SaveDocument.calls[0]
        assert publish is True

    def test_explicit_values(self, dispatcher):
        call(dispatcher, "save_document", {"title": "Plan", "publish": False, "limit": 3})
        assert SaveDocument.calls == [("Plan", Status.DRAFT, False, 3)]

    def test_null_optional_uses_default(self, dispatcher):
        call(dispatcher, "save_document", {"title": "Plan", "publish": None})
        assert SaveDocument.calls[0][2] is True

    def test_valid_enum_resolved_to_member(self, dispatcher):
        call(dispatcher, "save_document", {"title": "Plan", "status": "final"})
        status = SaveDocument.calls[0][1]
        assert status is Status.FINAL

    @pytest.mark.parametrize("bad", ["archived", "FINAL", 3, None, ["draft"]])
    def test_invalid_enum_falls_back_to_default(self, dispatcher, bad):
        result = call(dispatcher, "save_document", {"title": "Plan", "status": bad})
        assert result.ok
        status = SaveDocument.calls[0][1]
        assert status is Status.DRAFT
        assert status == "draft"

    def test_required_enum_invalid_value(self, dispatcher):
        result = call(dispatcher, "set_status", {"status": "archived"})
        assert result.code == INVALID_ARGUMENT
        assert "draft, final" in result.text
        assert "archived" in result.text

    def test_required_enum_valid_value(self, dispatcher):
        assert call(dispatcher, "set_status", {"status": "final"}).text == "final"

    def test_enum_fallback_with_unresolvable_sibling_hint(self, dispatcher):
        result = call(dispatcher, "place_order", {"count": 2, "status": "archived"})
        assert result.ok
        assert PlaceOrder.calls == [(2, Status.DRAFT, None)]

    def test_missing_argument_with_unresolvable_sibling_hint(self, dispatcher):
        result = call(dispatcher, "place_order", {})
        assert result.code == MISSING_ARGUMENT
        assert result.text == "Parameter count(How many) is required for the tool place_order"


# ══════════════════════════════════════════════
# Handler execution
# ══════════════════════════════════════════════


class TestExecution:

    def test_fresh_instance_per_call(self, dispatcher):
        assert call(dispatcher, "counter").text == "1"
        assert call(dispatcher, "counter").text == "1"
        assert len(Counter.instances) == 2
        assert Counter.instances[0] is not Counter.instances[1]

    def test_handler_exception_becomes_text(self, dispatcher):
        result = call(dispatcher, "explode", {"reason": "disk full"})
        assert result.code == HANDLER_FAILURE
        assert result.text == "Error executing tool explode: disk full"

    def test_non_string_output_serialized(self, dispatcher):
        result = call(dispatcher, "report", {"rows": 2})
        assert result.text == '{"rows": 2, "title": "Résumé"}'

    def test_none_output_is_empty(self, dispatcher):
        result = call(dispatcher, "nothing")
        assert result.ok
        assert result.text == ""

    def test_context_injected(self, dispatcher):
        result = call(dispatcher, "who_am_i", {"suffix": "!"}, call_id="call_9", extra={"user": "ana"})
        assert result.text == "who_am_i:call_9:ana!"

    def test_sync_invoke_rejects_async_handler(self, dispatcher):
        result = call(dispatcher, "async_echo", {"text": "hi"})
        assert result.code == HANDLER_FAILURE
        assert "ainvoke" in result.text

    @pytest.mark.asyncio
    async def test_ainvoke_async_handler(self, dispatcher):
        result = await dispatcher.ainvoke(InvocationRequest("async_echo", {"text": "hi"}))
        assert result.ok
        assert result.text == "HI"

    @pytest.mark.asyncio
    async def test_ainvoke_sync_handler(self, dispatcher):
        result = await dispatcher.ainvoke(InvocationRequest("read_file", {"file_path": "x"}))
        assert result.text == "content of x"

    @pytest.mark.asyncio
    async def test_ainvoke_missing_argument(self, dispatcher):
        result = await dispatcher.ainvoke(InvocationRequest("async_echo", {}))
        assert result.code == MISSING_ARGUMENT
        assert "text" in result.text
        assert "async_echo" in result.text

    @pytest.mark.asyncio
    async def test_ainvoke_handler_exception(self, dispatcher):
        result = await dispatcher.ainvoke(InvocationRequest("explode", {}))
        assert result.text == "Error executing tool explode: boom"


class TestResultHelpers:

    def test_str_is_text(self):
        assert str(InvocationResult(tool_name="t", content="ok")) == "ok"
        assert str(InvocationResult(tool_name="t", error="bad", code=UNKNOWN_TOOL)) == "bad"

    def test_error_wins_over_empty_content(self):
        result = InvocationResult(tool_name="t", error="")
        assert not result.ok
        assert result.text == ""

    @pytest.mark.parametrize("value, expected", [
        ("text", "text"),
        (None, ""),
        (3, "3"),
        (True, "true"),
        ([1, "a"], '[1, "a"]'),
    ])
    def test_render_output(self, value, expected):
        assert render_output(value) == expected
