import asyncio
import sys

import pytest

from debugrepl.core.repl_log import ReplLog
from debugrepl.core.session import PythonSession, StackFrame


@pytest.fixture
def py_session():
    return PythonSession(namespace={"base": 10})


@pytest.mark.asyncio
async def test_evaluate_expression(py_session):
    response = await py_session.evaluate("base * 2", None, "repl")
    assert response.success
    assert response.result == 20
    assert response.value == "20"
    assert response.type == "int"
    assert py_session.namespace["_"] == 20


@pytest.mark.asyncio
async def test_evaluate_statement_has_no_value(py_session):
    response = await py_session.evaluate("x = base + 1", None, "repl")
    assert response.success
    assert response.value == ""
    assert py_session.namespace["x"] == 11


@pytest.mark.asyncio
async def test_evaluate_failure_is_reported_not_raised(py_session):
    response = await py_session.evaluate("missing_name", None, "repl")
    assert not response.success
    assert response.message.startswith("NameError:")


@pytest.mark.asyncio
async def test_syntax_error_is_reported(py_session):
    response = await py_session.evaluate("1 +", None, "repl")
    assert not response.success
    assert response.message.startswith("SyntaxError")


@pytest.mark.asyncio
async def test_awaitable_result_is_awaited(py_session):
    async def answer():
        await asyncio.sleep(0)
        return 42

    py_session.namespace["answer"] = answer
    response = await py_session.evaluate("answer()", None, "repl")
    assert response.result == 42


@pytest.mark.asyncio
async def test_evaluate_in_stack_frame(py_session):
    def capture():
        local_value = "inside"
        return StackFrame.from_frame(sys._getframe(), py_session)

    frame = capture()
    assert frame.name == "capture"
    assert frame.source.name == "test_session.py"

    response = await py_session.evaluate("local_value.upper()", frame, "watch")
    assert response.result == "INSIDE"
    assert "_" not in py_session.namespace


def test_get_source_uses_basename_and_caches(py_session):
    first = py_session.get_source("/srv/app/handlers.py")
    assert first.name == "handlers.py"
    assert first.path == "/srv/app/handlers.py"
    assert py_session.get_source("/srv/app/handlers.py") is first
    assert py_session.get_source("<repl>").name == "<repl>"


@pytest.mark.asyncio
async def test_repl_log_with_python_session(py_session):
    repl_log = ReplLog()
    await repl_log.add_repl_expression(py_session, None, "[base, base + 1]")

    result = repl_log.get_repl_elements()[-1]
    assert result.available
    assert str(result) == "[10, 11]"
    assert [c.value for c in await result.get_children()] == ["10", "11"]
