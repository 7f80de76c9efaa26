import io
import logging
import sys

import pytest
from rich.console import Console
from typer.testing import CliRunner

from debugrepl.config.settings import ReplConfig, Settings
from debugrepl.core.entries import EvaluationInputEntry, Severity, SourceLocation, SourceRef, TextEntry
from debugrepl.core.evaluation import EvaluationResultEntry
from debugrepl.core.repl import ReplConsole
from debugrepl.core.session import StackFrame
from debugrepl.core.snapshot import ObjectSnapshotEntry
from debugrepl.main import app
from debugrepl.ui.console import render_entry


def plain(renderable, **print_kwargs):
    out = Console(file=io.StringIO(), width=100, color_system=None)
    out.print(renderable, **print_kwargs)
    return out.file.getvalue()


def make_console(settings=None):
    out = Console(file=io.StringIO(), width=100, color_system=None)
    return ReplConsole(settings=settings or Settings(), out=out), out


def scripted(repl_console, monkeypatch, lines):
    remaining = iter(lines)

    async def fake_read_input():
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr(repl_console, "_read_input", fake_read_input)


# --- rendering ---

def test_render_text_with_source():
    source = SourceLocation(SourceRef("app.py", "/src/app.py"), 7)
    entry = TextEntry(None, "topReplElement:0", "hello\n", Severity.INFO, source)
    assert plain(render_entry(entry), end="") == "hello  app.py:7\n"


def test_render_open_text_defers_source():
    source = SourceLocation(SourceRef("app.py", "/src/app.py"), 7)
    entry = TextEntry(None, "topReplElement:0", "partial", Severity.INFO, source)
    assert plain(render_entry(entry), end="") == "partial"


def test_render_input_uses_prompt():
    assert plain(render_entry(EvaluationInputEntry("1 + 1"), prompt="py>")) == "py> 1 + 1\n"


def test_render_unavailable_result():
    result = EvaluationResultEntry(value="NameError: x", available=False)
    assert "NameError: x" in plain(render_entry(result))


def test_render_statement_result_shows_nothing():
    result = EvaluationResultEntry(value="", available=True, result=None)
    assert render_entry(result) is None


@pytest.mark.asyncio
async def test_render_snapshot_tree():
    snapshot = ObjectSnapshotEntry("s", None, {"a": 1, "b": "x"}, annotation="Only primitives")
    text = plain(render_entry(snapshot, children=await snapshot.get_children()))
    assert "Object" in text
    assert "a: 1" in text
    assert 'b: "x"' in text
    assert "Only primitives" in text


# --- interactive console ---

@pytest.mark.asyncio
async def test_console_evaluates_and_renders(monkeypatch):
    repl_console, out = make_console()
    scripted(repl_console, monkeypatch, ["1 + 2", "/exit", "never read"])

    await repl_console.run()

    text = out.file.getvalue()
    assert ">>> 1 + 2" in text
    assert "\n3\n" in text
    assert "Goodbye!" in text
    assert len(repl_console.repl_log) == 2


@pytest.mark.asyncio
async def test_console_log_from_evaluated_code(monkeypatch):
    repl_console, out = make_console()
    scripted(repl_console, monkeypatch, ['console.log("%s has %d items", "cart", 3)'])

    await repl_console.run()

    elements = repl_console.repl_log.get_repl_elements()
    assert [str(e) for e in elements] == [
        'console.log("%s has %d items", "cart", 3)',
        "cart has 3 items\n",
        "",
    ]
    assert elements[1].source_data.source.name == "<repl>"
    assert "cart has 3 items" in out.file.getvalue()


@pytest.mark.asyncio
async def test_console_clear_from_evaluated_code(monkeypatch):
    repl_console, out = make_console()
    scripted(repl_console, monkeypatch, ["40 + 2", "console.clear()"])

    await repl_console.run()

    values = [str(e) for e in repl_console.repl_log.get_repl_elements()]
    assert values[0] == "Console was cleared"
    assert "console.clear()" not in values


@pytest.mark.asyncio
async def test_flush_prints_only_new_text():
    repl_console, out = make_console()
    session = repl_console.session
    repl_log = repl_console.repl_log

    repl_log.append_to_repl(session, "foo", Severity.INFO)
    await repl_console.flush()
    repl_log.append_to_repl(session, "bar\n", Severity.INFO)
    await repl_console.flush()
    await repl_console.flush()

    assert out.file.getvalue() == "foobar\n"
    assert len(repl_log) == 1


@pytest.mark.asyncio
async def test_clear_command_and_history(monkeypatch):
    repl_console, out = make_console(Settings(repl=ReplConfig(max_length=5)))
    scripted(repl_console, monkeypatch, ["1", "/history", "/clear", "/history", "/bogus"])

    await repl_console.run()

    text = out.file.getvalue()
    assert "2 entries (capacity 5)" in text
    assert "0 entries (capacity 5)" in text
    assert "Unknown command: /bogus" in text


@pytest.mark.asyncio
async def test_console_survives_evaluation_errors(monkeypatch):
    repl_console, out = make_console()
    scripted(repl_console, monkeypatch, ["1 / 0", "2"])

    await repl_console.run()

    text = out.file.getvalue()
    assert "ZeroDivisionError" in text
    assert "\n2\n" in text


@pytest.mark.asyncio
async def test_console_logs_traceback_of_failing_session(monkeypatch, session, caplog):
    session.responses = [RuntimeError("engine down")]
    repl_console, out = make_console()
    repl_console.session = session
    scripted(repl_console, monkeypatch, ["x", "y"])

    logger = logging.getLogger("debugrepl")
    logger.addHandler(caplog.handler)
    try:
        await repl_console.run()
    finally:
        logger.removeHandler(caplog.handler)

    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert len(errors) == 1
    assert errors[0].exc_info is not None
    assert "Traceback" in caplog.text
    assert "RuntimeError: engine down" in caplog.text
    assert "engine down" in out.file.getvalue()
    assert "\n'y'\n" in out.file.getvalue()


@pytest.mark.asyncio
async def test_console_evaluates_in_captured_frame():
    repl_console, out = make_console()

    def capture():
        local_value = 21
        return StackFrame.from_frame(sys._getframe(), repl_console.session)

    await repl_console.handle_expression("local_value * 2", capture())

    assert "\n42\n" in out.file.getvalue()
    assert str(repl_console.repl_log.get_repl_elements()[-1]) == "42"


# --- CLI ---

def test_cli_config_show_defaults(tmp_path):
    result = CliRunner().invoke(app, ["config", "show", "--config", str(tmp_path / "missing.yaml")])
    assert result.exit_code == 0
    assert "10000" in result.output
    assert "defaults" in result.output


def test_cli_config_show_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("repl:\n  max_length: 77\n")
    result = CliRunner().invoke(app, ["config", "show", "-c", str(path)])
    assert result.exit_code == 0
    assert "77" in result.output


def test_cli_config_unknown_action():
    result = CliRunner().invoke(app, ["config", "edit"])
    assert result.exit_code == 1
