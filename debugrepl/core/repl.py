"""Interactive REPL loop on top of the output log."""

import asyncio
import inspect
from typing import Any, Optional, Sequence

from rich.console import Console
from rich.prompt import Prompt

from debugrepl.config.settings import Settings, load_settings
from debugrepl.ui.console import console as default_console
from debugrepl.ui.console import render_entry, render_text

from . import debug as log
from . import nls
from .entries import EntryKind, Severity
from .repl_log import LogFrame, ReplEntry, ReplLog
from .session import DebugSession, PythonSession, StackFrame

HELP_TEXT = """
[bold cyan]debugrepl Commands:[/bold cyan]

  /help              Show this help message
  /exit, /quit       Exit the console
  /clear             Clear the output log
  /history           Show how many entries the log holds

Anything else is evaluated as Python. Evaluated code can write to the log:

  console.log("%s has %d items", "cart", 3)
  console.warn({"a": 1, "b": 2})
  console.error("failed")
  console.clear()
"""


class ConsoleBinding:
    """The ``console`` object visible to evaluated code."""

    def __init__(self, repl_log: ReplLog, session: DebugSession):
        self._repl_log = repl_log
        self._session = session

    def _log(self, sev: Severity, args: Sequence[Any]) -> None:
        # Two frames up: past log/warn/... to the code that called it
        frame = inspect.currentframe()
        caller = frame.f_back.f_back if frame is not None and frame.f_back is not None else None
        log_frame = None
        if caller is not None:
            log_frame = LogFrame(location_ref=caller.f_code.co_filename, line=caller.f_lineno)
        del frame, caller
        self._repl_log.log_to_repl(self._session, sev, args, log_frame)

    def log(self, *args: Any) -> None:
        self._log(Severity.INFO, args)

    def info(self, *args: Any) -> None:
        self._log(Severity.INFO, args)

    def warn(self, *args: Any) -> None:
        self._log(Severity.WARNING, args)

    def error(self, *args: Any) -> None:
        self._log(Severity.ERROR, args)

    def clear(self) -> None:
        self._repl_log.append_to_repl(
            self._session, self._repl_log.config.clear_sequence, Severity.INFO
        )

    def __repr__(self) -> str:
        return "<console>"


class ReplConsole:
    """Interactive console that evaluates input and renders the output log."""

    def __init__(
        self,
        config_path: str = "config.yaml",
        settings: Optional[Settings] = None,
        session: Optional[DebugSession] = None,
        out: Optional[Console] = None,
    ):
        """
        Initialize the console.

        Args:
            config_path: Path to config.yaml (ignored when settings is given)
            settings: Preloaded settings
            session: Session to evaluate in (a fresh PythonSession by default)
            out: Rich console to render to
        """
        self.out = out if out is not None else default_console

        if settings is None:
            try:
                settings = load_settings(config_path)
            except FileNotFoundError:
                log.info(f"Config file not found: {config_path}, using defaults")
                settings = Settings()
        self.settings = settings

        if self.settings.locale.catalog:
            try:
                count = nls.load_catalog(self.settings.locale.catalog)
                log.info(f"Loaded {count} localized messages")
            except FileNotFoundError:
                log.warning(f"Message catalog not found: {self.settings.locale.catalog}")
                self.out.print(f"[yellow]⚠ Message catalog not found: {self.settings.locale.catalog}[/yellow]")

        self.repl_log = ReplLog(self.settings.repl)
        self.session = session or PythonSession()
        if isinstance(self.session, PythonSession):
            self.session.namespace.setdefault("console", ConsoleBinding(self.repl_log, self.session))

        # Render state: last entry shown and how much of its text was printed
        self._last_rendered: Optional[ReplEntry] = None
        self._last_length = 0
        self._line_open = False

    def _find_rendered(self, elements: Sequence[ReplEntry]) -> Optional[int]:
        for index in range(len(elements) - 1, -1, -1):
            if elements[index] is self._last_rendered:
                return index
        return None

    def _reset_render_state(self) -> None:
        self._last_rendered = None
        self._last_length = 0
        self._line_open = False

    def _print_text(self, entry: ReplEntry, text: str) -> None:
        source = entry.source_data if self.settings.console.show_source else None
        self.out.print(render_text(text, entry.severity, source, self.settings.console.styles), end="")
        self._line_open = not text.endswith("\n")

    async def _print_entry(self, entry: ReplEntry) -> None:
        if entry.kind is EntryKind.TEXT:
            # A new entry always starts its own line
            if self._line_open:
                self.out.print()
            self._print_text(entry, entry.value)
            return

        children = None
        if entry.kind in (EntryKind.OBJECT_SNAPSHOT, EntryKind.EVALUATION_RESULT) and entry.has_children:
            children = await entry.get_children()

        renderable = render_entry(
            entry,
            children=children,
            prompt=self.settings.console.prompt,
            styles=self.settings.console.styles,
            show_source=self.settings.console.show_source,
        )
        if renderable is None:
            return
        if self._line_open:
            self.out.print()
            self._line_open = False
        self.out.print(renderable)

    async def flush(self) -> None:
        """Render entries appended, or text coalesced, since the previous flush."""
        elements = list(self.repl_log.get_repl_elements())
        start = 0

        if self._last_rendered is not None:
            index = self._find_rendered(elements)
            if index is None:
                # Cleared or evicted since the last render
                self.out.clear()
                self._reset_render_state()
            else:
                start = index + 1
                last = self._last_rendered
                if last.kind is EntryKind.TEXT and len(last.value) > self._last_length:
                    self._print_text(last, last.value[self._last_length:])

        for entry in elements[start:]:
            await self._print_entry(entry)

        if elements:
            self._last_rendered = elements[-1]
            self._last_length = len(self._last_rendered.value) if self._last_rendered.kind is EntryKind.TEXT else 0

    async def handle_command(self, command: str) -> bool:
        """
        Handle REPL commands.

        Args:
            command: Command string

        Returns:
            True to continue REPL, False to exit
        """
        parts = command.split(maxsplit=1)
        cmd = parts[0].lower()

        if cmd == "/help":
            self.out.print(HELP_TEXT)
        elif cmd == "/exit" or cmd == "/quit":
            return False
        elif cmd == "/clear":
            self.repl_log.remove_repl_expressions()
            self.out.clear()
            self._reset_render_state()
        elif cmd == "/history":
            self.out.print(
                f"[cyan]{len(self.repl_log)} entries "
                f"(capacity {self.settings.repl.max_length})[/cyan]"
            )
        else:
            self.out.print(f"[red]✗ Unknown command: {cmd}[/red]")
            self.out.print("[cyan]Type /help for available commands[/cyan]")

        return True

    async def handle_expression(self, expression: str, stack_frame: Optional[StackFrame] = None) -> None:
        """Evaluate an expression, in stack_frame when given, and render what it added to the log."""
        await self.repl_log.add_repl_expression(self.session, stack_frame, expression)
        await self.flush()

    async def _read_input(self) -> str:
        prompt = f"[bold green]{self.settings.console.prompt}[/bold green]"
        return await asyncio.get_running_loop().run_in_executor(
            None, lambda: Prompt.ask(prompt, console=self.out)
        )

    async def run(self) -> None:
        """Run the REPL loop."""
        self.out.print("[bold cyan]debugrepl[/bold cyan]")
        self.out.print(f"Session: {self.session.name}")
        self.out.print("\nType [bold]/help[/bold] for commands, [bold]/exit[/bold] to quit\n")
        log.info(f"REPL started (session={self.session.name})")

        while True:
            try:
                user_input = await self._read_input()

                if not user_input.strip():
                    continue

                if user_input.startswith("/"):
                    if not await self.handle_command(user_input):
                        break
                else:
                    await self.handle_expression(user_input)

            except (EOFError, KeyboardInterrupt):
                break
            except Exception as e:
                log.exception("Error in REPL loop")
                self.out.print(f"[red]✗ Error: {str(e)}[/red]")
                continue

        self.out.print("[cyan]Goodbye![/cyan]")
        log.info("REPL finished")


async def start_repl(config_path: str = "config.yaml") -> None:
    """
    Start the REPL console.

    Args:
        config_path: Path to config file
    """
    await ReplConsole(config_path).run()
