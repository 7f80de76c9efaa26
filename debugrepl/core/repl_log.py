"""Bounded, ordered output log of a REPL session."""

import itertools
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Union

from debugrepl.config.settings import ReplConfig

from . import debug as log
from . import nls
from .entries import EntryKind, EvaluationInputEntry, Severity, SourceLocation, TextEntry
from .evaluation import EvaluationResultEntry
from .formatter import ValueKind, classify, join_tokens, substitute
from .session import DebugSession, StackFrame
from .snapshot import ObjectSnapshotEntry

ReplEntry = Union[TextEntry, ObjectSnapshotEntry, EvaluationInputEntry, EvaluationResultEntry]


@dataclass(frozen=True)
class LogFrame:
    """Origin of a log call."""

    location_ref: str
    line: int
    column: int = 0


class ReplLog:
    """Ordered output of a REPL session with a hard entry limit.

    All mutators are synchronous; only add_repl_expression suspends, and it
    does so after its input entry is already visible.
    """

    def __init__(
        self,
        config: Optional[ReplConfig] = None,
        localize: Callable[..., str] = nls.localize,
    ):
        """
        Initialize the log.

        Args:
            config: Capacity and clear-sequence settings
            localize: Message lookup for the fixed console messages
        """
        self.config = config or ReplConfig()
        self.localize = localize
        self._elements: List[ReplEntry] = []
        self._top_counter = itertools.count()

    def _next_top_id(self) -> str:
        return f"topReplElement:{next(self._top_counter)}"

    def get_repl_elements(self) -> Sequence[ReplEntry]:
        """Current entries, oldest first. Callers must not mutate the result."""
        return self._elements

    def __len__(self) -> int:
        return len(self._elements)

    async def add_repl_expression(
        self,
        session: Optional[DebugSession],
        stack_frame: Optional[StackFrame],
        name: str,
    ) -> None:
        """
        Record an expression and, once evaluated, its result.

        Args:
            session: Session to evaluate in
            stack_frame: Frame to evaluate in, or None
            name: Expression text
        """
        self.append(EvaluationInputEntry(name))
        result = EvaluationResultEntry(max_children=self.config.max_children)
        await result.evaluate_expression(name, session, stack_frame, "repl")
        self.append(result)

    def append_to_repl(
        self,
        session: Optional[DebugSession],
        data: Union[str, ReplEntry],
        sev: Severity,
        source: Optional[SourceLocation] = None,
    ) -> None:
        """
        Append runtime output.

        Strings go through clear-sequence detection and coalescing; entries
        are appended as given, tagged with sev and source.
        """
        clear_sequence = self.config.clear_sequence
        if isinstance(data, str) and clear_sequence and clear_sequence in data:
            self.remove_repl_expressions()
            self.append_to_repl(
                session,
                self.localize("consoleCleared", "Console was cleared"),
                Severity.IGNORE,
            )
            data = data[data.rindex(clear_sequence) + len(clear_sequence):]

        if isinstance(data, str):
            previous = self._elements[-1] if self._elements else None
            if (
                previous is not None
                and previous.kind is EntryKind.TEXT
                and previous.session is session
                and previous.severity == sev
                and not previous.value.endswith("\n")
            ):
                previous.value += data
            else:
                self.append(TextEntry(session, self._next_top_id(), data, sev, source))
        else:
            data.severity = sev
            data.source_data = source
            self.append(data)

    def append(self, entry: ReplEntry) -> None:
        """Append an entry, evicting the oldest entries beyond capacity."""
        self._elements.append(entry)
        overflow = len(self._elements) - self.config.max_length
        if overflow > 0:
            del self._elements[:overflow]
            log.log_eviction(overflow, self.config.max_length)

    def log_to_repl(
        self,
        session: DebugSession,
        sev: Severity,
        args: Sequence[Any],
        frame: Optional[LogFrame] = None,
    ) -> None:
        """
        Format the arguments of a console log call into the REPL.

        Primitive arguments are joined into one line of text; objects and
        arrays are appended as expandable snapshots in between.
        """
        source: Optional[SourceLocation] = None
        if frame is not None:
            source = SourceLocation(
                source=session.get_source(frame.location_ref),
                line_number=frame.line,
                column=frame.column,
            )

        simple_vals: List[Any] = []
        i = 0
        while i < len(args):
            a = args[i]
            kind = classify(a)

            if kind is ValueKind.UNDEFINED:
                simple_vals.append("undefined")
            elif kind is ValueKind.NULL:
                simple_vals.append("null")
            elif kind in (ValueKind.ARRAY, ValueKind.OBJECT):
                # flush pending simple values before the snapshot
                if simple_vals:
                    self.append_to_repl(session, join_tokens(simple_vals), sev, source)
                    simple_vals = []

                snapshot = ObjectSnapshotEntry(
                    self._next_top_id(),
                    None,
                    a,
                    annotation=self.localize(
                        "snapshotObj", "Only primitive values are shown for this object."
                    ),
                    max_children=self.config.max_children,
                )
                self.append_to_repl(session, snapshot, sev, source)
            elif kind is ValueKind.STRING:
                text, i = substitute(a, args, i)
                simple_vals.append(text)
            else:
                simple_vals.append(a)

            i += 1

        # separate log calls always end up on separate lines
        if simple_vals:
            self.append_to_repl(session, join_tokens(simple_vals) + "\n", sev, source)

    def remove_repl_expressions(self) -> None:
        """Remove every entry."""
        if self._elements:
            dropped = len(self._elements)
            self._elements = []
            log.log_console_cleared(dropped)

    clear = remove_repl_expressions

