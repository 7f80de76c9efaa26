"""Debug sessions: where expressions are evaluated and sources resolved."""

import inspect
import os
import traceback
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from . import debug as log
from .entries import SourceRef
from .evaluation import EvaluationResponse

REPL_FILENAME = "<repl>"


@dataclass
class StackFrame:
    """A scope expressions can be evaluated in."""

    name: str
    globals: Dict[str, Any]
    locals: Dict[str, Any] = field(default_factory=dict)
    source: Optional[SourceRef] = None
    line: int = 0

    @classmethod
    def from_frame(cls, frame: Any, session: "DebugSession") -> "StackFrame":
        """Capture a live Python frame object.

        For callers embedding the console in a running program; pass the
        result to ReplConsole.handle_expression to evaluate in that scope.
        """
        code = frame.f_code
        return cls(
            name=code.co_name,
            globals=frame.f_globals,
            locals=dict(frame.f_locals),
            source=session.get_source(code.co_filename),
            line=frame.f_lineno,
        )


class DebugSession(ABC):
    """Interface the REPL log uses to reach the evaluation engine.

    Implementations may evaluate in-process or forward to a separate
    debuggee; the log only awaits the response.
    """

    def __init__(self, name: str = "repl"):
        self.id = str(uuid.uuid4())
        self.name = name

    @abstractmethod
    async def evaluate(
        self,
        expression: str,
        frame: Optional[StackFrame],
        context: str,
    ) -> EvaluationResponse:
        """Evaluate an expression.

        Args:
            expression: Expression text
            frame: Frame to evaluate in, or None for the global scope
            context: Where the request comes from ("repl", "watch", "hover")

        Returns:
            EvaluationResponse describing the value or the failure
        """
        pass

    @abstractmethod
    def get_source(self, location_ref: str) -> SourceRef:
        """Resolve a location reference to a displayable source.

        Args:
            location_ref: Opaque location, typically a file path

        Returns:
            SourceRef for the location
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class PythonSession(DebugSession):
    """Evaluates Python source in a namespace owned by the session."""

    def __init__(self, name: str = "python", namespace: Optional[Dict[str, Any]] = None):
        """
        Initialize Python session.

        Args:
            name: Session name
            namespace: Global namespace for evaluation (a fresh one when omitted)
        """
        super().__init__(name)
        self.namespace: Dict[str, Any] = namespace if namespace is not None else {}
        self.namespace.setdefault("__name__", "__repl__")
        self._sources: Dict[str, SourceRef] = {}

    def get_source(self, location_ref: str) -> SourceRef:
        source = self._sources.get(location_ref)
        if source is None:
            if location_ref.startswith("<"):
                name = location_ref
            else:
                name = os.path.basename(location_ref.rstrip("/\\")) or location_ref
            source = SourceRef(name=name, path=location_ref)
            self._sources[location_ref] = source
        return source

    async def evaluate(
        self,
        expression: str,
        frame: Optional[StackFrame],
        context: str,
    ) -> EvaluationResponse:
        if frame is not None:
            global_ns, local_ns = frame.globals, frame.locals
        else:
            global_ns, local_ns = self.namespace, self.namespace

        log.debug(f"Evaluating in {self.name} (context={context})")

        try:
            try:
                code = compile(expression, REPL_FILENAME, "eval")
            except SyntaxError:
                # Statements (assignments, imports, defs) have no value
                code = compile(expression, REPL_FILENAME, "exec")
                exec(code, global_ns, local_ns)
                return EvaluationResponse(success=True, result=None, value="", type="NoneType")

            value = eval(code, global_ns, local_ns)
            if inspect.isawaitable(value):
                value = await value
        except Exception as e:
            log.debug(traceback.format_exc())
            return EvaluationResponse(success=False, message=f"{type(e).__name__}: {e}")

        if context == "repl" and value is not None:
            global_ns["_"] = value

        return EvaluationResponse(
            success=True,
            result=value,
            value=repr(value) if value is not None else "",
            type=type(value).__name__,
        )
