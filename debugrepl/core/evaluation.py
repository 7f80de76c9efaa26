"""Evaluation results shown in the REPL."""

import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar, List, Optional

from . import debug as log
from .entries import EntryKind, Severity, SourceLocation
from .formatter import UNDEFINED
from .snapshot import MAX_CHILDREN, ObjectSnapshotEntry, snapshot_children, value_has_children

if TYPE_CHECKING:
    from .session import DebugSession, StackFrame

NOT_AVAILABLE = "not available"


@dataclass
class EvaluationResponse:
    """Answer of a session to an evaluate request."""

    success: bool
    result: Any = None  # Raw value, expanded on demand
    value: str = ""  # Display string chosen by the evaluator
    type: Optional[str] = None
    message: str = ""  # Failure description when success is False


@dataclass(eq=False)
class EvaluationResultEntry:
    """The outcome of evaluating a REPL expression."""

    kind: ClassVar[EntryKind] = EntryKind.EVALUATION_RESULT

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    value: str = ""
    type: Optional[str] = None
    available: bool = False
    result: Any = UNDEFINED
    max_children: int = MAX_CHILDREN
    severity: Optional[Severity] = None
    source_data: Optional[SourceLocation] = None

    def get_id(self) -> str:
        return self.id

    async def evaluate_expression(
        self,
        expression: str,
        session: Optional["DebugSession"],
        stack_frame: Optional["StackFrame"],
        context: str,
    ) -> None:
        """
        Evaluate an expression and store the outcome on this entry.

        Args:
            expression: Expression text
            session: Session to evaluate in; no session means not available
            stack_frame: Frame to evaluate in, or None for the global scope
            context: Evaluation context, e.g. "repl"
        """
        if session is None:
            self.value = NOT_AVAILABLE
            self.available = False
            self.result = UNDEFINED
            log.log_evaluation(expression, False, self.value)
            return

        response = await session.evaluate(expression, stack_frame, context)
        if response.success:
            self.value = response.value
            self.type = response.type
            self.result = response.result
            self.available = True
        else:
            self.value = response.message or NOT_AVAILABLE
            self.type = None
            self.result = UNDEFINED
            self.available = False

        log.log_evaluation(expression, self.available, self.value)

    @property
    def has_children(self) -> bool:
        return self.available and value_has_children(self.result)

    async def get_children(self) -> List[ObjectSnapshotEntry]:
        if not self.available:
            return []
        return snapshot_children(self.id, self.result, self.max_children)

    def __str__(self) -> str:
        return f"{self.value}"
