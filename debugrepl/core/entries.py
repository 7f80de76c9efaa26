"""Output entries shown in the REPL."""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Optional


class Severity(Enum):
    """Output channel of an entry."""

    IGNORE = "ignore"  # Synthetic system messages
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class EntryKind(Enum):
    """Discriminator for the closed set of entry variants."""

    TEXT = "text"
    OBJECT_SNAPSHOT = "object_snapshot"
    EVALUATION_INPUT = "evaluation_input"
    EVALUATION_RESULT = "evaluation_result"


@dataclass(frozen=True)
class SourceRef:
    """A source file as resolved by a session."""

    name: str
    path: str


@dataclass(frozen=True)
class SourceLocation:
    """Where a piece of runtime output was produced."""

    source: SourceRef
    line_number: int
    column: int = 0

    def __str__(self) -> str:
        return f"{self.source.name}:{self.line_number}"


@dataclass(eq=False)
class TextEntry:
    """Free-form text output. The value grows in place when output is coalesced."""

    kind: ClassVar[EntryKind] = EntryKind.TEXT

    session: Any
    id: str
    value: str
    severity: Severity
    source_data: Optional[SourceLocation] = None

    def get_id(self) -> str:
        return self.id

    def __str__(self) -> str:
        return self.value


@dataclass(eq=False)
class EvaluationInputEntry:
    """An expression submitted by the user."""

    kind: ClassVar[EntryKind] = EntryKind.EVALUATION_INPUT

    value: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def get_id(self) -> str:
        return self.id

    def __str__(self) -> str:
        return self.value
