"""Core modules for the REPL output log and sessions."""

from .entries import EntryKind, EvaluationInputEntry, Severity, SourceLocation, SourceRef, TextEntry
from .evaluation import EvaluationResponse, EvaluationResultEntry
from .formatter import UNDEFINED, ValueKind, classify
from .repl_log import LogFrame, ReplEntry, ReplLog
from .session import DebugSession, PythonSession, StackFrame
from .snapshot import ObjectSnapshotEntry
from . import debug

__all__ = [
    "EntryKind",
    "EvaluationInputEntry",
    "EvaluationResponse",
    "EvaluationResultEntry",
    "LogFrame",
    "ObjectSnapshotEntry",
    "ReplEntry",
    "ReplLog",
    "Severity",
    "SourceLocation",
    "SourceRef",
    "TextEntry",
    "DebugSession",
    "PythonSession",
    "StackFrame",
    "UNDEFINED",
    "ValueKind",
    "classify",
    "debug",
]
