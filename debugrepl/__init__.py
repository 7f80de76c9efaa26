"""debugrepl - bounded output log and interactive console for expression evaluation."""

__version__ = "0.1.0"
