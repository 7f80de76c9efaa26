"""Rich console wrapper and rendering of REPL entries."""

from typing import Dict, Optional, Sequence

from rich.console import Console, RenderableType
from rich.text import Text
from rich.tree import Tree

from debugrepl.core.entries import EntryKind, Severity
from debugrepl.core.snapshot import ObjectSnapshotEntry

# Global console instance
console = Console()

DEFAULT_STYLES = {
    "info": "",
    "warning": "yellow",
    "error": "red",
    "ignore": "dim italic",
}


def _severity_style(severity: Optional[Severity], styles: Dict[str, str]) -> str:
    if severity is None:
        return ""
    return styles.get(severity.value, "")


def _snapshot_label(name: Optional[str], value: str) -> Text:
    label = Text()
    if name is not None:
        label.append(name, style="cyan")
        label.append(": ")
    label.append(value)
    return label


def render_text(
    text: str,
    severity: Optional[Severity],
    source: Optional[object] = None,
    styles: Optional[Dict[str, str]] = None,
) -> Text:
    """
    Render a run of output text, to be printed with ``end=""``.

    Args:
        text: Output text, possibly without a line ending yet
        severity: Severity selecting the style
        source: Optional source location, shown dimmed once the line is complete
        styles: Severity name to rich style mapping

    Returns:
        Rich Text
    """
    styles = styles if styles is not None else DEFAULT_STYLES
    style = _severity_style(severity, styles)
    if source is None or not text.endswith("\n"):
        return Text(text, style=style)

    body = text[:-2] if text.endswith("\r\n") else text[:-1]
    rendered = Text(body, style=style)
    rendered.append(f"  {source}", style="dim")
    rendered.append("\n")
    return rendered


def render_entry(
    entry,
    children: Optional[Sequence[ObjectSnapshotEntry]] = None,
    prompt: str = ">>>",
    styles: Optional[Dict[str, str]] = None,
    show_source: bool = True,
) -> Optional[RenderableType]:
    """
    Build the renderable for one REPL entry.

    Text entries come back as a Text to print with ``end=""`` so streamed
    fragments continue the same line.

    Args:
        entry: Entry to render
        children: Already fetched children of a snapshot or result
        prompt: Prompt shown before evaluation inputs
        styles: Severity name to rich style mapping
        show_source: Append the source location of output entries

    Returns:
        Renderable, or None when the entry shows nothing
    """
    styles = styles if styles is not None else DEFAULT_STYLES
    source = getattr(entry, "source_data", None) if show_source else None

    if entry.kind is EntryKind.TEXT:
        return render_text(entry.value, entry.severity, source, styles)

    if entry.kind is EntryKind.EVALUATION_INPUT:
        rendered = Text(f"{prompt} ", style="bold green")
        rendered.append(entry.value)
        return rendered

    if entry.kind is EntryKind.EVALUATION_RESULT:
        if not entry.available:
            return Text(entry.value, style=styles.get("error", "red"))
        if not entry.value and not children:
            return None
        if children:
            tree = Tree(_snapshot_label(None, entry.value))
            for child in children:
                tree.add(_snapshot_label(child.name, child.value))
            return tree
        return Text(entry.value)

    if entry.kind is EntryKind.OBJECT_SNAPSHOT:
        label = _snapshot_label(entry.name, entry.value)
        label.stylize(_severity_style(entry.severity, styles))
        if source is not None:
            label.append(f"  {source}", style="dim")
        tree = Tree(label)
        for child in children or ():
            tree.add(_snapshot_label(child.name, child.value))
        if entry.annotation:
            tree.add(Text(entry.annotation, style="dim italic"))
        return tree

    return Text(str(entry))
