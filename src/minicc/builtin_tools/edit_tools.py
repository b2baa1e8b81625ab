"""Tools editing files in place: replace, insert and delete lines."""

from pathlib import Path
from typing import Annotated, Any, Dict, Literal, Optional

from pydantic import Field

from minicc.core.exceptions import ToolExecutionError


def _read_text(target: Path) -> str:
    try:
        return target.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ToolExecutionError(f"Failed to read file: {e}") from e


def _write(target: Path, text: str) -> None:
    try:
        target.write_text(text, encoding="utf-8")
    except OSError as e:
        raise ToolExecutionError(f"Failed to write file: {e}") from e


def file_edit(
    path: Annotated[str, Field(description="Path to the file to edit")],
    old_content: Annotated[str, Field(description="The exact content to replace (must match exactly)")],
    new_content: Annotated[str, Field(description="The new content to replace with")],
    replace_all: Annotated[bool, Field(description="Replace all occurrences instead of the first one")] = False,
) -> Dict[str, Any]:
    """Edit a file by replacing specific content."""
    target = Path(path).resolve()
    text = _read_text(target)

    if not old_content or old_content not in text:
        raise ToolExecutionError("Content to replace not found in file")

    occurrences = text.count(old_content)
    if replace_all:
        updated, replacements = text.replace(old_content, new_content), occurrences
    else:
        updated, replacements = text.replace(old_content, new_content, 1), 1

    _write(target, updated)
    return {
        "file": str(target),
        "replacements": replacements,
        "message": f"Successfully replaced {replacements} occurrence(s)",
    }


def file_insert(
    path: Annotated[str, Field(description="Path to the file to edit")],
    line: Annotated[int, Field(description="Line number to insert at (1-based)")],
    content: Annotated[str, Field(description="Content to insert")],
    position: Annotated[
        Literal["before", "after"], Field(description="Insert before or after the specified line")
    ] = "after",
) -> Dict[str, Any]:
    """Insert content at a specific line in a file."""
    target = Path(path).resolve()
    lines = _read_text(target).split("\n")

    if line < 1 or line > len(lines) + 1:
        raise ToolExecutionError(f"Line number {line} is out of range (1-{len(lines) + 1})")

    index = line - 1 if position == "before" else line
    new_lines = content.split("\n")
    lines[index:index] = new_lines

    _write(target, "\n".join(lines))
    return {
        "file": str(target),
        "inserted_at": line,
        "position": position,
        "lines_added": len(new_lines),
    }


def file_delete_lines(
    path: Annotated[str, Field(description="Path to the file to edit")],
    start_line: Annotated[int, Field(description="First line to delete (1-based)")],
    end_line: Annotated[
        Optional[int], Field(description="Last line to delete (inclusive); defaults to start_line")
    ] = None,
) -> Dict[str, Any]:
    """Delete a range of lines from a file."""
    target = Path(path).resolve()
    lines = _read_text(target).split("\n")
    last = end_line if end_line is not None else start_line

    if start_line < 1 or start_line > len(lines):
        raise ToolExecutionError(f"Start line {start_line} is out of range (1-{len(lines)})")
    if last < start_line or last > len(lines):
        raise ToolExecutionError(f"End line {last} is invalid")

    del lines[start_line - 1 : last]

    _write(target, "\n".join(lines))
    return {
        "file": str(target),
        "deleted_lines": last - start_line + 1,
        "from_line": start_line,
        "to_line": last,
    }
