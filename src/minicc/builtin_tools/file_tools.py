"""Tools reading, writing and listing files."""

from pathlib import Path
from typing import Annotated, List, Literal

from pydantic import Field

from minicc.core.exceptions import ToolExecutionError
from minicc.core.logger import get_logger

logger = get_logger(__name__)


def file_read(path: Annotated[str, Field(description="Path to the file to read")]) -> str:
    """Read the contents of a text file."""
    target = Path(path).resolve()
    try:
        return target.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ToolExecutionError(f"Failed to read file: {e}") from e


def file_write(
    path: Annotated[str, Field(description="Path to the file to write")],
    content: Annotated[str, Field(description="Content to write to the file")],
    mode: Annotated[
        Literal["overwrite", "append"], Field(description="Write mode: overwrite or append")
    ] = "overwrite",
) -> str:
    """Write content to a file, creating parent directories as needed."""
    target = Path(path).resolve()
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("a" if mode == "append" else "w", encoding="utf-8") as fh:
            fh.write(content)
    except OSError as e:
        raise ToolExecutionError(f"Failed to write file: {e}") from e

    logger.debug("Wrote %d character(s) to '%s' (%s).", len(content), target, mode)
    return f"File written successfully: {target}"


def file_list(
    path: Annotated[str, Field(description="Path to the directory")] = ".",
    recursive: Annotated[bool, Field(description="Whether to list files recursively")] = False,
) -> List[str]:
    """List the files in a directory."""
    directory = Path(path).resolve()
    if not directory.is_dir():
        raise ToolExecutionError(f"Failed to list files: '{directory}' is not a directory")

    try:
        entries = directory.rglob("*") if recursive else directory.iterdir()
        return sorted(str(entry) for entry in entries if entry.is_file())
    except OSError as e:
        raise ToolExecutionError(f"Failed to list files: {e}") from e
