"""Recursive regular-expression search over source files."""

import os
import re
from pathlib import Path
from typing import Annotated, Any, Dict, List, Optional

from pydantic import Field

from minicc.core.exceptions import ToolExecutionError
from minicc.core.logger import get_logger

logger = get_logger(__name__)

SKIPPED_DIRECTORIES = {"node_modules", "__pycache__"}


def code_search(
    pattern: Annotated[str, Field(description="Pattern to search for (regex supported, case-insensitive)")],
    directory: Annotated[str, Field(description="Directory to search in")] = ".",
    file_extensions: Annotated[
        Optional[List[str]], Field(description='File extensions to include (e.g., ["py", "ts"]); empty means all files')
    ] = None,
    max_results: Annotated[int, Field(description="Maximum number of results to return", ge=1)] = 50,
) -> Dict[str, Any]:
    """Search for a pattern in code files, one result per matching line."""
    try:
        regex = re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        raise ToolExecutionError(f"Search failed: invalid pattern: {e}") from e

    root = Path(directory).resolve()
    if not root.is_dir():
        raise ToolExecutionError(f"Search failed: '{root}' is not a directory")

    extensions = {ext.lstrip(".") for ext in file_extensions or [] if ext}
    results: List[Dict[str, Any]] = []

    for current, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if not d.startswith(".") and d not in SKIPPED_DIRECTORIES)
        for filename in sorted(filenames):
            if extensions and Path(filename).suffix.lstrip(".") not in extensions:
                continue
            _search_file(Path(current) / filename, regex, results, max_results)
            if len(results) >= max_results:
                return _summary(pattern, results)

    return _summary(pattern, results)


def _search_file(path: Path, regex: re.Pattern, results: List[Dict[str, Any]], max_results: int) -> None:
    try:
        with path.open(encoding="utf-8") as fh:
            for number, line in enumerate(fh, start=1):
                if regex.search(line):
                    results.append({"file": str(path), "line": number, "match": line.strip()})
                    if len(results) >= max_results:
                        return
    except (OSError, UnicodeDecodeError) as e:
        # binary or unreadable files are not searchable
        logger.debug("Skipping '%s': %s", path, e)


def _summary(pattern: str, results: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"query": pattern, "total_matches": len(results), "results": results}
