"""Tool running shell commands on the local machine, without sandboxing."""

import os
import subprocess
from typing import Annotated, Optional

from pydantic import Field

from minicc.core.exceptions import ToolExecutionError
from minicc.core.logger import get_logger
from minicc.core.tools import ToolExecutionResult

logger = get_logger(__name__)

MAX_OUTPUT_CHARS = 10 * 1024 * 1024


def shell_execute(
    command: Annotated[str, Field(description="The shell command to execute")],
    cwd: Annotated[
        Optional[str], Field(description="Working directory for the command; defaults to the current directory")
    ] = None,
    timeout: Annotated[int, Field(description="Timeout in milliseconds", gt=0)] = 30000,
) -> ToolExecutionResult:
    """Execute a shell command and return its output."""
    workdir = cwd or os.getcwd()
    logger.info("Running shell command in '%s': %s", workdir, command)

    try:
        completed = subprocess.run(
            command,
            shell=True,
            cwd=workdir,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout / 1000,
        )
    except subprocess.TimeoutExpired as e:
        raise ToolExecutionError(f"Command failed: timed out after {timeout} ms") from e
    except OSError as e:
        raise ToolExecutionError(f"Command failed: {e}") from e

    stdout = completed.stdout.strip()[:MAX_OUTPUT_CHARS]
    stderr = completed.stderr.strip()[:MAX_OUTPUT_CHARS]

    if completed.returncode != 0:
        return ToolExecutionResult.failure(
            f"Command failed with exit code {completed.returncode}",
            data={"stdout": stdout, "stderr": stderr, "code": completed.returncode},
        )

    return ToolExecutionResult.ok({"stdout": stdout, "stderr": stderr, "command": command})
