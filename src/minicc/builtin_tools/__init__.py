"""Built-in tools: file access, in-place editing, shell execution and code search."""

from .edit_tools import file_delete_lines, file_edit, file_insert
from .file_tools import file_list, file_read, file_write
from .search_tool import code_search
from .shell_tool import shell_execute

BUILTIN_TOOLS = [
    file_read,
    file_write,
    file_list,
    file_edit,
    file_insert,
    file_delete_lines,
    shell_execute,
    code_search,
]

__all__ = [
    "BUILTIN_TOOLS",
    "file_read",
    "file_write",
    "file_list",
    "file_edit",
    "file_insert",
    "file_delete_lines",
    "shell_execute",
    "code_search",
]
