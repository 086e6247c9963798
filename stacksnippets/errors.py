"""Exception classes for stacksnippets.

Recognising snippets never raises; a region that does not match is just not
a snippet. These errors cover building the document tree and the file-level
work done by the command line.
"""

from typing import Optional


class SnippetTreeError(Exception):
    """A snippet token stream could not be turned into tree nodes."""

    def __init__(
        self,
        message: str,
        original_error: Optional[Exception] = None,
        line_number: Optional[int] = None,
    ):
        self.original_error = original_error
        self.line_number = line_number
        super().__init__(message)

    def __str__(self):
        parts = [f"Error: {self.args[0]}"]
        if self.line_number is not None:
            # token maps are zero-based, editors are not
            parts.append(f"  Line: {self.line_number + 1}")
        if self.original_error is not None:
            parts.append(f"  {self.original_error}")
        return "\n".join(parts)


class SnippetRenderError(Exception):
    """User-friendly wrapper for failures reading or writing documents."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to process {path}: {reason}")
