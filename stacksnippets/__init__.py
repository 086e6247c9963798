"""stacksnippets -- read and write Stack Snippet regions in markdown."""

import logging

# Version - reads from package metadata (set in pyproject.toml)
try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("stacksnippets")
except PackageNotFoundError:
    __version__ = "0.0.0+dev"

logger = logging.getLogger(__name__)

from .errors import SnippetRenderError, SnippetTreeError
from .markers import (
    END_MARKER,
    LANGUAGES,
    SNIPPET_FLAGS,
    BeginMetaLine,
    EndMetaLine,
    LangMetaLine,
    MetaLine,
    classify_meta_line,
)
from .models import NODE_SPECS, StackSnippet, StackSnippetLang
from .parsing import (
    describe_region,
    find_regions,
    make_parser,
    stack_snippet_block,
    stack_snippet_plugin,
)
from .preserve_escape import (
    build_preserve_escape_rule,
    preserve_escape_plugin,
    registered_rule,
)
from .serializer import reformat_snippets, serialize_snippet
from .tree import parse_snippets, snippets_from_tokens
from .validation import ValidationResult, validate_meta_lines

__all__ = [
    "BeginMetaLine",
    "END_MARKER",
    "EndMetaLine",
    "LANGUAGES",
    "LangMetaLine",
    "MetaLine",
    "NODE_SPECS",
    "SNIPPET_FLAGS",
    "SnippetRenderError",
    "SnippetTreeError",
    "StackSnippet",
    "StackSnippetLang",
    "ValidationResult",
    "build_preserve_escape_rule",
    "classify_meta_line",
    "describe_region",
    "find_regions",
    "make_parser",
    "parse_snippets",
    "preserve_escape_plugin",
    "registered_rule",
    "reformat_snippets",
    "serialize_snippet",
    "snippets_from_tokens",
    "stack_snippet_block",
    "stack_snippet_plugin",
    "validate_meta_lines",
]
