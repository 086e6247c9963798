"""Write stack snippets back out in the snippet editor's own format.

The editor is picky: flags are always written in the same order, content is
padded by four spaces, but empty lines get no padding at all. Output is
equivalent to the input at the level of flags and per-language content.
Whitespace-only lines inside a block come back as empty lines.
"""

import logging
from typing import Optional

from markdown_it import MarkdownIt

from .markers import CONTENT_INDENT, END_MARKER, SNIPPET_FLAGS, source_lines
from .models import StackSnippet
from .parsing import make_parser
from .tree import iter_snippets

logger = logging.getLogger(__name__)

PADDING = " " * CONTENT_INDENT


def begin_marker(snippet: StackSnippet) -> str:
    flags = snippet.flags()
    fields = " ".join(f"{name}: {flags.get(name) or 'null'}" for name in SNIPPET_FLAGS)
    return f"<!-- begin snippet: js {fields} -->"


def serialize_snippet(snippet: StackSnippet) -> str:
    """Render a StackSnippet as envelope text, without a trailing newline."""
    parts = [begin_marker(snippet), "\n\n"]
    for lang in snippet.children:
        parts.append(f"<!-- language: lang-{lang.language} -->\n\n")
        for line in lang.content.split("\n"):
            parts.append((PADDING + line if line != "" else line) + "\n")
        parts.append("\n")
    parts.append(END_MARKER)
    return "".join(parts)


def reformat_snippets(text: str, md: Optional[MarkdownIt] = None) -> str:
    """Rewrite every snippet region of a document in canonical form.

    Lines outside snippet regions are returned untouched.
    """
    if md is None:
        md = make_parser()

    regions = list(iter_snippets(md.parse(text)))
    lines = source_lines(text)
    # replace from the bottom up so earlier line numbers stay valid
    for (first, end), snippet in reversed(regions):
        lines[first:end] = serialize_snippet(snippet).split("\n")

    logger.debug(f"Reformatted {len(regions)} snippet region(s)")
    return "\n".join(lines)
