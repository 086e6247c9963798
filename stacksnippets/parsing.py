"""markdown-it block rule that recognises stack snippet regions.

The rule turns a valid region into three kinds of token:

    stack_snippet_open   (nesting 1, the five flags as attributes)
    stack_snippet_lang   (nesting 0, one per language, verbatim content)
    stack_snippet_close  (nesting -1)

Anything that is not a valid region is left for the other block rules, so a
malformed snippet simply renders as ordinary html/text.
"""

import logging
from typing import Iterator, Optional, Sequence

from decouple import config as env_config
from markdown_it import MarkdownIt
from markdown_it.rules_block import StateBlock

from .markers import (
    CONTENT_INDENT,
    BeginMetaLine,
    EndMetaLine,
    LangMetaLine,
    MetaLine,
    classify_meta_line,
    looks_like_meta_line,
    source_lines,
)
from .preserve_escape import preserve_escape_plugin
from .rendering import add_render_rules
from .validation import ValidationResult, validate_meta_lines

logger = logging.getLogger(__name__)

DEFAULT_PRESET = env_config("STACKSNIPPETS_PRESET", default="commonmark")


def _collect_meta_lines(state: StateBlock, start_line: int, end_line: int) -> list[MetaLine]:
    """Classify every marker-shaped line in [start_line, end_line)."""
    meta_lines = []
    for index in range(start_line, end_line):
        line = state.src[state.bMarks[index] : state.eMarks[index]]
        # markers are never indented, so anything not starting with `<` is content
        if not line.startswith("<") or not looks_like_meta_line(line):
            continue
        meta = classify_meta_line(line, index)
        if meta is not None:
            meta_lines.append(meta)
    return meta_lines


def stack_snippet_block(state: StateBlock, start_line: int, end_line: int, silent: bool) -> bool:
    # indented 4+ columns: that's an indented code block
    if state.sCount[start_line] - state.blkIndent >= 4:
        return False

    # snippets never nest; an indented marker is someone writing *about* snippets
    if state.blkIndent != 0 or state.tShift[start_line] != 0:
        return False
    if state.parentType == "blockquote":
        return False

    opening_line = state.src[state.bMarks[start_line] : state.eMarks[start_line]]
    if not looks_like_meta_line(opening_line):
        return False

    meta_lines = _collect_meta_lines(state, start_line, end_line)
    result = validate_meta_lines(meta_lines)

    if silent or not result.valid:
        if not result.valid:
            logger.debug(f"No snippet at line {start_line}: {result.reason}")
        return result.valid

    # markers after the end belong to whatever comes next in the document
    region = [m for m in meta_lines if m.index <= result.end_index]
    if len(region) < 2:
        return False

    begin, *body, end = region
    if not isinstance(begin, BeginMetaLine) or not isinstance(end, EndMetaLine):
        logger.debug(f"No snippet at line {start_line}: region not bounded by begin/end")
        return False
    if not all(isinstance(m, LangMetaLine) for m in body):
        return False
    langs = sorted(body, key=lambda m: m.index)

    open_token = state.push("stack_snippet_open", "div", 1)
    for name, value in begin.flags().items():
        open_token.attrSet(name, value)
    open_token.map = [begin.index, end.index + 1]

    for i, lang in enumerate(langs):
        # the next marker (or the end) closes this block
        lang_end = langs[i + 1].index if i + 1 < len(langs) else end.index
        # skip the marker and the blank line after it, and stop before the
        # blank line preceding the next marker
        token = state.push("stack_snippet_lang", "pre", 0)
        token.content = state.getLines(lang.index + 2, lang_end - 1, CONTENT_INDENT, False)
        token.map = [lang.index, lang_end]
        token.attrSet("language", lang.language)

    state.push("stack_snippet_close", "div", -1)
    state.line = end.index + 1
    return True


def describe_region(lines: Sequence[str], offset: int = 0) -> ValidationResult:
    """Validate a region given as plain lines, for diagnostics.

    Args:
        lines: Source lines without line endings, starting at the region
        offset: Line number of lines[0] in the containing document

    Returns:
        The ValidationResult the block rule would act upon
    """
    meta_lines = []
    for i, line in enumerate(lines):
        if not looks_like_meta_line(line):
            continue
        meta = classify_meta_line(line, offset + i)
        if meta is not None:
            meta_lines.append(meta)
    return validate_meta_lines(meta_lines)


def find_regions(text: str) -> Iterator[tuple[int, ValidationResult]]:
    """Yield (line, result) for every begin marker in a document."""
    lines = source_lines(text)
    for index, line in enumerate(lines):
        if isinstance(classify_meta_line(line, index), BeginMetaLine):
            yield index, describe_region(lines[index:], offset=index)


def stack_snippet_plugin(md: MarkdownIt, render: bool = True) -> None:
    """Register the snippet block rule (and, optionally, its html renderers)."""
    md.block.ruler.before("fence", "stack_snippet", stack_snippet_block)
    if render:
        add_render_rules(md)


def make_parser(preset: Optional[str] = None, preserve_escapes: bool = True) -> MarkdownIt:
    """Build a markdown-it parser that understands stack snippets.

    Args:
        preset: markdown-it preset name (defaults to STACKSNIPPETS_PRESET)
        preserve_escapes: Retag backslash escapes as `escape` tokens

    Example:
        md = make_parser()
        html = md.render(source)
    """
    md = MarkdownIt(preset or DEFAULT_PRESET)
    md.use(stack_snippet_plugin)
    if preserve_escapes:
        md.use(preserve_escape_plugin)
    return md
