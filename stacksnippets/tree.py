"""Build StackSnippet nodes from a markdown-it token stream."""

import logging
from typing import Iterator, List, Optional, Sequence, Tuple

from markdown_it import MarkdownIt
from markdown_it.token import Token
from markdown_it.tree import SyntaxTreeNode
from pydantic import ValidationError

from .errors import SnippetTreeError
from .models import StackSnippet, StackSnippetLang
from .parsing import make_parser

logger = logging.getLogger(__name__)


def _snippet_from_node(node: SyntaxTreeNode) -> StackSnippet:
    line = node.map[0] if node.map else None
    children = []
    for child in node.children:
        if child.type != "stack_snippet_lang":
            raise SnippetTreeError(
                f"Unexpected '{child.type}' inside a stack snippet", line_number=line
            )
        try:
            children.append(
                StackSnippetLang(language=child.attrs.get("language"), content=child.content)
            )
        except ValidationError as e:
            raise SnippetTreeError(
                "Invalid stack snippet language block",
                original_error=e,
                line_number=child.map[0] if child.map else line,
            ) from e

    try:
        return StackSnippet.model_validate({**node.attrs, "children": children})
    except ValidationError as e:
        raise SnippetTreeError(
            "Invalid stack snippet", original_error=e, line_number=line
        ) from e


def iter_snippets(tokens: Sequence[Token]) -> Iterator[Tuple[Tuple[int, int], StackSnippet]]:
    """Yield ((first_line, end_line), snippet) for each snippet in a token stream."""
    for node in SyntaxTreeNode(tokens).walk():
        if node.type == "stack_snippet":
            yield node.map, _snippet_from_node(node)


def snippets_from_tokens(tokens: Sequence[Token]) -> List[StackSnippet]:
    """Collect every stack snippet in a block token stream, in document order.

    Raises:
        SnippetTreeError: if a snippet's attributes or children are rejected
            by the node schema
    """
    snippets = [snippet for _, snippet in iter_snippets(tokens)]
    logger.debug(f"Built {len(snippets)} stack snippet node(s)")
    return snippets


def parse_snippets(text: str, md: Optional[MarkdownIt] = None) -> List[StackSnippet]:
    """Parse markdown text and return the stack snippets it contains."""
    if md is None:
        md = make_parser()
    return snippets_from_tokens(md.parse(text))
