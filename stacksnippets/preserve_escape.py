"""Keep backslash escapes visible to later stages.

markdown-it's `escape` rule emits a `text_special` token (info="escape") that
the `text_join` core rule folds back into plain text, losing the fact that the
character was escaped. Retagging the token as `escape` keeps it out of that
merge so it can be rendered (or serialised) specially.
"""

import logging
from typing import Callable, Optional

from markdown_it import MarkdownIt
from markdown_it.rules_inline import StateInline

from .rendering import render_escape

logger = logging.getLogger(__name__)

InlineRule = Callable[[StateInline, bool], bool]


def _noop(state: StateInline, silent: bool) -> bool:
    return False


def build_preserve_escape_rule(escape_rule: Optional[InlineRule]) -> InlineRule:
    """Wrap an inline escape rule so its tokens are retagged as `escape`.

    Args:
        escape_rule: The host's escape rule, or None if escapes are disabled

    Returns:
        An inline rule. With no escape rule to wrap it never matches.
    """
    if escape_rule is None:
        return _noop

    def preserve_escape(state: StateInline, silent: bool) -> bool:
        first_new = len(state.tokens)
        matched = escape_rule(state, silent)
        if silent or not matched:
            return matched

        # a matched escape pushes at most one token; hardbreaks push none
        for token in reversed(state.tokens[first_new:]):
            if token.info == "escape":
                token.type = "escape"
                break

        return matched

    return preserve_escape


def registered_rule(md: MarkdownIt, name: str) -> Optional[InlineRule]:
    """The function currently registered under `name` in the inline ruler."""
    for rule in md.inline.ruler.__rules__:
        if rule.name == name:
            return rule.fn
    return None


def preserve_escape_plugin(md: MarkdownIt, escape_rule: Optional[InlineRule] = None) -> None:
    """Replace the `escape` inline rule with a retagging wrapper.

    By default the wrapper delegates to whatever rule the host registered as
    `escape`, so a customised escape rule keeps working. Pass `escape_rule` to
    delegate to a different function instead.
    """
    registered = registered_rule(md, "escape")
    if registered is None:
        logger.debug("No inline escape rule to wrap; escapes will not be preserved")
        return

    md.inline.ruler.at("escape", build_preserve_escape_rule(escape_rule or registered))
    md.add_render_rule("escape", render_escape)
