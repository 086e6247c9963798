"""Tests for retagging backslash escapes."""

from markdown_it import MarkdownIt
from markdown_it.rules_inline import StateInline

from stacksnippets import make_parser
from stacksnippets.preserve_escape import (
    build_preserve_escape_rule,
    preserve_escape_plugin,
    registered_rule,
)


def inline_children(md, text):
    return [child for token in md.parse(text) if token.type == "inline" for child in token.children]


def make_inline_state(src="*"):
    return StateInline(src, MarkdownIt(), {}, [])


def fake_escape(state, silent):
    if not silent:
        token = state.push("text_special", "", 0)
        token.content = state.src[state.pos]
        token.info = "escape"
    state.pos += 1
    return True


class TestPlugin:

    def test_escape_is_retagged(self, md):
        children = inline_children(md, r"a \* b")
        escapes = [t for t in children if t.type == "escape"]
        assert len(escapes) == 1
        assert escapes[0].content == "*"
        assert escapes[0].markup == r"\*"
        assert [t.type for t in children] == ["text", "escape", "text"]

    def test_no_escapes_no_escape_tokens(self, md):
        children = inline_children(md, "plain *text*")
        assert "escape" not in [t.type for t in children]
        assert "text_special" not in [t.type for t in children]

    def test_html_is_unchanged(self):
        plain = MarkdownIt("commonmark")
        for text in ["plain *text*", r"1\. not a list \*stars\*", "\\<b\\> and a\\\nbreak"]:
            assert make_parser().render(text) == plain.render(text)

    def test_can_be_turned_off(self):
        children = inline_children(make_parser(preserve_escapes=False), r"a \* b")
        assert "escape" not in [t.type for t in children]

    def test_disabled_escape_rule_stays_disabled(self):
        md = MarkdownIt("commonmark").disable("escape")
        preserve_escape_plugin(md)
        assert "escape" not in md.inline.ruler.get_active_rules()
        assert "escape" not in [t.type for t in inline_children(md, r"\*a\*")]

    def test_without_delegate_escapes_stay_literal(self):
        md = MarkdownIt("commonmark")
        md.inline.ruler.at("escape", build_preserve_escape_rule(None))
        children = inline_children(md, r"1\. \# done")
        assert "escape" not in [t.type for t in children]
        assert "".join(t.content for t in children) == r"1\. \# done"

    def test_wraps_the_registered_escape_rule(self):
        """A host's own escape rule is delegated to, not replaced by the stock one."""
        md = MarkdownIt("commonmark")
        md.inline.ruler.at("escape", fake_escape)
        preserve_escape_plugin(md)
        assert registered_rule(md, "escape") is not fake_escape
        children = inline_children(md, "a!b")
        assert [(t.type, t.content) for t in children] == [("text", "a"), ("escape", "!"), ("text", "b")]

    def test_explicit_escape_rule(self):
        md = MarkdownIt("commonmark")
        preserve_escape_plugin(md, escape_rule=fake_escape)
        assert [t.type for t in inline_children(md, "a!b")] == ["text", "escape", "text"]


class TestWrapper:

    def test_retags_new_escape_token(self):
        rule = build_preserve_escape_rule(fake_escape)
        state = make_inline_state()
        assert rule(state, False) is True
        assert [t.type for t in state.tokens] == ["escape"]
        assert state.pos == 1

    def test_silent_mode_passes_through(self):
        rule = build_preserve_escape_rule(fake_escape)
        state = make_inline_state()
        assert rule(state, True) is True
        assert state.tokens == []
        assert state.pos == 1

    def test_no_match(self):
        rule = build_preserve_escape_rule(lambda state, silent: False)
        state = make_inline_state()
        assert rule(state, False) is False
        assert state.tokens == []

    def test_earlier_tokens_left_alone(self):
        """A match that pushes no escape token (a hardbreak) retags nothing."""

        def hardbreak(state, silent):
            state.push("hardbreak", "br", 0)
            return True

        state = make_inline_state()
        earlier = state.push("text_special", "", 0)
        earlier.info = "escape"
        assert build_preserve_escape_rule(hardbreak)(state, False) is True
        assert earlier.type == "text_special"

    def test_without_delegate(self):
        rule = build_preserve_escape_rule(None)
        state = make_inline_state()
        assert rule(state, False) is False
        assert state.pos == 0
