"""Tests for building snippet nodes from tokens."""

import pytest
from markdown_it.token import Token

from stacksnippets import SnippetTreeError, StackSnippet, StackSnippetLang
from stacksnippets.tree import iter_snippets, parse_snippets, snippets_from_tokens


def snippet_tokens(open_attrs, *langs):
    opening = Token("stack_snippet_open", "div", 1, map=[0, 9])
    for name, value in open_attrs.items():
        opening.attrSet(name, value)
    tokens = [opening]
    for language, content in langs:
        token = Token("stack_snippet_lang", "pre", 0, content=content, map=[2, 6])
        token.attrSet("language", language)
        tokens.append(token)
    tokens.append(Token("stack_snippet_close", "div", -1))
    return tokens


class TestEndToEnd:

    def test_example(self, example):
        (snippet,) = parse_snippets(example)
        assert snippet == StackSnippet(
            hide="null",
            console="true",
            babel="false",
            babelPresetReact="null",
            babelPresetTS="null",
            children=[
                StackSnippetLang(language="js", content='console.log("hi");'),
                StackSnippetLang(language="css", content="body { color: red; }"),
            ],
        )

    def test_zero_children(self, md, begin_line):
        (snippet,) = parse_snippets(f"{begin_line}\n\n<!-- end snippet -->", md)
        assert snippet.children == []
        assert snippet.console == "true"

    def test_duplicate_js_gives_no_snippet(self, md, begin_line):
        text = (
            f"{begin_line}\n\n<!-- language: lang-js -->\n\n    a();\n\n"
            "<!-- language: lang-js -->\n\n    b();\n\n<!-- end snippet -->"
        )
        assert parse_snippets(text, md) == []

    def test_document_without_snippets(self, md):
        assert parse_snippets("# Title\n\nJust text.\n", md) == []

    def test_iter_snippets_reports_line_range(self, md, example):
        ((span, snippet),) = list(iter_snippets(md.parse("intro\n\n" + example)))
        assert span == (2, 13)
        assert len(snippet.children) == 2


class TestMalformedTokens:
    """Tokens that did not come from the block rule are checked by the schema."""

    def test_valid_hand_built_stream(self):
        tokens = snippet_tokens({"hide": "true"}, ("html", "<b>hi</b>"))
        (snippet,) = snippets_from_tokens(tokens)
        assert snippet.hide == "true"
        assert snippet.children[0].content == "<b>hi</b>"

    def test_bad_language(self):
        tokens = snippet_tokens({}, ("python", "print()"))
        with pytest.raises(SnippetTreeError) as excinfo:
            snippets_from_tokens(tokens)
        assert excinfo.value.line_number == 2
        assert "Line: 3" in str(excinfo.value)

    def test_unknown_attribute(self):
        tokens = snippet_tokens({"autorun": "true"})
        with pytest.raises(SnippetTreeError) as excinfo:
            snippets_from_tokens(tokens)
        assert excinfo.value.line_number == 0
        assert excinfo.value.original_error is not None

    def test_duplicate_languages(self):
        tokens = snippet_tokens({}, ("css", "a"), ("css", "b"))
        with pytest.raises(SnippetTreeError, match="Invalid stack snippet"):
            snippets_from_tokens(tokens)

    def test_unexpected_child(self):
        tokens = snippet_tokens({})
        tokens.insert(1, Token("hr", "hr", 0))
        with pytest.raises(SnippetTreeError, match="Unexpected 'hr'"):
            snippets_from_tokens(tokens)
