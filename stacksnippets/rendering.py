"""HTML rendering for snippet tokens.

Mirrors the markup the snippet editor produces on the site:

    <div class="snippet" data-hide="false" ...>
    <div class="snippet-code">
    <pre class="prettyprint-override snippet-code-js lang-js"><code>...</code></pre>
    </div>
    </div>
"""

import logging
import re

from jinja2 import Environment
from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml

logger = logging.getLogger(__name__)

_env = Environment(autoescape=True, keep_trailing_newline=True)

SNIPPET_OPEN_TEMPLATE = _env.from_string(
    '<div class="snippet"{% for name, value in flags %} data-{{ name }}="{{ value }}"{% endfor %}>\n'
    '<div class="snippet-code">\n'
)

SNIPPET_LANG_TEMPLATE = _env.from_string(
    '<pre class="prettyprint-override snippet-code-{{ language }} lang-{{ language }}">'
    "<code>{{ content }}</code></pre>\n"
)

SNIPPET_CLOSE_TEMPLATE = _env.from_string("</div>\n</div>\n")


def _data_attribute(name: str) -> str:
    """babelPresetReact -> babel-preset-react, babelPresetTS -> babel-preset-ts"""
    return re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "-", name).lower()


def render_snippet_open(self, tokens, idx, options, env) -> str:
    flags = [(_data_attribute(name), value) for name, value in tokens[idx].attrItems()]
    return SNIPPET_OPEN_TEMPLATE.render(flags=flags)


def render_snippet_lang(self, tokens, idx, options, env) -> str:
    token = tokens[idx]
    language = token.attrGet("language")
    if not isinstance(language, str):
        language = ""
    return SNIPPET_LANG_TEMPLATE.render(language=language, content=token.content)


def render_snippet_close(self, tokens, idx, options, env) -> str:
    return SNIPPET_CLOSE_TEMPLATE.render()


def render_escape(self, tokens, idx, options, env) -> str:
    """Render a retagged backslash escape as the character it escapes."""
    return escapeHtml(tokens[idx].content)


def add_render_rules(md: MarkdownIt) -> None:
    md.add_render_rule("stack_snippet_open", render_snippet_open)
    md.add_render_rule("stack_snippet_lang", render_snippet_lang)
    md.add_render_rule("stack_snippet_close", render_snippet_close)
    logger.debug("Registered stack snippet html renderers")
