"""Marker lines of the stack snippet envelope.

A snippet region looks like this in the source document:

    <!-- begin snippet: js hide: false console: true babel: false babelPresetReact: false babelPresetTS: false -->

    <!-- language: lang-js -->

        console.log("hi");

    <!-- end snippet -->

Only the marker lines are structurally significant. This module recognises
them one line at a time; it knows nothing about regions or documents.
"""

import re
from dataclasses import dataclass
from typing import Optional, Union

END_MARKER = "<!-- end snippet -->"

LANGUAGES = ("js", "css", "html")
TRI_STATE_VALUES = ("true", "false", "null")

# flag names in the order the snippet editor writes them
SNIPPET_FLAGS = ("hide", "console", "babel", "babelPresetReact", "babelPresetTS")

# content lines are always padded by exactly this many columns
CONTENT_INDENT = 4

# cheap pre-check: anything shaped like one of our markers
META_LINE_PATTERN = re.compile(r"^<!-- (?:begin snippet:|end snippet |language:)(.*)-->$")

LANG_PATTERN = re.compile(r"^<!-- language: lang-(?P<lang>css|html|js) -->")

# The snippet editor always writes all five flags in this order, so the
# pattern is deliberately not order resilient.
BEGIN_PATTERN = re.compile(
    r"^<!-- begin snippet: js "
    r"(?:hide: (?P<hide>true|false|null)\s)"
    r"(?:console: (?P<console>true|false|null)\s)"
    r"(?:babel: (?P<babel>true|false|null)\s)"
    r"(?:babelPresetReact: (?P<babelPresetReact>true|false|null)\s)"
    r"(?:babelPresetTS: (?P<babelPresetTS>true|false|null)\s)"
    r"-->"
)


@dataclass(frozen=True)
class BeginMetaLine:
    """The `<!-- begin snippet: ... -->` line, with its five flags."""

    index: int
    hide: str
    console: str
    babel: str
    babel_preset_react: str
    babel_preset_ts: str

    def flags(self) -> dict[str, str]:
        """Flag values keyed by their marker names, in marker order."""
        return {
            "hide": self.hide,
            "console": self.console,
            "babel": self.babel,
            "babelPresetReact": self.babel_preset_react,
            "babelPresetTS": self.babel_preset_ts,
        }


@dataclass(frozen=True)
class EndMetaLine:
    index: int


@dataclass(frozen=True)
class LangMetaLine:
    index: int
    language: str


MetaLine = Union[BeginMetaLine, EndMetaLine, LangMetaLine]


def looks_like_meta_line(line: str) -> bool:
    """Return True if `line` has the outline of a snippet marker."""
    return META_LINE_PATTERN.match(line) is not None


def classify_meta_line(line: str, index: int) -> Optional[MetaLine]:
    """Classify a single source line.

    Args:
        line: Raw source line, without its trailing newline
        index: Zero-based line number the line came from

    Returns:
        A BeginMetaLine, EndMetaLine or LangMetaLine, or None when the line
        is not a snippet marker.

    Examples:
        >>> classify_meta_line("<!-- end snippet -->", 7)
        EndMetaLine(index=7)
        >>> classify_meta_line("<!-- language: lang-css -->", 2)
        LangMetaLine(index=2, language='css')
        >>> classify_meta_line("<!-- begin snippet: js hide: true -->", 0) is None
        True
    """
    if line == END_MARKER:
        return EndMetaLine(index=index)

    lang_match = LANG_PATTERN.match(line)
    if lang_match:
        return LangMetaLine(index=index, language=lang_match.group("lang"))

    begin_match = BEGIN_PATTERN.match(line)
    if begin_match:
        return BeginMetaLine(
            index=index,
            hide=begin_match.group("hide"),
            console=begin_match.group("console"),
            babel=begin_match.group("babel"),
            babel_preset_react=begin_match.group("babelPresetReact"),
            babel_preset_ts=begin_match.group("babelPresetTS"),
        )

    return None


def source_lines(text: str) -> list[str]:
    """Split text into lines the way markdown-it numbers them."""
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
