"""Document-tree nodes for stack snippets.

`StackSnippet` is the container node; `StackSnippetLang` holds the verbatim
source of one language. Both are immutable once built and refuse attributes
they do not declare.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .markers import LANGUAGES, SNIPPET_FLAGS

TriState = Literal["true", "false", "null"]
Language = Literal["js", "css", "html"]


class StackSnippetLang(BaseModel):
    """One language block of a snippet; `content` is never parsed."""

    language: Language
    content: str = ""

    model_config = ConfigDict(extra="forbid", frozen=True)


class StackSnippet(BaseModel):
    """A recognised snippet region.

    The flags keep the snippet editor's tri-state strings ("true", "false",
    "null") rather than booleans so they serialise back exactly as read.
    """

    hide: TriState = "null"
    console: TriState = "null"
    babel: TriState = "null"
    babel_preset_react: TriState = Field("null", alias="babelPresetReact")
    babel_preset_ts: TriState = Field("null", alias="babelPresetTS")
    children: List[StackSnippetLang] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    @field_validator("children")
    @classmethod
    def one_block_per_language(cls, children: List[StackSnippetLang]) -> List[StackSnippetLang]:
        # any subset of the languages is fine, in document order
        seen = set()
        for child in children:
            if child.language in seen:
                raise ValueError(f"Duplicate {child.language} block")
            seen.add(child.language)
        return children

    def flags(self) -> dict[str, str]:
        """Flag values keyed by marker name, in marker order."""
        dumped = self.model_dump(by_alias=True, exclude={"children"})
        return {name: dumped[name] for name in SNIPPET_FLAGS}

    def language(self, name: str) -> Optional[StackSnippetLang]:
        for child in self.children:
            if child.language == name:
                return child
        return None


# Node shapes for hosts building an editor schema of their own. Language
# blocks are optional and unordered, at most one per language.
NODE_SPECS = {
    "stack_snippet": {
        "content": "stack_snippet_lang{0,%d}" % len(LANGUAGES),
        "group": "block",
        "inline": False,
        "selectable": False,
        "defining": True,
        "isolating": True,
        "attrs": {name: {"default": "null"} for name in SNIPPET_FLAGS},
    },
    "stack_snippet_lang": {
        "content": "text*",
        "code": True,
        "inline": False,
        "defining": True,
        "isolating": True,
        "attrs": {"language": {"default": "", "values": LANGUAGES}},
    },
}
