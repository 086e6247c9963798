"""Structural validation of a run of snippet marker lines."""

from dataclasses import dataclass
from typing import Iterable, Optional

from .markers import BeginMetaLine, EndMetaLine, LangMetaLine, MetaLine

MISSING_BOUNDS = "Did not discover beginning and end"

DUPLICATE_REASONS = {
    "begin": "Duplicate Begin block",
    "end": "Duplicate End block",
    "js": "Duplicate JS block",
    "html": "Duplicate HTML block",
    "css": "Duplicate CSS block",
}


@dataclass
class ValidationResult:
    """Outcome of validating a candidate region.

    Attributes:
        valid: True when exactly one begin and one end were found with no
            duplicate language markers before them
        begin_index: Source line of the begin marker, if seen
        end_index: Source line of the end marker, if seen
        js_index: Source line of the js language marker, if seen
        html_index: Source line of the html language marker, if seen
        css_index: Source line of the css language marker, if seen
        reason: Human-readable explanation when invalid
    """

    valid: bool = False
    begin_index: Optional[int] = None
    end_index: Optional[int] = None
    js_index: Optional[int] = None
    html_index: Optional[int] = None
    css_index: Optional[int] = None
    reason: Optional[str] = MISSING_BOUNDS

    def language_index(self, language: str) -> Optional[int]:
        return getattr(self, f"{language}_index")


def _invalid(category: str) -> ValidationResult:
    return ValidationResult(valid=False, reason=DUPLICATE_REASONS[category])


def validate_meta_lines(meta_lines: Iterable[MetaLine]) -> ValidationResult:
    """Check that marker lines form a single well-formed region.

    Scans forward in source order, failing on the first repeated category.
    Scanning stops as soon as both a begin and an end have been recorded;
    markers after that point belong to whatever follows the region.

    Args:
        meta_lines: Classified marker lines, ordered by source line

    Returns:
        ValidationResult with the recorded positions, or with `reason` set
        when the markers are not a valid region
    """
    result = ValidationResult()

    for meta in meta_lines:
        match meta:
            case BeginMetaLine():
                if result.begin_index is not None:
                    return _invalid("begin")
                result.begin_index = meta.index
            case EndMetaLine():
                if result.end_index is not None:
                    return _invalid("end")
                result.end_index = meta.index
            case LangMetaLine():
                if result.language_index(meta.language) is not None:
                    return _invalid(meta.language)
                setattr(result, f"{meta.language}_index", meta.index)
            case _:
                raise TypeError(f"Not a snippet marker line: {meta!r}")

        if result.begin_index is not None and result.end_index is not None:
            result.valid = True
            result.reason = None
            break

    return result
