"""Statistics and heuristic scoring for a deobfuscation run."""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Sized

CONFIDENCE_BASE = 40
CONFIDENCE_CAP = 95
IDENTIFIER_WEIGHT = 2
STRING_WEIGHT = 3
FUNCTION_WEIGHT = 5


class ComplexityClass(str, Enum):
    """Coarse size bucket of the input, for display only."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


@dataclass
class Statistics:
    """Counts and scores describing one deobfuscation run."""
    original_line_count: int
    final_line_count: int
    identifiers_renamed: int
    strings_decoded: int
    functions_renamed: int
    complexity: ComplexityClass
    confidence: int

    def to_dict(self) -> dict:
        data = asdict(self)
        data["complexity"] = self.complexity.value
        return data


def count_lines(text: str) -> int:
    """Number of newline-separated segments; empty text counts as one line."""
    return len(text.split("\n"))


def classify_complexity(original_line_count: int, identifiers_renamed: int) -> ComplexityClass:
    if original_line_count > 200 or identifiers_renamed > 50:
        return ComplexityClass.HIGH
    if original_line_count > 50 or identifiers_renamed > 20:
        return ComplexityClass.MEDIUM
    return ComplexityClass.LOW


def confidence_score(identifiers_renamed: int, strings_decoded: int, functions_renamed: int) -> int:
    """Weighted transformation count on top of a base of 40, capped at 95."""
    score = (
        CONFIDENCE_BASE
        + IDENTIFIER_WEIGHT * identifiers_renamed
        + STRING_WEIGHT * strings_decoded
        + FUNCTION_WEIGHT * functions_renamed
    )
    return min(CONFIDENCE_CAP, score)


def collect_statistics(
    original_code: str,
    final_code: str,
    identifier_table: Sized,
    decoded_strings: Sized,
    function_table: Sized,
) -> Statistics:
    """Derive statistics from the input, the final buffer and the three tables."""
    original_line_count = count_lines(original_code)
    identifiers_renamed = len(identifier_table)
    strings_decoded = len(decoded_strings)
    functions_renamed = len(function_table)

    return Statistics(
        original_line_count=original_line_count,
        final_line_count=count_lines(final_code),
        identifiers_renamed=identifiers_renamed,
        strings_decoded=strings_decoded,
        functions_renamed=functions_renamed,
        complexity=classify_complexity(original_line_count, identifiers_renamed),
        confidence=confidence_score(identifiers_renamed, strings_decoded, functions_renamed),
    )
