"""Layout stages: the structural pre-pass and the final cleanup pass."""

import re

from moondeob.core.context import DeobfuscationContext
from moondeob.stages.base import Stage

INDENT_UNIT = "  "

_WHITESPACE_RUN_RE = re.compile(r"\s+")
_TRAILING_COMMA_RE = re.compile(r",(?!\s*[}\]])")
_BLANK_RUN_RE = re.compile(r"\n\s*\n\s*\n")

# Applied one after another, so a later operator can re-touch spacing
# inserted by an earlier one.
_OPERATOR_SPACING = (
    (re.compile(r"\s*=\s*"), " = "),
    (re.compile(r"\s*\+\s*"), " + "),
    (re.compile(r"\s*-\s*"), " - "),
    (re.compile(r"\s*\*\s*"), " * "),
    (re.compile(r"\s*/\s*"), " / "),
)


def collapse_blank_lines(code: str) -> str:
    """Reduce runs of blank lines to a single blank line."""
    return _BLANK_RUN_RE.sub("\n\n", code)


def break_lines(code: str) -> str:
    """Flatten whitespace and break lines at terminators, braces and commas."""
    code = _WHITESPACE_RUN_RE.sub(" ", code)
    code = code.replace(";", ";\n")
    code = code.replace("{", "{\n")
    code = code.replace("}", "\n}\n")
    return _TRAILING_COMMA_RE.sub(",\n", code)


def reindent(code: str) -> str:
    """Re-indent lines by brace depth, two spaces per level.

    A line holding a closing brace is dedented before it is emitted and a
    line holding an opening brace indents the lines after it. Depth never
    goes below zero.
    """
    indent_level = 0
    indented_lines = []
    for line in code.split("\n"):
        trimmed = line.strip()
        if not trimmed:
            indented_lines.append("")
            continue

        if "}" in trimmed:
            indent_level = max(0, indent_level - 1)
        indented_lines.append(INDENT_UNIT * indent_level + trimmed)
        if "{" in trimmed:
            indent_level += 1

    return "\n".join(indented_lines)


def normalize_operator_spacing(code: str) -> str:
    """Put exactly one space on each side of ``= + - * /``."""
    for pattern, replacement in _OPERATOR_SPACING:
        code = pattern.sub(replacement, code)
    return code


class CodeFormatStage(Stage):
    """Stage giving later pattern passes a predictable line structure."""

    name = "format_code"
    description = "Re-flow and re-indent the buffer"
    priority = 20

    def run(self, code: str, context: DeobfuscationContext) -> str:
        return collapse_blank_lines(reindent(break_lines(code)))


class FinalFormatStage(Stage):
    """Stage tidying the buffer after all rewrites."""

    name = "final_format"
    description = "Collapse blank lines, trim and space binary operators"
    priority = 70

    def run(self, code: str, context: DeobfuscationContext) -> str:
        code = collapse_blank_lines(code)
        code = code.strip()
        return normalize_operator_spacing(code)
