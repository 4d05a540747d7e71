"""Dead code removal stage."""

import re

from moondeob.core.context import DeobfuscationContext
from moondeob.stages.base import Stage

_EMPTY_FUNCTION_RE = re.compile(r"function\s+\w+\s*\(\s*\)\s*end", re.ASCII)
# A nil followed by an operator continues an expression and is kept.
_NIL_LOCAL_RE = re.compile(
    r"local\s+\w+\s*=\s*nil\b(?!\s*(?:and\b|or\b|[-+*/%^<>=~,.:\[(]))\s*;?[ \t]*\n?",
    re.ASCII,
)


def remove_empty_functions(code: str) -> str:
    return _EMPTY_FUNCTION_RE.sub("", code)


def remove_nil_locals(code: str) -> str:
    return _NIL_LOCAL_RE.sub("", code)


class DeadCodeStage(Stage):
    """Stage dropping empty functions and nil-initialised locals.

    Purely textual: no usage or data-flow analysis is done.
    """

    name = "remove_dead_code"
    description = "Remove empty functions and nil-initialised locals"
    priority = 60

    def run(self, code: str, context: DeobfuscationContext) -> str:
        code = remove_empty_functions(code)
        return remove_nil_locals(code)
