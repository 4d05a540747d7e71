"""Expression simplification stage."""

import re

from moondeob.core.context import DeobfuscationContext
from moondeob.debug import debug_log
from moondeob.stages.base import Stage

IDENTITY_RULES = (
    # Arithmetic identities
    (re.compile(r"(\d+)\s*\+\s*0\b(?!\.\d)", re.ASCII), r"\1"),
    (re.compile(r"(?<![\w.])0\s*\+\s*(\d+)", re.ASCII), r"\1"),
    (re.compile(r"(\d+)\s*\*\s*1\b(?!\.\d)", re.ASCII), r"\1"),
    (re.compile(r"(?<![\w.])1\s*\*\s*(\d+)", re.ASCII), r"\1"),
    # Short-circuit identities
    (re.compile(r"\btrue\s+and\s+(.+)", re.ASCII), r"\1"),
    (re.compile(r"(.+)\s+and\s+true\b", re.ASCII), r"\1"),
    (re.compile(r"\bfalse\s+or\s+(.+)", re.ASCII), r"\1"),
    (re.compile(r"(.+)\s+or\s+false\b", re.ASCII), r"\1"),
)


def simplify_once(code: str) -> str:
    """Apply every identity rule once, in order."""
    for pattern, replacement in IDENTITY_RULES:
        code = pattern.sub(replacement, code)
    return code


class ExpressionSimplifyStage(Stage):
    """Stage removing additive, multiplicative and boolean identities.

    Runs a single pass by default, so nested redundancies may survive:
    ``2 + 1 * 0`` becomes ``2 + 0``. Fixed-point mode repeats the pass
    until the buffer stops changing or the pass limit is reached.
    """

    name = "simplify_expressions"
    description = "Simplify identity expressions"
    priority = 50

    def run(self, code: str, context: DeobfuscationContext) -> str:
        if not context.simplify_to_fixed_point:
            return simplify_once(code)

        passes = 0
        for passes in range(1, context.max_simplify_passes + 1):
            simplified = simplify_once(code)
            if simplified == code:
                break
            code = simplified
        debug_log("debug", f"Simplification settled after {passes} pass(es)")
        return code
