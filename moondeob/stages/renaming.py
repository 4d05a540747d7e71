"""Identifier and function renaming stages."""

import re

from moondeob.core.context import DeobfuscationContext
from moondeob.core.naming import RenameTable
from moondeob.stages.base import Stage

# Checked in this order; all share the identifier table's counter.
OBFUSCATED_IDENTIFIER_PATTERNS = (
    re.compile(r"\b[a-zA-Z][0-9a-fA-F]{6,}\b", re.ASCII),  # Hex-like variables
    re.compile(r"\b[a-zA-Z]\d{3,}\b", re.ASCII),  # Variables with many numbers
    re.compile(r"\b[a-zA-Z]{1,2}_[0-9a-fA-F]+\b", re.ASCII),  # Underscore patterns
    re.compile(r"\bvar_[0-9a-fA-F]+\b", re.ASCII),  # Common obfuscated prefix
    re.compile(r"\b(?:[a-zA-Z]\d){3,}[a-zA-Z]?\b", re.ASCII),  # Alternating letter/digit (a1b2c3)
)

OBFUSCATED_FUNCTION_RE = re.compile(r"function\s+([a-zA-Z][0-9a-fA-F]{4,})\s*\(", re.ASCII)


def find_obfuscated_identifiers(code: str) -> list[str]:
    """Return candidate identifiers in assignment order.

    Each pattern contributes its distinct matches in first-seen order;
    a token matched by several patterns is listed once, under the first.
    """
    candidates: dict[str, None] = {}
    for pattern in OBFUSCATED_IDENTIFIER_PATTERNS:
        for match in dict.fromkeys(pattern.findall(code)):
            candidates.setdefault(match, None)
    return list(candidates)


def find_obfuscated_functions(code: str) -> list[str]:
    """Return obfuscated function declaration names, left to right."""
    return list(dict.fromkeys(m.group(1) for m in OBFUSCATED_FUNCTION_RE.finditer(code)))


def _rename_all(code: str, tokens: list[str], table: RenameTable) -> str:
    for token in tokens:
        table.assign(token)
    return table.apply(code)


class IdentifierRenameStage(Stage):
    """Stage replacing obfuscated-looking variable tokens with readable nouns."""

    name = "rename_identifiers"
    description = "Rename obfuscated identifiers from the noun pool"
    priority = 30

    def run(self, code: str, context: DeobfuscationContext) -> str:
        return _rename_all(code, find_obfuscated_identifiers(code), context.identifiers)


class FunctionRenameStage(Stage):
    """Stage replacing obfuscated function declaration names with verbs.

    Call sites sharing the exact token are renamed too. Functions that are
    never declared with ``function <name>(`` keep their names.
    """

    name = "rename_functions"
    description = "Rename obfuscated function declarations from the verb pool"
    priority = 40

    def run(self, code: str, context: DeobfuscationContext) -> str:
        return _rename_all(code, find_obfuscated_functions(code), context.functions)
