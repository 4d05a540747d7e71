"""String literal decoding stage."""

import re

from moondeob.core.context import DeobfuscationContext
from moondeob.stages.base import Stage

_HEX_ESCAPE_RE = re.compile(r"\\x([0-9A-Fa-f]{2})")
_NUMERIC_ESCAPE_RE = re.compile(r"\\(\d{1,3})", re.ASCII)
_CONCAT_RE = re.compile(r'"([^"]*?)"\s*\.\.\s*"([^"]*?)"', re.ASCII)
_SAFE_HEX_CHAR_RE = re.compile(r"[a-zA-Z0-9 ]")

PRINTABLE_MIN = 32
PRINTABLE_MAX = 126


def decode_hex_escapes(code: str, context: DeobfuscationContext) -> str:
    """Decode ``\\xHH`` escapes that resolve to a letter, digit or space.

    Anything else keeps its original escape text. Hex decodes are not
    recorded in the decoded-string table.
    """
    skipped = 0

    def replace(match: re.Match) -> str:
        nonlocal skipped
        char = chr(int(match.group(1), 16))
        if _SAFE_HEX_CHAR_RE.fullmatch(char):
            return char
        skipped += 1
        return match.group(0)

    code = _HEX_ESCAPE_RE.sub(replace, code)
    if skipped:
        context.warn(f"{skipped} hex escape(s) left undecoded (not a letter, digit or space)")
    return code


def decode_numeric_escapes(code: str, context: DeobfuscationContext) -> str:
    """Decode ``\\DDD`` escapes in the printable ASCII range.

    Each decoded escape text is recorded in ``context.decoded_strings``.
    """
    skipped = 0

    def replace(match: re.Match) -> str:
        nonlocal skipped
        char_code = int(match.group(1))
        if PRINTABLE_MIN <= char_code <= PRINTABLE_MAX:
            char = chr(char_code)
            context.decoded_strings[match.group(0)] = char
            return char
        skipped += 1
        return match.group(0)

    code = _NUMERIC_ESCAPE_RE.sub(replace, code)
    if skipped:
        context.warn(f"{skipped} numeric escape(s) left undecoded (outside printable ASCII)")
    return code


def merge_adjacent_literals(code: str) -> str:
    """Merge ``"A" .. "B"`` into ``"AB"`` in a single non-transitive pass."""
    return _CONCAT_RE.sub(r'"\1\2"', code)


class StringDecodeStage(Stage):
    """Stage resolving escaped string content."""

    name = "decode_strings"
    description = "Decode hex and decimal escapes and merge concatenated literals"
    priority = 10

    def run(self, code: str, context: DeobfuscationContext) -> str:
        code = decode_hex_escapes(code, context)
        code = decode_numeric_escapes(code, context)
        return merge_adjacent_literals(code)
