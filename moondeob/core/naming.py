"""Replacement name pools and the rename table built from them."""

import re
from typing import Iterator, Sequence

# 36 nouns for obfuscated variables; none shadows a Lua standard global.
IDENTIFIER_NAME_POOL: tuple[str, ...] = (
    "value", "result", "data", "item", "entry", "record",
    "buffer", "reference", "target", "source", "count", "index",
    "offset", "total", "amount", "limit", "state", "status",
    "flag", "mode", "option", "setting", "element", "node",
    "payload", "message", "label", "content", "object", "field",
    "member", "cursor", "token", "segment", "chunk", "context",
)

# 10 verbs for obfuscated function declarations.
FUNCTION_NAME_POOL: tuple[str, ...] = (
    "initialize", "update", "render", "process", "handle",
    "execute", "perform", "calculate", "validate", "transform",
)


def pool_name(pool: Sequence[str], counter: int) -> str:
    """Return the replacement name for ``counter`` drawn from ``pool``.

    The base word cycles through the pool; once the pool is exhausted a
    numeric suffix (the number of completed cycles) is appended, so every
    counter value maps to a distinct name.
    """
    base_name = pool[counter % len(pool)]
    suffix = counter // len(pool)
    return f"{base_name}_{suffix}" if suffix > 0 else base_name


class RenameTable:
    """Insertion-ordered mapping of original tokens to replacement names.

    Names are drawn from a fixed pool with a strictly increasing counter, so
    keys and values are both unique within one table.
    """

    def __init__(self, pool: Sequence[str]):
        if not pool:
            raise ValueError("Name pool must not be empty")
        self.pool = tuple(pool)
        self.counter = 0
        self._renames: dict[str, str] = {}

    def assign(self, token: str) -> str:
        """Record ``token`` if unseen and return its replacement name."""
        existing = self._renames.get(token)
        if existing is not None:
            return existing

        new_name = pool_name(self.pool, self.counter)
        self._renames[token] = new_name
        self.counter += 1
        return new_name

    def apply(self, code: str) -> str:
        """Substitute every recorded token across ``code`` as a whole word.

        Substitutions run in insertion order over the full buffer, string
        literals and comments included.
        """
        for old_name, new_name in self._renames.items():
            pattern = re.compile(rf"\b{re.escape(old_name)}\b", re.ASCII)
            code = pattern.sub(new_name, code)
        return code

    def as_dict(self) -> dict[str, str]:
        return dict(self._renames)

    def get(self, token: str, default=None):
        return self._renames.get(token, default)

    def items(self):
        return self._renames.items()

    def values(self):
        return self._renames.values()

    def __contains__(self, token: object) -> bool:
        return token in self._renames

    def __iter__(self) -> Iterator[str]:
        return iter(self._renames)

    def __len__(self) -> int:
        return len(self._renames)

    def __repr__(self) -> str:
        return f"RenameTable({self._renames!r})"
