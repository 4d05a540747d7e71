"""Per-call deobfuscation context threaded through every stage."""

from dataclasses import dataclass, field
from typing import Optional

from moondeob.config import Config
from moondeob.core.naming import FUNCTION_NAME_POOL, IDENTIFIER_NAME_POOL, RenameTable


@dataclass
class DeobfuscationContext:
    """Tables and flags owned by a single deobfuscation call.

    A new context is created for every call, so nothing leaks between
    invocations and concurrent calls never share tables.
    """
    identifiers: RenameTable = field(default_factory=lambda: RenameTable(IDENTIFIER_NAME_POOL))
    functions: RenameTable = field(default_factory=lambda: RenameTable(FUNCTION_NAME_POOL))
    decoded_strings: dict[str, str] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)
    report_warnings: bool = False
    simplify_to_fixed_point: bool = False
    max_simplify_passes: int = 10

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> "DeobfuscationContext":
        """Create a fresh context using the engine flags from ``config``."""
        if config is None:
            return cls()
        return cls(
            report_warnings=config.report_warnings,
            simplify_to_fixed_point=config.simplify_to_fixed_point,
            max_simplify_passes=config.max_simplify_passes,
        )

    def warn(self, message: str) -> None:
        """Record a warning if warning reporting is enabled."""
        if self.report_warnings:
            self.warnings.append(message)
