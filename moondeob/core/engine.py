"""Deobfuscation engine: runs the stage chain and collects statistics."""

from dataclasses import dataclass, field
from typing import Optional

from moondeob.config import Config
from moondeob.core.context import DeobfuscationContext
from moondeob.core.statistics import Statistics, collect_statistics
from moondeob.debug import debug_log
from moondeob.stages import (
    CodeFormatStage,
    DeadCodeStage,
    ExpressionSimplifyStage,
    FinalFormatStage,
    FunctionRenameStage,
    IdentifierRenameStage,
    StageChain,
    StringDecodeStage,
)


@dataclass
class DeobfuscationResult:
    """Final code, statistics and warnings of one run."""
    deobfuscated_code: str
    statistics: Statistics
    warnings: list[str] = field(default_factory=list)
    identifier_renames: dict[str, str] = field(default_factory=dict)
    function_renames: dict[str, str] = field(default_factory=dict)
    decoded_strings: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "deobfuscated_code": self.deobfuscated_code,
            "statistics": self.statistics.to_dict(),
            "warnings": list(self.warnings),
        }


def build_default_chain() -> StageChain:
    """Create the standard seven-stage pipeline."""
    chain = StageChain()
    for stage in (
        StringDecodeStage(),
        CodeFormatStage(),
        IdentifierRenameStage(),
        FunctionRenameStage(),
        ExpressionSimplifyStage(),
        DeadCodeStage(),
        FinalFormatStage(),
    ):
        chain.add_stage(stage)
    return chain


class Deobfuscator:
    """Reusable engine; every call gets its own fresh context."""

    def __init__(self, config: Optional[Config] = None, chain: Optional[StageChain] = None):
        self.config = config
        self.chain = chain if chain is not None else build_default_chain()

    def deobfuscate(self, source_code: str) -> DeobfuscationResult:
        """Deobfuscate ``source_code``.

        Never raises for text input; patterns that do not match pass through
        unchanged.

        Args:
            source_code: Obfuscated script text

        Returns:
            Deobfuscated code with statistics and warnings
        """
        context = DeobfuscationContext.from_config(self.config)
        code = self.chain.run(source_code, context)

        statistics = collect_statistics(
            source_code,
            code,
            context.identifiers,
            context.decoded_strings,
            context.functions,
        )
        debug_log("info", "Deobfuscation complete", {
            "statistics": statistics.to_dict(),
            "warnings": context.warnings,
        })

        return DeobfuscationResult(
            deobfuscated_code=code,
            statistics=statistics,
            warnings=list(context.warnings),
            identifier_renames=context.identifiers.as_dict(),
            function_renames=context.functions.as_dict(),
            decoded_strings=dict(context.decoded_strings),
        )


def deobfuscate(source_code: str, config: Optional[Config] = None) -> DeobfuscationResult:
    """Deobfuscate ``source_code`` with the default pipeline."""
    return Deobfuscator(config).deobfuscate(source_code)
