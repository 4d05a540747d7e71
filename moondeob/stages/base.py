"""Base stage interface."""

from abc import ABC, abstractmethod

from moondeob.core.context import DeobfuscationContext
from moondeob.debug import debug_log


class Stage(ABC):
    """Abstract base class for pipeline stages."""

    name: str = "base_stage"
    description: str = "Base stage class"
    priority: int = 100  # Lower priority runs first

    @abstractmethod
    def run(self, code: str, context: DeobfuscationContext) -> str:
        """Transform the buffer and return the new buffer.

        Args:
            code: Current source buffer
            context: Tables and flags for the current call

        Returns:
            Transformed buffer
        """
        pass

    def should_run(self, code: str, context: DeobfuscationContext) -> bool:
        """Determine if this stage should run.

        Args:
            code: Current source buffer
            context: Tables and flags for the current call

        Returns:
            True if stage should run
        """
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}(priority={self.priority})"


class StageChain:
    """Manages a chain of stages to apply sequentially."""

    def __init__(self):
        self.stages: list[Stage] = []

    def add_stage(self, stage: Stage) -> "StageChain":
        """Add a stage to the chain.

        Args:
            stage: Stage to add

        Returns:
            Self for chaining
        """
        if not isinstance(stage, Stage):
            raise TypeError(f"Expected a Stage, got {type(stage).__name__}")
        self.stages.append(stage)
        # Sort by priority, insertion order breaks ties
        self.stages.sort(key=lambda s: s.priority)
        return self

    def run(self, code: str, context: DeobfuscationContext) -> str:
        """Run all stages in sequence, each consuming the previous buffer.

        Args:
            code: Initial buffer
            context: Tables and flags for the current call

        Returns:
            Final buffer after all stages
        """
        for stage in self.stages:
            if stage.should_run(code, context):
                code = stage.run(code, context)
                debug_log("debug", f"Stage {stage.name} finished", {
                    "chars": len(code),
                    "lines": code.count("\n") + 1,
                })
        return code

    def __len__(self) -> int:
        return len(self.stages)
