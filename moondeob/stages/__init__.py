"""Pipeline stages for moondeob."""

from moondeob.stages.base import Stage, StageChain
from moondeob.stages.dead_code import DeadCodeStage
from moondeob.stages.formatting import CodeFormatStage, FinalFormatStage
from moondeob.stages.renaming import FunctionRenameStage, IdentifierRenameStage
from moondeob.stages.simplify import ExpressionSimplifyStage
from moondeob.stages.strings import StringDecodeStage

__all__ = [
    "Stage",
    "StageChain",
    "StringDecodeStage",
    "CodeFormatStage",
    "IdentifierRenameStage",
    "FunctionRenameStage",
    "ExpressionSimplifyStage",
    "DeadCodeStage",
    "FinalFormatStage",
]
