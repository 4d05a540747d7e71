"""Core deobfuscation functionality."""

from moondeob.core.naming import FUNCTION_NAME_POOL, IDENTIFIER_NAME_POOL, RenameTable
from moondeob.core.context import DeobfuscationContext
from moondeob.core.statistics import ComplexityClass, Statistics, collect_statistics
from moondeob.core.engine import DeobfuscationResult, Deobfuscator, build_default_chain, deobfuscate

__all__ = [
    "FUNCTION_NAME_POOL",
    "IDENTIFIER_NAME_POOL",
    "RenameTable",
    "DeobfuscationContext",
    "ComplexityClass",
    "Statistics",
    "collect_statistics",
    "DeobfuscationResult",
    "Deobfuscator",
    "build_default_chain",
    "deobfuscate",
]
