"""Moondeob - heuristic Lua deobfuscation engine."""

__version__ = "0.1.0"
__author__ = "moondeob"

from moondeob.config import Config
from moondeob.core import (
    ComplexityClass,
    DeobfuscationResult,
    Deobfuscator,
    Statistics,
    deobfuscate,
)

__all__ = [
    "__version__",
    "Config",
    "ComplexityClass",
    "DeobfuscationResult",
    "Deobfuscator",
    "Statistics",
    "deobfuscate",
]
