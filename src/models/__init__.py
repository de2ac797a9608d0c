"""
Models package for pugwidgets

Contains data structures and type definitions for the compilation pipeline.
"""

from .state import ProgramState, pipeline
from .markup import Element, Tag, Text
from .widget import Param, ParamKind, Widget
from .compiler import CompileResult, Diagnostic, ImportSplit

__all__ = [
    "ProgramState",
    "pipeline",
    "Element",
    "Tag",
    "Text",
    "Param",
    "ParamKind",
    "Widget",
    "CompileResult",
    "Diagnostic",
    "ImportSplit",
]
