"""
pugwidgets - Markup to widget-tree compiler

Compiles rendered pug markup into language-agnostic widget descriptors
for declarative UI code generation (Flutter/Dart).
"""

__version__ = "1.0.0"

from .lib import (
    MarkupReader,
    MarkupSyntaxError,
    markup_read,
    Compiler,
    widgets_compile,
    imports_extract,
    imports_split,
    LOG,
    state_connectToLogger,
)
from .config import CompileOptions, OptionsError

__all__ = [
    "MarkupReader",
    "MarkupSyntaxError",
    "markup_read",
    "Compiler",
    "widgets_compile",
    "imports_extract",
    "imports_split",
    "CompileOptions",
    "OptionsError",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
