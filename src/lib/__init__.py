"""
pugwidgets - Markup to widget-tree compiler

Turns rendered pug markup into widget descriptors for Flutter code generation.
"""

__version__ = "1.0.0"

from .reader import MarkupReader, MarkupSyntaxError, markup_read
from .compiler import Compiler, widgets_compile
from .imports import imports_extract, imports_split
from .log import LOG, state_connectToLogger

__all__ = [
    "MarkupReader",
    "MarkupSyntaxError",
    "markup_read",
    "Compiler",
    "widgets_compile",
    "imports_extract",
    "imports_split",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
