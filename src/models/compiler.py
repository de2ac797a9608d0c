"""
Compiler-specific data models

Type-safe structures for compiler and import-extractor return values.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .markup import Element
from .widget import Widget


@dataclass
class Diagnostic:
    """
    A recoverable problem found while compiling one tag

    Compilation never stops for these; the affected field falls back to a
    default and the rest of the document is compiled normally.

    Attributes:
        message: Human-readable description
        tag: Name of the tag being compiled (as written in the markup)
        line: Source line of the tag, when known
        column: Source column of the tag, when known

    Example:
        Diagnostic(
            message="pug-line column 'x' is not a number",
            tag="Column",
            line=12,
            column=None,
        )
    """
    message: str
    tag: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None

    def location_format(self) -> str:
        """Format the location part as 'tag@line:column' (unknown parts as '?')"""
        line = '?' if self.line is None else str(self.line)
        column = '?' if self.column is None else str(self.column)
        return f"{self.tag or '?'}@{line}:{column}"

    def dict_make(self) -> Dict[str, Any]:
        return {
            'message': self.message,
            'tag': self.tag,
            'line': self.line,
            'column': self.column,
        }

    def __str__(self) -> str:
        return f"{self.location_format()}: {self.message}"


@dataclass
class CompileResult:
    """
    Result of compiling a document

    Attributes:
        widgets: One Widget per root tag, in document order
        diagnostics: Recoverable problems, in the order they were found
    """
    widgets: List[Widget] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)


@dataclass
class ImportSplit:
    """
    Result of separating import directives from renderable markup

    Attributes:
        elements: Root elements with every <import> tag removed
        imports: Package specifiers ("package:...") first, then file
                 specifiers, each group in document order
    """
    elements: List[Element]
    imports: List[str]
