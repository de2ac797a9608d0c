"""
Compiler for markup trees to widget descriptors

Transforms the parsed markup element tree into a tree of Widget descriptors
ready for the Dart code emitter.

Every tag becomes one widget:
- the tag name (after alias substitution) becomes the widget class name
- attributes become typed parameters (literal, expression, closure)
- child tags and text lines become the trailing `children` parameter

Example:
    <Column :crossAxisAlignment="CrossAxisAlignment.start">
      <Text>Hello $name</Text>
      <RaisedButton @onPressed="save">Save</RaisedButton>
    </Column>

    Widget(name="Column", params=[
        Param(EXPRESSION, name="crossAxisAlignment", value="CrossAxisAlignment.start"),
        Param(WIDGETS, name="children", value=[Widget("Text", ...), Widget("RaisedButton", ...)]),
    ])

Problems found along the way (e.g. a malformed pug-line attribute) never stop
compilation; they are collected as Diagnostics on the compiler.
"""

import html
import re
from typing import List, Optional, Tuple

from ..config.options import CompileOptions
from ..models.markup import Element, Tag, Text
from ..models.widget import Param, ParamKind, Widget
from ..models.compiler import CompileResult, Diagnostic
from .naming import camel_case, pascal_case
from .log import LOG


# Attributes holding widget metadata rather than parameters
POSITION_ATTRIBUTE = 'pug-line'
GENERICS_ATTRIBUTE = 'type'
CONST_ATTRIBUTE = 'const'

RESOLVED_MARKER = '^'
EXPRESSION_MARKER = ':'
COMMENT_MARKER = '//'
INTERPOLATION_MARKER = '$'

TEXT_TAG = 'text'
CHILDREN_PARAM = 'children'
DEFAULT_PARAM = 'value'

_LEADING_INT = re.compile(r'\s*([+-]?\d+)')


class Compiler:
    """
    Compiles markup elements to widget descriptors

    Responsibilities:
    - Resolve tag names through the configured aliases
    - Classify attributes into typed parameters and widget metadata
    - Segment text content into literal text widgets
    - Collect recoverable problems as diagnostics

    The input tree is never modified. A compiler instance may be reused;
    each compile() call starts with an empty diagnostics list.
    """

    def __init__(self, options: Optional[CompileOptions] = None) -> None:
        """
        Initialize compiler

        Args:
            options: Compile options (tag aliases, const text folding).
                     Defaults to CompileOptions().
        """
        self.options = options if options is not None else CompileOptions()
        self.diagnostics: List[Diagnostic] = []

    def compile(self, elements: List[Element]) -> List[Widget]:
        """
        Compile root elements to widgets

        Args:
            elements: Root elements of a markup document (imports already removed)

        Returns:
            One Widget per root tag, in document order. Root text is not
            compiled: blank runs are skipped, anything else is skipped with
            a diagnostic.
        """
        self.diagnostics = []
        LOG(f"Compiling {len(elements)} root elements...", level=2)

        widgets: List[Widget] = []
        for element in elements:
            if isinstance(element, Tag):
                widgets.append(self.tag_compile(element))
            elif element.data.strip():
                self.diagnostic_add(None, f"Text outside of a tag ignored: {element.data.strip()[:40]!r}")

        LOG(f"Compiled {len(widgets)} root widgets with {len(self.diagnostics)} diagnostics", level=2)
        return widgets

    def tag_compile(self, tag: Tag) -> Widget:
        """
        Compile a single tag and all of its children

        Args:
            tag: Tag to compile

        Returns:
            Widget with attribute parameters in source order, followed by a
            `children` parameter when the tag has child tags or text lines
        """
        tag_name = self.options.alias_resolve(tag.name)
        widget = Widget(name=pascal_case(tag_name), original_name=tag.name)
        LOG(f"Tag <{tag.name}> -> {widget.name}", level=3)

        widget.params = self.attributes_classify(tag, widget)
        widget.constant = CONST_ATTRIBUTE in tag.attributes

        children = self.children_aggregate(tag)
        if children:
            widget.params.append(Param(
                type=ParamKind.WIDGETS,
                name=CHILDREN_PARAM,
                value=children,  # type: ignore[arg-type]
                resolved=True,
            ))

        return widget

    def attributes_classify(self, tag: Tag, widget: Widget) -> List[Param]:
        """
        Turn tag attributes into parameters

        Reserved attributes set widget metadata instead:
        - pug-line="12,4" sets widget.line / widget.column
        - type="String, int" sets widget.generics
        The const attribute is NOT reserved here: it becomes a parameter
        like any other (tag_compile sets widget.constant separately).

        Args:
            tag: Tag whose attributes are classified
            widget: Widget receiving position and generics metadata

        Returns:
            Parameters in attribute source order
        """
        params: List[Param] = []

        # position first, so later diagnostics point at the pug source
        if POSITION_ATTRIBUTE in tag.attributes:
            widget.line, widget.column = self.position_parse(tag, tag.attributes[POSITION_ATTRIBUTE])

        for attribute, raw_value in tag.attributes.items():
            kind, name = ParamKind.from_attribute(attribute)
            value = raw_value
            if value is not None and value.startswith(EXPRESSION_MARKER):
                kind = ParamKind.EXPRESSION
                value = value[len(EXPRESSION_MARKER):]

            if attribute == POSITION_ATTRIBUTE:
                continue
            if attribute == GENERICS_ATTRIBUTE:
                # a bare `type` reads as type="type"
                if raw_value == attribute:
                    value = None
                widget.generics = self.generics_parse(tag, value, widget)
            else:
                params.append(self.param_make(attribute, kind, name, value))

        return params

    def param_make(self, attribute: str, kind: ParamKind, name: str, value: Optional[str]) -> Param:
        """
        Build a parameter from a classified attribute

        Args:
            attribute: Attribute name exactly as written (with any prefix)
            kind: Kind from prefix classification
            name: Attribute name without the :/@ prefix
            value: Attribute value without an expression marker, None if absent

        Returns:
            Param. Names marked with ^ are resolved and kept verbatim; others
            are camel-cased, and `value` becomes the unnamed default
            parameter. A value equal to the attribute name (markup boolean
            attribute) or no value at all becomes the boolean True.
        """
        resolved = name.startswith(RESOLVED_MARKER)
        if resolved:
            param_name: Optional[str] = name[len(RESOLVED_MARKER):]
        else:
            param_name = camel_case(name)
            if param_name == DEFAULT_PARAM:
                param_name = None

        param_value: object
        if value is None or value == attribute:
            param_value = True
        else:
            param_value = html.unescape(value)

        return Param(
            type=kind,
            name=param_name,
            value=param_value,  # type: ignore[arg-type]
            resolved=resolved,
            original_name=name,
        )

    def position_parse(self, tag: Tag, value: Optional[str]) -> Tuple[Optional[int], Optional[int]]:
        """
        Parse pug-line metadata "line,column"

        Each component is read as a leading integer ("12px" reads as 12).
        A missing or non-numeric component is left as None and reported.

        Returns:
            (line, column)
        """
        if value is None:
            self.diagnostic_add(tag, f"{POSITION_ATTRIBUTE} has no value")
            return None, None

        parts = value.split(',')
        line = self.integer_parse(tag, parts[0], 'line')
        column = self.integer_parse(tag, parts[1] if len(parts) > 1 else None, 'column')
        return line, column

    def integer_parse(self, tag: Tag, text: Optional[str], what: str) -> Optional[int]:
        """Read a leading integer from one pug-line component, reporting failures"""
        if text is None:
            self.diagnostic_add(tag, f"{POSITION_ATTRIBUTE} has no {what}")
            return None
        match = _LEADING_INT.match(text)
        if not match:
            self.diagnostic_add(tag, f"{POSITION_ATTRIBUTE} {what} {text!r} is not a number")
            return None
        return int(match.group(1))

    def generics_parse(self, tag: Tag, value: Optional[str], widget: Optional[Widget] = None) -> Optional[List[str]]:
        """
        Parse type metadata "A, B" into generic type names

        Returns:
            Trimmed type names in order, or None (reported) for a missing value
        """
        if not value:
            self.diagnostic_add(tag, f"{GENERICS_ATTRIBUTE} has no value, no generics set", widget)
            return None
        return [generic.strip() for generic in value.split(',')]

    def children_aggregate(self, tag: Tag) -> List[Widget]:
        """
        Compile child tags and text runs in document order

        Returns:
            Child widgets: compiled child tags and one text widget per
            surviving text line, interleaved as in the source
        """
        children: List[Widget] = []
        for child in tag.children:
            if isinstance(child, Tag):
                children.append(self.tag_compile(child))
            elif isinstance(child, Text):
                children.extend(self.text_segment(child))
        return children

    def text_segment(self, text: Text) -> List[Widget]:
        """
        Split a text run into text widgets, one per line

        Lines are trimmed; blank lines and lines starting with // are
        dropped. Each remaining line is entity-decoded and wrapped in the
        configured text widget. With auto_const_text, lines without a $
        interpolation marker are marked const.

        Example:
            "Hello $name\\n// note\\n\\nWorld"
            -> [Text("Hello $name"), const Text("World")]
        """
        widgets: List[Widget] = []
        for line in text.data.split('\n'):
            line = line.strip()
            if not line or line.startswith(COMMENT_MARKER):
                continue

            decoded = html.unescape(line)
            widgets.append(Widget(
                name=self.options.textWidget_get(),
                original_name=TEXT_TAG,
                constant=self.options.auto_const_text and INTERPOLATION_MARKER not in decoded,
                params=[Param(type=ParamKind.LITERAL, value=decoded, resolved=True)],
            ))
        return widgets

    def diagnostic_add(self, tag: Optional[Tag], message: str, widget: Optional[Widget] = None) -> None:
        """
        Record a recoverable problem for a tag (None for document level)

        The location is the widget's pug-line position when it has one,
        otherwise the tag's position in the rendered markup.
        """
        line, column = None, None
        if widget is not None and widget.line is not None:
            line, column = widget.line, widget.column
        elif tag is not None:
            line, column = tag.line, tag.column
        diagnostic = Diagnostic(
            message=message,
            tag=tag.name if tag is not None else None,
            line=line,
            column=column,
        )
        self.diagnostics.append(diagnostic)
        LOG(f"Diagnostic {diagnostic}", level=2)


def widgets_compile(elements: List[Element], options: Optional[CompileOptions] = None) -> CompileResult:
    """
    Compile root elements and collect diagnostics

    Args:
        elements: Root elements (imports already removed)
        options: Compile options, defaults when None

    Returns:
        CompileResult with the widgets and any diagnostics
    """
    compiler = Compiler(options)
    widgets = compiler.compile(elements)
    return CompileResult(widgets=widgets, diagnostics=compiler.diagnostics)
