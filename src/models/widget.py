"""
Widget descriptor models

Language-agnostic description of the widget tree that the code emitter
turns into Dart source. One Widget per markup tag (plus synthesized text
widgets), each carrying typed parameters.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union


class ParamKind(Enum):
    """
    How a parameter value is emitted

    LITERAL values are quoted, EXPRESSION values are pasted as code,
    CLOSURE values become callbacks, and WIDGET/WIDGETS/ARRAY hold nested
    descriptors.
    """
    LITERAL = "literal"
    EXPRESSION = "expression"
    CLOSURE = "closure"
    WIDGET = "widget"
    WIDGETS = "widgets"
    ARRAY = "array"

    @classmethod
    def from_attribute(cls, attribute: str) -> Tuple['ParamKind', str]:
        """
        Classify an attribute by its name prefix

        Args:
            attribute: Attribute name as written in the markup

        Returns:
            (kind, name) with the prefix removed from the name

        Example:
            >>> ParamKind.from_attribute(':width')
            (<ParamKind.EXPRESSION: 'expression'>, 'width')
            >>> ParamKind.from_attribute('@onTap')
            (<ParamKind.CLOSURE: 'closure'>, 'onTap')
            >>> ParamKind.from_attribute('color')
            (<ParamKind.LITERAL: 'literal'>, 'color')
        """
        if attribute.startswith(':'):
            return cls.EXPRESSION, attribute[1:]
        if attribute.startswith('@'):
            return cls.CLOSURE, attribute[1:]
        return cls.LITERAL, attribute


ParamValue = Union[str, bool, 'Widget', List[Union['Widget', str]]]


@dataclass
class Param:
    """
    A typed widget parameter

    Attributes:
        type: Emission kind
        value: String, boolean (markup boolean attribute), a nested Widget,
               or a list of Widgets/strings
        name: Parameter name, None for the positional parameter
        resolved: True when the emitter must use name and value as-is
        original_name: Attribute name after prefix removal, for diagnostics
    """
    type: ParamKind
    value: ParamValue
    name: Optional[str] = None
    resolved: bool = False
    original_name: Optional[str] = None

    def dict_make(self) -> Dict[str, Any]:
        """Render as a plain dict in the emitter's JSON shape"""
        result: Dict[str, Any] = {'class': 'param', 'type': self.type.value}
        if self.name is not None:
            result['name'] = self.name
        if self.original_name is not None:
            result['originalName'] = self.original_name
        result['value'] = _value_render(self.value)
        result['resolved'] = self.resolved
        return result


@dataclass
class Widget:
    """
    A widget instance in the descriptor tree

    Attributes:
        name: Class-like identifier (e.g. "Container", "AppBar")
        original_name: Tag name as it appeared in the markup
        constant: Emit as a const constructor
        generics: Type arguments (e.g. ["String"] for DropdownButton<String>)
        params: Parameters in emission order, children last
        line: Source line from pug-line metadata
        column: Source column from pug-line metadata
    """
    name: str
    original_name: str
    constant: bool = False
    generics: Optional[List[str]] = None
    params: List[Param] = field(default_factory=list)
    line: Optional[int] = None
    column: Optional[int] = None

    def param_get(self, name: str) -> Optional[Param]:
        """Get the first parameter with the given name, or None"""
        for param in self.params:
            if param.name == name:
                return param
        return None

    def children_get(self) -> List['Widget']:
        """Get child widgets from the children parameter (empty if none)"""
        param = self.param_get('children')
        if param is None or param.type is not ParamKind.WIDGETS:
            return []
        return [child for child in param.value if isinstance(child, Widget)]  # type: ignore[union-attr]

    def dict_make(self) -> Dict[str, Any]:
        """
        Render as a plain dict in the emitter's JSON shape

        Unset optional fields (generics, params, line, column) are omitted.

        Example:
            >>> Widget(name="Text", original_name="text").dict_make()
            {'class': 'widget', 'name': 'Text', 'originalName': 'text', 'constant': False}
        """
        result: Dict[str, Any] = {
            'class': 'widget',
            'name': self.name,
            'originalName': self.original_name,
            'constant': self.constant,
        }
        if self.generics is not None:
            result['generics'] = list(self.generics)
        if self.params:
            result['params'] = [param.dict_make() for param in self.params]
        if self.line is not None:
            result['line'] = self.line
        if self.column is not None:
            result['column'] = self.column
        return result


def _value_render(value: ParamValue) -> Any:
    if isinstance(value, Widget):
        return value.dict_make()
    if isinstance(value, list):
        return [item.dict_make() if isinstance(item, Widget) else item for item in value]
    return value
