"""
Markup tree models

The element tree handed to the compiler: tags with ordered attributes and
children, and raw text runs. Produced by the markup reader (or any other
front end that renders pug to this shape).
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union


@dataclass
class Text:
    """
    A raw text run between tags

    Attributes:
        data: Text exactly as it appeared in the markup. May span several
              lines and may contain `$` interpolation markers and HTML
              entities (decoded later by the compiler).
    """
    data: str


@dataclass
class Tag:
    """
    A markup element

    Attributes:
        name: Tag name as written (case preserved)
        attributes: Attribute name to value. Dict order is source declaration
                    order, which the compiler relies on for parameter order.
                    A value of None means the attribute carried no value.
        children: Nested tags and text runs in document order
        line: Source line of the opening tag, when known
        column: Source column of the opening tag, when known

    Example:
        <Container :width="100" @onTap="handleTap">Hi</Container>
        Tag(
            name="Container",
            attributes={":width": "100", "@onTap": "handleTap"},
            children=[Text("Hi")],
        )
    """
    name: str
    attributes: Dict[str, Optional[str]] = field(default_factory=dict)
    children: List['Element'] = field(default_factory=list)
    line: Optional[int] = None
    column: Optional[int] = None


Element = Union[Tag, Text]
