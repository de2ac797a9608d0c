"""
Reader for rendered pug markup

Transforms the HTML-like markup that pug renders into the element tree
consumed by the compiler (Tag / Text nodes).

Unlike a browser HTML parser, the reader keeps names exactly as written:
attribute names such as `:onPressed`, `@onTap` or `^key` keep their prefix
and their case, because the compiler derives parameter kinds and names from
them. Attribute order is preserved.

Handles:
- Start tags with quoted, unquoted and boolean attributes
- Self-closing tags (<Spacer/>) and HTML void elements (<br>, <img>)
- End tags, checked against the open tag
- Comments and declarations (<!-- -->, <!DOCTYPE>), dropped
- Error reporting with line numbers and a caret under the problem

Example:
    >>> reader = MarkupReader('<Text :style="titleStyle">Hi</Text>')
    >>> elements = reader.read()
    >>> elements[0].name
    'Text'
    >>> elements[0].attributes
    {':style': 'titleStyle'}
"""

import re
from bisect import bisect_right
from typing import List, NoReturn, Optional, Tuple, cast

from ..models.markup import Element, Tag, Text
from .log import LOG


VOID_ELEMENTS = frozenset({
    'area', 'base', 'br', 'col', 'embed', 'hr', 'img', 'input',
    'link', 'meta', 'source', 'track', 'wbr',
})

_TAG_NAME = re.compile(r'[A-Za-z_][\w.\-:]*')
_END_TAG = re.compile(r'</\s*([A-Za-z_][\w.\-:]*)\s*>')
_ATTRIBUTE_NAME = re.compile(r'[^\s=/>"\'<]+')
_UNQUOTED_VALUE = re.compile(r'[^\s>"\'<`=]+')


class MarkupSyntaxError(SyntaxError):
    """
    Raised when markup cannot be read

    Attributes:
        line: 1-based line of the problem
        column: 1-based column of the problem
    """

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(message)
        self.line = line
        self.column = column


class MarkupReader:
    """
    Reader for rendered pug markup

    Builds the element tree in a single left-to-right scan, keeping a stack
    of open tags. Text between tags is kept raw (entities are decoded by
    the compiler, per line).
    """

    def __init__(self, source: str) -> None:
        """
        Initialize reader with source text

        Args:
            source: Markup text (usually the HTML rendered from a .pug file)

        Attributes:
            source: Source text being read
            position: Current character position in source
            line_starts: Offset of the first character of every line
        """
        self.source = source
        self.position = 0
        self.line_starts = [0] + [match.end() for match in re.finditer('\n', source)]

    def read(self) -> List[Element]:
        """
        Read source text into an element tree

        Returns:
            Root elements in document order (empty list for empty source)

        Raises:
            MarkupSyntaxError: On unterminated tags, comments or attribute
                               values, unexpected or mismatched end tags,
                               and tags left open at end of input
        """
        roots: List[Element] = []
        stack: List[Tag] = []
        text_parts: List[str] = []
        self.position = 0

        def children_current() -> List[Element]:
            return stack[-1].children if stack else roots

        def text_flush() -> None:
            if text_parts:
                children_current().append(Text(''.join(text_parts)))
                text_parts.clear()

        while self.position < len(self.source):
            if self.source.startswith('<!--', self.position):
                text_flush()
                self.comment_skip()
            elif self.source.startswith('<!', self.position) or self.source.startswith('<?', self.position):
                text_flush()
                self.declaration_skip()
            elif self.source.startswith('</', self.position):
                text_flush()
                start = self.position
                name = self.endTag_read()
                if not stack:
                    self.error(f"Unexpected end tag </{name}>", start)
                if stack[-1].name != name:
                    open_tag = stack[-1]
                    self.error(
                        f"End tag </{name}> does not match <{open_tag.name}> "
                        f"opened at line {open_tag.line}",
                        start,
                    )
                stack.pop()
            elif self.source.startswith('<', self.position) and _TAG_NAME.match(self.source, self.position + 1):
                text_flush()
                tag, closed = self.startTag_read()
                children_current().append(tag)
                if not closed:
                    stack.append(tag)
            else:
                next_lt = self.source.find('<', self.position + 1)
                if next_lt == -1:
                    next_lt = len(self.source)
                text_parts.append(self.source[self.position:next_lt])
                self.position = next_lt

        text_flush()

        if stack:
            open_tag = stack[-1]
            self.error(f"Unclosed tag <{open_tag.name}>", self.offset_of(open_tag))

        LOG(f"Read {len(roots)} root elements", level=3)
        return roots

    def startTag_read(self) -> Tuple[Tag, bool]:
        """
        Read a start tag at the current position

        Returns:
            (tag, closed) where closed is True for self-closing and void tags

        Example:
            For source '<Icon :size="24" disabled/>':
            Tag(name="Icon", attributes={":size": "24", "disabled": "disabled"}), True
        """
        start = self.position
        # read() only calls this at "<" followed by a tag name
        name_match = cast("re.Match[str]", _TAG_NAME.match(self.source, start + 1))
        line, column = self.location_find(start)
        tag = Tag(name=name_match.group(0), line=line, column=column)
        self.position = name_match.end()

        while True:
            self.whitespace_skip()
            if self.position >= len(self.source):
                self.error(f"Unterminated tag <{tag.name}>", start)
            if self.source.startswith('/>', self.position):
                self.position += 2
                return tag, True
            if self.source[self.position] == '>':
                self.position += 1
                return tag, tag.name.lower() in VOID_ELEMENTS

            attribute, value = self.attribute_read()
            # first occurrence wins, as in browsers
            tag.attributes.setdefault(attribute, value)

    def attribute_read(self) -> Tuple[str, str]:
        """
        Read one attribute at the current position

        An attribute without '=' is a boolean attribute and gets its own
        name as value (key == value), the way pug renders them.

        Returns:
            (name, value)
        """
        name_match = _ATTRIBUTE_NAME.match(self.source, self.position)
        if not name_match:
            self.error(f"Unexpected character {self.source[self.position]!r} in tag")
        name = name_match.group(0)
        self.position = name_match.end()

        self.whitespace_skip()
        if not self.source.startswith('=', self.position):
            return name, name

        self.position += 1
        self.whitespace_skip()
        if self.position >= len(self.source):
            self.error(f"Missing value for attribute {name!r}")

        quote = self.source[self.position]
        if quote in ('"', "'"):
            end = self.source.find(quote, self.position + 1)
            if end == -1:
                self.error(f"Unterminated value for attribute {name!r}")
            value = self.source[self.position + 1:end]
            self.position = end + 1
            return name, value

        value_match = _UNQUOTED_VALUE.match(self.source, self.position)
        if not value_match:
            self.error(f"Missing value for attribute {name!r}")
        value = value_match.group(0)
        # <Tag a=b/> : the slash closes the tag
        if value.endswith('/') and self.source.startswith('>', value_match.end()):
            value = value[:-1]
        self.position += len(value)
        return name, value

    def endTag_read(self) -> str:
        """Read an end tag at the current position and return its name"""
        match = _END_TAG.match(self.source, self.position)
        if not match:
            self.error("Malformed end tag")
        self.position = match.end()
        return match.group(1)

    def comment_skip(self) -> None:
        """Skip a <!-- ... --> comment"""
        end = self.source.find('-->', self.position + 4)
        if end == -1:
            self.error("Unterminated comment")
        self.position = end + 3

    def declaration_skip(self) -> None:
        """Skip a <!DOCTYPE ...> declaration or <?...?> instruction"""
        end = self.source.find('>', self.position)
        if end == -1:
            self.error("Unterminated declaration")
        self.position = end + 1

    def whitespace_skip(self) -> None:
        while self.position < len(self.source) and self.source[self.position].isspace():
            self.position += 1

    def location_find(self, offset: int) -> Tuple[int, int]:
        """
        Convert a character offset to (line, column), both 1-based

        Example:
            For source "<a>\\n  <b/>" and offset 6:
            Returns (2, 3)
        """
        index = bisect_right(self.line_starts, offset) - 1
        return index + 1, offset - self.line_starts[index] + 1

    def offset_of(self, tag: Tag) -> int:
        """Character offset of a tag's opening '<'"""
        line, column = cast(int, tag.line), cast(int, tag.column)
        return self.line_starts[line - 1] + column - 1

    def error(self, message: str, offset: Optional[int] = None) -> NoReturn:
        """
        Report reader error with source context

        Raises MarkupSyntaxError with:
        - Custom error message
        - Line and column
        - The offending source line
        - Caret indicator pointing to the error position

        Args:
            message: Human-readable error description
            offset: Character offset of the problem (default: current position)

        Raises:
            MarkupSyntaxError: Always (this is an error reporting function)

        Example output:
            Unclosed tag <Column>
            Line 3, column 5
            Context:     <Column>
                         ^
        """
        if offset is None:
            offset = self.position
        offset = min(offset, len(self.source))
        line, column = self.location_find(offset)
        line_start = self.line_starts[line - 1]
        line_end = self.source.find('\n', line_start)
        if line_end == -1:
            line_end = len(self.source)
        context = self.source[line_start:line_end]

        raise MarkupSyntaxError(
            f"\n{message}\n"
            f"Line {line}, column {column}\n"
            f"Context: {context}\n"
            f"         {' ' * (column - 1)}^",
            line,
            column,
        )


def markup_read(source: str) -> List[Element]:
    """Read markup source into root elements (shortcut for MarkupReader(source).read())"""
    return MarkupReader(source).read()
