"""
Markup reader tests

Tests reading rendered pug markup into Tag/Text trees: names and attribute
spelling, attribute forms, nesting, comments and error reporting.
"""

import pytest

from pugwidgets.lib.reader import MarkupReader, MarkupSyntaxError, markup_read
from pugwidgets.models.markup import Tag, Text


class TestBasicReading:
    """Test empty source and simple tags"""

    def test_empty_source(self):
        """Empty string reads to empty list"""
        assert markup_read("") == []

    def test_text_only(self):
        """Plain text becomes one Text element"""
        assert markup_read("just words") == [Text("just words")]

    def test_single_tag(self):
        """A tag with text content"""
        elements = markup_read("<Text>Hello</Text>")

        assert len(elements) == 1
        tag = elements[0]
        assert isinstance(tag, Tag)
        assert tag.name == "Text"
        assert tag.children == [Text("Hello")]
        assert (tag.line, tag.column) == (1, 1)

    def test_self_closing(self):
        """<Spacer/> has no children and closes itself"""
        elements = markup_read("<Column><Spacer/><Divider /></Column>")

        column = elements[0]
        assert [c.name for c in column.children] == ["Spacer", "Divider"]
        assert column.children[0].children == []

    def test_void_elements(self):
        """HTML void elements need no end tag"""
        elements = markup_read("<p>one<br>two</p>")
        assert [type(c).__name__ for c in elements[0].children] == ["Text", "Tag", "Text"]

    def test_multiline_text_kept_raw(self):
        """Text keeps newlines and entities untouched"""
        elements = markup_read("<Column>\n  Hello $name\n  Tom &amp; Jerry\n</Column>")
        assert elements[0].children == [Text("\n  Hello $name\n  Tom &amp; Jerry\n")]

    def test_lone_less_than_is_text(self):
        """A < not starting a tag stays in the text"""
        elements = markup_read("<Text>a < b</Text>")
        assert elements[0].children == [Text("a < b")]

    def test_positions(self):
        """Tags record line and column of their opening bracket"""
        elements = markup_read("<Column>\n  <Text>x</Text>\n</Column>")
        inner = elements[0].children[1]
        assert (inner.line, inner.column) == (2, 3)


class TestAttributes:
    """Test attribute forms and spelling"""

    def test_prefixes_and_case_preserved(self):
        """:, @ and ^ prefixes and mixed case survive"""
        elements = markup_read('<RaisedButton :onLongPress="hold" @onPressed="save()" ^Key="k"/>')
        assert elements[0].attributes == {
            ":onLongPress": "hold",
            "@onPressed": "save()",
            "^Key": "k",
        }

    def test_attribute_order(self):
        """Attribute dict order is source order"""
        elements = markup_read('<Box z="1" a="2" m="3"/>')
        assert list(elements[0].attributes) == ["z", "a", "m"]

    def test_quote_styles(self):
        """Double, single and unquoted values"""
        elements = markup_read("<Box a=\"x y\" b='it\"s' c=plain d=last/>")
        assert elements[0].attributes == {"a": "x y", "b": 'it"s', "c": "plain", "d": "last"}

    def test_boolean_attribute(self):
        """A bare attribute gets its own name as value"""
        elements = markup_read("<TextField disabled autofocus/>")
        assert elements[0].attributes == {"disabled": "disabled", "autofocus": "autofocus"}

    def test_empty_value(self):
        """const="" keeps an empty string"""
        elements = markup_read('<Icon const=""/>')
        assert elements[0].attributes == {"const": ""}

    def test_duplicate_keeps_first(self):
        """A repeated attribute keeps its first value"""
        elements = markup_read('<Box a="1" a="2"/>')
        assert elements[0].attributes == {"a": "1"}

    def test_pug_line_attribute(self):
        """pug-line is an ordinary attribute to the reader"""
        elements = markup_read('<Text pug-line="4,2">x</Text>')
        assert elements[0].attributes == {"pug-line": "4,2"}


class TestStructure:
    """Test nesting, comments and declarations"""

    def test_nested_tags(self):
        """Nested tags build a tree"""
        elements = markup_read("<Scaffold><AppBar/><Center><Text>Hi</Text></Center></Scaffold>")

        scaffold = elements[0]
        assert [c.name for c in scaffold.children] == ["AppBar", "Center"]
        assert scaffold.children[1].children[0].children == [Text("Hi")]

    def test_root_sequence(self):
        """Imports and views side by side at root level"""
        elements = markup_read('<import package="a"/>\n<Scaffold></Scaffold>\n')

        assert [type(e).__name__ for e in elements] == ["Tag", "Text", "Tag", "Text"]
        assert elements[0].name == "import"

    def test_comments_dropped(self):
        """Comments disappear, surrounding text is kept"""
        elements = markup_read("<Column>a<!-- <Ignored/> -->b</Column>")
        assert elements[0].children == [Text("a"), Text("b")]

    def test_doctype_dropped(self):
        """Declarations are skipped"""
        elements = markup_read("<!DOCTYPE html><Text>x</Text>")
        assert [e.name for e in elements] == ["Text"]


class TestErrors:
    """Test error reporting"""

    def test_inner_tag_left_open(self):
        """An inner tag left open is reported at the outer end tag"""
        with pytest.raises(MarkupSyntaxError, match="does not match <Column> opened at line 2") as info:
            markup_read("<Scaffold>\n  <Column>\n</Scaffold>")
        assert (info.value.line, info.value.column) == (3, 1)

    def test_unclosed_at_end(self):
        """Missing end tag at end of input points at the opening tag"""
        with pytest.raises(MarkupSyntaxError, match="Unclosed tag <Column>") as info:
            markup_read("<Column>\n  text")
        assert (info.value.line, info.value.column) == (1, 1)

    def test_mismatched_end_tag(self):
        """End tag must match the open tag"""
        with pytest.raises(MarkupSyntaxError, match="does not match"):
            markup_read("<Row></Column>")

    def test_unexpected_end_tag(self):
        """End tag without open tag"""
        with pytest.raises(MarkupSyntaxError, match="Unexpected end tag"):
            markup_read("text</Row>")

    def test_unterminated_value(self):
        """Quoted value never closed"""
        with pytest.raises(MarkupSyntaxError, match="Unterminated value"):
            markup_read('<Text style="open>')

    def test_unterminated_tag(self):
        """Start tag never closed"""
        with pytest.raises(MarkupSyntaxError, match="Unterminated tag"):
            markup_read("<Text a=1")

    def test_unterminated_comment(self):
        """Comment never closed"""
        with pytest.raises(MarkupSyntaxError, match="Unterminated comment"):
            markup_read("<!-- forever")

    def test_error_is_syntax_error(self):
        """MarkupSyntaxError is a SyntaxError with context"""
        with pytest.raises(SyntaxError) as info:
            MarkupReader("<Row>\n</Col>").read()
        message = str(info.value)
        assert "Line 2, column 1" in message
        assert "^" in message
