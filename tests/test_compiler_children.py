"""
Child aggregation tests

Tests recursive compilation of child tags, segmentation of text runs into
text widgets, const text folding and document ordering.
"""

import pytest

from pugwidgets.config import CompileOptions
from pugwidgets.lib.compiler import Compiler
from pugwidgets.models.markup import Tag, Text
from pugwidgets.models.widget import ParamKind


def children_of(widget):
    return widget.children_get()


class TestTextSegmentation:
    """Test text runs becoming text widgets"""

    def test_single_line(self):
        """One line of text becomes one text widget"""
        widget = Compiler().tag_compile(Tag("Center", {}, [Text("Hello")]))

        children = children_of(widget)
        assert len(children) == 1
        text = children[0]
        assert text.name == "Text"
        assert text.original_name == "text"
        assert len(text.params) == 1
        assert text.params[0].type is ParamKind.LITERAL
        assert text.params[0].name is None
        assert text.params[0].value == "Hello"
        assert text.params[0].resolved is True

    def test_lines_comments_and_blanks(self):
        """Comment and blank lines are dropped, $ lines are not const"""
        options = CompileOptions(auto_const_text=True)
        tag = Tag("Column", {}, [Text("Hello $name\n// comment\n\nWorld")])
        widget = Compiler(options).tag_compile(tag)

        children = children_of(widget)
        assert [c.params[0].value for c in children] == ["Hello $name", "World"]
        assert children[0].constant is False
        assert children[1].constant is True

    def test_lines_trimmed(self):
        """Surrounding whitespace is removed from each line"""
        widget = Compiler().tag_compile(Tag("Column", {}, [Text("   one  \n\t two\t\n")]))
        assert [c.params[0].value for c in children_of(widget)] == ["one", "two"]

    def test_indented_comment_dropped(self):
        """A comment line is recognised after trimming"""
        widget = Compiler().tag_compile(Tag("Column", {}, [Text("   // todo\nkeep")]))
        assert [c.params[0].value for c in children_of(widget)] == ["keep"]

    def test_whitespace_only_text(self):
        """Whitespace-only text produces no children parameter"""
        widget = Compiler().tag_compile(Tag("Column", {}, [Text("  \n   \n")]))
        assert widget.params == []

    def test_entities_decoded(self):
        """Entities in text lines are decoded"""
        widget = Compiler().tag_compile(Tag("Center", {}, [Text("Fish &amp; Chips")]))
        assert children_of(widget)[0].params[0].value == "Fish & Chips"

    def test_const_text_disabled_by_default(self):
        """Without auto_const_text no text widget is const"""
        widget = Compiler().tag_compile(Tag("Center", {}, [Text("Plain")]))
        assert children_of(widget)[0].constant is False

    def test_decoded_dollar_not_const(self):
        """An entity decoding to $ counts as interpolation"""
        options = CompileOptions(auto_const_text=True)
        widget = Compiler(options).tag_compile(Tag("Center", {}, [Text("Price &#36;amount")]))

        text = children_of(widget)[0]
        assert text.params[0].value == "Price $amount"
        assert text.constant is False

    def test_text_widget_alias(self):
        """The text widget class comes from the text alias"""
        options = CompileOptions(tag_aliases={"text": "SelectableText"})
        widget = Compiler(options).tag_compile(Tag("Center", {}, [Text("Hi")]))

        text = children_of(widget)[0]
        assert text.name == "SelectableText"
        assert text.original_name == "text"

    def test_text_widget_default_without_alias(self):
        """Missing text alias falls back to Text"""
        options = CompileOptions(tag_aliases={"row": "Row"})
        widget = Compiler(options).tag_compile(Tag("Center", {}, [Text("Hi")]))
        assert children_of(widget)[0].name == "Text"


class TestChildTags:
    """Test recursive compilation of child tags"""

    def test_nested_tags(self):
        """Child tags are compiled recursively"""
        tag = Tag("Scaffold", {}, [
            Tag("AppBar", {":title": "title"}),
            Tag("Center", {}, [Tag("Text", {}, [Text("Body")])]),
        ])
        widget = Compiler().tag_compile(tag)

        children = children_of(widget)
        assert [c.name for c in children] == ["AppBar", "Center"]
        assert children[0].params[0].name == "title"
        inner = children_of(children[1])
        assert inner[0].name == "Text"
        assert children_of(inner[0])[0].params[0].value == "Body"

    def test_mixed_order_preserved(self):
        """Tags and text lines are interleaved in document order"""
        tag = Tag("Column", {}, [
            Text("first\nsecond"),
            Tag("Divider"),
            Text("third"),
            Tag("Spacer"),
        ])
        widget = Compiler().tag_compile(tag)

        names = [
            c.params[0].value if c.original_name == "text" else c.name
            for c in children_of(widget)
        ]
        assert names == ["first", "second", "Divider", "third", "Spacer"]

    def test_single_children_parameter(self):
        """All children go into exactly one children parameter"""
        tag = Tag("Row", {}, [Tag("A"), Text("b"), Tag("C")])
        widget = Compiler().tag_compile(tag)

        children_params = [p for p in widget.params if p.name == "children"]
        assert len(children_params) == 1
        assert len(children_params[0].value) == 3

    def test_no_children_no_parameter(self):
        """Leaf tags get no children parameter"""
        widget = Compiler().tag_compile(Tag("Spacer"))
        assert widget.param_get("children") is None
        assert widget.params == []

    def test_child_metadata(self):
        """Reserved attributes work at every depth"""
        tag = Tag("Column", {}, [Tag("DropdownButton", {"type": "String", "pug-line": "3,7", "const": ""})])
        child = children_of(Compiler().tag_compile(tag))[0]

        assert child.generics == ["String"]
        assert (child.line, child.column) == (3, 7)
        assert child.constant is True


class TestNames:
    """Test widget names and aliases"""

    @pytest.mark.parametrize("tag_name,expected", [
        ("container", "Container"),
        ("app-bar", "AppBar"),
        ("AppBar", "AppBar"),
        ("list_view", "ListView"),
        ("sized-box", "SizedBox"),
    ])
    def test_pascal_case(self, tag_name, expected):
        """Tag names become PascalCase class names"""
        widget = Compiler().tag_compile(Tag(tag_name))
        assert widget.name == expected
        assert widget.original_name == tag_name

    def test_alias_substitution(self):
        """An aliased tag uses the mapped class name"""
        options = CompileOptions(tag_aliases={"button": "raised-button"})
        widget = Compiler(options).tag_compile(Tag("button"))

        assert widget.name == "RaisedButton"
        assert widget.original_name == "button"

    def test_alias_on_children(self):
        """Aliases apply at every depth"""
        options = CompileOptions(tag_aliases={"row": "Row", "box": "Container"})
        tag = Tag("row", {}, [Tag("box")])
        widget = Compiler(options).tag_compile(tag)

        assert widget.name == "Row"
        assert children_of(widget)[0].name == "Container"

    def test_options_camel_case_keys(self):
        """Options accept the tagAliases / autoConstText spelling"""
        options = CompileOptions.model_validate({"tagAliases": {"text": "Label"}, "autoConstText": True})

        assert options.textWidget_get() == "Label"
        assert options.auto_const_text is True
