"""
Import directive extraction

Pulls <import> tags out of the root of a markup document and turns them
into import specifiers for the generated Dart file:

    <import package="flutter/material.dart"/>   ->  "package:flutter/material.dart"
    <import file="widgets/avatar.dart"/>        ->  "widgets/avatar.dart"

Only root-level elements are inspected; imports nested inside other tags
are left alone (and will be compiled as ordinary widgets).
"""

from typing import List, cast

from ..models.markup import Element, Tag
from ..models.compiler import ImportSplit
from .log import LOG


IMPORT_TAG = 'import'


def import_is(element: Element) -> bool:
    """Check whether a root element is an <import> directive (case-sensitive)"""
    return isinstance(element, Tag) and element.name == IMPORT_TAG


def imports_split(elements: List[Element]) -> ImportSplit:
    """
    Separate import directives from renderable root elements

    Does not modify `elements`.

    Args:
        elements: Root elements of a markup document

    Returns:
        ImportSplit with the remaining elements and the import specifiers.
        All package specifiers come first, then all file specifiers, each
        group in document order. Duplicates are kept. Import tags with an
        empty or missing package/file attribute contribute nothing for it.

    Example:
        <import package="a"/> <import file="b.dart"/> <Text/>
        -> ImportSplit(elements=[<Text/>], imports=["package:a", "b.dart"])
    """
    remaining: List[Element] = []
    package_imports: List[str] = []
    file_imports: List[str] = []

    for element in elements:
        if not import_is(element):
            remaining.append(element)
            continue
        element = cast(Tag, element)

        package = element.attributes.get('package')
        if package:
            package_imports.append(f"package:{package}")

        file = element.attributes.get('file')
        if file:
            file_imports.append(file)

    imports = package_imports + file_imports
    LOG(f"Extracted {len(imports)} imports from {len(elements) - len(remaining)} import tags", level=3)
    return ImportSplit(elements=remaining, imports=imports)


def imports_extract(elements: List[Element]) -> List[str]:
    """
    Remove import directives from `elements` in place and return their specifiers

    Destructive: after the call `elements` holds only the non-import root
    elements. Use imports_split() to keep the original list intact.

    Args:
        elements: Root elements of a markup document (modified)

    Returns:
        Import specifiers, package style first, then file style
    """
    split = imports_split(elements)
    elements[:] = split.elements
    return split.imports
