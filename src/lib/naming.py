"""
Identifier case conversion

Converts markup-style names (kebab-case, snake_case, mixed case) into the
camelCase parameter names and PascalCase class names used by Dart.

Word splitting:
- non-alphanumeric characters separate words ("main-axis" -> main, axis)
- a lower-to-upper transition starts a word ("mainAxis" -> main, Axis)
- an acronym ends before its last capital when a lowercase letter
  follows ("HTTPClient" -> HTTP, Client)
"""

import re
from typing import List


_LOWER_UPPER = re.compile(r'([a-z0-9])([A-Z])')
_ACRONYM_WORD = re.compile(r'([A-Z])([A-Z][a-z])')
_SEPARATORS = re.compile(r'[^A-Za-z0-9]+')


def words_split(name: str) -> List[str]:
    """
    Split an identifier into words

    Example:
        >>> words_split('main-axis_alignment')
        ['main', 'axis', 'alignment']
        >>> words_split('HTTPClient')
        ['HTTP', 'Client']
    """
    spaced = _LOWER_UPPER.sub(r'\1 \2', name)
    spaced = _ACRONYM_WORD.sub(r'\1 \2', spaced)
    return [word for word in _SEPARATORS.split(spaced) if word]


def camel_case(name: str) -> str:
    """
    Convert to camelCase

    Example:
        >>> camel_case('cross-axis-alignment')
        'crossAxisAlignment'
        >>> camel_case('onPressed')
        'onPressed'
    """
    words = words_split(name)
    if not words:
        return ''
    head = words[0].lower()
    return head + ''.join(word[:1].upper() + word[1:].lower() for word in words[1:])


def pascal_case(name: str) -> str:
    """
    Convert to PascalCase (camelCase with the first letter upper-cased)

    Example:
        >>> pascal_case('app-bar')
        'AppBar'
        >>> pascal_case('ListView')
        'ListView'
    """
    camel = camel_case(name)
    return camel[:1].upper() + camel[1:]
