"""
Compile options loader

Compile options control how markup maps to widgets: which tag names are
aliased to which widget classes, and whether plain text widgets are emitted
as const. They are read from an options file next to the markup sources:

    # pugwidgets.yaml
    tagAliases:
      text: Text
      row: Row
      button: RaisedButton
    autoConstText: true

JSON files work too (JSON is a subset of YAML).
"""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError


DEFAULT_TEXT_WIDGET = "Text"


class OptionsError(Exception):
    """Raised when the options file cannot be read or validated"""
    pass


class CompileOptions(BaseModel):
    """
    Options consumed by the widget compiler.

    Accepts both the camelCase keys used in options files (tagAliases,
    autoConstText) and the Python field names.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    tag_aliases: Dict[str, str] = Field(
        default_factory=lambda: {"text": DEFAULT_TEXT_WIDGET},
        alias="tagAliases",
        description="Source tag name to replacement tag name; key 'text' names the text widget class",
    )

    auto_const_text: bool = Field(
        default=False,
        alias="autoConstText",
        description="Mark text widgets without $ interpolation as const",
    )

    def alias_resolve(self, tag_name: str) -> str:
        """Return the configured replacement for a tag name, or the name itself"""
        return self.tag_aliases.get(tag_name, tag_name)

    def textWidget_get(self) -> str:
        """Class name used for widgets synthesized from text content"""
        return self.tag_aliases.get("text", DEFAULT_TEXT_WIDGET)


def options_fromDict(data: Optional[Dict[str, Any]]) -> CompileOptions:
    """
    Build CompileOptions from a parsed options document.

    Args:
        data: Mapping from the options file (None for an empty file)

    Returns:
        Validated CompileOptions

    Raises:
        OptionsError: If the document is not a mapping or fails validation
    """
    if data is None:
        return CompileOptions()
    if not isinstance(data, dict):
        raise OptionsError(f"Options must be a mapping, got {type(data).__name__}")
    try:
        return CompileOptions.model_validate(data)
    except ValidationError as e:
        raise OptionsError(f"Invalid compile options: {e}")


def options_load(path: Path) -> CompileOptions:
    """
    Load compile options from a YAML/JSON file.

    A missing file is not an error: the defaults are returned.

    Args:
        path: Options file path

    Returns:
        Validated CompileOptions

    Raises:
        OptionsError: If the file exists but cannot be read, parsed or validated
    """
    if not path.exists():
        return CompileOptions()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise OptionsError(f"Failed to parse {path.name}: {e}")
    except OSError as e:
        raise OptionsError(f"Failed to load {path.name}: {e}")

    return options_fromDict(data)
