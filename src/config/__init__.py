"""
Configuration package for pugwidgets

Provides application settings via environment variables using pydantic-settings,
and compile options loaded from a YAML/JSON options file.
"""

from .settings import appsettings, AppSettings
from .options import CompileOptions, OptionsError, options_load, options_fromDict

__all__ = [
    "appsettings",
    "AppSettings",
    "CompileOptions",
    "OptionsError",
    "options_load",
    "options_fromDict",
]
