"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use PUGWIDGETS_ prefix (e.g., PUGWIDGETS_STRICT_MODE=true).

Settings can also be loaded from a .env file in the project root.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use PUGWIDGETS_ prefix.

    Examples:
        PUGWIDGETS_OPTIONS_FILE=flutter-view.yaml
        PUGWIDGETS_INPUT_PATTERN=*.pug.html
        PUGWIDGETS_STRICT_MODE=true
    """

    model_config = SettingsConfigDict(
        env_prefix="PUGWIDGETS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Input configuration
    options_file: str = Field(
        default="pugwidgets.yaml",
        description="Compile options file (YAML or JSON), relative to the input directory",
    )

    input_pattern: str = Field(
        default="*.html",
        description="Glob pattern selecting markup files in the input directory",
    )

    # Compilation configuration
    debug_mode: bool = Field(
        default=False,
        description="Print tracebacks for pipeline stage errors",
    )

    strict_mode: bool = Field(
        default=False,
        description="Strict mode: treat compile diagnostics as errors",
    )

    # Output configuration
    output_suffix: str = Field(
        default=".widgets.json",
        description="Suffix appended to each source file stem to name its output file",
    )

    json_indent: int = Field(
        default=2,
        description="Indentation of the written widget JSON (0 for compact output)",
    )

    def outputName_make(self, source: Path) -> str:
        """
        Generate the output file name for a source file.

        Args:
            source: Path of the markup source file

        Returns:
            Output file name (e.g., "home.widgets.json")

        Example:
            >>> settings = AppSettings()
            >>> settings.outputName_make(Path("views/home.html"))
            'home.widgets.json'
        """
        return f"{source.stem}{self.output_suffix}"


# Singleton instance - import this in your code
appsettings = AppSettings()
