"""
Options and settings tests

Tests loading compile options from YAML/JSON files and the environment
settings helpers.
"""

from pathlib import Path

import pytest

from pugwidgets.config import AppSettings, CompileOptions, OptionsError, options_load, options_fromDict


class TestOptionsLoad:
    """Test options file loading"""

    def test_missing_file_defaults(self, tmp_path):
        """A missing options file yields the defaults"""
        options = options_load(tmp_path / "nope.yaml")

        assert options.tag_aliases == {"text": "Text"}
        assert options.auto_const_text is False

    def test_yaml_file(self, tmp_path):
        """YAML options with camelCase keys"""
        path = tmp_path / "pugwidgets.yaml"
        path.write_text(
            "tagAliases:\n"
            "  text: Text\n"
            "  button: RaisedButton\n"
            "autoConstText: true\n"
        )

        options = options_load(path)

        assert options.tag_aliases == {"text": "Text", "button": "RaisedButton"}
        assert options.auto_const_text is True
        assert options.alias_resolve("button") == "RaisedButton"
        assert options.alias_resolve("Row") == "Row"

    def test_json_file(self, tmp_path):
        """JSON options files are read as YAML"""
        path = tmp_path / "options.json"
        path.write_text('{"tagAliases": {"text": "RichText"}, "autoConstText": false}')

        options = options_load(path)
        assert options.textWidget_get() == "RichText"

    def test_empty_file(self, tmp_path):
        """An empty file yields defaults"""
        path = tmp_path / "pugwidgets.yaml"
        path.write_text("")
        assert options_load(path) == CompileOptions()

    def test_unknown_keys_ignored(self, tmp_path):
        """Keys the compiler does not use are ignored"""
        path = tmp_path / "pugwidgets.yaml"
        path.write_text("indentation: 4\nautoConstText: true\n")
        assert options_load(path).auto_const_text is True

    def test_malformed_yaml(self, tmp_path):
        """Unparseable YAML raises OptionsError"""
        path = tmp_path / "pugwidgets.yaml"
        path.write_text("tagAliases: [unclosed\n")

        with pytest.raises(OptionsError, match="Failed to parse"):
            options_load(path)

    def test_not_a_mapping(self):
        """A top-level list is rejected"""
        with pytest.raises(OptionsError, match="mapping"):
            options_fromDict(["text", "Text"])  # type: ignore[arg-type]

    def test_invalid_types(self):
        """Wrongly typed values are rejected"""
        with pytest.raises(OptionsError, match="Invalid compile options"):
            options_fromDict({"tagAliases": ["not", "a", "mapping"]})


class TestAppSettings:
    """Test environment settings"""

    def test_output_name(self):
        """Output file names use the source stem and suffix"""
        settings = AppSettings()
        assert settings.outputName_make(Path("views/home.html")) == "home.widgets.json"

    def test_env_prefix(self, monkeypatch):
        """Settings are read from PUGWIDGETS_ variables"""
        monkeypatch.setenv("PUGWIDGETS_STRICT_MODE", "true")
        monkeypatch.setenv("PUGWIDGETS_OUTPUT_SUFFIX", ".json")

        settings = AppSettings()

        assert settings.strict_mode is True
        assert settings.outputName_make(Path("a.html")) == "a.json"
