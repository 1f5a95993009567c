"""Tests for configuration loading."""

import os

import pytest

from jscomplexity.config import AnalysisConfig, load_config
from jscomplexity.exceptions import ConfigurationError, InvalidConfigError


@pytest.fixture(autouse=True)
def isolated(monkeypatch, tmp_path):
    """No global/project config files and no JSCOMPLEXITY_* variables."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    for name in list(os.environ):
        if name.startswith("JSCOMPLEXITY_"):
            monkeypatch.delenv(name)
    return tmp_path


class TestAnalysisConfig:
    def test_defaults(self):
        config = AnalysisConfig()
        assert config.newmi is False
        assert config.switchcase is True
        assert config.source_type == "module"
        assert ".js" in config.extensions
        assert "node_modules" in config.exclude_dirs

    def test_frozen(self):
        with pytest.raises(AttributeError):
            AnalysisConfig().newmi = True

    def test_invalid_source_type(self):
        with pytest.raises(InvalidConfigError, match="source_type"):
            AnalysisConfig(source_type="commonjs")

    def test_invalid_boolean(self):
        with pytest.raises(InvalidConfigError) as exc_info:
            AnalysisConfig(newmi="yes")
        assert exc_info.value.key == "newmi"

    def test_extensions_need_dot(self):
        with pytest.raises(InvalidConfigError, match="extensions"):
            AnalysisConfig(extensions=["js"])

    def test_option_views(self):
        config = AnalysisConfig(commonjs=True, no_core_size=True)

        assert config.module_options()["commonjs"] is True
        assert "no_core_size" not in config.module_options()
        assert config.project_options()["no_core_size"] is True
        assert config.project_options()["commonjs"] is True


class TestLoadConfig:
    def test_overrides(self):
        config = load_config(newmi=True, format=None)
        assert config.newmi is True
        assert config.format is None

    def test_verbosity_flags(self):
        assert load_config(verbose=True).verbosity == "verbose"
        assert load_config(quiet=True).verbosity == "quiet"
        assert load_config().verbosity == "normal"

    def test_unknown_field(self):
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            load_config(colour=True)

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("JSCOMPLEXITY_NEWMI", "true")
        monkeypatch.setenv("JSCOMPLEXITY_SOURCE_TYPE", "script")
        monkeypatch.setenv("JSCOMPLEXITY_FORMAT", "json")

        config = load_config()

        assert config.newmi is True
        assert config.source_type == "script"
        assert config.format == "json"

    def test_overrides_beat_environment(self, monkeypatch):
        monkeypatch.setenv("JSCOMPLEXITY_NEWMI", "true")
        assert load_config(newmi=False).newmi is False

    def test_invalid_environment_value(self, monkeypatch):
        monkeypatch.setenv("JSCOMPLEXITY_COMMONJS", "maybe")
        with pytest.raises(InvalidConfigError, match="JSCOMPLEXITY_COMMONJS"):
            load_config()

    def test_explicit_file(self, tmp_path):
        config_file = tmp_path / "custom.toml"
        config_file.write_text('[jscomplexity]\ncommonjs = true\nextensions = [".js", ".jsx"]\n')

        config = load_config(config_file)

        assert config.commonjs is True
        assert config.extensions == [".js", ".jsx"]

    def test_project_file_is_discovered(self, isolated):
        (isolated / "jscomplexity.toml").write_text("trycatch = true\n")
        assert load_config().trycatch is True

    def test_environment_beats_files(self, isolated, monkeypatch):
        (isolated / "jscomplexity.toml").write_text("trycatch = true\n")
        monkeypatch.setenv("JSCOMPLEXITY_TRYCATCH", "0")
        assert load_config().trycatch is False

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Config file not found"):
            load_config(tmp_path / "nope.toml")

    def test_malformed_file(self, tmp_path):
        config_file = tmp_path / "bad.toml"
        config_file.write_text("newmi = \n")
        with pytest.raises(ConfigurationError, match="Invalid config file"):
            load_config(config_file)
