"""Tests for the jscomplexity command line."""

import json

import pytest
from typer.testing import CliRunner

from jscomplexity import __version__
from jscomplexity.cli import app

runner = CliRunner()


@pytest.fixture
def project_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    src = tmp_path / "src"
    src.mkdir()
    (src / "a.js").write_text('var b = require("./b");\nfunction run(x) { return x ? b(x) : 0; }\n')
    (src / "b.js").write_text("module.exports = function (value) { return value * 2; };\n")
    return tmp_path


class TestAnalyzeCommand:
    def test_json_output(self, project_dir):
        result = runner.invoke(app, ["analyze", "src", "--format", "json", "--commonjs"])

        assert result.exit_code == 0, result.output
        report = json.loads(result.stdout)
        assert [module["srcPath"] for module in report["modules"]] == ["src/a.js", "src/b.js"]
        assert report["adjacencyList"] == [{"row": 0, "cols": [1]}]

    def test_newmi_flag(self, project_dir):
        result = runner.invoke(app, ["analyze", "src/a.js", "-f", "json", "--newmi"])

        assert result.exit_code == 0, result.output
        module = json.loads(result.stdout)["modules"][0]
        assert module["settings"]["newmi"] is True
        assert module["maintainability"] <= 100

    def test_text_output(self, project_dir):
        result = runner.invoke(app, ["analyze", "src", "--format", "text-modules"])

        assert result.exit_code == 0, result.output
        assert "Module 2:" in result.stdout
        assert "srcPath: src/b.js" in result.stdout

    def test_default_summary(self, project_dir):
        result = runner.invoke(app, ["analyze", "src"])

        assert result.exit_code == 0, result.output
        assert "Summary" in result.stdout
        assert "Analyzed" in result.stdout

    def test_unknown_format(self, project_dir):
        result = runner.invoke(app, ["analyze", "src", "--format", "yaml"])
        assert result.exit_code == 1

    def test_missing_path(self, project_dir):
        result = runner.invoke(app, ["analyze", "missing"])
        assert result.exit_code == 1

    def test_parse_error(self, project_dir):
        (project_dir / "src" / "broken.js").write_text("var = ;\n")

        assert runner.invoke(app, ["analyze", "src", "-f", "json"]).exit_code == 1

        result = runner.invoke(app, ["analyze", "src", "-f", "json-modules", "--ignore-errors", "-q"])
        assert result.exit_code == 0
        assert "broken" not in json.dumps(json.loads(result.stdout))

    def test_config_file(self, project_dir):
        config_file = project_dir / "settings.toml"
        config_file.write_text('format = "json-minimal"\ncommonjs = true\n')

        result = runner.invoke(app, ["analyze", "src", "--config", str(config_file)])

        assert result.exit_code == 0, result.output
        assert "changeCost" in json.loads(result.stdout)


class TestOtherCommands:
    def test_formats(self):
        result = runner.invoke(app, ["formats"])

        assert result.exit_code == 0
        assert "json-checkstyle" in result.stdout
        assert "markdown-visibility" in result.stdout

    def test_version(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout
