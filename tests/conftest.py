"""Shared test fixtures for jscomplexity."""

import pytest

from jscomplexity.analyzer import ModuleAnalyzer, ProjectAnalyzer
from jscomplexity.parser import parse_source


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def parse():
    """Parse JavaScript source into an ESTree dict."""

    def _parse(code, source_type="module"):
        return parse_source(code, source_type=source_type)

    return _parse


@pytest.fixture
def module_analyzer():
    return ModuleAnalyzer()


@pytest.fixture
def project_analyzer():
    return ProjectAnalyzer()


@pytest.fixture
def analyze(parse, module_analyzer):
    """Parse and analyze one module in a single call."""

    def _analyze(code, **options):
        return module_analyzer.analyze(parse(code), options)

    return _analyze


@pytest.fixture
def dependency_modules(parse):
    """Four CommonJS modules with a two-module cycle between /a/b.js and /a/c.js.

    Sorted order: /a.js, /a/b.js, /a/c.js, /d.js
    """
    sources = {
        "/d.js": 'require("./a");',
        "/a/c.js": 'require("./b");',
        "/a/b.js": 'require("./c");',
        "/a.js": 'require("./a/b");\nrequire("./a/c");',
    }
    return [
        {"ast": parse(code), "filePath": f"/project{src_path}", "srcPath": src_path}
        for src_path, code in sources.items()
    ]
