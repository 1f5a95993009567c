"""Tests for project metrics: dependency graph, visibility, change cost, core size."""

import asyncio

import numpy as np
import pytest

from jscomplexity.exceptions import ModuleAnalysisError
from jscomplexity.plugins.project_metrics import DependencyGraph, ProjectMetricCalculate
from jscomplexity.reports import ModuleReport, ProjectReport


def _module(src_path, alias=None):
    module = ModuleReport()
    module.src_path = src_path
    module.src_path_alias = alias
    return module


class TestDependencyProject:
    @pytest.fixture
    def report(self, project_analyzer, dependency_modules):
        return project_analyzer.analyze(dependency_modules, {"commonjs": True})

    def test_modules_sorted_by_src_path(self, report):
        assert [module.src_path for module in report.modules] == ["/a.js", "/a/b.js", "/a/c.js", "/d.js"]

    def test_adjacency_list(self, report):
        assert report.adjacency_list == [
            {"row": 0, "cols": [1, 2]},
            {"row": 1, "cols": [2]},
            {"row": 2, "cols": [1]},
            {"row": 3, "cols": [0]},
        ]

    def test_visibility_list(self, report):
        assert report.visibility_list == [
            {"row": 0, "cols": [0, 3]},
            {"row": 1, "cols": [0, 1, 2, 3]},
            {"row": 2, "cols": [0, 1, 2, 3]},
            {"row": 3, "cols": [3]},
        ]

    def test_graph_metrics(self, report):
        assert report.first_order_density == 41.667
        assert report.change_cost == 68.75
        assert report.core_size == 0

    def test_file_paths_are_kept(self, report):
        assert report.modules[0].file_path == "/project/a.js"

    def test_module_average(self, report):
        maintainability = np.mean([module.maintainability for module in report.modules])
        assert report.module_average.maintainability == pytest.approx(maintainability, abs=1e-3)

    def test_without_commonjs_there_are_no_edges(self, project_analyzer, dependency_modules):
        report = project_analyzer.analyze(dependency_modules)
        assert report.adjacency_list == []
        assert report.change_cost == 25

    def test_no_core_size(self, project_analyzer, dependency_modules):
        report = project_analyzer.analyze(dependency_modules, {"commonjs": True, "no_core_size": True})
        assert report.visibility_list == []
        assert report.core_size == 0
        assert report.change_cost == 68.75

    def test_skip_calculation(self, project_analyzer, dependency_modules):
        report = project_analyzer.analyze(dependency_modules, {"commonjs": True, "skip_calculation": True})
        assert report.adjacency_list == []
        assert report.module_average.maintainability == 0
        assert len(report.modules) == 4

    def test_without_module_bodies(self, project_analyzer, dependency_modules):
        report = project_analyzer.analyze(dependency_modules, {"commonjs": True, "serialize_modules": False})

        assert report.modules[0] == {"filePath": "/project/a.js", "srcPath": "/a.js", "srcPathAlias": None}
        assert report.adjacency_list[0] == {"row": 0, "cols": [1, 2]}
        assert report.to_dict()["settings"]["serializeModules"] is False

    def test_analyze_async(self, project_analyzer, dependency_modules):
        report = asyncio.run(project_analyzer.analyze_async(dependency_modules, {"commonjs": True}))
        assert report.change_cost == 68.75


class TestDependencyResolver:
    def test_resolver_rewrites_paths(self, project_analyzer, parse):
        modules = [
            {"ast": parse('require("lib/util");'), "srcPath": "/main.js"},
            {"ast": parse(""), "srcPath": "/vendor/util.js"},
        ]

        def resolver(path):
            return "/vendor/util.js" if path == "lib/util" else None

        report = project_analyzer.analyze(modules, {"commonjs": True}, dependency_resolver=resolver)
        assert report.adjacency_list == [{"row": 0, "cols": [1]}]

    def test_resolver_in_options(self, project_analyzer, parse):
        modules = [
            {"ast": parse('require("util");'), "srcPath": "/main.js"},
            {"ast": parse(""), "srcPath": "/util.js"},
        ]
        options = {"commonjs": True, "dependency_resolver": lambda path: "/util.js"}
        assert project_analyzer.analyze(modules, options).adjacency_list == [{"row": 0, "cols": [1]}]

    def test_alias_matches(self, project_analyzer, parse):
        modules = [
            {"ast": parse('require("./helpers");'), "srcPath": "/main.js"},
            {"ast": parse(""), "srcPath": "/lib/helpers/index.js", "srcPathAlias": "/helpers"},
        ]
        report = project_analyzer.analyze(modules, {"commonjs": True})
        assert report.adjacency_list == [{"row": 1, "cols": [0]}]
        assert report.modules[1].src_path == "/main.js"


class TestProjectErrors:
    def test_missing_src_path(self, project_analyzer, parse):
        with pytest.raises(ModuleAnalysisError, match="'srcPath' is missing or empty"):
            project_analyzer.analyze([{"ast": parse("var a;")}])

    def test_invalid_ast_is_wrapped(self, project_analyzer):
        with pytest.raises(ModuleAnalysisError, match=r"Failed to analyze /broken\.js"):
            project_analyzer.analyze([{"ast": None, "srcPath": "/broken.js"}])

    def test_ignore_errors_skips_failing_modules(self, project_analyzer, parse):
        modules = [{"ast": None, "srcPath": "/broken.js"}, {"ast": parse("var a;"), "srcPath": "/ok.js"}]
        report = project_analyzer.analyze(modules, {"ignore_errors": True})
        assert [module.src_path for module in report.modules] == ["/ok.js"]

    def test_empty_project(self, project_analyzer):
        report = project_analyzer.analyze([])
        assert report.modules == []
        assert report.change_cost == 0
        assert report.first_order_density == 0
        assert report.core_size == 0


class TestDependencyGraph:
    def test_resolve_relative_path(self):
        assert DependencyGraph.resolve_path("../b", "/x/y/a.js") == "/x/b"
        assert DependencyGraph.resolve_path("./c.js", "/x/a.js") == "/x/c.js"
        assert DependencyGraph.resolve_path("pkg/d", "/x/a.js") == "pkg/d"

    def test_extensionless_match(self):
        assert DependencyGraph.matches("/a", _module("/a.js"))
        assert not DependencyGraph.matches("/a.js", _module("/a.jsx"))
        assert DependencyGraph.matches("/alias", _module("/real.js", alias="/alias"))

    def test_self_dependency_is_ignored(self):
        module = _module("/a.js")
        module.dependencies.append({"line": 1, "path": "./a", "type": "cjs"})
        assert DependencyGraph.adjacency_matrix([module]).sum() == 0

    def test_dynamic_dependency_never_matches(self):
        source = _module("/a.js")
        source.dependencies.append({"line": 1, "path": "* dynamic dependency *", "type": "cjs"})
        assert DependencyGraph.adjacency_matrix([source, _module("/b.js")]).sum() == 0

    def test_reachability_includes_diagonal(self):
        adjacency = np.array([[0, 1, 0], [0, 0, 1], [0, 0, 0]], dtype=np.int8)
        reach = DependencyGraph.reachability_matrix(adjacency)
        assert reach.tolist() == [[1, 1, 1], [0, 1, 1], [0, 0, 1]]


class TestGraphFormulas:
    def test_density_of_single_module(self):
        assert ProjectMetricCalculate.first_order_density(np.zeros((1, 1), dtype=np.int8)) == 0

    def test_core_of_full_cycle(self):
        reach = np.ones((3, 3), dtype=np.int8)
        assert ProjectMetricCalculate.core_size(reach) == 100

    def test_calculate_directly(self):
        first, second = _module("/a.js"), _module("/b.js")
        first.dependencies.append({"line": 1, "path": "./b", "type": "esm"})
        report = ProjectReport([second, first])

        ProjectMetricCalculate.calculate(report, {})

        assert report.adjacency_list == [{"row": 0, "cols": [1]}]
        assert report.change_cost == 75
        assert report.first_order_density == 50
