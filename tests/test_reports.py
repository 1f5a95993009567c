"""Tests for the report model: errors, averages, serialization."""

import pytest

from jscomplexity.exceptions import ReportParseError
from jscomplexity.reports import (
    AnalyzeError,
    ClassReport,
    HalsteadCounts,
    MethodAverage,
    ModuleMethodReport,
    ModuleReport,
    ProjectReport,
    ReportType,
)


def _module_with_errors():
    module = ModuleReport(1, 30)
    module.src_path = "./lib/foo.js"
    klass = ClassReport("Foo", None, 2, 20)
    method = ModuleMethodReport("bar", ["a"], 22, 28)
    module.classes.append(klass)
    module.methods.append(method)

    module.add_error("warning", "module level")
    klass.add_error("error", "class level")
    method.add_error("warning", "method level")
    return module, klass, method


class TestErrors:
    def test_errors_roll_up_from_children(self):
        module, _, _ = _module_with_errors()
        messages = [error.message for error in module.get_errors()]
        assert messages == ["module level", "class level", "method level"]

    def test_without_children(self):
        module, _, _ = _module_with_errors()
        assert [error.message for error in module.get_errors(include_children=False)] == ["module level"]

    def test_query_filters_on_fields(self):
        module, _, _ = _module_with_errors()
        warnings = module.get_errors({"severity": "warning"})
        assert [error.message for error in warnings] == ["module level", "method level"]

    def test_query_accepts_wire_keys(self):
        module, _, _ = _module_with_errors()

        by_wire = module.get_errors({"severity": "warning", "lineStart": 22})
        by_attribute = module.get_errors({"severity": "warning", "line_start": 22})

        assert [error.message for error in by_wire] == ["method level"]
        assert by_attribute == by_wire
        assert [error.message for error in module.get_errors({"type": "CLASS"})] == ["class level"]

    def test_include_reports_adds_context(self):
        module, klass, method = _module_with_errors()
        entries = module.get_errors({"severity": "error"}, include_reports=True)

        assert len(entries) == 1
        assert entries[0]["source"] is klass
        assert entries[0]["class"] is klass
        assert entries[0]["module"] is module

        method_entry = module.get_errors({"message": "method level"}, include_reports=True)[0]
        assert method_entry["source"] is method
        assert "class" not in method_entry

    def test_clear_errors(self):
        module, klass, _ = _module_with_errors()
        module.clear_errors(include_children=False)
        assert len(module.get_errors()) == 2

        module.clear_errors()
        assert module.get_errors() == []
        assert klass.errors == []

    def test_error_copies_location_from_report(self):
        _, _, method = _module_with_errors()
        error = method.errors[0]

        assert error.line_start == 22
        assert error.line_end == 28
        assert error.name == "bar"
        assert error.type is ReportType.MODULE_METHOD
        assert str(error) == "(warning) method level @ Module Method - bar (22 - 28)"

    def test_error_string_without_source(self):
        assert str(AnalyzeError("info", "loose")) == "(info) loose @ <unknown> (0 - 0)"

    def test_error_parse_round_trip(self):
        _, klass, _ = _module_with_errors()
        parsed = AnalyzeError.parse(klass.errors[0].to_dict())

        assert parsed.type is ReportType.CLASS
        assert parsed.name == "Foo"
        assert str(parsed) == str(klass.errors[0])


class TestMethodAverage:
    def test_dotted_accessors(self):
        average = MethodAverage()
        average.set("halstead.operands.total", 4)
        average.set("sloc.logical", 2.5)

        assert average.get("halstead.operands.total") == 4
        assert average.get("sloc.logical") == 2.5
        assert average.get("halstead.missing") == 0

    def test_finalize_rounds(self):
        average = MethodAverage()
        average.cyclomatic = 1.23456
        average.finalize()
        assert average.cyclomatic == 1.235

    def test_to_dict_is_camel_case(self):
        data = MethodAverage().to_dict()
        assert set(data) == {"cyclomatic", "cyclomaticDensity", "halstead", "paramCount", "sloc"}
        assert "identifiers" not in data["halstead"]["operands"]


class TestSerialization:
    def test_module_parse_round_trip(self):
        module, _, _ = _module_with_errors()
        module.dependencies.append({"line": 1, "path": "./bar", "type": "cjs"})
        data = module.to_dict()

        parsed = ModuleReport.parse(data)

        assert parsed.to_dict() == data
        assert parsed.classes[0].name == "Foo"
        assert parsed.methods[0].type is ReportType.MODULE_METHOD

    def test_module_parse_rejects_non_mapping(self):
        with pytest.raises(ReportParseError):
            ModuleReport.parse(["not", "a", "report"])

    def test_project_sorts_modules_by_src_path(self):
        modules = []
        for src_path in ("./b.js", "./a/c.js", "./a.js"):
            module = ModuleReport()
            module.src_path = src_path
            modules.append(module)

        report = ProjectReport(modules)
        assert [module.src_path for module in report.modules] == ["./a.js", "./a/c.js", "./b.js"]

    def test_project_sort_ignores_case(self):
        modules = []
        for src_path in ("./src/Plugins.js", "./src/index.js", "./src/ESComplexProject.js"):
            module = ModuleReport()
            module.src_path = src_path
            modules.append(module)

        report = ProjectReport(modules)
        assert [module.src_path for module in report.modules] == [
            "./src/ESComplexProject.js",
            "./src/index.js",
            "./src/Plugins.js",
        ]

    def test_project_finalize_without_module_bodies(self):
        module = ModuleReport()
        module.src_path = "./a.js"
        module.file_path = "/src/a.js"
        report = ProjectReport([module]).finalize(serialize_modules=False)

        assert report.modules == [{"filePath": "/src/a.js", "srcPath": "./a.js", "srcPathAlias": None}]
        assert report.settings["serializeModules"] is False
        assert report.module_reports() == []

    def test_project_parse_round_trip(self):
        module, _, _ = _module_with_errors()
        report = ProjectReport([module])
        report.adjacency_list = [{"row": 0, "cols": [0]}]
        report.change_cost = 100.0
        data = report.finalize().to_dict()

        parsed = ProjectReport.parse(data)

        assert parsed.to_dict() == data
        assert len(parsed.get_errors()) == 3

    def test_project_parse_reduces_summaries(self):
        data = {
            "settings": {"serializeModules": False},
            "modules": [{"filePath": "/x.js", "srcPath": "./x.js", "srcPathAlias": None, "extra": 1}],
        }
        parsed = ProjectReport.parse(data)
        assert parsed.modules == [{"filePath": "/x.js", "srcPath": "./x.js", "srcPathAlias": None}]


class TestHalsteadCounts:
    def test_distinct_tracks_first_occurrence(self):
        counts = HalsteadCounts()
        for identifier in ("a", "b", "a", "c", "b"):
            counts.add(identifier)

        assert counts.total == 5
        assert counts.distinct == 3
        assert counts.identifiers == ["a", "b", "c"]

    def test_replacing_identifiers_resets_membership(self):
        counts = HalsteadCounts(identifiers=["a"])
        counts.identifiers = []
        counts.add("a")

        assert counts.distinct == 1
        assert counts.identifiers == ["a"]


class TestModuleSettings:
    def test_get_and_set_setting(self):
        module = ModuleReport(settings={"newmi": True})
        module.set_setting("commonjs", False)

        assert module.get_setting("newmi") is True
        assert module.get_setting("commonjs") is False
        assert module.get_setting("missing", "fallback") == "fallback"
