"""Tests for module-level metrics computed from real JavaScript sources."""

import math

import pytest

from jscomplexity.analyzer import ModuleAnalyzer
from jscomplexity.exceptions import InvalidSyntaxTreeError, ParsingError
from jscomplexity.plugins.module_metrics import ModuleMetricPostAverage
from jscomplexity.reports import ReportType
from jscomplexity.syntax import DYNAMIC_DEPENDENCY

MULTIPLE_FUNCTIONS = (
    "function foo (a, b) { if (a) { b(a); } else { a(b); } } "
    "function bar (c, d) { var i; for (i = 0; i < c.length; i += 1) { d += 1; } console.log(d); }"
)


class TestLogicalLines:
    def test_classes_and_super_call(self, analyze):
        report = analyze("class Foo {}; class Bar extends Foo { constructor() { super(); } }")
        assert report.aggregate.sloc.logical == 4

    def test_spread_in_array(self, analyze):
        report = analyze("const iter = [2, 3, 4]; const spreadTest = [1, ...iter, 5];")
        assert report.aggregate.sloc.logical == 2

    def test_physical_lines_span_the_program(self, analyze):
        report = analyze("var a = 1;\n\nvar b = 2;\n")
        assert report.aggregate.sloc.physical == 3


class TestObjectLiterals:
    def test_for_in_over_object_literal(self, analyze):
        report = analyze('var property; for (property in { foo: "bar", baz: "qux" }) { "wibble"; }')
        halstead = report.aggregate.halstead

        assert report.aggregate.sloc.logical == 3
        assert report.methods == []
        assert (halstead.operators.total, halstead.operators.distinct) == (5, 4)
        assert (halstead.operands.total, halstead.operands.distinct) == (7, 6)

    def test_shorthand_methods_and_accessors_get_reports(self, analyze):
        report = analyze("var o = { m(a) { return a; }, get g() { return 1; }, f: function (b) { return b; } };")

        assert [method.name for method in report.methods] == ["m", "g", "<anon method-1>"]
        assert [method.param_names for method in report.methods] == [["a"], [], ["b"]]
        assert all(method.sloc.logical == 1 for method in report.methods)
        assert all(method.type is ReportType.MODULE_METHOD for method in report.methods)

    def test_function_valued_properties_are_anonymous(self, analyze):
        report = analyze('var foo = { bar: function () { if (true) { "bar"; } }, bar: function () { "bar"; } };')

        assert [method.name for method in report.methods] == ["<anon method-1>", "<anon method-2>"]
        assert [method.cyclomatic for method in report.methods] == [2, 1]
        assert report.aggregate.cyclomatic == 4


class TestTryStatements:
    def test_finally_counts_as_operator(self, analyze):
        report = analyze('try { "foo"; } catch (e) { } finally { if (true) { "bar"; } }')
        halstead = report.aggregate.halstead

        assert report.aggregate.cyclomatic == 2
        assert halstead.operators.identifiers == ["try", "finally", "catch", "if"]
        assert (halstead.operands.total, halstead.operands.distinct) == (4, 4)

    def test_without_finally(self, analyze):
        report = analyze('try { "foo"; } catch (e) { "bar"; }')
        assert "finally" not in report.aggregate.halstead.operators.identifiers


class TestParameters:
    IIFE = '(function (foo) { if (foo === "foo") { console.log(foo); return; } "bar"; }("foo"));'

    def test_immediately_invoked_function(self, analyze):
        report = analyze(self.IIFE)
        halstead = report.aggregate.halstead

        assert report.aggregate.sloc.logical == 6
        assert report.aggregate.cyclomatic == 3
        assert report.methods[0].cyclomatic == 2
        assert report.methods[0].param_count == 1
        assert (halstead.operators.total, halstead.operators.distinct) == (7, 6)
        assert (halstead.operands.total, halstead.operands.distinct) == (8, 5)

    def test_parameters_count_where_the_function_is_declared(self, analyze):
        report = analyze("function foo (a, b = 1, ...rest) { return; }")

        assert report.aggregate.halstead.operands.identifiers == ["foo", "a", "b", "rest"]
        assert report.methods[0].halstead.operands.total == 0


class TestMultipleFunctions:
    @pytest.fixture
    def report(self, analyze):
        return analyze(MULTIPLE_FUNCTIONS)

    def test_methods_are_module_methods(self, report):
        assert [method.name for method in report.methods] == ["foo", "bar"]
        assert all(method.type is ReportType.MODULE_METHOD for method in report.methods)

    def test_param_counts(self, report):
        assert report.methods[0].param_count == 2
        assert report.methods[1].param_count == 2
        assert report.aggregate.param_count == 4

    def test_method_average(self, report):
        average = report.method_average
        assert average.sloc.logical == 4
        assert average.cyclomatic == 2
        assert average.halstead.effort == 283.607
        assert average.param_count == 2

    def test_module_cyclomatic_counts_each_method(self, report):
        # 1 for the module, 1 per function, 1 for the if, 1 for the for test
        assert report.aggregate.cyclomatic == 5


class TestEmptyReturn:
    @pytest.fixture
    def report(self, analyze):
        return analyze("function foo () { return; }")

    def test_aggregate_halstead_counts(self, report):
        halstead = report.aggregate.halstead
        assert halstead.operators.total == 2
        assert halstead.operators.distinct == 2
        assert halstead.operands.total == 1
        assert halstead.operands.distinct == 1
        assert halstead.difficulty == 1

    def test_method_difficulty_without_operands(self, report):
        assert report.methods[0].halstead.difficulty == 0.5
        assert report.methods[0].halstead.operands.total == 0


class TestCyclomaticOptions:
    SWITCH = "function f(a) { switch (a) { case 1: break; case 2: break; default: break; } }"
    LOGICAL_OR = "function f(a, b) { return a || b; }"
    LOGICAL_AND = "function f(a, b) { return a && b; }"
    FOR_IN = "function f(o) { for (var k in o) { g(k); } }"
    TRY_CATCH = "function f() { try { a(); } catch (e) { b(); } }"

    @pytest.mark.parametrize(
        "code, option, enabled, disabled",
        [
            (SWITCH, "switchcase", 3, 1),
            (LOGICAL_OR, "logicalor", 2, 1),
            (FOR_IN, "forin", 2, 1),
            (TRY_CATCH, "trycatch", 2, 1),
        ],
    )
    def test_option_toggles_path(self, analyze, code, option, enabled, disabled):
        assert analyze(code, **{option: True}).methods[0].cyclomatic == enabled
        assert analyze(code, **{option: False}).methods[0].cyclomatic == disabled

    def test_logical_and_always_counts(self, analyze):
        assert analyze(self.LOGICAL_AND, logicalor=False).methods[0].cyclomatic == 2

    def test_defaults(self, analyze):
        assert analyze(self.SWITCH).methods[0].cyclomatic == 3
        assert analyze(self.FOR_IN).methods[0].cyclomatic == 1
        assert analyze(self.TRY_CATCH).methods[0].cyclomatic == 1

    def test_non_boolean_option_falls_back_to_default(self, analyze):
        assert analyze(self.SWITCH, switchcase="no").methods[0].cyclomatic == 3

    def test_cyclomatic_density(self, analyze):
        method = analyze(self.LOGICAL_OR).methods[0]
        # 2 paths over 1 logical line
        assert method.cyclomatic_density == 200


class TestClasses:
    CODE = "class Foo extends Base {\n  bar(a) {\n    if (a) { return 1; }\n    return 0;\n  }\n}"

    def test_class_report(self, analyze):
        report = analyze(self.CODE)

        assert len(report.classes) == 1
        klass = report.classes[0]
        assert klass.name == "Foo"
        assert klass.super_class_name == "Base"
        assert klass.line_start == 1
        assert klass.line_end == 6

    def test_class_method(self, analyze):
        klass = analyze(self.CODE).classes[0]
        method = klass.methods[0]

        assert method.name == "bar"
        assert method.type is ReportType.CLASS_METHOD
        assert method.param_names == ["a"]
        assert method.cyclomatic == 2
        assert method.line_start == 2

    def test_class_aggregate_gains_path_per_method(self, analyze):
        report = analyze(self.CODE)
        assert report.classes[0].aggregate.cyclomatic == 2
        assert report.classes[0].aggregate.param_count == 1
        assert report.aggregate.cyclomatic == 3

    def test_class_methods_count_in_module_average(self, analyze):
        report = analyze(self.CODE)
        assert report.methods == []
        assert report.method_average.cyclomatic == 2

    def test_anonymous_class_expression(self, analyze):
        report = analyze("var Foo = class { run() {} };")
        assert report.classes[0].name == "<anon class-1>"


class TestNestedFunctions:
    def test_nested_methods(self, analyze):
        report = analyze("function outer() { function inner() { return () => 1; } }")

        outer = report.methods[0]
        assert [method.name for method in report.methods] == ["outer", "inner", "<anon method-1>"]
        assert outer.nested_methods == ["inner"]
        assert outer.max_nested_method_depth == 2

    def test_arrow_function_has_no_logical_line(self, analyze):
        report = analyze("var f = (a) => a;")
        assert report.methods[0].sloc.logical == 0
        assert report.methods[0].param_names == ["a"]


class TestDependencies:
    def test_commonjs_require(self, analyze):
        report = analyze('var a = require("./a");\nrequire("./b");', commonjs=True)
        assert report.dependencies == [
            {"line": 1, "path": "./a", "type": "cjs"},
            {"line": 2, "path": "./b", "type": "cjs"},
        ]

    def test_require_ignored_without_commonjs(self, analyze):
        assert analyze('require("./a");').dependencies == []

    def test_dynamic_require(self, analyze):
        report = analyze("var name = './a'; require(name);", commonjs=True)
        assert report.dependencies == [{"line": 1, "path": DYNAMIC_DEPENDENCY, "type": "cjs"}]

    def test_esm_imports_and_reexports(self, analyze):
        report = analyze('import foo from "./foo";\nexport * from "./bar";\nexport { baz } from "./baz";')
        assert [dependency["path"] for dependency in report.dependencies] == ["./foo", "./bar", "./baz"]
        assert {dependency["type"] for dependency in report.dependencies} == {"esm"}

    def test_esm_disabled(self, analyze):
        assert analyze('import foo from "./foo";', esm=False).dependencies == []


class TestMaintainability:
    def test_empty_module(self, analyze):
        report = analyze("")
        assert report.maintainability == 170.77

    def test_newmi_rebases(self, analyze):
        assert analyze("", newmi=True).maintainability == 99.865

    def test_never_exceeds_ceiling(self):
        assert ModuleMetricPostAverage.maintainability(0, -10, 0) == 171

    def test_non_positive_inputs_drop_their_log_term(self):
        assert ModuleMetricPostAverage.maintainability(0, 2, 0) == pytest.approx(171 - 0.46)
        assert ModuleMetricPostAverage.maintainability(-1, 0, 10) == pytest.approx(171 - 16.2 * math.log(10))

    def test_newmi_floor_is_zero(self):
        assert ModuleMetricPostAverage.maintainability(1e12, 500, 1e6, newmi=True) == 0

    def test_more_code_lowers_the_index(self, analyze):
        small = analyze("function foo () { return; }")
        large = analyze(MULTIPLE_FUNCTIONS)
        assert large.maintainability < small.maintainability < 171


class TestAnalyzer:
    def test_settings_are_recorded(self, analyze):
        settings = analyze("", newmi=True).settings
        assert settings["newmi"] is True
        assert settings["commonjs"] is False
        assert settings["switchcase"] is True

    def test_settings_are_read_only(self, module_analyzer):
        settings = module_analyzer.configure({"newmi": True})
        with pytest.raises(TypeError):
            settings["newmi"] = False

    def test_rejects_non_mapping_ast(self, module_analyzer):
        with pytest.raises(InvalidSyntaxTreeError):
            module_analyzer.analyze("var a = 1;")

    def test_analyze_source(self, module_analyzer):
        report = module_analyzer.analyze_source("var a = 1;", src_path="./a.js")
        assert report.src_path == "./a.js"
        assert report.aggregate.sloc.logical == 1

    def test_parse_error(self, module_analyzer):
        with pytest.raises(ParsingError, match=r"Failed to parse \./bad\.js"):
            module_analyzer.analyze_source("function (", src_path="./bad.js")

    def test_node_errors_are_recorded_on_innermost_report(self):
        class FailOnReturn:
            def on_enter_node(self, event):
                if event.data["node"]["type"] == "ReturnStatement":
                    raise RuntimeError("boom")

        report = ModuleAnalyzer(plugins=[FailOnReturn()]).analyze_source("function foo() {\n  return;\n}")

        errors = report.get_errors()
        assert len(errors) == 1
        assert errors[0].message == "ReturnStatement (line 2): boom"
        assert errors[0].name == "foo"
        assert report.methods[0].errors == errors
        # Metrics recorded before the failure are kept.
        assert report.aggregate.sloc.logical == 2

    def test_plugin_can_prune_subtrees(self):
        class SkipBodies:
            def on_enter_node(self, event):
                if event.data["node"]["type"] == "FunctionDeclaration":
                    event.data["ignore_keys"] = ["id", "params", "body"]

        report = ModuleAnalyzer(plugins=[SkipBodies()]).analyze_source("function foo() { return; }")
        assert report.methods[0].sloc.logical == 0
        assert report.aggregate.sloc.logical == 1

    def test_without_default_plugins(self):
        report = ModuleAnalyzer(load_default_plugins=False).analyze_source("function foo() { return; }")
        assert report.methods == []
        assert report.aggregate.sloc.logical == 0
