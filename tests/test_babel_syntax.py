"""Tests for the Babel-only node rules, fed through hand-built Babel ASTs."""

import pytest

from jscomplexity.analyzer import ModuleAnalyzer
from jscomplexity.plugins import PluginSyntaxESTree
from jscomplexity.plugins.module_metrics import PluginMetricsModule
from jscomplexity.reports import ReportType
from jscomplexity.syntax import babel_syntax


def _loc(start, end):
    return {"start": {"line": start, "column": 0}, "end": {"line": end, "column": 0}}


def _ident(name):
    return {"type": "Identifier", "name": name}


def _block(*body):
    return {"type": "BlockStatement", "body": list(body)}


def _return(argument=None):
    return {"type": "ReturnStatement", "argument": argument}


def _file(*body, lines=4):
    program = {"type": "Program", "sourceType": "module", "body": list(body), "loc": _loc(1, lines)}
    return {"type": "File", "program": program, "loc": _loc(1, lines)}


# class Foo {
#   static make(a) { return a; }
# }
# var o = { m(b) { return "x"; }, k: 1 };
CLASS_AND_OBJECT = _file(
    {
        "type": "ClassDeclaration",
        "id": _ident("Foo"),
        "superClass": None,
        "body": {
            "type": "ClassBody",
            "body": [
                {
                    "type": "ClassMethod",
                    "kind": "method",
                    "static": True,
                    "computed": False,
                    "key": _ident("make"),
                    "params": [_ident("a")],
                    "body": _block(_return(_ident("a"))),
                    "loc": _loc(2, 2),
                }
            ],
        },
        "loc": _loc(1, 3),
    },
    {
        "type": "VariableDeclaration",
        "kind": "var",
        "declarations": [
            {
                "type": "VariableDeclarator",
                "id": _ident("o"),
                "init": {
                    "type": "ObjectExpression",
                    "properties": [
                        {
                            "type": "ObjectMethod",
                            "kind": "method",
                            "computed": False,
                            "key": _ident("m"),
                            "params": [_ident("b")],
                            "body": _block(_return({"type": "StringLiteral", "value": "x"})),
                            "loc": _loc(4, 4),
                        },
                        {
                            "type": "ObjectProperty",
                            "computed": False,
                            "shorthand": False,
                            "key": _ident("k"),
                            "value": {"type": "NumericLiteral", "value": 1, "extra": {"raw": "1"}},
                        },
                    ],
                },
            }
        ],
    },
)


@pytest.fixture
def report(module_analyzer):
    return module_analyzer.analyze(CLASS_AND_OBJECT)


class TestBabelScopes:
    def test_class_method(self, report):
        method = report.classes[0].methods[0]

        assert report.classes[0].name == "Foo"
        assert method.name == "make"
        assert method.type is ReportType.CLASS_METHOD
        assert method.param_names == ["a"]
        assert method.sloc.logical == 1

    def test_object_method(self, report):
        assert [method.name for method in report.methods] == ["m"]
        assert report.methods[0].type is ReportType.MODULE_METHOD
        assert report.methods[0].param_names == ["b"]


class TestBabelMetrics:
    def test_logical_lines(self, report):
        # class, class method, two returns, declarator, object method; the property adds none
        assert report.aggregate.sloc.logical == 6

    def test_operators(self, report):
        operators = report.aggregate.halstead.operators
        assert operators.identifiers == ["class", "static", "return", "var", "=", "{}", ":"]
        assert operators.total == 8

    def test_operands(self, report):
        operands = report.aggregate.halstead.operands
        assert operands.identifiers == ["Foo", "make", "a", "o", "m", "b", '"x"', "k", "1"]
        assert operands.total == 10

    def test_method_counts_only_its_body(self, report):
        halstead = report.classes[0].methods[0].halstead
        assert halstead.operators.identifiers == ["return"]
        assert halstead.operands.identifiers == ["a"]


class TestBabelTable:
    def test_typed_literals(self):
        table = babel_syntax({})
        assert table["BooleanLiteral"].operands.resolve({"value": False}, None) == ["false"]
        assert table["BigIntLiteral"].operands.resolve({"value": "10"}, None) == ["10n"]
        assert table["RegExpLiteral"].operands.resolve({"pattern": "a+", "flags": "g"}, None) == ["/a+/g"]
        assert table["NullLiteral"].operands.resolve({}, None) == ["null"]

    def test_accessor_operators(self):
        table = babel_syntax({})
        node = {"kind": "get", "static": False, "computed": False, "key": _ident("size"), "params": []}
        assert table["ClassMethod"].operators.resolve(node, None) == ["get"]

    def test_estree_provider_ignores_babel_nodes(self):
        analyzer = ModuleAnalyzer(plugins=[PluginSyntaxESTree(), PluginMetricsModule()], load_default_plugins=False)
        report = analyzer.analyze(CLASS_AND_OBJECT)

        assert report.methods == []
        assert report.classes[0].methods == []
