"""Syntax provider plugins: configure rule options and load rule tables."""

from __future__ import annotations

from typing import Any, Mapping

from ..syntax import SyntaxLoader, babel_syntax, estree_syntax
from ..traits import SyntaxEntry

#: Options understood by the ESTree rules and their defaults.
SYNTAX_DEFAULTS = {
    "commonjs": False,
    "esm": True,
    "forin": False,
    "logicalor": True,
    "switchcase": True,
    "trycatch": False,
}


class PluginSyntaxESTree:
    """Rules for plain ESTree ASTs such as esprima output."""

    name = "syntax-estree"

    def on_configure(self, event) -> None:
        options = event.data["options"]
        settings = event.data["settings"]
        for key, default in SYNTAX_DEFAULTS.items():
            value = options.get(key)
            settings[key] = value if isinstance(value, bool) else default

    def on_load_syntax(self, event) -> None:
        table = self.syntax_table(event.data["settings"])
        SyntaxLoader(event.data["syntaxes"]).load(table, self.name)

    def syntax_table(self, settings: Mapping[str, Any]) -> dict[str, SyntaxEntry]:
        return estree_syntax(settings)


class PluginSyntaxBabel(PluginSyntaxESTree):
    """ESTree rules plus the node types Babel's parser adds."""

    name = "syntax-babel"

    def syntax_table(self, settings: Mapping[str, Any]) -> dict[str, SyntaxEntry]:
        table = super().syntax_table(settings)
        table.update(babel_syntax(settings))
        return table
