"""XML formatters derived from the JSON formatter output."""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from typing import Any, Mapping, Optional

from ..reports import AbstractReport, ReportType
from .base import ReportFormatter
from .json_formatter import JsonCheckstyleFormatter, JsonFormatter

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

ROOT_TAGS = {
    ReportType.CLASS: "class",
    ReportType.CLASS_METHOD: "method",
    ReportType.MODULE_METHOD: "method",
    ReportType.NESTED_METHOD: "method",
    ReportType.MODULE: "module",
    ReportType.PROJECT: "project",
}


def _text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_element(tag: str, value: Any) -> ET.Element:
    """Convert JSON-shaped data to an element.

    Mapping keys become child elements, list items repeat the parent tag
    and ``None`` yields an empty element. A ``"@"`` mapping holds
    attributes.
    """
    element = ET.Element(tag)
    if isinstance(value, Mapping):
        for key, child in value.items():
            if key == "@":
                for name, attribute in child.items():
                    element.set(name, _text(attribute))
            elif isinstance(child, list):
                for item in child:
                    element.append(build_element(key, item))
            else:
                element.append(build_element(key, child))
    elif value is not None:
        element.text = _text(value)
    return element


def _serialize(root: ET.Element, options: Optional[Mapping[str, Any]]) -> str:
    spacing = (options or {}).get("spacing")
    if isinstance(spacing, int) and not isinstance(spacing, bool) and spacing > 0:
        ET.indent(root, space=" " * spacing)
    return XML_DECLARATION + ET.tostring(root, encoding="unicode")


class XmlFormatter(ReportFormatter):
    """The full JSON form as nested elements."""

    name = "xml"
    extension = "xml"
    type = "full"

    def __init__(self, json_formatter: Optional[ReportFormatter] = None):
        self.json_formatter = json_formatter or JsonFormatter()

    def format_report(self, report: AbstractReport, options: Optional[Mapping[str, Any]] = None) -> str:
        data = json.loads(self.json_formatter.format_report(report))
        return _serialize(build_element(ROOT_TAGS[report.type], data), options)


class XmlCheckstyleFormatter(ReportFormatter):
    """Checkstyle XML: ``<checkstyle version><file name><error .../></file></checkstyle>``."""

    name = "xml-checkstyle"
    extension = "xml"
    type = "checkstyle"
    supported_types = JsonCheckstyleFormatter.supported_types

    def __init__(self, json_formatter: Optional[JsonCheckstyleFormatter] = None):
        self.json_formatter = json_formatter or JsonCheckstyleFormatter()

    def format_report(self, report: AbstractReport, options: Optional[Mapping[str, Any]] = None) -> str:
        if not self.is_supported(report.type):
            return self._unsupported(report)

        data = self.json_formatter.checkstyle_dict(report, options)

        # Names and error fields move onto attributes.
        files = []
        for entry in data.get("file", []):
            files.append(
                {
                    "@": {"name": entry["name"]},
                    "error": [{"@": error} for error in entry.get("error", [])],
                }
            )
        document = {"@": {"version": data["version"]}, "file": files}
        return _serialize(build_element("checkstyle", document), options)
