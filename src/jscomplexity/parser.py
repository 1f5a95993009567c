"""esprima front end: JavaScript source text to a plain-dict ESTree AST."""

from __future__ import annotations

from typing import Any, Optional

import esprima
from esprima.error_handler import Error as EsprimaError

from .exceptions import ParsingError
from .logging_config import get_logger

logger = get_logger(__name__)

SOURCE_TYPES = ("module", "script")


def parse_source(
    code: str,
    source_type: str = "module",
    tolerant: bool = False,
    src_path: Optional[str] = None,
) -> dict[str, Any]:
    """
    Parse JavaScript source into an ESTree dict with line locations.

    Args:
        code: Source text
        source_type: ``"module"`` or ``"script"``
        tolerant: Let esprima recover from some syntax errors
        src_path: Only used in error messages

    Returns:
        Program node as nested dicts and lists

    Raises:
        ParsingError: If esprima rejects the source
    """
    if source_type not in SOURCE_TYPES:
        raise ParsingError(f"unknown source type {source_type!r}", src_path)

    options = {"loc": True, "tolerant": tolerant}
    parse = esprima.parseModule if source_type == "module" else esprima.parseScript

    try:
        program = parse(code, options)
    except EsprimaError as e:
        raise ParsingError(str(e), src_path, getattr(e, "lineNumber", None)) from e

    ast = program.toDict()
    logger.debug(f"Parsed {src_path or '<source>'}: {len(ast.get('body') or [])} top-level statements")
    return ast
