"""Configuration loading and management for jscomplexity.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.jscomplexity.toml)
    3. Project config (./jscomplexity.toml)
    4. Explicit config file
    5. Environment variables (JSCOMPLEXITY_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(newmi=True, commonjs=True)
    >>> config.module_options()["newmi"]
    True
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]
SourceType = Literal["module", "script"]

ENV_PREFIX = "JSCOMPLEXITY_"


@dataclass(frozen=True)
class AnalysisConfig:
    """Options for module and project analysis.

    Attributes:
        Module metrics:
            newmi: Rebase the maintainability index onto 0-100
            commonjs: Record ``require()`` calls as dependencies
            esm: Record import/export-from declarations as dependencies
            forin: Count for-in/for-of loops as branches
            logicalor: Count ``||`` as a branch
            switchcase: Count each ``case`` as a branch
            trycatch: Count ``catch`` clauses as branches
        Project metrics:
            serialize_modules: Keep full module bodies in project reports
            skip_calculation: Only collect module reports, no graph metrics
            no_core_size: Skip visibility and core size
            ignore_errors: Skip modules that fail instead of aborting
        Parsing:
            source_type: ``module`` or ``script``
            tolerant: Let the parser recover from some syntax errors
            extensions: File suffixes picked up when scanning directories
            exclude_dirs: Directory names never scanned
        Output:
            format: Formatter name; ``None`` prints the summary table
            verbosity: Logging verbosity level
    """

    # Module metrics
    newmi: bool = False
    commonjs: bool = False
    esm: bool = True
    forin: bool = False
    logicalor: bool = True
    switchcase: bool = True
    trycatch: bool = False

    # Project metrics
    serialize_modules: bool = True
    skip_calculation: bool = False
    no_core_size: bool = False
    ignore_errors: bool = False

    # Parsing
    source_type: SourceType = "module"
    tolerant: bool = False
    extensions: list[str] = field(default_factory=lambda: [".js", ".mjs", ".cjs"])
    exclude_dirs: list[str] = field(default_factory=lambda: ["node_modules", ".git", "dist", "build", "coverage"])

    # Output
    format: Optional[str] = None
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.source_type not in ("module", "script"):
            raise InvalidConfigError("source_type", self.source_type, "must be 'module' or 'script'")

        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError("verbosity", self.verbosity, "must be quiet, normal or verbose")

        for name in (
            "newmi",
            "commonjs",
            "esm",
            "forin",
            "logicalor",
            "switchcase",
            "trycatch",
            "serialize_modules",
            "skip_calculation",
            "no_core_size",
            "ignore_errors",
            "tolerant",
        ):
            if not isinstance(getattr(self, name), bool):
                raise InvalidConfigError(name, getattr(self, name), "must be a boolean")

        for extension in self.extensions:
            if not extension.startswith("."):
                raise InvalidConfigError("extensions", extension, "extensions must start with '.'")

    def module_options(self) -> dict[str, Any]:
        """Options consumed by the module analyzer's plugins."""
        return {
            "newmi": self.newmi,
            "commonjs": self.commonjs,
            "esm": self.esm,
            "forin": self.forin,
            "logicalor": self.logicalor,
            "switchcase": self.switchcase,
            "trycatch": self.trycatch,
        }

    def project_options(self) -> dict[str, Any]:
        """Options consumed by the project analyzer, module options included."""
        options = self.module_options()
        options.update(
            {
                "serialize_modules": self.serialize_modules,
                "skip_calculation": self.skip_calculation,
                "no_core_size": self.no_core_size,
                "ignore_errors": self.ignore_errors,
            }
        )
        return options


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags); ``None``
            values are ignored

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
        InvalidConfigError: If a value fails validation
    """
    merged: dict = {}

    global_config = Path.home() / ".jscomplexity.toml"
    if global_config.exists():
        merged.update(_load_config_file(global_config, "global config"))

    project_config = Path.cwd() / "jscomplexity.toml"
    if project_config.exists():
        merged.update(_load_config_file(project_config, "project config"))

    if config_file is not None:
        config_file = Path(config_file)
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_config_file(config_file, "config file"))

    merged.update(_load_env_vars())

    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    merged.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return AnalysisConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_config_file(path: Path, label: str) -> dict:
    try:
        data = _load_toml_file(path)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Invalid {label} '{path}': {e}")

    # Options may live at the top level or under [jscomplexity].
    section = data.get("jscomplexity", data)
    if not isinstance(section, dict):
        raise ConfigurationError(f"Invalid {label} '{path}': [jscomplexity] is not a table")
    return section


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from JSCOMPLEXITY_* environment variables.

    Every scalar field is supported, e.g. JSCOMPLEXITY_NEWMI=true,
    JSCOMPLEXITY_SOURCE_TYPE=script, JSCOMPLEXITY_FORMAT=json.

    Returns:
        Dict of field_name -> parsed_value for any JSCOMPLEXITY_* vars found.
    """
    type_hints = get_type_hints(AnalysisConfig)

    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Handle Optional[X] which is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    # Skip list types - too complex for env vars
    if origin is list or type_hint is list:
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
