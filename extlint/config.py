"""Configuration loading for extlint (.extlint.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .models import FileKind

CONFIG_FILENAME = ".extlint.yml"
DEFAULT_OUTPUT_PREFIX = "linted_"
REMOVAL_POLICIES = ("any", "trailing", "off")
QUOTE_STYLES = ("double", "single")
TRAILING_COMMA_STYLES = ("es5", "none")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class StyleConfig:
    """Formatting conventions shared by every normalizer."""

    print_width: int = 100
    indent_size: int = 2
    quotes: str = "double"
    semicolons: bool = True
    trailing_comma: str = "es5"


@dataclass
class ParameterConfig:
    """Dead-parameter elimination settings."""

    removal: str = "any"


@dataclass
class ExtLintConfig:
    """Represents the settings defined in .extlint.yml."""

    root: Path
    output_prefix: str = DEFAULT_OUTPUT_PREFIX
    style: StyleConfig = field(default_factory=StyleConfig)
    parameters: ParameterConfig = field(default_factory=ParameterConfig)
    extensions: Dict[FileKind, List[str]] = field(default_factory=dict)


def load_config(config_path: Path) -> ExtLintConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ExtLintConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    output_prefix = _as_str(data.get("output_prefix"))
    if output_prefix is not None and not output_prefix.strip():
        raise ConfigError("output_prefix must not be empty")
    if output_prefix is not None and ("/" in output_prefix or "\\" in output_prefix):
        raise ConfigError("output_prefix must not contain path separators")

    style = StyleConfig()
    style_data = _as_dict(data.get("style"))
    if style_data:
        print_width = _as_int(style_data.get("print_width"))
        indent_size = _as_int(style_data.get("indent_size"))
        quotes = _as_str(style_data.get("quotes"))
        semicolons = _as_bool(style_data.get("semicolons"))
        trailing_comma = _as_str(style_data.get("trailing_comma"))
        if print_width is not None:
            if print_width <= 0:
                raise ConfigError("style.print_width must be positive")
            style.print_width = print_width
        if indent_size is not None:
            if indent_size <= 0:
                raise ConfigError("style.indent_size must be positive")
            style.indent_size = indent_size
        if quotes is not None:
            if quotes not in QUOTE_STYLES:
                raise ConfigError(f"style.quotes must be one of: {', '.join(QUOTE_STYLES)}")
            style.quotes = quotes
        if semicolons is not None:
            style.semicolons = semicolons
        if trailing_comma is not None:
            if trailing_comma not in TRAILING_COMMA_STYLES:
                raise ConfigError(
                    f"style.trailing_comma must be one of: {', '.join(TRAILING_COMMA_STYLES)}"
                )
            style.trailing_comma = trailing_comma

    parameters = ParameterConfig()
    parameter_data = _as_dict(data.get("parameters"))
    if parameter_data:
        removal = _as_str(parameter_data.get("removal"))
        if removal is not None:
            if removal not in REMOVAL_POLICIES:
                raise ConfigError(
                    f"parameters.removal must be one of: {', '.join(REMOVAL_POLICIES)}"
                )
            parameters.removal = removal

    extensions = _parse_extensions(_as_dict(data.get("extensions")))

    return ExtLintConfig(
        root=root,
        output_prefix=output_prefix or DEFAULT_OUTPUT_PREFIX,
        style=style,
        parameters=parameters,
        extensions=extensions,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _parse_extensions(data: Dict[str, Any]) -> Dict[FileKind, List[str]]:
    extensions: Dict[FileKind, List[str]] = {}
    for key, value in data.items():
        try:
            kind = FileKind(str(key))
        except ValueError as exc:
            raise ConfigError(f"Unknown file kind in extensions: {key}") from exc
        if kind is FileKind.IGNORED:
            raise ConfigError("extensions cannot be mapped to 'ignored'")
        suffixes = []
        for suffix in _as_str_list(value):
            cleaned = suffix.strip().lower()
            if not cleaned:
                continue
            suffixes.append(cleaned if cleaned.startswith(".") else f".{cleaned}")
        if suffixes:
            extensions[kind] = suffixes
    return extensions


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, str)]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "ExtLintConfig",
    "ParameterConfig",
    "StyleConfig",
    "load_config",
]
