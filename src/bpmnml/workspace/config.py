# Copyright 2026 BPMNml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the BPMNml project configuration file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from bpmnml.compiler.generator import GeneratorOptions

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".bpmnml.yaml"


class ConfigError(Exception):
    """Raised when a configuration file is invalid or cannot be loaded."""


@dataclass
class ProjectConfig:
    """The parsed configuration for BPMNml compilation.

    Attributes:
        indent: Spaces per nesting level in generated XML.
        include_diagram: Whether generated documents carry a diagram section.
        fail_on_warnings: Whether the command line treats warnings as failures.
    """

    indent: int = 2
    include_diagram: bool = True
    fail_on_warnings: bool = False

    def generator_options(self) -> GeneratorOptions:
        """Return the generator settings described by this configuration."""
        return GeneratorOptions(indent=self.indent, include_diagram=self.include_diagram)


def load_config(path: Path) -> ProjectConfig:
    """Load and parse a BPMNml configuration file.

    Args:
        path: Path to the ``.bpmnml.yaml`` file.

    Returns:
        A ProjectConfig instance populated from the file.

    Raises:
        ConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read config file: {exc}") from exc

    return parse_config(text, source_label=str(path))


def find_config(directory: Path) -> ProjectConfig:
    """Load ``.bpmnml.yaml`` from *directory*, or return defaults when absent."""
    path = directory / CONFIG_FILE_NAME
    if not path.exists():
        return ProjectConfig()
    return load_config(path)


def parse_config(text: str, source_label: str = "<string>") -> ProjectConfig:
    """Parse configuration YAML text into a ProjectConfig.

    An empty document yields the defaults.

    Args:
        text: Raw YAML content.
        source_label: Human-readable label used in error messages (e.g. the file path).

    Raises:
        ConfigError: If the YAML is invalid, a key is unknown, or a value has
            the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return ProjectConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{source_label}: config must be a YAML mapping")

    unknown = sorted(str(key) for key in data if key not in _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"{source_label}: unknown config key(s): {', '.join(unknown)}")

    config = ProjectConfig()
    if "indent" in data:
        indent = data["indent"]
        # bool is a subclass of int; reject it explicitly.
        if not isinstance(indent, int) or isinstance(indent, bool) or indent < 0:
            raise ConfigError(f"{source_label}: 'indent' must be a non-negative integer")
        config.indent = indent
    if "include-diagram" in data:
        config.include_diagram = _require_bool(data, "include-diagram", source_label)
    if "fail-on-warnings" in data:
        config.fail_on_warnings = _require_bool(data, "fail-on-warnings", source_label)
    return config


# ################
# Implementation
# ################

_KNOWN_KEYS = frozenset({"indent", "include-diagram", "fail-on-warnings"})


def _require_bool(mapping: dict[str, object], key: str, source_label: str) -> bool:
    """Extract a boolean field from a mapping, raising ConfigError on other types."""
    value = mapping[key]
    if not isinstance(value, bool):
        raise ConfigError(f"{source_label}: '{key}' must be true or false")
    return value
