# Copyright 2026 BPMNml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Project configuration for BPMNml."""

from bpmnml.workspace.config import (
    CONFIG_FILE_NAME,
    ConfigError,
    ProjectConfig,
    find_config,
    load_config,
    parse_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "ProjectConfig",
    "find_config",
    "load_config",
    "parse_config",
]
