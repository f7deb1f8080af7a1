"""Shared constants for taskcomp."""

__all__ = [
    "CONFIG_ENV_VAR",
    "CONFIG_FILENAME",
    "DEFAULT_NETWORKS",
    "LONG_FLAG_PREFIX",
    "NETWORK_FLAG",
    "TASK_NAMESPACE_SEPARATOR",
]

# Project configuration file, searched from the current directory upwards
CONFIG_FILENAME = "taskcomp.toml"

# Overrides the project discovery when set
CONFIG_ENV_VAR = "TASKCOMP_CONFIG"

LONG_FLAG_PREFIX = "--"

NETWORK_FLAG = "--network"

TASK_NAMESPACE_SEPARATOR = ":"

# Networks every project has, user configuration is merged on top
DEFAULT_NETWORKS: dict[str, dict[str, str]] = {
    "hardhat": {},
    "localhost": {"url": "http://127.0.0.1:8545"},
}
