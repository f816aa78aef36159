"""
Runtime Configuration Module

Provides configuration loading and management for the employee notes service.
"""

from .runtime import (
    RuntimeConfig,
    StorageConfig,
    UploadConfig,
    TransferConfig,
    load_runtime_config,
    get_default_config_template,
)

__all__ = [
    "RuntimeConfig",
    "StorageConfig",
    "UploadConfig",
    "TransferConfig",
    "load_runtime_config",
    "get_default_config_template",
]
