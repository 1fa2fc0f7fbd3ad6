"""Interview Prep Gateway platform package: configuration and endpoints."""

from prep_platform.settings import (
    PLATFORM_NAME,
    RuntimeConfig,
    load_runtime_config,
)

__all__ = [
    "PLATFORM_NAME",
    "RuntimeConfig",
    "load_runtime_config",
]
