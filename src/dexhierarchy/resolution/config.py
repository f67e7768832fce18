"""
Class Hierarchy Analysis configuration.

All values configurable via DEXHIERARCHY_* environment variables.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from dexhierarchy.exceptions import ConfigError


DEFAULT_IMPLEMENTOR_SCAN_WARN = 50_000  # Classes scanned by implementations_of


def _env_int(key: str, default: int) -> int:
    """Read integer from environment variable."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_bool(key: str, default: bool) -> bool:
    """Read boolean from environment variable."""
    value = os.getenv(key, "").lower()
    if value in ("true", "1", "yes"):
        return True
    if value in ("false", "0", "no"):
        return False
    return default


@dataclass
class HierarchyConfig:
    """
    Hierarchy index configuration.

    Environment Variables:
        DEXHIERARCHY_TRACE_QUERIES: Log every dispatch decision at DEBUG (default: false)
        DEXHIERARCHY_IMPLEMENTOR_SCAN_WARN: Warn when implementations_of scans more
            classes than this (default: 50K)
        DEXHIERARCHY_VALIDATE_RECEIVERS: Check the receiver parameter of every
            virtual method while building the index (default: true)
    """

    trace_queries: bool = field(default_factory=lambda: _env_bool(
        "DEXHIERARCHY_TRACE_QUERIES", False
    ))
    implementor_scan_warn_classes: int = field(default_factory=lambda: _env_int(
        "DEXHIERARCHY_IMPLEMENTOR_SCAN_WARN", DEFAULT_IMPLEMENTOR_SCAN_WARN
    ))
    validate_receivers: bool = field(default_factory=lambda: _env_bool(
        "DEXHIERARCHY_VALIDATE_RECEIVERS", True
    ))

    def __post_init__(self):
        if self.implementor_scan_warn_classes <= 0:
            raise ConfigError(
                f"implementor_scan_warn_classes must be positive, got {self.implementor_scan_warn_classes}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary (for JSON output)."""
        return {
            "trace_queries": self.trace_queries,
            "implementor_scan_warn_classes": self.implementor_scan_warn_classes,
            "validate_receivers": self.validate_receivers,
        }


# Global instance for convenience
_default_config: Optional[HierarchyConfig] = None


def get_hierarchy_config() -> HierarchyConfig:
    """Get the global hierarchy configuration."""
    global _default_config
    if _default_config is None:
        _default_config = HierarchyConfig()
    return _default_config


def reset_hierarchy_config() -> None:
    """Reset global config (useful after env var changes or for testing)."""
    global _default_config
    _default_config = None
