"""
Resolution package: class hierarchy analysis.

Provides the hierarchy index, method resolution along superclass chains,
and virtual call dispatch.
"""

from .facade import (
    build_class_hierarchy,
    resolve_method_ref,
    virtual_dispatch,
    any_target,
    implementations_of,
    get_hierarchy_stats,
)
from .class_hierarchy import ClassHierarchy, method_matches
from .dispatch import VirtualDispatcher
from .cache import ResolutionCache
from .config import (
    HierarchyConfig,
    get_hierarchy_config,
    reset_hierarchy_config,
    DEFAULT_IMPLEMENTOR_SCAN_WARN,
)

__all__ = [
    "build_class_hierarchy",
    "resolve_method_ref",
    "virtual_dispatch",
    "any_target",
    "implementations_of",
    "get_hierarchy_stats",
    "ClassHierarchy",
    "method_matches",
    "VirtualDispatcher",
    "ResolutionCache",
    "HierarchyConfig",
    "get_hierarchy_config",
    "reset_hierarchy_config",
    "DEFAULT_IMPLEMENTOR_SCAN_WARN",
]
