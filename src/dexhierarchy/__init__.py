"""
dexhierarchy - Class Hierarchy Analysis for Dalvik/JVM programs

Indexes inheritance and interface edges and resolves virtual call targets.
"""

__version__ = "0.1.0"

# Core exports
from dexhierarchy.schemas import (
    ClassDef,
    HierarchyStats,
    Instruction,
    InvokeKind,
    Method,
    MethodRef,
    Parameter,
    Program,
    Value,
    reference_type,
)
from dexhierarchy.resolution import (
    ClassHierarchy,
    VirtualDispatcher,
    build_class_hierarchy,
    get_hierarchy_stats,
)
from dexhierarchy.exceptions import HierarchyError, MissingReceiverError, ConfigError

__all__ = [
    "__version__",
    "ClassDef",
    "HierarchyStats",
    "Instruction",
    "InvokeKind",
    "Method",
    "MethodRef",
    "Parameter",
    "Program",
    "Value",
    "reference_type",
    "ClassHierarchy",
    "VirtualDispatcher",
    "build_class_hierarchy",
    "get_hierarchy_stats",
    "HierarchyError",
    "MissingReceiverError",
    "ConfigError",
]
