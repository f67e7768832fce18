"""
Public API for class hierarchy analysis.

Provides high-level functions for building the hierarchy index and
resolving virtual call targets against it.
"""

from typing import FrozenSet, Iterable, List, Optional, Union

from dexhierarchy.logging_config import logger
from dexhierarchy.schemas import (
    ClassDef,
    HierarchyStats,
    Instruction,
    InvokeKind,
    Method,
    MethodRef,
    Program,
    TypeName,
    Value,
)
from .class_hierarchy import ClassHierarchy
from .config import HierarchyConfig
from .dispatch import VirtualDispatcher


def build_class_hierarchy(
    program: Union[Program, Iterable[ClassDef]],
    config: Optional[HierarchyConfig] = None
) -> ClassHierarchy:
    """
    Perform a class hierarchy analysis over a whole program.

    Args:
        program: Program, or any iterable of class definitions
        config: Optional configuration (defaults to the global one)

    Returns:
        ClassHierarchy index, ready to be queried
    """
    classes = program.classes if isinstance(program, Program) else program
    hierarchy = ClassHierarchy(classes, config=config)
    logger.info(f"Built class hierarchy over {len(hierarchy)} classes")
    return hierarchy


def resolve_method_ref(
    hierarchy: ClassHierarchy,
    type_name: TypeName,
    method_ref: MethodRef
) -> Optional[Method]:
    """
    Resolve the method invoked on a receiver of exactly the given type.

    Args:
        hierarchy: Class hierarchy index
        type_name: Exact receiver type
        method_ref: Method being invoked

    Returns:
        The resolved Method, or None
    """
    return hierarchy.resolve_method_ref(type_name, method_ref)


def virtual_dispatch(
    hierarchy: ClassHierarchy,
    instruction: Instruction,
    invoke_kind: InvokeKind,
    method_ref: MethodRef,
    receiver: Value
) -> FrozenSet[Method]:
    """Compute the dispatch set of one call site."""
    return VirtualDispatcher(hierarchy).virtual_dispatch(
        instruction, invoke_kind, method_ref, receiver
    )


def any_target(
    hierarchy: ClassHierarchy,
    invoke_kind: InvokeKind,
    method_ref: MethodRef,
    root_type: TypeName
) -> FrozenSet[Method]:
    """Over-approximate the targets of a call on a value of the given static type."""
    return VirtualDispatcher(hierarchy).any_target(invoke_kind, method_ref, root_type)


def implementations_of(
    hierarchy: ClassHierarchy,
    class_name: str,
    method_ref: MethodRef
) -> List[Method]:
    """Find every method implementing a signature for a named class or interface."""
    return VirtualDispatcher(hierarchy).implementations_of(class_name, method_ref)


def get_hierarchy_stats(hierarchy: ClassHierarchy) -> HierarchyStats:
    """
    Get statistics about a class hierarchy index.

    Args:
        hierarchy: Class hierarchy index

    Returns:
        HierarchyStats with class, edge, depth and cache counts
    """
    classes = hierarchy.classes
    cache_stats = hierarchy.cache.stats()

    return HierarchyStats(
        total_classes=len(classes),
        interfaces=sum(1 for c in classes if c.is_interface),
        inheritance_edges=sum(1 for c in classes if c.parent is not None),
        implementation_edges=sum(len(c.interfaces) for c in classes),
        max_depth=max((hierarchy.depth(c.type) for c in classes), default=0),
        cache_entries=cache_stats["entries"],
        cache_hits=cache_stats["hits"],
        cache_misses=cache_stats["misses"],
    )
