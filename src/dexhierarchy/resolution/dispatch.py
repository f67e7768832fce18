"""
Virtual call dispatch over a class hierarchy index.

Computes the set of methods a virtual call site can reach, exactly when the
receiver's runtime type is known and as a sound over-approximation when it
is not.
"""

from typing import FrozenSet, List, Set

from dexhierarchy.logging_config import logger
from dexhierarchy.schemas import (
    ClassDef,
    Instruction,
    InvokeKind,
    Method,
    MethodRef,
    TypeName,
    Value,
    reference_type,
)
from .class_hierarchy import ClassHierarchy, method_matches


class VirtualDispatcher:
    """
    Resolves virtual call sites against a ClassHierarchy.

    Holds no state of its own; every query goes through the hierarchy and
    its shared resolution cache, so one dispatcher may serve many threads.
    """

    def __init__(self, hierarchy: ClassHierarchy):
        """
        Initialize the dispatcher.

        Args:
            hierarchy: Class hierarchy index to resolve against
        """
        self.hierarchy = hierarchy
        self.config = hierarchy.config

    def virtual_dispatch(
        self,
        instruction: Instruction,
        invoke_kind: InvokeKind,
        method_ref: MethodRef,
        receiver: Value
    ) -> FrozenSet[Method]:
        """
        Find the methods one virtual call site could run.

        - super calls resolve from the superclass of the class enclosing the
          call, whatever the receiver's type;
        - receivers whose runtime type cannot be known statically (formal
          parameters, caught exceptions seen through casts) may be any
          subtype of their declared type, so every subtype is considered;
        - any other receiver has an exact type and a single target.

        Args:
            instruction: The invoke instruction
            invoke_kind: Flavour of the invoke
            method_ref: Method being invoked
            receiver: Receiver object

        Returns:
            Frozen set of possible target methods (empty if unresolved)
        """
        if invoke_kind == InvokeKind.SUPER:
            policy = "super"
            targets = self._super_target(instruction, method_ref)
        elif receiver.kind == "parameter" or receiver.strip_casts().kind == "move_exception":
            policy = "any_subtype"
            targets = self.any_target(invoke_kind, method_ref, receiver.type)
        else:
            policy = "exact"
            method = self.hierarchy.resolve_method_ref(receiver.type, method_ref)
            targets = frozenset() if method is None else frozenset([method])

        if self.config.trace_queries:
            logger.bind(
                policy=policy,
                receiver_type=receiver.type,
                method=method_ref.name,
                targets=len(targets),
            ).debug(f"Dispatch {method_ref.name} on {receiver.type} ({policy}): {len(targets)} target(s)")

        return targets

    def _super_target(self, instruction: Instruction, method_ref: MethodRef) -> FrozenSet[Method]:
        enclosing = instruction.method.class_type
        parent = self.hierarchy.superclass(enclosing)
        if parent is None:
            return frozenset()
        method = self.hierarchy.resolve_method_ref(parent, method_ref)
        return frozenset() if method is None else frozenset([method])

    def any_target(
        self,
        invoke_kind: InvokeKind,
        method_ref: MethodRef,
        root_type: TypeName
    ) -> FrozenSet[Method]:
        """
        Find all possible targets for a call from a value of the given type.

        Every subtype of the root is resolved on its own. The walk never stops
        early: a subclass that inherits its parent's method may still have
        descendants that override it.

        Args:
            invoke_kind: Flavour of the invoke; super calls start one level up
            method_ref: Method being invoked
            root_type: Declared (static) type of the receiver

        Returns:
            Frozen set of methods, deduplicated by method identity
        """
        root = root_type
        if invoke_kind == InvokeKind.SUPER:
            root = self.hierarchy.superclass(root_type) or root_type

        targets: Set[Method] = set()
        for type_name in self.hierarchy.all_subclasses(root):
            method = self.hierarchy.resolve_method_ref(type_name, method_ref)
            if method is not None:
                targets.add(method)
        return frozenset(targets)

    def implementations_of(self, class_name: str, method_ref: MethodRef) -> List[Method]:
        """
        Find every method implementing a signature for a class or interface.

        Algorithm:

        1) Find all classes directly implementing the named interface (if any)
        2) Look up the name as if it were a class
        3) These are the roots of the search; for each root, collect the
           matching virtual methods, then do the same for every subclass
           defined in the program

        This is a linear pass over all classes and is not cheap. Only
        virtual methods are searched because direct methods do not dispatch.

        Args:
            class_name: Class or interface name ("com.acme.Animal") or descriptor
            method_ref: Signature to look for; only name and types are used

        Returns:
            Matching methods, root by root in preorder, each class visited once
        """
        target = reference_type(class_name)
        all_classes = self.hierarchy.classes

        if len(all_classes) > self.config.implementor_scan_warn_classes:
            logger.warning(
                f"implementations_of({class_name}) scanning {len(all_classes)} classes "
                f"(threshold {self.config.implementor_scan_warn_classes})"
            )

        roots: List[ClassDef] = [c for c in all_classes if target in c.interfaces]
        named = self.hierarchy.definition(target)
        if named is not None:
            roots.insert(0, named)

        logger.debug(f"implementations_of({class_name}): {len(roots)} root classes")

        methods: List[Method] = []
        visited: Set[TypeName] = set()
        for root in roots:
            stack = [root]
            while stack:
                klass = stack.pop()
                if klass.type in visited:
                    continue
                visited.add(klass.type)
                methods.extend(m for m in klass.virtual_methods if method_matches(method_ref, m))
                subs = [self.hierarchy.definition(t) for t in self.hierarchy.subclasses(klass.type)]
                stack.extend(reversed([s for s in subs if s is not None]))

        return methods
