"""
Class Hierarchy Analysis index.

Indexes superclass, subclass and interface edges for every class in a
program and resolves method references against the superclass chain.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from dexhierarchy.exceptions import MissingReceiverError
from dexhierarchy.logging_config import logger
from dexhierarchy.schemas import ClassDef, Method, MethodRef, TypeName
from .cache import ResolutionCache
from .config import HierarchyConfig, get_hierarchy_config


def method_matches(method_ref: MethodRef, method: Method) -> bool:
    """
    Check whether a virtual method implements a call-site signature.

    MethodRefs carry no receiver, so the method's first parameter is skipped.
    A virtual method without one breaks the program model's contract and
    raises MissingReceiverError.
    """
    if not method.parameters:
        raise MissingReceiverError(method.class_type, method.name)
    return (
        method_ref.name == method.name
        and method_ref.return_type == method.return_type
        and method_ref.parameter_types == tuple(p.type for p in method.parameters[1:])
    )


class ClassHierarchy:
    """
    Immutable inheritance index over a whole program.

    Built once from every class definition; afterwards only the resolution
    cache changes, and it is safe to query from several threads at once.
    Types that are referenced but not defined in the program (library
    classes, for instance) are simply unresolved.
    """

    def __init__(self, classes: Iterable[ClassDef], config: Optional[HierarchyConfig] = None):
        """
        Index every class in declaration order.

        Args:
            classes: All class definitions of the program
            config: Hierarchy configuration (defaults to the global one)
        """
        self.config = config or get_hierarchy_config()
        self.cache = ResolutionCache()

        self._parent_of: Dict[TypeName, TypeName] = {}
        self._children_of: Dict[TypeName, List[TypeName]] = defaultdict(list)
        self._implementors_of: Dict[TypeName, List[TypeName]] = defaultdict(list)
        self._interface_children_of: Dict[TypeName, List[TypeName]] = defaultdict(list)
        self._class_of: Dict[TypeName, ClassDef] = {}

        for klass in classes:
            self._add_class(klass)

        logger.debug(
            f"Indexed {len(self._class_of)} classes "
            f"({len(self._parent_of)} inheritance edges, "
            f"{sum(len(v) for v in self._implementors_of.values())} implementation edges)"
        )

    def _add_class(self, klass: ClassDef):
        if self.config.validate_receivers:
            for method in klass.virtual_methods:
                if not method.parameters:
                    raise MissingReceiverError(klass.type, method.name)

        if klass.parent is not None:
            self._parent_of[klass.type] = klass.parent
            self._children_of[klass.parent].append(klass.type)

        # An interface listing interfaces extends them; a class implements them
        edges = self._interface_children_of if klass.is_interface else self._implementors_of
        for interface in klass.interfaces:
            edges[interface].append(klass.type)

        self._class_of[klass.type] = klass

    # -- Structural queries ---------------------------------------------------

    @property
    def classes(self) -> List[ClassDef]:
        """Every class definition, in declaration order."""
        return list(self._class_of.values())

    def __len__(self) -> int:
        return len(self._class_of)

    def __contains__(self, type_name: TypeName) -> bool:
        return type_name in self._class_of

    def superclass(self, type_name: TypeName) -> Optional[TypeName]:
        """Get the parent of a type, if any."""
        return self._parent_of.get(type_name)

    def subclasses(self, type_name: TypeName) -> List[TypeName]:
        """Get the immediate subclasses of a type."""
        return list(self._children_of.get(type_name, ()))

    def all_subclasses(self, type_name: TypeName, include_self: bool = True) -> List[TypeName]:
        """
        Get all subclasses of a type, transitively, in preorder.

        By default the type itself comes first, followed by each immediate
        subclass's own closure. Pass include_self=False for proper
        descendants only.
        """
        result: List[TypeName] = []
        stack = [type_name]
        while stack:
            current = stack.pop()
            result.append(current)
            stack.extend(reversed(self._children_of.get(current, ())))
        return result if include_self else result[1:]

    def implementations(self, type_name: TypeName) -> List[TypeName]:
        """Get the classes that directly declare the given interface."""
        return list(self._implementors_of.get(type_name, ()))

    def subinterfaces(self, type_name: TypeName) -> List[TypeName]:
        """Get the interfaces that directly extend the given interface."""
        return list(self._interface_children_of.get(type_name, ()))

    def all_implementations(self, type_name: TypeName) -> List[TypeName]:
        """
        Get the classes implementing an interface or any of its subinterfaces.

        Subinterfaces are followed transitively. Each class is listed once, in
        the order it is first reached. Subclasses of implementors are not
        included; use all_subclasses() on the result for those.
        """
        seen_interfaces = {type_name}
        stack = [type_name]
        seen_classes = set()
        result: List[TypeName] = []

        while stack:
            interface = stack.pop()
            for implementor in self._implementors_of.get(interface, ()):
                if implementor not in seen_classes:
                    seen_classes.add(implementor)
                    result.append(implementor)
            for sub in reversed(self._interface_children_of.get(interface, ())):
                if sub not in seen_interfaces:
                    seen_interfaces.add(sub)
                    stack.append(sub)

        return result

    def definition(self, type_name: TypeName) -> Optional[ClassDef]:
        """
        Return the definition of a type if it is defined in this program.
        """
        return self._class_of.get(type_name)

    def superclass_def(self, type_name: TypeName) -> Optional[ClassDef]:
        """Get the definition of the parent of a type, if any."""
        parent = self.superclass(type_name)
        if parent is None:
            return None
        return self.definition(parent)

    def ancestors(self, type_name: TypeName) -> List[TypeName]:
        """The superclass chain above a type, nearest first."""
        chain: List[TypeName] = []
        parent = self.superclass(type_name)
        while parent is not None:
            chain.append(parent)
            parent = self.superclass(parent)
        return chain

    def depth(self, type_name: TypeName) -> int:
        """Number of superclass links between a type and its root."""
        return len(self.ancestors(type_name))

    # -- Method resolution ----------------------------------------------------

    def resolve_method_ref(self, type_name: TypeName, method_ref: MethodRef) -> Optional[Method]:
        """
        Figure out which method a call on a value of exactly this type runs.

        Walks up from the type through its superclasses; the first class
        defining a matching virtual method wins. Every type walked past is
        memoized with the final answer, negative answers included, so a
        repeated query never walks the chain again.

        Args:
            type_name: Exact runtime type of the receiver
            method_ref: Signature being invoked

        Returns:
            The resolved Method, or None if no class on the chain defines it
        """
        walked: List[TypeName] = []
        result: Optional[Method] = None
        current: Optional[TypeName] = type_name

        while current is not None:
            found, cached = self.cache.lookup(method_ref, current)
            if found:
                result = cached
                break

            walked.append(current)
            klass = self._class_of.get(current)
            if klass is not None:
                match = self._find_virtual(klass, method_ref)
                if match is not None:
                    result = match
                    break

            current = self._parent_of.get(current)

        if walked:
            self.cache.store_many(method_ref, walked, result)
        return result

    @staticmethod
    def _find_virtual(klass: ClassDef, method_ref: MethodRef) -> Optional[Method]:
        for method in klass.virtual_methods:
            if method_matches(method_ref, method):
                return method
        return None
