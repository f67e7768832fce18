from enum import Enum
from typing import Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

# Types are opaque, hashable descriptors such as "Lcom/acme/Dog;".
TypeName = str


def reference_type(class_name: str) -> TypeName:
    """
    Turn a class name into its reference type descriptor.

    Accepts dotted ("com.acme.Dog") or slashed ("com/acme/Dog") names, and
    returns descriptors ("Lcom/acme/Dog;") unchanged.
    """
    if class_name.startswith("L") and class_name.endswith(";"):
        return class_name
    return "L" + class_name.replace(".", "/") + ";"


class InvokeKind(str, Enum):
    """Flavour of an invoke instruction. Only SUPER changes dispatch policy."""
    VIRTUAL = "virtual"
    SUPER = "super"
    INTERFACE = "interface"


class Parameter(BaseModel):
    """
    A formal parameter of a method.
    """
    model_config = ConfigDict(frozen=True)

    type: TypeName
    name: Optional[str] = None


class Method(BaseModel):
    """
    A method declared by exactly one class.

    Virtual methods carry their receiver ("this") as the first parameter.
    Two methods are the same method when declaring class, name, return type
    and parameter types agree; parameter names do not take part.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    return_type: TypeName
    parameters: Tuple[Parameter, ...] = ()
    class_type: TypeName  # Declaring class

    @property
    def parameter_types(self) -> Tuple[TypeName, ...]:
        return tuple(p.type for p in self.parameters)

    @property
    def identity(self) -> Tuple[TypeName, str, TypeName, Tuple[TypeName, ...]]:
        return (self.class_type, self.name, self.return_type, self.parameter_types)

    def __eq__(self, other):
        if not isinstance(other, Method):
            return NotImplemented
        return self.identity == other.identity

    def __hash__(self):
        return hash(self.identity)

    def __str__(self) -> str:
        return f"{self.class_type}->{self.name}({''.join(self.parameter_types)}){self.return_type}"


class MethodRef(BaseModel):
    """
    A call-site signature: name, return type and parameter types without the
    receiver.

    class_type records the class named at the call site. It is carried along
    for callers but never consulted when matching, so a MethodRef built by
    hand with any class_type matches the same methods.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    return_type: TypeName
    parameter_types: Tuple[TypeName, ...] = ()
    class_type: Optional[TypeName] = None

    @property
    def signature(self) -> Tuple[str, TypeName, Tuple[TypeName, ...]]:
        return (self.name, self.return_type, self.parameter_types)

    def __eq__(self, other):
        if not isinstance(other, MethodRef):
            return NotImplemented
        return self.signature == other.signature

    def __hash__(self):
        return hash(self.signature)


class ClassDef(BaseModel):
    """
    A class or interface definition present in the program.
    """
    model_config = ConfigDict(frozen=True)

    type: TypeName
    parent: Optional[TypeName] = None  # Absent only at the root
    interfaces: Tuple[TypeName, ...] = ()
    virtual_methods: Tuple[Method, ...] = ()
    direct_methods: Tuple[Method, ...] = ()  # Never consulted for dispatch
    is_interface: bool = False


class Value(BaseModel):
    """
    An SSA value, classified only as far as dispatch needs.

    kind "cast" wraps the value being cast in `source`.
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["parameter", "move_exception", "cast", "other"] = "other"
    type: TypeName
    source: Optional["Value"] = None

    def strip_casts(self) -> "Value":
        value = self
        while value.kind == "cast" and value.source is not None:
            value = value.source
        return value


Value.model_rebuild()


class Instruction(BaseModel):
    """
    An invoke instruction, reduced to the method that encloses it.
    """
    model_config = ConfigDict(frozen=True)

    method: Method
    label: Optional[str] = None


class Program(BaseModel):
    """
    The whole program: every class definition, in declaration order.
    """
    model_config = ConfigDict(frozen=True)

    classes: Tuple[ClassDef, ...] = Field(default_factory=tuple)


class HierarchyStats(BaseModel):
    """
    Aggregate statistics for a class hierarchy index.
    """
    total_classes: int
    interfaces: int
    inheritance_edges: int
    implementation_edges: int
    max_depth: int
    cache_entries: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
