"""
Core Type Model Objects

Defines the data structures the abbreviation service works on.

These are pure data classes representing:
    - Namespaces (prefix, alias, optional URI)
    - Type descriptors (qualified identifier, supertypes, pairing links)
    - Array types (element descriptor plus dimensionality)
    - Primitive scalar kinds

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about abbreviation or caching
        - Are immutable
        - Are fully serializable
        - Describe types, they never load them
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union


# Built-in namespace, always registered first.
BUILTIN_PREFIX = "builtins"
BUILTIN_ALIAS = "ptk"
BUILTIN_URI = "http://sweble.org/doc/site/tooling/parser-toolkit/ptk-xml-tools"

PRIMITIVE_KINDS = (
    "byte",
    "short",
    "int",
    "long",
    "float",
    "double",
    "boolean",
    "char",
)


@dataclass(frozen=True)
class Namespace:
    """
    One registered grouping of types eligible for abbreviation.

    Properties:
        prefix:
            Canonical path prefix, e.g. "de.example.pkg1"
            A type belongs to the namespace when its identifier is
            prefix + "." + simple name.

        alias:
            Short textual prefix used in abbreviated tags, e.g. "ptk"

        uri:
            Optional URI associated with the alias (documentation,
            XML namespace declarations). Namespaces without a URI do not
            appear in the service's used-prefix table.
    """

    prefix: str
    alias: str
    uri: Optional[str] = None


BUILTIN_NAMESPACE = Namespace(prefix=BUILTIN_PREFIX, alias=BUILTIN_ALIAS, uri=BUILTIN_URI)


@dataclass(frozen=True)
class TypeDescriptor:
    """
    Describes one type known to a TypeRegistry.

    Properties:
        name:
            Fully-qualified identifier, e.g. "de.example.pkg1.ClassA"
            Primitive kinds have no namespace ("int").

        supertypes:
            Identifiers this type is directly assignable to.
            The registry walks them transitively.

        is_interface:
            True for abstract/interface types. Resolving an interface that
            has an implementation yields the implementation instead.

        implementation:
            Identifier of the concrete counterpart (interfaces only)

        interface:
            Identifier of the abstract counterpart (implementations only)

    Equality and hashing use the identifier only, so a descriptor taken
    from the registry before pairing compares equal to the paired one.
    """

    name: str
    supertypes: Tuple[str, ...] = field(default=(), compare=False)
    is_interface: bool = field(default=False, compare=False)
    implementation: Optional[str] = field(default=None, compare=False)
    interface: Optional[str] = field(default=None, compare=False)

    @property
    def simple_name(self) -> str:
        """Final dotted component of the identifier."""
        return self.name.rsplit(".", 1)[-1]

    @property
    def namespace(self) -> str:
        """Identifier without the simple name ('' for primitives)."""
        if "." not in self.name:
            return ""
        return self.name.rsplit(".", 1)[0]

    @property
    def is_primitive(self) -> bool:
        return self.name in PRIMITIVE_KINDS

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ArrayType:
    """
    An array of some element type.

    Dimensionality is only ever encoded as a "[]" suffix on the short form;
    the element type is what gets cached and looked up.

    Example:
        ArrayType(element=int_descriptor, dimensions=2)  ->  int[][]
    """

    element: TypeDescriptor
    dimensions: int = 1

    def __post_init__(self):
        if self.dimensions < 1:
            raise ValueError(f"Array dimensions must be positive: {self.dimensions}")
        # Arrays of arrays collapse into one element with summed dimensions
        if isinstance(self.element, ArrayType):
            object.__setattr__(self, "dimensions", self.dimensions + self.element.dimensions)
            object.__setattr__(self, "element", self.element.element)

    @property
    def name(self) -> str:
        return self.element.name + "[]" * self.dimensions

    def __str__(self) -> str:
        return self.name


TypeRef = Union[TypeDescriptor, ArrayType]


PRIMITIVES = {kind: TypeDescriptor(name=kind) for kind in PRIMITIVE_KINDS}
